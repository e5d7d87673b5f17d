"""toolsfind - resolve agent tool binaries from ranked storage tiers."""
import json
import logging
import sys

from constants import Constants, ExitCodes
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import (
    ConfigError,
    apply_cli_overrides,
    build_tiers,
    default_series,
    development,
    load_config,
)
from tools import (
    ANY_MINOR,
    Filter,
    NoMatchingToolsError,
    NoToolsAnywhereError,
    SeriesError,
    ToolsFinder,
    ToolsList,
    TransportError,
    check_tools_series,
)
from versioning.models import InvalidVersionError, Number

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as exc:
            raise ConfigError(f"cannot open log file {log_file}: {exc}") from exc
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def _optional_number(text, what):
    if not text:
        return None
    try:
        return Number.parse(text)
    except InvalidVersionError as exc:
        raise ConfigError(f"invalid {what}: {exc}") from exc


def run_command(args, finder, config):
    """Dispatch one subcommand and return the resolved ToolsList."""
    command = args.COMMAND
    if command == "find":
        tools_filter = Filter(
            released=bool(getattr(args, "RELEASED", False)),
            number=_optional_number(args.VERSION, "--version") or Number.zero(),
            series=args.SERIES or "",
            arch=args.ARCH or "",
        )
        minor = ANY_MINOR if args.MINOR is None else args.MINOR
        return finder.find_tools(args.MAJOR, minor, tools_filter)

    series = default_series(config)
    if command == "bootstrap":
        found = finder.find_bootstrap_tools(
            agent_version=_optional_number(config.get("agent-version"), "agent-version"),
            series=series,
            arch=args.ARCH,
            development=development(config),
            cli_version=_optional_number(args.CLI_VERSION, "--cli-version"),
        )
        check_tools_series(found, series)
        return found
    if command == "instance":
        agent_version = _optional_number(config.get("agent-version"), "agent-version")
        if agent_version is None:
            raise ConfigError("instance lookup needs --agent-version or a configured agent-version")
        return finder.find_instance_tools(agent_version, series, args.ARCH)
    if command == "exact":
        number = _optional_number(args.VERSION, "--version")
        return ToolsList([finder.find_exact_tools(number, args.SERIES, args.ARCH)])
    raise ConfigError(f"unknown command {command!r}")


def render(found, output_format):
    """Render a ToolsList for stdout."""
    if output_format == "json":
        payload = [
            {
                "version": str(t.version.number),
                "series": t.version.series,
                "arch": t.version.arch,
                "binary": str(t.version),
                "url": t.url,
            }
            for t in found
        ]
        return json.dumps(payload, indent=2)
    return "\n".join(f"{t.version}\t{t.url}" for t in found)


def run(argv=None):
    """Run the CLI and return its exit code."""
    args = parse_args(argv)
    try:
        _setup_logging(args)
    except ConfigError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.COMMAND)
        )

    try:
        config = apply_cli_overrides(load_config(args.CONFIG), args)
        tiers = build_tiers(config)
        if not tiers:
            raise ConfigError("no storage tiers configured; use --tier or a config file")
        found = run_command(args, ToolsFinder(tiers), config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value
    except TransportError as exc:
        logger.error("%s", exc)
        return ExitCodes.CONNECTION_ERROR.value
    except NoToolsAnywhereError as exc:
        logger.error("%s: %s", Constants.MSG_NO_TOOLS, exc)
        return ExitCodes.NO_TOOLS.value
    except NoMatchingToolsError as exc:
        logger.error("%s: %s", Constants.MSG_NO_MATCHES, exc)
        return ExitCodes.NO_MATCHES.value
    except SeriesError as exc:
        logger.error("%s", exc)
        return ExitCodes.SERIES_ERROR.value

    print(render(found, args.OUTPUT_FORMAT))
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
