"""Argument parsing functionality for toolsfind."""

import argparse


def _add_common(parser):
    """Options shared by every subcommand."""
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--tier",
                        dest="TIERS",
                        help="Storage tier as NAME=URL_OR_PATH, highest precedence first "
                             "(can be used multiple times; replaces configured tiers)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or text, default: text)",
                        action="store",
                        type=str.lower,
                        choices=['json', 'text'],
                        default='text')
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='WARNING')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="toolsfind",
        description="Resolve agent tool binaries from ranked storage tiers",
        add_help=True,
    )
    sub = parser.add_subparsers(dest="COMMAND", metavar="COMMAND")
    sub.required = True

    find = sub.add_parser("find", help="List tools matching a major (and minor) version")
    _add_common(find)
    find.add_argument("--major", dest="MAJOR", type=int, required=True,
                      help="Required major version")
    find.add_argument("--minor", dest="MINOR", type=int,
                      help="Required minor version (default: any)")
    find.add_argument("--version", dest="VERSION", type=str,
                      help="Exact version number to filter by")
    find.add_argument("--series", dest="SERIES", type=str,
                      help="OS series to filter by")
    find.add_argument("--arch", dest="ARCH", type=str,
                      help="CPU architecture to filter by")
    find.add_argument("--released", dest="RELEASED", action="store_true",
                      help="Exclude development builds")

    bootstrap = sub.add_parser("bootstrap", help="Pick the tools to bootstrap a new environment with")
    _add_common(bootstrap)
    bootstrap.add_argument("--agent-version", dest="AGENT_VERSION", type=str,
                           help="Explicit agent version (default: newest available)")
    bootstrap.add_argument("--series", dest="SERIES", type=str,
                           help="OS series (default: configured default-series)")
    bootstrap.add_argument("--arch", dest="ARCH", type=str,
                           help="CPU architecture (default: all)")
    bootstrap.add_argument("--development", dest="DEVELOPMENT", action="store_true",
                           help="Allow development builds")
    bootstrap.add_argument("--cli-version", dest="CLI_VERSION", type=str,
                           help="Client version; restricts the search to its major.minor")

    instance = sub.add_parser("instance", help="List tools for a new machine in a running environment")
    _add_common(instance)
    instance.add_argument("--agent-version", dest="AGENT_VERSION", type=str,
                          help="Environment agent version (default: configured agent-version)")
    instance.add_argument("--series", dest="SERIES", type=str,
                          help="OS series (default: configured default-series)")
    instance.add_argument("--arch", dest="ARCH", type=str,
                          help="CPU architecture (default: all)")

    exact = sub.add_parser("exact", help="Find one exact tools binary")
    _add_common(exact)
    exact.add_argument("--version", dest="VERSION", type=str, required=True,
                       help="Exact version number")
    exact.add_argument("--series", dest="SERIES", type=str, required=True,
                       help="OS series")
    exact.add_argument("--arch", dest="ARCH", type=str, required=True,
                       help="CPU architecture")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
