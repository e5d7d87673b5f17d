"""Configuration loading for toolsfind.

Reads a YAML (or JSON) file describing the ranked storage tiers and the
environment defaults, then applies CLI overrides with highest precedence.
Tier entries are named resources resolved when the tier list is built: a
missing or mistyped field is reported as a ``ConfigError`` naming the tier.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants, TierTypes
from storage import DirectoryTierReader, HttpTierReader, TierReader

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded or is invalid."""


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML or JSON file.

    Args:
        config_path: Path to the config file, or None for an empty config.

    Returns:
        Configuration dict.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        raise ConfigError(f"config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot load config {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {config_path} must be a mapping")
    logger.debug("loaded config from %s", config_path)
    return data


def _get_string(entry: Dict[str, Any], key: str, tier: str, required: bool = True) -> Optional[str]:
    value = entry.get(key)
    if value is None:
        if required:
            raise ConfigError(f"tier {tier!r}: missing {key!r}")
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"tier {tier!r}: invalid {key!r} resource: {value!r}")
    return value.strip()


def build_tier(entry: Any, position: int) -> TierReader:
    """Build one tier reader from its config entry."""
    if not isinstance(entry, dict):
        raise ConfigError(f"tier #{position}: expected a mapping, got {entry!r}")
    name = _get_string(entry, "name", f"#{position}")
    tier_type = _get_string(entry, "type", name)
    if tier_type == TierTypes.DIRECTORY.value:
        return DirectoryTierReader(name, _get_string(entry, "path", name))
    if tier_type == TierTypes.HTTP.value:
        return HttpTierReader(name, _get_string(entry, "url", name))
    raise ConfigError(
        f"tier {name!r}: unsupported type {tier_type!r} "
        f"(expected one of {', '.join(Constants.SUPPORTED_TIER_TYPES)})"
    )


def build_tiers(config: Dict[str, Any]) -> List[TierReader]:
    """Build the ranked tier readers, highest precedence first."""
    entries = config.get("tiers") or []
    if not isinstance(entries, list):
        raise ConfigError("'tiers' must be a list")
    tiers = [build_tier(entry, i) for i, entry in enumerate(entries)]
    names = [tier.name for tier in tiers]
    if len(set(names)) != len(names):
        raise ConfigError(f"duplicate tier names: {', '.join(names)}")
    return tiers


def parse_tier_option(option: str, position: int) -> Dict[str, str]:
    """Turn a ``NAME=URL_OR_PATH`` CLI option into a tier config entry.

    Locations starting with http:// or https:// become web tiers, anything
    else a directory tier. A bare location is named after its rank.
    """
    if "=" in option:
        name, location = option.split("=", 1)
    else:
        name, location = "", option
    name = name.strip()
    location = location.strip()
    if not name:
        if position < len(Constants.DEFAULT_TIER_NAMES):
            name = Constants.DEFAULT_TIER_NAMES[position]
        else:
            name = f"tier{position}"
    if not location:
        raise ConfigError(f"tier {name!r}: missing location")
    if location.startswith(("http://", "https://")):
        return {"name": name, "type": TierTypes.HTTP.value, "url": location}
    return {"name": name, "type": TierTypes.DIRECTORY.value, "path": location}


def apply_cli_overrides(config: Dict[str, Any], args: Any) -> Dict[str, Any]:
    """Return a copy of ``config`` with CLI values taking precedence."""
    merged = dict(config)
    tier_options = getattr(args, "TIERS", None) or []
    if tier_options:
        merged["tiers"] = [parse_tier_option(opt, i) for i, opt in enumerate(tier_options)]
    if getattr(args, "SERIES", None):
        merged["default-series"] = args.SERIES
    if getattr(args, "DEVELOPMENT", False):
        merged["development"] = True
    if getattr(args, "AGENT_VERSION", None):
        merged["agent-version"] = args.AGENT_VERSION
    return merged


def default_series(config: Dict[str, Any]) -> str:
    value = config.get("default-series") or Constants.DEFAULT_SERIES
    if not isinstance(value, str):
        raise ConfigError(f"invalid 'default-series': {value!r}")
    return value


def development(config: Dict[str, Any]) -> bool:
    value = config.get("development", False)
    if not isinstance(value, bool):
        raise ConfigError(f"invalid 'development': {value!r}")
    return value
