"""Storage naming helpers for tool archives.

Tool archives live under ``tools/juju-<number>-<series>-<arch>.tgz`` in
every storage tier. Names that do not follow the convention are foreign
files and are skipped rather than treated as errors.
"""

import logging
from typing import Optional

from constants import Constants
from .models import Binary, InvalidVersionError

logger = logging.getLogger(__name__)


def tools_prefix(major: Optional[int] = None) -> str:
    """Return the storage listing prefix, optionally scoped to a major version."""
    prefix = f"{Constants.TOOLS_DIR}/{Constants.TOOLS_PREFIX}"
    if major is not None:
        prefix = f"{prefix}{major}."
    return prefix


def tools_name(binary: Binary) -> str:
    """Return the storage name of the archive holding ``binary``."""
    return f"{tools_prefix()}{binary}{Constants.TOOLS_SUFFIX}"


def parse_tools_name(name: str) -> Optional[Binary]:
    """Extract the Binary from a storage name, or None for foreign names.

    Accepts both the full name (``tools/juju-1.2.0-precise-amd64.tgz``) and
    the bare file name (``juju-1.2.0-precise-amd64.tgz``).
    """
    base = name.strip()
    dir_prefix = f"{Constants.TOOLS_DIR}/"
    if base.startswith(dir_prefix):
        base = base[len(dir_prefix):]
    if not base.startswith(Constants.TOOLS_PREFIX) or not base.endswith(Constants.TOOLS_SUFFIX):
        return None
    vers = base[len(Constants.TOOLS_PREFIX):-len(Constants.TOOLS_SUFFIX)]
    try:
        return Binary.parse(vers)
    except InvalidVersionError:
        logger.debug("ignoring unparsable tools name %s", name)
        return None
