"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NO_TOOLS = 3
    NO_MATCHES = 4
    SERIES_ERROR = 5


class TierTypes(Enum):
    """Storage tier backends supported by the program.

    Args:
        Enum (string): Storage tier backends supported by the program.
    """

    DIRECTORY = "directory"
    HTTP = "http"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_TIER_TYPES = [
        TierTypes.DIRECTORY.value,
        TierTypes.HTTP.value,
    ]
    DEFAULT_TIER_NAMES = ["private", "public"]
    DEFAULT_SERIES = "precise"
    TOOLS_DIR = "tools"
    TOOLS_PREFIX = "juju-"
    TOOLS_SUFFIX = ".tgz"
    TOOLS_INDEX_FILE = "index.json"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "TOOLSFIND_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3

    MSG_NO_TOOLS = "no tools available; upload tools to a storage tier and retry"
    MSG_NO_MATCHES = "no compatible tools for this target"
