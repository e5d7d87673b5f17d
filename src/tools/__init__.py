"""Tool descriptors, candidate lists and the tiered resolution engine."""

from .errors import (
    AmbiguousVersionError,
    FacadeCallError,
    MultipleSeriesError,
    NoMatchingToolsError,
    NoToolsAnywhereError,
    NotFoundError,
    SeriesError,
    SeriesMismatchError,
    ToolsError,
    TransportError,
    UnsupportedAtVersionError,
)
from .list import ANY_MINOR, Filter, Tools, ToolsList
from .finder import ToolsFinder
from .series import check_tools_series

__all__ = [
    "ANY_MINOR",
    "AmbiguousVersionError",
    "FacadeCallError",
    "Filter",
    "MultipleSeriesError",
    "NoMatchingToolsError",
    "NoToolsAnywhereError",
    "NotFoundError",
    "SeriesError",
    "SeriesMismatchError",
    "Tools",
    "ToolsError",
    "ToolsFinder",
    "ToolsList",
    "TransportError",
    "UnsupportedAtVersionError",
    "check_tools_series",
]
