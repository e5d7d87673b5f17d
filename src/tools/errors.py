"""Error taxonomy for tool resolution.

``NoToolsAnywhereError`` and ``NoMatchingToolsError`` share the
``NotFoundError`` base; callers picking a remedy (upload tools or relax the
constraints) tell them apart by type.
"""

from typing import Optional


class ToolsError(Exception):
    """Base class for tool resolution errors."""


class NotFoundError(ToolsError):
    """Base class for errors meaning no usable tools were found."""


class NoToolsAnywhereError(NotFoundError):
    """Every consulted storage tier was empty."""

    def __init__(self, message: str = "no tools available"):
        super().__init__(message)


class NoMatchingToolsError(NotFoundError):
    """The winning storage tier had tools, but none satisfied the constraints."""

    def __init__(self, detail: Optional[str] = None):
        message = "no matching tools available"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.detail = detail


class SeriesError(ToolsError):
    """Base class for tool set consistency errors."""


class MultipleSeriesError(SeriesError):
    """The tool set is empty or spans several OS series."""


class SeriesMismatchError(SeriesError):
    """The tool set's single OS series is not the expected one."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"series mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class TransportError(ToolsError):
    """A storage tier could not be listed."""

    def __init__(self, tier: str, reason: str):
        super().__init__(f"cannot read tools from {tier} tier: {reason}")
        self.tier = tier
        self.reason = reason


class AmbiguousVersionError(ToolsError, ValueError):
    """A version-keyed view was requested over several binaries of one version."""


class UnsupportedAtVersionError(ToolsError):
    """A facade operation needs a newer negotiated API version."""

    def __init__(self, operation: str, min_version: int, actual: int):
        super().__init__(f"{operation} (need V{min_version}+) not implemented at V{actual}")
        self.operation = operation
        self.min_version = min_version
        self.actual = actual


class FacadeCallError(ToolsError):
    """A facade call failed or returned an unexpected result."""
