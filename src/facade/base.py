"""Version-negotiated access to server-side API facades.

A connection negotiates one version per facade when the client-side handle
is built. Operations introduced in later versions must check it with
``FacadeCaller.require`` before calling, so an old server yields an explicit
``UnsupportedAtVersionError`` instead of a failed remote call.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from common.logging_utils import extra_context, is_debug_enabled
from tools.errors import FacadeCallError, UnsupportedAtVersionError

logger = logging.getLogger(__name__)


class APICaller(Protocol):
    """Transport used by facade clients."""

    def best_facade_version(self, facade: str) -> int: ...

    def call(self, facade: str, version: int, method: str, params: Optional[Dict[str, Any]]) -> Dict[str, Any]: ...


class FacadeCaller:
    """Binds a facade name to the API version used for every call on it."""

    def __init__(self, caller: APICaller, facade: str, version: Optional[int] = None, max_version: Optional[int] = None):
        self.caller = caller
        self.facade = facade
        if version is None:
            version = caller.best_facade_version(facade)
            if max_version is not None:
                version = min(version, max_version)
        self._version = version
        logger.debug("using %s facade version %d", facade, version)

    @property
    def best_api_version(self) -> int:
        return self._version

    def require(self, min_version: int, operation: str) -> None:
        """Raise UnsupportedAtVersionError when the negotiated version is too old."""
        if self._version < min_version:
            raise UnsupportedAtVersionError(operation, min_version, self._version)

    def facade_call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Call ``method`` on the facade and return its result mapping."""
        if is_debug_enabled(logger):
            logger.debug(
                "facade call",
                extra=extra_context(
                    event="facade_call",
                    component="facade",
                    action=method,
                    facade=self.facade,
                    facade_version=self._version
                )
            )
        result = self.caller.call(self.facade, self._version, method, params)
        if not isinstance(result, dict):
            raise FacadeCallError(f"{self.facade}.{method}: unexpected result {result!r}")
        error = result.get("error")
        if error:
            raise FacadeCallError(f"{self.facade}.{method}: {_error_message(error)}")
        return result


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)
