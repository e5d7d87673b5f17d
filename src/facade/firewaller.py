"""Client side of the Firewaller facade."""

from typing import Any, Dict, Optional

from tools.errors import FacadeCallError
from .base import APICaller, FacadeCaller

FIREWALLER_FACADE = "Firewaller"
# Newest Firewaller version this client knows how to speak.
FIREWALLER_MAX_VERSION = 1


class Firewaller:
    """Watches machines and opened ports for the firewall worker.

    ``version=None`` picks the best version supported by both sides.
    """

    def __init__(self, caller: APICaller, version: Optional[int] = None):
        self.facade = FacadeCaller(caller, FIREWALLER_FACADE, version, max_version=FIREWALLER_MAX_VERSION)

    @property
    def best_api_version(self) -> int:
        return self.facade.best_api_version

    def life(self, tag: str) -> str:
        """Return the life cycle state ("alive", "dying", "dead") of an entity."""
        results = self.facade.facade_call("Life", {"entities": [{"tag": tag}]})
        result = _single_result(results)
        return _field(result, "life")

    def watch_environ_machines(self) -> str:
        """Start watching top-level machine life cycles; returns the watcher id."""
        result = self.facade.facade_call("WatchEnvironMachines")
        return _field(result, "watcher_id")

    def watch_opened_ports(self, environ_tag: str) -> str:
        """Start watching opened ports in the environment; returns the watcher id.

        Only available from facade version 1.
        """
        self.facade.require(1, "WatchOpenedPorts()")
        results = self.facade.facade_call("WatchOpenedPorts", {"entities": [{"tag": environ_tag}]})
        result = _single_result(results)
        return _field(result, "watcher_id")


def _single_result(results: Dict[str, Any]) -> Dict[str, Any]:
    items = results.get("results") or []
    if len(items) != 1:
        raise FacadeCallError(f"expected 1 result, got {len(items)}")
    result = items[0]
    error = result.get("error")
    if error:
        if isinstance(error, dict):
            error = error.get("message") or error
        raise FacadeCallError(str(error))
    return result


def _field(result: Dict[str, Any], key: str) -> str:
    value = result.get(key)
    if value is None:
        raise FacadeCallError(f"result has no {key!r}: {result!r}")
    return str(value)
