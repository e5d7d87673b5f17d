"""Storage tier backed by a web mirror."""

import logging
from typing import List

from constants import Constants
from common.http_client import get_json
from common.logging_utils import safe_url
from tools.errors import TransportError
from .base import TierReader

logger = logging.getLogger(__name__)


class HttpTierReader(TierReader):
    """Tier reading a mirror that publishes ``<base_url>/tools/index.json``.

    The index is either a JSON list of storage names or an object with a
    ``tools`` list. HTTP 404 means the mirror holds no tools; network
    failures, server errors and malformed indexes are transport failures.
    """

    def __init__(self, name: str, base_url: str):
        super().__init__(name)
        self.base_url = base_url.rstrip("/")

    @property
    def index_url(self) -> str:
        return f"{self.base_url}/{Constants.TOOLS_DIR}/{Constants.TOOLS_INDEX_FILE}"

    def list_names(self) -> List[str]:
        status_code, data, reason = get_json(self.index_url)
        if status_code == 404:
            logger.debug("no tools index at %s", safe_url(self.index_url))
            return []
        if reason:
            raise TransportError(self.name, f"{safe_url(self.index_url)}: {reason}")
        if isinstance(data, dict):
            data = data.get("tools")
        if not isinstance(data, list):
            raise TransportError(self.name, f"malformed tools index at {safe_url(self.index_url)}")
        names = []
        for entry in data:
            if not isinstance(entry, str):
                continue
            if "/" not in entry:
                entry = f"{Constants.TOOLS_DIR}/{entry}"
            names.append(entry)
        return names

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/{name}"
