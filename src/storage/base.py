"""Base class for storage tier readers."""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from versioning.parser import parse_tools_name
from tools.list import Tools, ToolsList

logger = logging.getLogger(__name__)


class TierReader(ABC):
    """One ranked storage location holding tool archives.

    Readers return the tier's whole listing: the major version passed to
    ``list_tools`` is advisory only, because tier precedence is decided on
    everything a tier holds, not just on what matches.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def list_names(self) -> Iterable[str]:
        """List the storage names under the tools prefix.

        Raises:
            TransportError: if the location cannot be read.
        """

    @abstractmethod
    def url_for(self, name: str) -> str:
        """Return the URL a storage name can be fetched from."""

    def list_tools(self, major: Optional[int] = None) -> ToolsList:
        """Return every tool archive in this tier."""
        if major is not None:
            logger.debug("reading v%d.* tools", major)
        else:
            logger.debug("reading tools")
        items = []
        for name in self.list_names():
            binary = parse_tools_name(name)
            if binary is None:
                continue
            items.append(Tools(version=binary, url=self.url_for(name)))
        return ToolsList(items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
