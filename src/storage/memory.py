"""In-process storage tier."""

from typing import Dict, Iterable, List, Optional

from versioning.models import Binary
from versioning.parser import tools_name
from .base import TierReader


class MemoryTierReader(TierReader):
    """Tier backed by a name -> URL mapping held in memory.

    Useful for embedding callers that already know what is published, and
    for tests.
    """

    def __init__(self, name: str, base_url: Optional[str] = None, contents: Optional[Dict[str, str]] = None):
        super().__init__(name)
        self.base_url = (base_url or f"memory://{name}").rstrip("/")
        self._contents: Dict[str, str] = dict(contents or {})

    @classmethod
    def from_binaries(cls, name: str, binaries: Iterable[Binary], base_url: Optional[str] = None) -> "MemoryTierReader":
        """Build a tier publishing one archive per binary."""
        reader = cls(name, base_url)
        for binary in binaries:
            reader.add(binary)
        return reader

    def add(self, binary: Binary, url: Optional[str] = None) -> str:
        """Publish ``binary`` and return its URL."""
        storage_name = tools_name(binary)
        self._contents[storage_name] = url or f"{self.base_url}/{storage_name}"
        return self._contents[storage_name]

    def list_names(self) -> List[str]:
        return sorted(self._contents)

    def url_for(self, name: str) -> str:
        return self._contents[name]
