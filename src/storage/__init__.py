"""Storage tier readers."""

from .base import TierReader
from .directory import DirectoryTierReader
from .http import HttpTierReader
from .memory import MemoryTierReader

__all__ = [
    "TierReader",
    "DirectoryTierReader",
    "HttpTierReader",
    "MemoryTierReader",
]
