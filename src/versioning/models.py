"""Data models for tool versions and binaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import semantic_version


class InvalidVersionError(ValueError):
    """Raised when a version or binary string cannot be parsed."""


@dataclass(frozen=True)
class Number:
    """A tool version number with an optional development tag.

    Ordering follows the release triple; numbers sharing a triple sort
    untagged first and then by tag so output stays deterministic.
    """
    major: int
    minor: int
    patch: int = 0
    tag: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "Number":
        """Parse ``MAJOR.MINOR[.PATCH][-TAG]``."""
        raw = (text or "").strip()
        if not raw:
            raise InvalidVersionError("empty version")
        base, sep, rest = raw.partition("-")
        if base.count(".") == 1:
            raw = f"{base}.0{sep}{rest}"
        try:
            ver = semantic_version.Version(raw)
        except ValueError as exc:
            raise InvalidVersionError(f"invalid version {text!r}") from exc
        if ver.build:
            raise InvalidVersionError(f"invalid version {text!r}: build metadata not supported")
        tag = ".".join(ver.prerelease) if ver.prerelease else None
        return cls(ver.major, ver.minor, ver.patch, tag)

    @classmethod
    def zero(cls) -> "Number":
        return cls(0, 0, 0)

    @property
    def release(self) -> Tuple[int, int, int]:
        """The (major, minor, patch) triple used for version ordering."""
        return (self.major, self.minor, self.patch)

    @property
    def is_dev(self) -> bool:
        return self.tag is not None

    @property
    def is_zero(self) -> bool:
        return self == Number.zero()

    def sort_key(self) -> Tuple[int, int, int, int, str]:
        return (self.major, self.minor, self.patch, 0 if self.tag is None else 1, self.tag or "")

    def __lt__(self, other: "Number") -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: "Number") -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: "Number") -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: "Number") -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.sort_key() >= other.sort_key()

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.tag}" if self.tag else base


@dataclass(frozen=True)
class Binary:
    """Identity of one tool binary: version, OS series and CPU architecture."""
    number: Number
    series: str
    arch: str

    @classmethod
    def parse(cls, text: str) -> "Binary":
        """Parse ``<number>-<series>-<arch>``, e.g. ``1.1.0-dev-precise-amd64``."""
        parts = (text or "").strip().rsplit("-", 2)
        if len(parts) != 3 or not all(parts):
            raise InvalidVersionError(f"invalid binary version {text!r}")
        number_text, series, arch = parts
        return cls(Number.parse(number_text), series, arch)

    def sort_key(self) -> Tuple[Tuple[int, int, int, int, str], str, str]:
        return (self.number.sort_key(), self.series, self.arch)

    def __lt__(self, other: "Binary") -> bool:
        if not isinstance(other, Binary):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"{self.number}-{self.series}-{self.arch}"
