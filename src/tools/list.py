"""Tool descriptors and the ordered, immutable candidate list built from them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union, overload

from versioning.models import Binary, Number
from .errors import AmbiguousVersionError

logger = logging.getLogger(__name__)


class _AnyMinor:
    """Sentinel accepting every minor version."""

    def __repr__(self) -> str:
        return "ANY_MINOR"


ANY_MINOR = _AnyMinor()

MinorConstraint = Union[int, _AnyMinor, None]


def _minor_wildcard(minor: MinorConstraint) -> bool:
    """True when ``minor`` places no constraint on the minor version.

    ``None`` and the legacy ``-1`` sentinel are accepted as wildcards too.
    """
    return minor is ANY_MINOR or minor is None or minor == -1


@dataclass(frozen=True)
class Tools:
    """One listed tool binary and the URL it can be fetched from."""
    version: Binary
    url: str


@dataclass(frozen=True)
class Filter:
    """Acceptance test over tools; unset fields mean "don't care"."""
    released: bool = False
    number: Number = field(default_factory=Number.zero)
    series: str = ""
    arch: str = ""

    def match(self, tools: Tools) -> bool:
        vers = tools.version
        if self.released and vers.number.is_dev:
            return False
        if not self.number.is_zero and self.number != vers.number:
            return False
        if self.series and self.series != vers.series:
            return False
        if self.arch and self.arch != vers.arch:
            return False
        return True


class ToolsList:
    """An immutable list of tools sorted by version, series and arch.

    Every operation returns a new list. A binary may appear only once; later
    duplicates are dropped with a warning so the first listing wins.
    """

    def __init__(self, items: Iterable[Tools] = ()):
        seen: Dict[Binary, Tools] = {}
        for item in items:
            existing = seen.get(item.version)
            if existing is not None:
                if existing.url != item.url:
                    logger.warning(
                        "ignoring duplicate tools %s at %s (already listed at %s)",
                        item.version, item.url, existing.url,
                    )
                continue
            seen[item.version] = item
        self._items: Tuple[Tools, ...] = tuple(sorted(seen.values(), key=lambda t: t.version.sort_key()))

    @overload
    def __getitem__(self, index: int) -> Tools: ...

    @overload
    def __getitem__(self, index: slice) -> "ToolsList": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return ToolsList(self._items[index])
        return self._items[index]

    def __iter__(self) -> Iterator[Tools]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToolsList):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"ToolsList([{self}])"

    def __str__(self) -> str:
        return ", ".join(str(t.version) for t in self._items)

    def filter_by(self, predicate: Callable[[Tools], bool]) -> "ToolsList":
        """Return the tools accepted by ``predicate``."""
        return ToolsList(t for t in self._items if predicate(t))

    def filter_by_version(self, major: int, minor: MinorConstraint = ANY_MINOR) -> "ToolsList":
        """Return the tools with the given major and, unless wildcarded, minor version."""
        any_minor = _minor_wildcard(minor)

        def accept(tools: Tools) -> bool:
            number = tools.version.number
            if number.major != major:
                return False
            return any_minor or number.minor == minor

        return self.filter_by(accept)

    def match(self, tools_filter: Optional[Filter]) -> "ToolsList":
        """Return the tools accepted by ``tools_filter`` (all of them for None)."""
        if tools_filter is None:
            return self
        return self.filter_by(tools_filter.match)

    def newest(self) -> Tuple[Optional[Number], "ToolsList"]:
        """Return the highest version and every tool built from exactly that number.

        Numbers compare by release triple; when a release and a development
        build share the highest triple the release build wins.
        """
        if not self._items:
            return None, ToolsList()
        best = max(t.version.number.release for t in self._items)
        number = min(
            (t.version.number for t in self._items if t.version.number.release == best),
            key=Number.sort_key,
        )
        return number, self.filter_by(lambda t: t.version.number == number)

    def all_series(self) -> List[str]:
        return sorted({t.version.series for t in self._items})

    def arches(self) -> List[str]:
        return sorted({t.version.arch for t in self._items})

    def urls(self) -> Dict[Number, str]:
        """Map each version number to its URL.

        Raises:
            AmbiguousVersionError: if several binaries share a number; use
                ``binary_urls`` for per-series/arch locations.
        """
        result: Dict[Number, str] = {}
        for t in self._items:
            number = t.version.number
            if number in result:
                raise AmbiguousVersionError(
                    f"several binaries for version {number}; use binary URLs instead"
                )
            result[number] = t.url
        return result

    def binary_urls(self) -> Dict[Binary, str]:
        return {t.version: t.url for t in self._items}
