"""Tool resolution across ranked storage tiers.

The first tier holding any tools at all decides the outcome: its listing is
filtered and returned, or the lookup fails with ``NoMatchingToolsError``.
Lower tiers are only consulted while every tier above them is empty, so
environment-private tools always shadow a public mirror, matching or not.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled, Timer
from versioning.models import Number
from .errors import NoMatchingToolsError, NoToolsAnywhereError
from .list import ANY_MINOR, Filter, MinorConstraint, Tools, ToolsList

if TYPE_CHECKING:
    from storage.base import TierReader

logger = logging.getLogger(__name__)


def _log_filter(tools_filter: Optional[Filter]) -> None:
    if tools_filter is None:
        return
    if tools_filter.released:
        logger.info("filtering tools by released version")
    if not tools_filter.number.is_zero:
        logger.info("filtering tools by version: %s", tools_filter.number)
    if tools_filter.series:
        logger.info("filtering tools by series: %s", tools_filter.series)
    if tools_filter.arch:
        logger.info("filtering tools by architecture: %s", tools_filter.arch)


class ToolsFinder:
    """Resolve tool binaries from an ordered list of storage tiers.

    The finder holds only the ranked tiers; every lookup lists them afresh
    and keeps its working state local, so one finder can serve concurrent
    callers.
    """

    def __init__(self, tiers: Sequence[TierReader]):
        self.tiers: List[TierReader] = list(tiers)

    def _resolve(
        self,
        select: Callable[[ToolsList], ToolsList],
        major: Optional[int] = None,
    ) -> ToolsList:
        """Apply ``select`` to the listing of the first non-empty tier."""
        for tier in self.tiers:
            with Timer() as t:
                listing = tier.list_tools(major)
            if not listing:
                if is_debug_enabled(logger):
                    logger.debug(
                        "tier empty",
                        extra=extra_context(
                            event="tier_listing",
                            component="finder",
                            action="list_tools",
                            outcome="empty",
                            tier=tier.name,
                            duration_ms=t.duration_ms()
                        )
                    )
                continue
            logger.debug("found %d tools in %s tier", len(listing), tier.name)
            selected = select(listing)
            if not selected:
                raise NoMatchingToolsError(f"{tier.name} tier has {len(listing)} tools, none match")
            return selected
        raise NoToolsAnywhereError()

    def find_tools(
        self,
        major: int,
        minor: MinorConstraint = ANY_MINOR,
        tools_filter: Optional[Filter] = None,
    ) -> ToolsList:
        """Return the tools with the given major (and minor) version matching ``tools_filter``.

        Args:
            major: Required major version.
            minor: Required minor version, or ``ANY_MINOR``.
            tools_filter: Further series/arch/number/released constraints.

        Raises:
            NoToolsAnywhereError: every tier is empty.
            NoMatchingToolsError: the winning tier has nothing matching.
            TransportError: a tier could not be listed.
        """
        logger.info("reading tools with major version %d", major)
        _log_filter(tools_filter)
        return self._resolve(
            lambda listing: listing.filter_by_version(major, minor).match(tools_filter),
            major,
        )

    def find_bootstrap_tools(
        self,
        agent_version: Optional[Number] = None,
        series: str = "",
        arch: Optional[str] = None,
        development: bool = False,
        cli_version: Optional[Number] = None,
    ) -> ToolsList:
        """Return the tools a new environment should be bootstrapped with.

        With ``agent_version`` set, this is an exact version/series lookup.
        Otherwise the newest eligible tools are chosen: development builds
        only count when ``development`` is set or the client itself is a
        development build. When ``cli_version`` is given the search stays
        within its major.minor release line. Every binary sharing the newest
        version is returned, one per matching series/arch.
        """
        if agent_version is not None:
            return self.find_instance_tools(agent_version, series, arch)

        allow_dev = development or (cli_version is not None and cli_version.is_dev)
        tools_filter = Filter(released=not allow_dev, series=series, arch=arch or "")

        if cli_version is not None:
            found = self.find_tools(cli_version.major, cli_version.minor, tools_filter)
        else:
            logger.info("reading tools with any major version")
            _log_filter(tools_filter)
            found = self._resolve(lambda listing: listing.match(tools_filter))

        number, newest = found.newest()
        logger.info("picked newest version: %s", number)
        logger.debug("newest tools cover architectures: %s", ", ".join(newest.arches()))
        return newest

    def find_instance_tools(
        self,
        agent_version: Number,
        series: str,
        arch: Optional[str] = None,
    ) -> ToolsList:
        """Return the tools of exactly ``agent_version`` for ``series`` (and ``arch``)."""
        tools_filter = Filter(number=agent_version, series=series, arch=arch or "")
        return self.find_tools(agent_version.major, agent_version.minor, tools_filter)

    def find_exact_tools(self, number: Number, series: str, arch: str) -> Tools:
        """Return the single tools binary matching number, series and arch."""
        found = self.find_tools(number.major, number.minor, Filter(number=number, series=series, arch=arch))
        if len(found) != 1:
            raise NoMatchingToolsError(f"expected one tools, got {len(found)} tools")
        return found[0]
