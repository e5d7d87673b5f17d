"""Tests for tier-precedence tool resolution."""

import logging
from typing import List

import pytest

import toolsdata as t
from storage.base import TierReader
from storage.memory import MemoryTierReader
from tools.errors import NoMatchingToolsError, NoToolsAnywhereError, NotFoundError, TransportError
from tools.finder import ToolsFinder
from tools.list import ANY_MINOR, Filter
from versioning.models import Binary, Number


class RecordingTier(MemoryTierReader):
    """Memory tier that remembers how often it was listed."""

    def __init__(self, name, binaries=()):
        super().__init__(name, f"https://{name}.example.com")
        for binary in binaries:
            self.add(binary)
        self.calls = 0

    def list_tools(self, major=None):
        self.calls += 1
        return super().list_tools(major)


class FailingTier(TierReader):
    """Tier whose storage cannot be reached."""

    def list_names(self):
        raise TransportError(self.name, "connection refused")

    def url_for(self, name):
        raise AssertionError("never listed")


def make_finder(private=(), public=()):
    private_tier = RecordingTier("private", private)
    public_tier = RecordingTier("public", public)
    return ToolsFinder([private_tier, public_tier]), private_tier, public_tier


def expected_urls(private_tier, public_tier, expect: List[Binary]):
    """URLs expected for ``expect``: only the public tier is used when private is empty."""
    source = private_tier if private_tier.list_names() else public_tier
    urls = source.list_tools().binary_urls()
    return {binary: urls[binary] for binary in expect}


FIND_TOOLS_CASES = [
    pytest.param(1, ANY_MINOR, [], [], None, NoToolsAnywhereError, id="none available anywhere"),
    pytest.param(1, 2, t.V220all, [], None, NoMatchingToolsError, id="private tools only, none matching"),
    pytest.param(1, 2, t.VAll, [], t.V120all, None, id="tools found in private tier"),
    pytest.param(1, 1, [], t.VAll, t.V110all, None, id="tools found in public tier"),
    pytest.param(1, 1, t.V110p, t.VAll, t.V110p, None, id="tools found in both tiers, only taken from private"),
    pytest.param(1, ANY_MINOR, t.V220all, t.VAll, None, NoMatchingToolsError, id="private tools completely block public ones"),
    pytest.param(1, ANY_MINOR, [], t.VAll, t.V1all, None, id="tools matching major version only"),
]


class TestFindTools:
    """General lookup across tiers."""

    @pytest.mark.parametrize("major,minor,private,public,expect,error", FIND_TOOLS_CASES)
    def test_find_tools(self, major, minor, private, public, expect, error):
        finder, private_tier, public_tier = make_finder(private, public)
        if error is not None:
            with pytest.raises(error) as excinfo:
                finder.find_tools(major, minor)
            assert isinstance(excinfo.value, NotFoundError)
            return
        actual = finder.find_tools(major, minor)
        assert actual.binary_urls() == expected_urls(private_tier, public_tier, expect)

    def test_private_listing_stops_traversal_even_without_match(self):
        finder, private_tier, public_tier = make_finder(t.V220all, t.VAll)
        with pytest.raises(NoMatchingToolsError):
            finder.find_tools(1, 2)
        assert private_tier.calls == 1
        assert public_tier.calls == 0

    def test_public_consulted_only_when_private_empty(self):
        finder, private_tier, public_tier = make_finder([], t.V110all)
        finder.find_tools(1, 1)
        assert private_tier.calls == 1
        assert public_tier.calls == 1

    def test_public_tier_degenerate_urls_use_binary_view(self):
        finder, _, public_tier = make_finder([], t.V110p)
        actual = finder.find_tools(1, 1)
        assert [tools.version for tools in actual] == t.V110p
        assert actual.binary_urls() == public_tier.list_tools().binary_urls()

    def test_inner_filter_emptying_winning_tier_is_no_match(self):
        finder, _, _ = make_finder(t.V110all, t.VAll)
        with pytest.raises(NoMatchingToolsError):
            finder.find_tools(1, ANY_MINOR, Filter(number=t.V120))

    def test_series_and_arch_filter(self):
        finder, private_tier, _ = make_finder(t.VAll)
        actual = finder.find_tools(1, 2, Filter(series="quantal", arch="amd64"))
        assert [tools.version for tools in actual] == [t.V120q64]
        assert actual[0].url == private_tier.list_tools().binary_urls()[t.V120q64]

    def test_filtering_log_messages(self, caplog):
        finder, _, _ = make_finder()
        with caplog.at_level(logging.DEBUG):
            with pytest.raises(NotFoundError):
                finder.find_tools(1, ANY_MINOR, Filter(number=Number.parse("1.2.3")))
        messages = [(r.levelno, r.getMessage()) for r in caplog.records if r.name in ("tools.finder", "storage.base")]
        expected = [
            (logging.INFO, "reading tools with major version 1"),
            (logging.INFO, "filtering tools by version: 1.2.3"),
            (logging.DEBUG, "reading v1.* tools"),
            (logging.DEBUG, "reading v1.* tools"),
        ]
        relevant = [m for m in messages if m in expected]
        assert relevant == expected

    def test_transport_error_propagates(self):
        public_tier = RecordingTier("public", t.VAll)
        finder = ToolsFinder([FailingTier("private"), public_tier])
        with pytest.raises(TransportError) as excinfo:
            finder.find_tools(1, 1)
        assert excinfo.value.tier == "private"
        assert public_tier.calls == 0

    def test_no_tiers_is_no_tools_anywhere(self):
        with pytest.raises(NoToolsAnywhereError):
            ToolsFinder([]).find_tools(1)

    def test_single_tier_ranking_is_respected(self):
        first = RecordingTier("first", [])
        second = RecordingTier("second", [])
        third = RecordingTier("third", t.V100p)
        actual = ToolsFinder([first, second, third]).find_tools(1, 0)
        assert [tools.version for tools in actual] == t.V100p
        assert (first.calls, second.calls, third.calls) == (1, 1, 1)


BOOTSTRAP_CASES = [
    pytest.param(
        dict(available=[]), None, NoToolsAnywhereError, id="no tools at all",
    ),
    pytest.param(
        dict(available=[t.V100p64, t.V110devp64], series="precise"),
        [t.V100p64], None, id="released only without development",
    ),
    pytest.param(
        dict(available=[t.V100p64, t.V110devp64], series="precise", development=True),
        [t.V110devp64], None, id="development build wins when eligible",
    ),
    pytest.param(
        dict(available=[t.V110p64, t.V110devp64], series="precise", arch="amd64", development=True),
        [t.V110p64], None, id="one binary per series and arch when release and development share a version",
    ),
    pytest.param(
        dict(available=[t.V110devp64], series="precise"),
        None, NoMatchingToolsError, id="only development builds available",
    ),
    pytest.param(
        dict(available=t.V1all, series="quantal"),
        t.V120q, None, id="newest version, every arch",
    ),
    pytest.param(
        dict(available=t.V1all, series="quantal", arch="i386"),
        [t.V120q32], None, id="newest version, one arch",
    ),
    pytest.param(
        dict(available=t.V1all, series="raring"),
        None, NoMatchingToolsError, id="no tools for series",
    ),
    pytest.param(
        dict(available=t.VAll, series="precise", cli_version=t.V110),
        t.V110p, None, id="client version limits release line",
    ),
    pytest.param(
        dict(available=t.VAll + [t.V110devp64], series="precise", cli_version=t.V110dev),
        t.V110p, None, id="development client, release build wins its own version",
    ),
    pytest.param(
        dict(available=t.VAll, series="precise", cli_version=Number.parse("1.3.0")),
        None, NoMatchingToolsError, id="client release line not available",
    ),
    pytest.param(
        dict(available=t.VAll, series="precise"),
        t.V220all[:2], None, id="newest across majors without client version",
    ),
    pytest.param(
        dict(available=t.VAll, series="precise", agent_version=t.V110),
        t.V110p, None, id="explicit agent version",
    ),
    pytest.param(
        dict(available=t.VAll, series="precise", agent_version=t.V110, arch="amd64"),
        [t.V110p64], None, id="explicit agent version and arch",
    ),
    pytest.param(
        dict(available=t.VAll, series="precise", agent_version=Number.parse("1.3.0")),
        None, NoMatchingToolsError, id="explicit agent version not available",
    ),
]


class TestFindBootstrapTools:
    """Choosing tools for a new environment."""

    @pytest.mark.parametrize("params,expect,error", BOOTSTRAP_CASES)
    def test_find_bootstrap_tools(self, params, expect, error):
        params = dict(params)
        available = params.pop("available")
        private_tier = RecordingTier("private", available)
        # Never chosen while the private tier has tools.
        public_tier = RecordingTier("public", t.VAll if available else [])
        finder = ToolsFinder([private_tier, public_tier])
        if error is not None:
            with pytest.raises(error):
                finder.find_bootstrap_tools(**params)
            return
        actual = finder.find_bootstrap_tools(**params)
        urls = private_tier.list_tools().binary_urls()
        assert actual.binary_urls() == {binary: urls[binary] for binary in expect}
        assert public_tier.calls == 0


FIND_INSTANCE_CASES = [
    pytest.param([], t.V120, "precise", None, None, NoToolsAnywhereError, id="nothing at all"),
    pytest.param(t.V100Xall, t.V120, "precise", None, None, NoMatchingToolsError, id="nothing matching 1"),
    pytest.param(t.V120all, t.V110, "precise", None, None, NoMatchingToolsError, id="nothing matching 2"),
    pytest.param(t.V120q, t.V120, "precise", None, None, NoMatchingToolsError, id="nothing matching 3"),
    pytest.param(t.V120q, t.V120, "quantal", "arm", None, NoMatchingToolsError, id="nothing matching 4"),
    pytest.param(t.VAll, t.V101, "precise", None, [t.V101p64], None, id="actual match 1"),
    pytest.param(t.VAll, t.V120, "quantal", None, [t.V120q64, t.V120q32], None, id="actual match 2"),
    pytest.param(t.VAll, t.V110, "quantal", "i386", [t.V110q32], None, id="actual match 3"),
]


class TestFindInstanceTools:
    """Choosing tools for a machine in a running environment."""

    @pytest.mark.parametrize("available,agent_version,series,arch,expect,error", FIND_INSTANCE_CASES)
    def test_find_instance_tools(self, available, agent_version, series, arch, expect, error):
        private_tier = RecordingTier("private", available)
        public_tier = RecordingTier("public", t.VAll if available else [])
        finder = ToolsFinder([private_tier, public_tier])
        if error is not None:
            with pytest.raises(error):
                finder.find_instance_tools(agent_version, series, arch)
            return
        actual = finder.find_instance_tools(agent_version, series, arch)
        urls = private_tier.list_tools().binary_urls()
        assert actual.binary_urls() == {binary: urls[binary] for binary in expect}

    def test_development_build_needs_exact_number(self):
        finder = ToolsFinder([RecordingTier("private", [t.V110p64, t.V110devp64])])
        actual = finder.find_instance_tools(t.V110dev, "precise")
        assert [tools.version for tools in actual] == [t.V110devp64]


FIND_EXACT_CASES = [
    pytest.param([], [], NoToolsAnywhereError, id="nothing available"),
    pytest.param(
        t.V110all + [t.V100p32, t.V100q64, t.V101p64], [], NoMatchingToolsError,
        id="only non-matches available in private",
    ),
    pytest.param([t.V100p64], [], None, id="exact match available in private"),
    pytest.param(
        t.V110all + [t.V100p32, t.V100q64, t.V101p64], [t.V100p64], NoMatchingToolsError,
        id="only non-matches available in private, match in public",
    ),
    pytest.param([], [t.V100p64], None, id="exact match available in public"),
    pytest.param(t.V110all, [t.V100p64], NoMatchingToolsError, id="exact match in public blocked by private"),
]


class TestFindExactTools:
    """Single-binary exact lookup."""

    @pytest.mark.parametrize("private,public,error", FIND_EXACT_CASES)
    def test_find_exact_tools(self, private, public, error):
        finder, private_tier, public_tier = make_finder(private, public)
        seek = t.V100p64
        if error is not None:
            with pytest.raises(error):
                finder.find_exact_tools(seek.number, seek.series, seek.arch)
            return
        actual = finder.find_exact_tools(seek.number, seek.series, seek.arch)
        assert actual.version == seek
        assert actual.url == expected_urls(private_tier, public_tier, [seek])[seek]

    def test_exact_lookup_is_idempotent(self):
        finder, _, _ = make_finder(t.VAll, [])
        first = finder.find_exact_tools(t.V110, "quantal", "i386")
        second = finder.find_exact_tools(t.V110, "quantal", "i386")
        assert first == second
        assert first.version == t.V110q32


def test_findings_are_not_cached_between_calls():
    tier = RecordingTier("private", [])
    finder = ToolsFinder([tier])
    with pytest.raises(NoToolsAnywhereError):
        finder.find_tools(1)
    tier.add(t.V100p64)
    assert [tools.version for tools in finder.find_tools(1)] == [t.V100p64]