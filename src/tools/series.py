"""Consistency checks on an assembled tool set."""

from .errors import MultipleSeriesError, SeriesMismatchError
from .list import ToolsList


def check_tools_series(tools: ToolsList, series: str) -> None:
    """Ensure every tool in ``tools`` targets the single OS series ``series``.

    Raises:
        MultipleSeriesError: if ``tools`` is empty or spans several series.
        SeriesMismatchError: if the one series found is not ``series``.
    """
    found = tools.all_series()
    if not found:
        raise MultipleSeriesError("expected single series, got none")
    if len(found) > 1:
        raise MultipleSeriesError(f"expected single series, got {len(found)}: {', '.join(found)}")
    if found[0] != series:
        raise SeriesMismatchError(series, found[0])
