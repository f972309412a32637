"""
Tests for the leading-gap trimmer.

CHANGELOG:
- 2026-10-04: Initial creation (STORY-102)

TODO:
- None
"""

from __future__ import annotations

import pytest
from veplot.src.models import SeriesPoint
from veplot.src.trimmer import trim_leading_gap


def _series(*timestamps: int) -> list[SeriesPoint]:
    return [SeriesPoint(t, float(i)) for i, t in enumerate(timestamps)]


class TestTrimLeadingGap:
    """Only a stale prefix is removed."""

    def test_cuts_at_gap_keeping_point_after_it(self) -> None:
        series = _series(0, 100_000, 200_000)
        trimmed = trim_leading_gap(series, maxgap=50_000)
        assert trimmed == [SeriesPoint(200_000, 2.0)]

    def test_cuts_at_latest_gap_only(self) -> None:
        series = _series(0, 10, 1000, 1010, 1020, 5000, 5010)
        trimmed = trim_leading_gap(series, maxgap=100)
        assert [p.timestamp for p in trimmed] == [5000, 5010]

    def test_no_gap_returns_series_unchanged(self) -> None:
        series = _series(0, 10, 20, 30)
        assert trim_leading_gap(series, maxgap=10) is series

    def test_gap_equal_to_threshold_is_kept(self) -> None:
        series = _series(0, 50, 100)
        assert trim_leading_gap(series, maxgap=50) == series

    def test_none_is_pass_through(self) -> None:
        series = _series(0, 1_000_000)
        assert trim_leading_gap(series) is series

    def test_empty_and_single_point(self) -> None:
        assert trim_leading_gap([], maxgap=1) == []
        single = _series(7)
        assert trim_leading_gap(single, maxgap=1) == single

    def test_negative_maxgap_raises(self) -> None:
        with pytest.raises(ValueError, match="maxgap"):
            trim_leading_gap(_series(0, 1), maxgap=-1)

    @pytest.mark.parametrize("maxgap", [0, 5, 15, 100, 1000, 10_000])
    def test_result_is_suffix_with_small_gaps(self, maxgap: int) -> None:
        series = _series(0, 3, 20, 21, 150, 160, 2000, 2004, 2010)
        trimmed = trim_leading_gap(series, maxgap=maxgap)

        assert trimmed == series[len(series) - len(trimmed):]
        assert trimmed
        gaps = [b.timestamp - a.timestamp for a, b in zip(trimmed, trimmed[1:])]
        assert all(gap <= maxgap for gap in gaps)
