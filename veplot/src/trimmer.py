"""
Leading-gap trimmer.

A controller that was offline for weeks and then reports a few fresh points
produces a chart squashed against its right edge. Trimming drops the stale
run of points that precede the most recent gap larger than ``maxgap``.

CHANGELOG:
- 2026-10-04: Initial creation (STORY-102)

TODO:
- None
"""

from __future__ import annotations

import logging

from veplot.src.models import Series

logger = logging.getLogger(__name__)


def trim_leading_gap(series: Series, maxgap: int | None = None) -> Series:
    """Drop everything before the latest gap wider than *maxgap*.

    Consecutive points are compared newest-first. At the first pair whose
    timestamps differ by more than *maxgap*, the older point and everything
    before it are discarded; the newer point and everything after it are
    kept. Interior points of the kept suffix are never removed.

    Args:
        series: Points in chronological order.
        maxgap: Maximum allowed gap in milliseconds, or ``None`` to disable
            trimming.

    Returns:
        Series: A suffix of *series* (the same list when nothing is cut).

    Raises:
        ValueError: If *maxgap* is negative.
    """
    if maxgap is None:
        return series
    if maxgap < 0:
        raise ValueError(f"maxgap must be >= 0, got {maxgap}")

    for i in range(len(series) - 1, 0, -1):
        gap = series[i].timestamp - series[i - 1].timestamp
        if gap > maxgap:
            logger.debug(
                "Trimmed %d leading point(s) before a %d ms gap", i, gap
            )
            return series[i:]
    return series
