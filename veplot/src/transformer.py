"""
Unit transformer -- converts raw device values to display units.

CHANGELOG:
- 2026-10-04: Initial creation (STORY-102)
"""

from __future__ import annotations

import math

from veplot.src.models import Series, SeriesPoint


def apply_units(
    series: Series,
    scale: float | None = None,
    offset: float | None = None,
) -> Series:
    """Return a new series with every value replaced by ``value * scale + offset``.

    ``None`` means a scale of 1 and an offset of 0. Timestamps and length
    are preserved. Non-finite values (NaN, +/-inf) pass through unchanged.
    """
    scale = 1.0 if scale is None else scale
    offset = 0.0 if offset is None else offset
    return [
        SeriesPoint(
            point.timestamp,
            point.value * scale + offset if math.isfinite(point.value) else point.value,
        )
        for point in series
    ]
