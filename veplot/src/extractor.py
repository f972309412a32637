"""
Series extractor -- pulls one variable's chronological series out of the
merged snapshots.

One point is emitted per merged snapshot whose timestamp lies inside the
(inclusive) time window and whose merged value for the variable is defined.
Points keep input record order; they are never re-sorted.

Eligibility: under the default ``EligibilityPolicy.HEAD`` a variable is only
extracted when it is defined in the first merged snapshot of the whole
dataset. Variables that start reporting mid-stream therefore yield an empty
series. This matches the behaviour of the device web UI and is kept as the
default pending product review; ``EligibilityPolicy.ANY`` admits variables
defined anywhere in the dataset.

CHANGELOG:
- 2026-10-19: Integers beyond float range are undefined (STORY-112)
- 2026-10-06: Make head-record eligibility a selectable policy (STORY-104)
- 2026-10-03: Initial creation (STORY-102)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from veplot.src.models import (
    EligibilityPolicy,
    MergedSnapshot,
    Series,
    SeriesPoint,
    TimeWindow,
)

logger = logging.getLogger(__name__)

_UNBOUNDED = TimeWindow()


def numeric_value(value: Any) -> float | None:
    """Return *value* as a float, or ``None`` if it cannot be plotted.

    Numbers pass through, numeric strings are parsed, everything else
    (``None``, booleans, status words, integers beyond float range) is
    undefined for plotting.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            logger.debug("Integer value exceeds float range, treated as undefined")
            return None
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def is_eligible(
    snapshots: Sequence[MergedSnapshot],
    code: str,
    policy: EligibilityPolicy = EligibilityPolicy.HEAD,
) -> bool:
    """Return whether *code* may be extracted from *snapshots* under *policy*."""
    if not snapshots:
        return False
    if policy is EligibilityPolicy.HEAD:
        return snapshots[0].get(code) is not None
    return any(snapshot.get(code) is not None for snapshot in snapshots)


def extract_series(
    snapshots: Sequence[MergedSnapshot],
    code: str,
    window: TimeWindow | None = None,
    eligibility: EligibilityPolicy = EligibilityPolicy.HEAD,
) -> Series:
    """Extract the ``(timestamp, value)`` series for one variable.

    Args:
        snapshots: Merged snapshots from :func:`merge_snapshots`.
        code: Variable code to extract.
        window: Inclusive time window; ``None`` means unbounded.
        eligibility: Which variables may be extracted at all.

    Returns:
        Series: Points in snapshot order. Empty if the variable is not
        eligible or has no defined value inside the window.
    """
    if not is_eligible(snapshots, code, eligibility):
        logger.debug("Variable '%s' not eligible under %s policy", code, eligibility)
        return []

    window = window or _UNBOUNDED
    series: Series = []
    for snapshot in snapshots:
        if not window.contains(snapshot.timestamp):
            continue
        value = numeric_value(snapshot.get(code))
        if value is not None:
            series.append(SeriesPoint(snapshot.timestamp, value))

    logger.debug("Extracted %d point(s) for '%s'", len(series), code)
    return series
