"""
Range summarizer -- min, max and last value of a series for axis labels.

CHANGELOG:
- 2026-10-08: Round via formatting.round_significant (STORY-107)
- 2026-10-04: Initial creation (STORY-102)

TODO:
- None
"""

from __future__ import annotations

from veplot.src.errors import EmptyInputError
from veplot.src.formatting import round_significant
from veplot.src.models import RangeSummary, Series


def summarize_range(series: Series, precision: int | None = None) -> RangeSummary:
    """Summarize a non-empty series.

    Args:
        series: Points after trimming and unit conversion.
        precision: Significant digits to round to, or ``None`` to keep the
            raw values.

    Returns:
        RangeSummary: ``min``, ``max`` and ``last`` (value of the final point).

    Raises:
        EmptyInputError: If *series* is empty. Callers skip summarization
            for empty series instead.
        ValueError: If *precision* is less than 1.
    """
    if not series:
        raise EmptyInputError("Cannot summarize an empty series")

    values = [point.value for point in series]
    low, high, last = min(values), max(values), values[-1]
    if precision is not None:
        low, high, last = (round_significant(v, precision) for v in (low, high, last))
    return RangeSummary(min=low, max=high, last=last)
