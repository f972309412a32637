"""
Exception hierarchy for the series-assembly pipeline.

Whole-input failures (no records, a record without ``_t``, an inverted time
window) propagate to the caller. Per-variable failures are caught by the
render plan builder and reported in ``PlotResult.skipped``.

CHANGELOG:
- 2026-10-02: Initial creation (STORY-101)
"""

from __future__ import annotations


class PlotError(Exception):
    """Base exception for all series-assembly failures."""


class EmptyInputError(PlotError):
    """Raised when there are no records, or an empty series is summarized."""


class MissingTimestampError(PlotError):
    """Raised when a record lacks a usable ``_t`` timestamp."""


class InvalidWindowError(PlotError):
    """Raised when a time window has ``tmin`` after ``tmax``."""
