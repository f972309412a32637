"""
Data model for the series-assembly pipeline.

Internal value objects (records, merged snapshots, series points, time
windows) are frozen dataclasses so every pipeline stage works on immutable
inputs. The outward-facing shapes (options, range summaries, axis hints,
render plans) are pydantic models serialised with camelCase aliases, the
form the chart renderer consumes.

CHANGELOG:
- 2026-10-09: Add PlotResult.skipped for per-variable failures (STORY-108)
- 2026-10-06: Add EligibilityPolicy (STORY-104)
- 2026-10-02: Initial creation (STORY-101)

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from veplot.src.errors import InvalidWindowError

TIMESTAMP_KEY = "_t"
"""Reserved record key holding the epoch-millisecond timestamp."""


# ---------------------------------------------------------------------------
# Internal value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SnapshotRecord:
    """One sparse telemetry reading.

    Attributes:
        timestamp: Epoch milliseconds taken from the record's ``_t`` key.
        fields: Variable code -> value for the fields present in this
            record only. ``None`` is a real write (it clears the value).
    """

    timestamp: int
    fields: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class MergedSnapshot:
    """Cumulative device state after folding records ``0..i``.

    Attributes:
        timestamp: Timestamp of record ``i``.
        values: Read-only mapping of every variable seen so far to its
            most recent value.
    """

    timestamp: int
    values: Mapping[str, Any]

    def get(self, code: str) -> Any:
        return self.values.get(code)


@dataclass(frozen=True, slots=True)
class SeriesPoint:
    """A single ``(timestamp, value)`` chart point."""

    timestamp: int
    value: float


Series = list[SeriesPoint]
"""Ordered points for one variable, in input record order."""


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Inclusive timestamp window. ``None`` bounds are unbounded.

    Raises:
        InvalidWindowError: If both bounds are set and ``tmin > tmax``.
    """

    tmin: int | None = None
    tmax: int | None = None

    def __post_init__(self) -> None:
        if self.tmin is not None and self.tmax is not None and self.tmin > self.tmax:
            raise InvalidWindowError(
                f"tmin ({self.tmin}) must not be after tmax ({self.tmax})"
            )

    def contains(self, timestamp: int) -> bool:
        if self.tmin is not None and timestamp < self.tmin:
            return False
        if self.tmax is not None and timestamp > self.tmax:
            return False
        return True


class EligibilityPolicy(StrEnum):
    """Which variables the extractor is willing to plot.

    ``HEAD`` only admits variables defined in the first merged snapshot of
    the dataset (variables that start reporting mid-stream are dropped).
    ``ANY`` admits a variable defined in any merged snapshot.
    """

    HEAD = "head"
    ANY = "any"


# ---------------------------------------------------------------------------
# Pydantic models (renderer / API contract)
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlotOptions(_CamelModel):
    """Options accepted by the pipeline entry point.

    Attributes:
        plotvars: Allow-list of variable codes; catalog order is kept.
        tmin: Inclusive lower timestamp bound (epoch ms).
        tmax: Inclusive upper timestamp bound (epoch ms).
        maxgap: Leading-gap trim threshold in milliseconds.
        eligibility: Variable eligibility policy for extraction.
    """

    plotvars: list[str] | None = None
    tmin: int | None = None
    tmax: int | None = None
    maxgap: int | None = Field(default=None, ge=0)
    eligibility: EligibilityPolicy = EligibilityPolicy.HEAD

    @property
    def window(self) -> TimeWindow:
        """Window built from ``tmin``/``tmax``; raises InvalidWindowError."""
        return TimeWindow(self.tmin, self.tmax)


class RangeSummary(_CamelModel):
    """Min, max and last value of a series, optionally rounded."""

    min: float
    max: float
    last: float


class AxisHints(_CamelModel):
    """Axis labels and bounds for one chart.

    Attributes:
        left_label: Formatted time for the left edge of the x axis.
        right_label: Formatted time for the right edge of the x axis.
        min_x: Left x bound (epoch ms).
        max_x: Right x bound (epoch ms), always the dataset-wide maximum.
        range_labels: Formatted ``[min, max, last]`` values, only when the
            variable has a display precision.
    """

    left_label: str
    right_label: str
    min_x: int
    max_x: int
    range_labels: list[str] | None = None


class RenderPlan(_CamelModel):
    """Everything the renderer needs to draw one variable."""

    code: str
    label: str
    series: list[tuple[int, float]]
    axis_hints: AxisHints
    summary: RangeSummary | None = None


class PlotResult(_CamelModel):
    """Render plans for one pipeline invocation.

    Attributes:
        plans: One plan per eligible variable, in catalog order.
        min_x: Dataset-wide minimum timestamp.
        max_x: Dataset-wide maximum timestamp.
        skipped: Variable code -> error message for variables whose
            sub-pipeline failed.
    """

    plans: list[RenderPlan]
    min_x: int
    max_x: int
    skipped: dict[str, str] = Field(default_factory=dict)
