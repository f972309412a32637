"""
Render plan builder -- orchestrates the per-variable series pipeline.

For one payload of sparse records the builder:

1. Merges the records once (carry-forward) and computes the dataset-wide
   time bounds.
2. For every catalog variable (catalog order, optionally restricted by
   ``plotvars``) runs the stage chain::

       extract(window) -> trim(maxgap) -> apply_units(scale, offset)

   and, for a non-empty result, summarizes its range.
3. Emits one :class:`RenderPlan` per variable with a non-empty series.

Whole-input errors (no records, a record without ``_t``, an inverted
window) propagate. A failure inside one variable's chain is logged, listed
in ``PlotResult.skipped`` and does not affect the other variables.

The builder holds no per-call state, so repeated calls with the same input
produce identical output.

CHANGELOG:
- 2026-10-09: Isolate per-variable failures into PlotResult.skipped (STORY-108)
- 2026-10-08: Inject time/number formatters (STORY-107)
- 2026-10-05: Initial creation (STORY-105)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from functools import partial
from typing import Any

from veplot.src.catalog import DEFAULT_CATALOG, VariableCatalog, VariableSpec
from veplot.src.errors import PlotError
from veplot.src.extractor import extract_series
from veplot.src.formatting import (
    LocalTimeFormatter,
    NumberFormatter,
    TimeFormatter,
    format_precision,
)
from veplot.src.merger import dataset_bounds, merge_snapshots, present_codes
from veplot.src.models import (
    AxisHints,
    MergedSnapshot,
    PlotOptions,
    PlotResult,
    RenderPlan,
    Series,
    SnapshotRecord,
    TimeWindow,
)
from veplot.src.summarizer import summarize_range
from veplot.src.transformer import apply_units
from veplot.src.trimmer import trim_leading_gap

logger = logging.getLogger(__name__)

SeriesStage = Callable[[Series], Series]
"""A single series -> series pipeline step."""


def run_stages(series: Series, stages: Iterable[SeriesStage]) -> Series:
    """Feed *series* through *stages* in order."""
    for stage in stages:
        series = stage(series)
    return series


class RenderPlanBuilder:
    """Builds render plans for a catalog of variables.

    Args:
        catalog: Variable catalog; its order is the chart order.
        time_formatter: Formats x-axis bound labels. Defaults to UTC
            wall-clock time.
        number_formatter: Formats range labels. Defaults to
            :func:`format_precision`.
    """

    def __init__(
        self,
        catalog: VariableCatalog = DEFAULT_CATALOG,
        *,
        time_formatter: TimeFormatter | None = None,
        number_formatter: NumberFormatter | None = None,
    ) -> None:
        self.catalog = catalog
        self.time_formatter = time_formatter or LocalTimeFormatter()
        self.number_formatter = number_formatter or format_precision

    def stages_for(self, spec: VariableSpec, options: PlotOptions) -> list[SeriesStage]:
        """Post-extraction stages for one variable."""
        return [
            partial(trim_leading_gap, maxgap=options.maxgap),
            partial(apply_units, scale=spec.scale, offset=spec.offset),
        ]

    def build(
        self,
        records: Sequence[Mapping[str, Any] | SnapshotRecord],
        options: PlotOptions | None = None,
    ) -> PlotResult:
        """Build render plans for *records*.

        Raises:
            InvalidWindowError: If ``options.tmin > options.tmax``.
            EmptyInputError: If *records* is empty.
            MissingTimestampError: If a record has no usable ``_t``.
        """
        options = options or PlotOptions()
        window = options.window
        snapshots = merge_snapshots(records)
        min_x, max_x = dataset_bounds(snapshots)
        present = present_codes(snapshots)

        plans: list[RenderPlan] = []
        skipped: dict[str, str] = {}
        for spec in self.catalog.select(options.plotvars):
            if spec.code not in present:
                continue
            try:
                plan = self._plan_variable(spec, snapshots, window, options, min_x, max_x)
            except (PlotError, ValueError, ArithmeticError) as exc:
                logger.warning("Skipping variable '%s': %s", spec.code, exc)
                skipped[spec.code] = str(exc)
                continue
            if plan is not None:
                plans.append(plan)

        logger.debug(
            "Built %d plan(s) from %d record(s), %d skipped",
            len(plans),
            len(snapshots),
            len(skipped),
        )
        return PlotResult(plans=plans, min_x=min_x, max_x=max_x, skipped=skipped)

    def _plan_variable(
        self,
        spec: VariableSpec,
        snapshots: Sequence[MergedSnapshot],
        window: TimeWindow,
        options: PlotOptions,
        min_x: int,
        max_x: int,
    ) -> RenderPlan | None:
        series = extract_series(snapshots, spec.code, window, options.eligibility)
        series = run_stages(series, self.stages_for(spec, options))
        if not series:
            return None

        summary = summarize_range(series, spec.precision)
        range_labels = None
        if spec.precision is not None:
            range_labels = [
                self.number_formatter(value, spec.precision)
                for value in (summary.min, summary.max, summary.last)
            ]

        # A trimmed chart starts at its own first point, not the dataset start.
        left = series[0].timestamp if options.maxgap is not None else min_x
        hints = AxisHints(
            left_label=self.time_formatter(left),
            right_label=self.time_formatter(max_x),
            min_x=left,
            max_x=max_x,
            range_labels=range_labels,
        )
        return RenderPlan(
            code=spec.code,
            label=spec.label,
            series=[(point.timestamp, point.value) for point in series],
            axis_hints=hints,
            summary=summary,
        )


def build_render_plans(
    records: Sequence[Mapping[str, Any] | SnapshotRecord],
    options: PlotOptions | None = None,
    catalog: VariableCatalog = DEFAULT_CATALOG,
    *,
    time_formatter: TimeFormatter | None = None,
    number_formatter: NumberFormatter | None = None,
) -> PlotResult:
    """Convenience wrapper: build plans with a one-off :class:`RenderPlanBuilder`."""
    builder = RenderPlanBuilder(
        catalog,
        time_formatter=time_formatter,
        number_formatter=number_formatter,
    )
    return builder.build(records, options)
