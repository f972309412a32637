"""
POST /v1/plan endpoint: build render plans for a telemetry payload.

Accepts the archive payload ``{"d": [...]}`` plus optional plot options and
returns one render plan per chartable variable. Options the request does
not set fall back to the server's ``VEPLOT_*`` defaults.

CHANGELOG:
- 2026-10-19: Extend TelemetryPayload instead of redeclaring records (STORY-112)
- 2026-10-11: Initial creation (STORY-110)

TODO:
- None
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import Field

from veplot.src.config import PlotSettings
from veplot.src.errors import PlotError
from veplot.src.models import PlotOptions, PlotResult
from veplot.src.payload import TelemetryPayload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["plan"])


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class PlanRequest(TelemetryPayload):
    """Telemetry payload plus plot options.

    Attributes:
        options: Allow-list, time window, gap threshold, eligibility.
    """

    options: PlotOptions = Field(default_factory=PlotOptions)


def _with_defaults(options: PlotOptions, settings: PlotSettings) -> PlotOptions:
    """Fill options the client left unset from server settings."""
    defaults: dict[str, Any] = {}
    if "maxgap" not in options.model_fields_set and settings.maxgap_ms is not None:
        defaults["maxgap"] = settings.maxgap_ms
    if "eligibility" not in options.model_fields_set:
        defaults["eligibility"] = settings.eligibility
    return options.model_copy(update=defaults) if defaults else options


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------


@router.post("/plan", response_model=PlotResult, response_model_by_alias=True)
def create_plan(request: Request, payload: PlanRequest) -> PlotResult:
    """Build render plans for the posted records.

    Raises:
        HTTPException: 413 if the payload has more than ``max_records``
            records.
        HTTPException: 422 if the records are empty, a record lacks
            ``_t``, or ``tmin > tmax``.
    """
    settings: PlotSettings = request.app.state.settings

    if len(payload.d) > settings.max_records:
        raise HTTPException(
            status_code=413,
            detail=f"Payload has {len(payload.d)} records, limit is "
            f"{settings.max_records}.",
        )

    options = _with_defaults(payload.options, settings)
    try:
        result = request.app.state.builder.build(payload.d, options)
    except PlotError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None

    logger.debug(
        "Plan request: records=%d plans=%d skipped=%d",
        len(payload.d),
        len(result.plans),
        len(result.skipped),
    )
    return result
