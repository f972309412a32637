"""
FastAPI application entry point for the veplot API.

Settings are loaded and validated at startup; the variable catalog is read
once and a RenderPlanBuilder is stored on app.state for route handlers.
GET /health reports liveness and the loaded catalog for monitoring.

Run with:
    uvicorn veplot.src.api.main:app

CHANGELOG:
- 2026-10-12: Fold health route into the app module, report catalog codes
- 2026-10-11: Initial creation (STORY-110)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request

from veplot.src.api.plan import router as plan_router
from veplot.src.config import PlotSettings
from veplot.src.plan import RenderPlanBuilder

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load settings and catalog, log readiness.

    Raises:
        pydantic.ValidationError: If a ``VEPLOT_*`` variable is invalid.
        FileNotFoundError: If the configured catalog file is missing.
    """
    settings = PlotSettings()
    catalog = settings.load_catalog()
    app.state.settings = settings
    app.state.builder = RenderPlanBuilder(
        catalog,
        time_formatter=settings.time_formatter(),
    )
    logger.info(
        "veplot API ready: %d catalog variable(s), time_zone=%s, maxgap_ms=%s",
        len(catalog),
        settings.time_zone,
        settings.maxgap_ms,
    )
    yield
    logger.info("veplot API shutting down")


app = FastAPI(
    title="veplot API",
    description="Chart-ready series from sparse VE.Direct telemetry snapshots.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(plan_router)


@app.get("/health", tags=["health"])
async def health(request: Request) -> dict[str, Any]:
    """Liveness probe; no authentication.

    Returns:
        dict: ``status`` plus the variable codes the server can chart.
    """
    builder: RenderPlanBuilder = request.app.state.builder
    return {"status": "ok", "variables": builder.catalog.codes}
