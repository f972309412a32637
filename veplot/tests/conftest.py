"""
Shared test fixtures for veplot tests.

All VEPLOT_* environment variables are cleared before each test and the
working directory is moved to tmp_path so no .env file is picked up by
PlotSettings. Also provides sample payloads and a FastAPI TestClient.

CHANGELOG:
- 2026-10-11: Add TestClient fixture (STORY-110)
- 2026-10-03: Initial creation (STORY-102)

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

# All PlotSettings environment variable names, used for cleanup.
_ALL_VEPLOT_ENV_VARS = (
    "VEPLOT_CATALOG_PATH",
    "VEPLOT_MAXGAP_MS",
    "VEPLOT_ELIGIBILITY",
    "VEPLOT_TIME_ZONE",
    "VEPLOT_MAX_RECORDS",
    "VEPLOT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_veplot_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all veplot env vars and isolate from .env files before each test."""
    for var in _ALL_VEPLOT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def mppt_records() -> list[dict[str, Any]]:
    """Differential MPPT records: full first record, then changes only.

    Timestamps are one minute apart starting at 2023-11-14 22:13:20 UTC.
    """
    return [
        {"_t": 1_700_000_000_000, "V": 12500, "I": 1500, "PPV": 40, "CS": "3"},
        {"_t": 1_700_000_060_000, "V": 12600},
        {"_t": 1_700_000_120_000, "I": 1750, "PPV": 42},
        {"_t": 1_700_000_180_000},
        {"_t": 1_700_000_240_000, "V": 12400, "VPV": 18000},
    ]


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """Create a FastAPI TestClient with lifespan events triggered."""
    from veplot.src.api.main import app

    with TestClient(app) as test_client:
        yield test_client
