"""
Runtime configuration loaded from environment variables.

Uses Pydantic BaseSettings; every variable is prefixed with ``VEPLOT_`` and
may also come from a ``.env`` file. All values are optional: without any
configuration the built-in catalog is used, trimming is off and labels are
rendered in UTC.

CHANGELOG:
- 2026-10-10: Initial creation (STORY-109)

TODO:
- None
"""

from __future__ import annotations

import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from veplot.src.catalog import DEFAULT_CATALOG, VariableCatalog, load_catalog
from veplot.src.formatting import LocalTimeFormatter
from veplot.src.models import EligibilityPolicy


class PlotSettings(BaseSettings):
    """Series-assembly configuration.

    Attributes:
        catalog_path: JSON catalog file; empty means the built-in catalog.
        maxgap_ms: Default leading-gap trim threshold in milliseconds, or
            unset to disable trimming.
        eligibility: Default variable eligibility policy (``head``/``any``).
        time_zone: IANA zone used for x-axis labels.
        max_records: Maximum records accepted per HTTP request.
        log_level: Root log level for the CLI and API.
    """

    catalog_path: str = ""
    maxgap_ms: int | None = None
    eligibility: EligibilityPolicy = EligibilityPolicy.HEAD
    time_zone: str = "UTC"
    max_records: int = 200_000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="VEPLOT_", env_file=".env", env_file_encoding="utf-8"
    )

    @field_validator("maxgap_ms")
    @classmethod
    def maxgap_must_be_non_negative(cls, v: int | None) -> int | None:
        """Validate the trim threshold is not negative."""
        if v is not None and v < 0:
            raise ValueError("VEPLOT_MAXGAP_MS must be >= 0")
        return v

    @field_validator("time_zone")
    @classmethod
    def time_zone_must_exist(cls, v: str) -> str:
        """Validate the zone name against the tz database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"VEPLOT_TIME_ZONE '{v}' is not a known time zone") from None
        return v

    @field_validator("max_records")
    @classmethod
    def max_records_must_be_valid(cls, v: int) -> int:
        """Validate the request limit is between 1 and 1,000,000."""
        if v < 1 or v > 1_000_000:
            raise ValueError("VEPLOT_MAX_RECORDS must be >= 1 and <= 1000000")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate and normalise the log level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"VEPLOT_LOG_LEVEL '{v}' is not a logging level")
        return level

    def load_catalog(self) -> VariableCatalog:
        """Return the configured catalog, or the built-in one."""
        if not self.catalog_path:
            return DEFAULT_CATALOG
        return load_catalog(self.catalog_path)

    def time_formatter(self) -> LocalTimeFormatter:
        return LocalTimeFormatter(self.time_zone)
