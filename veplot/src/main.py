"""
Command-line entry point: build render plans from an archive file.

Reads a ``{"d": [...]}`` payload from a ``.json`` or ``.json.gz`` archive,
runs the series-assembly pipeline and prints the resulting PlotResult as
JSON on stdout. Logs go to stderr as one JSON object per line.

Usage:
    veplot-plan archive.json.gz
    veplot-plan archive.json --vars V PPV --maxgap 600000
    veplot-plan archive.json --tmin 1700000000000 --tmax 1700003600000

Options not given on the command line fall back to ``VEPLOT_*`` settings.

CHANGELOG:
- 2026-10-10: Initial creation (STORY-109)

TODO:
- None
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime

from pydantic import ValidationError

from veplot.src.config import PlotSettings
from veplot.src.errors import PlotError
from veplot.src.models import EligibilityPolicy, PlotOptions
from veplot.src.payload import load_payload_file
from veplot.src.plan import RenderPlanBuilder

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger (stderr)."""

    class _JsonFormatter(logging.Formatter):
        """Minimal JSON log formatter."""

        def format(self, record: logging.LogRecord) -> str:
            log_entry = {
                "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
            }
            if record.exc_info and record.exc_info[1] is not None:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        description="Build chart render plans from a VE.Direct telemetry archive"
    )
    p.add_argument("path", help="Archive file (.json or .json.gz) holding {\"d\": [...]}")
    p.add_argument(
        "--vars", nargs="+", dest="plotvars", metavar="CODE",
        help="Only plot these variable codes (catalog order is kept)",
    )
    p.add_argument("--tmin", type=int, help="Inclusive lower time bound (epoch ms)")
    p.add_argument("--tmax", type=int, help="Inclusive upper time bound (epoch ms)")
    p.add_argument("--maxgap", type=int, help="Trim data before the latest gap wider than this (ms)")
    p.add_argument("--catalog", help="JSON variable catalog (overrides VEPLOT_CATALOG_PATH)")
    p.add_argument(
        "--any-eligibility", action="store_true",
        help="Plot variables that first appear after the first record",
    )
    p.add_argument("--indent", type=int, default=None, help="Indent the JSON output")
    return p.parse_args(argv)


def build_options(args: argparse.Namespace, settings: PlotSettings) -> PlotOptions:
    """Merge CLI arguments over settings defaults."""
    eligibility = EligibilityPolicy.ANY if args.any_eligibility else settings.eligibility
    return PlotOptions(
        plotvars=args.plotvars,
        tmin=args.tmin,
        tmax=args.tmax,
        maxgap=args.maxgap if args.maxgap is not None else settings.maxgap_ms,
        eligibility=eligibility,
    )


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = parse_args(argv)
    try:
        settings = PlotSettings()
    except ValidationError as exc:
        print(f"veplot-plan: invalid configuration: {exc}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)

    if args.catalog:
        settings.catalog_path = args.catalog

    try:
        builder = RenderPlanBuilder(
            settings.load_catalog(),
            time_formatter=settings.time_formatter(),
        )
        records = load_payload_file(args.path)
        result = builder.build(records, build_options(args, settings))
    except (OSError, ValueError, PlotError) as exc:
        # pydantic.ValidationError and json.JSONDecodeError are ValueErrors.
        logger.error("Cannot build render plans from %s: %s", args.path, exc)
        return 1

    sys.stdout.write(result.model_dump_json(by_alias=True, indent=args.indent))
    sys.stdout.write("\n")
    return 0


def main() -> None:
    """Synchronous entrypoint for ``veplot-plan``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
