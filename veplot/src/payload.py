"""
Telemetry payload parsing.

A payload is the JSON document ``{"d": [record, record, ...]}`` produced by
the archive server: ``d[0]`` is a full record, later records carry only the
fields that changed, and every record has an integer ``_t`` (epoch ms).

Archive files on disk hold the same document, optionally gzip-compressed
(``*.json.gz``). Fetching payloads over the network is the caller's job.

CHANGELOG:
- 2026-10-07: Read gzip-compressed archive files (STORY-106)
- 2026-10-03: Initial creation (STORY-102)

TODO:
- None
"""

from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class TelemetryPayload(BaseModel):
    """Payload wrapper: ``d`` is the list of sparse records."""

    d: list[dict[str, Any]]


def parse_payload(data: str | bytes | dict[str, Any]) -> list[dict[str, Any]]:
    """Validate a payload document and return its records.

    Args:
        data: Raw JSON text/bytes or an already-decoded object.

    Raises:
        pydantic.ValidationError: If the document is not ``{"d": [objects]}``.
    """
    if isinstance(data, str | bytes):
        payload = TelemetryPayload.model_validate_json(data)
    else:
        payload = TelemetryPayload.model_validate(data)
    return payload.d


def load_payload_file(path: str | Path) -> list[dict[str, Any]]:
    """Read a payload from a ``.json`` or ``.json.gz`` archive file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        pydantic.ValidationError: If the file is not a valid payload.
    """
    target = Path(path)
    if target.suffix == ".gz":
        with gzip.open(target, "rt", encoding="utf-8") as handle:
            data = json.load(handle)
    else:
        with open(target, encoding="utf-8") as handle:
            data = json.load(handle)

    records = parse_payload(data)
    logger.info("Loaded %d record(s) from %s", len(records), target)
    return records
