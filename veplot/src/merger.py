"""
Snapshot merger -- folds sparse telemetry records into full-state snapshots.

The device archive stores differential records: the first record of a
payload carries every field, later records only the fields that changed.
Merging is a left fold: each record's fields are overlaid on a copy of the
previous state (last write wins per key, absent keys keep their value) and
the result is emitted as that record's snapshot.

State is rebuilt on every call; nothing is kept between invocations.

CHANGELOG:
- 2026-10-19: Reject non-integral and out-of-range ``_t`` values (STORY-112)
- 2026-10-05: Accept numeric-string and float ``_t`` values (STORY-103)
- 2026-10-03: Initial creation (STORY-102)

TODO:
- None
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from veplot.src.errors import EmptyInputError, MissingTimestampError
from veplot.src.models import TIMESTAMP_KEY, MergedSnapshot, SnapshotRecord

logger = logging.getLogger(__name__)


# Epoch-ms range a datetime can represent in any zone (years 1..9999, one day
# of slack at each end for zone offsets).
_MIN_TIMESTAMP_MS = -62_135_510_400_000
_MAX_TIMESTAMP_MS = 253_402_214_400_000


def _to_int(index: int, raw: Any) -> int:
    if isinstance(raw, bool):
        raise MissingTimestampError(f"Record {index}: _t must be a number, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            raw = float(text)
        except ValueError:
            raise MissingTimestampError(
                f"Record {index}: _t is not a numeric string ({raw!r})"
            ) from None
    if isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            raise MissingTimestampError(f"Record {index}: _t is not integral ({raw!r})")
        return int(raw)
    raise MissingTimestampError(
        f"Record {index}: _t has unsupported type {type(raw).__name__}"
    )


def _coerce_timestamp(index: int, raw: Any) -> int:
    """Convert a raw ``_t`` value to integer epoch milliseconds.

    Integers, integral floats and strings holding either are accepted;
    the result must fall within the range a calendar date can represent.
    """
    timestamp = _to_int(index, raw)
    if not _MIN_TIMESTAMP_MS <= timestamp <= _MAX_TIMESTAMP_MS:
        raise MissingTimestampError(
            f"Record {index}: _t {timestamp} is outside the representable date range"
        )
    return timestamp


def parse_record(raw: Mapping[str, Any], index: int = 0) -> SnapshotRecord:
    """Split a raw payload record into its timestamp and field diff.

    Args:
        raw: Mapping of variable code -> value plus the reserved ``_t`` key.
        index: Position of the record in its payload, for error messages.

    Raises:
        MissingTimestampError: If ``_t`` is absent or not a usable integer.
    """
    if TIMESTAMP_KEY not in raw or raw[TIMESTAMP_KEY] is None:
        raise MissingTimestampError(f"Record {index} has no {TIMESTAMP_KEY} timestamp")
    timestamp = _coerce_timestamp(index, raw[TIMESTAMP_KEY])
    fields = {key: value for key, value in raw.items() if key != TIMESTAMP_KEY}
    return SnapshotRecord(timestamp=timestamp, fields=MappingProxyType(fields))


def merge_snapshots(
    records: Iterable[Mapping[str, Any] | SnapshotRecord],
) -> list[MergedSnapshot]:
    """Fold sparse records into one cumulative snapshot per record.

    Args:
        records: Records in arrival order, either raw payload mappings
            (with ``_t``) or already-parsed :class:`SnapshotRecord` objects.

    Returns:
        list[MergedSnapshot]: ``result[i]`` is the state after folding
        records ``0..i``, stamped with record ``i``'s timestamp.

    Raises:
        EmptyInputError: If *records* is empty.
        MissingTimestampError: If any record lacks ``_t``.
    """
    merged: list[MergedSnapshot] = []
    state: dict[str, Any] = {}

    for index, raw in enumerate(records):
        record = raw if isinstance(raw, SnapshotRecord) else parse_record(raw, index)
        state = {**state, **record.fields}
        merged.append(
            MergedSnapshot(timestamp=record.timestamp, values=MappingProxyType(state))
        )

    if not merged:
        raise EmptyInputError("No telemetry records to merge")

    logger.debug(
        "Merged %d record(s) into %d variable(s)", len(merged), len(merged[-1].values)
    )
    return merged


def dataset_bounds(snapshots: Sequence[MergedSnapshot]) -> tuple[int, int]:
    """Return ``(min_ts, max_ts)`` over every snapshot.

    Raises:
        EmptyInputError: If *snapshots* is empty.
    """
    if not snapshots:
        raise EmptyInputError("No snapshots to bound")
    timestamps = [snapshot.timestamp for snapshot in snapshots]
    return min(timestamps), max(timestamps)


def present_codes(snapshots: Sequence[MergedSnapshot]) -> set[str]:
    """Variable codes that appear in at least one record."""
    if not snapshots:
        return set()
    # Carry-forward means the final state holds every key ever written.
    return set(snapshots[-1].values)
