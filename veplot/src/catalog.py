"""
Variable catalog -- display metadata for every plottable telemetry field.

Maps a VE.Direct variable code (e.g. ``"V"``, ``"PPV"``) to its display name,
unit, scale/offset transform, and display precision. The catalog's
iteration order is the order in which charts are emitted.

Catalog files use the JSON schema::

    {"V": {"displayName": "battery voltage", "unit": "V",
           "scale": 0.001, "offset": 0, "precision": 5}}

The short keys used by the device web UI (``n``, ``u``, ``m``, ``d``) are
accepted as aliases for ``displayName``, ``unit``, ``scale`` and
``precision``.

CHANGELOG:
- 2026-10-07: Accept short-key aliases in catalog files (STORY-106)
- 2026-10-02: Initial creation (STORY-101)

TODO:
- None
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Data definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class VariableSpec:
    """Display metadata for one telemetry variable.

    Attributes:
        code: Variable code as it appears in telemetry records.
        display_name: Human-readable name used in the chart label.
        unit: Engineering unit after scaling (e.g. ``"V"``, ``"°C"``).
        scale: Multiplicative factor applied to raw values, or ``None``.
        offset: Additive offset applied after scaling, or ``None``.
        precision: Significant digits for range labels, or ``None`` for no
            range labels.
    """

    code: str
    display_name: str
    unit: str = ""
    scale: float | None = None
    offset: float | None = None
    precision: int | None = None

    def __post_init__(self) -> None:  # noqa: D105
        if self.precision is not None and self.precision < 1:
            msg = (
                f"Variable '{self.code}': precision must be >= 1, "
                f"got {self.precision}"
            )
            raise ValueError(msg)

    @property
    def label(self) -> str:
        """Chart label: display name plus unit in parentheses."""
        if self.unit:
            return f"{self.display_name} ({self.unit})"
        return self.display_name


class VariableCatalog:
    """Ordered collection of :class:`VariableSpec`, keyed by code.

    Args:
        specs: Variable specs in display order. Duplicate codes are rejected.
    """

    def __init__(self, specs: Iterable[VariableSpec]) -> None:
        self._specs: dict[str, VariableSpec] = {}
        for spec in specs:
            if spec.code in self._specs:
                raise ValueError(f"Duplicate variable code '{spec.code}' in catalog")
            self._specs[spec.code] = spec

    def __iter__(self) -> Iterator[VariableSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def get(self, code: str) -> VariableSpec | None:
        return self._specs.get(code)

    @property
    def codes(self) -> list[str]:
        return list(self._specs)

    def select(self, plotvars: Iterable[str] | None = None) -> list[VariableSpec]:
        """Return specs in catalog order, restricted to *plotvars* if given.

        Codes in *plotvars* that the catalog does not know are ignored.
        """
        if plotvars is None:
            return list(self._specs.values())
        wanted = set(plotvars)
        return [spec for code, spec in self._specs.items() if code in wanted]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> VariableCatalog:
        """Build a catalog from the ``{code: {displayName, ...}}`` schema.

        Raises:
            ValueError: If an entry is not a mapping or has a bad field.
        """
        return cls(_spec_from_entry(code, entry) for code, entry in data.items())


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "display_name": ("displayName", "n"),
    "unit": ("unit", "u"),
    "scale": ("scale", "m"),
    "offset": ("offset",),
    "precision": ("precision", "d"),
}
"""Maps VariableSpec field name -> accepted catalog-file keys, in priority order."""


def _lookup(entry: Mapping[str, Any], field_name: str) -> Any:
    for key in _KEY_ALIASES[field_name]:
        if key in entry:
            return entry[key]
    return None


def _optional_number(code: str, name: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"Variable '{code}': {name} must be a number, got {value!r}")
    return float(value)


def _spec_from_entry(code: str, entry: Any) -> VariableSpec:
    if not isinstance(entry, Mapping):
        raise ValueError(f"Variable '{code}': catalog entry must be an object")

    precision = _lookup(entry, "precision")
    if precision is not None and (
        isinstance(precision, bool) or not isinstance(precision, int)
    ):
        raise ValueError(
            f"Variable '{code}': precision must be an integer, got {precision!r}"
        )

    return VariableSpec(
        code=code,
        display_name=_lookup(entry, "display_name") or code,
        unit=_lookup(entry, "unit") or "",
        scale=_optional_number(code, "scale", _lookup(entry, "scale")),
        offset=_optional_number(code, "offset", _lookup(entry, "offset")),
        precision=precision,
    )


def load_catalog(path: str | Path) -> VariableCatalog:
    """Load a variable catalog from a JSON file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not a JSON object of catalog entries.
    """
    target = Path(path)
    with open(target, encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Catalog file {target} must contain a JSON object")
    catalog = VariableCatalog.from_mapping(data)
    logger.info("Loaded %d catalog variable(s) from %s", len(catalog), target)
    return catalog


# ---------------------------------------------------------------------------
# Default catalog: BlueSolar / SmartSolar MPPT and Phoenix inverter fields
# ---------------------------------------------------------------------------

DEFAULT_CATALOG = VariableCatalog(
    [
        VariableSpec("V", "battery voltage", "V", scale=0.001, precision=5),
        VariableSpec("VPV", "panel voltage", "V", scale=0.001, precision=5),
        VariableSpec("PPV", "panel power", "W", precision=5),
        VariableSpec("I", "current", "A", scale=0.001, precision=5),
        VariableSpec("T", "temperature", "°C", precision=3),
        VariableSpec("P", "power", "W", precision=5),
        VariableSpec("AC_OUT_V", "AC Volts", "V", scale=0.01, precision=5),
        VariableSpec("AC_OUT_I", "AC Amps", "A", scale=0.1, precision=5),
        VariableSpec("AC_OUT_S", "AC Power", "VA", precision=5),
        # Reported in hundredths of a kelvin.
        VariableSpec(
            "battery temperature",
            "battery temperature",
            "°C",
            scale=0.01,
            offset=-273.15,
            precision=2,
        ),
        VariableSpec(
            "charger internal temperature",
            "charger temperature",
            "°C",
            scale=0.01,
            precision=2,
        ),
    ]
)
"""Catalog used when no catalog file is configured."""
