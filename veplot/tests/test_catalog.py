"""
Tests for the variable catalog.

CHANGELOG:
- 2026-10-07: Short-key alias tests (STORY-106)
- 2026-10-02: Initial creation (STORY-101)

TODO:
- None
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from veplot.src.catalog import DEFAULT_CATALOG, VariableCatalog, VariableSpec, load_catalog


class TestVariableSpec:
    """Labels and validation."""

    def test_label_with_unit(self) -> None:
        assert VariableSpec("V", "battery voltage", "V").label == "battery voltage (V)"

    def test_label_without_unit(self) -> None:
        assert VariableSpec("CS", "state").label == "state"

    def test_precision_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="precision"):
            VariableSpec("V", "battery voltage", precision=0)


class TestVariableCatalog:
    """Ordering, selection and parsing."""

    def test_select_keeps_catalog_order(self) -> None:
        selected = DEFAULT_CATALOG.select(["PPV", "V", "nope"])
        assert [spec.code for spec in selected] == ["V", "PPV"]

    def test_select_without_allow_list_returns_all(self) -> None:
        assert len(DEFAULT_CATALOG.select()) == len(DEFAULT_CATALOG)

    def test_duplicate_codes_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            VariableCatalog([VariableSpec("V", "a"), VariableSpec("V", "b")])

    def test_from_mapping_full_schema(self) -> None:
        catalog = VariableCatalog.from_mapping(
            {
                "V": {"displayName": "battery voltage", "unit": "V", "scale": 0.001,
                      "precision": 5},
                "T": {"displayName": "temperature", "offset": -273.15},
            }
        )
        assert catalog.codes == ["V", "T"]
        assert catalog.get("V") == VariableSpec("V", "battery voltage", "V", 0.001, None, 5)
        assert catalog.get("T").offset == -273.15

    def test_from_mapping_short_keys(self) -> None:
        catalog = VariableCatalog.from_mapping(
            {"I": {"n": "current", "u": "A", "m": 0.001, "d": 5}}
        )
        assert catalog.get("I") == VariableSpec("I", "current", "A", 0.001, None, 5)

    def test_display_name_defaults_to_code(self) -> None:
        catalog = VariableCatalog.from_mapping({"PPV": {}})
        assert catalog.get("PPV").label == "PPV"

    @pytest.mark.parametrize(
        "entry",
        [
            "not an object",
            {"scale": "big"},
            {"precision": 2.5},
            {"precision": True},
        ],
    )
    def test_bad_entries_rejected(self, entry: object) -> None:
        with pytest.raises(ValueError):
            VariableCatalog.from_mapping({"X": entry})  # type: ignore[dict-item]

    def test_default_catalog_battery_temperature_offset(self) -> None:
        spec = DEFAULT_CATALOG.get("battery temperature")
        assert spec.scale == 0.01
        assert spec.offset == -273.15
        assert spec.precision == 2


class TestLoadCatalog:
    """JSON catalog files."""

    def test_load_catalog(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"P": {"displayName": "power", "unit": "W"}}))
        catalog = load_catalog(path)
        assert catalog.codes == ["P"]
        assert catalog.get("P").label == "power (W)"

    def test_non_object_file_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_catalog(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.json")
