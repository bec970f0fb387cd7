"""Unit tests for configuration validation and cutting advisories."""

from __future__ import annotations

from pathlib import Path

import pytest

from cutplan.application.config import (
    CuttingPlanConfiguration,
    ValidationResult,
    estimate_minimum_bars,
    load_config,
    validate_config,
)


def _config(**overrides) -> CuttingPlanConfiguration:
    data = {
        "plan": {"bar_length": 6000, "cutting_thickness": 3, "max_bars": 10},
        "material": {"name": "RHS", "weight_per_meter": 2.31},
        "items": [{"drawing_code": "A", "item_number": "1", "length": 1000}],
    }
    data.update(overrides)
    return CuttingPlanConfiguration.model_validate(data)


class TestValidationResult:
    def test_exit_codes(self) -> None:
        result = ValidationResult()
        assert result.exit_code == 0
        result.add_warning("items", "check")
        assert result.exit_code == 2
        assert result.is_valid
        result.add_error("items[0].length", "too long", 7000)
        assert result.exit_code == 1
        assert not result.is_valid


class TestValidateConfig:
    def test_clean_config(self) -> None:
        result = validate_config(_config())
        assert result.errors == []
        assert result.warnings == []

    def test_oversized_item(self, fixtures_path: Path) -> None:
        result = validate_config(load_config(fixtures_path / "oversized_item.json"))

        assert [e.path for e in result.errors] == ["items[0].length"]
        assert result.errors[0].value == 7000
        assert "7003mm" in result.errors[0].message

    def test_bar_limit_cannot_be_met(self, fixtures_path: Path) -> None:
        result = validate_config(load_config(fixtures_path / "too_many_bars.json"))
        assert "plan.max_bars" in [e.path for e in result.errors]

    def test_more_than_half_a_bar_warns(self) -> None:
        result = validate_config(
            _config(items=[{"drawing_code": "L", "item_number": "1", "length": 3500, "quantity": 2}])
        )
        assert [w.path for w in result.warnings] == ["items[0].length"]

    def test_duplicate_items_warn(self) -> None:
        item = {"drawing_code": "A", "item_number": "1", "length": 500}
        result = validate_config(_config(items=[item, dict(item, length=700)]))
        assert any("listed 2 times" in w.message for w in result.warnings)

    def test_missing_weight_warns(self) -> None:
        result = validate_config(_config(material={"name": "RHS"}))
        assert [w.path for w in result.warnings] == ["material.weight_per_meter"]


class TestEstimateMinimumBars:
    @pytest.mark.parametrize(
        "length, quantity, expected",
        [(1000, 1, 1), (2997, 2, 1), (2997, 3, 2), (4000, 3, 3)],
    )
    def test_lower_bound(self, length: float, quantity: int, expected: int) -> None:
        config = _config(
            items=[{"drawing_code": "A", "item_number": "1", "length": length, "quantity": quantity}]
        )
        assert estimate_minimum_bars(config) == expected

    def test_ignores_items_that_never_fit(self) -> None:
        config = _config(items=[{"drawing_code": "A", "item_number": "1", "length": 9000}])
        assert estimate_minimum_bars(config) == 0
