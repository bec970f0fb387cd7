"""Unit tests for configuration schema and loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from cutplan.application.config import (
    ConfigError,
    CuttingPlanConfiguration,
    load_config,
    load_config_from_dict,
)


def _config(**overrides) -> dict:
    data = {"items": [{"drawing_code": "A", "item_number": "1", "length": 1000}]}
    data.update(overrides)
    return data


class TestSchema:
    """Tests for CuttingPlanConfiguration validation."""

    def test_defaults(self) -> None:
        config = CuttingPlanConfiguration.model_validate(_config())

        assert config.schema_version == "1.0"
        assert config.plan.bar_length == 6000
        assert config.plan.cutting_thickness == 3
        assert config.plan.max_bars == 100
        assert config.material.weight_per_meter == 0
        assert config.items[0].quantity == 1
        assert config.sequence is None

    def test_numeric_identifiers_are_coerced(self) -> None:
        config = CuttingPlanConfiguration.model_validate(
            {"items": [{"drawing_code": 1040, "item_number": 7, "length": 500}]}
        )
        assert (config.items[0].drawing_code, config.items[0].item_number) == ("1040", "7")

    @pytest.mark.parametrize(
        "overrides, path",
        [
            ({"items": []}, "items"),
            ({"plan": {"bar_length": 0}}, "plan.bar_length"),
            ({"plan": {"cutting_thickness": -1}}, "plan.cutting_thickness"),
            ({"plan": {"max_bars": 0}}, "plan.max_bars"),
            ({"material": {"weight_per_meter": -2}}, "material.weight_per_meter"),
            ({"plan": {"bar_length": float("inf")}}, "plan.bar_length"),
            ({"plan": {"cutting_thickness": float("nan")}}, "plan.cutting_thickness"),
            ({"material": {"weight_per_meter": float("inf")}}, "material.weight_per_meter"),
            ({"sequence": 0}, "sequence"),
            ({"colour": "red"}, "colour"),
        ],
    )
    def test_invalid_values_report_path(self, overrides: dict, path: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(_config(**overrides))

        error = exc_info.value
        assert error.error_type == "validation"
        assert path in [d["path"] for d in error.details]

    def test_invalid_item_path_includes_index(self) -> None:
        data = {"items": [{"length": 100}, {"length": -5}]}
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(data)
        assert exc_info.value.details[0]["path"] == "items[1].length"

    def test_kerf_must_be_smaller_than_bar(self) -> None:
        with pytest.raises(ConfigError, match="smaller than bar_length"):
            load_config_from_dict(
                _config(plan={"bar_length": 100, "cutting_thickness": 100})
            )

    def test_unsupported_schema_version(self) -> None:
        with pytest.raises(ConfigError, match="Unsupported schema version"):
            load_config_from_dict(_config(schema_version="2.0"))


class TestLoadConfig:
    """Tests for loading configuration files."""

    def test_valid_file(self, fixtures_path: Path) -> None:
        config = load_config(fixtures_path / "valid_scenario.json")

        assert config.plan.max_bars == 10
        assert config.material.name == "RHS 40x40x2"
        assert config.order.order_number == "SO-2024-042"
        assert [item.quantity for item in config.items] == [2, 3, 1]
        assert config.sequence == 7

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == tmp_path / "missing.json"

    def test_invalid_json(self, fixtures_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(fixtures_path / "invalid_json.json")

        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 2

    def test_unknown_field(self, fixtures_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(fixtures_path / "unknown_field.json")
        assert exc_info.value.details[0]["path"] == "plan.blade"

    def test_infinite_bar_length(self, fixtures_path: Path) -> None:
        # json accepts the non-standard Infinity literal
        with pytest.raises(ConfigError) as exc_info:
            load_config(fixtures_path / "infinite_bar_length.json")

        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "plan.bar_length"

    def test_non_object_root(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.error_type == "validation"
