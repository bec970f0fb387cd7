"""Integration tests for the plans CLI command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cutplan.cli.main import app

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def store(runner: CliRunner, tmp_path: Path) -> Path:
    """A plan store holding PC-001 (scenario config) and PC-002 (flat bar)."""
    path = tmp_path / "plans.json"
    first = runner.invoke(
        app,
        ["compute", "-c", str(FIXTURES_PATH / "valid_scenario.json"), "--save", "--store", str(path)],
    )
    second = runner.invoke(
        app, ["compute", "-i", "F:1:1000:2", "--save", "--store", str(path)]
    )
    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    return path


def _plan_id(store: Path, code: str) -> str:
    data = json.loads(store.read_text(encoding="utf-8"))
    return next(
        record["plan"]["plan_id"]
        for record in data["plans"]
        if record["plan"]["traceability_code"] == code
    )


class TestPlansList:
    def test_lists_newest_first(self, runner: CliRunner, store: Path) -> None:
        result = runner.invoke(app, ["plans", "list", "--store", str(store)])

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[0].startswith("PC-002")
        assert lines[1].startswith("PC-001")

    def test_search(self, runner: CliRunner, store: Path) -> None:
        result = runner.invoke(app, ["plans", "list", "--search", "rhs", "--store", str(store)])

        assert "PC-001" in result.output
        assert "PC-002" not in result.output

    def test_empty_store(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["plans", "list", "--store", str(tmp_path / "none.json")])
        assert "No cutting plans found." in result.output

    def test_requires_store(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["plans", "list"])
        assert result.exit_code == 1


class TestPlansShow:
    def test_show_by_code(self, runner: CliRunner, store: Path) -> None:
        result = runner.invoke(app, ["plans", "show", "PC-001", "--store", str(store)])

        assert result.exit_code == 0, result.output
        assert "CUTTING PLAN PC-001" in result.output
        assert "Material: RHS 40x40x2" in result.output
        assert "Bar 3 of 3" in result.output

    def test_show_by_id(self, runner: CliRunner, store: Path) -> None:
        plan_id = _plan_id(store, "PC-002")
        result = runner.invoke(app, ["plans", "show", plan_id, "--store", str(store)])
        assert "CUTTING PLAN PC-002" in result.output

    def test_unknown_plan(self, runner: CliRunner, store: Path) -> None:
        result = runner.invoke(app, ["plans", "show", "PC-999", "--store", str(store)])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestPlansDelete:
    def test_delete(self, runner: CliRunner, store: Path) -> None:
        result = runner.invoke(app, ["plans", "delete", "PC-001", "--store", str(store)])
        assert result.exit_code == 0, result.output
        assert "Deleted PC-001" in result.output

        listing = runner.invoke(app, ["plans", "list", "--store", str(store)])
        assert "PC-001" not in listing.output

        shown = runner.invoke(app, ["plans", "show", "PC-001", "--store", str(store)])
        assert "(deleted)" in shown.output

    def test_deleted_code_is_not_reused(self, runner: CliRunner, store: Path) -> None:
        runner.invoke(app, ["plans", "delete", "PC-002", "--store", str(store)])
        result = runner.invoke(app, ["compute", "-i", "G:1:500:1", "--save", "--store", str(store)])
        assert "Saved PC-003" in result.output

    def test_delete_all_with_yes(self, runner: CliRunner, store: Path) -> None:
        result = runner.invoke(app, ["plans", "delete-all", "--yes", "--store", str(store)])

        assert result.exit_code == 0, result.output
        assert "Deleted 2 plans" in result.output

    def test_delete_all_declined(self, runner: CliRunner, store: Path) -> None:
        result = runner.invoke(
            app, ["plans", "delete-all", "--store", str(store)], input="n\n"
        )

        assert result.exit_code == 1
        listing = runner.invoke(app, ["plans", "list", "--store", str(store)])
        assert "PC-001" in listing.output


class TestPlansExport:
    def test_export_selected_formats(self, runner: CliRunner, store: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["plans", "export", "PC-001", "-f", "csv,svg", "-o", str(out), "--store", str(store)],
        )

        assert result.exit_code == 0, result.output
        assert (out / "PC-001_csv.csv").exists()
        assert (out / "PC-001_svg.svg").exists()
        assert not (out / "PC-001_json.json").exists()

    def test_export_all(self, runner: CliRunner, store: Path, tmp_path: Path) -> None:
        out = tmp_path / "all"
        runner.invoke(app, ["plans", "export", "PC-002", "-o", str(out), "--store", str(store)])

        assert sorted(p.name for p in out.iterdir()) == [
            "PC-002_csv.csv",
            "PC-002_json.json",
            "PC-002_svg.svg",
            "PC-002_text.txt",
        ]

    def test_unknown_format(self, runner: CliRunner, store: Path, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            ["plans", "export", "PC-001", "-f", "dxf", "-o", str(tmp_path), "--store", str(store)],
        )
        assert result.exit_code == 1
        assert "Unknown formats: dxf" in result.output
