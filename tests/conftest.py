"""Pytest configuration and shared fixtures for cutting plan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cutplan.application.factory import STORE_PATH_ENV, reset_factory
from cutplan.domain import CutItemRequest, CuttingPlanConfig

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture(autouse=True)
def isolated_factory(monkeypatch: pytest.MonkeyPatch):
    """Keep the default service factory and store path out of other tests."""
    monkeypatch.delenv(STORE_PATH_ENV, raising=False)
    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def scenario_config() -> CuttingPlanConfig:
    """6000mm bars with a 3mm kerf."""
    return CuttingPlanConfig(bar_length=6000, cutting_thickness=3, max_bars=100)


@pytest.fixture
def scenario_requests() -> list[CutItemRequest]:
    """A 2000x2, B 1500x3, C 3000x1."""
    return [
        CutItemRequest(drawing_code="A", item_number="1", length=2000, quantity=2),
        CutItemRequest(drawing_code="B", item_number="2", length=1500, quantity=3),
        CutItemRequest(drawing_code="C", item_number="3", length=3000, quantity=1),
    ]
