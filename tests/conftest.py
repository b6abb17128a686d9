"""Shared fixtures for scorecard tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add repo root to path so tests can import scorecard without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))

from scorecard.schemas import DataEntry, Goal, Indicator, Objective  # noqa: E402
from scorecard.scorers import band_registry  # noqa: E402


def make_indicator(id="ind-1", goal_id="goal-1", **overrides) -> Indicator:
    """Build an Indicator with a target of 100 unless overridden."""
    data = dict(id=id, goal_id=goal_id, target_value=100)
    data.update(overrides)
    return Indicator(**data)


def make_entries(indicator_id: str, *values: float, status: str = "approved") -> list[DataEntry]:
    return [DataEntry(indicator_id=indicator_id, value=v, status=status) for v in values]


@pytest.fixture(autouse=True)
def _fresh_band_registry():
    """Each test sees the band config as it is on disk (or the defaults)."""
    band_registry.clear_cache()
    yield
    band_registry.clear_cache()


@pytest.fixture
def sample_plan():
    """One objective, two goals: goal-1 weighted (60/40), goal-2 unweighted."""
    objectives = [Objective(id="obj-1", name="Improve service quality")]
    goals = [
        Goal(id="goal-1", objective_id="obj-1", name="Faster response"),
        Goal(id="goal-2", objective_id="obj-1", name="Fewer complaints"),
    ]
    indicators = [
        make_indicator("ind-1", "goal-1", baseline_value=100, target_value=500, contribution_weight=60),
        make_indicator(
            "ind-2",
            "goal-1",
            target_value=90,
            calculation_method="percentage_increasing",
            measurement_frequency="monthly",
            contribution_weight=40,
        ),
        make_indicator("ind-3", "goal-2", target_value=10, calculation_method="maintenance_decreasing"),
        make_indicator("ind-4", "goal-2", baseline_value=100, target_value=20, calculation_method="decreasing"),
    ]
    data_entries = [
        *make_entries("ind-1", 120, 80),
        *make_entries("ind-1", 500, status="draft"),
        *make_entries("ind-2", *([30] * 12)),
        *make_entries("ind-3", 5, 10),
        *make_entries("ind-4", 40, status="submitted"),
        *make_entries("ind-4", 40, status="rejected"),
    ]
    return {
        "objectives": objectives,
        "goals": goals,
        "indicators": indicators,
        "data_entries": data_entries,
    }


@pytest.fixture
def sample_plan_dict():
    """The sample plan as raw snapshot data (what a JSON/YAML file holds)."""
    return {
        "objectives": [{"id": "obj-1", "name": "Improve service quality"}],
        "goals": [
            {"id": "goal-1", "objective_id": "obj-1", "name": "Faster response"},
            {"id": "goal-2", "objective_id": "obj-1", "name": "Fewer complaints"},
        ],
        "indicators": [
            {
                "id": "ind-1",
                "goal_id": "goal-1",
                "baseline_value": 100,
                "target_value": 500,
                "calculation_method": "cumulative",
                "contribution_weight": 60,
            },
            {
                "id": "ind-2",
                "goal_id": "goal-1",
                "target_value": 90,
                "calculation_method": "percentage_increasing",
                "measurement_frequency": "monthly",
                "contribution_weight": 40,
            },
            {"id": "ind-3", "goal_id": "goal-2", "target_value": 10, "calculation_method": "maintenance_decreasing"},
            {"id": "ind-4", "goal_id": "goal-2", "baseline_value": 100, "target_value": 20, "calculation_method": "decreasing"},
        ],
        "data_entries": [
            {"indicator_id": "ind-1", "value": 120, "status": "approved"},
            {"indicator_id": "ind-1", "value": 80, "status": "approved"},
            {"indicator_id": "ind-1", "value": 500, "status": "draft"},
            *[{"indicator_id": "ind-2", "value": 30, "status": "approved"} for _ in range(12)],
            {"indicator_id": "ind-3", "value": 5, "status": "approved"},
            {"indicator_id": "ind-3", "value": 10, "status": "approved"},
            {"indicator_id": "ind-4", "value": 40, "status": "submitted"},
            {"indicator_id": "ind-4", "value": 40, "status": "rejected"},
        ],
    }


@pytest.fixture(autouse=True)
def _restore_logging():
    """ScorecardLogger rewires the root and package loggers; put them back after each test."""
    loggers = [logging.getLogger(), logging.getLogger("scorecard")]
    saved = [(lg, lg.handlers[:], lg.level, lg.propagate) for lg in loggers]
    yield
    for lg, handlers, level, propagate in saved:
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate
