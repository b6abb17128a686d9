"""
Snapshot loading for command-line and batch use.

A snapshot is the read-only set of records the host hands to the engine for
one view. The file format mirrors the model fields:

    objectives:
      - {id: obj-1, name: Improve service quality}
    goals:
      - {id: goal-1, objective_id: obj-1}
    indicators:
      - id: ind-1
        goal_id: goal-1
        baseline_value: 100
        target_value: 500
        calculation_method: cumulative
        contribution_weight: 60
    data_entries:
      - {indicator_id: ind-1, value: 200, status: approved}

JSON (.json) and YAML (.yaml, .yml) files are accepted.
"""

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .schemas import DataEntry, Goal, Indicator, Objective

SUPPORTED_SUFFIXES = {".json", ".yaml", ".yml"}


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read or does not match the schema."""


class Snapshot(BaseModel):
    """Immutable bundle of everything needed to score one view."""

    model_config = ConfigDict(frozen=True)

    objectives: list[Objective] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    indicators: list[Indicator] = Field(default_factory=list)
    data_entries: list[DataEntry] = Field(default_factory=list)

    def find_goal(self, goal_id: str) -> Goal | None:
        return next((g for g in self.goals if g.id == goal_id), None)

    def find_objective(self, objective_id: str) -> Objective | None:
        return next((o for o in self.objectives if o.id == objective_id), None)


def load_snapshot(path: str | Path) -> Snapshot:
    """Read and validate a snapshot file.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Validated Snapshot

    Raises:
        SnapshotError: file missing, unsupported, unparsable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"Snapshot file not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise SnapshotError(f"Unsupported snapshot format '{suffix}' (expected .json, .yaml or .yml)")

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Could not parse {path}: {e}") from e
    except OSError as e:
        raise SnapshotError(f"Could not read {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SnapshotError(f"Snapshot root must be a mapping, got {type(raw).__name__}")

    try:
        return Snapshot.model_validate(raw)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot {path}: {e}") from e
