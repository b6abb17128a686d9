"""Snapshot records consumed by the scoring engine.

The host's persistence layer owns these records; the engine only reads the
snapshots handed to it. All models are frozen so a snapshot cannot be mutated
while it is being scored.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import CalculationMethod, EntryStatus, MeasurementFrequency, periods_per_year

logger = logging.getLogger(__name__)

_SNAPSHOT_CONFIG = ConfigDict(frozen=True, coerce_numbers_to_str=True, extra="ignore", allow_inf_nan=False)


# =============================================================================
# Contribution weight (sum type)
# =============================================================================


@dataclass(frozen=True)
class Unassigned:
    """No share of the goal has been declared for this indicator yet."""

    @property
    def is_positive(self) -> bool:
        return False

    @property
    def share(self) -> float:
        return 0.0


@dataclass(frozen=True)
class Assigned:
    """An explicitly declared share (0-100) of the goal's score.

    Assigned(0) is a real value, distinct from Unassigned, but like
    Unassigned it never contributes to a weighted goal score.
    """

    value: float

    @property
    def is_positive(self) -> bool:
        return self.value > 0

    @property
    def share(self) -> float:
        return self.value


ContributionWeight = Union[Unassigned, Assigned]

UNASSIGNED = Unassigned()


def to_contribution_weight(raw: Optional[float]) -> ContributionWeight:
    """Wrap a nullable stored weight in the sum type."""
    if raw is None:
        return UNASSIGNED
    return Assigned(float(raw))


# =============================================================================
# Records
# =============================================================================


class Indicator(BaseModel):
    """A single measurable metric with a baseline, a target and a formula."""

    model_config = _SNAPSHOT_CONFIG

    id: str
    goal_id: str
    name: Optional[str] = None
    baseline_value: Optional[float] = Field(None, description="Starting reference point; 0 when absent")
    target_value: Optional[float] = Field(None, description="Organization-level target")
    yearly_target: Optional[float] = Field(
        None, description="Target already resolved by the host for the year being scored"
    )
    calculation_method: CalculationMethod = CalculationMethod.CUMULATIVE_INCREASING
    calculation_method_fallback: bool = Field(
        False, description="True when the stored method name was not recognized"
    )
    measurement_frequency: Optional[MeasurementFrequency] = None
    contribution_weight: Optional[float] = Field(None, description="Declared share (0-100) of the goal")

    @model_validator(mode="before")
    @classmethod
    def _normalize_calculation_method(cls, data: Any) -> Any:
        """Fold method aliases into canonical tags; unknown names fall back to the default formula."""
        if not isinstance(data, dict):
            return data
        raw = data.get("calculation_method")
        method, recognized = CalculationMethod.normalize(raw)
        data = dict(data)
        data["calculation_method"] = method
        if not recognized:
            logger.warning(
                f"Unrecognized calculation_method '{raw}' on indicator {data.get('id')}, "
                f"scoring with {method.value}"
            )
            data["calculation_method_fallback"] = True
        return data

    @field_validator("measurement_frequency", mode="before")
    @classmethod
    def _normalize_frequency(cls, v: Any) -> Optional[MeasurementFrequency]:
        """Unknown frequency labels are treated as absent (annual)."""
        return MeasurementFrequency.normalize(v)

    @property
    def weight(self) -> ContributionWeight:
        return to_contribution_weight(self.contribution_weight)

    @property
    def effective_target(self) -> Optional[float]:
        """yearly_target when present, otherwise target_value."""
        if self.yearly_target is not None:
            return self.yearly_target
        return self.target_value

    @property
    def periods_per_year(self) -> int:
        return periods_per_year(self.measurement_frequency)


class DataEntry(BaseModel):
    """One periodic measurement submitted against an indicator."""

    model_config = _SNAPSHOT_CONFIG

    indicator_id: str
    value: float
    status: EntryStatus
    period: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _lowercase_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def counts_toward_progress(self) -> bool:
        return self.status.counts_toward_progress


class Goal(BaseModel):
    """A grouping of indicators representing one strategic aim."""

    model_config = _SNAPSHOT_CONFIG

    id: str
    objective_id: str
    name: Optional[str] = None


class Objective(BaseModel):
    """A grouping of goals, one level above Goal in the plan hierarchy."""

    model_config = _SNAPSHOT_CONFIG

    id: str
    name: Optional[str] = None
