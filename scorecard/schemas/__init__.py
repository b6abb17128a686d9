"""Snapshot schemas - records and closed enums consumed by the scorers."""

from .enums import (
    CALCULATION_METHOD_ALIASES,
    QUALIFYING_STATUSES,
    CalculationMethod,
    EntryStatus,
    MeasurementFrequency,
    ProgressBand,
    periods_per_year,
)
from .records import (
    UNASSIGNED,
    Assigned,
    ContributionWeight,
    DataEntry,
    Goal,
    Indicator,
    Objective,
    Unassigned,
    to_contribution_weight,
)

__all__ = [
    "CALCULATION_METHOD_ALIASES",
    "QUALIFYING_STATUSES",
    "CalculationMethod",
    "EntryStatus",
    "MeasurementFrequency",
    "ProgressBand",
    "periods_per_year",
    "UNASSIGNED",
    "Assigned",
    "ContributionWeight",
    "DataEntry",
    "Goal",
    "Indicator",
    "Objective",
    "Unassigned",
    "to_contribution_weight",
]
