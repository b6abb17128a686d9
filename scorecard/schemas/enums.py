"""Closed enums for indicator configuration and data entry workflow.

Every enum has one canonical tag per meaning. Synonyms used by older
records (e.g. "cumulative" for "cumulative_increasing") are folded into the
canonical tag by the normalize helpers, which the snapshot models call at the
boundary so scoring code never sees an alias.
"""

from enum import Enum
from typing import Optional


class CalculationMethod(str, Enum):
    """Formula used to turn accumulated measurements into a percentage."""

    CUMULATIVE_INCREASING = "cumulative_increasing"
    CUMULATIVE_DECREASING = "cumulative_decreasing"
    PERCENTAGE_INCREASING = "percentage_increasing"
    PERCENTAGE_DECREASING = "percentage_decreasing"
    MAINTENANCE_INCREASING = "maintenance_increasing"
    MAINTENANCE_DECREASING = "maintenance_decreasing"

    @classmethod
    def normalize(cls, raw: Optional[str]) -> tuple["CalculationMethod", bool]:
        """Map a stored method name to its canonical member.

        Returns (method, recognized). Absent values resolve to the default
        formula and count as recognized; unknown names also resolve to the
        default formula but report recognized=False so callers can flag them.
        """
        if raw is None:
            return DEFAULT_CALCULATION_METHOD, True
        if isinstance(raw, cls):
            return raw, True
        key = str(raw).strip().lower()
        if not key:
            return DEFAULT_CALCULATION_METHOD, True
        method = CALCULATION_METHOD_ALIASES.get(key)
        if method is None:
            return DEFAULT_CALCULATION_METHOD, False
        return method, True


DEFAULT_CALCULATION_METHOD = CalculationMethod.CUMULATIVE_INCREASING

CALCULATION_METHOD_ALIASES: dict[str, CalculationMethod] = {
    **{m.value: m for m in CalculationMethod},
    "cumulative": CalculationMethod.CUMULATIVE_INCREASING,
    "increasing": CalculationMethod.CUMULATIVE_INCREASING,
    "decreasing": CalculationMethod.CUMULATIVE_DECREASING,
    "percentage": CalculationMethod.MAINTENANCE_INCREASING,
    "maintenance": CalculationMethod.MAINTENANCE_INCREASING,
}


class MeasurementFrequency(str, Enum):
    """How often an indicator is expected to be measured in a year."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi_annual"
    ANNUAL = "annual"

    @property
    def periods_per_year(self) -> int:
        """Number of measurement periods in one year."""
        return {
            "monthly": 12,
            "quarterly": 4,
            "semi_annual": 2,
            "annual": 1,
        }[self.value]

    @classmethod
    def normalize(cls, raw: Optional[str]) -> Optional["MeasurementFrequency"]:
        """Map a stored frequency label to its canonical member, or None if unknown."""
        if raw is None:
            return None
        if isinstance(raw, cls):
            return raw
        return MEASUREMENT_FREQUENCY_ALIASES.get(str(raw).strip().lower())


MEASUREMENT_FREQUENCY_ALIASES: dict[str, MeasurementFrequency] = {
    **{f.value: f for f in MeasurementFrequency},
    "semi-annual": MeasurementFrequency.SEMI_ANNUAL,
    "6-month": MeasurementFrequency.SEMI_ANNUAL,
    "3-month": MeasurementFrequency.QUARTERLY,
    "yearly": MeasurementFrequency.ANNUAL,
}


def periods_per_year(frequency: Optional[MeasurementFrequency]) -> int:
    """Periods per year for a frequency; absent frequencies count as annual."""
    if frequency is None:
        return 1
    return frequency.periods_per_year


class EntryStatus(str, Enum):
    """Approval workflow state of a data entry."""

    DRAFT = "draft"  # Not yet sent for review
    SUBMITTED = "submitted"  # Awaiting approval, already counts toward progress
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def counts_toward_progress(self) -> bool:
        return self in QUALIFYING_STATUSES


QUALIFYING_STATUSES = frozenset({EntryStatus.SUBMITTED, EntryStatus.APPROVED})


class ProgressBand(str, Enum):
    """Discrete performance classification of a score, best first."""

    EXCEPTIONAL = "exceptional"
    ON_TRACK = "on-track"
    NEAR_TARGET = "near-target"
    WATCH = "watch"
    AT_RISK = "at-risk"
    CRITICAL = "critical"
