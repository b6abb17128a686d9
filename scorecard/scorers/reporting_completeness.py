"""
Reporting completeness - how many of a year's expected measurements are in.

An indicator measured monthly expects 12 entries a year, quarterly 4,
semi-annual 2 and annual 1. Only submitted or approved entries count as
reported; drafts and rejected entries do not.
"""

from dataclasses import dataclass
from typing import Iterable

from ..schemas import DataEntry, Indicator
from .indicator_scorer import qualifying_entries


@dataclass(frozen=True)
class ReportingCompleteness:
    indicator_id: str
    expected: int
    completed: int

    @property
    def ratio(self) -> float:
        """Completed share of expected entries, capped at 1.0."""
        return min(1.0, self.completed / self.expected)

    @property
    def is_complete(self) -> bool:
        return self.completed >= self.expected

    def to_dict(self) -> dict:
        return {
            "expected": self.expected,
            "completed": self.completed,
            "ratio": round(self.ratio, 4),
            "is_complete": self.is_complete,
        }


def reporting_completeness(indicator: Indicator, data_entries: Iterable[DataEntry]) -> ReportingCompleteness:
    """Count an indicator's reported entries against its measurement frequency."""
    return ReportingCompleteness(
        indicator_id=indicator.id,
        expected=indicator.periods_per_year,
        completed=len(qualifying_entries(indicator, data_entries)),
    )
