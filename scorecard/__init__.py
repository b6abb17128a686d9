"""Performance scoring engine for strategic plan indicators, goals and objectives.

All scoring operations are pure functions of the snapshot passed in: nothing
is fetched, cached or persisted here.
"""

from .schemas import DataEntry, Goal, Indicator, Objective, ProgressBand
from .scorers import GoalAggregator, IndicatorScorer, ObjectiveAggregator, ProgressClassifier
from .validators import ContributionWeightValidator, WeightValidation

__version__ = "1.0.0"

__all__ = [
    "DataEntry",
    "Goal",
    "Indicator",
    "Objective",
    "ProgressBand",
    "IndicatorScorer",
    "GoalAggregator",
    "ObjectiveAggregator",
    "ProgressClassifier",
    "ContributionWeightValidator",
    "WeightValidation",
]
