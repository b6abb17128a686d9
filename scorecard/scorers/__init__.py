"""Deterministic scoring modules for indicators, goals and objectives."""

from .goal_aggregator import GoalAggregator, GoalScore
from .indicator_scorer import IndicatorScore, IndicatorScorer
from .objective_aggregator import ObjectiveAggregator, ObjectiveScore
from .progress_classifier import ProgressClassifier, classify
from .reporting_completeness import ReportingCompleteness, reporting_completeness
from .rounding import round_half_up

__all__ = [
    "IndicatorScorer",
    "IndicatorScore",
    "GoalAggregator",
    "GoalScore",
    "ObjectiveAggregator",
    "ObjectiveScore",
    "ProgressClassifier",
    "classify",
    "ReportingCompleteness",
    "reporting_completeness",
    "round_half_up",
]
