"""Objective Aggregator - unweighted mean of an objective's goal scores."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..schemas import DataEntry, Goal, Indicator
from .goal_aggregator import GoalAggregator, GoalScore
from .rounding import round_half_up


@dataclass(frozen=True)
class ObjectiveScore:
    objective_id: str
    score: int
    goal_scores: list[GoalScore] = field(default_factory=list)


class ObjectiveAggregator:
    """Combines an objective's goal scores; goals carry no weights."""

    def __init__(self, goal_aggregator: Optional[GoalAggregator] = None):
        self.goal_aggregator = goal_aggregator or GoalAggregator()

    def score(
        self,
        objective_id: str,
        goals: Iterable[Goal],
        indicators: Iterable[Indicator],
        data_entries: Iterable[DataEntry],
    ) -> int:
        return self.score_detail(objective_id, goals, indicators, data_entries).score

    def score_detail(
        self,
        objective_id: str,
        goals: Iterable[Goal],
        indicators: Iterable[Indicator],
        data_entries: Iterable[DataEntry],
    ) -> ObjectiveScore:
        objective_goals = [g for g in goals if g.objective_id == objective_id]
        if not objective_goals:
            return ObjectiveScore(objective_id=objective_id, score=0)

        indicators = list(indicators)
        entries = list(data_entries)
        goal_scores = [self.goal_aggregator.score_detail(g.id, indicators, entries) for g in objective_goals]
        mean = sum(g.score for g in goal_scores) / len(goal_scores)
        return ObjectiveScore(objective_id=objective_id, score=round_half_up(mean), goal_scores=goal_scores)
