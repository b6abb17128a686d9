"""
Goal Aggregator - rolls indicator scores up into one goal score.

Two modes, chosen per goal from its indicators' contribution weights:

- unweighted: no indicator has a positive weight, so the goal score is the
  rounded mean of every indicator score (over-achievement included).
- weighted: only indicators with a positive weight count. Each score is
  capped at 100 and contributes score * weight / 100. Weights are not
  renormalized, so an allocation totalling less than 100 yields a partial
  goal score.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..schemas import DataEntry, Indicator
from ..utils.scoring_audit import ScoringAuditLog, record_if
from .indicator_scorer import IndicatorScore, IndicatorScorer
from .rounding import round_half_up

MODE_EMPTY = "empty"
MODE_UNWEIGHTED = "unweighted"
MODE_WEIGHTED = "weighted"

# An indicator's over-achievement cannot push the goal past its allotted share
CONTRIBUTION_CAP = 100


@dataclass(frozen=True)
class GoalScore:
    """Score for one goal with the indicator scores it was built from."""

    goal_id: str
    score: int
    mode: str
    indicator_scores: list[IndicatorScore] = field(default_factory=list)
    excluded_indicator_ids: list[str] = field(default_factory=list)
    weight_total: float = 0.0


class GoalAggregator:
    """Combines a goal's indicator scores into a goal-level score."""

    name = "GoalAggregator"

    def __init__(
        self,
        indicator_scorer: Optional[IndicatorScorer] = None,
        audit_log: Optional[ScoringAuditLog] = None,
    ):
        self.indicator_scorer = indicator_scorer or IndicatorScorer(audit_log=audit_log)
        self.audit_log = audit_log

    def score(self, goal_id: str, indicators: Iterable[Indicator], data_entries: Iterable[DataEntry]) -> int:
        """Integer goal score (>= 0)."""
        return self.score_detail(goal_id, indicators, data_entries).score

    def score_detail(
        self, goal_id: str, indicators: Iterable[Indicator], data_entries: Iterable[DataEntry]
    ) -> GoalScore:
        """Score a goal and report the aggregation mode used."""
        goal_indicators = [i for i in indicators if i.goal_id == goal_id]
        if not goal_indicators:
            return GoalScore(goal_id=goal_id, score=0, mode=MODE_EMPTY)

        entries = list(data_entries)
        weighted = [i for i in goal_indicators if i.weight.is_positive]

        if not weighted:
            scores = [self.indicator_scorer.score_detail(i, entries) for i in goal_indicators]
            mean = sum(s.score for s in scores) / len(scores)
            return GoalScore(
                goal_id=goal_id,
                score=round_half_up(mean),
                mode=MODE_UNWEIGHTED,
                indicator_scores=scores,
            )

        excluded = [i.id for i in goal_indicators if not i.weight.is_positive]
        if excluded:
            record_if(
                self.audit_log,
                goal_id,
                self.name,
                "unweighted_indicators_excluded",
                f"{len(excluded)} indicator(s) without a weight do not count toward the goal score",
                indicator_ids=excluded,
            )

        scores = []
        total = 0.0
        weight_total = 0.0
        for indicator in weighted:
            indicator_score = self.indicator_scorer.score_detail(indicator, entries)
            scores.append(indicator_score)
            share = indicator.weight.share
            weight_total += share
            total += min(indicator_score.score, CONTRIBUTION_CAP) * share / 100

        return GoalScore(
            goal_id=goal_id,
            score=round_half_up(total),
            mode=MODE_WEIGHTED,
            indicator_scores=scores,
            excluded_indicator_ids=excluded,
            weight_total=weight_total,
        )
