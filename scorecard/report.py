"""
Scorecard report - nested objective/goal/indicator scores for one snapshot.

Builds the structure a summary view renders: every objective with its goals,
every goal with its indicators, each level carrying its score, band and
band colour. Goals also carry their aggregation mode, a check of their
current weight allocation and how many of their indicators fall in each band;
indicators carry their current value and reporting completeness.
"""

from typing import Optional

from .schemas import Assigned, Goal, Indicator, Objective
from .scorers import (
    GoalAggregator,
    GoalScore,
    IndicatorScore,
    IndicatorScorer,
    ObjectiveAggregator,
    ProgressClassifier,
    reporting_completeness,
)
from .scorers.indicator_scorer import REASON_NO_TARGET
from .snapshot import Snapshot
from .utils.scoring_audit import ScoringAuditLog
from .validators import ContributionWeightValidator


class ReportBuilder:
    """Scores a snapshot top-down and assembles the report dictionary."""

    def __init__(
        self,
        classifier: Optional[ProgressClassifier] = None,
        audit_log: Optional[ScoringAuditLog] = None,
    ):
        self.classifier = classifier or ProgressClassifier()
        self.indicator_scorer = IndicatorScorer(audit_log=audit_log)
        self.goal_aggregator = GoalAggregator(self.indicator_scorer, audit_log=audit_log)
        self.objective_aggregator = ObjectiveAggregator(self.goal_aggregator)
        self.weight_validator = ContributionWeightValidator()

    def build(self, snapshot: Snapshot, objective_id: Optional[str] = None) -> dict:
        """Build the report, optionally limited to one objective."""
        objectives = snapshot.objectives
        if objective_id is not None:
            objectives = [o for o in objectives if o.id == objective_id]
        return {
            "objectives": [self._objective(o, snapshot) for o in objectives],
        }

    def _banded(self, score: int) -> dict:
        profile = self.classifier.profile(score)
        return {"score": score, "band": profile.band.value, "color": profile.color}

    def _objective(self, objective: Objective, snapshot: Snapshot) -> dict:
        result = self.objective_aggregator.score_detail(
            objective.id, snapshot.goals, snapshot.indicators, snapshot.data_entries
        )
        goals = {g.id: g for g in snapshot.goals}
        return {
            "id": objective.id,
            "name": objective.name,
            **self._banded(result.score),
            "goals": [self._goal(goals[gs.goal_id], gs, snapshot) for gs in result.goal_scores],
        }

    def _goal(self, goal: Goal, goal_score: GoalScore, snapshot: Snapshot) -> dict:
        scored = {s.indicator_id: s for s in goal_score.indicator_scores}
        goal_indicators = [i for i in snapshot.indicators if i.goal_id == goal.id]
        weight_check = self.weight_validator.validate(goal.id, goal_indicators)
        indicators = [self._indicator(i, scored.get(i.id), snapshot) for i in goal_indicators]
        # Indicators without a target are listed but not counted
        band_counts = self.classifier.band_counts(
            i["score"] for i in indicators if i["reason"] != REASON_NO_TARGET
        )
        return {
            "id": goal.id,
            "name": goal.name,
            **self._banded(goal_score.score),
            "mode": goal_score.mode,
            "excluded_indicator_ids": list(goal_score.excluded_indicator_ids),
            "weight_check": weight_check.to_dict(),
            "band_counts": {band.value: count for band, count in band_counts.items()},
            "indicators": indicators,
        }

    def _indicator(self, indicator: Indicator, indicator_score: Optional[IndicatorScore], snapshot: Snapshot) -> dict:
        if indicator_score is None:
            # Not part of the weighted goal score, still shown on its own
            indicator_score = self.indicator_scorer.score_detail(indicator, snapshot.data_entries)
        weight = indicator.weight
        return {
            "id": indicator.id,
            "name": indicator.name,
            **self._banded(indicator_score.score),
            "method": indicator_score.method.value,
            "method_fallback": indicator.calculation_method_fallback,
            "reason": indicator_score.reason,
            "target": indicator_score.target,
            "entries_counted": indicator_score.entries_counted,
            "current_value": indicator_score.current_value,
            "contribution_weight": weight.value if isinstance(weight, Assigned) else None,
            "completeness": reporting_completeness(indicator, snapshot.data_entries).to_dict(),
        }


def build_report(
    snapshot: Snapshot,
    objective_id: Optional[str] = None,
    classifier: Optional[ProgressClassifier] = None,
    audit_log: Optional[ScoringAuditLog] = None,
) -> dict:
    """Convenience wrapper around ReportBuilder.build."""
    return ReportBuilder(classifier=classifier, audit_log=audit_log).build(snapshot, objective_id)
