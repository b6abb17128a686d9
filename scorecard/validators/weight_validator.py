"""
Contribution weight validation for indicators sharing a goal.

Indicators under one goal declare what share (0-100) of the goal score they
carry. The shares of all indicators with a positive weight must not total
more than 100. This check runs when a weight is edited, before the host
writes it:

    result = ContributionWeightValidator().validate(goal_id, indicators, "ind-2", 50)
    if result.should_block:
        refuse_write(result.message)

The validator reports; it never raises and never persists anything.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..schemas import Indicator
from ..utils.scoring_audit import AuditSeverity, ScoringAuditLog, record_if

logger = logging.getLogger(__name__)

WEIGHT_BUDGET = 100

FIRST_INDICATOR_MESSAGE = "First indicator for this goal"


@dataclass(frozen=True)
class WeightValidation:
    """Outcome of checking a proposed weight against its siblings.

    Attributes:
        total: Sum of positive sibling weights plus the positive candidate weight
        is_complete: Weights are fully allocated (total == 100); not required for saving
        should_block: Weights exceed the budget; the caller must refuse the write
        message: Human-readable summary
        remaining: Budget left (negative when over budget)
        is_first_indicator: No sibling weights exist yet to compare against
    """

    total: float
    is_complete: bool
    should_block: bool
    message: str
    remaining: float
    is_first_indicator: bool = False

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "is_complete": self.is_complete,
            "should_block": self.should_block,
            "message": self.message,
            "remaining": self.remaining,
            "is_first_indicator": self.is_first_indicator,
        }


def _fmt(value: float) -> str:
    return f"{value:g}"


class ContributionWeightValidator:
    """Checks a candidate contribution weight against its goal's budget."""

    name = "ContributionWeightValidator"

    def __init__(self, audit_log: Optional[ScoringAuditLog] = None):
        self.audit_log = audit_log

    def validate(
        self,
        goal_id: str,
        indicators: Iterable[Indicator],
        editing_indicator_id: Optional[str] = None,
        candidate_weight: Optional[float] = None,
    ) -> WeightValidation:
        """Validate a candidate weight for one indicator of a goal.

        Args:
            goal_id: Goal whose weight budget is checked
            indicators: Indicators to consider; those of other goals are ignored
            editing_indicator_id: Indicator being edited (excluded from siblings), None for a new one
            candidate_weight: Proposed weight; None or <= 0 adds nothing

        Returns:
            WeightValidation with total, is_complete, should_block and message
        """
        siblings = [i for i in indicators if i.goal_id == goal_id and i.id != editing_indicator_id]
        weighted_siblings = [i for i in siblings if i.weight.is_positive]
        candidate_counts = candidate_weight is not None and candidate_weight > 0

        total = sum(i.weight.share for i in weighted_siblings)
        if candidate_counts:
            total += candidate_weight

        should_block = total > WEIGHT_BUDGET
        is_complete = total == WEIGHT_BUDGET
        remaining = WEIGHT_BUDGET - total
        has_comparison = bool(weighted_siblings) or (candidate_counts and bool(siblings))

        if should_block:
            message = f"Contribution weights total {_fmt(total)}% - exceeds 100% by {_fmt(-remaining)}%"
        elif not has_comparison:
            message = FIRST_INDICATOR_MESSAGE
        elif is_complete:
            message = f"Contribution weights total {_fmt(total)}%"
        else:
            message = f"Contribution weights total {_fmt(total)}% (remaining: {_fmt(remaining)}%)"

        if should_block:
            logger.warning(f"Weight budget exceeded for goal {goal_id}: {message}")
            record_if(
                self.audit_log,
                goal_id,
                self.name,
                "weights_over_budget",
                message,
                AuditSeverity.WARNING,
                editing_indicator_id=editing_indicator_id,
                candidate_weight=candidate_weight,
                total=total,
            )
        else:
            logger.debug(f"Weight check for goal {goal_id}: {message}")

        return WeightValidation(
            total=total,
            is_complete=is_complete,
            should_block=should_block,
            message=message,
            remaining=remaining,
            is_first_indicator=not has_comparison,
        )
