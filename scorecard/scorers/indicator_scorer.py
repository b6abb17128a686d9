"""
Indicator Scorer - achievement percentage for a single indicator.

Turns an indicator's submitted/approved period measurements into an integer
percentage of its target. The formula is chosen per indicator by its
calculation method:

    cumulative_increasing   S / (target - B) * 100
    cumulative_decreasing   -S / (target - B) * 100
    percentage_increasing   (S / periods) / target * 100
    percentage_decreasing   ((S / periods) - B) / (target - B) * 100
    maintenance_increasing  S / target * 100
    maintenance_decreasing  target / S * 100

where S is the sum of qualifying entry values, B the baseline (0 when absent)
and periods the number of measurement periods per year.

Degenerate inputs (no target, no qualifying entries, zero denominator, a
result too large to represent) score 0 and never raise. Results are floored
at 0 but not capped: values above 100 are over-achievement and must reach
the caller intact.
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..schemas import CalculationMethod, DataEntry, Indicator
from ..utils.scoring_audit import AuditSeverity, ScoringAuditLog, record_if
from .rounding import round_half_up

# Reason tags reported on IndicatorScore.reason
REASON_SCORED = "scored"
REASON_NO_TARGET = "no_target"
REASON_NO_ENTRIES = "no_entries"
REASON_ZERO_DENOMINATOR = "zero_denominator"
REASON_ZERO_SUM = "zero_sum"
REASON_NON_FINITE = "non_finite"


@dataclass(frozen=True)
class IndicatorScore:
    """Score for one indicator plus the inputs that produced it."""

    indicator_id: str
    score: int
    method: CalculationMethod
    target: Optional[float]
    entries_counted: int
    entries_sum: float
    current_value: float = 0.0
    reason: str = REASON_SCORED


@dataclass(frozen=True)
class _FormulaInputs:
    total: float
    target: float
    baseline: float
    periods: int


# Each formula returns the raw progress percentage, or a reason tag when the
# inputs are degenerate for that formula.
Formula = Callable[[_FormulaInputs], float | str]


def _cumulative_increasing(x: _FormulaInputs) -> float | str:
    denominator = x.target - x.baseline
    if denominator == 0:
        return REASON_ZERO_DENOMINATOR
    return x.total / denominator * 100


def _cumulative_decreasing(x: _FormulaInputs) -> float | str:
    # Baseline above target: denominator is negative, so a positive decrease
    # sum yields positive progress.
    denominator = x.target - x.baseline
    if denominator == 0:
        return REASON_ZERO_DENOMINATOR
    return -x.total / denominator * 100


def _percentage_increasing(x: _FormulaInputs) -> float | str:
    average = x.total / x.periods
    return average / x.target * 100


def _percentage_decreasing(x: _FormulaInputs) -> float | str:
    denominator = x.target - x.baseline
    if denominator == 0:
        return REASON_ZERO_DENOMINATOR
    average = x.total / x.periods
    return (average - x.baseline) / denominator * 100


def _maintenance_increasing(x: _FormulaInputs) -> float | str:
    return x.total / x.target * 100


def _maintenance_decreasing(x: _FormulaInputs) -> float | str:
    # Inverse ratio: fewer occurrences than target is over-achievement.
    if x.total == 0:
        return REASON_ZERO_SUM
    return x.target / x.total * 100


FORMULAS: dict[CalculationMethod, Formula] = {
    CalculationMethod.CUMULATIVE_INCREASING: _cumulative_increasing,
    CalculationMethod.CUMULATIVE_DECREASING: _cumulative_decreasing,
    CalculationMethod.PERCENTAGE_INCREASING: _percentage_increasing,
    CalculationMethod.PERCENTAGE_DECREASING: _percentage_decreasing,
    CalculationMethod.MAINTENANCE_INCREASING: _maintenance_increasing,
    CalculationMethod.MAINTENANCE_DECREASING: _maintenance_decreasing,
}


def current_value(method: CalculationMethod, baseline: float, total: float) -> float:
    """Value shown next to the score: where the measured quantity stands now.

    Cumulative methods move away from the baseline (B + S upwards, B - S
    downwards); percentage and maintenance methods report the entry sum.
    """
    if method == CalculationMethod.CUMULATIVE_INCREASING:
        return baseline + total
    if method == CalculationMethod.CUMULATIVE_DECREASING:
        return baseline - total
    return total


def qualifying_entries(indicator: Indicator, data_entries: Iterable[DataEntry]) -> list[DataEntry]:
    """Entries for this indicator whose status counts toward progress."""
    return [e for e in data_entries if e.indicator_id == indicator.id and e.counts_toward_progress]


class IndicatorScorer:
    """Computes one indicator's achievement percentage.

    Stateless apart from the optional audit log, which receives one entry for
    every degenerate case resolved to 0 and for every fallback formula.
    """

    name = "IndicatorScorer"

    def __init__(self, audit_log: Optional[ScoringAuditLog] = None):
        self.audit_log = audit_log

    def score(self, indicator: Indicator, data_entries: Iterable[DataEntry]) -> int:
        """Integer achievement percentage (>= 0, uncapped)."""
        return self.score_detail(indicator, data_entries).score

    def score_detail(self, indicator: Indicator, data_entries: Iterable[DataEntry]) -> IndicatorScore:
        """Score an indicator and report how the number was reached.

        Args:
            indicator: Indicator snapshot; yearly_target must already be resolved
            data_entries: Entries for any indicators in any status; filtering is done here

        Returns:
            IndicatorScore with the score and the reason tag
        """
        method = indicator.calculation_method
        if indicator.calculation_method_fallback:
            record_if(
                self.audit_log,
                indicator.id,
                self.name,
                "fallback_method",
                f"Unrecognized calculation method, scored as {method.value}",
                AuditSeverity.WARNING,
            )

        entries = qualifying_entries(indicator, data_entries)
        total = sum(e.value for e in entries)
        baseline = indicator.baseline_value or 0.0
        current = current_value(method, baseline, total)

        target = indicator.effective_target
        if target is None or target == 0:
            record_if(self.audit_log, indicator.id, self.name, REASON_NO_TARGET, "No target set, score is 0")
            return self._zero(indicator, method, target, entries, total, current, REASON_NO_TARGET)

        if not entries:
            record_if(
                self.audit_log, indicator.id, self.name, REASON_NO_ENTRIES, "No submitted or approved entries"
            )
            return self._zero(indicator, method, target, entries, total, current, REASON_NO_ENTRIES)

        inputs = _FormulaInputs(
            total=total,
            target=target,
            baseline=baseline,
            periods=indicator.periods_per_year,
        )

        progress = FORMULAS[method](inputs)
        if isinstance(progress, str):
            record_if(
                self.audit_log,
                indicator.id,
                self.name,
                progress,
                f"{method.value} formula is undefined for these inputs, score is 0",
                AuditSeverity.WARNING,
                target=target,
                baseline=baseline,
                entries_sum=total,
            )
            return self._zero(indicator, method, target, entries, total, current, progress)

        if not math.isfinite(progress):
            record_if(
                self.audit_log,
                indicator.id,
                self.name,
                REASON_NON_FINITE,
                f"{method.value} formula overflowed for these inputs, score is 0",
                AuditSeverity.WARNING,
                target=target,
                baseline=baseline,
                entries_sum=total,
            )
            return self._zero(indicator, method, target, entries, total, current, REASON_NON_FINITE)

        return IndicatorScore(
            indicator_id=indicator.id,
            score=max(0, round_half_up(progress)),
            method=method,
            target=target,
            entries_counted=len(entries),
            entries_sum=total,
            current_value=current,
        )

    @staticmethod
    def _zero(indicator, method, target, entries, total, current, reason) -> IndicatorScore:
        return IndicatorScore(
            indicator_id=indicator.id,
            score=0,
            method=method,
            target=target,
            entries_counted=len(entries),
            entries_sum=total,
            current_value=current,
            reason=reason,
        )
