"""Tests for snapshot record models and their enums."""

import pytest
from pydantic import ValidationError
from scorecard.schemas import (
    Assigned,
    CalculationMethod,
    DataEntry,
    EntryStatus,
    Goal,
    Indicator,
    MeasurementFrequency,
    UNASSIGNED,
    Unassigned,
)


class TestCalculationMethod:
    def test_normalize_canonical(self):
        assert CalculationMethod.normalize("percentage_decreasing") == (CalculationMethod.PERCENTAGE_DECREASING, True)

    def test_normalize_is_case_insensitive(self):
        assert CalculationMethod.normalize("  Cumulative ") == (CalculationMethod.CUMULATIVE_INCREASING, True)

    @pytest.mark.parametrize("raw", [None, ""])
    def test_absent_is_recognized_default(self, raw):
        assert CalculationMethod.normalize(raw) == (CalculationMethod.CUMULATIVE_INCREASING, True)

    def test_unknown_is_unrecognized_default(self):
        assert CalculationMethod.normalize("exponential") == (CalculationMethod.CUMULATIVE_INCREASING, False)

    def test_indicator_flags_fallback(self):
        ind = Indicator(id="ind-1", goal_id="goal-1", calculation_method="exponential")
        assert ind.calculation_method_fallback is True

    def test_indicator_alias_is_not_a_fallback(self):
        ind = Indicator(id="ind-1", goal_id="goal-1", calculation_method="maintenance")
        assert ind.calculation_method == CalculationMethod.MAINTENANCE_INCREASING
        assert ind.calculation_method_fallback is False


class TestMeasurementFrequency:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("monthly", MeasurementFrequency.MONTHLY),
            ("3-month", MeasurementFrequency.QUARTERLY),
            ("semi-annual", MeasurementFrequency.SEMI_ANNUAL),
            ("6-month", MeasurementFrequency.SEMI_ANNUAL),
            ("Yearly", MeasurementFrequency.ANNUAL),
        ],
    )
    def test_aliases(self, raw, expected):
        assert MeasurementFrequency.normalize(raw) == expected

    @pytest.mark.parametrize(
        "frequency, periods",
        [("monthly", 12), ("quarterly", 4), ("semi_annual", 2), ("annual", 1), (None, 1), ("weekly", 1)],
    )
    def test_periods_per_year(self, frequency, periods):
        ind = Indicator(id="ind-1", goal_id="goal-1", measurement_frequency=frequency)
        assert ind.periods_per_year == periods


class TestContributionWeight:
    def test_absent_weight_is_unassigned(self):
        ind = Indicator(id="ind-1", goal_id="goal-1")
        assert ind.weight is UNASSIGNED
        assert isinstance(ind.weight, Unassigned)
        assert ind.weight.share == 0

    def test_zero_weight_is_assigned_but_not_positive(self):
        weight = Indicator(id="ind-1", goal_id="goal-1", contribution_weight=0).weight
        assert weight == Assigned(0.0)
        assert weight.is_positive is False

    def test_positive_weight(self):
        weight = Indicator(id="ind-1", goal_id="goal-1", contribution_weight=40).weight
        assert weight.is_positive is True
        assert weight.share == 40


class TestIndicator:
    def test_effective_target_prefers_yearly_target(self):
        ind = Indicator(id="ind-1", goal_id="goal-1", target_value=500, yearly_target=120)
        assert ind.effective_target == 120

    def test_effective_target_falls_back_to_target_value(self):
        ind = Indicator(id="ind-1", goal_id="goal-1", target_value=500)
        assert ind.effective_target == 500

    def test_numeric_ids_are_coerced_to_strings(self):
        ind = Indicator(id=7, goal_id=3)
        assert ind.id == "7"
        assert ind.goal_id == "3"

    def test_unknown_fields_are_ignored(self):
        ind = Indicator(id="ind-1", goal_id="goal-1", owner="ops team")
        assert not hasattr(ind, "owner")

    def test_frozen(self):
        ind = Indicator(id="ind-1", goal_id="goal-1")
        with pytest.raises(ValidationError):
            ind.target_value = 10

    def test_non_finite_target_rejected(self):
        with pytest.raises(ValidationError):
            Indicator(id="ind-1", goal_id="goal-1", target_value=float("inf"))

    def test_goal_requires_objective(self):
        with pytest.raises(ValidationError):
            Goal(id="goal-1")


class TestDataEntry:
    @pytest.mark.parametrize(
        "status, counts",
        [("approved", True), ("SUBMITTED", True), ("Draft", False), ("rejected", False)],
    )
    def test_status_counts_toward_progress(self, status, counts):
        entry = DataEntry(indicator_id="ind-1", value=5, status=status)
        assert entry.counts_toward_progress is counts

    def test_status_is_normalized(self):
        assert DataEntry(indicator_id="ind-1", value=5, status=" Approved ").status == EntryStatus.APPROVED

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_value_rejected(self, value):
        with pytest.raises(ValidationError):
            DataEntry(indicator_id="ind-1", value=value, status="approved")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            DataEntry(indicator_id="ind-1", value=5, status="pending")
