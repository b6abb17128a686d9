"""Validators for edits the host is about to persist."""

from .weight_validator import ContributionWeightValidator, WeightValidation

__all__ = ["ContributionWeightValidator", "WeightValidation"]
