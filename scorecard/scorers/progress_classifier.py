"""
Progress Classifier - maps any score to a discrete performance band.

Used the same way for indicator, goal and objective scores. Default bands:

    >= 115  exceptional
    >= 85   on-track
    >= 70   near-target
    >= 55   watch
    >= 45   at-risk
    else    critical
"""

from typing import Iterable, Optional, Sequence

from ..schemas import ProgressBand
from .band_registry import BandProfile, get_band_profiles


class ProgressClassifier:
    """Pure threshold lookup over band profiles (best band first)."""

    def __init__(self, profiles: Optional[Sequence[BandProfile]] = None):
        self.profiles = list(profiles) if profiles is not None else get_band_profiles()

    def profile(self, score: float) -> BandProfile:
        for candidate in self.profiles:
            if score >= candidate.min_score:
                return candidate
        # Negative scores fall below every threshold
        return self.profiles[-1]

    def classify(self, score: float) -> ProgressBand:
        return self.profile(score).band

    def color(self, score: float) -> str:
        """Display colour of the band the score falls in."""
        return self.profile(score).color

    def band_counts(self, scores: Iterable[float]) -> dict[ProgressBand, int]:
        """Number of scores in each band; every band is present, best first."""
        counts = {profile.band: 0 for profile in self.profiles}
        for score in scores:
            counts[self.classify(score)] += 1
        return counts


def classify(score: float) -> ProgressBand:
    """Classify a score with the configured band profiles."""
    return ProgressClassifier().classify(score)
