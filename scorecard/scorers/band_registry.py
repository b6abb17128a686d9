"""Band Registry - score thresholds and display colours per progress band.

Loads band thresholds from config/progress_bands.yaml (directory overridable
with SCORECARD_CONFIG_DIR). Every band must appear exactly once, thresholds
must strictly descend in band order, and the lowest band starts at 0 so every
non-negative score lands somewhere.

Usage:
    from scorecard.scorers.band_registry import get_band_profiles

    for profile in get_band_profiles():
        print(profile.band, profile.min_score, profile.color)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from ..config import get_config_dir
from ..schemas import ProgressBand

logger = logging.getLogger(__name__)

BAND_CONFIG_FILE = "progress_bands.yaml"

# Best band first; thresholds are inclusive lower bounds
DEFAULT_BANDS: dict[ProgressBand, tuple[float, str]] = {
    ProgressBand.EXCEPTIONAL: (115, "purple"),
    ProgressBand.ON_TRACK: (85, "green"),
    ProgressBand.NEAR_TARGET: (70, "light-green"),
    ProgressBand.WATCH: (55, "yellow"),
    ProgressBand.AT_RISK: (45, "red"),
    ProgressBand.CRITICAL: (0, "amber"),
}


@dataclass(frozen=True)
class BandProfile:
    """Lower bound and display colour for one band."""

    band: ProgressBand
    min_score: float
    color: str


# Module-level cache
_registry_cache: Optional[list[BandProfile]] = None


def _get_config_path() -> Path:
    return get_config_dir() / BAND_CONFIG_FILE


def _build_default_profiles() -> list[BandProfile]:
    return [BandProfile(band, min_score, color) for band, (min_score, color) in DEFAULT_BANDS.items()]


def _load_registry() -> list[BandProfile]:
    """Load and cache band profiles from YAML."""
    global _registry_cache
    if _registry_cache is not None:
        return _registry_cache

    config_path = _get_config_path()
    if not config_path.exists():
        logger.warning(f"Progress band config not found at {config_path}, using defaults")
        _registry_cache = _build_default_profiles()
        return _registry_cache

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    profiles = _parse_profiles(raw.get("bands", {}))
    _validate_profiles(profiles)
    _registry_cache = profiles
    logger.info(f"Loaded {len(profiles)} progress bands from {config_path}")
    return _registry_cache


def _parse_profiles(bands: dict) -> list[BandProfile]:
    profiles = []
    for name, data in bands.items():
        try:
            band = ProgressBand(name)
        except ValueError:
            raise ValueError(f"Unknown progress band '{name}' in {BAND_CONFIG_FILE}") from None
        default_min, default_color = DEFAULT_BANDS[band]
        profiles.append(
            BandProfile(
                band=band,
                min_score=float(data.get("min_score", default_min)),
                color=str(data.get("color", default_color)),
            )
        )
    return profiles


def _validate_profiles(profiles: list[BandProfile]) -> None:
    """Validate that every band is present once and thresholds strictly descend."""
    seen = [p.band for p in profiles]
    missing = set(ProgressBand) - set(seen)
    if missing:
        raise ValueError(f"Progress band config missing bands: {sorted(b.value for b in missing)}")
    if len(seen) != len(set(seen)):
        raise ValueError("Progress band config lists a band more than once")

    ordered = sorted(profiles, key=lambda p: list(ProgressBand).index(p.band))
    if ordered != profiles:
        raise ValueError("Progress bands must be listed best first")
    for higher, lower in zip(profiles, profiles[1:]):
        if higher.min_score <= lower.min_score:
            raise ValueError(
                f"Band {higher.band.value} threshold {higher.min_score} must exceed "
                f"{lower.band.value} threshold {lower.min_score}"
            )
    if profiles[-1].min_score != 0:
        raise ValueError(f"Lowest band {profiles[-1].band.value} must start at 0")


def get_band_profiles() -> list[BandProfile]:
    """Band profiles, best band first."""
    return list(_load_registry())


def get_band_profile(band: ProgressBand) -> BandProfile:
    for profile in _load_registry():
        if profile.band == band:
            return profile
    raise KeyError(band)


def clear_cache():
    """Clear the registry cache (useful for testing)."""
    global _registry_cache
    _registry_cache = None
