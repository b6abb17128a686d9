"""Tests for ProgressClassifier and the band registry."""

import pytest
import yaml
from scorecard.schemas import ProgressBand
from scorecard.scorers import ProgressClassifier, classify
from scorecard.scorers import band_registry
from scorecard.scorers.band_registry import BandProfile, DEFAULT_BANDS

# ─── Helpers ──────────────────────────────────────────────────────────────────


def _write_bands(config_dir, bands: dict):
    path = config_dir / band_registry.BAND_CONFIG_FILE
    with open(path, "w") as f:
        yaml.safe_dump({"bands": bands}, f, sort_keys=False)
    return path


def _default_band_dict() -> dict:
    return {band.value: {"min_score": min_score, "color": color} for band, (min_score, color) in DEFAULT_BANDS.items()}


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SCORECARD_CONFIG_DIR", str(tmp_path))
    band_registry.clear_cache()
    return tmp_path


class TestDefaultThresholds:
    """Shipped thresholds: 115 / 85 / 70 / 55 / 45."""

    @pytest.mark.parametrize(
        "score, band",
        [
            (200, ProgressBand.EXCEPTIONAL),
            (115, ProgressBand.EXCEPTIONAL),
            (114.9, ProgressBand.ON_TRACK),
            (85, ProgressBand.ON_TRACK),
            (84, ProgressBand.NEAR_TARGET),
            (70, ProgressBand.NEAR_TARGET),
            (69, ProgressBand.WATCH),
            (55, ProgressBand.WATCH),
            (54, ProgressBand.AT_RISK),
            (45, ProgressBand.AT_RISK),
            (44, ProgressBand.CRITICAL),
            (0, ProgressBand.CRITICAL),
        ],
    )
    def test_boundaries(self, score, band):
        assert classify(score) == band

    def test_negative_score_is_critical(self):
        assert classify(-10) == ProgressBand.CRITICAL

    def test_colors(self):
        classifier = ProgressClassifier()
        assert classifier.color(120) == "purple"
        assert classifier.color(90) == "green"
        assert classifier.color(75) == "light-green"
        assert classifier.color(60) == "yellow"
        assert classifier.color(50) == "red"
        assert classifier.color(10) == "amber"

    def test_shipped_config_matches_defaults(self):
        profiles = band_registry.get_band_profiles()
        assert [(p.band, p.min_score, p.color) for p in profiles] == [
            (band, min_score, color) for band, (min_score, color) in DEFAULT_BANDS.items()
        ]

    def test_monotonic(self):
        order = list(ProgressBand)
        ranks = [order.index(classify(score)) for score in range(-5, 200)]
        assert ranks == sorted(ranks, reverse=True)


class TestExplicitProfiles:
    def test_custom_profiles(self):
        profiles = [
            BandProfile(ProgressBand.EXCEPTIONAL, 150, "gold"),
            BandProfile(ProgressBand.ON_TRACK, 100, "green"),
            BandProfile(ProgressBand.NEAR_TARGET, 80, "green"),
            BandProfile(ProgressBand.WATCH, 60, "yellow"),
            BandProfile(ProgressBand.AT_RISK, 30, "red"),
            BandProfile(ProgressBand.CRITICAL, 0, "grey"),
        ]
        classifier = ProgressClassifier(profiles)
        assert classifier.classify(120) == ProgressBand.ON_TRACK
        assert classifier.color(160) == "gold"


class TestBandRegistry:
    """Loading band thresholds from YAML."""

    def test_override_thresholds(self, config_dir):
        bands = _default_band_dict()
        bands["on-track"]["min_score"] = 90
        _write_bands(config_dir, bands)
        assert classify(87) == ProgressBand.NEAR_TARGET
        assert classify(90) == ProgressBand.ON_TRACK

    def test_missing_keys_use_defaults(self, config_dir):
        _write_bands(config_dir, {band.value: {} for band in ProgressBand})
        assert band_registry.get_band_profile(ProgressBand.WATCH).min_score == 55
        assert band_registry.get_band_profile(ProgressBand.WATCH).color == "yellow"

    def test_missing_file_uses_defaults(self, config_dir):
        profiles = band_registry.get_band_profiles()
        assert [p.band for p in profiles] == list(ProgressBand)

    def test_cached_until_cleared(self, config_dir):
        _write_bands(config_dir, _default_band_dict())
        assert classify(85) == ProgressBand.ON_TRACK
        bands = _default_band_dict()
        bands["on-track"]["min_score"] = 95
        _write_bands(config_dir, bands)
        assert classify(85) == ProgressBand.ON_TRACK
        band_registry.clear_cache()
        assert classify(85) == ProgressBand.NEAR_TARGET

    def test_unknown_band_rejected(self, config_dir):
        bands = _default_band_dict()
        bands["stellar"] = {"min_score": 200, "color": "white"}
        _write_bands(config_dir, bands)
        with pytest.raises(ValueError, match="Unknown progress band"):
            band_registry.get_band_profiles()

    def test_missing_band_rejected(self, config_dir):
        bands = _default_band_dict()
        del bands["watch"]
        _write_bands(config_dir, bands)
        with pytest.raises(ValueError, match="missing bands"):
            band_registry.get_band_profiles()

    def test_non_descending_thresholds_rejected(self, config_dir):
        bands = _default_band_dict()
        bands["near-target"]["min_score"] = 90
        _write_bands(config_dir, bands)
        with pytest.raises(ValueError, match="must exceed"):
            band_registry.get_band_profiles()

    def test_wrong_order_rejected(self, config_dir):
        bands = _default_band_dict()
        reordered = {"on-track": bands.pop("on-track"), **bands}
        _write_bands(config_dir, reordered)
        with pytest.raises(ValueError, match="best first"):
            band_registry.get_band_profiles()

    def test_lowest_band_must_start_at_zero(self, config_dir):
        bands = _default_band_dict()
        bands["critical"]["min_score"] = 10
        _write_bands(config_dir, bands)
        with pytest.raises(ValueError, match="must start at 0"):
            band_registry.get_band_profiles()


class TestBandCounts:
    def test_every_band_present(self):
        counts = ProgressClassifier().band_counts([])
        assert list(counts) == list(ProgressBand)
        assert set(counts.values()) == {0}

    def test_counts_scores_per_band(self):
        counts = ProgressClassifier().band_counts([120, 90, 86, 50, 10, -4])
        assert counts[ProgressBand.EXCEPTIONAL] == 1
        assert counts[ProgressBand.ON_TRACK] == 2
        assert counts[ProgressBand.AT_RISK] == 1
        assert counts[ProgressBand.CRITICAL] == 2
        assert sum(counts.values()) == 6
