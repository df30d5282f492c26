"""Tests for the cadence analysis service."""

import pytest

from cadence_coach.exceptions import ErrorCode, TelemetryValidationError, ValidationError
from cadence_coach.models.analysis import RecommendationKind
from cadence_coach.models.profile import RunnerProfile
from cadence_coach.models.telemetry import TelemetrySample
from cadence_coach.services.analyzer import CadenceAnalyzer, load_profile, load_samples


@pytest.fixture
def analyzer():
    return CadenceAnalyzer()


@pytest.fixture
def hilly_run():
    """Ten samples at 1 Hz climbing then descending, camelCase keys as decoded from a device."""
    records = []
    for i in range(10):
        elevation = 100 + (i if i < 5 else 10 - i) * 5
        records.append({
            "timestampMs": i * 1000,
            "cadenceSpm": 175 if i % 5 else 160,
            "speedMps": 3.2,
            "heartRateBpm": 150 + i,
            "latitudeDeg": 41.39 + i * 0.0005,
            "longitudeDeg": 2.17,
            "elevationM": elevation,
        })
    return records


class TestLoading:
    """Tests for input validation."""

    def test_load_samples_camel_and_snake(self):
        samples = load_samples([
            {"timestampMs": 0, "cadenceSpm": 170},
            {"timestamp_ms": 1000, "cadence_spm": 172},
        ])
        assert [s.cadence_spm for s in samples] == [170, 172]

    def test_load_samples_passes_models_through(self):
        s = TelemetrySample(timestamp_ms=0)
        assert load_samples([s])[0] is s

    def test_load_samples_invalid_record(self):
        with pytest.raises(TelemetryValidationError) as exc_info:
            load_samples([{"timestampMs": 0}, {"cadenceSpm": 170}])
        err = exc_info.value
        assert err.code == ErrorCode.TELEMETRY_INVALID
        assert err.details["index"] == 1
        assert err.details["errors"]

    def test_load_profile_none(self):
        assert load_profile(None) is None

    def test_load_profile_dict(self):
        profile = load_profile({"heightCm": 175, "weightKg": 70, "ageYears": 30, "experienceLevel": "Advanced"})
        assert isinstance(profile, RunnerProfile)
        assert profile.experience_level == "advanced"

    def test_load_profile_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            load_profile({"heightCm": "tall"})
        assert exc_info.value.details["field"] == "profile"


class TestCadenceAnalyzer:
    """Tests for CadenceAnalyzer.analyze()."""

    def test_full_analysis(self, analyzer, hilly_run):
        profile = {"heightCm": 175, "weightKg": 70, "ageYears": 25, "experienceLevel": "moderate"}
        analysis = analyzer.analyze(hilly_run, profile)

        assert analysis.profile_used
        assert analysis.note is None
        assert analysis.summary.sample_count == 10
        assert analysis.summary.avg_cadence_spm == pytest.approx(172.0)
        assert analysis.zones.optimal == 80
        assert analysis.zones.low == 20
        assert analysis.terrain.total_elevation_gain_m == 25
        assert analysis.terrain.total_elevation_loss_m == 20
        assert analysis.terrain.distribution["uphill"] > 0
        assert analysis.terrain.distribution["downhill"] > 0
        assert analysis.targets.base_cadence == 168
        assert analysis.recommendations[0].kind == RecommendationKind.SUCCESS
        assert set(analysis.terrain_targets) == {"flat", "uphill", "downhill"}
        assert analysis.terrain_targets["flat"] == 168
        assert analysis.terrain_targets["uphill"] > 168 > analysis.terrain_targets["downhill"]

    def test_without_profile(self, analyzer, hilly_run):
        analysis = analyzer.analyze(hilly_run)
        assert not analysis.profile_used
        assert analysis.targets.is_default
        assert analysis.recommendations[0].title == "Create your runner profile"

    def test_no_cadence_data(self, analyzer):
        records = [{"timestampMs": i * 1000, "speedMps": 3.0} for i in range(5)]
        analysis = analyzer.analyze(records)
        assert analysis.note == "No cadence data in this run"
        assert analysis.zones.total_samples == 0
        assert analysis.zones.optimal == 0

    def test_empty_run(self, analyzer):
        analysis = analyzer.analyze([])
        assert analysis.summary.sample_count == 0
        assert analysis.terrain.distribution["flat"] == 100.0

    def test_non_finite_readings_are_dropout(self, analyzer, hilly_run):
        """Decoded JSON can carry NaN or Infinity; those readings are skipped."""
        hilly_run[3]["elevationM"] = float("nan")
        hilly_run[6]["elevationM"] = float("inf")
        hilly_run[7]["latitudeDeg"] = float("nan")
        analysis = analyzer.analyze(hilly_run)
        assert analysis.summary.sample_count == 10
        assert analysis.summary.elevation_samples == 8
        assert analysis.terrain.total_elevation_gain_m == 25

    def test_repeatable(self, analyzer, hilly_run):
        assert analyzer.analyze_to_dict(hilly_run) == analyzer.analyze_to_dict(hilly_run)

    def test_to_dict_shape(self, analyzer, hilly_run):
        d = analyzer.analyze_to_dict(hilly_run)
        assert set(d) == {
            "summary", "zones", "terrain", "targets",
            "recommendations", "terrain_targets", "profile_used", "note",
        }
        assert d["zones"]["optimal"] == 80
        assert d["recommendations"][0]["kind"] == "info"
