"""Tests for terrain detection and terrain cadence adjustment."""

import pytest

from cadence_coach.metrics.terrain import (
    adjust_cadence_for_terrain,
    analyze_terrain_profile,
    calculate_cadence_offset,
    calculate_distance,
    calculate_grade,
    calculate_terrain_targets,
    classify_terrain,
)
from cadence_coach.models.analysis import TerrainProfile, TerrainType
from cadence_coach.models.telemetry import TelemetrySample

# 0.001 degree of latitude in meters
LAT_STEP_M = 111.19


def point(i, lat, elevation, lon=0.0):
    return TelemetrySample(
        timestamp_ms=i * 1000,
        latitude_deg=lat,
        longitude_deg=lon,
        elevation_m=elevation,
    )


class TestDistanceAndGrade:
    """Tests for haversine distance and grade."""

    def test_same_point_is_zero(self):
        assert calculate_distance(41.39, 2.17, 41.39, 2.17) == 0.0

    def test_one_degree_latitude(self):
        assert calculate_distance(0, 0, 1, 0) == pytest.approx(111195, rel=1e-3)

    def test_symmetric(self):
        a = calculate_distance(41.39, 2.17, 41.40, 2.18)
        b = calculate_distance(41.40, 2.18, 41.39, 2.17)
        assert a == pytest.approx(b)

    def test_grade(self):
        assert calculate_grade(5, 100) == 5.0
        assert calculate_grade(-10, 200) == -5.0

    def test_zero_distance_grade_is_zero(self):
        assert calculate_grade(10, 0) == 0.0


class TestClassifyTerrain:
    """Thresholds are exclusive: exactly +/-3% is flat."""

    @pytest.mark.parametrize("grade,terrain", [
        (0, TerrainType.FLAT),
        (3.0, TerrainType.FLAT),
        (3.1, TerrainType.UPHILL),
        (-3.0, TerrainType.FLAT),
        (-3.1, TerrainType.DOWNHILL),
        (15, TerrainType.UPHILL),
    ])
    def test_classify(self, grade, terrain):
        assert classify_terrain(grade) == terrain


class TestCadenceAdjustment:
    """Tests for terrain cadence offsets."""

    def test_uphill_offset(self):
        assert calculate_cadence_offset(TerrainType.UPHILL, 5) == pytest.approx(6.5)

    def test_uphill_offset_capped(self):
        assert calculate_cadence_offset(TerrainType.UPHILL, 20) == 8.0

    def test_downhill_offset(self):
        assert calculate_cadence_offset(TerrainType.DOWNHILL, -5) == pytest.approx(-4.0)

    def test_downhill_offset_capped(self):
        assert calculate_cadence_offset(TerrainType.DOWNHILL, -20) == -5.0

    def test_flat_offset(self):
        assert calculate_cadence_offset(TerrainType.FLAT, 2) == 0.0

    def test_adjust_uphill_rounds_half_up(self):
        # 170 + 6.5 = 176.5
        assert adjust_cadence_for_terrain(170, 5) == 177

    def test_adjust_downhill(self):
        assert adjust_cadence_for_terrain(170, -5) == 166

    def test_adjust_flat(self):
        assert adjust_cadence_for_terrain(170, 0) == 170

    def test_explicit_terrain_overrides_classification(self):
        assert adjust_cadence_for_terrain(170, 2, TerrainType.UPHILL) == 176

    def test_not_clamped(self):
        assert adjust_cadence_for_terrain(250, 10) == 258


class TestAnalyzeTerrainProfile:
    """Tests for analyze_terrain_profile()."""

    def test_too_few_points_is_flat(self):
        profile = analyze_terrain_profile([point(0, 0.0, 100)])
        assert profile == TerrainProfile()
        assert profile.distribution == {"flat": 100.0, "uphill": 0.0, "downhill": 0.0}

    def test_empty(self):
        profile = analyze_terrain_profile([])
        assert profile.total_elevation_gain_m == 0
        assert profile.distribution["flat"] == 100.0

    def test_points_without_elevation_skipped(self):
        samples = [
            point(0, 0.0, 100),
            TelemetrySample(timestamp_ms=1000, latitude_deg=0.001, longitude_deg=0.0),
        ]
        assert analyze_terrain_profile(samples) == TerrainProfile()

    def test_up_flat_down(self):
        """Three equal segments: ~9% up, flat, ~9% down."""
        samples = [
            point(0, 0.000, 100),
            point(1, 0.001, 110),
            point(2, 0.002, 110),
            point(3, 0.003, 100),
        ]
        profile = analyze_terrain_profile(samples)

        assert profile.total_elevation_gain_m == 10
        assert profile.total_elevation_loss_m == 10
        assert profile.total_distance_m == pytest.approx(3 * LAT_STEP_M, rel=1e-3)
        assert profile.avg_grade == pytest.approx(0.0, abs=1e-9)
        for terrain in ("flat", "uphill", "downhill"):
            assert profile.distribution[terrain] == pytest.approx(100 / 3)
        assert profile.avg_uphill_grade == pytest.approx(10 / LAT_STEP_M * 100, rel=1e-3)
        assert profile.avg_downhill_grade == pytest.approx(-10 / LAT_STEP_M * 100, rel=1e-3)
        assert [s.terrain for s in profile.segments] == [
            TerrainType.UPHILL, TerrainType.FLAT, TerrainType.DOWNHILL,
        ]

    def test_distribution_sums_to_100(self):
        samples = [point(i, i * 0.001, 100 + (i % 3) * 4) for i in range(10)]
        profile = analyze_terrain_profile(samples)
        assert sum(profile.distribution.values()) == pytest.approx(100.0)

    def test_zero_distance_route_is_flat_but_counts_elevation(self):
        samples = [point(0, 0.0, 100), point(1, 0.0, 105)]
        profile = analyze_terrain_profile(samples)
        assert profile.total_elevation_gain_m == 5
        assert profile.total_distance_m == 0.0
        assert profile.distribution == {"flat": 100.0, "uphill": 0.0, "downhill": 0.0}
        assert profile.avg_grade == 0.0

    def test_to_dict_segments_optional(self):
        samples = [point(0, 0.0, 100), point(1, 0.001, 100)]
        profile = analyze_terrain_profile(samples)
        assert "segments" not in profile.to_dict()
        assert len(profile.to_dict(include_segments=True)["segments"]) == 1


class TestTerrainTargets:
    """Tests for calculate_terrain_targets()."""

    def test_threshold_fallback_without_hills(self):
        targets = calculate_terrain_targets(170, TerrainProfile())
        # uphill: 170 + 5 + 0.9; downhill: 170 - 3 - 0.6
        assert targets == {"flat": 170, "uphill": 176, "downhill": 166}

    def test_uses_route_grades(self):
        profile = TerrainProfile(avg_uphill_grade=10.0, avg_downhill_grade=-10.0)
        targets = calculate_terrain_targets(170, profile)
        assert targets == {"flat": 170, "uphill": 178, "downhill": 165}


class TestNonFiniteTerrainInput:
    """Points with non-finite readings are skipped."""

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_non_finite_elevation(self, bad):
        samples = [point(0, 0.000, 100), point(1, 0.001, bad), point(2, 0.002, 110)]
        profile = analyze_terrain_profile(samples)
        assert profile.total_elevation_gain_m == 10
        assert len(profile.segments) == 1
        assert profile.total_distance_m == pytest.approx(2 * LAT_STEP_M, rel=1e-3)

    def test_nan_latitude(self):
        samples = [point(0, 0.000, 100), point(1, float("nan"), 105), point(2, 0.001, 100)]
        profile = analyze_terrain_profile(samples)
        assert profile.total_elevation_gain_m == 0
        assert len(profile.segments) == 1
        assert profile.distribution["flat"] == pytest.approx(100.0)

    def test_only_non_finite_points_is_flat(self):
        samples = [point(0, 0.0, float("nan")), point(1, 0.001, float("inf"))]
        assert analyze_terrain_profile(samples) == TerrainProfile()
