"""
Terrain detection from GPS and elevation data.

Grade is elevation change over horizontal distance, in percent. Segments
steeper than +/-3% count as uphill/downhill, and cadence targets shift with
the terrain:
- Uphill: +5 to +8 SPM (shorter, quicker steps)
- Downhill: -3 to -5 SPM
- Flat: no change

Adjusted cadences are not clamped to a plausible range.
"""

import math
from typing import Dict, List, Optional, Sequence

from ..models.analysis import TerrainProfile, TerrainSegment, TerrainType
from ..models.telemetry import TelemetrySample
from .statistics import round_half_up

EARTH_RADIUS_M = 6371000.0

# Grade thresholds (percent)
UPHILL_GRADE = 3.0
DOWNHILL_GRADE = -3.0


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return great-circle distance in meters between two WGS84 points (haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def calculate_grade(elevation_change_m: float, distance_m: float) -> float:
    """Grade in percent; 0 for a zero-length gap."""
    if distance_m == 0:
        return 0.0
    return elevation_change_m / distance_m * 100


def classify_terrain(grade: float) -> TerrainType:
    """Classify a grade as uphill (> 3%), downhill (< -3%) or flat."""
    if grade > UPHILL_GRADE:
        return TerrainType.UPHILL
    if grade < DOWNHILL_GRADE:
        return TerrainType.DOWNHILL
    return TerrainType.FLAT


def calculate_cadence_offset(terrain: TerrainType, grade: float) -> float:
    """
    Cadence change in SPM for a terrain type.

    Uphill: min(8, 5 + 0.3 * |grade|)
    Downhill: -min(5, 3 + 0.2 * |grade|)
    Flat: 0
    """
    if terrain == TerrainType.UPHILL:
        return min(8.0, 5 + abs(grade) * 0.3)
    if terrain == TerrainType.DOWNHILL:
        return -min(5.0, 3 + abs(grade) * 0.2)
    return 0.0


def adjust_cadence_for_terrain(
    base_cadence: float,
    grade: float,
    terrain: Optional[TerrainType] = None,
) -> int:
    """
    Cadence target for running at a given grade.

    Args:
        base_cadence: Flat-ground target in SPM
        grade: Grade in percent
        terrain: Terrain type; classified from grade when omitted

    Returns:
        round(base + offset)
    """
    if terrain is None:
        terrain = classify_terrain(grade)
    return round_half_up(base_cadence + calculate_cadence_offset(terrain, grade))


def analyze_terrain_profile(samples: Sequence[TelemetrySample]) -> TerrainProfile:
    """
    Walk consecutive GPS/elevation points and summarize the terrain.

    Samples without a finite position and a finite elevation are skipped.
    With fewer than two usable points the route is reported as 100% flat.

    Returns:
        TerrainProfile with distance-based terrain percentages
    """
    points = [s for s in samples if s.has_valid_position and s.has_valid_elevation]
    if len(points) < 2:
        return TerrainProfile()

    elevation_gain = 0.0
    elevation_loss = 0.0
    terrain_distance: Dict[TerrainType, float] = {t: 0.0 for t in TerrainType}
    weighted_grade: Dict[TerrainType, float] = {t: 0.0 for t in TerrainType}
    segments: List[TerrainSegment] = []

    for prev, curr in zip(points, points[1:]):
        elevation_change = curr.elevation_m - prev.elevation_m
        distance = calculate_distance(
            prev.latitude_deg, prev.longitude_deg,
            curr.latitude_deg, curr.longitude_deg,
        )
        grade = calculate_grade(elevation_change, distance)
        terrain = classify_terrain(grade)

        terrain_distance[terrain] += distance
        weighted_grade[terrain] += grade * distance
        segments.append(TerrainSegment(
            distance_m=distance,
            elevation_change_m=elevation_change,
            grade=grade,
            terrain=terrain,
        ))

        if elevation_change > 0:
            elevation_gain += elevation_change
        elif elevation_change < 0:
            elevation_loss += abs(elevation_change)

    total_distance = sum(terrain_distance.values())
    if total_distance > 0:
        distribution = {
            t.value: terrain_distance[t] / total_distance * 100 for t in
            (TerrainType.FLAT, TerrainType.UPHILL, TerrainType.DOWNHILL)
        }
        avg_grade = sum(weighted_grade.values()) / total_distance
    else:
        distribution = {"flat": 100.0, "uphill": 0.0, "downhill": 0.0}
        avg_grade = 0.0

    def mean_grade(terrain: TerrainType) -> float:
        if terrain_distance[terrain] <= 0:
            return 0.0
        return weighted_grade[terrain] / terrain_distance[terrain]

    return TerrainProfile(
        total_elevation_gain_m=round_half_up(elevation_gain),
        total_elevation_loss_m=round_half_up(elevation_loss),
        avg_grade=avg_grade,
        total_distance_m=total_distance,
        distribution=distribution,
        segments=segments,
        avg_uphill_grade=mean_grade(TerrainType.UPHILL),
        avg_downhill_grade=mean_grade(TerrainType.DOWNHILL),
    )


def calculate_terrain_targets(base_cadence: float, profile: TerrainProfile) -> Dict[str, int]:
    """
    Terrain-specific cadence targets for a route.

    Uphill and downhill targets use the route's mean grade on that terrain,
    falling back to the +/-3% threshold when the route has none.
    """
    uphill_grade = profile.avg_uphill_grade or UPHILL_GRADE
    downhill_grade = profile.avg_downhill_grade or DOWNHILL_GRADE
    return {
        TerrainType.FLAT.value: adjust_cadence_for_terrain(base_cadence, 0.0, TerrainType.FLAT),
        TerrainType.UPHILL.value: adjust_cadence_for_terrain(
            base_cadence, uphill_grade, TerrainType.UPHILL
        ),
        TerrainType.DOWNHILL.value: adjust_cadence_for_terrain(
            base_cadence, downhill_grade, TerrainType.DOWNHILL
        ),
    }
