"""Value structures produced by run analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .profile import PersonalizedTargets
from .telemetry import RunSummary


@dataclass(frozen=True)
class CadenceZoneDistribution:
    """
    Share of a run spent in each cadence zone, in whole percent.

    The five zone percentages are rounded independently and may not sum to
    exactly 100. `optimal` and `sub_optimal` are rounded once from the
    unrounded optimal fraction, so they always sum to 100 for a non-empty run.
    """

    very_low: int = 0      # < 160
    low: int = 0           # 160-169
    optimal_zone: int = 0  # 170-180 inclusive
    high: int = 0          # 181-190
    very_high: int = 0     # > 190
    optimal: int = 0
    sub_optimal: int = 0
    total_samples: int = 0

    def zones(self) -> Dict[str, int]:
        """Zone percentages keyed by zone name."""
        return {
            "very_low": self.very_low,
            "low": self.low,
            "optimal": self.optimal_zone,
            "high": self.high,
            "very_high": self.very_high,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "zones": self.zones(),
            "optimal": self.optimal,
            "sub_optimal": self.sub_optimal,
            "total_samples": self.total_samples,
        }


class TerrainType(str, Enum):
    """Terrain classification from grade."""
    UPHILL = "uphill"
    DOWNHILL = "downhill"
    FLAT = "flat"


@dataclass(frozen=True)
class TerrainSegment:
    """The gap between two consecutive GPS/elevation points."""

    distance_m: float
    elevation_change_m: float
    grade: float  # percent
    terrain: TerrainType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distance_m": round(self.distance_m, 1),
            "elevation_change_m": round(self.elevation_change_m, 1),
            "grade": round(self.grade, 2),
            "terrain": self.terrain.value,
        }


def _flat_distribution() -> Dict[str, float]:
    return {
        TerrainType.FLAT.value: 100.0,
        TerrainType.UPHILL.value: 0.0,
        TerrainType.DOWNHILL.value: 0.0,
    }


@dataclass(frozen=True)
class TerrainProfile:
    """Elevation and terrain breakdown of a route.

    `distribution` holds percent of traversed distance per terrain type.
    """

    total_elevation_gain_m: int = 0
    total_elevation_loss_m: int = 0
    avg_grade: float = 0.0
    total_distance_m: float = 0.0
    distribution: Dict[str, float] = field(default_factory=_flat_distribution)
    segments: List[TerrainSegment] = field(default_factory=list)
    avg_uphill_grade: float = 0.0
    avg_downhill_grade: float = 0.0

    def to_dict(self, include_segments: bool = False) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {
            "total_elevation_gain_m": self.total_elevation_gain_m,
            "total_elevation_loss_m": self.total_elevation_loss_m,
            "avg_grade": round(self.avg_grade, 2),
            "total_distance_m": round(self.total_distance_m, 1),
            "terrain_distribution": {k: round(v, 1) for k, v in self.distribution.items()},
            "avg_uphill_grade": round(self.avg_uphill_grade, 2),
            "avg_downhill_grade": round(self.avg_downhill_grade, 2),
        }
        if include_segments:
            result["segments"] = [s.to_dict() for s in self.segments]
        return result


class RecommendationKind(str, Enum):
    """Tone of a recommendation entry."""
    SUCCESS = "success"
    IMPROVEMENT = "improvement"
    CAUTION = "caution"
    INFO = "info"


@dataclass(frozen=True)
class Recommendation:
    """A single piece of guidance shown to the runner."""

    kind: RecommendationKind
    title: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "title": self.title, "message": self.message}


@dataclass(frozen=True)
class RaceTarget:
    """Cadence and pace plan for a race goal."""

    distance_km: float
    distance_name: str
    target_time_s: int
    pace_min_per_km: float
    pace_formatted: str
    optimal_cadence: int
    stride_length_m: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distance_km": self.distance_km,
            "distance_name": self.distance_name,
            "target_time_s": self.target_time_s,
            "pace_min_per_km": round(self.pace_min_per_km, 2),
            "pace_formatted": self.pace_formatted,
            "optimal_cadence": self.optimal_cadence,
            "stride_length_m": round(self.stride_length_m, 2),
        }


@dataclass(frozen=True)
class RunAnalysis:
    """Everything computed for one run."""

    summary: RunSummary
    zones: CadenceZoneDistribution
    terrain: TerrainProfile
    targets: PersonalizedTargets
    recommendations: List[Recommendation] = field(default_factory=list)
    terrain_targets: Dict[str, int] = field(default_factory=dict)
    profile_used: bool = False
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "summary": self.summary.to_dict(),
            "zones": self.zones.to_dict(),
            "terrain": self.terrain.to_dict(),
            "targets": self.targets.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "terrain_targets": dict(self.terrain_targets),
            "profile_used": self.profile_used,
            "note": self.note,
        }
