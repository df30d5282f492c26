"""Data models for telemetry input, runner profiles and analysis output."""

from .base import CamelModel, to_camel
from .telemetry import TelemetrySample, RunSummary
from .profile import ExperienceLevel, RunnerProfile, PersonalizedTargets
from .analysis import (
    CadenceZoneDistribution,
    TerrainType,
    TerrainSegment,
    TerrainProfile,
    RecommendationKind,
    Recommendation,
    RaceTarget,
    RunAnalysis,
)
from .metronome import SchedulerState

__all__ = [
    "CamelModel",
    "to_camel",
    # Telemetry
    "TelemetrySample",
    "RunSummary",
    # Profile
    "ExperienceLevel",
    "RunnerProfile",
    "PersonalizedTargets",
    # Analysis
    "CadenceZoneDistribution",
    "TerrainType",
    "TerrainSegment",
    "TerrainProfile",
    "RecommendationKind",
    "Recommendation",
    "RaceTarget",
    "RunAnalysis",
    # Metronome
    "SchedulerState",
]
