"""Running cadence analysis and real-time cadence metronome."""

from .models import (
    TelemetrySample,
    RunSummary,
    ExperienceLevel,
    RunnerProfile,
    PersonalizedTargets,
    CadenceZoneDistribution,
    TerrainType,
    TerrainSegment,
    TerrainProfile,
    RecommendationKind,
    Recommendation,
    RaceTarget,
    RunAnalysis,
    SchedulerState,
)
from .metrics import (
    average,
    standard_deviation,
    classify_cadence_zones,
    analyze_terrain_profile,
    adjust_cadence_for_terrain,
    calculate_personalized_targets,
    calculate_race_target,
    summarize_run,
)
from .recommendations import generate_recommendations
from .services import CadenceAnalyzer
from .metronome import CadenceScheduler, FeedbackSink, HapticSink, LogSink, ToneSink
from .exceptions import CadenceCoachError, InvalidTempoError, ValidationError

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Models
    "TelemetrySample",
    "RunSummary",
    "ExperienceLevel",
    "RunnerProfile",
    "PersonalizedTargets",
    "CadenceZoneDistribution",
    "TerrainType",
    "TerrainSegment",
    "TerrainProfile",
    "RecommendationKind",
    "Recommendation",
    "RaceTarget",
    "RunAnalysis",
    "SchedulerState",
    # Metrics
    "average",
    "standard_deviation",
    "classify_cadence_zones",
    "analyze_terrain_profile",
    "adjust_cadence_for_terrain",
    "calculate_personalized_targets",
    "calculate_race_target",
    "summarize_run",
    # Recommendations
    "generate_recommendations",
    # Services
    "CadenceAnalyzer",
    # Metronome
    "CadenceScheduler",
    "FeedbackSink",
    "HapticSink",
    "LogSink",
    "ToneSink",
    # Errors
    "CadenceCoachError",
    "InvalidTempoError",
    "ValidationError",
]
