"""Cadence, terrain and pacing calculations."""

from .statistics import average, filter_valid, round_half_up, standard_deviation
from .zones import (
    CADENCE_ZONES,
    classify_cadence_zones,
    get_zone_for_cadence,
    get_zone_label,
)
from .terrain import (
    EARTH_RADIUS_M,
    adjust_cadence_for_terrain,
    analyze_terrain_profile,
    calculate_cadence_offset,
    calculate_distance,
    calculate_grade,
    calculate_terrain_targets,
    classify_terrain,
)
from .targets import (
    BASE_CADENCE,
    DEFAULT_TARGETS,
    calculate_age_adjustment,
    calculate_bmi_adjustment,
    calculate_experience_adjustment,
    calculate_height_adjustment,
    calculate_personalized_targets,
)
from .pacing import (
    RaceDistance,
    calculate_optimal_cadence,
    calculate_race_target,
    calculate_stride_length,
    format_finish_time,
    format_pace,
    mps_to_pace,
    pace_to_speed,
    parse_time_to_minutes,
    speed_to_pace,
)
from .summary import summarize_run
from ..models.profile import calculate_bmi

__all__ = [
    # Statistics
    "average",
    "filter_valid",
    "round_half_up",
    "standard_deviation",
    # Zones
    "CADENCE_ZONES",
    "classify_cadence_zones",
    "get_zone_for_cadence",
    "get_zone_label",
    # Terrain
    "EARTH_RADIUS_M",
    "adjust_cadence_for_terrain",
    "analyze_terrain_profile",
    "calculate_cadence_offset",
    "calculate_distance",
    "calculate_grade",
    "calculate_terrain_targets",
    "classify_terrain",
    # Targets
    "BASE_CADENCE",
    "DEFAULT_TARGETS",
    "calculate_age_adjustment",
    "calculate_bmi",
    "calculate_bmi_adjustment",
    "calculate_experience_adjustment",
    "calculate_height_adjustment",
    "calculate_personalized_targets",
    # Pacing
    "RaceDistance",
    "calculate_optimal_cadence",
    "calculate_race_target",
    "calculate_stride_length",
    "format_finish_time",
    "format_pace",
    "mps_to_pace",
    "pace_to_speed",
    "parse_time_to_minutes",
    "speed_to_pace",
    # Summary
    "summarize_run",
]
