"""
Pace, speed and stride calculations, and race-day cadence targets.

Paces are in decimal minutes per kilometer, speeds in km/h unless the name
says otherwise.
"""

from enum import Enum
from typing import Optional, Union

from ..exceptions import ValidationError
from ..models.analysis import RaceTarget
from ..models.profile import ExperienceLevel, RunnerProfile
from .statistics import round_half_up

DEFAULT_HEIGHT_CM = 175.0

# Pace-based cadence table uses its own experience offsets
PACE_EXPERIENCE_ADJUSTMENTS = {
    ExperienceLevel.BEGINNER.value: -5,
    ExperienceLevel.MODERATE.value: 0,
    ExperienceLevel.ADVANCED.value: 3,
    ExperienceLevel.ELITE.value: 5,
}


class RaceDistance(Enum):
    """Common race distances with values in kilometers."""

    FIVE_K = 5.0
    TEN_K = 10.0
    HALF_MARATHON = 21.0975
    MARATHON = 42.195

    @classmethod
    def from_string(cls, s: str) -> Optional["RaceDistance"]:
        """Look up a distance by the names the CLI accepts, ignoring case and separators."""
        return _RACE_NAMES.get(s.lower().strip().replace("-", "_").replace(" ", "_"))

    @property
    def display_name(self) -> str:
        """Get human-readable name."""
        names = {
            RaceDistance.FIVE_K: "5K",
            RaceDistance.TEN_K: "10K",
            RaceDistance.HALF_MARATHON: "Half Marathon",
            RaceDistance.MARATHON: "Marathon",
        }
        return names[self]


_RACE_NAMES = {
    "5k": RaceDistance.FIVE_K,
    "10k": RaceDistance.TEN_K,
    "half": RaceDistance.HALF_MARATHON,
    "half_marathon": RaceDistance.HALF_MARATHON,
    "marathon": RaceDistance.MARATHON,
}


def pace_to_speed(pace_min_per_km: float) -> float:
    """Convert pace (min/km) to speed (km/h)."""
    if pace_min_per_km <= 0:
        return 0.0
    return 60 / pace_min_per_km


def speed_to_pace(speed_kmh: float) -> float:
    """Convert speed (km/h) to pace (min/km)."""
    if speed_kmh <= 0:
        return 0.0
    return 60 / speed_kmh


def mps_to_pace(speed_mps: float) -> float:
    """Convert speed (m/s) to pace (min/km)."""
    return speed_to_pace(speed_mps * 3.6)


def format_pace(pace_min_per_km: float) -> str:
    """Format decimal minutes as M:SS."""
    minutes = int(pace_min_per_km)
    seconds = round_half_up((pace_min_per_km - minutes) * 60)
    if seconds == 60:
        minutes += 1
        seconds = 0
    return f"{minutes}:{seconds:02d}"


def calculate_stride_length(cadence_spm: float, speed_kmh: float) -> float:
    """
    Stride length in meters from cadence and speed.

    Each step covers speed / steps-per-second meters.
    """
    if cadence_spm <= 0:
        return 0.0
    speed_mps = speed_kmh * 1000 / 3600
    steps_per_second = cadence_spm / 60
    return speed_mps / steps_per_second


def calculate_optimal_cadence(
    target_pace_min_per_km: float,
    height_cm: float,
    experience_level: Optional[str],
) -> int:
    """
    Optimal cadence for running a given pace.

    Faster paces call for a higher turnover:
    - Pace < 4:00/km: +8
    - Pace < 5:00/km: +5
    - Pace < 6:00/km: +2
    - Pace > 7:00/km: -3

    Height: <160 +3, <170 +1, >190 -3, >180 -1.
    Experience: beginner -5, moderate 0, advanced +3, elite +5.
    """
    cadence = 170

    if target_pace_min_per_km < 4:
        cadence += 8
    elif target_pace_min_per_km < 5:
        cadence += 5
    elif target_pace_min_per_km < 6:
        cadence += 2
    elif target_pace_min_per_km > 7:
        cadence -= 3

    if height_cm < 160:
        cadence += 3
    elif height_cm < 170:
        cadence += 1
    elif height_cm > 190:
        cadence -= 3
    elif height_cm > 180:
        cadence -= 1

    if isinstance(experience_level, ExperienceLevel):
        experience_level = experience_level.value
    cadence += PACE_EXPERIENCE_ADJUSTMENTS.get(str(experience_level or "").lower(), 0)

    return round_half_up(cadence)


def format_finish_time(distance_km: float, pace_min_per_km: float) -> str:
    """Finish time as HH:MM:SS for a distance run at a steady pace."""
    total_seconds = round_half_up(distance_km * pace_min_per_km * 60)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def parse_time_to_minutes(time_str: str) -> float:
    """Parse HH:MM:SS or MM:SS to decimal minutes; 0 for any other shape."""
    try:
        parts = [int(p) for p in time_str.strip().split(":")]
    except ValueError:
        return 0.0

    if len(parts) == 3:
        return parts[0] * 60 + parts[1] + parts[2] / 60
    elif len(parts) == 2:
        return parts[0] + parts[1] / 60
    return 0.0


def calculate_race_target(
    distance: Union[RaceDistance, str],
    target_time: str,
    profile: Optional[RunnerProfile] = None,
) -> RaceTarget:
    """
    Cadence, pace and stride length needed to hit a race goal.

    Args:
        distance: RaceDistance or a string such as "10k" or "half"
        target_time: Goal time as HH:MM:SS or MM:SS
        profile: Runner profile; height 175 cm and moderate experience
            are assumed without one

    Raises:
        ValidationError: unknown distance or unusable target time
    """
    if isinstance(distance, str):
        parsed = RaceDistance.from_string(distance)
        if parsed is None:
            raise ValidationError(f"Unknown race distance: {distance}", field="distance")
        distance = parsed

    total_minutes = parse_time_to_minutes(target_time)
    if total_minutes <= 0:
        raise ValidationError(
            f"Target time must be HH:MM:SS or MM:SS and greater than zero, got {target_time!r}",
            field="target_time",
        )

    height = profile.height_cm if profile else DEFAULT_HEIGHT_CM
    experience = profile.experience_level if profile else ExperienceLevel.MODERATE.value

    pace = total_minutes / distance.value
    cadence = calculate_optimal_cadence(pace, height, experience)

    return RaceTarget(
        distance_km=distance.value,
        distance_name=distance.display_name,
        target_time_s=round_half_up(total_minutes * 60),
        pace_min_per_km=pace,
        pace_formatted=format_pace(pace),
        optimal_cadence=cadence,
        stride_length_m=calculate_stride_length(cadence, pace_to_speed(pace)),
    )
