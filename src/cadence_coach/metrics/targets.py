"""
Personalized cadence targets from runner biometrics.

Starts from 170 SPM and adds four independent stepwise adjustments:

Height (cm):     <160 +3, <170 +1, <180 0, <190 -1, else -3
Experience:      beginner -8, moderate -2, advanced +3, elite +8
Age (years):     <20 +2, <30 0, <40 -1, <50 -2, <60 -3, else -4
BMI:             <18.5 +1, <25 0, <30 -1, else -2

The pace ladder is easy = base - 5, moderate = base, race = base + 5,
interval = base + 10. Results are not clamped, so extreme profiles can land
outside a typical human cadence range.
"""

from typing import Optional

from ..models.profile import ExperienceLevel, PersonalizedTargets, RunnerProfile
from .statistics import round_half_up

BASE_CADENCE = 170

EXPERIENCE_ADJUSTMENTS = {
    ExperienceLevel.BEGINNER.value: -8,
    ExperienceLevel.MODERATE.value: -2,
    ExperienceLevel.ADVANCED.value: 3,
    ExperienceLevel.ELITE.value: 8,
}

# Offsets from the base cadence for each pace
PACE_OFFSETS = {
    "easy": -5,
    "moderate": 0,
    "race": 5,
    "interval": 10,
}

DEFAULT_TARGETS = PersonalizedTargets(
    base_cadence=BASE_CADENCE,
    easy_pace=BASE_CADENCE + PACE_OFFSETS["easy"],
    moderate_pace=BASE_CADENCE + PACE_OFFSETS["moderate"],
    race_pace=BASE_CADENCE + PACE_OFFSETS["race"],
    interval_pace=BASE_CADENCE + PACE_OFFSETS["interval"],
)


def calculate_height_adjustment(height_cm: float) -> int:
    """Taller runners take longer, slower strides."""
    if height_cm < 160:
        return 3
    if height_cm < 170:
        return 1
    if height_cm < 180:
        return 0
    if height_cm < 190:
        return -1
    return -3


def calculate_experience_adjustment(experience_level: Optional[str]) -> int:
    """Adjustment for experience; unknown levels get 0."""
    if experience_level is None:
        return 0
    if isinstance(experience_level, ExperienceLevel):
        experience_level = experience_level.value
    return EXPERIENCE_ADJUSTMENTS.get(str(experience_level).lower(), 0)


def calculate_age_adjustment(age_years: float) -> int:
    """Adjustment for age."""
    if age_years < 20:
        return 2
    if age_years < 30:
        return 0
    if age_years < 40:
        return -1
    if age_years < 50:
        return -2
    if age_years < 60:
        return -3
    return -4


def calculate_bmi_adjustment(bmi: float) -> int:
    """Adjustment for body mass index."""
    if bmi < 18.5:
        return 1
    if bmi < 25:
        return 0
    if bmi < 30:
        return -1
    return -2


def calculate_personalized_targets(profile: Optional[RunnerProfile]) -> PersonalizedTargets:
    """
    Calculate a runner's base cadence and pace ladder.

    Args:
        profile: Runner biometrics, or None when the runner has no profile

    Returns:
        PersonalizedTargets; DEFAULT_TARGETS when profile is None
    """
    if profile is None:
        return DEFAULT_TARGETS

    height_adj = calculate_height_adjustment(profile.height_cm)
    experience_adj = calculate_experience_adjustment(profile.experience_level)
    age_adj = calculate_age_adjustment(profile.age_years)
    bmi = profile.bmi
    # No usable height means no BMI to judge
    bmi_adj = calculate_bmi_adjustment(bmi) if profile.height_cm > 0 else 0

    base = BASE_CADENCE + height_adj + experience_adj + age_adj + bmi_adj

    return PersonalizedTargets(
        base_cadence=round_half_up(base),
        easy_pace=round_half_up(base + PACE_OFFSETS["easy"]),
        moderate_pace=round_half_up(base + PACE_OFFSETS["moderate"]),
        race_pace=round_half_up(base + PACE_OFFSETS["race"]),
        interval_pace=round_half_up(base + PACE_OFFSETS["interval"]),
        height_adjustment=height_adj,
        experience_adjustment=experience_adj,
        age_adjustment=age_adj,
        bmi_adjustment=bmi_adj,
        bmi=bmi,
    )
