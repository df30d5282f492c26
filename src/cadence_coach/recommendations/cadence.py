"""
Cadence Recommendation Rules

Turns a run's average cadence and the runner's profile into an ordered list
of guidance entries:
1. Cadence vs personalized target (improvement / caution / success)
2. Experience note (beginner or elite only)
3. Age note (over 50 only)

Without a profile only a single prompt to create one is returned.
"""

import logging
from typing import List, Optional, Union

from ..models.analysis import Recommendation, RecommendationKind
from ..models.profile import ExperienceLevel, RunnerProfile
from ..models.telemetry import RunSummary
from ..metrics.statistics import round_half_up
from ..metrics.targets import calculate_personalized_targets

logger = logging.getLogger(__name__)

# SPM either side of the target that still counts as on target
CADENCE_TOLERANCE_SPM = 10

JOINT_PROTECTION_AGE = 50


def _cadence_recommendation(avg_cadence: float, target: int) -> Recommendation:
    """Compare average cadence with the base target."""
    avg = round_half_up(avg_cadence)
    difference = avg_cadence - target

    if difference < -CADENCE_TOLERANCE_SPM:
        return Recommendation(
            kind=RecommendationKind.IMPROVEMENT,
            title="Increase your cadence",
            message=(
                f"Your average cadence of {avg} SPM is well below your target of "
                f"{target} SPM. Try shorter, quicker steps; raising cadence by about "
                f"5% at a time is easier to absorb than one big jump."
            ),
        )
    if difference > CADENCE_TOLERANCE_SPM:
        return Recommendation(
            kind=RecommendationKind.CAUTION,
            title="Consider longer strides",
            message=(
                f"Your average cadence of {avg} SPM is well above your target of "
                f"{target} SPM. A slightly longer, relaxed stride may save energy "
                f"at the same pace."
            ),
        )
    return Recommendation(
        kind=RecommendationKind.SUCCESS,
        title="Cadence on target",
        message=(
            f"Your average cadence of {avg} SPM is within {CADENCE_TOLERANCE_SPM} SPM "
            f"of your target of {target} SPM. Keep it up."
        ),
    )


def _experience_recommendation(experience_level: str) -> Optional[Recommendation]:
    if experience_level == ExperienceLevel.BEGINNER.value:
        return Recommendation(
            kind=RecommendationKind.INFO,
            title="Build consistency first",
            message=(
                "As a newer runner, focus on running regularly at an easy effort. "
                "Cadence changes come more naturally once your base is established."
            ),
        )
    if experience_level == ExperienceLevel.ELITE.value:
        return Recommendation(
            kind=RecommendationKind.INFO,
            title="Vary cadence tactically",
            message=(
                "Use deliberate cadence changes as a race tool: quicker turnover on "
                "climbs and surges, a more relaxed rhythm when settling into pace."
            ),
        )
    return None


def _age_recommendation(age_years: float) -> Optional[Recommendation]:
    if age_years > JOINT_PROTECTION_AGE:
        return Recommendation(
            kind=RecommendationKind.INFO,
            title="Protect your joints",
            message=(
                "A slightly higher cadence with shorter steps reduces impact forces. "
                "Allow extra recovery between hard sessions."
            ),
        )
    return None


def generate_recommendations(
    run: Union[RunSummary, float],
    profile: Optional[RunnerProfile],
) -> List[Recommendation]:
    """
    Generate ordered cadence recommendations for a run.

    Args:
        run: RunSummary, or the run's average cadence in SPM
        profile: Runner profile, or None if the runner has not created one

    Returns:
        Recommendations in display order. A run with no cadence data gets no
        cadence comparison entry.
    """
    if profile is None:
        return [
            Recommendation(
                kind=RecommendationKind.INFO,
                title="Create your runner profile",
                message=(
                    "Add your height, weight, age and experience to get cadence "
                    "targets personalized to you."
                ),
            )
        ]

    avg_cadence = run.avg_cadence_spm if isinstance(run, RunSummary) else float(run)
    targets = calculate_personalized_targets(profile)

    recommendations: List[Recommendation] = []

    if avg_cadence > 0:
        recommendations.append(_cadence_recommendation(avg_cadence, targets.base_cadence))
    else:
        logger.debug("No cadence data; skipping cadence comparison")

    experience_note = _experience_recommendation(profile.experience_level)
    if experience_note:
        recommendations.append(experience_note)

    age_note = _age_recommendation(profile.age_years)
    if age_note:
        recommendations.append(age_note)

    return recommendations
