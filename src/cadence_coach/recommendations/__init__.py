"""Recommendation rules for cadence guidance."""

from .cadence import (
    CADENCE_TOLERANCE_SPM,
    JOINT_PROTECTION_AGE,
    generate_recommendations,
)

__all__ = [
    "CADENCE_TOLERANCE_SPM",
    "JOINT_PROTECTION_AGE",
    "generate_recommendations",
]
