"""Runner profile input and the personalized cadence targets computed from it."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from .base import CamelModel


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """BMI = weight / (height in m)^2; 0 when height is not positive."""
    if height_cm <= 0:
        return 0.0
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


class ExperienceLevel(str, Enum):
    """Self-reported running experience."""
    BEGINNER = "beginner"
    MODERATE = "moderate"
    ADVANCED = "advanced"
    ELITE = "elite"


class RunnerProfile(CamelModel):
    """
    Runner biometrics, owned by the external profile store.

    Values are accepted as given; range checks belong to whoever collects them.
    Experience is kept as a plain string so levels outside ExperienceLevel
    can still be represented (they contribute no adjustment).
    """

    height_cm: float = Field(..., description="Height in centimeters")
    weight_kg: float = Field(..., description="Weight in kilograms")
    age_years: float = Field(..., description="Age in years")
    experience_level: str = Field(
        default=ExperienceLevel.MODERATE.value,
        description="beginner, moderate, advanced or elite",
    )

    @field_validator("experience_level", mode="before")
    @classmethod
    def _normalize_experience(cls, v):
        if isinstance(v, ExperienceLevel):
            return v.value
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def bmi(self) -> float:
        """Body mass index, 0 when height is not positive."""
        return calculate_bmi(self.weight_kg, self.height_cm)


@dataclass(frozen=True)
class PersonalizedTargets:
    """
    Target cadences (SPM) for one runner.

    The adjustment fields are None when targets were computed without a
    profile.
    """

    base_cadence: int
    easy_pace: int
    moderate_pace: int
    race_pace: int
    interval_pace: int
    height_adjustment: Optional[int] = None
    experience_adjustment: Optional[int] = None
    age_adjustment: Optional[int] = None
    bmi_adjustment: Optional[int] = None
    bmi: Optional[float] = None

    @property
    def is_default(self) -> bool:
        return self.height_adjustment is None

    @property
    def total_adjustment(self) -> int:
        return sum(
            a or 0 for a in (
                self.height_adjustment,
                self.experience_adjustment,
                self.age_adjustment,
                self.bmi_adjustment,
            )
        )

    def ladder(self) -> Dict[str, int]:
        """Pace-specific cadences keyed by pace name."""
        return {
            "easy": self.easy_pace,
            "moderate": self.moderate_pace,
            "race": self.race_pace,
            "interval": self.interval_pace,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {
            "base_cadence": self.base_cadence,
            **{f"{name}_pace": value for name, value in self.ladder().items()},
        }
        if not self.is_default:
            result["adjustments"] = {
                "height": self.height_adjustment,
                "experience": self.experience_adjustment,
                "age": self.age_adjustment,
                "bmi": self.bmi_adjustment,
            }
            result["bmi"] = round(self.bmi, 1) if self.bmi is not None else None
        return result
