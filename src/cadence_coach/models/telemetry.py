"""Telemetry input samples and the per-run summary derived from them."""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from pydantic import Field

from .base import CamelModel


class TelemetrySample(CamelModel):
    """One decoded telemetry record. Absent channels stay None."""

    timestamp_ms: int = Field(..., description="Sample time in milliseconds")
    cadence_spm: Optional[float] = Field(None, description="Cadence in steps per minute")
    speed_mps: Optional[float] = Field(None, description="Speed in meters per second")
    heart_rate_bpm: Optional[float] = Field(None, description="Heart rate in beats per minute")
    latitude_deg: Optional[float] = Field(None, description="Latitude in degrees")
    longitude_deg: Optional[float] = Field(None, description="Longitude in degrees")
    elevation_m: Optional[float] = Field(None, description="Elevation in meters")
    distance_m: Optional[float] = Field(None, description="Cumulative distance in meters")

    @property
    def has_position(self) -> bool:
        return self.latitude_deg is not None and self.longitude_deg is not None

    @property
    def has_elevation(self) -> bool:
        return self.elevation_m is not None

    @property
    def has_valid_position(self) -> bool:
        """True when latitude and longitude are both finite readings."""
        return (
            self.has_position
            and math.isfinite(self.latitude_deg)
            and math.isfinite(self.longitude_deg)
        )

    @property
    def has_valid_elevation(self) -> bool:
        return self.has_elevation and math.isfinite(self.elevation_m)


@dataclass(frozen=True)
class RunSummary:
    """Aggregate metrics over one run's samples."""

    total_distance_m: float = 0.0
    total_time_s: float = 0.0
    avg_speed_mps: float = 0.0
    max_speed_mps: float = 0.0
    avg_cadence_spm: float = 0.0
    min_cadence_spm: float = 0.0
    max_cadence_spm: float = 0.0
    cadence_variability: float = 0.0  # Population std dev of cadence
    avg_heart_rate_bpm: float = 0.0
    max_heart_rate_bpm: float = 0.0
    elevation_gain_m: float = 0.0
    elevation_loss_m: float = 0.0

    # Sample counts per channel
    sample_count: int = 0
    cadence_samples: int = 0
    speed_samples: int = 0
    heart_rate_samples: int = 0
    gps_samples: int = 0
    elevation_samples: int = 0

    @property
    def has_cadence(self) -> bool:
        return self.cadence_samples > 0

    @property
    def has_heart_rate(self) -> bool:
        return self.heart_rate_samples > 0

    @property
    def has_gps(self) -> bool:
        return self.gps_samples > 1

    @property
    def has_elevation(self) -> bool:
        return self.elevation_samples > 1

    @property
    def avg_pace_min_per_km(self) -> float:
        """Average pace in min/km, 0 when the run has no speed."""
        if self.avg_speed_mps <= 0:
            return 0.0
        return 1000.0 / self.avg_speed_mps / 60.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = asdict(self)
        result["data_quality"] = {
            "cadence": self.has_cadence,
            "heart_rate": self.has_heart_rate,
            "gps": self.has_gps,
            "elevation": self.has_elevation,
        }
        return result
