"""Configuration settings for cadence-coach."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from CADENCE_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CADENCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Metronome defaults
    default_bpm: float = 170.0
    accent_every: int = 4  # Every 4th beat is accented
    volume: float = 0.8
    feedback_enabled: bool = True

    # Tone sink
    accent_tone_hz: float = 1200.0
    normal_tone_hz: float = 800.0
    tone_duration_ms: int = 50

    # Haptic sink
    accent_pulse_ms: int = 60
    normal_pulse_ms: int = 30

    # CLI tempo presets and nudging bounds (the scheduler itself accepts any positive tempo)
    metronome_presets: List[int] = [160, 170, 180, 190]
    metronome_min_bpm: int = 140
    metronome_max_bpm: int = 200


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
