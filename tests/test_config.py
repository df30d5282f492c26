"""Tests for settings loading."""

from cadence_coach.config import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CADENCE_DEFAULT_BPM", raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.default_bpm == 170.0
        assert settings.accent_every == 4
        assert settings.volume == 0.8
        assert settings.feedback_enabled is True
        assert settings.accent_tone_hz == 1200.0
        assert settings.normal_tone_hz == 800.0
        assert settings.metronome_presets == [160, 170, 180, 190]

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("CADENCE_DEFAULT_BPM", "182")
        monkeypatch.setenv("CADENCE_FEEDBACK_ENABLED", "false")
        settings = Settings(_env_file=None)
        assert settings.default_bpm == 182.0
        assert settings.feedback_enabled is False

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
