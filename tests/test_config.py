"""Tests for settings and source construction."""

import pytest
from pydantic import ValidationError

from surfcal.calendar.google_calendar import GoogleCalendarClient
from surfcal.config import ConfigurationError, Settings, get_settings
from surfcal.models.surf import Rating
from surfcal.sources import build_calendar_source


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.log_level == "WARNING"
        assert settings.default_days == 7
        criteria = settings.default_criteria()
        assert criteria.min_wave_height == 2.0
        assert criteria.min_rating is Rating.POOR_TO_FAIR

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DEFAULT_MIN_RATING", "good")
        monkeypatch.setenv("DEFAULT_MIN_WAVE_HEIGHT", "3.5")
        settings = Settings(_env_file=None)
        assert settings.log_level == "DEBUG"
        assert settings.default_criteria().min_rating is Rating.GOOD
        assert settings.default_criteria().min_wave_height == 3.5

    def test_invalid_rating_rejected(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_MIN_RATING", "EPIC")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_require_surfline(self, monkeypatch):
        monkeypatch.setenv("SURFLINE_EMAIL", "me@example.com")
        monkeypatch.setenv("SURFLINE_PASSWORD", "secret")
        settings = Settings(_env_file=None)
        assert settings.surfline_configured
        assert settings.require_surfline() == ("me@example.com", "secret")

    def test_require_surfline_missing(self, monkeypatch):
        monkeypatch.delenv("SURFLINE_EMAIL", raising=False)
        monkeypatch.delenv("SURFLINE_PASSWORD", raising=False)
        settings = Settings(_env_file=None)
        with pytest.raises(ConfigurationError, match="SURFLINE_EMAIL"):
            settings.require_surfline()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestBuildCalendarSource:
    """Tests for calendar source construction."""

    def test_none_without_api_key(self):
        assert build_calendar_source(Settings(_env_file=None)) is None

    def test_google_client_with_api_key(self, monkeypatch):
        built = {}

        def fake_build(*args, **kwargs):
            built.update(kwargs)
            return object()

        monkeypatch.setattr("surfcal.calendar.google_calendar.build", fake_build)
        settings = Settings(_env_file=None, google_calendar_api_key="key-123")
        source = build_calendar_source(settings)
        assert isinstance(source, GoogleCalendarClient)
        assert built["developerKey"] == "key-123"
