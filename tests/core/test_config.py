"""Tests for application settings."""
import pytest
from pydantic import ValidationError

from facematch.core.config import Settings


class TestSettings:
    """Test suite for configuration loading."""

    def test_defaults(self, monkeypatch):
        """Should default to the 0.4 threshold and the InsightFace provider."""
        monkeypatch.delenv("FACE_MATCH_THRESHOLD", raising=False)
        monkeypatch.delenv("FACE_DETECTION_PROVIDER", raising=False)

        config = Settings(_env_file=None)

        assert config.FACE_MATCH_THRESHOLD == 0.4
        assert config.FACE_DETECTION_PROVIDER == "insightface"
        assert config.MIN_FACE_CONFIDENCE == 0.65
        assert config.MIN_FACE_SIZE == 120

    def test_environment_overrides(self, monkeypatch):
        """Should read values from the environment."""
        monkeypatch.setenv("FACE_MATCH_THRESHOLD", "0.55")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

        config = Settings(_env_file=None)

        assert config.FACE_MATCH_THRESHOLD == 0.55
        assert config.cors_origins == ["https://a.example", "https://b.example"]

    def test_threshold_must_be_in_unit_interval(self, monkeypatch):
        """Should reject thresholds outside [0, 1]."""
        monkeypatch.setenv("FACE_MATCH_THRESHOLD", "1.5")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
