"""Tests for settings loading."""

from datetime import time
from decimal import Decimal

import pytest

from motorph_payroll.config import Settings, ShiftSchedule, get_settings


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.database_url == "sqlite:///motorph_payroll.db"
        assert settings.sql_echo is False
        assert settings.shift == ShiftSchedule(start=time(8, 0), grace_minutes=15, end=time(17, 0))
        assert settings.overtime_multiplier == Decimal("1.25")

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")
        monkeypatch.setenv("SQL_ECHO", "TRUE")
        monkeypatch.setenv("SHIFT_START", "07:30")
        monkeypatch.setenv("LATE_GRACE_MINUTES", "10")
        monkeypatch.setenv("SHIFT_END", "16:30")
        monkeypatch.setenv("OVERTIME_MULTIPLIER", "1.5")

        settings = Settings.from_env()
        assert settings.database_url == "sqlite:///other.db"
        assert settings.sql_echo is True
        assert settings.shift == ShiftSchedule(start=time(7, 30), grace_minutes=10, end=time(16, 30))
        assert settings.overtime_multiplier == Decimal("1.5")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_invalid_shift_rejected(self, monkeypatch):
        monkeypatch.setenv("SHIFT_END", "07:00")
        with pytest.raises(ValueError, match="Shift end must be after shift start"):
            Settings.from_env().shift


class TestShiftSchedule:
    """Shift bounds."""

    def test_negative_grace_rejected(self):
        with pytest.raises(ValueError, match="Grace minutes cannot be negative"):
            ShiftSchedule(grace_minutes=-1)
