"""Configuration management for the payroll component engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class ShiftSchedule:
    """Official working hours that late and undertime deductions measure against."""

    start: time = time(8, 0)
    grace_minutes: int = 15
    end: time = time(17, 0)

    def __post_init__(self) -> None:
        if self.grace_minutes < 0:
            raise ValueError("Grace minutes cannot be negative")
        if self.end <= self.start:
            raise ValueError("Shift end must be after shift start")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    database_url: str
    sql_echo: bool
    shift_start: time
    late_grace_minutes: int
    shift_end: time
    overtime_multiplier: Decimal

    @property
    def shift(self) -> ShiftSchedule:
        """Official schedule used by late and undertime deductions."""
        return ShiftSchedule(
            start=self.shift_start,
            grace_minutes=self.late_grace_minutes,
            end=self.shift_end,
        )

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///motorph_payroll.db"),
            sql_echo=os.getenv("SQL_ECHO", "false").lower() == "true",
            shift_start=time.fromisoformat(os.getenv("SHIFT_START", "08:00")),
            late_grace_minutes=int(os.getenv("LATE_GRACE_MINUTES", "15")),
            shift_end=time.fromisoformat(os.getenv("SHIFT_END", "17:00")),
            overtime_multiplier=Decimal(os.getenv("OVERTIME_MULTIPLIER", "1.25")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
