"""Pytest fixtures for payroll component engine tests."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from motorph_payroll.config import ShiftSchedule, get_settings
from motorph_payroll.models import Base
from motorph_payroll.schemas import (
    AttendanceRecord,
    EmployeeRecord,
    LeaveRequestRecord,
    OvertimeRecord,
    PositionRecord,
)

# In-memory SQLite shared across connections of one engine
TEST_DATABASE_URL = "sqlite://"

SETTINGS_ENV_VARS = (
    "DATABASE_URL",
    "SQL_ECHO",
    "SHIFT_START",
    "LATE_GRACE_MINUTES",
    "SHIFT_END",
    "OVERTIME_MULTIPLIER",
)


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Run every test against the default settings, not the caller's environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def shift() -> ShiftSchedule:
    return ShiftSchedule(start=time(8, 0), grace_minutes=15, end=time(17, 0))


@pytest.fixture
def period() -> tuple[date, date]:
    return date(2024, 6, 1), date(2024, 6, 15)


@pytest.fixture
def employee() -> EmployeeRecord:
    return EmployeeRecord(
        employee_id=10001,
        first_name="Manuel",
        last_name="Garcia",
        birthday=date(1983, 10, 11),
        phone_number="966-860-270",
        status="Regular",
        position="Chief Executive Officer",
        basic_salary=Decimal("22000"),
        rice_subsidy=Decimal("1500"),
        phone_allowance=Decimal("2000"),
        clothing_allowance=Decimal("1000"),
        sss_number="44-4506057-3",
        philhealth_number="820126853951",
        tin_number="442-605-657-000",
        pagibig_number="691295330870",
    )


@pytest.fixture
def position() -> PositionRecord:
    return PositionRecord(
        position_id=1,
        position_name="Payroll Rank and File",
        monthly_salary=Decimal("44000"),
        rice_subsidy=Decimal("1500"),
        phone_allowance=Decimal("800"),
        clothing_allowance=Decimal("800"),
    )


@pytest.fixture
def attendance(employee, period) -> list[AttendanceRecord]:
    """Three days in the period: on time, 30 minutes late, left an hour early."""
    start, _ = period
    return [
        AttendanceRecord(
            employee_id=employee.employee_id,
            attendance_date=start,
            log_in=time(8, 0),
            log_out=time(17, 0),
        ),
        AttendanceRecord(
            employee_id=employee.employee_id,
            attendance_date=date(2024, 6, 3),
            log_in=time(8, 30),
            log_out=time(17, 0),
        ),
        AttendanceRecord(
            employee_id=employee.employee_id,
            attendance_date=date(2024, 6, 4),
            log_in=time(8, 10),
            log_out=time(16, 0),
        ),
    ]


@pytest.fixture
def overtime(employee) -> list[OvertimeRecord]:
    return [
        OvertimeRecord(
            employee_id=employee.employee_id,
            overtime_date=date(2024, 6, 3),
            hours=Decimal("2"),
            reason="Month-end close",
            approved=True,
        ),
        OvertimeRecord(
            employee_id=employee.employee_id,
            overtime_date=date(2024, 6, 4),
            hours=Decimal("3"),
            reason="Not approved",
        ),
    ]


@pytest.fixture
def leave_requests(employee) -> list[LeaveRequestRecord]:
    return [
        LeaveRequestRecord(
            employee_id=employee.employee_id,
            start_date=date(2024, 6, 14),
            end_date=date(2024, 6, 18),
            leave_type="Unpaid",
            status="Approved",
        ),
        LeaveRequestRecord(
            employee_id=employee.employee_id,
            start_date=date(2024, 6, 10),
            end_date=date(2024, 6, 11),
            leave_type="Sick",
            status="Approved",
        ),
    ]


@pytest.fixture
def engine():
    """Create test database engine with the schema in place."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create a test database session."""
    factory = sessionmaker(engine, class_=Session, expire_on_commit=False)
    with factory() as session:
        yield session
        session.rollback()
