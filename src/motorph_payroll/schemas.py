"""Pydantic records for the data that feeds payroll calculation.

These are validated value records with no calculation logic beyond date and
time comparisons. They can be built from keyword arguments or straight from
ORM rows (``EmployeeRecord.model_validate(row)``).
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

import bcrypt
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationInfo,
    field_validator,
    model_validator,
)

from motorph_payroll.calculators.tables import STANDARD_HOURS_PER_DAY, STANDARD_WORKING_DAYS
from motorph_payroll.calculators.types import InvalidFieldError
from motorph_payroll.calculators.validation import require_non_negative, round_to_cents
from motorph_payroll.config import ShiftSchedule, get_settings

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

MAX_FAILED_LOGIN_ATTEMPTS = 3
PASSWORD_MAX_AGE = timedelta(days=90)
MIN_PASSWORD_LENGTH = 8
MAX_OVERTIME_HOURS = Decimal("24")
UNPAID_LEAVE_TYPES = frozenset({"unpaid", "unpaid leave"})


class EmploymentStatus(str, Enum):
    REGULAR = "Regular"
    PROBATIONARY = "Probationary"


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveType(str, Enum):
    """Leave types offered by the request form. Other labels are accepted as-is."""

    ANNUAL = "Annual"
    SICK = "Sick"
    EMERGENCY = "Emergency"
    MATERNITY = "Maternity"
    PATERNITY = "Paternity"
    VACATION = "Vacation"
    UNPAID = "Unpaid"


class RecordBase(BaseModel):
    """Base for input records: ORM-readable, revalidated on assignment."""

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        str_strip_whitespace=True,
    )


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class _AllowanceDefaults(RecordBase):
    rice_subsidy: Decimal = Field(default=ZERO, ge=0)
    phone_allowance: Decimal = Field(default=ZERO, ge=0)
    clothing_allowance: Decimal = Field(default=ZERO, ge=0)
    gross_semi_monthly_rate: Decimal = Field(default=ZERO, ge=0)
    hourly_rate: Decimal = Field(default=ZERO, ge=0)

    @property
    def total_allowances(self) -> Decimal:
        return self.rice_subsidy + self.phone_allowance + self.clothing_allowance


# ============================================================================
# Employee and position
# ============================================================================


class EmployeeRecord(_AllowanceDefaults):
    """Employee master data: rate basis and default allowances."""

    employee_id: int = Field(gt=0)
    first_name: str
    last_name: str
    birthday: date | None = None
    address: str | None = None
    phone_number: str | None = None
    position: str | None = None
    position_id: int | None = None
    supervisor_id: int | None = None
    immediate_supervisor: str | None = None
    status: str | None = None
    basic_salary: Decimal = Field(default=ZERO, ge=0)

    sss_number: str | None = None
    philhealth_number: str | None = None
    tin_number: str | None = None
    pagibig_number: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def name_not_empty(cls, v: str, info: ValidationInfo) -> str:
        if not v:
            label = info.field_name.replace("_", " ").capitalize()
            raise ValueError(f"{label} cannot be empty")
        return v

    @field_validator("birthday")
    @classmethod
    def birthday_not_in_future(cls, v: date | None) -> date | None:
        if v is not None and v > date.today():
            raise ValueError("Birthday cannot be in the future")
        return v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def formatted_name(self) -> str:
        return f"{self.last_name}, {self.first_name}"

    @property
    def display_name(self) -> str:
        return f"{self.employee_id} - {self.full_name}"

    @property
    def daily_rate(self) -> Decimal:
        return round_to_cents(self.basic_salary / STANDARD_WORKING_DAYS)

    @property
    def calculated_hourly_rate(self) -> Decimal:
        return round_to_cents(self.basic_salary / STANDARD_WORKING_DAYS / STANDARD_HOURS_PER_DAY)

    def is_regular(self) -> bool:
        return (self.status or "").lower() == EmploymentStatus.REGULAR.value.lower()

    def is_probationary(self) -> bool:
        return (self.status or "").lower() == EmploymentStatus.PROBATIONARY.value.lower()

    def has_complete_government_ids(self) -> bool:
        ids = (self.sss_number, self.philhealth_number, self.tin_number, self.pagibig_number)
        return not any(_is_blank(number) for number in ids)

    def has_contact_info(self) -> bool:
        return not _is_blank(self.phone_number) or not _is_blank(self.address)


class PositionRecord(_AllowanceDefaults):
    """Rate schedule and default allowances shared by employees in a position."""

    position_id: int | None = None
    position_name: str = Field(min_length=1, max_length=100)
    monthly_salary: Decimal = Field(default=ZERO, ge=0)

    @property
    def daily_rate(self) -> Decimal:
        return round_to_cents(self.monthly_salary / STANDARD_WORKING_DAYS)

    @property
    def calculated_hourly_rate(self) -> Decimal:
        return round_to_cents(self.monthly_salary / STANDARD_WORKING_DAYS / STANDARD_HOURS_PER_DAY)

    @property
    def display_name(self) -> str:
        return f"{self.position_name} (₱{self.monthly_salary:.2f})"

    def calculate_rates(self) -> None:
        """Derive the semi-monthly and hourly rates from the monthly salary."""
        self.gross_semi_monthly_rate = round_to_cents(self.monthly_salary / 2)
        self.hourly_rate = self.calculated_hourly_rate


# ============================================================================
# Time records
# ============================================================================


class AttendanceRecord(RecordBase):
    """One day's log-in and log-out."""

    id: int | None = None
    employee_id: int = Field(gt=0)
    attendance_date: date
    log_in: time | None = None
    log_out: time | None = None

    @model_validator(mode="after")
    def log_out_after_log_in(self) -> AttendanceRecord:
        if self.log_in is not None and self.log_out is not None and self.log_out < self.log_in:
            raise ValueError("Log out cannot be before log in")
        return self

    @property
    def work_hours(self) -> Decimal:
        """Hours between log-in and log-out, zero if either is missing."""
        if self.log_in is None or self.log_out is None:
            return ZERO
        start = datetime.combine(self.attendance_date, self.log_in)
        end = datetime.combine(self.attendance_date, self.log_out)
        minutes = int((end - start).total_seconds()) // 60
        return round_to_cents(Decimal(minutes) / 60)

    def is_late(self, shift: ShiftSchedule | None = None) -> bool:
        """Logged in after the official start (grace period not applied)."""
        shift = shift or get_settings().shift
        return self.log_in is not None and self.log_in > shift.start

    def has_undertime(self, shift: ShiftSchedule | None = None) -> bool:
        shift = shift or get_settings().shift
        return self.log_out is not None and self.log_out < shift.end

    @property
    def display_name(self) -> str:
        return f"Attendance for Employee {self.employee_id} on {self.attendance_date}"


class OvertimeRecord(RecordBase):
    """Overtime hours rendered on one day."""

    overtime_id: int | None = None
    employee_id: int = Field(gt=0)
    overtime_date: date
    hours: Decimal = Field(ge=0, le=MAX_OVERTIME_HOURS)
    reason: str | None = None
    approved: bool = False

    def calculate_overtime_pay(self, hourly_rate: Decimal, multiplier: Decimal | None = None) -> Decimal:
        rate = require_non_negative(hourly_rate, "hourly_rate", "Hourly rate")
        if multiplier is None:
            multiplier = get_settings().overtime_multiplier
        factor = require_non_negative(multiplier, "multiplier", "Overtime multiplier")
        return round_to_cents(self.hours * rate * factor)

    def is_valid_overtime_hours(self) -> bool:
        return ZERO < self.hours <= MAX_OVERTIME_HOURS

    def has_reason(self) -> bool:
        return not _is_blank(self.reason)

    @property
    def formatted_hours(self) -> str:
        return f"{self.hours:.2f}"


class LeaveRequestRecord(RecordBase):
    """A leave request covering start_date through end_date inclusive."""

    leave_id: int | None = None
    employee_id: int = Field(gt=0)
    start_date: date
    end_date: date
    leave_type: str = Field(min_length=1)
    status: str = Field(default=LeaveStatus.PENDING.value, min_length=1)
    reason: str | None = None

    @model_validator(mode="after")
    def end_not_before_start(self) -> LeaveRequestRecord:
        if self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self

    @property
    def leave_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def _has_status(self, status: LeaveStatus) -> bool:
        return self.status.lower() == status.value.lower()

    def is_approved(self) -> bool:
        return self._has_status(LeaveStatus.APPROVED)

    def is_pending(self) -> bool:
        return self._has_status(LeaveStatus.PENDING)

    def is_rejected(self) -> bool:
        return self._has_status(LeaveStatus.REJECTED)

    def is_unpaid(self) -> bool:
        return self.leave_type.lower() in UNPAID_LEAVE_TYPES

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start

    def days_within(self, start: date, end: date) -> int:
        """Leave days falling inside [start, end]."""
        if not self.overlaps(start, end):
            return 0
        return (min(self.end_date, end) - max(self.start_date, start)).days + 1

    @property
    def display_name(self) -> str:
        return f"Leave Request #{self.leave_id} - {self.leave_type} ({self.start_date} to {self.end_date})"


# ============================================================================
# Credentials
# ============================================================================


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plaintext password with bcrypt; the length rule applies here."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidFieldError("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


class CredentialsRecord(RecordBase):
    """Login credentials. Not used by calculation.

    Only the bcrypt hash is held; plaintext passwords go through
    ``hash_password`` (or ``create`` / ``set_password``) and are never stored.
    """

    employee_id: int = Field(gt=0)
    password_hash: SecretStr
    email: str | None = None
    is_active: bool = True
    failed_login_attempts: int = Field(default=0, ge=0)
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("password_hash")
    @classmethod
    def hash_not_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("Password hash cannot be empty")
        return v

    @classmethod
    def create(cls, employee_id: int, password: str, **fields: Any) -> CredentialsRecord:
        return cls(employee_id=employee_id, password_hash=hash_password(password), **fields)

    def set_password(self, password: str, now: datetime | None = None) -> None:
        """Replace the stored hash and restart the password-age clock."""
        self.password_hash = hash_password(password)
        self.updated_at = now or datetime.now(timezone.utc)

    def increment_failed_login_attempts(self) -> None:
        """Count a failed login; the account locks at the third."""
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= MAX_FAILED_LOGIN_ATTEMPTS:
            self.is_active = False

    def reset_failed_login_attempts(self) -> None:
        self.failed_login_attempts = 0
        self.is_active = True

    def is_password_valid(self, candidate: str) -> bool:
        try:
            return bcrypt.checkpw(
                candidate.encode("utf-8"),
                self.password_hash.get_secret_value().encode("utf-8"),
            )
        except ValueError:
            logger.warning("Password check failed for employee %s: stored hash is not bcrypt", self.employee_id)
            return False

    def needs_password_reset(self, now: datetime | None = None) -> bool:
        """True once the password is older than the 90-day policy allows."""
        if self.updated_at is None:
            return False
        now = now or datetime.now(self.updated_at.tzinfo)
        return self.updated_at < now - PASSWORD_MAX_AGE
