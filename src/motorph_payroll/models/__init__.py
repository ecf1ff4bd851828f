"""SQLAlchemy declarations for the tables the persistence layer reads and writes."""

from motorph_payroll.models.attendance import Attendance, LeaveRequest
from motorph_payroll.models.base import Base, TimestampMixin, UpdatedAtMixin
from motorph_payroll.models.employee import Credentials, Employee

__all__ = [
    "Attendance",
    "Base",
    "Credentials",
    "Employee",
    "LeaveRequest",
    "TimestampMixin",
    "UpdatedAtMixin",
]
