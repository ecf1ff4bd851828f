"""Attendance and leave request tables."""

from __future__ import annotations

from datetime import date, time
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from motorph_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from motorph_payroll.models.employee import Employee


class Attendance(Base, TimestampMixin):
    """One day's log-in and log-out for an employee."""

    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    attendance_date: Mapped[date] = mapped_column(Date, nullable=False)
    log_in: Mapped[time | None] = mapped_column(Time, nullable=True)
    log_out: Mapped[time | None] = mapped_column(Time, nullable=True)

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="attendance")

    __table_args__ = (
        UniqueConstraint("employee_id", "attendance_date", name="uq_attendance_employee_date"),
    )


class LeaveRequest(Base, TimestampMixin):
    """Leave covering start_date through end_date inclusive."""

    __tablename__ = "leave_request"

    leave_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    leave_type: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Pending")
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="leave_requests")

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_leave_request_dates"),
    )
