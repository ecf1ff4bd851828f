"""Employee and credentials tables."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from motorph_payroll.models.base import Base, TimestampMixin, UpdatedAtMixin

if TYPE_CHECKING:
    from motorph_payroll.models.attendance import Attendance, LeaveRequest


class Employee(Base, TimestampMixin, UpdatedAtMixin):
    """Employee master record: rate basis and default allowances."""

    __tablename__ = "employees"

    employee_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    sss_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    philhealth_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    tin_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    pagibig_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    position_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    supervisor_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("employees.employee_id", ondelete="SET NULL"),
        nullable=True,
    )
    basic_salary: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    rice_subsidy: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    phone_allowance: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    clothing_allowance: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    gross_semi_monthly_rate: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    hourly_rate: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    # Relationships
    credentials: Mapped[Credentials | None] = relationship(back_populates="employee")
    attendance: Mapped[list[Attendance]] = relationship(back_populates="employee")
    leave_requests: Mapped[list[LeaveRequest]] = relationship(back_populates="employee")

    __table_args__ = (
        CheckConstraint("basic_salary >= 0", name="ck_employees_basic_salary"),
    )


class Credentials(Base, TimestampMixin, UpdatedAtMixin):
    """Login credentials, one row per employee."""

    __tablename__ = "credentials"

    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.employee_id", ondelete="CASCADE"),
        primary_key=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    failed_login_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_login_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="credentials")
