"""Turns employee, attendance, overtime and leave records into a computed Payroll."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable

from motorph_payroll.calculators.components import Deduction
from motorph_payroll.calculators.contributions import compute_withholding_tax
from motorph_payroll.calculators.factory import create_standard_allowances, create_standard_contributions
from motorph_payroll.calculators.payroll import Payroll
from motorph_payroll.calculators.tables import STANDARD_HOURS_PER_DAY, STANDARD_WORKING_DAYS
from motorph_payroll.calculators.validation import require_date, round_to_cents
from motorph_payroll.config import Settings, get_settings

if TYPE_CHECKING:
    from motorph_payroll.schemas import (
        AttendanceRecord,
        EmployeeRecord,
        LeaveRequestRecord,
        OvertimeRecord,
        PositionRecord,
    )

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class PayrollCalculationError(Exception):
    """Raised when a payroll cannot be computed for an employee."""

    def __init__(self, employee_id: int, message: str):
        self.employee_id = employee_id
        super().__init__(f"Failed to calculate payroll for employee {employee_id}: {message}")


class PayrollCalculator:
    """Builds one employee's Payroll for a period from already-loaded records.

    The calculator performs no I/O. Records for other employees or outside
    the period are ignored.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def calculate(
        self,
        employee: EmployeeRecord,
        period_start: date | str,
        period_end: date | str,
        attendance: Iterable[AttendanceRecord] = (),
        overtime: Iterable[OvertimeRecord] = (),
        leave_requests: Iterable[LeaveRequestRecord] = (),
        position: PositionRecord | None = None,
        payroll_id: int | None = None,
    ) -> Payroll:
        employee_id = employee.employee_id
        try:
            start = require_date(period_start, "period_start", "Period start")
            end = require_date(period_end, "period_end", "Period end")
            payroll = self._build(
                employee, start, end, list(attendance), list(overtime), list(leave_requests), position, payroll_id
            )
        except PayrollCalculationError:
            raise
        except (ValueError, LookupError) as exc:
            logger.exception("Failed to calculate payroll for employee %s", employee_id)
            raise PayrollCalculationError(employee_id, str(exc)) from exc

        logger.info(
            "Payroll calculated for employee %s (%s to %s): days worked=%s, net pay=%s",
            employee_id,
            payroll.period_start,
            payroll.period_end,
            payroll.days_worked,
            payroll.net_pay,
        )
        return payroll

    def _build(
        self,
        employee: EmployeeRecord,
        start: date,
        end: date,
        attendance: list[AttendanceRecord],
        overtime: list[OvertimeRecord],
        leave_requests: list[LeaveRequestRecord],
        position: PositionRecord | None,
        payroll_id: int | None,
    ) -> Payroll:
        employee_id = employee.employee_id
        monthly_rate = position.monthly_salary if position is not None else employee.basic_salary
        if monthly_rate <= 0:
            raise PayrollCalculationError(employee_id, "monthly rate must be positive")

        rates = position if position is not None else employee
        hourly_rate = rates.hourly_rate
        if hourly_rate <= 0:
            hourly_rate = round_to_cents(monthly_rate / STANDARD_WORKING_DAYS / STANDARD_HOURS_PER_DAY)
        daily_rate = round_to_cents(monthly_rate / STANDARD_WORKING_DAYS)

        days = [
            row
            for row in attendance
            if row.employee_id == employee_id and start <= row.attendance_date <= end and row.log_in is not None
        ]
        payroll = Payroll(employee_id, start, end, monthly_rate, len(days), payroll_id=payroll_id)
        logger.info("Employee %s worked %s days between %s and %s", employee_id, len(days), start, end)

        shift = self.settings.shift
        for row in days:
            late = Deduction.create_late_deduction(employee_id, row.log_in, hourly_rate, shift)
            if late.amount > 0:
                late.effective_date = row.attendance_date
                payroll.add_component(late)
            if row.log_out is not None:
                undertime = Deduction.create_undertime_deduction(employee_id, row.log_out, hourly_rate, shift)
                if undertime.amount > 0:
                    undertime.effective_date = row.attendance_date
                    payroll.add_component(undertime)

        unpaid_days = sum(
            leave.days_within(start, end)
            for leave in leave_requests
            if leave.employee_id == employee_id and leave.is_approved() and leave.is_unpaid()
        )
        if unpaid_days:
            payroll.add_component(Deduction.create_unpaid_leave_deduction(employee_id, unpaid_days, daily_rate))

        approved_overtime = [
            row
            for row in overtime
            if row.employee_id == employee_id and row.approved and start <= row.overtime_date <= end
        ]
        multiplier = self.settings.overtime_multiplier
        payroll.overtime_hours = sum((row.hours for row in approved_overtime), ZERO)
        payroll.overtime_pay = sum(
            (row.calculate_overtime_pay(hourly_rate, multiplier) for row in approved_overtime), ZERO
        )

        allowances = create_standard_allowances(
            employee_id, rates.rice_subsidy, rates.phone_allowance, rates.clothing_allowance
        )
        for allowance in allowances:
            if allowance.amount > 0:
                payroll.add_component(allowance)

        for contribution in create_standard_contributions(employee_id, monthly_rate):
            payroll.add_component(contribution)
        payroll.tax = compute_withholding_tax(monthly_rate)

        payroll.recalculate_all()
        return payroll
