"""Payroll aggregate: one employee, one pay period.

A payroll holds two representations of the same lines: directly-set amounts
(``rice_subsidy``, ``sss``, ``tax``, ...) and bucketed components. They are
reconciled by label. For each direct field, bucketed components carrying the
field's label replace it (summed together); with no such component the direct
amount stands. Components with any other label are extra lines. Every line is
counted once.

Summary figures (``gross_pay``, ``total_deductions``, ``net_pay``) are cached
results of the last recalculation and start at zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from motorph_payroll.calculators.components import PayrollComponent
from motorph_payroll.calculators.tables import STANDARD_WORKING_DAYS
from motorph_payroll.calculators.types import (
    AllowanceKind,
    ComponentCategory,
    ContributionScheme,
    DeductionKind,
    InvalidFieldError,
)
from motorph_payroll.calculators.validation import (
    require_date,
    require_non_negative,
    require_non_negative_int,
    require_positive_id,
    round_to_cents,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
WITHHOLDING_TAX_LABEL = "Withholding Tax"

# direct field -> line label
ALLOWANCE_FIELDS: dict[str, str] = {
    "rice_subsidy": AllowanceKind.RICE_SUBSIDY.value,
    "phone_allowance": AllowanceKind.PHONE.value,
    "clothing_allowance": AllowanceKind.CLOTHING.value,
}
CONTRIBUTION_FIELDS: dict[str, str] = {
    "sss": ContributionScheme.SSS.value,
    "philhealth": ContributionScheme.PHILHEALTH.value,
    "pagibig": ContributionScheme.PAGIBIG.value,
}
DEDUCTION_FIELDS: dict[str, str] = {
    **CONTRIBUTION_FIELDS,
    "tax": WITHHOLDING_TAX_LABEL,
    "late_deduction": DeductionKind.LATE.value,
    "undertime_deduction": DeductionKind.UNDERTIME.value,
    "unpaid_leave_deduction": DeductionKind.UNPAID_LEAVE.value,
}


def _money_field(name: str, label: str) -> property:
    attr = f"_{name}"

    def getter(self: Payroll) -> Decimal:
        return getattr(self, attr)

    def setter(self: Payroll, value: Any) -> None:
        setattr(self, attr, require_non_negative(value, name, label))

    return property(getter, setter, doc=f"{label} (non-negative).")


def _resolve_lines(direct: dict[str, Decimal], components: Iterable[PayrollComponent]) -> dict[str, Decimal]:
    """Fold direct amounts and components into label -> amount."""
    from_components: dict[str, Decimal] = {}
    for component in components:
        from_components[component.type] = from_components.get(component.type, ZERO) + component.amount

    lines = dict(direct)
    lines.update(from_components)
    return lines


@dataclass(frozen=True)
class PayrollSummary:
    """Computed figures of one payroll, as handed to the persistence layer."""

    payroll_id: int | None
    employee_id: int
    period_start: date
    period_end: date
    basic_pay: Decimal
    overtime_hours: Decimal
    overtime_pay: Decimal
    allowances: dict[str, Decimal]
    deductions: dict[str, Decimal]
    gross_pay: Decimal
    total_deductions: Decimal
    net_pay: Decimal


class Payroll:
    """Pay of one employee for one period.

    Every setter validates before assigning, so a rejected value leaves the
    payroll exactly as it was.
    """

    monthly_rate = _money_field("monthly_rate", "Monthly rate")
    overtime_hours = _money_field("overtime_hours", "Overtime hours")
    overtime_pay = _money_field("overtime_pay", "Overtime pay")

    rice_subsidy = _money_field("rice_subsidy", "Rice subsidy")
    phone_allowance = _money_field("phone_allowance", "Phone allowance")
    clothing_allowance = _money_field("clothing_allowance", "Clothing allowance")

    sss = _money_field("sss", "SSS")
    philhealth = _money_field("philhealth", "PhilHealth")
    pagibig = _money_field("pagibig", "Pag-IBIG")
    tax = _money_field("tax", "Tax")
    late_deduction = _money_field("late_deduction", "Late deduction")
    undertime_deduction = _money_field("undertime_deduction", "Undertime deduction")
    unpaid_leave_deduction = _money_field("unpaid_leave_deduction", "Unpaid leave deduction")

    def __init__(
        self,
        employee_id: int,
        period_start: date | str,
        period_end: date | str,
        monthly_rate: Any = ZERO,
        days_worked: int = 0,
        *,
        payroll_id: int | None = None,
        overtime_hours: Any = ZERO,
        overtime_pay: Any = ZERO,
        rice_subsidy: Any = ZERO,
        phone_allowance: Any = ZERO,
        clothing_allowance: Any = ZERO,
        sss: Any = ZERO,
        philhealth: Any = ZERO,
        pagibig: Any = ZERO,
        tax: Any = ZERO,
        late_deduction: Any = ZERO,
        undertime_deduction: Any = ZERO,
        unpaid_leave_deduction: Any = ZERO,
    ):
        start = require_date(period_start, "period_start", "Period start")
        end = require_date(period_end, "period_end", "Period end")
        if end < start:
            raise InvalidFieldError("period_end", "Period end cannot be before start")

        self._payroll_id: int | None = None
        self._employee_id = require_positive_id(employee_id)
        self._period_start = start
        self._period_end = end
        self._components: dict[ComponentCategory, list[PayrollComponent]] = {
            category: [] for category in ComponentCategory
        }

        self.payroll_id = payroll_id
        self.monthly_rate = monthly_rate
        self.days_worked = days_worked
        self.overtime_hours = overtime_hours
        self.overtime_pay = overtime_pay

        self.rice_subsidy = rice_subsidy
        self.phone_allowance = phone_allowance
        self.clothing_allowance = clothing_allowance

        self.sss = sss
        self.philhealth = philhealth
        self.pagibig = pagibig
        self.tax = tax
        self.late_deduction = late_deduction
        self.undertime_deduction = undertime_deduction
        self.unpaid_leave_deduction = unpaid_leave_deduction

        self._gross_pay = ZERO
        self._total_deductions = ZERO
        self._net_pay = ZERO

    # Identity and period

    @property
    def payroll_id(self) -> int | None:
        return self._payroll_id

    @payroll_id.setter
    def payroll_id(self, value: int | None) -> None:
        self._payroll_id = None if value is None else require_positive_id(value, "payroll_id", "Payroll ID")

    @property
    def employee_id(self) -> int:
        return self._employee_id

    @employee_id.setter
    def employee_id(self, value: int) -> None:
        employee_id = require_positive_id(value)
        if any(component.employee_id != employee_id for component in self.components):
            raise InvalidFieldError("employee_id", "Employee ID must match existing components")
        self._employee_id = employee_id

    @property
    def period_start(self) -> date:
        return self._period_start

    @period_start.setter
    def period_start(self, value: date | str) -> None:
        start = require_date(value, "period_start", "Period start")
        if start > self._period_end:
            raise InvalidFieldError("period_start", "Period start cannot be after end")
        self._period_start = start

    @property
    def period_end(self) -> date:
        return self._period_end

    @period_end.setter
    def period_end(self, value: date | str) -> None:
        end = require_date(value, "period_end", "Period end")
        if end < self._period_start:
            raise InvalidFieldError("period_end", "Period end cannot be before start")
        self._period_end = end

    @property
    def days_worked(self) -> int:
        return self._days_worked

    @days_worked.setter
    def days_worked(self, value: int) -> None:
        self._days_worked = require_non_negative_int(value, "days_worked", "Days worked")

    # Cached summary figures

    @property
    def gross_pay(self) -> Decimal:
        return self._gross_pay

    @property
    def total_deductions(self) -> Decimal:
        return self._total_deductions

    @property
    def net_pay(self) -> Decimal:
        return self._net_pay

    # Components

    def add_component(self, component: PayrollComponent) -> None:
        """Store a component in the bucket matching its category."""
        category = getattr(component, "category", None)
        try:
            bucket = self._components[ComponentCategory(category)]
        except ValueError:
            logger.warning("Rejected component with unknown category %r for payroll %s", category, self._payroll_id)
            raise InvalidFieldError("component", f"Unknown component category: {category}") from None

        if component.employee_id != self._employee_id:
            logger.warning(
                "Rejected %s for employee %s on payroll of employee %s",
                component.type,
                component.employee_id,
                self._employee_id,
            )
            raise InvalidFieldError("component", "Component employee ID must match payroll")
        if any(existing is component for existing in bucket):
            raise InvalidFieldError("component", "Component already added to this payroll")

        bucket.append(component)

    def remove_component(self, component: PayrollComponent) -> bool:
        """Remove a component by identity. Returns False if it was never added."""
        for bucket in self._components.values():
            for index, existing in enumerate(bucket):
                if existing is component:
                    del bucket[index]
                    return True
        return False

    @property
    def components(self) -> list[PayrollComponent]:
        return [component for bucket in self._components.values() for component in bucket]

    @property
    def allowances(self) -> list[PayrollComponent]:
        return list(self._components[ComponentCategory.ALLOWANCE])

    @property
    def deductions(self) -> list[PayrollComponent]:
        return list(self._components[ComponentCategory.DEDUCTION])

    @property
    def contributions(self) -> list[PayrollComponent]:
        return list(self._components[ComponentCategory.GOVERNMENT_CONTRIBUTION])

    # Derived figures

    @property
    def basic_pay(self) -> Decimal:
        """Monthly rate prorated over the standard working days."""
        return round_to_cents(self.monthly_rate * self.days_worked / STANDARD_WORKING_DAYS)

    def _direct(self, fields: dict[str, str]) -> dict[str, Decimal]:
        return {label: getattr(self, name) for name, label in fields.items()}

    def allowance_lines(self) -> dict[str, Decimal]:
        return _resolve_lines(self._direct(ALLOWANCE_FIELDS), self.allowances)

    def contribution_lines(self) -> dict[str, Decimal]:
        return _resolve_lines(self._direct(CONTRIBUTION_FIELDS), self.contributions)

    def deduction_lines(self) -> dict[str, Decimal]:
        """Statutory, tax and attendance lines, including every deduction-side component."""
        return _resolve_lines(self._direct(DEDUCTION_FIELDS), self.contributions + self.deductions)

    @property
    def total_allowances(self) -> Decimal:
        return sum(self.allowance_lines().values(), ZERO)

    @property
    def total_government_contributions(self) -> Decimal:
        return sum(self.contribution_lines().values(), ZERO)

    def calculate_gross_pay(self) -> Decimal:
        self._gross_pay = self.basic_pay + self.overtime_pay + self.total_allowances
        return self._gross_pay

    def calculate_total_deductions(self) -> Decimal:
        self._total_deductions = sum(self.deduction_lines().values(), ZERO)
        return self._total_deductions

    def calculate_net_pay(self) -> Decimal:
        """Net from the cached gross and deductions; does not refresh them."""
        self._net_pay = self._gross_pay - self._total_deductions
        return self._net_pay

    def recalculate_all(self) -> None:
        """Refresh gross pay, then total deductions, then net pay."""
        self.calculate_gross_pay()
        self.calculate_total_deductions()
        self.calculate_net_pay()
        logger.debug(
            "Payroll %s employee %s: gross=%s deductions=%s net=%s",
            self._payroll_id,
            self._employee_id,
            self._gross_pay,
            self._total_deductions,
            self._net_pay,
        )

    def is_valid(self) -> bool:
        return self._employee_id > 0 and self._period_end >= self._period_start and self._gross_pay >= 0

    def summary(self) -> PayrollSummary:
        """Snapshot of the current lines and the cached totals."""
        return PayrollSummary(
            payroll_id=self._payroll_id,
            employee_id=self._employee_id,
            period_start=self._period_start,
            period_end=self._period_end,
            basic_pay=self.basic_pay,
            overtime_hours=self.overtime_hours,
            overtime_pay=self.overtime_pay,
            allowances=self.allowance_lines(),
            deductions=self.deduction_lines(),
            gross_pay=self._gross_pay,
            total_deductions=self._total_deductions,
            net_pay=self._net_pay,
        )

    @property
    def display_name(self) -> str:
        return (
            f"Payroll #{self._payroll_id} for Employee {self._employee_id} "
            f"({self._period_start} to {self._period_end})"
        )

    def __repr__(self) -> str:
        return (
            f"Payroll(payroll_id={self._payroll_id}, employee_id={self._employee_id}, "
            f"period={self._period_start}..{self._period_end}, gross_pay={self._gross_pay}, "
            f"total_deductions={self._total_deductions}, net_pay={self._net_pay})"
        )
