"""Payroll components: allowances, deductions and government contributions.

The three variants share only identity (employee, type label, amount,
description, effective date). Each carries the fields its own rule needs, and
``calculate_component`` dispatches on ``category`` to exactly one rule:

- Allowance: clamp amount down to ``max_amount``
- Deduction: ``quantity * rate / unit`` (minutes per hour, or 1 for days)
- GovernmentContribution: statutory bracket lookup when ``scheme`` is set,
  otherwise ``base_salary * contribution_rate``

Every rule is idempotent. Assignments to validated fields go through the same
checks as the constructor, and a rejected value leaves the old one in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from typing import Any, Callable, ClassVar

from motorph_payroll.calculators import contributions
from motorph_payroll.calculators.tables import (
    ALLOWANCE_CAPS,
    MINUTES_PER_HOUR,
    PAGIBIG_MAX_CONTRIBUTORY_SALARY,
)
from motorph_payroll.calculators.types import (
    AllowanceKind,
    ComponentCategory,
    ContributionScheme,
    DeductionKind,
    InvalidFieldError,
)
from motorph_payroll.calculators.validation import (
    parse_clock_time,
    require_date,
    require_non_negative,
    require_positive_id,
    require_text,
    round_to_cents,
    seconds_since_midnight,
)
from motorph_payroll.config import ShiftSchedule, get_settings

ZERO = Decimal("0")


def _money(field_name: str, label: str) -> Callable[[Any], Decimal]:
    return lambda value: require_non_negative(value, field_name, label)


def _optional(check: Callable[[Any], Any]) -> Callable[[Any], Any]:
    return lambda value: None if value is None else check(value)


def _enum(enum_type: type, field_name: str) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        try:
            return enum_type(value)
        except ValueError as exc:
            raise InvalidFieldError(field_name, f"Unknown {field_name.replace('_', ' ')}: {value}") from exc

    return check


_FIELD_RULES: dict[str, Callable[[Any], Any]] = {
    "employee_id": require_positive_id,
    "type": require_text,
    "amount": _money("amount", "Amount"),
    "effective_date": lambda value: require_date(value, "effective_date", "Effective date"),
    # Allowance
    "max_amount": _optional(_money("max_amount", "Maximum amount")),
    # Deduction
    "quantity": _money("quantity", "Quantity"),
    "rate": _money("rate", "Rate"),
    "deduction_id": _optional(lambda value: require_positive_id(value, "deduction_id", "Deduction ID")),
    # GovernmentContribution
    "base_salary": _money("base_salary", "Base salary"),
    "contribution_rate": _money("contribution_rate", "Contribution rate"),
    "salary": _optional(_money("salary", "Salary")),
    "employer_amount": _money("employer_amount", "Employer amount"),
}


def _peso(amount: Decimal) -> str:
    return f"₱{amount:.2f}"


@dataclass(eq=False)
class PayrollComponent:
    """One monetary line item attached to a payroll.

    Not instantiated directly; use Allowance, Deduction or
    GovernmentContribution.
    """

    employee_id: int
    type: str
    amount: Decimal = ZERO
    description: str | None = None
    effective_date: date = field(default_factory=date.today)

    category: ClassVar[ComponentCategory]
    _kind_rules: ClassVar[dict[str, Callable[[Any], Any]]] = {}

    def __post_init__(self) -> None:
        if type(self) is PayrollComponent:
            raise TypeError("PayrollComponent is abstract; construct one of its variants")

    def __setattr__(self, name: str, value: Any) -> None:
        rule = self._kind_rules.get(name) or _FIELD_RULES.get(name)
        if rule is not None:
            value = rule(value)
        super().__setattr__(name, value)

    def calculate(self) -> None:
        """Normalize amount according to this variant's rule."""
        calculate_component(self)

    def is_positive_amount(self) -> bool:
        """True when the component adds to gross pay rather than deducting."""
        return self.category == ComponentCategory.ALLOWANCE

    def is_valid(self) -> bool:
        return self.employee_id > 0 and bool(self.type) and self.amount >= 0

    @property
    def formatted_amount(self) -> str:
        prefix = "+" if self.is_positive_amount() else "-"
        return prefix + _peso(self.amount)

    @property
    def display_name(self) -> str:
        return f"{self.type} ({self.formatted_amount})"


@dataclass(eq=False)
class Allowance(PayrollComponent):
    """Positive component, optionally capped at ``max_amount``."""

    kind: AllowanceKind | None = None
    max_amount: Decimal | None = None

    category: ClassVar[ComponentCategory] = ComponentCategory.ALLOWANCE
    _kind_rules: ClassVar[dict[str, Callable[[Any], Any]]] = {
        "kind": _optional(_enum(AllowanceKind, "allowance_kind")),
    }

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.kind is not None and self.max_amount is None:
            self.max_amount = ALLOWANCE_CAPS[self.kind]

    @classmethod
    def create(cls, employee_id: int, kind: AllowanceKind, amount: Any) -> Allowance:
        """Build a capped allowance. Over-cap amounts are clamped, never rejected."""
        allowance = cls(employee_id, AllowanceKind(kind).value, amount, kind=kind)
        allowance.calculate()
        return allowance

    @classmethod
    def create_rice_subsidy(cls, employee_id: int, amount: Any) -> Allowance:
        return cls.create(employee_id, AllowanceKind.RICE_SUBSIDY, amount)

    @classmethod
    def create_phone_allowance(cls, employee_id: int, amount: Any) -> Allowance:
        return cls.create(employee_id, AllowanceKind.PHONE, amount)

    @classmethod
    def create_clothing_allowance(cls, employee_id: int, amount: Any) -> Allowance:
        return cls.create(employee_id, AllowanceKind.CLOTHING, amount)


def _whole_minutes(earlier: time, later: time) -> int:
    """Whole minutes from earlier to later; seconds are truncated."""
    return (seconds_since_midnight(later) - seconds_since_midnight(earlier)) // 60


def _started_minutes(earlier: time, later: time) -> int:
    """Minutes from earlier to later, counting a started minute as a whole one."""
    return -(-(seconds_since_midnight(later) - seconds_since_midnight(earlier)) // 60)


@dataclass(eq=False)
class Deduction(PayrollComponent):
    """Negative component.

    For rule-driven kinds the amount is derived from ``quantity`` (chargeable
    minutes, or days for unpaid leave) and ``rate`` (hourly or daily rate).
    Without a kind the deduction is free-form (a cash advance, a loan
    amortization): the caller-supplied amount stands as-is and ``calculate``
    leaves it untouched.
    """

    kind: DeductionKind | None = None
    quantity: Decimal = ZERO
    rate: Decimal = ZERO
    deduction_id: int | None = None

    category: ClassVar[ComponentCategory] = ComponentCategory.DEDUCTION
    _kind_rules: ClassVar[dict[str, Callable[[Any], Any]]] = {
        "kind": _optional(_enum(DeductionKind, "deduction_kind")),
    }

    @classmethod
    def create_late_deduction(
        cls,
        employee_id: int,
        arrival_time: Any,
        hourly_rate: Any,
        shift: ShiftSchedule | None = None,
    ) -> Deduction:
        """Charge minutes late beyond the grace period at hourly_rate / 60."""
        arrival = parse_clock_time(arrival_time, "arrival_time", "Arrival time")
        rate = require_non_negative(hourly_rate, "hourly_rate", "Hourly rate")
        shift = shift or get_settings().shift

        minutes_late = _whole_minutes(shift.start, arrival)
        chargeable = minutes_late - shift.grace_minutes if minutes_late > shift.grace_minutes else 0

        deduction = cls(
            employee_id,
            DeductionKind.LATE.value,
            description=f"{minutes_late} minutes late" if chargeable else None,
            kind=DeductionKind.LATE,
            quantity=chargeable,
            rate=rate,
        )
        deduction.calculate()
        return deduction

    @classmethod
    def create_undertime_deduction(
        cls,
        employee_id: int,
        departure_time: Any,
        hourly_rate: Any,
        shift: ShiftSchedule | None = None,
    ) -> Deduction:
        """Charge every minute before the official end. No grace period.

        A partial minute counts as a full one, so leaving at 16:59:30 is
        charged one minute. Late arrival truncates seconds instead.
        """
        departure = parse_clock_time(departure_time, "departure_time", "Departure time")
        rate = require_non_negative(hourly_rate, "hourly_rate", "Hourly rate")
        shift = shift or get_settings().shift

        minutes_early = max(_started_minutes(departure, shift.end), 0)

        deduction = cls(
            employee_id,
            DeductionKind.UNDERTIME.value,
            description=f"{minutes_early} minutes undertime" if minutes_early else None,
            kind=DeductionKind.UNDERTIME,
            quantity=minutes_early,
            rate=rate,
        )
        deduction.calculate()
        return deduction

    @classmethod
    def create_unpaid_leave_deduction(cls, employee_id: int, days: Any, daily_rate: Any) -> Deduction:
        leave_days = require_non_negative(days, "days", "Leave days")
        rate = require_non_negative(daily_rate, "daily_rate", "Daily rate")

        deduction = cls(
            employee_id,
            DeductionKind.UNPAID_LEAVE.value,
            description=f"{leave_days} day(s) unpaid leave" if leave_days else None,
            kind=DeductionKind.UNPAID_LEAVE,
            quantity=leave_days,
            rate=rate,
        )
        deduction.calculate()
        return deduction


@dataclass(eq=False)
class GovernmentContribution(PayrollComponent):
    """Statutory deduction.

    Generic contributions compute ``base_salary * contribution_rate``. Named
    schemes (SSS, PhilHealth, Pag-IBIG) look ``salary`` up in their bracket
    table and overwrite ``base_salary``, ``contribution_rate`` and
    ``employer_amount`` with what the bracket implies.
    """

    base_salary: Decimal = ZERO
    contribution_rate: Decimal = ZERO
    scheme: ContributionScheme | None = None
    salary: Decimal | None = None
    employer_amount: Decimal = ZERO

    category: ClassVar[ComponentCategory] = ComponentCategory.GOVERNMENT_CONTRIBUTION
    _kind_rules: ClassVar[dict[str, Callable[[Any], Any]]] = {
        "scheme": _optional(_enum(ContributionScheme, "contribution_scheme")),
    }

    get_sss_salary_credit = staticmethod(contributions.get_sss_salary_credit)
    get_sss_employer_contribution = staticmethod(contributions.get_sss_employer_contribution)
    get_philhealth_monthly_premium = staticmethod(contributions.get_philhealth_monthly_premium)
    get_philhealth_employer_contribution = staticmethod(contributions.get_philhealth_employer_contribution)
    get_pagibig_employee_rate = staticmethod(contributions.get_pagibig_employee_rate)
    get_pagibig_employer_rate = staticmethod(contributions.get_pagibig_employer_rate)
    get_pagibig_employer_contribution = staticmethod(contributions.get_pagibig_employer_contribution)

    @property
    def total_contribution(self) -> Decimal:
        """Employee plus employer share."""
        return self.amount + self.employer_amount

    @classmethod
    def _create_for_scheme(cls, employee_id: int, scheme: ContributionScheme, salary: Any) -> GovernmentContribution:
        monthly_salary = require_non_negative(salary, "salary", "Salary")
        contribution = cls(employee_id, scheme.value, scheme=scheme, salary=monthly_salary)
        contribution.calculate()
        return contribution

    @classmethod
    def create_sss(cls, employee_id: int, salary: Any) -> GovernmentContribution:
        sss = cls._create_for_scheme(employee_id, ContributionScheme.SSS, salary)
        sss.description = (
            f"Social Security System contribution - Salary Credit: {_peso(sss.base_salary)}"
        )
        return sss

    @classmethod
    def create_philhealth(cls, employee_id: int, salary: Any) -> GovernmentContribution:
        philhealth = cls._create_for_scheme(employee_id, ContributionScheme.PHILHEALTH, salary)
        philhealth.description = (
            "Philippine Health Insurance Corporation contribution - "
            f"Monthly Premium: {_peso(philhealth.total_contribution)}"
        )
        return philhealth

    @classmethod
    def create_pagibig(cls, employee_id: int, salary: Any) -> GovernmentContribution:
        pagibig = cls._create_for_scheme(employee_id, ContributionScheme.PAGIBIG, salary)
        pagibig.description = (
            "Home Development Mutual Fund contribution - "
            f"Rate: {pagibig.contribution_rate * 100:.1f}% "
            f"(Max contributory: {_peso(PAGIBIG_MAX_CONTRIBUTORY_SALARY)})"
        )
        return pagibig


def _apply_allowance_cap(allowance: Allowance) -> None:
    if allowance.max_amount is not None and allowance.amount > allowance.max_amount:
        allowance.amount = allowance.max_amount


_DEDUCTION_UNITS: dict[DeductionKind, Decimal] = {
    DeductionKind.LATE: MINUTES_PER_HOUR,
    DeductionKind.UNDERTIME: MINUTES_PER_HOUR,
    DeductionKind.UNPAID_LEAVE: Decimal("1"),
}


def _apply_deduction_rule(deduction: Deduction) -> None:
    if deduction.kind is None:
        return
    unit = _DEDUCTION_UNITS[deduction.kind]
    deduction.amount = round_to_cents(deduction.quantity * deduction.rate / unit)


def _apply_contribution_rule(contribution: GovernmentContribution) -> None:
    if contribution.scheme is None:
        contribution.amount = round_to_cents(contribution.base_salary * contribution.contribution_rate)
        return

    salary = contribution.salary if contribution.salary is not None else contribution.base_salary
    breakdown = contributions.compute_breakdown(contribution.scheme, salary)
    contribution.base_salary = breakdown.contribution_base
    contribution.contribution_rate = breakdown.employee_rate
    contribution.employer_amount = breakdown.employer_share
    contribution.amount = breakdown.employee_share


_RULES: dict[ComponentCategory, Callable[[Any], None]] = {
    ComponentCategory.ALLOWANCE: _apply_allowance_cap,
    ComponentCategory.DEDUCTION: _apply_deduction_rule,
    ComponentCategory.GOVERNMENT_CONTRIBUTION: _apply_contribution_rule,
}


def calculate_component(component: PayrollComponent) -> None:
    """Apply the rule for the component's category in place."""
    try:
        rule = _RULES[ComponentCategory(component.category)]
    except (AttributeError, ValueError) as exc:
        category = getattr(component, "category", None)
        raise InvalidFieldError("category", f"Unknown component category: {category}") from exc
    rule(component)
