"""Statutory contribution and withholding tax lookups.

All functions here are pure functions of salary over the tables in
``motorph_payroll.calculators.tables``; none of them touch component state.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable

from motorph_payroll.calculators.tables import (
    MONTHS_PER_YEAR,
    PAGIBIG_MAX_CONTRIBUTORY_SALARY,
    PAGIBIG_TABLE,
    PHILHEALTH_TABLE,
    SSS_TABLE,
    WITHHOLDING_TAX_TABLE,
    find_bracket,
)
from motorph_payroll.calculators.types import ContributionBreakdown, ContributionScheme
from motorph_payroll.calculators.validation import require_non_negative, round_to_cents


def _salary(value: Any) -> Decimal:
    return require_non_negative(value, "salary", "Salary")


def sss_breakdown(salary: Any) -> ContributionBreakdown:
    """SSS shares come straight from the row; the base is the salary credit."""
    amount = _salary(salary)
    bracket = find_bracket(SSS_TABLE, amount, "SSS")
    return ContributionBreakdown(
        scheme=ContributionScheme.SSS,
        salary=amount,
        contribution_base=bracket.salary_credit,
        employee_share=bracket.employee_share,
        employer_share=bracket.employer_share,
        employee_rate=bracket.employee_share / bracket.salary_credit,
        employer_rate=bracket.employer_share / bracket.salary_credit,
    )


def philhealth_breakdown(salary: Any) -> ContributionBreakdown:
    """PhilHealth premium on the salary clamped to the floor/ceiling, split 50/50.

    The employee half is rounded on its own; the employer pays whatever it
    leaves of the rounded premium.
    """
    amount = _salary(salary)
    bracket = find_bracket(PHILHEALTH_TABLE, amount, "PhilHealth")
    base = bracket.fixed_base if bracket.fixed_base is not None else amount
    half_rate = bracket.premium_rate / 2
    premium = round_to_cents(base * bracket.premium_rate)
    employee_share = round_to_cents(base * half_rate)
    return ContributionBreakdown(
        scheme=ContributionScheme.PHILHEALTH,
        salary=amount,
        contribution_base=base,
        employee_share=employee_share,
        employer_share=premium - employee_share,
        employee_rate=half_rate,
        employer_rate=half_rate,
    )


def pagibig_breakdown(salary: Any) -> ContributionBreakdown:
    amount = _salary(salary)
    contributory = min(amount, PAGIBIG_MAX_CONTRIBUTORY_SALARY)
    bracket = find_bracket(PAGIBIG_TABLE, contributory, "Pag-IBIG")
    return ContributionBreakdown(
        scheme=ContributionScheme.PAGIBIG,
        salary=amount,
        contribution_base=contributory,
        employee_share=round_to_cents(contributory * bracket.employee_rate),
        employer_share=round_to_cents(contributory * bracket.employer_rate),
        employee_rate=bracket.employee_rate,
        employer_rate=bracket.employer_rate,
    )


_BREAKDOWNS: dict[ContributionScheme, Callable[[Any], ContributionBreakdown]] = {
    ContributionScheme.SSS: sss_breakdown,
    ContributionScheme.PHILHEALTH: philhealth_breakdown,
    ContributionScheme.PAGIBIG: pagibig_breakdown,
}


def compute_breakdown(scheme: ContributionScheme | str, salary: Any) -> ContributionBreakdown:
    """Look up the statutory shares of one scheme for a monthly salary."""
    return _BREAKDOWNS[ContributionScheme(scheme)](salary)


def get_sss_salary_credit(salary: Any) -> Decimal:
    return sss_breakdown(salary).contribution_base


def get_sss_employer_contribution(salary: Any) -> Decimal:
    return sss_breakdown(salary).employer_share


def get_philhealth_monthly_premium(salary: Any) -> Decimal:
    return philhealth_breakdown(salary).total


def get_philhealth_employer_contribution(salary: Any) -> Decimal:
    return philhealth_breakdown(salary).employer_share


def get_pagibig_employee_rate(salary: Any) -> Decimal:
    return pagibig_breakdown(salary).employee_rate


def get_pagibig_employer_rate(salary: Any) -> Decimal:
    return pagibig_breakdown(salary).employer_rate


def get_pagibig_employer_contribution(salary: Any) -> Decimal:
    return pagibig_breakdown(salary).employer_share


def compute_withholding_tax(monthly_salary: Any) -> Decimal:
    """Monthly withholding from the annual graduated table.

    The monthly salary is annualized, taxed, and the annual tax spread evenly
    over twelve months.
    """
    annual = require_non_negative(monthly_salary, "monthly_salary", "Monthly salary") * MONTHS_PER_YEAR
    bracket = find_bracket(WITHHOLDING_TAX_TABLE, annual, "withholding tax")
    annual_tax = bracket.flat_amount + (annual - bracket.min_amount) * bracket.rate
    return round_to_cents(annual_tax / MONTHS_PER_YEAR)
