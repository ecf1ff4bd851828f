"""Payroll component calculation engine."""

from motorph_payroll.calculators.calculator import PayrollCalculationError, PayrollCalculator
from motorph_payroll.calculators.components import (
    Allowance,
    Deduction,
    GovernmentContribution,
    PayrollComponent,
    calculate_component,
)
from motorph_payroll.calculators.factory import (
    ComponentType,
    create_component,
    create_standard_allowances,
    create_standard_contributions,
)
from motorph_payroll.calculators.payroll import Payroll, PayrollSummary
from motorph_payroll.calculators.types import (
    AllowanceKind,
    BracketNotFoundError,
    ComponentCategory,
    ContributionScheme,
    DeductionKind,
    InvalidFieldError,
)

__all__ = [
    "Allowance",
    "AllowanceKind",
    "BracketNotFoundError",
    "ComponentCategory",
    "ComponentType",
    "ContributionScheme",
    "Deduction",
    "DeductionKind",
    "GovernmentContribution",
    "InvalidFieldError",
    "Payroll",
    "PayrollCalculationError",
    "PayrollCalculator",
    "PayrollComponent",
    "PayrollSummary",
    "calculate_component",
    "create_component",
    "create_standard_allowances",
    "create_standard_contributions",
]
