"""Type definitions for the component calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ComponentCategory(str, Enum):
    """Buckets a payroll aggregates its components into."""

    ALLOWANCE = "Allowance"
    DEDUCTION = "Deduction"
    GOVERNMENT_CONTRIBUTION = "Government Contribution"


class AllowanceKind(str, Enum):
    """Capped allowance sub-types. Values double as component type labels."""

    RICE_SUBSIDY = "Rice Subsidy"
    PHONE = "Phone Allowance"
    CLOTHING = "Clothing Allowance"


class DeductionKind(str, Enum):
    """Rule-driven deduction sub-types. Values double as component type labels."""

    LATE = "Late Deduction"
    UNDERTIME = "Undertime Deduction"
    UNPAID_LEAVE = "Unpaid Leave Deduction"


class ContributionScheme(str, Enum):
    """Statutory contribution schemes. Values double as component type labels."""

    SSS = "SSS"
    PHILHEALTH = "PhilHealth"
    PAGIBIG = "Pag-IBIG"


class InvalidFieldError(ValueError):
    """Raised when a value assigned to a field is rejected."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class BracketNotFoundError(LookupError):
    """Raised when an amount falls outside every row of a bracket table."""

    def __init__(self, table: str, amount: Decimal):
        self.table = table
        self.amount = amount
        super().__init__(f"No {table} bracket covers {amount}")


@dataclass(frozen=True)
class SalaryRange:
    """Half-open salary range [min_amount, max_amount)."""

    min_amount: Decimal
    max_amount: Decimal | None  # None = no upper limit

    def contains(self, amount: Decimal) -> bool:
        if amount < self.min_amount:
            return False
        return self.max_amount is None or amount < self.max_amount


@dataclass(frozen=True)
class SSSBracket(SalaryRange):
    """SSS row: monthly salary credit and the fixed shares on it."""

    salary_credit: Decimal = Decimal("0")
    employee_share: Decimal = Decimal("0")
    employer_share: Decimal = Decimal("0")


@dataclass(frozen=True)
class PremiumBracket(SalaryRange):
    """PhilHealth row: premium rate applied to a (possibly fixed) base."""

    premium_rate: Decimal = Decimal("0")
    fixed_base: Decimal | None = None  # None = premium is on the salary itself


@dataclass(frozen=True)
class RateBracket(SalaryRange):
    """Pag-IBIG row: employee and employer rates on the contributory salary."""

    employee_rate: Decimal = Decimal("0")
    employer_rate: Decimal = Decimal("0")


@dataclass(frozen=True)
class TaxBracket(SalaryRange):
    """Graduated tax row: flat amount plus rate on the excess over min_amount."""

    rate: Decimal = Decimal("0")
    flat_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class ContributionBreakdown:
    """Result of a statutory lookup for one salary."""

    scheme: ContributionScheme
    salary: Decimal
    contribution_base: Decimal  # salary credit, premium base or contributory salary
    employee_share: Decimal
    employer_share: Decimal
    employee_rate: Decimal
    employer_rate: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee_share + self.employer_share
