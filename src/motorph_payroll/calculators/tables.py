"""Static statutory tables, caps and working-time constants.

Every table is an ordered tuple of half-open ranges [min_amount, max_amount); the
top row of each table is open above. Tables are read-only module constants and
are shared freely between calculations.
"""

from __future__ import annotations

from decimal import Decimal as D
from typing import Sequence, TypeVar

from motorph_payroll.calculators.types import (
    AllowanceKind,
    BracketNotFoundError,
    PremiumBracket,
    RateBracket,
    SalaryRange,
    SSSBracket,
    TaxBracket,
)

STANDARD_WORKING_DAYS = D("22")  # per month, used to derive the daily rate
STANDARD_HOURS_PER_DAY = D("8")
MINUTES_PER_HOUR = D("60")
MONTHS_PER_YEAR = D("12")

ALLOWANCE_CAPS: dict[AllowanceKind, D] = {
    AllowanceKind.RICE_SUBSIDY: D("2000"),
    AllowanceKind.PHONE: D("3000"),
    AllowanceKind.CLOTHING: D("1500"),
}

# (min salary, max salary, monthly salary credit, employee share, employer share)
SSS_TABLE: tuple[SSSBracket, ...] = (
    SSSBracket(D("0"), D("5250"), D("5000"), D("250.00"), D("500.00")),
    SSSBracket(D("5250"), D("5750"), D("5500"), D("275.00"), D("550.00")),
    SSSBracket(D("5750"), D("6250"), D("6000"), D("300.00"), D("600.00")),
    SSSBracket(D("6250"), D("6750"), D("6500"), D("325.00"), D("650.00")),
    SSSBracket(D("6750"), D("7250"), D("7000"), D("350.00"), D("700.00")),
    SSSBracket(D("7250"), D("7750"), D("7500"), D("375.00"), D("750.00")),
    SSSBracket(D("7750"), D("8250"), D("8000"), D("400.00"), D("800.00")),
    SSSBracket(D("8250"), D("8750"), D("8500"), D("425.00"), D("850.00")),
    SSSBracket(D("8750"), D("9250"), D("9000"), D("450.00"), D("900.00")),
    SSSBracket(D("9250"), D("9750"), D("9500"), D("475.00"), D("950.00")),
    SSSBracket(D("9750"), D("10250"), D("10000"), D("500.00"), D("1000.00")),
    SSSBracket(D("10250"), D("10750"), D("10500"), D("525.00"), D("1050.00")),
    SSSBracket(D("10750"), D("11250"), D("11000"), D("550.00"), D("1100.00")),
    SSSBracket(D("11250"), D("11750"), D("11500"), D("575.00"), D("1150.00")),
    SSSBracket(D("11750"), D("12250"), D("12000"), D("600.00"), D("1200.00")),
    SSSBracket(D("12250"), D("12750"), D("12500"), D("625.00"), D("1250.00")),
    SSSBracket(D("12750"), D("13250"), D("13000"), D("650.00"), D("1300.00")),
    SSSBracket(D("13250"), D("13750"), D("13500"), D("675.00"), D("1350.00")),
    SSSBracket(D("13750"), D("14250"), D("14000"), D("700.00"), D("1400.00")),
    SSSBracket(D("14250"), D("14750"), D("14500"), D("725.00"), D("1450.00")),
    SSSBracket(D("14750"), D("15250"), D("15000"), D("750.00"), D("1500.00")),
    SSSBracket(D("15250"), D("15750"), D("15500"), D("775.00"), D("1550.00")),
    SSSBracket(D("15750"), D("16250"), D("16000"), D("800.00"), D("1600.00")),
    SSSBracket(D("16250"), D("16750"), D("16500"), D("825.00"), D("1650.00")),
    SSSBracket(D("16750"), D("17250"), D("17000"), D("850.00"), D("1700.00")),
    SSSBracket(D("17250"), D("17750"), D("17500"), D("875.00"), D("1750.00")),
    SSSBracket(D("17750"), D("18250"), D("18000"), D("900.00"), D("1800.00")),
    SSSBracket(D("18250"), D("18750"), D("18500"), D("925.00"), D("1850.00")),
    SSSBracket(D("18750"), D("19250"), D("19000"), D("950.00"), D("1900.00")),
    SSSBracket(D("19250"), D("19750"), D("19500"), D("975.00"), D("1950.00")),
    SSSBracket(D("19750"), D("20250"), D("20000"), D("1000.00"), D("2000.00")),
    SSSBracket(D("20250"), D("20750"), D("20500"), D("1025.00"), D("2050.00")),
    SSSBracket(D("20750"), D("21250"), D("21000"), D("1050.00"), D("2100.00")),
    SSSBracket(D("21250"), D("21750"), D("21500"), D("1075.00"), D("2150.00")),
    SSSBracket(D("21750"), D("22250"), D("22000"), D("1100.00"), D("2200.00")),
    SSSBracket(D("22250"), D("22750"), D("22500"), D("1125.00"), D("2250.00")),
    SSSBracket(D("22750"), D("23250"), D("23000"), D("1150.00"), D("2300.00")),
    SSSBracket(D("23250"), D("23750"), D("23500"), D("1175.00"), D("2350.00")),
    SSSBracket(D("23750"), D("24250"), D("24000"), D("1200.00"), D("2400.00")),
    SSSBracket(D("24250"), D("24750"), D("24500"), D("1225.00"), D("2450.00")),
    SSSBracket(D("24750"), D("25250"), D("25000"), D("1250.00"), D("2500.00")),
    SSSBracket(D("25250"), D("25750"), D("25500"), D("1275.00"), D("2550.00")),
    SSSBracket(D("25750"), D("26250"), D("26000"), D("1300.00"), D("2600.00")),
    SSSBracket(D("26250"), D("26750"), D("26500"), D("1325.00"), D("2650.00")),
    SSSBracket(D("26750"), D("27250"), D("27000"), D("1350.00"), D("2700.00")),
    SSSBracket(D("27250"), D("27750"), D("27500"), D("1375.00"), D("2750.00")),
    SSSBracket(D("27750"), D("28250"), D("28000"), D("1400.00"), D("2800.00")),
    SSSBracket(D("28250"), D("28750"), D("28500"), D("1425.00"), D("2850.00")),
    SSSBracket(D("28750"), D("29250"), D("29000"), D("1450.00"), D("2900.00")),
    SSSBracket(D("29250"), D("29750"), D("29500"), D("1475.00"), D("2950.00")),
    SSSBracket(D("29750"), D("30250"), D("30000"), D("1500.00"), D("3000.00")),
    SSSBracket(D("30250"), D("30750"), D("30500"), D("1525.00"), D("3050.00")),
    SSSBracket(D("30750"), D("31250"), D("31000"), D("1550.00"), D("3100.00")),
    SSSBracket(D("31250"), D("31750"), D("31500"), D("1575.00"), D("3150.00")),
    SSSBracket(D("31750"), D("32250"), D("32000"), D("1600.00"), D("3200.00")),
    SSSBracket(D("32250"), D("32750"), D("32500"), D("1625.00"), D("3250.00")),
    SSSBracket(D("32750"), D("33250"), D("33000"), D("1650.00"), D("3300.00")),
    SSSBracket(D("33250"), D("33750"), D("33500"), D("1675.00"), D("3350.00")),
    SSSBracket(D("33750"), D("34250"), D("34000"), D("1700.00"), D("3400.00")),
    SSSBracket(D("34250"), D("34750"), D("34500"), D("1725.00"), D("3450.00")),
    SSSBracket(D("34750"), None, D("35000"), D("1750.00"), D("3500.00")),
)

PHILHEALTH_PREMIUM_RATE = D("0.05")
PHILHEALTH_SALARY_FLOOR = D("10000")
PHILHEALTH_SALARY_CEILING = D("100000")

PHILHEALTH_TABLE: tuple[PremiumBracket, ...] = (
    PremiumBracket(D("0"), PHILHEALTH_SALARY_FLOOR, PHILHEALTH_PREMIUM_RATE, PHILHEALTH_SALARY_FLOOR),
    PremiumBracket(PHILHEALTH_SALARY_FLOOR, PHILHEALTH_SALARY_CEILING, PHILHEALTH_PREMIUM_RATE, None),
    PremiumBracket(PHILHEALTH_SALARY_CEILING, None, PHILHEALTH_PREMIUM_RATE, PHILHEALTH_SALARY_CEILING),
)

PAGIBIG_MAX_CONTRIBUTORY_SALARY = D("5000")

PAGIBIG_TABLE: tuple[RateBracket, ...] = (
    RateBracket(D("0"), D("1500"), D("0.01"), D("0.02")),
    RateBracket(D("1500"), None, D("0.02"), D("0.02")),
)

# Annual graduated income tax; flat_amount is the tax due at min_amount.
WITHHOLDING_TAX_TABLE: tuple[TaxBracket, ...] = (
    TaxBracket(D("0"), D("250000"), D("0"), D("0")),
    TaxBracket(D("250000"), D("400000"), D("0.15"), D("0")),
    TaxBracket(D("400000"), D("800000"), D("0.20"), D("22500")),
    TaxBracket(D("800000"), D("2000000"), D("0.25"), D("102500")),
    TaxBracket(D("2000000"), D("8000000"), D("0.30"), D("402500")),
    TaxBracket(D("8000000"), None, D("0.35"), D("2202500")),
)

RangeT = TypeVar("RangeT", bound=SalaryRange)


def find_bracket(table: Sequence[RangeT], amount: D, name: str = "salary") -> RangeT:
    """Return the row whose range contains amount."""
    for bracket in table:
        if bracket.contains(amount):
            return bracket
    raise BracketNotFoundError(name, amount)
