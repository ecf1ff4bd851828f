"""Enum-driven construction of payroll components."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from motorph_payroll.calculators.components import (
    Allowance,
    Deduction,
    GovernmentContribution,
    PayrollComponent,
)


class ComponentType(str, Enum):
    """Every component the named factories know how to build."""

    RICE_SUBSIDY = "RICE_SUBSIDY"
    PHONE_ALLOWANCE = "PHONE_ALLOWANCE"
    CLOTHING_ALLOWANCE = "CLOTHING_ALLOWANCE"
    LATE_DEDUCTION = "LATE_DEDUCTION"
    UNDERTIME_DEDUCTION = "UNDERTIME_DEDUCTION"
    UNPAID_LEAVE_DEDUCTION = "UNPAID_LEAVE_DEDUCTION"
    SSS = "SSS"
    PHILHEALTH = "PHILHEALTH"
    PAGIBIG = "PAGIBIG"


# component type -> (factory, number of positional params after employee_id)
_FACTORIES: dict[ComponentType, tuple[Callable[..., PayrollComponent], int]] = {
    ComponentType.RICE_SUBSIDY: (Allowance.create_rice_subsidy, 1),
    ComponentType.PHONE_ALLOWANCE: (Allowance.create_phone_allowance, 1),
    ComponentType.CLOTHING_ALLOWANCE: (Allowance.create_clothing_allowance, 1),
    ComponentType.LATE_DEDUCTION: (Deduction.create_late_deduction, 2),
    ComponentType.UNDERTIME_DEDUCTION: (Deduction.create_undertime_deduction, 2),
    ComponentType.UNPAID_LEAVE_DEDUCTION: (Deduction.create_unpaid_leave_deduction, 2),
    ComponentType.SSS: (GovernmentContribution.create_sss, 1),
    ComponentType.PHILHEALTH: (GovernmentContribution.create_philhealth, 1),
    ComponentType.PAGIBIG: (GovernmentContribution.create_pagibig, 1),
}


def create_component(component_type: ComponentType | str, employee_id: int, *params: Any) -> PayrollComponent:
    """Build a component by type.

    Params follow the named factory: an amount for allowances, a salary for
    contributions, (time, hourly rate) for late/undertime and
    (days, daily rate) for unpaid leave.
    """
    try:
        factory, arity = _FACTORIES[ComponentType(component_type)]
    except ValueError as exc:
        raise ValueError(f"Unknown component type: {component_type}") from exc

    if len(params) != arity:
        raise ValueError(
            f"{ComponentType(component_type).value} takes {arity} parameter(s) after employee_id, got {len(params)}"
        )
    return factory(employee_id, *params)


def create_standard_allowances(employee_id: int, rice: Any, phone: Any, clothing: Any) -> list[PayrollComponent]:
    return [
        create_component(ComponentType.RICE_SUBSIDY, employee_id, rice),
        create_component(ComponentType.PHONE_ALLOWANCE, employee_id, phone),
        create_component(ComponentType.CLOTHING_ALLOWANCE, employee_id, clothing),
    ]


def create_standard_contributions(employee_id: int, salary: Any) -> list[PayrollComponent]:
    return [
        create_component(ComponentType.SSS, employee_id, salary),
        create_component(ComponentType.PHILHEALTH, employee_id, salary),
        create_component(ComponentType.PAGIBIG, employee_id, salary),
    ]
