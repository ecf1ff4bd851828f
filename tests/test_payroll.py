"""Unit tests for the Payroll aggregate."""

from datetime import date, time
from decimal import Decimal

import pytest

from motorph_payroll.calculators.components import Allowance, Deduction, GovernmentContribution
from motorph_payroll.calculators.payroll import Payroll, PayrollSummary
from motorph_payroll.calculators.types import InvalidFieldError

START = date(2024, 6, 1)
END = date(2024, 6, 15)


@pytest.fixture
def scenario_payroll() -> Payroll:
    """Ten days at 22,000/month with every direct line set."""
    return Payroll(
        10001,
        START,
        END,
        monthly_rate=Decimal("22000"),
        days_worked=10,
        payroll_id=1,
        overtime_pay=Decimal("1000"),
        rice_subsidy=Decimal("1500"),
        phone_allowance=Decimal("500"),
        clothing_allowance=Decimal("800"),
        sss=Decimal("500"),
        philhealth=Decimal("300"),
        pagibig=Decimal("200"),
        tax=Decimal("1000"),
        late_deduction=Decimal("100"),
        undertime_deduction=Decimal("200"),
    )


class TestBasicPay:
    """Monthly rate prorated over 22 working days."""

    def test_ten_days_of_22000(self):
        payroll = Payroll(10001, START, END, Decimal("22000"), 10)
        assert payroll.basic_pay == Decimal("10000.00")

    def test_not_cached(self):
        payroll = Payroll(10001, START, END, Decimal("22000"), 10)
        payroll.days_worked = 11
        assert payroll.basic_pay == Decimal("11000.00")

    def test_rounded_to_cents(self):
        payroll = Payroll(10001, START, END, Decimal("25000"), 1)
        assert payroll.basic_pay == Decimal("1136.36")


class TestRecalculation:
    """Gross, total deductions and net pay."""

    def test_scenario(self, scenario_payroll):
        scenario_payroll.recalculate_all()
        assert scenario_payroll.gross_pay == Decimal("13800.00")
        assert scenario_payroll.total_deductions == Decimal("2300")
        assert scenario_payroll.net_pay == Decimal("11500.00")

    def test_summary_is_stale_until_recalculated(self, scenario_payroll):
        assert scenario_payroll.gross_pay == Decimal("0")
        assert scenario_payroll.total_deductions == Decimal("0")
        assert scenario_payroll.net_pay == Decimal("0")

        scenario_payroll.recalculate_all()
        scenario_payroll.overtime_pay = Decimal("5000")
        assert scenario_payroll.gross_pay == Decimal("13800.00")

    def test_net_is_gross_minus_deductions(self, scenario_payroll):
        scenario_payroll.add_component(Allowance(10001, "Transportation Allowance", Decimal("750.25")))
        scenario_payroll.add_component(Deduction(10001, "Cash Advance", Decimal("333.33")))
        scenario_payroll.add_component(GovernmentContribution.create_sss(10001, Decimal("22000")))
        scenario_payroll.recalculate_all()
        assert scenario_payroll.net_pay == scenario_payroll.gross_pay - scenario_payroll.total_deductions

    def test_calculate_net_pay_uses_cached_figures(self, scenario_payroll):
        scenario_payroll.calculate_gross_pay()
        assert scenario_payroll.calculate_net_pay() == Decimal("13800.00")

    def test_is_valid(self, scenario_payroll):
        scenario_payroll.recalculate_all()
        assert scenario_payroll.is_valid()


class TestLineResolution:
    """Direct fields and bucketed components never count twice."""

    def test_component_replaces_matching_direct_field(self, scenario_payroll):
        scenario_payroll.add_component(Allowance.create_rice_subsidy(10001, Decimal("2000")))
        scenario_payroll.recalculate_all()

        assert scenario_payroll.allowance_lines()["Rice Subsidy"] == Decimal("2000")
        assert scenario_payroll.total_allowances == Decimal("3300")
        assert scenario_payroll.gross_pay == Decimal("14300.00")

    def test_components_with_same_label_are_summed(self):
        payroll = Payroll(10001, START, END, late_deduction=Decimal("999"))
        payroll.add_component(Deduction.create_late_deduction(10001, time(8, 30), Decimal("100")))
        payroll.add_component(Deduction.create_late_deduction(10001, time(8, 45), Decimal("100")))

        assert payroll.deduction_lines()["Late Deduction"] == Decimal("75.00")

    def test_other_labels_are_extra_lines(self, scenario_payroll):
        scenario_payroll.add_component(Allowance(10001, "Transportation Allowance", Decimal("700")))
        scenario_payroll.recalculate_all()

        lines = scenario_payroll.allowance_lines()
        assert lines["Transportation Allowance"] == Decimal("700")
        assert lines["Rice Subsidy"] == Decimal("1500")
        assert scenario_payroll.gross_pay == Decimal("14500.00")

    def test_contribution_components_replace_statutory_fields(self, scenario_payroll):
        scenario_payroll.add_component(GovernmentContribution.create_sss(10001, Decimal("22000")))
        scenario_payroll.add_component(GovernmentContribution.create_philhealth(10001, Decimal("22000")))
        scenario_payroll.add_component(GovernmentContribution.create_pagibig(10001, Decimal("22000")))
        scenario_payroll.recalculate_all()

        contributions = scenario_payroll.contribution_lines()
        assert contributions == {
            "SSS": Decimal("1100.00"),
            "PhilHealth": Decimal("550.00"),
            "Pag-IBIG": Decimal("100.00"),
        }
        assert scenario_payroll.total_government_contributions == Decimal("1750.00")
        # 1750 statutory + 1000 tax + 100 late + 200 undertime
        assert scenario_payroll.total_deductions == Decimal("3050.00")

    def test_deduction_lines_cover_every_direct_field(self, scenario_payroll):
        assert list(scenario_payroll.deduction_lines()) == [
            "SSS",
            "PhilHealth",
            "Pag-IBIG",
            "Withholding Tax",
            "Late Deduction",
            "Undertime Deduction",
            "Unpaid Leave Deduction",
        ]


class TestComponents:
    """Adding, removing and bucketing components."""

    def test_components_are_bucketed_by_category(self):
        payroll = Payroll(10001, START, END)
        rice = Allowance.create_rice_subsidy(10001, 1500)
        late = Deduction.create_late_deduction(10001, time(8, 30), 100)
        sss = GovernmentContribution.create_sss(10001, 20000)
        for component in (rice, late, sss):
            payroll.add_component(component)

        assert payroll.allowances == [rice]
        assert payroll.deductions == [late]
        assert payroll.contributions == [sss]
        assert payroll.components == [rice, late, sss]

    def test_unknown_category_rejected(self):
        class Bonus:
            category = "Bonus"
            employee_id = 10001
            type = "Bonus"

        payroll = Payroll(10001, START, END)
        with pytest.raises(InvalidFieldError, match="Unknown component category"):
            payroll.add_component(Bonus())
        assert payroll.components == []

    def test_other_employee_rejected(self):
        payroll = Payroll(10001, START, END)
        with pytest.raises(InvalidFieldError, match="Component employee ID must match payroll"):
            payroll.add_component(Allowance.create_rice_subsidy(10002, 1500))

    def test_same_component_cannot_be_added_twice(self):
        payroll = Payroll(10001, START, END)
        rice = Allowance.create_rice_subsidy(10001, 1500)
        payroll.add_component(rice)
        with pytest.raises(InvalidFieldError, match="already added"):
            payroll.add_component(rice)

    def test_remove_component(self):
        payroll = Payroll(10001, START, END)
        rice = Allowance.create_rice_subsidy(10001, 1500)
        payroll.add_component(rice)

        assert payroll.remove_component(rice) is True
        assert payroll.remove_component(rice) is False
        assert payroll.allowances == []

    def test_bucket_lists_are_copies(self):
        payroll = Payroll(10001, START, END)
        payroll.add_component(Allowance.create_rice_subsidy(10001, 1500))
        payroll.allowances.clear()
        assert len(payroll.allowances) == 1


class TestValidation:
    """Setters validate before assigning."""

    def test_period_end_before_start(self):
        with pytest.raises(InvalidFieldError, match="Period end cannot be before start") as exc_info:
            Payroll(10001, END, START)
        assert exc_info.value.field == "period_end"

    def test_period_end_setter_keeps_state(self):
        payroll = Payroll(10001, START, END)
        with pytest.raises(InvalidFieldError, match="Period end cannot be before start"):
            payroll.period_end = date(2024, 5, 31)
        assert payroll.period_end == END

    def test_period_start_setter_keeps_state(self):
        payroll = Payroll(10001, START, END)
        with pytest.raises(InvalidFieldError, match="Period start cannot be after end"):
            payroll.period_start = date(2024, 6, 16)
        assert payroll.period_start == START

    def test_single_day_period(self):
        payroll = Payroll(10001, START, START)
        assert payroll.period_end == payroll.period_start

    def test_iso_string_dates(self):
        payroll = Payroll(10001, "2024-06-01", "2024-06-15")
        assert payroll.period_start == START
        assert payroll.period_end == END

    @pytest.mark.parametrize("employee_id", [0, -5])
    def test_non_positive_employee_id(self, employee_id):
        with pytest.raises(InvalidFieldError, match="Employee ID must be positive"):
            Payroll(employee_id, START, END)

    def test_employee_id_setter(self):
        payroll = Payroll(10001, START, END)
        with pytest.raises(InvalidFieldError, match="Employee ID must be positive"):
            payroll.employee_id = 0
        assert payroll.employee_id == 10001

    def test_employee_id_must_match_components(self):
        payroll = Payroll(10001, START, END)
        payroll.add_component(Allowance.create_rice_subsidy(10001, 1500))
        with pytest.raises(InvalidFieldError, match="match existing components"):
            payroll.employee_id = 10002

    @pytest.mark.parametrize(
        "field,message",
        [
            ("monthly_rate", "Monthly rate cannot be negative"),
            ("overtime_pay", "Overtime pay cannot be negative"),
            ("rice_subsidy", "Rice subsidy cannot be negative"),
            ("tax", "Tax cannot be negative"),
            ("unpaid_leave_deduction", "Unpaid leave deduction cannot be negative"),
        ],
    )
    def test_negative_money_rejected(self, scenario_payroll, field, message):
        before = getattr(scenario_payroll, field)
        with pytest.raises(InvalidFieldError, match=message):
            setattr(scenario_payroll, field, Decimal("-1"))
        assert getattr(scenario_payroll, field) == before

    def test_negative_days_worked(self):
        with pytest.raises(InvalidFieldError, match="Days worked cannot be negative"):
            Payroll(10001, START, END, days_worked=-1)

    def test_summary_fields_are_read_only(self, scenario_payroll):
        with pytest.raises(AttributeError):
            scenario_payroll.net_pay = Decimal("1")


class TestPresentation:
    """Summary snapshot and display text."""

    def test_summary(self, scenario_payroll):
        scenario_payroll.recalculate_all()
        summary = scenario_payroll.summary()

        assert isinstance(summary, PayrollSummary)
        assert summary.basic_pay == Decimal("10000.00")
        assert summary.allowances["Phone Allowance"] == Decimal("500")
        assert summary.deductions["Withholding Tax"] == Decimal("1000")
        assert summary.net_pay == Decimal("11500.00")

    def test_display_name(self, scenario_payroll):
        assert scenario_payroll.display_name == "Payroll #1 for Employee 10001 (2024-06-01 to 2024-06-15)"

    def test_repr(self, scenario_payroll):
        text = repr(scenario_payroll)
        assert "payroll_id=1" in text
        assert "employee_id=10001" in text
