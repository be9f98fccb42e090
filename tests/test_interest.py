"""Tests for interest u/s 234A, 234B and 234C."""

import datetime
from decimal import ROUND_HALF_UP, Decimal

import pytest

from itr_engine.domain.models.computation import TaxBreakdown
from itr_engine.domain.models.declaration import (
    AdvanceTaxInstallments,
    BusinessIncome,
    Declaration,
    FilingDetails,
    Scheme44AD,
)
from itr_engine.domain.models.enums import AssessmentType, EntityType
from itr_engine.domain.services.interest import (
    InvalidDateError,
    compute_interest,
    interest_months,
    parse_date,
)

D = Decimal
TAX = D("100000")


def _declaration(**filing) -> Declaration:
    extra = {k: filing.pop(k) for k in ("entity_type", "business", "advance_tax", "tds") if k in filing}
    filing.setdefault("due_date_of_filing", "2024-07-31")
    filing.setdefault("actual_date_of_filing", "2024-12-15")
    return Declaration(assessment_year="2024-25", filing=FilingDetails(**filing), **extra)


class TestDates:
    """Strict YYYY-MM-DD parsing and month counting."""

    def test_valid(self):
        assert parse_date("2024-02-29") == datetime.date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2024-02-30", "2023-02-29", "2024/01/01", "24-01-01", "", None])
    def test_invalid(self, value):
        with pytest.raises(InvalidDateError):
            parse_date(value)

    def test_invalid_date_is_value_error(self):
        assert issubclass(InvalidDateError, ValueError)

    def test_part_month_counts_in_full(self):
        assert interest_months(datetime.date(2024, 8, 1), datetime.date(2024, 12, 15)) == 5
        assert interest_months(datetime.date(2024, 4, 1), datetime.date(2024, 4, 1)) == 1

    def test_across_year_end(self):
        assert interest_months(datetime.date(2024, 11, 1), datetime.date(2025, 2, 1)) == 4

    def test_end_before_start(self):
        assert interest_months(datetime.date(2024, 5, 1), datetime.date(2024, 4, 30)) == 0


class TestSection234A:
    """Late filing."""

    def test_regular(self, config_2024):
        result = compute_interest(_declaration(), config_2024, TAX, TaxBreakdown())
        assert result.months_234a == 5
        assert result.u_s_234a == D("5000")

    def test_base_reduced_by_prepaid_taxes(self, config_2024):
        decl = _declaration(advance_tax=D("90000"))
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.u_s_234a == D("500")

    def test_filed_on_time(self, config_2024):
        decl = _declaration(actual_date_of_filing="2024-07-31")
        assert compute_interest(decl, config_2024, TAX, TaxBreakdown()).u_s_234a == D("0")

    def test_default_due_date_non_audit(self, config_2024):
        decl = _declaration(due_date_of_filing=None)
        assert compute_interest(decl, config_2024, TAX, TaxBreakdown()).u_s_234a == D("5000")

    def test_default_due_date_audit_for_company(self, config_2024):
        decl = _declaration(due_date_of_filing=None, entity_type=EntityType.COMPANY)
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.months_234a == 2
        assert result.u_s_234a == D("2000")

    def test_reassessment_from_notice_date(self, config_2024):
        decl = _declaration(
            assessment_type=AssessmentType.REASSESSMENT_147_POST_ASSESSMENT,
            due_date_148_notice="2024-09-30",
            tax_on_earlier_assessment=D("40000"),
        )
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.months_234a == 3
        assert result.u_s_234a == D("1800")

    def test_reassessment_invalid_notice_falls_back_to_due_date(self, config_2024):
        decl = _declaration(
            assessment_type=AssessmentType.REASSESSMENT_147_POST_ASSESSMENT,
            due_date_148_notice="2024-13-01",
            tax_on_earlier_assessment=D("40000"),
        )
        assert compute_interest(decl, config_2024, TAX, TaxBreakdown()).u_s_234a == D("3000")


class TestSection234B:
    """Advance-tax default."""

    def test_from_first_april(self, config_2024):
        result = compute_interest(_declaration(), config_2024, TAX, TaxBreakdown())
        assert result.months_234b == 9
        assert result.u_s_234b == D("9000")

    def test_none_when_ninety_percent_paid(self, config_2024):
        decl = _declaration(advance_tax=D("90000"))
        assert compute_interest(decl, config_2024, TAX, TaxBreakdown()).u_s_234b == D("0")

    def test_filed_before_year_start(self, config_2024):
        decl = _declaration(actual_date_of_filing="2024-03-10")
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.months_234b == 1
        assert result.u_s_234a == D("0")

    def test_tds_reduces_assessed_tax(self, config_2024):
        decl = _declaration(tds=D("100000"))
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.u_s_234b == D("0")
        assert result.u_s_234c == D("0")


class TestSection234C:
    """Deferment of installments."""

    def test_nothing_paid(self, config_2024):
        result = compute_interest(_declaration(), config_2024, TAX, TaxBreakdown())
        # 15000x3% + 45000x3% + 75000x3% + 100000x1%
        assert result.u_s_234c == D("5050")
        assert result.months_234c == {"q1": 3, "q2": 3, "q3": 3, "q4": 1}

    def test_first_installment_relief(self, config_2024):
        decl = _declaration(advance_tax_installments=AdvanceTaxInstallments(q1=D("12000")))
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.months_234c["q1"] == 0
        assert result.u_s_234c == D("3760")

    def test_second_installment_relief(self, config_2024):
        decl = _declaration(advance_tax_installments=AdvanceTaxInstallments(q1=D("15000"), q2=D("21000")))
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.months_234c["q2"] == 0
        assert result.months_234c["q3"] == 3
        # 39000x3% + 64000x1%
        assert result.u_s_234c == D("1810")

    def test_capital_gains_tax_excluded_from_early_installments(self, config_2024):
        tax = TaxBreakdown(on_stcg_111a=D("100000"))
        result = compute_interest(_declaration(), config_2024, TAX, tax)
        assert result.months_234c == {"q1": 0, "q2": 0, "q3": 0, "q4": 1}
        assert result.u_s_234c == D("1000")

    def test_presumptive_single_installment(self, config_2024):
        decl = _declaration(business=BusinessIncome(presumptive=Scheme44AD()))
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.u_s_234c == D("1000")
        assert result.months_234c == {"q1": 0, "q2": 0, "q3": 0, "q4": 1}


class TestTotal:

    def test_total_rounded(self, config_2024):
        result = compute_interest(_declaration(), config_2024, TAX, TaxBreakdown())
        assert result.total_interest == D("19050")

    def test_invalid_filing_date_zeroes_date_based_sections(self, config_2024):
        decl = _declaration(actual_date_of_filing="not-a-date")
        result = compute_interest(decl, config_2024, TAX, TaxBreakdown())
        assert result.u_s_234a == D("0")
        assert result.u_s_234b == D("0")
        assert result.total_interest == D("5050")

    def test_rounding_half_up(self, config_2024):
        result = compute_interest(_declaration(), config_2024, D("150.5"), TaxBreakdown())
        unrounded = result.u_s_234a + result.u_s_234b + result.u_s_234c
        assert result.total_interest == unrounded.quantize(D("1"), rounding=ROUND_HALF_UP)
