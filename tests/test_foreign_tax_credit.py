"""Tests for Indian tax on foreign items and the foreign tax credit."""

from decimal import Decimal

from itr_engine.domain.models.declaration import ForeignIncomeItem
from itr_engine.domain.models.enums import IncomeNature, SpecialSection
from itr_engine.domain.services.foreign_tax_credit import (
    apply_foreign_tax_credit,
    average_rate,
    price_foreign_income,
)
from itr_engine.domain.services.international_income import ClassifiedForeignItem

D = Decimal


def _classified(special_rate="0", amount="100000", **kwargs) -> ClassifiedForeignItem:
    item = ForeignIncomeItem(
        item_id="item",
        nature=IncomeNature.DIVIDEND,
        special_section=SpecialSection.SEC_115A if D(special_rate) else SpecialSection.NONE,
        amount_inr=D(amount),
        **kwargs,
    )
    return ClassifiedForeignItem(item=item, taxable_amount=D(amount), special_rate=D(special_rate))


class TestAverageRate:

    def test_zero_income(self):
        assert average_rate(D("1000"), D("0")) == D("0")

    def test_percentage(self):
        assert average_rate(D("172500"), D("1200000")) == D("14.375")


class TestPricing:
    """Indian tax per item."""

    def test_special_rate(self):
        [result] = price_foreign_income([_classified("20")], D("12"))
        assert result.indian_tax == D("20000")
        assert result.applicable_rate == D("20")

    def test_slab_item_uses_average_normal_rate(self):
        [result] = price_foreign_income([_classified()], D("10"))
        assert result.indian_tax == D("10000")

    def test_treaty_rate_caps_with_form67(self):
        item = _classified("20", form67_filed=True, dtaa_applicable=True, tax_rate_as_per_dtaa=D("15"))
        [result] = price_foreign_income([item], D("0"))
        assert result.indian_tax == D("15000")
        assert result.applicable_rate == D("15")

    def test_treaty_rate_ignored_without_form67(self):
        item = _classified("20", dtaa_applicable=True, tax_rate_as_per_dtaa=D("15"))
        [result] = price_foreign_income([item], D("0"))
        assert result.indian_tax == D("20000")

    def test_treaty_rate_higher_than_indian_rate(self):
        item = _classified("20", form67_filed=True, dtaa_applicable=True, tax_rate_as_per_dtaa=D("25"))
        [result] = price_foreign_income([item], D("0"))
        assert result.applicable_rate == D("20")


class TestCredit:
    """Credit u/s 90/90A and 91."""

    def test_section_90_limited_to_indian_tax(self):
        items = [_classified("20", form67_filed=True, dtaa_applicable=True, tax_paid_inr=D("25000"))]
        results = price_foreign_income(items, D("0"))
        total = apply_foreign_tax_credit(items, results, D("12"))
        assert results[0].ftc_90_90a == D("20000")
        assert results[0].ftc_91 == D("0")
        assert results[0].net_tax == D("0")
        assert total == D("20000")

    def test_section_91_at_overall_average_rate(self):
        items = [_classified("20", form67_filed=True, tax_paid_inr=D("25000"))]
        results = price_foreign_income(items, D("0"))
        total = apply_foreign_tax_credit(items, results, D("12"))
        assert results[0].ftc_91 == D("12000")
        assert results[0].net_tax == D("8000")
        assert total == D("12000")

    def test_section_91_limited_to_tax_paid(self):
        items = [_classified("20", form67_filed=True, tax_paid_inr=D("5000"))]
        results = price_foreign_income(items, D("0"))
        assert apply_foreign_tax_credit(items, results, D("12")) == D("5000")

    def test_no_credit_without_form67(self):
        items = [_classified("20", dtaa_applicable=True, tax_paid_inr=D("25000"))]
        results = price_foreign_income(items, D("0"))
        assert apply_foreign_tax_credit(items, results, D("12")) == D("0")
        assert results[0].total_ftc == D("0")
        assert results[0].net_tax == D("20000")
