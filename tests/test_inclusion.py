"""Tests for residency-based inclusion of line items."""

from decimal import Decimal

from conftest import items

from itr_engine.domain.models.declaration import LineItem
from itr_engine.domain.models.enums import ResidentialStatus
from itr_engine.domain.services.inclusion import taxable_value

ROR = ResidentialStatus.RESIDENT_ORDINARY
RNOR = ResidentialStatus.RESIDENT_NOT_ORDINARY
NR = ResidentialStatus.NON_RESIDENT

MIXED = items(100000) + items(50000, location="USA")


class TestResidency:
    """Which items each residential status brings to tax."""

    def test_ror_includes_everything(self):
        assert taxable_value(MIXED, ROR) == Decimal("150000")

    def test_rnor_includes_india_only(self):
        assert taxable_value(MIXED, RNOR) == Decimal("100000")

    def test_rnor_includes_foreign_business_controlled_from_india(self):
        assert taxable_value(MIXED, RNOR, controlled_from_india=True, is_business=True) == Decimal("150000")

    def test_rnor_control_flag_ignored_for_non_business(self):
        assert taxable_value(MIXED, RNOR, controlled_from_india=True) == Decimal("100000")

    def test_nr_includes_india_only_even_for_business(self):
        assert taxable_value(MIXED, NR, controlled_from_india=True, is_business=True) == Decimal("100000")


class TestMissingData:
    """Absent items or amounts contribute nothing."""

    def test_none_is_zero(self):
        assert taxable_value(None, ROR) == Decimal("0")

    def test_empty_is_zero(self):
        assert taxable_value((), ROR) == Decimal("0")

    def test_missing_amount_is_zero(self):
        assert taxable_value((LineItem(amount=None), LineItem(amount=Decimal("500"))), ROR) == Decimal("500")

    def test_negative_amounts_are_summed(self):
        assert taxable_value(items(1000, -300), ROR) == Decimal("700")
