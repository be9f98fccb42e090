# itr_engine/domain/services/international_income.py
"""
Foreign income classification.

Each item is either taxed at a special rate (sections 115A–115BBA) or merged
into the slab-rate income pool under the head matching its nature. Tax on
each item is priced later, once the average rate on normal income is known.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterable

from itr_engine.domain.models.declaration import ForeignIncomeItem
from itr_engine.domain.models.enums import IncomeHead, IncomeNature, SpecialSection
from itr_engine.domain.models.year_config import TaxRates

logger = logging.getLogger("international_income")

ZERO = Decimal("0")

_CAPITAL_GAINS = (IncomeNature.LONG_TERM_CAPITAL_GAIN, IncomeNature.SHORT_TERM_CAPITAL_GAIN)

# Slab-rate foreign income lands in these heads; anything else is "other sources"
_SLAB_HEAD_BY_NATURE = {
    IncomeNature.SALARY: IncomeHead.SALARY,
    IncomeNature.BUSINESS_PROFESSIONAL: IncomeHead.BUSINESS,
    IncomeNature.SHORT_TERM_CAPITAL_GAIN: IncomeHead.STCG_OTHER,
    IncomeNature.LONG_TERM_CAPITAL_GAIN: IncomeHead.LTCG_OTHER,
}


@dataclass
class ClassifiedForeignItem:
    item: ForeignIncomeItem
    taxable_amount: Decimal
    special_rate: Decimal = ZERO    # Percent; 0 means slab rate

    @property
    def is_special_rate(self) -> bool:
        return self.special_rate > 0


@dataclass
class ForeignIncomeSplit:
    items: list[ClassifiedForeignItem] = field(default_factory=list)
    slab_buckets: dict[IncomeHead, Decimal] = field(default_factory=dict)
    net_foreign_income_added: Decimal = ZERO
    special_rate_income: Decimal = ZERO


# ---------------------------------------------------------------------------
# Special-rate resolution per section
# ---------------------------------------------------------------------------

def _rate_115a(item: ForeignIncomeItem, rates: TaxRates) -> Decimal:
    if item.nature in (IncomeNature.DIVIDEND, IncomeNature.INTEREST):
        return rates.foreign_115a_dividend_interest
    if item.nature in (IncomeNature.ROYALTY, IncomeNature.FEES_FOR_TECHNICAL_SERVICES):
        return rates.foreign_115a_royalty_fts
    return ZERO


def _rate_115ab(item: ForeignIncomeItem, rates: TaxRates) -> Decimal:
    if item.nature in _CAPITAL_GAINS:
        return rates.offshore_fund_ltcg_115ab
    return rates.offshore_fund_income_115ab


def _rate_115ac(item: ForeignIncomeItem, rates: TaxRates) -> Decimal:
    if item.nature in _CAPITAL_GAINS:
        return rates.gdr_fccb_ltcg_115ac
    return rates.gdr_fccb_income_115ac


def _rate_115ad(item: ForeignIncomeItem, rates: TaxRates) -> Decimal:
    if item.nature in _CAPITAL_GAINS:
        return rates.fii_fpi_ltcg_115ad if item.is_ltcg else rates.fii_fpi_stcg_other_115ad
    if item.nature == IncomeNature.INTEREST:
        return rates.fii_fpi_interest_115ad
    return ZERO


_SECTION_RATES: dict[SpecialSection, Callable[[ForeignIncomeItem, TaxRates], Decimal]] = {
    SpecialSection.SEC_115A: _rate_115a,
    SpecialSection.SEC_115AB: _rate_115ab,
    SpecialSection.SEC_115AC: _rate_115ac,
    SpecialSection.SEC_115ACA: _rate_115ac,
    SpecialSection.SEC_115AD: _rate_115ad,
    SpecialSection.SEC_115AE: lambda item, rates: rates.specified_fund_income_115ae,
    SpecialSection.SEC_115BBA: lambda item, rates: rates.foreign_115bba,
}


def special_rate_for(item: ForeignIncomeItem, rates: TaxRates) -> Decimal:
    """Special rate (percent) for *item*, or 0 when it is taxed at slab rates."""
    resolver = _SECTION_RATES.get(item.special_section)
    if resolver is None:
        return ZERO
    return resolver(item, rates)


def taxable_amount(item: ForeignIncomeItem) -> Decimal:
    """Declared amount, replaced by the arm's-length price for associated-enterprise business income."""
    amount = item.amount_inr or ZERO
    pricing = item.transfer_pricing
    if item.nature == IncomeNature.BUSINESS_PROFESSIONAL and pricing.is_associated_enterprise:
        if pricing.arms_length_price is not None:
            return pricing.arms_length_price
    return amount


def split_foreign_income(items: Iterable[ForeignIncomeItem], rates: TaxRates) -> ForeignIncomeSplit:
    split = ForeignIncomeSplit()
    for item in items:
        amount = taxable_amount(item)
        classified = ClassifiedForeignItem(item=item, taxable_amount=amount, special_rate=special_rate_for(item, rates))
        split.items.append(classified)
        split.net_foreign_income_added += amount

        if classified.is_special_rate:
            split.special_rate_income += amount
        else:
            head = _SLAB_HEAD_BY_NATURE.get(item.nature, IncomeHead.OTHER_SOURCES)
            split.slab_buckets[head] = split.slab_buckets.get(head, ZERO) + amount

        logger.debug(
            "Foreign item %s (%s, %s): %s at %s",
            item.item_id or "-", item.nature.value, item.special_section.value,
            amount, f"{classified.special_rate}%" if classified.is_special_rate else "slab rate",
        )
    return split
