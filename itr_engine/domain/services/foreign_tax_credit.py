# itr_engine/domain/services/foreign_tax_credit.py
"""
Indian tax on foreign income items and the credit for foreign tax paid.

Credit requires Form 67. With a tax treaty (s.90/90A) the credit is the lower
of foreign tax paid and Indian tax on the item; without one (s.91) it is the
lower of foreign tax paid and the item taxed at the overall average rate.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from itr_engine.domain.models.computation import ForeignIncomeResult
from itr_engine.domain.services.international_income import ClassifiedForeignItem

logger = logging.getLogger("foreign_tax_credit")

ZERO = Decimal("0")


def average_rate(tax: Decimal, income: Decimal) -> Decimal:
    """Tax as a percentage of income; 0 when there is no income."""
    if income <= 0:
        return ZERO
    return tax / income * 100


def price_foreign_income(
    items: list[ClassifiedForeignItem],
    average_normal_rate: Decimal,
) -> list[ForeignIncomeResult]:
    """Indian tax per item, at its special rate or the average rate on normal income."""
    results = []
    for classified in items:
        item = classified.item
        rate = classified.special_rate if classified.is_special_rate else average_normal_rate
        if item.form67_filed and item.dtaa_applicable and item.tax_rate_as_per_dtaa is not None:
            rate = min(rate, item.tax_rate_as_per_dtaa)

        indian_tax = classified.taxable_amount * rate / 100
        results.append(ForeignIncomeResult(
            item_id=item.item_id,
            taxable_amount=classified.taxable_amount,
            indian_tax=indian_tax,
            net_tax=indian_tax,
            applicable_rate=rate,
        ))
    return results


def apply_foreign_tax_credit(
    items: list[ClassifiedForeignItem],
    results: list[ForeignIncomeResult],
    overall_average_rate: Decimal,
) -> Decimal:
    """Fill in the credit on each priced result; returns total credit allowed."""
    total = ZERO
    for classified, result in zip(items, results):
        item = classified.item
        if not item.form67_filed:
            continue

        tax_paid = item.tax_paid_inr or ZERO
        if item.dtaa_applicable:
            result.ftc_90_90a = min(tax_paid, result.indian_tax)
        else:
            result.ftc_91 = min(tax_paid, classified.taxable_amount * overall_average_rate / 100)

        result.total_ftc = result.ftc_90_90a + result.ftc_91
        result.net_tax = result.indian_tax - result.total_ftc
        total += result.total_ftc

    if total:
        logger.debug("Foreign tax credit allowed: %s", total)
    return total
