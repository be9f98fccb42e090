# itr_engine/domain/services/house_property.py
"""
Income from house property (sections 22–24).

Self-occupied: annual value nil, interest u/s 24(b) capped.
Let-out: NAV = rent − municipal taxes, 30% standard deduction u/s 24(a),
interest uncapped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable

from itr_engine.domain.models.declaration import HouseProperty
from itr_engine.domain.models.enums import ResidentialStatus
from itr_engine.domain.models.year_config import DeductionLimits
from itr_engine.domain.services.inclusion import taxable_value

logger = logging.getLogger("house_property")

STANDARD_DEDUCTION_24A = Decimal("30")


@dataclass
class HousePropertyResult:
    income: Decimal = Decimal("0")
    nav: Decimal = Decimal("0")
    standard_deduction_24a: Decimal = Decimal("0")
    interest_deduction_24b: Decimal = Decimal("0")


def _round(value: Decimal) -> Decimal:
    """Nearest rupee, halves towards +infinity (-100.5 -> -100)."""
    return (value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)


def compute_property(
    prop: HouseProperty,
    status: ResidentialStatus,
    limits: DeductionLimits,
) -> HousePropertyResult:
    """Income from a single property, rounded to the rupee."""
    gross_rent = taxable_value(prop.gross_rent, status)
    municipal_taxes = taxable_value(prop.municipal_taxes, status)
    interest = taxable_value(prop.interest_on_loan, status)

    if prop.is_self_occupied:
        nav = Decimal("0")
        deduction_24a = Decimal("0")
        deduction_24b = min(interest, limits.hp_interest_deduction_limit_sop)
    else:
        nav = max(Decimal("0"), gross_rent - municipal_taxes)
        deduction_24a = nav * STANDARD_DEDUCTION_24A / 100
        deduction_24b = interest

    return HousePropertyResult(
        income=_round(nav - deduction_24a - deduction_24b),
        nav=_round(nav),
        standard_deduction_24a=_round(deduction_24a),
        interest_deduction_24b=_round(deduction_24b),
    )


def compute_house_property(
    properties: Iterable[HouseProperty],
    status: ResidentialStatus,
    limits: DeductionLimits,
) -> HousePropertyResult:
    """Aggregate all properties into one figure before set-off."""
    total = HousePropertyResult()
    for prop in properties:
        result = compute_property(prop, status, limits)
        logger.debug("Property %s: income %s", prop.property_id or "-", result.income)
        total.income += result.income
        total.nav += result.nav
        total.standard_deduction_24a += result.standard_deduction_24a
        total.interest_deduction_24b += result.interest_deduction_24b
    return total
