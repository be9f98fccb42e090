# itr_engine/domain/services/income_aggregator.py
"""
Income aggregation by statutory head.

Every component is summed from an explicit enumeration (SalaryComponent,
BusinessAddition, ...) through the inclusion filter. Presumptive business
income is computed per scheme from the year's presumptive rates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from itr_engine.domain.models.declaration import (
    AggregateReceiptsScheme,
    Declaration,
    IncomeSource,
    NoPresumptiveScheme,
    Scheme44AD,
    Scheme44ADA,
    Scheme44AE,
)
from itr_engine.domain.models.enums import (
    BusinessAddition,
    CapitalGainAdjustment,
    DeductionHead,
    DeemedIncomeSection,
    OtherSourceComponent,
    ResidentialStatus,
    SalaryComponent,
)
from itr_engine.domain.models.year_config import PresumptiveRates, YearConfiguration
from itr_engine.domain.services.house_property import HousePropertyResult, compute_house_property
from itr_engine.domain.services.inclusion import taxable_value

logger = logging.getLogger("income_aggregator")

ZERO = Decimal("0")


@dataclass
class AggregatedIncome:
    """Domestic income per head, before foreign income and set-off."""
    salary: Decimal = ZERO
    house_property: HousePropertyResult | None = None
    business: Decimal = ZERO                  # Non-speculative, incl. additions and 43CA
    business_base: Decimal = ZERO             # Net profit or presumptive income
    business_additions: Decimal = ZERO
    speculative: Decimal = ZERO
    stcg_111a: Decimal = ZERO
    stcg_other: Decimal = ZERO                # Incl. capital-gain adjustments
    ltcg_112a: Decimal = ZERO
    ltcg_other: Decimal = ZERO
    capital_gain_adjustments: Decimal = ZERO
    other_sources: Decimal = ZERO
    race_horse: Decimal = ZERO
    winnings: Decimal = ZERO
    agricultural: Decimal = ZERO
    deemed: Decimal = ZERO
    disallowed_deductions: Decimal = ZERO
    trust_disallowed_12a: Decimal = ZERO
    trust_disallowed_10_23c: Decimal = ZERO


def _sum_components(
    components: dict,
    members,
    status: ResidentialStatus,
    controlled_from_india: bool = False,
    is_business: bool = False,
) -> Decimal:
    total = ZERO
    for member in members:
        total += taxable_value(components.get(member), status, controlled_from_india, is_business)
    return total


# ---------------------------------------------------------------------------
# Presumptive schemes
# ---------------------------------------------------------------------------

def _business_value(items: IncomeSource, status: ResidentialStatus, controlled: bool) -> Decimal:
    return taxable_value(items, status, controlled, is_business=True)


def _income_44ad(scheme: Scheme44AD, status, controlled, rates: PresumptiveRates) -> Decimal:
    digital = _business_value(scheme.turnover_digital, status, controlled)
    other = _business_value(scheme.turnover_other, status, controlled)
    return digital * rates.sec_44ad_digital / 100 + other * rates.sec_44ad_other / 100


def _income_44ada(scheme: Scheme44ADA, status, controlled, rates: PresumptiveRates) -> Decimal:
    return _business_value(scheme.gross_receipts, status, controlled) * rates.sec_44ada / 100


def _income_44ae(scheme: Scheme44AE, status, controlled, rates: PresumptiveRates) -> Decimal:
    total = ZERO
    for vehicle in scheme.vehicles:
        months = min(12, max(0, vehicle.months or 0))
        if vehicle.kind == "heavy":
            total += (vehicle.tonnage or ZERO) * rates.sec_44ae_heavy_per_ton_month * months
        else:
            total += rates.sec_44ae_other_per_month * months
    return total


def _income_aggregate_receipts(
    scheme: AggregateReceiptsScheme, status, controlled, rates: PresumptiveRates
) -> Decimal:
    rate = {
        "44B": rates.sec_44b,
        "44BB": rates.sec_44bb,
        "44BBA": rates.sec_44bba,
        "44BBB": rates.sec_44bbb,
    }.get(scheme.scheme, ZERO)
    return _business_value(scheme.aggregate_receipts, status, controlled) * rate / 100


_PRESUMPTIVE_INCOME: dict[type, Callable[..., Decimal]] = {
    Scheme44AD: _income_44ad,
    Scheme44ADA: _income_44ada,
    Scheme44AE: _income_44ae,
    AggregateReceiptsScheme: _income_aggregate_receipts,
}


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def aggregate_income(declaration: Declaration, config: YearConfiguration) -> AggregatedIncome:
    """Sum every domestic income head for *declaration* under *config*."""
    status = declaration.residential_status
    business = declaration.business
    controlled = business.is_controlled_from_india
    result = AggregatedIncome()

    # Salary: exemptions and deductions are entered as signed additions
    result.salary = _sum_components(declaration.salary, SalaryComponent, status)

    result.house_property = compute_house_property(
        declaration.house_properties, status, config.deduction_limits,
    )

    # Business / profession
    result.speculative = _business_value(business.speculative_income, status, controlled)
    if isinstance(business.presumptive, NoPresumptiveScheme):
        result.business_base = _business_value(business.net_profit, status, controlled)
        result.business_additions = _sum_components(
            business.additions, BusinessAddition, status, controlled, is_business=True,
        )
    else:
        handler = _PRESUMPTIVE_INCOME.get(type(business.presumptive))
        if handler is None:
            logger.warning("Unknown presumptive scheme %r, treated as nil income", business.presumptive)
            result.business_base = ZERO
        else:
            result.business_base = handler(
                business.presumptive, status, controlled, config.presumptive_rates,
            )
        logger.debug("Presumptive income u/s %s: %s", business.presumptive.scheme, result.business_base)

    adjustment_43ca = _business_value(declaration.capital_gains.adjustment_43ca, status, controlled)
    result.business_additions += adjustment_43ca
    result.business = result.business_base + result.business_additions

    # Capital gains: adjustments are added to short-term (other)
    gains = declaration.capital_gains
    result.capital_gain_adjustments = _sum_components(gains.adjustments, CapitalGainAdjustment, status)
    result.stcg_111a = taxable_value(gains.stcg_111a, status)
    result.stcg_other = taxable_value(gains.stcg_other, status) + result.capital_gain_adjustments
    result.ltcg_112a = taxable_value(gains.ltcg_112a, status)
    result.ltcg_other = taxable_value(gains.ltcg_other, status)

    # Other sources
    other = declaration.other_sources
    result.other_sources = _sum_components(other.components, OtherSourceComponent, status)
    result.race_horse = taxable_value(other.race_horse_income, status)
    result.winnings = taxable_value(other.winnings, status)
    result.agricultural = taxable_value(other.exempt_income, status)

    result.deemed = _sum_components(declaration.deemed_income, DeemedIncomeSection, status)
    result.disallowed_deductions = _sum_components(
        declaration.disallowed_deductions, DeductionHead, status,
    )

    result.trust_disallowed_12a = taxable_value(declaration.trust.disallowed_receipts_12a, status)
    result.trust_disallowed_10_23c = taxable_value(declaration.trust.disallowed_receipts_10_23c, status)

    return result
