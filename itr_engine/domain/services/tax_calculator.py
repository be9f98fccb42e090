# itr_engine/domain/services/tax_calculator.py
"""
Tax, surcharge, marginal relief, rebate u/s 87A and cess.

Special-rate incomes (deemed income, winnings, STCG 111A, LTCG 112A/other,
foreign items) are taxed at their own rates; the rest is "normal income" taxed
on the entity's slab table or flat rate. Trusts are taxed at the maximum
marginal rate instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from itr_engine.domain.models.computation import (
    ForeignIncomeResult,
    TaxBreakdown,
    TrustComputation,
)
from itr_engine.domain.models.enums import (
    FLAT_RATE_ENTITIES,
    SLAB_ENTITIES,
    AgeBand,
    CompanyType,
    EntityType,
    IncomeHead,
    TaxRegime,
)
from itr_engine.domain.models.year_config import Slab, SurchargeSlab, YearConfiguration
from itr_engine.domain.services.foreign_tax_credit import average_rate, price_foreign_income
from itr_engine.domain.services.international_income import ForeignIncomeSplit

logger = logging.getLogger("tax_calculator")

ZERO = Decimal("0")


@dataclass
class TaxComputation:
    """Tax for one declaration under one regime, up to cess."""
    net_taxable_income: Decimal = ZERO
    normal_income: Decimal = ZERO
    tax: TaxBreakdown = field(default_factory=TaxBreakdown)
    tax_before_surcharge: Decimal = ZERO
    gross_surcharge: Decimal = ZERO
    marginal_relief: Decimal = ZERO
    surcharge: Decimal = ZERO              # Net of relief, incl. deemed-income surcharge
    rebate_87a: Decimal = ZERO
    tax_after_rebate: Decimal = ZERO
    cess: Decimal = ZERO
    foreign_income: list[ForeignIncomeResult] = field(default_factory=list)
    trust: TrustComputation | None = None

    @property
    def total_before_relief(self) -> Decimal:
        return self.tax_after_rebate + self.cess


# ---------------------------------------------------------------------------
# Slab / surcharge primitives
# ---------------------------------------------------------------------------

def compute_slab_tax(taxable_income: Decimal, slabs: list[Slab]) -> Decimal:
    """
    Compute tax using slab rates.
    """
    tax = ZERO
    prev_limit = ZERO

    for upper_limit, rate in slabs:
        if taxable_income <= prev_limit:
            break
        top = taxable_income if upper_limit is None else min(taxable_income, upper_limit)
        tax += (top - prev_limit) * rate / 100
        if upper_limit is None:
            break
        prev_limit = upper_limit

    return tax


def surcharge_rate(income: Decimal, surcharge_slabs: list[SurchargeSlab]) -> tuple[Decimal, Decimal]:
    """(rate, threshold) of the highest threshold *income* strictly exceeds; (0, 0) if none."""
    for threshold, rate in sorted(surcharge_slabs, key=lambda s: s[0], reverse=True):
        if income > threshold:
            return rate, threshold
    return ZERO, ZERO


def normal_tax(
    income: Decimal,
    entity_type: EntityType,
    config: YearConfiguration,
    regime: TaxRegime = TaxRegime.OLD,
    age_band: AgeBand = AgeBand.BELOW_60,
    company_type: CompanyType = CompanyType.DOMESTIC,
    previous_year_turnover: Decimal | None = None,
) -> Decimal:
    """Tax on normal income for the entity's table."""
    if entity_type in SLAB_ENTITIES:
        age = age_band if entity_type == EntityType.INDIVIDUAL else AgeBand.BELOW_60
        return compute_slab_tax(income, config.slab_table(entity_type).slabs_for(regime, age))

    if entity_type in FLAT_RATE_ENTITIES:
        table = config.flat_rate_entities.get(entity_type)
        return income * table.rate / 100 if table else ZERO

    if entity_type == EntityType.COMPANY:
        company = config.company
        if company_type == CompanyType.FOREIGN:
            return income * company.foreign_rate / 100
        turnover = previous_year_turnover or ZERO
        rate = company.domestic_rate_small if turnover <= company.domestic_turnover_threshold else company.domestic_rate_large
        return income * rate / 100

    return ZERO


def surcharge_table(
    entity_type: EntityType,
    config: YearConfiguration,
    regime: TaxRegime = TaxRegime.OLD,
    company_type: CompanyType = CompanyType.DOMESTIC,
) -> list[SurchargeSlab]:
    if entity_type in SLAB_ENTITIES:
        return config.slab_table(entity_type).surcharge_for(regime)
    if entity_type in FLAT_RATE_ENTITIES:
        table = config.flat_rate_entities.get(entity_type)
        return table.surcharge_rates if table else []
    if entity_type == EntityType.COMPANY:
        if company_type == CompanyType.FOREIGN:
            return config.company.foreign_surcharge_rates
        return config.company.domestic_surcharge_rates
    return []


# ---------------------------------------------------------------------------
# Standard taxpayers
# ---------------------------------------------------------------------------

def compute_tax(
    *,
    entity_type: EntityType,
    config: YearConfiguration,
    regime: TaxRegime,
    age_band: AgeBand,
    company_type: CompanyType,
    previous_year_turnover: Decimal | None,
    pools: dict[IncomeHead, Decimal],
    deemed_income: Decimal,
    net_taxable_income: Decimal,
    foreign: ForeignIncomeSplit,
) -> TaxComputation:
    rates = config.tax_rates
    result = TaxComputation(net_taxable_income=net_taxable_income)
    breakdown = result.tax

    def _normal_tax(income: Decimal) -> Decimal:
        return normal_tax(income, entity_type, config, regime, age_band, company_type, previous_year_turnover)

    # Deemed income u/s 115BBE carries a fixed surcharge, outside relief and rebate
    deemed_tax = deemed_income * rates.deemed_income_115bbe / 100
    deemed_surcharge = deemed_tax * rates.deemed_income_surcharge / 100
    breakdown.on_deemed_income = deemed_tax + deemed_surcharge

    winnings = pools.get(IncomeHead.WINNINGS, ZERO)
    stcg_111a = pools.get(IncomeHead.STCG_111A, ZERO)
    ltcg_112a = pools.get(IncomeHead.LTCG_112A, ZERO)
    ltcg_other = pools.get(IncomeHead.LTCG_OTHER, ZERO)

    breakdown.on_winnings = winnings * rates.winnings / 100
    breakdown.on_stcg_111a = stcg_111a * rates.stcg_111a / 100
    breakdown.on_ltcg_112a = max(ZERO, ltcg_112a - rates.ltcg_112a_exemption) * rates.ltcg_112a_rate / 100
    breakdown.on_ltcg_other = ltcg_other * rates.ltcg_other_rate / 100

    special_income = winnings + ltcg_112a + ltcg_other + stcg_111a + deemed_income
    result.normal_income = max(ZERO, net_taxable_income - special_income - foreign.net_foreign_income_added)
    breakdown.on_normal_income = _normal_tax(result.normal_income)

    # Foreign items need the average rate on normal income
    result.foreign_income = price_foreign_income(
        foreign.items, average_rate(breakdown.on_normal_income, result.normal_income),
    )
    breakdown.on_foreign_income = sum((r.indian_tax for r in result.foreign_income), ZERO)

    special_tax = (
        breakdown.on_stcg_111a + breakdown.on_ltcg_112a + breakdown.on_ltcg_other
        + breakdown.on_winnings + breakdown.on_foreign_income
    )
    tax_on_other_incomes = breakdown.on_normal_income + special_tax
    result.tax_before_surcharge = tax_on_other_incomes + deemed_tax

    # Surcharge and marginal relief
    slabs = surcharge_table(entity_type, config, regime, company_type)
    rate, threshold = surcharge_rate(net_taxable_income, slabs)
    if rate > 0:
        result.gross_surcharge = tax_on_other_incomes * rate / 100

        normal_at_threshold = max(ZERO, threshold - special_income - foreign.net_foreign_income_added)
        tax_at_threshold = _normal_tax(normal_at_threshold) + special_tax
        threshold_rate, _ = surcharge_rate(threshold, slabs)
        tax_at_threshold += tax_at_threshold * threshold_rate / 100

        capped = tax_at_threshold + (net_taxable_income - threshold)
        excess = tax_on_other_incomes + result.gross_surcharge - capped
        if excess > 0:
            result.marginal_relief = min(excess, result.gross_surcharge)
            logger.debug(
                "Marginal relief %s at threshold %s (surcharge %s%%)",
                result.marginal_relief, threshold, rate,
            )

    net_surcharge = result.gross_surcharge - result.marginal_relief
    result.surcharge = net_surcharge + deemed_surcharge
    tax_before_rebate = result.tax_before_surcharge + result.surcharge

    # Rebate u/s 87A: individuals only
    if entity_type == EntityType.INDIVIDUAL:
        rule = config.slab_table(entity_type).rebate_for(regime)
        if rule is not None and net_taxable_income <= rule.income_ceiling:
            surcharge_on_special = ZERO
            if tax_on_other_incomes > 0:
                surcharge_on_special = net_surcharge * special_tax / tax_on_other_incomes
            excluded = breakdown.on_deemed_income + special_tax + surcharge_on_special
            eligible = max(ZERO, tax_before_rebate - excluded)
            result.rebate_87a = min(eligible, rule.limit)

    result.tax_after_rebate = max(ZERO, tax_before_rebate - result.rebate_87a)
    result.cess = result.tax_after_rebate * rates.cess / 100
    return result


# ---------------------------------------------------------------------------
# Trusts
# ---------------------------------------------------------------------------

def compute_trust_tax(
    gross_total_income: Decimal,
    disallowed_12a: Decimal,
    disallowed_10_23c: Decimal,
    config: YearConfiguration,
) -> TaxComputation:
    """Trust taxed as an AOP at the maximum marginal rate on income plus disallowed receipts."""
    rate = config.tax_rates.aop_mmr
    taxable = gross_total_income + disallowed_12a + disallowed_10_23c
    trust = TrustComputation(
        total_income_before_exemption=gross_total_income,
        disallowed_12a=disallowed_12a,
        disallowed_10_23c=disallowed_10_23c,
        taxable_income=taxable,
        applicable_rate=rate,
        tax=taxable * rate / 100,
    )
    if disallowed_12a > 0:
        trust.violation_flags.append(f"Receipts disallowed u/s 12A/12AA/12AB: {disallowed_12a:.2f}")
    if disallowed_10_23c > 0:
        trust.violation_flags.append(f"Receipts disallowed u/s 10(23C): {disallowed_10_23c:.2f}")

    result = TaxComputation(net_taxable_income=taxable, trust=trust)
    result.tax_before_surcharge = trust.tax
    result.tax.on_normal_income = trust.tax

    aop_surcharge = config.slab_table(EntityType.AOP).surcharge_for(TaxRegime.OLD)
    surcharge_pct, _ = surcharge_rate(taxable, aop_surcharge)
    result.gross_surcharge = trust.tax * surcharge_pct / 100
    result.surcharge = result.gross_surcharge

    result.tax_after_rebate = max(ZERO, result.tax_before_surcharge + result.surcharge)
    result.cess = result.tax_after_rebate * config.tax_rates.cess / 100
    return result
