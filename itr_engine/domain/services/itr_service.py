# itr_engine/domain/services/itr_service.py
"""
Assessed income-tax computation.

Pipeline (strictly in this order):
1. Resolve the year configuration and the effective regime
2. Aggregate domestic income and split foreign income into pools
3. Set off losses
4. Gross total income → net taxable income
5. Tax, surcharge, marginal relief, rebate, cess (or trust tax)
6. Foreign tax credit
7. Interest u/s 234A/B/C and net payable

The engine is a pure function of (declaration, configuration); pools and the
set-off ledger live only for one call.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from itr_engine.domain.models.computation import (
    ComputationResult,
    HeadBreakdown,
    IncomeBreakdown,
    RegimeComparison,
)
from itr_engine.domain.models.declaration import Declaration
from itr_engine.domain.models.enums import (
    SLAB_ENTITIES,
    EntityType,
    IncomeHead,
    TaxRegime,
)
from itr_engine.domain.models.year_config import YearConfiguration, YearConfigurationTable
from itr_engine.domain.services.foreign_tax_credit import apply_foreign_tax_credit, average_rate
from itr_engine.domain.services.income_aggregator import AggregatedIncome, aggregate_income
from itr_engine.domain.services.interest import compute_interest
from itr_engine.domain.services.international_income import ForeignIncomeSplit, split_foreign_income
from itr_engine.domain.services.loss_setoff import set_off_losses
from itr_engine.domain.services.tax_calculator import compute_tax, compute_trust_tax
from itr_engine.domain.services.year_config_service import get_year_config_service

logger = logging.getLogger("itr_service")

ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def resolve_configuration(
    assessment_year: str,
    configuration: YearConfigurationTable | None = None,
) -> YearConfiguration:
    """Raises ConfigurationMissingError when the year has no configuration."""
    if configuration is None:
        return get_year_config_service().get(assessment_year)
    return configuration.get(assessment_year)


def effective_regime(declaration: Declaration, config: YearConfiguration) -> TaxRegime:
    """New regime only when the year offers it and the entity is slab-taxed."""
    if declaration.regime != TaxRegime.NEW:
        return TaxRegime.OLD
    if not config.new_regime_available:
        logger.warning(
            "New regime not available for AY %s, computing under old regime",
            config.assessment_year.value,
        )
        return TaxRegime.OLD
    if declaration.entity_type not in SLAB_ENTITIES:
        logger.warning(
            "New regime not applicable to %s, computing under old regime",
            declaration.entity_type.value,
        )
        return TaxRegime.OLD
    return TaxRegime.NEW


def _build_pools(income: AggregatedIncome, foreign: ForeignIncomeSplit) -> dict[IncomeHead, Decimal]:
    """Fresh pre-set-off pool; every head floored at 0."""
    hp_income = income.house_property.income if income.house_property else ZERO
    pools = {
        IncomeHead.SALARY: max(ZERO, income.salary),
        IncomeHead.HOUSE_PROPERTY: max(ZERO, hp_income),
        IncomeHead.BUSINESS: max(ZERO, income.business),
        IncomeHead.SPECULATIVE: max(ZERO, income.speculative),
        IncomeHead.STCG_111A: max(ZERO, income.stcg_111a),
        IncomeHead.STCG_OTHER: max(ZERO, income.stcg_other),
        IncomeHead.LTCG_112A: max(ZERO, income.ltcg_112a),
        IncomeHead.LTCG_OTHER: max(ZERO, income.ltcg_other),
        IncomeHead.OTHER_SOURCES: max(ZERO, income.other_sources),
        IncomeHead.RACE_HORSE: max(ZERO, income.race_horse),
        IncomeHead.WINNINGS: max(ZERO, income.winnings),
    }
    for head, amount in foreign.slab_buckets.items():
        pools[head] += max(ZERO, amount)
    return pools


def _income_breakdown(
    income: AggregatedIncome,
    foreign: ForeignIncomeSplit,
    pools: dict[IncomeHead, Decimal],
) -> IncomeBreakdown:
    hp = income.house_property
    return IncomeBreakdown(
        salary=HeadBreakdown(total_additions=income.salary, assessed=pools[IncomeHead.SALARY]),
        house_property=HeadBreakdown(
            total_additions=hp.income if hp else ZERO,
            assessed=pools[IncomeHead.HOUSE_PROPERTY],
        ),
        business=HeadBreakdown(
            base_amount=income.business_base,
            total_additions=income.business_additions + income.speculative,
            assessed=pools[IncomeHead.BUSINESS] + pools[IncomeHead.SPECULATIVE],
        ),
        capital_gains=HeadBreakdown(
            total_additions=income.capital_gain_adjustments,
            assessed=(
                pools[IncomeHead.STCG_111A] + pools[IncomeHead.STCG_OTHER]
                + pools[IncomeHead.LTCG_112A] + pools[IncomeHead.LTCG_OTHER]
            ),
        ),
        other_sources=HeadBreakdown(
            total_additions=income.other_sources,
            assessed=pools[IncomeHead.OTHER_SOURCES] + pools[IncomeHead.RACE_HORSE],
        ),
        winnings=HeadBreakdown(
            total_additions=pools[IncomeHead.WINNINGS],
            assessed=pools[IncomeHead.WINNINGS],
        ),
        deemed_income=income.deemed,
        house_property_nav=hp.nav if hp else ZERO,
        house_property_deduction_24a=hp.standard_deduction_24a if hp else ZERO,
        foreign_income_added=foreign.net_foreign_income_added,
        foreign_special_rate_income=foreign.special_rate_income,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute(
    declaration: Declaration,
    configuration: YearConfigurationTable | None = None,
) -> ComputationResult:
    """
    Compute the full tax liability for *declaration*.

    Raises
    ------
    ConfigurationMissingError
        If no configuration exists for the declaration's assessment year.
    """
    config = resolve_configuration(declaration.assessment_year, configuration)
    regime = effective_regime(declaration, config)
    logger.debug(
        "Computing AY %s for %s under %s regime (config: %s)",
        config.assessment_year.value, declaration.entity_type.value, regime.value, config.source,
    )

    income = aggregate_income(declaration, config)
    foreign = split_foreign_income(declaration.international_income, config.tax_rates)
    pools = _build_pools(income, foreign)

    hp_income = income.house_property.income if income.house_property else ZERO
    set_off = set_off_losses(
        pools,
        declaration.losses,
        house_property_loss=-min(ZERO, hp_income),
        hp_loss_setoff_limit=config.deduction_limits.hp_loss_setoff_limit,
    )
    pools = set_off.pools

    gross_total_income = sum(pools.values(), ZERO) + income.deemed + foreign.special_rate_income
    if declaration.filing.income_as_per_earlier_assessment is not None:
        gross_total_income += declaration.filing.income_as_per_earlier_assessment
    net_taxable_income = gross_total_income + income.disallowed_deductions

    if declaration.entity_type == EntityType.TRUST:
        tax = compute_trust_tax(
            gross_total_income,
            income.trust_disallowed_12a,
            income.trust_disallowed_10_23c,
            config,
        )
        foreign_tax_relief = ZERO
    else:
        tax = compute_tax(
            entity_type=declaration.entity_type,
            config=config,
            regime=regime,
            age_band=declaration.age_band,
            company_type=declaration.company_type,
            previous_year_turnover=declaration.previous_year_turnover,
            pools=pools,
            deemed_income=income.deemed,
            net_taxable_income=net_taxable_income,
            foreign=foreign,
        )
        overall_rate = average_rate(tax.total_before_relief, tax.net_taxable_income)
        foreign_tax_relief = apply_foreign_tax_credit(foreign.items, tax.foreign_income, overall_rate)

    total_tax_payable = max(ZERO, tax.total_before_relief - foreign_tax_relief)
    interest = compute_interest(declaration, config, total_tax_payable, tax.tax)

    tds = declaration.tds or ZERO
    advance_tax = declaration.advance_tax or ZERO
    net_payable = total_tax_payable + interest.total_interest - tds - advance_tax

    logger.info(
        "AY %s computed (%s regime): NTI %s, tax payable %s, net payable %s",
        config.assessment_year.value, regime.value,
        tax.net_taxable_income, total_tax_payable, net_payable,
    )

    return ComputationResult(
        assessment_year=config.assessment_year.value,
        regime=regime,
        gross_total_income=gross_total_income,
        disallowed_deductions=income.disallowed_deductions,
        net_taxable_income=max(ZERO, tax.net_taxable_income),
        agricultural_income=income.agricultural,
        tax_liability=tax.tax_before_surcharge,
        surcharge=tax.surcharge,
        marginal_relief=tax.marginal_relief,
        rebate_87a=tax.rebate_87a,
        cess=tax.cess,
        foreign_tax_relief=foreign_tax_relief,
        total_tax_payable=total_tax_payable,
        tds=tds,
        advance_tax=advance_tax,
        net_payable=net_payable,
        interest=interest,
        income=_income_breakdown(income, foreign, pools),
        tax=tax.tax,
        income_after_set_off=pools,
        set_off=set_off.ledger,
        losses_carried_forward=set_off.carried_forward,
        foreign_income=tax.foreign_income,
        trust=tax.trust,
    )


def compare_regimes(
    declaration: Declaration,
    configuration: YearConfigurationTable | None = None,
) -> RegimeComparison:
    """Compute under both regimes on independent copies and recommend the cheaper one."""
    config = resolve_configuration(declaration.assessment_year, configuration)

    old_declaration = declaration.model_copy(update={"regime": TaxRegime.OLD}, deep=True)
    old = compute(old_declaration, configuration)

    if not config.new_regime_available or declaration.entity_type not in SLAB_ENTITIES:
        return RegimeComparison(old_regime=old, recommended_regime=TaxRegime.OLD)

    new_declaration = declaration.model_copy(update={"regime": TaxRegime.NEW}, deep=True)
    new = compute(new_declaration, configuration)

    # New regime wins ties
    if new.net_payable <= old.net_payable:
        recommended, savings = TaxRegime.NEW, old.net_payable - new.net_payable
    else:
        recommended, savings = TaxRegime.OLD, new.net_payable - old.net_payable

    logger.info("Regime comparison AY %s: recommend %s (saves %s)", config.assessment_year.value, recommended.value, savings)
    return RegimeComparison(
        old_regime=old,
        new_regime=new,
        recommended_regime=recommended,
        savings=savings,
    )
