# itr_engine/domain/services/year_config_defaults.py
"""
Hardcoded year configurations, the last-resort layer of YearConfigService.

AY 2024-25 is the reference table. Earlier years reuse its rates (with the new
regime available from AY 2020-21 onwards) until historic tables are entered.
AY 2025-26 carries the Budget 2024 changes.
"""

from __future__ import annotations

import copy
from decimal import Decimal

from itr_engine.domain.models.enums import AgeBand, AssessmentYear, EntityType, TaxRegime
from itr_engine.domain.models.year_config import (
    FilingDueDates,
    FlatRateEntityTable,
    RebateRule,
    SlabEntityTable,
    TaxRates,
    YearConfiguration,
    YearConfigurationTable,
)

FILING_DUE_DATES: dict[AssessmentYear, FilingDueDates] = {
    AssessmentYear.AY_2025_26: FilingDueDates(non_audit="2025-09-15", audit="2025-10-31"),
    AssessmentYear.AY_2024_25: FilingDueDates(non_audit="2024-07-31", audit="2024-10-31"),
    AssessmentYear.AY_2023_24: FilingDueDates(non_audit="2023-07-31", audit="2023-10-31"),
    AssessmentYear.AY_2022_23: FilingDueDates(non_audit="2022-07-31", audit="2022-10-31"),
    AssessmentYear.AY_2021_22: FilingDueDates(non_audit="2021-07-31", audit="2021-10-31"),
    AssessmentYear.AY_2020_21: FilingDueDates(non_audit="2020-11-30", audit="2021-01-31"),
    AssessmentYear.AY_2019_20: FilingDueDates(non_audit="2019-08-31", audit="2019-10-31"),
    AssessmentYear.AY_2018_19: FilingDueDates(non_audit="2018-07-31", audit="2018-10-31"),
    AssessmentYear.AY_2017_18: FilingDueDates(non_audit="2017-07-31", audit="2017-10-31"),
    AssessmentYear.AY_2016_17: FilingDueDates(non_audit="2016-07-31", audit="2016-10-31"),
    AssessmentYear.AY_2015_16: FilingDueDates(non_audit="2015-08-31", audit="2015-09-30"),
}

_OLD_BELOW_60 = [
    (Decimal("250000"), Decimal("0")),
    (Decimal("500000"), Decimal("5")),
    (Decimal("1000000"), Decimal("20")),
    (None, Decimal("30")),
]
_OLD_SENIOR = [
    (Decimal("300000"), Decimal("0")),
    (Decimal("500000"), Decimal("5")),
    (Decimal("1000000"), Decimal("20")),
    (None, Decimal("30")),
]
_OLD_SUPER_SENIOR = [
    (Decimal("500000"), Decimal("0")),
    (Decimal("1000000"), Decimal("20")),
    (None, Decimal("30")),
]
# New regime, AY 2024-25: same for all ages
_NEW_2024 = [
    (Decimal("300000"), Decimal("0")),
    (Decimal("600000"), Decimal("5")),
    (Decimal("900000"), Decimal("10")),
    (Decimal("1200000"), Decimal("15")),
    (Decimal("1500000"), Decimal("20")),
    (None, Decimal("30")),
]
# New regime, AY 2025-26 (revised in Budget 2024)
_NEW_2025 = [
    (Decimal("300000"), Decimal("0")),
    (Decimal("700000"), Decimal("5")),
    (Decimal("1000000"), Decimal("10")),
    (Decimal("1200000"), Decimal("15")),
    (Decimal("1500000"), Decimal("20")),
    (None, Decimal("30")),
]

_SURCHARGE = [
    (Decimal("5000000"), Decimal("10")),
    (Decimal("10000000"), Decimal("15")),
    (Decimal("20000000"), Decimal("25")),
    (Decimal("50000000"), Decimal("37")),
]
# New regime caps surcharge at 25%
_SURCHARGE_NEW = [
    (Decimal("5000000"), Decimal("10")),
    (Decimal("10000000"), Decimal("15")),
    (Decimal("20000000"), Decimal("25")),
]
_FLAT_SURCHARGE = [(Decimal("10000000"), Decimal("12"))]


def _slab_entities(new_slabs: list) -> dict[EntityType, SlabEntityTable]:
    individual = SlabEntityTable(
        slabs={
            TaxRegime.OLD: {
                AgeBand.BELOW_60: list(_OLD_BELOW_60),
                AgeBand.SENIOR: list(_OLD_SENIOR),
                AgeBand.SUPER_SENIOR: list(_OLD_SUPER_SENIOR),
            },
            TaxRegime.NEW: {age: list(new_slabs) for age in AgeBand},
        },
        surcharge_rates=list(_SURCHARGE),
        surcharge_rates_new=list(_SURCHARGE_NEW),
        rebate_87a=RebateRule(limit=Decimal("12500"), income_ceiling=Decimal("500000")),
        rebate_87a_new=RebateRule(limit=Decimal("25000"), income_ceiling=Decimal("700000")),
    )
    tables = {EntityType.INDIVIDUAL: individual}
    # HUF / AOP / BOI / AJP follow the non-senior individual slabs, no rebate
    for entity in (EntityType.HUF, EntityType.AOP, EntityType.BOI, EntityType.ARTIFICIAL_JURIDICAL_PERSON):
        tables[entity] = SlabEntityTable(
            slabs={
                TaxRegime.OLD: {AgeBand.BELOW_60: list(_OLD_BELOW_60)},
                TaxRegime.NEW: {AgeBand.BELOW_60: list(new_slabs)},
            },
            surcharge_rates=list(_SURCHARGE),
        )
    return tables


def _flat_rate_entities() -> dict[EntityType, FlatRateEntityTable]:
    return {
        entity: FlatRateEntityTable(rate=Decimal("30"), surcharge_rates=list(_FLAT_SURCHARGE))
        for entity in (EntityType.FIRM, EntityType.LLP, EntityType.LOCAL_AUTHORITY)
    }


def default_year_config(assessment_year: AssessmentYear = AssessmentYear.AY_2024_25) -> YearConfiguration:
    """Return the hardcoded configuration for *assessment_year*."""
    if assessment_year == AssessmentYear.AY_2025_26:
        return YearConfiguration(
            assessment_year=assessment_year,
            new_regime_available=True,
            slab_entities=_slab_entities(_NEW_2025),
            flat_rate_entities=_flat_rate_entities(),
            filing_due_dates=FILING_DUE_DATES[assessment_year],
            tax_rates=TaxRates(
                stcg_111a=Decimal("20"),
                ltcg_112a_exemption=Decimal("125000"),
                ltcg_112a_rate=Decimal("12.5"),
                ltcg_other_rate=Decimal("12.5"),
            ),
        )

    reference = YearConfiguration(
        assessment_year=AssessmentYear.AY_2024_25,
        new_regime_available=True,
        slab_entities=_slab_entities(_NEW_2024),
        flat_rate_entities=_flat_rate_entities(),
        filing_due_dates=FILING_DUE_DATES[AssessmentYear.AY_2024_25],
    )
    if assessment_year == AssessmentYear.AY_2024_25:
        return reference

    config = copy.deepcopy(reference)
    config.assessment_year = assessment_year
    config.new_regime_available = assessment_year.start_year >= 2020
    config.filing_due_dates = FILING_DUE_DATES[assessment_year]
    return config


def default_year_table() -> YearConfigurationTable:
    """Hardcoded configurations for every supported assessment year."""
    return YearConfigurationTable({ay: default_year_config(ay) for ay in AssessmentYear})
