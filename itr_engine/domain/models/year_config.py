# itr_engine/domain/models/year_config.py
"""
Domain dataclasses for the per-assessment-year tax configuration.

YearConfiguration: all income-tax parameters for a single assessment year.
YearConfigurationTable: the read-only lookup the engine consults, keyed by
AssessmentYear, failing fast when a year is absent.

All rates are percentages (Decimal("30") == 30%).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from itr_engine.domain.models.enums import (
    AgeBand,
    AssessmentYear,
    EntityType,
    TaxRegime,
)

# (upper_limit_or_None, rate_percent)
Slab = tuple[Decimal | None, Decimal]
# (income_threshold, rate_percent), applies when income exceeds the threshold
SurchargeSlab = tuple[Decimal, Decimal]


class ConfigurationMissingError(Exception):
    """Raised when no configuration exists for the requested assessment year."""
    pass


@dataclass
class DeductionLimits:
    hp_loss_setoff_limit: Decimal = Decimal("200000")
    hp_interest_deduction_limit_sop: Decimal = Decimal("200000")


@dataclass
class TaxRates:
    cess: Decimal = Decimal("4")
    winnings: Decimal = Decimal("30")
    deemed_income_115bbe: Decimal = Decimal("60")
    deemed_income_surcharge: Decimal = Decimal("25")
    stcg_111a: Decimal = Decimal("15")
    ltcg_112a_exemption: Decimal = Decimal("100000")
    ltcg_112a_rate: Decimal = Decimal("10")
    ltcg_other_rate: Decimal = Decimal("20")
    aop_mmr: Decimal = Decimal("30")

    # Foreign income taxed at special rates
    foreign_115a_dividend_interest: Decimal = Decimal("20")
    foreign_115a_royalty_fts: Decimal = Decimal("10")
    foreign_115bba: Decimal = Decimal("20")
    fii_fpi_interest_115ad: Decimal = Decimal("20")
    fii_fpi_ltcg_115ad: Decimal = Decimal("10")
    fii_fpi_stcg_other_115ad: Decimal = Decimal("30")
    gdr_fccb_income_115ac: Decimal = Decimal("10")
    gdr_fccb_ltcg_115ac: Decimal = Decimal("10")
    offshore_fund_income_115ab: Decimal = Decimal("10")
    offshore_fund_ltcg_115ab: Decimal = Decimal("10")
    specified_fund_income_115ae: Decimal = Decimal("10")


@dataclass
class PresumptiveRates:
    sec_44ad_digital: Decimal = Decimal("6")
    sec_44ad_other: Decimal = Decimal("8")
    sec_44ada: Decimal = Decimal("50")
    sec_44ae_heavy_per_ton_month: Decimal = Decimal("1000")
    sec_44ae_other_per_month: Decimal = Decimal("7500")
    sec_44b: Decimal = Decimal("7.5")
    sec_44bb: Decimal = Decimal("10")
    sec_44bba: Decimal = Decimal("5")
    sec_44bbb: Decimal = Decimal("10")


@dataclass
class RebateRule:
    limit: Decimal
    income_ceiling: Decimal


@dataclass
class SlabEntityTable:
    """Individual / HUF / AOP / BOI / AJP, slab taxed."""
    slabs: dict[TaxRegime, dict[AgeBand, list[Slab]]]
    surcharge_rates: list[SurchargeSlab]
    surcharge_rates_new: list[SurchargeSlab] | None = None
    rebate_87a: RebateRule | None = None
    rebate_87a_new: RebateRule | None = None

    def slabs_for(self, regime: TaxRegime, age_band: AgeBand) -> list[Slab]:
        by_age = self.slabs.get(regime) or self.slabs[TaxRegime.OLD]
        return by_age.get(age_band) or by_age[AgeBand.BELOW_60]

    def surcharge_for(self, regime: TaxRegime) -> list[SurchargeSlab]:
        if regime == TaxRegime.NEW and self.surcharge_rates_new:
            return self.surcharge_rates_new
        return self.surcharge_rates

    def rebate_for(self, regime: TaxRegime) -> RebateRule | None:
        if regime == TaxRegime.NEW and self.rebate_87a_new:
            return self.rebate_87a_new
        return self.rebate_87a


@dataclass
class FlatRateEntityTable:
    """Firm / LLP / local authority."""
    rate: Decimal
    surcharge_rates: list[SurchargeSlab]


@dataclass
class CompanyTable:
    domestic_rate_small: Decimal = Decimal("25")
    domestic_rate_large: Decimal = Decimal("30")
    domestic_turnover_threshold: Decimal = Decimal("4000000000")   # Rs 400 crore
    domestic_surcharge_rates: list[SurchargeSlab] = field(default_factory=lambda: [
        (Decimal("10000000"), Decimal("7")),
        (Decimal("100000000"), Decimal("12")),
    ])
    foreign_rate: Decimal = Decimal("40")
    foreign_surcharge_rates: list[SurchargeSlab] = field(default_factory=lambda: [
        (Decimal("10000000"), Decimal("2")),
        (Decimal("100000000"), Decimal("5")),
    ])


@dataclass
class FilingDueDates:
    non_audit: str
    audit: str


@dataclass
class YearConfiguration:
    """All income-tax parameters for one assessment year."""

    assessment_year: AssessmentYear
    new_regime_available: bool
    slab_entities: dict[EntityType, SlabEntityTable]
    flat_rate_entities: dict[EntityType, FlatRateEntityTable]
    filing_due_dates: FilingDueDates
    company: CompanyTable = field(default_factory=CompanyTable)
    deduction_limits: DeductionLimits = field(default_factory=DeductionLimits)
    tax_rates: TaxRates = field(default_factory=TaxRates)
    presumptive_rates: PresumptiveRates = field(default_factory=PresumptiveRates)

    # Metadata
    source: str = "hardcoded"  # "hardcoded" or "file"

    def slab_table(self, entity_type: EntityType) -> SlabEntityTable:
        return self.slab_entities.get(entity_type) or self.slab_entities[EntityType.INDIVIDUAL]

    # ---- serialization ----

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict (Decimals become strings)."""

        def _slab_list(slabs: list[Slab]) -> list[list]:
            return [[str(s[0]) if s[0] is not None else None, str(s[1])] for s in slabs]

        def _surcharge_list(slabs: list[SurchargeSlab] | None) -> list[list] | None:
            if slabs is None:
                return None
            return [[str(s[0]), str(s[1])] for s in slabs]

        def _rebate(rule: RebateRule | None) -> dict | None:
            if rule is None:
                return None
            return {"limit": str(rule.limit), "income_ceiling": str(rule.income_ceiling)}

        def _flat(obj: Any) -> dict[str, Any]:
            return {k: str(v) for k, v in obj.__dict__.items()}

        return {
            "assessment_year": self.assessment_year.value,
            "new_regime_available": self.new_regime_available,
            "slab_entities": {
                entity.value: {
                    "slabs": {
                        regime.value: {age.value: _slab_list(s) for age, s in by_age.items()}
                        for regime, by_age in table.slabs.items()
                    },
                    "surcharge_rates": _surcharge_list(table.surcharge_rates),
                    "surcharge_rates_new": _surcharge_list(table.surcharge_rates_new),
                    "rebate_87a": _rebate(table.rebate_87a),
                    "rebate_87a_new": _rebate(table.rebate_87a_new),
                }
                for entity, table in self.slab_entities.items()
            },
            "flat_rate_entities": {
                entity.value: {
                    "rate": str(table.rate),
                    "surcharge_rates": _surcharge_list(table.surcharge_rates),
                }
                for entity, table in self.flat_rate_entities.items()
            },
            "filing_due_dates": {
                "non_audit": self.filing_due_dates.non_audit,
                "audit": self.filing_due_dates.audit,
            },
            "company": {
                "domestic_rate_small": str(self.company.domestic_rate_small),
                "domestic_rate_large": str(self.company.domestic_rate_large),
                "domestic_turnover_threshold": str(self.company.domestic_turnover_threshold),
                "domestic_surcharge_rates": _surcharge_list(self.company.domestic_surcharge_rates),
                "foreign_rate": str(self.company.foreign_rate),
                "foreign_surcharge_rates": _surcharge_list(self.company.foreign_surcharge_rates),
            },
            "deduction_limits": _flat(self.deduction_limits),
            "tax_rates": _flat(self.tax_rates),
            "presumptive_rates": _flat(self.presumptive_rates),
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> YearConfiguration:
        """Reconstruct from a stored JSON dict. Missing scalar sections keep their defaults."""

        def _parse_slabs(raw: list) -> list[Slab]:
            return [
                (Decimal(str(entry[0])) if entry[0] is not None else None, Decimal(str(entry[1])))
                for entry in raw
            ]

        def _parse_surcharge(raw: list | None) -> list[SurchargeSlab] | None:
            if raw is None:
                return None
            return [(Decimal(str(entry[0])), Decimal(str(entry[1]))) for entry in raw]

        def _parse_rebate(raw: dict | None) -> RebateRule | None:
            if raw is None:
                return None
            return RebateRule(
                limit=Decimal(str(raw["limit"])),
                income_ceiling=Decimal(str(raw["income_ceiling"])),
            )

        def _decimals(klass: type, raw: dict | None) -> Any:
            return klass(**{k: Decimal(str(v)) for k, v in (raw or {}).items()})

        slab_entities = {
            EntityType(entity): SlabEntityTable(
                slabs={
                    TaxRegime(regime): {AgeBand(age): _parse_slabs(s) for age, s in by_age.items()}
                    for regime, by_age in raw["slabs"].items()
                },
                surcharge_rates=_parse_surcharge(raw["surcharge_rates"]) or [],
                surcharge_rates_new=_parse_surcharge(raw.get("surcharge_rates_new")),
                rebate_87a=_parse_rebate(raw.get("rebate_87a")),
                rebate_87a_new=_parse_rebate(raw.get("rebate_87a_new")),
            )
            for entity, raw in data["slab_entities"].items()
        }
        flat_rate_entities = {
            EntityType(entity): FlatRateEntityTable(
                rate=Decimal(str(raw["rate"])),
                surcharge_rates=_parse_surcharge(raw["surcharge_rates"]) or [],
            )
            for entity, raw in data.get("flat_rate_entities", {}).items()
        }

        company = CompanyTable()
        if "company" in data:
            raw = data["company"]
            company = CompanyTable(
                domestic_rate_small=Decimal(str(raw["domestic_rate_small"])),
                domestic_rate_large=Decimal(str(raw["domestic_rate_large"])),
                domestic_turnover_threshold=Decimal(str(raw["domestic_turnover_threshold"])),
                domestic_surcharge_rates=_parse_surcharge(raw["domestic_surcharge_rates"]) or [],
                foreign_rate=Decimal(str(raw["foreign_rate"])),
                foreign_surcharge_rates=_parse_surcharge(raw["foreign_surcharge_rates"]) or [],
            )

        return cls(
            assessment_year=AssessmentYear(data["assessment_year"]),
            new_regime_available=bool(data.get("new_regime_available", False)),
            slab_entities=slab_entities,
            flat_rate_entities=flat_rate_entities,
            filing_due_dates=FilingDueDates(**data["filing_due_dates"]),
            company=company,
            deduction_limits=_decimals(DeductionLimits, data.get("deduction_limits")),
            tax_rates=_decimals(TaxRates, data.get("tax_rates")),
            presumptive_rates=_decimals(PresumptiveRates, data.get("presumptive_rates")),
            source=data.get("source", "file"),
        )


class YearConfigurationTable:
    """Read-only lookup of YearConfiguration by assessment year."""

    def __init__(self, configs: dict[AssessmentYear, YearConfiguration]) -> None:
        self._configs = dict(configs)

    def get(self, assessment_year: str | AssessmentYear) -> YearConfiguration:
        """Return the configuration for *assessment_year*.

        Raises
        ------
        ConfigurationMissingError
            If the year is unknown or has no configuration.
        """
        try:
            key = AssessmentYear(assessment_year)
        except ValueError:
            raise ConfigurationMissingError(
                f"Tax configuration for assessment year {assessment_year} not found."
            ) from None
        config = self._configs.get(key)
        if config is None:
            raise ConfigurationMissingError(
                f"Tax configuration for assessment year {key.value} not found."
            )
        return config

    def years(self) -> list[AssessmentYear]:
        return sorted(self._configs, key=lambda ay: ay.value)

    def __contains__(self, assessment_year: object) -> bool:
        try:
            return AssessmentYear(assessment_year) in self._configs
        except ValueError:
            return False
