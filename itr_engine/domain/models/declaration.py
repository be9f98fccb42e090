# itr_engine/domain/models/declaration.py
"""
Declaration: the immutable input snapshot handed to the computation engine.

Produced by the form front end once the taxpayer has finished editing. The
engine only reads it; regime comparison works on deep copies.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from itr_engine.domain.models.enums import (
    AgeBand,
    AssessmentType,
    BusinessAddition,
    CapitalGainAdjustment,
    CompanyType,
    DeductionHead,
    DeemedIncomeSection,
    EntityType,
    IncomeNature,
    OtherSourceComponent,
    ResidentialStatus,
    SalaryComponent,
    SpecialSection,
    TaxRegime,
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class LineItem(_Frozen):
    """One amount entered by the taxpayer, with where it arose."""
    amount: Decimal | None = None
    location: str = "India"


IncomeSource = tuple[LineItem, ...]


# ---------------------------------------------------------------------------
# House property
# ---------------------------------------------------------------------------

class HouseProperty(_Frozen):
    property_id: str = ""
    is_self_occupied: bool = False
    gross_rent: IncomeSource = ()
    municipal_taxes: IncomeSource = ()
    interest_on_loan: IncomeSource = ()


# ---------------------------------------------------------------------------
# Business: presumptive schemes (one variant per scheme)
# ---------------------------------------------------------------------------

class NoPresumptiveScheme(_Frozen):
    scheme: Literal["none"] = "none"


class Scheme44AD(_Frozen):
    """Small business: 6% of digital and 8% of other turnover."""
    scheme: Literal["44AD"] = "44AD"
    turnover_digital: IncomeSource = ()
    turnover_other: IncomeSource = ()


class Scheme44ADA(_Frozen):
    """Professionals: 50% of gross receipts."""
    scheme: Literal["44ADA"] = "44ADA"
    gross_receipts: IncomeSource = ()


class Vehicle44AE(_Frozen):
    kind: Literal["heavy", "other"] = "other"
    tonnage: Decimal | None = None
    months: int | None = None


class Scheme44AE(_Frozen):
    """Goods carriages: fixed income per vehicle per month."""
    scheme: Literal["44AE"] = "44AE"
    vehicles: tuple[Vehicle44AE, ...] = ()


class AggregateReceiptsScheme(_Frozen):
    """Shipping (44B), oil exploration (44BB), aircraft (44BBA), turnkey power (44BBB)."""
    scheme: Literal["44B", "44BB", "44BBA", "44BBB"]
    aggregate_receipts: IncomeSource = ()


PresumptiveScheme = Annotated[
    Union[NoPresumptiveScheme, Scheme44AD, Scheme44ADA, Scheme44AE, AggregateReceiptsScheme],
    Field(discriminator="scheme"),
]


class BusinessIncome(_Frozen):
    is_controlled_from_india: bool = False
    net_profit: IncomeSource = ()
    speculative_income: IncomeSource = ()
    presumptive: PresumptiveScheme = Field(default_factory=NoPresumptiveScheme)
    additions: dict[BusinessAddition, IncomeSource] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Capital gains / other sources
# ---------------------------------------------------------------------------

class CapitalGains(_Frozen):
    stcg_111a: IncomeSource = ()
    stcg_other: IncomeSource = ()
    ltcg_112a: IncomeSource = ()
    ltcg_other: IncomeSource = ()
    adjustments: dict[CapitalGainAdjustment, IncomeSource] = Field(default_factory=dict)
    adjustment_43ca: IncomeSource = ()      # Taxed as business income


class OtherSources(_Frozen):
    components: dict[OtherSourceComponent, IncomeSource] = Field(default_factory=dict)
    race_horse_income: IncomeSource = ()
    winnings: IncomeSource = ()
    exempt_income: IncomeSource = ()        # Agricultural income (reported, not taxed)


# ---------------------------------------------------------------------------
# Foreign income
# ---------------------------------------------------------------------------

class TransferPricing(_Frozen):
    is_associated_enterprise: bool = False
    arms_length_price: Decimal | None = None


class ForeignIncomeItem(_Frozen):
    item_id: str = ""
    country: str = ""
    nature: IncomeNature = IncomeNature.SALARY
    amount_inr: Decimal | None = None
    tax_paid_inr: Decimal | None = None
    dtaa_applicable: bool = False
    tax_rate_as_per_dtaa: Decimal | None = None    # Percent
    is_ltcg: bool = False
    special_section: SpecialSection = SpecialSection.NONE
    transfer_pricing: TransferPricing = Field(default_factory=TransferPricing)
    form67_filed: bool = False


# ---------------------------------------------------------------------------
# Losses
# ---------------------------------------------------------------------------

class CurrentYearLosses(_Frozen):
    business_non_speculative: Decimal | None = None
    business_speculative: Decimal | None = None
    stcl: Decimal | None = None
    ltcl: Decimal | None = None
    race_horses: Decimal | None = None


class BroughtForwardLosses(_Frozen):
    house_property: Decimal | None = None
    business_non_speculative: Decimal | None = None
    business_speculative: Decimal | None = None
    stcl: Decimal | None = None
    ltcl: Decimal | None = None
    race_horses: Decimal | None = None
    unabsorbed_depreciation: Decimal | None = None


class Losses(_Frozen):
    current_year: CurrentYearLosses = Field(default_factory=CurrentYearLosses)
    brought_forward: BroughtForwardLosses = Field(default_factory=BroughtForwardLosses)


# ---------------------------------------------------------------------------
# Filing / interest
# ---------------------------------------------------------------------------

class AdvanceTaxInstallments(_Frozen):
    q1: Decimal | None = None    # Paid by 15 June
    q2: Decimal | None = None    # 15 September
    q3: Decimal | None = None    # 15 December
    q4: Decimal | None = None    # 15 March


class FilingDetails(_Frozen):
    # Dates are YYYY-MM-DD strings; invalid dates are tolerated here and
    # neutralised by the interest calculator.
    due_date_of_filing: str | None = None
    actual_date_of_filing: str | None = None
    assessment_type: AssessmentType = AssessmentType.REGULAR
    due_date_148_notice: str | None = None
    tax_on_earlier_assessment: Decimal | None = None
    income_as_per_earlier_assessment: Decimal | None = None
    advance_tax_installments: AdvanceTaxInstallments = Field(default_factory=AdvanceTaxInstallments)


class TrustDeclaration(_Frozen):
    disallowed_receipts_12a: IncomeSource = ()
    disallowed_receipts_10_23c: IncomeSource = ()


# ---------------------------------------------------------------------------
# Declaration
# ---------------------------------------------------------------------------

class Declaration(_Frozen):
    """Everything the engine needs for one assessment year."""

    assessee_name: str = ""
    pan: str = ""
    assessment_year: str = "2024-25"
    entity_type: EntityType = EntityType.INDIVIDUAL
    residential_status: ResidentialStatus = ResidentialStatus.RESIDENT_ORDINARY
    age_band: AgeBand = AgeBand.BELOW_60
    regime: TaxRegime = TaxRegime.OLD
    company_type: CompanyType = CompanyType.DOMESTIC
    previous_year_turnover: Decimal | None = None

    salary: dict[SalaryComponent, IncomeSource] = Field(default_factory=dict)
    house_properties: tuple[HouseProperty, ...] = ()
    business: BusinessIncome = Field(default_factory=BusinessIncome)
    capital_gains: CapitalGains = Field(default_factory=CapitalGains)
    other_sources: OtherSources = Field(default_factory=OtherSources)
    deemed_income: dict[DeemedIncomeSection, IncomeSource] = Field(default_factory=dict)
    disallowed_deductions: dict[DeductionHead, IncomeSource] = Field(default_factory=dict)
    international_income: tuple[ForeignIncomeItem, ...] = ()
    losses: Losses = Field(default_factory=Losses)
    trust: TrustDeclaration = Field(default_factory=TrustDeclaration)
    filing: FilingDetails = Field(default_factory=FilingDetails)

    tds: Decimal | None = None
    advance_tax: Decimal | None = None
