# itr_engine/domain/models/computation.py
"""
Result dataclasses produced by the computation engine.

Plain numeric and structured data only; display formatting is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from itr_engine.domain.models.enums import IncomeHead, LossKind, TaxRegime

ZERO = Decimal("0")


@dataclass
class SetOffEntry:
    """One logged transfer of loss against an income head."""
    source: str       # e.g. "CY HP Loss", "BF STCL"
    against: str      # IncomeHead value
    amount: Decimal


@dataclass
class HeadBreakdown:
    base_amount: Decimal = ZERO
    total_additions: Decimal = ZERO
    assessed: Decimal = ZERO


@dataclass
class ForeignIncomeResult:
    """Per-item foreign income outcome."""
    item_id: str
    taxable_amount: Decimal = ZERO
    indian_tax: Decimal = ZERO
    ftc_90_90a: Decimal = ZERO
    ftc_91: Decimal = ZERO
    total_ftc: Decimal = ZERO
    net_tax: Decimal = ZERO
    applicable_rate: Decimal = ZERO   # Percent


@dataclass
class IncomeBreakdown:
    salary: HeadBreakdown = field(default_factory=HeadBreakdown)
    house_property: HeadBreakdown = field(default_factory=HeadBreakdown)
    business: HeadBreakdown = field(default_factory=HeadBreakdown)
    capital_gains: HeadBreakdown = field(default_factory=HeadBreakdown)
    other_sources: HeadBreakdown = field(default_factory=HeadBreakdown)
    winnings: HeadBreakdown = field(default_factory=HeadBreakdown)
    deemed_income: Decimal = ZERO
    house_property_nav: Decimal = ZERO
    house_property_deduction_24a: Decimal = ZERO
    foreign_income_added: Decimal = ZERO
    foreign_special_rate_income: Decimal = ZERO


@dataclass
class TaxBreakdown:
    """Tax by income class, before surcharge."""
    on_normal_income: Decimal = ZERO
    on_stcg_111a: Decimal = ZERO
    on_ltcg_112a: Decimal = ZERO
    on_ltcg_other: Decimal = ZERO
    on_winnings: Decimal = ZERO
    on_deemed_income: Decimal = ZERO   # Includes its fixed surcharge
    on_foreign_income: Decimal = ZERO


@dataclass
class InterestResult:
    u_s_234a: Decimal = ZERO
    u_s_234b: Decimal = ZERO
    u_s_234c: Decimal = ZERO
    total_interest: Decimal = ZERO
    months_234a: int = 0
    months_234b: int = 0
    months_234c: dict[str, int] = field(
        default_factory=lambda: {"q1": 0, "q2": 0, "q3": 0, "q4": 0}
    )


@dataclass
class TrustComputation:
    total_income_before_exemption: Decimal = ZERO
    disallowed_12a: Decimal = ZERO
    disallowed_10_23c: Decimal = ZERO
    taxable_income: Decimal = ZERO
    applicable_rate: Decimal = ZERO    # Percent (maximum marginal rate)
    tax: Decimal = ZERO
    violation_flags: list[str] = field(default_factory=list)


@dataclass
class ComputationResult:
    """Full computation for one declaration under one regime."""
    assessment_year: str
    regime: TaxRegime
    gross_total_income: Decimal = ZERO
    disallowed_deductions: Decimal = ZERO
    net_taxable_income: Decimal = ZERO
    agricultural_income: Decimal = ZERO
    tax_liability: Decimal = ZERO          # Tax before surcharge
    surcharge: Decimal = ZERO              # Net of marginal relief
    marginal_relief: Decimal = ZERO
    rebate_87a: Decimal = ZERO
    cess: Decimal = ZERO
    foreign_tax_relief: Decimal = ZERO
    total_tax_payable: Decimal = ZERO      # Floored at 0, before interest
    tds: Decimal = ZERO
    advance_tax: Decimal = ZERO
    net_payable: Decimal = ZERO            # Positive = pay, negative = refund
    interest: InterestResult = field(default_factory=InterestResult)
    income: IncomeBreakdown = field(default_factory=IncomeBreakdown)
    tax: TaxBreakdown = field(default_factory=TaxBreakdown)
    income_after_set_off: dict[IncomeHead, Decimal] = field(default_factory=dict)
    set_off: list[SetOffEntry] = field(default_factory=list)
    losses_carried_forward: dict[LossKind, Decimal] = field(default_factory=dict)
    foreign_income: list[ForeignIncomeResult] = field(default_factory=list)
    trust: TrustComputation | None = None


@dataclass
class RegimeComparison:
    """Old vs new regime for the same declaration."""
    old_regime: ComputationResult
    new_regime: ComputationResult | None = None
    recommended_regime: TaxRegime = TaxRegime.OLD
    savings: Decimal = ZERO   # How much the recommended regime saves
