"""Tests for income aggregation by head."""

from decimal import Decimal

from conftest import items

from itr_engine.domain.models.declaration import (
    AggregateReceiptsScheme,
    BusinessIncome,
    CapitalGains,
    Declaration,
    OtherSources,
    Scheme44AD,
    Scheme44ADA,
    Scheme44AE,
    Vehicle44AE,
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
from itr_engine.domain.services.income_aggregator import aggregate_income


class TestSalary:
    """Salary is the sum of every enumerated component."""

    def test_components_summed_with_signed_exemptions(self, config_2024):
        decl = Declaration(salary={
            SalaryComponent.BASIC_SALARY: items(1000000),
            SalaryComponent.BONUS_AND_COMMISSION: items(200000),
            SalaryComponent.EXEMPTION_HRA: items(-100000),
        })
        assert aggregate_income(decl, config_2024).salary == Decimal("1100000")

    def test_non_resident_foreign_salary_excluded(self, config_2024):
        decl = Declaration(
            residential_status=ResidentialStatus.NON_RESIDENT,
            salary={SalaryComponent.BASIC_SALARY: items(500000) + items(300000, location="UAE")},
        )
        assert aggregate_income(decl, config_2024).salary == Decimal("500000")


class TestBusiness:
    """Net profit plus additions, or presumptive income."""

    def test_net_profit_with_additions_and_43ca(self, config_2024):
        decl = Declaration(
            business=BusinessIncome(
                net_profit=items(500000),
                additions={BusinessAddition.BOGUS_PURCHASES: items(100000)},
            ),
            capital_gains=CapitalGains(adjustment_43ca=items(50000)),
        )
        result = aggregate_income(decl, config_2024)
        assert result.business_base == Decimal("500000")
        assert result.business_additions == Decimal("150000")
        assert result.business == Decimal("650000")

    def test_44ad(self, config_2024):
        decl = Declaration(business=BusinessIncome(
            presumptive=Scheme44AD(turnover_digital=items(1000000), turnover_other=items(1000000)),
        ))
        assert aggregate_income(decl, config_2024).business == Decimal("140000")

    def test_44ada_from_json(self, config_2024):
        decl = Declaration.model_validate({
            "business": {"presumptive": {"scheme": "44ADA", "gross_receipts": [{"amount": "1000000"}]}},
        })
        assert isinstance(decl.business.presumptive, Scheme44ADA)
        assert aggregate_income(decl, config_2024).business == Decimal("500000")

    def test_44ae_months_clamped(self, config_2024):
        decl = Declaration(business=BusinessIncome(presumptive=Scheme44AE(vehicles=(
            Vehicle44AE(kind="heavy", tonnage=Decimal("15"), months=14),
            Vehicle44AE(kind="other", months=6),
        ))))
        # 15 t x 1000 x 12 + 7500 x 6
        assert aggregate_income(decl, config_2024).business == Decimal("225000")

    def test_aggregate_receipts_schemes(self, config_2024):
        expected = {"44B": "75000", "44BB": "100000", "44BBA": "50000", "44BBB": "100000"}
        for scheme, income in expected.items():
            decl = Declaration(business=BusinessIncome(
                presumptive=AggregateReceiptsScheme(scheme=scheme, aggregate_receipts=items(1000000)),
            ))
            assert aggregate_income(decl, config_2024).business == Decimal(income), scheme

    def test_presumptive_ignores_net_profit(self, config_2024):
        decl = Declaration(business=BusinessIncome(
            net_profit=items(900000),
            presumptive=Scheme44ADA(gross_receipts=items(100000)),
        ))
        assert aggregate_income(decl, config_2024).business == Decimal("50000")

    def test_rnor_foreign_business_controlled_from_india(self, config_2024):
        decl = Declaration(
            residential_status=ResidentialStatus.RESIDENT_NOT_ORDINARY,
            business=BusinessIncome(
                is_controlled_from_india=True,
                net_profit=items(300000, location="Singapore"),
            ),
        )
        assert aggregate_income(decl, config_2024).business == Decimal("300000")


class TestOtherHeads:
    """Capital gains, other sources, deemed income and disallowances."""

    def test_capital_gain_adjustments_go_to_stcg_other(self, config_2024):
        decl = Declaration(capital_gains=CapitalGains(
            stcg_other=items(100000),
            ltcg_other=items(40000),
            adjustments={CapitalGainAdjustment.ADJUSTMENT_50C: items(20000)},
        ))
        result = aggregate_income(decl, config_2024)
        assert result.stcg_other == Decimal("120000")
        assert result.ltcg_other == Decimal("40000")
        assert result.capital_gain_adjustments == Decimal("20000")

    def test_other_sources(self, config_2024):
        decl = Declaration(other_sources=OtherSources(
            components={
                OtherSourceComponent.OTHER_INCOMES: items(60000),
                OtherSourceComponent.FAMILY_PENSION: items(40000),
            },
            race_horse_income=items(25000),
            winnings=items(10000),
            exempt_income=items(80000),
        ))
        result = aggregate_income(decl, config_2024)
        assert result.other_sources == Decimal("100000")
        assert result.race_horse == Decimal("25000")
        assert result.winnings == Decimal("10000")
        assert result.agricultural == Decimal("80000")

    def test_deemed_income_and_disallowed_deductions(self, config_2024):
        decl = Declaration(
            deemed_income={
                DeemedIncomeSection.SEC_68_CASH_CREDITS: items(100000),
                DeemedIncomeSection.SEC_69A_UNEXPLAINED_MONEY: items(50000),
            },
            disallowed_deductions={
                DeductionHead.C80: items(150000),
                DeductionHead.D80: items(25000),
            },
        )
        result = aggregate_income(decl, config_2024)
        assert result.deemed == Decimal("150000")
        assert result.disallowed_deductions == Decimal("175000")
