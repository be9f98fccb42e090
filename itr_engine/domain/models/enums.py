# itr_engine/domain/models/enums.py
"""
Enumerated identifiers shared by the declaration, the year configuration and
the computation result.

Every income component the engine sums is listed here explicitly. Adding a
component means adding a member, not a new key in some input dict.
"""

from __future__ import annotations

from enum import Enum


class AssessmentYear(str, Enum):
    AY_2015_16 = "2015-16"
    AY_2016_17 = "2016-17"
    AY_2017_18 = "2017-18"
    AY_2018_19 = "2018-19"
    AY_2019_20 = "2019-20"
    AY_2020_21 = "2020-21"
    AY_2021_22 = "2021-22"
    AY_2022_23 = "2022-23"
    AY_2023_24 = "2023-24"
    AY_2024_25 = "2024-25"
    AY_2025_26 = "2025-26"

    @property
    def start_year(self) -> int:
        """Calendar year in which the AY begins (1 April)."""
        return int(self.value.split("-")[0])


class ResidentialStatus(str, Enum):
    RESIDENT_ORDINARY = "resident_ordinarily_resident"
    RESIDENT_NOT_ORDINARY = "resident_not_ordinarily_resident"
    NON_RESIDENT = "non_resident"


class EntityType(str, Enum):
    INDIVIDUAL = "individual"
    HUF = "huf"
    AOP = "aop"
    BOI = "boi"
    ARTIFICIAL_JURIDICAL_PERSON = "artificial juridical person"
    FIRM = "firm"
    LLP = "llp"
    LOCAL_AUTHORITY = "local authority"
    COMPANY = "company"
    TRUST = "trust"


# Entities taxed on slab tables (and eligible for the new regime)
SLAB_ENTITIES = (
    EntityType.INDIVIDUAL,
    EntityType.HUF,
    EntityType.AOP,
    EntityType.BOI,
    EntityType.ARTIFICIAL_JURIDICAL_PERSON,
)

# Entities taxed at a single flat rate
FLAT_RATE_ENTITIES = (
    EntityType.FIRM,
    EntityType.LLP,
    EntityType.LOCAL_AUTHORITY,
)

# Entities whose return is due on the audit due date
AUDIT_ENTITIES = (
    EntityType.COMPANY,
    EntityType.FIRM,
    EntityType.LLP,
    EntityType.LOCAL_AUTHORITY,
)


class AgeBand(str, Enum):
    BELOW_60 = "below60"
    SENIOR = "60to80"
    SUPER_SENIOR = "above80"


class TaxRegime(str, Enum):
    OLD = "old"
    NEW = "new"


class CompanyType(str, Enum):
    DOMESTIC = "domestic"
    FOREIGN = "foreign"


class AssessmentType(str, Enum):
    REGULAR = "regular"
    BEST_JUDGMENT_144 = "best_judgment_144"
    REASSESSMENT_147_POST_ASSESSMENT = "reassessment_147_post_assessment"


# ---------------------------------------------------------------------------
# Income components
# ---------------------------------------------------------------------------

class SalaryComponent(str, Enum):
    BASIC_SALARY = "basic_salary"
    ALLOWANCES = "allowances"
    BONUS_AND_COMMISSION = "bonus_and_commission"
    PERQ_RENT_FREE_ACCOMMODATION = "perq_rent_free_accommodation"
    PERQ_MOTOR_CAR = "perq_motor_car"
    PERQ_OTHER = "perq_other"
    PIL_TERMINATION_COMPENSATION = "pil_termination_compensation"
    PIL_COMMUTED_PENSION = "pil_commuted_pension"
    PIL_RETRENCHMENT_COMPENSATION = "pil_retrenchment_compensation"
    PIL_VRS_COMPENSATION = "pil_vrs_compensation"
    PIL_OTHER = "pil_other"
    EXEMPTION_HRA = "exemption_hra"
    EXEMPTION_LTA = "exemption_lta"
    EXEMPTION_GRATUITY = "exemption_gratuity"
    EXEMPTION_LEAVE_ENCASHMENT = "exemption_leave_encashment"
    EXEMPTION_COMMUTED_PENSION = "exemption_commuted_pension"
    EXEMPTION_RETRENCHMENT_COMPENSATION = "exemption_retrenchment_compensation"
    EXEMPTION_VRS_COMPENSATION = "exemption_vrs_compensation"
    EXEMPTION_PROVIDENT_FUND = "exemption_provident_fund"
    EXEMPTION_SUPERANNUATION_FUND = "exemption_superannuation_fund"
    EXEMPTION_SPECIAL_ALLOWANCES = "exemption_special_allowances"
    EXEMPTION_OTHER = "exemption_other"
    DEDUCTION_PROFESSIONAL_TAX = "deduction_professional_tax"
    DEDUCTION_ENTERTAINMENT_ALLOWANCE = "deduction_entertainment_allowance"


class BusinessAddition(str, Enum):
    UNREPORTED_SALES = "unreported_sales"
    UNACCOUNTED_BUSINESS_INCOME = "unaccounted_business_income"
    BOGUS_PURCHASES = "bogus_purchases"
    UNRECORDED_CREDITS = "unrecorded_credits"
    GP_NP_RATIO_DIFFERENCE = "gp_np_ratio_difference"
    STOCK_SUPPRESSION = "stock_suppression"
    DISALLOWANCE_36_EMPLOYEE_CONTRIB = "disallowance_36_employee_contrib"
    DISALLOWANCE_36_1_VII_PROVISIONS = "disallowance_36_1_vii_provisions"
    DISALLOWANCE_36_1_III_INTEREST = "disallowance_36_1_iii_interest"
    DISALLOWANCE_37_1_NON_BUSINESS = "disallowance_37_1_non_business"
    DISALLOWANCE_37_1_PERSONAL = "disallowance_37_1_personal"
    DISALLOWANCE_37_1_CAPITAL = "disallowance_37_1_capital"
    DISALLOWANCE_40A_TDS = "disallowance_40a_tds"
    DISALLOWANCE_40B_PARTNER_PAYMENTS = "disallowance_40b_partner_payments"
    DISALLOWANCE_40A2_RELATED_PARTY = "disallowance_40a2_related_party"
    DISALLOWANCE_40A3_CASH_PAYMENT = "disallowance_40a3_cash_payment"
    DISALLOWANCE_40A7_GRATUITY = "disallowance_40a7_gratuity"
    DISALLOWANCE_40A9_UNAPPROVED_FUNDS = "disallowance_40a9_unapproved_funds"
    DISALLOWANCE_43B_STATUTORY_DUES = "disallowance_43b_statutory_dues"
    DISALLOWANCE_14A_EXEMPT_INCOME = "disallowance_14a_exempt_income"
    INCORRECT_DEPRECIATION = "incorrect_depreciation"
    UNEXPLAINED_EXPENDITURE = "unexplained_expenditure"
    OTHER_DISALLOWANCES = "other_disallowances"


class CapitalGainAdjustment(str, Enum):
    ADJUSTMENT_50 = "adjustment_50"
    ADJUSTMENT_50C = "adjustment_50c"
    ADJUSTMENT_50CA = "adjustment_50ca"
    ADJUSTMENT_50D = "adjustment_50d"
    COST_OF_IMPROVEMENT = "cost_of_improvement"
    EXEMPTION_54 = "exemption_54"
    EXEMPTION_54B_LTCG = "exemption_54b_ltcg"
    EXEMPTION_54B_STCG = "exemption_54b_stcg"
    EXEMPTION_54D = "exemption_54d"
    EXEMPTION_54EC = "exemption_54ec"
    EXEMPTION_54EE = "exemption_54ee"
    EXEMPTION_54F = "exemption_54f"
    EXEMPTION_54G = "exemption_54g"
    EXEMPTION_54GA = "exemption_54ga"
    EXEMPTION_54GB = "exemption_54gb"


class OtherSourceComponent(str, Enum):
    OTHER_INCOMES = "other_incomes"
    DEEMED_DIVIDEND_2_22_E = "deemed_dividend_2_22_e"
    GIFTS_56_2_X = "gifts_56_2_x"
    FAMILY_PENSION = "family_pension"
    INTEREST_ON_ENHANCED_COMPENSATION = "interest_on_enhanced_compensation"
    DISALLOWANCE_14A = "disallowance_14a"
    OTHER_EXEMPT_INCOME_SEC10 = "other_exempt_income_sec10"


class DeemedIncomeSection(str, Enum):
    SEC_68_CASH_CREDITS = "sec68_cash_credits"
    SEC_69_UNEXPLAINED_INVESTMENTS = "sec69_unexplained_investments"
    SEC_69A_UNEXPLAINED_MONEY = "sec69a_unexplained_money"
    SEC_69B_INVESTMENTS_NOT_DISCLOSED = "sec69b_investments_not_disclosed"
    SEC_69C_UNEXPLAINED_EXPENDITURE = "sec69c_unexplained_expenditure"
    SEC_69D_HUNDI_BORROWING = "sec69d_hundi_borrowing"


class DeductionHead(str, Enum):
    C80 = "80c"
    CCD1B80 = "80ccd1b"
    CCD1B80_MINOR = "80ccd1b_minor"
    CCD2_80 = "80ccd2"
    D80 = "80d"
    DD80 = "80dd"
    DDB80 = "80ddb"
    E80 = "80e"
    G80 = "80g"
    GGC80 = "80ggc"
    TTA80 = "80tta"
    TTB80 = "80ttb"
    U80 = "80u"
    JJAA80 = "80jjaa"
    GG80 = "80gg"
    GGA80 = "80gga"
    QQB80 = "80qqb"
    RRB80 = "80rrb"
    IA80 = "80ia"


# ---------------------------------------------------------------------------
# Foreign income
# ---------------------------------------------------------------------------

class IncomeNature(str, Enum):
    SALARY = "salary"
    BUSINESS_PROFESSIONAL = "business_professional"
    LONG_TERM_CAPITAL_GAIN = "ltcg"
    SHORT_TERM_CAPITAL_GAIN = "stcg"
    HOUSE_PROPERTY = "house_property"
    INTEREST = "interest"
    DIVIDEND = "dividend"
    ROYALTY = "royalty"
    FEES_FOR_TECHNICAL_SERVICES = "fts"
    OTHERS = "others"


class SpecialSection(str, Enum):
    NONE = "none"
    SEC_115A = "115A"
    SEC_115AB = "115AB"
    SEC_115AC = "115AC"
    SEC_115ACA = "115ACA"
    SEC_115AD = "115AD"
    SEC_115AE = "115AE"
    SEC_115BBA = "115BBA"


# ---------------------------------------------------------------------------
# Set-off
# ---------------------------------------------------------------------------

class IncomeHead(str, Enum):
    SALARY = "salary"
    HOUSE_PROPERTY = "house_property"
    BUSINESS = "business_non_speculative"
    SPECULATIVE = "business_speculative"
    STCG_111A = "stcg_111a"
    STCG_OTHER = "stcg_other"
    LTCG_112A = "ltcg_112a"
    LTCG_OTHER = "ltcg_other"
    OTHER_SOURCES = "other_sources"
    RACE_HORSE = "race_horse"
    WINNINGS = "winnings"


class LossKind(str, Enum):
    HOUSE_PROPERTY = "house_property"
    BUSINESS = "business_non_speculative"
    SPECULATIVE = "business_speculative"
    STCL = "stcl"
    LTCL = "ltcl"
    RACE_HORSE = "race_horse"
    UNABSORBED_DEPRECIATION = "unabsorbed_depreciation"
