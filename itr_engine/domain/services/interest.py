# itr_engine/domain/services/interest.py
"""
Interest u/s 234A (late filing), 234B (advance-tax default) and 234C
(deferment of advance-tax installments).

All three run at 1% per month or part of a month. Dates are YYYY-MM-DD; an
invalid or missing date makes the affected section contribute nothing.
"""

from __future__ import annotations

import datetime
import logging
import re
from decimal import ROUND_HALF_UP, Decimal

from itr_engine.domain.models.computation import InterestResult, TaxBreakdown
from itr_engine.domain.models.declaration import Declaration, Scheme44AD, Scheme44ADA
from itr_engine.domain.models.enums import AUDIT_ENTITIES, AssessmentType
from itr_engine.domain.models.year_config import YearConfiguration

logger = logging.getLogger("interest")

ZERO = Decimal("0")
RATE_PER_MONTH = Decimal("1")

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# (required %, relieved %, months) for Q1–Q3 of section 234C
_INSTALLMENTS = (
    ("q1", Decimal("15"), Decimal("12"), 3),
    ("q2", Decimal("45"), Decimal("36"), 3),
    ("q3", Decimal("75"), None, 3),
)


class InvalidDateError(ValueError):
    """Raised when a date is not a real YYYY-MM-DD calendar date."""
    pass


def parse_date(value: str | None) -> datetime.date:
    """Strict YYYY-MM-DD parsing with a calendar check."""
    if not value or not _DATE_RE.match(value):
        raise InvalidDateError(f"Invalid date: {value!r}")
    year, month, day = (int(part) for part in value.split("-"))
    try:
        return datetime.date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date: {value!r}") from exc


def _try_parse(value: str | None, label: str) -> datetime.date | None:
    try:
        return parse_date(value)
    except InvalidDateError:
        if value:
            logger.debug("Ignoring %s %r", label, value)
        return None


def interest_months(start: datetime.date, end: datetime.date) -> int:
    """Whole calendar months from *start* to *end*, any part month counted in full."""
    if end < start:
        return 0
    return (end.year - start.year) * 12 + (end.month - start.month) + 1


def _interest(amount: Decimal, months: int) -> Decimal:
    return amount * RATE_PER_MONTH / 100 * months


def default_due_date(declaration: Declaration, config: YearConfiguration) -> str:
    """Configured filing due date: audit date for audit entities, non-audit otherwise."""
    if declaration.entity_type in AUDIT_ENTITIES:
        return config.filing_due_dates.audit
    return config.filing_due_dates.non_audit


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def _interest_234a(
    declaration: Declaration,
    config: YearConfiguration,
    tax_payable: Decimal,
    filed_on: datetime.date | None,
    result: InterestResult,
) -> None:
    filing = declaration.filing
    due_date = filing.due_date_of_filing or default_due_date(declaration, config)

    if filing.assessment_type == AssessmentType.REASSESSMENT_147_POST_ASSESSMENT:
        start = _try_parse(filing.due_date_148_notice, "s.148 notice date") or _try_parse(due_date, "due date")
        base = max(ZERO, tax_payable - (filing.tax_on_earlier_assessment or ZERO))
    else:
        start = _try_parse(due_date, "due date")
        base = max(ZERO, tax_payable - (declaration.advance_tax or ZERO) - (declaration.tds or ZERO))

    if start is None or filed_on is None or base <= 0:
        return

    # Interest runs from the day after the due / notice date
    start += datetime.timedelta(days=1)
    if filed_on >= start:
        result.months_234a = interest_months(start, filed_on)
        result.u_s_234a = _interest(base, result.months_234a)


def _interest_234b(
    declaration: Declaration,
    config: YearConfiguration,
    assessed_tax: Decimal,
    filed_on: datetime.date | None,
    result: InterestResult,
) -> None:
    advance_tax = declaration.advance_tax or ZERO
    if advance_tax >= assessed_tax * Decimal("0.9"):
        return
    shortfall = assessed_tax - advance_tax
    if shortfall <= 0 or filed_on is None:
        return

    year_start = datetime.date(config.assessment_year.start_year, 4, 1)
    period_end = filed_on if filed_on > year_start else year_start
    result.months_234b = interest_months(year_start, period_end)
    result.u_s_234b = _interest(shortfall, result.months_234b)


def _interest_234c(
    declaration: Declaration,
    assessed_tax: Decimal,
    tax: TaxBreakdown,
    result: InterestResult,
) -> None:
    installments = declaration.filing.advance_tax_installments
    paid, cumulative = {}, ZERO
    for quarter in ("q1", "q2", "q3", "q4"):
        cumulative += getattr(installments, quarter) or ZERO
        paid[quarter] = cumulative

    total = ZERO
    if not isinstance(declaration.business.presumptive, (Scheme44AD, Scheme44ADA)):
        # Capital gains, winnings and foreign income are not due in earlier installments
        excluded = (
            tax.on_stcg_111a + tax.on_ltcg_112a + tax.on_ltcg_other
            + tax.on_winnings + tax.on_foreign_income
        )
        adjusted = max(ZERO, assessed_tax - excluded)
        for quarter, required_pct, relieved_pct, months in _INSTALLMENTS:
            required = adjusted * required_pct / 100
            if paid[quarter] >= required:
                continue
            if relieved_pct is not None and paid[quarter] >= adjusted * relieved_pct / 100:
                continue
            total += _interest(required - paid[quarter], months)
            result.months_234c[quarter] = months

    # Last (or, for 44AD/44ADA, only) installment covers the full assessed tax
    if paid["q4"] < assessed_tax:
        total += _interest(assessed_tax - paid["q4"], 1)
        result.months_234c["q4"] = 1

    result.u_s_234c = total


def compute_interest(
    declaration: Declaration,
    config: YearConfiguration,
    tax_payable: Decimal,
    tax: TaxBreakdown,
) -> InterestResult:
    """Interest on *tax_payable* (final tax after credits, before interest)."""
    result = InterestResult()
    tax_payable = max(ZERO, tax_payable)
    filed_on = _try_parse(declaration.filing.actual_date_of_filing, "filing date")

    _interest_234a(declaration, config, tax_payable, filed_on, result)

    # Assessed tax for 234B / 234C is tax reduced by TDS
    assessed_tax = max(ZERO, tax_payable - (declaration.tds or ZERO))
    _interest_234b(declaration, config, assessed_tax, filed_on, result)
    _interest_234c(declaration, assessed_tax, tax, result)

    result.total_interest = (result.u_s_234a + result.u_s_234b + result.u_s_234c).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP,
    )
    return result
