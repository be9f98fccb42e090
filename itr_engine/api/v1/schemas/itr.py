# itr_engine/api/v1/schemas/itr.py
"""Response schemas for ITR computation endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class YearSummary(BaseModel):
    assessment_year: str
    new_regime_available: bool
    filing_due_date_non_audit: str
    filing_due_date_audit: str
    source: str = "hardcoded"
