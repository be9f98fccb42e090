# itr_engine/api/v1/routes/itr.py
"""
ITR computation endpoints: full computation, old vs new regime comparison and
the list of supported assessment years.

The endpoints are stateless; every request carries a complete declaration.
"""

from __future__ import annotations

import dataclasses
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from itr_engine.api.v1.envelope import error, ok
from itr_engine.api.v1.schemas.itr import YearSummary
from itr_engine.domain.models.declaration import Declaration
from itr_engine.domain.models.year_config import ConfigurationMissingError
from itr_engine.domain.services.itr_service import compare_regimes, compute
from itr_engine.domain.services.year_config_service import get_year_config_service

logger = logging.getLogger("api.v1.itr")

router = APIRouter(prefix="/itr", tags=["ITR"])


def _missing_year(exc: ConfigurationMissingError) -> JSONResponse:
    logger.warning("Computation rejected: %s", exc)
    return JSONResponse(status_code=404, content=error(str(exc)))


@router.post("/compute", response_model=dict)
async def compute_itr(body: Declaration):
    """
    Compute the assessed tax liability for one declaration.

    Returns the full breakdown: income heads, set-off ledger, tax, surcharge,
    relief, foreign tax credit and interest u/s 234A/B/C.
    """
    try:
        result = compute(body)
    except ConfigurationMissingError as exc:
        return _missing_year(exc)
    return ok(data=dataclasses.asdict(result))


@router.post("/compare", response_model=dict)
async def compare_itr(body: Declaration):
    """
    Compute under both old and new regimes and recommend the cheaper one.
    """
    try:
        comparison = compare_regimes(body)
    except ConfigurationMissingError as exc:
        return _missing_year(exc)
    return ok(data=dataclasses.asdict(comparison))


@router.get("/years", response_model=dict)
async def list_years():
    """Assessment years with a tax configuration."""
    table = get_year_config_service().table()
    years = []
    for ay in table.years():
        config = table.get(ay)
        years.append(YearSummary(
            assessment_year=ay.value,
            new_regime_available=config.new_regime_available,
            filing_due_date_non_audit=config.filing_due_dates.non_audit,
            filing_due_date_audit=config.filing_due_dates.audit,
            source=config.source,
        ).model_dump())
    return ok(data=years)
