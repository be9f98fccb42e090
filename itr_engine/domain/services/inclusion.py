# itr_engine/domain/services/inclusion.py
"""
Residency-based inclusion of declared line items.

ROR:  everything, wherever it arose.
RNOR: India-sourced items, plus business income controlled from India.
NR:   India-sourced items only.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from itr_engine.domain.models.declaration import LineItem
from itr_engine.domain.models.enums import ResidentialStatus

INDIA = "India"


def is_included(
    item: LineItem,
    status: ResidentialStatus,
    controlled_from_india: bool = False,
    is_business: bool = False,
) -> bool:
    if status == ResidentialStatus.RESIDENT_ORDINARY:
        return True
    if status == ResidentialStatus.RESIDENT_NOT_ORDINARY:
        return item.location == INDIA or (is_business and controlled_from_india)
    if status == ResidentialStatus.NON_RESIDENT:
        return item.location == INDIA
    return False


def taxable_value(
    items: Iterable[LineItem] | None,
    status: ResidentialStatus,
    controlled_from_india: bool = False,
    is_business: bool = False,
) -> Decimal:
    """Sum of the amounts taxable in India for *status*. Missing amounts count as 0."""
    if not items:
        return Decimal("0")
    return sum(
        (
            item.amount or Decimal("0")
            for item in items
            if is_included(item, status, controlled_from_india, is_business)
        ),
        Decimal("0"),
    )
