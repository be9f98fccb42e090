# itr_engine/domain/services/loss_setoff.py
"""
Loss set-off in the statutory order.

Phase 1: current-year intra-head (sections 70, 73, 74A)
Phase 2: current-year inter-head (section 71, house property capped)
Phase 3: brought-forward losses (sections 32(2), 72–74A)

Each transfer is min(remaining loss, remaining income) and every non-zero
transfer is logged in order. The engine owns fresh pools for one pass only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from itr_engine.domain.models.computation import SetOffEntry
from itr_engine.domain.models.declaration import Losses
from itr_engine.domain.models.enums import IncomeHead, LossKind

logger = logging.getLogger("loss_setoff")

ZERO = Decimal("0")

H = IncomeHead

STCL_ORDER = (H.STCG_OTHER, H.STCG_111A, H.LTCG_OTHER, H.LTCG_112A)
LTCL_ORDER = (H.LTCG_OTHER, H.LTCG_112A)

HOUSE_PROPERTY_ORDER = (
    H.BUSINESS, H.SPECULATIVE, H.STCG_OTHER, H.LTCG_OTHER, H.OTHER_SOURCES,
    H.RACE_HORSE, H.SALARY, H.STCG_111A, H.LTCG_112A, H.WINNINGS,
)
# Never against salary
BUSINESS_ORDER = (
    H.HOUSE_PROPERTY, H.SPECULATIVE, H.STCG_OTHER, H.LTCG_OTHER, H.OTHER_SOURCES,
    H.RACE_HORSE, H.STCG_111A, H.LTCG_112A, H.WINNINGS,
)
UNABSORBED_DEPRECIATION_ORDER = (
    H.HOUSE_PROPERTY, H.BUSINESS, H.SPECULATIVE, H.STCG_OTHER, H.LTCG_OTHER,
    H.OTHER_SOURCES, H.RACE_HORSE, H.STCG_111A, H.LTCG_112A, H.WINNINGS,
)


@dataclass
class SetOffResult:
    pools: dict[IncomeHead, Decimal]
    ledger: list[SetOffEntry] = field(default_factory=list)
    carried_forward: dict[LossKind, Decimal] = field(default_factory=dict)


def _amount(value: Decimal | None) -> Decimal:
    return max(ZERO, value or ZERO)


class LossSetOffEngine:
    """
    Runs the three phases over one income pool.

    ``pools`` is copied on construction; current-year house-property loss is
    passed separately because it comes out of the house-property computation.
    """

    def __init__(
        self,
        pools: dict[IncomeHead, Decimal],
        losses: Losses,
        house_property_loss: Decimal,
        hp_loss_setoff_limit: Decimal,
    ) -> None:
        self.pools = {head: max(ZERO, pools.get(head, ZERO)) for head in IncomeHead}
        self.hp_loss_setoff_limit = hp_loss_setoff_limit
        self.ledger: list[SetOffEntry] = []

        cy, bf = losses.current_year, losses.brought_forward
        self.current = {
            LossKind.HOUSE_PROPERTY: _amount(house_property_loss),
            LossKind.BUSINESS: _amount(cy.business_non_speculative),
            LossKind.SPECULATIVE: _amount(cy.business_speculative),
            LossKind.STCL: _amount(cy.stcl),
            LossKind.LTCL: _amount(cy.ltcl),
            LossKind.RACE_HORSE: _amount(cy.race_horses),
        }
        self.brought_forward = {
            LossKind.HOUSE_PROPERTY: _amount(bf.house_property),
            LossKind.BUSINESS: _amount(bf.business_non_speculative),
            LossKind.SPECULATIVE: _amount(bf.business_speculative),
            LossKind.STCL: _amount(bf.stcl),
            LossKind.LTCL: _amount(bf.ltcl),
            LossKind.RACE_HORSE: _amount(bf.race_horses),
            LossKind.UNABSORBED_DEPRECIATION: _amount(bf.unabsorbed_depreciation),
        }

    # ---- primitives ----

    def _reduce(self, source: str, loss: Decimal, head: IncomeHead) -> Decimal:
        """Set *loss* off against *head*; returns the amount absorbed."""
        reduction = min(loss, self.pools[head])
        if reduction > 0:
            self.pools[head] -= reduction
            self.ledger.append(SetOffEntry(source=source, against=head.value, amount=reduction))
            logger.debug("%s set off against %s: %s", source, head.value, reduction)
        return reduction

    def _apply(self, bucket: dict[LossKind, Decimal], kind: LossKind, source: str, order) -> None:
        for head in order:
            if bucket[kind] <= 0:
                break
            bucket[kind] -= self._reduce(source, bucket[kind], head)

    # ---- phases ----

    def _intra_head(self) -> None:
        cy = self.current
        self._apply(cy, LossKind.SPECULATIVE, "CY Speculative Loss", (H.SPECULATIVE,))
        self._apply(cy, LossKind.RACE_HORSE, "CY Race Horse Loss", (H.RACE_HORSE,))
        self._apply(cy, LossKind.STCL, "CY STCL", STCL_ORDER)
        self._apply(cy, LossKind.LTCL, "CY LTCL", LTCL_ORDER)

    def _inter_head(self) -> None:
        cy = self.current
        # Only the capped portion of house-property loss crosses heads
        hp_loss = cy[LossKind.HOUSE_PROPERTY]
        available = min(hp_loss, self.hp_loss_setoff_limit)
        consumed = ZERO
        for head in HOUSE_PROPERTY_ORDER:
            if available - consumed <= 0:
                break
            consumed += self._reduce("CY HP Loss", available - consumed, head)
        cy[LossKind.HOUSE_PROPERTY] = hp_loss - consumed

        self._apply(cy, LossKind.BUSINESS, "CY Business Loss", BUSINESS_ORDER)

    def _brought_forward(self) -> None:
        bf = self.brought_forward
        self._apply(bf, LossKind.UNABSORBED_DEPRECIATION, "BF Unabsorbed Depreciation", UNABSORBED_DEPRECIATION_ORDER)
        self._apply(bf, LossKind.BUSINESS, "BF Business Loss", (H.BUSINESS,))
        self._apply(bf, LossKind.SPECULATIVE, "BF Speculative Loss", (H.SPECULATIVE,))
        self._apply(bf, LossKind.HOUSE_PROPERTY, "BF HP Loss", (H.HOUSE_PROPERTY,))
        self._apply(bf, LossKind.RACE_HORSE, "BF Race Horse Loss", (H.RACE_HORSE,))
        self._apply(bf, LossKind.STCL, "BF STCL", STCL_ORDER)
        self._apply(bf, LossKind.LTCL, "BF LTCL", LTCL_ORDER)

    def run(self) -> SetOffResult:
        self._intra_head()
        self._inter_head()
        self._brought_forward()

        carried_forward = {
            kind: self.current.get(kind, ZERO) + self.brought_forward[kind]
            for kind in LossKind
            if kind != LossKind.UNABSORBED_DEPRECIATION
        }
        carried_forward[LossKind.UNABSORBED_DEPRECIATION] = self.brought_forward[LossKind.UNABSORBED_DEPRECIATION]

        logger.debug("Set-off complete: %d transfers", len(self.ledger))
        return SetOffResult(pools=dict(self.pools), ledger=list(self.ledger), carried_forward=carried_forward)


def set_off_losses(
    pools: dict[IncomeHead, Decimal],
    losses: Losses,
    house_property_loss: Decimal = ZERO,
    hp_loss_setoff_limit: Decimal = Decimal("200000"),
) -> SetOffResult:
    """Convenience wrapper: run a fresh engine over *pools*."""
    return LossSetOffEngine(pools, losses, house_property_loss, hp_loss_setoff_limit).run()
