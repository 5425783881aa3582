"""First-fit packing of unit items across an ordered container pool."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from loadplanner.algorithms.diagnoser import diagnose
from loadplanner.algorithms.ordering import expand_and_sort
from loadplanner.config import DEFAULT_SETTINGS, EngineSettings
from loadplanner.core.ledger import OpenContainer
from loadplanner.core.models import (
    Container,
    Item,
    PackResult,
    PackStats,
    Placement,
    Requirements,
    UnplacedItem,
)

logger = logging.getLogger(__name__)


def summarize(items: Iterable[Item]) -> Requirements:
    """Aggregate volume, weight and unit counts of item rows (quantities applied)."""
    rows = list(items)
    total_volume = 0.0
    total_weight = 0.0
    colis = fragiles = non_stackables = 0
    for it in rows:
        q = max(1, it.quantity)
        colis += q
        total_volume += it.volume_m3 * q
        total_weight += it.weight * q
        if it.fragile:
            fragiles += q
        if not it.stackable:
            non_stackables += q
    return Requirements(
        total_volume=total_volume,
        total_weight=total_weight,
        count=len(rows),
        colis_count=colis,
        fragiles_count=fragiles,
        non_stackables_count=non_stackables,
    )


def pack_stats(
    requirements: Requirements,
    ledgers: Sequence[OpenContainer],
    placed_count: int,
    unplaced_count: int,
) -> PackStats:
    """Aggregate statistics from the final state of the used containers."""
    n = len(ledgers)
    avg_volume = (
        sum(lg.used_volume / max(1e-9, lg.capacity_volume) for lg in ledgers) / n if n else 0.0
    )
    avg_weight = (
        sum(lg.used_weight / max(1e-9, lg.capacity_weight) for lg in ledgers) / n if n else 0.0
    )
    return PackStats(
        total_volume=requirements.total_volume,
        total_weight=requirements.total_weight,
        colis_count=requirements.colis_count,
        containers_count=n,
        avg_volume_utilization=avg_volume,
        avg_weight_utilization=avg_weight,
        fragiles_count=requirements.fragiles_count,
        non_stackables_count=requirements.non_stackables_count,
        placed_count=placed_count,
        unplaced_count=unplaced_count,
    )


class MultiContainerPacker:
    """
    First-fit packing across containers.

    Containers are opened in pool order.  Each one is offered, in loading
    order, every unit item that no earlier container took.  A container
    that ends up empty is dropped from the result.

    Ledgers live only inside ``pack``; an instance holds nothing but its
    settings and can be shared between callers.
    """

    def __init__(self, settings: EngineSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def pack(self, items: Iterable[Item], pool: Sequence[Container]) -> PackResult:
        """
        Distribute items over the containers of ``pool``.

        Args:
            items: Item rows (quantities are expanded here)
            pool:  Containers to open, in order

        Returns:
            PackResult; ``success`` is True only when every unit was placed
        """
        rows = list(items)
        requirements = summarize(rows)
        units = expand_and_sort(rows, self.settings.ordering)

        ledgers: list[OpenContainer] = []
        last_opened: OpenContainer | None = None
        placed: set[int] = set()
        placements: list[Placement] = []

        for container in pool:
            ledger = OpenContainer.open(container, self.settings)
            last_opened = ledger
            report_id = str(len(ledgers) + 1)

            for idx, unit in enumerate(units):
                if idx in placed:
                    continue
                if ledger.place(unit):
                    placed.add(idx)
                    placements.append(Placement(report_id, container.id, unit))

            if ledger.items:
                ledgers.append(ledger)
            else:
                logger.debug("Container %s received no item, dropped", container.id)

        unplaced = [
            UnplacedItem(unit, diagnose(unit, last_opened))
            for idx, unit in enumerate(units)
            if idx not in placed
        ]

        stats = pack_stats(requirements, ledgers, len(placed), len(unplaced))
        logger.info(
            "Packed %d/%d units into %d container(s)",
            len(placed), len(units), len(ledgers),
        )
        if unplaced:
            logger.warning("%d unit(s) could not be placed", len(unplaced))

        return PackResult(
            success=not unplaced,
            requirements=requirements,
            stats=stats,
            containers=tuple(lg.to_report(str(i)) for i, lg in enumerate(ledgers, start=1)),
            placements=tuple(placements),
            unplaced_items=tuple(unplaced),
        )
