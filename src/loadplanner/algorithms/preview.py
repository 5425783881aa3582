"""
Quick sizing preview: how many containers of which kind would this load need?

Units are taken largest first.  Each unit goes into the first already-open
container with enough weight, volume and geometry; otherwise the smallest
pool container able to hold it on its own is opened.  The same pool entry
may be opened several times, so the result is an estimate and not an
allocation of specific containers.  Fragile and non-stackable rules are
not applied here.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from loadplanner.algorithms.diagnoser import diagnose
from loadplanner.algorithms.ordering import expand_and_sort
from loadplanner.algorithms.packer import pack_stats, summarize
from loadplanner.config import DEFAULT_SETTINGS, EngineSettings
from loadplanner.core.geometry import fits
from loadplanner.core.ledger import OpenContainer
from loadplanner.core.models import (
    Container,
    Item,
    PackResult,
    Placement,
    ReasonCode,
    UnplacedItem,
)

logger = logging.getLogger(__name__)


def _accepts(ledger: OpenContainer, item: Item) -> bool:
    return (
        fits(item.dimensions, ledger.container.dimensions)
        and ledger.fits_weight(item)
        and ledger.fits_volume(item)
    )


def smallest_fitting_container(
    item: Item, pool: Sequence[Container], settings: EngineSettings = DEFAULT_SETTINGS
) -> Container | None:
    """Smallest-capacity container able to take ``item`` when empty."""
    candidates = [
        c for c in pool if _accepts(OpenContainer.open(c, settings), item)
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda c: c.capacity_volume or 0.0)


def preview(
    items: Iterable[Item],
    pool: Sequence[Container],
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> PackResult:
    """
    Estimate the containers needed for ``items``.

    Args:
        items:    Item rows.
        pool:     Available containers.
        settings: Engine settings (epsilon only).

    Returns:
        PackResult whose containers may repeat the same pool reference.
    """
    rows = list(items)
    requirements = summarize(rows)
    units = expand_and_sort(rows, "volume_desc")
    candidates = [c for c in pool if c.available]

    ledgers: list[OpenContainer] = []
    placements: list[Placement] = []
    unplaced: list[UnplacedItem] = []

    for unit in units:
        slot = next((i for i, lg in enumerate(ledgers) if _accepts(lg, unit)), None)
        if slot is None:
            chosen = smallest_fitting_container(unit, candidates, settings)
            if chosen is None:
                unplaced.append(UnplacedItem(unit, _explain(unit, candidates, settings)))
                continue
            ledgers.append(OpenContainer.open(chosen, settings))
            slot = len(ledgers) - 1

        ledger = ledgers[slot]
        ledger.apply(unit)
        placements.append(Placement(str(slot + 1), ledger.container.id, unit))

    logger.info("Preview: %d unit(s) need %d container(s)", len(units), len(ledgers))

    return PackResult(
        success=not unplaced,
        requirements=requirements,
        stats=pack_stats(requirements, ledgers, len(placements), len(unplaced)),
        containers=tuple(lg.to_report(str(i)) for i, lg in enumerate(ledgers, start=1)),
        placements=tuple(placements),
        unplaced_items=tuple(unplaced),
    )


def _explain(item: Item, pool: Sequence[Container], settings: EngineSettings) -> ReasonCode:
    # Diagnose against an empty copy of the largest container in the pool.
    if not pool:
        return diagnose(item, None)
    largest = max(pool, key=lambda c: c.capacity_volume or 0.0)
    return diagnose(item, OpenContainer.open(largest, settings))
