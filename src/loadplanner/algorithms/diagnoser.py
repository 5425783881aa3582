"""Explain why a unit item ended up without a container."""

from __future__ import annotations

from loadplanner.core.geometry import fits
from loadplanner.core.ledger import OpenContainer
from loadplanner.core.models import Item, ReasonCode


def diagnose(item: Item, reference: OpenContainer | None) -> ReasonCode:
    """
    Return the first failing condition for ``item`` against ``reference``.

    Checks run in a fixed order: dimensions, weight, volume, fragile cap,
    non-stackable floor ceiling.  Without a reference ledger (no container
    was ever opened) the answer is ``PLACEMENT_IMPOSSIBLE``.

    Args:
        item:      Unit item that was not placed.
        reference: Ledger of the last container opened during the run.

    Returns:
        ReasonCode
    """
    if reference is None:
        return ReasonCode.PLACEMENT_IMPOSSIBLE
    if not fits(item.dimensions, reference.container.dimensions):
        return ReasonCode.DIMENSIONS_TOO_LARGE
    if not reference.fits_weight(item):
        return ReasonCode.WEIGHT_EXCEEDED
    if not reference.fits_volume(item):
        return ReasonCode.VOLUME_EXCEEDED
    if item.fragile and reference.has_items_above:
        return ReasonCode.FRAGILE_CONSTRAINT
    if not item.stackable and reference.floor_space_exhausted:
        return ReasonCode.NON_STACKABLE_CONSTRAINT
    return ReasonCode.PLACEMENT_IMPOSSIBLE
