"""Item expansion and sequencing policies."""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Callable, Iterable

from loadplanner.core.models import Item


def expand_items(items: Iterable[Item]) -> list[Item]:
    """
    Replace every row of quantity q with q unit items.

    Args:
        items: Item rows

    Returns:
        Unit items (quantity=1), in input order
    """
    units: list[Item] = []
    for item in items:
        unit = item.unit()
        units.extend(unit for _ in range(max(1, item.quantity)))
    return units


def fragile_last_order(items: list[Item]) -> list[Item]:
    """
    Default loading order.

    Non-fragile before fragile, non-stackable before stackable, then by
    raw volume descending. ``sorted`` is stable so full ties keep input order.

    Args:
        items: Unit items

    Returns:
        Sorted copy of items
    """
    return sorted(items, key=lambda it: (it.fragile, it.stackable, -it.raw_volume))


def volume_desc_order(items: list[Item]) -> list[Item]:
    """
    Sort items by raw volume (largest first).

    Args:
        items: Unit items

    Returns:
        Items sorted by volume descending
    """
    return sorted(items, key=lambda it: it.raw_volume, reverse=True)


# Differences at or below these bands count as ties
DENSITY_TOLERANCE = 1e-6  # kg/cm³
COMPACTNESS_TOLERANCE = 0.1
VOLUME_TOLERANCE_CM3 = 1000.0


def _compactness(it: Item) -> float:
    """Height over the side of the equivalent square base."""
    d = it.dimensions
    return d.height / max(1.0, math.sqrt(d.length * d.width))


def _compare_density(a: Item, b: Item) -> int:
    if a.stackable != b.stackable:
        return 1 if a.stackable else -1

    da = a.weight / max(1.0, a.raw_volume)
    db = b.weight / max(1.0, b.raw_volume)
    if abs(da - db) > DENSITY_TOLERANCE:
        return -1 if da > db else 1

    ca, cb = _compactness(a), _compactness(b)
    if abs(ca - cb) > COMPACTNESS_TOLERANCE:
        return -1 if ca < cb else 1

    if abs(a.raw_volume - b.raw_volume) > VOLUME_TOLERANCE_CM3:
        return -1 if a.raw_volume > b.raw_volume else 1

    if a.fragile != b.fragile:
        return 1 if a.fragile else -1
    return 0


def density_desc_order(items: list[Item]) -> list[Item]:
    """
    Sort by weight density (heaviest per cm³ first).

    Non-stackable items come first. Within a density band, flat items come
    before tall ones, then larger volume first; fragility only separates
    items that are otherwise alike.

    Args:
        items: Unit items

    Returns:
        Items sorted by density descending
    """
    return sorted(items, key=cmp_to_key(_compare_density))


# Map of ordering policy names to functions
ORDERING_STRATEGIES: dict[str, Callable[[list[Item]], list[Item]]] = {
    "fragile_last": fragile_last_order,
    "volume_desc": volume_desc_order,
    "density_desc": density_desc_order,
}


def get_ordering_strategy(name: str) -> Callable[[list[Item]], list[Item]]:
    """
    Get an ordering policy function by name.

    Args:
        name: Policy name (fragile_last, volume_desc, density_desc)

    Returns:
        Ordering function

    Raises:
        ValueError: If policy name is not recognized
    """
    if name not in ORDERING_STRATEGIES:
        raise ValueError(
            f"Unknown ordering strategy: {name}. "
            f"Available: {list(ORDERING_STRATEGIES.keys())}"
        )
    return ORDERING_STRATEGIES[name]


def expand_and_sort(items: Iterable[Item], ordering: str = "fragile_last") -> list[Item]:
    """Expand quantities then apply the named ordering policy."""
    return get_ordering_strategy(ordering)(expand_items(items))
