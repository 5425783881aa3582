"""
Orientation checks for a single item against a container's bounding box.

Only the item's own bounding box is considered: items already loaded in the
container play no part here (see ``core.ledger`` for capacity tracking).
"""

from __future__ import annotations

from typing import List, Tuple

from loadplanner.core.models import Dimensions

Dims3 = Tuple[float, float, float]


def orientations(dims: Dimensions) -> List[Dims3]:
    """Return all unique axis-aligned orientations (up to 6)."""
    l, w, h = dims.as_tuple()
    seen: set = set()
    result: List[Dims3] = []
    for oriented in [
        (l, w, h), (w, l, h),   # flat-base (z-axis 90°)
        (l, h, w), (h, l, w),   # y-axis rotations
        (w, h, l), (h, w, l),   # x-axis rotations
    ]:
        if oriented not in seen:
            seen.add(oriented)
            result.append(oriented)
    return result


def fits(item_dims: Dimensions, box_dims: Dimensions) -> bool:
    """
    Check whether the item can be rotated to fit inside the box.

    Args:
        item_dims: Item bounding box (cm).
        box_dims:  Container inner dimensions (cm).

    Returns:
        True if at least one orientation satisfies item ≤ box on all axes.
    """
    bl, bw, bh = box_dims.as_tuple()
    return any(
        l <= bl and w <= bw and h <= bh
        for l, w, h in orientations(item_dims)
    )
