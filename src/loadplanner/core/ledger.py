"""
Per-container capacity ledger.

An ``OpenContainer`` is the working state of one container during a single
packing attempt.  It tracks aggregate remaining volume / weight and floor
area; there is no spatial layout.  Ledgers are created fresh for every
attempt and owned by the loop that opened them.

Invariants:
    remaining_volume = capacity_volume - used_volume
    remaining_weight = capacity_weight - used_weight
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from loadplanner.config import DEFAULT_SETTINGS, EngineSettings
from loadplanner.core.geometry import fits
from loadplanner.core.models import Container, ContainerReport, Item

logger = logging.getLogger(__name__)


@dataclass
class OpenContainer:
    """
    Mutable capacity counters for one container.

    Attributes:
        container:               Pool entry this ledger was opened for.
        capacity_volume:         m³.
        capacity_weight:         kg.
        floor_space_total:       Container footprint, m².
        floor_space_used:        Footprint of non-stackable items placed, m².
        has_fragile_items:       A fragile item has been placed.
        has_items_above:         Fragile coverage flag. Set by the first fragile
                                 placement and never cleared, so a container
                                 takes at most one fragile item.
        has_non_stackable_items: A non-stackable item has been placed.
        items:                   Placed unit items, in placement order.
    """
    container: Container
    capacity_volume: float
    capacity_weight: float
    remaining_volume: float
    remaining_weight: float
    floor_space_total: float
    settings: EngineSettings = DEFAULT_SETTINGS
    used_volume: float = 0.0
    used_weight: float = 0.0
    floor_space_used: float = 0.0
    has_fragile_items: bool = False
    has_items_above: bool = False
    has_non_stackable_items: bool = False
    items: list[Item] = field(default_factory=list)

    @classmethod
    def open(
        cls, container: Container, settings: EngineSettings = DEFAULT_SETTINGS
    ) -> "OpenContainer":
        """Start an empty ledger for ``container``."""
        capacity_volume = container.capacity_volume or 0.0
        capacity_weight = container.capacity_weight or 0.0
        return cls(
            container=container,
            capacity_volume=capacity_volume,
            capacity_weight=capacity_weight,
            remaining_volume=capacity_volume,
            remaining_weight=capacity_weight,
            floor_space_total=container.dimensions.footprint_m2,
            settings=settings,
        )

    @property
    def floor_space_exhausted(self) -> bool:
        """True once non-stackable cargo reached the floor occupancy ceiling."""
        return self.floor_space_used >= self.settings.floor_space_ceiling * self.floor_space_total

    @property
    def volume_utilization(self) -> float:
        if self.capacity_volume <= 0:
            return 0.0
        return self.used_volume / self.capacity_volume

    @property
    def weight_utilization(self) -> float:
        if self.capacity_weight <= 0:
            return 0.0
        return self.used_weight / self.capacity_weight

    def fits_volume(self, item: Item) -> bool:
        return self.remaining_volume + self.settings.volume_epsilon >= item.volume_m3

    def fits_weight(self, item: Item) -> bool:
        return self.remaining_weight >= item.weight

    def can_place(self, item: Item) -> bool:
        """
        Placement gate: would this unit item be accepted right now?

        Checks geometry, remaining weight, remaining volume (with epsilon
        slack), the one-fragile-item cap and the non-stackable floor ceiling.
        """
        if not fits(item.dimensions, self.container.dimensions):
            return False
        if not (self.fits_weight(item) and self.fits_volume(item)):
            return False
        if item.fragile and self.has_items_above:
            return False
        if not item.stackable and self.floor_space_exhausted:
            return False
        return True

    def apply(self, item: Item) -> None:
        """
        Record ``item`` as loaded.

        Only call after ``can_place`` approved the item.
        """
        volume = item.volume_m3
        self.remaining_volume -= volume
        self.remaining_weight -= item.weight
        self.used_volume += volume
        self.used_weight += item.weight

        if not item.stackable:
            self.floor_space_used += item.footprint_m2
            self.has_non_stackable_items = True

        if item.fragile:
            self.has_fragile_items = True
            self.has_items_above = True

        self.items.append(item)

    def place(self, item: Item) -> bool:
        """Gate then apply. Returns whether the item was loaded."""
        if not self.can_place(item):
            logger.debug("Container %s rejected %r", self.container.id, item)
            return False
        self.apply(item)
        return True

    def to_report(self, report_id: str) -> ContainerReport:
        return ContainerReport(
            id=report_id,
            ref=self.container.id,
            container_type=self.container.container_type,
            category=self.container.category,
            capacity_volume=self.capacity_volume,
            capacity_weight=self.capacity_weight,
            used_volume=self.used_volume,
            used_weight=self.used_weight,
            items=tuple(self.items),
        )

    def __repr__(self) -> str:
        return (
            f"OpenContainer(ref={self.container.id}, "
            f"items={len(self.items)}, "
            f"volume={self.used_volume:.3f}/{self.capacity_volume:.3f}m³, "
            f"weight={self.used_weight:.1f}/{self.capacity_weight:.1f}kg)"
        )
