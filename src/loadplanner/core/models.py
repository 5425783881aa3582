"""Core data models for container allocation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

CM3_PER_M3 = 1_000_000.0
CM2_PER_M2 = 10_000.0


@dataclass(frozen=True)
class Dimensions:
    """Bounding box of an item or a container, in centimeters."""

    length: float
    width: float
    height: float

    @property
    def raw_volume(self) -> float:
        """Volume in cm³."""
        return self.length * self.width * self.height

    @property
    def volume_m3(self) -> float:
        return self.raw_volume / CM3_PER_M3

    @property
    def footprint_m2(self) -> float:
        """Floor area (length × width) in m²."""
        return (self.length * self.width) / CM2_PER_M2

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.length, self.width, self.height)

    def to_dict(self) -> dict[str, float]:
        return {"length": self.length, "width": self.width, "height": self.height}

    def __repr__(self) -> str:
        return f"{self.length}×{self.width}×{self.height}cm"


class ContainerCategory(str, Enum):
    TRUCK = "truck"
    SHIPPING_CONTAINER = "shippingContainer"


class ReasonCode(str, Enum):
    """Why a unit item could not be placed.

    The diagnoser checks these conditions in declaration order and reports
    the first one that holds.
    """

    DIMENSIONS_TOO_LARGE = "DIMENSIONS_TOO_LARGE"
    WEIGHT_EXCEEDED = "WEIGHT_EXCEEDED"
    VOLUME_EXCEEDED = "VOLUME_EXCEEDED"
    FRAGILE_CONSTRAINT = "FRAGILE_CONSTRAINT"
    NON_STACKABLE_CONSTRAINT = "NON_STACKABLE_CONSTRAINT"
    PLACEMENT_IMPOSSIBLE = "PLACEMENT_IMPOSSIBLE"


@dataclass(frozen=True)
class Item:
    """A package row ("colis").

    Attributes:
        dimensions: Bounding box in cm.
        weight: Unit weight in kg.
        quantity: Number of identical units this row stands for.
        fragile: Nothing may be placed on top of it.
        stackable: "Gerbable"; non-stackable items consume floor area.
        reference: Optional caller-side identifier.
    """

    dimensions: Dimensions
    weight: float
    quantity: int = 1
    fragile: bool = False
    stackable: bool = True
    reference: str | None = None

    @property
    def raw_volume(self) -> float:
        return self.dimensions.raw_volume

    @property
    def volume_m3(self) -> float:
        """Unit volume in m³ (quantity is not applied)."""
        return self.dimensions.volume_m3

    @property
    def footprint_m2(self) -> float:
        return self.dimensions.footprint_m2

    def unit(self) -> Item:
        """Copy of this row standing for a single unit."""
        return replace(self, quantity=1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "reference": self.reference,
            "dimensions": self.dimensions.to_dict(),
            "weight": self.weight,
            "quantity": self.quantity,
            "fragile": self.fragile,
            "stackable": self.stackable,
        }

    def __repr__(self) -> str:
        flags = "".join(
            [" fragile" if self.fragile else "", "" if self.stackable else " non-stackable"]
        )
        return (
            f"Item(ref={self.reference}, {self.dimensions!r}, "
            f"{self.weight}kg, qty={self.quantity}{flags})"
        )


@dataclass(frozen=True)
class Container:
    """A truck or shipping container from the pool.

    ``capacity_volume`` (m³) is derived from the dimensions when omitted.
    """

    id: str
    dimensions: Dimensions
    capacity_weight: float
    capacity_volume: float | None = None
    category: ContainerCategory = ContainerCategory.TRUCK
    available: bool = True
    container_type: str = ""

    def __post_init__(self) -> None:
        if self.capacity_volume is None:
            object.__setattr__(self, "capacity_volume", self.dimensions.volume_m3)

    @property
    def geometric_volume(self) -> float:
        """Volume enclosed by the dimensions, in m³."""
        return self.dimensions.volume_m3

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.container_type,
            "category": self.category.value,
            "dimensions": self.dimensions.to_dict(),
            "capacity_volume": self.capacity_volume,
            "capacity_weight": self.capacity_weight,
            "available": self.available,
        }


@dataclass(frozen=True)
class Placement:
    """A unit item assigned to an opened container."""

    container_id: str  # sequential id within the run ("1", "2", ...)
    container_ref: str  # pool id
    item: Item

    def to_dict(self) -> dict[str, Any]:
        return {
            "container_id": self.container_id,
            "container_ref": self.container_ref,
            "item": self.item.to_dict(),
        }


@dataclass(frozen=True)
class UnplacedItem:
    item: Item
    reason: ReasonCode

    def to_dict(self) -> dict[str, Any]:
        return {**self.item.to_dict(), "error": self.reason.value}


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of simulating the whole item set in a single container."""

    container: Container
    placed_items: int
    total_items: int
    volume_utilization: float
    weight_utilization: float
    placement_score: float
    optimality_score: float

    @property
    def container_id(self) -> str:
        return self.container.id

    @property
    def container_type(self) -> str:
        return self.container.container_type

    @property
    def container_category(self) -> ContainerCategory:
        return self.container.category

    @property
    def places_all(self) -> bool:
        return self.placed_items == self.total_items

    def to_dict(self) -> dict[str, Any]:
        return {
            "container_id": self.container_id,
            "container_type": self.container_type,
            "container_category": self.container_category.value,
            "dimensions": self.container.dimensions.to_dict(),
            "capacity_volume": self.container.capacity_volume,
            "capacity_weight": self.container.capacity_weight,
            "placed_items": self.placed_items,
            "total_items": self.total_items,
            "volume_utilization": self.volume_utilization,
            "weight_utilization": self.weight_utilization,
            "placement_score": self.placement_score,
            "optimality_score": self.optimality_score,
        }


@dataclass(frozen=True)
class Requirements:
    """Aggregate demand of an item list (quantities applied)."""

    total_volume: float = 0.0  # m³
    total_weight: float = 0.0  # kg
    count: int = 0  # input rows
    colis_count: int = 0  # unit items
    fragiles_count: int = 0
    non_stackables_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_volume": self.total_volume,
            "total_weight": self.total_weight,
            "count": self.count,
            "colis_count": self.colis_count,
            "fragiles_count": self.fragiles_count,
            "non_stackables_count": self.non_stackables_count,
        }


@dataclass(frozen=True)
class PackStats:
    total_volume: float = 0.0
    total_weight: float = 0.0
    colis_count: int = 0
    containers_count: int = 0
    avg_volume_utilization: float = 0.0
    avg_weight_utilization: float = 0.0
    fragiles_count: int = 0
    non_stackables_count: int = 0
    placed_count: int = 0
    unplaced_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_volume": self.total_volume,
            "total_weight": self.total_weight,
            "colis_count": self.colis_count,
            "containers_count": self.containers_count,
            "avg_volume_utilization": self.avg_volume_utilization,
            "avg_weight_utilization": self.avg_weight_utilization,
            "fragiles_count": self.fragiles_count,
            "non_stackables_count": self.non_stackables_count,
            "placed_count": self.placed_count,
            "unplaced_count": self.unplaced_count,
        }


@dataclass(frozen=True)
class ContainerReport:
    """Final state of one container that received at least one item."""

    id: str
    ref: str
    container_type: str
    category: ContainerCategory
    capacity_volume: float
    capacity_weight: float
    used_volume: float
    used_weight: float
    items: tuple[Item, ...] = ()

    @property
    def volume_utilization_pct(self) -> float:
        if self.capacity_volume <= 0:
            return 0.0
        return (self.used_volume / self.capacity_volume) * 100

    @property
    def weight_utilization_pct(self) -> float:
        if self.capacity_weight <= 0:
            return 0.0
        return (self.used_weight / self.capacity_weight) * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ref": self.ref,
            "type": self.container_type,
            "category": self.category.value,
            "capacity": {"volume": self.capacity_volume, "weight": self.capacity_weight},
            "used": {"volume": self.used_volume, "weight": self.used_weight},
            "utilization": {
                "volume": self.volume_utilization_pct,
                "weight": self.weight_utilization_pct,
            },
            "items": [it.to_dict() for it in self.items],
        }


@dataclass(frozen=True)
class SimulationOptions:
    """How ``simulate_placement`` chooses its container pool.

    Attributes:
        force_container_ids: Use exactly these containers, in this order.
        preferred_categories: Use every available container of these
            categories. Ignored when containers are forced.

    With neither set, the single best container for the whole item set
    is used.
    """

    force_container_ids: tuple[str, ...] = ()
    preferred_categories: tuple[ContainerCategory, ...] = ()


@dataclass(frozen=True)
class PackResult:
    """Everything a placement simulation reports back to its caller."""

    success: bool
    requirements: Requirements = field(default_factory=Requirements)
    stats: PackStats = field(default_factory=PackStats)
    containers: tuple[ContainerReport, ...] = ()
    placements: tuple[Placement, ...] = ()
    unplaced_items: tuple[UnplacedItem, ...] = ()
    error: str | None = None

    @classmethod
    def failure(cls, error: str, requirements: Requirements | None = None) -> PackResult:
        """Top-level failure with no container opened."""
        return cls(success=False, error=error, requirements=requirements or Requirements())

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "success": self.success,
            "requirements": self.requirements.to_dict(),
            "stats": self.stats.to_dict(),
            "containers": [c.to_dict() for c in self.containers],
            "placements": [p.to_dict() for p in self.placements],
            "unplaced_items": [u.to_dict() for u in self.unplaced_items],
        }
        if self.error is not None:
            d["error"] = self.error
        return d
