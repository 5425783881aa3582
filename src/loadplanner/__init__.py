"""
loadplanner — capacity-heuristic allocation of packages to trucks and
shipping containers.

Public API:
    from loadplanner import AllocationEngine, InMemoryContainerPool
    from loadplanner import Item, Dimensions, Container, ContainerCategory
    from loadplanner import load_items, load_container_pool, load_settings
"""

from loadplanner.config import DEFAULT_SETTINGS, EngineSettings, load_settings
from loadplanner.core.errors import (
    ConfigError,
    ContainerPoolError,
    InvalidItemsError,
    LoadPlannerError,
)
from loadplanner.core.models import (
    Container,
    ContainerCategory,
    ContainerReport,
    Dimensions,
    EvaluationResult,
    Item,
    PackResult,
    PackStats,
    Placement,
    ReasonCode,
    Requirements,
    SimulationOptions,
    UnplacedItem,
)
from loadplanner.runner.dataset import generate_items, load_container_pool, load_items
from loadplanner.runner.engine import AllocationEngine
from loadplanner.runner.pool import ContainerPoolProvider, InMemoryContainerPool

__version__ = "0.1.0"

__all__ = [
    # Engine
    "AllocationEngine", "ContainerPoolProvider", "InMemoryContainerPool",
    # Settings
    "EngineSettings", "DEFAULT_SETTINGS", "load_settings",
    # Models
    "Dimensions", "Item", "Container", "ContainerCategory", "ReasonCode",
    "SimulationOptions", "EvaluationResult", "Requirements", "PackStats",
    "Placement", "UnplacedItem", "ContainerReport", "PackResult",
    # Loading
    "load_items", "load_container_pool", "generate_items",
    # Errors
    "LoadPlannerError", "InvalidItemsError", "ContainerPoolError", "ConfigError",
]
