"""Allocation engine: the entry points callers use."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from loadplanner.algorithms.ordering import get_ordering_strategy
from loadplanner.algorithms.packer import MultiContainerPacker, summarize
from loadplanner.algorithms.preview import preview
from loadplanner.algorithms.selector import find_optimal
from loadplanner.config import DEFAULT_SETTINGS, EngineSettings
from loadplanner.core.errors import ConfigError, InvalidItemsError
from loadplanner.core.models import (
    Container,
    ContainerCategory,
    EvaluationResult,
    Item,
    PackResult,
    Requirements,
    SimulationOptions,
)
from loadplanner.core.schemas import parse_items, parse_options
from loadplanner.runner.pool import ContainerPoolProvider

logger = logging.getLogger(__name__)

NO_ITEMS = "no items to place"
NO_OPTIMAL_CONTAINER = "no optimal container found"
FORCED_CONTAINER_NOT_FOUND = "forced container not found"

ItemRows = Iterable[Item | Mapping[str, Any]]


class AllocationEngine:
    """
    Assigns items to containers read from a pool provider.

    Each call reads the pool once, builds its own ledgers and returns a fresh
    result; nothing is persisted and no container is reserved.  An engine
    instance holds no per-call state and can serve concurrent callers.

    Args:
        pool:     Container pool provider.
        settings: Thresholds, score weights and ordering policy.

    Raises:
        ConfigError: If ``settings.ordering`` names an unknown policy.
    """

    def __init__(self, pool: ContainerPoolProvider, settings: EngineSettings = DEFAULT_SETTINGS):
        try:
            get_ordering_strategy(settings.ordering)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        self.pool = pool
        self.settings = settings

    def summarize(self, items: ItemRows) -> Requirements:
        """Aggregate volume / weight / counts of the item rows."""
        return summarize(parse_items(items))

    def suggest_containers(
        self, items: ItemRows, category: ContainerCategory | None = None
    ) -> list[Container]:
        """
        Coarse pre-filter without placement simulation.

        Returns the available containers whose volume capacity and geometric
        volume both cover the aggregate item volume and whose weight capacity
        covers the aggregate weight.

        Raises:
            InvalidItemsError: If the item list is missing or empty.
        """
        rows = self._require_items(items)
        needs = summarize(rows)
        suggestions = [
            c
            for c in self.pool.list_available_containers(category=category)
            if c.capacity_volume >= needs.total_volume
            and c.geometric_volume >= needs.total_volume
            and c.capacity_weight >= needs.total_weight
        ]
        logger.info(
            "%d container(s) suggested for %.3fm³ / %.1fkg",
            len(suggestions), needs.total_volume, needs.total_weight,
        )
        return suggestions

    def find_optimal_container(self, items: ItemRows) -> EvaluationResult | None:
        """
        Best single container for the whole item set.

        Returns:
            EvaluationResult, or None when no container is available.

        Raises:
            InvalidItemsError: If the item list is missing or empty.
        """
        rows = self._require_items(items)
        return find_optimal(rows, self.pool.list_available_containers(), self.settings)

    def simulate_placement(
        self,
        items: ItemRows | None,
        options: SimulationOptions | Mapping[str, Any] | None = None,
    ) -> PackResult:
        """
        Place items into containers chosen according to ``options``.

        Forced container ids take precedence over preferred categories; with
        neither, the optimal single container is used.  Unplaceable units are
        reported in ``unplaced_items`` rather than raised.

        Returns:
            PackResult. ``success`` is False with ``error`` set when there is
            nothing to place or no container to place into.
        """
        options = parse_options(options)
        rows = parse_items(items) if items is not None else []
        if not rows:
            return PackResult.failure(NO_ITEMS)

        if options.force_container_ids:
            pool = self.pool.list_available_containers(ids=list(options.force_container_ids))
            if not pool:
                return PackResult.failure(FORCED_CONTAINER_NOT_FOUND, summarize(rows))
        elif options.preferred_categories:
            pool = self.pool.list_available_containers(
                category=list(options.preferred_categories)
            )
        else:
            best = find_optimal(rows, self.pool.list_available_containers(), self.settings)
            if best is None:
                return PackResult.failure(NO_OPTIMAL_CONTAINER)
            pool = [best.container]

        return MultiContainerPacker(self.settings).pack(rows, pool)

    def preview_placement(self, items: ItemRows) -> PackResult:
        """
        First-fit sizing estimate over the available pool.

        Raises:
            InvalidItemsError: If the item list is missing or empty.
        """
        rows = self._require_items(items)
        return preview(rows, self.pool.list_available_containers(), self.settings)

    @staticmethod
    def _require_items(items: ItemRows | None) -> list[Item]:
        rows = parse_items(items)
        if not rows:
            raise InvalidItemsError(NO_ITEMS)
        return rows
