"""
Container pool providers.

The engine reads the pool once per call through ``list_available_containers``
and treats the result as a point-in-time snapshot.  Providers never reserve
containers; two concurrent callers may both be offered the same one.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol, Sequence

from loadplanner.core.models import Container, ContainerCategory
from loadplanner.core.schemas import parse_containers


class ContainerPoolProvider(Protocol):
    """Anything that can list the currently available containers."""

    def list_available_containers(
        self,
        category: ContainerCategory | Sequence[ContainerCategory] | None = None,
        ids: Sequence[str] | None = None,
    ) -> list[Container]:
        ...


class InMemoryContainerPool:
    """
    Container catalog held in memory.

    Args:
        containers: Catalog entries, as ``Container`` objects or raw mappings
                    (validated through ``ContainerSchema``).
    """

    def __init__(self, containers: Iterable[Container | Mapping[str, Any]] = ()):
        self._containers: list[Container] = parse_containers(containers)

    @property
    def containers(self) -> list[Container]:
        """All catalog entries, available or not."""
        return list(self._containers)

    def list_available_containers(
        self,
        category: ContainerCategory | Sequence[ContainerCategory] | None = None,
        ids: Sequence[str] | None = None,
    ) -> list[Container]:
        """
        Return available containers, optionally filtered.

        Args:
            category: One category or a list of accepted categories.
            ids:      Explicit container ids. The result follows this order.

        Returns:
            Matching containers with ``available=True``.
        """
        available = [c for c in self._containers if c.available]

        if category is not None:
            accepted = {category} if isinstance(category, ContainerCategory) else set(category)
            available = [c for c in available if c.category in accepted]

        if ids is not None:
            by_id = {c.id: c for c in available}
            available = [by_id[i] for i in dict.fromkeys(ids) if i in by_id]

        return available

    def __len__(self) -> int:
        return len(self._containers)

    def __repr__(self) -> str:
        return f"InMemoryContainerPool(containers={len(self._containers)})"
