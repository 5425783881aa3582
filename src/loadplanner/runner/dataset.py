"""Item and container catalog loading, plus random demo data."""

import json
import random
from pathlib import Path
from typing import Any

import yaml

from loadplanner.core.errors import ContainerPoolError, InvalidItemsError
from loadplanner.core.models import Dimensions, Item
from loadplanner.core.schemas import parse_items
from loadplanner.runner.pool import InMemoryContainerPool


def read_document(path: Path | str) -> Any:
    """
    Read a YAML or JSON document, chosen by file extension.

    Args:
        path: ``.yaml`` / ``.yml`` / ``.json`` file

    Returns:
        Parsed document

    Raises:
        OSError: If the file cannot be read
        ValueError: If the extension is not supported or the content is invalid
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise ValueError(f"Unsupported file type: {path.suffix}. Use .yaml, .yml or .json")

    with path.open("r", encoding="utf-8") as handle:
        if suffix == ".json":
            try:
                return json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
        try:
            return yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc


def _rows(document: Any, key: str) -> Any:
    # Accept either a bare list or a mapping holding the list under ``key``.
    if isinstance(document, dict):
        return document.get(key)
    return document


def load_items(path: Path | str) -> list[Item]:
    """
    Load item rows from a YAML / JSON file.

    The file holds a list of rows, or a mapping with an ``items`` list.

    Raises:
        InvalidItemsError: If the file is unreadable or a row is malformed
    """
    try:
        document = read_document(path)
    except (OSError, ValueError) as exc:
        raise InvalidItemsError(f"Cannot load items from {path}: {exc}") from exc
    rows = _rows(document, "items")
    if rows is not None and not isinstance(rows, list):
        raise InvalidItemsError(f"{path}: expected a list of items")
    return parse_items(rows)


def load_container_pool(path: Path | str) -> InMemoryContainerPool:
    """
    Load a container catalog from a YAML / JSON file.

    The file holds a list of containers, or a mapping with a ``containers`` list.

    Raises:
        ContainerPoolError: If the file is unreadable or an entry is malformed
    """
    try:
        document = read_document(path)
    except (OSError, ValueError) as exc:
        raise ContainerPoolError(f"Cannot load containers from {path}: {exc}") from exc
    rows = _rows(document, "containers")
    if not isinstance(rows, list):
        raise ContainerPoolError(f"{path}: expected a list of containers")
    return InMemoryContainerPool(rows)


def generate_items(count: int = 20, seed: int | None = None) -> list[Item]:
    """
    Generate random item rows for demos and experiments.

    Args:
        count: Number of rows to generate
        seed: Random seed for reproducibility (default: None)

    Returns:
        List of Item rows with random dimensions, weights and flags
    """
    rng = random.Random(seed)

    items = []
    for i in range(count):
        # Random dimensions: 20-120 cm each dimension
        dims = Dimensions(
            length=round(rng.uniform(20.0, 120.0), 1),
            width=round(rng.uniform(20.0, 120.0), 1),
            height=round(rng.uniform(20.0, 120.0), 1),
        )

        # Random weight: 0.5-80 kg
        weight = round(rng.uniform(0.5, 80.0), 1)

        items.append(
            Item(
                dimensions=dims,
                weight=weight,
                quantity=rng.randint(1, 4),
                fragile=rng.random() < 0.15,
                stackable=rng.random() >= 0.25,
                reference=f"ITEM-{i:03d}",
            )
        )

    return items
