"""Shared fixtures for the loadplanner test suite."""

import os
import sys

import pytest

# Ensure the src/ layout is importable without an editable install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from loadplanner.config import EngineSettings
from loadplanner.core.models import Container, ContainerCategory, Dimensions, Item
from loadplanner.runner.engine import AllocationEngine
from loadplanner.runner.pool import InMemoryContainerPool


def make_item(l=50.0, w=40.0, h=30.0, weight=10.0, **kwargs):
    """Item row with a 50×40×30 cm / 10 kg default."""
    return Item(dimensions=Dimensions(l, w, h), weight=weight, **kwargs)


def make_container(cid, l, w, h, capacity_weight, **kwargs):
    return Container(id=cid, dimensions=Dimensions(l, w, h), capacity_weight=capacity_weight, **kwargs)


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def big_truck():
    """400×200×250 cm truck: 20 m³, 8 m² floor, 3500 kg."""
    return make_container("T1", 400.0, 200.0, 250.0, 3500.0, container_type="porteur")


@pytest.fixture
def small_truck():
    """60×50×40 cm: exactly two 50×40×30 items by volume (0.12 m³)."""
    return make_container("T2", 60.0, 50.0, 40.0, 100.0, container_type="utilitaire")


@pytest.fixture
def shipping_container():
    return make_container(
        "C1", 590.0, 235.0, 239.0, 28000.0,
        category=ContainerCategory.SHIPPING_CONTAINER,
        container_type="20ft",
    )


@pytest.fixture
def cube_box():
    """100×100×100 cm box: 1 m³, 1 m² floor."""
    return make_container("CUBE", 100.0, 100.0, 100.0, 1000.0)


@pytest.fixture
def pool(big_truck, small_truck, shipping_container):
    return InMemoryContainerPool([big_truck, small_truck, shipping_container])


@pytest.fixture
def engine(pool):
    return AllocationEngine(pool)
