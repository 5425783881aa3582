"""Tests for the first-fit sizing preview."""

import pytest

from conftest import make_container, make_item
from loadplanner.algorithms.preview import preview, smallest_fitting_container
from loadplanner.core.models import ReasonCode


@pytest.fixture
def box_s():
    """110 cm cube: 1.331 m³."""
    return make_container("S", 110, 110, 110, 500.0)


class TestSmallestFittingContainer:
    def test_picks_smallest(self, big_truck, box_s):
        assert smallest_fitting_container(make_item(), [big_truck, box_s]).id == "S"

    def test_skips_too_small(self, big_truck, box_s):
        item = make_item(300, 150, 200)
        assert smallest_fitting_container(item, [box_s, big_truck]).id == "T1"

    def test_none_fits(self, box_s):
        assert smallest_fitting_container(make_item(5000, 5000, 5000), [box_s]) is None


class TestPreview:
    def test_same_reference_opened_repeatedly(self, big_truck, box_s):
        result = preview([make_item(100, 100, 100, quantity=3)], [big_truck, box_s])
        assert result.success
        assert [c.ref for c in result.containers] == ["S", "S", "S"]
        assert [c.id for c in result.containers] == ["1", "2", "3"]

    def test_first_fit_into_open_container(self, big_truck, box_s):
        items = [make_item(100, 100, 100, quantity=3), make_item(300, 150, 200)]
        result = preview(items, [big_truck, box_s])
        # largest unit first opens the truck, which then takes the cubes
        assert result.success
        assert [c.ref for c in result.containers] == ["T1"]
        assert len(result.placements) == 4

    def test_fragile_rule_not_applied(self, box_s):
        result = preview([make_item(fragile=True, quantity=2)], [box_s])
        assert result.success
        assert len(result.containers) == 1

    def test_unplaceable_item(self, big_truck, box_s):
        result = preview([make_item(5000, 5000, 5000), make_item()], [box_s, big_truck])
        assert not result.success
        assert [u.reason for u in result.unplaced_items] == [ReasonCode.DIMENSIONS_TOO_LARGE]
        assert result.stats.placed_count == 1

    def test_empty_pool(self):
        result = preview([make_item()], [])
        assert not result.success
        assert result.unplaced_items[0].reason is ReasonCode.PLACEMENT_IMPOSSIBLE

    def test_unavailable_ignored(self, big_truck):
        closed = make_container("S", 110, 110, 110, 500.0, available=False)
        result = preview([make_item()], [closed, big_truck])
        assert [c.ref for c in result.containers] == ["T1"]
