"""Tests for quantity expansion and the ordering policies."""

import pytest

from conftest import make_item
from loadplanner.algorithms.ordering import (
    ORDERING_STRATEGIES,
    density_desc_order,
    expand_and_sort,
    expand_items,
    fragile_last_order,
    get_ordering_strategy,
    volume_desc_order,
)


class TestExpandItems:
    def test_quantity_becomes_units(self):
        units = expand_items([make_item(quantity=3, reference="A")])
        assert len(units) == 3
        assert all(u.quantity == 1 for u in units)
        assert all(u.reference == "A" for u in units)

    def test_input_order_kept(self):
        units = expand_items([make_item(reference="A", quantity=2), make_item(reference="B")])
        assert [u.reference for u in units] == ["A", "A", "B"]

    def test_empty(self):
        assert expand_items([]) == []


class TestFragileLastOrder:
    def test_priority(self):
        fragile_big = make_item(100, 100, 100, fragile=True, reference="fragile")
        non_stackable_small = make_item(10, 10, 10, stackable=False, reference="non_stackable")
        stackable_big = make_item(100, 100, 100, reference="big")
        stackable_small = make_item(10, 10, 10, reference="small")

        ordered = fragile_last_order(
            [fragile_big, stackable_small, stackable_big, non_stackable_small]
        )
        assert [it.reference for it in ordered] == ["non_stackable", "big", "small", "fragile"]

    def test_ties_keep_input_order(self):
        a = make_item(reference="a")
        b = make_item(reference="b")
        assert [it.reference for it in fragile_last_order([a, b])] == ["a", "b"]
        assert [it.reference for it in fragile_last_order([b, a])] == ["b", "a"]

    def test_does_not_mutate_input(self):
        items = [make_item(10, 10, 10), make_item(100, 100, 100)]
        fragile_last_order(items)
        assert items[0].dimensions.length == 10


class TestOtherPolicies:
    def test_volume_desc(self):
        items = [make_item(10, 10, 10, reference="s"), make_item(100, 10, 10, reference="l")]
        assert [it.reference for it in volume_desc_order(items)] == ["l", "s"]

    def test_density_desc(self):
        light = make_item(10, 10, 10, weight=1.0, reference="light")
        heavy = make_item(10, 10, 10, weight=50.0, reference="heavy")
        assert [it.reference for it in density_desc_order([light, heavy])] == ["heavy", "light"]

    def test_density_non_stackable_first(self):
        dense = make_item(10, 10, 10, weight=50.0, reference="dense")
        floor = make_item(10, 10, 10, weight=1.0, stackable=False, reference="floor")
        assert [it.reference for it in density_desc_order([dense, floor])] == ["floor", "dense"]

    def test_density_beats_fragility(self):
        fragile_heavy = make_item(10, 10, 10, weight=50.0, fragile=True, reference="f")
        light = make_item(10, 10, 10, weight=1.0, reference="l")
        assert [it.reference for it in density_desc_order([light, fragile_heavy])] == ["f", "l"]

    def test_density_band_then_flat_first(self):
        # both 0.001 kg/cm³; compactness 0.25 vs 16
        tall = make_item(10, 10, 160, weight=16.0, reference="tall")
        flat = make_item(40, 40, 10, weight=16.0, reference="flat")
        assert [it.reference for it in density_desc_order([tall, flat])] == ["flat", "tall"]

    def test_density_within_tolerance_is_a_tie(self):
        # 1e-7 kg/cm³ apart: same band, so the larger cube goes first
        small = make_item(10, 10, 10, weight=1.0001, reference="small")
        large = make_item(20, 20, 20, weight=8.0, reference="large")
        assert [it.reference for it in density_desc_order([small, large])] == ["large", "small"]

    def test_density_fragile_last_among_alike(self):
        fragile = make_item(fragile=True, reference="f")
        plain = make_item(reference="p")
        assert [it.reference for it in density_desc_order([fragile, plain])] == ["p", "f"]

    def test_density_volume_tolerance(self):
        # 100 cm³ apart, inside the volume band: input order kept
        a = make_item(10, 10, 10, weight=1.0, reference="a")
        b = make_item(11, 10, 10, weight=1.1, reference="b")
        assert [it.reference for it in density_desc_order([a, b])] == ["a", "b"]


class TestRegistry:
    def test_all_registered(self):
        assert set(ORDERING_STRATEGIES) == {"fragile_last", "volume_desc", "density_desc"}

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown ordering strategy"):
            get_ordering_strategy("random")

    def test_expand_and_sort(self):
        units = expand_and_sort([make_item(fragile=True, quantity=2), make_item()])
        assert [u.fragile for u in units] == [False, True, True]
