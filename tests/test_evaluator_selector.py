"""Tests for single-container evaluation and optimal container selection."""

import pytest

from conftest import make_container, make_item
from loadplanner.algorithms.evaluator import evaluate, optimality_score
from loadplanner.algorithms.ordering import expand_and_sort
from loadplanner.algorithms.selector import find_optimal, select_best
from loadplanner.config import EngineSettings
from loadplanner.core.models import EvaluationResult


def _result(container, placed, total, score):
    return EvaluationResult(
        container=container,
        placed_items=placed,
        total_items=total,
        volume_utilization=0.0,
        weight_utilization=0.0,
        placement_score=placed / total,
        optimality_score=score,
    )


class TestOptimalityScore:
    def test_default_blend(self):
        assert optimality_score(0.5, 0.5, 1.0) == pytest.approx(0.5)
        assert optimality_score(1.0, 0.0, 1.0) == pytest.approx(0.7)
        assert optimality_score(0.0, 1.0, 0.5) == pytest.approx(0.15)

    def test_custom_weights(self):
        settings = EngineSettings(volume_weight=0.5, weight_weight=0.5)
        assert optimality_score(1.0, 0.0, 1.0, settings) == pytest.approx(0.5)


class TestEvaluate:
    def test_two_units_in_large_truck(self, big_truck):
        units = expand_and_sort([make_item(quantity=2)])
        result = evaluate(big_truck, units)
        assert result.placed_items == 2
        assert result.total_items == 2
        assert result.places_all
        assert result.placement_score == pytest.approx(1.0)
        assert result.volume_utilization == pytest.approx(0.12 / 20.0)
        assert result.weight_utilization == pytest.approx(20.0 / 3500.0)

    def test_partial_placement(self):
        container = make_container("X", 100, 100, 100, 15.0)
        result = evaluate(container, expand_and_sort([make_item(quantity=2)]))
        assert result.placed_items == 1
        assert result.placement_score == pytest.approx(0.5)
        assert not result.places_all

    def test_empty_sequence(self, big_truck):
        result = evaluate(big_truck, [])
        assert result.placement_score == 0.0
        assert result.optimality_score == 0.0

    def test_fresh_ledger_per_call(self, big_truck):
        units = expand_and_sort([make_item(quantity=2)])
        assert evaluate(big_truck, units) == evaluate(big_truck, units)


class TestSelectBest:
    def test_empty(self):
        assert select_best([]) is None

    def test_complete_beats_higher_scoring_partial(self, big_truck, small_truck):
        partial = _result(big_truck, 1, 2, 0.9)
        complete = _result(small_truck, 2, 2, 0.1)
        assert select_best([partial, complete]) is complete

    def test_complete_by_score(self, big_truck, small_truck):
        low = _result(big_truck, 2, 2, 0.1)
        high = _result(small_truck, 2, 2, 0.5)
        assert select_best([low, high]) is high

    def test_partial_by_placed_count_then_score(self, big_truck, small_truck, cube_box):
        one = _result(big_truck, 1, 3, 0.9)
        two_low = _result(small_truck, 2, 3, 0.1)
        two_high = _result(cube_box, 2, 3, 0.2)
        assert select_best([one, two_low, two_high]) is two_high

    def test_ties_keep_pool_order(self, big_truck, small_truck):
        first = _result(big_truck, 2, 2, 0.3)
        second = _result(small_truck, 2, 2, 0.3)
        assert select_best([first, second]) is first


class TestFindOptimal:
    def test_single_container(self, big_truck):
        best = find_optimal([make_item(quantity=2)], [big_truck])
        assert best.container_id == "T1"
        assert best.placed_items == 2

    def test_tighter_container_wins(self, big_truck, small_truck):
        best = find_optimal([make_item(quantity=2)], [big_truck, small_truck])
        assert best.container_id == "T2"
        assert best.volume_utilization == pytest.approx(1.0)
        assert best.optimality_score == pytest.approx(0.7 + 0.3 * 0.2)

    def test_only_container_able_to_place_all(self, big_truck, small_truck):
        best = find_optimal([make_item(quantity=3)], [small_truck, big_truck])
        assert best.container_id == "T1"

    def test_unavailable_skipped(self, big_truck, small_truck):
        closed = make_container("T2", 60, 50, 40, 100.0, available=False)
        best = find_optimal([make_item(quantity=2)], [big_truck, closed])
        assert best.container_id == "T1"

    def test_empty_pool(self):
        assert find_optimal([make_item()], []) is None


class TestOptimalityScoreProperties:
    @pytest.mark.parametrize("weight_utilization", [0.0, 0.4, 1.0])
    @pytest.mark.parametrize("placement_score", [0.25, 0.5, 1.0])
    def test_strictly_increasing_in_volume(self, weight_utilization, placement_score):
        scores = [
            optimality_score(v, weight_utilization, placement_score)
            for v in (0.0, 0.1, 0.5, 0.9, 1.0)
        ]
        assert all(a < b for a, b in zip(scores, scores[1:]))

    @pytest.mark.parametrize("volume_utilization", [0.0, 0.3, 1.0])
    @pytest.mark.parametrize("weight_utilization", [0.0, 0.6, 1.0])
    @pytest.mark.parametrize("placement_score", [0.0, 0.5, 1.0])
    def test_bounded(self, volume_utilization, weight_utilization, placement_score):
        score = optimality_score(volume_utilization, weight_utilization, placement_score)
        assert 0.0 <= score <= 1.0

    def test_extremes(self):
        assert optimality_score(1.0, 1.0, 1.0) == pytest.approx(1.0)
        assert optimality_score(0.0, 0.0, 1.0) == 0.0

    def test_evaluations_stay_bounded(self, big_truck, small_truck, cube_box):
        units = expand_and_sort([make_item(quantity=3), make_item(100, 100, 50, weight=900.0)])
        for container in (big_truck, small_truck, cube_box):
            assert 0.0 <= evaluate(container, units).optimality_score <= 1.0
