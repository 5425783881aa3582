"""Pick the single best container for a whole item set."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from loadplanner.algorithms.evaluator import evaluate
from loadplanner.algorithms.ordering import expand_and_sort
from loadplanner.config import DEFAULT_SETTINGS, EngineSettings
from loadplanner.core.models import Container, EvaluationResult, Item

logger = logging.getLogger(__name__)


def select_best(evaluations: Sequence[EvaluationResult]) -> EvaluationResult | None:
    """
    Apply the selection rule to independent evaluations.

    Containers placing every item win, highest optimality score first.
    Otherwise the container placing the most items wins, tie-broken by
    optimality score.  Remaining ties keep pool order.
    """
    if not evaluations:
        return None

    complete = [e for e in evaluations if e.places_all]
    if complete:
        return max(complete, key=lambda e: e.optimality_score)
    return max(evaluations, key=lambda e: (e.placed_items, e.optimality_score))


def find_optimal(
    items: Iterable[Item],
    pool: Sequence[Container],
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> EvaluationResult | None:
    """
    Evaluate every available container against the full item set.

    Args:
        items:    Item rows (quantities are expanded here).
        pool:     Candidate containers.
        settings: Engine thresholds, weights and ordering policy.

    Returns:
        The winning EvaluationResult, or None when the pool is empty.
    """
    candidates = [c for c in pool if c.available]
    if not candidates:
        logger.info("No available container to evaluate")
        return None

    sorted_items = expand_and_sort(items, settings.ordering)
    evaluations = [evaluate(c, sorted_items, settings) for c in candidates]
    best = select_best(evaluations)

    logger.info(
        "Optimal container %s: %d/%d items, score=%.4f (%d candidates)",
        best.container_id, best.placed_items, best.total_items,
        best.optimality_score, len(candidates),
    )
    return best
