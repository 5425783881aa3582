"""Single-container evaluation: how well would one container take the whole load?"""

from __future__ import annotations

import logging

from loadplanner.config import DEFAULT_SETTINGS, EngineSettings
from loadplanner.core.ledger import OpenContainer
from loadplanner.core.models import Container, EvaluationResult, Item

logger = logging.getLogger(__name__)


def optimality_score(
    volume_utilization: float,
    weight_utilization: float,
    placement_score: float,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> float:
    """Blend of volume and weight utilization, scaled by placement completeness."""
    blend = (
        settings.volume_weight * volume_utilization
        + settings.weight_weight * weight_utilization
    )
    return blend * placement_score


def evaluate(
    container: Container,
    sorted_items: list[Item],
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> EvaluationResult:
    """
    Simulate loading ``sorted_items`` into a fresh ledger for ``container``.

    One greedy pass in the given order; a rejected item is skipped and never
    retried.

    Args:
        container:    Candidate container.
        sorted_items: Unit items, already expanded and ordered.
        settings:     Engine thresholds and score weights.

    Returns:
        EvaluationResult with utilization ratios and optimality score.
    """
    ledger = OpenContainer.open(container, settings)
    placed = sum(1 for item in sorted_items if ledger.place(item))

    total = len(sorted_items)
    placement_score = placed / total if total else 0.0
    score = optimality_score(
        ledger.volume_utilization, ledger.weight_utilization, placement_score, settings
    )

    logger.debug(
        "Evaluated container %s: %d/%d placed, score=%.4f",
        container.id, placed, total, score,
    )
    return EvaluationResult(
        container=container,
        placed_items=placed,
        total_items=total,
        volume_utilization=ledger.volume_utilization,
        weight_utilization=ledger.weight_utilization,
        placement_score=placement_score,
        optimality_score=score,
    )
