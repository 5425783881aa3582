"""Metrics tracking and export for placement simulations.

Provides dataclasses summarizing a ``PackResult`` and utilities for
exporting them to JSON and CSV formats.
"""

from __future__ import annotations

import csv
import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from loadplanner.core.models import ContainerReport, PackResult

CSV_FIELDS = [
    "container_id", "ref", "container_type", "category", "items_placed",
    "volume_used", "volume_total", "volume_utilization_pct",
    "weight_used", "weight_total", "weight_utilization_pct",
]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ContainerMetrics:
    """Metrics for a single used container.

    Attributes:
        container_id: Sequential id within the simulation ("1", "2", ...).
        ref: Pool id of the container.
        container_type: Descriptive container type.
        category: "truck" or "shippingContainer".
        items_placed: Number of unit items loaded.
        volume_used: Loaded volume in m³.
        volume_total: Volume capacity in m³.
        volume_utilization_pct: Volume utilization percentage (0-100).
        weight_used: Loaded weight in kg.
        weight_total: Weight capacity in kg.
        weight_utilization_pct: Weight utilization percentage (0-100).
    """

    container_id: str
    ref: str
    container_type: str
    category: str
    items_placed: int
    volume_used: float
    volume_total: float
    volume_utilization_pct: float
    weight_used: float
    weight_total: float
    weight_utilization_pct: float

    @classmethod
    def from_report(cls, report: ContainerReport) -> ContainerMetrics:
        return cls(
            container_id=report.id,
            ref=report.ref,
            container_type=report.container_type,
            category=report.category.value,
            items_placed=len(report.items),
            volume_used=report.used_volume,
            volume_total=report.capacity_volume,
            volume_utilization_pct=report.volume_utilization_pct,
            weight_used=report.used_weight,
            weight_total=report.capacity_weight,
            weight_utilization_pct=report.weight_utilization_pct,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SimulationMetrics:
    """Aggregate metrics for one simulation run.

    Attributes:
        simulation_id: Unique identifier for the run.
        mode: Entry point used (simulate, preview, ...).
        success: True when every unit item was placed.
        total_containers: Number of containers that received items.
        items_placed: Unit items placed.
        items_unplaced: Unit items left without a container.
        avg_volume_utilization_pct: Mean volume utilization over used containers.
        median_volume_utilization_pct: Median volume utilization.
        min_volume_utilization_pct: Minimum volume utilization.
        max_volume_utilization_pct: Maximum volume utilization.
        avg_weight_utilization_pct: Mean weight utilization.
        unplaced_reasons: Count of unplaced units per reason code.
        runtime_seconds: Wall-clock time of the run.
        error: Top-level error of the run, if any.
        started_at: Run start timestamp.
        completed_at: Run completion timestamp (None if running).
        container_metrics: List of per-container metrics.
    """

    simulation_id: str
    mode: str = "simulate"
    success: bool = False
    total_containers: int = 0
    items_placed: int = 0
    items_unplaced: int = 0
    avg_volume_utilization_pct: float = 0.0
    median_volume_utilization_pct: float = 0.0
    min_volume_utilization_pct: float = 0.0
    max_volume_utilization_pct: float = 0.0
    avg_weight_utilization_pct: float = 0.0
    unplaced_reasons: dict[str, int] = field(default_factory=dict)
    runtime_seconds: float = 0.0
    error: str | None = None
    started_at: datetime = field(default_factory=_utc_now)
    completed_at: datetime | None = None
    container_metrics: list[ContainerMetrics] = field(default_factory=list)

    def record_result(self, result: PackResult) -> None:
        """Fill the metrics from a finished simulation.

        Example:
            >>> sm = SimulationMetrics("sim_001")
            >>> sm.record_result(PackResult.failure("no items to place"))
            >>> sm.error
            'no items to place'
        """
        self.success = result.success
        self.error = result.error
        self.items_placed = result.stats.placed_count
        self.items_unplaced = result.stats.unplaced_count
        self.unplaced_reasons = dict(
            Counter(u.reason.value for u in result.unplaced_items)
        )
        self.container_metrics = [ContainerMetrics.from_report(c) for c in result.containers]
        self.total_containers = len(self.container_metrics)
        self._recalculate_stats()

    def mark_complete(self) -> None:
        """Mark the run as complete and calculate its runtime."""
        self.completed_at = _utc_now()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    def _recalculate_stats(self) -> None:
        """Recalculate aggregate statistics from container metrics."""
        if not self.container_metrics:
            return

        volume = np.array([c.volume_utilization_pct for c in self.container_metrics])
        weight = np.array([c.weight_utilization_pct for c in self.container_metrics])
        self.avg_volume_utilization_pct = float(volume.mean())
        self.median_volume_utilization_pct = float(np.median(volume))
        self.min_volume_utilization_pct = float(volume.min())
        self.max_volume_utilization_pct = float(volume.max())
        self.avg_weight_utilization_pct = float(weight.mean())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamps."""
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["container_metrics"] = [c.to_dict() for c in self.container_metrics]
        return d

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to summary dictionary without per-container details."""
        d = self.to_dict()
        del d["container_metrics"]
        return d


def export_to_json(
    metrics: SimulationMetrics,
    output_path: Path | str,
    result: PackResult | None = None,
) -> None:
    """Export simulation metrics to a JSON file.

    Args:
        metrics: SimulationMetrics instance to export.
        output_path: Path to output JSON file.
        result: If given, the full PackResult is included under "result".
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = metrics.to_dict()
    if result is not None:
        data["result"] = result.to_dict()

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_to_csv(metrics: SimulationMetrics, output_path: Path | str) -> None:
    """Export per-container metrics to a CSV file (header only when empty)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for container in metrics.container_metrics:
            writer.writerow(container.to_dict())


def print_summary(metrics: SimulationMetrics) -> str:
    """Generate human-readable summary of simulation metrics.

    Args:
        metrics: SimulationMetrics instance to summarize.

    Returns:
        Formatted multi-line summary string.
    """
    status = "SUCCESS" if metrics.success else "INCOMPLETE"
    lines = [
        "=" * 60,
        f"Simulation: {metrics.simulation_id} ({metrics.mode})",
        f"Status: {status}",
        "=" * 60,
    ]
    if metrics.error:
        lines.append(f"Error: {metrics.error}")
    lines += [
        f"Containers Used: {metrics.total_containers}",
        f"Items Placed: {metrics.items_placed}",
        f"Items Unplaced: {metrics.items_unplaced}",
    ]
    for reason, count in sorted(metrics.unplaced_reasons.items()):
        lines.append(f"  {reason}: {count}")
    lines += [
        "",
        "Volume Utilization:",
        f"  Average: {metrics.avg_volume_utilization_pct:.2f}%",
        f"  Median:  {metrics.median_volume_utilization_pct:.2f}%",
        f"  Min:     {metrics.min_volume_utilization_pct:.2f}%",
        f"  Max:     {metrics.max_volume_utilization_pct:.2f}%",
        f"Weight Utilization (avg): {metrics.avg_weight_utilization_pct:.2f}%",
        "",
    ]
    for c in metrics.container_metrics:
        lines.append(
            f"  #{c.container_id} {c.ref} ({c.category}): {c.items_placed} items, "
            f"volume {c.volume_utilization_pct:.1f}%, weight {c.weight_utilization_pct:.1f}%"
        )
    lines += [
        f"Runtime: {metrics.runtime_seconds:.3f} seconds",
        f"Started:   {metrics.started_at.isoformat()}",
        f"Completed: {metrics.completed_at.isoformat() if metrics.completed_at else 'In Progress'}",
        "=" * 60,
    ]
    return "\n".join(lines)
