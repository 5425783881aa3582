"""Command-line runner for placement simulations."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import httpx

from loadplanner.config import load_settings
from loadplanner.core.errors import LoadPlannerError
from loadplanner.core.models import Item, PackResult, SimulationOptions
from loadplanner.core.schemas import parse_category
from loadplanner.monitoring.metrics import (
    SimulationMetrics,
    export_to_csv,
    export_to_json,
    print_summary,
)
from loadplanner.monitoring.telegram_notifier import (
    format_container_loaded,
    format_error,
    format_final_summary,
    format_simulation_start,
    format_unplaced_items,
    send_telegram,
)
from loadplanner.runner.dataset import generate_items, load_container_pool, load_items
from loadplanner.runner.engine import AllocationEngine

MODES = ("simulate", "preview", "optimal", "suggest")


class SimulationRunner:
    """
    Runs a placement simulation, collects metrics, saves results and
    optionally sends Telegram updates.
    """

    def __init__(
        self,
        engine: AllocationEngine,
        results_dir: Path | str | None = None,
        send_telegram_updates: bool = False,
        telegram_transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize simulation runner.

        Args:
            engine: Allocation engine bound to a container pool
            results_dir: Directory to save results (default: None, nothing saved)
            send_telegram_updates: Whether to send Telegram notifications
            telegram_transport: Optional httpx transport for the notifier
        """
        self.engine = engine
        self.results_dir = Path(results_dir) if results_dir is not None else None
        self.send_telegram_updates = send_telegram_updates
        self.telegram_transport = telegram_transport

    async def _send(self, message: str) -> bool:
        return await send_telegram(message, transport=self.telegram_transport)

    async def run_simulation(
        self,
        items: list[Item],
        mode: str = "simulate",
        options: SimulationOptions | None = None,
    ) -> tuple[PackResult, SimulationMetrics]:
        """
        Run one simulation.

        Args:
            items: Item rows
            mode: "simulate" (full placement) or "preview" (first-fit estimate)
            options: Container selection options for "simulate"

        Returns:
            The PackResult and its SimulationMetrics
        """
        simulation_id = f"sim_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
        metrics = SimulationMetrics(simulation_id=simulation_id, mode=mode)

        if self.send_telegram_updates:
            requirements = self.engine.summarize(items)
            pool_size = len(self.engine.pool.list_available_containers())
            await self._send(
                format_simulation_start(requirements.count, requirements.colis_count, mode, pool_size)
            )

        if mode == "preview":
            result = self.engine.preview_placement(items)
        else:
            result = self.engine.simulate_placement(items, options)

        metrics.record_result(result)
        metrics.mark_complete()

        if self.results_dir is not None:
            self._save_results(metrics, result)

        if self.send_telegram_updates:
            await self._notify(metrics)

        return result, metrics

    async def _notify(self, metrics: SimulationMetrics) -> None:
        for c in metrics.container_metrics:
            await self._send(
                format_container_loaded(
                    c.container_id, c.ref, c.items_placed,
                    c.volume_utilization_pct, c.weight_utilization_pct,
                )
            )
        if metrics.unplaced_reasons:
            await self._send(format_unplaced_items(metrics.unplaced_reasons))
        if metrics.error:
            await self._send(
                format_error(
                    "SimulationFailed",
                    metrics.error,
                    {"simulation": metrics.simulation_id, "mode": metrics.mode},
                )
            )
        await self._send(
            format_final_summary(
                success=metrics.success,
                containers=metrics.total_containers,
                placed=metrics.items_placed,
                unplaced=metrics.items_unplaced,
                avg_volume_utilization=metrics.avg_volume_utilization_pct,
                runtime_seconds=metrics.runtime_seconds,
            )
        )

    def _save_results(self, metrics: SimulationMetrics, result: PackResult) -> None:
        """
        Save metrics and the full result to JSON, per-container metrics to CSV.
        """
        self.results_dir.mkdir(parents=True, exist_ok=True)
        json_path = self.results_dir / f"{metrics.simulation_id}.json"
        csv_path = self.results_dir / f"{metrics.simulation_id}_containers.csv"
        export_to_json(metrics, json_path, result=result)
        export_to_csv(metrics, csv_path)

        print(f"✓ Saved results to {json_path} and {csv_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loadplanner",
        description="Allocate packages to trucks and shipping containers",
    )
    parser.add_argument(
        "items",
        nargs="?",
        help="Items file (.yaml, .yml or .json)",
    )
    parser.add_argument(
        "--pool",
        required=True,
        help="Container catalog file (.yaml, .yml or .json)",
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="simulate",
        help="Entry point to run (default: simulate)",
    )
    parser.add_argument(
        "--force",
        action="append",
        default=[],
        metavar="CONTAINER_ID",
        help="Use this container (repeatable, keeps order)",
    )
    parser.add_argument(
        "--category",
        action="append",
        default=[],
        help="Restrict to a category: truck or shippingContainer (repeatable)",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Engine settings YAML (default: $LOADPLANNER_SETTINGS or built-in)",
    )
    parser.add_argument(
        "--generate",
        type=int,
        default=None,
        metavar="N",
        help="Use N random item rows instead of an items file",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --generate")
    parser.add_argument(
        "--results-dir",
        default=None,
        help="Directory for JSON / CSV results (default: not saved)",
    )
    parser.add_argument(
        "--notify",
        action="store_true",
        help="Send Telegram updates (needs TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


async def run(args: argparse.Namespace) -> int:
    """Execute the parsed command. Returns the process exit code."""
    settings = load_settings(args.settings)
    pool = load_container_pool(args.pool)
    engine = AllocationEngine(pool, settings)

    if args.generate is not None:
        items = generate_items(count=args.generate, seed=args.seed)
    elif args.items:
        items = load_items(args.items)
    else:
        print("error: an items file or --generate N is required", file=sys.stderr)
        return 2

    categories = [parse_category(c) for c in args.category]

    if args.mode == "suggest":
        suggestions = []
        for category in categories or [None]:
            suggestions += engine.suggest_containers(items, category=category)
        for c in suggestions:
            print(f"{c.id}\t{c.category.value}\t{c.container_type}\t"
                  f"{c.capacity_volume:.2f}m³\t{c.capacity_weight:.0f}kg")
        print(f"{len(suggestions)} container(s) suggested")
        return 0

    if args.mode == "optimal":
        best = engine.find_optimal_container(items)
        if best is None:
            print("No container available")
            return 1
        print(json.dumps(best.to_dict(), indent=2))
        return 0

    options = SimulationOptions(
        force_container_ids=tuple(args.force),
        preferred_categories=tuple(categories),
    )
    runner = SimulationRunner(
        engine,
        results_dir=args.results_dir,
        send_telegram_updates=args.notify,
    )
    result, metrics = await runner.run_simulation(items, mode=args.mode, options=options)
    print(print_summary(metrics))
    return 0 if result.success else 1


def main(argv: list[str] | None = None) -> int:
    """Console entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(run(args))
    except (LoadPlannerError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        if args.notify:
            asyncio.run(
                send_telegram(format_error(type(exc).__name__, str(exc), {"mode": args.mode}))
            )
        return 2


if __name__ == "__main__":
    sys.exit(main())
