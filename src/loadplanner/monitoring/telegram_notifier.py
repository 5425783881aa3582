"""Lightweight Telegram notification for placement simulation results.

Sends plain-text messages to a Telegram channel via the Bot API for:
- Simulation start
- Container load summaries
- Unplaced items
- Errors
- Final results summary

No retry logic: notifications are non-critical.
"""

from __future__ import annotations

import os
from typing import Any

import httpx

DEFAULT_CHAT_ID = os.environ.get("TELEGRAM_CHAT_ID", "")
TELEGRAM_API = "https://api.telegram.org/bot{token}/sendMessage"


async def send_telegram(
    message: str,
    chat_id: str | None = None,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Send a plain-text message to a Telegram channel.

    Args:
        message: Text to send.
        chat_id: Telegram chat ID. Defaults to TELEGRAM_CHAT_ID env var.
        token: Bot token. Defaults to TELEGRAM_BOT_TOKEN env var.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).

    Returns:
        True if message was sent successfully, False otherwise.
    """
    token = token or os.environ.get("TELEGRAM_BOT_TOKEN", "")
    if not token:
        return False

    chat_id = chat_id or os.environ.get("TELEGRAM_CHAT_ID", DEFAULT_CHAT_ID)
    if not chat_id:
        return False

    url = TELEGRAM_API.format(token=token)
    payload = {"chat_id": chat_id, "text": message}

    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(url, json=payload)
            data = resp.json()
            return bool(data.get("ok", False))
    except (httpx.HTTPError, ValueError):
        return False


def format_simulation_start(
    items_count: int,
    colis_count: int,
    mode: str,
    pool_size: int,
) -> str:
    """Format simulation start notification message.

    Example:
        >>> print(format_simulation_start(4, 12, "simulate", 3))
        🚀 Simulation Started (simulate)
        Items: 4 rows (12 units)
        Container pool: 3
    """
    return (
        f"🚀 Simulation Started ({mode})\n"
        f"Items: {items_count} rows ({colis_count} units)\n"
        f"Container pool: {pool_size}"
    )


def format_container_loaded(
    container_id: str,
    ref: str,
    items_placed: int,
    volume_pct: float,
    weight_pct: float,
) -> str:
    """Format per-container load notification.

    Example:
        >>> print(format_container_loaded("1", "TRK-01", 23, 82.3, 40.0))
        📦 Container Loaded
        ID: #1 (TRK-01)
        Items: 23
        Volume: 82.3% | Weight: 40.0%
    """
    return (
        f"📦 Container Loaded\n"
        f"ID: #{container_id} ({ref})\n"
        f"Items: {items_placed}\n"
        f"Volume: {volume_pct:.1f}% | Weight: {weight_pct:.1f}%"
    )


def format_unplaced_items(reasons: dict[str, int]) -> str:
    """Format unplaced item breakdown.

    Example:
        >>> print(format_unplaced_items({"WEIGHT_EXCEEDED": 2}))
        ⚠️ Unplaced Items: 2
        WEIGHT_EXCEEDED: 2
    """
    total = sum(reasons.values())
    lines = [f"⚠️ Unplaced Items: {total}"]
    lines += [f"{reason}: {count}" for reason, count in sorted(reasons.items())]
    return "\n".join(lines)


def format_error(error_type: str, error_message: str, context: dict[str, Any] | None = None) -> str:
    """Format error notification message.

    Example:
        >>> print(format_error("ContainerPoolError", "catalog unreadable", {"path": "pool.yaml"}))
        ❌ Error: ContainerPoolError
        catalog unreadable
        Context: path=pool.yaml
    """
    lines = [
        f"❌ Error: {error_type}",
        error_message,
    ]
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        lines.append(f"Context: {ctx_str}")
    return "\n".join(lines)


def format_final_summary(
    success: bool,
    containers: int,
    placed: int,
    unplaced: int,
    avg_volume_utilization: float,
    runtime_seconds: float,
) -> str:
    """Format final simulation summary.

    Example:
        >>> print(format_final_summary(True, 2, 40, 0, 71.25, 0.5))
        ✅ Simulation Complete
        Containers: 2
        Placed: 40 | Unplaced: 0
        Avg Volume Utilization: 71.2%
        Runtime: 0.50 s
    """
    header = "✅ Simulation Complete" if success else "⚠️ Simulation Incomplete"
    return (
        f"{header}\n"
        f"Containers: {containers}\n"
        f"Placed: {placed} | Unplaced: {unplaced}\n"
        f"Avg Volume Utilization: {avg_volume_utilization:.1f}%\n"
        f"Runtime: {runtime_seconds:.2f} s"
    )
