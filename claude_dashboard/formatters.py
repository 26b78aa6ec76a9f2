"""Pure formatting helpers for the status line."""

from __future__ import annotations

import math
import os
import re
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from .colors import color_for_percent, colorize
from .constants import (
    PROGRESS_BAR_WIDTH,
    PROGRESS_EMPTY_CHAR,
    PROGRESS_FILLED_CHAR,
    SECONDS_PER_MINUTE,
)


def round_half_up(value: float) -> int:
    """Round halves upward, unlike the built-in round()."""
    return math.floor(value + 0.5)


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text with ties rounded away from zero, like JS toFixed()."""
    quantum = Decimal(1).scaleb(-digits)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"


def format_tokens(tokens: int) -> str:
    """500 -> '500', 1500 -> '1.5K', 15000 -> '15K', 2_500_000 -> '2.5M'."""
    if tokens >= 1_000_000:
        value = tokens / 1_000_000
        return f"{round_half_up(value)}M" if value >= 10 else f"{to_fixed(value, 1)}M"
    if tokens >= 1_000:
        value = tokens / 1_000
        return f"{round_half_up(value)}K" if value >= 10 else f"{to_fixed(value, 1)}K"
    return str(tokens)


def format_cost(cost: float) -> str:
    return f"${to_fixed(cost, 2)}"


def calculate_percent(current: float, total: float) -> int:
    """Percentage of ``total`` used, clamped to [0, 100]. Zero when total <= 0."""
    if total <= 0:
        return 0
    return max(0, min(100, round_half_up(current / total * 100)))


def render_progress_bar(
    percent: float,
    width: int = PROGRESS_BAR_WIDTH,
    filled_char: str = PROGRESS_FILLED_CHAR,
    empty_char: str = PROGRESS_EMPTY_CHAR,
) -> str:
    """Coloured bar of ``width`` cells, filled in proportion to ``percent``."""
    clamped = max(0, min(100, percent))
    filled = round_half_up(clamped / 100 * width)
    bar = filled_char * filled + empty_char * (width - filled)
    return colorize(bar, color_for_percent(clamped))


def shorten_model_name(display_name: str) -> str:
    """'Claude Opus 4.5' -> 'Opus 4.5'; 'Claude Foo' -> 'Foo'."""
    lower = display_name.lower()
    match = re.search(r"(\d+\.?\d*)", display_name)
    version = match.group(1) if match else ""
    for family in ("opus", "sonnet", "haiku"):
        if family in lower:
            name = family.capitalize()
            return f"{name} {version}" if version else name
    parts = display_name.split()
    if len(parts) > 1 and parts[0].lower() == "claude":
        return parts[1]
    return display_name


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO 8601 timestamp (``Z`` suffix allowed) to an aware datetime."""
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def format_duration(seconds: float) -> str:
    """Whole hours and minutes: '1h23m' or '45m'. Negative spans are '0m'."""
    total_minutes = max(0, int(seconds // SECONDS_PER_MINUTE))
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h{minutes}m"
    return f"{minutes}m"


def format_time_remaining(resets_at: str | datetime, now: datetime | None = None) -> str:
    """Countdown until a rate-limit window resets, e.g. '4h40m'."""
    reset = resets_at if isinstance(resets_at, datetime) else parse_timestamp(resets_at)
    if reset is None:
        return ""
    now = now or datetime.now(UTC)
    diff = (reset - now).total_seconds()
    if diff <= 0:
        return "0m"
    return format_duration(diff)


def format_session_duration(start: datetime, now: datetime | None = None) -> str:
    now = now or datetime.now(UTC)
    return format_duration((now - start).total_seconds())


def format_elapsed(start: datetime, end: datetime | None = None, now: datetime | None = None) -> str:
    """Agent runtime: '<1s', '12s' or '2m5s'."""
    end = end or now or datetime.now(UTC)
    ms = (end - start).total_seconds() * 1000
    if ms < 1000:
        return "<1s"
    if ms < 60_000:
        return f"{round_half_up(ms / 1000)}s"
    mins = int(ms // 60_000)
    secs = round_half_up((ms % 60_000) / 1000)
    return f"{mins}m{secs}s"


def truncate(text: str, max_len: int) -> str:
    return text[: max_len - 3] + "..." if len(text) > max_len else text


def truncate_path(file_path: str, max_len: int = 20) -> str:
    """Last path component, truncated to ``max_len``."""
    return truncate(os.path.basename(file_path), max_len)
