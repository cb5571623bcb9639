"""
Turns a usage snapshot into the one-line status reported to the caller.

Reset countdowns and the seven-day budget are computed against an explicit
``now`` so callers (and tests) control the clock.
"""

import math
from datetime import datetime, timezone

from models import OutputResult, UsageData, UsageWindow

# The seven-day quota is modelled as refilling linearly over this window.
BUDGET_WINDOW_HOURS = 168


def _round(value: float) -> int:
    # half-up, not banker's rounding
    return math.floor(value + 0.5)


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def _parse_ts(iso: str | None) -> datetime | None:
    if not iso:
        return None
    try:
        ts = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def format_time_remaining(iso: str | None, now: datetime | None = None) -> str:
    """Render the time until ``iso`` as "2h 5m", "45m", "now", or "?" if unparseable."""
    reset = _parse_ts(iso)
    if reset is None:
        return "?"

    diff = (reset - _now(now)).total_seconds()
    if diff <= 0:
        return "now"

    total_minutes = int(diff // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return f"{minutes}m"
    return f"{hours}h {minutes}m"


def calculate_budget(iso: str | None, now: datetime | None = None) -> int | None:
    """Percentage of the seven-day window elapsed before its reset.

    Returns 100 once the window has reset and None when ``iso`` can't be parsed.
    """
    reset = _parse_ts(iso)
    if reset is None:
        return None

    hours_remaining = (reset - _now(now)).total_seconds() / 3600
    if hours_remaining <= 0:
        return 100

    hours_elapsed = BUDGET_WINDOW_HOURS - hours_remaining
    return _clamp(_round(hours_elapsed / BUDGET_WINDOW_HOURS * 100))


def percent(window: UsageWindow | None) -> int:
    if window is None or window.utilization is None:
        return 0
    return _clamp(_round(window.utilization))


def render(data: UsageData, now: datetime | None = None, error: str | None = None) -> OutputResult:
    now = _now(now)
    five_hour_reset = data.five_hour.resets_at if data.five_hour else None
    seven_day_reset = data.seven_day.resets_at if data.seven_day else None

    return OutputResult(
        five_hour_pct=percent(data.five_hour),
        seven_day_pct=percent(data.seven_day),
        five_hour_reset=format_time_remaining(five_hour_reset, now),
        seven_day_reset=format_time_remaining(seven_day_reset, now),
        seven_day_budget=calculate_budget(seven_day_reset, now),
        opus_pct=percent(data.seven_day_opus) if data.seven_day_opus is not None else None,
        error=error,
    )
