"""
Unit tests for usage rendering: countdowns, budget and percentages
"""

from datetime import timedelta

from models import UsageData, UsageWindow
from report import calculate_budget, format_time_remaining, percent, render


def _iso(ts):
    return ts.isoformat()


def test_percentage_rounds_to_nearest():
    assert percent(UsageWindow(utilization=42.6)) == 43
    assert percent(UsageWindow(utilization=12.5)) == 13
    assert percent(UsageWindow(utilization=12.4)) == 12


def test_percentage_defaults_and_clamps():
    assert percent(None) == 0
    assert percent(UsageWindow(utilization=None)) == 0
    assert percent(UsageWindow(utilization=123.4)) == 100
    assert percent(UsageWindow(utilization=-3)) == 0


def test_format_hours_and_minutes(now):
    assert format_time_remaining(_iso(now + timedelta(minutes=90)), now) == "1h 30m"


def test_format_minutes_only(now):
    assert format_time_remaining(_iso(now + timedelta(minutes=30)), now) == "30m"
    # partial minutes are truncated
    assert format_time_remaining(_iso(now + timedelta(seconds=59)), now) == "0m"


def test_format_past_or_now(now):
    assert format_time_remaining(_iso(now - timedelta(hours=2)), now) == "now"
    assert format_time_remaining(_iso(now), now) == "now"


def test_format_accepts_zulu_and_naive(now):
    assert format_time_remaining("2026-03-02T14:15:00Z", now) == "2h 15m"
    assert format_time_remaining("2026-03-02T12:45:00", now) == "45m"


def test_format_unparseable(now):
    assert format_time_remaining("not-a-date", now) == "?"
    assert format_time_remaining("", now) == "?"
    assert format_time_remaining(None, now) == "?"


def test_budget_full_window_remaining(now):
    assert calculate_budget(_iso(now + timedelta(hours=168)), now) == 0


def test_budget_window_reset(now):
    assert calculate_budget(_iso(now), now) == 100
    assert calculate_budget(_iso(now - timedelta(hours=3)), now) == 100


def test_budget_half_elapsed(now):
    assert calculate_budget(_iso(now + timedelta(hours=84)), now) == 50


def test_budget_clamped_beyond_window(now):
    assert calculate_budget(_iso(now + timedelta(hours=200)), now) == 0


def test_budget_unparseable(now):
    assert calculate_budget("garbage", now) is None
    assert calculate_budget(None, now) is None


def test_render_full_snapshot(now):
    data = UsageData(
        five_hour=UsageWindow(utilization=42.6, resets_at=_iso(now + timedelta(minutes=90))),
        seven_day=UsageWindow(utilization=20, resets_at=_iso(now + timedelta(hours=84))),
        seven_day_opus=UsageWindow(utilization=7.2, resets_at=None),
    )

    result = render(data, now)

    assert result.model_dump(exclude_none=True) == {
        "five_hour_pct": 43,
        "seven_day_pct": 20,
        "five_hour_reset": "1h 30m",
        "seven_day_reset": "84h 0m",
        "seven_day_budget": 50,
        "opus_pct": 7,
    }


def test_render_missing_windows(now):
    result = render(UsageData(), now, error="stale")

    assert result.to_json() == (
        '{"five_hour_pct":0,"seven_day_pct":0,'
        '"five_hour_reset":"?","seven_day_reset":"?","error":"stale"}'
    )


def test_format_accepts_short_fractional_seconds(now):
    assert format_time_remaining("2026-03-02T13:00:00.5Z", now) == "1h 0m"
    assert calculate_budget("2026-03-05T12:00:00.1234567+00:00", now) is not None
