"""Builders for blind schedules and timestamps used across tests."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pokerlog.tournament.models import BlindLevel

TIMER_START = datetime(2026, 3, 1, 19, 0, 0, tzinfo=timezone.utc)


def at(minutes: float = 0, seconds: float = 0) -> datetime:
    """타이머 시작 기준 시각."""
    return TIMER_START + timedelta(minutes=minutes, seconds=seconds)


def level(n: int, sb: int, bb: int, minutes: int = 20, ante: Optional[int] = None) -> BlindLevel:
    return BlindLevel(
        level=n,
        duration_minutes=minutes,
        small_blind=sb,
        big_blind=bb,
        ante=ante,
    )


def break_level(minutes: int = 10, n: int = 0) -> BlindLevel:
    return BlindLevel.break_level(n, minutes)
