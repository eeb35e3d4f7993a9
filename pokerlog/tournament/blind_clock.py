"""
Blind Schedule Clock - Time-derived Blind Level State.

타이머 시작 시각과 현재 시각만으로 현재 블라인드 레벨을 계산.

핵심 설계:
─────────────────────────────────────────────────────────────────────────────────

1. 저장된 카운트다운 상태 없음:
   - 매 호출마다 (levels, timer_started_at, now)로 재계산
   - 호출 주기(1초 갱신 등)는 호출자 책임

2. 배열 순서 = 타임라인:
   - level 번호가 아니라 배열 순서대로 duration 누적
   - 브레이크도 시간을 소비하지만 표시 레벨 번호에서는 제외

3. 스케줄 종료 후:
   - 마지막 레벨에서 remaining_seconds = 0 으로 정지
   - 에러 없음, 종료 상태 별도 신호 없음

─────────────────────────────────────────────────────────────────────────────────
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Sequence

from .models import BlindLevel


# 남은 시간 경고 기준 (초)
DEFAULT_LOW_TIME_SECONDS = 60

_ONE_SECOND = timedelta(seconds=1)


@dataclass(frozen=True)
class CurrentLevelInfo:
    """현재 블라인드 레벨 정보."""

    current_index: int
    current_level: BlindLevel
    remaining_seconds: int
    next_level: Optional[BlindLevel]
    is_break: bool
    display_level: Optional[int]  # 브레이크 중에는 None
    next_display_level: Optional[int] = None

    def is_low_time(self, threshold_seconds: int = DEFAULT_LOW_TIME_SECONDS) -> bool:
        """Whether the level is about to end (frozen clock is never low)."""
        return 0 < self.remaining_seconds <= threshold_seconds

    @property
    def remaining_display(self) -> str:
        return format_remaining(self.remaining_seconds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentIndex": self.current_index,
            "currentLevel": self.current_level.to_dict(),
            "remainingSeconds": self.remaining_seconds,
            "nextLevel": self.next_level.to_dict() if self.next_level else None,
            "isBreak": self.is_break,
            "displayLevel": self.display_level,
            "nextDisplayLevel": self.next_display_level,
        }


def elapsed_seconds(timer_started_at: datetime, now: datetime) -> int:
    """Whole seconds elapsed since the timer started.

    A start time in the future counts as not started yet (0 seconds).
    Naive timestamps are taken as UTC when mixed with aware ones.
    """
    if (timer_started_at.tzinfo is None) != (now.tzinfo is None):
        timer_started_at = _as_utc(timer_started_at)
        now = _as_utc(now)
    elapsed = (now - timer_started_at) // _ONE_SECOND
    return max(0, elapsed)


def total_duration_seconds(levels: Sequence[BlindLevel]) -> int:
    """Length of the whole schedule, breaks included."""
    return sum(level.duration_seconds for level in levels)


def display_level_for_index(levels: Sequence[BlindLevel], target_index: int) -> int:
    """Count non-break levels from index 0 through ``target_index`` inclusive."""
    display_level = 0
    for level in levels[: max(0, target_index + 1)]:
        if not level.is_break:
            display_level += 1
    return display_level


def calculate_current_level(
    levels: Sequence[BlindLevel],
    timer_started_at: Optional[datetime],
    now: datetime,
) -> Optional[CurrentLevelInfo]:
    """현재 블라인드 레벨 계산.

    Args:
        levels: 블라인드 레벨 목록 (배열 순서 = 진행 순서)
        timer_started_at: 블라인드 타이머 시작 시각 (None이면 타이머 미시작)
        now: 평가 시각

    Returns:
        현재 레벨 정보, 레벨이 없거나 타이머가 없으면 None
    """
    if not levels or timer_started_at is None:
        return None

    elapsed = elapsed_seconds(timer_started_at, now)
    accumulated = 0
    display_level = 0

    for index, level in enumerate(levels):
        if not level.is_break:
            display_level += 1
        accumulated += level.duration_seconds

        if elapsed < accumulated:
            next_level = levels[index + 1] if index + 1 < len(levels) else None
            return CurrentLevelInfo(
                current_index=index,
                current_level=level,
                remaining_seconds=accumulated - elapsed,
                next_level=next_level,
                is_break=level.is_break,
                display_level=None if level.is_break else display_level,
                next_display_level=_next_display_level(levels, index, next_level),
            )

    # 스케줄 종료: 마지막 레벨에서 정지
    last_index = len(levels) - 1
    last_level = levels[last_index]
    return CurrentLevelInfo(
        current_index=last_index,
        current_level=last_level,
        remaining_seconds=0,
        next_level=None,
        is_break=last_level.is_break,
        display_level=None if last_level.is_break else display_level,
    )


def get_current_big_blind(
    levels: Sequence[BlindLevel],
    timer_started_at: Optional[datetime],
    now: datetime,
) -> Optional[int]:
    """현재 빅블라인드 (브레이크 중에는 직전 레벨 값 유지).

    Returns:
        빅블라인드, 타이머가 없거나 레벨이 없으면 None
    """
    if timer_started_at is None or not levels:
        return None

    elapsed = elapsed_seconds(timer_started_at, now)
    accumulated = 0
    last_big_blind: Optional[int] = None

    for level in levels:
        if not level.is_break and level.big_blind:
            last_big_blind = level.big_blind
        accumulated += level.duration_seconds

        if elapsed < accumulated:
            if level.is_break:
                return last_big_blind
            return level.big_blind

    return last_big_blind


def format_remaining(seconds: int) -> str:
    """Format seconds as M:SS."""
    seconds = max(0, seconds)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _next_display_level(
    levels: Sequence[BlindLevel],
    index: int,
    next_level: Optional[BlindLevel],
) -> Optional[int]:
    if next_level is None or next_level.is_break:
        return None
    return display_level_for_index(levels, index + 1)
