"""
Stack Metrics Calculator.

상금 풀, 평균 스택, BB 환산 스택 계산.

모든 값은 독립적으로 None 가능:
- 입력이 없거나 분모가 0이면 None
- 예외, NaN, Infinity 없음
"""

import math
from dataclasses import dataclass
from datetime import datetime
from fractions import Fraction
from typing import Any, Dict, Optional, Sequence

from .blind_clock import get_current_big_blind
from .models import BlindLevel


@dataclass(frozen=True)
class StackMetrics:
    """Display figures derived from the stack and the field."""

    current_big_blind: Optional[int] = None
    prize_pool: Optional[int] = None
    total_chips_in_play: Optional[int] = None
    average_stack: Optional[int] = None
    stack_in_bb: Optional[int] = None
    average_in_bb: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentBigBlind": self.current_big_blind,
            "prizePool": self.prize_pool,
            "totalChipsInPlay": self.total_chips_in_play,
            "averageStack": self.average_stack,
            "stackInBB": self.stack_in_bb,
            "averageInBB": self.average_in_bb,
        }


def round_ratio(numerator: Optional[float], denominator: Optional[int]) -> Optional[int]:
    """Nearest integer of numerator / denominator, halves rounded up.

    None when either side is unknown, the denominator is zero or the
    numerator is NaN or infinite.
    """
    if numerator is None or not denominator:
        return None
    if isinstance(numerator, float) and not math.isfinite(numerator):
        return None
    return math.floor(Fraction(numerator) / Fraction(denominator) + Fraction(1, 2))


def calculate_stack_metrics(
    blind_levels: Sequence[BlindLevel],
    timer_started_at: Optional[datetime],
    current_stack: int,
    buy_in: int,
    now: datetime,
    entries: Optional[int] = None,
    remaining: Optional[int] = None,
    starting_stack: Optional[int] = None,
) -> StackMetrics:
    """스택 지표 계산.

    Args:
        blind_levels: 유효 블라인드 레벨
        timer_started_at: 블라인드 타이머 시작 시각 (없으면 BB 기반 지표 None)
        current_stack: 현재 스택
        buy_in: 바이인
        now: 평가 시각 (블라인드 클록과 같은 값 사용)
        entries: 총 엔트리 수
        remaining: 남은 인원
        starting_stack: 시작 스택

    Returns:
        StackMetrics
    """
    current_big_blind = get_current_big_blind(blind_levels, timer_started_at, now)

    prize_pool = entries * buy_in if entries is not None else None
    total_chips = (
        entries * starting_stack
        if entries is not None and starting_stack is not None
        else None
    )
    # 총 칩 = 엔트리 x 시작 스택 (리엔트리/애드온 미반영)
    average_stack = round_ratio(total_chips, remaining)

    return StackMetrics(
        current_big_blind=current_big_blind,
        prize_pool=prize_pool,
        total_chips_in_play=total_chips,
        average_stack=average_stack,
        stack_in_bb=round_ratio(current_stack, current_big_blind),
        average_in_bb=round_ratio(average_stack, current_big_blind),
    )
