"""
Prize Payout Resolver.

엔트리 수에 맞는 프라이즈 스트럭처를 고르고 순위 범위별 지급액으로 펼친다.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .models import CustomPrize, FixedAmountPrize, PercentagePrize, PrizeStructure
from .stack_metrics import round_ratio


@dataclass(frozen=True)
class PayoutLine:
    """Payout of one prize level (per finishing position in its range)."""

    min_position: int
    max_position: int
    percentage: Optional[float] = None
    percentage_amount: Optional[int] = None  # 상금 풀을 모르면 None
    fixed_amount: Optional[int] = None
    custom_prizes: Tuple[str, ...] = ()

    @property
    def cash_amount(self) -> Optional[int]:
        """Percentage share plus fixed amount, None if neither is known."""
        parts = [a for a in (self.percentage_amount, self.fixed_amount) if a is not None]
        if not parts:
            return None
        return sum(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minPosition": self.min_position,
            "maxPosition": self.max_position,
            "percentage": self.percentage,
            "percentageAmount": self.percentage_amount,
            "fixedAmount": self.fixed_amount,
            "cashAmount": self.cash_amount,
            "customPrizes": list(self.custom_prizes),
        }


def select_prize_structure(
    structures: Sequence[PrizeStructure],
    entrants: Optional[int],
) -> Optional[PrizeStructure]:
    """First structure whose entry range contains ``entrants``."""
    if entrants is None:
        return None
    for structure in structures:
        if structure.accepts(entrants):
            return structure
    return None


def resolve_payouts(
    structure: PrizeStructure,
    prize_pool: Optional[int],
) -> List[PayoutLine]:
    """순위 범위별 지급 내역 계산.

    Args:
        structure: 적용 프라이즈 스트럭처
        prize_pool: 상금 풀 (없으면 퍼센티지 금액은 None)

    Returns:
        프라이즈 레벨 순서대로 PayoutLine 목록
    """
    lines = []
    for level in structure.prize_levels:
        percentage: Optional[float] = None
        fixed_amount: Optional[int] = None
        custom_prizes: List[str] = []

        for item in level.prize_items:
            if isinstance(item, PercentagePrize):
                percentage = (percentage or 0.0) + item.percentage
            elif isinstance(item, FixedAmountPrize):
                if item.amount is not None:
                    fixed_amount = (fixed_amount or 0) + item.amount
            elif isinstance(item, CustomPrize):
                if item.label:
                    custom_prizes.append(item.label)

        percentage_amount = None
        if percentage is not None and prize_pool is not None:
            percentage_amount = round_ratio(prize_pool * percentage, 100)

        lines.append(
            PayoutLine(
                min_position=level.min_position,
                max_position=level.max_position,
                percentage=percentage,
                percentage_amount=percentage_amount,
                fixed_amount=fixed_amount,
                custom_prizes=tuple(custom_prizes),
            )
        )
    return lines


def payout_for_position(
    structure: PrizeStructure,
    position: int,
    prize_pool: Optional[int],
) -> Optional[PayoutLine]:
    """Payout line covering a finishing position, None when out of the money."""
    for level, line in zip(structure.prize_levels, resolve_payouts(structure, prize_pool)):
        if level.covers(position):
            return line
    return None
