"""
Prize Structure Validator.

편집 중인 프라이즈 테이블을 저장 전에 검증.

검사 순서 (첫 번째 위반만 반환):
1. 프라이즈 스트럭처 간 엔트리 수 범위 중복
2. 스트럭처 내 순위 범위 중복
3. 순위 범위별 퍼센티지 합계 = 100 (허용 오차 0.01)

Usage:
    violation = validate_prize_structures(structures)
    if violation is not None:
        show_error(violation.message)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from pokerlog.logging_config import get_logger
from pokerlog.utils.errors import ErrorCode, PrizeStructureInvalidError
from .models import PercentagePrize, PrizeLevel, PrizeStructure

logger = get_logger(__name__)

# 부동소수점 반올림 허용 오차
PERCENTAGE_TOLERANCE = 0.01

EntryRange = Tuple[int, Optional[int]]
PositionRange = Tuple[int, int]


class ViolationKind(Enum):
    """Kind of prize structure violation."""

    ENTRY_RANGE_OVERLAP = "entry_range_overlap"
    POSITION_RANGE_OVERLAP = "position_range_overlap"
    PERCENTAGE_TOTAL = "percentage_total"


_ERROR_CODES = {
    ViolationKind.ENTRY_RANGE_OVERLAP: ErrorCode.ENTRY_RANGE_OVERLAP,
    ViolationKind.POSITION_RANGE_OVERLAP: ErrorCode.POSITION_RANGE_OVERLAP,
    ViolationKind.PERCENTAGE_TOTAL: ErrorCode.PERCENTAGE_TOTAL_MISMATCH,
}


def format_entry_range(entry_range: EntryRange) -> str:
    """``1-9`` or ``10-∞`` for an unbounded range."""
    minimum, maximum = entry_range
    return f"{minimum}-{maximum if maximum is not None else '∞'}"


def format_position_range(position_range: PositionRange) -> str:
    minimum, maximum = position_range
    return f"{minimum}-{maximum}"


@dataclass(frozen=True)
class PrizeStructureViolation:
    """First problem found in an edited prize table.

    The offending ranges are the payload; ``message`` is only a rendering
    of them.
    """

    kind: ViolationKind
    entry_ranges: Tuple[EntryRange, ...]
    position_ranges: Tuple[PositionRange, ...] = ()
    total_percentage: Optional[float] = None

    @property
    def error_code(self) -> ErrorCode:
        return _ERROR_CODES[self.kind]

    @property
    def message(self) -> str:
        entries = [format_entry_range(r) for r in self.entry_ranges]
        positions = [format_position_range(r) for r in self.position_ranges]

        if self.kind is ViolationKind.ENTRY_RANGE_OVERLAP:
            return f"Entry ranges overlap: {entries[0]} and {entries[1]} entrants"
        if self.kind is ViolationKind.POSITION_RANGE_OVERLAP:
            return (
                f"Position ranges overlap in {entries[0]} entrants: "
                f"{positions[0]} and {positions[1]}"
            )
        return (
            f"Percentages for positions {positions[0]} in {entries[0]} entrants "
            f"must total 100% (currently {self.total_percentage:.2f}%)"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "entryRanges": [list(r) for r in self.entry_ranges],
            "positionRanges": [list(r) for r in self.position_ranges],
            "totalPercentage": self.total_percentage,
            "message": self.message,
        }


def ranges_overlap(
    first_min: int,
    first_max: Optional[int],
    second_min: int,
    second_max: Optional[int],
) -> bool:
    """Inclusive interval overlap; a None maximum is unbounded."""
    first_fits = first_max is None or second_min <= first_max
    second_fits = second_max is None or first_min <= second_max
    return first_fits and second_fits


def percentage_total(level: PrizeLevel) -> Optional[float]:
    """Sum of percentage items, None when the level has none."""
    items = [item for item in level.prize_items if isinstance(item, PercentagePrize)]
    if not items:
        return None
    return sum(item.percentage for item in items)


def validate_prize_structures(
    structures: Sequence[PrizeStructure],
    tolerance: float = PERCENTAGE_TOLERANCE,
) -> Optional[PrizeStructureViolation]:
    """프라이즈 스트럭처 검증.

    Args:
        structures: 편집 중인 스트럭처 목록 (저장 전)
        tolerance: 퍼센티지 합계 허용 오차

    Returns:
        첫 번째 위반, 문제가 없으면 None
    """
    violation = _find_entry_overlap(structures)
    if violation is None:
        # 스트럭처 단위로 순위 중복 -> 퍼센티지 합계 순서로 검사
        for structure in structures:
            violation = _find_position_overlap(structure) or _find_percentage_mismatch(
                structure, tolerance
            )
            if violation is not None:
                break

    if violation is not None:
        logger.info(
            "prize_structure_rejected",
            kind=violation.kind.value,
            entry_ranges=violation.entry_ranges,
            position_ranges=violation.position_ranges,
        )
    return violation


def ensure_valid_prize_structures(
    structures: Sequence[PrizeStructure],
    tolerance: float = PERCENTAGE_TOLERANCE,
) -> None:
    """Raise PrizeStructureInvalidError when the table would be rejected."""
    violation = validate_prize_structures(structures, tolerance)
    if violation is not None:
        raise PrizeStructureInvalidError(violation)


def _find_entry_overlap(
    structures: Sequence[PrizeStructure],
) -> Optional[PrizeStructureViolation]:
    for i, first in enumerate(structures):
        for second in structures[i + 1:]:
            if ranges_overlap(
                first.min_entrants,
                first.max_entrants,
                second.min_entrants,
                second.max_entrants,
            ):
                return PrizeStructureViolation(
                    kind=ViolationKind.ENTRY_RANGE_OVERLAP,
                    entry_ranges=(first.entry_range, second.entry_range),
                )
    return None


def _find_position_overlap(
    structure: PrizeStructure,
) -> Optional[PrizeStructureViolation]:
    levels = structure.prize_levels
    for i, first in enumerate(levels):
        for second in levels[i + 1:]:
            if ranges_overlap(
                first.min_position,
                first.max_position,
                second.min_position,
                second.max_position,
            ):
                return PrizeStructureViolation(
                    kind=ViolationKind.POSITION_RANGE_OVERLAP,
                    entry_ranges=(structure.entry_range,),
                    position_ranges=(first.position_range, second.position_range),
                )
    return None


def _find_percentage_mismatch(
    structure: PrizeStructure,
    tolerance: float,
) -> Optional[PrizeStructureViolation]:
    for level in structure.prize_levels:
        total = percentage_total(level)
        # NaN 합계도 위반으로 처리
        if total is not None and not abs(total - 100) <= tolerance:
            return PrizeStructureViolation(
                kind=ViolationKind.PERCENTAGE_TOTAL,
                entry_ranges=(structure.entry_range,),
                position_ranges=(level.position_range,),
                total_percentage=total,
            )
    return None
