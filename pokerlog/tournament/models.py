"""
Tournament Structure Data Models.

Immutable representations of the documents a tournament structure is made of.
Stored documents use camelCase keys; every model reads them with ``from_dict``
and writes them back with ``to_dict`` so the persistence layer can keep them
verbatim.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pokerlog.utils.errors import ErrorCode, InvalidDocumentError


class PrizeType(Enum):
    """Wire discriminator of a prize item."""

    PERCENTAGE = "percentage"  # 상금 풀 대비 비율
    FIXED_AMOUNT = "fixed_amount"  # 고정 금액
    CUSTOM_PRIZE = "custom_prize"  # 티켓 등 기타 상품


# ─────────────────────────────────────────────────────────────────────────────────
# 파싱 헬퍼
# ─────────────────────────────────────────────────────────────────────────────────


def _require(data: Dict[str, Any], key: str, document: str) -> Any:
    if not isinstance(data, dict):
        raise InvalidDocumentError(document, f"expected an object, got {type(data).__name__}")
    if data.get(key) is None:
        raise InvalidDocumentError(
            document, f"'{key}' is required", field=key, code=ErrorCode.MISSING_FIELD
        )
    return data[key]


def _as_int(value: Any, key: str, document: str) -> int:
    if isinstance(value, bool):
        raise InvalidDocumentError(document, f"'{key}' must be an integer", field=key)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDocumentError(document, f"'{key}' must be an integer", field=key) from None
    if not number.is_integer():
        raise InvalidDocumentError(document, f"'{key}' must be an integer", field=key)
    return int(number)


def _optional_int(data: Dict[str, Any], key: str, document: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    return _as_int(value, key, document)


def _as_number(value: Any, key: str, document: str) -> float:
    # numeric 컬럼은 문자열로 직렬화되어 올 수 있음
    if isinstance(value, bool):
        raise InvalidDocumentError(document, f"'{key}' must be a number", field=key)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDocumentError(document, f"'{key}' must be a number", field=key) from None
    if not math.isfinite(number):
        raise InvalidDocumentError(document, f"'{key}' must be a finite number", field=key)
    return number


def _as_list(value: Any, key: str, document: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidDocumentError(document, f"'{key}' must be a list", field=key)
    return list(value)


# ─────────────────────────────────────────────────────────────────────────────────
# 블라인드
# ─────────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BlindLevel:
    """One stage of the blind schedule.

    Breaks carry no blinds but still consume ``duration_minutes``.
    """

    level: int
    duration_minutes: int
    small_blind: Optional[int] = None
    big_blind: Optional[int] = None
    ante: Optional[int] = None
    is_break: bool = False

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * 60

    @classmethod
    def break_level(cls, level: int, duration_minutes: int) -> "BlindLevel":
        """Create a break stage."""
        return cls(level=level, duration_minutes=duration_minutes, is_break=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlindLevel":
        document = "blind level"
        duration = _as_int(
            _require(data, "durationMinutes", document), "durationMinutes", document
        )
        level = _optional_int(data, "level", document)
        if data.get("isBreak") is True:
            return cls.break_level(level if level is not None else 0, duration)
        return cls(
            level=level if level is not None else 0,
            duration_minutes=duration,
            small_blind=_optional_int(data, "smallBlind", document),
            big_blind=_optional_int(data, "bigBlind", document),
            ante=_optional_int(data, "ante", document),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "isBreak": self.is_break,
            "smallBlind": self.small_blind,
            "bigBlind": self.big_blind,
            "ante": self.ante,
            "durationMinutes": self.duration_minutes,
        }


# ─────────────────────────────────────────────────────────────────────────────────
# 프라이즈
# ─────────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PercentagePrize:
    """Share of the prize pool, in percent."""

    percentage: float
    sort_order: int = 0

    prize_type = PrizeType.PERCENTAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prizeType": self.prize_type.value,
            "percentage": self.percentage,
            "fixedAmount": None,
            "customPrizeLabel": None,
            "customPrizeValue": None,
            "sortOrder": self.sort_order,
        }


@dataclass(frozen=True)
class FixedAmountPrize:
    """Fixed payout independent of the prize pool."""

    amount: Optional[int]
    sort_order: int = 0

    prize_type = PrizeType.FIXED_AMOUNT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prizeType": self.prize_type.value,
            "percentage": None,
            "fixedAmount": self.amount,
            "customPrizeLabel": None,
            "customPrizeValue": None,
            "sortOrder": self.sort_order,
        }


@dataclass(frozen=True)
class CustomPrize:
    """Non-cash prize (ticket, trophy...) with an optional nominal value."""

    label: Optional[str]
    value: Optional[int] = None
    sort_order: int = 0

    prize_type = PrizeType.CUSTOM_PRIZE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prizeType": self.prize_type.value,
            "percentage": None,
            "fixedAmount": None,
            "customPrizeLabel": self.label,
            "customPrizeValue": self.value,
            "sortOrder": self.sort_order,
        }


PrizeItem = Union[PercentagePrize, FixedAmountPrize, CustomPrize]


def prize_item_from_dict(data: Dict[str, Any]) -> PrizeItem:
    """Build the prize item variant selected by ``prizeType``.

    Fields that do not belong to the selected variant are ignored.
    """
    document = "prize item"
    raw_type = _require(data, "prizeType", document)
    try:
        prize_type = PrizeType(raw_type)
    except ValueError:
        raise InvalidDocumentError(
            document, f"unknown prizeType '{raw_type}'", field="prizeType"
        ) from None

    sort_order = _optional_int(data, "sortOrder", document) or 0

    if prize_type is PrizeType.PERCENTAGE:
        # 편집 중인 항목은 비율이 비어 있을 수 있음 -> 0으로 합산
        raw = data.get("percentage")
        percentage = _as_number(raw, "percentage", document) if raw is not None else 0.0
        return PercentagePrize(percentage=percentage, sort_order=sort_order)
    if prize_type is PrizeType.FIXED_AMOUNT:
        return FixedAmountPrize(
            amount=_optional_int(data, "fixedAmount", document),
            sort_order=sort_order,
        )
    return CustomPrize(
        label=data.get("customPrizeLabel"),
        value=_optional_int(data, "customPrizeValue", document),
        sort_order=sort_order,
    )


@dataclass(frozen=True)
class PrizeLevel:
    """Payout for an inclusive range of finishing positions."""

    min_position: int
    max_position: int
    prize_items: Tuple[PrizeItem, ...] = ()
    sort_order: int = 0

    @property
    def position_range(self) -> Tuple[int, int]:
        return (self.min_position, self.max_position)

    @property
    def percentage_items(self) -> Tuple[PercentagePrize, ...]:
        return tuple(i for i in self.prize_items if isinstance(i, PercentagePrize))

    def covers(self, position: int) -> bool:
        return self.min_position <= position <= self.max_position

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrizeLevel":
        document = "prize level"
        return cls(
            min_position=_as_int(_require(data, "minPosition", document), "minPosition", document),
            max_position=_as_int(_require(data, "maxPosition", document), "maxPosition", document),
            prize_items=tuple(
                prize_item_from_dict(item)
                for item in _as_list(data.get("prizeItems"), "prizeItems", document)
            ),
            sort_order=_optional_int(data, "sortOrder", document) or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minPosition": self.min_position,
            "maxPosition": self.max_position,
            "sortOrder": self.sort_order,
            "prizeItems": [item.to_dict() for item in self.prize_items],
        }


@dataclass(frozen=True)
class PrizeStructure:
    """Prize table selected by an inclusive range of entrant counts.

    ``max_entrants`` of None means the range is unbounded above.
    """

    min_entrants: int
    max_entrants: Optional[int] = None
    prize_levels: Tuple[PrizeLevel, ...] = ()
    sort_order: int = 0

    @property
    def entry_range(self) -> Tuple[int, Optional[int]]:
        return (self.min_entrants, self.max_entrants)

    def accepts(self, entrants: int) -> bool:
        """Whether this structure applies to the given entrant count."""
        if entrants < self.min_entrants:
            return False
        return self.max_entrants is None or entrants <= self.max_entrants

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrizeStructure":
        document = "prize structure"
        return cls(
            min_entrants=_as_int(_require(data, "minEntrants", document), "minEntrants", document),
            max_entrants=_optional_int(data, "maxEntrants", document),
            prize_levels=tuple(
                PrizeLevel.from_dict(level)
                for level in _as_list(data.get("prizeLevels"), "prizeLevels", document)
            ),
            sort_order=_optional_int(data, "sortOrder", document) or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minEntrants": self.min_entrants,
            "maxEntrants": self.max_entrants,
            "sortOrder": self.sort_order,
            "prizeLevels": [level.to_dict() for level in self.prize_levels],
        }


# ─────────────────────────────────────────────────────────────────────────────────
# 토너먼트
# ─────────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TournamentBasic:
    """Basic tournament information.

    ``buy_in`` is only None on a session override that leaves it blank.
    """

    buy_in: Optional[int]
    name: Optional[str] = None
    rake: Optional[int] = None
    starting_stack: Optional[int] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], require_buy_in: bool = True) -> "TournamentBasic":
        document = "tournament basic"
        if not isinstance(data, dict):
            raise InvalidDocumentError(document, f"expected an object, got {type(data).__name__}")
        if require_buy_in:
            buy_in = _as_int(_require(data, "buyIn", document), "buyIn", document)
        else:
            buy_in = _optional_int(data, "buyIn", document)
        return cls(
            buy_in=buy_in,
            name=data.get("name"),
            rake=_optional_int(data, "rake", document),
            starting_stack=_optional_int(data, "startingStack", document),
            notes=data.get("notes"),
        )

    @classmethod
    def override_from_dict(cls, data: Dict[str, Any]) -> "TournamentBasic":
        """Read a session's basic override, where ``buyIn`` may be blank."""
        return cls.from_dict(data, require_buy_in=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "buyIn": self.buy_in,
            "rake": self.rake,
            "startingStack": self.starting_stack,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class StoreTournament:
    """Canonical store-level tournament definition."""

    basic: TournamentBasic
    blind_levels: Tuple[BlindLevel, ...] = ()
    prize_structures: Tuple[PrizeStructure, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreTournament":
        document = "store tournament"
        if not isinstance(data, dict):
            raise InvalidDocumentError(document, f"expected an object, got {type(data).__name__}")
        basic = data.get("basic")
        if basic is None:
            # 매장 토너먼트 레코드는 기본 정보가 최상위에 평탄화되어 있음
            basic = data
        return cls(
            basic=TournamentBasic.from_dict(basic),
            blind_levels=blind_levels_from_list(data.get("blindLevels")),
            prize_structures=prize_structures_from_list(data.get("prizeStructures")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "basic": self.basic.to_dict(),
            "blindLevels": [level.to_dict() for level in self.blind_levels],
            "prizeStructures": [s.to_dict() for s in self.prize_structures],
        }


def blind_levels_from_list(items: Any) -> Tuple[BlindLevel, ...]:
    """Parse a blind level list, keeping array order."""
    return tuple(
        BlindLevel.from_dict(item)
        for item in _as_list(items, "blindLevels", "blind levels")
    )


def prize_structures_from_list(items: Any) -> Tuple[PrizeStructure, ...]:
    """Parse a prize structure list, keeping array order."""
    return tuple(
        PrizeStructure.from_dict(item)
        for item in _as_list(items, "prizeStructures", "prize structures")
    )
