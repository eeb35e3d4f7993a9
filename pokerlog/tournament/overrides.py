"""
Session Override Resolver.

매장 기본 토너먼트 설정과 세션별 오버라이드를 병합해 유효 설정을 만든다.

그룹 단위 교체:
- basic / blindLevels / prizeStructures 세 그룹은 서로 독립
- 오버라이드 슬롯이 존재하면 해당 그룹 전체를 교체 (내부 null 필드 포함)
- 필드 단위로 매장 값을 보충하지 않음 (예외: 비어 있는 buyIn은 매장 값 사용)
- 슬롯을 Absent로 되돌리면 "매장 기본값으로 복원"
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar, Union

from pokerlog.logging_config import get_logger
from pokerlog.utils.errors import InvalidDocumentError
from .models import (
    BlindLevel,
    PrizeStructure,
    StoreTournament,
    TournamentBasic,
    blind_levels_from_list,
    prize_structures_from_list,
)

logger = get_logger(__name__)

T = TypeVar("T")


class Absent:
    """No override: inherit the store value."""

    _instance: Optional["Absent"] = None

    def __new__(cls) -> "Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()


@dataclass(frozen=True)
class Present(Generic[T]):
    """Override present: ``value`` replaces the whole store group."""

    value: T


OverrideSlot = Union[Absent, Present[T]]


class OverrideSection(Enum):
    """Override groups that can be reverted independently."""

    BASIC = "basic"
    BLINDS = "blinds"
    PRIZES = "prizes"


_SECTION_FIELDS = {
    OverrideSection.BASIC: "basic",
    OverrideSection.BLINDS: "blind_levels",
    OverrideSection.PRIZES: "prize_structures",
}


def _slot_value(slot: "OverrideSlot[T]", fallback: T) -> T:
    if isinstance(slot, Present):
        return slot.value
    return fallback


@dataclass(frozen=True)
class SessionOverride:
    """Session-scoped replacement of store tournament groups."""

    basic: "OverrideSlot[TournamentBasic]" = ABSENT
    blind_levels: "OverrideSlot[Tuple[BlindLevel, ...]]" = ABSENT
    prize_structures: "OverrideSlot[Tuple[PrizeStructure, ...]]" = ABSENT

    @property
    def has_basic_override(self) -> bool:
        return isinstance(self.basic, Present)

    @property
    def has_blinds_override(self) -> bool:
        return isinstance(self.blind_levels, Present)

    @property
    def has_prizes_override(self) -> bool:
        return isinstance(self.prize_structures, Present)

    def cleared(self, *sections: OverrideSection) -> "SessionOverride":
        """Return a copy with the given slots reset to Absent."""
        return replace(self, **{_SECTION_FIELDS[s]: ABSENT for s in sections})

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SessionOverride":
        """Read the three nullable override columns of a session.

        A null slot is Absent. A slot that cannot be read is treated as
        Absent as well and logged.
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            basic=_read_slot(data, "basic", TournamentBasic.override_from_dict),
            blind_levels=_read_slot(data, "blindLevels", blind_levels_from_list),
            prize_structures=_read_slot(data, "prizeStructures", prize_structures_from_list),
        )

    def to_dict(self) -> Dict[str, Any]:
        basic = _slot_value(self.basic, None)
        blinds = _slot_value(self.blind_levels, None)
        prizes = _slot_value(self.prize_structures, None)
        return {
            "basic": basic.to_dict() if basic is not None else None,
            "blindLevels": [level.to_dict() for level in blinds] if blinds is not None else None,
            "prizeStructures": [s.to_dict() for s in prizes] if prizes is not None else None,
        }


def _read_slot(
    data: Dict[str, Any],
    key: str,
    parse: Callable[[Any], T],
) -> "OverrideSlot[T]":
    raw = data.get(key)
    if raw is None:
        return ABSENT
    try:
        return Present(parse(raw))
    except InvalidDocumentError as e:
        logger.warning(
            "session_override_slot_ignored",
            slot=key,
            error_code=e.code,
            reason=e.message,
        )
        return ABSENT


def _effective_basic(
    slot: "OverrideSlot[TournamentBasic]",
    store_basic: TournamentBasic,
) -> TournamentBasic:
    basic = _slot_value(slot, store_basic)
    if basic.buy_in is None:
        return replace(basic, buy_in=store_basic.buy_in)
    return basic


@dataclass(frozen=True)
class EffectiveTournamentSettings:
    """Settings currently in effect for a session, with provenance flags."""

    basic: TournamentBasic
    blind_levels: Tuple[BlindLevel, ...]
    prize_structures: Tuple[PrizeStructure, ...]
    has_basic_override: bool = False
    has_blinds_override: bool = False
    has_prizes_override: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "basic": self.basic.to_dict(),
            "blindLevels": [level.to_dict() for level in self.blind_levels],
            "prizeStructures": [s.to_dict() for s in self.prize_structures],
            "hasBasicOverride": self.has_basic_override,
            "hasBlindsOverride": self.has_blinds_override,
            "hasPrizesOverride": self.has_prizes_override,
        }


def resolve_effective_settings(
    store: StoreTournament,
    override: Optional[SessionOverride] = None,
) -> EffectiveTournamentSettings:
    """매장 설정 + 세션 오버라이드 병합.

    Args:
        store: 매장 기본 토너먼트 설정
        override: 세션 오버라이드 (None이면 오버라이드 없음)

    Returns:
        유효 설정
    """
    override = override or SessionOverride()
    return EffectiveTournamentSettings(
        basic=_effective_basic(override.basic, store.basic),
        blind_levels=tuple(_slot_value(override.blind_levels, store.blind_levels)),
        prize_structures=tuple(_slot_value(override.prize_structures, store.prize_structures)),
        has_basic_override=override.has_basic_override,
        has_blinds_override=override.has_blinds_override,
        has_prizes_override=override.has_prizes_override,
    )


def revert_to_store_defaults(
    override: SessionOverride,
    section: OverrideSection,
) -> SessionOverride:
    """Drop one override group so the store value applies again."""
    logger.info("session_override_reverted", section=section.value)
    return override.cleared(section)
