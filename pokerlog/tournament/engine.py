"""
Tournament Structure Engine.

한 번의 평가에서 오버라이드 병합 -> 블라인드 클록 -> 스택 지표 -> 지급 내역을
같은 now 스냅샷으로 계산한다. 상태를 저장하지 않으므로 UI 갱신 루프에서
매초 호출해도 된다.

Usage:
    engine = TournamentStructureEngine()
    view = engine.evaluate(store, override, session, now=datetime.now(timezone.utc))
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pokerlog.config import Settings, get_settings
from pokerlog.logging_config import get_logger
from .blind_clock import CurrentLevelInfo, calculate_current_level
from .models import PrizeStructure, StoreTournament
from .overrides import (
    EffectiveTournamentSettings,
    SessionOverride,
    resolve_effective_settings,
)
from .payouts import PayoutLine, resolve_payouts, select_prize_structure
from .prize_validator import PrizeStructureViolation, validate_prize_structures
from .stack_metrics import StackMetrics, calculate_stack_metrics

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionTournamentState:
    """Live figures of a tournament session, entered by the player."""

    current_stack: int = 0
    timer_started_at: Optional[datetime] = None
    entries: Optional[int] = None
    remaining: Optional[int] = None


@dataclass(frozen=True)
class TournamentStructureView:
    """Everything the session screen needs for one refresh."""

    evaluated_at: datetime
    settings: EffectiveTournamentSettings
    level_info: Optional[CurrentLevelInfo]
    metrics: StackMetrics
    prize_structure: Optional[PrizeStructure] = None
    payouts: List[PayoutLine] = field(default_factory=list)
    is_low_time: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "evaluatedAt": self.evaluated_at.isoformat(),
            "settings": self.settings.to_dict(),
            "levelInfo": self.level_info.to_dict() if self.level_info else None,
            "metrics": self.metrics.to_dict(),
            "prizeStructure": self.prize_structure.to_dict() if self.prize_structure else None,
            "payouts": [line.to_dict() for line in self.payouts],
            "isLowTime": self.is_low_time,
        }


class TournamentStructureEngine:
    """
    토너먼트 스트럭처 평가 엔진.

    구성 요소는 모두 순수 함수이며, 엔진은 설정값(허용 오차, 경고 시간)을
    주입하고 하나의 now를 모든 구성 요소에 전달하는 역할만 한다.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def evaluate(
        self,
        store: StoreTournament,
        override: Optional[SessionOverride],
        session: SessionTournamentState,
        now: datetime,
    ) -> TournamentStructureView:
        """세션 화면용 스트럭처 상태 계산.

        Args:
            store: 매장 기본 토너먼트 설정
            override: 세션 오버라이드
            session: 세션 입력값 (스택, 엔트리, 타이머)
            now: 평가 시각 스냅샷

        Returns:
            TournamentStructureView
        """
        effective = resolve_effective_settings(store, override)

        # 타이머가 없으면 클록을 호출하지 않음
        level_info = None
        if session.timer_started_at is not None:
            level_info = calculate_current_level(
                effective.blind_levels, session.timer_started_at, now
            )

        metrics = calculate_stack_metrics(
            effective.blind_levels,
            session.timer_started_at,
            current_stack=session.current_stack,
            buy_in=effective.basic.buy_in,
            now=now,
            entries=session.entries,
            remaining=session.remaining,
            starting_stack=effective.basic.starting_stack,
        )

        prize_structure = select_prize_structure(effective.prize_structures, session.entries)
        payouts = resolve_payouts(prize_structure, metrics.prize_pool) if prize_structure else []

        is_low_time = level_info is not None and level_info.is_low_time(
            self.settings.low_time_threshold_seconds
        )

        logger.debug(
            "tournament_structure_evaluated",
            display_level=level_info.display_level if level_info else None,
            remaining_seconds=level_info.remaining_seconds if level_info else None,
            has_blinds_override=effective.has_blinds_override,
            has_prizes_override=effective.has_prizes_override,
        )

        return TournamentStructureView(
            evaluated_at=now,
            settings=effective,
            level_info=level_info,
            metrics=metrics,
            prize_structure=prize_structure,
            payouts=payouts,
            is_low_time=is_low_time,
        )

    def validate_prize_structures(
        self,
        structures: List[PrizeStructure],
    ) -> Optional[PrizeStructureViolation]:
        """Validate an editor's working copy with the configured tolerance."""
        return validate_prize_structures(
            structures, tolerance=self.settings.prize_percentage_tolerance
        )
