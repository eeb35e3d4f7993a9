"""Shared fixtures for tournament structure tests."""

import pytest

from pokerlog.config import Settings
from pokerlog.tournament.models import (
    BlindLevel,
    FixedAmountPrize,
    PercentagePrize,
    PrizeLevel,
    PrizeStructure,
    StoreTournament,
    TournamentBasic,
)
from tests.factories import break_level, level


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """테스트용 설정 (.env 무시)."""
    return Settings(
        _env_file=None,
        app_env="test",
        log_level="DEBUG",
        prize_percentage_tolerance=0.01,
        low_time_threshold_seconds=60,
    )


@pytest.fixture
def schedule_with_break() -> list[BlindLevel]:
    """L1(20분) -> 브레이크(10분) -> L2(20분)."""
    return [
        level(1, 100, 200),
        break_level(10),
        level(2, 200, 400),
    ]


@pytest.fixture
def standard_schedule() -> list[BlindLevel]:
    """브레이크 2회를 포함한 6단계 스케줄."""
    return [
        level(1, 100, 200, minutes=15),
        level(2, 200, 400, minutes=15),
        break_level(5),
        level(3, 300, 600, minutes=15, ante=600),
        level(4, 400, 800, minutes=15, ante=800),
        break_level(10),
        level(5, 500, 1000, minutes=20, ante=1000),
    ]


@pytest.fixture
def valid_prize_structures() -> list[PrizeStructure]:
    """엔트리 범위가 겹치지 않는 정상 프라이즈 테이블."""
    return [
        PrizeStructure(
            min_entrants=1,
            max_entrants=9,
            prize_levels=(
                PrizeLevel(1, 1, (PercentagePrize(100),)),
            ),
        ),
        PrizeStructure(
            min_entrants=10,
            max_entrants=29,
            prize_levels=(
                PrizeLevel(1, 1, (PercentagePrize(65), PercentagePrize(35))),
                PrizeLevel(2, 2, (PercentagePrize(100), FixedAmountPrize(5000))),
            ),
        ),
        PrizeStructure(
            min_entrants=30,
            max_entrants=None,
            prize_levels=(
                PrizeLevel(1, 1, (PercentagePrize(50), PercentagePrize(50))),
                PrizeLevel(2, 3, (PercentagePrize(33.333), PercentagePrize(66.667))),
            ),
        ),
    ]


@pytest.fixture
def store_tournament(schedule_with_break, valid_prize_structures) -> StoreTournament:
    """매장 기본 토너먼트."""
    return StoreTournament(
        basic=TournamentBasic(
            buy_in=10000,
            name="Sunday Deepstack",
            rake=2000,
            starting_stack=20000,
        ),
        blind_levels=tuple(schedule_with_break),
        prize_structures=tuple(valid_prize_structures),
    )
