"""
Stack Metrics Tests.

상금 풀 / 평균 스택 / BB 환산 계산 테스트.
"""

import pytest

from pokerlog.tournament.stack_metrics import (
    StackMetrics,
    calculate_stack_metrics,
    round_ratio,
)
from tests.factories import TIMER_START, at


class TestCalculateStackMetrics:
    """스택 지표 계산 테스트."""

    def test_average_stack(self, schedule_with_break):
        metrics = calculate_stack_metrics(
            schedule_with_break,
            TIMER_START,
            current_stack=35000,
            buy_in=10000,
            now=at(5),
            entries=100,
            remaining=40,
            starting_stack=20000,
        )

        assert metrics.prize_pool == 1_000_000
        assert metrics.total_chips_in_play == 2_000_000
        assert metrics.average_stack == 50000
        assert metrics.current_big_blind == 200
        assert metrics.stack_in_bb == 175
        assert metrics.average_in_bb == 250

    def test_zero_remaining_has_no_average(self, schedule_with_break):
        """remaining = 0 -> 0으로 나누지 않고 None."""
        metrics = calculate_stack_metrics(
            schedule_with_break,
            TIMER_START,
            current_stack=35000,
            buy_in=10000,
            now=at(5),
            entries=100,
            remaining=0,
            starting_stack=20000,
        )

        assert metrics.average_stack is None
        assert metrics.average_in_bb is None
        assert metrics.total_chips_in_play == 2_000_000

    def test_no_timer_has_no_blind_figures(self, schedule_with_break):
        metrics = calculate_stack_metrics(
            schedule_with_break,
            None,
            current_stack=35000,
            buy_in=10000,
            now=at(5),
            entries=100,
            remaining=40,
            starting_stack=20000,
        )

        assert metrics.current_big_blind is None
        assert metrics.stack_in_bb is None
        assert metrics.average_in_bb is None
        assert metrics.average_stack == 50000

    def test_unknown_field_sizes(self, schedule_with_break):
        metrics = calculate_stack_metrics(
            schedule_with_break,
            TIMER_START,
            current_stack=20000,
            buy_in=10000,
            now=at(5),
        )

        assert metrics.prize_pool is None
        assert metrics.total_chips_in_play is None
        assert metrics.average_stack is None
        assert metrics.average_in_bb is None
        assert metrics.stack_in_bb == 100

    def test_unknown_starting_stack(self, schedule_with_break):
        metrics = calculate_stack_metrics(
            schedule_with_break,
            TIMER_START,
            current_stack=20000,
            buy_in=10000,
            now=at(5),
            entries=30,
            remaining=10,
        )

        assert metrics.prize_pool == 300000
        assert metrics.total_chips_in_play is None
        assert metrics.average_stack is None

    def test_break_uses_carried_big_blind(self, schedule_with_break):
        """브레이크 중 BB 환산은 직전 레벨 기준."""
        metrics = calculate_stack_metrics(
            schedule_with_break,
            TIMER_START,
            current_stack=30000,
            buy_in=10000,
            now=at(22),
        )

        assert metrics.current_big_blind == 200
        assert metrics.stack_in_bb == 150

    def test_empty_schedule(self):
        metrics = calculate_stack_metrics(
            [],
            TIMER_START,
            current_stack=30000,
            buy_in=10000,
            now=at(22),
            entries=10,
        )

        assert metrics == StackMetrics(prize_pool=100000)

    def test_to_dict(self, schedule_with_break):
        metrics = calculate_stack_metrics(
            schedule_with_break,
            TIMER_START,
            current_stack=30000,
            buy_in=10000,
            now=at(5),
        )

        data = metrics.to_dict()

        assert data["currentBigBlind"] == 200
        assert data["stackInBB"] == 150
        assert data["prizePool"] is None


class TestRoundRatio:
    """반올림 나눗셈 (분모 0/None -> None)."""

    @pytest.mark.parametrize(
        "numerator,denominator,expected",
        [
            (10, 4, 3),  # 2.5 -> 3 (half up)
            (7, 2, 4),
            (5, 3, 2),
            (1, 3, 0),
            (0, 5, 0),
            (-5, 2, -2),  # -2.5 -> -2
        ],
    )
    def test_rounding(self, numerator, denominator, expected):
        assert round_ratio(numerator, denominator) == expected

    @pytest.mark.parametrize(
        "numerator,denominator",
        [(10, 0), (10, None), (None, 5), (None, None)],
    )
    def test_undefined_ratio_is_none(self, numerator, denominator):
        assert round_ratio(numerator, denominator) is None

    @pytest.mark.parametrize("numerator", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numerator_is_none(self, numerator):
        assert round_ratio(numerator, 100) is None
