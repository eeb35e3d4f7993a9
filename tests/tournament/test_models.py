"""
Tournament Model Document Tests.

camelCase 문서 <-> 불변 모델 변환 테스트.
"""

import pytest

from pokerlog.tournament.models import (
    BlindLevel,
    CustomPrize,
    FixedAmountPrize,
    PercentagePrize,
    PrizeLevel,
    PrizeStructure,
    PrizeType,
    StoreTournament,
    TournamentBasic,
    blind_levels_from_list,
    prize_item_from_dict,
)
from pokerlog.utils.errors import ErrorCode, InvalidDocumentError


class TestBlindLevelDocument:
    """블라인드 레벨 문서 파싱."""

    def test_regular_level(self):
        blind = BlindLevel.from_dict(
            {
                "level": 3,
                "isBreak": False,
                "smallBlind": 300,
                "bigBlind": 600,
                "ante": 600,
                "durationMinutes": 15,
            }
        )

        assert blind == BlindLevel(
            level=3, duration_minutes=15, small_blind=300, big_blind=600, ante=600
        )
        assert blind.duration_seconds == 900

    def test_break_drops_blinds(self):
        """브레이크는 블라인드 값이 있어도 무시."""
        blind = BlindLevel.from_dict(
            {"level": 2, "isBreak": True, "smallBlind": 100, "bigBlind": 200, "durationMinutes": 10}
        )

        assert blind.is_break is True
        assert blind.small_blind is None
        assert blind.big_blind is None

    def test_missing_duration(self):
        with pytest.raises(InvalidDocumentError) as exc_info:
            BlindLevel.from_dict({"level": 1, "smallBlind": 100, "bigBlind": 200})

        assert exc_info.value.code == ErrorCode.MISSING_FIELD.value
        assert exc_info.value.details["field"] == "durationMinutes"

    def test_non_integer_blind(self):
        with pytest.raises(InvalidDocumentError):
            BlindLevel.from_dict({"level": 1, "bigBlind": 2.5, "durationMinutes": 10})

    def test_list_keeps_array_order(self):
        levels = blind_levels_from_list(
            [
                {"level": 2, "smallBlind": 200, "bigBlind": 400, "durationMinutes": 20},
                {"level": 1, "smallBlind": 100, "bigBlind": 200, "durationMinutes": 20},
            ]
        )

        assert [lv.level for lv in levels] == [2, 1]

    def test_null_list_is_empty(self):
        assert blind_levels_from_list(None) == ()


class TestPrizeItemDocument:
    """prizeType 판별자 기반 변형 선택."""

    def test_percentage(self):
        item = prize_item_from_dict(
            {"prizeType": "percentage", "percentage": "12.5", "fixedAmount": 999, "sortOrder": 1}
        )

        assert item == PercentagePrize(percentage=12.5, sort_order=1)
        assert item.prize_type is PrizeType.PERCENTAGE

    def test_empty_percentage_counts_as_zero(self):
        assert prize_item_from_dict({"prizeType": "percentage"}) == PercentagePrize(0.0)

    @pytest.mark.parametrize("raw", ["NaN", "Infinity", "-inf", float("nan")])
    def test_non_finite_percentage_is_rejected(self, raw):
        with pytest.raises(InvalidDocumentError) as exc_info:
            prize_item_from_dict({"prizeType": "percentage", "percentage": raw})

        assert exc_info.value.details["field"] == "percentage"

    def test_fixed_amount(self):
        item = prize_item_from_dict({"prizeType": "fixed_amount", "fixedAmount": 50000})

        assert item == FixedAmountPrize(amount=50000)

    def test_custom_prize(self):
        item = prize_item_from_dict(
            {"prizeType": "custom_prize", "customPrizeLabel": "WSOP seat", "customPrizeValue": 1000}
        )

        assert item == CustomPrize(label="WSOP seat", value=1000)

    def test_unknown_type(self):
        with pytest.raises(InvalidDocumentError) as exc_info:
            prize_item_from_dict({"prizeType": "bounty"})

        assert "bounty" in exc_info.value.message

    def test_to_dict_clears_other_variant_fields(self):
        data = FixedAmountPrize(amount=100, sort_order=2).to_dict()

        assert data == {
            "prizeType": "fixed_amount",
            "percentage": None,
            "fixedAmount": 100,
            "customPrizeLabel": None,
            "customPrizeValue": None,
            "sortOrder": 2,
        }


class TestStructureDocuments:
    """프라이즈 스트럭처 / 토너먼트 문서."""

    def test_prize_structure(self):
        structure = PrizeStructure.from_dict(
            {
                "minEntrants": 10,
                "maxEntrants": None,
                "sortOrder": 1,
                "prizeLevels": [
                    {
                        "minPosition": 1,
                        "maxPosition": 2,
                        "sortOrder": 0,
                        "prizeItems": [{"prizeType": "percentage", "percentage": 100}],
                    }
                ],
            }
        )

        assert structure.entry_range == (10, None)
        assert structure.accepts(10_000) is True
        assert structure.accepts(9) is False
        assert structure.prize_levels[0].position_range == (1, 2)
        assert structure.prize_levels[0].covers(2) is True
        assert structure.prize_levels[0].percentage_items == (PercentagePrize(100.0),)

    def test_prize_level_requires_positions(self):
        with pytest.raises(InvalidDocumentError):
            PrizeLevel.from_dict({"minPosition": 1})

    def test_store_tournament_flat_record(self):
        """매장 레코드는 기본 정보가 최상위에 있음."""
        store = StoreTournament.from_dict(
            {
                "name": "Daily",
                "buyIn": 3000,
                "rake": None,
                "startingStack": 15000,
                "notes": None,
                "blindLevels": [{"level": 1, "smallBlind": 100, "bigBlind": 200, "durationMinutes": 15}],
                "prizeStructures": [],
            }
        )

        assert store.basic == TournamentBasic(buy_in=3000, name="Daily", starting_stack=15000)
        assert len(store.blind_levels) == 1
        assert store.prize_structures == ()

    def test_store_tournament_round_trip(self, store_tournament):
        assert StoreTournament.from_dict(store_tournament.to_dict()) == store_tournament

    def test_store_basic_requires_buy_in(self):
        with pytest.raises(InvalidDocumentError) as exc_info:
            TournamentBasic.from_dict({"name": "Daily"})

        assert exc_info.value.code == ErrorCode.MISSING_FIELD.value

    def test_override_basic_allows_blank_buy_in(self):
        basic = TournamentBasic.override_from_dict({"name": "Daily", "buyIn": None})

        assert basic == TournamentBasic(buy_in=None, name="Daily")

    def test_override_basic_must_be_object(self):
        with pytest.raises(InvalidDocumentError):
            TournamentBasic.override_from_dict("Daily")

    def test_store_tournament_requires_object(self):
        with pytest.raises(InvalidDocumentError):
            StoreTournament.from_dict(["not", "an", "object"])
