"""
Tournament Structure Engine.

This module provides:
- Blind schedule clock derived from timer start and current time
- Prize structure validation for edited prize tables
- Store default / session override resolution
- Stack metrics (prize pool, average stack, BB-denominated stacks)
"""

from .models import (
    BlindLevel,
    CustomPrize,
    FixedAmountPrize,
    PercentagePrize,
    PrizeItem,
    PrizeLevel,
    PrizeStructure,
    PrizeType,
    StoreTournament,
    TournamentBasic,
)
from .blind_clock import (
    CurrentLevelInfo,
    calculate_current_level,
    display_level_for_index,
    format_remaining,
    get_current_big_blind,
)
from .prize_validator import (
    PrizeStructureViolation,
    ViolationKind,
    ensure_valid_prize_structures,
    validate_prize_structures,
)
from .overrides import (
    ABSENT,
    EffectiveTournamentSettings,
    OverrideSection,
    Present,
    SessionOverride,
    resolve_effective_settings,
    revert_to_store_defaults,
)
from .stack_metrics import StackMetrics, calculate_stack_metrics
from .payouts import PayoutLine, resolve_payouts, select_prize_structure
from .engine import (
    SessionTournamentState,
    TournamentStructureEngine,
    TournamentStructureView,
)

__all__ = [
    "BlindLevel",
    "CustomPrize",
    "FixedAmountPrize",
    "PercentagePrize",
    "PrizeItem",
    "PrizeLevel",
    "PrizeStructure",
    "PrizeType",
    "StoreTournament",
    "TournamentBasic",
    "CurrentLevelInfo",
    "calculate_current_level",
    "display_level_for_index",
    "format_remaining",
    "get_current_big_blind",
    "PrizeStructureViolation",
    "ViolationKind",
    "ensure_valid_prize_structures",
    "validate_prize_structures",
    "ABSENT",
    "EffectiveTournamentSettings",
    "OverrideSection",
    "Present",
    "SessionOverride",
    "resolve_effective_settings",
    "revert_to_store_defaults",
    "StackMetrics",
    "calculate_stack_metrics",
    "PayoutLine",
    "resolve_payouts",
    "select_prize_structure",
    "SessionTournamentState",
    "TournamentStructureEngine",
    "TournamentStructureView",
]
