"""Pydantic schemas for tournament editor input."""

from pokerlog.schemas.tournament import (
    BaseSchema,
    BlindLevelInput,
    PrizeItemInput,
    PrizeLevelInput,
    PrizeStructureInput,
    TournamentBasicInput,
)

__all__ = [
    "BaseSchema",
    "BlindLevelInput",
    "PrizeItemInput",
    "PrizeLevelInput",
    "PrizeStructureInput",
    "TournamentBasicInput",
]
