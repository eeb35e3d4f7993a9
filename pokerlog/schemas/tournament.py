"""Tournament editor input schemas.

Upstream checks for edited blind levels, basic info and prize tables.
The blind clock relies on these (positive durations) instead of guarding
against malformed levels itself.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pokerlog.tournament.models import (
    BlindLevel,
    CustomPrize,
    FixedAmountPrize,
    PercentagePrize,
    PrizeItem,
    PrizeLevel,
    PrizeStructure,
    TournamentBasic,
)


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# Blind Levels
# =============================================================================


class BlindLevelInput(BaseSchema):
    """Edited blind level (or break)."""

    level: int = Field(..., ge=1, description="Level number (display/sort key)")
    is_break: bool = Field(default=False, alias="isBreak")
    small_blind: Optional[int] = Field(default=None, gt=0, alias="smallBlind")
    big_blind: Optional[int] = Field(default=None, gt=0, alias="bigBlind")
    ante: Optional[int] = Field(default=None, gt=0)
    duration_minutes: int = Field(..., gt=0, alias="durationMinutes")

    @model_validator(mode="after")
    def validate_blinds(self) -> "BlindLevelInput":
        """Non-break levels need both blinds and BB must exceed SB."""
        if self.is_break:
            return self
        if self.small_blind is None or self.big_blind is None:
            raise ValueError("Small blind and big blind are required")
        if self.big_blind <= self.small_blind:
            raise ValueError("Big blind must be greater than small blind")
        return self

    def to_model(self) -> BlindLevel:
        if self.is_break:
            return BlindLevel.break_level(self.level, self.duration_minutes)
        return BlindLevel(
            level=self.level,
            duration_minutes=self.duration_minutes,
            small_blind=self.small_blind,
            big_blind=self.big_blind,
            ante=self.ante,
        )


# =============================================================================
# Basic Info
# =============================================================================


class TournamentBasicInput(BaseSchema):
    """Edited basic tournament info."""

    name: Optional[str] = Field(default=None, max_length=255)
    buy_in: int = Field(..., gt=0, alias="buyIn")
    rake: Optional[int] = Field(default=None, gt=0)
    starting_stack: Optional[int] = Field(default=None, gt=0, alias="startingStack")
    notes: Optional[str] = None

    @field_validator("name", "notes")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Blank text is stored as null."""
        if v is not None and not v:
            return None
        return v

    def to_model(self) -> TournamentBasic:
        return TournamentBasic(
            buy_in=self.buy_in,
            name=self.name,
            rake=self.rake,
            starting_stack=self.starting_stack,
            notes=self.notes,
        )


# =============================================================================
# Prize Structures
# =============================================================================


class PrizeItemInput(BaseSchema):
    """Edited prize item; the field matching ``prize_type`` is required."""

    prize_type: Literal["percentage", "fixed_amount", "custom_prize"] = Field(
        ..., alias="prizeType"
    )
    percentage: Optional[float] = Field(default=None, ge=0, le=100, allow_inf_nan=False)
    fixed_amount: Optional[int] = Field(default=None, gt=0, alias="fixedAmount")
    custom_prize_label: Optional[str] = Field(default=None, alias="customPrizeLabel")
    custom_prize_value: Optional[int] = Field(default=None, ge=0, alias="customPrizeValue")
    sort_order: int = Field(default=0, alias="sortOrder")

    @model_validator(mode="after")
    def validate_variant(self) -> "PrizeItemInput":
        if self.prize_type == "percentage" and self.percentage is None:
            raise ValueError("Percentage is required for a percentage prize")
        if self.prize_type == "fixed_amount" and self.fixed_amount is None:
            raise ValueError("Amount is required for a fixed amount prize")
        if self.prize_type == "custom_prize" and not self.custom_prize_label:
            raise ValueError("Label is required for a custom prize")
        return self

    def to_model(self) -> PrizeItem:
        if self.prize_type == "percentage":
            return PercentagePrize(percentage=self.percentage, sort_order=self.sort_order)
        if self.prize_type == "fixed_amount":
            return FixedAmountPrize(amount=self.fixed_amount, sort_order=self.sort_order)
        return CustomPrize(
            label=self.custom_prize_label,
            value=self.custom_prize_value,
            sort_order=self.sort_order,
        )


class PrizeLevelInput(BaseSchema):
    """Edited prize level."""

    min_position: int = Field(..., ge=1, alias="minPosition")
    max_position: int = Field(..., ge=1, alias="maxPosition")
    sort_order: int = Field(default=0, alias="sortOrder")
    prize_items: list[PrizeItemInput] = Field(default_factory=list, alias="prizeItems")

    @model_validator(mode="after")
    def validate_range(self) -> "PrizeLevelInput":
        if self.max_position < self.min_position:
            raise ValueError("maxPosition must not be less than minPosition")
        return self

    def to_model(self) -> PrizeLevel:
        return PrizeLevel(
            min_position=self.min_position,
            max_position=self.max_position,
            prize_items=tuple(item.to_model() for item in self.prize_items),
            sort_order=self.sort_order,
        )


class PrizeStructureInput(BaseSchema):
    """Edited prize structure."""

    min_entrants: int = Field(..., ge=1, alias="minEntrants")
    max_entrants: Optional[int] = Field(default=None, ge=1, alias="maxEntrants")
    sort_order: int = Field(default=0, alias="sortOrder")
    prize_levels: list[PrizeLevelInput] = Field(default_factory=list, alias="prizeLevels")

    @model_validator(mode="after")
    def validate_range(self) -> "PrizeStructureInput":
        if self.max_entrants is not None and self.max_entrants < self.min_entrants:
            raise ValueError("maxEntrants must not be less than minEntrants")
        return self

    def to_model(self) -> PrizeStructure:
        return PrizeStructure(
            min_entrants=self.min_entrants,
            max_entrants=self.max_entrants,
            prize_levels=tuple(level.to_model() for level in self.prize_levels),
            sort_order=self.sort_order,
        )
