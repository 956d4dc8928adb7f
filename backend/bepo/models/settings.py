from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bepo.core.constants import (
    BEDTIME_CORRECTION_TABLE,
    DEFAULT_FIRST_MEAL_RATIO,
    DEFAULT_OTHER_MEAL_RATIO,
    DEFAULT_TARGET_BG_MAX,
    DEFAULT_TARGET_BG_MIN,
    MEAL_CORRECTION_TABLE,
    TARGET_BG_CEILING,
    TARGET_BG_FLOOR,
)
from bepo.models.enums import MealType


class CorrectionRange(BaseModel):
    """One row of a correction chart: inclusive mg/dL bounds and the units to add."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=0, description="Lower bound (mg/dL, inclusive)")
    max: int = Field(ge=0, description="Upper bound (mg/dL, inclusive)")
    correction: float = Field(description="Correction (U), may be negative")

    @model_validator(mode="after")
    def _check_bounds(self) -> "CorrectionRange":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self

    def contains(self, bg_mgdl: float) -> bool:
        return self.min <= bg_mgdl <= self.max


def _ranges_from_table(table) -> list[CorrectionRange]:
    return [CorrectionRange(min=lo, max=hi, correction=corr) for lo, hi, corr in table]


def default_meal_ranges() -> list[CorrectionRange]:
    return _ranges_from_table(MEAL_CORRECTION_TABLE)


def default_bedtime_ranges() -> list[CorrectionRange]:
    return _ranges_from_table(BEDTIME_CORRECTION_TABLE)


# Keys written by the legacy web client
_LEGACY_KEYS = {
    "firstMealRatio": "first_meal_ratio",
    "otherMealRatio": "other_meal_ratio",
    "targetBgMin": "target_bg_min",
    "targetBgMax": "target_bg_max",
    "mealCorrectionRanges": "meal_correction_ranges",
    "bedtimeCorrectionRanges": "bedtime_correction_ranges",
}


class CalculatorSettings(BaseModel):
    first_meal_ratio: float = Field(
        default=DEFAULT_FIRST_MEAL_RATIO, gt=0, description="Ratio CR for the first meal (g/U)"
    )
    other_meal_ratio: float = Field(
        default=DEFAULT_OTHER_MEAL_RATIO, gt=0, description="Ratio CR for later meals (g/U)"
    )
    target_bg_min: float = Field(
        default=DEFAULT_TARGET_BG_MIN, ge=TARGET_BG_FLOOR, le=TARGET_BG_CEILING, description="mmol/L"
    )
    target_bg_max: float = Field(
        default=DEFAULT_TARGET_BG_MAX, ge=TARGET_BG_FLOOR, le=TARGET_BG_CEILING, description="mmol/L"
    )
    meal_correction_ranges: list[CorrectionRange] = Field(default_factory=default_meal_ranges)
    bedtime_correction_ranges: list[CorrectionRange] = Field(default_factory=default_bedtime_ranges)

    @field_validator("meal_correction_ranges", "bedtime_correction_ranges")
    def _ordered_ranges(cls, ranges: list[CorrectionRange]) -> list[CorrectionRange]:
        if not ranges:
            raise ValueError("correction chart must contain at least one range")
        for prev, cur in zip(ranges, ranges[1:]):
            if cur.min < prev.min:
                raise ValueError(f"ranges must be sorted by min ({cur.min} follows {prev.min})")
        return ranges

    @model_validator(mode="after")
    def _check_target(self) -> "CalculatorSettings":
        if self.target_bg_min >= self.target_bg_max:
            raise ValueError("target_bg_min must be lower than target_bg_max")
        return self

    def carb_ratio_for(self, meal_type: MealType) -> float:
        if meal_type == MealType.FIRST:
            return self.first_meal_ratio
        return self.other_meal_ratio

    def ranges_for(self, meal_type: MealType | None) -> list[CorrectionRange]:
        if meal_type == MealType.BEDTIME:
            return self.bedtime_correction_ranges
        return self.meal_correction_ranges

    @classmethod
    def migrate(cls, data: dict) -> "CalculatorSettings":
        # Legacy client format: camelCase keys, numbers stored as strings
        data = dict(data)
        for legacy, current in _LEGACY_KEYS.items():
            if legacy in data:
                value = data.pop(legacy)
                data.setdefault(current, value)
        return cls.model_validate(data)

    @classmethod
    def default(cls) -> "CalculatorSettings":
        return cls()


# --- SQL Model ---
from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from bepo.core.db import Base


class CalculatorSettingsDB(Base):
    __tablename__ = "calculator_settings"

    profile_id: Mapped[str] = mapped_column(String, primary_key=True)

    # Stores the JSON blob validated by the CalculatorSettings model
    settings: Mapped[dict] = mapped_column(JSON().with_variant(JSONB, "postgresql"), nullable=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
