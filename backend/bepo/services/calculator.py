from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from bepo.models.enums import MealType
from bepo.models.settings import CalculatorSettings
from bepo.services.correction import convert_bg_to_mgdl, get_correction_insulin


@dataclass
class CalculationInput:
    meal_type: MealType
    bg_value: float  # mmol/L
    carb_value: Optional[float] = None


@dataclass
class CalculationResult:
    meal_insulin: float
    correction_insulin: float
    total_insulin: float
    bg_mgdl: float
    correction_range: str


def calculate_meal_insulin(params: CalculationInput, settings: CalculatorSettings) -> float:
    if params.meal_type == MealType.BEDTIME or params.carb_value is None:
        return 0.0
    # Bolus = Carbs / CR (g/U)
    return params.carb_value / settings.carb_ratio_for(params.meal_type)


def calculate_insulin(params: CalculationInput, settings: Optional[CalculatorSettings] = None) -> CalculationResult:
    """
    Meal insulin from the carb ratio plus a correction looked up in the chart for the meal type.

    Nothing is validated or rounded here: a negative or non-finite reading simply flows
    through to the result. Callers reject bad input and round for display.
    """
    settings = settings or CalculatorSettings.default()

    bg_mgdl = convert_bg_to_mgdl(params.bg_value)
    meal_insulin = calculate_meal_insulin(params, settings)
    lookup = get_correction_insulin(bg_mgdl, params.meal_type, settings)

    return CalculationResult(
        meal_insulin=meal_insulin,
        correction_insulin=lookup.correction,
        total_insulin=meal_insulin + lookup.correction,
        bg_mgdl=bg_mgdl,
        correction_range=lookup.range,
    )


def format_units(value: Optional[float], signed: bool = False) -> str:
    if value is None or not math.isfinite(value):
        return "--"
    prefix = "+" if signed and value > 0 else ""
    return f"{prefix}{value:.1f}"
