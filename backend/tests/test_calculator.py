import math

import pytest

from bepo.models.enums import MealType
from bepo.models.settings import CalculatorSettings
from bepo.services.calculator import CalculationInput, calculate_insulin, format_units


def test_first_meal_with_correction():
    res = calculate_insulin(CalculationInput(meal_type=MealType.FIRST, carb_value=30, bg_value=10.0))
    assert res.bg_mgdl == 180
    assert res.meal_insulin == 3
    assert res.correction_insulin == 2
    assert res.total_insulin == 5
    assert res.correction_range == "174 to 190 mg/dL = +2 units"


def test_other_meal_fractional_bg_gets_no_correction():
    res = calculate_insulin(CalculationInput(meal_type=MealType.OTHER, carb_value=45, bg_value=5.6))
    assert res.bg_mgdl == pytest.approx(100.8)
    assert res.meal_insulin == 3
    assert res.correction_insulin == 0
    assert res.total_insulin == 3
    assert res.correction_range == "No correction needed"


def test_bedtime_low_bg():
    res = calculate_insulin(CalculationInput(meal_type=MealType.BEDTIME, bg_value=3.0))
    assert res.bg_mgdl == 54
    assert res.meal_insulin == 0
    assert res.correction_insulin == -0.5
    assert res.total_insulin == -0.5
    assert res.correction_range == "0 to 70 mg/dL = -0.5 units"


@pytest.mark.parametrize("carbs", [None, 0, 45, 120])
def test_bedtime_never_has_meal_insulin(carbs):
    res = calculate_insulin(CalculationInput(meal_type=MealType.BEDTIME, carb_value=carbs, bg_value=9.0))
    assert res.meal_insulin == 0
    assert res.total_insulin == res.correction_insulin


def test_missing_carbs_means_correction_only():
    res = calculate_insulin(CalculationInput(meal_type=MealType.FIRST, bg_value=10.0))
    assert res.meal_insulin == 0
    assert res.correction_insulin == 2
    assert res.total_insulin == 2


def test_meal_insulin_is_not_rounded():
    res = calculate_insulin(CalculationInput(meal_type=MealType.OTHER, carb_value=20, bg_value=6.0))
    assert res.meal_insulin == pytest.approx(20 / 15)


def test_custom_ratios():
    settings = CalculatorSettings(first_meal_ratio=12, other_meal_ratio=8)
    first = calculate_insulin(CalculationInput(meal_type=MealType.FIRST, carb_value=30, bg_value=6.0), settings)
    other = calculate_insulin(CalculationInput(meal_type=MealType.OTHER, carb_value=30, bg_value=6.0), settings)
    assert first.meal_insulin == 2.5
    assert other.meal_insulin == 3.75


def test_plain_string_meal_type_is_accepted():
    res = calculate_insulin(CalculationInput(meal_type="bedtime", carb_value=50, bg_value=10.0))
    assert res.meal_insulin == 0


@pytest.mark.parametrize(
    "meal_type,carbs,bg",
    [
        (MealType.FIRST, 15, 4.2),
        (MealType.FIRST, 72, 16.1),
        (MealType.OTHER, 33, 7.7),
        (MealType.OTHER, 0, 22.0),
        (MealType.BEDTIME, None, 12.4),
    ],
)
def test_total_is_meal_plus_correction(meal_type, carbs, bg):
    res = calculate_insulin(CalculationInput(meal_type=meal_type, carb_value=carbs, bg_value=bg))
    assert res.total_insulin == res.meal_insulin + res.correction_insulin


def test_invalid_input_propagates_instead_of_raising():
    negative = calculate_insulin(CalculationInput(meal_type=MealType.FIRST, carb_value=-20, bg_value=10.0))
    assert negative.meal_insulin == -2
    assert negative.total_insulin == 0

    nan_carbs = calculate_insulin(CalculationInput(meal_type=MealType.OTHER, carb_value=math.nan, bg_value=6.0))
    assert math.isnan(nan_carbs.meal_insulin)
    assert math.isnan(nan_carbs.total_insulin)

    nan_bg = calculate_insulin(CalculationInput(meal_type=MealType.OTHER, carb_value=15, bg_value=math.nan))
    assert math.isnan(nan_bg.bg_mgdl)
    assert nan_bg.correction_range == "No correction needed"


def test_format_units():
    assert format_units(2.5) == "2.5"
    assert format_units(20 / 15) == "1.3"
    assert format_units(0) == "0.0"
    assert format_units(None) == "--"
    assert format_units(math.nan) == "--"
    assert format_units(math.inf) == "--"
    assert format_units(2, signed=True) == "+2.0"
    assert format_units(-0.5, signed=True) == "-0.5"
    assert format_units(0, signed=True) == "0.0"
