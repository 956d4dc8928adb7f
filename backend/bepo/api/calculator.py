import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from bepo.core.db import get_db_session
from bepo.models.enums import MealType
from bepo.models.settings import CorrectionRange
from bepo.services.calculator import CalculationInput, calculate_insulin, format_units
from bepo.services.correction import default_correction_charts
from bepo.services.settings_service import load_calculator_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class CalculationRequest(BaseModel):
    meal_type: MealType
    carb_value: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False, description="Carbohydrates (g)")
    bg_value: float = Field(ge=0, allow_inf_nan=False, description="Blood glucose (mmol/L)")


class CalculationDisplay(BaseModel):
    meal_insulin: str
    correction_insulin: str
    total_insulin: str
    bg_mgdl: str


class CalculationResponse(BaseModel):
    meal_insulin: float
    correction_insulin: float
    total_insulin: float
    bg_mgdl: float
    correction_range: str
    carb_ratio_used: Optional[float] = None
    display: CalculationDisplay


class CorrectionChartsResponse(BaseModel):
    meal_correction_ranges: list[CorrectionRange]
    bedtime_correction_ranges: list[CorrectionRange]


@router.post("/calculate", response_model=CalculationResponse, summary="Calculate insulin dose")
async def api_calculate(
    payload: CalculationRequest,
    db: AsyncSession = Depends(get_db_session),
):
    settings = await load_calculator_settings(db)
    params = CalculationInput(meal_type=payload.meal_type, bg_value=payload.bg_value, carb_value=payload.carb_value)
    result = calculate_insulin(params, settings)

    ratio = None
    if payload.meal_type != MealType.BEDTIME and payload.carb_value is not None:
        ratio = settings.carb_ratio_for(payload.meal_type)

    logger.debug(
        "Calculated %s dose: meal=%.2f corr=%.2f (%s)",
        payload.meal_type.value,
        result.meal_insulin,
        result.correction_insulin,
        result.correction_range,
    )
    return CalculationResponse(
        meal_insulin=result.meal_insulin,
        correction_insulin=result.correction_insulin,
        total_insulin=result.total_insulin,
        bg_mgdl=result.bg_mgdl,
        correction_range=result.correction_range,
        carb_ratio_used=ratio,
        display=CalculationDisplay(
            meal_insulin=format_units(result.meal_insulin),
            correction_insulin=format_units(result.correction_insulin, signed=True),
            total_insulin=format_units(result.total_insulin),
            bg_mgdl=f"{result.bg_mgdl:.0f}",
        ),
    )


@router.get("/default-correction-charts", response_model=CorrectionChartsResponse, summary="Default correction charts")
async def api_default_charts():
    return default_correction_charts()
