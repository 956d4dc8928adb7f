from fastapi import APIRouter

from .calculator import router as calculator_router
from .db import router as db_router
from .health import router as health_router
from .insulin_logs import router as insulin_logs_router
from .meal_presets import router as meal_presets_router
from .settings import router as settings_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(db_router, prefix="/db", tags=["db"])
api_router.include_router(calculator_router, prefix="/calculator", tags=["calculator"])
api_router.include_router(settings_router, prefix="/settings", tags=["settings"])
api_router.include_router(insulin_logs_router, prefix="/insulin-logs", tags=["insulin-logs"])
api_router.include_router(meal_presets_router, prefix="/meal-presets", tags=["meal-presets"])

__all__ = ["api_router"]
