from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from bepo.core.db import get_db_session
from bepo.models.enums import ChartType
from bepo.models.settings import CalculatorSettings
from bepo.services import settings_service

router = APIRouter()

# --- Schemas ---

class SettingsResponse(BaseModel):
    settings: CalculatorSettings
    version: int
    updated_at: Optional[datetime]

class UpdateRequest(BaseModel):
    settings: CalculatorSettings
    version: int = Field(ge=0)

class ConflictResponse(BaseModel):
    detail: str
    server_version: int
    server_settings: Optional[dict]

class ResetRequest(BaseModel):
    chart: ChartType = ChartType.BOTH

# --- Endpoints ---

@router.get("/", response_model=SettingsResponse)
async def get_settings(db: AsyncSession = Depends(get_db_session)):
    return await settings_service.get_settings_service(db)

@router.put("/", response_model=SettingsResponse, responses={409: {"model": ConflictResponse}})
async def update_settings(
    payload: UpdateRequest,
    db: AsyncSession = Depends(get_db_session),
):
    try:
        return await settings_service.update_settings_service(payload.settings, payload.version, db)
    except settings_service.InvalidCorrectionChartError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except settings_service.VersionConflictError as e:
        return _conflict(e)

@router.post("/reset", response_model=SettingsResponse, responses={409: {"model": ConflictResponse}})
async def reset_charts(
    payload: ResetRequest,
    db: AsyncSession = Depends(get_db_session),
):
    try:
        return await settings_service.reset_charts_service(payload.chart, db)
    except settings_service.VersionConflictError as e:
        return _conflict(e)


def _conflict(e: settings_service.VersionConflictError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=ConflictResponse(
            detail="Version conflict",
            server_version=e.server_version,
            server_settings=e.server_settings,
        ).model_dump(mode="json"),
    )
