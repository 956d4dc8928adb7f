from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bepo.core.db import get_db_session
from bepo.models.meal_preset import MealPresetCreate, MealPresetRead, MealPresetUpdate
from bepo.services import meal_preset_service

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal preset not found")


@router.get("", response_model=list[MealPresetRead])
async def list_meal_presets(db: AsyncSession = Depends(get_db_session)):
    return await meal_preset_service.list_presets(db)


@router.get("/{preset_id}", response_model=MealPresetRead)
async def get_meal_preset(preset_id: int, db: AsyncSession = Depends(get_db_session)):
    preset = await meal_preset_service.get_preset(preset_id, db)
    if preset is None:
        raise _not_found()
    return preset


@router.post("", response_model=MealPresetRead, status_code=status.HTTP_201_CREATED)
async def create_meal_preset(payload: MealPresetCreate, db: AsyncSession = Depends(get_db_session)):
    return await meal_preset_service.create_preset(payload, db)


@router.put("/{preset_id}", response_model=MealPresetRead)
async def update_meal_preset(preset_id: int, payload: MealPresetUpdate, db: AsyncSession = Depends(get_db_session)):
    preset = await meal_preset_service.update_preset(preset_id, payload, db)
    if preset is None:
        raise _not_found()
    return preset


@router.delete("/{preset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal_preset(preset_id: int, db: AsyncSession = Depends(get_db_session)):
    if not await meal_preset_service.delete_preset(preset_id, db):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
