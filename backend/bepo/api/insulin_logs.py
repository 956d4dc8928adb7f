from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bepo.core.db import get_db_session
from bepo.models.insulin_log import InsulinLogCreate, InsulinLogRead
from bepo.services import insulin_log_service

router = APIRouter()


@router.get("", response_model=list[InsulinLogRead], summary="List insulin logs, newest first")
async def list_insulin_logs(db: AsyncSession = Depends(get_db_session)):
    return await insulin_log_service.list_logs(db)


@router.get("/{log_id}", response_model=InsulinLogRead)
async def get_insulin_log(log_id: int, db: AsyncSession = Depends(get_db_session)):
    log = await insulin_log_service.get_log(log_id, db)
    if log is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Insulin log not found")
    return log


@router.post("", response_model=InsulinLogRead, status_code=status.HTTP_201_CREATED)
async def create_insulin_log(payload: InsulinLogCreate, db: AsyncSession = Depends(get_db_session)):
    return await insulin_log_service.create_log(payload, db)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_insulin_log(log_id: int, db: AsyncSession = Depends(get_db_session)):
    if not await insulin_log_service.delete_log(log_id, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Insulin log not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
