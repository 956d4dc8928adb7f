from fastapi import APIRouter

from bepo.core.db import check_db_health

router = APIRouter()


@router.get("/health", summary="Check Database Connection")
async def db_health():
    """
    Verifies connectivity to the configured database (SQLite or PostgreSQL).
    """
    return await check_db_health()
