import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bepo.models.insulin_log import InsulinLog, InsulinLogCreate

logger = logging.getLogger(__name__)


async def list_logs(db: AsyncSession) -> list[InsulinLog]:
    stmt = select(InsulinLog).order_by(InsulinLog.timestamp.desc(), InsulinLog.id.desc())
    return list((await db.execute(stmt)).scalars().all())


async def get_log(log_id: int, db: AsyncSession) -> Optional[InsulinLog]:
    return await db.get(InsulinLog, log_id)


async def create_log(data: InsulinLogCreate, db: AsyncSession) -> InsulinLog:
    values = data.model_dump()
    values["meal_type"] = data.meal_type.value
    log = InsulinLog(**values)
    db.add(log)
    await db.commit()
    await db.refresh(log)
    logger.info("Logged %s dose of %.2f U (id=%s)", log.meal_type, log.total_insulin, log.id)
    return log


async def delete_log(log_id: int, db: AsyncSession) -> bool:
    log = await db.get(InsulinLog, log_id)
    if log is None:
        return False
    await db.delete(log)
    await db.commit()
    return True
