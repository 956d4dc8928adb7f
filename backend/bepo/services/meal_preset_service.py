from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bepo.models.meal_preset import MealPreset, MealPresetCreate, MealPresetUpdate


async def list_presets(db: AsyncSession) -> list[MealPreset]:
    stmt = select(MealPreset).order_by(MealPreset.name, MealPreset.id)
    return list((await db.execute(stmt)).scalars().all())


async def get_preset(preset_id: int, db: AsyncSession) -> Optional[MealPreset]:
    return await db.get(MealPreset, preset_id)


async def create_preset(data: MealPresetCreate, db: AsyncSession) -> MealPreset:
    preset = MealPreset(**data.model_dump())
    db.add(preset)
    await db.commit()
    await db.refresh(preset)
    return preset


async def update_preset(preset_id: int, data: MealPresetUpdate, db: AsyncSession) -> Optional[MealPreset]:
    preset = await db.get(MealPreset, preset_id)
    if preset is None:
        return None
    for field, value in data.model_dump(exclude_unset=True).items():
        # only description may be cleared
        if value is None and field != "description":
            continue
        setattr(preset, field, value)
    await db.commit()
    await db.refresh(preset)
    return preset


async def delete_preset(preset_id: int, db: AsyncSession) -> bool:
    preset = await db.get(MealPreset, preset_id)
    if preset is None:
        return False
    await db.delete(preset)
    await db.commit()
    return True
