from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bepo.core.db import Base


class MealPreset(Base):
    __tablename__ = "meal_presets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    carb_value: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)


class MealPresetCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    carb_value: float = Field(ge=1, le=999, description="Carbohydrates (g)")
    description: Optional[str] = None


class MealPresetUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    carb_value: Optional[float] = Field(default=None, ge=1, le=999)
    description: Optional[str] = None


class MealPresetRead(MealPresetCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
