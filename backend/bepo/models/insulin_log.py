from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bepo.core.db import Base
from bepo.models.enums import MealType


class InsulinLog(Base):
    __tablename__ = "insulin_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False, index=True)
    meal_type: Mapped[str] = mapped_column(String, nullable=False)
    carb_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # Null for bedtime
    bg_value: Mapped[float] = mapped_column(Float, nullable=False)  # mmol/L
    bg_mgdl: Mapped[float] = mapped_column(Float, nullable=False)
    meal_insulin: Mapped[float] = mapped_column(Float, nullable=False)
    correction_insulin: Mapped[float] = mapped_column(Float, nullable=False)
    total_insulin: Mapped[float] = mapped_column(Float, nullable=False)


class InsulinLogCreate(BaseModel):
    meal_type: MealType
    carb_value: Optional[float] = Field(default=None, ge=0)
    bg_value: float = Field(ge=0, description="Blood glucose (mmol/L)")
    bg_mgdl: float = Field(ge=0)
    meal_insulin: float
    correction_insulin: float
    total_insulin: float


class InsulinLogRead(InsulinLogCreate):
    id: int
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
