from enum import Enum


class MealType(str, Enum):
    FIRST = "first"
    OTHER = "other"
    BEDTIME = "bedtime"


class ChartType(str, Enum):
    MEAL = "meal"
    BEDTIME = "bedtime"
    BOTH = "both"
