from .settings import CalculatorSettings, CalculatorSettingsDB, CorrectionRange
from .insulin_log import InsulinLog
from .meal_preset import MealPreset
