"""
Central location for constant values and tables used across the application.
"""

# mmol/L -> mg/dL
MGDL_PER_MMOL = 18

# Grams of carbohydrate covered by one unit of insulin
DEFAULT_FIRST_MEAL_RATIO = 10.0
DEFAULT_OTHER_MEAL_RATIO = 15.0

# Target range in mmol/L, and the bounds a user may move it within
DEFAULT_TARGET_BG_MIN = 4.0
DEFAULT_TARGET_BG_MAX = 8.0
TARGET_BG_FLOOR = 3.0
TARGET_BG_CEILING = 12.0

# Correction charts cover this mg/dL interval
CHART_LOWER_MGDL = 0
CHART_UPPER_MGDL = 999

NO_CORRECTION_LABEL = "No correction needed"

# Correction charts
# Format: (min_mgdl, max_mgdl, correction_units), bounds inclusive.
# Neighbouring rows may share a boundary value; the earlier row owns it.
MEAL_CORRECTION_TABLE = (
    (0, 70, -0.5),
    (70, 100, -0.5),
    (101, 120, 0),
    (121, 138, 0.5),
    (139, 155, 1),
    (156, 173, 1.5),
    (174, 190, 2),
    (191, 208, 2.5),
    (209, 225, 3),
    (226, 243, 3.5),
    (244, 260, 4),
    (261, 278, 4.5),
    (279, 295, 5),
    (296, 313, 5.5),
    (314, 330, 6),
    (331, 348, 6.5),
    (349, 365, 7),
    (366, 383, 7.5),
    (384, 400, 8),
    (401, 999, 8.5),
)

BEDTIME_CORRECTION_TABLE = (
    (0, 70, -0.5),
    (70, 100, 0),
    (101, 150, 0),
    (151, 180, 0.5),
    (181, 210, 1),
    (211, 240, 1.5),
    (241, 270, 2),
    (271, 300, 2.5),
    (301, 330, 3),
    (331, 360, 3.5),
    (361, 400, 4),
    (401, 999, 4.5),
)
