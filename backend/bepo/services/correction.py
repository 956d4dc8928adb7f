from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from bepo.core.constants import CHART_LOWER_MGDL, CHART_UPPER_MGDL, MGDL_PER_MMOL, NO_CORRECTION_LABEL
from bepo.models.enums import MealType
from bepo.models.settings import (
    CalculatorSettings,
    CorrectionRange,
    default_bedtime_ranges,
    default_meal_ranges,
)


@dataclass
class CorrectionLookup:
    correction: float
    range: str


def convert_bg_to_mgdl(bg_mmol_l: float) -> float:
    """mmol/L -> mg/dL. Not rounded; callers round for display only."""
    return bg_mmol_l * MGDL_PER_MMOL


def _format_number(value: float) -> str:
    # 2.0 -> "2", 0.5 -> "0.5"
    return f"{value:g}"


def describe_range(row: CorrectionRange) -> str:
    sign = "+" if row.correction > 0 else ""
    return f"{row.min} to {row.max} mg/dL = {sign}{_format_number(row.correction)} units"


def find_correction_range(bg_mgdl: float, ranges: Iterable[CorrectionRange]) -> Optional[CorrectionRange]:
    # First match in table order wins, so a shared boundary belongs to the earlier row.
    for row in ranges:
        if row.contains(bg_mgdl):
            return row
    return None


def get_correction_insulin(
    bg_mgdl: float,
    meal_type: Optional[MealType] = None,
    settings: Optional[CalculatorSettings] = None,
) -> CorrectionLookup:
    settings = settings or CalculatorSettings.default()
    row = find_correction_range(bg_mgdl, settings.ranges_for(meal_type))
    if row is None:
        return CorrectionLookup(correction=0.0, range=NO_CORRECTION_LABEL)
    return CorrectionLookup(correction=row.correction, range=describe_range(row))


def find_coverage_gaps(
    ranges: Sequence[CorrectionRange],
    lower: int = CHART_LOWER_MGDL,
    upper: int = CHART_UPPER_MGDL,
) -> list[tuple[int, int]]:
    """
    Returns the integer mg/dL intervals inside [lower, upper] that no row matches.
    Overlapping rows are fine; only holes are reported.
    """
    gaps: list[tuple[int, int]] = []
    next_uncovered = lower
    for row in sorted(ranges, key=lambda r: r.min):
        if row.min > next_uncovered:
            gaps.append((next_uncovered, min(row.min - 1, upper)))
        next_uncovered = max(next_uncovered, row.max + 1)
        if next_uncovered > upper:
            break
    if next_uncovered <= upper:
        gaps.append((next_uncovered, upper))
    return [(lo, hi) for lo, hi in gaps if lo <= hi]


def default_correction_charts() -> dict[str, list[CorrectionRange]]:
    return {
        "meal_correction_ranges": default_meal_ranges(),
        "bedtime_correction_ranges": default_bedtime_ranges(),
    }
