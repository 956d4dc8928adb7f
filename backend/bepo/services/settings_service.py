import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bepo.models.enums import ChartType
from bepo.models.settings import (
    CalculatorSettings,
    CalculatorSettingsDB,
    default_bedtime_ranges,
    default_meal_ranges,
)
from bepo.services.correction import find_coverage_gaps

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_ID = "default"


class VersionConflictError(Exception):
    def __init__(self, server_version, server_settings):
        super().__init__(f"Version conflict (server at {server_version})")
        self.server_version = server_version
        self.server_settings = server_settings


class InvalidCorrectionChartError(Exception):
    def __init__(self, chart: str, gaps: list[tuple[int, int]]):
        spans = ", ".join(f"{lo}-{hi}" for lo, hi in gaps)
        super().__init__(f"{chart} leaves mg/dL values uncovered: {spans}")
        self.chart = chart
        self.gaps = gaps


def check_chart_coverage(settings: CalculatorSettings) -> None:
    for chart in ("meal_correction_ranges", "bedtime_correction_ranges"):
        gaps = find_coverage_gaps(getattr(settings, chart))
        if gaps:
            raise InvalidCorrectionChartError(chart, gaps)


async def _get_row(profile_id: str, db: AsyncSession):
    # populate_existing: a re-read after a lost race must see the winner's row
    stmt = (
        select(CalculatorSettingsDB)
        .where(CalculatorSettingsDB.profile_id == profile_id)
        .execution_options(populate_existing=True)
    )
    return (await db.execute(stmt)).scalars().first()


async def load_calculator_settings(db: AsyncSession, profile_id: str = DEFAULT_PROFILE_ID) -> CalculatorSettings:
    row = await _get_row(profile_id, db)
    if not row:
        return CalculatorSettings.default()
    return CalculatorSettings.migrate(row.settings)


async def get_settings_service(db: AsyncSession, profile_id: str = DEFAULT_PROFILE_ID):
    row = await _get_row(profile_id, db)

    if not row:
        return {
            "settings": CalculatorSettings.default(),
            "version": 0,
            "updated_at": None,
        }

    return {
        "settings": CalculatorSettings.migrate(row.settings),
        "version": row.version,
        "updated_at": row.updated_at,
    }


async def update_settings_service(
    new_settings: CalculatorSettings,
    client_version: int,
    db: AsyncSession,
    profile_id: str = DEFAULT_PROFILE_ID,
):
    check_chart_coverage(new_settings)
    payload = new_settings.model_dump(mode="json")

    row = await _get_row(profile_id, db)
    now = datetime.now(timezone.utc)

    if not row:
        # Nothing stored yet: server version is effectively 0
        if client_version != 0:
            raise VersionConflictError(0, None)

        row = CalculatorSettingsDB(
            profile_id=profile_id,
            settings=payload,
            version=1,
            created_at=now,
            updated_at=now,
        )
        db.add(row)
        try:
            await db.commit()
        except IntegrityError:
            # Another writer created the row first
            await db.rollback()
            raise await _conflict_from_db(profile_id, db)
        logger.info("Created calculator settings for profile %s", profile_id)
        return {"settings": new_settings, "version": 1, "updated_at": now}

    if row.version != client_version:
        raise _conflict_from_row(row)

    # Compare-and-swap on version so concurrent writers cannot both win
    stmt = (
        update(CalculatorSettingsDB)
        .where(
            CalculatorSettingsDB.profile_id == profile_id,
            CalculatorSettingsDB.version == client_version,
        )
        .values(settings=payload, version=client_version + 1, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    if result.rowcount != 1:
        await db.rollback()
        raise await _conflict_from_db(profile_id, db)

    await db.commit()
    logger.info("Updated calculator settings for profile %s to version %s", profile_id, client_version + 1)
    return {"settings": new_settings, "version": client_version + 1, "updated_at": now}


def _conflict_from_row(row: CalculatorSettingsDB) -> VersionConflictError:
    # Same normalized shape as GET, even for legacy camelCase rows
    server_settings = CalculatorSettings.migrate(row.settings).model_dump(mode="json")
    return VersionConflictError(row.version, server_settings)


async def _conflict_from_db(profile_id: str, db: AsyncSession) -> VersionConflictError:
    row = await _get_row(profile_id, db)
    if not row:
        return VersionConflictError(0, None)
    return _conflict_from_row(row)


async def reset_charts_service(chart: ChartType, db: AsyncSession, profile_id: str = DEFAULT_PROFILE_ID):
    """Put the chosen correction chart(s) back to the defaults, keeping everything else."""
    current = await get_settings_service(db, profile_id)
    settings: CalculatorSettings = current["settings"]

    updates = {}
    if chart in (ChartType.MEAL, ChartType.BOTH):
        updates["meal_correction_ranges"] = default_meal_ranges()
    if chart in (ChartType.BEDTIME, ChartType.BOTH):
        updates["bedtime_correction_ranges"] = default_bedtime_ranges()

    return await update_settings_service(
        settings.model_copy(update=updates),
        current["version"],
        db,
        profile_id,
    )
