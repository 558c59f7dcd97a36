"""
Record config and record holder queries.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.constants import RecordCategory, RecordType
from records_engine.shared.exceptions import RecordsInvariantError
from records_engine.shared.regions import get_continent
from records_engine.shared.repository import BaseRepository
from records_engine.features.results.models import Result
from .models import RecordConfig

logger = logging.getLogger(__name__)


# Label prefix per category (competition world record = "XWR")
CATEGORY_LABEL_PREFIXES: dict[RecordCategory, str] = {
    RecordCategory.COMPETITIONS: "X",
    RecordCategory.MEETUPS: "M",
    RecordCategory.VIDEO_BASED: "",
}

RECORD_TYPE_COLORS: dict[RecordType, str] = {
    RecordType.WR: "#dc3545",
    RecordType.NR: "#198754",
}
CONTINENTAL_RECORD_COLOR = "#ffc107"


class RecordConfigRepository(BaseRepository[RecordConfig]):
    """Repository for RecordConfig operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, RecordConfig)

    async def get_for_category(self, category: RecordCategory) -> list[RecordConfig]:
        """
        Get the record configs of a category.

        Raises:
            RecordsInvariantError: If the category doesn't have exactly one
                config per record type
        """
        configs = await self.get_all(category=category.value)
        configured_types = {c.record_type_id for c in configs}

        if len(configs) != len(RecordType) or configured_types != {t.value for t in RecordType}:
            raise RecordsInvariantError(
                f"The records are configured incorrectly. Expected {len(RecordType)} record "
                f"configs for category {category.value}, but found {len(configs)}."
            )
        return configs


def get_record_label(record_configs: Sequence[RecordConfig], record_type: RecordType | str) -> str:
    """Label of a record type within one category's configs."""
    for config in record_configs:
        if config.record_type_id == record_type:
            return config.label
    raise RecordsInvariantError(f"No record config found for record type {record_type}")


async def ensure_record_configs(db: AsyncSession) -> int:
    """
    Create the default record configs that don't exist yet.

    Returns:
        Number of configs created
    """
    repo = RecordConfigRepository(db)
    existing = {(c.category, c.record_type_id) for c in await repo.get_all()}
    created = 0

    for category, prefix in CATEGORY_LABEL_PREFIXES.items():
        for rank, record_type in enumerate(RecordType, start=1):
            if (category.value, record_type.value) in existing:
                continue
            color = RECORD_TYPE_COLORS.get(record_type, CONTINENTAL_RECORD_COLOR)
            db.add(RecordConfig(
                record_type_id=record_type.value,
                category=category.value,
                label=f"{prefix}{record_type.value}",
                rank=rank,
                color=color,
            ))
            created += 1

    if created:
        await db.flush()
        logger.info(f"Created {created} default record configs")
    return created


async def get_records(
    db: AsyncSession,
    category: RecordCategory,
    event_id: Optional[str] = None,
    region: Optional[str] = None,
) -> list[Result]:
    """
    Get the results currently holding a record, newest first.

    Args:
        db: Database session
        category: Record category
        event_id: Only records of this event
        region: Continent or country code. Without it only world records are returned;
            with a continent, world and that continent's records; with a country,
            world, its continent's and its national records.
    """
    record_types: list[str] = [RecordType.WR.value]
    query = select(Result).where(Result.record_category == category.value)

    if region:
        continent = get_continent(region)
        if continent:
            record_types.append(continent.record_type.value)
            query = query.where(Result.super_region_code == region)
        else:
            record_types = [t.value for t in RecordType]
            query = query.where(Result.region_code == region)

    query = query.where(or_(
        Result.regional_single_record.in_(record_types),
        Result.regional_average_record.in_(record_types),
    ))
    if event_id:
        query = query.where(Result.event_id == event_id)

    result = await db.execute(query.order_by(Result.date.desc(), Result.id))
    return list(result.scalars().all())


async def get_record_configs(db: AsyncSession, category: RecordCategory) -> list[RecordConfig]:
    """Shortcut for RecordConfigRepository(db).get_for_category(category)."""
    return await RecordConfigRepository(db).get_for_category(category)
