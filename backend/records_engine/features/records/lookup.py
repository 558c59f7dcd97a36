"""
Record lookup.

Finds the result holding a record of some scope as of a given date.
A stronger tag implies the weaker ones: the world record holder is also
the holder of its continental and national record, unless a later result
took those over.
"""

from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.constants import RecordCategory, RecordMetric, RecordType
from records_engine.shared.regions import get_continent_for_record_type
from records_engine.features.results.models import Result


def get_implying_record_types(record_type: RecordType) -> list[RecordType]:
    """Record types whose holder also holds `record_type` (including itself)."""
    if record_type is RecordType.WR:
        return [RecordType.WR]
    if record_type.is_continental:
        return [RecordType.WR, record_type]
    return list(RecordType)


async def get_record_result(
    db: AsyncSession,
    event_id: str,
    metric: RecordMetric,
    record_type: RecordType,
    category: RecordCategory,
    *,
    records_up_to: Optional[date] = None,
    exclude_result_id: Optional[int] = None,
    region_code: Optional[str] = None,
) -> Optional[Result]:
    """
    Get the result holding a record.

    Args:
        db: Database session
        event_id: Event
        metric: Single or average record
        record_type: Scope of the record
        category: Record category
        records_up_to: Only results dated on or before this day (default: today)
        exclude_result_id: Result to ignore (e.g. the one being updated)
        region_code: Country, required for national records

    Returns:
        Record holder, or None if there is no record yet
    """
    if records_up_to is None:
        records_up_to = date.today()

    metric_column = getattr(Result, metric.value)
    record_column = getattr(Result, metric.record_field)
    implying_types = get_implying_record_types(record_type)

    query = select(Result).where(
        Result.event_id == event_id,
        Result.record_category == category.value,
        Result.approved.is_(True),
        metric_column > 0,
        Result.date <= records_up_to,
        record_column.in_([t.value for t in implying_types]),
    )

    if record_type.is_continental:
        continent = get_continent_for_record_type(record_type)
        query = query.where(Result.super_region_code == continent.code)
    elif record_type is RecordType.NR:
        query = query.where(Result.region_code == region_code)

    if exclude_result_id is not None:
        query = query.where(Result.id != exclude_result_id)

    query = query.order_by(Result.date.desc(), metric_column, Result.id).limit(1)
    result = await db.execute(query)
    return result.scalars().first()
