"""
Cascade invalidator.

When a result sets a record, later results with a strictly worse value
lose the records it beats. A later world record that still is the best
in its own country gets downgraded to a national record, one that still
is the best on its continent to a continental record. Results with the
same value are never touched.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.constants import RecordCategory, RecordMetric, RecordType
from records_engine.shared.formatters import format_result_value
from records_engine.shared.regions import get_continental_record_type
from records_engine.features.events.models import Event
from records_engine.features.results.models import Result
from .models import RecordConfig
from .repository import get_record_label

logger = logging.getLogger(__name__)


def _region_matches(row_code: Optional[str], code: Optional[str]) -> bool:
    """A row matches if it has the same code or none; with no code only rows without one match."""
    if code:
        return row_code in (code, None)
    return row_code is None


def get_record_after_beaten(
    row_record: RecordType,
    row_super_region_code: Optional[str],
    row_region_code: Optional[str],
    record_type: RecordType,
    super_region_code: Optional[str],
    region_code: Optional[str],
) -> Optional[RecordType]:
    """
    Get the record a later, worse result keeps after an earlier result set `record_type`.

    Args:
        row_record: Record currently held by the later result
        row_super_region_code: Super-region of the later result
        row_region_code: Region of the later result
        record_type: Record set by the earlier result
        super_region_code: Super-region of the earlier result
        region_code: Region of the earlier result

    Returns:
        The record the later result keeps (possibly a weaker one), or None
    """
    if record_type is RecordType.WR:
        cr_type = get_continental_record_type(super_region_code) if super_region_code else None
        if region_code:
            cleared_types = [RecordType.WR, cr_type, RecordType.NR]
        elif super_region_code:
            cleared_types = [RecordType.WR, cr_type]
        else:
            cleared_types = [RecordType.WR]
        same_super_region = _region_matches(row_super_region_code, super_region_code)

        if (
            row_record in cleared_types
            and same_super_region
            and _region_matches(row_region_code, region_code)
        ):
            return None
        if (
            row_record in [RecordType.WR, cr_type]
            and same_super_region
            and row_region_code is not None
        ):
            return RecordType.NR
        if row_record is RecordType.WR and row_super_region_code is not None:
            return get_continental_record_type(row_super_region_code)
        return row_record

    if record_type.is_continental:
        cleared_types = [record_type, RecordType.NR] if region_code else [record_type]
        same_super_region = row_super_region_code == super_region_code

        if (
            row_record in cleared_types
            and same_super_region
            and _region_matches(row_region_code, region_code)
        ):
            return None
        if row_record is record_type and same_super_region and row_region_code is not None:
            return RecordType.NR
        return row_record

    if row_record is RecordType.NR and row_region_code == region_code:
        return None
    return row_record


async def cancel_future_records(
    db: AsyncSession,
    result: Result,
    event: Event,
    metric: RecordMetric,
    record_configs: Sequence[RecordConfig],
) -> int:
    """
    Cancel or downgrade the records of later results beaten by `result`.

    Args:
        db: Database session (flushed, not committed)
        result: Result holding a record for `metric`
        event: Event of the result
        metric: Single or average
        record_configs: Record configs of the result's category

    Returns:
        Number of results whose record changed
    """
    record_value = getattr(result, metric.record_field)
    if not record_value:
        return 0

    record_type = RecordType(record_value)
    metric_value = getattr(result, metric.value)
    metric_column = getattr(Result, metric.value)
    record_column = getattr(Result, metric.record_field)

    query = select(Result).where(
        Result.event_id == result.event_id,
        Result.record_category == RecordCategory(result.record_category).value,
        Result.approved.is_(True),
        Result.date >= result.date,
        metric_column > metric_value,
        record_column.is_not(None),
    )
    if result.id is not None:
        query = query.where(Result.id != result.id)

    rows = (await db.execute(query.order_by(Result.date, Result.id))).scalars().all()
    changed = 0

    for row in rows:
        old_type = RecordType(getattr(row, metric.record_field))
        new_type = get_record_after_beaten(
            old_type,
            row.super_region_code,
            row.region_code,
            record_type,
            result.super_region_code,
            result.region_code,
        )
        if new_type is old_type:
            continue

        setattr(row, metric.record_field, new_type.value if new_type else None)
        changed += 1

        old_label = get_record_label(record_configs, old_type)
        value = format_result_value(
            getattr(row, metric.value), event.format, metric is RecordMetric.AVERAGE
        )
        if new_type is None:
            logger.info(
                f"CANCELLED {event.event_id} {metric.label} {old_label}: {value} "
                f"(result {row.id}, {row.date})"
            )
        else:
            new_label = get_record_label(record_configs, new_type)
            logger.info(
                f"CHANGED {event.event_id} {metric.label} {old_label} to {new_label}: {value} "
                f"(result {row.id}, {row.date})"
            )

    if changed:
        await db.flush()
    return changed
