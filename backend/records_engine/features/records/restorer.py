"""
Cascade restorer.

When a result loses a record (deleted, or its value got worse), later
results that were only denied that record because of it get it back.

Each record scope is restored in its own pass, strongest first:
1. Take the value of the record as of the day before the result's date.
2. Group the later results that are at least as good by date and keep a
   running minimum of the per-date minimums.
3. Every result equal to the running minimum on its date is a record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from itertools import groupby
from typing import Iterable, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.constants import MAX_RESULT, RecordCategory, RecordMetric, RecordType
from records_engine.shared.formatters import format_result_value
from records_engine.shared.regions import get_continental_record_type
from records_engine.features.events.models import Event
from records_engine.features.results.models import Result
from .calculator import is_average_record_eligible
from .lookup import get_record_result
from .models import RecordConfig
from .repository import get_record_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultSnapshot:
    """State of a result before it was deleted or changed."""
    id: Optional[int]
    event_id: str
    record_category: str
    date: date
    region_code: Optional[str]
    super_region_code: Optional[str]
    best: int
    average: int
    regional_single_record: Optional[str]
    regional_average_record: Optional[str]

    @classmethod
    def from_result(cls, result: Result) -> "ResultSnapshot":
        return cls(
            id=result.id,
            event_id=result.event_id,
            record_category=result.record_category,
            date=result.date,
            region_code=result.region_code,
            super_region_code=result.super_region_code,
            best=result.best,
            average=result.average,
            regional_single_record=result.regional_single_record,
            regional_average_record=result.regional_average_record,
        )

    def get_record(self, metric: RecordMetric) -> Optional[RecordType]:
        value = getattr(self, metric.record_field)
        return RecordType(value) if value else None


def find_running_minimum_records(
    candidates: Iterable[tuple[int, date, int]],
    baseline: int = MAX_RESULT,
) -> list[int]:
    """
    Find the IDs of the results that were a record on their date.

    Args:
        candidates: (id, date, value) of results with a valid value
        baseline: Record value before the earliest candidate

    Returns:
        IDs of the results equal to the running minimum on their date
    """
    record_ids = []
    running_minimum = baseline

    for _, same_day in groupby(sorted(candidates, key=lambda c: c[1]), key=lambda c: c[1]):
        same_day = list(same_day)
        running_minimum = min(running_minimum, min(value for _, _, value in same_day))
        record_ids.extend(
            result_id for result_id, _, value in same_day if value == running_minimum
        )

    return record_ids


def _should_promote(current: Optional[RecordType], record_type: RecordType) -> bool:
    """Whether a result holding `current` should get `record_type` (never weaken a tag)."""
    if record_type is RecordType.WR:
        return current is not RecordType.WR
    if record_type.is_continental:
        return current is None or current is RecordType.NR
    return current is None


async def _restore_records(
    db: AsyncSession,
    snapshot: ResultSnapshot,
    event: Event,
    metric: RecordMetric,
    record_type: RecordType,
    record_configs: Sequence[RecordConfig],
) -> int:
    category = RecordCategory(snapshot.record_category)
    region_code = snapshot.region_code if record_type is RecordType.NR else None

    previous_record = await get_record_result(
        db, snapshot.event_id, metric, record_type, category,
        records_up_to=snapshot.date - timedelta(days=1),
        region_code=region_code,
    )
    baseline = getattr(previous_record, metric.value) if previous_record else MAX_RESULT

    metric_column = getattr(Result, metric.value)
    query = select(Result).where(
        Result.event_id == snapshot.event_id,
        Result.record_category == category.value,
        Result.approved.is_(True),
        Result.date >= snapshot.date,
        metric_column > 0,
        metric_column <= baseline,
    )
    if record_type.is_continental:
        query = query.where(Result.super_region_code == snapshot.super_region_code)
    elif record_type is RecordType.NR:
        query = query.where(Result.region_code == snapshot.region_code)

    rows = list((await db.execute(query.order_by(Result.date, Result.id))).scalars().all())
    if metric is RecordMetric.AVERAGE:
        rows = [
            r for r in rows
            if is_average_record_eligible(len(r.attempts), r.date, event.default_round_format)
        ]

    rows_by_id = {r.id: r for r in rows}
    record_ids = find_running_minimum_records(
        ((r.id, r.date, getattr(r, metric.value)) for r in rows),
        baseline,
    )

    label = get_record_label(record_configs, record_type)
    restored = 0
    for result_id in record_ids:
        row = rows_by_id[result_id]
        current = getattr(row, metric.record_field)
        if not _should_promote(RecordType(current) if current else None, record_type):
            continue

        setattr(row, metric.record_field, record_type.value)
        restored += 1
        value = format_result_value(
            getattr(row, metric.value), event.format, metric is RecordMetric.AVERAGE
        )
        logger.info(f"New {label} {metric.label} for event {event.event_id}: {value} ({row.date})")

    await db.flush()
    return restored


async def set_future_records(
    db: AsyncSession,
    snapshot: ResultSnapshot,
    event: Event,
    metric: RecordMetric,
    record_configs: Sequence[RecordConfig],
) -> int:
    """
    Restore the records a result was holding back before it lost its record.

    Args:
        db: Database session (flushed, not committed)
        snapshot: The result as it was while it held the record
        event: Event of the result
        metric: Single or average
        record_configs: Record configs of the result's category

    Returns:
        Number of results that got a record
    """
    old_record = snapshot.get_record(metric)
    if old_record is None:
        return 0

    restored = 0
    if old_record is RecordType.WR:
        restored += await _restore_records(
            db, snapshot, event, metric, RecordType.WR, record_configs
        )
    if snapshot.super_region_code and old_record is not RecordType.NR:
        cr_type = get_continental_record_type(snapshot.super_region_code)
        restored += await _restore_records(db, snapshot, event, metric, cr_type, record_configs)
    if snapshot.region_code:
        restored += await _restore_records(
            db, snapshot, event, metric, RecordType.NR, record_configs
        )

    return restored
