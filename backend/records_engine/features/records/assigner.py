"""
Record assigner.

Decides which record, if any, a new or changed result sets. Only the
result itself is changed; cancelling the records it beats is done by the
invalidator.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.constants import RecordCategory, RecordMetric, RecordType
from records_engine.shared.exceptions import RecordsInvariantError
from records_engine.shared.formatters import format_result_value
from records_engine.shared.regions import get_continental_record_type, get_shared_regions
from records_engine.features.events.models import Event
from records_engine.features.persons.models import Person
from records_engine.features.results.models import Result
from .calculator import is_average_record_eligible
from .comparison import compare_metric
from .lookup import get_record_result
from .models import RecordConfig
from .repository import get_record_label

logger = logging.getLogger(__name__)


async def get_result_record_type(
    db: AsyncSession,
    result: Result,
    metric: RecordMetric,
) -> Optional[RecordType]:
    """
    Get the strongest record the result's metric sets as of its date.

    Raises:
        RecordsInvariantError: If the result has a region but no super-region
    """
    if result.region_code and not result.super_region_code:
        raise RecordsInvariantError(
            f"Result {result.id} has region {result.region_code} but no super-region"
        )

    category = RecordCategory(result.record_category)
    lookup_kwargs = dict(records_up_to=result.date, exclude_result_id=result.id)

    wr_result = await get_record_result(
        db, result.event_id, metric, RecordType.WR, category, **lookup_kwargs
    )
    if wr_result is None or compare_metric(result, wr_result, metric) <= 0:
        return RecordType.WR

    if not result.super_region_code:
        return None
    if (
        result.super_region_code == wr_result.super_region_code
        and (not result.region_code or result.region_code == wr_result.region_code)
    ):
        return None

    cr_type = get_continental_record_type(result.super_region_code)
    cr_result = await get_record_result(
        db, result.event_id, metric, cr_type, category, **lookup_kwargs
    )
    if cr_result is None or compare_metric(result, cr_result, metric) <= 0:
        return cr_type

    if not result.region_code or result.region_code == cr_result.region_code:
        return None

    nr_result = await get_record_result(
        db, result.event_id, metric, RecordType.NR, category,
        region_code=result.region_code, **lookup_kwargs
    )
    if nr_result is None or compare_metric(result, nr_result, metric) <= 0:
        return RecordType.NR
    return None


async def set_result_records(
    db: AsyncSession,
    result: Result,
    event: Event,
    record_configs: Sequence[RecordConfig],
) -> Result:
    """
    Set the single and average record tags of a result.

    Existing tags are replaced. The average is only considered if it is
    eligible for records (see is_average_record_eligible).
    """
    result.regional_single_record = None
    result.regional_average_record = None

    if result.best > 0:
        record_type = await get_result_record_type(db, result, RecordMetric.BEST)
        _apply_record(result, event, RecordMetric.BEST, record_type, record_configs)

    if result.average > 0 and is_average_record_eligible(
        len(result.attempts), result.date, event.default_round_format
    ):
        record_type = await get_result_record_type(db, result, RecordMetric.AVERAGE)
        _apply_record(result, event, RecordMetric.AVERAGE, record_type, record_configs)

    return result


async def set_result_records_and_regions(
    db: AsyncSession,
    result: Result,
    event: Event,
    record_configs: Sequence[RecordConfig],
    participants: Sequence[Person],
) -> Result:
    """Set the shared region codes of the participants, then the record tags."""
    result.region_code, result.super_region_code = get_shared_regions(
        p.region_code for p in participants
    )
    return await set_result_records(db, result, event, record_configs)


def _apply_record(
    result: Result,
    event: Event,
    metric: RecordMetric,
    record_type: Optional[RecordType],
    record_configs: Sequence[RecordConfig],
) -> None:
    if record_type is None:
        return

    setattr(result, metric.record_field, record_type.value)
    label = get_record_label(record_configs, record_type)
    value = format_result_value(
        getattr(result, metric.value), event.format, metric is RecordMetric.AVERAGE
    )
    logger.info(f"New {event.event_id} {metric.label} {label}: {value}")
