"""
Records Routes

Endpoints for current record holders.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.api.v1.errors import to_http_exception
from records_engine.db.session import get_async_db
from records_engine.features.results.schemas import ResultResponse, WrPairResponse
from records_engine.features.results.service import ResultService
from records_engine.shared.constants import RecordCategory
from records_engine.shared.exceptions import RecordsEngineError

router = APIRouter()


@router.get("/wr-pair/{category}/{event_id}", response_model=WrPairResponse)
async def get_wr_pair(
    category: RecordCategory,
    event_id: str,
    records_up_to: Optional[date] = Query(None, description="Records as of this date (default: today)"),
    exclude_result_id: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Get the world record single and average of an event.

    Used to warn about possible records while entering results.
    """
    try:
        return await ResultService(db).get_wr_pair(
            event_id, category, records_up_to=records_up_to, exclude_result_id=exclude_result_id
        )
    except RecordsEngineError as e:
        raise to_http_exception(e)


@router.get("/{category}", response_model=list[ResultResponse])
async def get_records(
    category: RecordCategory,
    event_id: Optional[str] = Query(None),
    region: Optional[str] = Query(None, description="Continent (e.g. EUROPE) or country code"),
    db: AsyncSession = Depends(get_async_db),
):
    """Get the results currently holding a record, newest first."""
    return await ResultService(db).get_records(category, event_id=event_id, region=region)
