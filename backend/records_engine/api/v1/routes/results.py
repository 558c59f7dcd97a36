"""
Results Routes

Endpoints for entering, editing and deleting contest and video-based results.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.api.v1.errors import to_http_exception
from records_engine.db.session import get_async_db
from records_engine.features.events.schemas import EventResponse
from records_engine.features.results.schemas import (
    ContestResultCreate,
    ContestResultUpdate,
    ResultResponse,
    VideoBasedResultCreate,
    VideoBasedResultUpdate,
)
from records_engine.features.results.service import ResultService
from records_engine.shared.exceptions import RecordsEngineError

router = APIRouter()


@router.post("", response_model=list[ResultResponse], status_code=201)
async def create_contest_result(
    request: ContestResultCreate,
    db: AsyncSession = Depends(get_async_db),
):
    """
    Enter a contest result.

    Returns all results of the round, ordered by ranking.
    """
    try:
        return await ResultService(db).create_contest_result(request)
    except RecordsEngineError as e:
        raise to_http_exception(e)


@router.patch("/{result_id}", response_model=list[ResultResponse])
async def update_contest_result(
    result_id: int,
    request: ContestResultUpdate,
    db: AsyncSession = Depends(get_async_db),
):
    """Change the attempts of a contest result."""
    try:
        return await ResultService(db).update_contest_result(result_id, request)
    except RecordsEngineError as e:
        raise to_http_exception(e)


@router.delete("/{result_id}", response_model=list[ResultResponse])
async def delete_contest_result(result_id: int, db: AsyncSession = Depends(get_async_db)):
    """Delete a contest result. Returns the remaining results of the round."""
    try:
        return await ResultService(db).delete_contest_result(result_id)
    except RecordsEngineError as e:
        raise to_http_exception(e)


@router.get("/video-based/events", response_model=list[EventResponse])
async def get_video_based_events(db: AsyncSession = Depends(get_async_db)):
    """Get the events that accept video-based submissions."""
    return await ResultService(db).get_video_based_events()


@router.post("/video-based", response_model=ResultResponse, status_code=201)
async def create_video_based_result(
    request: VideoBasedResultCreate,
    approve: bool = Query(False, description="Approve the result right away"),
    db: AsyncSession = Depends(get_async_db),
):
    """Submit a video-based result."""
    try:
        return await ResultService(db).create_video_based_result(request, can_approve=approve)
    except RecordsEngineError as e:
        raise to_http_exception(e)


@router.patch("/video-based/{result_id}", response_model=ResultResponse)
async def update_video_based_result(
    result_id: int,
    request: VideoBasedResultUpdate,
    db: AsyncSession = Depends(get_async_db),
):
    """Edit a pending video-based result (and approve it, if requested)."""
    try:
        return await ResultService(db).update_video_based_result(result_id, request)
    except RecordsEngineError as e:
        raise to_http_exception(e)


@router.get("/round/{round_id}", response_model=list[ResultResponse])
async def get_round_results(round_id: int, db: AsyncSession = Depends(get_async_db)):
    """Get the results of a round, ordered by ranking."""
    try:
        return await ResultService(db).get_round_results(round_id)
    except RecordsEngineError as e:
        raise to_http_exception(e)
