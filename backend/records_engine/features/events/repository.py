"""
Event repository.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.repository import BaseRepository
from .models import Event


class EventRepository(BaseRepository[Event]):
    """Repository for Event operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Event)

    async def get_video_based_events(self) -> list[Event]:
        """Events that accept video-based submissions, in display order."""
        result = await self.db.execute(
            select(Event)
            .where(Event.submissions_allowed.is_(True))
            .order_by(Event.rank)
        )
        return list(result.scalars().all())
