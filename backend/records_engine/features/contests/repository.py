"""
Contest and round repositories.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.repository import BaseRepository
from .models import Contest, Round


class ContestRepository(BaseRepository[Contest]):
    """Repository for Contest operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Contest)


class RoundRepository(BaseRepository[Round]):
    """Repository for Round operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Round)

    async def get_event_rounds(self, competition_id: str, event_id: str) -> list[Round]:
        """All rounds of an event at a contest, ordered by round number."""
        result = await self.db.execute(
            select(Round)
            .where(Round.competition_id == competition_id, Round.event_id == event_id)
            .order_by(Round.round_number)
        )
        return list(result.scalars().all())
