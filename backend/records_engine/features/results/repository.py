"""
Result repository.

person_ids is a JSON list, so participant filters are applied in Python.
"""

from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.repository import BaseRepository
from .models import Result


class ResultRepository(BaseRepository[Result]):
    """Repository for Result operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Result)

    async def get_contest_result(self, result_id: int) -> Result | None:
        result = await self.db.execute(
            select(Result).where(Result.id == result_id, Result.competition_id.is_not(None))
        )
        return result.scalars().first()

    async def get_video_based_result(self, result_id: int) -> Result | None:
        result = await self.db.execute(
            select(Result).where(Result.id == result_id, Result.competition_id.is_(None))
        )
        return result.scalars().first()

    async def get_round_results(self, round_id: int) -> list[Result]:
        """Results of a round, ordered by ranking."""
        result = await self.db.execute(
            select(Result)
            .where(Result.round_id == round_id)
            .order_by(Result.ranking, Result.id)
        )
        return list(result.scalars().all())

    async def get_same_team_results(
        self,
        round_ids: Iterable[int],
        person_ids: Sequence[int],
    ) -> list[Result]:
        """Results in the given rounds by exactly the given set of persons."""
        round_ids = list(round_ids)
        if not round_ids:
            return []

        result = await self.db.execute(select(Result).where(Result.round_id.in_(round_ids)))
        team = set(person_ids)
        return [r for r in result.scalars().all() if set(r.person_ids) == team]

    async def get_contest_participant_ids(self, competition_id: str) -> set[int]:
        """IDs of all persons with a result at the contest."""
        result = await self.db.execute(
            select(Result.person_ids).where(Result.competition_id == competition_id)
        )
        return {pid for person_ids in result.scalars().all() for pid in person_ids}
