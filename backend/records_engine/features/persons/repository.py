"""
Person repository.
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_engine.shared.repository import BaseRepository
from .models import Person


class PersonRepository(BaseRepository[Person]):
    """Repository for Person operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Person)

    async def get_many(self, person_ids: Sequence[int]) -> list[Person]:
        """
        Get persons by ID, in the order of the given IDs.

        Missing IDs are skipped.
        """
        result = await self.db.execute(select(Person).where(Person.id.in_(person_ids)))
        by_id = {p.id: p for p in result.scalars().all()}
        return [by_id[pid] for pid in person_ids if pid in by_id]
