"""
Shared test fixtures.

Every test gets a fresh in-memory SQLite database with the default record
configs, a few events and persons from different regions.
"""

from datetime import date
from typing import Optional

import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from records_engine.models import Base, Event, Person, Result
from records_engine.shared.constants import EventFormat, RecordCategory, RecordMetric, RoundFormat
from records_engine.shared.regions import get_super_region
from records_engine.features.records.assigner import set_result_records
from records_engine.features.records.invalidator import cancel_future_records
from records_engine.features.records.repository import ensure_record_configs, get_record_configs
from records_engine.features.records.restorer import ResultSnapshot, set_future_records


# =============================================================================
# Test Data
# =============================================================================

EVENTS = [
    dict(
        event_id="333",
        name="3x3x3 Cube",
        category="wca",
        rank=10,
        format=EventFormat.TIME.value,
        default_round_format=RoundFormat.AVERAGE_OF_5.value,
        participants=1,
    ),
    dict(
        event_id="333_team_relay",
        name="3x3x3 Team Relay",
        category="team",
        rank=20,
        format=EventFormat.TIME.value,
        default_round_format=RoundFormat.MEAN_OF_3.value,
        participants=3,
    ),
    dict(
        event_id="333fm",
        name="3x3x3 Fewest Moves",
        category="wca",
        rank=30,
        format=EventFormat.NUMBER.value,
        default_round_format=RoundFormat.MEAN_OF_3.value,
        participants=1,
        submissions_allowed=True,
    ),
]

# id -> region code
PERSON_REGIONS = {
    1: "GB",
    2: "GB",
    3: "DE",
    4: "FR",
    5: "US",
    6: "CA",
    7: "JP",
    8: "AU",
}


# =============================================================================
# Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def db():
    """Async session on a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        await ensure_record_configs(session)
        for event in EVENTS:
            session.add(Event(**event))
        for person_id, region_code in PERSON_REGIONS.items():
            session.add(Person(
                id=person_id,
                name=f"Person {person_id}",
                region_code=region_code,
                approved=True,
            ))
        await session.commit()

        yield session

    await engine.dispose()


class RecordsFlow:
    """
    Adds, changes and deletes results with the same record bookkeeping
    as ResultService, without the contest and round checks.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self,
        best: int,
        result_date: date,
        region_code: Optional[str] = None,
        super_region_code: Optional[str] = None,
        average: int = 0,
        event_id: str = "333",
        category: RecordCategory = RecordCategory.COMPETITIONS,
        attempts: Optional[list[int]] = None,
        approved: bool = True,
    ) -> Result:
        event = await self.db.get(Event, event_id)
        configs = await get_record_configs(self.db, category)

        result = Result(
            event_id=event_id,
            date=result_date,
            approved=approved,
            person_ids=[1],
            region_code=region_code,
            super_region_code=super_region_code or get_super_region(region_code),
            attempts=attempts or [best] * 5,
            best=best,
            average=average,
            record_category=category.value,
        )
        if approved:
            await set_result_records(self.db, result, event, configs)

        self.db.add(result)
        await self.db.flush()

        for metric in RecordMetric:
            if getattr(result, metric.record_field):
                await cancel_future_records(self.db, result, event, metric, configs)
        return result

    async def delete(self, result: Result) -> None:
        event = await self.db.get(Event, result.event_id)
        configs = await get_record_configs(self.db, RecordCategory(result.record_category))

        snapshot = ResultSnapshot.from_result(result)
        await self.db.delete(result)
        await self.db.flush()

        for metric in RecordMetric:
            if snapshot.get_record(metric):
                await set_future_records(self.db, snapshot, event, metric, configs)

    async def update_best(self, result: Result, best: int) -> None:
        event = await self.db.get(Event, result.event_id)
        configs = await get_record_configs(self.db, RecordCategory(result.record_category))

        previous = ResultSnapshot.from_result(result)
        result.best = best
        result.attempts = [best] * len(result.attempts)
        await set_result_records(self.db, result, event, configs)
        await self.db.flush()

        if previous.regional_single_record and best > previous.best:
            await set_future_records(self.db, previous, event, RecordMetric.BEST, configs)
            await set_result_records(self.db, result, event, configs)
            await self.db.flush()
        if result.regional_single_record and best < previous.best:
            await cancel_future_records(self.db, result, event, RecordMetric.BEST, configs)

    async def all_results(self, event_id: str = "333") -> list[Result]:
        rows = await self.db.execute(
            select(Result).where(Result.event_id == event_id).order_by(Result.date, Result.id)
        )
        return list(rows.scalars().all())

    async def single_records(self, event_id: str = "333") -> dict[int, Optional[str]]:
        """Result ID -> single record tag."""
        return {r.id: r.regional_single_record for r in await self.all_results(event_id)}

    async def average_records(self, event_id: str = "333") -> dict[int, Optional[str]]:
        """Result ID -> average record tag."""
        return {r.id: r.regional_average_record for r in await self.all_results(event_id)}


@pytest_asyncio.fixture
async def records(db):
    """RecordsFlow bound to the test database."""
    return RecordsFlow(db)
