"""
Consistency tests for the record bookkeeping.

After every insert, update and delete the stored record tags must equal
the tags recomputed from scratch: a result holds the strongest record for
which it is at least as good as every other result of the same scope dated
on or before it. Averages of results with fewer than 5 attempts dated
2023 or later never count.
"""

import random
from datetime import date, timedelta
from typing import Optional

import pytest

from records_engine.shared.constants import DNF, RecordCategory, RecordMetric
from records_engine.shared.regions import get_continental_record_type


# (region_code, super_region_code); mixed teams have no region
REGIONS = [
    ("GB", "EUROPE"),
    ("DE", "EUROPE"),
    ("FR", "EUROPE"),
    ("US", "NORTH_AMERICA"),
    ("CA", "NORTH_AMERICA"),
    ("JP", "ASIA"),
    (None, "EUROPE"),
    (None, None),
]
VALUES = [900, 950, 1000, 1050, 1100, 1200]
START_DATE = date(2021, 3, 1)
# Spans the date from which only full averages count
AVERAGES_START_DATE = date(2022, 12, 29)


def counts_for_records(result, metric: RecordMetric) -> bool:
    if getattr(result, metric.value) <= 0:
        return False
    if metric is RecordMetric.AVERAGE and result.date >= date(2023, 1, 1):
        return len(result.attempts) == 5
    return True


def expected_record(result, results, metric: RecordMetric = RecordMetric.BEST) -> Optional[str]:
    """Record tag of a result, recomputed from all results of its partition."""
    if not counts_for_records(result, metric):
        return None

    value = getattr(result, metric.value)
    earlier = [
        r for r in results
        if r.id != result.id and counts_for_records(r, metric) and r.date <= result.date
    ]

    def is_best_among(others) -> bool:
        return all(value <= getattr(r, metric.value) for r in others)

    if is_best_among(earlier):
        return "WR"
    if result.super_region_code and is_best_among(
        r for r in earlier if r.super_region_code == result.super_region_code
    ):
        return get_continental_record_type(result.super_region_code).value
    if result.region_code and is_best_among(
        r for r in earlier if r.region_code == result.region_code
    ):
        return "NR"
    return None


async def assert_consistent(records, event_id: str = "333", metrics=(RecordMetric.BEST,)):
    results = await records.all_results(event_id)
    for metric in metrics:
        actual = {r.id: getattr(r, metric.record_field) for r in results}
        expected = {r.id: expected_record(r, results, metric) for r in results}
        assert actual == expected, metric.label


def random_result(rng: random.Random) -> dict:
    region_code, super_region_code = rng.choice(REGIONS)
    return dict(
        best=rng.choice(VALUES),
        result_date=START_DATE + timedelta(days=rng.randint(0, 6)),
        region_code=region_code,
        super_region_code=super_region_code,
    )


def random_average_result(rng: random.Random) -> dict:
    region_code, super_region_code = rng.choice(REGIONS)
    average = rng.choice(VALUES + [DNF])
    best = rng.choice(VALUES) if average == DNF else average - rng.choice([0, 50, 100])
    number_of_attempts = rng.choice([5, 5, 5, 3])
    return dict(
        best=best,
        average=average,
        attempts=[best] * number_of_attempts,
        result_date=AVERAGES_START_DATE + timedelta(days=rng.randint(0, 6)),
        region_code=region_code,
        super_region_code=super_region_code,
    )


# =============================================================================
# Minimality and consistency under random operations
# =============================================================================

class TestRandomOperations:
    """Stored tags match recomputed tags after every operation."""

    @pytest.mark.parametrize("seed", range(6))
    async def test_inserts(self, records, seed):
        rng = random.Random(seed)

        for _ in range(14):
            await records.add(**random_result(rng))
            await assert_consistent(records)

    @pytest.mark.parametrize("seed", range(6))
    async def test_inserts_deletes_and_updates(self, records, seed):
        rng = random.Random(1000 + seed)
        results = [await records.add(**random_result(rng)) for _ in range(10)]
        await assert_consistent(records)

        for _ in range(12):
            operation = rng.choice(["add", "delete", "update"])

            if operation == "add" or not results:
                results.append(await records.add(**random_result(rng)))
            elif operation == "delete":
                await records.delete(results.pop(rng.randrange(len(results))))
            else:
                await records.update_best(rng.choice(results), rng.choice(VALUES))

            await assert_consistent(records)

    async def test_world_record_is_minimal(self, records):
        rng = random.Random(42)
        for _ in range(15):
            await records.add(**random_result(rng))

        results = await records.all_results()
        for wr in (r for r in results if r.regional_single_record == "WR"):
            assert all(wr.best <= r.best for r in results if r.date <= wr.date)


class TestRandomAverageOperations:
    """Average tags match recomputed tags, short averages included."""

    @pytest.mark.parametrize("seed", range(6))
    async def test_inserts_and_deletes(self, records, seed):
        rng = random.Random(3000 + seed)
        results = [await records.add(**random_average_result(rng)) for _ in range(10)]
        await assert_consistent(records, metrics=tuple(RecordMetric))

        for _ in range(12):
            if rng.random() < 0.5 or not results:
                results.append(await records.add(**random_average_result(rng)))
            else:
                await records.delete(results.pop(rng.randrange(len(results))))

            await assert_consistent(records, metrics=tuple(RecordMetric))


# =============================================================================
# Round trip
# =============================================================================

class TestInsertThenDelete:
    """Inserting a result and deleting it again leaves all tags unchanged."""

    @pytest.mark.parametrize("seed", range(6))
    async def test_round_trip(self, records, seed):
        rng = random.Random(2000 + seed)
        for _ in range(10):
            await records.add(**random_result(rng))
        before = await records.single_records()

        for _ in range(4):
            added = await records.add(**random_result(rng))
            await records.delete(added)

            assert await records.single_records() == before

    async def test_round_trip_of_new_world_record(self, records):
        first = await records.add(1000, date(2021, 1, 1), "GB")
        await records.add(1100, date(2021, 1, 5), "DE")
        await records.add(1050, date(2021, 1, 9), "US")
        await records.add(1200, date(2021, 1, 9), None, "EUROPE")
        before = await records.single_records()

        added = await records.add(800, date(2020, 12, 1), "FR")
        assert added.regional_single_record == "WR"
        assert first.regional_single_record == "NR"

        await records.delete(added)
        assert await records.single_records() == before


# =============================================================================
# Category isolation
# =============================================================================

class TestCategoryIsolation:
    """Results in different categories never affect each other's records."""

    async def test_identical_results_in_two_categories(self, records):
        competition = await records.add(1000, date(2021, 1, 1), "GB")
        meetup = await records.add(1000, date(2021, 1, 1), "GB", category=RecordCategory.MEETUPS)

        assert competition.regional_single_record == "WR"
        assert meetup.regional_single_record == "WR"

        await records.add(900, date(2020, 1, 1), "GB", category=RecordCategory.MEETUPS)
        assert competition.regional_single_record == "WR"
        assert meetup.regional_single_record is None

    async def test_delete_in_other_category(self, records):
        competition = await records.add(1000, date(2021, 1, 1), "GB")
        await records.add(1100, date(2021, 2, 1), "GB")
        meetup = await records.add(900, date(2021, 1, 1), "GB", category=RecordCategory.MEETUPS)

        before = await records.single_records()
        await records.delete(meetup)
        after = await records.single_records()

        del before[meetup.id]
        assert after == before
        assert competition.regional_single_record == "WR"


# =============================================================================
# Same-day results
# =============================================================================

class TestSameDay:
    """Records on the same day are compared by value only."""

    async def test_worse_same_day_result_keeps_existing_record(self, records):
        existing = await records.add(1000, date(2021, 6, 1), "GB")
        await records.add(1100, date(2021, 6, 1), "GB")

        assert existing.regional_single_record == "WR"

    async def test_better_same_day_result_cancels_record(self, records):
        existing = await records.add(1000, date(2021, 6, 1), "GB")
        better = await records.add(900, date(2021, 6, 1), "GB")

        assert existing.regional_single_record is None
        assert better.regional_single_record == "WR"

    async def test_better_same_day_result_downgrades_record(self, records):
        existing = await records.add(1000, date(2021, 6, 1), "DE")
        await records.add(900, date(2021, 6, 1), "GB")

        assert existing.regional_single_record == "NR"

    async def test_tied_same_day_results_both_hold_record(self, records):
        first = await records.add(1000, date(2021, 6, 1), "DE")
        second = await records.add(1000, date(2021, 6, 1), "GB")

        assert first.regional_single_record == "WR"
        assert second.regional_single_record == "WR"
