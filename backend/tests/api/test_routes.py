"""
Tests for the HTTP API.

Requests go through the ASGI app in-process; the database dependency is
overridden with the test session.
"""

from datetime import date

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from records_engine.db.session import get_async_db
from records_engine.main import app
from records_engine.models import Contest, Round
from records_engine.shared.constants import ContestState, RoundFormat, RoundType


@pytest_asyncio.fixture
async def client(db):
    async def override_get_async_db():
        yield db

    app.dependency_overrides[get_async_db] = override_get_async_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def round_ids(db) -> dict[str, int]:
    """Final rounds of a contest held today and of one held years ago."""
    rounds = {}
    for competition_id, start_date in [("TodayOpen", date.today()), ("OldOpen2019", date(2019, 6, 1))]:
        db.add(Contest(
            competition_id=competition_id,
            name=competition_id,
            short_name=competition_id,
            state=ContestState.APPROVED.value,
            start_date=start_date,
        ))
        round_ = Round(
            competition_id=competition_id,
            event_id="333",
            round_number=1,
            round_type_id=RoundType.FINAL.value,
            format=RoundFormat.AVERAGE_OF_5.value,
            open=True,
        )
        db.add(round_)
        await db.flush()
        rounds[competition_id] = round_.id

    await db.commit()
    return rounds


def result_request(competition_id: str, round_id: int, person_id: int, attempts) -> dict:
    return {
        "competition_id": competition_id,
        "event_id": "333",
        "round_id": round_id,
        "person_ids": [person_id],
        "attempts": attempts,
    }


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestResultRoutes:
    """Tests for /api/v1/results."""

    async def test_create_contest_result(self, client, round_ids):
        response = await client.post("/api/v1/results", json=result_request(
            "TodayOpen", round_ids["TodayOpen"], 1, [1000, 1100, 1200, 1300, 1400],
        ))

        assert response.status_code == 201
        data = response.json()
        assert len(data) == 1
        assert data[0]["best"] == 1000
        assert data[0]["average"] == 1200
        assert data[0]["ranking"] == 1
        assert data[0]["regional_single_record"] == "WR"
        assert data[0]["date"] == date.today().isoformat()

    async def test_update_and_delete(self, client, round_ids):
        round_id = round_ids["TodayOpen"]
        await client.post("/api/v1/results", json=result_request("TodayOpen", round_id, 1, [1000] * 5))
        response = await client.post(
            "/api/v1/results", json=result_request("TodayOpen", round_id, 3, [1100] * 5)
        )
        gb_id = next(r["id"] for r in response.json() if r["person_ids"] == [1])

        response = await client.patch(f"/api/v1/results/{gb_id}", json={"attempts": [1200] * 5})
        assert response.status_code == 200
        records = {r["person_ids"][0]: r["regional_single_record"] for r in response.json()}
        assert records == {1: "NR", 3: "WR"}

        response = await client.delete(f"/api/v1/results/{gb_id}")
        assert response.status_code == 200
        assert [r["person_ids"] for r in response.json()] == [[3]]

        response = await client.get(f"/api/v1/results/round/{round_id}")
        assert [r["ranking"] for r in response.json()] == [1]

    async def test_unknown_contest(self, client, round_ids):
        response = await client.post(
            "/api/v1/results", json=result_request("Nope2024", round_ids["TodayOpen"], 1, [1000] * 5)
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Contest with ID Nope2024 not found"

    async def test_duplicate_competitor(self, client, round_ids):
        request = result_request("TodayOpen", round_ids["TodayOpen"], 1, [1000] * 5)
        await client.post("/api/v1/results", json=request)

        response = await client.post("/api/v1/results", json=request)

        assert response.status_code == 409

    async def test_invalid_attempts(self, client, round_ids):
        response = await client.post(
            "/api/v1/results", json=result_request("TodayOpen", round_ids["TodayOpen"], 1, [1000] * 3)
        )

        assert response.status_code == 400
        assert "The number of attempts should be 5" in response.json()["detail"]

    async def test_only_dns_attempts(self, client, round_ids):
        response = await client.post(
            "/api/v1/results", json=result_request("TodayOpen", round_ids["TodayOpen"], 1, [-2] * 5)
        )

        assert response.status_code == 422

    async def test_old_record_refused(self, client, round_ids):
        response = await client.post(
            "/api/v1/results", json=result_request("OldOpen2019", round_ids["OldOpen2019"], 1, [1000] * 5)
        )

        assert response.status_code == 403

    async def test_unknown_round(self, client):
        response = await client.get("/api/v1/results/round/999")

        assert response.status_code == 404

    async def test_video_based_events(self, client):
        response = await client.get("/api/v1/results/video-based/events")

        assert response.status_code == 200
        assert [e["event_id"] for e in response.json()] == ["333fm"]
        assert response.json()[0]["format"] == "number"

    async def test_video_based_result(self, client):
        request = {
            "event_id": "333fm",
            "date": "2024-02-10",
            "person_ids": [5],
            "attempts": [30, 31, 32],
            "video_link": "https://example.com/video",
        }

        response = await client.post("/api/v1/results/video-based", json=request)
        assert response.status_code == 201
        pending = response.json()
        assert pending["approved"] is False
        assert pending["regional_single_record"] is None

        response = await client.patch(f"/api/v1/results/video-based/{pending['id']}", json={
            "date": "2024-02-10",
            "attempts": [30, 31, 32],
            "video_link": "https://example.com/video",
            "approve": True,
        })
        assert response.status_code == 200
        assert response.json()["regional_single_record"] == "WR"

        response = await client.patch(f"/api/v1/results/video-based/{pending['id']}", json={
            "date": "2024-02-10",
            "attempts": [30, 31, 32],
        })
        assert response.status_code == 409


class TestRecordRoutes:
    """Tests for /api/v1/records."""

    async def test_records_and_wr_pair(self, client, round_ids):
        round_id = round_ids["TodayOpen"]
        await client.post("/api/v1/results", json=result_request("TodayOpen", round_id, 1, [1000] * 5))
        await client.post("/api/v1/results", json=result_request("TodayOpen", round_id, 5, [1100] * 5))

        response = await client.get("/api/v1/records/competitions", params={"region": "NORTH_AMERICA"})
        assert response.status_code == 200
        assert [r["regional_single_record"] for r in response.json()] == ["NAR"]

        response = await client.get("/api/v1/records/competitions")
        assert [r["person_ids"] for r in response.json()] == [[1]]

        response = await client.get("/api/v1/records/wr-pair/competitions/333")
        assert response.json() == {"event_id": "333", "best": 1000, "average": 1000}

    async def test_unknown_category(self, client):
        response = await client.get("/api/v1/records/olympics")

        assert response.status_code == 422

    async def test_wr_pair_unknown_event(self, client):
        response = await client.get("/api/v1/records/wr-pair/competitions/444")

        assert response.status_code == 404
