from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest

from app.init_api import asgi_app
from tests.factories import AMEO_ID


@pytest.fixture
async def client(database, http_client, clock) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=asgi_app),
        base_url="http://quavertrack.test",
    ) as client:
        yield client


async def test_healthcheck(client):
    response = await client.get("/_health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_update_user(client, ameo):
    response = await client.post("/api/update/ameo")

    assert response.status_code == 200
    body = response.json()
    assert body["stats_4k"]["play_count"] == 293
    assert body["stats_7k"]["mode"] == 2
    assert set(body["maps"]) == {"501", "502", "601"}
    assert len(body["new_scores"]) == 5


async def test_update_user_during_cooldown(client, clock, ameo):
    assert (await client.post("/api/update/ameo")).status_code == 200

    clock.advance(3)
    response = await client.post("/api/update/ameo")

    assert response.status_code == 429
    assert response.json()["seconds_remaining"] == 7


async def test_update_unknown_user(client):
    response = await client.post("/api/update/ghost")

    assert response.status_code == 404


async def test_update_user_remote_failure(client, quaver_api, ameo):
    quaver_api.override(
        f"/v1/users/full/{AMEO_ID}/",
        httpx.Response(200, json={"status": 500, "error": "Internal server error"}),
    )

    response = await client.post("/api/update/ameo")

    assert response.status_code == 500


async def test_scores_are_ordered_by_performance_rating(client, ameo):
    await client.post("/api/update/ameo")

    response = await client.get("/api/user/ameo/4k/scores")

    assert response.status_code == 200
    body = response.json()
    assert [score["id"] for score in body["scores"]] == [1002, 1001, 1003]
    assert set(body["maps"]) == {"501", "502"}
    assert body["maps"]["501"]["title"] == "Song 501"


async def test_scores_invalid_mode(client, ameo):
    response = await client.get("/api/user/ameo/5k/scores")

    assert response.status_code == 400


async def test_scores_unknown_user(client):
    response = await client.get("/api/user/ghost/4k/scores")

    assert response.status_code == 404


async def test_stats_history(client, clock, ameo):
    await client.post("/api/update/ameo")
    clock.advance(60)
    await client.post("/api/update/ameo")

    response = await client.get(f"/api/user/{AMEO_ID}/k7/stats_history")

    assert response.status_code == 200
    history = response.json()
    assert len(history) == 2
    assert all(stats_update["mode"] == 2 for stats_update in history)
    assert history[0]["recorded_at"] < history[1]["recorded_at"]


async def test_update_oldest_requires_token(client, ameo):
    response = await client.post("/api/update_oldest", params={"token": "wrong"})

    assert response.status_code == 401


async def test_update_oldest(client, ameo):
    await client.get("/api/user/ameo/4/scores")

    response = await client.post(
        "/api/update_oldest",
        params={"token": "secret-token"},
    )

    assert response.status_code == 200
    assert response.json() == f"Updated user id {AMEO_ID}"


async def test_update_oldest_without_users(client):
    response = await client.post(
        "/api/update_oldest",
        params={"token": "secret-token"},
    )

    assert response.status_code == 404
