from __future__ import annotations

import os

os.environ["DB_DSN"] = "sqlite:///quavertrack-tests.db"
os.environ["QUAVER_API_URL"] = "https://api.quavergame.test"
os.environ["UPDATE_COOLDOWN_SECONDS"] = "10"
os.environ["UPDATE_TOKEN"] = "secret-token"

from collections.abc import AsyncIterator
from collections.abc import Callable
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from typing import Any
from typing import Optional

import httpx
import pytest
import sqlalchemy

import app.state.services
import app.utils.datetime
import config
from app.state.schema import metadata
from tests.factories import AMEO_ID
from tests.factories import make_full_user
from tests.factories import make_score

NOT_FOUND = {"status": 404, "error": "Not found"}


class FakeQuaverApi:
    """An in-memory stand-in for the Quaver v1 API, served over
    `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.full_users: dict[int, dict[str, Any]] = {}
        self.scores: dict[tuple[int, int, str], list[dict[str, Any]]] = {}
        # (path, mode param) -> canned response
        self.overrides: dict[tuple[str, Optional[str]], httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add_user(self, full_user: dict[str, Any]) -> None:
        self.full_users[full_user["info"]["id"]] = full_user

    def set_scores(
        self,
        user_id: int,
        mode: int,
        kind: str,
        scores: list[dict[str, Any]],
    ) -> None:
        self.scores[(user_id, mode, kind)] = scores

    def override(
        self,
        path: str,
        response: httpx.Response,
        mode: Optional[int] = None,
    ) -> None:
        self.overrides[(path, str(mode) if mode is not None else None)] = response

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        path = request.url.path
        params = request.url.params

        override = self.overrides.get((path, params.get("mode")))
        if override is not None:
            return httpx.Response(
                override.status_code,
                headers=override.headers,
                content=override.content,
            )

        if path.startswith("/v1/users/full/"):
            user_id = int(path.split("/")[4])
            full_user = self.full_users.get(user_id)
            if full_user is None:
                return httpx.Response(404, json=NOT_FOUND)

            return httpx.Response(200, json={"status": 200, "user": full_user})

        if path.startswith("/v1/users/scores/"):
            kind = path.rsplit("/", 1)[1]
            user_id = int(params["id"])
            mode = int(params["mode"])
            if user_id not in self.full_users:
                return httpx.Response(404, json=NOT_FOUND)

            scores = self.scores.get((user_id, mode, kind), [])
            return httpx.Response(200, json={"status": 200, "scores": scores})

        if path.startswith("/v1/users/search/"):
            query = path.rsplit("/", 1)[1].lower()
            hits = [
                {"id": user_id, "username": full_user["info"]["username"]}
                for user_id, full_user in self.full_users.items()
                if query in full_user["info"]["username"].lower()
            ]
            return httpx.Response(200, json={"status": 200, "users": hits})

        if path == "/v1/users":
            full_user = self.full_users.get(int(params["id"]))
            if full_user is None:
                return httpx.Response(404, json=NOT_FOUND)

            return httpx.Response(
                200,
                json={"status": 200, "users": [full_user["info"]]},
            )

        return httpx.Response(404, json=NOT_FOUND)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
async def database(tmp_path, monkeypatch) -> AsyncIterator[app.state.services.Database]:
    dsn = f"sqlite:///{tmp_path / 'quavertrack.db'}"

    engine = sqlalchemy.create_engine(dsn)
    metadata.create_all(engine)
    engine.dispose()

    database = app.state.services.Database(dsn)
    await database.connect()
    monkeypatch.setattr(app.state.services, "database", database)

    yield database

    await database.disconnect()


@pytest.fixture
def quaver_api() -> FakeQuaverApi:
    return FakeQuaverApi()


@pytest.fixture
async def http_client(
    quaver_api: FakeQuaverApi,
    monkeypatch,
) -> AsyncIterator[httpx.AsyncClient]:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(quaver_api.handler),
        base_url=config.QUAVER_API_URL,
    )
    monkeypatch.setattr(app.state.services, "http_client", client, raising=False)

    yield client

    await client.aclose()


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake_clock = FakeClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))
    monkeypatch.setattr(app.utils.datetime, "utcnow", fake_clock)
    return fake_clock


@pytest.fixture
def ameo(quaver_api: FakeQuaverApi) -> dict[str, Any]:
    """Registers user 19250 ("ameo") with a few scores in both modes.

    Score 1001 shows up in both the 4K best and recent lists, and maps 501 and
    502 are each played by two scores.
    """

    full_user = make_full_user()
    quaver_api.add_user(full_user)

    quaver_api.set_scores(
        AMEO_ID,
        1,
        "best",
        [
            make_score(1001, 501, performance_rating=25.0),
            make_score(1002, 502, performance_rating=30.0),
        ],
    )
    quaver_api.set_scores(
        AMEO_ID,
        1,
        "recent",
        [
            make_score(1003, 501, performance_rating=5.0),
            make_score(1001, 501, performance_rating=25.0),
        ],
    )
    quaver_api.set_scores(
        AMEO_ID,
        2,
        "best",
        [make_score(2001, 601, mode=2, performance_rating=3.0)],
    )
    quaver_api.set_scores(
        AMEO_ID,
        2,
        "recent",
        [make_score(2002, 502, mode=2, performance_rating=1.0)],
    )

    return full_user


@pytest.fixture
def count_rows(database: app.state.services.Database) -> Callable[[str], Any]:
    async def count(table: str) -> int:
        return await database.fetch_val(f"SELECT COUNT(*) FROM {table}")

    return count
