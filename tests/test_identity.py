from __future__ import annotations

import logging

import app.repositories.users
import app.usecases.identity
import app.usecases.sync
from app.models.user import User
from tests.factories import AMEO_ID
from tests.factories import make_full_user


async def test_unknown_user_is_looked_up_once_then_served_locally(
    database,
    http_client,
    quaver_api,
    ameo,
):
    assert await app.usecases.identity.resolve_user("ameo") == ("ameo", AMEO_ID)
    assert quaver_api.paths() == ["/v1/users/search/ameo", "/v1/users"]

    user = await app.repositories.users.fetch_one(AMEO_ID)
    assert user is not None
    assert user.username == "ameo"
    assert user.country == "US"
    assert user.last_synced_at is None

    # a differently cased identifier hits the stored row
    assert await app.usecases.identity.resolve_user(" AMEO ") == ("ameo", AMEO_ID)
    assert await app.usecases.identity.resolve_user(str(AMEO_ID)) == ("ameo", AMEO_ID)
    assert len(quaver_api.requests) == 2


async def test_remote_usernames_are_lower_cased(database, http_client, quaver_api):
    quaver_api.add_user(
        {
            "info": {
                "id": 7,
                "steam_id": None,
                "username": "MixedCase",
                "time_registered": None,
                "country": "DE",
                "avatar_url": "",
            },
        },
    )

    assert await app.usecases.identity.resolve_user("MixedCase") == ("mixedcase", 7)
    assert await app.repositories.users.fetch_id_by_username("mixedcase") == 7


async def test_unknown_everywhere(database, http_client, quaver_api):
    assert await app.usecases.identity.resolve_user("ghost") is None
    assert await app.repositories.users.fetch_id_by_username("ghost") is None


async def test_already_stored_id_is_not_an_error(database, http_client, ameo):
    # the user was renamed remotely since it was first stored
    await app.repositories.users.create(
        User(
            id=AMEO_ID,
            username="old-ameo",
            steam_id=None,
            time_registered=None,
            country="US",
            avatar_url="",
            last_synced_at=None,
        ),
    )

    assert await app.usecases.identity.resolve_user("ameo") == ("ameo", AMEO_ID)
    assert await app.repositories.users.fetch_username_by_id(AMEO_ID) == "old-ameo"


async def test_non_decimal_digits_are_searched_by_name(database, http_client, quaver_api):
    assert await app.usecases.identity.resolve_user("²") is None
    assert quaver_api.paths() == ["/v1/users/search/²"]


async def test_unknown_identifier_synchronizes_nothing(database, http_client, quaver_api):
    assert await app.usecases.sync.synchronize("²") is None


async def test_username_taken_by_another_id_is_logged(
    database,
    http_client,
    quaver_api,
    caplog,
):
    await app.repositories.users.create(
        User(
            id=5,
            username="taken",
            steam_id=None,
            time_registered=None,
            country="US",
            avatar_url="",
            last_synced_at=None,
        ),
    )
    quaver_api.add_user(make_full_user(7, "Taken"))

    with caplog.at_level(logging.WARNING):
        assert await app.usecases.identity.resolve_user("7") == ("taken", 7)

    assert await app.repositories.users.fetch_username_by_id(7) is None
    assert any(
        getattr(record, "constraint", None) == "users.username"
        for record in caplog.records
    )
