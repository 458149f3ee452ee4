from __future__ import annotations

import logging
from typing import Optional

import app.adapters.quaver_api
import app.repositories.users
import app.state.services
from app.models.user import User
from app.utils.datetime import parse_optional_datetime


def make_safe_username(username: str) -> str:
    return username.strip().lower()


async def resolve_user(identifier: str) -> Optional[tuple[str, int]]:
    """Resolves a username or user id into a `(username, user_id)` pair.

    Local storage is checked first (by username, then by id); only on a miss
    is the Quaver API consulted, in which case the user is stored for next time.
    Returns `None` if neither knows the user.
    """

    safe_name = make_safe_username(identifier)

    user_id = await app.repositories.users.fetch_id_by_username(safe_name)
    if user_id is not None:
        return safe_name, user_id

    parsed_user_id = app.adapters.quaver_api.parse_user_id(safe_name)
    if parsed_user_id is not None:
        username = await app.repositories.users.fetch_username_by_id(parsed_user_id)
        if username is not None:
            return username, parsed_user_id

    api_user = await app.adapters.quaver_api.lookup_user(identifier.strip())
    if api_user is None:
        return None

    user = User(
        id=api_user["id"],
        username=make_safe_username(api_user["username"]),
        steam_id=api_user.get("steam_id"),
        time_registered=parse_optional_datetime(api_user.get("time_registered")),
        country=api_user.get("country") or "XX",
        avatar_url=api_user.get("avatar_url") or "",
        last_synced_at=None,
    )

    try:
        await app.repositories.users.create(user)
    except app.state.services.UNIQUE_VIOLATION_ERRORS:
        stored_username = await app.repositories.users.fetch_username_by_id(user.id)
        if stored_username is None:
            # the username is held by another stored id, so this user has no
            # row and later stores of it will fail their foreign keys
            logging.warning(
                "Resolved username is already stored under a different user id",
                extra={
                    "user_id": user.id,
                    "username": user.username,
                    "identifier": identifier,
                    "constraint": "users.username",
                },
            )
        else:
            # someone else stored this user first (or under an older username)
            logging.info(
                "User was already stored while resolving",
                extra={
                    "user_id": user.id,
                    "identifier": identifier,
                    "constraint": "users.id",
                },
            )
    else:
        logging.info(
            "Stored newly resolved user",
            extra={"user_id": user.id, "username": user.username},
        )

    return user.username, user.id
