from __future__ import annotations

from datetime import datetime
from typing import Optional

import app.state.services
from app.models.user import User


async def fetch_id_by_username(username: str) -> Optional[int]:
    return await app.state.services.database.fetch_val(
        "SELECT id FROM users WHERE username = :username",
        {"username": username},
    )


async def fetch_username_by_id(user_id: int) -> Optional[str]:
    return await app.state.services.database.fetch_val(
        "SELECT username FROM users WHERE id = :id",
        {"id": user_id},
    )


async def fetch_one(user_id: int) -> Optional[User]:
    db_user = await app.state.services.database.fetch_one(
        "SELECT * FROM users WHERE id = :id",
        {"id": user_id},
    )

    if not db_user:
        return None

    return User.from_mapping(db_user)


async def create(user: User) -> None:
    await app.state.services.database.execute(
        """
        INSERT INTO users (
            id, username, steam_id, time_registered, country, avatar_url,
            last_synced_at
        ) VALUES (
            :id, :username, :steam_id, :time_registered, :country, :avatar_url,
            :last_synced_at
        )
        """,
        {
            "id": user.id,
            "username": user.username,
            "steam_id": user.steam_id,
            "time_registered": user.time_registered,
            "country": user.country,
            "avatar_url": user.avatar_url,
            "last_synced_at": user.last_synced_at,
        },
    )


async def update_last_synced_at(user_id: int, synced_at: datetime) -> None:
    # never moves the timestamp backwards, even if two syncs race
    await app.state.services.database.execute(
        """
        UPDATE users
        SET last_synced_at = :synced_at
        WHERE id = :id
        AND (last_synced_at IS NULL OR last_synced_at < :synced_at)
        """,
        {"id": user_id, "synced_at": synced_at},
    )


async def fetch_least_recently_synced_id() -> Optional[int]:
    return await app.state.services.database.fetch_val(
        """
        SELECT id FROM users
        ORDER BY last_synced_at ASC NULLS FIRST, id ASC
        LIMIT 1
        """,
    )
