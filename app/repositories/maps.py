from __future__ import annotations

from collections.abc import Iterable

import app.state.services
from app.constants.mode import Mode
from app.models.map import Map


async def insert_many(maps: Iterable[Map]) -> None:
    """Stores maps, silently skipping any id that is already present."""

    values = [
        {
            "id": beatmap.id,
            "mapset_id": beatmap.mapset_id,
            "md5": beatmap.md5,
            "artist": beatmap.artist,
            "title": beatmap.title,
            "difficulty_name": beatmap.difficulty_name,
            "creator_id": beatmap.creator_id,
            "creator_username": beatmap.creator_username,
            "ranked_status": beatmap.ranked_status.value,
        }
        for beatmap in maps
    ]
    if not values:
        return

    await app.state.services.database.execute_many(
        """
        INSERT INTO maps (
            id, mapset_id, md5, artist, title, difficulty_name, creator_id,
            creator_username, ranked_status
        ) VALUES (
            :id, :mapset_id, :md5, :artist, :title, :difficulty_name, :creator_id,
            :creator_username, :ranked_status
        )
        ON CONFLICT (id) DO NOTHING
        """,
        values,
    )


async def fetch_played_by_user(user_id: int, mode: Mode) -> list[Map]:
    db_maps = await app.state.services.database.fetch_all(
        """
        SELECT DISTINCT m.* FROM maps m
        JOIN scores s ON s.map_id = m.id
        WHERE s.user_id = :user_id
        AND s.mode = :mode
        """,
        {"user_id": user_id, "mode": mode.value},
    )

    return [Map.from_mapping(db_map) for db_map in db_maps]
