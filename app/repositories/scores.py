from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select

import app.state.services
from app.constants.mode import Mode
from app.models.score import Score
from app.state.schema import scores as scores_table


async def fetch_existing_ids(score_ids: Iterable[int]) -> set[int]:
    score_ids = list(set(score_ids))
    if not score_ids:
        return set()

    db_scores = await app.state.services.database.fetch_all(
        select(scores_table.c.id).where(scores_table.c.id.in_(score_ids)),
    )

    return {db_score["id"] for db_score in db_scores}


async def insert_many(scores: Iterable[Score]) -> None:
    """Stores scores, silently skipping any id that is already present.

    The maps referenced by the scores must already be stored.
    """

    values = [
        {
            "id": score.id,
            "user_id": score.user_id,
            "map_id": score.map_id,
            "time": score.time,
            "mode": score.mode.value,
            "mods": score.mods,
            "mods_string": score.mods_string,
            "performance_rating": score.performance_rating,
            "personal_best": score.personal_best,
            "is_donator_score": score.is_donator_score,
            "total_score": score.total_score,
            "accuracy": score.accuracy,
            "grade": score.grade,
            "max_combo": score.max_combo,
            "count_marv": score.count_marv,
            "count_perf": score.count_perf,
            "count_great": score.count_great,
            "count_good": score.count_good,
            "count_okay": score.count_okay,
            "count_miss": score.count_miss,
            "scroll_speed": score.scroll_speed,
            "ratio": score.ratio,
        }
        for score in scores
    ]
    if not values:
        return

    await app.state.services.database.execute_many(
        """
        INSERT INTO scores (
            id, user_id, map_id, time, mode, mods, mods_string,
            performance_rating, personal_best, is_donator_score, total_score,
            accuracy, grade, max_combo, count_marv, count_perf, count_great,
            count_good, count_okay, count_miss, scroll_speed, ratio
        ) VALUES (
            :id, :user_id, :map_id, :time, :mode, :mods, :mods_string,
            :performance_rating, :personal_best, :is_donator_score, :total_score,
            :accuracy, :grade, :max_combo, :count_marv, :count_perf, :count_great,
            :count_good, :count_okay, :count_miss, :scroll_speed, :ratio
        )
        ON CONFLICT (id) DO NOTHING
        """,
        values,
    )


async def fetch_for_user(user_id: int, mode: Mode) -> list[Score]:
    db_scores = await app.state.services.database.fetch_all(
        """
        SELECT * FROM scores
        WHERE user_id = :user_id
        AND mode = :mode
        ORDER BY performance_rating DESC
        """,
        {"user_id": user_id, "mode": mode.value},
    )

    return [Score.from_mapping(db_score) for db_score in db_scores]
