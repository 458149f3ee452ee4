from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any
from typing import Optional

import app.state.services
from app.constants.mode import Mode
from app.models.stats import StatsUpdate
from app.utils.datetime import parse_optional_datetime

STATS_COLUMNS = (
    "user_id",
    "recorded_at",
    "mode",
    "total_score",
    "ranked_score",
    "overall_accuracy",
    "overall_performance_rating",
    "play_count",
    "fail_count",
    "max_combo",
    "replays_watched",
    "total_marv",
    "total_perf",
    "total_great",
    "total_good",
    "total_okay",
    "total_miss",
    "total_pauses",
    "multiplayer_wins",
    "multiplayer_losses",
    "multiplayer_ties",
    "global_rank",
    "country_rank",
    "multiplayer_win_rank",
)

_INSERT_QUERY = "INSERT INTO stats_updates ({columns}) VALUES ({params}) RETURNING id".format(
    columns=", ".join(STATS_COLUMNS),
    params=", ".join(f":{column}" for column in STATS_COLUMNS),
)


async def create(values: Mapping[str, Any]) -> StatsUpdate:
    """Appends a stats snapshot and returns it with its generated id."""

    params = {column: values[column] for column in STATS_COLUMNS}
    params["mode"] = Mode(params["mode"]).value

    stats_update_id = await app.state.services.database.fetch_val(
        _INSERT_QUERY,
        params,
    )

    return StatsUpdate.from_mapping({"id": stats_update_id, **params})


async def fetch_latest_recorded_at(user_id: int) -> Optional[datetime]:
    recorded_at = await app.state.services.database.fetch_val(
        """
        SELECT recorded_at FROM stats_updates
        WHERE user_id = :user_id
        ORDER BY recorded_at DESC
        LIMIT 1
        """,
        {"user_id": user_id},
    )

    return parse_optional_datetime(recorded_at)


async def fetch_for_user(user_id: int, mode: Mode) -> list[StatsUpdate]:
    db_stats_updates = await app.state.services.database.fetch_all(
        """
        SELECT * FROM stats_updates
        WHERE user_id = :user_id
        AND mode = :mode
        ORDER BY recorded_at ASC, id ASC
        """,
        {"user_id": user_id, "mode": mode.value},
    )

    return [StatsUpdate.from_mapping(db_stats) for db_stats in db_stats_updates]
