from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import app.repositories.maps
import app.repositories.scores
import app.repositories.stats_updates
import app.repositories.users
import app.state.services
import app.utils.datetime
from app.adapters.quaver_api import QuaverModeStats
from app.adapters.quaver_api import QuaverScore
from app.constants.mode import Mode
from app.constants.ranked_status import RankedStatus
from app.errors import RemoteTransportError
from app.errors import StoreError
from app.models.map import Map
from app.models.score import Score
from app.models.stats import StatsUpdate
from app.usecases.fetching import FetchedBundle
from app.utils.datetime import parse_datetime


@dataclass
class SyncResult:
    stats_4k: StatsUpdate
    stats_7k: StatsUpdate
    maps: dict[int, Map]
    new_scores: list[Score]

    def to_dict(self) -> dict[str, Any]:
        return {
            "stats_4k": self.stats_4k.to_dict(),
            "stats_7k": self.stats_7k.to_dict(),
            # json object keys have to be strings
            "maps": {
                str(map_id): beatmap.to_dict() for map_id, beatmap in self.maps.items()
            },
            "new_scores": [score.to_dict() for score in self.new_scores],
        }


def _split_score(user_id: int, api_score: QuaverScore) -> tuple[Map, Score]:
    api_map = api_score["map"]

    beatmap = Map(
        id=api_map["id"],
        mapset_id=api_map["mapset_id"],
        md5=api_map["md5"],
        artist=api_map["artist"],
        title=api_map["title"],
        difficulty_name=api_map["difficulty_name"],
        creator_id=api_map["creator_id"],
        creator_username=api_map["creator_username"],
        ranked_status=RankedStatus.from_quaver_api(api_map["ranked_status"]),
    )

    score = Score(
        id=api_score["id"],
        user_id=user_id,
        map_id=beatmap.id,
        time=parse_datetime(api_score["time"]),
        mode=Mode(api_score["mode"]),
        mods=api_score["mods"],
        mods_string=api_score["mods_string"],
        performance_rating=api_score["performance_rating"],
        personal_best=api_score["personal_best"],
        is_donator_score=api_score.get("is_donator_score"),
        total_score=api_score["total_score"],
        accuracy=api_score["accuracy"],
        grade=api_score["grade"],
        max_combo=api_score["max_combo"],
        count_marv=api_score["count_marv"],
        count_perf=api_score["count_perf"],
        count_great=api_score["count_great"],
        count_good=api_score["count_good"],
        count_okay=api_score["count_okay"],
        count_miss=api_score["count_miss"],
        scroll_speed=api_score["scroll_speed"],
        ratio=api_score["ratio"],
    )

    return beatmap, score


def _stats_values(
    user_id: int,
    mode: Mode,
    mode_stats: QuaverModeStats,
    recorded_at: datetime,
) -> dict[str, Any]:
    stats = mode_stats["stats"]

    return {
        "user_id": user_id,
        "recorded_at": recorded_at,
        "mode": mode,
        "total_score": stats["total_score"],
        "ranked_score": stats["ranked_score"],
        "overall_accuracy": stats["overall_accuracy"],
        "overall_performance_rating": stats["overall_performance_rating"],
        "play_count": stats["play_count"],
        "fail_count": stats["fail_count"],
        "max_combo": stats["max_combo"],
        "replays_watched": stats["replays_watched"],
        "total_marv": stats["total_marv"],
        "total_perf": stats["total_perf"],
        "total_great": stats["total_great"],
        "total_good": stats["total_good"],
        "total_okay": stats["total_okay"],
        "total_miss": stats["total_miss"],
        "total_pauses": stats["total_pauses"],
        "multiplayer_wins": stats["multiplayer_wins"],
        "multiplayer_losses": stats["multiplayer_losses"],
        "multiplayer_ties": stats["multiplayer_ties"],
        "global_rank": mode_stats["globalRank"],
        "country_rank": mode_stats["countryRank"],
        "multiplayer_win_rank": mode_stats["multiplayerWinRank"],
    }


async def store_bundle(user_id: int, bundle: FetchedBundle) -> SyncResult:
    """Merges a fetched bundle into storage in a single transaction.

    Maps and scores that are already stored are left untouched, while two new
    stats snapshots (one per mode) are always appended. Either everything is
    written or nothing is.
    """

    recorded_at = app.utils.datetime.utcnow()

    maps: dict[int, Map] = {}
    scores: dict[int, Score] = {}
    try:
        for api_score in bundle.all_scores:
            beatmap, score = _split_score(user_id, api_score)
            maps.setdefault(beatmap.id, beatmap)
            # a score can show up in both the best and recent lists
            scores.setdefault(score.id, score)

        stats_4k_values = _stats_values(
            user_id,
            Mode.KEYS_4,
            bundle.stats[Mode.KEYS_4.api_key],
            recorded_at,
        )
        stats_7k_values = _stats_values(
            user_id,
            Mode.KEYS_7,
            bundle.stats[Mode.KEYS_7.api_key],
            recorded_at,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise RemoteTransportError(
            f"Malformed Quaver API data for user {user_id}",
        ) from exc

    try:
        async with app.state.services.database.transaction():
            existing_score_ids = await app.repositories.scores.fetch_existing_ids(
                scores.keys(),
            )

            await app.repositories.maps.insert_many(maps.values())
            await app.repositories.scores.insert_many(scores.values())

            stats_4k = await app.repositories.stats_updates.create(stats_4k_values)
            stats_7k = await app.repositories.stats_updates.create(stats_7k_values)

            await app.repositories.users.update_last_synced_at(user_id, recorded_at)
    except app.state.services.STORAGE_ERRORS as exc:
        raise StoreError(f"Failed to store synchronization of user {user_id}") from exc

    new_scores = [
        score for score_id, score in scores.items() if score_id not in existing_score_ids
    ]

    for score in new_scores:
        logging.debug(
            "Stored new score",
            extra={
                "user_id": user_id,
                "score_id": score.id,
                "song_name": maps[score.map_id].song_name,
            },
        )

    logging.info(
        "Stored user synchronization",
        extra={
            "user_id": user_id,
            "maps": len(maps),
            "scores": len(scores),
            "new_scores": len(new_scores),
        },
    )

    return SyncResult(
        stats_4k=stats_4k,
        stats_7k=stats_7k,
        maps=maps,
        new_scores=new_scores,
    )
