from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Optional

import app.repositories.maps
import app.repositories.scores
import app.repositories.stats_updates
import app.usecases.identity
from app.constants.mode import Mode
from app.models.map import Map
from app.models.score import Score
from app.models.stats import StatsUpdate


@dataclass
class ScoreHistory:
    maps: dict[int, Map]
    scores: list[Score]

    def to_dict(self) -> dict[str, Any]:
        return {
            "maps": {
                str(map_id): beatmap.to_dict() for map_id, beatmap in self.maps.items()
            },
            "scores": [score.to_dict() for score in self.scores],
        }


async def get_score_history(identifier: str, mode: Mode) -> Optional[ScoreHistory]:
    resolved = await app.usecases.identity.resolve_user(identifier)
    if resolved is None:
        return None

    _, user_id = resolved

    scores = await app.repositories.scores.fetch_for_user(user_id, mode)
    maps = await app.repositories.maps.fetch_played_by_user(user_id, mode)

    return ScoreHistory(
        maps={beatmap.id: beatmap for beatmap in maps},
        scores=scores,
    )


async def get_stats_history(
    identifier: str,
    mode: Mode,
) -> Optional[list[StatsUpdate]]:
    resolved = await app.usecases.identity.resolve_user(identifier)
    if resolved is None:
        return None

    _, user_id = resolved

    return await app.repositories.stats_updates.fetch_for_user(user_id, mode)
