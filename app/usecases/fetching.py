from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import app.adapters.quaver_api
from app.adapters.quaver_api import QuaverFullUser
from app.adapters.quaver_api import QuaverScore
from app.constants.mode import Mode
from app.errors import UserNotFound


@dataclass
class FetchedBundle:
    stats: QuaverFullUser
    keys4_recent: list[QuaverScore]
    keys4_best: list[QuaverScore]
    keys7_recent: list[QuaverScore]
    keys7_best: list[QuaverScore]

    @property
    def all_scores(self) -> list[QuaverScore]:
        return [
            *self.keys4_recent,
            *self.keys4_best,
            *self.keys7_recent,
            *self.keys7_best,
        ]


async def fetch_all(user_id: int) -> FetchedBundle:
    """Pulls everything a synchronization needs from the Quaver API at once.

    Every request is awaited before anything is raised. The first failure (in
    request order) then propagates as it is, and otherwise `UserNotFound` is
    raised if any of the five requests reports the user as missing.
    """

    results = await asyncio.gather(
        app.adapters.quaver_api.get_user_stats(user_id),
        app.adapters.quaver_api.get_user_scores(user_id, Mode.KEYS_4, "recent"),
        app.adapters.quaver_api.get_user_scores(user_id, Mode.KEYS_4, "best"),
        app.adapters.quaver_api.get_user_scores(user_id, Mode.KEYS_7, "recent"),
        app.adapters.quaver_api.get_user_scores(user_id, Mode.KEYS_7, "best"),
        return_exceptions=True,
    )

    for result in results:
        if isinstance(result, BaseException):
            raise result

    stats, keys4_recent, keys4_best, keys7_recent, keys7_best = results

    if (
        stats is None
        or keys4_recent is None
        or keys4_best is None
        or keys7_recent is None
        or keys7_best is None
    ):
        logging.warning(
            "Quaver API no longer knows a user",
            extra={"user_id": user_id},
        )
        raise UserNotFound(user_id)

    return FetchedBundle(
        stats=stats,
        keys4_recent=keys4_recent,
        keys4_best=keys4_best,
        keys7_recent=keys7_recent,
        keys7_best=keys7_best,
    )
