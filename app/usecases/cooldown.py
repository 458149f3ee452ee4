from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

import app.repositories.stats_updates
import app.utils.datetime
import config


@dataclass
class Allowed:
    pass


@dataclass
class Blocked:
    seconds_remaining: int


CooldownResult = Union[Allowed, Blocked]


async def check_cooldown(user_id: int) -> CooldownResult:
    """Decides whether a user may be synchronized again yet.

    Measured from the most recent stats snapshot of either mode. A user that
    has never been synchronized is always allowed.
    """

    last_recorded_at = await app.repositories.stats_updates.fetch_latest_recorded_at(
        user_id,
    )
    if last_recorded_at is None:
        return Allowed()

    elapsed = (app.utils.datetime.utcnow() - last_recorded_at).total_seconds()
    if elapsed >= config.UPDATE_COOLDOWN_SECONDS:
        return Allowed()

    return Blocked(
        seconds_remaining=math.floor(config.UPDATE_COOLDOWN_SECONDS - elapsed),
    )
