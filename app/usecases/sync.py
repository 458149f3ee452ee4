from __future__ import annotations

import logging
from typing import Optional

import app.repositories.users
import app.usecases.cooldown
import app.usecases.fetching
import app.usecases.identity
import app.usecases.storage
import app.utils.datetime
from app.errors import CooldownActive
from app.errors import UserNotFound
from app.usecases.cooldown import Blocked
from app.usecases.storage import SyncResult


async def synchronize_user_id(user_id: int) -> SyncResult:
    """Fetches and stores a user without checking the cooldown.

    A user the Quaver API no longer knows still has its sync timestamp moved
    forward, so it does not keep coming back to the front of the batch queue.
    """

    try:
        bundle = await app.usecases.fetching.fetch_all(user_id)
    except UserNotFound:
        await app.repositories.users.update_last_synced_at(
            user_id,
            app.utils.datetime.utcnow(),
        )
        raise

    return await app.usecases.storage.store_bundle(user_id, bundle)


async def synchronize(identifier: str) -> Optional[SyncResult]:
    """Resolves, rate limits and synchronizes a user.

    Returns `None` if the identifier matches no user, and raises
    `CooldownActive` without touching the Quaver API if the user was
    synchronized too recently.
    """

    resolved = await app.usecases.identity.resolve_user(identifier)
    if resolved is None:
        return None

    username, user_id = resolved

    cooldown = await app.usecases.cooldown.check_cooldown(user_id)
    if isinstance(cooldown, Blocked):
        logging.info(
            "Rejected synchronization during cooldown",
            extra={
                "user_id": user_id,
                "seconds_remaining": cooldown.seconds_remaining,
            },
        )
        raise CooldownActive(cooldown.seconds_remaining)

    logging.info(
        "Synchronizing user",
        extra={"user_id": user_id, "username": username},
    )
    return await synchronize_user_id(user_id)
