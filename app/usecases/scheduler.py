from __future__ import annotations

import logging
from typing import Optional

import app.repositories.users
import app.usecases.sync


async def pick_next() -> Optional[int]:
    """The user that has gone the longest without a synchronization.

    Users that were never synchronized come first; ties go to the lowest id.
    """

    return await app.repositories.users.fetch_least_recently_synced_id()


async def sync_least_recently_updated() -> Optional[int]:
    """Synchronizes the next user in line, bypassing the cooldown.

    Returns the id of the synchronized user, or `None` if there are no users
    yet. Failures propagate to the caller.
    """

    user_id = await pick_next()
    if user_id is None:
        logging.info("No users to synchronize yet")
        return None

    await app.usecases.sync.synchronize_user_id(user_id)

    logging.info(
        "Synchronized least recently updated user",
        extra={"user_id": user_id},
    )
    return user_id
