from __future__ import annotations

import hmac
import logging

from fastapi import Path
from fastapi import Query
from fastapi import status
from fastapi.responses import ORJSONResponse

import app.usecases.scheduler
import app.usecases.sync
import config
from app.errors import CooldownActive
from app.errors import SyncError
from app.errors import UserNotFound


async def update_user(user: str = Path(...)):
    try:
        sync_result = await app.usecases.sync.synchronize(user)
    except CooldownActive as exc:
        return ORJSONResponse(
            content={
                "message": str(exc),
                "seconds_remaining": exc.seconds_remaining,
            },
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )
    except UserNotFound:
        return ORJSONResponse(
            content={"message": "User not found"},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except SyncError:
        logging.exception(
            "Failed to update user",
            extra={"identifier": user},
        )
        return ORJSONResponse(
            content={"message": "Failed to update user"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if sync_result is None:
        return ORJSONResponse(
            content={"message": "User not found"},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return ORJSONResponse(sync_result.to_dict())


def _is_valid_token(token: str) -> bool:
    if not config.UPDATE_TOKEN:
        return False

    return hmac.compare_digest(token.encode(), config.UPDATE_TOKEN.encode())


async def update_oldest(token: str = Query("")):
    if not _is_valid_token(token):
        return ORJSONResponse(
            content={"message": "Invalid token"},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        user_id = await app.usecases.scheduler.sync_least_recently_updated()
    except UserNotFound as exc:
        return ORJSONResponse(
            content={"message": f"User id {exc.user_id} no longer exists"},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except SyncError:
        logging.exception("Failed to update least recently updated user")
        return ORJSONResponse(
            content={"message": "Failed to update user"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if user_id is None:
        return ORJSONResponse(
            content={"message": "No users to update"},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return ORJSONResponse(f"Updated user id {user_id}")
