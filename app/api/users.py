from __future__ import annotations

from fastapi import Path
from fastapi import status
from fastapi.responses import ORJSONResponse

import app.usecases.history
from app.constants.mode import Mode


def _invalid_mode(mode_arg: str) -> ORJSONResponse:
    return ORJSONResponse(
        content={"message": f"Invalid mode: {mode_arg!r}"},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def _user_not_found() -> ORJSONResponse:
    return ORJSONResponse(
        content={"message": "User not found"},
        status_code=status.HTTP_404_NOT_FOUND,
    )


async def get_scores(
    user: str = Path(...),
    mode: str = Path(...),
):
    parsed_mode = Mode.from_string(mode)
    if parsed_mode is None:
        return _invalid_mode(mode)

    score_history = await app.usecases.history.get_score_history(user, parsed_mode)
    if score_history is None:
        return _user_not_found()

    return ORJSONResponse(score_history.to_dict())


async def get_stats_history(
    user: str = Path(...),
    mode: str = Path(...),
):
    parsed_mode = Mode.from_string(mode)
    if parsed_mode is None:
        return _invalid_mode(mode)

    stats_history = await app.usecases.history.get_stats_history(user, parsed_mode)
    if stats_history is None:
        return _user_not_found()

    return ORJSONResponse([stats_update.to_dict() for stats_update in stats_history])
