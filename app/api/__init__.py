from __future__ import annotations

from fastapi import APIRouter
from fastapi import Response
from fastapi.responses import ORJSONResponse

import app.state.services
from . import updates
from . import users

router = APIRouter(default_response_class=Response)


@router.get("/_health")
async def healthcheck():
    await app.state.services.database.execute("SELECT 1")
    return ORJSONResponse({"status": "ok"})


router.add_api_route("/api/update/{user}", updates.update_user, methods=["POST"])
router.add_api_route("/api/update_oldest", updates.update_oldest, methods=["POST"])

router.add_api_route("/api/user/{user}/{mode}/scores", users.get_scores)
router.add_api_route(
    "/api/user/{user}/{mode}/stats_history",
    users.get_stats_history,
)
