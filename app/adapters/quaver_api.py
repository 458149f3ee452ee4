from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from typing import Literal
from typing import Optional
from typing import TypedDict
from urllib.parse import quote

import httpx

import app.state.services
from app.constants.mode import Mode
from app.errors import RemoteReportedError
from app.errors import RemoteTransportError

ScoreKind = Literal["best", "recent"]


class QuaverUser(TypedDict):
    id: int
    steam_id: Optional[str]
    username: str
    time_registered: Optional[str]
    country: str
    avatar_url: str


class QuaverMap(TypedDict):
    id: int
    mapset_id: int
    md5: str
    artist: str
    title: str
    difficulty_name: str
    creator_id: int
    creator_username: str
    ranked_status: int


class QuaverScore(TypedDict):
    id: int
    time: str
    mode: int
    mods: int
    mods_string: str
    performance_rating: float
    personal_best: bool
    is_donator_score: Optional[bool]
    total_score: int
    accuracy: float
    grade: str
    max_combo: int
    count_marv: int
    count_perf: int
    count_great: int
    count_good: int
    count_okay: int
    count_miss: int
    scroll_speed: int
    ratio: float
    map: QuaverMap


class QuaverStats(TypedDict):
    user_id: int
    total_score: int
    ranked_score: int
    overall_accuracy: float
    overall_performance_rating: float
    play_count: int
    fail_count: int
    max_combo: int
    replays_watched: int
    total_marv: int
    total_perf: int
    total_great: int
    total_good: int
    total_okay: int
    total_miss: int
    total_pauses: int
    multiplayer_wins: int
    multiplayer_losses: int
    multiplayer_ties: int


class QuaverModeStats(TypedDict):
    globalRank: int
    countryRank: int
    multiplayerWinRank: int
    stats: QuaverStats


class QuaverFullUser(TypedDict):
    info: QuaverUser
    keys4: QuaverModeStats
    keys7: QuaverModeStats


@dataclass
class ErrorEnvelope:
    status: int
    error: str


def decode_envelope(response: httpx.Response) -> dict[str, Any] | ErrorEnvelope:
    """Decodes a Quaver API body into either its payload or its error envelope.

    Quaver reports most errors in-band as `{"status": ..., "error": ...}`,
    regardless of the HTTP status code. A body that is not a JSON object at all
    is a transport failure, never an embedded error.
    """

    try:
        data = response.json()
    except ValueError as exc:
        raise RemoteTransportError(
            f"Undecodable response from {response.url} "
            f"(http status {response.status_code})",
        ) from exc

    if not isinstance(data, dict):
        raise RemoteTransportError(
            f"Unexpected response shape from {response.url}",
        )

    if "error" in data:
        status = data.get("status")
        if not isinstance(status, int):
            raise RemoteTransportError(
                f"Error envelope without a status from {response.url}",
            )

        return ErrorEnvelope(status=status, error=str(data["error"]))

    return data


def unwrap(envelope: dict[str, Any] | ErrorEnvelope) -> Optional[dict[str, Any]]:
    """Maps a decoded envelope to its payload, `None` for a 404, or raises."""

    if isinstance(envelope, ErrorEnvelope):
        if envelope.status == 404:
            return None

        logging.error(
            "Quaver API returned an error envelope",
            extra={"status": envelope.status, "error": envelope.error},
        )
        raise RemoteReportedError(envelope.status, envelope.error)

    status = envelope.get("status")
    if not isinstance(status, int):
        raise RemoteTransportError("Quaver API payload is missing its status")

    if status != 200:
        logging.error(
            "Quaver API returned a bad status in its payload",
            extra={"status": status},
        )
        raise RemoteReportedError(status, "Unexpected status in response payload")

    return envelope


def _extract(payload: dict[str, Any], key: str, path: str) -> Any:
    try:
        return payload[key]
    except KeyError as exc:
        raise RemoteTransportError(
            f"Quaver API response for {path} is missing {key!r}",
        ) from exc


def _extract_list(payload: dict[str, Any], key: str, path: str) -> list[Any]:
    value = _extract(payload, key, path)
    if not isinstance(value, list):
        raise RemoteTransportError(
            f"Quaver API response for {path} has a non-list {key!r}",
        )

    return value


async def _get(
    path: str,
    params: Optional[dict[str, Any]] = None,
) -> Optional[dict[str, Any]]:
    logging.info(
        "Fetching from the Quaver API",
        extra={"path": path, "params": params},
    )

    try:
        response = await app.state.services.http_client.get(path, params=params)
    except httpx.HTTPError as exc:
        raise RemoteTransportError(f"Failed to reach the Quaver API at {path}") from exc

    return unwrap(decode_envelope(response))


async def get_user_stats(user_id: int) -> Optional[QuaverFullUser]:
    path = f"/v1/users/full/{user_id}/"

    payload = await _get(path)
    if payload is None:
        return None

    full_user = _extract(payload, "user", path)
    if not isinstance(full_user, dict):
        raise RemoteTransportError(
            f"Quaver API response for {path} has a non-object 'user'",
        )

    return full_user


async def get_user_scores(
    user_id: int,
    mode: Mode,
    kind: ScoreKind,
) -> Optional[list[QuaverScore]]:
    path = f"/v1/users/scores/{kind}"

    payload = await _get(path, params={"id": user_id, "mode": mode.value})
    if payload is None:
        return None

    return _extract_list(payload, "scores", path)


async def _get_user_by_id(user_id: int) -> Optional[QuaverUser]:
    path = "/v1/users"

    payload = await _get(path, params={"id": user_id})
    if payload is None:
        return None

    users: list[QuaverUser] = _extract_list(payload, "users", path)
    if not users:
        return None

    return users[0]


def parse_user_id(identifier: str) -> Optional[int]:
    """The identifier as a Quaver user id, or `None` if it is not a number."""

    try:
        return int(identifier)
    except ValueError:
        return None


async def lookup_user(identifier: str) -> Optional[QuaverUser]:
    """Looks a user up by id (if the identifier is numeric) and then by name.

    A name search only yields partial profiles, so the first hit is re-fetched
    by id to get the full record.
    """

    user_id = parse_user_id(identifier)
    if user_id is not None:
        if user := await _get_user_by_id(user_id):
            return user

    path = f"/v1/users/search/{quote(identifier, safe='')}"

    payload = await _get(path)
    if payload is None:
        return None

    search_results: list[dict[str, Any]] = _extract_list(payload, "users", path)
    if not search_results:
        return None

    first_hit = search_results[0]
    if not isinstance(first_hit, dict):
        raise RemoteTransportError(f"Unexpected search result shape from {path}")

    return await _get_user_by_id(_extract(first_hit, "id", path))
