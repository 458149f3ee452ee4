from __future__ import annotations

from datetime import datetime
from datetime import timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_datetime(value: datetime | str) -> datetime:
    """Normalises a timestamp from the Quaver API or a database row into an
    aware UTC datetime.

    Quaver sends ISO 8601 strings with a `Z` suffix, while some drivers hand
    back naive datetimes or plain strings for timestamp columns.
    """

    if isinstance(value, str):
        value = datetime.fromisoformat(value)

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)

    return value.astimezone(timezone.utc)


def parse_optional_datetime(value: datetime | str | None) -> Optional[datetime]:
    if value is None:
        return None

    return parse_datetime(value)
