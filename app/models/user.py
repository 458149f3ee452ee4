from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from typing import Optional

from app.utils.datetime import parse_optional_datetime


@dataclass
class User:
    id: int
    username: str
    steam_id: Optional[str]
    time_registered: Optional[datetime]
    country: str
    avatar_url: str
    last_synced_at: Optional[datetime]

    def __repr__(self) -> str:
        return f"<{self.username} ({self.id})>"

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> User:
        return cls(
            id=mapping["id"],
            username=mapping["username"],
            steam_id=mapping["steam_id"],
            time_registered=parse_optional_datetime(mapping["time_registered"]),
            country=mapping["country"],
            avatar_url=mapping["avatar_url"],
            last_synced_at=parse_optional_datetime(mapping["last_synced_at"]),
        )
