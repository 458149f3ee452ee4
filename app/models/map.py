from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.constants.ranked_status import RankedStatus


@dataclass
class Map:
    id: int
    mapset_id: int
    md5: str

    artist: str
    title: str
    difficulty_name: str

    creator_id: int
    creator_username: str

    ranked_status: RankedStatus

    @property
    def song_name(self) -> str:
        return f"{self.artist} - {self.title} [{self.difficulty_name}]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mapset_id": self.mapset_id,
            "md5": self.md5,
            "artist": self.artist,
            "title": self.title,
            "difficulty_name": self.difficulty_name,
            "creator_id": self.creator_id,
            "creator_username": self.creator_username,
            "ranked_status": self.ranked_status.value,
        }

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Map:
        return cls(
            id=mapping["id"],
            mapset_id=mapping["mapset_id"],
            md5=mapping["md5"],
            artist=mapping["artist"],
            title=mapping["title"],
            difficulty_name=mapping["difficulty_name"],
            creator_id=mapping["creator_id"],
            creator_username=mapping["creator_username"],
            ranked_status=RankedStatus.from_quaver_api(mapping["ranked_status"]),
        )
