from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from typing import Optional

from app.constants.mode import Mode
from app.utils.datetime import parse_datetime


@dataclass
class Score:
    id: int
    user_id: int
    map_id: int

    time: datetime
    mode: Mode

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

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "map_id": self.map_id,
            "time": self.time,
            "mode": self.mode.value,
            "mods": self.mods,
            "mods_string": self.mods_string,
            "performance_rating": self.performance_rating,
            "personal_best": self.personal_best,
            "is_donator_score": self.is_donator_score,
            "total_score": self.total_score,
            "accuracy": self.accuracy,
            "grade": self.grade,
            "max_combo": self.max_combo,
            "count_marv": self.count_marv,
            "count_perf": self.count_perf,
            "count_great": self.count_great,
            "count_good": self.count_good,
            "count_okay": self.count_okay,
            "count_miss": self.count_miss,
            "scroll_speed": self.scroll_speed,
            "ratio": self.ratio,
        }

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Score:
        return cls(
            id=mapping["id"],
            user_id=mapping["user_id"],
            map_id=mapping["map_id"],
            time=parse_datetime(mapping["time"]),
            mode=Mode(mapping["mode"]),
            mods=mapping["mods"],
            mods_string=mapping["mods_string"],
            performance_rating=mapping["performance_rating"],
            personal_best=bool(mapping["personal_best"]),
            is_donator_score=(
                bool(mapping["is_donator_score"])
                if mapping["is_donator_score"] is not None
                else None
            ),
            total_score=mapping["total_score"],
            accuracy=mapping["accuracy"],
            grade=mapping["grade"],
            max_combo=mapping["max_combo"],
            count_marv=mapping["count_marv"],
            count_perf=mapping["count_perf"],
            count_great=mapping["count_great"],
            count_good=mapping["count_good"],
            count_okay=mapping["count_okay"],
            count_miss=mapping["count_miss"],
            scroll_speed=mapping["scroll_speed"],
            ratio=mapping["ratio"],
        )
