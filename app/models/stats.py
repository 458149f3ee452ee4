from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import fields
from datetime import datetime
from typing import Any

from app.constants.mode import Mode
from app.utils.datetime import parse_datetime


@dataclass
class StatsUpdate:
    """A single point in a user's stats history for one mode. Never mutated
    once stored."""

    id: int
    user_id: int
    recorded_at: datetime
    mode: Mode

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

    global_rank: int
    country_rank: int
    multiplayer_win_rank: int

    def to_dict(self) -> dict[str, Any]:
        data = {field.name: getattr(self, field.name) for field in fields(self)}
        data["mode"] = self.mode.value
        return data

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> StatsUpdate:
        values = {field.name: mapping[field.name] for field in fields(cls)}
        values["recorded_at"] = parse_datetime(values["recorded_at"])
        values["mode"] = Mode(values["mode"])
        return cls(**values)
