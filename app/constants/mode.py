from __future__ import annotations

from enum import IntEnum
from functools import cached_property
from typing import Literal
from typing import Optional

mode_str = (
    "",
    "4K",
    "7K",
)

_MODE_ALIASES = {
    "1": 1,
    "4": 1,
    "4k": 1,
    "k4": 1,
    "2": 2,
    "7": 2,
    "7k": 2,
    "k7": 2,
}


class Mode(IntEnum):
    KEYS_4 = 1
    KEYS_7 = 2

    def __repr__(self) -> str:
        return mode_str[self.value]

    @cached_property
    def api_key(self) -> Literal["keys4", "keys7"]:
        """The key this mode's stats live under in the Quaver full user payload."""

        if self is Mode.KEYS_7:
            return "keys7"

        return "keys4"

    @classmethod
    def from_string(cls, value: str) -> Optional[Mode]:
        mode_id = _MODE_ALIASES.get(value.strip().lower())
        if mode_id is None:
            return None

        return cls(mode_id)
