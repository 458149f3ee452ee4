from __future__ import annotations

import functools
from enum import IntEnum


class RankedStatus(IntEnum):
    NOT_SUBMITTED = 0
    UNRANKED = 1
    RANKED = 2
    DAN_COURSE = 3

    @classmethod
    @functools.cache
    def from_quaver_api(cls, api_status: int) -> RankedStatus:
        return {
            0: cls.NOT_SUBMITTED,
            1: cls.UNRANKED,
            2: cls.RANKED,
            3: cls.DAN_COURSE,
        }.get(api_status, cls.UNRANKED)
