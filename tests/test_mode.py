from __future__ import annotations

import pytest

from app.constants.mode import Mode
from app.constants.ranked_status import RankedStatus


@pytest.mark.parametrize("value", ["1", "4", "4k", "4K", "k4", " K4 "])
def test_from_string_keys_4(value):
    assert Mode.from_string(value) is Mode.KEYS_4


@pytest.mark.parametrize("value", ["2", "7", "7k", "7K", "k7"])
def test_from_string_keys_7(value):
    assert Mode.from_string(value) is Mode.KEYS_7


@pytest.mark.parametrize("value", ["", "0", "3", "5k", "osu", "keys4"])
def test_from_string_rejects_unknown_modes(value):
    assert Mode.from_string(value) is None


def test_api_key():
    assert Mode.KEYS_4.api_key == "keys4"
    assert Mode.KEYS_7.api_key == "keys7"


def test_ranked_status_defaults_to_unranked():
    assert RankedStatus.from_quaver_api(2) is RankedStatus.RANKED
    assert RankedStatus.from_quaver_api(42) is RankedStatus.UNRANKED
