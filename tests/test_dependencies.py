from __future__ import annotations

import pytest

from core.dependencies import MAX_ID, parse_id


@pytest.mark.parametrize("raw", ["1", " 42 ", str(MAX_ID)])
def test_parse_id_accepts_positive_ascii_integers(raw):
    assert parse_id(raw) == int(raw)


@pytest.mark.parametrize("raw", [None, "", "0", "-3", "+3", "1.0", "abc", "²", "٣", "１", str(MAX_ID + 1)])
def test_parse_id_rejects_everything_else(raw):
    assert parse_id(raw) is None
