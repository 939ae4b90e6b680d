from __future__ import annotations

import pytest

from comanda.parsing import parse_int


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (3, 3),
        ("3", 3),
        (" 12 pax", 12),
        ("-4", -4),
        (4.9, 4),
        ("", 0),
        (None, 0),
        ("abc", 0),
        (float("nan"), 0),
        (True, 0),
        (False, 0),
    ],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected
