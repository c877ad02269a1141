import random
import re

import pytest

from spinwheel.core.colors import (
    FALLBACK_COLOR,
    ColorStrategy,
    hsl_to_hex,
    parse_color,
    random_color,
)


@pytest.mark.parametrize("hsl, expected", [
    ((0, 100, 50), "#FF0000"),
    ((120, 100, 50), "#00FF00"),
    ((240, 100, 50), "#0000FF"),
    ((0, 0, 100), "#FFFFFF"),
    ((0, 0, 0), "#000000"),
    ((360, 100, 50), "#FF0000"),
])
def test_hsl_to_hex(hsl, expected):
    assert hsl_to_hex(*hsl) == expected


@pytest.mark.parametrize("value, expected", [
    ("#FF0000", (255, 0, 0)),
    ("#00ff7f", (0, 255, 127)),
    ("#abc", (170, 187, 204)),
    ("  #000000 ", (0, 0, 0)),
    ("hsl(240, 100%, 50%)", (0, 0, 255)),
    ("HSL(0,100%,50%)", (255, 0, 0)),
    ("hsl(-120, 100.0%, 50%)", (0, 0, 255)),
])
def test_parse_color(value, expected):
    assert parse_color(value) == expected


@pytest.mark.parametrize("value", [
    "",
    None,
    "red",
    "#12",
    "#GGGGGG",
    "#-1-1-1",
    "#+1+1+1",
    "rgb(1, 2, 3)",
    "hsl(1.2.3, 50%, 50%)",
    "hsl(10, 5.0.0%, 50%)",
    "hsl(" + "9" * 400 + ", 50%, 50%)",
])
def test_parse_color_falls_back(value):
    assert parse_color(value) == FALLBACK_COLOR


@pytest.mark.parametrize("strategy", list(ColorStrategy))
def test_random_color_is_hex(strategy):
    rng = random.Random(17)

    for _ in range(20):
        assert re.match(r"^#[0-9A-F]{6}$", random_color(strategy, rng))


def test_random_color_is_seeded():
    assert random_color(rng=random.Random(5)) == random_color(rng=random.Random(5))
