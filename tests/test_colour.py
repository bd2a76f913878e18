import io
from fractions import Fraction

import pytest

from argonrt.colour import ATTRIBUTES, BACKGROUND, FOREGROUND, colourise, supports_colour
from argonrt.errors import ArgonError


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("FORCE_COLOR", "NO_COLOR", "TERM"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_forced_colour_wraps_text(clean_env):
    clean_env.setenv("FORCE_COLOR", "1")
    code = int(FOREGROUND["red"])
    assert colourise(FOREGROUND["red"], "hi") == f"\x1b[{code}mhi\x1b[0m"


def test_no_colour_returns_plain_text(clean_env):
    clean_env.setenv("NO_COLOR", "1")
    assert colourise(ATTRIBUTES["bold"], "hi") == "hi"


def test_force_colour_zero_disables(clean_env):
    clean_env.setenv("FORCE_COLOR", "0")
    assert supports_colour(io.StringIO()) is False


def test_non_tty_stream_has_no_colour(clean_env):
    assert supports_colour(io.StringIO()) is False


def test_dumb_terminal_has_no_colour(clean_env):
    clean_env.setenv("TERM", "dumb")
    assert supports_colour(io.StringIO()) is False


def test_palettes_are_distinct_and_complete(clean_env):
    clean_env.setenv("FORCE_COLOR", "1")
    assert set(FOREGROUND) == set(BACKGROUND)
    assert len(FOREGROUND) == 16
    foreground = {colourise(code, "x") for code in FOREGROUND.values()}
    background = {colourise(code, "x") for code in BACKGROUND.values()}
    assert len(foreground) == 16
    assert len(background) == 16
    assert foreground.isdisjoint(background)
    assert all(text.startswith("\x1b[") and text.endswith("x\x1b[0m") for text in foreground)


def test_attribute_reset_wraps_with_zero_code(clean_env):
    clean_env.setenv("FORCE_COLOR", "1")
    assert colourise(ATTRIBUTES["reset"], "hi") == "\x1b[0mhi\x1b[0m"


def test_colourise_wrong_argument_count():
    with pytest.raises(ArgonError) as info:
        colourise(Fraction(1))
    assert info.value.kind == "TypeError"
    assert info.value.message == "set() takes exactly 2 argument (1 given)"


def test_colourise_first_argument_must_be_number():
    with pytest.raises(ArgonError) as info:
        colourise("x", "y")
    assert info.value.message == "set() argument 1 must be an number, not string"


def test_colourise_second_argument_must_be_string():
    with pytest.raises(ArgonError) as info:
        colourise(Fraction(1), None)
    assert info.value.message == "set() argument 2 must be a string, not null"