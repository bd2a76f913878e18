"""Terminal colour codes and text colouring."""

from __future__ import annotations

import os
import sys
from fractions import Fraction

from argonrt.errors import ArgonError, _type_name

_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


def _palette(base, bright):
    table = {name: Fraction(base + offset) for offset, name in enumerate(_NAMES)}
    for offset, name in enumerate(_NAMES):
        table["hi" + name[0].upper() + name[1:]] = Fraction(bright + offset)
    return table


FOREGROUND = _palette(30, 90)
BACKGROUND = _palette(40, 100)
ATTRIBUTES = {
    name: Fraction(code)
    for code, name in enumerate(
        (
            "reset",
            "bold",
            "faint",
            "italic",
            "underline",
            "blinkSlow",
            "blinkRapid",
            "reverseVideo",
            "concealed",
            "crossedOut",
        )
    )
}


def supports_colour(stream=None):
    """Whether colour escapes should be written to the given stream."""
    force = os.environ.get("FORCE_COLOR")
    if force is not None:
        return force.strip().lower() not in {"0", "false"}
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    target = sys.stdout if stream is None else stream
    isatty = getattr(target, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (ValueError, OSError):
        return False


def colourise(*args):
    """Wrap text in the escape for one colour attribute when colour is supported."""
    if len(args) != 2:
        raise ArgonError(
            "TypeError", f"set() takes exactly 2 argument ({len(args)} given)"
        )
    attribute, text = args
    if isinstance(attribute, bool) or not isinstance(attribute, (Fraction, int)):
        raise ArgonError(
            "TypeError",
            f"set() argument 1 must be an number, not {_type_name(attribute)}",
        )
    if not isinstance(text, str):
        raise ArgonError(
            "TypeError", f"set() argument 2 must be a string, not {_type_name(text)}"
        )
    code = Fraction(attribute).numerator
    if supports_colour(sys.stdout):
        return f"\x1b[{code}m{text}\x1b[0m"
    return text