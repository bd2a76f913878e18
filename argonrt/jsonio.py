"""Reading and writing JSON text as runtime values."""

from __future__ import annotations

import json
import math
from fractions import Fraction

from argonrt.errors import ArgonError
from argonrt.numbers import number_to_string
from argonrt.values import type_of, unwrap

_MAX_DEPTH = 100
_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    '"': '\\"',
    "\\": "\\\\",
}


def _reject_constant(name):
    raise ValueError(f"invalid constant {name}")


def _convert(value):
    from argonrt.arrays import ArgonArray
    from argonrt.maps import ArgonMap

    if isinstance(value, dict):
        return ArgonMap({key: _convert(item) for key, item in value.items()})
    if isinstance(value, list):
        return ArgonArray([_convert(item) for item in value])
    if isinstance(value, float):
        return Fraction(value)
    if isinstance(value, (str, bool)) or value is None:
        return value
    return None


def parse(text):
    """Parse JSON text into runtime values; invalid text gives null."""
    try:
        data = json.loads(text, parse_int=float, parse_constant=_reject_constant)
    except ValueError:
        return None
    return _convert(data)


def _quote(text: str) -> str:
    parts = ['"']
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        elif ord(ch) < 0x80:
            parts.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(f"\\U{ord(ch):08x}")
    parts.append('"')
    return "".join(parts)


def _key_text(key) -> str:
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if type_of(key) == "number":
        return number_to_string(key, False)
    return str(key)


def _stringify(value, level):
    if level > _MAX_DEPTH:
        raise ArgonError("Runtime Error", "json stringify error: too many levels")
    value = unwrap(value)
    if isinstance(value, dict):
        items = [
            f"{_quote(_key_text(key))}: {_stringify(item, level + 1)}"
            for key, item in value.items()
        ]
        return "{" + ", ".join(items) + "}"
    if isinstance(value, list):
        return "[" + ", ".join(_stringify(item, level + 1) for item in value) + "]"
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if type_of(value) == "number":
        try:
            as_float = float(value)
        except OverflowError:
            return "null"
        if math.isnan(as_float) or math.isinf(as_float):
            return "null"
        return number_to_string(value, False)
    raise ArgonError("Runtime Error", f"Cannot stringify '{type_of(value)}'")


def stringify(value):
    """Render a runtime value as JSON text."""
    return _stringify(value, 0)


def json_parse(*args):
    """The json.parse built-in."""
    if not args:
        raise ArgonError("Runtime Error", "parse takes 1 argument")
    if type_of(args[0]) != "string":
        raise ArgonError(
            "Runtime Error", f"parse takes a string not a '{type_of(args[0])}'"
        )
    return parse(unwrap(args[0]))


def json_stringify(*args):
    """The json.stringify built-in."""
    if not args:
        raise ArgonError("Runtime Error", "stringify takes 1 argument")
    return stringify(args[0])