"""The global scope: every built-in value and function available to programs."""

from __future__ import annotations

import math
import sys
from fractions import Fraction

from argonrt.arrays import ArgonArray
from argonrt.buffers import ArgonBuffer
from argonrt.colour import ATTRIBUTES, BACKGROUND, FOREGROUND, colourise
from argonrt.errors import ArgonError, throw_error
from argonrt.files import read_file, write_file
from argonrt.jsonio import json_parse, json_stringify
from argonrt.maps import ArgonMap
from argonrt.numbers import (
    INFINITY,
    PI,
    absolute,
    ln,
    log10,
    log_n,
    square_root,
    to_number,
)
from argonrt.values import (
    ArObject,
    BuiltinFunction,
    call_value,
    is_unhashable,
    to_bool,
    type_of,
    unwrap,
    wrap,
)

VERSION = "3.0.0"


def _is_number(value) -> bool:
    return type_of(value) == "number"


def _floor(value):
    if isinstance(value, float) and not math.isfinite(value):
        return value
    return Fraction(math.floor(value))


def _ceil(value):
    if isinstance(value, float) and not math.isfinite(value):
        return value
    return Fraction(math.ceil(value))


def _byte_offsets(text):
    """Pairs of (byte offset, character) for a string."""
    offset = 0
    for char in text:
        yield offset, char
        offset += len(char.encode("utf-8"))


def build_map(*args):
    """The map built-in: a map from pairs in an array, characters of a string, or a map."""
    if not args:
        return ArgonMap({})
    source = args[0]
    if isinstance(source, str):
        return ArgonMap({Fraction(i): ch for i, ch in _byte_offsets(source)})
    if isinstance(source, ArObject):
        if type_of(source) == "array":
            entries = {}
            for index, item in enumerate(unwrap(source)):
                plain = unwrap(item)
                if isinstance(plain, list) and len(plain) == 2:
                    if is_unhashable(plain[0]):
                        raise ArgonError(
                            "TypeError",
                            f"Cannot use unhashable value as key: {type_of(plain[0])}",
                        )
                    entries[unwrap(plain[0])] = plain[1]
                    continue
                entries[Fraction(index)] = item
            return ArgonMap(entries)
        return source
    raise ArgonError("TypeError", f"Cannot create map from '{type_of(source)}'")


def hex_string(*args):
    """The hex built-in: an integer in lower-case hexadecimal."""
    if len(args) != 1:
        raise ArgonError("TypeError", f"expected 1 argument, got {len(args)}")
    value = unwrap(args[0])
    if _is_number(value):
        number = Fraction(value)
        if number.denominator != 1:
            raise ArgonError("TypeError", "Cannot convert non-integer to hex")
        return format(int(number), "x")
    raise ArgonError("TypeError", f"Cannot convert '{type_of(value)}' to hex")


def new_buffer(*args):
    """The buffer built-in: an empty buffer."""
    if args:
        raise ArgonError("TypeError", f"expected 0 arguments, got {len(args)}")
    return ArgonBuffer(b"")


def build_array(*args):
    """The array built-in: an array from an array, a string's characters, or an object's entries."""
    if not args:
        return ArgonArray([])
    source = args[0]
    if isinstance(source, str):
        return ArgonArray(list(source))
    if isinstance(source, ArObject):
        if type_of(source) == "array":
            return source
        if type_of(source) == "string":
            return ArgonArray(list(unwrap(source)))
        return ArgonArray(
            [ArgonArray([key, value]) for key, value in source.attributes.items()]
        )
    raise ArgonError("TypeError", f"Cannot create array from '{type_of(source)}'")


def boolean(*args):
    """The boolean built-in: the truthiness of a value."""
    if not args:
        return False
    return to_bool(args[0])


def floor_of(*args):
    """The floor built-in."""
    if not args:
        raise ArgonError("floor", "floor takes 1 argument")
    if _is_number(args[0]):
        return _floor(args[0])
    raise ArgonError("TypeError", f"Cannot floor '{type_of(args[0])}'")


def ceil_of(*args):
    """The ceil built-in."""
    if not args:
        raise ArgonError("ceil", "ceil takes 1 argument")
    if _is_number(args[0]):
        return _ceil(args[0])
    raise ArgonError("TypeError", f"Cannot ceil '{type_of(args[0])}'")


def fraction(*args):
    """The fraction built-in: a number written as numerator/denominator."""
    if not args:
        raise ArgonError("fraction", "fraction takes 1 argument")
    value = args[0]
    if _is_number(value) and not isinstance(value, float):
        number = Fraction(value)
        return f"{number.numerator}/{number.denominator}"
    if isinstance(value, ArObject):
        method = value.attributes.get("__fraction__")
        if method is not None:
            return call_value(method, [])
    raise ArgonError("TypeError", f"Cannot fraction '{type_of(value)}'")


def dir_of(*args):
    """The dir built-in: an object's attribute names plus what its __dir__ adds."""
    if not args:
        return ArgonArray([])
    target = wrap(args[0])
    if not isinstance(target, ArObject):
        return ArgonArray([])
    names = list(target.attributes)
    method = target.attributes.get("__dir__")
    if method is not None:
        extra = unwrap(call_value(method, []))
        if not isinstance(extra, list):
            raise ArgonError("TypeError", f"__dir__ returned type '{type_of(extra)}'")
        names.extend(extra)
    return ArgonArray(names)


def exit_program(*args):
    """The exit built-in: stop the program with a status code."""
    code = 0
    if args and _is_number(args[0]):
        code = int(_floor(args[0]))
    sys.exit(code)


def make_error(*args):
    """The error built-in: raise an error with a message, or a kind and a message."""
    if len(args) < 1 or len(args) > 2:
        raise ArgonError("error", f"error takes 1 or 2 arguments, got {len(args)}")
    values = [unwrap(arg) for arg in args]
    if len(values) == 1 and isinstance(values[0], str):
        raise ArgonError("Error", values[0])
    if len(values) == 2 and isinstance(values[0], str) and isinstance(values[1], str):
        raise ArgonError(values[0], values[1])
    raise ArgonError("TypeError", f"Cannot create error from '{type_of(values[0])}'")


def chr_of(*args):
    """The chr built-in: the character with a code point."""
    if len(args) != 1:
        raise ArgonError("chr", f"chr takes 1 argument, got {len(args)}")
    if _is_number(args[0]):
        return chr(int(_floor(args[0])))
    raise ArgonError("TypeError", f"Cannot convert '{type_of(args[0])}' to string")


def ord_of(*args):
    """The ord built-in: the code point of a single-byte character."""
    if len(args) != 1:
        raise ArgonError("ord", f"ord takes 1 argument, got {len(args)}")
    value = unwrap(args[0])
    if isinstance(value, str):
        if len(value.encode("utf-8")) != 1:
            raise ArgonError(
                "ord",
                f"ord takes a string with only one character, got {len(args)}",
            )
        return Fraction(ord(value))
    raise ArgonError("TypeError", f"Cannot convert '{type_of(value)}' to string")


def _extreme(args, better):
    if len(args) != 1:
        raise ArgonError("runtime Error", f"max takes 1 argument, got {len(args)}")
    value = unwrap(args[0])
    if not isinstance(value, list):
        raise ArgonError("TypeError", f"Cannot get max of type '{type_of(value)}'")
    if not value:
        raise ArgonError("runtime Error", "max takes a non-empty array")
    best = None
    for item in value:
        if _is_number(item) and (best is None or better(item, best)):
            best = item
    return best


def maximum(*args):
    """The max built-in: the largest number in an array."""
    return _extreme(args, lambda a, b: a > b)


def minimum(*args):
    """The min built-in: the smallest number in an array."""
    return _extreme(args, lambda a, b: a < b)


def _builtin(name, func):
    return BuiltinFunction(name, func)


def make_globals():
    """A fresh global scope holding every built-in."""
    scope = {}
    globals_map = ArgonMap(scope)
    scope["global"] = globals_map
    scope["ArgonVersion"] = VERSION
    scope["number"] = _builtin("number", lambda *a: to_number(*[unwrap(x) for x in a]))
    scope["infinity"] = INFINITY
    scope["map"] = _builtin("map", build_map)
    scope["hex"] = _builtin("hex", hex_string)
    scope["buffer"] = _builtin("buffer", new_buffer)
    scope["throwError"] = _builtin("throwError", throw_error)
    scope["array"] = _builtin("array", build_array)
    scope["boolean"] = _builtin("boolean", boolean)
    scope["PI"] = PI
    scope["π"] = PI
    scope["ln"] = _builtin("ln", ln)
    scope["log"] = _builtin("log", log10)
    scope["logN"] = _builtin("logN", log_n)
    scope["floor"] = _builtin("floor", floor_of)
    scope["ceil"] = _builtin("ceil", ceil_of)
    scope["sqrt"] = _builtin("sqrt", square_root)
    scope["file"] = ArgonMap(
        {"read": _builtin("read", read_file), "write": _builtin("write", write_file)}
    )
    scope["json"] = ArgonMap(
        {
            "parse": _builtin("parse", json_parse),
            "stringify": _builtin("stringify", json_stringify),
        }
    )
    scope["colour"] = ArgonMap(
        {
            "set": _builtin("set", colourise),
            "bg": ArgonMap(dict(BACKGROUND)),
            "fg": ArgonMap(dict(FOREGROUND)),
            **ATTRIBUTES,
        }
    )
    scope["abs"] = _builtin("abs", absolute)
    scope["fraction"] = _builtin("fraction", fraction)
    scope["dir"] = _builtin("dir", dir_of)
    scope["exit"] = _builtin("exit", exit_program)
    scope["error"] = _builtin("error", make_error)
    scope["chr"] = _builtin("chr", chr_of)
    scope["ord"] = _builtin("ord", ord_of)
    scope["max"] = _builtin("max", maximum)
    scope["min"] = _builtin("min", minimum)
    return globals_map