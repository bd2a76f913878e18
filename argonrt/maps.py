"""The map type: a mutable mapping from numbers, strings and null to values."""

from __future__ import annotations

import threading
from fractions import Fraction

from argonrt.errors import ArgonError
from argonrt.values import (
    ArObject,
    BuiltinFunction,
    equals,
    is_unhashable,
    type_of,
    unwrap,
)

_METHODS = {
    "get": "get",
    "__Contains__": "contains",
    "__NotContains__": "not_contains",
    "__setindex__": "set_index",
    "__getindex__": "get_index",
    "__Equal__": "equals",
    "keys": "keys",
    "__Boolean__": "_boolean",
    "object": "object",
}


def _sprint(value) -> str:
    """Plain rendering of a key for messages."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if type_of(value) == "number" and not isinstance(value, float):
        number = Fraction(value)
        return f"{number.numerator}/{number.denominator}"
    return str(value)


def _expect_count(args, count):
    if len(args) != count:
        plural = "argument" if count == 1 else "arguments"
        raise ArgonError("TypeError", f"expected {count} {plural}, got {len(args)}")


class ArgonMap(ArObject):
    """A map of hashable keys to runtime values."""

    def __init__(self, entries):
        self._entries = entries if isinstance(entries, dict) else dict(entries)
        self._lock = threading.RLock()
        super().__init__("map", self._entries)
        for key, method in _METHODS.items():
            self.attributes[key] = BuiltinFunction(key, getattr(self, method))

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __bool__(self):
        return len(self) > 0

    def __iter__(self):
        with self._lock:
            return iter(list(self._entries))

    def _boolean(self, *args):
        return len(self) > 0

    def get(self, *args):
        """The value under a key, or the default (null unless given)."""
        if len(args) < 1 or len(args) > 2:
            raise ArgonError(
                "Runtime Error", f"expected 1 or 2 argument, got {len(args)}"
            )
        key = unwrap(args[0])
        if is_unhashable(key):
            raise ArgonError("Runtime Error", f"unhashable type: {type_of(key)}")
        default = args[1] if len(args) == 2 else None
        with self._lock:
            return self._entries.get(key, default)

    def contains(self, *args):
        """Whether a key is present; unhashable keys never are."""
        _expect_count(args, 1)
        key = unwrap(args[0])
        if is_unhashable(key):
            return False
        with self._lock:
            return key in self._entries

    def not_contains(self, *args):
        """Whether a key is absent; unhashable keys always are."""
        _expect_count(args, 1)
        key = unwrap(args[0])
        if is_unhashable(key):
            return True
        with self._lock:
            return key not in self._entries

    def set_index(self, *args):
        """Store a value under a key."""
        _expect_count(args, 2)
        if is_unhashable(args[0]):
            raise ArgonError("Runtime Error", f"unhashable type: {type_of(args[0])}")
        key = unwrap(args[0])
        with self._lock:
            self._entries[key] = args[1]
        return None

    def get_index(self, *args):
        """The value under a key, raising KeyError when it is missing."""
        _expect_count(args, 1)
        key = unwrap(args[0])
        if is_unhashable(key):
            raise ArgonError("Runtime Error", f"unhashable type: {type_of(key)}")
        with self._lock:
            if key not in self._entries:
                raise ArgonError("KeyError", f"key {_sprint(key)} not found")
            return self._entries[key]

    def equals(self, *args):
        """Whether another map has the same keys with equal values."""
        _expect_count(args, 1)
        if type_of(args[0]) != "map":
            return False
        other = unwrap(args[0])
        with self._lock:
            if len(self._entries) != len(other):
                return False
            for key, value in self._entries.items():
                if key not in other:
                    return False
                if not equals(value, other[key]):
                    return False
        return True

    def keys(self, *args):
        """An array of the map's keys."""
        from argonrt.arrays import ArgonArray

        _expect_count(args, 0)
        with self._lock:
            return ArgonArray(list(self._entries))

    def object(self, *args):
        """An object whose attributes are this map's entries."""
        _expect_count(args, 0)
        result = ArObject()
        result.attributes = self._entries
        return result