"""Runtime values: objects with attributes, built-in functions and the core value protocol."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Callable

from argonrt.errors import ArgonError
from argonrt.numbers import number_to_string

_UNSET = object()

_HASHABLE_TYPES = ("number", "string", "bool", "null")


class ArObject:
    """An object whose attributes, including special methods, live in one mapping."""

    def __init__(self, name="object", value=_UNSET, attributes=None):
        self.attributes: dict[Any, Any] = {"__name__": name}
        if value is not _UNSET:
            self.attributes["__value__"] = value
        if attributes:
            self.attributes.update(attributes)

    @property
    def name(self) -> str:
        return self.attributes.get("__name__", "object")

    @property
    def has_value(self) -> bool:
        return "__value__" in self.attributes

    @property
    def value(self):
        return self.attributes.get("__value__")

    def _special(self, key):
        return self.attributes.get(key)

    def get_attribute(self, key):
        """Look up an attribute, falling back to the object's index lookup."""
        if key in self.attributes:
            return self.attributes[key]
        getter = self._special("__getindex__")
        if getter is not None:
            return call_value(getter, [key])
        raise ArgonError(
            "TypeError", f"cannot read {_describe(key)} from type '{type_of(self)}'"
        )

    def __repr__(self) -> str:
        return f"<{self.name}>"


@dataclass(frozen=True)
class BuiltinFunction:
    """A function provided by the runtime rather than written in the language."""

    name: str
    func: Callable[..., Any]

    def __call__(self, *args):
        return wrap(self.func(*args))


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (Fraction, int, float))


def _describe(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if _is_number(value):
        if isinstance(value, float):
            return number_to_string(value, False)
        return number_to_string(Fraction(value), False)
    return f"<{type_of(value)}>"


def type_of(value) -> str:
    """Name of a value's type as programs see it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if _is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, ArObject):
        return value.name
    if isinstance(value, BuiltinFunction):
        return "function"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "map"
    if isinstance(value, (bytes, bytearray)):
        return "buffer"
    if callable(value):
        return "function"
    return type(value).__name__


def to_bool(value) -> bool:
    """Truthiness of a value; objects decide through their __Boolean__ method."""
    if isinstance(value, str):
        return value != ""
    if isinstance(value, bool):
        return value
    if _is_number(value):
        if isinstance(value, float) and math.isnan(value):
            return True
        return value != 0
    if value is None:
        return False
    if isinstance(value, ArObject):
        method = value._special("__Boolean__")
        if method is None:
            return False
        try:
            result = call_value(method, [])
        except ArgonError:
            return False
        return to_bool(result)
    return True


def wrap(value):
    """Turn plain containers into runtime objects; other values pass through."""
    if isinstance(value, list):
        from argonrt.arrays import ArgonArray

        return ArgonArray(value)
    if isinstance(value, dict):
        from argonrt.maps import ArgonMap

        return ArgonMap(value)
    if isinstance(value, (bytes, bytearray)):
        from argonrt.buffers import ArgonBuffer

        return ArgonBuffer(bytes(value))
    return value


def unwrap(value):
    """The plain value behind a runtime object, or the value itself."""
    if isinstance(value, ArObject) and value.has_value:
        return value.value
    return value


def is_unhashable(value) -> bool:
    """Whether a value may not be used as a map key."""
    return type_of(value) not in _HASHABLE_TYPES


def _plain_equal(left, right) -> bool:
    if type_of(left) != type_of(right):
        return False
    return left == right


def _compare_with(method_name, left, right, fallback):
    if _is_number(left) and _is_number(right):
        return None
    if isinstance(left, ArObject):
        method = left._special(method_name)
        if method is not None:
            try:
                return to_bool(call_value(method, [right]))
            except ArgonError:
                pass
    if isinstance(right, ArObject):
        method = right._special(method_name)
        if method is not None:
            return to_bool(call_value(method, [left]))
    return fallback(left, right)


def equals(left, right) -> bool:
    """Equality as the == operator computes it."""
    if _is_number(left) and _is_number(right):
        return left == right
    return _compare_with("__Equal__", left, right, _plain_equal)


def not_equals(left, right) -> bool:
    """Inequality as the != operator computes it."""
    if _is_number(left) and _is_number(right):
        return left != right
    return _compare_with(
        "__NotEqual__", left, right, lambda a, b: not _plain_equal(a, b)
    )


def call_value(callable, args):
    """Call a runtime value with a list of arguments."""
    target = callable
    if isinstance(target, ArObject):
        try:
            target = target.get_attribute("__call__")
        except ArgonError:
            pass
    if isinstance(target, BuiltinFunction):
        return target(*args)
    if isinstance(target, ArObject) or not _is_python_callable(target):
        raise ArgonError("Runtime Error", f"type '{type_of(target)}' is not callable")
    return wrap(target(*args))


def _is_python_callable(value) -> bool:
    return callable(value) and not isinstance(value, type)


def get_item(target, args):
    """Index into a value through its __getindex__ method."""
    args = list(args)
    target = wrap(target)
    if isinstance(target, ArObject):
        getter = target._special("__getindex__")
        if getter is not None:
            return call_value(getter, args)
    key = args[0] if args else None
    raise ArgonError(
        "TypeError", f"cannot read {_describe(key)} from type '{type_of(target)}'"
    )