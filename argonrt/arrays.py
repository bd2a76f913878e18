"""The array type: a mutable sequence with the methods programs call on it."""

from __future__ import annotations

from fractions import Fraction
from functools import cmp_to_key

from argonrt.errors import ArgonError
from argonrt.values import (
    ArObject,
    BuiltinFunction,
    call_value,
    equals,
    not_equals,
    to_bool,
    type_of,
    unwrap,
)

_SPECIAL_METHODS = {
    "__setindex__": "set_index",
    "__getindex__": "get_index",
    "__Equal__": "equals",
    "__Contains__": "contains",
    "__Boolean__": "_boolean",
}

_PUBLIC_METHODS = (
    "remove",
    "append",
    "insert",
    "pop",
    "clear",
    "extend",
    "sort",
    "map",
    "filter",
    "reduce",
    "join",
    "concat",
)


def _integer(value, not_number, not_integer):
    """Convert a runtime number holding an integer to int, raising otherwise."""
    if type_of(value) != "number":
        raise ArgonError("TypeError", not_number)
    if isinstance(value, float):
        if not value.is_integer():
            raise ArgonError("TypeError", not_integer)
        return int(value)
    number = Fraction(value)
    if number.denominator != 1:
        raise ArgonError("TypeError", not_integer)
    return int(number)


def _slice_bound(value, default):
    if value is None:
        return default
    message = "slice index must be an integer"
    return _integer(value, message, message)


def _is_function(value) -> bool:
    return type_of(value) == "function"


def _less_than(left, right) -> bool:
    kinds = (type_of(left), type_of(right))
    if kinds == ("number", "number") or kinds == ("string", "string"):
        return unwrap(left) < unwrap(right)
    if isinstance(left, ArObject):
        method = left.attributes.get("__LessThan__")
        if method is not None:
            return to_bool(call_value(method, [right]))
    if isinstance(right, ArObject):
        method = right.attributes.get("__GreaterThan__")
        if method is not None:
            return to_bool(call_value(method, [left]))
    raise ArgonError(
        "Runtime Error",
        f"Cannot compare type '{kinds[0]}' with type '{kinds[1]}' with opperation '<'",
    )


def _compare(left, right) -> int:
    if _less_than(left, right):
        return -1
    if _less_than(right, left):
        return 1
    return 0


class ArgonArray(ArObject):
    """A growable array of runtime values."""

    def __init__(self, items):
        self._items = list(items)
        super().__init__("array", self._items)
        for key, method in _SPECIAL_METHODS.items():
            self.attributes[key] = BuiltinFunction(key, getattr(self, method))
        for name in _PUBLIC_METHODS:
            self.attributes[name] = BuiltinFunction(name, getattr(self, name))
        self._sync()

    def _sync(self):
        self.attributes["__value__"] = self._items
        self.attributes["length"] = Fraction(len(self._items))

    def __len__(self):
        return len(self._items)

    def __bool__(self):
        return bool(self._items)

    def __iter__(self):
        return iter(self._items)

    def _boolean(self, *args):
        return len(self._items) > 0

    def _index(self, value, upper):
        num = _integer(value, "argument must be a number", "argument must be an integer")
        if num < 0 or num >= upper:
            raise ArgonError("IndexError", "index out of range")
        return num

    def set_index(self, *args):
        """Replace the element at an integer index."""
        if len(args) != 2:
            raise ArgonError("TypeError", f"expected 2 arguments, got {len(args)}")
        num = _integer(args[0], "index must be a number", "index must be an integer")
        if num < 0 or num >= len(self._items):
            raise ArgonError("IndexError", "index out of range")
        self._items[num] = args[1]
        return None

    def get_index(self, *args):
        """Read one element, or a slice given start, end and step."""
        if not args or len(args) > 3:
            raise ArgonError("TypeError", f"expected 1 to 3 arguments, got {len(args)}")
        length = len(self._items)
        start = _slice_bound(args[0], 0)
        end = _slice_bound(args[1], length) if len(args) > 1 else None
        step = _slice_bound(args[2], 1) if len(args) > 2 else 1
        original_start = start
        if start < 0:
            start += length
        if end is not None:
            if end < 0:
                end += length
            end = min(end, length)
        if start >= length or start < 0:
            raise ArgonError(
                "IndexError",
                f"index out of range, trying to access index {original_start} "
                f"in array of length {length}",
            )
        if end is None:
            return self._items[start]
        if step == 0:
            raise ArgonError("ValueError", "slice step cannot be zero")
        if step > 0:
            return ArgonArray(self._items[start:end:step])
        picked = [self._items[i] for i in range(end - 1, start - 1, step)]
        return ArgonArray(picked)

    def remove(self, *args):
        """Delete the element at an integer index."""
        if len(args) != 1:
            raise ArgonError("TypeError", "missing argument")
        del self._items[self._index(args[0], len(self._items))]
        self._sync()
        return None

    def append(self, *args):
        """Add one or more values to the end."""
        if not args:
            raise ArgonError("TypeError", "missing argument")
        self._items.extend(args)
        self._sync()
        return None

    def insert(self, *args):
        """Insert values before an integer index (which may equal the length)."""
        if len(args) < 2:
            raise ArgonError("TypeError", "missing argument")
        num = self._index(args[0], len(self._items) + 1)
        self._items[num:num] = args[1:]
        self._sync()
        return None

    def pop(self, *args):
        """Remove and return the last element, or the one at a given index."""
        if len(args) > 1:
            raise ArgonError("TypeError", "too many arguments")
        if args:
            num = self._index(args[0], len(self._items))
        else:
            if not self._items:
                raise ArgonError("IndexError", "index out of range")
            num = len(self._items) - 1
        value = self._items.pop(num)
        self._sync()
        return value

    def clear(self, *args):
        """Remove every element."""
        if args:
            raise ArgonError("TypeError", "too many arguments")
        self._items = []
        self._sync()
        return None

    def extend(self, *args):
        """Append every element of another array."""
        if len(args) != 1:
            raise ArgonError("TypeError", "missing argument")
        if type_of(args[0]) != "array":
            raise ArgonError("TypeError", "argument must be an array")
        self._items.extend(list(unwrap(args[0])))
        self._sync()
        return None

    def sort(self, *args):
        """Sort in place; optionally reversed, or ordered by a key function."""
        if len(args) > 2:
            raise ArgonError("TypeError", "too many arguments")
        reverse = False
        if args:
            if type_of(args[0]) != "boolean":
                raise ArgonError("TypeError", "argument must be a boolean")
            reverse = args[0]
        if len(args) == 2:
            key_function = args[1]
            if not _is_function(key_function):
                raise ArgonError("TypeError", "argument must be a function")
            decorated = [(call_value(key_function, [item]), item) for item in self._items]
            decorated.sort(key=cmp_to_key(lambda a, b: _compare(a[0], b[0])))
            self._items = [item for _, item in decorated]
            self._sync()
            return None
        ordered = sorted(self._items, key=cmp_to_key(_compare))
        if reverse:
            ordered.reverse()
        self._items = ordered
        self._sync()
        return None

    def _function_argument(self, args):
        if len(args) != 1:
            raise ArgonError("TypeError", "missing argument")
        if not _is_function(args[0]):
            raise ArgonError("TypeError", "argument must be a function")
        return args[0]

    def map(self, *args):
        """A new array of the function applied to each element."""
        function = self._function_argument(args)
        return ArgonArray([call_value(function, [item]) for item in self._items])

    def filter(self, *args):
        """A new array of the elements for which the function is truthy."""
        function = self._function_argument(args)
        return ArgonArray(
            [item for item in self._items if to_bool(call_value(function, [item]))]
        )

    def reduce(self, *args):
        """Fold the elements with a function, starting from an initial value."""
        if len(args) != 2:
            raise ArgonError(
                "TypeError", f"missing argument, expected 2 got {len(args)}"
            )
        function, accumulator = args
        if not _is_function(function):
            raise ArgonError("TypeError", "argument must be a function")
        if not self._items:
            raise ArgonError("ValueError", "array is empty")
        for item in self._items:
            accumulator = call_value(function, [accumulator, item])
        return accumulator

    def join(self, *args):
        """Join an array of strings with a separator."""
        if len(args) != 1:
            raise ArgonError("TypeError", "missing argument")
        if type_of(args[0]) != "string":
            raise ArgonError("TypeError", "argument must be a string")
        parts = []
        for item in self._items:
            if type_of(item) != "string":
                raise ArgonError("TypeError", "array must be an array of strings")
            parts.append(unwrap(item))
        return unwrap(args[0]).join(parts)

    def concat(self, *args):
        """A new array of these elements followed by another array's."""
        if not args:
            raise ArgonError("TypeError", "missing argument(s)")
        if type_of(args[0]) != "array":
            raise ArgonError("TypeError", "argument must be an array")
        return ArgonArray(self._items + list(unwrap(args[0])))

    def equals(self, *args):
        """Whether another array has equal elements in the same order."""
        if len(args) != 1:
            raise ArgonError("TypeError", "missing argument")
        other = args[0]
        if type_of(other) != "array":
            return False
        other_items = list(unwrap(other))
        if len(self._items) != len(other_items):
            return False
        return not any(
            not_equals(mine, theirs) for mine, theirs in zip(self._items, other_items)
        )

    def contains(self, *args):
        """Whether any element equals the given value."""
        if len(args) != 1:
            raise ArgonError("TypeError", "missing argument")
        return any(equals(item, args[0]) for item in self._items)