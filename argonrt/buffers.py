"""Byte and buffer values for binary data."""

from __future__ import annotations

from fractions import Fraction

from argonrt.errors import ArgonError
from argonrt.values import ArObject, BuiltinFunction, type_of, unwrap


def _rat_text(value) -> str:
    number = Fraction(value)
    return f"{number.numerator}/{number.denominator}"


def _is_integer(value) -> bool:
    return Fraction(value).denominator == 1


def _placeholder(text):
    return lambda *args: text


class ArgonByte(ArObject):
    """A single byte."""

    def __init__(self, value):
        super().__init__("byte", int(value) & 0xFF)
        self.attributes["__string__"] = BuiltinFunction("__string__", _placeholder("<byte>"))
        self.attributes["__repr__"] = BuiltinFunction("__repr__", _placeholder("<byte>"))
        self.attributes["number"] = BuiltinFunction("number", self.number)
        self.attributes["from"] = BuiltinFunction("from", self.set_from)

    def number(self, *args):
        """The byte as a number."""
        return Fraction(self.value)

    def set_from(self, *args):
        """Set the byte from an integer 0-255 or a one-byte string."""
        if not args:
            raise ArgonError("TypeError", "expected at least 1 argument, got 0")
        source = unwrap(args[0])
        if type_of(source) == "number":
            if not _is_integer(source):
                raise ArgonError("TypeError", f"expected integer, got {_rat_text(source)}")
            n = int(Fraction(source))
            if n > 255 or n < 0:
                raise ArgonError(
                    "ValueError", f"expected number between 0 and 255, got {n}"
                )
            self.attributes["__value__"] = n
        elif isinstance(source, str):
            encoded = source.encode("utf-8")
            if len(encoded) != 1:
                raise ArgonError(
                    "ValueError", f"expected string of length 1, got {len(encoded)}"
                )
            self.attributes["__value__"] = encoded[0]
        else:
            raise ArgonError(
                "TypeError", f"expected number or string, got {type_of(source)}"
            )
        return self


class ArgonBuffer(ArObject):
    """A sequence of bytes."""

    def __init__(self, data):
        super().__init__("buffer", b"")
        self.attributes["__string__"] = BuiltinFunction(
            "__string__", _placeholder("<buffer>")
        )
        self.attributes["__repr__"] = BuiltinFunction("__repr__", _placeholder("<buffer>"))
        self.attributes["from"] = BuiltinFunction("from", self.set_from)
        self.attributes["to"] = BuiltinFunction("to", self.to)
        self._store(bytes(data))

    def _store(self, data: bytes):
        self.attributes["__value__"] = data
        self.attributes["length"] = Fraction(len(data))

    def __len__(self):
        return len(self.value)

    def set_from(self, *args):
        """Replace the contents from a string, bytes or an array of integers."""
        if not args:
            raise ArgonError("TypeError", "expected at least 1 argument, got 0")
        source = unwrap(args[0])
        if isinstance(source, str):
            data = source.encode("utf-8")
        elif isinstance(source, (bytes, bytearray)):
            data = bytes(source)
        elif isinstance(source, list):
            collected = bytearray()
            for item in source:
                if type_of(item) != "number":
                    raise ArgonError(
                        "TypeError", f"Cannot convert {type_of(item)} to byte"
                    )
                if not _is_integer(item):
                    raise ArgonError("TypeError", "Cannot convert non-integer to byte")
                collected.append(int(Fraction(item)) & 0xFF)
            data = bytes(collected)
        else:
            raise ArgonError(
                "TypeError", f"expected string or []byte, got {type_of(source)}"
            )
        self._store(data)
        return self

    def to(self, *args):
        """Convert the contents to a 'string', an array of 'bytes' or an 'array' of numbers."""
        from argonrt.arrays import ArgonArray

        if len(args) != 1:
            raise ArgonError("TypeError", f"expected 1 argument, got {len(args)}")
        if type_of(args[0]) != "string":
            raise ArgonError("TypeError", f"expected string, got {type_of(args[0])}")
        kind = unwrap(args[0])
        data = self.value
        if kind == "string":
            return data.decode("utf-8", errors="replace")
        if kind == "bytes":
            return ArgonArray([ArgonByte(b) for b in data])
        if kind == "array":
            return ArgonArray([Fraction(b) for b in data])
        raise ArgonError(
            "TypeError", f"expected string, bytes or array, got '{kind}'"
        )