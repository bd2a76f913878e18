"""Errors raised by the runtime and helpers for reporting them."""

from __future__ import annotations

from fractions import Fraction


class ArgonError(Exception):
    """An error raised while running a program, with optional source location."""

    def __init__(self, kind, message, line=0, path="", code=""):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
        self.line = line
        self.path = path
        self.code = code

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


def _type_name(value) -> str:
    """Name of a value's type as the language reports it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (Fraction, int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "map"
    if isinstance(value, (bytes, bytearray)):
        return "buffer"
    if callable(value):
        return "function"
    return type(value).__name__


def throw_error(*args):
    """Raise an error of the given kind with the given message."""
    if len(args) != 2:
        raise ArgonError("TypeError", f"throwError takes 2 arguments, {len(args)} given")
    kind, message = args
    if not isinstance(kind, str):
        raise ArgonError("TypeError", "throwError type must be a string")
    if not isinstance(message, str):
        raise ArgonError("TypeError", "throwError message must be a string")
    raise ArgonError(kind, message)


def format_error(error, use_colour):
    """Render an error the way it is shown to the user."""
    location = ""
    if error.code and error.line and error.path:
        location = f"  File: {error.path}:{error.line}\n    {error.code}\n\n"
    text = f"{error.kind}: {error.message}\n"
    if use_colour:
        text = f"\x1b[91m{text}\x1b[0m"
    return location + text