"""Values that carry control flow out of blocks: return, break and continue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from argonrt.errors import ArgonError


@dataclass(frozen=True)
class Return:
    """A value being returned from a function body."""

    value: Any = None
    line: int = 0
    code: str = ""
    path: str = ""


@dataclass(frozen=True)
class Break:
    """A request to leave the innermost loop."""

    line: int = 0
    code: str = ""
    path: str = ""


@dataclass(frozen=True)
class Continue:
    """A request to start the next iteration of the innermost loop."""

    line: int = 0
    code: str = ""
    path: str = ""


def open_return(value):
    """Unwrap a Return into the value it carries; pass anything else through."""
    if isinstance(value, Return):
        return value.value
    return value


def throw_on_non_loop(value):
    """Raise if a break or continue escaped to where no loop can take it."""
    if isinstance(value, Break):
        raise ArgonError(
            "Break Error", "break can only be used in loops", value.line, value.path, value.code
        )
    if isinstance(value, Continue):
        raise ArgonError(
            "Continue Error",
            "continue can only be used in loops",
            value.line,
            value.path,
            value.code,
        )
    return value