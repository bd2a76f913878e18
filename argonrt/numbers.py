"""Exact rational numbers: literals, formatting and the numeric built-ins."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from fractions import Fraction

from argonrt.errors import ArgonError, _type_name

INFINITY = math.inf
PI = Fraction(math.pi)

_NUMBER_RE = re.compile(
    r"( *)(-)?((([0-9]+(\.[0-9]+)?)|(\.[0-9]+))(e((\-|\+)?([0-9]+(\.[0-9]+)?)))?)( *)"
)
_BINARY_RE = re.compile(
    r"( *)(-)?(0b[10]+(.\[10]+)?(e((\-|\+)?([0-9]+(\.[0-9]+)?)))?)( *)"
)
_HEX_RE = re.compile(r"( *)(-)?(0x[a-fA-F0-9]+(\.[a-fA-F0-9]+)?)( *)")
_OCTAL_RE = re.compile(
    r"( *)(-)?(0o[0-7]+(\.[0-7]+)?(e((\-|\+)?([0-9]+(\.[0-9]+)?)))?)( *)"
)

_BASES = {"0b": 2, "0o": 8, "0x": 16}
_LN_STEPS = Fraction(10**6)


def _as_number(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value)
    return None


def is_number_literal(text):
    """Whether text is a number literal in any of the supported bases."""
    return any(
        pattern.fullmatch(text) for pattern in (_NUMBER_RE, _BINARY_RE, _HEX_RE, _OCTAL_RE)
    )


def _digits_value(digits, base):
    if not all(ch in "0123456789abcdef"[:base] for ch in digits.lower()):
        raise ValueError(f"invalid digits {digits!r} for base {base}")
    return int(digits, base) if digits else 0


def _parse_integer(text):
    body = text.strip()
    sign = -1 if body.startswith("-") else 1
    body = body.lstrip("+-")
    base = _BASES.get(body[:2].lower(), 10)
    if base != 10:
        body = body[2:]
    if not body:
        raise ValueError(f"invalid integer {text!r}")
    return sign * _digits_value(body, base)


def _parse_real(text):
    body = text
    sign = 1
    if body[:1] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    base = _BASES.get(body[:2].lower(), 10)
    if base != 10:
        body = body[2:]
    exponent_base, exponent = 10, 0
    marker = re.search(r"[pP]" if base == 16 else r"[eEpP]", body)
    if marker:
        exponent_base = 2 if marker.group().lower() == "p" else 10
        exp_text = body[marker.end():]
        if not re.fullmatch(r"[+-]?[0-9]+", exp_text):
            raise ValueError(f"invalid exponent in {text!r}")
        exponent = int(exp_text)
        body = body[: marker.start()]
    whole, dot, frac = body.partition(".")
    if not whole and not frac:
        raise ValueError(f"invalid number {text!r}")
    mantissa = Fraction(_digits_value(whole + frac, base), base ** len(frac))
    return sign * mantissa * Fraction(exponent_base) ** exponent


def parse_number(text):
    """Parse a number literal or an 'a/b' fraction into an exact Fraction."""
    stripped = text.strip()
    if not stripped:
        raise ValueError("empty number")
    if "/" in stripped:
        top, _, bottom = stripped.partition("/")
        denominator = _parse_integer(bottom)
        if denominator == 0 or bottom.strip().startswith(("-", "+")):
            raise ValueError(f"invalid fraction {text!r}")
        return Fraction(_parse_integer(top), denominator)
    return _parse_real(stripped)


def _format_float(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    negative, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digit_tuple))
    point = len(digits) + exponent
    digits = digits.rstrip("0")
    sign = "-" if negative else ""
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _to_float(num):
    try:
        return float(num)
    except OverflowError:
        return math.inf if num > 0 else -math.inf


def number_to_string(num, simplify):
    """Render a number; with simplify, small multiples of pi are shown with the symbol."""
    if isinstance(num, float):
        return _format_float(num)
    num = Fraction(num)
    if simplify:
        over_pi = num / PI
        if over_pi == 1:
            return "π"
        if over_pi == -1:
            return "-π"
        if over_pi == 0:
            return "0"
        if over_pi.denominator <= 1000:
            return f"{over_pi}π"
    return _format_float(_to_float(num))


def absolute(*args):
    """The absolute value of a single number."""
    if len(args) != 1:
        raise ArgonError("Runtime Error", f"abs expected 1 argument, got {len(args)}")
    value = _as_number(args[0])
    if value is None:
        raise ArgonError("Runtime Error", f"abs expected number, got {_type_name(args[0])}")
    return abs(value)


def factorial(n):
    """n! for a non-negative integer; 1000 and above give infinity."""
    value = _as_number(n)
    if value is None:
        raise ArgonError(
            "Runtime Error",
            f"cannot use factorial on non-number of type '{_type_name(n)}'",
        )
    if value.denominator != 1:
        raise ArgonError("Runtime Error", "cannot use factorial on non-integer")
    if value < 0:
        raise ArgonError("Runtime Error", "cannot use factorial on negative number")
    if value >= 1000:
        return INFINITY
    return Fraction(math.factorial(int(value)))


def _ln(x):
    try:
        power = math.pow(_to_float(x), float(1 / _LN_STEPS))
    except OverflowError:
        return INFINITY
    if not math.isfinite(power):
        return INFINITY
    return (Fraction(power) - 1) * _LN_STEPS


_LN10 = _ln(Fraction(10))


def _positive_argument(name, args, count):
    if len(args) != count:
        plural = "argument" if count == 1 else f"{count} argument"
        raise ArgonError("Runtime Error", f"{name} takes {plural}, got {len(args)}".replace(
            f"takes {count} argument", f"takes {count} argument"
        ) if count != 1 else f"{name} takes 1 argument, got {len(args)}")


def ln(*args):
    """Natural logarithm of a positive number."""
    if len(args) != 1:
        raise ArgonError("Runtime Error", f"ln takes 1 argument, got {len(args)}")
    x = _as_number(args[0])
    if x is None:
        raise ArgonError("Runtime Error", f"ln takes a number not a '{_type_name(args[0])}'")
    if x <= 0:
        raise ArgonError("Runtime Error", "ln takes a positive number")
    return _ln(x)


def log10(*args):
    """Base-10 logarithm of a positive number."""
    if len(args) != 1:
        raise ArgonError("Runtime Error", f"log takes 1 argument, got {len(args)}")
    x = _as_number(args[0])
    if x is None:
        raise ArgonError("Runtime Error", f"log takes a number not a '{_type_name(args[0])}'")
    if x <= 0:
        raise ArgonError("Runtime Error", "log takes a positive number")
    return _ln(x) / _LN10


def log_n(*args):
    """Logarithm of the second argument in the base given by the first."""
    if len(args) != 2:
        raise ArgonError("Runtime Error", f"logN takes 2 argument, got {len(args)}")
    base = _as_number(args[0])
    x = _as_number(args[1])
    if base is None or x is None:
        raise ArgonError("Runtime Error", f"logN takes a number not a '{_type_name(args[0])}'")
    if base <= 0 or x <= 0:
        raise ArgonError("Runtime Error", "logN takes a positive number")
    return _ln(x) / _ln(base)


def _floor_log2(value):
    a, b = value.numerator, value.denominator
    exp = a.bit_length() - b.bit_length()
    if (a << max(-exp, 0)) < (b << max(exp, 0)):
        exp -= 1
    return exp


def _round_to_bits(value, bits):
    if value == 0:
        return Fraction(0)
    shift = _floor_log2(value) - (bits - 1)
    scale = Fraction(2) ** shift
    return round(value / scale) * scale


def _sqrt_to_bits(value, bits):
    shift = _floor_log2(value) // 2 - (bits - 1)
    quadrupled = 4 * value / Fraction(4) ** shift
    doubled = math.isqrt(quadrupled.numerator // quadrupled.denominator)
    quotient, odd = divmod(doubled, 2)
    if odd and not (quadrupled == doubled * doubled and quotient % 2 == 0):
        quotient += 1
    return quotient * Fraction(2) ** shift


def square_root(*args):
    """Square root of a non-negative number, to 15 bits of precision."""
    if not args:
        raise ArgonError("Runtime Error", "sqrt takes 1 argument")
    value = _as_number(args[0])
    if value is None:
        raise ArgonError(
            "Runtime Error", f"sqrt takes a number not a '{_type_name(args[0])}'"
        )
    if value < 0:
        raise ArgonError("Runtime Error", "sqrt takes a positive number")
    rounded = _round_to_bits(value, 30)
    if rounded == 0:
        return Fraction(0)
    return _sqrt_to_bits(rounded, 15)


def to_number(*args):
    """Convert a string, boolean, null or number to a number."""
    if not args:
        return Fraction(0)
    value = args[0]
    if isinstance(value, str):
        failure = ArgonError(
            "Conversion Error",
            f"Cannot convert {json.dumps(value, ensure_ascii=False)} to a number",
        )
        if not is_number_literal(value):
            raise failure
        try:
            return parse_number(value)
        except ValueError:
            raise failure from None
    if isinstance(value, bool):
        return Fraction(1) if value else Fraction(0)
    if value is None:
        return Fraction(0)
    number = _as_number(value)
    if number is not None:
        return number
    raise ArgonError("Number Error", f"Cannot convert {_type_name(value)} to a number")