"""Binary operators: arithmetic, comparison, membership and logic on runtime values."""

from __future__ import annotations

import math
from enum import IntEnum
from fractions import Fraction

from argonrt.errors import ArgonError
from argonrt.values import (
    ArObject,
    call_value,
    equals,
    not_equals,
    to_bool,
    type_of,
    unwrap,
    wrap,
)


class Operator(IntEnum):
    """Binary operators, in the order of their binding (loosest first)."""

    AND = 0
    OR = 1
    NOT_IN = 2
    IN = 3
    LESS_EQUAL = 4
    GREATER_EQUAL = 5
    LESS = 6
    GREATER = 7
    NOT_EQUAL = 8
    EQUAL = 9
    ADD = 10
    SUBTRACT = 11
    MULTIPLY = 12
    MODULO = 13
    INT_DIVIDE = 14
    DIVIDE = 15
    POWER = 16

    @property
    def tokens(self) -> tuple[str, ...]:
        """The spellings of this operator in source text."""
        return _TOKENS[self]


_TOKENS = {
    Operator.AND: ("&&", " and "),
    Operator.OR: ("||", " or "),
    Operator.NOT_IN: (" not in ",),
    Operator.IN: (" in ",),
    Operator.LESS_EQUAL: ("<=",),
    Operator.GREATER_EQUAL: (">=",),
    Operator.LESS: ("<",),
    Operator.GREATER: (">",),
    Operator.NOT_EQUAL: ("!=",),
    Operator.EQUAL: ("==",),
    Operator.ADD: ("+",),
    Operator.SUBTRACT: ("-",),
    Operator.MULTIPLY: ("*",),
    Operator.MODULO: ("%",),
    Operator.INT_DIVIDE: ("//",),
    Operator.DIVIDE: ("/",),
    Operator.POWER: ("^", "**"),
}


def _is_number(value) -> bool:
    return type_of(value) == "number"


def _method(value, name):
    if isinstance(value, ArObject):
        return value.attributes.get(name)
    return None


def _try_method(value, name, argument, sentinel):
    """Call a special method, returning sentinel if it is missing or fails."""
    method = _method(value, name)
    if method is None:
        return sentinel
    try:
        return call_value(method, [argument])
    except ArgonError:
        return sentinel


_MISSING = object()


def _binary(left, right, method, post_method, failure, *, post_errors_propagate=True):
    result = _try_method(left, method, right, _MISSING)
    if result is not _MISSING:
        return result
    post = _method(right, post_method)
    if post is not None:
        if post_errors_propagate:
            return call_value(post, [left])
        try:
            return call_value(post, [left])
        except ArgonError:
            pass
    raise failure


def _divide_by_zero():
    return ArgonError("Runtime Error", "Cannot divide by zero")


def add(left, right):
    """left + right."""
    if _is_number(left) and _is_number(right):
        return left + right
    failure = ArgonError(
        "Runtime Error",
        f"Cannot add type '{type_of(right)}' to type '{type_of(left)}'",
    )
    return _binary(left, right, "__Add__", "__PostAdd__", failure, post_errors_propagate=False)


def subtract(left, right):
    """left - right."""
    if _is_number(left) and _is_number(right):
        return left - right
    failure = ArgonError(
        "Runtime Error",
        f"Cannot subtract type '{type_of(right)}' from type '{type_of(left)}'",
    )
    return _binary(left, right, "__Subtract__", "__PostSubtract__", failure)


def multiply(left, right):
    """left * right."""
    if _is_number(left) and _is_number(right):
        return left * right
    failure = ArgonError("Runtime Error", f"Cannot multiply type '{type_of(right)}'")
    return _binary(left, right, "__Multiply__", "__PostMultiply__", failure)


def divide(left, right):
    """left / right, exactly."""
    right = unwrap(right)
    failure = ArgonError("Runtime Error", f"Cannot divide type '{type_of(right)}'")
    if _is_number(left) and _is_number(right):
        if right == 0:
            raise _divide_by_zero()
        return left / right
    method = _method(left, "__Divide__")
    if method is not None:
        try:
            return call_value(method, [right])
        except ArgonError as error:
            failure = error
    post = _method(right, "__PostDivide__")
    if post is not None:
        return call_value(post, [left])
    raise failure


def int_divide(left, right):
    """left // right: the exact quotient of two numbers."""
    right = unwrap(right)
    if _is_number(left) and _is_number(right):
        if right == 0:
            raise _divide_by_zero()
        return left / right
    failure = ArgonError("Runtime Error", f"Cannot divide type '{type_of(right)}'")
    return _binary(left, right, "__IntDivide__", "__PostIntDivide__", failure)


def _floor(value):
    if isinstance(value, float) and not math.isfinite(value):
        return value
    return math.floor(value)


def modulo(left, right):
    """left % right, taking the sign of the divisor."""
    right = unwrap(right)
    if _is_number(left) and _is_number(right):
        if right == 0:
            raise _divide_by_zero()
        return left - _floor(left / right) * right
    failure = ArgonError(
        "Runtime Error", f"Cannot calculate modulus of type '{type_of(right)}'"
    )
    return _binary(left, right, "__Modulo__", "__PostModulo__", failure)


def _as_float(value) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _float_power(base, exponent):
    """base ** exponent through floating point; non-finite results become infinity."""
    try:
        result = math.pow(_as_float(base), _as_float(exponent))
    except (OverflowError, ValueError, ZeroDivisionError):
        return math.inf
    if not math.isfinite(result):
        return math.inf
    return Fraction(result)


def _number_power(base, exponent):
    if isinstance(exponent, float) and not math.isfinite(exponent):
        return _float_power(base, exponent)
    if exponent <= 10:
        result = Fraction(1)
        magnitude = abs(exponent)
        count = 0
        while count < magnitude:
            result *= base
            count += 1
        remainder = magnitude - count
        if remainder < 0:
            result = result * _float_power(result, remainder)
        if exponent < 0:
            if result == 0:
                raise _divide_by_zero()
            result = 1 / result
        return result
    return base * _float_power(base, exponent)


def power(left, right):
    """left ^ right."""
    base = unwrap(left)
    if not _is_number(base):
        raise ArgonError(
            "Runtime Error", f"Cannot calculate power of type '{type_of(base)}'"
        )
    exponent = unwrap(right)
    if _is_number(exponent):
        return _number_power(base, exponent)
    failure = ArgonError(
        "Runtime Error", f"Cannot calculate power of type '{type_of(exponent)}'"
    )
    result = _try_method(exponent, "__Power__", base, _MISSING)
    if result is not _MISSING:
        return result
    post = _method(exponent, "__PostPower__")
    if post is not None:
        return call_value(post, [base])
    raise failure


_ORDERING = {
    Operator.LESS_EQUAL: ("__LessThanEqual__", "__GreaterThanEqual__", "<="),
    Operator.GREATER_EQUAL: ("__GreaterThanEqual__", "__LessThanEqual__", ">="),
    Operator.LESS: ("__LessThan__", "__GreaterThan__", "<"),
    Operator.GREATER: ("__GreaterThan__", "__LessThan__", ">"),
}

_NUMERIC_ORDER = {
    Operator.LESS_EQUAL: lambda a, b: a <= b,
    Operator.GREATER_EQUAL: lambda a, b: a >= b,
    Operator.LESS: lambda a, b: a < b,
    Operator.GREATER: lambda a, b: a > b,
}


def compare(operator, left, right):
    """Evaluate one of the comparison operators to a boolean."""
    try:
        operator = Operator(operator)
    except ValueError:
        operator = None
    if operator is Operator.EQUAL:
        return equals(left, right)
    if operator is Operator.NOT_EQUAL:
        return not_equals(left, right)
    if operator not in _ORDERING:
        raise ArgonError("Runtime Error", "Invalid comparison operation")
    if _is_number(left) and _is_number(right):
        return _NUMERIC_ORDER[operator](left, right)
    method, mirrored, symbol = _ORDERING[operator]
    if isinstance(left, ArObject):
        result = _try_method(left, method, right, _MISSING)
        if result is not _MISSING:
            return to_bool(result)
        # For '<' the mirrored method is consulted only when the left side is an object.
        if operator is Operator.LESS:
            reverse = _method(right, mirrored)
            if reverse is not None:
                return to_bool(call_value(reverse, [left]))
    if operator is not Operator.LESS:
        reverse = _method(right, mirrored)
        if reverse is not None:
            return to_bool(call_value(reverse, [left]))
    raise ArgonError(
        "Runtime Error",
        f"Cannot compare type '{type_of(left)}' with type '{type_of(right)}' "
        f"with opperation '{symbol}'",
    )


def contains(container, item):
    """item in container."""
    container = wrap(container)
    method = _method(container, "__Contains__")
    if method is not None:
        return call_value(method, [item])
    raise ArgonError(
        "Runtime Error",
        f"Cannot check if type '{type_of(item)}' is in type '{type_of(container)}'",
    )


def not_contains(container, item):
    """item not in container."""
    container = wrap(container)
    method = _method(container, "__NotContains__")
    if method is not None:
        return call_value(method, [item])
    raise ArgonError(
        "Runtime Error",
        f"Cannot check if type '{type_of(item)}' is not in type '{type_of(container)}'",
    )


def logical_and(left, right):
    """left && right: the first falsy operand, or the last one."""
    if not to_bool(left):
        return left
    return right


def logical_or(left, right):
    """left || right: the first truthy operand, or the last one."""
    if to_bool(left):
        return left
    return right


_DISPATCH = {
    Operator.AND: logical_and,
    Operator.OR: logical_or,
    Operator.NOT_IN: lambda left, right: not_contains(right, left),
    Operator.IN: lambda left, right: contains(right, left),
    Operator.ADD: add,
    Operator.SUBTRACT: subtract,
    Operator.MULTIPLY: multiply,
    Operator.MODULO: modulo,
    Operator.INT_DIVIDE: int_divide,
    Operator.DIVIDE: divide,
    Operator.POWER: power,
}


def apply_operator(operator, left, right):
    """Apply a binary operator to two already evaluated values."""
    try:
        operator = Operator(operator)
    except ValueError:
        raise ArgonError("Runtime Error", f"Unknown operation: {operator}") from None
    handler = _DISPATCH.get(operator)
    if handler is None:
        return compare(operator, left, right)
    return handler(left, right)