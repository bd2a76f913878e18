from fractions import Fraction

import pytest

from argonrt.arrays import ArgonArray
from argonrt.errors import ArgonError
from argonrt.maps import ArgonMap
from argonrt.operations import (
    Operator,
    add,
    apply_operator,
    compare,
    contains,
    divide,
    int_divide,
    logical_and,
    logical_or,
    modulo,
    multiply,
    not_contains,
    power,
    subtract,
)
from argonrt.values import ArObject, BuiltinFunction

A = Fraction(7, 3)
B = Fraction(-5, 4)


def _obj(**methods):
    return ArObject(
        name="thing",
        attributes={key: BuiltinFunction(key, fn) for key, fn in methods.items()},
    )


def _fail(*args):
    raise ArgonError("Boom", "method failed")


def test_operator_order_and_tokens():
    assert Operator(0) is Operator.AND
    assert Operator(16) is Operator.POWER
    assert Operator(16).tokens == ("^", "**")
    assert Operator(0).tokens == ("&&", " and ")
    assert apply_operator(Operator(16), Fraction(2), Fraction(3)) == 8
    assert apply_operator(Operator(0), Fraction(0), "x") == 0


def test_add_subtract_round_trip():
    assert subtract(add(A, B), B) == A
    assert add(A, B) == add(B, A)


def test_multiply_divide_round_trip():
    assert multiply(divide(A, B), B) == A
    assert int_divide(A, B) == divide(A, B)


def test_divide_by_zero():
    with pytest.raises(ArgonError, match="Cannot divide by zero"):
        divide(A, Fraction(0))


def test_modulo_invariants():
    divisor = Fraction(3)
    for value in (A, B, Fraction(10), Fraction(-10)):
        rest = modulo(value, divisor)
        assert Fraction(0) <= rest < divisor
        assert divide(subtract(value, rest), divisor).denominator == 1


def test_power_integers_and_negative():
    two = Fraction(2)
    assert power(two, Fraction(3)) == multiply(multiply(two, two), two)
    assert power(A, Fraction(0)) == 1
    assert power(two, Fraction(-2)) == divide(Fraction(1), power(two, Fraction(2)))


def test_power_fractional_exponent():
    assert power(Fraction(4), Fraction(1, 2)) == 2


def test_power_requires_number_base():
    with pytest.raises(ArgonError, match="Cannot calculate power of type 'string'"):
        power("x", Fraction(2))


def test_add_type_error_message():
    with pytest.raises(ArgonError) as info:
        add(True, Fraction(1))
    assert info.value.message == "Cannot add type 'number' to type 'boolean'"


def test_subtract_type_error_message():
    with pytest.raises(ArgonError) as info:
        subtract(Fraction(1), None)
    assert info.value.message == "Cannot subtract type 'null' from type 'number'"


def test_object_methods_used():
    thing = _obj(__Add__=lambda other: "added", __Multiply__=lambda other: "multiplied")
    assert add(thing, Fraction(1)) == "added"
    assert multiply(thing, Fraction(1)) == "multiplied"


def test_post_method_used_when_left_fails():
    left = _obj(__Add__=_fail)
    right = _obj(__PostAdd__=lambda other: "post")
    assert add(left, right) == "post"


def test_divide_reports_left_method_error():
    left = _obj(__Divide__=_fail)
    with pytest.raises(ArgonError) as info:
        divide(left, Fraction(2))
    assert info.value.kind == "Boom"


def test_compare_numbers_consistent():
    assert compare(Operator.LESS, B, A) is True
    assert compare(Operator.GREATER, B, A) is False
    assert compare(Operator.LESS_EQUAL, A, A) is True
    assert compare(Operator.GREATER_EQUAL, A, B) is True
    assert compare(Operator.EQUAL, A, A) is True
    assert compare(Operator.NOT_EQUAL, A, B) is True


def test_compare_uses_mirrored_method():
    right = _obj(__LessThanEqual__=lambda other: True)
    assert compare(Operator.GREATER_EQUAL, Fraction(1), right) is True


def test_compare_error_message():
    with pytest.raises(ArgonError) as info:
        compare(Operator.LESS_EQUAL, "a", Fraction(1))
    assert info.value.message == (
        "Cannot compare type 'string' with type 'number' with opperation '<='"
    )


def test_compare_invalid_operator():
    with pytest.raises(ArgonError, match="Invalid comparison operation"):
        compare(Operator.ADD, A, B)


def test_contains_array_and_map():
    items = ArgonArray([Fraction(1), "x"])
    assert contains(items, "x") is True
    assert contains(items, "y") is False
    mapping = ArgonMap({"k": Fraction(1)})
    assert not_contains(mapping, "k") is False
    assert not_contains(mapping, "z") is True


def test_contains_unsupported():
    with pytest.raises(ArgonError, match="is in type 'number'"):
        contains(Fraction(1), Fraction(1))


def test_logical_operators_return_operands():
    assert logical_and(Fraction(0), "x") == 0
    assert logical_and("a", "b") == "b"
    assert logical_or("", "b") == "b"
    assert logical_or("a", "b") == "a"


def test_apply_unknown_operator():
    with pytest.raises(ArgonError, match="Unknown operation"):
        apply_operator(99, A, B)