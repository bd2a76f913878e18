from fractions import Fraction

import pytest

from argonrt.arrays import ArgonArray
from argonrt.errors import ArgonError
from argonrt.values import BuiltinFunction, equals, get_item, to_bool, type_of, unwrap

F = Fraction


def numbers(*values):
    return ArgonArray([F(v) for v in values])


def test_type_and_length_attribute():
    arr = numbers(4, 5, 6)
    assert type_of(arr) == "array"
    assert arr.attributes["length"] == F(3)
    assert len(arr) == 3


def test_get_single_and_negative_index():
    arr = numbers(7, 8, 9)
    assert arr.get_index(F(1)) == F(8)
    assert arr.get_index(F(-1)) == F(9)


def test_get_index_out_of_range():
    arr = numbers(1, 2)
    with pytest.raises(ArgonError) as info:
        arr.get_index(F(5))
    assert info.value.kind == "IndexError"
    assert "array of length 2" in info.value.message


def test_get_index_non_integer():
    with pytest.raises(ArgonError) as info:
        numbers(1, 2).get_index(F(1, 2))
    assert info.value.kind == "TypeError"


def test_get_index_too_many_arguments():
    with pytest.raises(ArgonError) as info:
        numbers(1).get_index(F(0), F(1), F(1), F(1))
    assert info.value.kind == "TypeError"


def test_slice_through_get_item():
    items = [F(1), F(2), F(3), F(4)]
    result = get_item(ArgonArray(items), [F(1), F(3)])
    assert list(unwrap(result)) == items[1:3]
    full = get_item(ArgonArray(items), [None, None])
    assert list(unwrap(full)) == items


def test_slice_with_step():
    items = [F(v) for v in range(5)]
    arr = ArgonArray(items)
    assert list(arr.get_index(F(0), None, F(2))) == items[::2]
    assert list(arr.get_index(F(0), None, F(-1))) == list(reversed(items))


def test_slice_end_clamped_to_length():
    items = [F(1), F(2), F(3)]
    assert list(ArgonArray(items).get_index(F(0), F(100))) == items


def test_set_index():
    arr = numbers(1, 2, 3)
    arr.set_index(F(0), "x")
    assert arr.get_index(F(0)) == "x"
    with pytest.raises(ArgonError) as info:
        arr.set_index(F(3), "y")
    assert info.value.kind == "IndexError"
    with pytest.raises(ArgonError) as info:
        arr.set_index("a", "y")
    assert info.value.kind == "TypeError"


def test_append_insert_remove_keep_length_in_sync():
    arr = ArgonArray(["a"])
    arr.append("b", "c")
    assert list(arr) == ["a", "b", "c"]
    arr.insert(F(1), "z")
    assert list(arr) == ["a", "z", "b", "c"]
    arr.insert(F(4), "end")
    assert list(arr)[-1] == "end"
    arr.remove(F(0))
    assert list(arr) == ["z", "b", "c", "end"]
    assert arr.attributes["length"] == F(len(arr))


def test_append_without_arguments():
    with pytest.raises(ArgonError) as info:
        ArgonArray([]).append()
    assert info.value.message == "missing argument"


def test_insert_out_of_range():
    with pytest.raises(ArgonError) as info:
        ArgonArray(["a"]).insert(F(2), "b")
    assert info.value.kind == "IndexError"


def test_pop_last_and_indexed():
    arr = ArgonArray(["a", "b", "c"])
    assert arr.pop() == "c"
    assert arr.pop(F(0)) == "a"
    assert list(arr) == ["b"]
    assert arr.attributes["length"] == F(1)


def test_pop_errors():
    with pytest.raises(ArgonError) as info:
        ArgonArray(["a"]).pop(F(0), F(1))
    assert info.value.message == "too many arguments"
    with pytest.raises(ArgonError) as info:
        ArgonArray([]).pop()
    assert info.value.kind == "IndexError"


def test_clear():
    arr = numbers(1, 2)
    arr.clear()
    assert len(arr) == 0
    assert arr.attributes["length"] == F(0)
    with pytest.raises(ArgonError):
        arr.clear(F(1))


def test_extend():
    arr = ArgonArray(["a"])
    arr.extend(ArgonArray(["b", "c"]))
    assert list(arr) == ["a", "b", "c"]
    with pytest.raises(ArgonError) as info:
        arr.extend("nope")
    assert info.value.message == "argument must be an array"


def test_sort_numbers_and_reverse():
    values = [F(3), F(1), F(2)]
    arr = ArgonArray(values)
    arr.sort()
    assert list(arr) == sorted(values)
    arr.sort(True)
    assert list(arr) == sorted(values, reverse=True)


def test_sort_with_key_function():
    arr = ArgonArray(["ccc", "a", "bb"])
    arr.sort(False, lambda s: F(len(s)))
    assert list(arr) == ["a", "bb", "ccc"]


def test_sort_argument_checks():
    with pytest.raises(ArgonError) as info:
        numbers(1).sort(F(1))
    assert info.value.message == "argument must be a boolean"
    with pytest.raises(ArgonError) as info:
        numbers(1).sort(False, F(1))
    assert info.value.message == "argument must be a function"


def test_sort_mixed_types_fails():
    with pytest.raises(ArgonError):
        ArgonArray([F(1), "a"]).sort()


def test_map_and_filter():
    arr = numbers(1, -2, 3)
    negated = arr.map(lambda x: -x)
    assert all(a + b == 0 for a, b in zip(arr, negated))
    positive = arr.filter(lambda x: x > 0)
    assert list(positive) == [F(1), F(3)]
    assert len(arr) == 3


def test_map_requires_function():
    with pytest.raises(ArgonError) as info:
        numbers(1).map(F(2))
    assert info.value.message == "argument must be a function"


def test_reduce():
    values = [F(1), F(2), F(3)]
    assert ArgonArray(values).reduce(lambda acc, x: acc + x, F(0)) == sum(values)
    with pytest.raises(ArgonError) as info:
        ArgonArray([]).reduce(lambda acc, x: acc, F(0))
    assert info.value.kind == "ValueError"


def test_join():
    assert ArgonArray(["a", "b", "c"]).join("-") == "a-b-c"
    with pytest.raises(ArgonError) as info:
        ArgonArray(["a", F(1)]).join(",")
    assert info.value.message == "array must be an array of strings"


def test_concat_leaves_original_unchanged():
    first = ArgonArray(["a"])
    joined = first.concat(ArgonArray(["b"]))
    assert list(joined) == ["a", "b"]
    assert list(first) == ["a"]


def test_equality_and_contains():
    assert equals(numbers(1, 2), numbers(1, 2)) is True
    assert equals(numbers(1, 2), numbers(2, 1)) is False
    assert numbers(1, 2).equals("x") is False
    assert numbers(1, 2).contains(F(2)) is True
    assert numbers(1, 2).contains(F(5)) is False


def test_truthiness():
    assert to_bool(ArgonArray([])) is False
    assert to_bool(ArgonArray([None])) is True


def test_methods_are_builtin_functions():
    arr = ArgonArray(["a"])
    append = arr.get_attribute("append")
    assert isinstance(append, BuiltinFunction)
    append("b")
    assert arr.attributes["length"] == F(2)