# argonrt

The runtime side of the Argon scripting language: its value model, operators
and built-in library, usable directly from Python.

Numbers are exact rationals (`fractions.Fraction`), so `1/3 + 1/3 + 1/3` is
exactly `1`. Arrays, maps, bytes and buffers are objects carrying the methods,
limits and error messages that Argon scripts see.

## Installation

```
pip install argonrt
```

There are no runtime dependencies. The tests need `pytest`
(`pip install argonrt[test]`).

## Modules

| Module | What it holds |
| --- | --- |
| `argonrt.errors` | `ArgonError`, `throw_error`, `format_error` |
| `argonrt.flow` | `Return`, `Break`, `Continue`, `open_return`, `throw_on_non_loop` |
| `argonrt.numbers` | `is_number_literal`, `parse_number`, `number_to_string`, `absolute`, `factorial`, `ln`, `log10`, `log_n`, `square_root`, `to_number` |
| `argonrt.colour` | `colourise`, `supports_colour` and the `FOREGROUND`, `BACKGROUND`, `ATTRIBUTES` code tables |
| `argonrt.values` | `ArObject`, `BuiltinFunction`, `type_of`, `to_bool`, `wrap`, `unwrap`, `is_unhashable`, `equals`, `not_equals`, `call_value`, `get_item` |
| `argonrt.arrays` | `ArgonArray` |
| `argonrt.maps` | `ArgonMap` |
| `argonrt.buffers` | `ArgonByte`, `ArgonBuffer` |
| `argonrt.jsonio` | `parse`, `stringify`, `json_parse`, `json_stringify` |
| `argonrt.operations` | `Operator`, `apply_operator`, `add`, `subtract`, `multiply`, `divide`, `int_divide`, `modulo`, `power`, `compare`, `contains`, `not_contains`, `logical_and`, `logical_or` |
| `argonrt.files` | `FileReader`, `FileWriter`, `read_file`, `write_file` |
| `argonrt.builtins` | `make_globals` and the individual built-in functions (`build_map`, `build_array`, `hex_string`, `floor_of`, `ceil_of`, `fraction`, `dir_of`, `chr_of`, `ord_of`, `maximum`, `minimum`, `make_error`, `exit_program`, ...) |

## Examples

```python
from fractions import Fraction

from argonrt.operations import Operator, apply_operator, add, power
from argonrt.numbers import parse_number, number_to_string
from argonrt.arrays import ArgonArray
from argonrt.errors import ArgonError

third = parse_number("1") / 3
print(add(add(third, third), third))            # 1

print(number_to_string(power(Fraction(2), Fraction(10)), False))  # 1024
print(apply_operator(Operator.LESS, Fraction(1), Fraction(2)))    # True

items = ArgonArray([Fraction(3), Fraction(1), Fraction(2)])
items.sort()
print(len(items))                               # 3

try:
    items.get_index(Fraction(10))
except ArgonError as error:
    print(error.kind, error.message)
    # IndexError index out of range, trying to access index 10 in array of length 3
```

### Errors

Every built-in reports failure by raising `ArgonError`, which carries the
error kind (such as `TypeError` or `Runtime Error`), the message, and the
line, path and code of the place it came from when those are known.
`format_error(error, use_colour)` renders one the way it is shown to the
user, with the location first when all three are set.

### Objects and special methods

`ArObject` keeps its attributes in one mapping, `attributes`. Operators and
built-ins look there for special methods such as `__Add__`, `__PostAdd__`,
`__Equal__`, `__LessThan__`, `__Contains__`, `__Boolean__`, `__getindex__`
and `__call__`, so an object can take part in `+`, `==`, `in`, truthiness
and indexing by providing a `BuiltinFunction` under the matching key.

### Colour

`colourise(code, text)` wraps text in the escape for one attribute code from
the tables in `argonrt.colour`, but only when `supports_colour()` says the
output should be coloured: `FORCE_COLOR` forces it on (unless `0` or
`false`), `NO_COLOR` or `TERM=dumb` turn it off, and otherwise standard
output must be a terminal.

### Files

`read_file(path)` returns a `FileReader` with `text`, `json`, `content_type`,
`buffer`, `seek`, `size` and `mod_time`; `write_file(path)` creates or
truncates a file and returns a `FileWriter` with `text`, `buffer` and `json`.
Both are context managers and have `close()`.

### The global scope

```python
from argonrt.builtins import make_globals

scope = make_globals()      # an ArgonMap
print(scope.get("ArgonVersion"))    # 3.0.0
```

It holds the numeric functions, constants (`PI`, `π`, `infinity`), the
`map`, `array`, `buffer`, `boolean`, `number`, `hex`, `chr`, `ord`, `max`,
`min`, `fraction`, `dir`, `error`, `throwError` and `exit` functions, and the
`file`, `json` and `colour` maps.

## What this package does not do

It works on values that are already evaluated. It has no parser for Argon
source text, no statement evaluator, no module import, no command-line
program and no interactive prompt. The global scope has no `time`,
`random`, `socket`, `input`, `thread`, `subprocess`, `sequence`, `path`,
`term`, `round`, or trigonometric functions, and no string type beyond
Python's `str`.