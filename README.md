# fixedq

Exact unsigned fixed-point arithmetic in the Q64.128 format. A value has 64
integer bits and 128 fractional bits, and is held as a raw 192-bit unsigned
integer. Every operation works on plain Python integers, so the results are
exact and always the same.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using it

```python
from fixedq.fixed import Q64_128
from fixedq import roots

a = Q64_128.from_u64(10)
b = Q64_128.from_u64(4)

(a / b).split()            # (2, 170141183460469231731687303715884105728), i.e. 2.5
(a * b).as_u64()           # 40
float(Q64_128.from_float(42.75))  # 42.75

# Overflow and division by zero
Q64_128.from_u64(1).checked_sub(Q64_128.from_u64(2))   # None
a.checked_div(Q64_128.from_u64(0))                     # None
a.saturating_checked_div(Q64_128.from_u64(0))          # None

# Roots and squares
roots.sqrt_from_u128(256).as_u64()         # 16
roots.square_as_u128(Q64_128.from_u64(3))  # 9
roots.checked_div_sqrt(a, b)               # sqrt(2.5) as a Q64_128
```

## What is in the package

### `fixedq.fixed.Q64_128`

`Q64_128` is a frozen, ordered dataclass. Its only field, `value`, is the raw
192-bit integer. The class constants `MAX` and `ONE` hold the largest value
and 1.0.

- Constructors: `Q64_128(raw)`, `from_u64`, `from_u128`, `from_bits(high_bits,
  low_bits)`, `from_wide` and `from_float`. `from_u128` puts the high 64 bits of
  its argument in the integer part and the low 64 bits in the upper half of
  the fraction. `from_float` returns `None` for anything outside `[0, 2**64)`,
  NaN included. `from_wide` raises `OverflowError` when the value needs more
  than 192 bits.
- Reading a value back: `as_u64` truncates. `as_u64_round` rounds half up but
  never goes past the 64-bit maximum. You also have `split`, `integer_bits`,
  `fractional_bits`, `is_zero`, `is_one` and `float(q)`.
- Arithmetic: `+`, `-`, `*` and `/` between two `Q64_128` values. A result
  that overflows or underflows raises `OverflowError`, and `/` by zero raises
  `ZeroDivisionError`. Multiplication and division truncate.
- Checked forms: `checked_add`, `checked_sub`, `checked_mul` and `checked_div`
  return `None` instead of raising. `saturating_mul` returns `MAX` on overflow.
  `saturating_checked_div` returns `None` for a zero divisor and `MAX` on
  overflow. `abs_diff` returns the absolute difference.

The constructors raise `TypeError` when an argument is not an int, and
`ValueError` when it is out of range for its width.

### `fixedq.roots`

- `sqrt(q)` and `sqrt_from_u128(value)` return truncated square roots as
  `Q64_128`.
- `checked_div_sqrt(q1, q2)` returns `sqrt(q1 / q2)`. It returns `ONE` when the
  two values are equal, and `None` when `q2` is zero or the division
  overflows.
- `square(q)` returns the rounded square as a `Q64_128`, or `None` if it does
  not fit.
- `square_as_wide(q)` returns the raw Q128.256 square. Zero gives 0, and one
  gives the plain integer 1.
- `square_as_u128(q)` returns the square rounded to an integer. A square
  whose integer part is 0 comes back as 0, so `0.25` squared gives `0`.
- `checked_square_as_u64(q)` returns the square as a 64-bit integer, or `None`
  if it is too large. `square_as_u64(q)` raises `OverflowError` in that case.
  When a non-zero value that is not one has a square with an integer part of
  0, both functions return the 64-bit maximum, not 0.

Rounding to an integer adds one only when the top 8 fractional bits are
greater than 128.

### `fixedq.wide`

This module has helpers for the 384-bit intermediate values, held as Python
ints. It holds `leading_zeros(value, bits)`, `checked_as_u64`,
`checked_as_u192` and `get_fractional_bits(value, fraction_start,
bits_amount)`, where `fraction_start` is clamped to 256. It also holds the
rounding conversions out of Q128.256: `q128_256_to_u128_round`,
`checked_q128_256_to_u64_round` and `q128_256_to_q192_round`. The constants
`U64_MAX`, `U128_MAX`, `U192_MAX` and `U384_MAX` give the width limits.

## What it does not do

This is a library only. It has no command-line tool. It does not serialise
values to bytes or any storage format, and it has no signed or negative
numbers.