"""Squares and square roots of ``Q64_128`` numbers."""

from __future__ import annotations

import math

from fixedq.fixed import Q64_128
from fixedq.wide import (
    U128_MAX,
    checked_q128_256_to_u64_round,
    q128_256_to_q192_round,
    q128_256_to_u128_round,
)


def square_as_wide(q: Q64_128) -> int:
    """Return the square of ``q`` as a raw ``Q128.256`` value.

    Zero yields 0 and one yields the plain integer 1.
    """
    if q.is_zero():
        return 0
    if q.is_one():
        return 1
    return q.value * q.value


def square(q: Q64_128) -> Q64_128 | None:
    """Return ``q`` squared with rounding, or ``None`` if it overflows."""
    wide = square_as_wide(q)
    if q.is_zero() or q.is_one():
        return q
    raw = q128_256_to_q192_round(wide)
    if raw is None:
        return None
    return Q64_128.from_wide(raw)


def square_as_u128(q: Q64_128) -> int:
    """Return the rounded square of ``q`` as an integer of at most 128 bits."""
    wide = square_as_wide(q)
    if wide == 1 or q.is_zero():
        return wide
    return q128_256_to_u128_round(wide)


def checked_square_as_u64(q: Q64_128) -> int | None:
    """Return the rounded square of ``q`` as a 64-bit integer, or ``None`` on overflow."""
    wide = square_as_wide(q)
    if wide == 1 or q.is_zero():
        return wide
    return checked_q128_256_to_u64_round(wide)


def square_as_u64(q: Q64_128) -> int:
    """Return the rounded square of ``q`` as a 64-bit integer.

    Raises ``OverflowError`` if it does not fit.
    """
    result = checked_square_as_u64(q)
    if result is None:
        raise OverflowError("square does not fit in 64 bits")
    return result


def sqrt_from_u128(value: int) -> Q64_128:
    """Return the square root of a 128-bit integer as a ``Q64_128``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("value must be an int")
    if value < 0 or value > U128_MAX:
        raise ValueError(f"u128 value out of range: {value}")
    return Q64_128.from_wide(math.isqrt(value << (2 * Q64_128.FRACTIONAL_BITS)))


def sqrt(q: Q64_128) -> Q64_128:
    """Return the square root of ``q``, truncated."""
    return Q64_128.from_wide(math.isqrt(q.value << Q64_128.FRACTIONAL_BITS))


def checked_div_sqrt(q1: Q64_128, q2: Q64_128) -> Q64_128 | None:
    """Return ``sqrt(q1 / q2)``, or ``None`` if the division is invalid."""
    if q2.is_zero():
        return None
    if q1 == q2:
        return Q64_128.ONE
    quotient = q1.checked_div(q2)
    if quotient is None:
        return None
    return sqrt(quotient)