"""Unsigned fixed-point numbers with 64 integer bits and 128 fractional bits."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

from fixedq.wide import U64_MAX, U128_MAX, U192_MAX, checked_as_u192

_FRACTIONAL_MASK = (1 << 128) - 1
_ROUND_FRACTION = 1 << 127
_FRACTIONAL_SCALE = float(1 << 128)
_FLOAT_LIMIT = 18446744073709551616.0


def _require_range(value: int, limit: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int")
    if value < 0 or value > limit:
        raise ValueError(f"{name} out of range: {value}")
    return value


@dataclass(frozen=True, order=True)
class Q64_128:
    """A Q64.128 number stored as a raw 192-bit unsigned integer."""

    value: int = 0

    FRACTIONAL_BITS: ClassVar[int] = 128
    INTEGER_BITS: ClassVar[int] = 64
    MAX: ClassVar[Q64_128]
    ONE: ClassVar[Q64_128]

    def __post_init__(self) -> None:
        _require_range(self.value, U192_MAX, "raw value")

    @classmethod
    def from_u64(cls, value: int) -> Q64_128:
        """Build the fixed-point number equal to the integer ``value``."""
        return cls(_require_range(value, U64_MAX, "u64 value") << cls.FRACTIONAL_BITS)

    @classmethod
    def from_u128(cls, value: int) -> Q64_128:
        """Place a 128-bit integer in the 64 integer and upper 64 fractional bits."""
        value = _require_range(value, U128_MAX, "u128 value")
        high = value >> cls.INTEGER_BITS
        mid = value & U64_MAX
        return cls((high << 128) | (mid << 64))

    @classmethod
    def from_bits(cls, high_bits: int, low_bits: int) -> Q64_128:
        """Combine a 64-bit integer part with a 128-bit fractional part."""
        high = _require_range(high_bits, U64_MAX, "high bits")
        low = _require_range(low_bits, U128_MAX, "low bits")
        return cls((high << 128) | low)

    @classmethod
    def from_float(cls, value: float) -> Q64_128 | None:
        """Convert a float in ``[0, 2**64)``; return ``None`` outside that range."""
        if not (0.0 <= value < _FLOAT_LIMIT):
            return None
        integer_part = math.floor(value)
        scaled = (value - integer_part) * _FRACTIONAL_SCALE
        fractional_part = math.floor(scaled)
        if scaled - fractional_part >= 0.5:
            fractional_part += 1
        return cls.from_bits(integer_part, min(fractional_part, U128_MAX))

    @classmethod
    def from_wide(cls, value: int) -> Q64_128:
        """Convert a 384-bit raw value; raise ``OverflowError`` if it exceeds 192 bits."""
        narrowed = checked_as_u192(value)
        if narrowed is None:
            raise OverflowError("Cannot convert U384 to Q64_128")
        return cls(narrowed)

    def __float__(self) -> float:
        high, low = self.split()
        return float(high) + float(low) / _FRACTIONAL_SCALE

    def as_u64(self) -> int:
        """Return the integer part, truncating the fraction."""
        return self.value >> self.FRACTIONAL_BITS

    def as_u64_round(self) -> int:
        """Return the integer part rounded half up, never past the 64-bit maximum."""
        integer = self.as_u64()
        if integer < U64_MAX and (self.value & _FRACTIONAL_MASK) >= _ROUND_FRACTION:
            integer += 1
        return integer

    def split(self) -> tuple[int, int]:
        """Return ``(integer_part, fractional_part)``."""
        return self.integer_bits(), self.fractional_bits()

    def integer_bits(self) -> int:
        """Return the 64 integer bits."""
        return self.value >> self.FRACTIONAL_BITS

    def fractional_bits(self) -> int:
        """Return the 128 fractional bits."""
        return self.value & _FRACTIONAL_MASK

    def is_zero(self) -> bool:
        return self.value == 0

    def is_one(self) -> bool:
        return self.value == 1 << self.FRACTIONAL_BITS

    def __add__(self, other: object) -> Q64_128:
        if not isinstance(other, Q64_128):
            return NotImplemented
        result = self.checked_add(other)
        if result is None:
            raise OverflowError("arithmetic operation overflow")
        return result

    def __sub__(self, other: object) -> Q64_128:
        if not isinstance(other, Q64_128):
            return NotImplemented
        result = self.checked_sub(other)
        if result is None:
            raise OverflowError("arithmetic operation overflow")
        return result

    def __mul__(self, other: object) -> Q64_128:
        if not isinstance(other, Q64_128):
            return NotImplemented
        return Q64_128.from_wide((self.value * other.value) >> self.FRACTIONAL_BITS)

    def __truediv__(self, other: object) -> Q64_128:
        if not isinstance(other, Q64_128):
            return NotImplemented
        if other.is_zero():
            raise ZeroDivisionError("Division by zero!")
        return Q64_128.from_wide((self.value << self.FRACTIONAL_BITS) // other.value)

    def abs_diff(self, other: Q64_128) -> Q64_128:
        return Q64_128(abs(self.value - other.value))

    def checked_add(self, other: Q64_128) -> Q64_128 | None:
        """Add, returning ``None`` on overflow."""
        total = self.value + other.value
        return Q64_128(total) if total <= U192_MAX else None

    def checked_sub(self, other: Q64_128) -> Q64_128 | None:
        """Subtract, returning ``None`` on underflow."""
        difference = self.value - other.value
        return Q64_128(difference) if difference >= 0 else None

    def checked_mul(self, other: Q64_128) -> Q64_128 | None:
        """Multiply, returning ``None`` on overflow."""
        product = checked_as_u192((self.value * other.value) >> self.FRACTIONAL_BITS)
        return None if product is None else Q64_128(product)

    def checked_div(self, other: Q64_128) -> Q64_128 | None:
        """Divide, returning ``None`` for a zero divisor or an overflowing result."""
        if other.is_zero():
            return None
        quotient = checked_as_u192((self.value << self.FRACTIONAL_BITS) // other.value)
        return None if quotient is None else Q64_128(quotient)

    def saturating_mul(self, other: Q64_128) -> Q64_128:
        """Multiply, returning ``MAX`` on overflow."""
        result = self.checked_mul(other)
        return Q64_128.MAX if result is None else result

    def saturating_checked_div(self, other: Q64_128) -> Q64_128 | None:
        """Divide; ``None`` for a zero divisor, ``MAX`` on overflow."""
        if other.is_zero():
            return None
        result = self.checked_div(other)
        return Q64_128.MAX if result is None else result


Q64_128.MAX = Q64_128(U192_MAX)
Q64_128.ONE = Q64_128.from_u64(1)