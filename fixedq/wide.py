"""Helpers for wide unsigned integers used by the fixed-point type.

Values are plain Python ints that stand for 384-bit unsigned integers
unless a function says otherwise. A value holding a ``Q128.256`` number
keeps 128 integer bits above 256 fractional bits.
"""

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U192_MAX = (1 << 192) - 1
U384_MAX = (1 << 384) - 1

WIDE_BITS = 384
_ROUND_BITS = 8
_ROUND_THRESHOLD = 128


def _require_wide(value: int) -> int:
    if value < 0 or value > U384_MAX:
        raise ValueError(f"value does not fit in {WIDE_BITS} unsigned bits: {value}")
    return value


def _as_u128(value: int) -> int:
    if value > U128_MAX:
        raise OverflowError("integer overflow when casting to u128")
    return value


def leading_zeros(value: int, bits: int) -> int:
    """Return the number of leading zero bits of ``value`` in a ``bits``-wide word."""
    if value < 0:
        raise ValueError("value must be non-negative")
    length = value.bit_length()
    if length > bits:
        raise ValueError(f"value does not fit in {bits} bits")
    return bits - length


def checked_as_u64(value: int) -> int | None:
    """Return ``value`` if it fits in 64 bits, otherwise ``None``."""
    if leading_zeros(_require_wide(value), WIDE_BITS) < WIDE_BITS - 64:
        return None
    return value


def checked_as_u192(value: int) -> int | None:
    """Return ``value`` if it fits in 192 bits, otherwise ``None``."""
    if leading_zeros(_require_wide(value), WIDE_BITS) < WIDE_BITS - 192:
        return None
    return value


def get_fractional_bits(value: int, fraction_start: int, bits_amount: int) -> int:
    """Extract the top ``bits_amount`` bits of the part below ``fraction_start``.

    ``fraction_start`` is clamped to 256. Raises ``OverflowError`` if the
    extracted bits do not fit in 128 bits.
    """
    _require_wide(value)
    if fraction_start < 0 or bits_amount < 0:
        raise ValueError("bit positions must be non-negative")
    limited_start = min(fraction_start, 256)
    mask = (1 << limited_start) - 1
    shift = limited_start - min(bits_amount, limited_start)
    return _as_u128((value & mask) >> shift)


def q128_256_to_u128_round(value: int) -> int:
    """Round a ``Q128.256`` value to an integer of at most 128 bits.

    A zero or maximal integer part is returned unchanged. Raises
    ``OverflowError`` if the integer part does not fit in 128 bits.
    """
    _require_wide(value)
    rounded = _as_u128(value >> 256)
    if rounded in (U128_MAX, 0):
        return rounded
    if get_fractional_bits(value, 256, _ROUND_BITS) > _ROUND_THRESHOLD:
        rounded += 1
    return rounded


def checked_q128_256_to_u64_round(value: int) -> int | None:
    """Round a ``Q128.256`` value to a 64-bit integer, or ``None`` if too large.

    A zero or maximal integer part yields the 64-bit maximum.
    """
    _require_wide(value)
    rounded = checked_as_u64(value >> 256)
    if rounded is None:
        return None
    if rounded in (U64_MAX, 0):
        return U64_MAX
    if get_fractional_bits(value, 256, _ROUND_BITS) > _ROUND_THRESHOLD:
        rounded += 1
    return rounded


def q128_256_to_q192_round(value: int) -> int | None:
    """Round a ``Q128.256`` value to a raw 192-bit ``Q64.128`` value.

    Returns ``None`` if the value needs more than 320 bits. A zero or
    maximal result is returned without rounding.
    """
    if leading_zeros(_require_wide(value), WIDE_BITS) < 64:
        return None
    rounded = value >> 128
    if rounded in (U192_MAX, 0):
        return rounded
    if get_fractional_bits(value, 128, _ROUND_BITS) > _ROUND_THRESHOLD:
        rounded += 1
    return rounded