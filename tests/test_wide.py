import pytest
from hypothesis import given
from hypothesis import strategies as st

from fixedq.wide import (
    U64_MAX,
    U128_MAX,
    U192_MAX,
    U384_MAX,
    checked_as_u192,
    checked_as_u64,
    checked_q128_256_to_u64_round,
    get_fractional_bits,
    leading_zeros,
    q128_256_to_q192_round,
    q128_256_to_u128_round,
)

wide = st.integers(min_value=0, max_value=U384_MAX)


def test_leading_zeros_of_zero_is_width():
    assert leading_zeros(0, 384) == 384
    assert leading_zeros(0, 192) == 192


def test_leading_zeros_of_max_is_zero():
    assert leading_zeros(U384_MAX, 384) == 0
    assert leading_zeros(U192_MAX, 192) == 0


@given(wide.filter(lambda v: v > 0))
def test_leading_zeros_brackets_value(value):
    lz = leading_zeros(value, 384)
    top = 384 - lz
    assert 1 << (top - 1) <= value < 1 << top


def test_leading_zeros_rejects_negative_and_too_wide():
    with pytest.raises(ValueError):
        leading_zeros(-1, 384)
    with pytest.raises(ValueError):
        leading_zeros(1 << 64, 64)


def test_checked_as_u64_bounds():
    assert checked_as_u64(U64_MAX) == U64_MAX
    assert checked_as_u64(U64_MAX + 1) is None


@given(wide)
def test_checked_as_u64_invariant(value):
    result = checked_as_u64(value)
    if value <= U64_MAX:
        assert result == value
    else:
        assert result is None


def test_checked_as_u192_bounds():
    assert checked_as_u192(U192_MAX) == U192_MAX
    assert checked_as_u192(U192_MAX + 1) is None


@given(wide)
def test_checked_as_u192_invariant(value):
    result = checked_as_u192(value)
    if value <= U192_MAX:
        assert result == value
    else:
        assert result is None


def test_wide_functions_reject_out_of_range():
    with pytest.raises(ValueError):
        checked_as_u64(U384_MAX + 1)
    with pytest.raises(ValueError):
        get_fractional_bits(-1, 256, 8)


def test_get_fractional_bits_top_byte():
    top = 0x81
    value = top << 248
    assert get_fractional_bits(value, 256, 8) == top


@given(wide, st.integers(min_value=0, max_value=256))
def test_get_fractional_bits_ignores_integer_part(value, start):
    low = value & ((1 << start) - 1)
    assert get_fractional_bits(value, start, 8) == get_fractional_bits(low, start, 8)


@given(wide)
def test_get_fractional_bits_clamps_start(value):
    assert get_fractional_bits(value, 300, 8) == get_fractional_bits(value, 256, 8)


def test_get_fractional_bits_amount_larger_than_start():
    value = 0xABCD
    assert get_fractional_bits(value, 4, 10) == value & 0xF


def test_get_fractional_bits_overflow():
    with pytest.raises(OverflowError):
        get_fractional_bits(U384_MAX, 256, 200)


def test_u128_round_up_and_not():
    integer = 7
    assert q128_256_to_u128_round((integer << 256) + (0x81 << 248)) == integer + 1
    assert q128_256_to_u128_round((integer << 256) + (0x80 << 248)) == integer


def test_u128_round_edges_unchanged():
    assert q128_256_to_u128_round(0xFF << 248) == 0
    assert q128_256_to_u128_round((U128_MAX << 256) + (0xFF << 248)) == U128_MAX


@given(
    st.integers(min_value=1, max_value=U128_MAX - 1),
    st.integers(min_value=0, max_value=(1 << 256) - 1),
)
def test_u128_round_is_floor_or_next(integer, fraction):
    result = q128_256_to_u128_round((integer << 256) | fraction)
    assert result in (integer, integer + 1)
    assert (result == integer + 1) == ((fraction >> 248) > 128)


def test_u64_round_too_large_is_none():
    assert checked_q128_256_to_u64_round(1 << 320) is None


def test_u64_round_up_and_not():
    integer = 7
    assert checked_q128_256_to_u64_round((integer << 256) + (0x81 << 248)) == integer + 1
    assert checked_q128_256_to_u64_round((integer << 256) + (0x80 << 248)) == integer


def test_u64_round_edges_saturate():
    assert checked_q128_256_to_u64_round(0xFF << 248) == U64_MAX
    assert checked_q128_256_to_u64_round(U64_MAX << 256) == U64_MAX


def test_q192_round_too_large_is_none():
    assert q128_256_to_q192_round(1 << 320) is None


def test_q192_round_up_and_not():
    raw = 7
    assert q128_256_to_q192_round((raw << 128) + (0x81 << 120)) == raw + 1
    assert q128_256_to_q192_round((raw << 128) + (0x80 << 120)) == raw


def test_q192_round_edges_unchanged():
    assert q128_256_to_q192_round(0xFF << 120) == 0
    assert q128_256_to_q192_round((U192_MAX << 128) + (0xFF << 120)) == U192_MAX


@given(
    st.integers(min_value=1, max_value=U192_MAX - 1),
    st.integers(min_value=0, max_value=(1 << 128) - 1),
)
def test_q192_round_is_floor_or_next(raw, fraction):
    result = q128_256_to_q192_round((raw << 128) | fraction)
    assert result in (raw, raw + 1)
    assert (result == raw + 1) == ((fraction >> 120) > 128)