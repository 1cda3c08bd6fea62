import struct

import pytest

from sgraph.floatutils import (
    almost_equal_floats,
    clamp,
    difference_of_products,
    float_bits,
    floats_difference_ulps,
    lerp,
    log2,
    pop_count,
    to_byte_array,
)


def _from_bits(bits):
    return struct.unpack("<f", struct.pack("<I", bits))[0]


def test_float_bits_of_one_is_ieee_pattern():
    assert float_bits(1.0) == 0x3F800000


def test_float_bits_negative_is_signed():
    assert float_bits(-1.0) < 0
    assert float_bits(-1.0) & 0x7FFFFFFF == float_bits(1.0)


def test_ulps_of_equal_values_is_zero():
    assert floats_difference_ulps(2.5, 2.5) == 0


def test_ulps_of_signed_zeros_is_zero():
    assert floats_difference_ulps(0.0, -0.0) == 0


def test_ulps_of_adjacent_floats_is_one():
    nxt = _from_bits(0x3F800001)
    assert floats_difference_ulps(1.0, nxt) == 1
    assert floats_difference_ulps(nxt, 1.0) == 1


def test_ulps_across_zero_counts_both_sides():
    tiny = _from_bits(1)
    assert floats_difference_ulps(tiny, -tiny) == 2


def test_almost_equal_within_and_beyond_ulps():
    near = _from_bits(0x3F800000 + 3)
    far = _from_bits(0x3F800000 + 10)
    assert almost_equal_floats(1.0, near, 4) is True
    assert almost_equal_floats(1.0, far, 4) is False


@pytest.mark.parametrize("ulps", [0, -1, 4 * 1024 * 1024])
def test_almost_equal_rejects_bad_ulps(ulps):
    with pytest.raises(ValueError):
        almost_equal_floats(1.0, 1.0, ulps)


def test_difference_of_products_exact_values():
    assert difference_of_products(3.0, 4.0, 2.0, 5.0) == 2.0


def test_difference_of_products_of_same_product_is_zero():
    assert difference_of_products(0.1, 0.3, 0.1, 0.3) == 0.0


def test_clamp_limits():
    assert clamp(-5.0, 0.0, 1.0) == 0.0
    assert clamp(5.0, 0.0, 1.0) == 1.0
    assert clamp(0.25, 0.0, 1.0) == 0.25


def test_clamp_rejects_empty_range():
    with pytest.raises(ValueError):
        clamp(0.5, 1.0, 1.0)


def test_lerp_endpoints_and_midpoint():
    assert lerp(2.0, 4.0, 0.0) == 2.0
    assert lerp(2.0, 4.0, 1.0) == 4.0
    assert lerp(2.0, 4.0, 0.5) == 3.0


@pytest.mark.parametrize("s", [-0.1, 1.1])
def test_lerp_rejects_factor_out_of_range(s):
    with pytest.raises(ValueError):
        lerp(0.0, 1.0, s)


def test_pop_count_bounds():
    assert pop_count(0) == 0
    assert pop_count(0xFFFFFFFF) == 32


@pytest.mark.parametrize("k", range(32))
def test_pop_count_and_log2_of_powers_of_two(k):
    assert pop_count(1 << k) == 1
    assert log2(1 << k) == k
    assert log2((1 << k) | ((1 << k) - 1)) == k


def test_log2_of_zero():
    assert log2(0) == 0


def test_to_byte_array_orders_bytes_most_significant_first():
    assert to_byte_array(0x0102, 0x0304, 2) == bytes([0x01, 0x02, 0x03, 0x04])


def test_to_byte_array_length_and_round_trip():
    packed = to_byte_array(123456789, 987654321, 8)
    assert len(packed) == 16
    assert int.from_bytes(packed[:8], "big") == 123456789
    assert int.from_bytes(packed[8:], "big") == 987654321


def test_to_byte_array_rejects_negative():
    with pytest.raises(ValueError):
        to_byte_array(-1, 0, 4)