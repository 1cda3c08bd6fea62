import pytest

from sgraph.murmur import (
    murmur3_finalize32,
    murmur3_finalize64,
    murmur3_hash128,
    murmur3_hash32,
    murmur3_scramble32,
)


def test_hash32_empty_key_seed_zero():
    assert murmur3_hash32("") == 0


def test_hash32_empty_key_seed_one():
    assert murmur3_hash32(b"", 1) == 0x514E28B7


def test_hash32_known_sentence():
    assert murmur3_hash32("The quick brown fox jumps over the lazy dog") == 0x2E4FF723


def test_scramble_and_finalize_fix_zero():
    assert murmur3_scramble32(0) == 0
    assert murmur3_finalize32(0) == 0
    assert murmur3_finalize64(0) == 0


def test_finalize32_distinguishes_inputs():
    outputs = {murmur3_finalize32(i) for i in range(1000)}
    assert len(outputs) == 1000
    assert all(0 <= v <= 0xFFFFFFFF for v in outputs)


def test_finalize64_distinguishes_inputs():
    outputs = {murmur3_finalize64(i) for i in range(1000)}
    assert len(outputs) == 1000
    assert all(0 <= v < 1 << 64 for v in outputs)


def test_hash32_str_and_bytes_agree():
    assert murmur3_hash32("scene") == murmur3_hash32(b"scene")


@pytest.mark.parametrize("key", ["a", "ab", "abc", "abcd", "abcde", "HelloComponent"])
def test_hash32_in_range_and_seed_sensitive(key):
    h0 = murmur3_hash32(key, 0)
    h1 = murmur3_hash32(key, 1)
    assert 0 <= h0 <= 0xFFFFFFFF
    assert h0 != h1


def test_hash32_seed_is_truncated_to_32_bits():
    assert murmur3_hash32("name", 1 << 32) == murmur3_hash32("name", 0)


def test_hash32_distinct_names():
    names = ["HelloComponent", "WorldComponent", "ExclamationComponent", "NameComponent"]
    assert len({murmur3_hash32(n) for n in names}) == len(names)


def test_hash128_empty_key_is_zero_with_zero_seeds():
    assert murmur3_hash128("") == (0, 0)


@pytest.mark.parametrize("length", [1, 7, 8, 9, 15, 16, 17, 31, 32, 40])
def test_hash128_in_range_and_deterministic(length):
    key = bytes(range(1, length + 1))
    first = murmur3_hash128(key)
    assert first == murmur3_hash128(key)
    assert all(0 <= h < 1 << 64 for h in first)


def test_hash128_seed_sensitive():
    assert murmur3_hash128("scene", 0, 0) != murmur3_hash128("scene", 1, 0)
    assert murmur3_hash128("scene", 0, 0) != murmur3_hash128("scene", 0, 1)


def test_hash128_tail_bytes_change_result():
    results = {murmur3_hash128("abcdefghijklmnop" + suffix) for suffix in ["", "q", "qr", "qrstuvwxy"]}
    assert len(results) == 4


def test_hash128_str_and_bytes_agree():
    assert murmur3_hash128("component") == murmur3_hash128(b"component")