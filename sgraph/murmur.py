"""MurmurHash3 hashes: 32-bit and 128-bit variants."""

from __future__ import annotations

__all__ = [
    "murmur3_scramble32",
    "murmur3_finalize32",
    "murmur3_finalize64",
    "murmur3_hash32",
    "murmur3_hash128",
]

_M32 = 0xFFFFFFFF
_M64 = 0xFFFFFFFFFFFFFFFF

_C1 = 0x87C37B91114253D5
_C2 = 0x4CF5AD432745937F


def _as_bytes(key: str | bytes | bytearray) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


def _char(byte: int, mask: int) -> int:
    """Widen a byte as a signed char converted to an unsigned type."""
    return (byte - 256 if byte >= 128 else byte) & mask


def _rotl32(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & _M32


def _rotl64(x: int, r: int) -> int:
    return ((x << r) | (x >> (64 - r))) & _M64


def murmur3_scramble32(k: int) -> int:
    """Mix one 32-bit block."""
    k = (k * 0xCC9E2D51) & _M32
    k = _rotl32(k, 15)
    return (k * 0x1B873593) & _M32


def murmur3_finalize32(k: int) -> int:
    """Final avalanche of a 32-bit hash."""
    k &= _M32
    k ^= k >> 16
    k = (k * 0x85EBCA6B) & _M32
    k ^= k >> 13
    k = (k * 0xC2B2AE35) & _M32
    k ^= k >> 16
    return k


def murmur3_finalize64(k: int) -> int:
    """Final avalanche of a 64-bit hash."""
    k &= _M64
    k ^= k >> 33
    k = (k * 0xFF51AFD7ED558CCD) & _M64
    k ^= k >> 33
    k = (k * 0xC4CEB9FE1A85EC53) & _M64
    k ^= k >> 33
    return k


def murmur3_hash32(key: str | bytes | bytearray, seed: int = 0) -> int:
    """Return the 32-bit MurmurHash3 of ``key``; text is hashed as UTF-8."""
    data = _as_bytes(key)
    length = len(data)
    h = seed & _M32
    k = 0
    block_end = length - (length & 3)
    for start in range(0, block_end, 4):
        for byte in reversed(data[start:start + 4]):
            k = ((k << 8) | _char(byte, _M32)) & _M32
        h ^= murmur3_scramble32(k)
        h = _rotl32(h, 13)
        h = (h * 5 + 0xE6546B64) & _M32
    k = 0
    for byte in reversed(data[block_end:]):
        k = ((k << 8) | _char(byte, _M32)) & _M32
    h ^= murmur3_scramble32(k)
    h ^= length & _M32
    return murmur3_finalize32(h)


def murmur3_hash128(
    key: str | bytes | bytearray, seed1: int = 0, seed2: int = 0
) -> tuple[int, int]:
    """Return the 128-bit hash of ``key`` as two 64-bit halves.

    Each 16-byte block feeds its odd bytes to the first lane and the even
    bytes from offset 2 up to 16 to the second; bytes past the end of the
    key read as zero.
    """
    data = _as_bytes(key)
    length = len(data)
    h1 = seed1 & _M64
    h2 = seed2 & _M64

    def at(index: int) -> int:
        return _char(data[index], _M64) if index < length else 0

    nblocks = length // 16
    for block in range(nblocks):
        base = block * 16
        k1 = 0
        k2 = 0
        for n in range(8, 0, -1):
            k1 = ((k1 << 8) | at(base + 2 * n - 1)) & _M64
            k2 = ((k2 << 8) | at(base + 2 * n)) & _M64

        k1 = (k1 * _C1) & _M64
        k1 = _rotl64(k1, 31)
        k1 = (k1 * _C2) & _M64
        h1 ^= k1

        h1 = _rotl64(h1, 27)
        h1 = (h1 + h2) & _M64
        h1 = (h1 * 5 + 0x52DCE729) & _M64

        k2 = (k2 * _C2) & _M64
        k2 = _rotl64(k2, 33)
        k2 = (k2 * _C1) & _M64
        h2 ^= k2

        h2 = _rotl64(h2, 31)
        h2 = (h2 + h1) & _M64
        h2 = (h2 * 5 + 0x38495AB5) & _M64

    tail = data[nblocks * 16:]
    rest = len(tail)
    k1 = 0
    k2 = 0

    if rest > 8:
        for i in range(rest - 1, 7, -1):
            k2 ^= (_char(tail[i], _M64) << ((i - 8) * 8)) & _M64
        k2 = (k2 * _C2) & _M64
        k2 = _rotl64(k2, 33)
        k2 = (k2 * _C1) & _M64
        h2 ^= k2

    if rest > 0:
        for i in range(min(rest, 8) - 1, -1, -1):
            k1 ^= (_char(tail[i], _M64) << (i * 8)) & _M64
        k1 = (k1 * _C1) & _M64
        k1 = _rotl64(k1, 31)
        k1 = (k1 * _C2) & _M64
        h1 ^= k1

    h1 ^= length
    h2 ^= length

    h1 = (h1 + h2) & _M64
    h2 = (h2 + h1) & _M64

    h1 = murmur3_finalize64(h1)
    h2 = murmur3_finalize64(h2)

    h1 = (h1 + h2) & _M64
    h2 = (h2 + h1) & _M64

    return h1, h2