"""Decoder for QOI ("Quite OK Image") encoded pictures."""

from __future__ import annotations

import struct
from dataclasses import dataclass

__all__ = ["QOIHeader", "QOIError", "read_header", "decode_pixels", "decode"]

_OP_INDEX = 0x00
_OP_DIFF = 0x40
_OP_LUMA = 0x80
_OP_RUN = 0xC0
_OP_RGB = 0xFE
_OP_RGBA = 0xFF
_MASK_2 = 0xC0

MAGIC = b"qoif"
HEADER_SIZE = 14
PADDING = bytes((0, 0, 0, 0, 0, 0, 0, 1))
PIXELS_MAX = 400_000_000

SRGB = 0
LINEAR = 1


class QOIError(ValueError):
    """Raised for data that is not a valid QOI image."""


@dataclass(frozen=True)
class QOIHeader:
    """Image size, channel count stored in the file and colour space."""

    width: int
    height: int
    channels: int
    colorspace: int


def _check_channels(channels: int) -> None:
    if channels not in (3, 4):
        raise QOIError(f"channels must be 3 or 4, got {channels}")


def read_header(data: bytes) -> QOIHeader:
    """Parse and validate the 14-byte header at the start of ``data``."""
    if len(data) < HEADER_SIZE:
        raise QOIError(f"data holds {len(data)} bytes, a header needs {HEADER_SIZE}")
    magic, width, height, channels, colorspace = struct.unpack_from(">4sIIBB", data)
    if magic != MAGIC:
        raise QOIError("bad magic")
    if not width or not height:
        raise QOIError("image has no pixels")
    if channels < 3 or channels > 4:
        raise QOIError(f"bad channel count {channels}")
    if colorspace > LINEAR:
        raise QOIError(f"bad colour space {colorspace}")
    if height >= PIXELS_MAX // width:
        raise QOIError("image is too large")
    return QOIHeader(width, height, channels, colorspace)


def decode_pixels(data: bytes, header: QOIHeader, channels: int) -> bytes:
    """Decode the chunks that follow the header into ``channels`` bytes per pixel.

    Once the chunks run out, the remaining pixels repeat the last one.
    """
    _check_channels(channels)
    r, g, b, a = 0, 0, 0, 255
    index = [(0, 0, 0, 0)] * 64
    chunks_len = len(data) - len(PADDING)
    pos = HEADER_SIZE
    run = 0
    out = bytearray()

    try:
        for _ in range(header.width * header.height):
            if run > 0:
                run -= 1
            elif pos < chunks_len:
                b1 = data[pos]
                pos += 1
                if b1 == _OP_RGB:
                    r, g, b = data[pos], data[pos + 1], data[pos + 2]
                    pos += 3
                elif b1 == _OP_RGBA:
                    r, g, b, a = data[pos], data[pos + 1], data[pos + 2], data[pos + 3]
                    pos += 4
                elif b1 & _MASK_2 == _OP_INDEX:
                    r, g, b, a = index[b1]
                elif b1 & _MASK_2 == _OP_DIFF:
                    r = (r + ((b1 >> 4) & 0x03) - 2) & 0xFF
                    g = (g + ((b1 >> 2) & 0x03) - 2) & 0xFF
                    b = (b + (b1 & 0x03) - 2) & 0xFF
                elif b1 & _MASK_2 == _OP_LUMA:
                    b2 = data[pos]
                    pos += 1
                    vg = (b1 & 0x3F) - 32
                    r = (r + vg - 8 + ((b2 >> 4) & 0x0F)) & 0xFF
                    g = (g + vg) & 0xFF
                    b = (b + vg - 8 + (b2 & 0x0F)) & 0xFF
                else:
                    run = b1 & 0x3F
                index[(r * 3 + g * 5 + b * 7 + a * 11) & 63] = (r, g, b, a)

            if channels == 4:
                out += bytes((r, g, b, a))
            else:
                out += bytes((r, g, b))
    except IndexError:
        raise QOIError("chunk data is truncated") from None

    return bytes(out)


def decode(data: bytes, channels: int | None = None) -> tuple[QOIHeader, bytes]:
    """Decode a whole QOI image; ``channels`` defaults to the count stored in the file."""
    header = read_header(data)
    return header, decode_pixels(data, header, header.channels if channels is None else channels)