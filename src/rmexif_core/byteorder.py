"""rmexif - Big-endian 16-bit field codec."""
from __future__ import annotations

import struct

from .protocol import U16_FMT


def read_u16(buf: bytes, pos: int) -> int:
    """Decode the big-endian unsigned 16-bit value at buf[pos:pos + 2]."""
    if pos < 0 or pos + 2 > len(buf):
        raise ValueError(f"u16 read at offset {pos} past end of {len(buf)}-byte buffer")
    return struct.unpack_from(U16_FMT, buf, pos)[0]


def pack_u16(value: int) -> bytes:
    """Encode value as 2 big-endian bytes."""
    return struct.pack(U16_FMT, value)
