"""EXIF detection for APP1 segments.

https://www.media.mit.edu/pia/Research/deepview/exif.html
"""
from __future__ import annotations

from rmexif_core.protocol import EXIF_HEADER, MARKER_LEN, LENGTH_FIELD_LEN


def is_exif(payload: bytes) -> bool:
    """True when payload starts with the exact "Exif\\0\\0" signature."""
    if len(payload) < len(EXIF_HEADER):
        return False
    return payload[:len(EXIF_HEADER)] == EXIF_HEADER


def is_exif_segment(buf: bytes, start: int, length: int) -> bool:
    """Judge the APP1 segment whose marker sits at buf[start].

    length is the declared length field (it counts its own 2 bytes).
    The payload is never read past the declared segment end.
    """
    payload_start = start + MARKER_LEN + LENGTH_FIELD_LEN
    payload_len = length - LENGTH_FIELD_LEN
    if payload_len < len(EXIF_HEADER):
        # Too short to hold the signature
        return False
    return is_exif(buf[payload_start:payload_start + len(EXIF_HEADER)])
