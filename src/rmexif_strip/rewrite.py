from __future__ import annotations

from typing import Callable
from warnings import warn

from .scanner import SegmentScanner

ACTION_KEEP = "keep"
ACTION_DROP = "drop"


def strip_exif(
    buf: bytes,
    trace: Callable[[dict, str], None] | None = None,
) -> tuple[bytes, dict]:
    """Return buf with every EXIF APP1 segment removed, plus scan stats.

    Retained segments are copied verbatim and in order. Copying stops
    after EOI, or at the end of the buffer for truncated files.
    Parse errors propagate before any output is returned.
    """
    scanner = SegmentScanner(buf)
    view = memoryview(buf)
    out = bytearray()

    for seg in scanner:
        if seg.get("exif"):
            action = ACTION_DROP
        else:
            action = ACTION_KEEP
            out += view[seg["start"]:seg["end"]]
        if trace is not None:
            trace(seg, action)

    if not scanner.eoi_found:
        warn(f"No EOI marker found, output ends at offset {scanner.pos}")
    if scanner.trailing_bytes:
        warn(f"Dropped {scanner.trailing_bytes} trailing bytes after offset {scanner.pos}")

    stats = scanner.get_scan_stats()
    stats["bytes_in"] = len(buf)
    stats["bytes_out"] = len(out)
    stats["eoi_found"] = scanner.eoi_found
    stats["trailing_bytes"] = scanner.trailing_bytes
    return bytes(out), stats
