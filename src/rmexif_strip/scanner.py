from __future__ import annotations

from rmexif_core.byteorder import read_u16
from rmexif_core.markers import (
    SHAPE_STANDALONE,
    SHAPE_LENGTH,
    SHAPE_EXIF_CANDIDATE,
    SHAPE_SCAN,
    UnsupportedMarkerError,
    classify,
    is_restart,
    marker_name,
)
from rmexif_core.protocol import (
    MARKER_EOI,
    MARKER_PREFIX,
    MARKER_LEN,
    LENGTH_FIELD_LEN,
)

from .errors import BadLengthError, TruncatedSegmentError, UnsupportedSegmentError
from .exif import is_exif_segment


class SegmentScanner:
    """Walk a JPEG byte buffer one segment at a time.

    - The cursor only moves forward and never passes the buffer end.
    - Every length field is checked against the remaining bytes before use;
      a segment that claims more bytes than exist fails closed.
    - Segments are yielded lazily and not retained.
    """

    def __init__(self, buf: bytes):
        self.buf = buf
        self.pos = 0
        self.eoi_found = False
        self.trailing_bytes = 0
        self.scan_stats = {
            "segments": 0,
            "exif_segments": 0,
            "exif_bytes": 0,
            "entropy_bytes": 0,
            "restart_markers": 0,
        }

    def __iter__(self):
        return self.segments()

    def get_scan_stats(self) -> dict:
        return dict(self.scan_stats)

    def _read_length(self, start: int, marker: int) -> int:
        buf = self.buf
        if start + MARKER_LEN + LENGTH_FIELD_LEN > len(buf):
            raise TruncatedSegmentError(
                f"{marker_name(marker)} length field missing", offset=start
            )

        length = read_u16(buf, start + MARKER_LEN)
        if length < LENGTH_FIELD_LEN:
            raise BadLengthError(f"{marker_name(marker)} declares length {length}", offset=start)

        if start + MARKER_LEN + length > len(buf):
            raise TruncatedSegmentError(
                f"{marker_name(marker)} declares {length} bytes, "
                f"{len(buf) - start - MARKER_LEN} remain",
                offset=start,
            )
        return length

    def _scan_entropy(self, pos: int) -> int:
        """Return the offset of the first real marker at or after pos.

        A candidate counts only if it is above 0xFF00 (so stuffed FF 00
        pairs do not) and is not RST0-RST7. Returns len(buf) if the data
        runs to the end.
        """
        buf = self.buf
        n = len(buf)
        while True:
            i = buf.find(b"\xff", pos)
            if i == -1 or i + 1 >= n:
                return n

            candidate = read_u16(buf, i)
            if candidate > MARKER_PREFIX:
                if not is_restart(candidate):
                    return i
                self.scan_stats["restart_markers"] += 1
            pos = i + 1

    def segments(self):
        buf = self.buf
        n = len(buf)

        while self.pos + MARKER_LEN <= n:
            start = self.pos
            marker = read_u16(buf, start)
            try:
                shape = classify(marker, start)
            except UnsupportedMarkerError as e:
                raise UnsupportedSegmentError(f"{marker:x}", offset=start) from e

            seg = {
                "marker": marker,
                "name": marker_name(marker),
                "shape": shape,
                "start": start,
            }

            if shape == SHAPE_STANDALONE:
                end = start + MARKER_LEN
            elif shape in (SHAPE_LENGTH, SHAPE_EXIF_CANDIDATE):
                length = self._read_length(start, marker)
                end = start + MARKER_LEN + length
                if shape == SHAPE_EXIF_CANDIDATE:
                    seg["exif"] = is_exif_segment(buf, start, length)
            elif shape == SHAPE_SCAN:
                # Scan header first, then entropy-coded data up to the next marker
                length = self._read_length(start, marker)
                data_start = start + MARKER_LEN + length
                end = self._scan_entropy(data_start)
                self.scan_stats["entropy_bytes"] += end - data_start

            seg["end"] = end
            self.scan_stats["segments"] += 1
            if seg.get("exif"):
                self.scan_stats["exif_segments"] += 1
                self.scan_stats["exif_bytes"] += end - start

            self.pos = end
            yield seg

            if marker == MARKER_EOI:
                self.eoi_found = True
                break

        self.trailing_bytes = n - self.pos


def iter_segments(buf: bytes):
    """Yield segment records for buf, see SegmentScanner."""
    return iter(SegmentScanner(buf))
