"""rmexif - Marker families, names and segment shapes."""
from __future__ import annotations

from .protocol import (
    MARKER_SOI,
    MARKER_EOI,
    MARKER_SOF0,
    MARKER_SOF2,
    MARKER_DHT,
    MARKER_DQT,
    MARKER_DRI,
    MARKER_COM,
    MARKER_SOS,
    MARKER_RST_BASE,
    MARKER_RST_COUNT,
    MARKER_APP_BASE,
    MARKER_APP_COUNT,
    EXIF_APP_INDEX,
)

# Segment shapes
SHAPE_STANDALONE = "standalone"
SHAPE_LENGTH = "length"
SHAPE_EXIF_CANDIDATE = "exif_candidate"
SHAPE_SCAN = "scan"

_NAMED = {
    MARKER_SOI: "SOI",
    MARKER_EOI: "EOI",
    MARKER_SOF0: "SOF0",
    MARKER_SOF2: "SOF2",
    MARKER_DHT: "DHT",
    MARKER_DQT: "DQT",
    MARKER_DRI: "DRI",
    MARKER_COM: "COM",
    MARKER_SOS: "SOS",
}

_SHAPES = {
    "SOI": SHAPE_STANDALONE,
    "EOI": SHAPE_STANDALONE,
    "RST": SHAPE_STANDALONE,
    "SOF0": SHAPE_LENGTH,
    "SOF2": SHAPE_LENGTH,
    "DHT": SHAPE_LENGTH,
    "DQT": SHAPE_LENGTH,
    "DRI": SHAPE_LENGTH,
    "COM": SHAPE_LENGTH,
    "APP": SHAPE_LENGTH,
    "SOS": SHAPE_SCAN,
}


class UnsupportedMarkerError(ValueError):
    """Marker code outside the recognized set."""

    def __init__(self, marker: int, offset: int | None = None):
        self.marker = marker
        self.offset = offset
        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"Unsupported marker: {marker:x}{where}")


def is_restart(code: int) -> bool:
    return MARKER_RST_BASE <= code < MARKER_RST_BASE + MARKER_RST_COUNT


def is_app(code: int) -> bool:
    return MARKER_APP_BASE <= code < MARKER_APP_BASE + MARKER_APP_COUNT


def marker_family(code: int) -> tuple[str, int | None]:
    """Decode a marker code into (family, index).

    RST0-RST7 and APP0-APP15 come back as ("RST", n) / ("APP", n).
    Named markers have index None; anything else is ("UNKNOWN", None).
    """
    if is_restart(code):
        return "RST", code - MARKER_RST_BASE
    if is_app(code):
        return "APP", code - MARKER_APP_BASE
    return _NAMED.get(code, "UNKNOWN"), None


def marker_name(code: int) -> str:
    family, index = marker_family(code)
    if index is not None:
        return f"{family}{index}"
    if family == "UNKNOWN":
        return f"0x{code:04X}"
    return family


def classify(code: int, offset: int | None = None) -> str:
    """Return the segment shape for a marker code.

    Raises UnsupportedMarkerError for codes with no known shape.
    """
    family, index = marker_family(code)
    if family == "APP" and index == EXIF_APP_INDEX:
        return SHAPE_EXIF_CANDIDATE
    shape = _SHAPES.get(family)
    if shape is None:
        raise UnsupportedMarkerError(code, offset)
    return shape
