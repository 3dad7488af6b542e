"""rmexif Core - Byte order and marker classification."""
from .byteorder import read_u16, pack_u16
from .markers import classify, marker_family, marker_name, UnsupportedMarkerError

__all__ = [
    "read_u16",
    "pack_u16",
    "classify",
    "marker_family",
    "marker_name",
    "UnsupportedMarkerError",
]
