import pytest

from rmexif_core import read_u16, pack_u16, classify, marker_family, marker_name, UnsupportedMarkerError
from rmexif_core.markers import (
    SHAPE_STANDALONE,
    SHAPE_LENGTH,
    SHAPE_EXIF_CANDIDATE,
    SHAPE_SCAN,
)


def test_read_u16_is_big_endian():
    assert read_u16(b"\xff\xd8", 0) == 0xFFD8
    assert read_u16(b"\x00\x01\x02", 1) == 0x0102
    assert pack_u16(0xFFE1) == b"\xff\xe1"
    assert read_u16(pack_u16(0x1234), 0) == 0x1234


def test_read_u16_refuses_short_buffer():
    with pytest.raises(ValueError):
        read_u16(b"\xff", 0)
    with pytest.raises(ValueError):
        read_u16(b"\xff\xd8", 1)


def test_marker_families_decode_index():
    assert marker_family(0xFFD0) == ("RST", 0)
    assert marker_family(0xFFD7) == ("RST", 7)
    assert marker_family(0xFFE1) == ("APP", 1)
    assert marker_family(0xFFEF) == ("APP", 15)
    assert marker_family(0xFFDA) == ("SOS", None)
    assert marker_family(0xFFF0) == ("UNKNOWN", None)
    assert marker_name(0xFFD3) == "RST3"
    assert marker_name(0xFFE2) == "APP2"
    assert marker_name(0xFFFE) == "COM"
    assert marker_name(0xFFF0) == "0xFFF0"


@pytest.mark.parametrize(
    "code,shape",
    [
        (0xFFD8, SHAPE_STANDALONE),
        (0xFFD9, SHAPE_STANDALONE),
        (0xFFD0, SHAPE_STANDALONE),
        (0xFFD7, SHAPE_STANDALONE),
        (0xFFC0, SHAPE_LENGTH),
        (0xFFC2, SHAPE_LENGTH),
        (0xFFC4, SHAPE_LENGTH),
        (0xFFDB, SHAPE_LENGTH),
        (0xFFDD, SHAPE_LENGTH),
        (0xFFE0, SHAPE_LENGTH),
        (0xFFE2, SHAPE_LENGTH),
        (0xFFEF, SHAPE_LENGTH),
        (0xFFFE, SHAPE_LENGTH),
        (0xFFE1, SHAPE_EXIF_CANDIDATE),
        (0xFFDA, SHAPE_SCAN),
    ],
)
def test_classify_shapes(code, shape):
    assert classify(code) == shape


@pytest.mark.parametrize("code", [0xFFF0, 0xFFC1, 0xFFDC, 0x8950, 0xFF00, 0xFFFF])
def test_classify_rejects_unknown(code):
    with pytest.raises(UnsupportedMarkerError) as exc:
        classify(code, 10)
    assert exc.value.marker == code
    assert exc.value.offset == 10
