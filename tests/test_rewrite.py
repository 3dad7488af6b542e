import pytest

from rmexif_core.byteorder import pack_u16
from rmexif_core.protocol import EXIF_HEADER, MARKER_SOI, MARKER_EOI, MARKER_COM, MARKER_SOS
from rmexif_strip.errors import BadLengthError, TruncatedSegmentError, UnsupportedSegmentError
from rmexif_strip.rewrite import strip_exif
from rmexif_strip.scanner import iter_segments

from synth_jpeg import build_jpeg, segment

SOI = pack_u16(MARKER_SOI)
EOI = pack_u16(MARKER_EOI)
APP1 = 0xFFE1
SOS_HEADER = segment(MARKER_SOS, b"\x01\x01\x00\x00\x3f\x00")


def test_exif_app1_removed_and_comment_kept():
    app1 = segment(APP1, EXIF_HEADER)
    com = segment(MARKER_COM, b"\xab\xcd\xef\x01")
    assert len(app1) == 10
    assert com[2:4] == b"\x00\x06"

    out, stats = strip_exif(SOI + app1 + com + EOI)
    assert out == SOI + com + EOI
    assert stats["exif_segments"] == 1
    assert stats["exif_bytes"] == 10
    assert stats["eoi_found"] is True


def test_short_app1_kept_verbatim():
    # Declared length 4: two payload bytes, cannot hold the signature
    short = pack_u16(APP1) + pack_u16(4) + b"Ex"
    data = SOI + short + EOI
    out, stats = strip_exif(data)
    assert out == data
    assert stats["exif_segments"] == 0


def test_app1_payload_shorter_than_signature_not_read_past_segment():
    # Length 7 leaves 5 payload bytes; the following byte must not complete the match
    partial = pack_u16(APP1) + pack_u16(7) + b"Exif\x00"
    data = SOI + partial + EOI
    out, _ = strip_exif(data)
    assert out == data


def test_non_exif_app1_kept():
    xmp = segment(APP1, b"http://ns.adobe.com/xap/1.0/\x00<x/>")
    lower = segment(APP1, b"exif\x00\x00rest")
    data = SOI + xmp + lower + EOI
    out, stats = strip_exif(data)
    assert out == data
    assert stats["exif_segments"] == 0


def test_multiple_exif_segments_removed_in_order():
    com1 = segment(MARKER_COM, b"one")
    com2 = segment(MARKER_COM, b"two")
    exif1 = segment(APP1, EXIF_HEADER + b"MM\x00\x2a")
    exif2 = segment(APP1, EXIF_HEADER + b"II\x2a\x00")
    data = SOI + exif1 + com1 + exif2 + com2 + EOI
    out, stats = strip_exif(data)
    assert out == SOI + com1 + com2 + EOI
    assert len(data) - len(out) == stats["exif_bytes"] == len(exif1) + len(exif2)


def test_without_exif_output_equals_input():
    data = build_jpeg(exif=False)
    out, stats = strip_exif(data)
    assert out == data
    assert stats["bytes_in"] == stats["bytes_out"] == len(data)


def test_synthetic_file_loses_exactly_its_exif():
    data = build_jpeg(exif=True)
    out, stats = strip_exif(data)
    assert EXIF_HEADER in data
    assert EXIF_HEADER not in out
    assert b"http://ns.adobe.com/xap/1.0/" in out
    assert len(data) - len(out) == stats["exif_bytes"]
    assert stats["restart_markers"] > 0


def test_idempotent():
    once, _ = strip_exif(build_jpeg(exif=True))
    twice, stats = strip_exif(once)
    assert twice == once
    assert stats["exif_segments"] == 0


def test_stuffed_bytes_and_restart_markers_do_not_end_scan():
    scan = b"\x12\xff\x00\x34\xff\xd3\x56\xff\x00"
    data = SOI + SOS_HEADER + scan + EOI
    segs = list(iter_segments(data))
    assert [s["name"] for s in segs] == ["SOI", "SOS", "EOI"]
    assert segs[1]["end"] == len(data) - 2

    out, stats = strip_exif(data)
    assert out == data
    assert stats["entropy_bytes"] == len(scan)
    assert stats["restart_markers"] == 1


def test_scan_ends_at_next_real_marker():
    exif = segment(APP1, EXIF_HEADER)
    data = SOI + SOS_HEADER + b"\x01\x02" + exif + EOI
    out, _ = strip_exif(data)
    assert out == SOI + SOS_HEADER + b"\x01\x02" + EOI


def test_unsupported_marker_aborts():
    data = SOI + pack_u16(0xFFF0) + pack_u16(4) + b"\x00\x00" + EOI
    with pytest.raises(UnsupportedSegmentError) as exc:
        strip_exif(data)
    assert exc.value.code == "E_UNSUPPORTED_MARKER"
    assert exc.value.offset == 2


def test_non_jpeg_rejected():
    with pytest.raises(UnsupportedSegmentError):
        strip_exif(b"\x89PNG\r\n\x1a\n")


def test_declared_length_past_end_fails_closed():
    data = SOI + pack_u16(MARKER_COM) + pack_u16(100) + b"short"
    with pytest.raises(TruncatedSegmentError) as exc:
        strip_exif(data)
    assert exc.value.offset == 2


def test_missing_length_field_fails_closed():
    with pytest.raises(TruncatedSegmentError):
        strip_exif(SOI + pack_u16(MARKER_COM))


def test_length_below_two_rejected():
    with pytest.raises(BadLengthError):
        strip_exif(SOI + pack_u16(MARKER_COM) + pack_u16(1) + EOI)


def test_missing_eoi_passes_through_with_warning():
    data = SOI + segment(MARKER_COM, b"abc")
    with pytest.warns(UserWarning, match="No EOI"):
        out, stats = strip_exif(data)
    assert out == data
    assert stats["eoi_found"] is False


def test_truncated_scan_data_passes_through():
    data = SOI + SOS_HEADER + b"\x01\x02\xff\x00\x03"
    with pytest.warns(UserWarning):
        out, _ = strip_exif(data)
    assert out == data


def test_bytes_after_eoi_dropped_with_warning():
    data = SOI + EOI + b"junk"
    with pytest.warns(UserWarning, match="trailing"):
        out, stats = strip_exif(data)
    assert out == SOI + EOI
    assert stats["trailing_bytes"] == 4


def test_trace_reports_each_segment():
    seen = []
    data = SOI + segment(APP1, EXIF_HEADER) + EOI
    strip_exif(data, trace=lambda seg, action: seen.append((seg["name"], action)))
    assert seen == [("SOI", "keep"), ("APP1", "drop"), ("EOI", "keep")]
