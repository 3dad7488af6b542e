import random
import uuid
from pathlib import Path

from rmexif_core.byteorder import pack_u16
from rmexif_core.protocol import (
    EXIF_HEADER,
    MARKER_SOI,
    MARKER_EOI,
    MARKER_SOF0,
    MARKER_DHT,
    MARKER_DQT,
    MARKER_SOS,
    MARKER_COM,
    MARKER_RST_BASE,
    MARKER_APP_BASE,
)

# --- CONFIGURATION ---
SCAN_BYTES = 512
RESTART_EVERY = 128


def segment(marker: int, payload: bytes) -> bytes:
    """Marker + big-endian length (counting itself) + payload."""
    return pack_u16(marker) + pack_u16(len(payload) + 2) + payload


def entropy_data(n: int, restarts: bool = True) -> bytes:
    """Random scan data with every 0xFF stuffed and optional RSTn markers."""
    out = bytearray()
    rst = 0
    for i in range(n):
        if restarts and i and i % RESTART_EVERY == 0:
            out += pack_u16(MARKER_RST_BASE + rst)
            rst = (rst + 1) % 8
        b = random.randint(0, 255)
        out.append(b)
        if b == 0xFF:
            out.append(0x00)
    return bytes(out)


def build_jpeg(exif: bool = True, comment: bytes = b"synthetic", restarts: bool = True) -> bytes:
    # 1. Header
    blob = pack_u16(MARKER_SOI)
    blob += segment(MARKER_APP_BASE, b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00")

    # 2. Metadata
    if exif:
        tiff = b"MM\x00\x2a\x00\x00\x00\x08" + bytes(random.randint(0, 255) for _ in range(32))
        blob += segment(MARKER_APP_BASE + 1, EXIF_HEADER + tiff)
    blob += segment(MARKER_APP_BASE + 1, b"http://ns.adobe.com/xap/1.0/\x00<x:xmpmeta/>")
    if comment:
        blob += segment(MARKER_COM, comment)

    # 3. Tables and frame
    blob += segment(MARKER_DQT, b"\x00" + bytes(range(1, 65)))
    blob += segment(MARKER_SOF0, b"\x08\x00\x10\x00\x10\x01\x01\x11\x00")
    blob += segment(MARKER_DHT, b"\x00" + bytes(16))

    # 4. Scan
    blob += segment(MARKER_SOS, b"\x01\x01\x00\x00\x3f\x00")
    blob += entropy_data(SCAN_BYTES, restarts=restarts)

    blob += pack_u16(MARKER_EOI)
    return blob


def generate_sample(out_dir, exif: bool = True) -> Path:
    sample_id = str(uuid.uuid4())
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"sample-{sample_id[:8]}.jpg"
    path.write_bytes(build_jpeg(exif=exif))
    print(f"GENERATED: {path}")
    return path


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/synth_jpeg.py OUT_DIR [--count N] [--no-exif]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    no_exif, args = pop_flag(args, "--no-exif")

    count = 1
    if "--count" in args:
        i = args.index("--count")
        if i + 1 >= len(args):
            raise SystemExit("--count requires a value")
        count = int(args[i + 1])
        args = args[:i] + args[i + 2:]

    out = args[0] if len(args) > 0 else "samples"
    for _ in range(count):
        generate_sample(out, exif=not no_exif)
