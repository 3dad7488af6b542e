"""rmexif wire constants.

Single source of truth for JPEG marker codes and the EXIF signature.
Scanner and classifier must stay in sync with these values.
"""

# Marker byte: every marker code has 0xFF as its top byte.
MARKER_PREFIX = 0xFF00

# Standalone markers
MARKER_SOI = 0xFFD8
MARKER_EOI = 0xFFD9

# Length-prefixed markers
MARKER_SOF0 = 0xFFC0  # Baseline DCT
MARKER_SOF2 = 0xFFC2  # Progressive DCT
MARKER_DHT  = 0xFFC4
MARKER_DQT  = 0xFFDB
MARKER_DRI  = 0xFFDD
MARKER_COM  = 0xFFFE

# Scan header, followed by entropy-coded data
MARKER_SOS  = 0xFFDA

# Parameterized families: base code and member count
MARKER_RST_BASE  = 0xFFD0
MARKER_RST_COUNT = 8
MARKER_APP_BASE  = 0xFFE0
MARKER_APP_COUNT = 16

# APP1 carries EXIF (and XMP, which is left alone)
EXIF_APP_INDEX = 1

# "Exif" followed by two NUL bytes
EXIF_HEADER = b"Exif\x00\x00"

# Layout: [Marker(2) | Length(2) | Payload(Length - 2)]
U16_FMT = ">H"
MARKER_LEN = 2
LENGTH_FIELD_LEN = 2
