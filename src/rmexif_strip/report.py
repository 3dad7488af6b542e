from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

REPORT_SCHEMA = pa.schema(
    [
        ("path", pa.string()),
        ("status", pa.string()),
        ("bytes_in", pa.int64()),
        ("bytes_out", pa.int64()),
        ("exif_segments", pa.int32()),
        ("exif_bytes", pa.int64()),
        ("trailing_bytes", pa.int64()),
        ("eoi_found", pa.bool_()),
        ("code", pa.string()),
        ("message", pa.string()),
    ]
)


def write_report(files: list[dict], out_path: Path) -> bool:
    """Write per-file results to a Parquet table. Returns False if there is nothing to write."""
    df = pd.DataFrame(files, columns=REPORT_SCHEMA.names)
    if df.empty:
        return False

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    table = pa.Table.from_pandas(df, schema=REPORT_SCHEMA, preserve_index=False)
    pq.write_table(table, out_path)
    return True
