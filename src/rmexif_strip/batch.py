"""rmexif - Strip EXIF from files in place."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from .const import STATUS_STRIPPED, STATUS_UNCHANGED, STATUS_SKIPPED, STATUS_FAILED
from .errors import (
    AllocationError,
    ReadError,
    RmexifError,
    ShortReadError,
    WriteError,
)
from .rewrite import strip_exif


def _file_result(path: Path, status: str, stats: dict | None = None) -> dict:
    stats = stats or {}
    return {
        "path": str(path),
        "status": status,
        "bytes_in": int(stats.get("bytes_in", 0)),
        "bytes_out": int(stats.get("bytes_out", 0)),
        "exif_segments": int(stats.get("exif_segments", 0)),
        "exif_bytes": int(stats.get("exif_bytes", 0)),
        "trailing_bytes": int(stats.get("trailing_bytes", 0)),
        "eoi_found": bool(stats.get("eoi_found", False)),
        "code": None,
        "message": None,
    }


def strip_file(
    path: Path,
    dry_run: bool = False,
    trace: Callable[[dict, str], None] | None = None,
) -> dict:
    """Remove EXIF segments from one file and write it back in place.

    The file is only rewritten after the whole buffer parsed cleanly,
    so any failure leaves it untouched. Zero-length files are skipped.
    """
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError as e:
        raise ReadError(f'"{path}": {e.strerror}', path=str(path)) from e

    if size == 0:
        return _file_result(path, STATUS_SKIPPED)

    try:
        data = path.read_bytes()
    except MemoryError as e:
        raise AllocationError(f"{size} bytes", path=str(path)) from e
    except OSError as e:
        raise ReadError(f'"{path}": {e.strerror}', path=str(path)) from e

    if len(data) < size:
        raise ShortReadError(f"read {len(data)} of {size} bytes", path=str(path))

    try:
        out, stats = strip_exif(data, trace=trace)
    except MemoryError as e:
        raise AllocationError(f"{size} bytes", path=str(path)) from e
    except RmexifError as e:
        e.path = str(path)
        raise

    if out == data:
        return _file_result(path, STATUS_UNCHANGED, stats)

    if not dry_run:
        try:
            path.write_bytes(out)
        except OSError as e:
            raise WriteError(f'"{path}": {e.strerror}', path=str(path)) from e

    return _file_result(path, STATUS_STRIPPED, stats)


def strip_paths(
    paths: Iterable[Path],
    keep_going: bool = False,
    dry_run: bool = False,
    trace: Callable[[dict, str], None] | None = None,
) -> dict:
    """Strip every path in order.

    Default policy is fail-fast: the first fatal error stops the batch and
    later paths are not attempted. With keep_going every path is attempted
    and all failures are reported.
    """
    errors: list[dict] = []
    files: list[dict] = []

    for p in paths:
        p = Path(p)
        try:
            files.append(strip_file(p, dry_run=dry_run, trace=trace))
        except RmexifError as e:
            err = e.to_dict()
            err["path"] = str(p)
            errors.append(err)

            failed = _file_result(p, STATUS_FAILED)
            failed["code"] = e.code
            failed["message"] = str(e)
            files.append(failed)

            if not keep_going:
                break

    return {
        "status": "FAIL" if errors else "PASS",
        "error_count": len(errors),
        "errors": errors,
        "files": files,
    }
