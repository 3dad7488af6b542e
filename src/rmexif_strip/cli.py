"""rmexif - Remove EXIF metadata from JPEG files in place."""
from __future__ import annotations

import json
from pathlib import Path

import click

from .batch import strip_paths
from .report import write_report

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _echo_marker(seg: dict, action: str) -> None:
    click.echo(f"Marker: {seg['marker']:x} {seg['name']} [{seg['start']}:{seg['end']}] {action}", err=True)


def _fatal_line(err: dict) -> str:
    line = f"FATAL: {err.get('path', '?')}: {err['message']}"
    if err.get("detail"):
        line += f": {err['detail']}"
    if err.get("offset") is not None:
        line += f" (offset {err['offset']})"
    return line


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--keep-going", is_flag=True, help="Attempt every file even after a failure")
@click.option("--dry-run", is_flag=True, help="Parse and report, never write files")
@click.option("-v", "--verbose", is_flag=True, help="Print every marker and per-file outcome")
@click.option("--json", "as_json", is_flag=True, help="Print the batch result as canonical JSON")
@click.option("--report", type=click.Path(dir_okay=False, path_type=Path), help="Write per-file results to a Parquet file")
def main(paths: tuple[Path, ...], keep_going: bool, dry_run: bool, verbose: bool, as_json: bool, report: Path | None) -> None:
    """Remove EXIF segments from each JPEG file PATH, rewriting it in place."""
    trace = _echo_marker if verbose else None
    result = strip_paths(paths, keep_going=keep_going, dry_run=dry_run, trace=trace)

    if verbose:
        for f in result["files"]:
            if f["status"] == "FAILED":
                continue
            click.echo(
                f"{f['status']}: {f['path']} "
                f"({f['exif_segments']} EXIF segments, {f['bytes_in'] - f['bytes_out']} bytes removed)"
            )

    if report is not None:
        try:
            write_report(result["files"], report)
        except OSError as e:
            click.echo(f"FATAL: could not write report {report}: {e}", err=True)
            raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(result, **CANONICAL_JSON_KW))

    # Fail closed, one line per failure, no stack traces
    for err in result["errors"]:
        click.echo(_fatal_line(err), err=True)

    if result["status"] != "PASS":
        raise SystemExit(1)


if __name__ == "__main__":
    main()
