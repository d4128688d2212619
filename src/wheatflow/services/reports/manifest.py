"""Listing of backup and export runs written below the data root."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from ...config import settings

_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"

_DESCRIPTIONS = {
    ("backup", ".xlsx"): "Year-end backup workbook",
    ("backup", ".json"): "Year-end backup summary",
}


def output_root() -> Path:
    return (settings.data_root / "outputs").resolve()


def _run_directories(run_type: Optional[str]) -> Iterator[tuple[Path, dict]]:
    """Run directories newest first, with their parsed summary, filtered by run type."""
    root = output_root()
    if not root.exists():
        return
    wanted = _normalize(run_type)
    for run_dir in sorted((p for p in root.iterdir() if p.is_dir()), key=_sort_key, reverse=True):
        summary = _build_run_summary(run_dir)
        if wanted and _normalize(summary["run_type"]) != wanted:
            continue
        yield run_dir, summary


def list_runs(*, run_type: Optional[str] = None, limit: Optional[int] = None) -> list[dict]:
    runs: list[dict] = []
    for _, summary in _run_directories(run_type):
        runs.append(summary)
        if limit and len(runs) >= limit:
            break
    return runs


def list_export_files(
    *,
    run_type: Optional[str] = None,
    file_type: Optional[str] = None,
    limit: Optional[int] = None,
    search: Optional[str] = None,
) -> list[dict]:
    wanted_type = _normalize(file_type)
    needle = _normalize(search)

    exports: list[dict] = []
    for run_dir, summary in _run_directories(run_type):
        for file_path in sorted(p for p in run_dir.iterdir() if p.is_file()):
            record = _build_file_record(file_path, run_dir.name, summary)
            if wanted_type and _normalize(record["file_type"]) != wanted_type:
                continue
            if needle and not any(needle in value.lower() for value in (record["file_name"], record["description"])):
                continue
            exports.append(record)
            if limit and len(exports) >= limit:
                return exports
    return exports


def resolve_export_file(run_id: str, filename: str) -> Path:
    """Path of a file inside a run directory. Anything outside the output root is not found."""
    root = output_root()
    candidate = (root / run_id / filename).resolve()
    if root not in candidate.parents or not candidate.is_file():
        raise FileNotFoundError(filename)
    return candidate


def _build_run_summary(run_dir: Path) -> dict:
    # "backup_20270101T000000Z" or "backup-1_20270101T000000Z" after a name collision
    prefix, _, stamp = run_dir.name.rpartition("_")
    summary_data = _load_summary(run_dir / "summary.json")
    counts = summary_data.get("counts")
    return {
        "id": run_dir.name,
        "run_type": (prefix or run_dir.name).split("-")[0],
        "created_at": _parse_timestamp(stamp),
        "status": summary_data.get("status") or "complete",
        "counts": counts if isinstance(counts, dict) else {},
        "notes": summary_data.get("notes"),
    }


def _build_file_record(file_path: Path, run_id: str, run_summary: dict) -> dict:
    suffix = file_path.suffix.lower()
    return {
        "id": f"{run_id}:{file_path.name}",
        "run_id": run_id,
        "run_type": run_summary["run_type"],
        "file_name": file_path.name,
        "file_type": suffix[1:].upper() or "FILE",
        "size_bytes": file_path.stat().st_size,
        "created_at": run_summary["created_at"],
        "description": _DESCRIPTIONS.get((run_summary["run_type"], suffix), "Export file"),
        "download_path": f"{settings.api_prefix}/reports/exports/{run_id}/{file_path.name}",
    }


def _load_summary(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def _parse_timestamp(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, _TIMESTAMP_FORMAT)
    except ValueError:
        return None


def _sort_key(path: Path) -> float:
    timestamp = _parse_timestamp(path.name.rpartition("_")[2])
    if timestamp:
        return timestamp.timestamp()
    return path.stat().st_mtime


def _normalize(value: Optional[str]) -> str:
    return value.lower().strip() if isinstance(value, str) else ""
