"""
exec_export.py - Archive Export Module

Responsibilities:
- Write every planned entry into a ZIP archive under its archive name
- Atomic output (temporary file first, then moved to the final path)
- Exception handling and logging
- dry_run support
"""

from pathlib import Path
from typing import List, Optional, Callable
from dataclasses import dataclass, field
from datetime import date, datetime
import json
import logging
import os
import uuid
import zipfile

from .models import ExportPlan, ArchiveEntry, BlobHandle


class ExportError(Exception):
    """Archive could not be produced"""


@dataclass
class ExportResult:
    """Archive export result"""
    archive_path: Optional[Path] = None
    written: List[ArchiveEntry] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)     # Plan warnings
    dry_run: bool = False

    @property
    def written_count(self) -> int:
        return len(self.written)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            f"Export Result:",
            f"  - Archive: {self.archive_path if not self.dry_run else '(dry run)'}",
            f"  - Written: {self.written_count}",
            f"  - Skipped: {self.skipped_count}",
        ]
        if self.skipped:
            lines.append("Skip Details:")
            for msg in self.skipped[:10]:  # Show at most 10
                lines.append(f"  - {msg}")
            if len(self.skipped) > 10:
                lines.append(f"  ... and {len(self.skipped) - 10} more")
        return "\n".join(lines)


def default_archive_name(today: Optional[date] = None) -> str:
    """Default archive filename, e.g. Renamed_Research_Files_2024-03-01.zip"""
    if today is None:
        today = date.today()
    return f"Renamed_Research_Files_{today.isoformat()}.zip"


def _generate_temp_path(destination: Path) -> Path:
    """Generate temporary archive path next to the destination"""
    unique_id = uuid.uuid4().hex[:8]
    return destination.parent / f".__tmp_export__{unique_id}__{destination.name}"


def _write_blob(zf: zipfile.ZipFile, blob: BlobHandle, archive_name: str) -> None:
    """Write one blob into the archive"""
    if isinstance(blob, (bytes, bytearray)):
        zf.writestr(archive_name, bytes(blob))
    else:
        zf.write(Path(blob), arcname=archive_name)


def export_archive(
    plan: ExportPlan,
    destination: Path,
    dry_run: bool = False,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    log_dir: Optional[Path] = None
) -> ExportResult:
    """
    Write the export plan into a ZIP archive

    Args:
        plan: Export plan
        destination: Archive path
        dry_run: Whether to preview only
        progress_callback: Progress callback (current, total, message)
        log_dir: Log directory (for saving plan/result logs)

    Returns:
        Export result

    Raises:
        ExportError: The archive could not be written; nothing is left at
            the destination in that case
    """
    destination = Path(destination)
    result = ExportResult(archive_path=destination, skipped=list(plan.warnings), dry_run=dry_run)
    total = plan.total_count

    if plan.errors:
        raise ExportError("; ".join(plan.errors))

    if log_dir and not dry_run:
        save_plan_log(plan, log_dir)

    if dry_run:
        for i, entry in enumerate(plan.entries):
            if progress_callback:
                progress_callback(i + 1, total, f"[Preview] {entry.record.original_name} -> {entry.archive_name}")
            result.written.append(entry)
        return result

    temp_path = _generate_temp_path(destination)
    logging.info(f"Writing {total} files to {destination}")

    try:
        # Modification times outside 1980-2107 are clamped instead of rejected
        with zipfile.ZipFile(
            temp_path, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
        ) as zf:
            for i, entry in enumerate(plan.entries):
                if progress_callback:
                    progress_callback(i + 1, total, f"{entry.record.original_name} -> {entry.archive_name}")
                _write_blob(zf, entry.record.original_blob, entry.archive_name)
                result.written.append(entry)
        os.replace(temp_path, destination)
    except (OSError, ValueError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
        try:
            temp_path.unlink()
        except FileNotFoundError:
            pass
        logging.error(f"Export failed: {e}")
        raise ExportError(f"Export failed: {e}") from e

    logging.info(f"Archive written: {destination} ({result.written_count} files)")

    if log_dir:
        save_result_log(result, log_dir)

    return result


def save_plan_log(plan: ExportPlan, log_dir: Path) -> Path:
    """Save export plan log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"export_plan_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "total_entries": plan.total_count,
        "conflict_policy": plan.conflict_policy.value,
        "entries": [
            {
                "original": entry.record.original_name,
                "new_name": entry.new_name,
                "archive_name": entry.archive_name,
                "note": entry.note
            }
            for entry in plan.entries
        ],
        "warnings": plan.warnings,
        "errors": plan.errors
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return log_file


def save_result_log(result: ExportResult, log_dir: Path) -> Path:
    """Save export result log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"export_result_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "archive": str(result.archive_path),
        "written_count": result.written_count,
        "skipped_count": result.skipped_count,
        "written": [
            {"original": entry.record.original_name, "archive_name": entry.archive_name}
            for entry in result.written
        ],
        "skipped": result.skipped
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return log_file
