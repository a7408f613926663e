"""
scan_files.py - File Selection Module

Turns directories and file paths chosen by the user into collection records.
The file content is not read here; records keep the path as their blob handle.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from .collection import FileCollection
from .models import FileRecord


SUPPORTED_SUFFIXES = (".pdf", ".docx", ".doc", ".jpg", ".jpeg", ".png")


def scan_directory(
    directory: Path,
    suffixes: Optional[Iterable[str]] = SUPPORTED_SUFFIXES,
    include_hidden: bool = False
) -> List[Path]:
    """
    Scan single directory (non-recursive)

    Args:
        directory: Target directory
        suffixes: Accepted suffixes (with dot), None accepts everything
        include_hidden: Whether to include hidden files

    Returns:
        File paths sorted by name
    """
    directory = Path(directory).resolve()
    if not directory.is_dir():
        raise ValueError(f"Directory does not exist: {directory}")

    accepted = {s.lower() for s in suffixes} if suffixes is not None else None
    results: List[Path] = []

    for item in directory.iterdir():
        if not item.is_file():
            continue

        if not include_hidden and item.name.startswith('.'):
            continue

        if accepted is not None and item.suffix.lower() not in accepted:
            continue

        results.append(item)

    return sorted(results, key=lambda p: p.name.lower())


def collect_paths(
    paths: Iterable[Path],
    suffixes: Optional[Iterable[str]] = SUPPORTED_SUFFIXES
) -> List[Path]:
    """
    Expand a mix of files and directories into a file list

    Files are kept as given (in order); directories are scanned with
    scan_directory. Duplicates are dropped.

    Raises:
        ValueError: A path does not exist
    """
    results: List[Path] = []
    seen = set()

    for p in paths:
        p = Path(p).expanduser()
        if p.is_dir():
            found = scan_directory(p, suffixes)
        elif p.is_file():
            found = [p.resolve()]
        else:
            raise ValueError(f"Path does not exist: {p}")

        for f in found:
            if f not in seen:
                seen.add(f)
                results.append(f)

    return results


def list_suffixes(directory: Path, include_hidden: bool = False) -> List[str]:
    """
    List all file suffixes in the directory

    Returns:
        Suffix list (deduplicated, sorted)
    """
    directory = Path(directory).resolve()
    if not directory.is_dir():
        return []

    suffixes = set()
    for item in directory.iterdir():
        if item.is_file():
            if not include_hidden and item.name.startswith('.'):
                continue
            if item.suffix:
                suffixes.add(item.suffix.lower())

    return sorted(suffixes)


def ingest_paths(collection: FileCollection, paths: Iterable[Path]) -> List[FileRecord]:
    """Add files to the collection, keyed by their filename"""
    return collection.ingest_many((p.name, p) for p in paths)
