"""
safety_checks.py - Safety Check Module

Provides checks run before an archive is written
"""

from pathlib import Path
from typing import Tuple, Optional, List
import os

from .models import ExportPlan


def check_writable(path: Path) -> Tuple[bool, Optional[str]]:
    """
    Check if path is writable

    Args:
        path: Path to check

    Returns:
        (is_writable, error_reason)
    """
    if path.exists():
        if path.is_dir():
            return False, f"Path is a directory: {path}"
        if not os.access(path, os.W_OK):
            return False, f"File is not writable: {path}"
    else:
        # File doesn't exist, check if parent directory is writable
        parent = path.parent
        if not parent.exists():
            return False, f"Parent directory does not exist: {parent}"
        if not os.access(parent, os.W_OK):
            return False, f"Directory is not writable: {parent}"

    return True, None


def check_source(blob) -> Tuple[bool, Optional[str]]:
    """
    Check if a blob handle can be read

    In-memory content is always readable; paths must point at a readable file.
    """
    if isinstance(blob, (bytes, bytearray)):
        return True, None

    path = Path(blob)
    if not path.exists():
        return False, f"Source file does not exist: {path}"
    if not path.is_file():
        return False, f"Source path is not a file: {path}"
    if not os.access(path, os.R_OK):
        return False, f"Source file is not readable: {path}"

    return True, None


def check_export(plan: ExportPlan, destination: Path) -> List[str]:
    """
    Check an export before running it

    Args:
        plan: Export plan
        destination: Archive path

    Returns:
        Error list
    """
    errors = list(plan.errors)

    valid, error = check_writable(Path(destination))
    if not valid:
        errors.append(error)

    for entry in plan.entries:
        valid, error = check_source(entry.record.original_blob)
        if not valid:
            errors.append(error)

    return errors
