"""
models.py - Core Data Structure Definitions

Contains:
- FileRecord: One uploaded document and the metadata parsed from its name
- RenameRule: Numbering configuration (mode, number format, padding...)
- DisplayEntry: One row of the display sequence
- ArchiveEntry / ExportPlan: What will be written into the archive
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Union
from enum import Enum
import platform


# Opaque handle to the file content: a path on disk or the raw bytes
BlobHandle = Union[Path, str, bytes]


class RenameMode(Enum):
    """Numbering mode enumeration"""
    SEQUENTIAL = "sequential"   # Consecutive numbers by display position
    OFFSET = "offset"           # Original number shifted by a constant


class NumberFormat(Enum):
    """Number token style"""
    BRACKETS = "brackets"       # [01]
    DOT = "dot"                 # 01.
    UNDERSCORE = "underscore"   # 01_
    HYPHEN = "hyphen"           # 01-
    CUSTOM = "custom"           # <prefix>01


class SortOrder(Enum):
    """Display sort order"""
    NEWEST = "newest"           # Publication date, descending
    OLDEST = "oldest"           # Publication date, ascending
    NAME = "name"               # Clean title
    NUMBER = "number"           # Original ordinal, absent last


class ConflictPolicy(Enum):
    """Archive name collision policy"""
    SUFFIX_NUMBER = "suffix_number"  # Add _1, _2, _3...
    SKIP = "skip"                    # Keep the first, skip the rest
    OVERWRITE = "overwrite"          # Keep the last (dangerous)


@dataclass
class FileRecord:
    """One file of the working set"""
    id: str
    original_blob: BlobHandle = field(repr=False)
    original_name: str              # Full original filename
    clean_title: str                # Name without extension and legacy numbering
    extension: str                  # ".pdf", or "" if none
    publication_date: str           # ISO date YYYY-MM-DD
    original_ordinal: Optional[int] = None   # None means no leading number found
    date_manually_set: bool = False

    @property
    def has_ordinal(self) -> bool:
        return self.original_ordinal is not None


@dataclass
class RenameRule:
    """Renaming configuration"""
    mode: RenameMode = RenameMode.SEQUENTIAL

    # Sequential mode
    start_number: int = 1

    # Offset mode (signed)
    offset_value: int = 0

    # Number token
    number_format: NumberFormat = NumberFormat.BRACKETS
    custom_prefix: str = "P"        # Only used with NumberFormat.CUSTOM
    separator: str = " "            # Between number token and title
    min_digits: int = 2             # Zero padding width, 1-5


@dataclass
class DisplayEntry:
    """One row of the display sequence"""
    index: int                      # Zero-based display position
    record: FileRecord
    new_name: str


@dataclass
class ArchiveEntry:
    """Single archive write"""
    record: FileRecord
    new_name: str                   # Name computed by the rule engine
    archive_name: str               # Name actually used inside the archive
    note: str = ""                  # Note (e.g., conflict resolution explanation)

    @property
    def is_renamed(self) -> bool:
        """Whether the archive name differs from the computed name"""
        return self.new_name != self.archive_name


@dataclass
class ExportPlan:
    """Batch archive export plan"""
    entries: List[ArchiveEntry] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    conflict_policy: ConflictPolicy = ConflictPolicy.SUFFIX_NUMBER

    @property
    def conflict_count(self) -> int:
        """Number of conflict resolutions"""
        return sum(1 for e in self.entries if e.note.startswith("conflict resolved"))

    @property
    def total_count(self) -> int:
        return len(self.entries)

    def add_entry(self, record: FileRecord, new_name: str, archive_name: str, note: str = "") -> None:
        self.entries.append(ArchiveEntry(record=record, new_name=new_name, archive_name=archive_name, note=note))

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            f"Export Plan Summary:",
            f"  - Files to archive: {self.total_count}",
            f"  - Conflict resolutions: {self.conflict_count}",
            f"  - Warnings: {len(self.warnings)}",
            f"  - Errors: {len(self.errors)}",
        ]
        return "\n".join(lines)


def is_case_insensitive_fs() -> bool:
    """Detect if current filesystem is case-insensitive"""
    return platform.system() in ("Windows", "Darwin")


def normalize_for_comparison(name: str, case_insensitive: bool) -> str:
    """Normalize filename for comparison"""
    if case_insensitive:
        return name.casefold()
    return name
