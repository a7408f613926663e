"""
core - Research File Renamer Core Module

Provides filename parsing, the numbering rule engine, the file collection
and archive export.
"""

from .models import (
    FileRecord,
    RenameRule,
    RenameMode,
    NumberFormat,
    SortOrder,
    ConflictPolicy,
    DisplayEntry,
    ArchiveEntry,
    ExportPlan,
)

from .filename_parse import (
    extract_date,
    extract_ordinal,
    clean_and_split,
    split_extension,
    is_valid_filename,
)

from .rename_rules import (
    compute_name,
    compute_number,
    format_number,
    build_number_token,
    validate_rule,
)

from .sort_rules import (
    sort_records,
    get_sort_key,
    next_sort_order,
)

from .collection import (
    FileCollection,
    create_record,
)

from .scan_files import (
    scan_directory,
    collect_paths,
    list_suffixes,
    ingest_paths,
    SUPPORTED_SUFFIXES,
)

from .plan_export import (
    plan_export,
    validate_plan,
    ConflictResolver,
)

from .exec_export import (
    export_archive,
    default_archive_name,
    ExportResult,
    ExportError,
)

from .safety_checks import (
    check_writable,
    check_source,
    check_export,
)

__all__ = [
    # Data models
    "FileRecord",
    "RenameRule",
    "RenameMode",
    "NumberFormat",
    "SortOrder",
    "ConflictPolicy",
    "DisplayEntry",
    "ArchiveEntry",
    "ExportPlan",
    "ExportResult",
    "ExportError",

    # Parsing
    "extract_date",
    "extract_ordinal",
    "clean_and_split",
    "split_extension",
    "is_valid_filename",

    # Rule engine
    "compute_name",
    "compute_number",
    "format_number",
    "build_number_token",
    "validate_rule",

    # Sorting
    "sort_records",
    "get_sort_key",
    "next_sort_order",

    # Collection
    "FileCollection",
    "create_record",

    # File selection
    "scan_directory",
    "collect_paths",
    "list_suffixes",
    "ingest_paths",
    "SUPPORTED_SUFFIXES",

    # Export
    "plan_export",
    "validate_plan",
    "ConflictResolver",
    "export_archive",
    "default_archive_name",

    # Safety checks
    "check_writable",
    "check_source",
    "check_export",
]
