"""
cli_entry.py - CLI Entry Point

Supports:
- Command-line argument mode (preview / export)
- Interactive mode
"""

import argparse
import locale
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core import (
    FileCollection, RenameRule, RenameMode, NumberFormat, SortOrder, ConflictPolicy,
    collect_paths, ingest_paths, plan_export, check_export, export_archive,
    default_archive_name, validate_rule, ExportError
)
from .cli_interactive import interactive_mode


MODE_CHOICES = {m.value: m for m in RenameMode}
FORMAT_CHOICES = {f.value: f for f in NumberFormat}
SORT_CHOICES = {s.value: s for s in SortOrder}
CONFLICT_CHOICES = {c.value: c for c in ConflictPolicy}


def add_rule_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by preview and export"""
    parser.add_argument("inputs", nargs="+", help="Files or directories to rename")
    parser.add_argument("--mode", "-m", type=str, default="sequential",
                        choices=list(MODE_CHOICES), help="Numbering mode")
    parser.add_argument("--start", type=int, default=1, help="Starting number (sequential mode)")
    parser.add_argument("--offset", type=int, default=0, help="Number shift, may be negative (offset mode)")
    parser.add_argument("--format", "-f", dest="number_format", type=str, default="brackets",
                        choices=list(FORMAT_CHOICES), help="Number style")
    parser.add_argument("--prefix", type=str, default="P", help="Prefix for the custom number style")
    parser.add_argument("--separator", type=str, default=" ", help="Text between number and title")
    parser.add_argument("--digits", type=int, default=2, help="Minimum digits (1-5)")
    parser.add_argument("--sort", type=str, default="newest",
                        choices=list(SORT_CHOICES), help="Sort order")
    parser.add_argument("--date", action="append", default=[], metavar="NAME=YYYY-MM-DD",
                        help="Override the publication date of a file (repeatable)")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="research-renamer",
        description="Batch renumber research documents and package them into a ZIP archive",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  python main.py --cli

  # Preview sequential numbering, oldest first
  python main.py --cli preview ./papers --sort oldest --start 5

  # Shift existing numbers by +2 and export
  python main.py --cli export ./papers --mode offset --offset 2 --sort number -o out.zip
"""
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # preview subcommand
    preview_parser = subparsers.add_parser("preview", help="Show the computed names")
    add_rule_arguments(preview_parser)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Write the renamed files into a ZIP archive")
    add_rule_arguments(export_parser)
    export_parser.add_argument("--output", "-o", type=str, default="",
                               help="Archive path (default: Renamed_Research_Files_<date>.zip)")
    export_parser.add_argument("--conflict", type=str, default="suffix_number",
                               choices=list(CONFLICT_CHOICES), help="Duplicate name handling")
    export_parser.add_argument("--log-dir", type=str, default="", help="Directory for JSON export logs")
    export_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not write")
    export_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    return parser


def build_rule(args) -> RenameRule:
    """Build the rename rule from parsed arguments"""
    return RenameRule(
        mode=MODE_CHOICES[args.mode],
        start_number=args.start,
        offset_value=args.offset,
        number_format=FORMAT_CHOICES[args.number_format],
        custom_prefix=args.prefix,
        separator=args.separator,
        min_digits=args.digits,
    )


def parse_date_overrides(values: List[str]) -> List[tuple]:
    """Split NAME=YYYY-MM-DD values"""
    overrides = []
    for value in values:
        name, sep, iso_date = value.rpartition("=")
        if not sep or not name:
            raise ValueError(f"Invalid --date value (expected NAME=YYYY-MM-DD): {value}")
        overrides.append((name, iso_date))
    return overrides


def build_collection(args) -> Optional[FileCollection]:
    """
    Load inputs into a collection configured from arguments

    Returns:
        Collection, or None after printing the error
    """
    rule = build_rule(args)
    errors = validate_rule(rule)
    if errors:
        for err in errors:
            print(f"Error: {err}")
        return None

    try:
        paths = collect_paths(Path(p) for p in args.inputs)
    except ValueError as e:
        print(f"Error: {e}")
        return None

    collection = FileCollection(rule=rule, sort_order=SORT_CHOICES[args.sort])
    ingest_paths(collection, paths)

    try:
        overrides = parse_date_overrides(args.date)
        for name, iso_date in overrides:
            matched = [r for r in collection if r.original_name == name]
            if not matched:
                print(f"Warning: --date given for unknown file: {name}")
            for record in matched:
                collection.set_date(record.id, iso_date)
    except ValueError as e:
        print(f"Error: {e}")
        return None

    return collection


def print_sequence(collection: FileCollection, limit: Optional[int] = None) -> None:
    """Print the display sequence"""
    entries = collection.display_sequence()
    shown = entries if limit is None else entries[:limit]
    offset_mode = collection.rule.mode == RenameMode.OFFSET

    print("-" * 80)
    for entry in shown:
        record = entry.record
        if offset_mode:
            info = str(record.original_ordinal) if record.original_ordinal is not None else "-"
        else:
            info = record.publication_date + ("*" if record.date_manually_set else "")
        print(f"  {info:<12} {record.original_name:<40} -> {entry.new_name}")
    if len(entries) > len(shown):
        print(f"  ... and {len(entries) - len(shown)} more files")
    print("-" * 80)


def cmd_preview(args):
    """Handle preview command"""
    collection = build_collection(args)
    if collection is None:
        return 1

    if not len(collection):
        print("No matching files found")
        return 0

    print(f"{len(collection)} files, sorted by {collection.sort_order.value}:")
    print_sequence(collection)
    return 0


def cmd_export(args):
    """Handle export command"""
    collection = build_collection(args)
    if collection is None:
        return 1

    if not len(collection):
        print("No matching files found")
        return 0

    destination = Path(args.output) if args.output else Path.cwd() / default_archive_name()
    plan = plan_export(collection.display_sequence(), policy=CONFLICT_CHOICES[args.conflict])

    errors = check_export(plan, destination)
    if errors:
        print("Errors:")
        for err in errors:
            print(f"  - {err}")
        return 1

    # Show preview
    print(f"Will archive {plan.total_count} files into {destination}:")
    print("-" * 80)
    for entry in plan.entries[:20]:
        note = f" ({entry.note})" if entry.note else ""
        print(f"  {entry.record.original_name:<40} -> {entry.archive_name}{note}")
    if len(plan.entries) > 20:
        print(f"  ... and {len(plan.entries) - 20} more files")
    print("-" * 80)

    if plan.warnings:
        print("Warnings:")
        for warn in plan.warnings:
            print(f"  - {warn}")

    if args.dry_run:
        print("\n[Preview mode] Will not actually write the archive")
        return 0

    if not args.yes:
        confirm = input("\nConfirm export? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    print("\nExporting...")
    try:
        result = export_archive(plan, destination, log_dir=Path(args.log_dir) if args.log_dir else None)
    except ExportError as e:
        print(f"Error: {e}")
        return 1

    print(result.summary())
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s.%(msecs)03d %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Title sorting follows the user's collation rules
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logging.warning(f"Cannot use system collation, falling back to default: {e}")

    try:
        if args.command is None:
            # No subcommand, enter interactive mode
            return interactive_mode()

        if args.command == "preview":
            return cmd_preview(args)
        elif args.command == "export":
            return cmd_export(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
