"""
cli_interactive.py - Interactive CLI

Provides a menu-style session over one file collection
"""

from pathlib import Path
from typing import Optional, List

from core import (
    FileCollection, RenameRule, RenameMode, NumberFormat, SortOrder, ConflictPolicy,
    collect_paths, ingest_paths, plan_export, check_export, export_archive,
    default_archive_name, next_sort_order, ExportError
)


def clear_screen():
    """Clear screen"""
    import os
    os.system('cls' if os.name == 'nt' else 'clear')


def print_header(title: str):
    """Print header"""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)
    print()


def input_choice(prompt: str, choices: List[str], default: Optional[str] = None) -> Optional[str]:
    """Input choice"""
    choices_str = "/".join(choices)
    default_str = f" [{default}]" if default else ""

    while True:
        value = input(f"{prompt} ({choices_str}){default_str}: ").strip()
        if not value and default:
            return default
        if value.lower() == 'q':
            return None
        if value in choices:
            return value
        print(f"Invalid choice, please enter: {choices_str}")


def input_bool(prompt: str, default: bool = False) -> bool:
    """Input boolean value"""
    default_str = "Y/n" if default else "y/N"
    value = input(f"{prompt} ({default_str}): ").strip().lower()
    if not value:
        return default
    return value == 'y'


def input_int(prompt: str, default: int = 0, min_val: Optional[int] = None, max_val: Optional[int] = None) -> int:
    """Input integer"""
    while True:
        value = input(f"{prompt} [{default}]: ").strip()
        if not value:
            return default
        try:
            num = int(value)
        except ValueError:
            print("Please enter a valid integer")
            continue
        if min_val is not None and num < min_val:
            print(f"Value cannot be less than {min_val}")
            continue
        if max_val is not None and num > max_val:
            print(f"Value cannot be greater than {max_val}")
            continue
        return num


def print_sequence(collection: FileCollection, limit: int = 30):
    """Print numbered display sequence"""
    entries = collection.display_sequence()
    offset_mode = collection.rule.mode == RenameMode.OFFSET

    print(f"\n{len(entries)} files, sorted by {collection.sort_order.value}:")
    print("-" * 70)
    for entry in entries[:limit]:
        record = entry.record
        if offset_mode:
            info = str(record.original_ordinal) if record.original_ordinal is not None else "-"
        else:
            info = record.publication_date + ("*" if record.date_manually_set else "")
        print(f"  {entry.index + 1:>3}. {info:<12} {record.original_name:<30} -> {entry.new_name}")
    if len(entries) > limit:
        print(f"  ... and {len(entries) - limit} more files")
    print("-" * 70)


def pick_record(collection: FileCollection, prompt: str):
    """Select a record by its display position"""
    entries = collection.display_sequence()
    if not entries:
        print("No files loaded")
        return None

    print_sequence(collection, limit=len(entries))
    position = input_int(prompt, default=0, min_val=0, max_val=len(entries))
    if position == 0:
        return None
    return entries[position - 1].record


def menu_add_files(collection: FileCollection):
    """Add files or directories"""
    print_header("Add Files")
    raw = input("File or directory paths, separated by ';' (q to return): ").strip()
    if not raw or raw.lower() == 'q':
        return

    try:
        paths = collect_paths(Path(p.strip()) for p in raw.split(";") if p.strip())
    except ValueError as e:
        print(f"Error: {e}")
        return

    added = ingest_paths(collection, paths)
    print(f"Added {len(added)} files ({len(collection)} total)")


def menu_remove_file(collection: FileCollection):
    """Remove one file"""
    print_header("Remove File")
    record = pick_record(collection, "Number of the file to remove (0 to return)")
    if record is None:
        return
    collection.remove(record.id)
    print(f"Removed {record.original_name}")


def menu_set_date(collection: FileCollection):
    """Override the publication date of one file"""
    print_header("Set Publication Date")
    record = pick_record(collection, "Number of the file (0 to return)")
    if record is None:
        return

    value = input(f"New date for {record.original_name} (YYYY-MM-DD) [{record.publication_date}]: ").strip()
    if not value:
        return
    try:
        collection.set_date(record.id, value)
    except ValueError:
        print(f"Invalid date: {value}")
        return
    print("Date updated")


def menu_configure(collection: FileCollection):
    """Edit the rename rule"""
    print_header("Numbering Rule")
    current = collection.rule

    print("Numbering mode:")
    print("  1. sequential - Renumber by sort order")
    print("  2. offset     - Shift existing numbers")
    mode_choice = input_choice("Select mode", ["1", "2"], "1" if current.mode == RenameMode.SEQUENTIAL else "2")
    if mode_choice is None:
        return
    mode = RenameMode.SEQUENTIAL if mode_choice == "1" else RenameMode.OFFSET

    start_number = current.start_number
    offset_value = current.offset_value
    if mode == RenameMode.SEQUENTIAL:
        start_number = input_int("Starting number", default=current.start_number, min_val=0)
    else:
        offset_value = input_int("Offset (e.g. 2 or -1)", default=current.offset_value)

    formats = list(NumberFormat)
    print("\nNumber style:")
    samples = {"brackets": "[01]", "dot": "01.", "underscore": "01_", "hyphen": "01-", "custom": "P01"}
    for i, fmt in enumerate(formats, 1):
        print(f"  {i}. {fmt.value:<11} {samples[fmt.value]}")
    fmt_choice = input_choice(
        "Select style", [str(i) for i in range(1, len(formats) + 1)],
        str(formats.index(current.number_format) + 1)
    )
    if fmt_choice is None:
        return
    number_format = formats[int(fmt_choice) - 1]

    custom_prefix = current.custom_prefix
    if number_format == NumberFormat.CUSTOM:
        custom_prefix = input(f"Custom prefix [{current.custom_prefix}]: ") or current.custom_prefix

    # Not stripped: a space is a valid separator
    separator = input(f"Separator [{current.separator!r}]: ")
    if not separator:
        separator = current.separator

    min_digits = input_int("Minimum digits (1-5)", default=current.min_digits, min_val=1, max_val=5)

    collection.set_rule(RenameRule(
        mode=mode,
        start_number=start_number,
        offset_value=offset_value,
        number_format=number_format,
        custom_prefix=custom_prefix,
        separator=separator,
        min_digits=min_digits,
    ))
    print("Rule updated")


def menu_sort(collection: FileCollection):
    """Change sort order"""
    print_header("Sort Order")
    orders = list(SortOrder)
    labels = {
        SortOrder.NEWEST: "Date, newest first",
        SortOrder.OLDEST: "Date, oldest first",
        SortOrder.NAME: "Title",
        SortOrder.NUMBER: "Original number",
    }
    for i, order in enumerate(orders, 1):
        print(f"  {i}. {order.value:<7} - {labels[order]}")
    print(f"  n. next   - {next_sort_order(collection.sort_order).value}")

    choice = input_choice("Select sort order", [str(i) for i in range(1, len(orders) + 1)] + ["n"], "n")
    if choice is None:
        return
    if choice == "n":
        collection.set_sort_order(next_sort_order(collection.sort_order))
    else:
        collection.set_sort_order(orders[int(choice) - 1])
    print(f"Sorted by {collection.sort_order.value}")


def menu_export(collection: FileCollection):
    """Write archive"""
    print_header("Export Archive")
    if not len(collection):
        print("No files loaded")
        input("Press Enter to return...")
        return

    default_path = Path.cwd() / default_archive_name()
    raw = input(f"Archive path [{default_path}]: ").strip()
    destination = Path(raw).expanduser() if raw else default_path

    plan = plan_export(collection.display_sequence(), policy=ConflictPolicy.SUFFIX_NUMBER)
    errors = check_export(plan, destination)
    if errors:
        print("\nErrors:")
        for err in errors:
            print(f"  - {err}")
        input("Press Enter to return...")
        return

    print(f"\nWill archive {plan.total_count} files:")
    print("-" * 70)
    for entry in plan.entries[:15]:
        note = f" [Conflict resolution]" if entry.note else ""
        print(f"  {entry.record.original_name:<30} -> {entry.archive_name}{note}")
    if len(plan.entries) > 15:
        print(f"  ... and {len(plan.entries) - 15} more files")
    print("-" * 70)

    if plan.conflict_count > 0:
        print(f"Note: {plan.conflict_count} files automatically renamed due to conflicts (adding _1, _2...)")
    for warn in plan.warnings:
        print(f"Warning: {warn}")

    print()
    if not input_bool("Confirm export", default=False):
        print("Cancelled")
        input("Press Enter to return...")
        return

    print("\nExporting...")
    try:
        result = export_archive(plan, destination)
    except ExportError as e:
        print(f"Error: {e}")
    else:
        print()
        print(result.summary())

    input("\nPress Enter to return...")


def interactive_mode(collection: Optional[FileCollection] = None) -> int:
    """Interactive mode main loop"""
    if collection is None:
        collection = FileCollection()

    while True:
        clear_screen()
        print_header("Research File Renamer")
        rule = collection.rule
        print(f"Files: {len(collection)}   Mode: {rule.mode.value}   Sort: {collection.sort_order.value}")
        print()
        print("  1. Add files")
        print("  2. Preview names")
        print("  3. Remove a file")
        print("  4. Set publication date")
        print("  5. Numbering rule")
        print("  6. Sort order")
        print("  7. Export archive")
        print("  8. Clear all files")
        print("  q. Quit")
        print()

        choice = input("Please choose: ").strip().lower()

        if choice == '1':
            menu_add_files(collection)
        elif choice == '2':
            print_sequence(collection)
            input("Press Enter to return...")
        elif choice == '3':
            menu_remove_file(collection)
        elif choice == '4':
            menu_set_date(collection)
        elif choice == '5':
            menu_configure(collection)
        elif choice == '6':
            menu_sort(collection)
        elif choice == '7':
            menu_export(collection)
        elif choice == '8':
            if input_bool("Are you sure you want to clear all files", default=False):
                collection.clear()
        elif choice == 'q':
            print("Goodbye!")
            return 0
        else:
            print("Invalid choice")
            input("Press Enter to continue...")
