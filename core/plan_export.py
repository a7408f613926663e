"""
plan_export.py - Export Plan Generation Module

Responsibilities:
- Pair every display entry with the name it gets inside the archive
- Conflict detection and resolution (auto add _1, _2... by default)
- Output ExportPlan
"""

from collections import defaultdict
from typing import Dict, List, Optional, Set, Tuple

from .models import (
    DisplayEntry, ExportPlan, ConflictPolicy,
    is_case_insensitive_fs, normalize_for_comparison
)
from .filename_parse import split_extension, is_valid_filename


class ConflictResolver:
    """Conflict resolver for names inside one archive"""

    def __init__(self, case_insensitive: bool = True):
        """
        Initialize conflict resolver

        Args:
            case_insensitive: Whether "A.pdf" and "a.pdf" collide
        """
        self.case_insensitive = case_insensitive
        self.occupied: Set[str] = set()

    def _normalize(self, name: str) -> str:
        return normalize_for_comparison(name, self.case_insensitive)

    def is_occupied(self, name: str) -> bool:
        return self._normalize(name) in self.occupied

    def mark_occupied(self, name: str) -> None:
        self.occupied.add(self._normalize(name))

    def resolve(self, desired_name: str) -> Tuple[str, bool]:
        """
        Resolve conflict, return available name

        Args:
            desired_name: Desired archive name

        Returns:
            (actual name, whether conflict occurred)
        """
        if not self.is_occupied(desired_name):
            self.mark_occupied(desired_name)
            return desired_name, False

        # Conflict occurred, try adding _1, _2, _3...
        stem, suffix = split_extension(desired_name)

        n = 1
        while True:
            candidate = f"{stem}_{n}{suffix}"
            if not self.is_occupied(candidate):
                self.mark_occupied(candidate)
                return candidate, True
            n += 1
            # Safety limit
            if n > 10000:
                raise RuntimeError(f"Cannot find available name for {desired_name} (tried over 10000 times)")


def plan_export(
    entries: List[DisplayEntry],
    policy: ConflictPolicy = ConflictPolicy.SUFFIX_NUMBER,
    case_insensitive: Optional[bool] = None
) -> ExportPlan:
    """
    Generate the archive export plan

    Args:
        entries: Display sequence
        policy: What to do when two entries get the same name
        case_insensitive: Whether names differing only in case collide
            (defaults to the platform filesystem behaviour)

    Returns:
        Export plan, entries in display order
    """
    if case_insensitive is None:
        case_insensitive = is_case_insensitive_fs()

    plan = ExportPlan(conflict_policy=policy)

    if not entries:
        plan.add_error("No files to export")
        return plan

    resolver = ConflictResolver(case_insensitive=case_insensitive)
    # Overwrite: position of the entry currently holding each name
    holders: Dict[str, int] = {}

    for entry in entries:
        new_name = entry.new_name

        valid, error = is_valid_filename(new_name)
        if not valid:
            plan.add_warning(f"Skip {entry.record.original_name}: {error}")
            continue

        if policy == ConflictPolicy.SUFFIX_NUMBER:
            final_name, had_conflict = resolver.resolve(new_name)
            note = f"conflict resolved: {new_name} -> {final_name}" if had_conflict else ""
            plan.add_entry(entry.record, new_name, final_name, note)

        elif policy == ConflictPolicy.SKIP:
            if resolver.is_occupied(new_name):
                plan.add_warning(f"Skip {entry.record.original_name}: {new_name} already used")
                continue
            resolver.mark_occupied(new_name)
            plan.add_entry(entry.record, new_name, new_name)

        elif policy == ConflictPolicy.OVERWRITE:
            key = normalize_for_comparison(new_name, case_insensitive)
            if key in holders:
                replaced = plan.entries[holders[key]]
                plan.add_warning(
                    f"Overwrite: {replaced.record.original_name} replaced by "
                    f"{entry.record.original_name} as {new_name}"
                )
                replaced.note = "overwritten"
            holders[key] = len(plan.entries)
            plan.add_entry(entry.record, new_name, new_name)

        else:
            raise ValueError(f"Unknown conflict policy: {policy!r}")

    if policy == ConflictPolicy.OVERWRITE:
        plan.entries = [e for e in plan.entries if e.note != "overwritten"]

    return plan


def validate_plan(plan: ExportPlan, case_insensitive: Optional[bool] = None) -> List[str]:
    """
    Validate export plan

    Args:
        plan: Export plan

    Returns:
        Error list
    """
    if case_insensitive is None:
        case_insensitive = is_case_insensitive_fs()

    errors = []

    # Check for duplicate archive names
    names: Dict[str, List[str]] = defaultdict(list)
    for entry in plan.entries:
        key = normalize_for_comparison(entry.archive_name, case_insensitive)
        names[key].append(entry.record.original_name)

    for name, sources in names.items():
        if len(sources) > 1:
            errors.append(f"Multiple files have the same archive name: {sources} -> {name}")

    # Check each record appears once
    seen: Set[str] = set()
    for entry in plan.entries:
        if entry.record.id in seen:
            errors.append(f"File listed twice: {entry.record.original_name}")
        seen.add(entry.record.id)

    return errors
