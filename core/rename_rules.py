"""
rename_rules.py - Rule Engine

Computes the new filename of a record from its parsed metadata, its position
in the display sequence and the current RenameRule.
"""

from typing import List

from .models import FileRecord, RenameRule, RenameMode, NumberFormat


MIN_DIGITS_RANGE = (1, 5)


def validate_rule(rule: RenameRule) -> List[str]:
    """
    Validate a rename rule

    Returns:
        Error list (empty when the rule is usable)
    """
    errors = []

    if not isinstance(rule.mode, RenameMode):
        errors.append(f"Unknown numbering mode: {rule.mode!r}")
    if not isinstance(rule.number_format, NumberFormat):
        errors.append(f"Unknown number format: {rule.number_format!r}")

    low, high = MIN_DIGITS_RANGE
    if not low <= rule.min_digits <= high:
        errors.append(f"Minimum digits must be between {low} and {high}, got {rule.min_digits}")

    return errors


def compute_number(record: FileRecord, index: int, rule: RenameRule) -> int:
    """
    Determine the number assigned to a record

    Args:
        record: File record
        index: Zero-based position in the display sequence
        rule: Rename rule

    Returns:
        Number (never negative in offset mode)
    """
    if rule.mode == RenameMode.OFFSET:
        base = record.original_ordinal if record.original_ordinal is not None else 0
        return max(base + rule.offset_value, 0)

    return rule.start_number + index


def format_number(num: int, min_digits: int) -> str:
    """Zero-pad a number to at least min_digits digits"""
    return str(num).zfill(min_digits)


def build_number_token(padded: str, rule: RenameRule) -> str:
    """Wrap the padded number according to the number format"""
    if rule.number_format == NumberFormat.BRACKETS:
        return f"[{padded}]"
    elif rule.number_format == NumberFormat.DOT:
        return f"{padded}."
    elif rule.number_format == NumberFormat.UNDERSCORE:
        return f"{padded}_"
    elif rule.number_format == NumberFormat.HYPHEN:
        return f"{padded}-"
    elif rule.number_format == NumberFormat.CUSTOM:
        return f"{rule.custom_prefix}{padded}"
    else:
        raise ValueError(f"Unknown number format: {rule.number_format!r}")


def compute_name(record: FileRecord, index: int, rule: RenameRule) -> str:
    """
    Compute the new filename of a record

    Args:
        record: File record
        index: Zero-based position in the current display sequence
        rule: Rename rule

    Returns:
        token + separator + clean title + extension
    """
    num = compute_number(record, index, rule)
    token = build_number_token(format_number(num, rule.min_digits), rule)
    return f"{token}{rule.separator}{record.clean_title}{record.extension}"
