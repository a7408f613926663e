"""
filename_parse.py - Filename Parsing Tools

Extracts the publication date, the leading ordinal number and the clean title
from an original filename. None of these functions raise on ordinary input;
when nothing matches they fall back to a documented default.
"""

from datetime import date
from typing import Optional, Tuple
import re


# Full date first, then a bare year. Order matters for names holding both.
# All patterns are ASCII-only: \d and \b never match other scripts.
FULL_DATE_REGEX = re.compile(
    r'\b(?:19|20)\d{2}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12]\d|3[01])\b', re.ASCII
)
YEAR_REGEX = re.compile(r'\b(?:19|20)\d{2}\b', re.ASCII)

# [01] / (1) / P01 / No.1 / 05_ ... anchored at the start
ORDINAL_REGEX = re.compile(r'^(\[|\(|P|No\.?)?\s*(\d{1,5})(\]|\)|\.|_|-|\s)', re.IGNORECASE | re.ASCII)

# Bracketed, parenthesized or bare leading number with trailing punctuation
LEADING_NUMBER_REGEX = re.compile(r'^(\[|\()?(\d{1,5})(\]|\))?[\s._-]*', re.ASCII)
# Role token (P, V, No.) followed by a number and a mandatory separator
ROLE_TOKEN_REGEX = re.compile(r'^(P|V|No\.?)?[-_]?\d{1,5}[-_.\s]+', re.ASCII)

FALLBACK_TITLE = "unnamed"


def extract_date(name: str, today: Optional[date] = None) -> str:
    """
    Extract the likely publication date from a filename

    Args:
        name: Original filename
        today: Date returned when nothing matches (defaults to the current date)

    Returns:
        ISO date string (YYYY-MM-DD)
    """
    match = FULL_DATE_REGEX.search(name)
    if match:
        return match.group(0)

    match = YEAR_REGEX.search(name)
    if match:
        # Only a year: pin to January 1st so it still sorts
        return f"{match.group(0)}-01-01"

    if today is None:
        today = date.today()
    return today.isoformat()


def extract_ordinal(name: str) -> Optional[int]:
    """
    Extract the leading number of a filename

    "[1] Paper" -> 1, "05_Paper" -> 5, "No.3 Report" -> 3

    Returns:
        The number, or None when the name has no leading number
    """
    match = ORDINAL_REGEX.match(name)
    if match:
        return int(match.group(2))
    return None


def split_extension(name: str) -> Tuple[str, str]:
    """
    Split a filename at its last dot

    Returns:
        (name without extension, extension including the dot or "")
    """
    dot_index = name.rfind('.')
    if dot_index <= 0:
        # No dot, or a dotfile such as ".notes": no stem to keep, no extension
        return name, ""
    return name[:dot_index], name[dot_index:]


def clean_and_split(name: str) -> Tuple[str, str]:
    """
    Remove the legacy numbering from a filename and split off its extension

    "[1] Title.pdf" -> ("Title", ".pdf"), "P01_Title.docx" -> ("Title", ".docx")

    Args:
        name: Original filename

    Returns:
        (clean title, extension). The title is never empty.
    """
    stem, extension = split_extension(name)

    clean = LEADING_NUMBER_REGEX.sub('', stem, count=1)
    clean = ROLE_TOKEN_REGEX.sub('', clean, count=1)
    clean = clean.strip()

    # The name was just a number: keep it rather than produce an empty title
    if not clean:
        clean = stem or FALLBACK_TITLE

    return clean, extension


def is_valid_filename(name: str) -> tuple[bool, Optional[str]]:
    """
    Check if a computed name can be used as a single archive entry

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    # Path separators would create folders inside the archive
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        if char in name:
            return False, f"Filename contains invalid character: {char}"

    if name.endswith(' ') or name.endswith('.'):
        return False, "Filename cannot end with space or dot"

    if len(name) > 255:
        return False, "Filename exceeds 255 characters"

    return True, None
