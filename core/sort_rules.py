"""
sort_rules.py - Sorting Rules Module

Provides the display orderings of the collection. All sorts are stable:
records that compare equal keep their insertion order.
"""

from typing import List, Callable, Tuple
import locale

from .models import FileRecord, SortOrder


# Header toggle cycle: newest -> oldest -> number -> name -> newest
SORT_CYCLE = [SortOrder.NEWEST, SortOrder.OLDEST, SortOrder.NUMBER, SortOrder.NAME]


def date_key(iso_date: str) -> Tuple[int, int, int]:
    """
    Calendar sort key of an ISO date string

    Compares as calendar time for every real date and still orders
    values such as "2023-02-31" that a filename may carry.
    """
    year, month, day = iso_date.split("-")
    return int(year), int(month), int(day)


def ordinal_key(record: FileRecord) -> Tuple[bool, int]:
    """Records without an ordinal sort after every numbered record"""
    if record.original_ordinal is None:
        return True, 0
    return False, record.original_ordinal


def get_sort_key(sort_by: SortOrder) -> Callable[[FileRecord], tuple]:
    """
    Get sort key function

    Args:
        sort_by: Sort order (direction is handled in sort_records)

    Returns:
        Sort key function
    """
    if sort_by in (SortOrder.NEWEST, SortOrder.OLDEST):
        return lambda r: date_key(r.publication_date)
    elif sort_by == SortOrder.NAME:
        # Case-insensitive first, exact title as tie-break
        return lambda r: (locale.strxfrm(r.clean_title.casefold()), r.clean_title)
    elif sort_by == SortOrder.NUMBER:
        return ordinal_key
    else:
        raise ValueError(f"Unknown sort order: {sort_by!r}")


def sort_records(records: List[FileRecord], sort_by: SortOrder = SortOrder.NEWEST) -> List[FileRecord]:
    """
    Sort records for display

    Args:
        records: Records in insertion order
        sort_by: Sort order

    Returns:
        Sorted records (new list, input untouched)
    """
    key_func = get_sort_key(sort_by)
    # sorted(reverse=True) keeps equal elements in their original order
    return sorted(records, key=key_func, reverse=sort_by == SortOrder.NEWEST)


def next_sort_order(current: SortOrder) -> SortOrder:
    """Next sort order of the header toggle"""
    position = SORT_CYCLE.index(current)
    return SORT_CYCLE[(position + 1) % len(SORT_CYCLE)]
