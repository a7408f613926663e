"""
collection.py - Collection Orchestrator

Holds the working set of files in arrival order together with the live
RenameRule and sort order, and derives the display sequence on demand.
"""

from dataclasses import replace
from datetime import date
from typing import Iterable, Iterator, List, Optional, Tuple
import logging
import uuid

from .models import FileRecord, RenameRule, SortOrder, DisplayEntry, BlobHandle
from .filename_parse import extract_date, extract_ordinal, clean_and_split
from .rename_rules import compute_name, validate_rule
from .sort_rules import sort_records


def create_record(name: str, blob: BlobHandle, today: Optional[date] = None) -> FileRecord:
    """
    Parse a filename into a new FileRecord

    Args:
        name: Original filename
        blob: Handle to the file content (not read here)
        today: Fallback publication date

    Returns:
        File record with a fresh id
    """
    clean_title, extension = clean_and_split(name)
    record = FileRecord(
        id=uuid.uuid4().hex,
        original_blob=blob,
        original_name=name,
        clean_title=clean_title,
        extension=extension,
        publication_date=extract_date(name, today),
        original_ordinal=extract_ordinal(name),
    )
    logging.debug(
        f"Parsed {name!r}: title={record.clean_title!r} ext={record.extension!r} "
        f"date={record.publication_date} ordinal={record.original_ordinal}"
    )
    return record


class FileCollection:
    """Working set of files plus the live rename rule and sort order"""

    def __init__(
        self,
        rule: Optional[RenameRule] = None,
        sort_order: SortOrder = SortOrder.NEWEST,
        today: Optional[date] = None
    ):
        """
        Initialize collection

        Args:
            rule: Initial rename rule (defaults when omitted)
            sort_order: Initial display order
            today: Fallback date for files without a date in their name
        """
        self._records: List[FileRecord] = []
        self._rule = rule if rule is not None else RenameRule()
        self._sort_order = sort_order
        self._today = today

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(list(self._records))

    @property
    def records(self) -> List[FileRecord]:
        """Records in insertion order (copy)"""
        return list(self._records)

    @property
    def rule(self) -> RenameRule:
        """Current rename rule (copy, use set_rule to change it)"""
        return replace(self._rule)

    @property
    def sort_order(self) -> SortOrder:
        return self._sort_order

    def get(self, record_id: str) -> Optional[FileRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def ingest(self, name: str, blob: BlobHandle) -> FileRecord:
        """Parse and append one file"""
        record = create_record(name, blob, self._today)
        self._records.append(record)
        return record

    def ingest_many(self, items: Iterable[Tuple[str, BlobHandle]]) -> List[FileRecord]:
        """Parse and append a batch of (name, blob) pairs in arrival order"""
        added = [self.ingest(name, blob) for name, blob in items]
        logging.info(f"Added {len(added)} files ({len(self._records)} total)")
        return added

    def remove(self, record_id: str) -> bool:
        """
        Remove a record by id

        Returns:
            Whether a record was removed (unknown ids are ignored)
        """
        for i, record in enumerate(self._records):
            if record.id == record_id:
                del self._records[i]
                logging.info(f"Removed {record.original_name}")
                return True
        return False

    def set_date(self, record_id: str, iso_date: str) -> bool:
        """
        Override the publication date of one record

        Args:
            record_id: Record id (unknown ids are ignored)
            iso_date: New date, YYYY-MM-DD

        Returns:
            Whether a record was updated

        Raises:
            ValueError: iso_date is not a valid calendar date
        """
        normalized = date.fromisoformat(iso_date).isoformat()
        record = self.get(record_id)
        if record is None:
            return False

        record.publication_date = normalized
        record.date_manually_set = True
        logging.info(f"Date of {record.original_name} set to {normalized}")
        return True

    def set_rule(self, rule: RenameRule) -> None:
        """
        Replace the rename rule

        Raises:
            ValueError: The rule is invalid
        """
        errors = validate_rule(rule)
        if errors:
            raise ValueError("; ".join(errors))
        self._rule = replace(rule)
        logging.info(f"Rename rule changed: {self._rule}")

    def set_sort_order(self, order: SortOrder) -> None:
        if not isinstance(order, SortOrder):
            raise ValueError(f"Unknown sort order: {order!r}")
        self._sort_order = order

    def clear(self) -> None:
        """Remove every record"""
        self._records.clear()
        logging.info("Collection cleared")

    def sorted_records(self) -> List[FileRecord]:
        """Records in display order"""
        return sort_records(self._records, self._sort_order)

    def display_sequence(self) -> List[DisplayEntry]:
        """
        Compute the display sequence

        Recomputed on every call from the records, the rule and the sort
        order, so it always reflects the latest mutation.

        Returns:
            Sorted entries with their computed names
        """
        return [
            DisplayEntry(index=i, record=record, new_name=compute_name(record, i, self._rule))
            for i, record in enumerate(self.sorted_records())
        ]
