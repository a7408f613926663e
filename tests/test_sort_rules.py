import unittest

from core.models import FileRecord, SortOrder
from core.sort_rules import sort_records, next_sort_order, date_key


def make_record(record_id, title="Title", publication_date="2024-01-01", ordinal=None):
    return FileRecord(
        id=record_id,
        original_blob=b"",
        original_name=f"{title}.pdf",
        clean_title=title,
        extension=".pdf",
        publication_date=publication_date,
        original_ordinal=ordinal,
    )


def ids(records):
    return [r.id for r in records]


class TestSortRecords(unittest.TestCase):
    def setUp(self):
        self.records = [
            make_record("a", publication_date="2022-05-01"),
            make_record("b", publication_date="2024-01-01"),
            make_record("c", publication_date="2022-05-01"),
            make_record("d", publication_date="2023-12-31"),
        ]

    def test_newest(self):
        self.assertEqual(ids(sort_records(self.records, SortOrder.NEWEST)), ["b", "d", "a", "c"])

    def test_oldest(self):
        self.assertEqual(ids(sort_records(self.records, SortOrder.OLDEST)), ["a", "c", "d", "b"])

    def test_input_not_mutated(self):
        sort_records(self.records, SortOrder.NEWEST)
        self.assertEqual(ids(self.records), ["a", "b", "c", "d"])

    def test_name(self):
        records = [make_record("1", title="C"), make_record("2", title="A"), make_record("3", title="B")]
        self.assertEqual(ids(sort_records(records, SortOrder.NAME)), ["2", "3", "1"])

    def test_name_ignores_case(self):
        records = [
            make_record("z", title="Zebra"),
            make_record("a", title="apple"),
            make_record("m", title="Mango"),
            make_record("b", title="banana"),
        ]
        self.assertEqual(ids(sort_records(records, SortOrder.NAME)), ["a", "b", "m", "z"])

    def test_name_equal_titles_keep_insertion_order(self):
        records = [make_record("1", title="Same"), make_record("2", title="Other"), make_record("3", title="Same")]
        self.assertEqual(ids(sort_records(records, SortOrder.NAME)), ["2", "1", "3"])

    def test_number_absent_last_in_insertion_order(self):
        records = [
            make_record("x", ordinal=None),
            make_record("p", ordinal=5),
            make_record("y", ordinal=None),
            make_record("q", ordinal=0),
            make_record("r", ordinal=5),
        ]
        self.assertEqual(ids(sort_records(records, SortOrder.NUMBER)), ["q", "p", "r", "x", "y"])

    def test_impossible_day_still_orders(self):
        records = [
            make_record("mar", publication_date="2023-03-01"),
            make_record("bad", publication_date="2023-02-31"),
            make_record("feb", publication_date="2023-02-28"),
        ]
        self.assertEqual(ids(sort_records(records, SortOrder.OLDEST)), ["feb", "bad", "mar"])

    def test_date_key(self):
        self.assertLess(date_key("2023-09-30"), date_key("2023-10-01"))


class TestNextSortOrder(unittest.TestCase):
    def test_cycle(self):
        order = SortOrder.NEWEST
        seen = []
        for _ in range(4):
            order = next_sort_order(order)
            seen.append(order)
        self.assertEqual(seen, [SortOrder.OLDEST, SortOrder.NUMBER, SortOrder.NAME, SortOrder.NEWEST])


if __name__ == "__main__":
    unittest.main()
