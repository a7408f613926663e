import unittest
from datetime import date

from core.collection import FileCollection, create_record
from core.models import RenameRule, RenameMode, NumberFormat, SortOrder


TODAY = date(2024, 5, 6)


def names(collection):
    return [entry.new_name for entry in collection.display_sequence()]


class TestCreateRecord(unittest.TestCase):
    def test_parsed_fields(self):
        record = create_record("[3] Deep Learning 2019-07-15.pdf", b"data", TODAY)
        self.assertEqual(record.original_name, "[3] Deep Learning 2019-07-15.pdf")
        self.assertEqual(record.clean_title, "Deep Learning 2019-07-15")
        self.assertEqual(record.extension, ".pdf")
        self.assertEqual(record.publication_date, "2019-07-15")
        self.assertEqual(record.original_ordinal, 3)
        self.assertFalse(record.date_manually_set)
        self.assertEqual(record.original_blob, b"data")

    def test_defaults_when_nothing_matches(self):
        record = create_record("notes.pdf", b"", TODAY)
        self.assertEqual(record.publication_date, "2024-05-06")
        self.assertIsNone(record.original_ordinal)
        self.assertFalse(record.has_ordinal)

    def test_ids_unique(self):
        ids = {create_record("a.pdf", b"").id for _ in range(50)}
        self.assertEqual(len(ids), 50)


class TestFileCollection(unittest.TestCase):
    def setUp(self):
        self.collection = FileCollection(today=TODAY)

    def test_ingest_preserves_arrival_order(self):
        added = self.collection.ingest_many([("C.pdf", b""), ("A.pdf", b""), ("B.pdf", b"")])
        self.assertEqual(len(self.collection), 3)
        self.assertEqual([r.original_name for r in self.collection.records], ["C.pdf", "A.pdf", "B.pdf"])
        self.assertEqual([r.id for r in added], [r.id for r in self.collection])

    def test_sequential_numbering_by_name(self):
        self.collection.ingest_many([("C.pdf", b""), ("A.pdf", b""), ("B.pdf", b"")])
        self.collection.set_rule(RenameRule(
            start_number=5, number_format=NumberFormat.DOT, separator="", min_digits=2
        ))
        self.collection.set_sort_order(SortOrder.NAME)
        self.assertEqual(names(self.collection), ["05.A.pdf", "06.B.pdf", "07.C.pdf"])
        # Display order never changes insertion order
        self.assertEqual([r.original_name for r in self.collection.records], ["C.pdf", "A.pdf", "B.pdf"])

    def test_name_sort_mixed_case_numbering(self):
        self.collection.ingest_many([("Zebra.pdf", b""), ("apple.pdf", b"")])
        self.collection.set_sort_order(SortOrder.NAME)
        self.assertEqual(names(self.collection), ["[01] apple.pdf", "[02] Zebra.pdf"])

    def test_display_indices(self):
        self.collection.ingest_many([("x.pdf", b""), ("y.pdf", b"")])
        self.assertEqual([e.index for e in self.collection.display_sequence()], [0, 1])

    def test_determinism(self):
        self.collection.ingest_many([("[2] B 2020.pdf", b""), ("[1] A 2021.pdf", b""), ("C.pdf", b"")])
        first = [(e.record.id, e.new_name) for e in self.collection.display_sequence()]
        second = [(e.record.id, e.new_name) for e in self.collection.display_sequence()]
        self.assertEqual(first, second)

    def test_sort_round_trip_restores_names(self):
        self.collection.ingest_many([("[2] B 2020.pdf", b""), ("[1] A 2021.pdf", b""), ("C 2019.pdf", b"")])
        before = [(e.record.id, e.new_name) for e in self.collection.display_sequence()]
        self.collection.set_sort_order(SortOrder.OLDEST)
        changed = [(e.record.id, e.new_name) for e in self.collection.display_sequence()]
        self.collection.set_sort_order(SortOrder.NEWEST)
        after = [(e.record.id, e.new_name) for e in self.collection.display_sequence()]
        self.assertNotEqual(before, changed)
        self.assertEqual(before, after)

    def test_changing_sort_renumbers_sequential(self):
        self.collection.ingest_many([("A 2020.pdf", b""), ("B 2021.pdf", b"")])
        self.assertEqual(names(self.collection), ["[01] B 2021.pdf", "[02] A 2020.pdf"])
        self.collection.set_sort_order(SortOrder.OLDEST)
        self.assertEqual(names(self.collection), ["[01] A 2020.pdf", "[02] B 2021.pdf"])

    def test_offset_mode(self):
        self.collection.ingest_many([("[3] Gamma.pdf", b""), ("[1] Alpha.pdf", b""), ("Loose.pdf", b"")])
        self.collection.set_rule(RenameRule(mode=RenameMode.OFFSET, offset_value=2))
        self.collection.set_sort_order(SortOrder.NUMBER)
        self.assertEqual(names(self.collection), ["[03] Alpha.pdf", "[05] Gamma.pdf", "[02] Loose.pdf"])

    def test_remove(self):
        a, b = self.collection.ingest_many([("a.pdf", b""), ("b.pdf", b"")])
        self.assertTrue(self.collection.remove(a.id))
        self.assertEqual([r.id for r in self.collection], [b.id])
        self.assertIsNone(self.collection.get(a.id))

    def test_remove_unknown_id_is_noop(self):
        self.collection.ingest("a.pdf", b"")
        self.assertFalse(self.collection.remove("missing"))
        self.assertEqual(len(self.collection), 1)

    def test_set_date_reorders(self):
        a, b = self.collection.ingest_many([("A 2020.pdf", b""), ("B 2021.pdf", b"")])
        self.assertTrue(self.collection.set_date(a.id, "2022-02-02"))
        self.assertEqual(a.publication_date, "2022-02-02")
        self.assertTrue(a.date_manually_set)
        self.assertFalse(b.date_manually_set)
        self.assertEqual(names(self.collection), ["[01] A 2020.pdf", "[02] B 2021.pdf"])

    def test_set_date_unknown_id_is_noop(self):
        record = self.collection.ingest("A 2020.pdf", b"")
        self.assertFalse(self.collection.set_date("missing", "2022-02-02"))
        self.assertEqual(record.publication_date, "2020-01-01")

    def test_set_date_rejects_malformed_date(self):
        record = self.collection.ingest("A 2020.pdf", b"")
        with self.assertRaises(ValueError):
            self.collection.set_date(record.id, "2022-02-30")
        self.assertEqual(record.publication_date, "2020-01-01")
        self.assertFalse(record.date_manually_set)

    def test_manual_flag_never_resets(self):
        record = self.collection.ingest("A 2020.pdf", b"")
        self.collection.set_date(record.id, "2021-01-01")
        self.collection.set_rule(RenameRule(mode=RenameMode.OFFSET))
        self.collection.set_sort_order(SortOrder.NAME)
        self.assertTrue(record.date_manually_set)

    def test_set_rule_rejects_invalid(self):
        with self.assertRaises(ValueError):
            self.collection.set_rule(RenameRule(min_digits=9))
        self.assertEqual(self.collection.rule, RenameRule())

    def test_rule_is_a_copy(self):
        self.collection.ingest("A.pdf", b"")
        rule = self.collection.rule
        rule.start_number = 50
        self.assertEqual(names(self.collection), ["[01] A.pdf"])

    def test_set_rule_copies_input(self):
        self.collection.ingest("A.pdf", b"")
        rule = RenameRule(start_number=3)
        self.collection.set_rule(rule)
        rule.start_number = 90
        self.assertEqual(names(self.collection), ["[03] A.pdf"])

    def test_set_sort_order_rejects_unknown(self):
        with self.assertRaises(ValueError):
            self.collection.set_sort_order("name")

    def test_clear(self):
        self.collection.ingest_many([("a.pdf", b""), ("b.pdf", b"")])
        self.collection.clear()
        self.assertEqual(len(self.collection), 0)
        self.assertEqual(self.collection.display_sequence(), [])

    def test_default_sort_order(self):
        self.assertEqual(self.collection.sort_order, SortOrder.NEWEST)


if __name__ == "__main__":
    unittest.main()
