import unittest

from core.models import FileRecord, RenameRule, RenameMode, NumberFormat
from core.rename_rules import (
    compute_name, compute_number, format_number, build_number_token, validate_rule
)


def make_record(title="A", extension=".pdf", ordinal=None):
    return FileRecord(
        id="r1",
        original_blob=b"",
        original_name=f"{title}{extension}",
        clean_title=title,
        extension=extension,
        publication_date="2024-01-01",
        original_ordinal=ordinal,
    )


class TestComputeName(unittest.TestCase):
    def test_default_rule(self):
        self.assertEqual(compute_name(make_record(), 0, RenameRule()), "[01] A.pdf")

    def test_sequential_uses_display_index(self):
        rule = RenameRule(start_number=5, number_format=NumberFormat.DOT, separator="")
        names = [compute_name(make_record(t), i, rule) for i, t in enumerate("ABC")]
        self.assertEqual(names, ["05.A.pdf", "06.B.pdf", "07.C.pdf"])

    def test_sequential_ignores_original_ordinal(self):
        rule = RenameRule(start_number=1)
        self.assertEqual(compute_name(make_record(ordinal=40), 2, rule), "[03] A.pdf")

    def test_offset_shifts_original_ordinal(self):
        rule = RenameRule(mode=RenameMode.OFFSET, offset_value=2)
        self.assertEqual(compute_name(make_record(ordinal=3), 0, rule), "[05] A.pdf")

    def test_offset_ignores_display_index(self):
        rule = RenameRule(mode=RenameMode.OFFSET, offset_value=2)
        self.assertEqual(
            compute_name(make_record(ordinal=3), 0, rule),
            compute_name(make_record(ordinal=3), 9, rule),
        )

    def test_offset_clamps_to_zero(self):
        rule = RenameRule(mode=RenameMode.OFFSET, offset_value=-5)
        self.assertEqual(compute_number(make_record(ordinal=1), 0, rule), 0)
        self.assertEqual(compute_name(make_record(ordinal=1), 0, rule), "[00] A.pdf")

    def test_offset_absent_ordinal_uses_zero_base(self):
        rule = RenameRule(mode=RenameMode.OFFSET, offset_value=3)
        self.assertEqual(compute_number(make_record(ordinal=None), 0, rule), 3)

    def test_offset_ordinal_zero(self):
        rule = RenameRule(mode=RenameMode.OFFSET, offset_value=0)
        self.assertEqual(compute_number(make_record(ordinal=0), 0, rule), 0)

    def test_no_extension(self):
        self.assertEqual(compute_name(make_record(extension=""), 0, RenameRule()), "[01] A")

    def test_deterministic(self):
        rule = RenameRule(number_format=NumberFormat.CUSTOM, custom_prefix="No.")
        record = make_record()
        self.assertEqual(compute_name(record, 4, rule), compute_name(record, 4, rule))


class TestNumberFormatting(unittest.TestCase):
    def test_padding(self):
        self.assertEqual(format_number(7, 3), "007")
        self.assertEqual(format_number(7, 1), "7")

    def test_padding_never_truncates(self):
        self.assertEqual(format_number(123, 2), "123")

    def test_tokens(self):
        test_cases = [
            (NumberFormat.BRACKETS, "[01]"),
            (NumberFormat.DOT, "01."),
            (NumberFormat.UNDERSCORE, "01_"),
            (NumberFormat.HYPHEN, "01-"),
        ]
        for fmt, expected in test_cases:
            self.assertEqual(build_number_token("01", RenameRule(number_format=fmt)), expected)

    def test_custom_token(self):
        rule = RenameRule(number_format=NumberFormat.CUSTOM, custom_prefix="P-")
        self.assertEqual(build_number_token("01", rule), "P-01")

    def test_separator(self):
        rule = RenameRule(number_format=NumberFormat.HYPHEN, separator="__", min_digits=3)
        self.assertEqual(compute_name(make_record(), 0, rule), "001-__A.pdf")


class TestValidateRule(unittest.TestCase):
    def test_default_rule_is_valid(self):
        self.assertEqual(validate_rule(RenameRule()), [])

    def test_min_digits_range(self):
        self.assertEqual(len(validate_rule(RenameRule(min_digits=0))), 1)
        self.assertEqual(len(validate_rule(RenameRule(min_digits=6))), 1)
        self.assertEqual(validate_rule(RenameRule(min_digits=5)), [])

    def test_unknown_enums(self):
        errors = validate_rule(RenameRule(mode="sequential", number_format="dot"))
        self.assertEqual(len(errors), 2)


if __name__ == "__main__":
    unittest.main()
