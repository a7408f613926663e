import io
import tempfile
import unittest
import zipfile
from contextlib import redirect_stdout
from pathlib import Path

from cli.cli_entry import main, parse_date_overrides, build_rule, create_parser
from core.models import RenameMode, NumberFormat


class TestCliEntry(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.TemporaryDirectory()
        self.root_path = Path(self.test_dir.name)
        self.papers = self.root_path / "papers"
        self.papers.mkdir()
        for name in ("[3] Gamma 2019.pdf", "[1] Alpha 2021.pdf", "Beta 2020.docx", "notes.txt"):
            (self.papers / name).write_bytes(name.encode())

    def tearDown(self):
        self.test_dir.cleanup()

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def test_preview(self):
        code, output = self.run_cli("preview", str(self.papers))
        self.assertEqual(code, 0)
        self.assertIn("3 files", output)
        self.assertIn("[01] Alpha 2021.pdf", output)
        self.assertIn("[02] Beta 2020.docx", output)
        self.assertIn("[03] Gamma 2019.pdf", output)
        self.assertNotIn("notes.txt", output)

    def test_preview_offset_mode(self):
        code, output = self.run_cli(
            "preview", str(self.papers), "--mode", "offset", "--offset", "2",
            "--sort", "number", "--format", "custom", "--prefix", "No", "--separator", "_"
        )
        self.assertEqual(code, 0)
        self.assertIn("No03_Alpha 2021.pdf", output)
        self.assertIn("No05_Gamma 2019.pdf", output)
        self.assertIn("No02_Beta 2020.docx", output)

    def test_preview_date_override(self):
        code, output = self.run_cli(
            "preview", str(self.papers), "--date", "Beta 2020.docx=2022-06-01"
        )
        self.assertEqual(code, 0)
        self.assertIn("[01] Beta 2020.docx", output)
        self.assertIn("2022-06-01*", output)

    def test_unknown_date_name_warns(self):
        code, output = self.run_cli("preview", str(self.papers), "--date", "Missing.pdf=2022-06-01")
        self.assertEqual(code, 0)
        self.assertIn("Warning", output)

    def test_invalid_date_fails(self):
        code, output = self.run_cli("preview", str(self.papers), "--date", "Beta 2020.docx=2022-13-01")
        self.assertEqual(code, 1)
        self.assertIn("Error", output)

    def test_invalid_digits_fails(self):
        code, output = self.run_cli("preview", str(self.papers), "--digits", "9")
        self.assertEqual(code, 1)
        self.assertIn("Minimum digits", output)

    def test_missing_input_fails(self):
        code, output = self.run_cli("preview", str(self.root_path / "missing"))
        self.assertEqual(code, 1)

    def test_export(self):
        destination = self.root_path / "out.zip"
        code, output = self.run_cli("export", str(self.papers), "-o", str(destination), "--yes")
        self.assertEqual(code, 0)
        with zipfile.ZipFile(destination) as zf:
            self.assertEqual(
                zf.namelist(),
                ["[01] Alpha 2021.pdf", "[02] Beta 2020.docx", "[03] Gamma 2019.pdf"]
            )
            self.assertEqual(zf.read("[03] Gamma 2019.pdf"), b"[3] Gamma 2019.pdf")

    def test_export_dry_run(self):
        destination = self.root_path / "out.zip"
        code, output = self.run_cli("export", str(self.papers), "-o", str(destination), "--dry-run")
        self.assertEqual(code, 0)
        self.assertIn("[Preview mode]", output)
        self.assertFalse(destination.exists())

    def test_export_bad_destination(self):
        destination = self.root_path / "missing" / "out.zip"
        code, output = self.run_cli("export", str(self.papers), "-o", str(destination), "--yes")
        self.assertEqual(code, 1)
        self.assertIn("Parent directory does not exist", output)


class TestArgumentHelpers(unittest.TestCase):
    def test_parse_date_overrides(self):
        self.assertEqual(
            parse_date_overrides(["a=b.pdf=2020-01-01"]),
            [("a=b.pdf", "2020-01-01")]
        )
        with self.assertRaises(ValueError):
            parse_date_overrides(["2020-01-01"])

    def test_build_rule(self):
        args = create_parser().parse_args(
            ["preview", "x", "--mode", "offset", "--offset", "-1", "--format", "dot", "--digits", "3"]
        )
        rule = build_rule(args)
        self.assertEqual(rule.mode, RenameMode.OFFSET)
        self.assertEqual(rule.offset_value, -1)
        self.assertEqual(rule.number_format, NumberFormat.DOT)
        self.assertEqual(rule.min_digits, 3)


if __name__ == "__main__":
    unittest.main()
