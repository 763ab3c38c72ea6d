import sys
import os
import io
import csv
import builtins
import tempfile
import unittest
from unittest.mock import patch
from datetime import date

from openpyxl import load_workbook

# Add the parent directory to sys.path to import the clockixl package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from clockixl.errors import ExportError
from clockixl.reports.aggregator import ResultSet, aggregate
from clockixl.reports.spreadsheet import export_to_spreadsheet, export_filename, build_rows, HEADERS
from clockixl.reports.time_entry import NormalizedRecord

START = date(2024, 2, 25)
END = date(2024, 3, 25)

def cell_values(ws):
    return [["" if value is None else value for value in row] for row in ws.iter_rows(values_only=True)]

class TestSpreadsheetExport(unittest.TestCase):
    """Test the spreadsheet exporter."""

    def setUp(self):
        self.result_set = aggregate([
            NormalizedRecord("2024-03-01", "Web", "Design", 5400000, "09:00:00 AM", "10:30:00 AM"),
            NormalizedRecord("2024-03-02", "No Project", "No Description", 900000, "08:00:00 AM", "08:15:00 AM", True),
        ])

    def test_filename(self):
        self.assertEqual(export_filename(START, END), "Clockify_Export_2024-02-25_to_2024-03-25.xlsx")
        self.assertEqual(export_filename(START, END, "csv"), "Clockify_Export_2024-02-25_to_2024-03-25.csv")

    def test_xlsx_layout(self):
        exported = export_to_spreadsheet(self.result_set, True, START, END)
        self.assertEqual(exported.filename, "Clockify_Export_2024-02-25_to_2024-03-25.xlsx")
        wb = load_workbook(io.BytesIO(exported.content))
        self.assertEqual(wb.sheetnames, ["Time Entries"])
        ws = wb["Time Entries"]
        self.assertEqual(cell_values(ws), [
            HEADERS,
            ["2024-03-02", "No Description", "0.25h", "08:00:00 AM", "08:15:00 AM"],
            ["2024-03-01", "Design", "1.50h", "09:00:00 AM", "10:30:00 AM"],
            ["", "", "1.75h", "", ""],
        ])
        self.assertTrue(ws["A1"].font.bold)
        self.assertEqual(ws.column_dimensions["A"].width, 12)
        self.assertEqual(ws.column_dimensions["B"].width, 30)

    def test_xlsx_without_task(self):
        """Task cells are blank but the column and total stay."""
        exported = export_to_spreadsheet(self.result_set, False, START, END)
        rows = cell_values(load_workbook(io.BytesIO(exported.content)).active)
        self.assertEqual(rows[0], HEADERS)
        self.assertEqual([row[1] for row in rows[1:]], ["", "", ""])
        self.assertEqual(rows[-1], ["", "", "1.75h", "", ""])

    def test_summary_row_independent_of_task_option(self):
        with_task = build_rows(self.result_set, True)
        without_task = build_rows(self.result_set, False)
        self.assertEqual(with_task[-1], without_task[-1])

    def test_csv(self):
        exported = export_to_spreadsheet(self.result_set, True, START, END, fmt="csv")
        self.assertEqual(exported.media_type, "text/csv")
        rows = list(csv.reader(io.StringIO(exported.content.decode("utf-8"))))
        self.assertEqual(rows[0], HEADERS)
        self.assertEqual(rows[-1], ["", "", "1.75h", "", ""])
        self.assertEqual(len(rows), 4)

    def test_empty_result_set(self):
        for result_set in (ResultSet(), None):
            with self.subTest(result_set=result_set):
                with self.assertRaises(ExportError) as ctx:
                    export_to_spreadsheet(result_set, True, START, END)
                self.assertEqual(ctx.exception.reason, ExportError.EMPTY)

    def test_unknown_format(self):
        with self.assertRaises(ExportError) as ctx:
            export_to_spreadsheet(self.result_set, True, START, END, fmt="ods")
        self.assertEqual(ctx.exception.reason, ExportError.FORMAT)

    def test_missing_backend(self):
        """Without openpyxl the export fails with a distinct reason."""
        real_import = builtins.__import__

        def fake_import(name, *args, **kwargs):
            if name.startswith("openpyxl"):
                raise ImportError("No module named 'openpyxl'")
            return real_import(name, *args, **kwargs)

        with patch('builtins.__import__', side_effect=fake_import):
            with self.assertRaises(ExportError) as ctx:
                export_to_spreadsheet(self.result_set, True, START, END)
        self.assertEqual(ctx.exception.reason, ExportError.BACKEND)
        self.assertNotEqual(ctx.exception.message, "No records to export")

    def test_save(self):
        exported = export_to_spreadsheet(self.result_set, True, START, END)
        with tempfile.TemporaryDirectory() as tmp:
            path = exported.save(os.path.join(tmp, "out"))
            self.assertEqual(os.path.basename(path), exported.filename)
            with open(path, 'rb') as f:
                self.assertEqual(f.read(), exported.content)

if __name__ == '__main__':
    unittest.main()
