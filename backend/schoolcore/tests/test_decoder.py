import time
from datetime import datetime

from django.test import SimpleTestCase

from schoolcore.services.decoder import (
    OLE2_SIGNATURE,
    clean_cell,
    decode_bytes,
    filter_rows,
    resolve_file_type,
    sniff_file_type,
)
from schoolcore.services.errors import (
    EmptyFile,
    FileTypeMismatch,
    NoDataRows,
    NoHeaders,
    ParseTimeout,
    TooManyRows,
)
from schoolcore.tests.helpers import xlsx_bytes


class FileTypeTests(SimpleTestCase):
    def test_xlsx_renamed_to_csv_is_a_mismatch(self):
        data = xlsx_bytes(["first_name"], [["Ada"]])
        self.assertEqual(sniff_file_type(data), "xlsx")
        with self.assertRaises(FileTypeMismatch) as caught:
            resolve_file_type(data, "csv")
        self.assertIn(".xlsx", caught.exception.message)

    def test_legacy_workbook_signature(self):
        data = OLE2_SIGNATURE + b"\x00" * 64
        self.assertEqual(resolve_file_type(data, "xls"), "xls")
        self.assertEqual(resolve_file_type(data, ".XLSX"), "xls")
        with self.assertRaises(FileTypeMismatch):
            resolve_file_type(data, "csv")

    def test_plain_text_honours_declared_extension(self):
        self.assertEqual(resolve_file_type(b"a,b\n1,2\n", "csv"), "csv")
        self.assertEqual(resolve_file_type(b"a,b\n1,2\n", "txt"), "csv")

    def test_unsupported_extension(self):
        with self.assertRaises(FileTypeMismatch):
            resolve_file_type(b"a,b\n", "pdf")


class CsvDecodeTests(SimpleTestCase):
    def test_rows_stay_aligned_with_headers(self):
        table = decode_bytes(b"a,b,,d\n1,2,3,4\n5\n6,7,8,9\n", "csv")
        self.assertEqual(table.headers, ["a", "b", None, "d"])
        self.assertEqual(table.rows[0].cells, ["1", "2", "3", "4"])
        self.assertEqual(table.rows[1].cells, ["5", None, None, None])
        self.assertEqual(table.rows[2].cells, ["6", "7", "8", "9"])

    def test_cells_past_the_last_header_are_kept(self):
        table = decode_bytes(b"a,b,\n1,2,stray\n3,4,,extra\n", "csv")
        self.assertEqual(table.headers, ["a", "b", None, None])
        self.assertEqual(table.rows[0].cells, ["1", "2", "stray", None])
        self.assertEqual(table.rows[1].cells, ["3", "4", None, "extra"])

    def test_unused_trailing_blank_headers_are_dropped(self):
        table = decode_bytes(b"a,b,,\n1,2,,\n", "csv")
        self.assertEqual(table.headers, ["a", "b"])

    def test_row_numbers_match_the_spreadsheet(self):
        table = decode_bytes(b"name\nfirst\n\n,\nfourth\n", "csv")
        self.assertEqual([row.row_number for row in table.rows], [2, 5])

    def test_windows_1252_fallback(self):
        table = decode_bytes("name\nJosé\n".encode("cp1252"), "csv")
        self.assertEqual(table.rows[0].cells, ["José"])

    def test_utf8_bom_is_dropped(self):
        table = decode_bytes("\ufeffname\nAda\n".encode("utf-8"), "csv")
        self.assertEqual(table.headers, ["name"])

    def test_empty_file(self):
        with self.assertRaises(EmptyFile):
            decode_bytes(b"  \n", "csv")

    def test_blank_header_row(self):
        with self.assertRaises(NoHeaders):
            decode_bytes(b",,\n1,2,3\n", "csv")

    def test_headers_without_data(self):
        with self.assertRaises(NoDataRows):
            decode_bytes(b"a,b\n,\n", "csv")

    def test_row_ceiling(self):
        with self.assertRaises(TooManyRows):
            decode_bytes(b"a\n1\n2\n3\n", "csv", max_rows=2)

    def test_deadline(self):
        data = b"a\n" + b"x\n" * 250
        with self.assertRaises(ParseTimeout):
            decode_bytes(data, "csv", deadline=time.monotonic() - 1)


class XlsxDecodeTests(SimpleTestCase):
    def test_reads_first_sheet_by_position(self):
        data = xlsx_bytes(
            ["name", None, "joined"],
            [["Ada", "stray", datetime(2024, 4, 15)], [None, None, None], ["Grace", None, 45000]],
        )
        table = decode_bytes(data, "xlsx")
        self.assertEqual(table.file_type, "xlsx")
        self.assertEqual(table.headers, ["name", None, "joined"])
        self.assertEqual(table.rows[0].cells, ["Ada", "stray", datetime(2024, 4, 15)])
        self.assertEqual(table.rows[1].row_number, 4)
        self.assertEqual(table.rows[1].cells, ["Grace", None, "45000"])


class CellTests(SimpleTestCase):
    def test_numbers_render_without_trailing_zero(self):
        self.assertEqual(clean_cell(9876543210.0), "9876543210")
        self.assertEqual(clean_cell(12.5), "12.5")

    def test_blank_and_whitespace(self):
        self.assertIsNone(clean_cell("   "))
        self.assertEqual(clean_cell("  Ada "), "Ada")

    def test_binary_garbage_is_discarded(self):
        self.assertIsNone(clean_cell("PK\x03\x04" + "x" * 40))
        self.assertIsNone(clean_cell("[Content_Types].xml xl/worksheets/sheet1.xml payload"))
        self.assertEqual(clean_cell("short\x01"), "short\x01")

    def test_filter_rows_only_counts_mapped_columns(self):
        table = decode_bytes(b"name,notes\nAda,\n,only notes\n", "csv")
        rows = filter_rows(table, ["first_name", None])
        self.assertEqual([row.row_number for row in rows], [2])
