from datetime import date, datetime
from decimal import Decimal

from django.test import SimpleTestCase

from schoolcore.services.normalizer import (
    date_to_serial,
    normalize_row,
    parse_bool,
    parse_date,
    parse_decimal,
    serial_to_date,
)
from schoolcore.services.schema import STUDENT_SCHEMA, TEACHER_SCHEMA


class SerialDateTests(SimpleTestCase):
    def test_known_serial(self):
        self.assertEqual(serial_to_date(45000), date(2023, 3, 15))
        self.assertEqual(date_to_serial(date(2023, 3, 15)), 45000)

    def test_epoch_and_phantom_leap_day(self):
        self.assertEqual(serial_to_date(1), date(1900, 1, 1))
        self.assertEqual(serial_to_date(59), date(1900, 2, 28))
        self.assertIsNone(serial_to_date(60))
        self.assertEqual(serial_to_date(61), date(1900, 3, 1))

    def test_round_trip_either_side_of_the_leap_quirk(self):
        for serial in (1, 31, 59, 61, 366, 45000, 60000):
            self.assertEqual(date_to_serial(serial_to_date(serial)), serial)

    def test_out_of_range_serials(self):
        self.assertIsNone(serial_to_date(0))
        self.assertIsNone(serial_to_date(-5))
        self.assertIsNone(serial_to_date(99999999))


class ParseDateTests(SimpleTestCase):
    def test_layouts(self):
        expected = date(2024, 4, 15)
        for raw in ("2024-04-15", "2024/04/15", "15-04-2024", "15/04/2024", "15.04.2024", "04/15/2024", "15 Apr 2024", "April 15, 2024", "2024-04-15 00:00:00"):
            self.assertEqual(parse_date(raw), expected, raw)

    def test_day_first_wins_when_ambiguous(self):
        self.assertEqual(parse_date("03/04/2024"), date(2024, 4, 3))

    def test_cell_objects_and_serial_strings(self):
        self.assertEqual(parse_date(datetime(2024, 4, 15, 9, 30)), date(2024, 4, 15))
        self.assertEqual(parse_date(45000.0), date(2023, 3, 15))
        self.assertEqual(parse_date("45000"), date(2023, 3, 15))

    def test_unparseable_is_none(self):
        self.assertIsNone(parse_date("next tuesday"))
        self.assertIsNone(parse_date("31/02/2024"))
        self.assertIsNone(parse_date("  "))
        self.assertIsNone(parse_date(None))


class ScalarTests(SimpleTestCase):
    def test_decimals(self):
        self.assertEqual(parse_decimal("₹1,250.5"), Decimal("1250.50"))
        self.assertEqual(parse_decimal("Rs. 40,000"), Decimal("40000.00"))
        self.assertEqual(parse_decimal("(12)"), Decimal("-12.00"))
        self.assertIsNone(parse_decimal("twelve"))
        self.assertIsNone(parse_decimal("NaN"))

    def test_booleans(self):
        self.assertIs(parse_bool("Yes"), True)
        self.assertIs(parse_bool("0"), False)
        self.assertIsNone(parse_bool("maybe"))


class NormalizeRowTests(SimpleTestCase):
    def test_typed_fields_and_raw_text(self):
        column_map = ["first_name", "date_of_birth", "gender", "email", "father_annual_income"]
        row = normalize_row(
            7,
            ["  Ada ", "not a date", "f", "Ada@Example.COM", "3,00,000"],
            column_map,
            STUDENT_SCHEMA,
        )
        self.assertEqual(row.row_number, 7)
        self.assertEqual(row.fields["first_name"], "Ada")
        self.assertIsNone(row.fields["date_of_birth"])
        self.assertEqual(row.raw["date_of_birth"], "not a date")
        self.assertEqual(row.fields["gender"], "Female")
        self.assertEqual(row.fields["email"], "ada@example.com")
        self.assertEqual(row.fields["father_annual_income"], Decimal("300000.00"))

    def test_blank_cells_are_absent_not_empty(self):
        row = normalize_row(2, ["Ada", "   ", None], ["first_name", "last_name", "remarks"], STUDENT_SCHEMA)
        self.assertEqual(row.fields, {"first_name": "Ada"})
        self.assertNotIn("last_name", row.raw)

    def test_unmapped_column_keeps_its_position(self):
        headers = ["first_name", "last_name", None, "email"]
        column_map = ["first_name", "last_name", None, "email"]
        row = normalize_row(2, ["Ada", "Lovelace", "stray", "ada@example.com"], column_map, STUDENT_SCHEMA, headers)
        self.assertEqual(row.raw["_unmapped"], {"C": "stray"})
        self.assertEqual(row.fields["last_name"], "Lovelace")
        self.assertEqual(row.fields["email"], "ada@example.com")

    def test_full_name_column_is_split(self):
        row = normalize_row(2, ["Grace Brewster Hopper"], ["full_name"], TEACHER_SCHEMA)
        self.assertEqual(row.fields["first_name"], "Grace")
        self.assertEqual(row.fields["last_name"], "Brewster Hopper")
        self.assertNotIn("full_name", row.fields)

    def test_boolean_and_choice_fields(self):
        row = normalize_row(
            2,
            ["yes", "contractual"],
            ["is_class_teacher", "employee_type"],
            TEACHER_SCHEMA,
        )
        self.assertIs(row.fields["is_class_teacher"], True)
        self.assertEqual(row.fields["employee_type"], "Contract")
