from django.test import SimpleTestCase

from schoolcore.services.errors import ValidationFailed
from schoolcore.services.headers import map_headers, normalize_header, resolve_header


class NormalizeHeaderTests(SimpleTestCase):
    def test_tokens(self):
        self.assertEqual(normalize_header("  Date-of Birth "), "date_of_birth")
        self.assertEqual(normalize_header("Father's Name"), "fathers_name")
        self.assertEqual(normalize_header("Mobile No."), "mobile_no")
        self.assertEqual(normalize_header("E-mail (Primary)"), "e_mail_primary")
        self.assertEqual(normalize_header(None), "")


class ResolveHeaderTests(SimpleTestCase):
    def test_synonyms_share_a_field(self):
        for header in ("DOB", "Birthdate", "Date of Birth", "birth_date"):
            self.assertEqual(resolve_header(header, "student"), "date_of_birth", header)

    def test_entity_specific_tables(self):
        self.assertEqual(resolve_header("Adm No", "student"), "admission_number")
        self.assertIsNone(resolve_header("Adm No", "teacher"))
        self.assertEqual(resolve_header("Emp Code", "teacher"), "employee_id")

    def test_grade_columns_are_row_overrides(self):
        self.assertEqual(resolve_header("Class", "student"), "grade_override")
        self.assertEqual(resolve_header("Section", "student"), "section_override")
        self.assertEqual(resolve_header("Academic Year", "student"), "academic_year_override")

    def test_substring_fallback(self):
        self.assertEqual(resolve_header("Student Date of Birth", "student"), "date_of_birth")
        self.assertEqual(resolve_header("Admission Number (as per TC)", "student"), "admission_number")

    def test_short_tokens_only_match_exactly(self):
        self.assertIsNone(resolve_header("ph", "student"))
        self.assertEqual(resolve_header("pin", "student"), "pincode")
        self.assertIsNone(resolve_header("no", "student"))

    def test_unknown_headers_are_left_unmapped(self):
        self.assertIsNone(resolve_header("Favourite colour", "student"))
        self.assertIsNone(resolve_header("", "student"))

    def test_unknown_entity(self):
        with self.assertRaises(ValidationFailed):
            resolve_header("email", "parent")


class MapHeadersTests(SimpleTestCase):
    def test_positions_are_preserved(self):
        column_map = map_headers(["First Name", "", "Email", "Shoe size"], "student")
        self.assertEqual(column_map, ["first_name", None, "email", None])

    def test_left_most_duplicate_wins(self):
        column_map = map_headers(["Email", "Email Address", "Mobile", "Phone"], "teacher")
        self.assertEqual(column_map, ["email", None, "phone", None])

    def test_mapping_is_deterministic(self):
        headers = ["DOB", "Gender", "Roll", "Notes"]
        self.assertEqual(map_headers(headers, "student"), map_headers(headers, "student"))
