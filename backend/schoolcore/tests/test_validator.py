from datetime import date

from django.test import TestCase

from schoolcore.models import Section
from schoolcore.services import staging
from schoolcore.services.validator import validate_batch
from schoolcore.tests.helpers import (
    STUDENT_HEADERS,
    TEACHER_HEADERS,
    make_branch,
    make_grade,
    make_student,
    staged_batch,
    student_row,
    teacher_row,
)

TODAY = date(2024, 6, 1)


def rows_by_number(batch):
    return {row.row_number: row for row in staging.rows_for(batch)}


class StudentValidationTests(TestCase):
    def setUp(self):
        self.branch = make_branch()
        self.grade = make_grade("5")

    def test_clean_row_is_valid(self):
        batch = staged_batch("student", self.branch, [student_row()])
        counts = validate_batch(batch, today=TODAY)
        self.assertEqual((counts.total, counts.valid, counts.invalid), (1, 1, 0))
        row = rows_by_number(batch)[2]
        self.assertEqual(row.validation_errors, [])
        self.assertEqual(row.validation_warnings, [])
        self.assertEqual(row.grade, "5")
        self.assertEqual(row.academic_year, "2024-2025")

    def test_bad_values_are_reported_with_their_text(self):
        batch = staged_batch(
            "student",
            self.branch,
            [student_row(DOB="not a date", Gender="robot", Email="bad@", Phone="12", City="")],
        )
        validate_batch(batch, today=TODAY)
        errors = rows_by_number(batch)[2].validation_errors
        self.assertIn("Invalid Date of birth 'not a date'.", errors)
        self.assertIn("Invalid Gender 'robot' (expected one of: Male, Female, Other).", errors)
        self.assertIn("Email 'bad@' is not a valid email address.", errors)
        self.assertIn("Phone '12' must contain 7 to 15 digits.", errors)
        self.assertIn("City is required.", errors)

    def test_future_birth_date(self):
        batch = staged_batch("student", self.branch, [student_row(DOB="2024-07-01")])
        validate_batch(batch, today=TODAY)
        self.assertIn("Date of birth must be before today.", rows_by_number(batch)[2].validation_errors)

    def test_production_duplicates(self):
        make_student(self.branch, admission_number="ADM001", email="existing@example.com")
        batch = staged_batch("student", self.branch, [student_row(email="Existing@Example.com")])
        validate_batch(batch, today=TODAY)
        errors = rows_by_number(batch)[2].validation_errors
        self.assertIn("Email 'existing@example.com' already exists in production records.", errors)
        self.assertIn("Admission number 'ADM001' already exists in production records.", errors)

    def test_first_occurrence_wins_within_a_batch(self):
        batch = staged_batch(
            "student",
            self.branch,
            [
                student_row(email="a@example.com", phone="9000000001", admission="ADM001"),
                student_row(email="b@example.com", phone="9000000002", admission="ADM002"),
                student_row(email="A@example.com", phone="9000000003", admission="ADM003"),
            ],
        )
        counts = validate_batch(batch, today=TODAY)
        rows = rows_by_number(batch)
        self.assertEqual(counts.valid, 2)
        self.assertEqual(rows[2].validation_status, "valid")
        self.assertEqual(
            rows[4].validation_errors,
            ["Email 'a@example.com' is duplicated within this import (first seen in row 2)."],
        )

    def test_revalidating_an_unchanged_batch_gives_the_same_result(self):
        batch = staged_batch(
            "student",
            self.branch,
            [student_row(), student_row(email="x@example.com", admission="ADM001"), student_row(Gender="?")],
        )
        first = validate_batch(batch, today=TODAY)
        first_errors = {n: row.validation_errors for n, row in rows_by_number(batch).items()}
        second = validate_batch(batch, today=TODAY)
        second_errors = {n: row.validation_errors for n, row in rows_by_number(batch).items()}
        self.assertEqual(first, second)
        self.assertEqual(first_errors, second_errors)

    def test_fixing_reference_data_clears_the_error(self):
        self.grade.delete()
        batch = staged_batch("student", self.branch, [student_row()])
        validate_batch(batch, today=TODAY)
        self.assertEqual(rows_by_number(batch)[2].validation_errors, ["Grade '5' does not exist."])

        make_grade("5")
        counts = validate_batch(batch, today=TODAY)
        self.assertEqual(counts.valid, 1)
        self.assertEqual(rows_by_number(batch)[2].validation_errors, [])

    def test_row_placement_overrides_the_batch_context(self):
        make_grade("6")
        headers = STUDENT_HEADERS + ["Class", "Section"]
        batch = staged_batch("student", self.branch, [student_row(Class="6", Section="B")], headers=headers)
        validate_batch(batch, today=TODAY)
        row = rows_by_number(batch)[2]
        self.assertEqual((row.grade, row.section, row.academic_year), ("6", "B", "2024-2025"))

    def test_inactive_branch(self):
        self.branch.is_active = False
        self.branch.save()
        batch = staged_batch("student", self.branch, [student_row()])
        validate_batch(batch, today=TODAY)
        self.assertIn("Branch 'MAIN' is not active.", rows_by_number(batch)[2].validation_errors)

    def test_warnings_do_not_invalidate(self):
        context = {"grade": "5", "section": "A", "academic_year": "2024-2025"}
        batch = staged_batch("student", self.branch, [student_row()], context=context)
        counts = validate_batch(batch, today=date(2030, 1, 1))
        row = rows_by_number(batch)[2]
        self.assertEqual(counts.valid, 1)
        self.assertIn("Section 'A' is not set up for grade '5' in branch 'MAIN'.", row.validation_warnings)
        self.assertIn("Age 15 may not be appropriate for grade '5'.", row.validation_warnings)

        Section.objects.create(branch=self.branch, grade_level="5", name="A")
        validate_batch(batch, today=TODAY)
        self.assertEqual(rows_by_number(batch)[2].validation_warnings, [])

    def test_capacity_warning_counts_rows_in_order(self):
        self.branch.capacity = 1
        self.branch.save()
        batch = staged_batch(
            "student",
            self.branch,
            [student_row(), student_row(email="b@example.com", phone="9000000002", admission="ADM002")],
        )
        validate_batch(batch, today=TODAY)
        rows = rows_by_number(batch)
        self.assertEqual(rows[2].validation_warnings, [])
        self.assertEqual(rows[3].validation_warnings, ["Branch 'MAIN' would exceed its capacity of 1 students."])
        self.assertEqual(rows[3].validation_status, "valid")


class TeacherValidationTests(TestCase):
    def setUp(self):
        self.branch = make_branch()

    def test_clean_row_is_valid_without_grade_context(self):
        batch = staged_batch("teacher", self.branch, [teacher_row()])
        counts = validate_batch(batch, today=TODAY)
        self.assertEqual(counts.valid, 1)

    def test_employment_rules(self):
        headers = TEACHER_HEADERS + ["Leaving Date"]
        batch = staged_batch(
            "teacher",
            self.branch,
            [teacher_row(**{"Leaving Date": "2019-01-01", "Employee Type": "Intern", "Basic Salary": "-5"})],
            headers=headers,
        )
        validate_batch(batch, today=TODAY)
        errors = rows_by_number(batch)[2].validation_errors
        self.assertIn("Leaving date cannot be before joining date.", errors)
        self.assertIn(
            "Invalid Employee type 'Intern' (expected one of: Permanent, Contract, Visiting, Temporary).",
            errors,
        )
        self.assertIn("Basic salary cannot be negative.", errors)

    def test_duplicate_employee_id(self):
        batch = staged_batch(
            "teacher",
            self.branch,
            [teacher_row(), teacher_row(email="other@example.com", employee_id="emp001")],
        )
        validate_batch(batch, today=TODAY)
        self.assertEqual(
            rows_by_number(batch)[3].validation_errors,
            ["Employee ID 'emp001' is duplicated within this import (first seen in row 2)."],
        )

    def test_amounts_must_fit_the_profile_column(self):
        batch = staged_batch(
            "teacher",
            self.branch,
            [teacher_row(), teacher_row(email="rich@example.com", employee_id="EMP002", **{"Basic Salary": "123456789"})],
        )
        counts = validate_batch(batch, today=TODAY)
        rows = rows_by_number(batch)
        self.assertEqual(counts.valid, 1)
        self.assertEqual(rows[2].validation_errors, [])
        self.assertEqual(rows[3].validation_errors, ["Basic salary must be less than 100,000,000."])
