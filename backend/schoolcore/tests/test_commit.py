from django.test import TestCase

from schoolcore.models import Account, Student, Teacher
from schoolcore.services import lifecycle, staging
from schoolcore.services.commit import SKIPPED_MESSAGE, commit_rows
from schoolcore.services.errors import CommitConflict, PartialCommitFailure
from schoolcore.tests.helpers import (
    STUDENT_HEADERS,
    make_branch,
    make_grade,
    make_user,
    student_row,
    teacher_row,
    upload_rows,
)


def second_student():
    return student_row(first_name="Mary", email="mary@example.com", phone="9000000002", admission="ADM002")


class CommitTests(TestCase):
    def setUp(self):
        self.branch = make_branch()
        make_grade("5")

    def validated(self, entity_type, rows, **kwargs):
        batch = upload_rows(entity_type, self.branch, rows, **kwargs)
        lifecycle.validate_batch_id(entity_type, batch.batch_id)
        batch.refresh_from_db()
        return batch

    def test_commit_creates_linked_account_and_profile(self):
        batch = self.validated("student", [student_row(Password="S3cret!pass")], headers=STUDENT_HEADERS + ["Password"])
        result = commit_rows(batch)

        self.assertEqual((result.imported, result.failed), (1, 0))
        student = Student.objects.get()
        account = student.user
        self.assertEqual(account.username, "john@example.com")
        self.assertEqual(account.role, "student")
        self.assertEqual(account.profile_id, student.pk)
        self.assertEqual(account.branch, self.branch)
        self.assertTrue(account.check_password("S3cret!pass"))
        self.assertEqual((student.grade, student.academic_year), ("5", "2024-2025"))
        self.assertEqual(student.country, "India")

        row = staging.rows_for(batch).get()
        self.assertTrue(row.imported_to_production)
        self.assertEqual(row.imported_record_id, student.pk)
        self.assertEqual(row.imported_user, account)
        self.assertIsNone(row.password)

    def test_default_password_for_teachers(self):
        batch = self.validated("teacher", [teacher_row()])
        commit_rows(batch)
        teacher = Teacher.objects.get()
        self.assertEqual(teacher.user.role, "teacher")
        self.assertTrue(teacher.user.check_password("Welcome@123"))
        self.assertEqual(str(teacher.basic_salary), "50000.00")

    def test_invalid_rows_count_as_failed(self):
        batch = self.validated("student", [student_row(), second_student(), student_row(email="bad", admission="ADM003", phone="9000000003")])
        result = commit_rows(batch)

        self.assertEqual(result.imported, 2)
        self.assertEqual(result.failed, 1)
        self.assertEqual(result.attempted, 3)
        self.assertEqual(result.failures, [{"row_number": 4, "error": SKIPPED_MESSAGE}])
        self.assertEqual(Student.objects.count(), 2)

    def test_imported_rows_are_never_committed_twice(self):
        batch = self.validated("student", [student_row()])
        commit_rows(batch)
        again = commit_rows(batch)
        self.assertEqual(again.attempted, 0)
        self.assertEqual(Student.objects.count(), 1)

    def test_failing_row_rolls_back_alone(self):
        batch = self.validated("student", [student_row(), second_student()])
        # Claims the login name the first row will ask for.
        make_user(username="john@example.com", email="someone.else@example.com")

        result = commit_rows(batch)

        self.assertEqual((result.imported, result.failed), (1, 1))
        self.assertEqual(result.failures[0]["row_number"], 2)
        self.assertEqual(list(Student.objects.values_list("admission_number", flat=True)), ["ADM002"])
        self.assertFalse(Account.objects.filter(email="john@example.com").exists())
        row = staging.rows_for(batch).get(row_number=2)
        self.assertFalse(row.imported_to_production)
        self.assertNotEqual(row.commit_error, "")


class StrictCommitTests(TestCase):
    def setUp(self):
        self.branch = make_branch()
        make_grade("5")

    def test_invalid_rows_block_a_strict_commit(self):
        batch = upload_rows("student", self.branch, [student_row(), student_row(email="bad", phone="9000000002", admission="ADM002")])
        lifecycle.validate_batch_id("student", batch.batch_id)

        with self.assertRaises(CommitConflict):
            lifecycle.commit_batch_id("student", batch.batch_id, skip_invalid=False)

        batch.refresh_from_db()
        self.assertEqual(batch.status, "validated")
        self.assertEqual(Student.objects.count(), 0)

    def test_one_failure_rolls_back_every_row(self):
        batch = upload_rows("student", self.branch, [student_row(), second_student()])
        lifecycle.validate_batch_id("student", batch.batch_id)
        make_user(username="mary@example.com", email="someone.else@example.com")

        with self.assertRaises(PartialCommitFailure) as caught:
            lifecycle.commit_batch_id("student", batch.batch_id, skip_invalid=False)

        self.assertEqual(caught.exception.result.imported, 0)
        self.assertEqual(caught.exception.result.failed, 2)
        self.assertEqual(Student.objects.count(), 0)
        self.assertFalse(Account.objects.filter(email="john@example.com").exists())
        batch.refresh_from_db()
        self.assertEqual(batch.status, "failed")
        self.assertTrue(staging.rows_for(batch).filter(row_number=3).exclude(commit_error="").exists())
