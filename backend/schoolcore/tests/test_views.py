from unittest import mock

from django.test import TestCase
from django.urls import reverse

from schoolcore.models import ImportBatch, Student
from schoolcore.services.templates import XLSX_CONTENT_TYPE
from schoolcore.tests.helpers import (
    STUDENT_HEADERS,
    csv_bytes,
    make_branch,
    make_grade,
    make_user,
    student_row,
    upload_file,
    xlsx_bytes,
)


class ImportViewTests(TestCase):
    def setUp(self):
        self.branch = make_branch()
        make_grade("5")
        self.user = make_user()
        self.client.force_login(self.user)

    def upload(self, rows, name="students.csv", data=None, entity="student"):
        data = data if data is not None else csv_bytes(STUDENT_HEADERS, rows)
        return self.client.post(
            reverse("schoolcore:import_upload", kwargs={"entity": entity}),
            {
                "file": upload_file(data, name),
                "branch_id": self.branch.pk,
                "grade": "5",
                "academic_year": "2024-2025",
            },
        )

    def batch_url(self, name, batch_id, entity="student"):
        return reverse(f"schoolcore:{name}", kwargs={"entity": entity, "batch_id": batch_id})

    def test_login_required(self):
        self.client.logout()
        response = self.client.get(reverse("schoolcore:import_modules"))
        self.assertEqual(response.status_code, 302)

    def test_wrong_method(self):
        response = self.client.get(reverse("schoolcore:import_upload", kwargs={"entity": "student"}))
        self.assertEqual(response.status_code, 405)

    def test_modules(self):
        response = self.client.get(reverse("schoolcore:import_modules"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([module["id"] for module in response.json()["data"]], ["student", "teacher"])

    def test_upload_validate_preview_commit(self):
        response = self.upload([student_row(), student_row(email="broken", phone="9000000002", admission="ADM002")])
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["success"])
        batch_id = body["data"]["batch_id"]
        self.assertEqual(ImportBatch.objects.get(batch_id=batch_id).uploaded_by, self.user)

        response = self.client.post(self.batch_url("import_validate", batch_id))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"batch_id": batch_id, "total": 2, "valid": 1, "invalid": 1})

        response = self.client.get(self.batch_url("import_preview", batch_id), {"status": "invalid"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([row["row_number"] for row in response.json()["data"]["rows"]], [3])

        response = self.client.post(self.batch_url("import_commit", batch_id))
        self.assertEqual(response.status_code, 207)
        body = response.json()
        self.assertEqual(body["error"], "partial_commit_failure")
        self.assertEqual(body["data"]["imported"], 1)
        self.assertEqual(body["data"]["failed"], 1)
        self.assertEqual(Student.objects.count(), 1)

    def test_strict_commit_is_refused_while_rows_are_invalid(self):
        batch_id = self.upload([student_row(email="broken")]).json()["data"]["batch_id"]
        self.client.post(self.batch_url("import_validate", batch_id))
        response = self.client.post(
            self.batch_url("import_commit", batch_id),
            data={"skip_invalid": False},
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "commit_conflict")

    def test_clean_commit(self):
        batch_id = self.upload([student_row()]).json()["data"]["batch_id"]
        self.client.post(self.batch_url("import_validate", batch_id))
        response = self.client.post(self.batch_url("import_commit", batch_id))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["attempted"], 1)

    def test_cancel_then_preview_is_not_found(self):
        batch_id = self.upload([student_row()]).json()["data"]["batch_id"]
        response = self.client.post(self.batch_url("import_cancel", batch_id))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["status"], "cancelled")
        response = self.client.get(self.batch_url("import_preview", batch_id))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "batch_not_found")

    def test_unknown_entity(self):
        response = self.upload([student_row()], entity="parent")
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"], "validation_failed")

    def test_mismatched_content(self):
        response = self.upload([], data=xlsx_bytes(["First Name"], [["Ada"]]))
        self.assertEqual(response.status_code, 415)
        self.assertEqual(response.json()["error"], "file_type_mismatch")

    def test_history(self):
        self.upload([student_row()])
        response = self.client.get(reverse("schoolcore:import_history"), {"entity_type": "student"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["meta"]["total"], 1)

    def test_template_download(self):
        response = self.client.get(reverse("schoolcore:import_template", kwargs={"entity": "teacher"}))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], XLSX_CONTENT_TYPE)
        self.assertIn("teacher_import_template.xlsx", response["Content-Disposition"])

    def test_unexpected_errors_are_hidden(self):
        with mock.patch("schoolcore.services.lifecycle.list_modules", side_effect=RuntimeError("boom")):
            response = self.client.get(reverse("schoolcore:import_modules"))
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["message"], "Server error")
        self.assertNotIn("detail", body)
