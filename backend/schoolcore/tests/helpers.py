import csv
import io

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from openpyxl import Workbook

from schoolcore.models import Branch, Grade, Student
from schoolcore.services import lifecycle

STUDENT_HEADERS = [
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Admission No",
    "Admission Date",
    "DOB",
    "Gender",
    "Address",
    "City",
    "State",
    "Pincode",
    "Father Name",
    "Father Phone",
    "Mother Name",
    "Emergency Contact Name",
    "Emergency Contact Phone",
]

TEACHER_HEADERS = [
    "First Name",
    "Last Name",
    "Email",
    "Employee ID",
    "Joining Date",
    "Designation",
    "Employee Type",
    "DOB",
    "Gender",
    "Address",
    "Basic Salary",
]


def student_row(first_name="John", email="john@example.com", phone="9876543210", admission="ADM001", **overrides):
    row = {
        "First Name": first_name,
        "Last Name": "Doe",
        "Email": email,
        "Phone": phone,
        "Admission No": admission,
        "Admission Date": "2024-04-15",
        "DOB": "20/05/2014",
        "Gender": "M",
        "Address": "12 Main Street",
        "City": "Mumbai",
        "State": "Maharashtra",
        "Pincode": "400001",
        "Father Name": "Rajesh Doe",
        "Father Phone": "9876500001",
        "Mother Name": "Priya Doe",
        "Emergency Contact Name": "Rajesh Doe",
        "Emergency Contact Phone": "9876500001",
    }
    row.update(overrides)
    return row


def teacher_row(email="jane@example.com", employee_id="EMP001", **overrides):
    row = {
        "First Name": "Jane",
        "Last Name": "Smith",
        "Email": email,
        "Employee ID": employee_id,
        "Joining Date": "2020-06-01",
        "Designation": "Senior Teacher",
        "Employee Type": "Permanent",
        "DOB": "1985-03-15",
        "Gender": "Female",
        "Address": "456 Park Avenue",
        "Basic Salary": "50,000",
    }
    row.update(overrides)
    return row


def csv_bytes(headers, rows, encoding="utf-8"):
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(headers)
    for row in rows:
        writer.writerow([row.get(header, "") for header in headers] if isinstance(row, dict) else row)
    return buffer.getvalue().encode(encoding)


def xlsx_bytes(headers, rows):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(headers)
    for row in rows:
        sheet.append([row.get(header) for header in headers] if isinstance(row, dict) else row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def upload_file(data, name="students.csv"):
    return SimpleUploadedFile(name, data, content_type="application/octet-stream")


def make_branch(code="MAIN", **kwargs):
    kwargs.setdefault("name", "Main Campus")
    return Branch.objects.create(code=code, **kwargs)


def make_grade(value="5"):
    return Grade.objects.create(value=value, name=f"Grade {value}")


def make_user(username="registrar", password="password", **kwargs):
    kwargs.setdefault("email", f"{username}@example.com")
    return get_user_model().objects.create_user(username=username, password=password, **kwargs)


def make_student(branch, admission_number="ADM900", email="existing@example.com", phone=""):
    user = make_user(username=email, email=email, phone=phone, role="student")
    return Student.objects.create(
        user=user,
        branch=branch,
        admission_number=admission_number,
        grade="5",
        academic_year="2024-2025",
    )


STUDENT_CONTEXT = {"grade": "5", "section": "", "academic_year": "2024-2025"}


def upload_rows(entity_type, branch, rows, headers=None, context=None, name=None):
    """Upload rows as a CSV through the real upload path and return the batch."""
    if headers is None:
        headers = STUDENT_HEADERS if entity_type == "student" else TEACHER_HEADERS
    if context is None:
        context = dict(STUDENT_CONTEXT) if entity_type == "student" else {}
    data = csv_bytes(headers, rows)
    return lifecycle.upload_batch(entity_type, upload_file(data, name or f"{entity_type}s.csv"), branch.pk, context=context)


def staged_batch(entity_type, branch, rows, **kwargs):
    batch = upload_rows(entity_type, branch, rows, **kwargs)
    lifecycle.parse_and_stage(batch)
    return batch
