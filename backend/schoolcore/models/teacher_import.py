from django.db import models

from .import_row import StagingRow


class TeacherImport(StagingRow):
    first_name = models.CharField(max_length=255, null=True, blank=True)
    last_name = models.CharField(max_length=255, null=True, blank=True)
    email = models.CharField(max_length=255, null=True, blank=True)
    phone = models.CharField(max_length=255, null=True, blank=True)
    employee_id = models.CharField(max_length=255, null=True, blank=True)
    joining_date = models.DateField(null=True, blank=True)
    leaving_date = models.DateField(null=True, blank=True)
    designation = models.CharField(max_length=255, null=True, blank=True)
    employee_type = models.CharField(max_length=255, null=True, blank=True)
    qualification = models.TextField(null=True, blank=True)
    experience_years = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    specialization = models.CharField(max_length=255, null=True, blank=True)
    registration_number = models.CharField(max_length=255, null=True, blank=True)
    subjects = models.TextField(null=True, blank=True)
    classes_assigned = models.TextField(null=True, blank=True)
    is_class_teacher = models.BooleanField(null=True, blank=True)
    class_teacher_of_grade = models.CharField(max_length=255, null=True, blank=True)
    class_teacher_of_section = models.CharField(max_length=255, null=True, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=255, null=True, blank=True)
    blood_group = models.CharField(max_length=255, null=True, blank=True)
    religion = models.CharField(max_length=255, null=True, blank=True)
    nationality = models.CharField(max_length=255, null=True, blank=True)
    current_address = models.TextField(null=True, blank=True)
    permanent_address = models.TextField(null=True, blank=True)
    city = models.CharField(max_length=255, null=True, blank=True)
    state = models.CharField(max_length=255, null=True, blank=True)
    pincode = models.CharField(max_length=255, null=True, blank=True)
    emergency_contact_name = models.CharField(max_length=255, null=True, blank=True)
    emergency_contact_phone = models.CharField(max_length=255, null=True, blank=True)
    emergency_contact_relation = models.CharField(max_length=255, null=True, blank=True)
    salary_grade = models.CharField(max_length=255, null=True, blank=True)
    basic_salary = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    bank_name = models.CharField(max_length=255, null=True, blank=True)
    bank_account_number = models.CharField(max_length=255, null=True, blank=True)
    bank_ifsc_code = models.CharField(max_length=255, null=True, blank=True)
    pan_number = models.CharField(max_length=255, null=True, blank=True)
    aadhar_number = models.CharField(max_length=255, null=True, blank=True)
    password = models.CharField(max_length=255, null=True, blank=True)
    remarks = models.TextField(null=True, blank=True)

    class Meta(StagingRow.Meta):
        constraints = [
            models.UniqueConstraint(fields=["batch", "row_number"], name="unique_teacher_import_row"),
        ]
        indexes = [
            models.Index(fields=["batch", "validation_status"], name="teacher_import_status_idx"),
            models.Index(fields=["batch", "imported_to_production"], name="teacher_import_imported_idx"),
        ]
