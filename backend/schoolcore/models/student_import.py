from django.db import models

from .import_row import StagingRow


class StudentImport(StagingRow):
    # Resolved placement: batch context unless the row carries an override.
    grade = models.CharField(max_length=255, null=True, blank=True)
    section = models.CharField(max_length=255, null=True, blank=True)
    academic_year = models.CharField(max_length=255, null=True, blank=True)
    grade_override = models.CharField(max_length=255, null=True, blank=True)
    section_override = models.CharField(max_length=255, null=True, blank=True)
    academic_year_override = models.CharField(max_length=255, null=True, blank=True)

    first_name = models.CharField(max_length=255, null=True, blank=True)
    last_name = models.CharField(max_length=255, null=True, blank=True)
    email = models.CharField(max_length=255, null=True, blank=True)
    phone = models.CharField(max_length=255, null=True, blank=True)
    admission_number = models.CharField(max_length=255, null=True, blank=True)
    admission_date = models.DateField(null=True, blank=True)
    roll_number = models.CharField(max_length=255, null=True, blank=True)
    registration_number = models.CharField(max_length=255, null=True, blank=True)
    stream = models.CharField(max_length=255, null=True, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=255, null=True, blank=True)
    blood_group = models.CharField(max_length=255, null=True, blank=True)
    religion = models.CharField(max_length=255, null=True, blank=True)
    category = models.CharField(max_length=255, null=True, blank=True)
    nationality = models.CharField(max_length=255, null=True, blank=True)
    mother_tongue = models.CharField(max_length=255, null=True, blank=True)
    current_address = models.TextField(null=True, blank=True)
    permanent_address = models.TextField(null=True, blank=True)
    city = models.CharField(max_length=255, null=True, blank=True)
    state = models.CharField(max_length=255, null=True, blank=True)
    country = models.CharField(max_length=255, null=True, blank=True)
    pincode = models.CharField(max_length=255, null=True, blank=True)
    father_name = models.CharField(max_length=255, null=True, blank=True)
    father_phone = models.CharField(max_length=255, null=True, blank=True)
    father_email = models.CharField(max_length=255, null=True, blank=True)
    father_occupation = models.CharField(max_length=255, null=True, blank=True)
    father_annual_income = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    mother_name = models.CharField(max_length=255, null=True, blank=True)
    mother_phone = models.CharField(max_length=255, null=True, blank=True)
    mother_email = models.CharField(max_length=255, null=True, blank=True)
    mother_occupation = models.CharField(max_length=255, null=True, blank=True)
    mother_annual_income = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    guardian_name = models.CharField(max_length=255, null=True, blank=True)
    guardian_relation = models.CharField(max_length=255, null=True, blank=True)
    guardian_phone = models.CharField(max_length=255, null=True, blank=True)
    emergency_contact_name = models.CharField(max_length=255, null=True, blank=True)
    emergency_contact_phone = models.CharField(max_length=255, null=True, blank=True)
    emergency_contact_relation = models.CharField(max_length=255, null=True, blank=True)
    previous_school = models.CharField(max_length=255, null=True, blank=True)
    previous_grade = models.CharField(max_length=255, null=True, blank=True)
    previous_percentage = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    transfer_certificate_number = models.CharField(max_length=255, null=True, blank=True)
    medical_history = models.TextField(null=True, blank=True)
    allergies = models.TextField(null=True, blank=True)
    medications = models.TextField(null=True, blank=True)
    height_cm = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    weight_kg = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    password = models.CharField(max_length=255, null=True, blank=True)
    remarks = models.TextField(null=True, blank=True)

    class Meta(StagingRow.Meta):
        constraints = [
            models.UniqueConstraint(fields=["batch", "row_number"], name="unique_student_import_row"),
        ]
        indexes = [
            models.Index(fields=["batch", "validation_status"], name="student_import_status_idx"),
            models.Index(fields=["batch", "imported_to_production"], name="student_import_imported_idx"),
        ]
