from django.conf import settings
from django.db import models

from .branch import Branch

GENDER_CHOICES = [
    ("Male", "Male"),
    ("Female", "Female"),
    ("Other", "Other"),
]


class Student(models.Model):
    STATUS_CHOICES = [
        ("Active", "Active"),
        ("Inactive", "Inactive"),
        ("Alumni", "Alumni"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="student_profile",
    )
    branch = models.ForeignKey(Branch, on_delete=models.PROTECT, related_name="students")
    admission_number = models.CharField(max_length=50, unique=True)
    admission_date = models.DateField(null=True, blank=True)
    roll_number = models.CharField(max_length=50, blank=True)
    registration_number = models.CharField(max_length=50, blank=True)
    grade = models.CharField(max_length=50)
    section = models.CharField(max_length=50, blank=True)
    academic_year = models.CharField(max_length=20)
    stream = models.CharField(max_length=50, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)
    blood_group = models.CharField(max_length=5, blank=True)
    religion = models.CharField(max_length=50, blank=True)
    category = models.CharField(max_length=50, blank=True)
    nationality = models.CharField(max_length=50, default="Indian")
    mother_tongue = models.CharField(max_length=50, blank=True)
    current_address = models.TextField(blank=True)
    permanent_address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, default="India")
    pincode = models.CharField(max_length=10, blank=True)
    father_name = models.CharField(max_length=150, blank=True)
    father_phone = models.CharField(max_length=20, blank=True)
    father_email = models.CharField(max_length=150, blank=True)
    father_occupation = models.CharField(max_length=100, blank=True)
    father_annual_income = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    mother_name = models.CharField(max_length=150, blank=True)
    mother_phone = models.CharField(max_length=20, blank=True)
    mother_email = models.CharField(max_length=150, blank=True)
    mother_occupation = models.CharField(max_length=100, blank=True)
    mother_annual_income = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    guardian_name = models.CharField(max_length=150, blank=True)
    guardian_relation = models.CharField(max_length=50, blank=True)
    guardian_phone = models.CharField(max_length=20, blank=True)
    emergency_contact_name = models.CharField(max_length=150, blank=True)
    emergency_contact_phone = models.CharField(max_length=20, blank=True)
    emergency_contact_relation = models.CharField(max_length=50, blank=True)
    previous_school = models.CharField(max_length=255, blank=True)
    previous_grade = models.CharField(max_length=50, blank=True)
    previous_percentage = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    transfer_certificate_number = models.CharField(max_length=50, blank=True)
    medical_history = models.TextField(blank=True)
    allergies = models.TextField(blank=True)
    medications = models.TextField(blank=True)
    height_cm = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    weight_kg = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    remarks = models.TextField(blank=True)
    student_status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="Active")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["admission_number"]

    def __str__(self):
        return f"{self.admission_number} {self.user}"
