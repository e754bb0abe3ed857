from django.conf import settings
from django.db import models

from .branch import Branch
from .student import GENDER_CHOICES


class Teacher(models.Model):
    EMPLOYEE_TYPE_CHOICES = [
        ("Permanent", "Permanent"),
        ("Contract", "Contract"),
        ("Visiting", "Visiting"),
        ("Temporary", "Temporary"),
    ]

    STATUS_CHOICES = [
        ("Active", "Active"),
        ("Inactive", "Inactive"),
        ("Resigned", "Resigned"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="teacher_profile",
    )
    branch = models.ForeignKey(Branch, on_delete=models.PROTECT, related_name="teachers")
    employee_id = models.CharField(max_length=50, unique=True)
    joining_date = models.DateField(null=True, blank=True)
    leaving_date = models.DateField(null=True, blank=True)
    designation = models.CharField(max_length=100, blank=True)
    employee_type = models.CharField(max_length=10, choices=EMPLOYEE_TYPE_CHOICES, blank=True)
    qualification = models.TextField(blank=True)
    experience_years = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    specialization = models.CharField(max_length=150, blank=True)
    registration_number = models.CharField(max_length=50, blank=True)
    subjects = models.TextField(blank=True)
    classes_assigned = models.TextField(blank=True)
    is_class_teacher = models.BooleanField(default=False)
    class_teacher_of_grade = models.CharField(max_length=50, blank=True)
    class_teacher_of_section = models.CharField(max_length=50, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)
    blood_group = models.CharField(max_length=5, blank=True)
    religion = models.CharField(max_length=50, blank=True)
    nationality = models.CharField(max_length=50, default="Indian")
    current_address = models.TextField(blank=True)
    permanent_address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    pincode = models.CharField(max_length=10, blank=True)
    emergency_contact_name = models.CharField(max_length=150, blank=True)
    emergency_contact_phone = models.CharField(max_length=20, blank=True)
    emergency_contact_relation = models.CharField(max_length=50, blank=True)
    salary_grade = models.CharField(max_length=50, blank=True)
    basic_salary = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    bank_name = models.CharField(max_length=100, blank=True)
    bank_account_number = models.CharField(max_length=50, blank=True)
    bank_ifsc_code = models.CharField(max_length=20, blank=True)
    pan_number = models.CharField(max_length=20, blank=True)
    aadhar_number = models.CharField(max_length=20, blank=True)
    remarks = models.TextField(blank=True)
    teacher_status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="Active")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["employee_id"]

    def __str__(self):
        return f"{self.employee_id} {self.user}"
