from django.conf import settings
import django.contrib.auth.models
import django.contrib.auth.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="Branch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=150)),
                (
                    "capacity",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Maximum enrolled students; empty means unlimited.",
                        null=True,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Grade",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("value", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=100, blank=True)),
                ("sort_order", models.PositiveSmallIntegerField(default=0)),
            ],
            options={
                "ordering": ["sort_order", "value"],
            },
        ),
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        error_messages={"unique": "A user with that username already exists."},
                        help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.",
                        max_length=150,
                        unique=True,
                        validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
                        verbose_name="username",
                    ),
                ),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.",
                        verbose_name="active",
                    ),
                ),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("phone", models.CharField(blank=True, max_length=20)),
                (
                    "role",
                    models.CharField(
                        choices=[("admin", "Admin"), ("staff", "Staff"), ("student", "Student"), ("teacher", "Teacher")],
                        default="staff",
                        max_length=10,
                    ),
                ),
                (
                    "profile_id",
                    models.PositiveBigIntegerField(
                        blank=True,
                        help_text="Id of the Student/Teacher record this account logs in as.",
                        null=True,
                    ),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="accounts",
                        to="schoolcore.branch",
                    ),
                ),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "ordering": ["username"],
            },
            managers=[
                ("objects", django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="Section",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("grade_level", models.CharField(max_length=50)),
                ("name", models.CharField(max_length=50)),
                (
                    "branch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sections",
                        to="schoolcore.branch",
                    ),
                ),
            ],
            options={
                "ordering": ["branch", "grade_level", "name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("branch", "grade_level", "name"),
                        name="unique_section_per_branch_grade",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("admission_number", models.CharField(max_length=50, unique=True)),
                ("admission_date", models.DateField(null=True, blank=True)),
                ("roll_number", models.CharField(max_length=50, blank=True)),
                ("registration_number", models.CharField(max_length=50, blank=True)),
                ("grade", models.CharField(max_length=50)),
                ("section", models.CharField(max_length=50, blank=True)),
                ("academic_year", models.CharField(max_length=20)),
                ("stream", models.CharField(max_length=50, blank=True)),
                ("date_of_birth", models.DateField(null=True, blank=True)),
                ("gender", models.CharField(max_length=10, choices=[("Male", "Male"), ("Female", "Female"), ("Other", "Other")], blank=True)),
                ("blood_group", models.CharField(max_length=5, blank=True)),
                ("religion", models.CharField(max_length=50, blank=True)),
                ("category", models.CharField(max_length=50, blank=True)),
                ("nationality", models.CharField(max_length=50, default="Indian")),
                ("mother_tongue", models.CharField(max_length=50, blank=True)),
                ("current_address", models.TextField(blank=True)),
                ("permanent_address", models.TextField(blank=True)),
                ("city", models.CharField(max_length=100, blank=True)),
                ("state", models.CharField(max_length=100, blank=True)),
                ("country", models.CharField(max_length=100, default="India")),
                ("pincode", models.CharField(max_length=10, blank=True)),
                ("father_name", models.CharField(max_length=150, blank=True)),
                ("father_phone", models.CharField(max_length=20, blank=True)),
                ("father_email", models.CharField(max_length=150, blank=True)),
                ("father_occupation", models.CharField(max_length=100, blank=True)),
                ("father_annual_income", models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)),
                ("mother_name", models.CharField(max_length=150, blank=True)),
                ("mother_phone", models.CharField(max_length=20, blank=True)),
                ("mother_email", models.CharField(max_length=150, blank=True)),
                ("mother_occupation", models.CharField(max_length=100, blank=True)),
                ("mother_annual_income", models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)),
                ("guardian_name", models.CharField(max_length=150, blank=True)),
                ("guardian_relation", models.CharField(max_length=50, blank=True)),
                ("guardian_phone", models.CharField(max_length=20, blank=True)),
                ("emergency_contact_name", models.CharField(max_length=150, blank=True)),
                ("emergency_contact_phone", models.CharField(max_length=20, blank=True)),
                ("emergency_contact_relation", models.CharField(max_length=50, blank=True)),
                ("previous_school", models.CharField(max_length=255, blank=True)),
                ("previous_grade", models.CharField(max_length=50, blank=True)),
                ("previous_percentage", models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)),
                ("transfer_certificate_number", models.CharField(max_length=50, blank=True)),
                ("medical_history", models.TextField(blank=True)),
                ("allergies", models.TextField(blank=True)),
                ("medications", models.TextField(blank=True)),
                ("height_cm", models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)),
                ("weight_kg", models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)),
                ("remarks", models.TextField(blank=True)),
                ("student_status", models.CharField(max_length=10, choices=[("Active", "Active"), ("Inactive", "Inactive"), ("Alumni", "Alumni")], default="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="student_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="students",
                        to="schoolcore.branch",
                    ),
                ),
            ],
            options={
                "ordering": ["admission_number"],
            },
        ),
        migrations.CreateModel(
            name="Teacher",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("employee_id", models.CharField(max_length=50, unique=True)),
                ("joining_date", models.DateField(null=True, blank=True)),
                ("leaving_date", models.DateField(null=True, blank=True)),
                ("designation", models.CharField(max_length=100, blank=True)),
                ("employee_type", models.CharField(max_length=10, choices=[("Permanent", "Permanent"), ("Contract", "Contract"), ("Visiting", "Visiting"), ("Temporary", "Temporary")], blank=True)),
                ("qualification", models.TextField(blank=True)),
                ("experience_years", models.DecimalField(max_digits=5, decimal_places=2, default=0)),
                ("specialization", models.CharField(max_length=150, blank=True)),
                ("registration_number", models.CharField(max_length=50, blank=True)),
                ("subjects", models.TextField(blank=True)),
                ("classes_assigned", models.TextField(blank=True)),
                ("is_class_teacher", models.BooleanField(default=False)),
                ("class_teacher_of_grade", models.CharField(max_length=50, blank=True)),
                ("class_teacher_of_section", models.CharField(max_length=50, blank=True)),
                ("date_of_birth", models.DateField(null=True, blank=True)),
                ("gender", models.CharField(max_length=10, choices=[("Male", "Male"), ("Female", "Female"), ("Other", "Other")], blank=True)),
                ("blood_group", models.CharField(max_length=5, blank=True)),
                ("religion", models.CharField(max_length=50, blank=True)),
                ("nationality", models.CharField(max_length=50, default="Indian")),
                ("current_address", models.TextField(blank=True)),
                ("permanent_address", models.TextField(blank=True)),
                ("city", models.CharField(max_length=100, blank=True)),
                ("state", models.CharField(max_length=100, blank=True)),
                ("pincode", models.CharField(max_length=10, blank=True)),
                ("emergency_contact_name", models.CharField(max_length=150, blank=True)),
                ("emergency_contact_phone", models.CharField(max_length=20, blank=True)),
                ("emergency_contact_relation", models.CharField(max_length=50, blank=True)),
                ("salary_grade", models.CharField(max_length=50, blank=True)),
                ("basic_salary", models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)),
                ("bank_name", models.CharField(max_length=100, blank=True)),
                ("bank_account_number", models.CharField(max_length=50, blank=True)),
                ("bank_ifsc_code", models.CharField(max_length=20, blank=True)),
                ("pan_number", models.CharField(max_length=20, blank=True)),
                ("aadhar_number", models.CharField(max_length=20, blank=True)),
                ("remarks", models.TextField(blank=True)),
                ("teacher_status", models.CharField(max_length=10, choices=[("Active", "Active"), ("Inactive", "Inactive"), ("Resigned", "Resigned")], default="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="teacher_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="teachers",
                        to="schoolcore.branch",
                    ),
                ),
            ],
            options={
                "ordering": ["employee_id"],
            },
        ),
        migrations.CreateModel(
            name="ImportBatch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("batch_id", models.CharField(max_length=50, unique=True)),
                ("entity_type", models.CharField(max_length=10, choices=[("student", "Student"), ("teacher", "Teacher")], db_index=True)),
                ("file_name", models.CharField(max_length=255)),
                ("file_size", models.PositiveIntegerField(default=0)),
                ("stored_path", models.CharField(max_length=255, blank=True)),
                ("import_context", models.JSONField(default=dict, blank=True)),
                ("status", models.CharField(max_length=10, choices=[("uploaded", "Uploaded"), ("validating", "Validating"), ("validated", "Validated"), ("importing", "Importing"), ("completed", "Completed"), ("failed", "Failed"), ("cancelled", "Cancelled")], default="uploaded", db_index=True)),
                ("total_rows", models.PositiveIntegerField(default=0)),
                ("valid_rows", models.PositiveIntegerField(default=0)),
                ("invalid_rows", models.PositiveIntegerField(default=0)),
                ("imported_rows", models.PositiveIntegerField(default=0)),
                ("failed_rows", models.PositiveIntegerField(default=0)),
                ("uploaded_at", models.DateTimeField(null=True, blank=True)),
                ("validation_started_at", models.DateTimeField(null=True, blank=True)),
                ("validation_completed_at", models.DateTimeField(null=True, blank=True)),
                ("import_started_at", models.DateTimeField(null=True, blank=True)),
                ("import_completed_at", models.DateTimeField(null=True, blank=True)),
                ("cancelled_at", models.DateTimeField(null=True, blank=True)),
                ("error_message", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "uploaded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="import_batches",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="import_batches",
                        to="schoolcore.branch",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="StudentImport",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("row_number", models.PositiveIntegerField()),
                ("raw_row", models.JSONField(blank=True, default=dict)),
                ("validation_status", models.CharField(choices=[("pending", "Pending"), ("valid", "Valid"), ("invalid", "Invalid")], default="pending", max_length=10)),
                ("validation_errors", models.JSONField(blank=True, default=list)),
                ("validation_warnings", models.JSONField(blank=True, default=list)),
                ("imported_to_production", models.BooleanField(default=False)),
                ("imported_record_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("imported_at", models.DateTimeField(blank=True, null=True)),
                ("commit_error", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("grade", models.CharField(max_length=255, null=True, blank=True)),
                ("section", models.CharField(max_length=255, null=True, blank=True)),
                ("academic_year", models.CharField(max_length=255, null=True, blank=True)),
                ("grade_override", models.CharField(max_length=255, null=True, blank=True)),
                ("section_override", models.CharField(max_length=255, null=True, blank=True)),
                ("academic_year_override", models.CharField(max_length=255, null=True, blank=True)),
                ("first_name", models.CharField(max_length=255, null=True, blank=True)),
                ("last_name", models.CharField(max_length=255, null=True, blank=True)),
                ("email", models.CharField(max_length=255, null=True, blank=True)),
                ("phone", models.CharField(max_length=255, null=True, blank=True)),
                ("admission_number", models.CharField(max_length=255, null=True, blank=True)),
                ("admission_date", models.DateField(null=True, blank=True)),
                ("roll_number", models.CharField(max_length=255, null=True, blank=True)),
                ("registration_number", models.CharField(max_length=255, null=True, blank=True)),
                ("stream", models.CharField(max_length=255, null=True, blank=True)),
                ("date_of_birth", models.DateField(null=True, blank=True)),
                ("gender", models.CharField(max_length=255, null=True, blank=True)),
                ("blood_group", models.CharField(max_length=255, null=True, blank=True)),
                ("religion", models.CharField(max_length=255, null=True, blank=True)),
                ("category", models.CharField(max_length=255, null=True, blank=True)),
                ("nationality", models.CharField(max_length=255, null=True, blank=True)),
                ("mother_tongue", models.CharField(max_length=255, null=True, blank=True)),
                ("current_address", models.TextField(null=True, blank=True)),
                ("permanent_address", models.TextField(null=True, blank=True)),
                ("city", models.CharField(max_length=255, null=True, blank=True)),
                ("state", models.CharField(max_length=255, null=True, blank=True)),
                ("country", models.CharField(max_length=255, null=True, blank=True)),
                ("pincode", models.CharField(max_length=255, null=True, blank=True)),
                ("father_name", models.CharField(max_length=255, null=True, blank=True)),
                ("father_phone", models.CharField(max_length=255, null=True, blank=True)),
                ("father_email", models.CharField(max_length=255, null=True, blank=True)),
                ("father_occupation", models.CharField(max_length=255, null=True, blank=True)),
                ("father_annual_income", models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)),
                ("mother_name", models.CharField(max_length=255, null=True, blank=True)),
                ("mother_phone", models.CharField(max_length=255, null=True, blank=True)),
                ("mother_email", models.CharField(max_length=255, null=True, blank=True)),
                ("mother_occupation", models.CharField(max_length=255, null=True, blank=True)),
                ("mother_annual_income", models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)),
                ("guardian_name", models.CharField(max_length=255, null=True, blank=True)),
                ("guardian_relation", models.CharField(max_length=255, null=True, blank=True)),
                ("guardian_phone", models.CharField(max_length=255, null=True, blank=True)),
                ("emergency_contact_name", models.CharField(max_length=255, null=True, blank=True)),
                ("emergency_contact_phone", models.CharField(max_length=255, null=True, blank=True)),
                ("emergency_contact_relation", models.CharField(max_length=255, null=True, blank=True)),
                ("previous_school", models.CharField(max_length=255, null=True, blank=True)),
                ("previous_grade", models.CharField(max_length=255, null=True, blank=True)),
                ("previous_percentage", models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)),
                ("transfer_certificate_number", models.CharField(max_length=255, null=True, blank=True)),
                ("medical_history", models.TextField(null=True, blank=True)),
                ("allergies", models.TextField(null=True, blank=True)),
                ("medications", models.TextField(null=True, blank=True)),
                ("height_cm", models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)),
                ("weight_kg", models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)),
                ("password", models.CharField(max_length=255, null=True, blank=True)),
                ("remarks", models.TextField(null=True, blank=True)),
                (
                    "batch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="%(class)s_rows",
                        to="schoolcore.importbatch",
                    ),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="schoolcore.branch",
                    ),
                ),
                (
                    "imported_user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["row_number"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["batch", "validation_status"], name="student_import_status_idx"),
                    models.Index(fields=["batch", "imported_to_production"], name="student_import_imported_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("batch", "row_number"), name="unique_student_import_row"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TeacherImport",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("row_number", models.PositiveIntegerField()),
                ("raw_row", models.JSONField(blank=True, default=dict)),
                ("validation_status", models.CharField(choices=[("pending", "Pending"), ("valid", "Valid"), ("invalid", "Invalid")], default="pending", max_length=10)),
                ("validation_errors", models.JSONField(blank=True, default=list)),
                ("validation_warnings", models.JSONField(blank=True, default=list)),
                ("imported_to_production", models.BooleanField(default=False)),
                ("imported_record_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("imported_at", models.DateTimeField(blank=True, null=True)),
                ("commit_error", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("first_name", models.CharField(max_length=255, null=True, blank=True)),
                ("last_name", models.CharField(max_length=255, null=True, blank=True)),
                ("email", models.CharField(max_length=255, null=True, blank=True)),
                ("phone", models.CharField(max_length=255, null=True, blank=True)),
                ("employee_id", models.CharField(max_length=255, null=True, blank=True)),
                ("joining_date", models.DateField(null=True, blank=True)),
                ("leaving_date", models.DateField(null=True, blank=True)),
                ("designation", models.CharField(max_length=255, null=True, blank=True)),
                ("employee_type", models.CharField(max_length=255, null=True, blank=True)),
                ("qualification", models.TextField(null=True, blank=True)),
                ("experience_years", models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)),
                ("specialization", models.CharField(max_length=255, null=True, blank=True)),
                ("registration_number", models.CharField(max_length=255, null=True, blank=True)),
                ("subjects", models.TextField(null=True, blank=True)),
                ("classes_assigned", models.TextField(null=True, blank=True)),
                ("is_class_teacher", models.BooleanField(null=True, blank=True)),
                ("class_teacher_of_grade", models.CharField(max_length=255, null=True, blank=True)),
                ("class_teacher_of_section", models.CharField(max_length=255, null=True, blank=True)),
                ("date_of_birth", models.DateField(null=True, blank=True)),
                ("gender", models.CharField(max_length=255, null=True, blank=True)),
                ("blood_group", models.CharField(max_length=255, null=True, blank=True)),
                ("religion", models.CharField(max_length=255, null=True, blank=True)),
                ("nationality", models.CharField(max_length=255, null=True, blank=True)),
                ("current_address", models.TextField(null=True, blank=True)),
                ("permanent_address", models.TextField(null=True, blank=True)),
                ("city", models.CharField(max_length=255, null=True, blank=True)),
                ("state", models.CharField(max_length=255, null=True, blank=True)),
                ("pincode", models.CharField(max_length=255, null=True, blank=True)),
                ("emergency_contact_name", models.CharField(max_length=255, null=True, blank=True)),
                ("emergency_contact_phone", models.CharField(max_length=255, null=True, blank=True)),
                ("emergency_contact_relation", models.CharField(max_length=255, null=True, blank=True)),
                ("salary_grade", models.CharField(max_length=255, null=True, blank=True)),
                ("basic_salary", models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)),
                ("bank_name", models.CharField(max_length=255, null=True, blank=True)),
                ("bank_account_number", models.CharField(max_length=255, null=True, blank=True)),
                ("bank_ifsc_code", models.CharField(max_length=255, null=True, blank=True)),
                ("pan_number", models.CharField(max_length=255, null=True, blank=True)),
                ("aadhar_number", models.CharField(max_length=255, null=True, blank=True)),
                ("password", models.CharField(max_length=255, null=True, blank=True)),
                ("remarks", models.TextField(null=True, blank=True)),
                (
                    "batch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="%(class)s_rows",
                        to="schoolcore.importbatch",
                    ),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="schoolcore.branch",
                    ),
                ),
                (
                    "imported_user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["row_number"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["batch", "validation_status"], name="teacher_import_status_idx"),
                    models.Index(fields=["batch", "imported_to_production"], name="teacher_import_imported_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("batch", "row_number"), name="unique_teacher_import_row"),
                ],
            },
        ),
    ]
