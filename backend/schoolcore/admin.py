from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import (
    Account,
    Branch,
    Grade,
    ImportBatch,
    Section,
    Student,
    StudentImport,
    Teacher,
    TeacherImport,
)


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "capacity", "is_active")
    list_filter = ("is_active",)
    search_fields = ("code", "name")


@admin.register(Grade)
class GradeAdmin(admin.ModelAdmin):
    list_display = ("value", "name", "sort_order")


@admin.register(Section)
class SectionAdmin(admin.ModelAdmin):
    list_display = ("branch", "grade_level", "name")
    list_filter = ("branch", "grade_level")


@admin.register(Account)
class AccountAdmin(UserAdmin):
    list_display = ("username", "email", "role", "branch", "is_active")
    list_filter = ("role", "is_active", "branch")
    fieldsets = UserAdmin.fieldsets + (("School", {"fields": ("phone", "role", "branch", "profile_id")}),)


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("admission_number", "user", "branch", "grade", "section", "student_status")
    list_filter = ("branch", "grade", "student_status")
    search_fields = ("admission_number", "user__email", "user__first_name", "user__last_name")


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    list_display = ("employee_id", "user", "branch", "designation", "teacher_status")
    list_filter = ("branch", "employee_type", "teacher_status")
    search_fields = ("employee_id", "user__email", "user__first_name", "user__last_name")


@admin.register(ImportBatch)
class ImportBatchAdmin(admin.ModelAdmin):
    list_display = ("batch_id", "entity_type", "file_name", "status", "total_rows", "imported_rows", "created_at")
    list_filter = ("entity_type", "status")
    search_fields = ("batch_id", "file_name")


@admin.register(StudentImport, TeacherImport)
class StagingRowAdmin(admin.ModelAdmin):
    list_display = ("batch", "row_number", "email", "validation_status", "imported_to_production")
    list_filter = ("validation_status", "imported_to_production")
    search_fields = ("batch__batch_id", "email")
