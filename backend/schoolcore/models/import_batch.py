from django.conf import settings
from django.db import models

from .branch import Branch


class ImportBatch(models.Model):
    """
    One upload-to-commit cycle. Counters mirror the staged rows after each
    phase; completed and cancelled batches are never mutated again.
    """

    STATUS_CHOICES = [
        ("uploaded", "Uploaded"),
        ("validating", "Validating"),
        ("validated", "Validated"),
        ("importing", "Importing"),
        ("completed", "Completed"),
        ("failed", "Failed"),
        ("cancelled", "Cancelled"),
    ]

    ENTITY_CHOICES = [
        ("student", "Student"),
        ("teacher", "Teacher"),
    ]

    TERMINAL_STATUSES = ("completed", "cancelled")

    batch_id = models.CharField(max_length=50, unique=True)
    entity_type = models.CharField(max_length=10, choices=ENTITY_CHOICES, db_index=True)
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="import_batches",
    )
    branch = models.ForeignKey(
        Branch,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="import_batches",
    )
    file_name = models.CharField(max_length=255)
    file_size = models.PositiveIntegerField(default=0)
    stored_path = models.CharField(max_length=255, blank=True)
    import_context = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="uploaded", db_index=True)
    total_rows = models.PositiveIntegerField(default=0)
    valid_rows = models.PositiveIntegerField(default=0)
    invalid_rows = models.PositiveIntegerField(default=0)
    imported_rows = models.PositiveIntegerField(default=0)
    failed_rows = models.PositiveIntegerField(default=0)
    uploaded_at = models.DateTimeField(null=True, blank=True)
    validation_started_at = models.DateTimeField(null=True, blank=True)
    validation_completed_at = models.DateTimeField(null=True, blank=True)
    import_started_at = models.DateTimeField(null=True, blank=True)
    import_completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    error_message = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    @property
    def file_extension(self):
        _, _, extension = self.file_name.rpartition(".")
        return extension.lower() if extension != self.file_name else ""

    def __str__(self):
        return f"{self.batch_id} {self.file_name} ({self.status})"
