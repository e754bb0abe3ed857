from django.conf import settings
from django.db import models

from .branch import Branch
from .import_batch import ImportBatch


class StagingRow(models.Model):
    """
    A parsed spreadsheet row awaiting validation and commit. Entity fields live
    on the concrete subclasses; everything here is shared bookkeeping.
    """

    VALIDATION_CHOICES = [
        ("pending", "Pending"),
        ("valid", "Valid"),
        ("invalid", "Invalid"),
    ]

    batch = models.ForeignKey(ImportBatch, on_delete=models.CASCADE, related_name="%(class)s_rows")
    row_number = models.PositiveIntegerField()
    branch = models.ForeignKey(Branch, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    raw_row = models.JSONField(default=dict, blank=True)
    validation_status = models.CharField(max_length=10, choices=VALIDATION_CHOICES, default="pending")
    validation_errors = models.JSONField(default=list, blank=True)
    validation_warnings = models.JSONField(default=list, blank=True)
    imported_to_production = models.BooleanField(default=False)
    imported_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    imported_record_id = models.PositiveBigIntegerField(null=True, blank=True)
    imported_at = models.DateTimeField(null=True, blank=True)
    commit_error = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["row_number"]

    @property
    def has_errors(self):
        return bool(self.validation_errors)

    @property
    def has_warnings(self):
        return bool(self.validation_warnings)

    def __str__(self):
        return f"Row {self.row_number} in {self.batch_id}"
