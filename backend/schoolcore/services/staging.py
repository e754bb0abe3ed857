import logging
from dataclasses import asdict, dataclass

from django.db.models import Count, Q
from django.utils import timezone

from .schema import get_schema

logger = logging.getLogger(__name__)

BULK_BATCH_SIZE = 500

# Student placement columns that a row may override per row.
PLACEMENT_FIELDS = ("grade", "section", "academic_year")


@dataclass
class BatchCounts:
    total: int = 0
    valid: int = 0
    invalid: int = 0
    pending: int = 0
    imported: int = 0

    def as_dict(self):
        return asdict(self)


def staging_model_for(batch):
    return get_schema(batch.entity_type).staging_model


def rows_for(batch, status=None):
    rows = staging_model_for(batch).objects.filter(batch=batch)
    if status:
        rows = rows.filter(validation_status=status)
    return rows.order_by("row_number")


def resolve_placement(fields, context):
    """Fill grade/section/academic year from the batch unless the row overrides them."""
    placement = {}
    for name in PLACEMENT_FIELDS:
        override = fields.get(f"{name}_override")
        placement[name] = override if override else (context.get(name) or None)
    return placement


def build_row(batch, schema, normalized):
    model = schema.staging_model
    values = dict(normalized.fields)
    if "grade_override" in schema.field_names:
        values.update(resolve_placement(values, batch.import_context or {}))
    return model(
        batch=batch,
        branch_id=batch.branch_id,
        row_number=normalized.row_number,
        raw_row=normalized.raw,
        **values,
    )


def stage_rows(batch, normalized_rows):
    schema = get_schema(batch.entity_type)
    staged = [build_row(batch, schema, normalized) for normalized in normalized_rows]
    schema.staging_model.objects.bulk_create(staged, batch_size=BULK_BATCH_SIZE)
    logger.info("Staged %s %s rows for batch %s", len(staged), batch.entity_type, batch.batch_id)
    return len(staged)


RESULT_FIELDS = ["validation_status", "validation_errors", "validation_warnings", "updated_at"]


def mark_row(row, errors, warnings=None, save=True):
    row.validation_errors = list(errors)
    row.validation_warnings = list(warnings or [])
    row.validation_status = "invalid" if row.validation_errors else "valid"
    if save:
        row.save(update_fields=RESULT_FIELDS)
    return row


def save_results(batch, rows):
    """Persist validation results marked with ``save=False`` in one pass."""
    if not rows:
        return 0
    now = timezone.now()
    for row in rows:
        row.updated_at = now
    return staging_model_for(batch).objects.bulk_update(rows, RESULT_FIELDS, batch_size=BULK_BATCH_SIZE)


def batch_counts(batch):
    totals = rows_for(batch).aggregate(
        total=Count("id"),
        valid=Count("id", filter=Q(validation_status="valid")),
        invalid=Count("id", filter=Q(validation_status="invalid")),
        pending=Count("id", filter=Q(validation_status="pending")),
        imported=Count("id", filter=Q(imported_to_production=True)),
    )
    return BatchCounts(**totals)


def clear_rows(batch):
    deleted, _ = rows_for(batch).delete()
    if deleted:
        logger.info("Removed %s staged rows for batch %s", deleted, batch.batch_id)
    return deleted
