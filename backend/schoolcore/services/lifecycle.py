"""
Batch lifecycle: upload, validate, preview, commit, cancel and history.

Every state change claims the batch row with ``select_for_update`` inside a
short transaction. The transient ``validating`` and ``importing`` states mark
a batch as busy, so a second validate or commit on the same batch is refused
instead of interleaving with the first. Different batches never wait on each
other.
"""
import logging
import string
import time
from datetime import timedelta

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.core.paginator import Paginator
from django.db import transaction
from django.utils import timezone
from django.utils.crypto import get_random_string

from schoolcore.models import Branch, ImportBatch

from . import staging
from .commit import commit_rows
from .decoder import ALLOWED_EXTENSIONS, decode_file, filter_rows, resolve_file_type
from .errors import (
    BatchNotFound,
    CommitConflict,
    EmptyFile,
    FileError,
    InvalidBatchState,
    NoDataRows,
    NoHeaders,
    PartialCommitFailure,
    ValidationFailed,
)
from .headers import map_headers, mapping_report
from .normalizer import normalize_row
from .schema import SCHEMAS, get_schema
from .validator import validate_batch

logger = logging.getLogger(__name__)

BATCH_TOKEN_CHARS = string.ascii_uppercase + string.digits
ROW_STATUS_FILTERS = ("pending", "valid", "invalid", "imported")
MAX_PER_PAGE = 100
CONTEXT_LIMITS = {"grade": 50, "section": 50, "academic_year": 20}


def generate_batch_id():
    return f"IMPORT_{get_random_string(12, BATCH_TOKEN_CHARS)}_{int(time.time())}"


def get_batch(entity_type, batch_id, for_update=False):
    """Fetch a live batch; cancelled batches are gone as far as callers are concerned."""
    schema = get_schema(entity_type)
    batches = ImportBatch.objects.select_related("branch")
    if for_update:
        batches = ImportBatch.objects.select_for_update()
    try:
        batch = batches.get(batch_id=batch_id, entity_type=schema.entity_type)
    except ImportBatch.DoesNotExist:
        raise BatchNotFound(f"Import batch '{batch_id}' was not found.")
    if batch.status == "cancelled":
        raise BatchNotFound(f"Import batch '{batch_id}' was cancelled.")
    return batch


def is_abandoned(batch, now=None):
    """True when a busy batch has sat in its transient state past the stale limit."""
    started = batch.validation_started_at if batch.status == "validating" else batch.import_started_at
    if started is None:
        return True
    now = now or timezone.now()
    return now - started > timedelta(seconds=settings.IMPORT_STALE_BATCH_SECONDS)


def release_file(batch, storage=None):
    storage = storage or default_storage
    if batch.stored_path and storage.exists(batch.stored_path):
        storage.delete(batch.stored_path)
        logger.info("Deleted upload %s for batch %s", batch.stored_path, batch.batch_id)


def mark_failed(batch, message):
    batch.status = "failed"
    batch.error_message = message
    batch.save(update_fields=["status", "error_message", "updated_at"])
    logger.warning("Batch %s failed: %s", batch.batch_id, message)


def store_counts(batch, counts):
    batch.total_rows = counts.total
    batch.valid_rows = counts.valid
    batch.invalid_rows = counts.invalid
    batch.imported_rows = counts.imported


# Payloads


def batch_payload(batch):
    return {
        "batch_id": batch.batch_id,
        "entity_type": batch.entity_type,
        "status": batch.status,
        "file_name": batch.file_name,
        "file_size": batch.file_size,
        "branch_id": batch.branch_id,
        "import_context": batch.import_context,
        "uploaded_by": batch.uploaded_by_id,
        "total_rows": batch.total_rows,
        "valid_rows": batch.valid_rows,
        "invalid_rows": batch.invalid_rows,
        "imported_rows": batch.imported_rows,
        "failed_rows": batch.failed_rows,
        "uploaded_at": batch.uploaded_at,
        "validation_started_at": batch.validation_started_at,
        "validation_completed_at": batch.validation_completed_at,
        "import_started_at": batch.import_started_at,
        "import_completed_at": batch.import_completed_at,
        "cancelled_at": batch.cancelled_at,
        "error_message": batch.error_message,
        "created_at": batch.created_at,
    }


def row_payload(row, schema):
    data = {name: getattr(row, name) for name in schema.field_names if name != "password"}
    for name in staging.PLACEMENT_FIELDS:
        if hasattr(row, name):
            data[name] = getattr(row, name)
    return {
        "id": row.pk,
        "row_number": row.row_number,
        "validation_status": row.validation_status,
        "validation_errors": row.validation_errors,
        "validation_warnings": row.validation_warnings,
        "imported_to_production": row.imported_to_production,
        "imported_record_id": row.imported_record_id,
        "commit_error": row.commit_error,
        "data": data,
        "raw": row.raw_row,
    }


def page_meta(page_obj):
    return {
        "current_page": page_obj.number,
        "per_page": page_obj.paginator.per_page,
        "total": page_obj.paginator.count,
        "last_page": page_obj.paginator.num_pages,
    }


# Operations


def list_modules():
    modules = []
    for schema in SCHEMAS.values():
        last_completed = (
            ImportBatch.objects.filter(entity_type=schema.entity_type, status="completed")
            .order_by("-import_completed_at")
            .values_list("import_completed_at", flat=True)
            .first()
        )
        modules.append(
            {
                "id": schema.entity_type,
                "name": schema.label,
                "description": schema.description,
                "context_fields": list(schema.context_fields),
                "required_fields": [spec.name for spec in schema.required_fields],
                "last_import": last_completed,
                "total_records": schema.profile_model.objects.count(),
            }
        )
    return modules


def clean_context(schema, branch_id, context):
    errors = {}
    context = context or {}
    branch = None
    try:
        branch = Branch.objects.get(pk=int(branch_id))
    except (TypeError, ValueError):
        errors["branch_id"] = ["A branch is required."]
    except Branch.DoesNotExist:
        errors["branch_id"] = [f"Branch {branch_id} does not exist."]

    cleaned = {"branch_id": branch.pk if branch else None}
    for name in schema.context_fields:
        if name == "branch":
            continue
        value = (context.get(name) or "").strip()
        if len(value) > CONTEXT_LIMITS[name]:
            errors[name] = [f"Must be at most {CONTEXT_LIMITS[name]} characters."]
        elif not value and name in ("grade", "academic_year"):
            errors[name] = ["This field is required."]
        cleaned[name] = value
    return branch, cleaned, errors


def upload_batch(entity_type, upload, branch_id, context=None, uploaded_by=None, storage=None):
    """Check and store an upload, then open a batch for it in ``uploaded``."""
    schema = get_schema(entity_type)
    storage = storage or default_storage
    branch, cleaned, errors = clean_context(schema, branch_id, context)

    extension = ""
    if upload is None:
        errors["file"] = ["A file is required."]
    else:
        name = upload.name or ""
        extension = name.rpartition(".")[2].lower() if "." in name else ""
        if extension not in ALLOWED_EXTENSIONS:
            errors["file"] = ["Upload a .csv, .xlsx or .xls file."]
        elif upload.size > settings.IMPORT_MAX_UPLOAD_BYTES:
            limit_mb = settings.IMPORT_MAX_UPLOAD_BYTES // (1024 * 1024)
            errors["file"] = [f"The file is larger than {limit_mb} MB."]
    if errors:
        raise ValidationFailed(errors=errors)

    data = upload.read()
    if not data.strip():
        raise EmptyFile()
    resolve_file_type(data, extension)

    batch_id = generate_batch_id()
    stored_path = storage.save(f"{settings.IMPORT_TEMP_DIR}/{batch_id}.{extension}", ContentFile(data))
    try:
        batch = ImportBatch.objects.create(
            batch_id=batch_id,
            entity_type=schema.entity_type,
            uploaded_by=uploaded_by,
            branch=branch,
            file_name=upload.name,
            file_size=len(data),
            stored_path=stored_path,
            import_context=cleaned,
            status="uploaded",
            uploaded_at=timezone.now(),
        )
    except Exception:
        storage.delete(stored_path)
        raise
    logger.info("Uploaded %s (%s bytes) as batch %s", upload.name, len(data), batch_id)
    return batch


def parse_and_stage(batch, deadline=None, storage=None):
    schema = get_schema(batch.entity_type)
    if deadline is None:
        deadline = time.monotonic() + settings.IMPORT_PARSE_TIMEOUT_SECONDS
    table = decode_file(batch.stored_path, batch.file_extension, deadline=deadline, storage=storage)
    column_map = map_headers(table.headers, schema.entity_type)
    if not any(column_map):
        raise NoHeaders(
            f"None of the column headers match {schema.label.lower()} fields. "
            "Download the template to see the expected headers."
        )
    rows = filter_rows(table, column_map)
    if not rows:
        raise NoDataRows("Every data row is blank in the recognised columns.")
    normalized = [
        normalize_row(row.row_number, row.cells, column_map, schema, table.headers)
        for row in rows
    ]
    with transaction.atomic():
        staging.clear_rows(batch)
        staging.stage_rows(batch, normalized)
        batch.import_context = {**batch.import_context, "columns": mapping_report(table.headers, column_map)}
        batch.save(update_fields=["import_context", "updated_at"])


def validate_batch_id(entity_type, batch_id, deadline=None, storage=None):
    """
    Parse and stage an uploaded batch, or re-check an already validated one.

    Re-validation does not read the file again; it re-runs every rule over
    the staged rows so reference data fixes show up without a new upload.
    """
    with transaction.atomic():
        batch = get_batch(entity_type, batch_id, for_update=True)
        if batch.status not in ("uploaded", "validated"):
            raise InvalidBatchState(f"Batch is {batch.status}; only uploaded or validated batches can be validated.")
        needs_parse = batch.status == "uploaded"
        batch.status = "validating"
        batch.validation_started_at = timezone.now()
        batch.error_message = ""
        batch.save(update_fields=["status", "validation_started_at", "error_message", "updated_at"])

    try:
        if needs_parse:
            parse_and_stage(batch, deadline=deadline, storage=storage)
        counts = validate_batch(batch)
    except FileError as exc:
        mark_failed(batch, exc.message)
        raise
    except Exception:
        logger.exception("Validation of batch %s crashed", batch.batch_id)
        mark_failed(batch, "Validation stopped on an unexpected error.")
        raise

    store_counts(batch, counts)
    batch.status = "validated"
    batch.validation_completed_at = timezone.now()
    batch.save()
    return counts


def preview_batch(entity_type, batch_id, status=None, page=1, per_page=25):
    schema = get_schema(entity_type)
    batch = get_batch(entity_type, batch_id)
    if status and status not in ROW_STATUS_FILTERS:
        raise ValidationFailed(errors={"status": [f"Expected one of: {', '.join(ROW_STATUS_FILTERS)}."]})

    if status == "imported":
        rows = staging.rows_for(batch).filter(imported_to_production=True)
    else:
        rows = staging.rows_for(batch, status)
    per_page = min(max(per_page, 1), MAX_PER_PAGE)
    page_obj = Paginator(rows, per_page).get_page(page)
    return {
        "batch": batch_payload(batch),
        "summary": staging.batch_counts(batch).as_dict(),
        "rows": [row_payload(row, schema) for row in page_obj.object_list],
        "meta": page_meta(page_obj),
    }


def commit_batch_id(entity_type, batch_id, skip_invalid=True, storage=None):
    with transaction.atomic():
        batch = get_batch(entity_type, batch_id, for_update=True)
        if batch.status == "completed":
            raise CommitConflict("This batch has already been committed.")
        if batch.status != "validated":
            raise CommitConflict(f"Batch is {batch.status}; validate it before committing.")
        if not skip_invalid and staging.rows_for(batch).exclude(validation_status="valid").exists():
            raise CommitConflict("Some rows did not pass validation; fix them or commit with skip_invalid.")
        batch.status = "importing"
        batch.import_started_at = timezone.now()
        batch.save(update_fields=["status", "import_started_at", "updated_at"])

    try:
        result = commit_rows(batch, skip_invalid=skip_invalid)
    except PartialCommitFailure as exc:
        batch.failed_rows = exc.result.failed if exc.result else 0
        batch.save(update_fields=["failed_rows", "updated_at"])
        mark_failed(batch, exc.message)
        raise
    except Exception:
        logger.exception("Commit of batch %s crashed", batch.batch_id)
        mark_failed(batch, "Commit stopped on an unexpected error.")
        raise

    store_counts(batch, staging.batch_counts(batch))
    batch.failed_rows = result.failed
    batch.status = "completed"
    batch.import_completed_at = timezone.now()
    batch.error_message = f"{result.failed} row(s) were not imported." if result.failed else ""
    batch.save()
    release_file(batch, storage)
    return result


def cancel_batch(entity_type, batch_id, storage=None):
    with transaction.atomic():
        batch = get_batch(entity_type, batch_id, for_update=True)
        if batch.status == "completed":
            raise InvalidBatchState("Completed batches cannot be cancelled.")
        if batch.status in ("validating", "importing"):
            if not is_abandoned(batch):
                raise InvalidBatchState(f"Batch is {batch.status}; wait for it to finish before cancelling.")
            logger.warning("Batch %s was left %s; cancelling it", batch.batch_id, batch.status)
        removed = staging.clear_rows(batch)
        batch.status = "cancelled"
        batch.cancelled_at = timezone.now()
        batch.save(update_fields=["status", "cancelled_at", "updated_at"])
    release_file(batch, storage)
    logger.info("Cancelled batch %s", batch.batch_id)
    return {"batch_id": batch.batch_id, "status": batch.status, "rows_removed": removed}


def batch_history(entity_type=None, status=None, days=None, page=1, per_page=25):
    batches = ImportBatch.objects.select_related("branch", "uploaded_by")
    if entity_type:
        batches = batches.filter(entity_type=get_schema(entity_type).entity_type)
    if status:
        if status not in {choice[0] for choice in ImportBatch.STATUS_CHOICES}:
            raise ValidationFailed(errors={"status": ["Unknown batch status."]})
        batches = batches.filter(status=status)
    if days:
        batches = batches.filter(created_at__gte=timezone.now() - timedelta(days=days))
    per_page = min(max(per_page, 1), MAX_PER_PAGE)
    page_obj = Paginator(batches.order_by("-created_at", "-id"), per_page).get_page(page)
    return {
        "batches": [batch_payload(batch) for batch in page_obj.object_list],
        "meta": page_meta(page_obj),
    }
