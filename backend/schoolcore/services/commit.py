import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from schoolcore.models import Account

from . import staging
from .errors import CommitConflict, PartialCommitFailure
from .schema import get_schema

logger = logging.getLogger(__name__)

SKIPPED_MESSAGE = "Skipped: row did not pass validation."
IMPORTED_FIELDS = [
    "imported_to_production",
    "imported_user",
    "imported_record_id",
    "imported_at",
    "commit_error",
    "password",
    "updated_at",
]


@dataclass
class CommitResult:
    imported: int = 0
    failed: int = 0
    failures: list = field(default_factory=list)

    @property
    def attempted(self):
        return self.imported + self.failed

    def fail(self, row_number, message):
        self.failed += 1
        self.failures.append({"row_number": row_number, "error": message})

    def as_dict(self):
        return {
            "imported": self.imported,
            "failed": self.failed,
            "attempted": self.attempted,
            "failures": self.failures,
        }


def profile_values(schema, row):
    """Map a staged row onto profile model kwargs, letting model defaults fill gaps."""
    values = {}
    for name in schema.profile_fields:
        value = getattr(row, name)
        model_field = schema.profile_model._meta.get_field(name)
        if value is None:
            if model_field.null:
                values[name] = None
            elif model_field.has_default():
                continue
            else:
                values[name] = ""
            continue
        values[name] = value
    return values


def create_account(schema, row):
    email = row.email.strip().lower()
    return Account.objects.create_user(
        username=email,
        email=email,
        password=row.password or settings.IMPORT_DEFAULT_PASSWORD,
        first_name=row.first_name or "",
        last_name=row.last_name or "",
        phone=row.phone or "",
        role=schema.role,
        branch_id=row.branch_id,
    )


def materialize_row(schema, row):
    """Create the account, then its profile, then link them. Caller owns the transaction."""
    account = create_account(schema, row)
    profile = schema.profile_model.objects.create(
        user=account,
        branch_id=row.branch_id,
        **profile_values(schema, row),
    )
    account.profile_id = profile.pk
    account.save(update_fields=["profile_id"])

    row.imported_to_production = True
    row.imported_user = account
    row.imported_record_id = profile.pk
    row.imported_at = timezone.now()
    row.commit_error = ""
    row.password = None
    row.save(update_fields=IMPORTED_FIELDS)
    return profile


def record_failure(row, message):
    type(row).objects.filter(pk=row.pk).update(commit_error=message, updated_at=timezone.now())


def eligible_rows(batch):
    return staging.rows_for(batch).filter(imported_to_production=False)


def commit_rows(batch, skip_invalid=True):
    """
    Copy a batch's staged rows into production accounts and profiles.

    With ``skip_invalid`` every valid row commits in its own transaction and a
    failing row only loses itself; rows that did not validate count as failed.
    Without it, any invalid row refuses the commit up front and the first
    failure rolls back every row of the call.
    """
    schema = get_schema(batch.entity_type)
    rows = list(eligible_rows(batch).select_related("batch"))
    result = CommitResult()

    if not skip_invalid:
        return commit_all_or_nothing(batch, schema, rows, result)

    for row in rows:
        if row.validation_status != "valid":
            result.fail(row.row_number, SKIPPED_MESSAGE)
            continue
        try:
            with transaction.atomic():
                materialize_row(schema, row)
        except (DatabaseError, ValueError) as exc:
            logger.warning("Batch %s row %s failed to commit: %s", batch.batch_id, row.row_number, exc)
            record_failure(row, str(exc))
            result.fail(row.row_number, str(exc))
            continue
        result.imported += 1

    logger.info(
        "Committed batch %s: %s imported, %s failed of %s attempted",
        batch.batch_id,
        result.imported,
        result.failed,
        result.attempted,
    )
    return result


def commit_all_or_nothing(batch, schema, rows, result):
    blocked = [row.row_number for row in rows if row.validation_status != "valid"]
    if blocked:
        raise CommitConflict(
            f"{len(blocked)} row(s) did not pass validation; fix them or commit with skip_invalid.",
            errors={"rows": blocked},
        )

    failed_row = None
    try:
        with transaction.atomic():
            for row in rows:
                failed_row = row
                with transaction.atomic():
                    materialize_row(schema, row)
    except (DatabaseError, ValueError) as exc:
        logger.warning(
            "Batch %s rolled back; row %s failed to commit: %s",
            batch.batch_id,
            failed_row.row_number,
            exc,
        )
        record_failure(failed_row, str(exc))
        for row in rows:
            result.fail(row.row_number, str(exc) if row is failed_row else "Rolled back.")
        raise PartialCommitFailure(
            f"Row {failed_row.row_number} failed to commit; no rows were imported.",
            result=result,
        ) from exc

    result.imported = len(rows)
    logger.info("Committed batch %s: %s imported", batch.batch_id, result.imported)
    return result
