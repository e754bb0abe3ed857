"""
Row validation for staged imports.

Every run re-evaluates each un-imported row from its stored typed fields and
raw text, against reference and production tables as they are right now, and
rewrites the row's status, errors and warnings. Nothing else is carried from a
previous run, so validating an unchanged batch twice gives the same result.
"""
import logging
import re
from datetime import date, timedelta

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db.models.functions import Lower
from django.utils import timezone

from schoolcore.models import Account, Branch, Grade, Section

from . import staging
from .schema import get_schema

logger = logging.getLogger(__name__)

TYPED_KINDS = ("date", "decimal", "bool", "choice")
PHONE_STRIP = re.compile(r"[\s\-.()]")
PHONE_DIGITS = re.compile(r"^\d{7,15}$")
PINCODE = re.compile(r"^[A-Za-z0-9]{4,10}$")

# Typical age span per grade; ages outside it only warn.
GRADE_AGE_RANGES = {
    "PlaySchool": (2, 3),
    "Nursery": (3, 4),
    "LKG": (4, 5),
    "UKG": (5, 6),
    "1": (6, 7),
    "2": (7, 8),
    "3": (8, 9),
    "4": (9, 10),
    "5": (10, 11),
    "6": (11, 12),
    "7": (12, 13),
    "8": (13, 14),
    "9": (14, 15),
    "10": (15, 16),
    "11": (16, 17),
    "12": (17, 18),
}


def age_on(birth_date, today):
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def is_valid_phone(value):
    digits = PHONE_STRIP.sub("", value)
    if digits.startswith("+"):
        digits = digits[1:]
    return bool(PHONE_DIGITS.match(digits))


def is_valid_email(value):
    try:
        validate_email(value)
    except ValidationError:
        return False
    return True


def decimal_limits(schema):
    """Exclusive upper bound per decimal field, from the profile column it lands in."""
    limits = {}
    for spec in schema.fields_of_kind("decimal"):
        if spec.name not in schema.profile_fields:
            continue
        column = schema.profile_model._meta.get_field(spec.name)
        limits[spec.name] = 10 ** (column.max_digits - column.decimal_places)
    return limits


def _key(value):
    return str(value).strip().lower()


class BatchValidator:
    """Validates the staged rows of one batch in a single pass."""

    def __init__(self, batch, today=None):
        self.batch = batch
        self.schema = get_schema(batch.entity_type)
        self.today = today or timezone.localdate()
        self.min_date = date(settings.IMPORT_MIN_YEAR, 1, 1)
        self.max_date = self.today + timedelta(days=settings.IMPORT_MAX_FUTURE_DAYS)
        self.is_student = self.schema.entity_type == "student"
        self.decimal_limits = decimal_limits(self.schema)

    # Reference and production lookups, loaded once per run.

    def load(self, rows):
        self.branches = {branch.pk: branch for branch in Branch.objects.filter(pk__in={row.branch_id for row in rows if row.branch_id})}
        self.grades = {}
        self.sections = set()
        if self.is_student:
            self.grades = {_key(value): value for value in Grade.objects.values_list("value", flat=True)}
            self.sections = {
                (branch_id, _key(grade_level), _key(name))
                for branch_id, grade_level, name in Section.objects.filter(branch_id__in=self.branches).values_list(
                    "branch_id", "grade_level", "name"
                )
            }
        self.existing = {
            field_name: self.existing_values(field_name, lookup, rows)
            for field_name, lookup in self.schema.production_unique
        }
        self.first_seen = self.first_occurrences(staging.rows_for(self.batch))
        self.enrolled = {}
        if self.is_student:
            for branch_id in self.branches:
                self.enrolled[branch_id] = self.schema.profile_model.objects.filter(branch_id=branch_id).count()

    def existing_values(self, field_name, lookup, rows):
        values = {_key(getattr(row, field_name)) for row in rows if getattr(row, field_name)}
        if not values:
            return set()
        scope, _, column = lookup.partition("__")
        model = Account if scope == "account" else self.schema.profile_model
        return set(
            model.objects.annotate(_match=Lower(column))
            .filter(_match__in=values)
            .values_list("_match", flat=True)
        )

    def first_occurrences(self, rows):
        seen = {field_name: {} for field_name in self.schema.batch_unique}
        for row in rows.only("row_number", *self.schema.batch_unique):
            for field_name in self.schema.batch_unique:
                value = getattr(row, field_name)
                if value:
                    seen[field_name].setdefault(_key(value), row.row_number)
        return seen

    # Per-row rules.

    def check_fields(self, row, errors):
        raw = row.raw_row or {}
        for spec in self.schema.fields:
            value = getattr(row, spec.name, None)
            raw_text = raw.get(spec.name)
            if value is None or value == "":
                if spec.kind in TYPED_KINDS and raw_text:
                    message = f"Invalid {spec.label} '{raw_text}'."
                    if spec.choices:
                        message = f"Invalid {spec.label} '{raw_text}' (expected one of: {', '.join(spec.choices)})."
                    errors.append(message)
                elif spec.required:
                    errors.append(f"{spec.label} is required.")
                continue
            if raw_text and spec.kind not in TYPED_KINDS and spec.kind != "longtext" and len(raw_text) > spec.max_length:
                errors.append(f"{spec.label} must be at most {spec.max_length} characters.")
            if spec.kind == "email" and not is_valid_email(value):
                errors.append(f"{spec.label} '{value}' is not a valid email address.")
            elif spec.kind == "phone" and not is_valid_phone(value):
                errors.append(f"{spec.label} '{value}' must contain 7 to 15 digits.")
            elif spec.kind == "date":
                self.check_date(spec, value, errors)
            elif spec.kind == "decimal":
                self.check_decimal(spec, value, errors)
        pincode = getattr(row, "pincode", None)
        if pincode and not PINCODE.match(pincode):
            errors.append(f"Pincode '{pincode}' must be 4 to 10 letters or digits.")
        joining = getattr(row, "joining_date", None)
        leaving = getattr(row, "leaving_date", None)
        if joining and leaving and leaving < joining:
            errors.append("Leaving date cannot be before joining date.")

    def check_decimal(self, spec, value, errors):
        if value < 0:
            errors.append(f"{spec.label} cannot be negative.")
            return
        limit = self.decimal_limits.get(spec.name)
        if limit is not None and value >= limit:
            errors.append(f"{spec.label} must be less than {limit:,}.")

    def check_date(self, spec, value, errors):
        if value < self.min_date:
            errors.append(f"{spec.label} {value.isoformat()} is before {self.min_date.isoformat()}.")
        elif value > self.max_date:
            errors.append(f"{spec.label} {value.isoformat()} is too far in the future.")
        elif spec.name == "date_of_birth" and value >= self.today:
            errors.append("Date of birth must be before today.")

    def check_placement(self, row, errors):
        if not row.grade:
            errors.append("Grade is required.")
        elif _key(row.grade) not in self.grades:
            errors.append(f"Grade '{row.grade}' does not exist.")
        if not row.academic_year:
            errors.append("Academic year is required.")

    def check_branch(self, row, errors):
        branch = self.branches.get(row.branch_id)
        if branch is None:
            errors.append("Branch is required." if row.branch_id is None else "Branch does not exist.")
        elif not branch.is_active:
            errors.append(f"Branch '{branch.code}' is not active.")
        return branch

    def check_uniqueness(self, row, errors):
        for field_name, _ in self.schema.production_unique:
            value = getattr(row, field_name)
            if value and _key(value) in self.existing[field_name]:
                errors.append(f"{self.schema.field(field_name).label} '{value}' already exists in production records.")
        for field_name in self.schema.batch_unique:
            value = getattr(row, field_name)
            if not value:
                continue
            first_row = self.first_seen[field_name].get(_key(value))
            if first_row is not None and first_row != row.row_number:
                errors.append(
                    f"{self.schema.field(field_name).label} '{value}' is duplicated within this import "
                    f"(first seen in row {first_row})."
                )

    def check_warnings(self, row, branch, warnings):
        if not self.is_student or branch is None:
            return
        grade = self.grades.get(_key(row.grade)) if row.grade else None
        if row.section and grade and (branch.pk, _key(grade), _key(row.section)) not in self.sections:
            warnings.append(f"Section '{row.section}' is not set up for grade '{grade}' in branch '{branch.code}'.")
        if row.date_of_birth and grade in GRADE_AGE_RANGES:
            low, high = GRADE_AGE_RANGES[grade]
            age = age_on(row.date_of_birth, self.today)
            if not low <= age <= high:
                warnings.append(f"Age {age} may not be appropriate for grade '{grade}'.")

    def check_capacity(self, row, branch, warnings):
        if not self.is_student or branch is None or branch.capacity is None:
            return
        self.enrolled[branch.pk] = self.enrolled.get(branch.pk, 0) + 1
        if self.enrolled[branch.pk] > branch.capacity:
            warnings.append(f"Branch '{branch.code}' would exceed its capacity of {branch.capacity} students.")

    def validate_row(self, row):
        errors = []
        warnings = []
        branch = self.check_branch(row, errors)
        self.check_fields(row, errors)
        if self.is_student:
            self.check_placement(row, errors)
        self.check_uniqueness(row, errors)
        self.check_warnings(row, branch, warnings)
        if not errors:
            self.check_capacity(row, branch, warnings)
        return staging.mark_row(row, errors, warnings, save=False)

    def run(self):
        rows = list(staging.rows_for(self.batch).filter(imported_to_production=False))
        self.load(rows)
        checked = [self.validate_row(row) for row in rows]
        staging.save_results(self.batch, checked)
        counts = staging.batch_counts(self.batch)
        logger.info(
            "Validated batch %s: %s total, %s valid, %s invalid",
            self.batch.batch_id,
            counts.total,
            counts.valid,
            counts.invalid,
        )
        for row in checked:
            if row.validation_errors:
                logger.debug("Batch %s row %s: %s", self.batch.batch_id, row.row_number, "; ".join(row.validation_errors))
        return counts


def validate_batch(batch, today=None):
    return BatchValidator(batch, today=today).run()
