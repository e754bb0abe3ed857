import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation

from openpyxl.utils import get_column_letter

from .headers import FULL_NAME, normalize_header
from .schema import CHOICE_ALIASES

# Serial 1 is 1900-01-01. Serial 60 is the 1900-02-29 that never existed, so
# every later serial sits one day past a plain epoch count.
SERIAL_EPOCH = date(1899, 12, 30)
PHANTOM_LEAP_SERIAL = 60
MAX_SERIAL = 2958465  # 9999-12-31

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%d.%m.%Y",
    "%m/%d/%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
)

TRUE_VALUES = {"yes", "y", "true", "t", "1", "on"}
FALSE_VALUES = {"no", "n", "false", "f", "0", "off"}

STAGING_CHAR_LIMIT = 255
DECIMAL_LIMIT = Decimal(10) ** 12

_SERIAL = re.compile(r"^\d+(\.\d+)?$")
_CURRENCY = re.compile(r"(rs\.?|inr|usd|[$€£₹,\s])", re.IGNORECASE)


@dataclass
class NormalizedRow:
    row_number: int
    fields: dict = field(default_factory=dict)
    raw: dict = field(default_factory=dict)


def serial_to_date(serial):
    try:
        whole = int(float(serial))
    except (TypeError, ValueError, OverflowError):
        return None
    if whole < 1 or whole > MAX_SERIAL or whole == PHANTOM_LEAP_SERIAL:
        return None
    if whole < PHANTOM_LEAP_SERIAL:
        return SERIAL_EPOCH + timedelta(days=whole + 1)
    return SERIAL_EPOCH + timedelta(days=whole)


def date_to_serial(value):
    days = (value - SERIAL_EPOCH).days
    if days <= PHANTOM_LEAP_SERIAL:
        return days - 1
    return days


def parse_date(value):
    """Return a ``date`` for a cell value, or ``None`` when it is not one."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return serial_to_date(value)
    text = str(value).strip()
    if not text:
        return None
    if _SERIAL.match(text):
        return serial_to_date(text)
    text = " ".join(text.replace(",", " ").split())
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_decimal(value):
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    else:
        text = _CURRENCY.sub("", str(value))
    if text.startswith("(") and text.endswith(")"):
        text = f"-{text[1:-1]}"
    if not text:
        return None
    try:
        number = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or abs(number) >= DECIMAL_LIMIT:
        return None
    return number.quantize(Decimal("0.01"))


def parse_bool(value):
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return None


def parse_choice(field_name, value):
    aliases = CHOICE_ALIASES.get(field_name, {})
    return aliases.get(normalize_header(value))


def as_text(value):
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    text = str(value).strip()
    return text or None


def coerce(spec, value):
    """Convert one non-blank cell into the staging value for ``spec``."""
    kind = spec.kind
    if kind == "date":
        return parse_date(value)
    if kind == "decimal":
        return parse_decimal(value)
    if kind == "bool":
        return parse_bool(value)
    if kind == "choice":
        return parse_choice(spec.name, value)
    text = as_text(value)
    if kind == "email":
        text = text.lower()
    if kind != "longtext":
        text = text[:STAGING_CHAR_LIMIT]
    return text


def column_label(index, header):
    letter = get_column_letter(index + 1)
    return f"{letter}:{header}" if header else letter


def split_full_name(value):
    parts = as_text(value).split(None, 1)
    first = parts[0]
    last = parts[1] if len(parts) > 1 else None
    return first, last


def normalize_row(row_number, cells, column_map, schema, headers=None):
    """
    Build the typed staging fields and the raw text record for one row.

    Values that fail to parse become ``None`` in ``fields`` while their text
    stays in ``raw`` so validation can report them. Cells under unmapped
    columns are kept in ``raw["_unmapped"]`` keyed by column position.
    """
    headers = headers or [None] * len(column_map)
    normalized = NormalizedRow(row_number=row_number)
    unmapped = {}
    full_name = None

    for index, target in enumerate(column_map):
        value = cells[index] if index < len(cells) else None
        text = as_text(value)
        if text is None:
            continue
        if target is None:
            header = headers[index] if index < len(headers) else None
            unmapped[column_label(index, header)] = text
            continue
        normalized.raw[target] = text
        if target == FULL_NAME:
            full_name = value
            continue
        normalized.fields[target] = coerce(schema.field(target), value)

    if full_name is not None:
        first, last = split_full_name(full_name)
        if normalized.fields.get("first_name") is None:
            normalized.fields["first_name"] = first[:STAGING_CHAR_LIMIT]
            normalized.raw.setdefault("first_name", first)
        if last and normalized.fields.get("last_name") is None:
            normalized.fields["last_name"] = last[:STAGING_CHAR_LIMIT]
            normalized.raw.setdefault("last_name", last)

    if unmapped:
        normalized.raw["_unmapped"] = unmapped
    return normalized
