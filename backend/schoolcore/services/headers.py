import re
from functools import lru_cache

from .schema import FULL_NAME_SYNONYMS, get_schema

FULL_NAME = "full_name"

# Tokens and synonyms shorter than this only ever match exactly.
MIN_FALLBACK_LENGTH = 4

_SEPARATORS = re.compile(r"[\s\-/.]+")
_DISALLOWED = re.compile(r"[^a-z0-9_]")
_UNDERSCORES = re.compile(r"_+")


def normalize_header(text):
    """
    Lowercase a raw header into an underscore token.

    >>> normalize_header("  Date-of Birth ")
    'date_of_birth'
    >>> normalize_header("Father's Name")
    'fathers_name'
    """
    if text is None:
        return ""
    token = str(text).strip().lower()
    token = token.replace("'", "").replace("’", "")
    token = _SEPARATORS.sub("_", token)
    token = _DISALLOWED.sub("", token)
    token = _UNDERSCORES.sub("_", token)
    return token.strip("_")


@lru_cache(maxsize=None)
def synonym_index(entity_type):
    """Ordered ``(synonym, field)`` pairs; the first field claiming a synonym keeps it."""
    schema = get_schema(entity_type)
    index = {}
    for spec in schema.fields:
        for synonym in spec.synonyms:
            index.setdefault(normalize_header(synonym), spec.name)
    for synonym in FULL_NAME_SYNONYMS:
        index.setdefault(synonym, FULL_NAME)
    return tuple(index.items())


def _fallback(token, entity_type):
    contained = None
    containing = None
    for synonym, target in synonym_index(entity_type):
        if target == FULL_NAME or len(synonym) < MIN_FALLBACK_LENGTH:
            continue
        # Prefer the longest synonym inside the header, then the closest
        # synonym that contains the header.
        if synonym in token:
            if contained is None or len(synonym) > len(contained[0]):
                contained = (synonym, target)
        elif token in synonym:
            if containing is None or len(synonym) < len(containing[0]):
                containing = (synonym, target)
    match = contained or containing
    return match[1] if match else None


def resolve_header(text, entity_type):
    token = normalize_header(text)
    if not token:
        return None
    exact = dict(synonym_index(entity_type))
    if token in exact:
        return exact[token]
    if len(token) < MIN_FALLBACK_LENGTH:
        return None
    return _fallback(token, entity_type)


def map_headers(headers, entity_type):
    """
    Resolve each header position to a canonical field or ``None``.

    When two columns resolve to the same field the left-most one keeps it.
    """
    claimed = set()
    column_map = []
    for header in headers:
        target = resolve_header(header, entity_type)
        if target is not None and target in claimed:
            target = None
        if target is not None:
            claimed.add(target)
        column_map.append(target)
    return column_map


def mapping_report(headers, column_map):
    """Header-to-field summary kept on the batch for the preview screen."""
    mapped = {}
    unmapped = []
    for index, (header, target) in enumerate(zip(headers, column_map)):
        label = header if header else f"(column {index + 1})"
        if target:
            mapped[label] = target
        else:
            unmapped.append(label)
    return {"mapped": mapped, "unmapped": unmapped}
