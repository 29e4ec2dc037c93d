"""Schema checks for article frontmatter.

:func:`validate` reports hard problems (missing required fields, values of
the wrong shape). :func:`check_conventions` reports soft ones that the corpus
does not enforce but authors usually want to know about.

Both accumulate every finding instead of stopping at the first one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from .errors import FieldError, InvalidFieldError, MissingFieldError
from .slugs import is_url_safe_slug

REQUIRED_FIELDS: Tuple[str, ...] = ("title", "category.slug")

_STRING_FIELDS = ("title", "excerpt", "readingTime")
_REF_FIELDS = ("category", "author")
_DATE_FIELDS = ("date", "publishedAt", "updatedAt")

_MISSING = object()
_date_only_re = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(slots=True, frozen=True)
class ConventionWarning:
    code: str
    field: Optional[str]
    message: str


def _lookup(metadata: Mapping[str, Any], path: str) -> Any:
    node: Any = metadata
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _is_empty(value: Any) -> bool:
    if value is _MISSING or value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """Return ``value`` as a datetime if it is an ISO-8601 date or datetime, else None."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _check_types(metadata: Mapping[str, Any]) -> List[FieldError]:
    errors: List[FieldError] = []

    for key in _STRING_FIELDS:
        value = metadata.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(InvalidFieldError(key, f"expected a string, got {type(value).__name__}"))

    for key in _REF_FIELDS:
        value = metadata.get(key)
        if value is None:
            continue
        if not isinstance(value, Mapping):
            errors.append(InvalidFieldError(key, "expected a mapping with 'name' and 'slug'"))
            continue
        for sub in ("name", "slug"):
            sub_value = value.get(sub)
            if sub_value is not None and not isinstance(sub_value, str):
                errors.append(
                    InvalidFieldError(f"{key}.{sub}", f"expected a string, got {type(sub_value).__name__}")
                )

    tags = metadata.get("tags")
    if tags is not None:
        if not isinstance(tags, list):
            errors.append(InvalidFieldError("tags", "expected a list of strings"))
        else:
            for i, tag in enumerate(tags):
                if not isinstance(tag, str) or not tag.strip():
                    errors.append(InvalidFieldError(f"tags[{i}]", "expected a non-empty string"))

    for key in _DATE_FIELDS:
        value = metadata.get(key)
        if value is not None and parse_iso_datetime(value) is None:
            errors.append(InvalidFieldError(key, f"expected an ISO-8601 date or datetime, got {value!r}"))

    return errors


def validate(metadata: Mapping[str, Any], required: Sequence[str] = REQUIRED_FIELDS) -> List[FieldError]:
    """Check ``metadata`` against the article schema.

    Returns every problem found; an empty list means the metadata is valid.
    Required fields are dotted paths, so ``category.slug`` is reported as
    missing when ``category`` itself is absent or not a mapping.
    """
    errors: List[FieldError] = []
    for path in required:
        if _is_empty(_lookup(metadata, path)):
            errors.append(MissingFieldError(path))
    errors.extend(_check_types(metadata))
    return errors


def _aware(dt: datetime) -> bool:
    return dt.tzinfo is not None and dt.tzinfo.utcoffset(dt) is not None


def _is_date_only(value: Any) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    return isinstance(value, str) and _date_only_re.match(value.strip()) is not None


def _is_earlier(a: Any, b: Any) -> Optional[bool]:
    """Whether date value ``a`` falls before ``b``; None when either does not parse.

    When either side has no time part only the calendar days are compared.
    """
    da, db = parse_iso_datetime(a), parse_iso_datetime(b)
    if da is None or db is None:
        return None
    if _is_date_only(a) or _is_date_only(b):
        return da.date() < db.date()
    if _aware(da) != _aware(db):
        da, db = da.replace(tzinfo=None), db.replace(tzinfo=None)
    return da < db


def check_conventions(metadata: Mapping[str, Any], body: str = "") -> List[ConventionWarning]:
    warnings: List[ConventionWarning] = []

    for key in _REF_FIELDS:
        ref = metadata.get(key)
        if isinstance(ref, Mapping):
            slug = ref.get("slug")
            if isinstance(slug, str) and slug.strip() and not is_url_safe_slug(slug):
                warnings.append(
                    ConventionWarning("slug-format", f"{key}.slug", f"'{slug}' is not lowercase and hyphenated")
                )

    updated = metadata.get("updatedAt")
    if updated is not None:
        for key in ("publishedAt", "date"):
            earlier = _is_earlier(updated, metadata.get(key))
            if earlier is None:
                continue
            if earlier:
                warnings.append(ConventionWarning("date-order", "updatedAt", f"updatedAt is earlier than {key}"))
            break

    tags = metadata.get("tags")
    if isinstance(tags, list):
        for tag in _duplicates(str(t).strip().lower() for t in tags if isinstance(t, str)):
            warnings.append(ConventionWarning("duplicate-tag", "tags", f"tag '{tag}' appears more than once"))

    if not (body or "").strip():
        warnings.append(ConventionWarning("empty-body", None, "article has no body text"))

    return warnings


def _duplicates(values: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    dupes: List[str] = []
    for v in values:
        if v in seen and v not in dupes:
            dupes.append(v)
        seen.add(v)
    return dupes
