"""Page frontmatter validation against a schema."""

from services.errors import (
    EMPTY_KEY,
    EMPTY_VALUE,
    INVALID_KEY,
    INVALID_TYPE,
    INVALID_VALUE,
    MISSING_PROP,
)
from services.schema import matches_allowed_value, matches_type, type_label


def _check_key(key, value, schema: dict) -> dict | None:
    """Return the first error for one frontmatter entry, or None if it passes."""
    if key is None or key == "":
        return {"error": EMPTY_KEY}
    if key not in schema:
        return {"error": INVALID_KEY, "key": key}
    if value is None:
        return {"error": EMPTY_VALUE, "key": key}

    spec = schema[key]
    valid, expected = matches_type(value, spec["type"])
    if not valid:
        return {"error": INVALID_TYPE, "key": key, "expected": expected, "got": type_label(value)}

    allowed = spec.get("allowedValues")
    if allowed is not None and not matches_allowed_value(value, allowed):
        return {"error": INVALID_VALUE, "key": key, "expected": list(allowed), "got": value}
    return None


def validate_frontmatter(frontmatter: dict, schema: dict) -> list[dict]:
    """Return the ordered errors for one page. Empty list means valid.

    Missing required fields come first in schema order, then per-key errors
    in frontmatter order. Each key yields at most one error.
    """
    errors = []

    for field, spec in schema.items():
        if spec.get("required") is True and field not in frontmatter:
            errors.append({"error": MISSING_PROP, "expected": field})

    for key, value in frontmatter.items():
        error = _check_key(key, value, schema)
        if error:
            errors.append(error)

    return errors


def validate_page(path: str, frontmatter: dict, schema: dict, store=None) -> list[dict]:
    """Validate a page and append its errors to `store` under `path` when given."""
    errors = validate_frontmatter(frontmatter or {}, schema)
    if store is not None:
        for error in errors:
            store.add_error(path, error)
    return errors
