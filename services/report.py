"""Console report, fix proposals and JSON dump of collected frontmatter errors."""

import json
import logging
import os

from services.errors import EMPTY_KEY, INVALID_KEY, MISSING_KEY, MISSING_PROP

log = logging.getLogger(__name__)


def _render_value(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def format_error(error: dict) -> list[str]:
    """Render one error as report lines (without indentation)."""
    kind = error.get("error")
    if kind == EMPTY_KEY:
        return [kind]
    field = error.get("key", error.get("expected"))
    lines = [f"{kind} on field {field}"]
    if "expected" in error:
        lines.append(f"Expected: {_render_value(error['expected'])}")
    if "got" in error:
        lines.append(f"Got: {_render_value(error['got'])}")
    return lines


def format_report(errors_by_path: dict[str, list[dict]]) -> str:
    """Render every path that has errors, in stored order."""
    out = []
    for path, errors in errors_by_path.items():
        if not errors:
            continue
        out.append(path)
        for error in errors:
            first, *rest = format_error(error)
            out.append(f"  - {first}")
            out.extend(f"      {line}" for line in rest)
        out.append("")
    return "\n".join(out)


def print_report(errors_by_path: dict[str, list[dict]]) -> None:
    total = sum(len(e) for e in errors_by_path.values())
    pages = sum(1 for e in errors_by_path.values() if e)
    print(f"\nFrontmatter errors: {total} in {pages} page(s)\n")
    print(format_report(errors_by_path))


def propose_fixes(errors_by_path: dict[str, list[dict]], schema: dict) -> dict[str, list[dict]]:
    """Return a copy of the errors with fix patches attached where one is known.

    MISSING_PROP with a schema default becomes MISSING_KEY carrying {field: default};
    INVALID_KEY is marked fixable by deletion. Everything else is copied as-is.
    """
    proposed = {}
    for path, errors in errors_by_path.items():
        items = []
        for error in errors:
            kind = error.get("error")
            field = error.get("expected")
            if kind == MISSING_PROP and "default" in schema.get(field, {}):
                items.append(
                    {
                        "error": MISSING_KEY,
                        "key": field,
                        "expected": field,
                        "fix": {field: schema[field]["default"]},
                    }
                )
            elif kind == INVALID_KEY:
                items.append({**error, "fix": True})
            else:
                items.append(dict(error))
        proposed[path] = items
    return proposed


def dump_errors(errors_by_path: dict[str, list[dict]], dump_file: str) -> str:
    """Write the errors as indented JSON. Returns the absolute path written."""
    abs_path = os.path.abspath(dump_file)
    parent = os.path.dirname(abs_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(abs_path, "w") as f:
        json.dump(errors_by_path, f, indent=4, default=str)
        f.write("\n")
    log.info("Dumped frontmatter errors for %d page(s) to %s", len(errors_by_path), abs_path)
    return abs_path


def load_dump(dump_file: str) -> dict[str, list[dict]]:
    """Read a dump written by dump_errors. Raises ValueError if it is not a mapping."""
    with open(dump_file) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Error dump must be a JSON object, got {type(data).__name__}")
    return data
