"""Error kinds, exceptions, and the per-document error store."""

import threading

MISSING_PROP = "MISSING_PROP"
EMPTY_KEY = "EMPTY_KEY"
INVALID_KEY = "INVALID_KEY"
EMPTY_VALUE = "EMPTY_VALUE"
INVALID_TYPE = "INVALID_TYPE"
INVALID_VALUE = "INVALID_VALUE"

# Produced by the fix proposal step, never by the validator.
MISSING_KEY = "MISSING_KEY"


class FrontmatterNotFound(ValueError):
    """No `---` delimited frontmatter block in the document."""


class BuildAborted(RuntimeError):
    """Errors remained at the end of a build configured with abortBuild."""

    def __init__(self, count: int, dump_file: str = None):
        self.count = count
        self.dump_file = dump_file
        msg = f"{count} page(s) do not have a valid frontmatter."
        if dump_file:
            msg += f" Please refer to {dump_file}"
        super().__init__(msg)


class ErrorStore:
    """Ordered errors per document path for one run. Append-only until reset."""

    def __init__(self):
        self._errors: dict[str, list[dict]] = {}
        self._lock = threading.Lock()

    def add_error(self, path: str, error: dict) -> None:
        with self._lock:
            self._errors.setdefault(path, []).append(error)

    def reset(self) -> None:
        with self._lock:
            self._errors = {}

    def get(self, path: str) -> list[dict]:
        return list(self._errors.get(path, []))

    def snapshot(self) -> dict[str, list[dict]]:
        """Copy of the store safe to serialize or hand to other threads."""
        with self._lock:
            return {path: [dict(e) for e in errors] for path, errors in self._errors.items()}

    @property
    def error_count(self) -> int:
        return sum(len(errors) for errors in self._errors.values())

    def __len__(self):
        return len(self._errors)

    def __bool__(self):
        return bool(self._errors)

    def __contains__(self, path):
        return path in self._errors
