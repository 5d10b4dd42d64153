"""Apply dumped frontmatter fixes to documents on disk.

Per document: load -> parse frontmatter -> apply fixes -> serialize -> confirm -> write | skip.
Documents are handled one at a time; the confirm callable decides each one.
"""

import difflib
import logging
import os

from config import DIFF_CONTEXT_LIMIT, DOC_FILENAME
from services.errors import INVALID_KEY, MISSING_KEY, FrontmatterNotFound
from services.frontmatter import read_block, replace_block

log = logging.getLogger(__name__)

FIXED = "fixed"
SKIPPED = "skipped"
UNCHANGED = "unchanged"


# ---------------------------------------------------------------------------
# Decision sources
# ---------------------------------------------------------------------------


def always_yes(question: str) -> bool:  # noqa: ARG001
    return True


def always_no(question: str) -> bool:  # noqa: ARG001
    return False


def prompt_confirm(question: str) -> bool:
    """Ask on the terminal until the answer is yes or no. Empty answer means no."""
    while True:
        answer = input(f"? {question} (y/N) ").strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("", "n", "no"):
            return False


# ---------------------------------------------------------------------------
# Fixes
# ---------------------------------------------------------------------------


def is_fixable(error: dict) -> bool:
    return bool(error.get("fix"))


def count_errors(errors_by_url: dict[str, list[dict]]) -> tuple[int, int]:
    """Return (total, fixable) error counts across all documents."""
    total = sum(len(errors) for errors in errors_by_url.values())
    fixable = sum(1 for errors in errors_by_url.values() for e in errors if is_fixable(e))
    return total, fixable


def apply_fix(error: dict, frontmatter: dict) -> dict:
    """Return frontmatter with one fix applied. Unknown kinds leave it unchanged."""
    kind = error.get("error")
    if kind == MISSING_KEY:
        patch = error.get("fix")
        if not isinstance(patch, dict):
            return frontmatter
        fixed = dict(frontmatter)
        for key, value in patch.items():
            # Values already in the document win over proposed defaults
            fixed.setdefault(key, value)
        return fixed
    if kind == INVALID_KEY:
        key = error.get("key", error.get("got"))
        return {k: v for k, v in frontmatter.items() if k != key}
    log.debug("No fix available for %s", kind)
    return frontmatter


def apply_fixes(errors: list[dict], frontmatter: dict) -> dict:
    """Apply every fixable error in stored order; each fix sees the previous ones."""
    for error in errors:
        if is_fixable(error):
            frontmatter = apply_fix(error, frontmatter)
    return frontmatter


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def resolve_document_path(root: str, url: str, doc_filename: str = DOC_FILENAME) -> str:
    """Map a dump key to a file under root: `.md` keys are file paths, others are page URLs.

    An absolute `.md` key naming an existing file is used as-is.
    """
    if url.endswith(".md"):
        if os.path.isabs(url) and os.path.isfile(url):
            return url
        return os.path.join(root, url.lstrip("/"))
    return os.path.join(root, url.lstrip("/"), doc_filename)


def filter_by_subdir(errors_by_url: dict[str, list[dict]], subdir: str | None) -> dict:
    """Keep only documents whose key starts with subdir (leading slashes ignored)."""
    if not subdir:
        return dict(errors_by_url)
    prefix = subdir.lstrip("/")
    return {
        url: errors
        for url, errors in errors_by_url.items()
        if url.lstrip("/").startswith(prefix)
    }


# ---------------------------------------------------------------------------
# Diff
# ---------------------------------------------------------------------------


def _prefix(lines: list[str], marker: str) -> str:
    return "\n".join(f"{marker}{line}" for line in lines)


def _truncate(text: str, limit: int, omission: str = "\n  [...]") -> str:
    """Cut text to at most `limit` chars on a line boundary."""
    if len(text) <= limit:
        return text
    cut = text[: max(limit - len(omission), 0)]
    newline = cut.rfind("\n")
    if newline > 0:
        cut = cut[:newline]
    return cut + omission


def render_diff(old: str, new: str, limit: int = DIFF_CONTEXT_LIMIT) -> list[str]:
    """Line diff as printable chunks: '+ ' added, '- ' removed, '  ' truncated context."""
    old_lines = old.splitlines()
    new_lines = new.splitlines()
    chunks = []
    matcher = difflib.SequenceMatcher(a=old_lines, b=new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            chunks.append(_truncate(_prefix(old_lines[i1:i2], "  "), limit))
            continue
        if i2 > i1:
            chunks.append(_prefix(old_lines[i1:i2], "- "))
        if j2 > j1:
            chunks.append(_prefix(new_lines[j1:j2], "+ "))
    return chunks


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def fix_text(content: str, errors: list[dict]) -> str:
    """Return content with fixes applied. Unchanged frontmatter returns content as-is.

    Raises FrontmatterNotFound if the document has no frontmatter block.
    """
    frontmatter = read_block(content)
    fixed = apply_fixes(errors, dict(frontmatter))
    if fixed == frontmatter and list(fixed) == list(frontmatter):
        return content
    return replace_block(content, fixed)


def fix_document(
    url: str,
    errors: list[dict],
    root: str = ".",
    confirm=always_yes,
    doc_filename: str = DOC_FILENAME,
) -> str:
    """Run the fix cycle for one document. Returns FIXED, SKIPPED or UNCHANGED."""
    file_path = resolve_document_path(root, url, doc_filename)
    print(f">> {url}...\n")

    with open(file_path, newline="") as f:
        content = f.read()

    try:
        fixed = fix_text(content, errors)
    except FrontmatterNotFound as e:
        raise FrontmatterNotFound(f"{file_path}: {e}") from e
    if fixed == content:
        print("Nothing to fix\n")
        log.debug("%s: unchanged", file_path)
        return UNCHANGED

    for chunk in render_diff(content, fixed):
        print(chunk)
    print("")

    if not confirm("Proceed with fix?"):
        print(">> Skipped!\n")
        return SKIPPED

    with open(file_path, "w", newline="") as f:
        f.write(fixed)
    log.info("Fixed %s", file_path)
    print(">> Fixed!\n")
    return FIXED


def run_fixes(
    errors_by_url: dict[str, list[dict]],
    root: str = ".",
    subdir: str = None,
    confirm=always_yes,
    doc_filename: str = DOC_FILENAME,
) -> dict:
    """Fix every document in turn. Returns {fixed, skipped, unchanged} counts.

    Documents without fixable errors are never opened.
    """
    summary = {FIXED: 0, SKIPPED: 0, UNCHANGED: 0}
    for url, errors in filter_by_subdir(errors_by_url, subdir).items():
        if not any(is_fixable(e) for e in errors):
            summary[UNCHANGED] += 1
            continue
        outcome = fix_document(url, errors, root, confirm, doc_filename)
        summary[outcome] += 1
    return summary
