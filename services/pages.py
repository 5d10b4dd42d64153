"""Content discovery: walk a directory of markdown pages and yield their frontmatter."""

import datetime
import logging
import os

from config import DOC_FILENAME
from services.errors import FrontmatterNotFound
from services.frontmatter import read_block

log = logging.getLogger(__name__)


def page_url(rel_path: str, doc_filename: str = DOC_FILENAME) -> str:
    """URL for a page: `guide/index.md` -> `/guide/`, `notes/a.md` -> `/notes/a.md`."""
    rel_path = rel_path.replace(os.sep, "/")
    if rel_path == doc_filename:
        return "/"
    if rel_path.endswith("/" + doc_filename):
        return "/" + rel_path[: -len(doc_filename)]
    return "/" + rel_path


def read_page_frontmatter(content: str) -> dict:
    """Decode a page's frontmatter block the way the fixer reads it.

    Dates come back from YAML as date objects; pages see them as ISO strings.
    Raises FrontmatterNotFound for a missing block or unparsable YAML.
    """
    raw = read_block(content)
    return {
        k: v.isoformat() if isinstance(v, datetime.date | datetime.datetime) else v
        for k, v in raw.items()
    }


def scan_pages(content_dir: str, doc_filename: str = DOC_FILENAME):
    """Yield {path, file, frontmatter} for every .md file with a readable frontmatter block.

    Pages without a block, or whose block does not decode to a mapping, are logged
    and skipped. Hidden directories are skipped; traversal order is sorted.
    """
    for root, dirs, files in os.walk(content_dir):
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        for fname in sorted(files):
            if not fname.endswith(".md"):
                continue
            abs_path = os.path.join(root, fname)
            rel_path = os.path.relpath(abs_path, content_dir)
            with open(abs_path, newline="") as f:
                content = f.read()
            try:
                frontmatter = read_page_frontmatter(content)
            except FrontmatterNotFound as e:
                log.warning("Skipping %s: %s", rel_path, e)
                continue
            yield {
                "path": page_url(rel_path, doc_filename),
                "file": abs_path,
                "frontmatter": frontmatter,
            }
