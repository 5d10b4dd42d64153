#!/usr/bin/env python3
"""Frontmatter lint auto-fix tool: applies the fixes from an error dump to the documents."""

import argparse
import logging
import sys

from config import DOC_FILENAME
from services.errors import FrontmatterNotFound
from services.fixer import (
    FIXED,
    SKIPPED,
    UNCHANGED,
    always_yes,
    count_errors,
    prompt_confirm,
    run_fixes,
)
from services.report import load_dump

__version__ = "1.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Applies the fixes from file to the repo")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("-d", "--dir", default=".", help="The root directory of the files to fix")
    parser.add_argument("-s", "--subdir", help="Only fix documents under this URL prefix")
    parser.add_argument("-e", "--errors", help="A file containing the dumped errors")
    parser.add_argument("--doc-filename", default=DOC_FILENAME, help="Document file per URL")
    parser.add_argument("-y", "--yes", action="store_true", help="Answer yes to all prompts")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None, confirm=None):
    """Entry point for `frontmatter-fix` CLI command.

    `confirm` overrides the interactive prompt (tests, automation).
    """
    parser = build_parser()
    cli_args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if cli_args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("\n Frontmatter lint auto-fix tool\n")

    if not cli_args.errors:
        parser.print_help()
        print("\n You must provide the path to an error dump file.", file=sys.stderr)
        return 2

    try:
        errors_by_url = load_dump(cli_args.errors)
    except (OSError, ValueError) as e:
        print(f" Unable to open {cli_args.errors}: {e}", file=sys.stderr)
        return 1

    if cli_args.yes:
        confirm = always_yes
    elif confirm is None:
        confirm = prompt_confirm

    total, fixable = count_errors(errors_by_url)
    print(f" Found {fixable} fixable errors (of {total} total).\n")

    if not cli_args.yes:
        print(" I will show you the diff and ask you confirmation before applying each fix.\n")
        if not confirm("Shall we start?"):
            print("\n  Ok, see you!\n")
            return 0

    try:
        summary = run_fixes(
            errors_by_url,
            root=cli_args.dir,
            subdir=cli_args.subdir,
            confirm=confirm,
            doc_filename=cli_args.doc_filename,
        )
    except FrontmatterNotFound as e:
        # Stale dump or moved document: no safe place to write the fix.
        print(f" Cannot locate frontmatter: {e}", file=sys.stderr)
        return 1

    print(
        f" Done: {summary[FIXED]} fixed, {summary[SKIPPED]} skipped, "
        f"{summary[UNCHANGED]} unchanged.\n"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
