#!/usr/bin/env python3
"""Frontmatter lint: validate every page under a content directory against the specs."""

import argparse
import logging
import sys

from config import load_config
from services.errors import BuildAborted
from services.pages import scan_pages
from services.plugin import create_plugin


def run_lint(config: dict) -> int:
    """Drive the plugin hooks over the content dir. Returns the number of pages checked."""
    plugin = create_plugin(config)
    if not plugin.enabled:
        return 0
    count = 0
    for page in scan_pages(config["contentDir"], config["docFilename"]):
        plugin.extend_page_data(page)
        count += 1
    plugin.ready()
    return count


def main(argv=None):
    """Entry point for `frontmatter-lint` CLI command."""
    parser = argparse.ArgumentParser(description="Validate markdown frontmatter against specs")
    parser.add_argument("-c", "--config", help="Lint config file (YAML or JSON)")
    parser.add_argument("-d", "--dir", help="Content directory to scan (overrides contentDir)")
    parser.add_argument("--dump", metavar="FILE", help="Write the error dump to FILE")
    parser.add_argument("--abort", action="store_true", help="Exit non-zero if errors are found")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    cli_args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if cli_args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(cli_args.config)
    if cli_args.dir:
        config["contentDir"] = cli_args.dir
    if cli_args.dump:
        config["dumpToFile"] = True
        config["dumpFile"] = cli_args.dump
    if cli_args.abort:
        config["abortBuild"] = True

    try:
        count = run_lint(config)
    except BuildAborted as e:
        print(f"\n  {e}\n", file=sys.stderr)
        return 1
    print(f"\n  Checked {count} page(s).\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
