"""Shared constants and lint configuration loading for the frontmatter linter."""

import os

import yaml

_CONFIG_ENV = "FRONTMATTER_LINT_CONFIG"
_DEFAULT_CONFIG_FILE = "frontmatter.config.yml"

DEFAULT_DUMP_FILE = "./frontmatter-errors.json"
DOC_FILENAME = "index.md"
DIFF_CONTEXT_LIMIT = 200
PORT = 4244

_DEFAULTS = {
    "specs": None,
    "dumpToFile": False,
    "dumpFile": DEFAULT_DUMP_FILE,
    "abortBuild": False,
    "proposeFixes": True,
    "contentDir": ".",
    "docFilename": DOC_FILENAME,
}


def config_path(path: str = None) -> str:
    """Resolve the config file: explicit path, then env var, then cwd default."""
    return path or os.environ.get(_CONFIG_ENV) or _DEFAULT_CONFIG_FILE


def _read_config_file(path: str) -> dict:
    """Read the raw config mapping. Missing or broken files read as empty."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (FileNotFoundError, IsADirectoryError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def load_config(path: str = None) -> dict:
    """Return the lint config merged over defaults.

    `specs` is passed through untouched; the plugin decides whether it is usable.
    """
    raw = _read_config_file(config_path(path))
    config = dict(_DEFAULTS)
    for key in _DEFAULTS:
        if key in raw:
            config[key] = raw[key]
    return config
