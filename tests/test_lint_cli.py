"""Tests for content scanning, config loading and the frontmatter-lint command line."""

import json

import pytest

from config import DEFAULT_DUMP_FILE, load_config
from lint import main, run_lint
from services.pages import page_url, scan_pages

CONFIG_YML = """\
specs:
  title:
    type: string
    required: true
  layout:
    type: string
    required: true
    default: single
  date:
    type: string
"""


@pytest.fixture()
def content(tmp_path):
    """Temp content dir: valid, invalid, missing and broken frontmatter pages."""
    site = tmp_path / "site"
    (site / "guide").mkdir(parents=True)
    (site / "guide" / "index.md").write_text(
        "---\ntitle: Guide\nlayout: single\ndate: 2026-01-01\n---\nBody\n"
    )
    (site / "notes").mkdir()
    (site / "notes" / "draft.md").write_text("---\ntitle: Draft\nbogus: true\n---\nBody\n")
    (site / "plain.md").write_text("# No frontmatter\n")
    (site / "broken").mkdir()
    (site / "broken" / "index.md").write_text("---\ntitle: [unclosed\n---\nBody\n")
    (site / ".hidden").mkdir()
    (site / ".hidden" / "index.md").write_text("---\nbogus: 1\n---\n")
    config_file = tmp_path / "frontmatter.config.yml"
    config_file.write_text(CONFIG_YML)
    return site, config_file


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


def test_load_config_defaults_when_missing(tmp_path):
    config = load_config(str(tmp_path / "nope.yml"))
    assert config["specs"] is None
    assert config["dumpToFile"] is False
    assert config["dumpFile"] == DEFAULT_DUMP_FILE
    assert config["abortBuild"] is False


def test_load_config_reads_yaml(content):
    _site, config_file = content
    config = load_config(str(config_file))
    assert config["specs"]["title"] == {"type": "string", "required": True}


def test_load_config_reads_json(tmp_path):
    config_file = tmp_path / "lint.json"
    config_file.write_text(json.dumps({"specs": {"a": {"type": "number"}}, "abortBuild": True}))
    config = load_config(str(config_file))
    assert config["abortBuild"] is True
    assert config["specs"] == {"a": {"type": "number"}}


def test_load_config_from_env(content, monkeypatch):
    _site, config_file = content
    monkeypatch.setenv("FRONTMATTER_LINT_CONFIG", str(config_file))
    assert "title" in load_config()["specs"]


# ---------------------------------------------------------------------------
# pages
# ---------------------------------------------------------------------------


def test_page_url():
    assert page_url("index.md") == "/"
    assert page_url("guide/intro/index.md") == "/guide/intro/"
    assert page_url("notes/a.md") == "/notes/a.md"


def test_scan_pages_skips_plain_and_hidden(content):
    site, _config = content
    pages = list(scan_pages(str(site)))
    assert [p["path"] for p in pages] == ["/guide/", "/notes/draft.md"]
    assert pages[0]["frontmatter"]["date"] == "2026-01-01"


def test_scan_pages_skips_broken_yaml(content, caplog):
    site, _config = content
    paths = [p["path"] for p in scan_pages(str(site))]
    assert "/broken/" not in paths
    assert "broken" in caplog.text


def test_broken_yaml_page_gets_no_false_errors(content, capsys):
    site, config_file = content
    assert main(["-c", str(config_file), "-d", str(site)]) == 0
    out = capsys.readouterr().out
    assert "/broken/" not in out
    assert "/guide/" not in out


def test_main_with_array_typed_field(tmp_path, capsys):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "index.md").write_text("---\ntags:\n  - x\n---\n")
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "index.md").write_text("---\ntags: x\n---\n")
    config_file = tmp_path / "lint.yml"
    config_file.write_text("specs:\n  tags:\n    type: array\n")
    assert main(["-c", str(config_file), "-d", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "/a/" not in out
    assert "INVALID_TYPE on field tags" in out
    assert "Expected: Array" in out


def test_main_with_unknown_type_does_not_crash(tmp_path, caplog):
    config_file = tmp_path / "lint.yml"
    config_file.write_text("specs:\n  title:\n    type: strnig\n")
    assert main(["-c", str(config_file), "-d", str(tmp_path)]) == 0
    assert "Unknown field type" in caplog.text


# ---------------------------------------------------------------------------
# run_lint / main
# ---------------------------------------------------------------------------


def test_run_lint_without_specs_checks_nothing(tmp_path):
    assert run_lint(load_config(str(tmp_path / "nope.yml"))) == 0


def test_main_reports_and_dumps(content, tmp_path, capsys):
    site, config_file = content
    dump = tmp_path / "errors.json"
    assert main(["-c", str(config_file), "-d", str(site), "--dump", str(dump)]) == 0
    out = capsys.readouterr().out
    assert "/notes/draft.md" in out
    assert "Checked 2 page(s)." in out
    dumped = json.loads(dump.read_text())
    assert dumped == {
        "/notes/draft.md": [
            {
                "error": "MISSING_KEY",
                "key": "layout",
                "expected": "layout",
                "fix": {"layout": "single"},
            },
            {"error": "INVALID_KEY", "key": "bogus", "fix": True},
        ]
    }


def test_main_abort_exits_non_zero(content, capsys):
    site, config_file = content
    assert main(["-c", str(config_file), "-d", str(site), "--abort"]) == 1
    assert "do not have a valid frontmatter" in capsys.readouterr().err


def test_dump_feeds_fix_cli(content, tmp_path):
    """A lint dump is directly usable by the fix command."""
    from fix import main as fix_main

    site, config_file = content
    dump = tmp_path / "errors.json"
    main(["-c", str(config_file), "-d", str(site), "--dump", str(dump)])
    assert fix_main(["--dir", str(site), "--errors", str(dump), "--yes"]) == 0
    assert (site / "notes" / "draft.md").read_text() == (
        "---\ntitle: Draft\nlayout: single\n---\nBody\n"
    )
