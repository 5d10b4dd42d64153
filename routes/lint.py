"""Lint endpoints: validate pages, scan the content dir, read the report and dump."""

from flask import Blueprint, jsonify, request

from config import load_config
from services.errors import ErrorStore, FrontmatterNotFound
from services.pages import read_page_frontmatter, scan_pages
from services.plugin import create_plugin
from services.report import format_report

bp = Blueprint("lint", __name__)

# Errors collected by this server since the last scan/reset.
store = ErrorStore()


def _plugin():
    """Plugin bound to the server store, or None when no usable specs are configured."""
    plugin = create_plugin(load_config(), store=store)
    return plugin if plugin.enabled else None


@bp.route("/api/errors", methods=["GET"])
def get_errors():
    """Current errors by page path."""
    return jsonify(store.snapshot())


@bp.route("/api/errors", methods=["DELETE"])
def reset_errors():
    store.reset()
    return jsonify({"ok": True})


@bp.route("/api/errors/report", methods=["GET"])
def get_report():
    """Console-style report text."""
    errors = store.snapshot()
    return jsonify({"report": format_report(errors), "count": store.error_count})


@bp.route("/api/errors/dump", methods=["GET"])
def get_dump():
    """Errors in dump form (fix proposals attached when enabled), ready for frontmatter-fix."""
    plugin = _plugin()
    if plugin is None:
        return jsonify({"error": "No frontmatter specs configured"}), 400
    return jsonify(plugin.dump())


@bp.route("/api/validate", methods=["POST"])
def validate():
    """Validate one page given as {path, frontmatter} or {path, content}."""
    data = request.get_json(silent=True) or {}
    path = data.get("path")
    if not isinstance(path, str) or not path:
        return jsonify({"error": "path must be a non-empty string"}), 400

    if "frontmatter" in data:
        frontmatter = data["frontmatter"]
        if not isinstance(frontmatter, dict):
            return jsonify({"error": "frontmatter must be an object"}), 400
    elif isinstance(data.get("content"), str):
        try:
            frontmatter = read_page_frontmatter(data["content"])
        except FrontmatterNotFound as e:
            return jsonify({"error": str(e)}), 400
    else:
        return jsonify({"error": "frontmatter or content is required"}), 400

    plugin = _plugin()
    if plugin is None:
        return jsonify({"error": "No frontmatter specs configured"}), 400
    errors = plugin.extend_page_data({"path": path, "frontmatter": frontmatter})
    return jsonify({"path": path, "errors": errors})


@bp.route("/api/scan", methods=["POST"])
def scan():
    """Reset and re-validate every page under contentDir."""
    config = load_config()
    plugin = create_plugin(config, store=store)
    if not plugin.enabled:
        return jsonify({"error": "No frontmatter specs configured"}), 400

    store.reset()
    pages = 0
    for page in scan_pages(config["contentDir"], config["docFilename"]):
        plugin.extend_page_data(page)
        pages += 1
    return jsonify({"pages": pages, "errors": store.snapshot()})
