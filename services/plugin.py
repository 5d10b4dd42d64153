"""Build-pipeline plugin: validates each page and reports at end of build.

The embedding pipeline calls the hooks:

    plugin = create_plugin(config)
    plugin.extend_page_data({"path": "/guide/", "frontmatter": {...}})  # per page
    plugin.updated()  # after an incremental rebuild
    plugin.ready()    # once per full build
"""

import logging

from config import DEFAULT_DUMP_FILE
from services.errors import BuildAborted, ErrorStore
from services.report import dump_errors, print_report, propose_fixes
from services.schema import load_schema
from services.validator import validate_page

log = logging.getLogger(__name__)

PLUGIN_NAME = "validate-frontmatter"


class FrontmatterPlugin:
    def __init__(self, schema: dict | None, config: dict = None, store: ErrorStore = None):
        config = config or {}
        self.name = PLUGIN_NAME
        self.schema = schema
        self.store = store if store is not None else ErrorStore()
        self.dump_to_file = bool(config.get("dumpToFile", False))
        self.dump_file = config.get("dumpFile") or DEFAULT_DUMP_FILE
        self.abort_build = bool(config.get("abortBuild", False))
        self.propose = bool(config.get("proposeFixes", True))

    @property
    def enabled(self) -> bool:
        return self.schema is not None

    def extend_page_data(self, page: dict) -> list[dict]:
        """Validate one page's frontmatter; errors go into the store under its path."""
        if not self.enabled:
            return []
        path = page.get("path")
        errors = validate_page(path, page.get("frontmatter") or {}, self.schema, self.store)
        if errors:
            log.debug("%s: %d frontmatter error(s)", path, len(errors))
        return errors

    def updated(self) -> None:
        """Incremental rebuild: report pending errors, keep the store."""
        if self.enabled and self.store:
            print_report(self.store.snapshot())

    def dump(self) -> dict[str, list[dict]]:
        """Errors in dump form, with fix proposals when enabled."""
        errors = self.store.snapshot()
        if self.propose:
            errors = propose_fixes(errors, self.schema)
        return errors

    def ready(self) -> None:
        """End of build: report, optionally dump and abort, then reset the store."""
        if not self.enabled:
            return
        try:
            if not self.store:
                log.info("%s: all pages have a valid frontmatter", self.name)
                return
            count = len(self.store)
            print_report(self.store.snapshot())
            dumped = None
            if self.dump_to_file:
                dumped = dump_errors(self.dump(), self.dump_file)
            if self.abort_build:
                log.error("%s: aborting build, %d page(s) with errors", self.name, count)
                raise BuildAborted(count, dumped)
        finally:
            self.store.reset()


def create_plugin(config: dict, store: ErrorStore = None) -> FrontmatterPlugin:
    """Build a plugin from lint config. Missing or non-mapping specs yield a no-op plugin."""
    specs = config.get("specs")
    if not specs:
        log.warning("plugin-%s: No frontmatter specs found.", PLUGIN_NAME)
        return FrontmatterPlugin(None, config, store)
    if not isinstance(specs, dict):
        log.warning(
            "plugin-%s: Invalid frontmatter specs type: expected mapping, got %s",
            PLUGIN_NAME,
            type(specs).__name__,
        )
        return FrontmatterPlugin(None, config, store)
    try:
        schema = load_schema(specs)
    except ValueError as e:
        log.error("plugin-%s: Invalid frontmatter specs: %s", PLUGIN_NAME, e)
        return FrontmatterPlugin(None, config, store)
    return FrontmatterPlugin(schema, config, store)
