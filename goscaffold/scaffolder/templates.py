"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``goscaffold/scaffolder/templates/`` directory, the closed catalog of command
entrypoint variants, and the builders for content that is assembled in Python
(Makefile, .gitignore) rather than loaded from a template file.

Every placeholder is always present in the render context.  Placeholders that
do not apply to the active flags are rendered as empty strings, so template
bodies must stay valid when a line collapses to nothing (``go fmt`` tidies the
resulting blank lines).
"""

from __future__ import annotations

import secrets
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from goscaffold.config import Config

from .planner import CMD_MAIN, EMPTY, GITIGNORE, MAKEFILE, Identifiers, ScaffoldPlan


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Command entrypoint catalog
# ---------------------------------------------------------------------------

# Keyed by (turso, sessions, tailwind).  One pre-authored body per reachable
# combination; each additional flag on this axis doubles the catalog.
ENTRYPOINT_VARIANTS: dict[tuple[bool, bool, bool], str] = {
    (False, False, False): "cmd/main.go.j2",
    (False, False, True): "cmd/main_css.go.j2",
    (False, True, False): "cmd/main_sessions.go.j2",
    (False, True, True): "cmd/main_sessions_css.go.j2",
    (True, False, False): "cmd/main_db.go.j2",
    (True, False, True): "cmd/main_db_css.go.j2",
    (True, True, False): "cmd/main_db_sessions.go.j2",
    (True, True, True): "cmd/main_db_sessions_css.go.j2",
}


def entrypoint_key(config: Config) -> tuple[bool, bool, bool]:
    """Normalize *config* to the entrypoint catalog's flag tuple."""
    return (bool(config.turso), bool(config.sessions), bool(config.tailwind))


def select_entrypoint_template(config: Config) -> str:
    """Return the ``cmd/<app>/main.go`` template matching *config*."""
    return ENTRYPOINT_VARIANTS[entrypoint_key(config)]


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Undefined variables raise instead of rendering blank, so a template that
    references a token missing from the context fails before anything is
    written to disk.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"internal/db/db.go.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Render context
# ---------------------------------------------------------------------------

HTMX_SCRIPT = '\t\t<script src="https://unpkg.com/htmx.org@1.9.12"></script>'
STYLESHEET_LINK = '\t\t<link rel="stylesheet" href="/css/output.css">'
DATABASE_ENV = "TURSO_DATABASE_URL=file:testdb/testdb.db\nTURSO_AUTH_TOKEN="


def build_context(
    config: Config,
    module_path: str,
    identifiers: Identifiers,
    session_key: str | None = None,
) -> dict[str, str]:
    """Build the template context for *config*.

    Every key is always present; values that do not apply to the active
    flags are empty strings.
    """
    imports: list[str] = []
    if config.turso:
        imports.append('\t"database/sql"')
    if config.sessions:
        imports.append('\t"github.com/gorilla/sessions"')

    if config.sessions and session_key is None:
        session_key = secrets.token_hex(32)

    return {
        "app_name": config.app_name,
        "module_path": module_path,
        "cmd_package": identifiers.cmd_package,
        "ctx_name": identifiers.ctx_name,
        "ctx_type": identifiers.ctx_type,
        "imports": "\n".join(imports),
        "session_store_field": "\tStore *sessions.CookieStore" if config.sessions else "",
        "db_field": "\tDB *sql.DB" if config.turso else "",
        "stylesheet_link": STYLESHEET_LINK if config.tailwind else "",
        "htmx_script": HTMX_SCRIPT if config.htmx else "",
        "session_key": session_key if config.sessions else "",
        "database_env": DATABASE_ENV if config.turso else "",
    }


# ---------------------------------------------------------------------------
# Derived content
# ---------------------------------------------------------------------------


def _block(*lines: str) -> str:
    """Join *lines* into a block terminated by a blank line."""
    return "\n".join(lines) + "\n\n"


def gitignore_content(config: Config) -> str:
    """Assemble ``.gitignore``: base, database, stylesheet, live-reload."""
    content = _block("bin/", ".env")
    if config.turso:
        content += _block("testdb/*.db")
    if config.tailwind:
        content += _block("node_modules/", "public/css/output.css")
    if config.air:
        content += _block("tmp/")
    return content


def makefile_content(config: Config) -> str:
    """Assemble the Makefile: base, database, stylesheet, live-reload."""
    name = config.app_name
    content = _block(
        "build:",
        f"\tgo build -o bin/{name} .",
        "",
        "run: build",
        f"\t./bin/{name}",
        "",
        "test:",
        "\tgo test ./...",
    )
    if config.turso:
        content += _block(
            "testdb:",
            "\tturso dev --db-file testdb/testdb.db",
        )
    if config.tailwind:
        content += _block(
            "css:",
            "\tnpx tailwindcss -i ./css/index.css -o ./public/css/output.css --minify",
            "",
            "css-watch:",
            "\tnpx tailwindcss -i ./css/index.css -o ./public/css/output.css --watch",
        )
    if config.air:
        content += _block(
            "dev:",
            "\tair",
        )
    return content


# ---------------------------------------------------------------------------
# FileContentMap
# ---------------------------------------------------------------------------


def render_files(
    plan: ScaffoldPlan,
    config: Config,
    context: dict[str, str],
    renderer: TemplateRenderer | None = None,
) -> dict[Path, str]:
    """Resolve every planned file to its final text.

    Args:
        plan: Output of ``plan_scaffold``.
        config: The configuration the plan was built from.
        context: Output of ``build_context``.
        renderer: Renderer to load template files with.

    Returns:
        Mapping of absolute file path -> fully substituted content.
    """
    renderer = renderer or TemplateRenderer()
    contents: dict[Path, str] = {}
    for path, key in plan.files.items():
        if key == MAKEFILE:
            contents[path] = makefile_content(config)
        elif key == GITIGNORE:
            contents[path] = gitignore_content(config)
        elif key == EMPTY:
            contents[path] = ""
        elif key == CMD_MAIN:
            contents[path] = renderer.render(select_entrypoint_template(config), context)
        else:
            contents[path] = renderer.render(key, context)
    return contents
