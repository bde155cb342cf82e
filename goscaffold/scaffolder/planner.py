"""Scaffold planning: which directories and files a project needs.

The planner is pure.  Given a ``Config`` and the working directory it
returns a ``ScaffoldPlan`` listing the directories to create (in creation
order) and, for every file, the template key the resolver should render.
Nothing here touches the filesystem.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from goscaffold.config import Config


class ScaffoldError(Exception):
    """Raised when a project cannot be scaffolded from the given inputs."""


# ---------------------------------------------------------------------------
# Template keys
# ---------------------------------------------------------------------------

# Keys without a ``.j2`` suffix are assembled in Python rather than loaded
# from the template directory (see ``templates.render_files``).
ROOT_MAIN = "main.go.j2"
MAKEFILE = "Makefile"
GITIGNORE = ".gitignore"
DOTENV = "dotenv.j2"
CMD_MAIN = "cmd/main.go"
ROOT_ROUTE = "internal/routes/root.go.j2"
CTX = "internal/ctx/ctx.go.j2"
ENV = "internal/env/env.go.j2"
DB = "internal/db/db.go.j2"
RENDER = "internal/render/render.go.j2"
INDEX_HTML = "public/index.html.j2"
INDEX_CSS = "css/index.css.j2"
EMPTY = "empty"


@dataclass(frozen=True)
class Identifiers:
    """Go identifiers derived from the app name."""

    ctx_name: str
    ctx_type: str
    cmd_package: str


@dataclass(frozen=True)
class ScaffoldPlan:
    """Directories and file templates for one project.

    Attributes:
        root: Absolute project root (``<cwd>/<app_name>``).
        directories: Absolute directory paths in creation order.  Every
            entry's parent is either pre-existing or earlier in the tuple.
        files: Mapping of absolute file path -> template key.
        identifiers: Derived Go identifiers.
    """

    root: Path
    directories: tuple[Path, ...]
    files: dict[Path, str]
    identifiers: Identifiers


# ---------------------------------------------------------------------------
# Identifier derivation
# ---------------------------------------------------------------------------


def derive_identifiers(app_name: str) -> Identifiers:
    """Derive the context and command-package identifiers from *app_name*.

    ``"blog"`` yields ``bctx`` / ``BCtx``.  The first character must be a
    single ASCII letter.

    Raises:
        ScaffoldError: If the name is empty or starts with anything other
            than an ASCII letter.
    """
    first = app_name[:1]
    if not (first.isascii() and first.isalpha()):
        raise ScaffoldError(
            f"App name must start with an ASCII letter, got {app_name!r}"
        )
    cmd_package = re.sub(r"[^a-z0-9_]", "", app_name.lower()) or "app"
    return Identifiers(
        ctx_name=f"{first.lower()}ctx",
        ctx_type=f"{first.upper()}Ctx",
        cmd_package=cmd_package,
    )


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def plan_directories(config: Config, root: Path, ctx_name: str) -> tuple[Path, ...]:
    """Return the ordered directory list for *config*."""
    dirs = [
        root,
        root / "cmd",
        root / "cmd" / config.app_name,
        root / "internal",
        root / "internal" / "routes",
        root / "internal" / ctx_name,
        root / "public",
    ]
    if config.sessions:
        dirs.append(root / "internal" / "env")
    if config.turso:
        dirs.append(root / "testdb")
        dirs.append(root / "internal" / "db")
    if config.htmx:
        dirs.append(root / "internal" / "render")
    if config.tailwind:
        dirs.append(root / "css")
    return tuple(dirs)


def plan_files(config: Config, root: Path, ctx_name: str) -> dict[Path, str]:
    """Return the file -> template key mapping for *config*."""
    files: dict[Path, str] = {
        root / "main.go": ROOT_MAIN,
        root / "Makefile": MAKEFILE,
        root / ".gitignore": GITIGNORE,
        root / "cmd" / config.app_name / "main.go": CMD_MAIN,
        root / "internal" / "routes" / "root.go": ROOT_ROUTE,
        root / "internal" / ctx_name / f"{ctx_name}.go": CTX,
        root / "public" / "index.html": INDEX_HTML,
    }
    if config.sessions:
        files[root / ".env"] = DOTENV
        files[root / "internal" / "env" / "env.go"] = ENV
    if config.turso:
        files[root / "internal" / "db" / "db.go"] = DB
        files[root / "testdb" / "testdb.db"] = EMPTY
    if config.htmx:
        files[root / "internal" / "render" / "render.go"] = RENDER
    if config.tailwind:
        files[root / "css" / "index.css"] = INDEX_CSS
    return files


def plan_scaffold(config: Config, cwd: Path) -> ScaffoldPlan:
    """Plan the scaffold for *config* under the working directory *cwd*."""
    identifiers = derive_identifiers(config.app_name)
    root = Path(cwd) / config.app_name
    return ScaffoldPlan(
        root=root,
        directories=plan_directories(config, root, identifiers.ctx_name),
        files=plan_files(config, root, identifiers.ctx_name),
        identifiers=identifiers,
    )
