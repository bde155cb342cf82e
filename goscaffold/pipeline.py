"""goscaffold build pipeline and CLI.

Ties the pieces together:

1. Resolve the working directory and the Go module path.
2. Plan the project tree and resolve every file's content.
3. Materialize directories, then files.
4. Run the external toolchain (go mod init ... go fmt).

Usage::

    goscaffold
    goscaffold --name blog --sessions --no-turso --htmx --tailwind --no-air
    python -m goscaffold.pipeline --name blog --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Any

from goscaffold.builder.module_path import UsernameResolver, git_username, resolve_module_path
from goscaffold.builder.toolchain import CommandRunner, ToolchainOrchestrator
from goscaffold.config import Config
from goscaffold.prompts import collect_config
from goscaffold.scaffolder.generator import ProjectGenerator
from goscaffold.scaffolder.planner import ScaffoldError
from goscaffold.utils import console, print_error, print_summary_table, run_command


def current_directory(cwd: str | Path | None = None) -> Path:
    """Return the directory the project is created in.

    Raises:
        ScaffoldError: If the current directory no longer exists or its path
            cannot be represented as UTF-8 text.
    """
    try:
        path = Path(cwd) if cwd is not None else Path(os.getcwd())
    except FileNotFoundError as exc:
        raise ScaffoldError("current directory is unavailable") from exc
    try:
        str(path).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ScaffoldError(f"current directory is not a valid UTF-8 path: {path!r}") from exc
    return path


class AppBuilder:
    """Builds one project from a ``Config``.

    Everything derived from the config (module path, plan, file contents) is
    computed here, before anything is written.
    """

    def __init__(
        self,
        config: Config,
        cwd: str | Path | None = None,
        username_resolver: UsernameResolver | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config
        self.cwd = current_directory(cwd)
        self.module_path = resolve_module_path(config.app_name, username_resolver or git_username)
        self.generator = ProjectGenerator(config, self.cwd, self.module_path)
        self.toolchain = ToolchainOrchestrator(
            config, self.generator.project_root, self.module_path, runner=runner or run_command
        )

    @property
    def project_root(self) -> Path:
        return self.generator.project_root

    def summary(self) -> dict[str, str]:
        """Key/value overview of what will be built."""
        return {
            "App name": self.config.app_name,
            "Module path": self.module_path,
            "Project root": str(self.project_root),
            "Features": ", ".join(self.config.enabled_flags()) or "none",
            "Toolchain": ", ".join(step.name for step in self.toolchain.planned_steps()),
        }

    async def build(self) -> Path:
        """Materialize the scaffold and run the toolchain.

        Raises:
            OSError: If a directory or file cannot be created.
            ToolchainError: If an external command fails.
        """
        await self.generator.materialize()
        await self.toolchain.run()
        return self.project_root


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goscaffold",
        description="Scaffold a Go backend service (echo, optional sessions/turso/htmx/tailwind/air)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  goscaffold\n"
            "  goscaffold --name blog --sessions --tailwind\n"
            "  goscaffold --name blog --no-turso --dry-run\n"
        ),
    )
    parser.add_argument("--name", "-n", default=None, help="App name (prompted if omitted)")
    for flag in Config.flag_names():
        parser.add_argument(
            f"--{flag}",
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Enable {flag} (prompted if omitted)",
        )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the planned directories and files without creating anything",
    )
    return parser


def known_values(args: argparse.Namespace) -> dict[str, Any]:
    """Merge environment defaults with explicit CLI arguments."""
    values = Config.from_env()
    if args.name and args.name.strip():
        values["app_name"] = args.name.strip()
    for flag in Config.flag_names():
        value = getattr(args, flag)
        if value is not None:
            values[flag] = value
    return values


def print_plan(builder: AppBuilder) -> None:
    """Print the planned directories and files relative to the cwd."""
    console.print("[bold]Directories[/bold]")
    for directory in builder.generator.directories:
        console.print(f"  {directory.relative_to(builder.cwd)}/")
    console.print("[bold]Files[/bold]")
    for path in sorted(builder.generator.files):
        console.print(f"  {path.relative_to(builder.cwd)}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``goscaffold``."""
    args = build_parser().parse_args(argv)

    try:
        config = collect_config(known=known_values(args))
    except (EOFError, KeyboardInterrupt):
        console.print()
        print_error("Aborted.")
        sys.exit(1)

    try:
        builder = AppBuilder(config)
        print_summary_table(builder.summary(), title="goscaffold")
        if args.dry_run:
            print_plan(builder)
            return
        asyncio.run(builder.build())
    except Exception as exc:
        print_error(repr(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
