"""Main scaffolding generator.

Takes a ``Config`` and the resolved module path, plans the project tree,
resolves every file's content up front, and then materializes the plan on
disk.  The plan and the content map are computed once in the constructor and
never change afterwards.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from goscaffold.config import Config
from goscaffold.utils import console

from .planner import ScaffoldPlan, plan_scaffold
from .templates import TemplateRenderer, build_context, render_files


class ProjectGenerator:
    """Scaffold generator for a single project.

    Attributes:
        config: The feature-flag configuration.
        module_path: Go module path substituted into generated sources.
        plan: Directory order and file -> template key mapping.
        files: Read-only mapping of absolute path -> final file content.
    """

    def __init__(
        self,
        config: Config,
        cwd: str | Path,
        module_path: str,
        renderer: TemplateRenderer | None = None,
        session_key: str | None = None,
    ) -> None:
        self.config = config
        self.module_path = module_path
        self.renderer = renderer or TemplateRenderer()
        self.plan: ScaffoldPlan = plan_scaffold(config, Path(cwd))
        self.context = build_context(
            config, module_path, self.plan.identifiers, session_key=session_key
        )
        self.files: Mapping[Path, str] = MappingProxyType(
            render_files(self.plan, config, self.context, self.renderer)
        )

    @property
    def project_root(self) -> Path:
        return self.plan.root

    @property
    def directories(self) -> tuple[Path, ...]:
        return self.plan.directories

    # -- Materialization ---------------------------------------------------

    async def materialize(self) -> Path:
        """Create the planned directories, then write the planned files.

        Directories are created without ``parents=True``: each one relies on
        its parent appearing earlier in the plan.  The first ``OSError``
        (existing path, permission denied, full disk) propagates unchanged
        and whatever was already created stays on disk.

        Returns:
            The project root.
        """
        await self._create_directories()
        await self._write_files()
        return self.project_root

    async def _create_directories(self) -> None:
        for directory in self.plan.directories:
            await asyncio.to_thread(directory.mkdir)
        console.print(
            f"[green]created[/green] {len(self.plan.directories)} directories "
            f"under [bold]{self.project_root}[/bold]"
        )

    async def _write_files(self) -> None:
        for path, content in self.files.items():
            await asyncio.to_thread(_write_file, path, content)
        console.print(f"[green]wrote[/green] {len(self.files)} files")


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: write *content* to *path*."""
    path.write_text(content, encoding="utf-8")
