"""External toolchain orchestration.

Runs the fixed, flag-gated sequence of external commands against a freshly
scaffolded project.  Steps run one at a time; the first step that fails stops
the pipeline.  Nothing that already ran is undone.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

from goscaffold.config import Config
from goscaffold.scaffolder.planner import ScaffoldError
from goscaffold.utils import FAILED_EXIT_CODE, console, run_command

CommandRunner = Callable[..., Awaitable[tuple[int, str, str]]]


class ToolchainError(ScaffoldError):
    """Raised when an external toolchain step fails."""

    def __init__(self, step: str, code: int, command: str = "") -> None:
        self.step = step
        self.code = code
        self.command = command
        super().__init__(f"Toolchain step '{step}' failed (exit {code}): {command}")


@dataclass(frozen=True)
class ToolchainStep:
    """One external command in the build pipeline.

    ``argv`` may contain ``{module_path}``, filled in when the step runs.
    ``guard`` decides from the config whether the step runs; ``None`` means
    always.
    """

    name: str
    description: str
    argv: tuple[str, ...]
    guard: Optional[Callable[[Config], bool]] = None

    def enabled(self, config: Config) -> bool:
        return self.guard is None or bool(self.guard(config))

    def command(self, module_path: str) -> list[str]:
        return [arg.format(module_path=module_path) for arg in self.argv]


# go mod init must precede go mod tidy; the tailwind install must precede
# tailwindcss init.
STEPS: tuple[ToolchainStep, ...] = (
    ToolchainStep(
        "module-init", "running go mod init", ("go", "mod", "init", "{module_path}")
    ),
    ToolchainStep(
        "package-manager-init", "running pnpm init", ("pnpm", "init"),
        guard=lambda c: c.tailwind,
    ),
    ToolchainStep(
        "stylesheet-install", "installing tailwind", ("pnpm", "add", "-D", "tailwindcss@3"),
        guard=lambda c: c.tailwind,
    ),
    ToolchainStep(
        "stylesheet-init", "initializing tailwind", ("npx", "tailwindcss", "init"),
        guard=lambda c: c.tailwind,
    ),
    ToolchainStep(
        "live-reload-init", "running air init", ("air", "init"),
        guard=lambda c: c.air,
    ),
    ToolchainStep("dependency-tidy", "running go mod tidy", ("go", "mod", "tidy")),
    ToolchainStep("source-format", "running go fmt", ("go", "fmt", "./...")),
)


class ToolchainOrchestrator:
    """Runs the toolchain steps for one project.

    Args:
        config: Feature flags deciding which steps run.
        project_root: Working directory for every command.
        module_path: Go module path passed to ``go mod init``.
        runner: Coroutine used to execute commands; must accept
            ``(argv, cwd=...)`` and return ``(exit_code, stdout, stderr)``.
    """

    def __init__(
        self,
        config: Config,
        project_root: str | Path,
        module_path: str,
        runner: CommandRunner = run_command,
        steps: tuple[ToolchainStep, ...] = STEPS,
    ) -> None:
        self.config = config
        self.project_root = Path(project_root)
        self.module_path = module_path
        self.runner = runner
        self.steps = steps

    def planned_steps(self) -> list[ToolchainStep]:
        """Return the steps that will run for this config, in order."""
        return [step for step in self.steps if step.enabled(self.config)]

    async def run_step(self, step: ToolchainStep) -> None:
        """Run a single step, raising ``ToolchainError`` unless it exits 0."""
        argv = step.command(self.module_path)
        command = " ".join(argv)
        console.print(f"[cyan]{step.description}[/cyan]")
        try:
            code, _stdout, _stderr = await self.runner(argv, cwd=self.project_root)
        except OSError as exc:
            raise ToolchainError(step.name, FAILED_EXIT_CODE, command) from exc
        if code != 0:
            raise ToolchainError(step.name, code, command)

    async def run(self) -> list[str]:
        """Run every enabled step in order.

        Returns:
            Names of the steps that completed.

        Raises:
            ToolchainError: On the first failing step; later steps do not run.
        """
        completed: list[str] = []
        for step in self.planned_steps():
            await self.run_step(step)
            completed.append(step.name)
        return completed
