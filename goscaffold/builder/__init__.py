"""goscaffold builder -- module path lookup and external toolchain steps.

Resolves the Go module path for a new project and drives the ordered
``go``/``pnpm``/``npx``/``air`` commands that finish it off.
"""

from .module_path import git_username, resolve_module_path
from .toolchain import STEPS, ToolchainError, ToolchainOrchestrator, ToolchainStep

__all__ = [
    "STEPS",
    "ToolchainError",
    "ToolchainOrchestrator",
    "ToolchainStep",
    "git_username",
    "resolve_module_path",
]
