"""Shared utility functions for goscaffold.

Provides blocking-style async command execution, exit-status mapping, and
Rich-based console reporting used by the generator, the toolchain and the CLI.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# Exit code reported for a process that has no representable status
# (still running, or terminated by a signal).
FAILED_EXIT_CODE = -1


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


def exit_code(returncode: int | None) -> int:
    """Map a subprocess return code to the pipeline's integer status.

    ``0`` stays ``0`` and ordinary non-zero codes are preserved.  ``None``
    and negative codes (POSIX signal terminations) map to ``-1``.
    """
    if returncode is None or returncode < 0:
        return FAILED_EXIT_CODE
    return returncode


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> tuple[int, str, str]:
    """Run a command and wait for it to finish.

    Args:
        cmd: Argument vector; the first element is the executable.
        cwd: Working directory for the child process.
        timeout: Optional wall-clock limit in seconds.  ``None`` (the default)
            waits indefinitely.

    Returns:
        A ``(exit_code, stdout, stderr)`` tuple where ``exit_code`` has been
        passed through :func:`exit_code`.

    Raises:
        OSError: If the executable cannot be spawned (e.g. not installed).
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (
            FAILED_EXIT_CODE,
            "",
            f"Command timed out after {timeout}s: {' '.join(cmd)}",
        )

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (exit_code(process.returncode), stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")
