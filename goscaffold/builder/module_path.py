"""Go module path resolution.

The module path is ``github.com/<username>/<app_name>`` when a git username
can be found, and the bare app name otherwise.  The lookup is best-effort: a
missing ``git`` binary, a failing command or an absent key only changes the
generated identifier, never the outcome of the build.  Values that cannot be
a module path element, such as a display name with spaces, count as absent.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Callable, Optional

# Checked in order; the first key holding a valid path element wins.
USERNAME_KEYS = ("github.user", "user.name")

# Characters Go accepts in a module path element.
_PATH_ELEMENT = re.compile(r"^[A-Za-z0-9._~-]+$")

UsernameResolver = Callable[[], Optional[str]]


def is_path_element(value: str | None) -> bool:
    """Return True if *value* can appear as one element of a Go module path."""
    return bool(value) and _PATH_ELEMENT.match(value) is not None and value not in (".", "..")


def parse_git_config(output: str) -> dict[str, str]:
    """Parse ``git config --list`` output into a ``{key: value}`` mapping.

    Later entries override earlier ones, matching git's own precedence
    (system, then global, then local).
    """
    entries: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            entries[key.strip().lower()] = value.strip()
    return entries


def git_username(cwd: str | Path | None = None) -> str | None:
    """Return the configured git username, or ``None`` if unavailable."""
    try:
        result = subprocess.run(
            ["git", "config", "--list"],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None

    entries = parse_git_config(result.stdout)
    for key in USERNAME_KEYS:
        value = entries.get(key)
        if is_path_element(value):
            return value
    return None


def resolve_module_path(app_name: str, resolver: UsernameResolver = git_username) -> str:
    """Build the Go module path for *app_name* using *resolver*."""
    username = resolver()
    if is_path_element(username):
        return f"github.com/{username}/{app_name}"
    return app_name
