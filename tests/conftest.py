"""Shared pytest fixtures for the goscaffold test suite.

Provides reusable fixtures for:
- Configs covering every feature-flag combination
- Stub username resolvers (no real git calls)
- A recording command runner standing in for external processes
"""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Any

import pytest

from goscaffold.config import Config


FLAGS = ("sessions", "turso", "htmx", "tailwind", "air")


def all_configs(app_name: str = "blog") -> list[Config]:
    """Every one of the 32 flag combinations for *app_name*."""
    return [
        Config(app_name=app_name, **dict(zip(FLAGS, combo)))
        for combo in itertools.product((False, True), repeat=len(FLAGS))
    ]


def config_id(config: Config) -> str:
    return "+".join(config.enabled_flags()) or "bare"


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def bare_config() -> Config:
    """No optional features."""
    return Config(app_name="blog")


@pytest.fixture
def full_config() -> Config:
    """Every optional feature switched on."""
    return Config(app_name="blog", sessions=True, turso=True, htmx=True, tailwind=True, air=True)


@pytest.fixture(params=all_configs(), ids=config_id)
def any_config(request: pytest.FixtureRequest) -> Config:
    """Parametrised over all 32 flag combinations."""
    return request.param


# ---------------------------------------------------------------------------
# External collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def no_username():
    """Username resolver that never finds a git user."""
    return lambda: None


@pytest.fixture
def octocat():
    """Username resolver that always answers ``octocat``."""
    return lambda: "octocat"


class RecordingRunner:
    """Async stand-in for ``run_command`` that records every call.

    ``codes`` maps the executable plus first argument (e.g. ``"go mod"``) or
    the bare executable to the exit code to return; unmatched commands
    succeed.
    """

    def __init__(self, codes: dict[str, int] | None = None) -> None:
        self.codes = codes or {}
        self.calls: list[tuple[list[str], Any]] = []

    async def __call__(self, argv: list[str], cwd: Any = None, **kwargs: Any) -> tuple[int, str, str]:
        self.calls.append((list(argv), cwd))
        key = " ".join(argv[:3])
        for candidate in (key, " ".join(argv[:2]), argv[0]):
            if candidate in self.codes:
                return self.codes[candidate], "", ""
        return 0, "", ""

    @property
    def commands(self) -> list[str]:
        return [" ".join(argv) for argv, _ in self.calls]


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def project_cwd(tmp_path: Path) -> Path:
    """Working directory the project gets created in (auto-cleanup)."""
    cwd = tmp_path / "workspace"
    cwd.mkdir()
    return cwd


@pytest.fixture
def make_runner():
    """Factory for ``RecordingRunner`` instances with scripted exit codes."""
    return RecordingRunner
