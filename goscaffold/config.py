"""goscaffold configuration.

A single frozen Pydantic v2 model holds the app name and the opt-in feature
flags.  It is the only source of conditional logic for the planner, the
template resolver and the toolchain.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_TRUTHY = {"1", "true", "yes", "y", "on"}

# Environment variable prefix used by ``Config.from_env``.
ENV_PREFIX = "GOSCAFFOLD_"


class Config(BaseModel):
    """Feature-flag configuration for one generated project.

    ``app_name`` is not checked for emptiness here; the prompt loop and the
    CLI are responsible for never handing an empty name to the generator.
    """

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(default="", description="Project directory and module name")
    sessions: bool = Field(default=False, description="Cookie sessions via gorilla/sessions")
    turso: bool = Field(default=False, description="Turso/libSQL database access")
    htmx: bool = Field(default=False, description="htmx script and fragment renderer")
    tailwind: bool = Field(default=False, description="Tailwind CSS toolchain")
    air: bool = Field(default=False, description="air live-reload config")

    @classmethod
    def flag_names(cls) -> tuple[str, ...]:
        """Return the boolean flag field names in prompt order."""
        return tuple(name for name, info in cls.model_fields.items() if info.annotation is bool)

    @classmethod
    def from_env(cls) -> dict[str, Any]:
        """Collect configuration values from ``GOSCAFFOLD_*`` variables.

        Only variables that are actually set are returned, so the result can
        be layered under CLI flags and over interactive prompts.

        Recognised variables (all optional):
            GOSCAFFOLD_APP_NAME, GOSCAFFOLD_SESSIONS, GOSCAFFOLD_TURSO,
            GOSCAFFOLD_HTMX, GOSCAFFOLD_TAILWIND, GOSCAFFOLD_AIR.
        """
        values: dict[str, Any] = {}
        app_name = os.environ.get(f"{ENV_PREFIX}APP_NAME", "").strip()
        if app_name:
            values["app_name"] = app_name
        for flag in cls.flag_names():
            raw = os.environ.get(f"{ENV_PREFIX}{flag.upper()}")
            if raw is not None and raw.strip():
                values[flag] = raw.strip().lower() in _TRUTHY
        return values

    def enabled_flags(self) -> list[str]:
        """Return the names of the flags that are switched on."""
        return [flag for flag in self.flag_names() if getattr(self, flag)]
