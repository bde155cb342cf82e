"""Interactive configuration prompts.

Each question is asked until a recognised answer is given: the app name must
be non-empty after trimming, and yes/no questions accept exactly ``y`` or
``n``.  The input function is injectable so tests can feed scripted answers.
"""

from __future__ import annotations

from typing import Any, Callable

from rich.markup import escape

from goscaffold.config import Config
from goscaffold.utils import console

Ask = Callable[[str], str]

APP_NAME_PROMPT = "enter the app name: "

FLAG_PROMPTS: dict[str, str] = {
    "sessions": "would you like to use gorilla sessions? [y/n]: ",
    "turso": "would you like to use turso? [y/n]: ",
    "htmx": "would you like to use htmx? [y/n]: ",
    "tailwind": "would you like to use tailwind? [y/n]: ",
    "air": "would you like to use air? [y/n]: ",
}


def console_ask(prompt: str) -> str:
    """Read one line from the Rich console, showing *prompt* verbatim."""
    return console.input(escape(prompt))


def yn_to_bool(answer: str) -> bool | None:
    """Map ``"y"``/``"n"`` to a bool; anything else is ``None``."""
    if answer == "y":
        return True
    if answer == "n":
        return False
    return None


def ask_app_name(ask: Ask) -> str:
    """Prompt until a non-empty app name is entered."""
    while True:
        name = ask(APP_NAME_PROMPT).strip()
        if name:
            return name


def ask_yes_no(prompt: str, ask: Ask) -> bool:
    """Prompt until the answer is exactly ``y`` or ``n``."""
    while True:
        value = yn_to_bool(ask(prompt).strip())
        if value is not None:
            return value


def collect_config(ask: Ask | None = None, known: dict[str, Any] | None = None) -> Config:
    """Build a ``Config`` by prompting for every value not in *known*.

    Args:
        ask: Function that shows a prompt and returns the entered line.
            Defaults to :func:`console_ask`.
        known: Values already supplied (CLI flags, environment); these are
            not asked for.
    """
    ask = ask or console_ask
    values: dict[str, Any] = dict(known or {})
    if not values.get("app_name"):
        values["app_name"] = ask_app_name(ask)
    for flag in Config.flag_names():
        if values.get(flag) is None:
            values[flag] = ask_yes_no(FLAG_PROMPTS[flag], ask)
    return Config(**values)
