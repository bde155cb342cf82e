"""Unit tests for interactive prompts (goscaffold.prompts).

Tests cover:
- yn_to_bool accepts exactly "y" / "n"
- ask_app_name re-prompts on empty input
- ask_yes_no re-prompts on unrecognised tokens (case-sensitive)
- collect_config prompt order and skipping of known values
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from goscaffold.config import Config
from goscaffold.prompts import (
    APP_NAME_PROMPT,
    FLAG_PROMPTS,
    ask_app_name,
    ask_yes_no,
    collect_config,
    yn_to_bool,
)


pytestmark = pytest.mark.unit


class ScriptedInput:
    """Returns queued answers and records the prompts it was shown."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {prompt!r}")
        return self.answers.pop(0)


class TestYnToBool:
    def test_y(self):
        assert yn_to_bool("y") is True

    def test_n(self):
        assert yn_to_bool("n") is False

    @pytest.mark.parametrize("answer", ["Y", "N", "yes", "no", "", " ", "1"])
    def test_anything_else(self, answer):
        assert yn_to_bool(answer) is None


class TestAskAppName:
    def test_accepts_first_non_empty(self):
        ask = ScriptedInput("blog")
        assert ask_app_name(ask) == "blog"
        assert ask.prompts == [APP_NAME_PROMPT]

    def test_reprompts_on_empty_line(self):
        ask = ScriptedInput("", "blog")
        assert ask_app_name(ask) == "blog"
        assert len(ask.prompts) == 2

    def test_reprompts_on_whitespace(self):
        ask = ScriptedInput("   ", "\t", "  shop  ")
        assert ask_app_name(ask) == "shop"
        assert len(ask.prompts) == 3


class TestAskYesNo:
    def test_yes(self):
        assert ask_yes_no("q? ", ScriptedInput("y")) is True

    def test_no(self):
        assert ask_yes_no("q? ", ScriptedInput("n")) is False

    def test_reprompts_until_recognised(self):
        ask = ScriptedInput("Y", "yes", "", "n")
        assert ask_yes_no("q? ", ask) is False
        assert ask.prompts == ["q? "] * 4

    def test_surrounding_whitespace_is_trimmed(self):
        assert ask_yes_no("q? ", ScriptedInput(" y \n")) is True


class TestCollectConfig:
    def test_prompt_order(self):
        ask = ScriptedInput("blog", "y", "n", "y", "n", "y")
        config = collect_config(ask)
        assert config == Config(
            app_name="blog", sessions=True, turso=False, htmx=True, tailwind=False, air=True
        )
        assert ask.prompts == [
            APP_NAME_PROMPT,
            FLAG_PROMPTS["sessions"],
            FLAG_PROMPTS["turso"],
            FLAG_PROMPTS["htmx"],
            FLAG_PROMPTS["tailwind"],
            FLAG_PROMPTS["air"],
        ]

    def test_empty_name_is_never_accepted(self):
        ask = ScriptedInput("", "", "blog", "n", "n", "n", "n", "n")
        config = collect_config(ask)
        assert config.app_name == "blog"
        assert ask.prompts[:3] == [APP_NAME_PROMPT] * 3

    def test_known_values_are_not_prompted(self):
        ask = ScriptedInput("y")
        config = collect_config(
            ask,
            known={"app_name": "shop", "sessions": False, "turso": True, "htmx": False, "tailwind": True},
        )
        assert ask.prompts == [FLAG_PROMPTS["air"]]
        assert config.app_name == "shop"
        assert config.turso is True
        assert config.air is True

    def test_everything_known_asks_nothing(self):
        known = {"app_name": "api", **{flag: False for flag in Config.flag_names()}}
        config = collect_config(ScriptedInput(), known=known)
        assert config == Config(app_name="api")

    def test_defaults_to_console_input(self):
        with patch("goscaffold.prompts.console.input", side_effect=["blog", "n", "n", "n", "n", "n"]) as mock_input:
            config = collect_config()
        assert config.app_name == "blog"
        assert mock_input.call_count == 6
        # [y/n] must reach the terminal literally, not as Rich markup.
        assert "\\[y/n]" in mock_input.call_args_list[1].args[0]
