"""Shared pytest fixtures for the wppg test suite.

Provides reusable fixtures for:
- A scripted prompter that answers questions from a list
- Settings and renderers pointing at temporary directories
- The answer script of a complete default wizard run
- A published, frozen Options Store for module execute() tests
"""

from __future__ import annotations

import io
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from wppg.config import Settings
from wppg.options import OptionsStore
from wppg.prompts import Prompter
from wppg.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Scripted prompter
# ---------------------------------------------------------------------------


class ScriptedPrompter(Prompter):
    """Prompter that reads answers from lists instead of the terminal.

    An empty string answer stands for "press enter" and yields the default.
    Every question text is recorded in ``asked``.
    """

    def __init__(
        self,
        answers: Iterable[Any] = (),
        confirms: Iterable[bool] = (),
        max_attempts: int = 3,
    ) -> None:
        super().__init__(console=Console(file=io.StringIO()), max_attempts=max_attempts)
        self.answers = list(answers)
        self.confirms = list(confirms)
        self.asked: list[str] = []
        self.confirmed: list[str] = []

    def _read(
        self,
        question: str,
        default: str | None,
        choices: Sequence[str] | None,
        password: bool,
    ) -> str:
        self.asked.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected question: {question!r}")
        answer = self.answers.pop(0)
        if answer == "" and default is not None:
            answer = default
        if choices and answer not in choices:
            raise AssertionError(f"{answer!r} is not one of {list(choices)!r}")
        return answer

    def _read_confirm(self, question: str, default: bool) -> bool:
        self.confirmed.append(question)
        if not self.confirms:
            raise AssertionError(f"Unexpected confirmation: {question!r}")
        return self.confirms.pop(0)

    @property
    def output(self) -> str:
        return self.console.file.getvalue()


# ---------------------------------------------------------------------------
# Answer scripts
# ---------------------------------------------------------------------------

VALID_PASSWORD = "Aa1!aaaaaaaa"

PROJECT_INFO_ANSWERS: list[str] = ["My Blog"]

WORDPRESS_ANSWERS: list[str] = [
    "",                 # admin name -> adminwp
    "",                 # admin email -> adminwp@example.com
    VALID_PASSWORD,     # admin password
    "",                 # table prefix -> wppg_
]

DOCKER_ANSWERS: list[str] = [
    "",                 # web server -> apache
    "",                 # web port -> 80
    "",                 # PHP version -> 7.2
    "",                 # database -> mariadb
    "",                 # version -> 10.4
    "",                 # image -> mariadb:10.4
    "",                 # database port -> 3306
    "",                 # database name -> my_blog
    "",                 # root password -> wp
]


@pytest.fixture
def default_answers() -> list[str]:
    """Answers for every free-text question of a default wizard run."""
    return [*PROJECT_INFO_ANSWERS, *WORDPRESS_ANSWERS, *DOCKER_ANSWERS]


@pytest.fixture
def make_prompter():
    """Factory building a ``ScriptedPrompter``."""

    def _make(
        answers: Iterable[Any] = (),
        confirms: Iterable[bool] = (),
        max_attempts: int = 3,
    ) -> ScriptedPrompter:
        return ScriptedPrompter(answers, confirms, max_attempts)

    return _make


# ---------------------------------------------------------------------------
# Settings & collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings generating projects under a temporary directory."""
    return Settings(output_dir=tmp_path / "out")


@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer using the bundled templates."""
    return TemplateRenderer()


@pytest.fixture
def wizard_options() -> dict[str, dict[str, Any]]:
    """Fragments of a complete default run, as published by the modules."""
    return {
        "project_info": {
            "project_name": "My Blog",
            "project_slug": "my-blog",
        },
        "wordpress_configurator": {
            "wp_user_name": "adminwp",
            "wp_user_email": "adminwp@example.com",
            "wp_user_password": VALID_PASSWORD,
            "wp_db_prefix": "wppg_",
        },
        "docker_compose": {
            "webserver": "apache",
            "webserver_port": 80,
            "php_version": "7.2",
            "db": "mariadb",
            "db_version": "10.4",
            "db_service_name": "mariadb:10.4",
            "db_port": 3306,
            "db_name": "my_blog",
            "db_root_password": "wp",
            "phpmyadmin": True,
        },
    }


class _Slug:
    def __init__(self, slug: str) -> None:
        self.SLUG = slug


@pytest.fixture
def make_store():
    """Factory building a frozen ``OptionsStore`` from plain fragments."""

    def _make(fragments: dict[str, dict[str, Any]], freeze: bool = True) -> OptionsStore:
        store = OptionsStore()
        for slug, fragment in fragments.items():
            store.publish(_Slug(slug), fragment)
        if freeze:
            store.freeze()
        return store

    return _make
