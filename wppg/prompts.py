"""Interactive question helpers.

The ``Prompter`` is the only object that talks to the user during the
collection phase.  It wraps ``rich.prompt`` and adds bounded re-prompting for
questions that declare a validator: an answer rejected by the validator is
asked again until ``max_attempts`` is reached, after which
``InputValidationError`` aborts the wizard.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from wppg.errors import InputValidationError
from wppg.utils import console as default_console
from wppg.validators import ValidationError

Validator = Callable[[Any], Any]


class Prompter:
    """Asks questions on a Rich console.

    Attributes:
        console: Console used for questions, headings and error messages.
        max_attempts: Attempts allowed for a question with a validator.
    """

    def __init__(self, console: Console | None = None, max_attempts: int = 3) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.console = console or default_console
        self.max_attempts = max_attempts

    # -- Questions ---------------------------------------------------------

    def ask(
        self,
        question: str,
        default: str | None = None,
        choices: Sequence[str] | None = None,
        validator: Validator | None = None,
        password: bool = False,
    ) -> Any:
        """Ask a free-text or multiple-choice question.

        Args:
            question: Text shown to the user.
            default: Answer used when the user just presses enter.
            choices: Allowed answers; anything else is asked again.
            validator: Callable returning the accepted value or raising
                ``ValidationError``.
            password: Hide the typed characters.

        Returns:
            The answer, or the validator's return value when one is given.

        Raises:
            InputValidationError: The validator rejected ``max_attempts``
                answers in a row.
        """
        attempt = 0
        while True:
            attempt += 1
            answer = self._read(question, default, choices, password)
            if validator is None:
                return answer
            try:
                return validator(answer)
            except ValidationError as exc:
                if attempt >= self.max_attempts:
                    raise InputValidationError(question, str(exc), attempt) from exc
                self.console.print(f"[prompt.invalid]{escape(str(exc))}")

    def confirm(self, question: str, default: bool = True) -> bool:
        """Ask a yes/no question."""
        return self._read_confirm(question, default)

    # -- Output ------------------------------------------------------------

    def section(self, title: str) -> None:
        """Print a module heading before its questions."""
        self.console.print(f"\n[bold green]{title}[/bold green]")

    def note(self, text: str) -> None:
        """Print a secondary comment line."""
        self.console.print(f"[yellow]{text}[/yellow]")

    # -- Input primitives --------------------------------------------------

    def _read(
        self,
        question: str,
        default: str | None,
        choices: Sequence[str] | None,
        password: bool,
    ) -> str:
        kwargs: dict[str, Any] = {
            "console": self.console,
            "password": password,
        }
        if choices:
            kwargs["choices"] = list(choices)
        if default is not None:
            kwargs["default"] = default
        return Prompt.ask(question, **kwargs)

    def _read_confirm(self, question: str, default: bool) -> bool:
        return Confirm.ask(question, console=self.console, default=default)
