"""Exception hierarchy shared by the wizard, the modules and the exporter."""

from __future__ import annotations


class WppgError(Exception):
    """Base class for every error the wizard reports to the user."""


class InputValidationError(WppgError):
    """An answer kept failing validation after the allowed number of attempts."""

    def __init__(self, question: str, message: str, attempts: int) -> None:
        self.question = question
        self.attempts = attempts
        super().__init__(
            f"Invalid answer to {question!r} after {attempts} attempt(s): {message}"
        )


class UserCancelledError(WppgError):
    """The user rejected the summary at the confirmation step."""

    def __init__(self, message: str = "The creation of the project has been cancelled.") -> None:
        super().__init__(message)


class UnsupportedFormatError(WppgError):
    """An export format is not part of the encoder registry."""

    def __init__(self, fmt: str, supported: list[str]) -> None:
        self.format = fmt
        self.supported = supported
        super().__init__(
            f"Unsupported format {fmt!r} (supported: {', '.join(supported)})"
        )


class MissingDependencyError(WppgError):
    """A module read an option that no earlier module produced.

    This is a programming error: the module list is ordered so that producers
    always run before consumers.
    """

    def __init__(self, slug: str, key: str | None = None) -> None:
        self.slug = slug
        self.key = key
        target = f"{slug}.{key}" if key else slug
        super().__init__(f"Missing option {target!r}; check the module order")


class TemplateRenderError(WppgError):
    """A Jinja2 template could not be loaded or rendered."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"Cannot render template {template!r}: {message}")
