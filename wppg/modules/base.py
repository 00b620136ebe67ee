"""Base class every wizard module derives from.

A module encapsulates one concern of the generated project (identity, stack,
VCS metadata, editor settings...) behind four operations:

``run``
    Ask the module's questions and return ``{SLUG: fragment}``.
``summarize``
    Project the collected fragment into label/value rows for the
    confirmation screen.
``execute``
    Generate the module's artefacts from the complete, confirmed options.
``export``
    Return the fragment written to the exported configuration file.

Modules never touch each other directly; they only read fragments that
earlier modules published in the :class:`~wppg.options.OptionsStore`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

from wppg.options import OptionsStore
from wppg.prompts import Prompter
from wppg.templates import TemplateRenderer


@dataclass(frozen=True)
class SummaryEntry:
    """One label/value row of the confirmation listing."""

    label: str
    value: str


@dataclass(frozen=True)
class SummarySeparator:
    """Section break placed before every module block except the first."""

    title: str


class Module(ABC):
    """Abstract wizard module.

    Subclasses set ``SLUG`` and ``NAME`` and override whatever operations
    they need; the defaults collect nothing, summarize nothing, generate
    nothing and export the collected fragment unchanged.

    Attributes:
        prompter: Question helper shared by every module.
        renderer: Template renderer shared by every module.
        output_dir: Directory in which the project folder is created.
        options: The fragment this module collected in :meth:`run`.
    """

    SLUG: ClassVar[str]
    NAME: ClassVar[str]

    def __init__(
        self,
        prompter: Prompter,
        renderer: TemplateRenderer,
        output_dir: str | Path = ".",
    ) -> None:
        self.prompter = prompter
        self.renderer = renderer
        self.output_dir = Path(output_dir)
        self.options: dict[str, Any] = {}

    @property
    def name(self) -> str:
        """Human-readable label used for headings and the summary."""
        return self.NAME

    def run(self, options: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
        """Ask the module's questions.

        Args:
            options: Fragments published by the modules that ran before.

        Returns:
            A single-entry mapping ``{SLUG: fragment}``.
        """
        return {self.SLUG: self.options}

    @abstractmethod
    def summarize(self) -> list[SummaryEntry]:
        """Return the rows shown on the confirmation screen."""

    def execute(self, options: OptionsStore) -> None:
        """Generate the module's artefacts from the confirmed *options*."""

    def export(self) -> dict[str, Any]:
        """Return the fragment written to the exported configuration."""
        return deepcopy(self.options)

    # -- Helpers for subclasses --------------------------------------------

    def project_root(self, options: OptionsStore) -> Path:
        """Directory of the generated project, from the project identity."""
        from wppg.modules.project_info import ProjectInfo

        return self.output_dir / options.require(ProjectInfo.SLUG, "project_slug")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(slug={self.SLUG!r})"
