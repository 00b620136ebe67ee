"""Project identity: name and directory slug."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wppg.modules.base import Module, SummaryEntry
from wppg.options import OptionsStore
from wppg.utils import ensure_dir, slugify
from wppg.validators import ValidationError, validate_not_empty

DEFAULT_PROJECT_NAME = "WPPG WordPress Project"

# Created under the project root, in order.
PROJECT_DIRECTORIES: tuple[str, ...] = (
    "html",
    "development",
    "development/docker/php",
    "development/docker/php/scripts",
)


def _validate_project_name(answer: Any) -> str:
    name = validate_not_empty(answer)
    if not slugify(name):
        raise ValidationError("The name of the project must be a valid name.")
    return name


class ProjectInfo(Module):
    """Asks the project name and creates the project skeleton."""

    SLUG = "project_info"
    NAME = "Project Info"

    def run(self, options: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
        name = self.prompter.ask(
            "Please enter the name of the project",
            default=DEFAULT_PROJECT_NAME,
            validator=_validate_project_name,
        )
        self.options = {
            "project_name": name,
            "project_slug": slugify(name),
        }
        return {self.SLUG: self.options}

    def summarize(self) -> list[SummaryEntry]:
        return [
            SummaryEntry("Project name", self.options["project_name"]),
            SummaryEntry("Project slug", self.options["project_slug"]),
        ]

    def execute(self, options: OptionsStore) -> None:
        root = self.project_root(options)
        ensure_dir(root)
        for directory in PROJECT_DIRECTORIES:
            ensure_dir(root / directory)
