"""EditorConfig file for the generated project."""

from __future__ import annotations

from wppg.modules.base import Module, SummaryEntry
from wppg.options import OptionsStore


class EditorConfig(Module):
    """Writes ``.editorconfig``; asks nothing."""

    SLUG = "editor_config"
    NAME = "Editor Config"

    def summarize(self) -> list[SummaryEntry]:
        return [SummaryEntry("Editor Config", "./.editorconfig")]

    def execute(self, options: OptionsStore) -> None:
        self.renderer.render_to_file(
            "editorconfig/editorconfig.j2",
            self.project_root(options) / ".editorconfig",
        )
