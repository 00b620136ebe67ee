"""Git metadata files for the generated project."""

from __future__ import annotations

from wppg.modules.base import Module, SummaryEntry
from wppg.modules.project_info import ProjectInfo
from wppg.options import OptionsStore

# Template -> file name inside the project root
GIT_FILES: dict[str, str] = {
    "git/gitignore.j2": ".gitignore",
    "git/gitattributes.j2": ".gitattributes",
}


class Git(Module):
    """Writes ``.gitignore`` and ``.gitattributes``; asks nothing."""

    SLUG = "git"
    NAME = "Git"

    def summarize(self) -> list[SummaryEntry]:
        return [
            SummaryEntry("Git ignore", "./.gitignore"),
            SummaryEntry("Git attributes", "./.gitattributes"),
        ]

    def execute(self, options: OptionsStore) -> None:
        root = self.project_root(options)
        context = {
            "project_slug": options.require(ProjectInfo.SLUG, "project_slug"),
        }
        for template_name, filename in GIT_FILES.items():
            self.renderer.render_to_file(template_name, root / filename, context)
