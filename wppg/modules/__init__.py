"""Wizard modules.

``DEFAULT_MODULES`` is the module sequence of the ``new`` command.  Its order
is both the question order and the generation order, so every module comes
after the modules whose options it reads: the project identity first, the
WordPress settings before the Docker stack (the wp-cli entrypoint needs
them), and the file generators last.
"""

from wppg.modules.base import Module, SummaryEntry, SummarySeparator
from wppg.modules.docker_compose import DockerCompose
from wppg.modules.editor_config import EditorConfig
from wppg.modules.git import Git
from wppg.modules.project_info import ProjectInfo
from wppg.modules.wordpress import WordPressConfigurator

DEFAULT_MODULES: tuple[type[Module], ...] = (
    ProjectInfo,
    WordPressConfigurator,
    DockerCompose,
    Git,
    EditorConfig,
)

__all__ = [
    "DEFAULT_MODULES",
    "DockerCompose",
    "EditorConfig",
    "Git",
    "Module",
    "ProjectInfo",
    "SummaryEntry",
    "SummarySeparator",
    "WordPressConfigurator",
]
