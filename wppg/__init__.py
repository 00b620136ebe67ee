"""wppg -- WordPress Project Generator.

Interactive wizard that asks a series of questions about a WordPress project,
lets the user confirm the resulting plan and then either scaffolds the project
on disk (Docker Compose stack, vhost, entrypoint script, Git and EditorConfig
files) or exports the plan to YAML / JSON / XML configuration files.

Quick usage::

    from wppg import Pipeline, Settings

    pipeline = Pipeline(Settings(), export_path="wppg", export_formats="yaml,json")
    result = pipeline.run()
"""

__version__ = "0.1.0"

from wppg.config import Settings
from wppg.exporter import ConfigExporter
from wppg.options import OptionsStore
from wppg.pipeline import Pipeline, PipelineError, PipelineResult, Stage

__all__ = [
    "__version__",
    "ConfigExporter",
    "OptionsStore",
    "Pipeline",
    "PipelineError",
    "PipelineResult",
    "Settings",
    "Stage",
]
