"""wppg configuration.

Typed settings for the wizard. All settings use a Pydantic v2 model so they
are validated at construction time and can be built from environment
variables without boiler-plate. Command-line flags override these values.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from wppg import __version__

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class Settings(BaseModel):
    """Global wizard settings.

    Instances are typically created once by the CLI entry point and then
    passed to the ``Pipeline``, which shares them with the exporter and the
    modules.
    """

    generator: str = Field(default="wppg", description="Generator id written to exports")
    version: str = Field(default=__version__, description="Export document format version")
    template_dir: Path = Field(default=_DEFAULT_TEMPLATE_DIR)
    max_attempts: int = Field(
        default=3, ge=1, description="Attempts allowed for a question that has a validator"
    )
    export_formats: str = Field(default="yaml", description="Comma-separated export formats")
    export_basename: str = Field(
        default="wppg", description="Export path used when --cex is given without a value"
    )
    output_dir: Path = Field(
        default=Path("."), description="Directory in which the project folder is created"
    )

    def project_root(self, project_slug: str) -> Path:
        """Return the directory a project with *project_slug* is generated into."""
        return self.output_dir / project_slug

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            WPPG_TEMPLATE_DIR, WPPG_MAX_ATTEMPTS, WPPG_EXPORT_FORMATS,
            WPPG_OUTPUT_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("WPPG_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["WPPG_TEMPLATE_DIR"])
        if os.environ.get("WPPG_MAX_ATTEMPTS"):
            kwargs["max_attempts"] = int(os.environ["WPPG_MAX_ATTEMPTS"])
        if os.environ.get("WPPG_EXPORT_FORMATS"):
            kwargs["export_formats"] = os.environ["WPPG_EXPORT_FORMATS"]
        if os.environ.get("WPPG_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["WPPG_OUTPUT_DIR"])
        return cls(**kwargs)
