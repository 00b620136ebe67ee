"""wppg Pipeline Orchestrator.

Drives the wizard modules through their lifecycle:

COLLECTING            -- ``run()`` every module in order, publishing each
                         fragment to the Options Store as soon as it exists.
SUMMARIZING           -- ``summarize()`` every module into one listing.
AWAITING_CONFIRMATION -- show the listing and ask a single yes/no question.
EXPORTING / EXECUTING -- either write the configuration files (``export()``)
                         or generate the project (``execute()``), never both.

Usage::

    python -m wppg new
    python -m wppg new --cex=my-project --cexf=yaml,json
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from rich.panel import Panel

from wppg.config import Settings
from wppg.errors import UserCancelledError, WppgError
from wppg.exporter import ConfigExporter
from wppg.modules import DEFAULT_MODULES, Module, SummaryEntry, SummarySeparator
from wppg.modules.project_info import ProjectInfo
from wppg.options import OptionsStore
from wppg.prompts import Prompter
from wppg.templates import TemplateRenderer
from wppg.utils import console, print_stage_header, print_success, print_summary

# ---------------------------------------------------------------------------
# Stages & exceptions
# ---------------------------------------------------------------------------


class Stage(str, Enum):
    INIT = "init"
    COLLECTING = "collecting"
    SUMMARIZING = "summarizing"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    EXPORTING = "exporting"
    EXECUTING = "executing"
    DONE = "done"
    CANCELLED = "cancelled"


class PipelineError(WppgError):
    """Raised when a pipeline stage fails irrecoverably."""

    def __init__(self, stage: Stage, message: str) -> None:
        self.stage = stage
        super().__init__(f"{stage.value.replace('_', ' ').capitalize()}: {message}")


@dataclass
class PipelineResult:
    """Outcome of a completed :meth:`Pipeline.run`.

    Attributes:
        stage: Final stage (``DONE`` for a completed run).
        options: The confirmed options, as plain dicts.
        success: ``False`` when at least one export file could not be written.
        exported_files: Files written by the exporter.
        project_root: Directory of the generated project, when executing.
    """

    stage: Stage
    options: dict[str, dict[str, Any]]
    success: bool = True
    exported_files: list[Path] = field(default_factory=list)
    project_root: Path | None = None


ModuleSpec = type[Module] | Module


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Sequences the wizard modules and enforces the confirmation gate.

    The terminal branch is chosen at construction: with an ``export_path``
    the confirmed plan is exported, otherwise the project is generated.
    Export formats are resolved here, so an unsupported format fails before
    any question is asked.

    Attributes:
        settings: Wizard settings.
        modules: Module instances, in collection and execution order.
        options: The Options Store shared by every stage.
        stage: Current stage.
        exporter: Config exporter, or ``None`` when generating the project.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        modules: Sequence[ModuleSpec] | None = None,
        prompter: Prompter | None = None,
        renderer: TemplateRenderer | None = None,
        export_path: str | Path | None = None,
        export_formats: str | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.prompter = prompter or Prompter(max_attempts=self.settings.max_attempts)
        self.renderer = renderer or TemplateRenderer(self.settings.template_dir)

        self.export_path = Path(export_path) if export_path is not None else None
        self.exporter: ConfigExporter | None = None
        if self.export_path is not None:
            self.exporter = ConfigExporter(export_formats or self.settings.export_formats)

        self.modules = self._instantiate(DEFAULT_MODULES if modules is None else modules)
        self.options = OptionsStore()
        self.stage = Stage.INIT

    def _instantiate(self, specs: Iterable[ModuleSpec]) -> list[Module]:
        modules: list[Module] = []
        seen: set[str] = set()
        for spec in specs:
            module = spec if isinstance(spec, Module) else spec(
                self.prompter, self.renderer, self.settings.output_dir
            )
            if module.SLUG in seen:
                raise PipelineError(Stage.INIT, f"Duplicate module slug {module.SLUG!r}")
            seen.add(module.SLUG)
            modules.append(module)
        return modules

    @property
    def exporting(self) -> bool:
        return self.exporter is not None

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def run(self) -> PipelineResult:
        """Run every stage and return the outcome.

        Raises:
            UserCancelledError: The user rejected the summary.
            PipelineError: A stage failed; the original exception is chained.
            WppgError: Validation, rendering or dependency errors, unchanged.
        """
        console.print(
            Panel(
                "Wizard in action... Let's start with the [bold]WordPress[/bold] project!\n"
                "[dim]Control-C cancels the creation of the project.[/dim]",
                title=f"[bold]{self.settings.generator} {self.settings.version}[/bold]",
                border_style="bright_cyan",
            )
        )

        try:
            self.collect()
            listing = self.summarize()
            self.confirm(listing)
            if self.exporting:
                result = self.export()
            else:
                result = self.execute()
        except WppgError:
            raise
        except Exception as exc:
            raise PipelineError(self.stage, str(exc) or type(exc).__name__) from exc

        self.stage = Stage.DONE
        return result

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def collect(self) -> OptionsStore:
        """Ask every module's questions and publish the answers in order."""
        self._enter(Stage.COLLECTING, expected=Stage.INIT)
        print_stage_header("collecting", "Project questions")

        for module in self.modules:
            self.prompter.section(module.name)
            returned = module.run(self.options)
            if set(returned) != {module.SLUG}:
                raise PipelineError(
                    self.stage,
                    f"{module.name} returned {sorted(returned)!r} instead of {module.SLUG!r}",
                )
            self.options.publish(module, returned[module.SLUG])

        self.options.freeze()
        return self.options

    def summarize(self) -> list[SummaryEntry | SummarySeparator]:
        """Build the flat confirmation listing.

        A separator goes between two module blocks, never before the first.
        """
        self._enter(Stage.SUMMARIZING, expected=Stage.COLLECTING)
        listing: list[SummaryEntry | SummarySeparator] = []
        for index, module in enumerate(self.modules):
            if index:
                listing.append(SummarySeparator(module.name))
            listing.extend(module.summarize())
        return listing

    def confirm(self, listing: Sequence[SummaryEntry | SummarySeparator]) -> None:
        """Show the listing and ask for confirmation.

        Raises:
            UserCancelledError: The user answered no.
        """
        self._enter(Stage.AWAITING_CONFIRMATION, expected=Stage.SUMMARIZING)

        rows: list[tuple[str, str] | str] = []
        if self.modules:
            rows.append(self.modules[0].name)
        for item in listing:
            if isinstance(item, SummarySeparator):
                rows.append(item.title)
            else:
                rows.append((item.label, item.value))
        print_summary(rows, title="Please confirm before proceeding")

        if not self.prompter.confirm("Would you like to proceed?", default=True):
            self.stage = Stage.CANCELLED
            raise UserCancelledError()

    def execute(self) -> PipelineResult:
        """Generate the project: ``execute()`` every module in order."""
        self._enter(Stage.EXECUTING, expected=Stage.AWAITING_CONFIRMATION)
        print_stage_header("executing", "Generating the project")

        for module in self.modules:
            try:
                module.execute(self.options)
            except WppgError:
                raise
            except OSError as exc:
                raise PipelineError(self.stage, f"{module.name}: {exc}") from exc
            console.print(f"  [green]+[/green] {module.name}")

        root = self._project_root()
        if root is not None:
            print_success(f"Project generated in {root}")
        return PipelineResult(
            stage=Stage.DONE,
            options=self.options.as_dict(),
            project_root=root,
        )

    def export(self) -> PipelineResult:
        """Write the export document with the configured exporter."""
        self._enter(Stage.EXPORTING, expected=Stage.AWAITING_CONFIRMATION)
        assert self.exporter is not None and self.export_path is not None
        print_stage_header("exporting", "Exporting the configuration")

        document = self.build_export_document()
        success = self.exporter.export(document, self.export_path)
        return PipelineResult(
            stage=Stage.DONE,
            options=self.options.as_dict(),
            success=success,
            exported_files=list(self.exporter.written),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def build_export_document(self) -> dict[str, Any]:
        """Assemble metadata plus every non-empty module export."""
        document: dict[str, Any] = {
            "generator": self.settings.generator,
            "version": self.settings.version,
            "creation": datetime.now().astimezone().isoformat(timespec="seconds"),
        }
        for module in self.modules:
            data = module.export()
            if not data:
                continue
            document[module.SLUG] = data
        return document

    def _enter(self, stage: Stage, expected: Stage) -> None:
        if self.stage is not expected:
            raise PipelineError(
                stage, f"cannot start from stage {self.stage.value!r}"
            )
        self.stage = stage

    def _project_root(self) -> Path | None:
        if ProjectInfo.SLUG not in self.options:
            return None
        return self.settings.project_root(self.options[ProjectInfo.SLUG]["project_slug"])
