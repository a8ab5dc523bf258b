"""Main scaffolding orchestrator.

Takes a resolved ``ModuleRequest`` and produces the model, migration,
factory, controller, views and routes for one entity, in that order.  Which
stages run depends on the generation type:

* ``model-migration`` -- model, migration, factory
* ``api``             -- the above plus API controller and API routes
* ``full``            -- the above with a web or API controller, optional
  views, and matching routes

Every file goes through one ``ArtifactWriter`` so the overwrite policy is the
same for all stages.  A failing stage raises ``StageError``; files written by
earlier stages are left in place.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from jinja2 import TemplateError
from rich.markup import escape

from module_generator.config import DEFAULT_STUB_DIR, GenerationType, GeneratorConfig
from module_generator.utils import create_progress, print_success, print_warning

from .controller_gen import ControllerGenerator
from .factory_gen import FactoryGenerator
from .layout import ModuleLayout
from .migration_gen import (
    MigrationClock,
    MigrationGenerator,
    creates_only_table,
    migration_glob,
)
from .model_gen import ModelGenerator
from .models import (
    GeneratedArtifact,
    GenerationReport,
    ModuleRequest,
    NamingSet,
    WriteOutcome,
)
from .naming import derive_names
from .routes_gen import RouteRegistrar
from .templates import MissingTemplateError, TemplateRenderer
from .view_gen import ViewGenerator
from .writer import ArtifactWriter


STAGE_PREPARE = "prepare"
STAGE_MODEL = "model"
STAGE_MIGRATION = "migration"
STAGE_FACTORY = "factory"
STAGE_CONTROLLER = "controller"
STAGE_VIEWS = "views"
STAGE_ROUTES = "routes"

StageResult = list[tuple[str, WriteOutcome]]


class StageError(Exception):
    """A generation stage failed; names the entity and the stage."""

    def __init__(self, entity: str, stage: str, cause: Exception) -> None:
        self.entity = entity
        self.stage = stage
        self.cause = cause
        super().__init__(f"Generating {stage} for {entity} failed: {cause}")


def plan_stages(request: ModuleRequest) -> list[str]:
    """Stages a request runs, in execution order (preparation excluded)."""
    stages = [STAGE_MODEL, STAGE_MIGRATION, STAGE_FACTORY]
    if request.type is GenerationType.MODEL_MIGRATION:
        return stages

    stages.append(STAGE_CONTROLLER)
    if request.type is GenerationType.FULL and wants_views(request):
        stages.append(STAGE_VIEWS)
    stages.append(STAGE_ROUTES)
    return stages


def wants_views(request: ModuleRequest) -> bool:
    """Views are produced for web controllers, or for API ones when asked for explicitly."""
    return request.generate_views and (request.views_explicit or not request.is_api)


class ModuleGenerator:
    """Runs every generation stage for one entity.

    Quick usage::

        config = GeneratorConfig.from_env()
        request = ModuleRequest.resolve("task", config, fields=parse_fields("title:string"))
        report = ModuleGenerator(config).generate(request)
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        renderer: TemplateRenderer | None = None,
        clock: MigrationClock | None = None,
        *,
        quiet: bool = False,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.renderer = renderer
        self.clock = clock
        self.quiet = quiet

    # -- Public API --------------------------------------------------------

    def generate(self, request: ModuleRequest) -> GenerationReport:
        """Generate all artifacts selected by *request*.

        Returns:
            The report of every file written, skipped or left unchanged.

        Raises:
            StageError: If a mandatory template is missing, a template fails
                to render, or the file system refuses an operation.
        """
        names = derive_names(request.name)
        renderer = self.renderer or TemplateRenderer(override_dir=self._override_dir(request))
        writer = ArtifactWriter(request.base_path, force=request.force)
        run = _Run(request, names, renderer, writer, self.clock)

        stages = plan_stages(request)
        report = GenerationReport(entity=names.entity)

        with create_progress(disable=self.quiet) as progress:
            task = progress.add_task(f"Preparing {escape(names.entity)}", total=len(stages) + 1)
            self._run_stage(report, names.entity, STAGE_PREPARE, run.prepare)
            progress.advance(task)

            for stage in stages:
                progress.update(task, description=f"Generating {escape(names.entity)} {stage}")
                self._run_stage(report, names.entity, stage, run.handler(stage))
                progress.advance(task)

        report.notices.extend(run.notices)
        if not self.quiet:
            for notice in report.notices:
                print_warning(escape(notice))
            print_success(f"{escape(names.entity)} module created successfully!")
        return report

    # -- Internal ----------------------------------------------------------

    def _override_dir(self, request: ModuleRequest) -> Path:
        if self.config.stub_path is not None:
            return self.config.stub_path
        return request.base_path / DEFAULT_STUB_DIR

    @staticmethod
    def _run_stage(
        report: GenerationReport,
        entity: str,
        stage: str,
        action: Callable[[], StageResult],
    ) -> None:
        try:
            results = action()
        except (MissingTemplateError, TemplateError, OSError) as exc:
            raise StageError(entity, stage, exc) from exc
        for path, outcome in results:
            report.add(stage, path, outcome)


class _Run:
    """Per-request state shared by the stage handlers."""

    def __init__(
        self,
        request: ModuleRequest,
        names: NamingSet,
        renderer: TemplateRenderer,
        writer: ArtifactWriter,
        clock: MigrationClock | None,
    ) -> None:
        self.request = request
        self.names = names
        self.flags = request.flags
        self.layout = ModuleLayout(names, self.flags)
        self.writer = writer
        self.notices: list[str] = []

        self.model_gen = ModelGenerator(renderer)
        self.migration_gen = MigrationGenerator(renderer, clock)
        self.factory_gen = FactoryGenerator(renderer)
        self.controller_gen = ControllerGenerator(renderer)
        self.view_gen = ViewGenerator(renderer)
        self.registrar = RouteRegistrar(renderer, writer)

    def handler(self, stage: str) -> Callable[[], StageResult]:
        return {
            STAGE_MODEL: self.model,
            STAGE_MIGRATION: self.migration,
            STAGE_FACTORY: self.factory,
            STAGE_CONTROLLER: self.controller,
            STAGE_VIEWS: self.views,
            STAGE_ROUTES: self.routes,
        }[stage]

    def _write(self, artifact: GeneratedArtifact) -> StageResult:
        return [(artifact.relative_path, self.writer.write(artifact))]

    # -- Stages ------------------------------------------------------------

    def prepare(self) -> StageResult:
        if self.flags.module_style:
            for directory in self.layout.module_directories:
                self.writer.make_directory(directory)
        return []

    def model(self) -> StageResult:
        req = self.request
        return self._write(self.model_gen.emit(self.names, req.fields, req.selects, self.flags))

    def migration(self) -> StageResult:
        req = self.request
        artifact = self.migration_gen.emit(
            self.names.table, req.fields, req.selects, self.flags, names=self.names
        )
        existing = self._own_migration()
        if existing is not None:
            artifact = GeneratedArtifact(relative_path=existing, content=artifact.content)
        return self._write(artifact)

    def _own_migration(self) -> str | None:
        """An earlier migration for this table that creates nothing else."""
        pattern = migration_glob(self.names.table)
        for path in self.writer.glob(self.layout.migrations_dir, pattern):
            if creates_only_table(self.writer.read(path), self.names.table):
                return path
        return None

    def factory(self) -> StageResult:
        req = self.request
        return self._write(self.factory_gen.emit(self.names, req.fields, req.selects, self.flags))

    def controller(self) -> StageResult:
        req = self.request
        artifact = self.controller_gen.emit(
            self.names, req.selects, req.is_api, self.flags, fields=req.fields
        )
        return self._write(artifact)

    def views(self) -> StageResult:
        req = self.request
        results: StageResult = []
        for artifact in self.view_gen.emit(self.names, req.fields, req.selects, self.flags):
            results.extend(self._write(artifact))
        for partial in self.view_gen.missing_partials:
            self.notices.append(f"View partial '{partial}' not found")
        for view in self.view_gen.skipped:
            self.notices.append(f"View '{view}' skipped, a template it needs was not found")
        return results

    def routes(self) -> StageResult:
        results = self.registrar.register(self.names, self.flags, self.request.is_api)
        self.notices.extend(self.registrar.notices)
        return results
