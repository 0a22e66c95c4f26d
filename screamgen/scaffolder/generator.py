"""Main scaffolding orchestrator.

Takes a ``ProjectSpecification`` (or raw specification mapping) and generates
a complete Express project following the domain-first layout: a shared
kernel, one three-layer subtree per domain, configuration, and optional jest
and container artifacts.

A run is a linear sequence of stages::

    PLANNED -> STRUCTURE_CREATED -> BASE_FILES_GENERATED -> DOMAINS_GENERATED
            -> CONFIG_GENERATED -> [CONTAINER_ARTIFACTS_GENERATED] -> DONE

Everything is rendered up front by ``build_plan`` (which never touches the
filesystem); ``generate`` then replays the plan one awaited operation at a
time.  The first failing operation aborts the run and its exception reaches
the caller unchanged.
"""

from __future__ import annotations

import logging
import time
import warnings
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Protocol

from screamgen.config import GeneratorSettings

from .config_gen import ConfigGenerator
from .controller_gen import ControllerGenerator
from .docker_gen import ContainerArtifactGenerator
from .docs_gen import DocumentationGenerator
from .entity_gen import EntityGenerator
from .env_gen import EnvironmentTemplateGenerator
from .errors import ProjectExistsError, TemplateResolutionWarning
from .filesystem import FilesystemCapability, LocalFilesystem
from .jest_gen import DomainTestGenerator, JestConfigGenerator
from .manifest_gen import PackageManifestGenerator
from .models import (
    Artifact,
    GenerationPlan,
    GenerationReport,
    GenerationStage,
    PlanStep,
    ProjectSpecification,
    validate_specification,
)
from .naming import DomainSpecification, derive
from .planner import PROJECT_ROOT, DirectoryPlanner
from .repository_gen import RepositoryImplementationGenerator, RepositoryPortGenerator
from .routes_gen import RouteTableGenerator
from .server_gen import ServerEntryPointGenerator
from .shared_gen import SharedKernelGenerator
from .templates import TemplateRenderer
from .usecase_gen import UseCaseGenerator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Generator interfaces
# ---------------------------------------------------------------------------


class ProjectArtifactGenerator(Protocol):
    producer: str

    def generate(self, spec: ProjectSpecification) -> list[Artifact]:
        ...


class DomainArtifactGenerator(Protocol):
    producer: str

    def generate(
        self, spec: ProjectSpecification, domain: DomainSpecification
    ) -> list[Artifact]:
        ...


def domain_generators(
    renderer: TemplateRenderer, settings: GeneratorSettings
) -> list[DomainArtifactGenerator]:
    """The domain-scoped generators, in the order their files are written."""
    return [
        EntityGenerator(renderer, settings),
        UseCaseGenerator(renderer, settings),
        RepositoryPortGenerator(renderer, settings),
        RepositoryImplementationGenerator(renderer, settings),
        ControllerGenerator(renderer, settings),
        RouteTableGenerator(renderer, settings),
        DomainTestGenerator(renderer, settings),
    ]


# ---------------------------------------------------------------------------
# Plan helpers (shared with the domain extender)
# ---------------------------------------------------------------------------


def directory_steps(
    paths: Iterable[str], producer: str = "directory_planner"
) -> list[PlanStep]:
    return [
        PlanStep(
            kind="directory",
            path=path,
            producer=producer,
            stage=GenerationStage.STRUCTURE_CREATED,
        )
        for path in paths
    ]


def file_steps(artifacts: Iterable[Artifact], stage: GenerationStage) -> list[PlanStep]:
    return [
        PlanStep(
            kind="file",
            path=artifact.relative_path,
            producer=artifact.producer,
            stage=stage,
            artifact=artifact,
        )
        for artifact in artifacts
    ]


def domain_file_steps(
    spec: ProjectSpecification,
    domain: DomainSpecification,
    generators: Iterable[DomainArtifactGenerator],
) -> list[PlanStep]:
    """Render every domain-scoped artifact of *domain*.

    The same ``DomainSpecification`` instance is handed to every generator.
    """
    artifacts: list[Artifact] = []
    for generator in generators:
        artifacts.extend(generator.generate(spec, domain))
    return file_steps(artifacts, GenerationStage.DOMAINS_GENERATED)


def collect_warnings(caught: Iterable[warnings.WarningMessage]) -> list[str]:
    """Messages of the template warnings captured while rendering."""
    messages = []
    for entry in caught:
        if issubclass(entry.category, TemplateResolutionWarning):
            logger.warning("%s", entry.message)
            messages.append(str(entry.message))
    return messages


async def execute_steps(
    fs: FilesystemCapability,
    steps: Iterable[PlanStep],
    report: GenerationReport,
) -> None:
    """Apply *steps* one at a time, recording each path in *report*."""
    for step in steps:
        if step.kind == "directory":
            await fs.ensure_directory(step.path)
            report.directories.append(step.path)
            continue

        artifact = step.artifact
        if artifact is None:
            continue
        await fs.write_file(artifact.relative_path, artifact.content)
        if artifact.executable:
            await fs.make_executable(artifact.relative_path)
        report.files.append(artifact.relative_path)
        logger.debug("Wrote %s (%s)", artifact.relative_path, step.producer)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectSpecification``, generates a project tree at
    ``output_dir / spec.name`` containing:
    - the shared kernel (event bus, error classes) and ``package.json``
    - one entity, five use cases, a repository port and implementations,
      a controller and a route table per domain
    - ``config/`` and the ``src/server.js`` entry point mounting every domain
    - optionally jest tests and Docker artifacts
    """

    def __init__(
        self,
        spec: ProjectSpecification | Mapping[str, Any],
        output_dir: str | Path,
        *,
        settings: Optional[GeneratorSettings] = None,
        renderer: Optional[TemplateRenderer] = None,
        filesystem: Optional[FilesystemCapability] = None,
    ) -> None:
        if not isinstance(spec, ProjectSpecification):
            spec = validate_specification(spec)
        self.spec = spec
        self.settings = settings or GeneratorSettings()
        self.project_root = Path(output_dir) / spec.name
        self.renderer = renderer or TemplateRenderer(
            override_dir=self.settings.templates_dir
        )
        self.fs: FilesystemCapability = filesystem or LocalFilesystem(self.project_root)
        self.planner = DirectoryPlanner()
        self.report: Optional[GenerationReport] = None

        self.base_generators: list[ProjectArtifactGenerator] = [
            SharedKernelGenerator(self.renderer, self.settings),
            PackageManifestGenerator(self.settings),
            EnvironmentTemplateGenerator(self.renderer, self.settings),
            DocumentationGenerator(self.renderer, self.settings),
            JestConfigGenerator(self.renderer, self.settings),
        ]
        self.domain_generators = domain_generators(self.renderer, self.settings)
        self.config_generators: list[ProjectArtifactGenerator] = [
            ConfigGenerator(self.renderer, self.settings),
            ServerEntryPointGenerator(self.renderer, self.settings),
        ]
        self.container_generators: list[ProjectArtifactGenerator] = [
            ContainerArtifactGenerator(self.renderer, self.settings),
        ]

    # -- Public API --------------------------------------------------------

    def build_plan(self) -> GenerationPlan:
        """Render every artifact and return the ordered plan.

        Pure: nothing is read from or written to the filesystem.  Unresolved
        template placeholders are collected into ``plan.warnings``.
        """
        spec = self.spec
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", TemplateResolutionWarning)

            steps = directory_steps(self.planner.plan(spec))
            steps += self._project_steps(
                self.base_generators, GenerationStage.BASE_FILES_GENERATED
            )
            for name in spec.domains:
                steps += domain_file_steps(spec, derive(name), self.domain_generators)
            steps += self._project_steps(
                self.config_generators, GenerationStage.CONFIG_GENERATED
            )
            if spec.include_container_artifacts:
                steps += self._project_steps(
                    self.container_generators,
                    GenerationStage.CONTAINER_ARTIFACTS_GENERATED,
                )

        return GenerationPlan(steps=steps, warnings=collect_warnings(caught))

    async def generate(self, *, overwrite_confirmed: bool = False) -> GenerationReport:
        """Generate the complete project.

        Args:
            overwrite_confirmed: Must be ``True`` when the project directory
                already exists; the decision belongs to the caller.

        Returns:
            The ``GenerationReport`` of the run.  It is also kept on
            ``self.report``, which is how callers reach it after a failure.

        Raises:
            ProjectExistsError: The target exists and overwrite was not
                confirmed.  Nothing has been written.
            FilesystemError, TemplateSourceError: Re-raised unchanged.
        """
        report = GenerationReport(
            project_name=self.spec.name, project_root=str(self.project_root)
        )
        self.report = report
        started = time.monotonic()
        logger.info("Generating %s in %s", self.spec.name, self.project_root)

        try:
            if await self.fs.exists(PROJECT_ROOT) and not overwrite_confirmed:
                raise ProjectExistsError(
                    f"{self.project_root} already exists; confirm overwrite to continue"
                )

            plan = self.build_plan()
            report.warnings.extend(plan.warnings)
            report.advance(GenerationStage.PLANNED)

            grouped = dict(plan.stages())
            for stage in self._stages():
                await execute_steps(self.fs, grouped.get(stage, []), report)
                report.advance(stage)
                logger.debug("Stage %s complete", stage.value)

            report.advance(GenerationStage.DONE)
        except Exception as exc:
            report.errors.append(str(exc))
            logger.error("Generation of %s failed: %s", self.spec.name, exc)
            raise
        finally:
            report.duration_seconds = round(time.monotonic() - started, 3)

        logger.info(
            "Generated %d files in %d directories for %s",
            len(report.files),
            len(report.directories),
            self.spec.name,
        )
        return report

    # -- Internal helpers --------------------------------------------------

    def _stages(self) -> list[GenerationStage]:
        stages = [
            GenerationStage.STRUCTURE_CREATED,
            GenerationStage.BASE_FILES_GENERATED,
            GenerationStage.DOMAINS_GENERATED,
            GenerationStage.CONFIG_GENERATED,
        ]
        if self.spec.include_container_artifacts:
            stages.append(GenerationStage.CONTAINER_ARTIFACTS_GENERATED)
        return stages

    def _project_steps(
        self,
        generators: Iterable[ProjectArtifactGenerator],
        stage: GenerationStage,
    ) -> list[PlanStep]:
        artifacts: list[Artifact] = []
        for generator in generators:
            artifacts.extend(generator.generate(self.spec))
        return file_steps(artifacts, stage)


async def generate_project(
    spec: ProjectSpecification | Mapping[str, Any],
    output_dir: str | Path,
    *,
    settings: Optional[GeneratorSettings] = None,
    overwrite_confirmed: bool = False,
) -> GenerationReport:
    """Convenience wrapper: build a ``ProjectGenerator`` and run it."""
    generator = ProjectGenerator(spec, output_dir, settings=settings)
    return await generator.generate(overwrite_confirmed=overwrite_confirmed)
