"""Adding a single domain to an already generated project.

``DomainExtender`` runs the domain-scoped part of the generator for one new
domain.  Project-level files (``package.json``, ``src/server.js``, ``config/``,
documentation, container artifacts) are never touched; mounting the new
routes in ``src/server.js`` is returned as a follow-up in the report.

What the extender needs to know about the existing project is read back from
the tree itself:

* ``package.json``: name, version, description, author, the persistence
  driver among the dependencies (``mongoose``, ``pg``, ``mysql2``) and whether
  ``jest`` is installed.  A scoped or otherwise non-slug ``name`` falls back
  to a slug of it, then of the folder name.
* ``src/``: every subdirectory other than ``shared`` whose name is a slug and
  that has an ``infrastructure`` layer is an existing domain.
* ``Dockerfile``: container artifacts were generated.
"""

from __future__ import annotations

import json
import logging
import time
import warnings
from pathlib import Path
from typing import Any, Mapping, Optional

from screamgen.config import GeneratorSettings

from .errors import (
    CollisionError,
    ProjectNotFoundError,
    SpecificationError,
    TemplateResolutionWarning,
)
from .filesystem import FilesystemCapability, LocalFilesystem
from .generator import (
    collect_warnings,
    directory_steps,
    domain_file_steps,
    domain_generators,
    execute_steps,
)
from .manifest_gen import MANIFEST_PATH
from .models import (
    BACKEND_PROFILES,
    GenerationPlan,
    GenerationReport,
    GenerationStage,
    PersistenceBackend,
    ProjectSpecification,
    is_slug,
    slugify,
    validate_specification,
)
from .naming import SERVER_PATH, derive, require_path, validate_domain_name
from .planner import PROJECT_ROOT, DirectoryPlanner
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)

SHARED_FOLDER = "shared"

# npm dependency name -> backend it implies
_DRIVER_BACKENDS: dict[str, PersistenceBackend] = {
    profile.driver: backend
    for backend, profile in BACKEND_PROFILES.items()
    if profile.driver
}


class DomainExtender:
    """Adds one domain to the project at *project_root*."""

    def __init__(
        self,
        project_root: str | Path,
        *,
        settings: Optional[GeneratorSettings] = None,
        renderer: Optional[TemplateRenderer] = None,
        filesystem: Optional[FilesystemCapability] = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.settings = settings or GeneratorSettings()
        self.renderer = renderer or TemplateRenderer(
            override_dir=self.settings.templates_dir
        )
        self.fs: FilesystemCapability = filesystem or LocalFilesystem(self.project_root)
        self.planner = DirectoryPlanner()
        self.generators = domain_generators(self.renderer, self.settings)
        self.report: Optional[GenerationReport] = None

    # -- Public API --------------------------------------------------------

    async def add_domain(
        self,
        domain: str,
        *,
        persistence_backend: PersistenceBackend | str | None = None,
        include_tests: Optional[bool] = None,
    ) -> GenerationReport:
        """Generate every domain-scoped artifact for *domain*.

        *persistence_backend* and *include_tests* override what is inferred
        from the existing project.

        Raises:
            SpecificationError: *domain* is not a valid identifier.
            ProjectNotFoundError: *project_root* is not a generated project.
            CollisionError: ``src/<domain>`` already exists.  Raised before
                any directory is created.
        """
        validate_domain_name(domain)
        report = GenerationReport(
            project_name=self.project_root.name, project_root=str(self.project_root)
        )
        self.report = report
        started = time.monotonic()

        try:
            plan = await self.plan_domain(
                domain,
                persistence_backend=persistence_backend,
                include_tests=include_tests,
            )
            report.warnings.extend(plan.warnings)
            report.advance(GenerationStage.PLANNED)

            grouped = dict(plan.stages())
            for stage in (
                GenerationStage.STRUCTURE_CREATED,
                GenerationStage.DOMAINS_GENERATED,
            ):
                await execute_steps(self.fs, grouped.get(stage, []), report)
                report.advance(stage)

            report.follow_ups.append(self.mount_instructions(domain))
            report.advance(GenerationStage.DONE)
        except Exception as exc:
            report.errors.append(str(exc))
            logger.error("Adding domain %r failed: %s", domain, exc)
            raise
        finally:
            report.duration_seconds = round(time.monotonic() - started, 3)

        logger.info("Added domain %s (%d files)", domain, len(report.files))
        return report

    async def plan_domain(
        self,
        domain: str,
        *,
        persistence_backend: PersistenceBackend | str | None = None,
        include_tests: Optional[bool] = None,
    ) -> GenerationPlan:
        """Check the project, then render the plan for *domain* without writing."""
        validate_domain_name(domain)
        if not await self.fs.exists(PROJECT_ROOT) or not await self.fs.exists("src"):
            raise ProjectNotFoundError(
                f"{self.project_root} is not a generated project (no src/ directory)"
            )
        if await self.fs.exists(f"src/{domain}"):
            raise CollisionError(
                f"Domain {domain!r} already exists in {self.project_root}"
            )

        spec = await self.load_project_specification(
            domain,
            persistence_backend=persistence_backend,
            include_tests=include_tests,
        )
        derived = derive(domain)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", TemplateResolutionWarning)
            steps = directory_steps(
                self.planner.plan_domain(domain, include_tests=spec.include_tests)
            )
            steps += domain_file_steps(spec, derived, self.generators)
        return GenerationPlan(steps=steps, warnings=collect_warnings(caught))

    async def existing_domains(self) -> list[str]:
        """Domains already present under ``src/``, sorted by name.

        Folders whose name is not a valid domain identifier are hand-made
        additions and are skipped with a debug message.
        """
        domains = []
        for name in await self.fs.list_files("src"):
            if name == SHARED_FOLDER or name.endswith(".js"):
                continue
            if not await self.fs.exists(f"src/{name}/infrastructure"):
                continue
            if not is_slug(name):
                logger.debug("Ignoring src/%s: not a domain identifier", name)
                continue
            domains.append(name)
        return domains

    async def load_project_specification(
        self,
        domain: str,
        *,
        persistence_backend: PersistenceBackend | str | None = None,
        include_tests: Optional[bool] = None,
    ) -> ProjectSpecification:
        """Reconstruct the project's specification with *domain* appended."""
        manifest = await self._read_manifest()
        dependencies: dict[str, Any] = {
            **manifest.get("dependencies", {}),
            **manifest.get("devDependencies", {}),
        }

        if persistence_backend is None:
            persistence_backend = PersistenceBackend.NONE
            for driver, backend in _DRIVER_BACKENDS.items():
                if driver in dependencies:
                    persistence_backend = backend
                    break
        if include_tests is None:
            include_tests = "jest" in dependencies

        existing = [d for d in await self.existing_domains() if d != domain]
        data = {
            "name": self._project_name(manifest.get("name")),
            "version": str(manifest.get("version") or "1.0.0"),
            "description": _manifest_text(manifest.get("description")),
            "author": _manifest_text(manifest.get("author")),
            "domains": (*existing, domain),
            "include_tests": include_tests,
            "include_container_artifacts": await self.fs.exists("Dockerfile"),
            "persistence_backend": persistence_backend,
        }
        return validate_specification(data)

    def mount_instructions(self, domain: str) -> str:
        """The follow-up a user must apply to ``src/server.js`` by hand."""
        derived = derive(domain)
        target = require_path(SERVER_PATH, derived.routes_path)
        return (
            f"Mount the new routes in {SERVER_PATH}: "
            f"const {derived.routes_binding} = require('{target}'); "
            f"app.use('{derived.mount_path}', {derived.routes_binding});"
        )

    # -- Internal helpers --------------------------------------------------

    async def _read_manifest(self) -> dict[str, Any]:
        if not await self.fs.exists(MANIFEST_PATH):
            logger.warning(
                "%s has no %s; assuming defaults", self.project_root, MANIFEST_PATH
            )
            return {}
        raw = await self.fs.read_file(MANIFEST_PATH)
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SpecificationError(f"Cannot parse {MANIFEST_PATH}: {exc}") from exc
        if not isinstance(data, dict):
            raise SpecificationError(f"{MANIFEST_PATH} must contain a JSON object")
        return data

    def _project_name(self, declared: Any) -> str:
        """A slug for the project: the manifest name, else the folder name.

        Scoped npm names (``@acme/shop``) keep their package part.
        """
        if isinstance(declared, str) and is_slug(declared):
            return declared
        candidates = []
        if isinstance(declared, str):
            candidates.append(declared.rsplit("/", 1)[-1])
        candidates.append(self.project_root.resolve().name)
        for candidate in candidates:
            slug = slugify(candidate)
            if slug:
                if declared:
                    logger.info(
                        "Project name %r is not a slug; using %r", declared, slug
                    )
                return slug
        return "project"


def _manifest_text(value: Any) -> str:
    # npm allows "author" as {"name": ..., "email": ...}
    if isinstance(value, Mapping):
        value = value.get("name", "")
    return "" if value is None else str(value)
