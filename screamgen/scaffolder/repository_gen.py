"""Repository generation: the port and its implementations.

The port declares ``save``, ``findById``, ``findAll``, ``findBy``, ``update``,
``delete``, ``exists`` and ``count``, each throwing until overridden.  The
in-memory implementation is always emitted; a backend implementation
(``Mongo``/``Postgres``/``Mysql`` prefix) is added only when the project
selects that backend.
"""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import domain_context, project_context
from .models import Artifact, ProjectSpecification
from .naming import DATABASE_CONFIG_PATH, DomainSpecification
from .templates import TemplateRenderer

_BACKEND_TEMPLATES: dict[str, str] = {
    "mongodb": "domain/repositories/mongodb.js.j2",
    "postgresql": "domain/repositories/postgresql.js.j2",
    "mysql": "domain/repositories/mysql.js.j2",
}


class RepositoryPortGenerator:
    """Generates ``application/ports/<Capitalized>Repository.js``."""

    producer = "repository_port"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(
        self, spec: ProjectSpecification, domain: DomainSpecification
    ) -> list[Artifact]:
        path = domain.port_path
        ctx = domain_context(
            project_context(spec, self.settings), domain, artifact_path=path
        )
        content = self.renderer.render("domain/repositories/port.js.j2", ctx)
        return [Artifact(relative_path=path, content=content, producer=self.producer)]


class RepositoryImplementationGenerator:
    """Generates the in-memory repository and, if selected, the backend one."""

    producer = "repository_implementation"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(
        self, spec: ProjectSpecification, domain: DomainSpecification
    ) -> list[Artifact]:
        base = project_context(spec, self.settings)
        targets = {"port": domain.port_path, "entity": domain.entity_path}

        memory_path = domain.repository_path(domain.memory_repository_class)
        memory_ctx = domain_context(
            base, domain, artifact_path=memory_path, targets=targets,
            repository_class=domain.memory_repository_class,
        )
        artifacts = [
            Artifact(
                relative_path=memory_path,
                content=self.renderer.render("domain/repositories/memory.js.j2", memory_ctx),
                producer=self.producer,
            )
        ]

        template = _BACKEND_TEMPLATES.get(spec.backend.key)
        if template is None:
            return artifacts

        class_name = domain.backend_repository_class(spec.backend)
        backend_path = domain.repository_path(class_name)
        backend_ctx = domain_context(
            base,
            domain,
            artifact_path=backend_path,
            targets={**targets, "database": DATABASE_CONFIG_PATH},
            repository_class=class_name,
        )
        artifacts.append(
            Artifact(
                relative_path=backend_path,
                content=self.renderer.render(template, backend_ctx),
                producer=self.producer,
            )
        )
        return artifacts
