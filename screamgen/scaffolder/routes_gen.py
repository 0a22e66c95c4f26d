"""Route table generation.

Each domain gets an ``express.Router`` with a health endpoint, the five CRUD
endpoints and a fallback listing what the domain does serve.  The router
builds its own controller, so it is also where the repository is chosen:
``REPOSITORY=<backend key>`` selects the persistence-backed implementation,
anything else the in-memory one.
"""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import domain_context, project_context
from .models import Artifact, ProjectSpecification
from .naming import EVENT_BUS_PATH, DomainSpecification
from .templates import TemplateRenderer


class RouteTableGenerator:
    """Generates ``src/<domain>/infrastructure/routes.js``."""

    producer = "routes"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(
        self, spec: ProjectSpecification, domain: DomainSpecification
    ) -> list[Artifact]:
        path = domain.routes_path
        targets = {
            "controller": domain.controller_path,
            "memory_repository": domain.repository_path(domain.memory_repository_class),
            "event_bus": EVENT_BUS_PATH,
        }
        backend_class = ""
        if spec.has_backend:
            backend_class = domain.backend_repository_class(spec.backend)
            targets["backend_repository"] = domain.repository_path(backend_class)

        ctx = domain_context(
            project_context(spec, self.settings),
            domain,
            artifact_path=path,
            targets=targets,
            backend_repository_class=backend_class,
        )
        content = self.renderer.render("domain/routes.js.j2", ctx)
        return [Artifact(relative_path=path, content=content, producer=self.producer)]
