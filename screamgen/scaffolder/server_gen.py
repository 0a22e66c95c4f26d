"""Server entry point generation (``src/server.js``).

The entry point mounts every domain's router at ``/api/<domain>``, in
specification order, and lists the same endpoints under ``GET /api``.
"""

from __future__ import annotations

from typing import Any

from screamgen.config import GeneratorSettings

from .context import project_context
from .models import Artifact, ProjectSpecification
from .naming import (
    DATABASE_CONFIG_PATH,
    SERVER_CONFIG_PATH,
    SERVER_PATH,
    DomainSpecification,
    derive,
    require_path,
)
from .templates import TemplateRenderer


def route_mount(domain: DomainSpecification) -> dict[str, str]:
    """The ``require`` binding and mount point of *domain* in ``server.js``."""
    return {
        "raw_name": domain.raw_name,
        "binding": domain.routes_binding,
        "require": require_path(SERVER_PATH, domain.routes_path),
        "mount_path": domain.mount_path,
    }


class ServerEntryPointGenerator:
    """Generates ``src/server.js``."""

    producer = "server"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(self, spec: ProjectSpecification) -> list[Artifact]:
        ctx: dict[str, Any] = project_context(spec, self.settings)
        ctx["requires"] = {
            "server_config": require_path(SERVER_PATH, SERVER_CONFIG_PATH),
            "database": require_path(SERVER_PATH, DATABASE_CONFIG_PATH),
        }
        ctx["mounts"] = [route_mount(derive(name)) for name in spec.domains]
        content = self.renderer.render("project/server.js.j2", ctx)
        return [Artifact(relative_path=SERVER_PATH, content=content, producer=self.producer)]
