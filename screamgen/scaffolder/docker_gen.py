"""Container artifact generation.

Produces a multi-stage ``Dockerfile``, production and development Compose
files, ``.dockerignore``, a ``Makefile`` wrapping the usual Compose commands,
an executable ``dev-start.sh`` and, when a persistence backend is selected,
``docker/<backend>/init/01-init.{js,sql}`` creating one collection or table
per domain in specification order.
"""

from __future__ import annotations

from typing import Any

from screamgen.config import GeneratorSettings

from .context import project_context
from .models import Artifact, PersistenceBackend, ProjectSpecification
from .templates import TemplateRenderer

# Credentials and in-container paths the Compose files hand to each backend.
_BACKEND_SERVICE: dict[PersistenceBackend, dict[str, str]] = {
    PersistenceBackend.MONGODB: {
        "db_user": "",
        "db_password": "",
        "data_dir": "/data/db",
        "init_dir": "/docker-entrypoint-initdb.d",
    },
    PersistenceBackend.POSTGRESQL: {
        "db_user": "postgres",
        "db_password": "postgres",
        "data_dir": "/var/lib/postgresql/data",
        "init_dir": "/docker-entrypoint-initdb.d",
    },
    PersistenceBackend.MYSQL: {
        "db_user": "root",
        "db_password": "root",
        "data_dir": "/var/lib/mysql",
        "init_dir": "/docker-entrypoint-initdb.d",
    },
}

_INIT_TEMPLATES: dict[PersistenceBackend, str] = {
    PersistenceBackend.MONGODB: "docker/init/mongodb.js.j2",
    PersistenceBackend.POSTGRESQL: "docker/init/postgresql.sql.j2",
    PersistenceBackend.MYSQL: "docker/init/mysql.sql.j2",
}


class ContainerArtifactGenerator:
    """Generates every container-related file of a project."""

    producer = "container"

    # Template name -> output file name
    _CONTAINER_FILES: dict[str, str] = {
        "docker/Dockerfile.j2": "Dockerfile",
        "docker/docker-compose.yml.j2": "docker-compose.yml",
        "docker/docker-compose.dev.yml.j2": "docker-compose.dev.yml",
        "docker/dockerignore.j2": ".dockerignore",
        "docker/Makefile.j2": "Makefile",
    }

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(self, spec: ProjectSpecification) -> list[Artifact]:
        if not spec.include_container_artifacts:
            return []

        ctx = self.context(spec)
        artifacts = [
            Artifact(
                relative_path=path,
                content=self.renderer.render(template, ctx),
                producer=self.producer,
            )
            for template, path in self._CONTAINER_FILES.items()
        ]
        artifacts.append(
            Artifact(
                relative_path="dev-start.sh",
                content=self.renderer.render("docker/dev-start.sh.j2", ctx),
                producer=self.producer,
                executable=True,
            )
        )

        init_template = _INIT_TEMPLATES.get(spec.persistence_backend)
        if init_template is not None:
            backend = spec.backend
            artifacts.append(
                Artifact(
                    relative_path=f"docker/{backend.key}/init/{backend.init_script}",
                    content=self.renderer.render(init_template, ctx),
                    producer=self.producer,
                )
            )
        return artifacts

    def context(self, spec: ProjectSpecification) -> dict[str, Any]:
        """Project context plus the backend's Compose service settings."""
        ctx = project_context(spec, self.settings)
        ctx.update(_BACKEND_SERVICE.get(spec.persistence_backend, {}))
        return ctx
