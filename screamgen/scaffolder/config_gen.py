"""Configuration generation: ``config/database.js``, ``server.js`` and ``app.js``."""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import project_context
from .models import Artifact, ProjectSpecification
from .naming import APP_CONFIG_PATH, DATABASE_CONFIG_PATH, SERVER_CONFIG_PATH
from .templates import TemplateRenderer


class ConfigGenerator:
    """Generates the files under ``config/``.

    ``database.js`` is backend-specific; for ``none`` it is a stub whose
    ``connect``/``disconnect`` do nothing, so the server entry point can call
    them whatever the backend.
    """

    producer = "config"

    # Template name -> output path
    _CONFIG_FILES: dict[str, str] = {
        "config/server.js.j2": SERVER_CONFIG_PATH,
        "config/app.js.j2": APP_CONFIG_PATH,
    }

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(self, spec: ProjectSpecification) -> list[Artifact]:
        ctx = project_context(spec, self.settings)
        templates = {
            f"config/database/{spec.backend.key}.js.j2": DATABASE_CONFIG_PATH,
            **self._CONFIG_FILES,
        }
        return [
            Artifact(
                relative_path=path,
                content=self.renderer.render(template, ctx),
                producer=self.producer,
            )
            for template, path in templates.items()
        ]
