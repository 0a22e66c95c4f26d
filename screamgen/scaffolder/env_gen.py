"""Environment template generation (``.env.example``)."""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import project_context
from .models import Artifact, ProjectSpecification
from .templates import TemplateRenderer


class EnvironmentTemplateGenerator:
    """Generates ``.env.example`` with the variables the selected backend reads."""

    producer = "environment"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(self, spec: ProjectSpecification) -> list[Artifact]:
        content = self.renderer.render(
            "project/env.example.j2", project_context(spec, self.settings)
        )
        return [Artifact(relative_path=".env.example", content=content, producer=self.producer)]
