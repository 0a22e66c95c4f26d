"""Documentation generation: ``README.md`` and ``docs/architecture.md``."""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import project_context
from .models import Artifact, ProjectSpecification
from .templates import TemplateRenderer


class DocumentationGenerator:
    """Generates the project README and the architecture overview.

    Both enumerate exactly the specified domains, in order.
    """

    producer = "documentation"

    # Template name -> output path
    _DOC_FILES: dict[str, str] = {
        "project/README.md.j2": "README.md",
        "project/architecture.md.j2": "docs/architecture.md",
    }

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(self, spec: ProjectSpecification) -> list[Artifact]:
        ctx = project_context(spec, self.settings)
        return [
            Artifact(
                relative_path=path,
                content=self.renderer.render(template, ctx),
                producer=self.producer,
            )
            for template, path in self._DOC_FILES.items()
        ]
