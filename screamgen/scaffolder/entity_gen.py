"""Entity generation: one domain class per domain."""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import domain_context, project_context
from .models import Artifact, ProjectSpecification
from .naming import SHARED_ERRORS_PATH, DomainSpecification
from .templates import TemplateRenderer


class EntityGenerator:
    """Generates ``src/<domain>/domain/entities/<Capitalized>.js``.

    The entity exposes ``constructor(id, name)``, ``updateName`` (trims and
    rejects blank names), ``toJSON`` and the static ``create`` / ``fromJSON``
    constructors.
    """

    producer = "entity"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(
        self, spec: ProjectSpecification, domain: DomainSpecification
    ) -> list[Artifact]:
        path = domain.entity_path
        ctx = domain_context(
            project_context(spec, self.settings),
            domain,
            artifact_path=path,
            targets={"errors": SHARED_ERRORS_PATH},
        )
        content = self.renderer.render("domain/entity.js.j2", ctx)
        return [Artifact(relative_path=path, content=content, producer=self.producer)]
