"""Use-case generation: create, update, delete, findById and findAll."""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import domain_context, project_context
from .models import Artifact, ProjectSpecification
from .naming import SHARED_ERRORS_PATH, USE_CASE_ACTIONS, DomainSpecification
from .templates import TemplateRenderer

# Actions that publish a domain event, with the event's past-tense suffix.
PUBLISHED_EVENTS: dict[str, str] = {
    "Create": "Created",
    "Update": "Updated",
    "Delete": "Deleted",
}

_TEMPLATES: dict[str, str] = {
    "Create": "domain/use_cases/create.js.j2",
    "Update": "domain/use_cases/update.js.j2",
    "Delete": "domain/use_cases/delete.js.j2",
    "FindById": "domain/use_cases/find_by_id.js.j2",
    "FindAll": "domain/use_cases/find_all.js.j2",
}


class UseCaseGenerator:
    """Generates the five use-case classes of a domain.

    Each takes the repository port as its first constructor argument and an
    optional event bus as the second; mutating use cases publish
    ``{type, aggregateId, data, timestamp}`` only when a bus is present.
    """

    producer = "use_cases"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(
        self, spec: ProjectSpecification, domain: DomainSpecification
    ) -> list[Artifact]:
        base = project_context(spec, self.settings)
        artifacts: list[Artifact] = []
        for action, verb in USE_CASE_ACTIONS:
            path = domain.use_case_path(action)
            event = PUBLISHED_EVENTS.get(action)
            ctx = domain_context(
                base,
                domain,
                artifact_path=path,
                targets={"entity": domain.entity_path, "errors": SHARED_ERRORS_PATH},
                use_case={
                    "action": action,
                    "verb": verb,
                    "class_name": domain.use_case_class(action),
                    "event_type": domain.event_type(event) if event else "",
                },
            )
            content = self.renderer.render(_TEMPLATES[action], ctx)
            artifacts.append(
                Artifact(relative_path=path, content=content, producer=self.producer)
            )
        return artifacts
