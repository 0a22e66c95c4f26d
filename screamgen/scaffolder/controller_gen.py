"""Controller generation: binds the five HTTP operations onto the use cases."""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import domain_context, project_context
from .models import Artifact, ProjectSpecification
from .naming import SHARED_ERRORS_PATH, USE_CASE_ACTIONS, DomainSpecification
from .templates import TemplateRenderer


class ControllerGenerator:
    """Generates ``infrastructure/controllers/<Capitalized>Controller.js``.

    The controller exposes ``create``, ``list``, ``getById``, ``update``,
    ``delete`` and ``health``.  Every ``require`` of a use case is computed
    from the same ``DomainSpecification`` the use-case generator writes with.
    """

    producer = "controller"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(
        self, spec: ProjectSpecification, domain: DomainSpecification
    ) -> list[Artifact]:
        path = domain.controller_path
        targets = {"errors": SHARED_ERRORS_PATH}
        classes: dict[str, str] = {}
        for action, _verb in USE_CASE_ACTIONS:
            targets[action] = domain.use_case_path(action)
            classes[action] = domain.use_case_class(action)

        ctx = domain_context(
            project_context(spec, self.settings),
            domain,
            artifact_path=path,
            targets=targets,
            classes=classes,
        )
        content = self.renderer.render("domain/controller.js.j2", ctx)
        return [Artifact(relative_path=path, content=content, producer=self.producer)]
