"""Jest scaffolding for projects generated with ``include_tests``."""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import domain_context, project_context
from .models import Artifact, ProjectSpecification
from .naming import SHARED_ERRORS_PATH, DomainSpecification
from .templates import TemplateRenderer


class JestConfigGenerator:
    """Generates ``jest.config.js`` at the project root."""

    producer = "jest_config"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(self, spec: ProjectSpecification) -> list[Artifact]:
        if not spec.include_tests:
            return []
        content = self.renderer.render(
            "tests/jest.config.js.j2", project_context(spec, self.settings)
        )
        return [
            Artifact(relative_path="jest.config.js", content=content, producer=self.producer)
        ]


class DomainTestGenerator:
    """Generates one unit and one integration test file per domain.

    The unit test exercises the entity round trip and name validation; the
    integration test drives the route table through supertest.
    """

    producer = "domain_tests"

    def __init__(self, renderer: TemplateRenderer, settings: GeneratorSettings) -> None:
        self.renderer = renderer
        self.settings = settings

    def generate(
        self, spec: ProjectSpecification, domain: DomainSpecification
    ) -> list[Artifact]:
        if not spec.include_tests:
            return []
        base = project_context(spec, self.settings)

        unit_path = domain.unit_test_path
        unit_ctx = domain_context(
            base,
            domain,
            artifact_path=unit_path,
            targets={"entity": domain.entity_path, "errors": SHARED_ERRORS_PATH},
        )
        integration_path = domain.integration_test_path
        integration_ctx = domain_context(
            base,
            domain,
            artifact_path=integration_path,
            targets={"routes": domain.routes_path},
        )
        return [
            Artifact(
                relative_path=unit_path,
                content=self.renderer.render("tests/entity.test.js.j2", unit_ctx),
                producer=self.producer,
            ),
            Artifact(
                relative_path=integration_path,
                content=self.renderer.render("tests/routes.test.js.j2", integration_ctx),
                producer=self.producer,
            ),
        ]
