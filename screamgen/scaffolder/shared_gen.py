"""Shared kernel generation.

Written in the base-files stage, before any domain, because every domain's
use cases and routes ``require`` these files.
"""

from __future__ import annotations

from screamgen.config import GeneratorSettings

from .context import project_context
from .models import Artifact, ProjectSpecification
from .naming import EVENT_BUS_PATH, SHARED_ERRORS_PATH
from .templates import TemplateRenderer


class SharedKernelGenerator:
    """Generates ``EventBus.js``, ``errors.js`` and ``.gitignore``."""

    producer = "shared"

    _SHARED_FILES: dict[str, str] = {
        "project/EventBus.js.j2": EVENT_BUS_PATH,
        "project/errors.js.j2": SHARED_ERRORS_PATH,
        "project/gitignore.j2": ".gitignore",
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
            for template, path in self._SHARED_FILES.items()
        ]
