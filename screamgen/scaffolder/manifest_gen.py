"""``package.json`` generation.

The manifest is built as a dict and serialised with ``json.dumps`` rather
than rendered from a template, so it is always valid JSON.  Dependencies vary
with the persistence backend (its driver) and ``include_tests`` (jest and
supertest); versions come from ``GeneratorSettings.dependencies``.
"""

from __future__ import annotations

import json
from typing import Any

from screamgen.config import GeneratorSettings

from .models import Artifact, ProjectSpecification
from .naming import SERVER_PATH

MANIFEST_PATH = "package.json"


class PackageManifestGenerator:
    """Generates the project's ``package.json``."""

    producer = "package_manifest"

    def __init__(self, settings: GeneratorSettings) -> None:
        self.settings = settings

    def generate(self, spec: ProjectSpecification) -> list[Artifact]:
        content = json.dumps(self.build(spec), indent=2, ensure_ascii=False) + "\n"
        return [Artifact(relative_path=MANIFEST_PATH, content=content, producer=self.producer)]

    def build(self, spec: ProjectSpecification) -> dict[str, Any]:
        """Return the manifest as a plain dict."""
        versions = self.settings.dependencies.model_dump()

        scripts = {
            "start": f"node {SERVER_PATH}",
            "dev": f"nodemon {SERVER_PATH}",
        }
        if spec.include_tests:
            scripts.update(
                {
                    "test": "jest",
                    "test:watch": "jest --watch",
                    "test:coverage": "jest --coverage",
                }
            )
        if spec.include_container_artifacts:
            scripts.update(
                {
                    "docker:build": "docker compose build",
                    "docker:up": "docker compose up -d",
                    "docker:down": "docker compose down",
                    "docker:dev": "docker compose -f docker-compose.dev.yml up",
                }
            )

        dependencies = {
            name: versions[name] for name in ("express", "cors", "helmet", "dotenv")
        }
        if spec.has_backend:
            driver = spec.backend.driver
            dependencies[driver] = versions[driver]

        dev_dependencies = {"nodemon": versions["nodemon"]}
        if spec.include_tests:
            dev_dependencies["jest"] = versions["jest"]
            dev_dependencies["supertest"] = versions["supertest"]

        return {
            "name": spec.name,
            "version": spec.version,
            "description": spec.description,
            "main": SERVER_PATH,
            "scripts": scripts,
            "keywords": ["express", "screaming-architecture", *spec.domains],
            "author": spec.author,
            "license": "MIT",
            "dependencies": dict(sorted(dependencies.items())),
            "devDependencies": dict(sorted(dev_dependencies.items())),
            "engines": {"node": ">=18"},
        }
