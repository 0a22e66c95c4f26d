"""Directory planning.

Computes the full set of directories a project needs, in a stable order and
without duplicates.  Creating the planned directories is idempotent, which is
what lets the domain extender reuse ``plan_domain`` inside an existing tree.
"""

from __future__ import annotations

from .models import ProjectSpecification

PROJECT_ROOT = "."

SHARED_DIRECTORIES: tuple[str, ...] = (
    "src",
    "src/shared",
    "src/shared/domain",
    "src/shared/domain/events",
    "src/shared/domain/value-objects",
    "src/shared/infrastructure",
    "src/shared/infrastructure/database",
    "src/shared/infrastructure/messaging",
    "src/shared/infrastructure/logging",
    "src/shared/application",
    "src/shared/application/middlewares",
    "config",
    "docs",
)

TEST_DIRECTORIES: tuple[str, ...] = (
    "tests",
    "tests/unit",
    "tests/integration",
    "tests/e2e",
)

# Relative to ``src/<domain>``
DOMAIN_LAYERS: tuple[str, ...] = (
    "application",
    "application/services",
    "application/use-cases",
    "application/ports",
    "domain",
    "domain/entities",
    "domain/value-objects",
    "domain/events",
    "infrastructure",
    "infrastructure/repositories",
    "infrastructure/controllers",
    "infrastructure/adapters",
)


class DirectoryPlanner:
    """Plans project and per-domain directory trees."""

    def plan(self, spec: ProjectSpecification) -> list[str]:
        """Every directory *spec* needs, root first, domains in spec order."""
        paths: list[str] = [PROJECT_ROOT, *SHARED_DIRECTORIES]
        if spec.include_tests:
            paths.extend(TEST_DIRECTORIES)

        for domain in spec.domains:
            paths.extend(self.plan_domain(domain, include_tests=spec.include_tests))

        if spec.include_container_artifacts:
            paths.append("docker")
            if spec.has_backend:
                backend = spec.backend.key
                paths.extend([f"docker/{backend}", f"docker/{backend}/init"])

        return _unique(paths)

    def plan_domain(self, domain: str, *, include_tests: bool = False) -> list[str]:
        """Directories for a single domain (and its test subtree)."""
        root = f"src/{domain}"
        paths = [root, *(f"{root}/{layer}" for layer in DOMAIN_LAYERS)]
        if include_tests:
            paths.extend(
                [f"tests/{domain}", f"tests/{domain}/unit", f"tests/{domain}/integration"]
            )
        return paths


def _unique(paths: list[str]) -> list[str]:
    return list(dict.fromkeys(paths))
