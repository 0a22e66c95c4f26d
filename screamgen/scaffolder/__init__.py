"""screamgen scaffolder -- generates domain-first Express projects.

This package takes a ``ProjectSpecification`` (or a plain mapping / JSON file
with the same fields) and writes a Node.js project whose ``src/`` folder has
one three-layer subtree per domain, plus the shared kernel, configuration and
optional jest and Docker artifacts.

Quick usage::

    from screamgen.scaffolder import ProjectGenerator

    generator = ProjectGenerator(
        {"name": "shop", "domains": ["orders", "users"]},
        "/tmp/output",
    )
    report = await generator.generate()

    # later, add one more domain to the same tree
    from screamgen.scaffolder import DomainExtender

    report = await DomainExtender("/tmp/output/shop").add_domain("billing")
"""

from screamgen.scaffolder.errors import (
    CollisionError,
    FilesystemError,
    ProjectExistsError,
    ProjectNotFoundError,
    ScaffoldError,
    SpecificationError,
    TemplateResolutionWarning,
    TemplateSourceError,
)
from screamgen.scaffolder.extender import DomainExtender
from screamgen.scaffolder.filesystem import FilesystemCapability, LocalFilesystem
from screamgen.scaffolder.generator import ProjectGenerator, generate_project
from screamgen.scaffolder.models import (
    Artifact,
    GenerationPlan,
    GenerationReport,
    GenerationStage,
    PersistenceBackend,
    ProjectSpecification,
    load_specification,
    validate_specification,
)
from screamgen.scaffolder.naming import DomainSpecification, derive
from screamgen.scaffolder.planner import DirectoryPlanner
from screamgen.scaffolder.templates import TemplateRenderer

__all__ = [
    "Artifact",
    "CollisionError",
    "DirectoryPlanner",
    "DomainExtender",
    "DomainSpecification",
    "FilesystemCapability",
    "FilesystemError",
    "GenerationPlan",
    "GenerationReport",
    "GenerationStage",
    "LocalFilesystem",
    "PersistenceBackend",
    "ProjectExistsError",
    "ProjectGenerator",
    "ProjectNotFoundError",
    "ProjectSpecification",
    "ScaffoldError",
    "SpecificationError",
    "TemplateRenderer",
    "TemplateResolutionWarning",
    "TemplateSourceError",
    "derive",
    "generate_project",
    "load_specification",
    "validate_specification",
]
