"""Shared pytest fixtures for the screamgen test suite.

Provides reusable fixtures for:
- Project specifications (the two-domain ``shop`` and a fully featured one)
- Settings and a template renderer over the bundled templates
- A mocked ``FilesystemCapability`` for orchestration tests
- A project generated on disk under ``tmp_path``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from screamgen.config import GeneratorSettings
from screamgen.scaffolder.filesystem import LocalFilesystem
from screamgen.scaffolder.generator import ProjectGenerator
from screamgen.scaffolder.models import (
    GenerationReport,
    PersistenceBackend,
    ProjectSpecification,
)
from screamgen.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Specifications
# ---------------------------------------------------------------------------

@pytest.fixture
def shop_spec() -> ProjectSpecification:
    """Two domains, no backend, no tests, no containers."""
    return ProjectSpecification(
        name="shop",
        description="A small shop",
        author="Shop Team",
        domains=("orders", "users"),
    )


@pytest.fixture
def full_spec() -> ProjectSpecification:
    """Every optional feature switched on, PostgreSQL backend."""
    return ProjectSpecification(
        name="inventory",
        description="Inventory service",
        author="Ops",
        version="2.1.0",
        domains=("products", "warehouses", "suppliers"),
        include_tests=True,
        include_container_artifacts=True,
        persistence_backend=PersistenceBackend.POSTGRESQL,
    )


@pytest.fixture
def spec_data() -> dict[str, Any]:
    """Raw specification mapping using the camelCase spellings."""
    return {
        "name": "blog",
        "description": "Blogging API",
        "author": "Writers",
        "version": "0.3.0",
        "domains": ["posts", "comments"],
        "includeTests": True,
        "includeDocker": False,
        "database": "mongodb",
    }


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings()


@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the bundled templates only."""
    return TemplateRenderer()


@pytest.fixture
def mock_fs() -> AsyncMock:
    """A ``FilesystemCapability`` double: nothing exists, every write succeeds."""
    fs = AsyncMock(spec=LocalFilesystem)
    fs.exists.return_value = False
    fs.list_files.return_value = []
    return fs


# ---------------------------------------------------------------------------
# Generated projects
# ---------------------------------------------------------------------------

async def generate_into(
    spec: ProjectSpecification, output_dir: Path, **kwargs: Any
) -> GenerationReport:
    """Generate *spec* under *output_dir* with default settings."""
    generator = ProjectGenerator(spec, output_dir, **kwargs)
    return await generator.generate()


@pytest.fixture
async def shop_project(shop_spec: ProjectSpecification, tmp_path: Path) -> Path:
    """The ``shop`` project generated on disk; returns its root."""
    await generate_into(shop_spec, tmp_path)
    return tmp_path / shop_spec.name


@pytest.fixture
async def full_project(full_spec: ProjectSpecification, tmp_path: Path) -> Path:
    """The fully featured project generated on disk; returns its root."""
    await generate_into(full_spec, tmp_path)
    return tmp_path / full_spec.name
