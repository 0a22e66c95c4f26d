"""Pydantic v2 models for the scaffolder.

Defines the project specification accepted by the generator, the persistence
backend profiles, and the value objects produced while planning and running a
generation (artifacts, plan steps, the final report).
"""

from __future__ import annotations

import json
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Mapping, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from .errors import SpecificationError

logger = logging.getLogger(__name__)

SLUG_PATTERN = r"^[a-z][a-z0-9-]*$"
_SLUG_RE = re.compile(SLUG_PATTERN)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class PersistenceBackend(str, Enum):
    """Storage technology the generated project is wired for."""
    NONE = "none"
    MONGODB = "mongodb"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


class GenerationStage(str, Enum):
    """Linear stages of a generation run, in execution order."""
    PLANNED = "planned"
    STRUCTURE_CREATED = "structure_created"
    BASE_FILES_GENERATED = "base_files_generated"
    DOMAINS_GENERATED = "domains_generated"
    CONFIG_GENERATED = "config_generated"
    CONTAINER_ARTIFACTS_GENERATED = "container_artifacts_generated"
    DONE = "done"


# ---------------------------------------------------------------------------
# Backend profiles
# ---------------------------------------------------------------------------

class BackendProfile(BaseModel):
    """Everything the templates need to know about one persistence backend."""
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    enabled: bool = True
    repository_prefix: str = ""
    driver: str = ""
    image: str = ""
    port: int = 0
    volume: str = ""
    service: str = ""
    init_script: str = ""


BACKEND_PROFILES: dict[PersistenceBackend, BackendProfile] = {
    PersistenceBackend.NONE: BackendProfile(
        key="none", label="None", enabled=False,
    ),
    PersistenceBackend.MONGODB: BackendProfile(
        key="mongodb",
        label="MongoDB",
        repository_prefix="Mongo",
        driver="mongoose",
        image="mongo:7-jammy",
        port=27017,
        volume="mongodb_data",
        service="mongodb",
        init_script="01-init.js",
    ),
    PersistenceBackend.POSTGRESQL: BackendProfile(
        key="postgresql",
        label="PostgreSQL",
        repository_prefix="Postgres",
        driver="pg",
        image="postgres:15-alpine",
        port=5432,
        volume="postgres_data",
        service="postgres",
        init_script="01-init.sql",
    ),
    PersistenceBackend.MYSQL: BackendProfile(
        key="mysql",
        label="MySQL",
        repository_prefix="Mysql",
        driver="mysql2",
        image="mysql:8.0",
        port=3306,
        volume="mysql_data",
        service="mysql",
        init_script="01-init.sql",
    ),
}


# ---------------------------------------------------------------------------
# Project specification
# ---------------------------------------------------------------------------

def is_slug(value: str) -> bool:
    """Return ``True`` if *value* is a valid project/domain identifier."""
    return bool(_SLUG_RE.match(value))


def slugify(text: str) -> str:
    """Convert text to a slug, or ``""`` if nothing usable is left.

    E.g. ``'@acme/Shop API'`` -> ``'acme-shop-api'``.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower().strip())
    slug = re.sub(r"^[^a-z]+", "", slug)
    return slug.strip("-")


class ProjectSpecification(BaseModel):
    """The validated, immutable description of the project to generate.

    Field names are snake_case; the camelCase spellings used by older
    specification files (``includeTests``, ``includeDocker``, ``database``)
    are accepted as aliases.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., pattern=SLUG_PATTERN, description="Project slug")
    description: str = Field(default="")
    author: str = Field(default="")
    version: str = Field(default="1.0.0", min_length=1)
    domains: tuple[str, ...] = Field(..., min_length=1)
    include_tests: bool = Field(
        default=False,
        validation_alias=AliasChoices("include_tests", "includeTests"),
    )
    include_container_artifacts: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "include_container_artifacts",
            "includeContainerArtifacts",
            "include_docker",
            "includeDocker",
        ),
    )
    persistence_backend: PersistenceBackend = Field(
        default=PersistenceBackend.NONE,
        validation_alias=AliasChoices(
            "persistence_backend", "persistenceBackend", "database"
        ),
    )

    @field_validator("domains")
    @classmethod
    def _check_domains(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        for domain in value:
            if not is_slug(domain):
                raise ValueError(
                    f"domain {domain!r} must match {SLUG_PATTERN}"
                )
            if domain in seen:
                raise ValueError(f"domain {domain!r} is listed more than once")
            seen.add(domain)
        return value

    @field_validator("persistence_backend", mode="before")
    @classmethod
    def _coerce_backend(cls, value: Any) -> Any:
        if isinstance(value, PersistenceBackend) or value is None:
            return value or PersistenceBackend.NONE
        known = {b.value for b in PersistenceBackend}
        if str(value).lower() not in known:
            logger.warning(
                "Unrecognised persistence backend %r; generating in-memory repositories only",
                value,
            )
            return PersistenceBackend.NONE
        return str(value).lower()

    @property
    def backend(self) -> BackendProfile:
        """Profile of the selected persistence backend."""
        return BACKEND_PROFILES[self.persistence_backend]

    @property
    def has_backend(self) -> bool:
        return self.persistence_backend is not PersistenceBackend.NONE

    def with_domain(self, domain: str) -> "ProjectSpecification":
        """Return a copy with *domain* appended, validated like the rest."""
        data = self.model_dump()
        data["domains"] = (*self.domains, domain)
        return validate_specification(data)


def validate_specification(data: Mapping[str, Any]) -> ProjectSpecification:
    """Validate raw specification data, raising ``SpecificationError``."""
    try:
        return ProjectSpecification.model_validate(dict(data))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'specification'}: {err['msg']}"
            for err in exc.errors()
        )
        raise SpecificationError(f"Invalid project specification: {problems}") from exc


def load_specification(path: str | Path) -> ProjectSpecification:
    """Load and validate a specification from a JSON file."""
    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SpecificationError(
            f"Cannot read specification file {file_path}: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise SpecificationError(
            f"Specification file {file_path} must contain a JSON object"
        )
    return validate_specification(data)


# ---------------------------------------------------------------------------
# Artifacts & plans
# ---------------------------------------------------------------------------

class Artifact(BaseModel):
    """One generated file: its project-relative path and full text."""
    model_config = ConfigDict(frozen=True)

    relative_path: str
    content: str
    producer: str = Field(default="", description="Generator that produced it")
    executable: bool = Field(default=False)


class PlanStep(BaseModel):
    """A single directory or file operation in a generation plan."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["directory", "file"]
    path: str
    producer: str
    stage: GenerationStage
    artifact: Optional[Artifact] = None


class GenerationPlan(BaseModel):
    """Ordered directory and file steps for one run, plus render diagnostics."""

    steps: list[PlanStep] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def directories(self) -> list[str]:
        return [s.path for s in self.steps if s.kind == "directory"]

    @property
    def files(self) -> list[str]:
        return [s.path for s in self.steps if s.kind == "file"]

    @property
    def artifacts(self) -> list[Artifact]:
        return [s.artifact for s in self.steps if s.artifact is not None]

    def artifact(self, relative_path: str) -> Optional[Artifact]:
        """Return the artifact planned for *relative_path*, if any."""
        for step in self.steps:
            if step.artifact is not None and step.path == relative_path:
                return step.artifact
        return None

    def stages(self) -> list[tuple[GenerationStage, list[PlanStep]]]:
        """Group steps by stage, preserving first-seen stage order."""
        grouped: dict[GenerationStage, list[PlanStep]] = {}
        for step in self.steps:
            grouped.setdefault(step.stage, []).append(step)
        return list(grouped.items())


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class GenerationReport(BaseModel):
    """What a generation or extension run did, returned to the caller."""

    project_name: str
    project_root: str = ""
    stage: Optional[GenerationStage] = None
    stages_completed: list[GenerationStage] = Field(default_factory=list)
    directories: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    follow_ups: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.stage is GenerationStage.DONE and not self.errors

    def advance(self, stage: GenerationStage) -> None:
        """Record that *stage* completed."""
        self.stage = stage
        self.stages_completed.append(stage)
