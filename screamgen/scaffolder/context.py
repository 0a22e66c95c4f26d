"""Template context construction.

Every template receives the same top-level keys:

``project``
    The specification fields (``name``, ``domains``, flags, ...).
``backend``
    The selected ``BackendProfile`` (``backend.enabled`` is false for none).
``settings``
    ``GeneratorSettings.template_values()``.
``domains``
    ``DomainSpecification.as_context()`` for every domain, in spec order.

Domain-scoped artifacts additionally get ``domain`` (the same dict as the
matching ``domains`` entry) and ``requires`` (``require`` targets computed for
that artifact's own location).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from screamgen.config import GeneratorSettings

from .models import ProjectSpecification
from .naming import DomainSpecification, derive, require_path


def project_context(
    spec: ProjectSpecification, settings: GeneratorSettings
) -> dict[str, Any]:
    """Build the context shared by every artifact of *spec*."""
    project = spec.model_dump(mode="json")
    project["domains"] = list(spec.domains)
    project["capitalized_name"] = spec.name[:1].upper() + spec.name[1:]
    return {
        "project": project,
        "backend": spec.backend.model_dump(),
        "settings": settings.template_values(),
        "domains": [derive(d).as_context() for d in spec.domains],
    }


def domain_context(
    base: Mapping[str, Any],
    domain: DomainSpecification,
    *,
    artifact_path: str,
    targets: Optional[Mapping[str, str]] = None,
    **extra: Any,
) -> dict[str, Any]:
    """Extend *base* with ``domain`` and ``requires`` for one artifact.

    *targets* maps a key to a project-relative file; each becomes
    ``requires.<key>``, the ``require`` string from *artifact_path*.
    """
    requires = {
        key: require_path(artifact_path, target)
        for key, target in (targets or {}).items()
    }
    return {
        **base,
        "domain": domain.as_context(),
        "requires": requires,
        "artifact_path": artifact_path,
        **extra,
    }
