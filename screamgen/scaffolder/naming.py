"""Name derivation for generated domains.

Every file name, class name, route path and ``require`` target that mentions a
domain is computed here, from one ``DomainSpecification``.  Generators never
build these strings themselves, which is what keeps a controller's
``require('../../application/use-cases/CreateOrdersUseCase')`` pointing at the
file the use-case generator actually wrote.

Derivation rules (deliberately simple):

* ``capitalized_name``: first character upper-cased, the rest untouched
  (``order-items`` -> ``Order-items``).  Multi-word domains are *not* turned
  into PascalCase, so a hyphenated domain yields class names that are not
  valid JavaScript identifiers.  Keep domain names single-word when the
  generated code must run as-is.
* ``upper_name``: the whole string upper-cased, hyphens kept.
* ``camel_name``: every ``-x`` becomes ``X`` (``order-items`` -> ``orderItems``);
  used for JavaScript variables.
* ``plural_name``: ``camel_name + "s"``.
"""

from __future__ import annotations

import posixpath
import re
from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import SpecificationError
from .models import SLUG_PATTERN, BackendProfile, is_slug


# ---------------------------------------------------------------------------
# Shared project paths
# ---------------------------------------------------------------------------

SERVER_PATH = "src/server.js"
EVENT_BUS_PATH = "src/shared/infrastructure/messaging/EventBus.js"
SHARED_ERRORS_PATH = "src/shared/domain/errors.js"
DATABASE_CONFIG_PATH = "config/database.js"
SERVER_CONFIG_PATH = "config/server.js"
APP_CONFIG_PATH = "config/app.js"

# (class-name prefix, verb used in event types and messages)
USE_CASE_ACTIONS: tuple[tuple[str, str], ...] = (
    ("Create", "create"),
    ("Update", "update"),
    ("Delete", "delete"),
    ("FindById", "findById"),
    ("FindAll", "findAll"),
)

_HYPHEN_CHAR_RE = re.compile(r"-([a-z0-9])")


# ---------------------------------------------------------------------------
# DomainSpecification
# ---------------------------------------------------------------------------

class DomainSpecification(BaseModel):
    """The four derived name forms of one domain, plus its file layout."""
    model_config = ConfigDict(frozen=True)

    raw_name: str
    capitalized_name: str
    upper_name: str
    camel_name: str

    # -- Identifiers -------------------------------------------------------

    @property
    def plural_name(self) -> str:
        return f"{self.camel_name}s"

    @property
    def entity_class(self) -> str:
        return self.capitalized_name

    @property
    def port_class(self) -> str:
        return f"{self.capitalized_name}Repository"

    @property
    def memory_repository_class(self) -> str:
        return f"Memory{self.capitalized_name}Repository"

    def backend_repository_class(self, backend: BackendProfile) -> str:
        return f"{backend.repository_prefix}{self.capitalized_name}Repository"

    @property
    def controller_class(self) -> str:
        return f"{self.capitalized_name}Controller"

    def use_case_class(self, action: str) -> str:
        return f"{action}{self.capitalized_name}UseCase"

    def event_type(self, past_tense: str) -> str:
        """Domain event name, e.g. ``OrdersCreated``."""
        return f"{self.capitalized_name}{past_tense}"

    @property
    def mount_path(self) -> str:
        return f"/api/{self.raw_name}"

    @property
    def routes_binding(self) -> str:
        return f"{self.camel_name}Routes"

    # -- Paths (project-relative, POSIX separators) ------------------------

    @property
    def root(self) -> str:
        return f"src/{self.raw_name}"

    @property
    def entity_path(self) -> str:
        return f"{self.root}/domain/entities/{self.entity_class}.js"

    def use_case_path(self, action: str) -> str:
        return f"{self.root}/application/use-cases/{self.use_case_class(action)}.js"

    @property
    def port_path(self) -> str:
        return f"{self.root}/application/ports/{self.port_class}.js"

    def repository_path(self, class_name: str) -> str:
        return f"{self.root}/infrastructure/repositories/{class_name}.js"

    @property
    def controller_path(self) -> str:
        return f"{self.root}/infrastructure/controllers/{self.controller_class}.js"

    @property
    def routes_path(self) -> str:
        return f"{self.root}/infrastructure/routes.js"

    @property
    def unit_test_path(self) -> str:
        return f"tests/{self.raw_name}/unit/{self.entity_class}.test.js"

    @property
    def integration_test_path(self) -> str:
        return f"tests/{self.raw_name}/integration/{self.raw_name}.routes.test.js"

    # -- Template context --------------------------------------------------

    def as_context(self) -> dict[str, Any]:
        """Flatten names and layout into a plain dict for templates."""
        return {
            "raw_name": self.raw_name,
            "capitalized_name": self.capitalized_name,
            "upper_name": self.upper_name,
            "camel_name": self.camel_name,
            "plural_name": self.plural_name,
            "entity_class": self.entity_class,
            "port_class": self.port_class,
            "memory_repository_class": self.memory_repository_class,
            "controller_class": self.controller_class,
            "mount_path": self.mount_path,
            "routes_binding": self.routes_binding,
            "routes_path": self.routes_path,
            "use_cases": [
                {
                    "action": action,
                    "verb": verb,
                    "class_name": self.use_case_class(action),
                    "path": self.use_case_path(action),
                }
                for action, verb in USE_CASE_ACTIONS
            ],
        }


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------

def derive(raw_name: str) -> DomainSpecification:
    """Derive every name form of *raw_name*.  Pure and deterministic."""
    return DomainSpecification(
        raw_name=raw_name,
        capitalized_name=raw_name[:1].upper() + raw_name[1:],
        upper_name=raw_name.upper(),
        camel_name=_HYPHEN_CHAR_RE.sub(lambda m: m.group(1).upper(), raw_name),
    )


def validate_domain_name(raw_name: str) -> str:
    """Return *raw_name* unchanged, or raise ``SpecificationError``."""
    if not is_slug(raw_name):
        raise SpecificationError(
            f"Invalid domain name {raw_name!r}: must match {SLUG_PATTERN}"
        )
    return raw_name


def require_path(from_file: str, to_file: str) -> str:
    """CommonJS ``require`` target for *to_file* as seen from *from_file*.

    Both paths are project-relative.  The ``.js`` suffix is dropped and a
    leading ``./`` is added when the target is not above the requiring file.

        require_path("src/server.js", "src/orders/infrastructure/routes.js")
        -> "./orders/infrastructure/routes"
    """
    target, ext = posixpath.splitext(to_file)
    if ext != ".js":
        target = to_file
    start = posixpath.dirname(from_file) or "."
    relative = posixpath.relpath(target, start)
    if not relative.startswith("."):
        relative = f"./{relative}"
    return relative
