"""screamgen configuration.

Centralised, typed settings for the scaffolder. All settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.  Every value here is
exposed to the templates under the ``settings`` key, so one number (say the
maximum name length) lands identically in every generated file that needs it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class DependencyVersions(BaseModel):
    """npm version ranges written into the generated ``package.json``."""

    express: str = Field(default="^4.18.2")
    cors: str = Field(default="^2.8.5")
    helmet: str = Field(default="^7.0.0")
    dotenv: str = Field(default="^16.3.1")
    nodemon: str = Field(default="^3.0.1")
    mongoose: str = Field(default="^7.5.0")
    pg: str = Field(default="^8.11.3")
    mysql2: str = Field(default="^3.6.0")
    jest: str = Field(default="^29.6.4")
    supertest: str = Field(default="^6.3.3")


class GeneratorSettings(BaseModel):
    """Global scaffolder settings.

    Instances are typically created once by the CLI (``from_env``) and then
    handed to ``ProjectGenerator`` / ``DomainExtender``.
    """

    output_dir: Path = Field(default=Path("."))
    templates_dir: Optional[Path] = Field(
        default=None,
        description="Directory whose templates shadow the bundled ones by relative name",
    )
    app_port: int = Field(default=3000, ge=1, le=65535)
    debug_port: int = Field(default=9229, ge=1, le=65535)
    node_image: str = Field(default="node:18-alpine")
    max_name_length: int = Field(default=255, ge=1)
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    log_level: str = Field(default="INFO")
    dependencies: DependencyVersions = Field(default_factory=DependencyVersions)

    # ------------------------------------------------------------------
    # Template exposure
    # ------------------------------------------------------------------

    def template_values(self) -> dict[str, Any]:
        """Return the subset of settings that templates may reference."""
        return self.model_dump(
            mode="json", exclude={"output_dir", "templates_dir", "log_level"}
        )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return the written path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorSettings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorSettings":
        """Build ``GeneratorSettings`` from environment variables.

        Recognised variables (all optional):
            SCREAMGEN_OUTPUT_DIR, SCREAMGEN_TEMPLATES_DIR, SCREAMGEN_APP_PORT,
            SCREAMGEN_DEBUG_PORT, SCREAMGEN_NODE_IMAGE,
            SCREAMGEN_MAX_NAME_LENGTH, SCREAMGEN_LOG_LEVEL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCREAMGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SCREAMGEN_OUTPUT_DIR"])
        if os.environ.get("SCREAMGEN_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["SCREAMGEN_TEMPLATES_DIR"])
        if os.environ.get("SCREAMGEN_APP_PORT"):
            kwargs["app_port"] = int(os.environ["SCREAMGEN_APP_PORT"])
        if os.environ.get("SCREAMGEN_DEBUG_PORT"):
            kwargs["debug_port"] = int(os.environ["SCREAMGEN_DEBUG_PORT"])
        if os.environ.get("SCREAMGEN_NODE_IMAGE"):
            kwargs["node_image"] = os.environ["SCREAMGEN_NODE_IMAGE"]
        if os.environ.get("SCREAMGEN_MAX_NAME_LENGTH"):
            kwargs["max_name_length"] = int(os.environ["SCREAMGEN_MAX_NAME_LENGTH"])
        if os.environ.get("SCREAMGEN_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["SCREAMGEN_LOG_LEVEL"].upper()
        return cls(**kwargs)
