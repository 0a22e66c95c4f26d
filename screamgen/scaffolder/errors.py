"""Error and warning taxonomy for the scaffolder."""

from __future__ import annotations

from typing import Optional


class ScaffoldError(Exception):
    """Base class for every error the scaffolder raises on purpose."""


class SpecificationError(ScaffoldError, ValueError):
    """The project specification (or a domain name) is invalid.

    Always raised before any directory or file is touched.
    """


class FilesystemError(ScaffoldError):
    """A filesystem operation failed.

    ``str(error)`` is the operating system's message, unmodified; the failing
    operation and path are kept as attributes and the ``OSError`` is chained.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str = "",
        path: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.path = path


class TemplateSourceError(ScaffoldError):
    """A template could not be found or could not be parsed."""


class ProjectExistsError(ScaffoldError):
    """The target project directory exists and overwrite was not confirmed."""


class ProjectNotFoundError(ScaffoldError):
    """A domain extension was requested for a directory that is not a project."""


class CollisionError(ScaffoldError):
    """The domain being added already exists in the project tree."""


class TemplateResolutionWarning(UserWarning):
    """A ``${dotted.path}`` placeholder did not resolve and was left verbatim."""
