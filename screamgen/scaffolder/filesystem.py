"""Filesystem capability used by the generator and the domain extender.

The orchestration code only talks to ``FilesystemCapability``; the default
``LocalFilesystem`` implementation maps project-relative POSIX paths onto a
root directory and runs every blocking call in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from .errors import FilesystemError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class FilesystemCapability(Protocol):
    """The file operations the scaffolder needs.  Paths are project-relative."""

    async def ensure_directory(self, path: str) -> None:
        """Create *path* (and parents); an existing directory is a no-op."""
        ...

    async def write_file(self, path: str, content: str) -> None:
        """Write *content*, creating the parent directory first."""
        ...

    async def read_file(self, path: str) -> str:
        ...

    async def exists(self, path: str) -> bool:
        ...

    async def copy_file(self, source: str, destination: str) -> None:
        ...

    async def list_files(self, directory: str) -> list[str]:
        """Return the sorted entry names directly inside *directory*."""
        ...

    async def make_executable(self, path: str) -> None:
        """Best-effort chmod +x; skipped where execute bits do not exist."""
        ...


class LocalFilesystem:
    """``FilesystemCapability`` backed by the local disk under *root*."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        """Absolute location of the project-relative *path*."""
        return self.root / path

    # -- Operations --------------------------------------------------------

    async def ensure_directory(self, path: str) -> None:
        target = self.resolve(path)
        await self._run("ensure_directory", path, _mkdir, target)

    async def write_file(self, path: str, content: str) -> None:
        target = self.resolve(path)
        await self._run("write_file", path, _write_file, target, content)

    async def read_file(self, path: str) -> str:
        target = self.resolve(path)
        return await self._run("read_file", path, target.read_text, "utf-8")

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self.resolve(path).exists)

    async def copy_file(self, source: str, destination: str) -> None:
        src = self.resolve(source)
        dst = self.resolve(destination)
        await self._run("copy_file", destination, _copy_file, src, dst)

    async def list_files(self, directory: str) -> list[str]:
        target = self.resolve(directory)
        names = await self._run("list_files", directory, os.listdir, target)
        return sorted(names)

    async def make_executable(self, path: str) -> None:
        if os.name == "nt":
            logger.debug("Skipping chmod for %s: no execute permission on this platform", path)
            return
        try:
            await asyncio.to_thread(_make_executable, self.resolve(path))
        except OSError as exc:
            logger.warning("Could not mark %s executable: %s", path, exc)

    # -- Internal helpers --------------------------------------------------

    async def _run(
        self, operation: str, path: str, func: Callable[..., T], *args: Any
    ) -> T:
        try:
            return await asyncio.to_thread(func, *args)
        except OSError as exc:
            raise FilesystemError(str(exc), operation=operation, path=path) from exc


# ---------------------------------------------------------------------------
# Synchronous helpers (run in worker threads)
# ---------------------------------------------------------------------------

def _mkdir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, destination)


def _make_executable(path: Path) -> None:
    """Set every execute bit on *path*."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
