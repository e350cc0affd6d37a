"""
Repository root discovery and path normalisation.
"""

import os
from pathlib import Path, PurePosixPath
from typing import Callable, Optional, Union

from loguru import logger

from ..errors import NotARepositoryError, ProcessFailure
from .process import ProcessRunner


RunnerFactory = Callable[[Path], ProcessRunner]


def current_directory() -> Path:
    """The process working directory, even after it was removed from disk.

    ``os.getcwd`` fails once the directory is gone; the shell's ``PWD`` still
    names it, and callers climb from there. Falls back to the filesystem root.
    """
    try:
        return Path(os.getcwd())
    except FileNotFoundError:
        fallback = Path(os.environ.get("PWD") or os.sep)
        if not fallback.is_absolute():
            fallback = Path(os.sep)
        logger.warning(f"Working directory is gone, starting from {fallback}")
        return fallback


def nearest_existing_directory(path: Union[str, Path]) -> Path:
    """Return ``path`` or its closest ancestor that still exists on disk.

    A working directory can vanish underneath us, e.g. when a branch switch
    removes it. The walk stops at the filesystem root.
    """
    current = Path(path)
    if not current.is_absolute():
        current = current_directory() / current
    current = Path(os.path.normpath(current))
    while not current.is_dir():
        parent = current.parent
        if parent == current:
            break
        logger.debug(f"{current} does not exist, climbing to {parent}")
        current = parent
    return current


class RepoRootLocator:
    """Finds the top-level directory of the working tree containing a path."""

    def __init__(self, executable: str = "git", runner_factory: Optional[RunnerFactory] = None):
        self.executable = executable
        self.runner_factory = runner_factory or ProcessRunner

    def execution_directory(self, start: Union[str, Path]) -> Path:
        """Directory git commands about ``start`` should run in."""
        return nearest_existing_directory(start)

    def locate(self, start: Union[str, Path, None] = None) -> Path:
        """Resolve the repository root for ``start`` (default: current directory)."""
        context = self.execution_directory(start or current_directory())
        result = self.runner_factory(context).run(self.executable, ["rev-parse", "--show-cdup"])
        try:
            result.check()
        except ProcessFailure as e:
            raise NotARepositoryError(e.command, e.exit_code, e.output) from e

        cdup = result.output.decode("utf-8", errors="surrogateescape").strip()
        root = (context / cdup).resolve() if cdup else context.resolve()
        logger.debug(f"Repository root for {context} is {root}")
        return root


def relative_to_root(root: Path, path: Union[str, Path], base: Optional[Path] = None) -> str:
    """Express ``path`` relative to ``root`` with ``/`` separators.

    Relative paths are taken relative to ``base`` (default: current directory).
    Raises ValueError for paths outside the repository.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = (base or current_directory()) / candidate
    candidate = Path(os.path.normpath(candidate))
    try:
        relative = candidate.relative_to(root)
    except ValueError:
        # root is resolved; retry with symlinks resolved on the candidate side
        relative = candidate.resolve().relative_to(root)
    text = PurePosixPath(*relative.parts).as_posix()
    return "" if text == "." else text
