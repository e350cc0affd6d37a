"""
Core status engine that ties root discovery, batch resolution and ordering together.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union
from loguru import logger

from .config.settings import GitSettings
from .git_ops.ordering import order_for_display
from .git_ops.process import ProcessRunner
from .git_ops.records import FileRecord, FileStatus
from .git_ops.repository import RepoRootLocator, RunnerFactory, relative_to_root
from .git_ops.resolver import BatchStatusResolver


class RepoStatus:
    """Pull-style status queries for one git working tree.

    Holds no results between calls: every query runs git again and returns
    fresh values.
    """

    def __init__(
        self,
        repo_path: Union[str, Path, None] = None,
        git_settings: Optional[GitSettings] = None,
        runner_factory: Optional[RunnerFactory] = None,
    ):
        """Locate the repository containing ``repo_path`` (default: current directory)."""
        self.git_settings = git_settings or GitSettings()
        self.runner_factory = runner_factory or ProcessRunner
        self.locator = RepoRootLocator(self.git_settings.executable, self.runner_factory)
        self.resolver = BatchStatusResolver(
            executable=self.git_settings.executable,
            compare_target=self.git_settings.compare_target,
            listing_flags=self.git_settings.listing_flags,
            runner_factory=self.runner_factory,
        )
        self.root = self.locator.locate(repo_path)

        logger.info(f"Status engine ready for {self.root}")

    def relative(self, path: Union[str, Path], base: Optional[Path] = None) -> str:
        """Path relative to the repository root, ``/``-separated."""
        return relative_to_root(self.root, path, base)

    def conflicted_paths(self, paths: Iterable[str] = ()) -> Set[str]:
        """Paths git currently lists as unmerged."""
        return self.resolver.unmerged_paths(self.root, list(paths))

    def _unmerged_side_table(self, paths: Iterable[str]) -> Set[str]:
        if not self.git_settings.detect_conflicts:
            return set()
        return self.conflicted_paths(paths)

    def query_status(self, path: Union[str, Path]) -> Optional[FileStatus]:
        """Status of a single file, or None when git has no opinion on it.

        Strings are taken as repository-relative names; Path objects are
        resolved against the current directory first.
        """
        name = path if isinstance(path, str) else self.relative(path)
        status = self.resolver.resolve_one(self.root, name, self._unmerged_side_table([name]))
        logger.debug(f"{name}: {status.value if status else 'no status'}")
        return status

    def batch_refresh(self, paths: Optional[Iterable[str]] = None) -> Dict[str, FileStatus]:
        """Statuses for many files; the whole tree when ``paths`` is empty."""
        candidates = list(paths or ())
        statuses = self.resolver.resolve(self.root, candidates, self._unmerged_side_table(candidates))
        logger.info(f"Resolved {len(statuses)} paths under {self.root}")
        return statuses

    def list_records(self, paths: Optional[Iterable[str]] = None) -> List[FileRecord]:
        """Resolved records in display order."""
        candidates = list(paths or ())
        records = self.resolver.resolve_records(self.root, candidates, self._unmerged_side_table(candidates))
        return self.order_for_display(records.values())

    @staticmethod
    def order_for_display(records: Iterable[FileRecord]) -> List[FileRecord]:
        """Sort records into nested tree order."""
        return order_for_display(records)
