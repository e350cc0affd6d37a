"""
Two-phase status resolution for many files at once.

Phase 1 asks ``git diff --raw`` about every candidate; it answers for files
that differ from the compare target but says nothing about clean or untracked
files. Phase 2 asks ``git ls-files -t`` about whatever phase 1 left
unresolved. That bounds a refresh to two git processes however many files
are involved.
"""

from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from loguru import logger

from .parsers import parse_listing, parse_raw_diff, parse_unmerged
from .process import ProcessRunner
from .records import FileRecord, FileStatus


DEFAULT_LISTING_FLAGS = ("--cached", "--others", "--exclude-standard")


class BatchStatusResolver:
    """Resolves path -> FileStatus mappings inside one repository."""

    def __init__(
        self,
        executable: str = "git",
        compare_target: str = "HEAD",
        listing_flags: Sequence[str] = DEFAULT_LISTING_FLAGS,
        runner_factory: Optional[Callable[[Path], ProcessRunner]] = None,
    ):
        self.executable = executable
        self.compare_target = compare_target
        self.listing_flags = list(listing_flags)
        self.runner_factory = runner_factory or ProcessRunner

    def diff_args(self, paths: Sequence[str]) -> List[str]:
        return ["diff", "-z", "--full-index", "--raw", "--abbrev=40", self.compare_target, "--", *paths]

    def listing_args(self, paths: Sequence[str]) -> List[str]:
        return ["ls-files", "-t", "-z", *self.listing_flags, "--", *paths]

    def diff_records(self, root: Path, paths: Sequence[str], unmerged: Iterable[str] = ()) -> List[FileRecord]:
        """Run the raw diff query and parse it."""
        result = self.runner_factory(root).run(self.executable, self.diff_args(paths)).check()
        return parse_raw_diff(result.output, unmerged)

    def listing_records(self, root: Path, paths: Sequence[str]) -> List[FileRecord]:
        """Run the listing query and parse it."""
        result = self.runner_factory(root).run(self.executable, self.listing_args(paths)).check()
        return parse_listing(result.output)

    def unmerged_paths(self, root: Path, paths: Sequence[str] = ()) -> set:
        """Paths with unresolved conflicts, for use as the unmerged side table."""
        args = ["ls-files", "-z", "--unmerged", "--", *paths]
        result = self.runner_factory(root).run(self.executable, args).check()
        return parse_unmerged(result.output)

    def resolve_records(
        self,
        root: Path,
        paths: Optional[Iterable[str]] = None,
        unmerged: Iterable[str] = (),
    ) -> Dict[str, FileRecord]:
        """Resolve candidates to records keyed by name.

        With no candidates the whole tree under ``root`` is resolved. Paths
        neither query reports on are absent from the result.
        """
        candidates = list(dict.fromkeys(paths or ()))
        resolved: Dict[str, FileRecord] = {}

        for record in self.diff_records(root, candidates, unmerged):
            resolved[record.name] = record
        logger.debug(f"Phase 1 resolved {len(resolved)} paths")

        if candidates:
            remaining = [path for path in candidates if path not in resolved]
            if not remaining:
                return resolved
        else:
            remaining = []

        added = 0
        for record in self.listing_records(root, remaining):
            if record.name not in resolved:
                resolved[record.name] = record
                added += 1
        logger.debug(f"Phase 2 resolved {added} more paths")

        return resolved

    def resolve(
        self,
        root: Path,
        paths: Optional[Iterable[str]] = None,
        unmerged: Iterable[str] = (),
    ) -> Dict[str, FileStatus]:
        """Resolve candidates to a path -> status mapping."""
        records = self.resolve_records(root, paths, unmerged)
        return {name: record.status for name, record in records.items()}

    def resolve_one(self, root: Path, path: str, unmerged: Iterable[str] = ()) -> Optional[FileStatus]:
        """Status of a single path, or None when neither query knows it."""
        for record in self.diff_records(root, [path], unmerged):
            if record.name == path:
                return record.status
        for record in self.listing_records(root, [path]):
            if record.name == path:
                return record.status
        return None
