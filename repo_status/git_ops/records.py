"""
File records and status classification shared by the git query parsers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


def is_zero_hash(value: Optional[str]) -> bool:
    """True for a missing hash or git's all-zero placeholder (any hash length)."""
    return not value or set(value) == {"0"}


class FileStatus(str, Enum):
    """Closed set of per-file statuses reported by the engine."""

    UPTODATE = "uptodate"
    MODIFIED = "modified"
    STAGED = "staged"
    UNKNOWN = "unknown"
    ADDED = "added"
    DELETED = "deleted"
    UNMERGED = "unmerged"
    KILLED = "killed"


class EntryType(str, Enum):
    """Kind of object a record names."""

    BLOB = "blob"
    TREE = "tree"
    COMMIT = "commit"


# One letter, one status. T (type change) is reported as a modification.
STATUS_LETTERS: Dict[str, FileStatus] = {
    "H": FileStatus.UPTODATE,
    "M": FileStatus.MODIFIED,
    "?": FileStatus.UNKNOWN,
    "A": FileStatus.ADDED,
    "D": FileStatus.DELETED,
    "U": FileStatus.UNMERGED,
    "T": FileStatus.MODIFIED,
    "K": FileStatus.KILLED,
}


def classify(letter: str) -> Optional[FileStatus]:
    """Map a one-letter status code to a FileStatus.

    Unknown letters return None, meaning "no opinion": callers skip the
    entry and keep whatever they already know about the path.
    """
    return STATUS_LETTERS.get(letter)


@dataclass(frozen=True)
class FileRecord:
    """One path of interest as reported by a single git query."""

    name: str
    entry_type: EntryType = EntryType.BLOB
    status: Optional[FileStatus] = None
    permission: Optional[str] = None
    content_hash: Optional[str] = None

    @property
    def is_directory(self) -> bool:
        return self.entry_type is not EntryType.BLOB

    @property
    def has_content_hash(self) -> bool:
        """True when the hash names real content rather than the all-zero placeholder."""
        return not is_zero_hash(self.content_hash)
