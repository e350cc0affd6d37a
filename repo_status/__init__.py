"""
Repo Status - per-file git status for tree-shaped file views.

Resolves the status of many files with at most two git plumbing calls and
orders the results as a nested directory tree.
"""

__version__ = "1.0.0"

from repo_status.core import RepoStatus
from repo_status.config.settings import Settings
from repo_status.errors import NotARepositoryError, ProcessFailure, RepoStatusError
from repo_status.git_ops.records import EntryType, FileRecord, FileStatus

__all__ = [
    "RepoStatus",
    "Settings",
    "RepoStatusError",
    "ProcessFailure",
    "NotARepositoryError",
    "FileStatus",
    "FileRecord",
    "EntryType",
]
