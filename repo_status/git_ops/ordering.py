"""
Tree ordering for file records.

Sorting with ``compare_records`` yields a flattened tree: everything under a
directory is contiguous, deeper entries come before shallower ones at the same
branch point, and a directory entry sits right after its own contents. Files
directly in a directory therefore follow its subdirectories; at the top level
``README`` sorts after ``src/x.py``.
"""

import functools
import posixpath
from typing import Iterable, List

from .records import FileRecord


def directory_key(record: FileRecord) -> str:
    """Directory a record belongs to, with a trailing slash ("" for the root)."""
    name = record.name.rstrip("/")
    if record.is_directory:
        return name + "/"
    parent = posixpath.dirname(name)
    return parent + "/" if parent else ""


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_records(first: FileRecord, second: FileRecord) -> int:
    """Three-way comparison of two records in display order."""
    key1 = directory_key(first)
    key2 = directory_key(second)

    if key1 == key2:
        # same directory; the directory entry itself goes after its files
        if first.is_directory != second.is_directory:
            return 1 if first.is_directory else -1
        return _cmp(first.name, second.name)

    if key2.startswith(key1):
        # first lives in an ancestor of second's directory
        return 1
    if key1.startswith(key2):
        return -1
    return _cmp(key1, key2)


def tree_lessp(first: FileRecord, second: FileRecord) -> bool:
    return compare_records(first, second) < 0


def order_for_display(records: Iterable[FileRecord]) -> List[FileRecord]:
    """Return ``records`` sorted into nested tree order."""
    return sorted(records, key=functools.cmp_to_key(compare_records))
