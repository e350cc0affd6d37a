"""
Parsers for the NUL-separated output of git plumbing queries.

All parsers take the raw bytes a query printed and return fresh
``FileRecord`` objects; nothing here talks to git directly.
"""

import re
from typing import Dict, Iterable, List, Set

from loguru import logger

from .records import EntryType, FileRecord, FileStatus, classify, is_zero_hash


_RAW_HEADER = re.compile(
    r"^:(?P<old_perm>[0-7]{6}) (?P<new_perm>[0-7]{6}) "
    r"(?P<old_hash>[0-9a-f]{40,64}) (?P<new_hash>[0-9a-f]{40,64}) "
    r"(?P<letter>[A-Z])(?P<score>\d*)$"
)

# Letters whose raw records carry a source and a destination path.
_TWO_PATH_LETTERS = ("R", "C")


def decode_path(raw: bytes) -> str:
    """Decode a path as git printed it, keeping undecodable bytes round-trippable."""
    return raw.decode("utf-8", errors="surrogateescape")


def _tokens(output: bytes) -> List[str]:
    return [decode_path(token) for token in output.split(b"\0")]


def _remember(results: Dict[str, FileRecord], record: FileRecord) -> None:
    """Keep the first record per path, except that unmerged always wins."""
    existing = results.get(record.name)
    if existing is None or (record.status is FileStatus.UNMERGED and existing.status is not FileStatus.UNMERGED):
        results[record.name] = record


def parse_raw_diff(output: bytes, unmerged: Iterable[str] = ()) -> List[FileRecord]:
    """Parse ``git diff -z --raw --full-index`` output.

    Every record becomes a blob carrying the new-side permission and hash.
    Paths listed in ``unmerged`` are reported as unmerged whatever letter git
    printed; otherwise a modification whose new-side hash is known (the
    working file matches the index) is reported as staged.
    """
    conflicted: Set[str] = set(unmerged)
    results: Dict[str, FileRecord] = {}
    tokens = _tokens(output)
    index = 0

    while index < len(tokens):
        header = tokens[index]
        index += 1
        if not header:
            continue

        match = _RAW_HEADER.match(header)
        if not match:
            logger.warning(f"Skipping malformed raw diff header: {header!r}")
            continue

        letter = match.group("letter")
        if letter in _TWO_PATH_LETTERS:
            # source path first, destination second
            index += 1
        if index >= len(tokens):
            logger.warning(f"Raw diff record without a path: {header!r}")
            break
        name = tokens[index]
        index += 1

        new_hash = match.group("new_hash")
        if name in conflicted:
            status = FileStatus.UNMERGED
        else:
            status = classify(letter)
            if status is None:
                logger.debug(f"No status for letter {letter!r} on {name}")
                continue
            if status is FileStatus.MODIFIED and not is_zero_hash(new_hash):
                status = FileStatus.STAGED

        _remember(results, FileRecord(
            name=name,
            entry_type=EntryType.BLOB,
            status=status,
            permission=match.group("new_perm"),
            content_hash=new_hash,
        ))

    logger.debug(f"Parsed {len(results)} raw diff records")
    return list(results.values())


def parse_listing(output: bytes) -> List[FileRecord]:
    """Parse ``git ls-files -t -z`` output.

    Each record is a status character, a separator (git prints a space, a tab
    is accepted too) and a path. A path ending in a separator is a
    directory placeholder and is reported as a tree without the slash.
    """
    results: Dict[str, FileRecord] = {}

    for token in _tokens(output):
        if not token:
            continue
        if len(token) < 3 or token[1] not in (" ", "\t"):
            logger.warning(f"Skipping malformed listing record: {token!r}")
            continue

        status = classify(token[0])
        if status is None:
            continue

        path = token[2:]
        name = path.rstrip("/")
        entry_type = EntryType.TREE if name != path else EntryType.BLOB
        if name not in results:
            results[name] = FileRecord(name=name, entry_type=entry_type, status=status)

    logger.debug(f"Parsed {len(results)} listing records")
    return list(results.values())


def parse_unmerged(output: bytes) -> Set[str]:
    """Parse ``git ls-files -z --unmerged`` output into the set of conflicted paths."""
    paths: Set[str] = set()
    for token in _tokens(output):
        if not token:
            continue
        _, sep, path = token.partition("\t")
        if sep and path:
            paths.add(path)
    return paths
