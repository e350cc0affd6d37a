import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from repo_status.git_ops.process import ProcessResult


HASH_A = "a" * 40
HASH_B = "b" * 40
ZERO = "0" * 40

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def raw_record(letter: str, path: str, new_hash: str = ZERO, old_perm: str = "100644", new_perm: str = "100644") -> bytes:
    """One record as printed by ``git diff -z --raw --full-index``."""
    return f":{old_perm} {new_perm} {HASH_A} {new_hash} {letter}\0{path}\0".encode()


def listing_record(letter: str, path: str, sep: str = "\t") -> bytes:
    return f"{letter}{sep}{path}\0".encode()


class FakeRunner:
    """Stands in for ProcessRunner; answers by git subcommand and records every call."""

    def __init__(self, outputs: Optional[Dict[str, bytes]] = None, exit_codes: Optional[Dict[str, int]] = None):
        self.outputs = outputs or {}
        self.exit_codes = exit_codes or {}
        self.calls: List[List[str]] = []
        self.cwds: List[Path] = []

    def factory(self, working_dir: Path) -> "FakeRunner":
        self.cwds.append(Path(working_dir))
        return self

    def run(self, command: str, args, input_text: Optional[str] = None) -> ProcessResult:
        args = list(args)
        self.calls.append([command, *args])
        subcommand = args[0]
        code = self.exit_codes.get(subcommand, 0)
        error = f"fatal: {subcommand} failed" if code else ""
        return ProcessResult([command, *args], self.outputs.get(subcommand, b""), code, error)

    def subcommands(self) -> List[str]:
        return [call[1] for call in self.calls]


@pytest.fixture
def fake_runner():
    return FakeRunner()


def git(*args: str, cwd: Path, check: bool = True) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=check,
        text=True,
        capture_output=True,
    )


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch) -> Path:
    """A repository with one commit holding a.txt, b.txt, keep.txt and dir/c.txt."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    repo = tmp_path / "repo"
    repo.mkdir()
    git("init", cwd=repo)
    git("config", "user.email", "test@example.com", cwd=repo)
    git("config", "user.name", "Tester", cwd=repo)
    git("config", "commit.gpgsign", "false", cwd=repo)

    (repo / "a.txt").write_text("one\n", encoding="utf-8")
    (repo / "b.txt").write_text("two\n", encoding="utf-8")
    (repo / "keep.txt").write_text("keep\n", encoding="utf-8")
    (repo / "dir").mkdir()
    (repo / "dir" / "c.txt").write_text("three\n", encoding="utf-8")
    git("add", ".", cwd=repo)
    git("commit", "-m", "init", cwd=repo)
    return repo
