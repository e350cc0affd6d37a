from pathlib import Path

import pytest

from conftest import requires_git
from repo_status.errors import ProcessFailure
from repo_status.git_ops.process import COMMAND_NOT_FOUND, ProcessResult, ProcessRunner


def test_check_passes_through_success():
    result = ProcessResult(["git", "status"], b"out", 0)
    assert result.check() is result
    assert result.ok


def test_check_raises_with_trimmed_error_text():
    result = ProcessResult(["git", "diff"], b"", 128, "fatal: bad revision 'HEAD'\n")

    with pytest.raises(ProcessFailure) as info:
        result.check()

    assert info.value.exit_code == 128
    assert info.value.output == "fatal: bad revision 'HEAD'"
    assert info.value.command == ["git", "diff"]


def test_check_falls_back_to_stdout():
    result = ProcessResult(["tool"], b"  something broke \n", 2)
    with pytest.raises(ProcessFailure, match="something broke"):
        result.check()


def test_missing_executable_is_an_exit_code(tmp_path: Path):
    result = ProcessRunner(tmp_path).run("repo-status-no-such-tool", ["--version"])

    assert result.exit_code == COMMAND_NOT_FOUND
    assert result.output == b""


@requires_git
def test_runs_git_and_captures_bytes(tmp_path: Path):
    result = ProcessRunner(tmp_path).run("git", ["--version"])

    assert result.ok
    assert isinstance(result.output, bytes)
    assert result.output.startswith(b"git version")


@requires_git
def test_input_text_is_fed_to_stdin(tmp_path: Path):
    result = ProcessRunner(tmp_path).run("git", ["hash-object", "--stdin"], input_text="hello\n")

    assert result.output.strip() == b"ce013625030ba8dba906f756967f9e9ca394464a"


@requires_git
def test_nonzero_exit_is_returned_not_raised(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    result = ProcessRunner(tmp_path).run("git", ["rev-parse", "--show-cdup"])

    assert result.exit_code != 0
    assert "not a git repository" in result.error_text.lower()
