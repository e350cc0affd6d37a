"""
Blocking git process invocation on top of GitPython's command runner.
"""

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from git.cmd import Git
from git.exc import GitCommandNotFound
from loguru import logger

from ..errors import ProcessFailure


COMMAND_NOT_FOUND = 127


@dataclass
class ProcessResult:
    """Captured result of one external process call."""

    command: List[str]
    output: bytes
    exit_code: int
    error_text: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def check(self) -> "ProcessResult":
        """Raise ProcessFailure when the process exited nonzero."""
        if self.exit_code != 0:
            text = self.error_text.strip() or self.output.decode("utf-8", errors="replace").strip()
            raise ProcessFailure(self.command, self.exit_code, text)
        return self


class ProcessRunner:
    """Runs one external command per call in a fixed working directory.

    Nonzero exits are returned, never raised; ``ProcessResult.check`` turns
    them into ``ProcessFailure`` where the caller needs a hard error.
    """

    def __init__(self, working_dir: Optional[Union[str, Path]] = None):
        self.working_dir = Path(working_dir) if working_dir else None

    def run(self, command: str, args: Sequence[str], input_text: Optional[str] = None) -> ProcessResult:
        """Run ``command`` with ``args`` and capture raw stdout and the exit code."""
        argv = [command, *args]
        logger.debug(f"Running {' '.join(argv)} in {self.working_dir or 'the current directory'}")

        git = Git(str(self.working_dir) if self.working_dir else None)
        try:
            if input_text is None:
                status, stdout, stderr = self._execute(git, argv)
            else:
                with tempfile.TemporaryFile() as stdin:
                    stdin.write(input_text.encode("utf-8"))
                    stdin.seek(0)
                    status, stdout, stderr = self._execute(git, argv, istream=stdin)
        except GitCommandNotFound as e:
            logger.error(f"Could not start {command}: {e}")
            return ProcessResult(argv, b"", COMMAND_NOT_FOUND, str(e))

        logger.debug(f"{command} {args[0] if args else ''} exited {status}, {len(stdout)} bytes of output")
        return ProcessResult(argv, stdout, status, stderr or "")

    @staticmethod
    def _execute(git: Git, argv: List[str], istream=None):
        return git.execute(
            argv,
            istream=istream,
            with_extended_output=True,
            with_exceptions=False,
            stdout_as_string=False,
            strip_newline_in_stdout=False,
        )
