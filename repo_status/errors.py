"""
Exceptions raised by the status engine.
"""

from typing import Sequence


class RepoStatusError(Exception):
    """Base exception for repo-status operations."""
    pass


class ProcessFailure(RepoStatusError):
    """An external command exited nonzero."""

    def __init__(self, command: Sequence[str], exit_code: int, output: str):
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output.strip()
        super().__init__(self.output or f"{' '.join(self.command)} exited with status {exit_code}")


class NotARepositoryError(ProcessFailure):
    """The starting directory is not inside a git working tree."""
    pass
