"""Errors raised by the GitHerald engine."""

from typing import Sequence


class GitHeraldError(Exception):
    """Base class for all engine errors."""


class CommandFailure(GitHeraldError):
    """A git query exited with a non-zero status."""

    def __init__(self, command: Sequence[str], exit_code: int, stderr: str = ""):
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr.strip()
        message = f"{' '.join(self.command)} failed with exit code {exit_code}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class ResolutionError(GitHeraldError):
    """A ref or revision expression does not name an object."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Cannot resolve {ref!r}")


class MalformedRecord(GitHeraldError):
    """A line of git output does not have the expected shape."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")
