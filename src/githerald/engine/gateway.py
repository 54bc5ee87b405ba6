"""Command gateway: the only place the engine talks to git."""

from pathlib import Path
from typing import List, Optional, Union

from git import Repo
from loguru import logger

from githerald.engine.commands import GitCommand
from githerald.models.errors import CommandFailure


class CommandGateway:
    """Runs read-only git queries against one repository."""

    def __init__(self, repo: Union[Repo, str, Path]):
        self.repo = repo if isinstance(repo, Repo) else Repo(str(repo))

    def run_bytes(self, command: GitCommand) -> bytes:
        """Run ``command`` and return its raw standard output."""
        logger.debug(f"Running: {command}")
        status, stdout, stderr = self.repo.git.execute(
            list(command.argv),
            with_extended_output=True,
            with_exceptions=False,
            stdout_as_string=False,
            strip_newline_in_stdout=False,
        )
        if status != 0:
            raise CommandFailure(command.argv, status, stderr or "")
        return stdout or b""

    def run(self, command: GitCommand) -> str:
        """Run ``command`` and return its output decoded as UTF-8.

        Invalid byte sequences are carried through as surrogate escapes
        instead of failing the query.
        """
        return self.run_bytes(command).decode("utf-8", errors="surrogateescape")

    def lines(self, command: GitCommand) -> List[str]:
        """Run ``command`` and split its output into lines without terminators."""
        output = self.run(command)
        if not output:
            return []
        # Only LF ends a row; str.splitlines would also split on control characters.
        return [line.rstrip("\r") for line in output.rstrip("\n").split("\n")]

    def probe(self, command: GitCommand) -> Optional[str]:
        """Run a query whose failure is an expected outcome.

        Returns None instead of raising when git exits non-zero.
        """
        try:
            return self.run(command)
        except CommandFailure as e:
            logger.debug(f"Probe failed, treating as no data: {e}")
            return None
