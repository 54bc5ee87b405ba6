"""Repository-level metadata used to label notifications."""

import os
import re
from typing import Optional

from githerald.engine import commands
from githerald.engine.changes import DEFAULT_SIMILARITY_THRESHOLD
from githerald.engine.gateway import CommandGateway
from githerald.models.base import WhitespacePolicy

PARENT_AND_NAME = re.compile(r"[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+\.git$")


class RepositoryInfo:
    """Names, hook settings and raw commit text of the repository."""

    def __init__(self, gateway: CommandGateway):
        self.gateway = gateway

    def git_dir(self) -> str:
        return self.gateway.run(commands.rev_parse_dir("--git-dir")).strip()

    def toplevel_dir(self) -> str:
        """Working tree root; empty in a bare repository."""
        output = self.gateway.probe(commands.rev_parse_dir("--show-toplevel"))
        return (output or "").strip()

    def config_value(self, key: str) -> Optional[str]:
        """Value of a git config key, or None when it is unset."""
        output = self.gateway.probe(commands.config_get(key))
        if output is None:
            return None
        return output.strip() or None

    def _repo_path(self) -> str:
        # A bare repository has no toplevel directory.
        path = self.toplevel_dir() or self.git_dir()
        if not os.path.isabs(path):
            path = os.path.join(self.gateway.repo.git.working_dir, path)
        return os.path.abspath(path)

    def repo_name_real(self) -> str:
        """Last component of the repository path, as is."""
        return os.path.basename(self._repo_path())

    def repo_name(self) -> str:
        """``hooks.emailprefix`` if set, else the directory name without ``.git``."""
        prefix = self.config_value("hooks.emailprefix")
        if prefix:
            return prefix
        return re.sub(r"\.git$", "", self.repo_name_real())

    def repo_name_with_parent(self) -> str:
        """Like repo_name, but ``parent/name`` for paths ending in ``parent/name.git``."""
        prefix = self.config_value("hooks.emailprefix")
        if prefix:
            return prefix
        match = PARENT_AND_NAME.search(self._repo_path())
        if match:
            return re.sub(r"\.git$", "", match.group(0))
        return re.sub(r"\.git$", "", self.repo_name_real())

    def mailing_list_address(self) -> Optional[str]:
        return self.config_value("hooks.mailinglist")

    def show(
        self,
        rev: str,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        whitespace: Optional[WhitespacePolicy] = None,
    ) -> str:
        """Full ``git show`` text of a commit, RFC 2822 dates, renames detected."""
        return self.gateway.run(commands.show(rev, similarity_threshold, whitespace))

    def log(self, rev1: str, rev2: str) -> str:
        return self.gateway.run(commands.log_fuller(rev1, rev2)).strip()
