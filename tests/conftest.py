"""Shared fixtures: throw-away repositories built with GitPython."""

from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence, Tuple

import pytest
from git import Repo

from githerald.engine.gateway import CommandGateway


class RepoBuilder:
    """Creates commits, branches and tags with strictly increasing dates."""

    def __init__(self, repo: Repo):
        self.repo = repo
        self.path = Path(repo.working_dir)
        self._clock = 1_700_000_000

    def commit(
        self,
        message: str,
        files: Optional[Dict[str, str]] = None,
        remove: Iterable[str] = (),
        rename: Optional[Tuple[str, str]] = None,
        parents: Optional[Sequence[str]] = None,
    ) -> str:
        for name, content in (files or {}).items():
            file_path = self.path / name
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
            self.repo.index.add([name])
        remove = list(remove)
        if remove:
            self.repo.index.remove(remove, working_tree=True)
        if rename:
            self.repo.index.move(list(rename))

        self._clock += 60
        date = f"{self._clock} +0000"
        kwargs = {}
        if parents is not None:
            kwargs["parent_commits"] = [self.repo.commit(p) for p in parents]
        return self.repo.index.commit(message, author_date=date, commit_date=date, **kwargs).hexsha

    def branch(self, name: str, at: str) -> None:
        self.repo.create_head(name, at)

    def checkout(self, name: str) -> None:
        self.repo.heads[name].checkout()

    def annotated_tag(self, name: str, at: str, message: str) -> str:
        """Create an annotated tag and return the tag object's id."""
        return self.repo.create_tag(name, ref=at, message=message).tag.hexsha

    def lightweight_tag(self, name: str, at: str) -> None:
        self.repo.create_tag(name, ref=at)

    @property
    def main(self) -> str:
        return self.repo.active_branch.name


@pytest.fixture
def temp_git_repo(tmp_path):
    """Create an empty repository with a committer identity configured."""
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
    return repo


@pytest.fixture
def builder(temp_git_repo):
    return RepoBuilder(temp_git_repo)


@pytest.fixture
def gateway(temp_git_repo):
    return CommandGateway(temp_git_repo)


@pytest.fixture
def linear_repo(builder):
    """Three commits on one branch, returned oldest first."""
    c1 = builder.commit("Initial commit", {"file1.txt": "one\n", "file3.txt": "three\n"})
    c2 = builder.commit("Add file2", {"file2.txt": "two\n"})
    c3 = builder.commit("Update file1", {"file1.txt": "one, updated\n"})
    return builder, [c1, c2, c3]
