"""Base types used across the GitHerald engine."""

from dataclasses import dataclass
from enum import Enum
from typing import List

CommitId = str

# Ordered oldest first, never repeats a commit.
CommitRange = List[CommitId]

ZERO_ID = "0" * 40


def is_zero_id(value: str) -> bool:
    """Check whether a revision is the all-zero placeholder of a push event."""
    value = value.strip()
    return bool(value) and set(value) == {"0"}


class ObjectType(str, Enum):
    """Kinds of objects stored in a repository."""

    COMMIT = "commit"
    TAG = "tag"
    TREE = "tree"
    BLOB = "blob"


class WhitespacePolicy(str, Enum):
    """How whitespace differences are treated when diffing."""

    ALL = "all"  # -w
    CHANGE = "change"  # -b


@dataclass(frozen=True)
class PushEvent:
    """The before/after pair and ref name handed to a push hook."""

    old: CommitId
    new: CommitId
    ref: str

    @property
    def is_creation(self) -> bool:
        return is_zero_id(self.old)

    @property
    def is_deletion(self) -> bool:
        return is_zero_id(self.new)

    @property
    def is_tag(self) -> bool:
        return self.ref.startswith("refs/tags/")

    @property
    def is_branch(self) -> bool:
        return self.ref.startswith("refs/heads/")

    @property
    def short_ref(self) -> str:
        """Ref name without its refs/heads/ or refs/tags/ prefix."""
        for prefix in ("refs/heads/", "refs/tags/"):
            if self.ref.startswith(prefix):
                return self.ref[len(prefix):]
        return self.ref
