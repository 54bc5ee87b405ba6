"""Types describing how files changed across a commit range."""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class ChangeSet:
    """Touched paths partitioned by change kind.

    A path appears in at most one of the four sets.
    """

    modified: FrozenSet[str] = field(default_factory=frozenset)
    added: FrozenSet[str] = field(default_factory=frozenset)
    deleted: FrozenSet[str] = field(default_factory=frozenset)
    renamed: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def paths(self) -> FrozenSet[str]:
        """Every path touched in the range."""
        return self.modified | self.added | self.deleted | self.renamed

    def kind_of(self, path: str) -> Optional[str]:
        """Name of the set holding ``path``, or None if it was not touched."""
        for kind in ("modified", "added", "deleted", "renamed"):
            if path in getattr(self, kind):
                return kind
        return None

    def is_empty(self) -> bool:
        return not self.paths
