"""Which commits belong to one branch only."""

from typing import Dict, Optional, Set

from loguru import logger

from githerald.engine import commands
from githerald.engine.gateway import CommandGateway
from githerald.engine.resolver import IdentifierResolver
from githerald.models.base import CommitId


class BranchMembership:
    """Computes branch-exclusive commits from the current branch tips.

    Used when notifications should only cover commits unique to a branch, so
    that merging a feature branch does not announce its commits a second time.
    """

    def __init__(self, gateway: CommandGateway, resolver: Optional[IdentifierResolver] = None):
        self.gateway = gateway
        self.resolver = resolver or IdentifierResolver(gateway)

    def heads_by_ref(self) -> Dict[str, CommitId]:
        """Tip commit of every local branch, keyed by full ref name."""
        heads: Dict[str, CommitId] = {}
        for line in self.gateway.lines(commands.for_each_ref_heads()):
            ref, separator, commit = line.partition(commands.FIELD_SEPARATOR)
            if separator and commit.strip():
                heads[ref] = commit.strip()
        return heads

    def branch_heads(self) -> Set[CommitId]:
        """Tip commits of every local branch."""
        return set(self.heads_by_ref().values())

    def branch_ref(self, tip: str, heads: Optional[Dict[str, CommitId]] = None) -> Optional[str]:
        """Full ref name of the branch ``tip`` names, or None if it names no branch."""
        heads = self.heads_by_ref() if heads is None else heads
        for candidate in (tip, f"refs/heads/{tip}"):
            if candidate in heads:
                return candidate
        full_name = (self.gateway.probe(commands.rev_parse_full_name(tip)) or "").strip()
        return full_name if full_name in heads else None

    def other_heads(self, tip: str) -> Set[CommitId]:
        """Tips of every branch except the one ``tip`` names.

        Another branch sitting at the same commit still counts. When ``tip``
        is not a branch, the branches pointing at its commit are left out.
        """
        heads = self.heads_by_ref()
        own = self.branch_ref(tip, heads)
        if own is not None:
            return {commit for ref, commit in heads.items() if ref != own}
        return set(heads.values()) - {self.resolver.resolve(tip)}

    def unique_to_branch(self, tip: str) -> Set[CommitId]:
        """Commits reachable from ``tip`` and from no other branch head."""
        others = self.other_heads(tip)
        lines = self.gateway.lines(commands.rev_list([tip], exclude=sorted(others)))
        commits = {line.strip() for line in lines if line.strip()}
        logger.debug(f"{len(commits)} commits unique to {tip} (excluding {len(others)} other heads)")
        return commits
