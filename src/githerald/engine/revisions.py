"""
Revision range resolution for push events.

Works out which commits a push introduced, in the form
``git rev-list --reverse ^B1 ^B2 ... ^old new`` where B1, B2, ... are the
heads of the other branches when only branch-unique commits are wanted.
"""

from typing import List, Optional

from loguru import logger

from githerald.engine import commands
from githerald.engine.branches import BranchMembership
from githerald.engine.gateway import CommandGateway
from githerald.engine.resolver import IdentifierResolver
from githerald.models.base import CommitRange, is_zero_id


class RevisionRangeResolver:
    """Computes the ordered, duplicate-free list of commits a push introduced."""

    def __init__(
        self,
        gateway: CommandGateway,
        resolver: Optional[IdentifierResolver] = None,
        branches: Optional[BranchMembership] = None,
    ):
        self.gateway = gateway
        self.resolver = resolver or IdentifierResolver(gateway)
        self.branches = branches or BranchMembership(gateway, self.resolver)

    def exclusions(self, old: str, ref: str, restrict_to_branch: bool) -> List[str]:
        """Revisions whose ancestry is not part of the push."""
        excluded: List[str] = []
        if restrict_to_branch:
            # Every other branch head; the pushed branch's own head would hide the new commits.
            excluded.extend(sorted(self.branches.other_heads(ref)))
        if not is_zero_id(old):
            excluded.append(old.strip())
        return excluded

    def resolve(self, old: str, new: str, ref: str, restrict_to_branch: bool = False) -> CommitRange:
        """Commits introduced by updating ``ref`` from ``old`` to ``new``, oldest first.

        A zero ``old`` means the ref was created, so everything reachable from
        ``new`` counts. A zero ``new`` means it was deleted and nothing is new.
        Any query failure propagates; a partial list is never returned.
        """
        if is_zero_id(new):
            logger.debug(f"{ref} was deleted, no new commits")
            return []

        excluded = self.exclusions(old, ref, restrict_to_branch)
        lines = self.gateway.lines(commands.rev_list([new.strip()], exclude=excluded, reverse=True))
        commit_range = [line.strip() for line in lines if line.strip()]
        logger.debug(f"{len(commit_range)} new commits on {ref} ({old[:7]}..{new[:7]})")
        return commit_range
