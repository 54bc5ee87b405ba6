"""Resolution of symbolic refs to object ids."""

from typing import Optional

from loguru import logger

from githerald.engine import commands
from githerald.engine.gateway import CommandGateway
from githerald.models.base import CommitId, ObjectType
from githerald.models.errors import CommandFailure, ResolutionError


class IdentifierResolver:
    """Turns branch names, tags, HEAD and revision expressions into ids."""

    def __init__(self, gateway: CommandGateway):
        self.gateway = gateway

    def _rev_parse(self, ref: str, short: bool) -> CommitId:
        try:
            value = self.gateway.run(commands.rev_parse(ref, short=short)).strip()
        except CommandFailure as e:
            raise ResolutionError(ref) from e
        if not value:
            raise ResolutionError(ref)
        return value

    def resolve(self, ref: str) -> CommitId:
        """Full object id of ``ref``; raises ResolutionError if it does not exist."""
        return self._rev_parse(ref, short=False)

    def resolve_short(self, ref: str) -> CommitId:
        """Abbreviated object id of ``ref``."""
        return self._rev_parse(ref, short=True)

    def object_type(self, ref: str) -> Optional[ObjectType]:
        """Kind of object ``ref`` names, or None when there is no such object."""
        output = self.gateway.probe(commands.cat_file_type(ref))
        if output is None:
            return None
        try:
            return ObjectType(output.strip())
        except ValueError:
            logger.debug(f"Unknown object type {output.strip()!r} for {ref}")
            return None

    def describe(self, ref: str) -> str:
        """Nearest-tag description of ``ref``, falling back to the abbreviated id."""
        return self.gateway.run(commands.describe(ref)).strip()
