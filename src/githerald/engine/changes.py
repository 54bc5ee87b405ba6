"""
Classification of the paths touched between two revisions.

Reads ``git log --name-status --pretty=oneline -M<n>%`` output and sorts each
path into modified, added, deleted or renamed.
"""

import hashlib
import re
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from githerald.engine import commands
from githerald.engine.gateway import CommandGateway
from githerald.models.base import WhitespacePolicy
from githerald.models.changes import ChangeSet
from githerald.models.errors import MalformedRecord

DEFAULT_SIMILARITY_THRESHOLD = 0.5

# One status letter, or R/C with a similarity score, then whitespace and a path.
STATUS_ROW = re.compile(r"^(?P<status>[A-Z])(?P<score>\d{0,3})\s+(?P<rest>\S.*)$")
COMMIT_ROW = re.compile(r"^[0-9a-f]{7,64}\s")

KINDS = {"M": "modified", "A": "added", "D": "deleted", "R": "renamed"}

# C-style escapes git uses when it quotes a path.
QUOTED_ESCAPES = {"a": 7, "b": 8, "t": 9, "n": 10, "v": 11, "f": 12, "r": 13, '"': 34, "\\": 92}


def unquote_path(path: str) -> str:
    """Undo git's quoting of a path holding quotes, backslashes or control characters.

    Unquoted paths are returned unchanged. Octal escapes are collected as raw
    bytes and decoded as UTF-8 together, like the rest of the gateway output.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    body = path[1:-1]
    raw = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        octal = body[i + 1 : i + 4]
        if ch != "\\":
            raw += ch.encode("utf-8", errors="surrogateescape")
            i += 1
        elif len(octal) == 3 and octal[0] in "0123" and all(digit in "01234567" for digit in octal):
            raw.append(int(octal, 8))
            i += 4
        elif body[i + 1 : i + 2] in QUOTED_ESCAPES:
            raw.append(QUOTED_ESCAPES[body[i + 1]])
            i += 2
        else:
            raw += b"\\"
            i += 1
    return raw.decode("utf-8", errors="surrogateescape")


def parse_status_row(line: str) -> Tuple[str, str]:
    """Split a name/status row into its change kind and path.

    Rename rows keep only the destination path. Raises MalformedRecord for
    anything that is not a status row, including commit summary lines.
    """
    if COMMIT_ROW.match(line):
        raise MalformedRecord(line, "commit summary row")
    match = STATUS_ROW.match(line)
    if match is None:
        raise MalformedRecord(line, "not a name/status row")

    status, rest = match.group("status"), match.group("rest")
    if "\t" in line:
        path = line.split("\t")[-1]
    elif status == "R" and " -> " in rest:
        path = rest.split(" -> ")[-1]
    else:
        path = rest
    return status, unquote_path(path.strip())


def _net_kind(first: str, last: str) -> str:
    """Change kind of a path from its oldest and newest change in the range."""
    existed_before = first not in ("added", "renamed")
    exists_after = last != "deleted"
    if not exists_after:
        return "deleted"
    if existed_before:
        return "modified"
    return first


def parse_status_rows(lines: Iterable[str]) -> ChangeSet:
    """Build a ChangeSet from log output listed newest commit first.

    A path touched by several commits lands in exactly one set, decided by
    its oldest and newest change: added then modified stays added, anything
    ending in a delete is deleted, deleted then re-added is modified.
    """
    rows: List[Tuple[str, str]] = []
    for line in lines:
        try:
            status, path = parse_status_row(line)
        except MalformedRecord:
            continue
        kind = KINDS.get(status)
        if kind is None:
            logger.debug(f"Ignoring status {status} for {path}")
            continue
        rows.append((kind, path))

    first: Dict[str, str] = {}
    last: Dict[str, str] = {}
    for kind, path in reversed(rows):
        first.setdefault(path, kind)
        last[path] = kind

    kinds = {path: _net_kind(first[path], last[path]) for path in first}
    return ChangeSet(
        **{
            kind: frozenset(path for path, value in kinds.items() if value == kind)
            for kind in KINDS.values()
        }
    )


def git_blob_hash(content: bytes) -> str:
    """Object id git assigns to a blob with this content."""
    header = f"blob {len(content)}\0".encode()
    return hashlib.sha1(header + content).hexdigest()


class ChangeClassifier:
    """Partitions the paths changed in a range by kind of change."""

    def __init__(self, gateway: CommandGateway):
        self.gateway = gateway

    def classify(
        self,
        rev1: str,
        rev2: str,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        whitespace: Optional[WhitespacePolicy] = None,
    ) -> ChangeSet:
        """Paths changed in ``rev1..rev2``, partitioned by change kind."""
        lines = self.gateway.lines(
            commands.log_name_status(rev1, rev2, similarity_threshold, whitespace)
        )
        change_set = parse_status_rows(lines)
        logger.debug(
            f"{rev1[:7]}..{rev2[:7]}: {len(change_set.modified)} modified, "
            f"{len(change_set.added)} added, {len(change_set.deleted)} deleted, "
            f"{len(change_set.renamed)} renamed"
        )
        return change_set

    def blob_id(self, rev: str, path: str) -> str:
        """Blob id of ``path`` as of ``rev``, hashed from its content.

        Diff output leaves the id out for renames with 100% similarity.
        """
        return git_blob_hash(self.gateway.run_bytes(commands.show_blob(rev, path)))
