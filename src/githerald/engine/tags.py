"""
Tag metadata and the commits between consecutive annotated tags.

The previous tag is found with ``git describe --abbrev=0``, which only looks
at annotated tags. Lightweight tags are skipped on purpose; see
http://www.xerxesb.com/2010/git-describe-and-the-tale-of-the-wrong-commits/
for how describe picks the nearest tag.
"""

from typing import Dict, List, Optional

from loguru import logger

from githerald.engine import commands
from githerald.engine.commands import FIELD_SEPARATOR, RECORD_SEPARATOR, TAG_FIELDS
from githerald.engine.gateway import CommandGateway
from githerald.models.errors import MalformedRecord, ResolutionError
from githerald.models.tags import TagInfo, TagRangeEntry


def parse_range_entry(line: str) -> TagRangeEntry:
    """Parse one ``<commit><US><subject>`` line."""
    if FIELD_SEPARATOR not in line:
        raise MalformedRecord(line, "missing field separator")
    commit, subject = line.split(FIELD_SEPARATOR, 1)
    commit = commit.strip()
    if not commit:
        raise MalformedRecord(line, "missing commit id")
    return TagRangeEntry(commit=commit, subject=subject)


def parse_tag_record(record: str) -> TagInfo:
    """Parse one for-each-ref record into a TagInfo, field by field."""
    values = record.split(FIELD_SEPARATOR)
    if len(values) != len(TAG_FIELDS):
        raise MalformedRecord(record, f"expected {len(TAG_FIELDS)} fields, got {len(values)}")

    fields: Dict[str, str] = {name: value for (name, _), value in zip(TAG_FIELDS, values)}
    return TagInfo(
        tagged_object=fields["tagged_object"].strip() or None,
        tagged_type=fields["tagged_type"].strip() or None,
        tagger_name=fields["tagger_name"],
        tagger_email=fields["tagger_email"],
        subject=fields["subject"],
        body=fields["body"],
    )


class TagRangeExtractor:
    """Reads tag metadata and lists commits between two tags."""

    def __init__(self, gateway: CommandGateway):
        self.gateway = gateway

    def previous_tag(self, tagged_commit: str) -> Optional[str]:
        """Nearest annotated tag reachable from the first parent of ``tagged_commit``."""
        output = self.gateway.probe(commands.describe(f"{tagged_commit.strip()}^1", abbrev_only=True))
        if output is None or not output.strip():
            return None
        return output.strip()

    def commits_between_tags(self, tag_name: str, tagged_commit: str) -> List[TagRangeEntry]:
        """Commits after the previous annotated tag up to ``tag_name``, oldest first.

        Returns an empty list when there is no earlier annotated tag, e.g. on
        the first release.
        """
        previous = self.previous_tag(tagged_commit)
        if previous is None:
            logger.debug(f"No annotated tag before {tag_name}")
            return []

        entries = []
        for line in self.gateway.lines(commands.log_subjects(previous, tag_name)):
            if not line:
                continue
            try:
                entries.append(parse_range_entry(line))
            except MalformedRecord as e:
                logger.debug(f"Skipping {e}")
        logger.debug(f"{len(entries)} commits between {previous} and {tag_name}")
        return entries

    def tag_info(self, ref_name: str) -> TagInfo:
        """Metadata of the tag ``ref_name`` (e.g. ``refs/tags/v1.0``)."""
        output = self.gateway.run(commands.for_each_ref_tag(ref_name))
        for record in output.split(RECORD_SEPARATOR):
            record = record.lstrip("\n")
            if not record:
                continue
            try:
                return parse_tag_record(record)
            except MalformedRecord as e:
                logger.debug(f"Skipping {e}")
        raise ResolutionError(ref_name)
