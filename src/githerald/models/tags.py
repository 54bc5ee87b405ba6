"""Types for annotated tag metadata."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from githerald.models.base import CommitId


class TagInfo(BaseModel):
    """Snapshot of an annotated tag as read from the repository."""

    tagged_object: Optional[CommitId] = Field(
        None, description="Id of the object the tag points at (empty for lightweight tags)"
    )
    tagged_type: Optional[str] = Field(None, description="Type of the tagged object")
    tagger_name: str = Field("", description="Name of the tagger")
    tagger_email: str = Field("", description="Email of the tagger, including angle brackets")
    subject: str = Field("", description="First line of the tag message")
    body: str = Field("", description="Full tag message")

    @property
    def is_annotated(self) -> bool:
        return self.tagged_object is not None


@dataclass(frozen=True)
class TagRangeEntry:
    """A commit listed between two tags."""

    commit: CommitId
    subject: str
