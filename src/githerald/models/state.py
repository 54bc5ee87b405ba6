"""State passed through the notification pipeline."""

from typing import Any, Dict, List, Optional, TypedDict

from githerald.config import EngineSettings
from githerald.models.base import CommitRange, PushEvent
from githerald.models.changes import ChangeSet
from githerald.models.tags import TagInfo, TagRangeEntry


class PushState(TypedDict, total=False):
    """
    Shared state for one push notification cycle.
    Each node adds or modifies specific fields.
    """

    # Input
    repo_path: str
    old_rev: str
    new_rev: str
    ref_name: str
    settings: EngineSettings

    # Push Discovery Node Output
    push: PushEvent
    commits: CommitRange
    commit_count: int
    short_ids: Dict[str, str]
    change_set: Optional[ChangeSet]
    tag_info: Optional[TagInfo]
    tag_commits: List[TagRangeEntry]
    repo_name: str
    description: Optional[str]

    # Global State
    errors: List[Dict[str, Any]]
