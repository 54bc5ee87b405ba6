"""
GitHerald push discovery node: works out what a push changed.
"""

from typing import Dict, List

from git import Repo
from loguru import logger

from githerald.config import EngineSettings
from githerald.engine.changes import ChangeClassifier
from githerald.engine.gateway import CommandGateway
from githerald.engine.repository import RepositoryInfo
from githerald.engine.resolver import IdentifierResolver
from githerald.engine.revisions import RevisionRangeResolver
from githerald.engine.tags import TagRangeExtractor
from githerald.models.base import ObjectType, PushEvent
from githerald.models.errors import GitHeraldError
from githerald.models.state import PushState


def _short_ids(resolver: IdentifierResolver, commits: List[str]) -> Dict[str, str]:
    return {commit: resolver.resolve_short(commit) for commit in commits}


def push_discovery_node(state: PushState) -> PushState:
    """Resolve the push in ``state`` into commits, file changes and tag ranges.

    Engine failures are logged and re-raised; a partial state is never returned.
    """
    for key in ("repo_path", "old_rev", "new_rev", "ref_name"):
        if key not in state:
            raise ValueError(f"{key} is required in PushState")

    logger.info("Executing Push Discovery Node")

    settings = state.get("settings") or EngineSettings()
    push = PushEvent(old=state["old_rev"].strip(), new=state["new_rev"].strip(), ref=state["ref_name"].strip())
    gateway = CommandGateway(Repo(state["repo_path"]))
    resolver = IdentifierResolver(gateway)

    try:
        commits: List[str] = []
        change_set = None
        tag_info = None
        tag_commits = []
        description = None

        if push.is_tag:
            if not push.is_deletion and resolver.object_type(push.new) is ObjectType.TAG:
                extractor = TagRangeExtractor(gateway)
                tag_info = extractor.tag_info(push.ref)
                tag_commits = extractor.commits_between_tags(push.short_ref, tag_info.tagged_object)
        else:
            commits = RevisionRangeResolver(gateway, resolver).resolve(
                push.old, push.new, push.ref, restrict_to_branch=settings.unique_commits_per_branch
            )
            if not push.is_creation and not push.is_deletion:
                change_set = ChangeClassifier(gateway).classify(
                    push.old,
                    push.new,
                    similarity_threshold=settings.similarity_detection_threshold,
                    whitespace=settings.ignore_whitespace,
                )

        if not push.is_deletion:
            description = resolver.describe(push.new)

        short_ids = _short_ids(resolver, commits)
        repo_name = RepositoryInfo(gateway).repo_name()
    except GitHeraldError as e:
        logger.error(f"Push discovery failed for {push.ref}: {e}")
        raise

    logger.info(f"Discovered {len(commits)} commits on {push.ref}")
    if tag_info is not None:
        logger.info(f"Found {len(tag_commits)} commits since the previous tag")

    return {
        **state,
        "push": push,
        "commits": commits,
        "commit_count": len(commits),
        "short_ids": short_ids,
        "change_set": change_set,
        "tag_info": tag_info,
        "tag_commits": tag_commits,
        "repo_name": repo_name,
        "description": description,
    }
