"""Engine settings read from the environment."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from githerald.models.base import WhitespacePolicy

TRUE_VALUES = {"1", "true", "yes", "on"}


class EngineSettings(BaseModel):
    """Tunables handed to the engine as explicit parameters."""

    similarity_detection_threshold: float = Field(
        0.5, ge=0.0, le=1.0, description="Content similarity needed to report a delete+add as a rename"
    )
    ignore_whitespace: Optional[WhitespacePolicy] = Field(
        None, description="'all' ignores all whitespace, 'change' only changes in amount"
    )
    unique_commits_per_branch: bool = Field(
        False, description="Only report commits not reachable from any other branch"
    )


def load_settings(env_file: Optional[str] = None) -> EngineSettings:
    """Build EngineSettings from GITHERALD_* environment variables (and a .env file)."""
    load_dotenv(env_file)

    values = {}
    threshold = os.getenv("GITHERALD_SIMILARITY_THRESHOLD")
    if threshold:
        values["similarity_detection_threshold"] = float(threshold)
    whitespace = os.getenv("GITHERALD_IGNORE_WHITESPACE")
    if whitespace:
        values["ignore_whitespace"] = whitespace.strip().lower()
    unique = os.getenv("GITHERALD_UNIQUE_COMMITS_PER_BRANCH")
    if unique:
        values["unique_commits_per_branch"] = unique.strip().lower() in TRUE_VALUES

    return EngineSettings(**values)
