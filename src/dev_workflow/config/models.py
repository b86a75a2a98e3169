"""Stored configuration models (global and per-repository)."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IssueTrackerConfig(BaseModel):
    """Connection details for the Jira instance."""

    host: str
    user: str
    token: str = Field(repr=False)


class GlobalConfig(BaseModel):
    """Per-user configuration, shared by every repository."""

    issue_tracker: IssueTrackerConfig | None = Field(default=None)

    @property
    def is_set(self) -> bool:
        return self.issue_tracker is not None


class BranchesConfig(BaseModel):
    base: str


class RepoConfig(BaseModel):
    """Per-repository configuration, stored inside the working directory."""

    branches: BranchesConfig | None = Field(default=None)

    @property
    def is_set(self) -> bool:
        return self.branches is not None

    @property
    def base_branch(self) -> str | None:
        return self.branches.base if self.branches is not None else None
