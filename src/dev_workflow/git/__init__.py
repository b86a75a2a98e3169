"""Git repository access (libgit2 via pygit2)."""

from dev_workflow.git.repository import (
    BranchNotFound,
    CannotCheckoutBranch,
    CannotCreateBranch,
    CannotGetHead,
    CannotOpenRepository,
    CannotPushToOrigin,
    CommitNotFound,
    GitError,
    GitRepository,
    NotInABranch,
    OriginNotFound,
)

__all__ = [
    "BranchNotFound",
    "CannotCheckoutBranch",
    "CannotCreateBranch",
    "CannotGetHead",
    "CannotOpenRepository",
    "CannotPushToOrigin",
    "CommitNotFound",
    "GitError",
    "GitRepository",
    "NotInABranch",
    "OriginNotFound",
]
