"""Local git repository operations used by the ``start`` and ``push`` commands.

Wraps a single ``pygit2.Repository``. Every operation runs once, never
retries, and reports failures as a ``GitError`` subclass carrying the branch
name involved.

Branch creation is a sequence of independent steps (create ref, set upstream,
check out tree, move HEAD). A failure after the ref is created leaves the ref
in place; the error names the branch so it can be fixed by hand.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pygit2

logger = logging.getLogger(__name__)

ORIGIN = "origin"
HEADS_PREFIX = "refs/heads/"


class GitError(Exception):
    """Base class for repository failures."""


class CannotOpenRepository(GitError):
    def __init__(self) -> None:
        super().__init__("Cannot open repository")


class BranchNotFound(GitError):
    def __init__(self, branch: str) -> None:
        self.branch = branch
        super().__init__(f"Branch {branch} not found")


class CommitNotFound(GitError):
    def __init__(self, branch: str) -> None:
        self.branch = branch
        super().__init__(f"Commit {branch} not found")


class CannotCreateBranch(GitError):
    def __init__(self, branch: str, cause: Exception | None = None) -> None:
        self.branch = branch
        self.cause = cause
        message = f"Cannot create branch {branch}"
        super().__init__(f"{message}: {cause}" if cause is not None else message)


class CannotCheckoutBranch(GitError):
    def __init__(self, branch: str, cause: Exception) -> None:
        self.branch = branch
        self.cause = cause
        super().__init__(f"Cannot checkout branch {branch}: {cause}")


class CannotGetHead(GitError):
    def __init__(self) -> None:
        super().__init__("Cannot get HEAD")


class NotInABranch(GitError):
    def __init__(self) -> None:
        super().__init__("You are not in a branch, please checkout a branch first")


class OriginNotFound(GitError):
    def __init__(self) -> None:
        super().__init__("Repository origin not found")


class CannotPushToOrigin(GitError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Cannot push to origin: {cause}")


class SshAgentCallbacks(pygit2.RemoteCallbacks):
    """Authenticate with the keys held by the running SSH agent, nothing else."""

    def credentials(
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: pygit2.enums.CredentialType,
    ) -> pygit2.KeypairFromAgent:
        logger.debug("Requesting SSH agent credentials", extra={"url": url})
        return pygit2.KeypairFromAgent(username_from_url or "git")

    def push_update_reference(self, refname: str, message: str | None) -> None:
        # libgit2 reports server-side ref rejections here instead of failing the push.
        if message:
            raise pygit2.GitError(f"{refname} rejected by remote: {message}")


class GitRepository:
    """A local repository discovered from the current directory."""

    def __init__(self, inner: pygit2.Repository) -> None:
        self._inner = inner

    @classmethod
    def discover(
        cls, path: str | os.PathLike[str] = ".", *, ceiling: Path | None = None
    ) -> GitRepository:
        """Open the repository containing ``path`` (searching parent directories).

        ``ceiling`` stops the upward search at that directory.
        """

        try:
            found = pygit2.discover_repository(
                str(path), False, str(ceiling) if ceiling is not None else ""
            )
            if found is None:
                raise CannotOpenRepository()
            inner = pygit2.Repository(found)
        except (pygit2.GitError, OSError, ValueError) as e:
            raise CannotOpenRepository() from e

        logger.debug("Repository opened", extra={"path": inner.path})
        return cls(inner)

    @property
    def inner(self) -> pygit2.Repository:
        return self._inner

    @property
    def workdir(self) -> Path | None:
        """Working directory, or ``None`` for a bare repository."""

        workdir = self._inner.workdir
        return Path(workdir) if workdir else None

    def branches(self) -> list[str]:
        """Names of the local branches."""

        return list(self._inner.branches.local)

    def _local_branch(self, name: str) -> pygit2.Branch | None:
        try:
            return self._inner.branches.local.get(name)
        except ValueError:
            # Not a valid ref name, so it cannot exist.
            return None

    def create_and_checkout_branch(self, new_branch: str, from_branch: str) -> None:
        """Create ``new_branch`` at the tip of ``from_branch`` and check it out."""

        base = self._local_branch(from_branch)
        if base is None:
            raise BranchNotFound(from_branch)

        try:
            commit = base.peel(pygit2.Commit)
        except (pygit2.GitError, ValueError, KeyError) as e:
            raise CommitNotFound(from_branch) from e

        if self._local_branch(new_branch) is not None:
            raise CannotCreateBranch(new_branch)

        try:
            branch = self._inner.branches.local.create(new_branch, commit)
        except (pygit2.GitError, ValueError) as e:
            raise CannotCreateBranch(new_branch, e) from e

        logger.info(
            "Branch created",
            extra={"branch": new_branch, "base": from_branch, "commit": str(commit.id)},
        )

        try:
            # Pushing and pulling default to the same name without extra setup.
            branch.upstream = branch
        except (pygit2.GitError, ValueError, KeyError) as e:
            raise CannotCreateBranch(new_branch, e) from e

        try:
            tree = branch.peel(pygit2.Tree)
            self._inner.checkout_tree(tree)
        except (pygit2.GitError, ValueError, KeyError) as e:
            raise CannotCheckoutBranch(new_branch, e) from e

        try:
            self._inner.set_head(branch.name)
        except (pygit2.GitError, ValueError, KeyError) as e:
            raise CannotCheckoutBranch(new_branch, e) from e

        logger.info("Branch checked out", extra={"branch": new_branch})

    def current_branch_ref(self) -> str:
        """Full ref name (``refs/heads/...``) HEAD points at."""

        try:
            head = self._inner.head
        except (pygit2.GitError, KeyError) as e:
            raise CannotGetHead() from e

        if self._inner.head_is_detached or not head.name.startswith(HEADS_PREFIX):
            raise NotInABranch()
        return head.name

    def push(self) -> None:
        """Push the current branch to the branch of the same name on ``origin``."""

        ref_name = self.current_branch_ref()

        try:
            remote = self._inner.remotes[ORIGIN]
        except (KeyError, ValueError) as e:
            raise OriginNotFound() from e

        refspec = f"{ref_name}:{ref_name}"
        logger.info("Pushing to origin", extra={"refspec": refspec, "url": remote.url})
        try:
            remote.push([refspec], callbacks=SshAgentCallbacks())
        except (pygit2.GitError, KeyError, ValueError, OSError) as e:
            raise CannotPushToOrigin(e) from e
