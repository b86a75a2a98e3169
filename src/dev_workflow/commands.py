"""The ``init`` and ``start`` workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dev_workflow.config import (
    GlobalConfig,
    GlobalConfigStore,
    RepoConfig,
    init_global_config,
    init_repo_config,
)
from dev_workflow.errors import ConfigurationNotSet
from dev_workflow.git.repository import CannotOpenRepository, GitRepository
from dev_workflow.prompts import Prompter, required
from dev_workflow.slug import default_branch_name
from dev_workflow.tracker.client import Issue, JiraClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StartedBranch:
    issue: Issue
    branch: str
    base: str


def command_init(
    store: GlobalConfigStore,
    prompter: Prompter,
    *,
    repo: GitRepository | None = None,
) -> tuple[GlobalConfig, RepoConfig | None]:
    """Refresh the global configuration, then the repository one when inside a repository.

    Runs both initialization flows directly; stored values are only used as
    defaults and for the overwrite confirmation.
    """

    config = init_global_config(store, prompter)
    if repo is None:
        logger.info("Not inside a git repository; skipping repository configuration")
        return config, None
    return config, init_repo_config(repo, prompter)


def discover_repository() -> GitRepository | None:
    try:
        return GitRepository.discover()
    except CannotOpenRepository:
        return None


def command_start(
    config: GlobalConfig,
    repo_config: RepoConfig,
    repo: GitRepository,
    ticket_id: str,
    prompter: Prompter,
    *,
    tracker: JiraClient | None = None,
    timeout: float | None = None,
) -> StartedBranch:
    """Create and check out the working branch for ``ticket_id``."""

    if config.issue_tracker is None or repo_config.base_branch is None:
        raise ConfigurationNotSet()
    base = repo_config.base_branch

    jira = tracker or JiraClient.from_config(config.issue_tracker, timeout=timeout)
    try:
        issue = jira.get_issue(ticket_id)
    finally:
        if tracker is None:
            jira.close()

    prompter.echo(f"Found issue {issue.key}: {issue.summary}")
    branch = prompter.text(
        "Branch name:",
        default=default_branch_name(issue.key, issue.summary),
        help="You can change the default branch name here.",
        validators=(required,),
    )

    repo.create_and_checkout_branch(branch, base)
    prompter.echo(f"Branch {branch} created from {base} with issue {ticket_id}")
    return StartedBranch(issue=issue, branch=branch, base=base)
