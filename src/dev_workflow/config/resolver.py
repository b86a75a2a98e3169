"""Load-or-initialize resolution for the global and repository scopes.

Both scopes follow the same rules:

- a scope that is set is returned as is;
- a scope that is not set is initialized interactively only when the caller
  passes ``auto_init=True``; otherwise ``ConfigurationNotSet`` is raised;
- initializing a scope that is already set asks for confirmation first, and a
  refusal returns the existing value untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from dev_workflow import __version__
from dev_workflow.config.models import BranchesConfig, GlobalConfig, IssueTrackerConfig, RepoConfig
from dev_workflow.config.store import GlobalConfigStore, NoBranchAvailable, RepoConfigStore
from dev_workflow.errors import ConfigurationNotSet, NoGitWorkingDirectory
from dev_workflow.prompts import Prompter, min_length, required, url

if TYPE_CHECKING:
    from dev_workflow.git.repository import GitRepository

logger = logging.getLogger(__name__)

TOKEN_HELP = (
    "A token is required to authenticate you on Jira. You can create a token from "
    "https://id.atlassian.com/manage-profile/security/api-tokens"
)

# Lower rank sorts first; unlisted branches share the last rank.
_BRANCH_RANK = {"develop": 0, "main": 1, "master": 1}


def sort_branches(branches: Iterable[str]) -> list[str]:
    """Order branch names by how likely they are to be the feature base branch.

    ``develop`` comes first, then ``main``/``master``, then the rest
    alphabetically.
    """

    return sorted(branches, key=lambda name: (_BRANCH_RANK.get(name, 2), name))


def _banner() -> str:
    return f"\n    workflow v{__version__}\n\n        <<<< Initialisation >>>>\n"


def init_global_config(store: GlobalConfigStore, prompter: Prompter) -> GlobalConfig:
    current = store.load()
    if current.is_set and not prompter.confirm(
        "Warning, your configuration is already defined, "
        "do you want to continue and overwrite it?",
        default=False,
    ):
        return current

    prompter.echo(_banner())
    previous = current.issue_tracker

    host = prompter.text(
        "What's the url of your Jira instance?",
        default=previous.host if previous else None,
        validators=(required, url),
    )
    user = prompter.text(
        "What's your username?",
        default=previous.user if previous else None,
        validators=(required, min_length(3)),
    )
    token = prompter.text(
        "What's your token?",
        help=TOKEN_HELP,
        validators=(required, min_length(3)),
        hide_input=True,
    )

    config = GlobalConfig(issue_tracker=IssueTrackerConfig(host=host, user=user, token=token))
    store.save(config)
    return config


def repo_config_store(repo: GitRepository) -> RepoConfigStore:
    workdir = repo.workdir
    if workdir is None:
        raise NoGitWorkingDirectory()
    return RepoConfigStore.for_workdir(workdir)


def init_repo_config(repo: GitRepository, prompter: Prompter) -> RepoConfig:
    store = repo_config_store(repo)
    current = store.load()
    if current.is_set and not prompter.confirm(
        "Warning, your repository configuration is already defined, "
        "do you want to continue and overwrite it?",
        default=False,
    ):
        return current

    branches = sort_branches(repo.branches())
    if not branches:
        raise NoBranchAvailable()

    base = prompter.select(
        "What branch do you want to use as base branch for features?",
        branches,
    )

    config = RepoConfig(branches=BranchesConfig(base=base))
    store.save(config)
    return config


def resolve_global_config(
    store: GlobalConfigStore, prompter: Prompter, *, auto_init: bool
) -> GlobalConfig:
    config = store.load()
    if config.is_set:
        return config
    if not auto_init:
        raise ConfigurationNotSet()

    logger.info("Global configuration not set", extra={"path": str(store.path)})
    prompter.echo("Configuration is not set, starting initialization")
    return init_global_config(store, prompter)


def resolve_repo_config(repo: GitRepository, prompter: Prompter, *, auto_init: bool) -> RepoConfig:
    store = repo_config_store(repo)
    config = store.load()
    if config.is_set:
        return config
    if not auto_init:
        raise ConfigurationNotSet()

    logger.info("Repository configuration not set", extra={"path": str(store.path)})
    prompter.echo("Repository configuration is not set, starting initialization")
    return init_repo_config(repo, prompter)
