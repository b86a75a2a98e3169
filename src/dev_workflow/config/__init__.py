"""Global and per-repository configuration."""

from dev_workflow.config.models import BranchesConfig, GlobalConfig, IssueTrackerConfig, RepoConfig
from dev_workflow.config.resolver import (
    init_global_config,
    init_repo_config,
    resolve_global_config,
    resolve_repo_config,
    sort_branches,
)
from dev_workflow.config.store import (
    REPO_CONFIG_PATH,
    ConfigError,
    ConfigPersistenceError,
    GlobalConfigStore,
    NoBranchAvailable,
    RepoConfigStore,
)

__all__ = [
    "REPO_CONFIG_PATH",
    "BranchesConfig",
    "ConfigError",
    "ConfigPersistenceError",
    "GlobalConfig",
    "GlobalConfigStore",
    "IssueTrackerConfig",
    "NoBranchAvailable",
    "RepoConfig",
    "RepoConfigStore",
    "init_global_config",
    "init_repo_config",
    "resolve_global_config",
    "resolve_repo_config",
    "sort_branches",
]
