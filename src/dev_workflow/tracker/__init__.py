"""Issue tracker access."""

from dev_workflow.tracker.client import (
    InvalidUrl,
    Issue,
    IssueNotFound,
    IssueStatus,
    JiraClient,
    RemoteServerError,
    ResponseError,
    TrackerError,
)

__all__ = [
    "InvalidUrl",
    "Issue",
    "IssueNotFound",
    "IssueStatus",
    "JiraClient",
    "RemoteServerError",
    "ResponseError",
    "TrackerError",
]
