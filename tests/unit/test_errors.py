"""Unit tests for lifting collaborator errors into WorkflowError."""

from __future__ import annotations

import pytest

from dev_workflow.errors import (
    ConfigurationNotSet,
    GitFailure,
    TrackerFailure,
    WorkflowError,
    adapt_errors,
    adapted,
)
from dev_workflow.git.repository import BranchNotFound, GitError
from dev_workflow.tracker.client import IssueNotFound, TrackerError

CONVERSIONS = {GitError: GitFailure, TrackerError: TrackerFailure}


def test_adapt_errors_wraps_declared_source() -> None:
    with pytest.raises(GitFailure) as excinfo:
        with adapt_errors(CONVERSIONS):
            raise BranchNotFound("develop")

    assert isinstance(excinfo.value.cause, BranchNotFound)
    assert excinfo.value.__cause__ is excinfo.value.cause
    assert str(excinfo.value) == "Git error: Branch develop not found"


def test_adapt_errors_leaves_workflow_errors_alone() -> None:
    with pytest.raises(ConfigurationNotSet):
        with adapt_errors(CONVERSIONS):
            raise ConfigurationNotSet()


def test_adapt_errors_propagates_undeclared_errors() -> None:
    with pytest.raises(KeyError):
        with adapt_errors(CONVERSIONS):
            raise KeyError("nope")


def test_adapted_decorator_keeps_return_value_and_lifts_errors() -> None:
    @adapted(CONVERSIONS)
    def fetch(key: str) -> str:
        if key == "missing":
            raise IssueNotFound(key)
        return key.upper()

    assert fetch("proj-1") == "PROJ-1"
    with pytest.raises(WorkflowError, match="Jira error: Issue missing not found"):
        fetch("missing")
