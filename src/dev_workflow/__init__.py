"""wf: start work on a ticket and push it.

Provides:
- `wf start <ticket>`: fetch the Jira issue, derive a branch name and check out
  a new branch from the repository's base branch
- `wf push`: push the current branch to origin with SSH agent credentials
- `wf init`: (re)configure the Jira connection and the base branch
"""

__version__ = "0.1.0"

from dev_workflow.settings import WorkflowSettings  # noqa: E402

__all__ = ["__version__", "WorkflowSettings"]
