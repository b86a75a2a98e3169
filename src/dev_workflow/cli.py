"""Console script entrypoint (``wf``).

The argument parser and dispatch live in `dev_workflow.main`.
"""

from __future__ import annotations

from dev_workflow.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
