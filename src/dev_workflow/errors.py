"""Top-level error type reported by the ``wf`` command.

Each collaborator (git, issue tracker, configuration store, prompts) raises its
own exception family. At the command boundary those are lifted into a single
``WorkflowError`` hierarchy with one wrapping variant per collaborator, so the
CLI only has to know how to report ``WorkflowError``.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
T = TypeVar("T")


class WorkflowError(Exception):
    """Base class for every error surfaced to the user."""


class ConfigurationNotSet(WorkflowError):
    def __init__(self) -> None:
        super().__init__("Configuration is not set, please run init command first")


class NoGitWorkingDirectory(WorkflowError):
    def __init__(self) -> None:
        super().__init__("Current repository has no working directory !?!")


class WrappedError(WorkflowError):
    """A collaborator exception lifted into the ``WorkflowError`` hierarchy."""

    label = "Error"

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"{self.label}: {cause}")


class ConfigFailure(WrappedError):
    label = "Configuration error"


class GitFailure(WrappedError):
    label = "Git error"


class TrackerFailure(WrappedError):
    label = "Jira error"


class InputFailure(WrappedError):
    label = "Input error"


Conversions = Mapping[type[Exception], type[WrappedError]]


def lift(exc: Exception, conversions: Conversions) -> WorkflowError | None:
    """Return ``exc`` converted through the first matching declared conversion."""

    if isinstance(exc, WorkflowError):
        return exc
    for source, target in conversions.items():
        if isinstance(exc, source):
            return target(exc)
    return None


@contextmanager
def adapt_errors(conversions: Conversions) -> Iterator[None]:
    """Re-raise collaborator exceptions as their declared ``WorkflowError`` variant.

    Exceptions with no declared conversion propagate unchanged.
    """

    try:
        yield
    except Exception as exc:
        lifted = lift(exc, conversions)
        if lifted is None or lifted is exc:
            raise
        raise lifted from exc


def adapted(conversions: Conversions) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator form of :func:`adapt_errors`."""

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with adapt_errors(conversions):
                return func(*args, **kwargs)

        return wrapper

    return decorator
