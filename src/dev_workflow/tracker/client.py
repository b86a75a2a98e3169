"""Jira REST client.

Only the single call the ``start`` command needs: fetch an issue by key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote, urljoin, urlparse

import requests
from pydantic import BaseModel, ValidationError

from dev_workflow.config.models import IssueTrackerConfig

logger = logging.getLogger(__name__)

ISSUE_PATH = "/rest/api/2/issue/"


class TrackerError(Exception):
    """Base class for issue tracker failures."""


class IssueNotFound(TrackerError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Issue {key} not found")


class RemoteServerError(TrackerError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Remote server error {cause}")


class ResponseError(TrackerError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Invalid server response {cause}")


class InvalidUrl(TrackerError):
    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(f"Invalid server url {host!r}")


@dataclass(frozen=True, slots=True)
class IssueStatus:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class Issue:
    """Minimal issue metadata fetched from Jira."""

    id: str
    key: str
    summary: str
    status: IssueStatus


class _RestStatus(BaseModel):
    id: str
    name: str


class _RestFields(BaseModel):
    summary: str
    status: _RestStatus


class _RestIssue(BaseModel):
    id: str
    key: str
    fields: _RestFields


class JiraClient:
    """Small wrapper around the Jira REST API (v2) using basic auth."""

    def __init__(
        self,
        *,
        host: str,
        user: str,
        token: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        parsed = urlparse(host)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise InvalidUrl(host)

        self._host = host
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.auth = (user, token)
        self._session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": "dev-workflow",
            }
        )

    @classmethod
    def from_config(
        cls, config: IssueTrackerConfig, *, timeout: float | None = None
    ) -> JiraClient:
        return cls(host=config.host, user=config.user, token=config.token, timeout=timeout)

    def _issue_url(self, key: str) -> str:
        # An absolute path replaces whatever path the configured host carries.
        return urljoin(urljoin(self._host, ISSUE_PATH), quote(key, safe=""))

    def get_issue(self, key: str) -> Issue:
        """Fetch an issue by key (``PROJ-123``) or numeric id."""

        url = self._issue_url(key)
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise RemoteServerError(e) from e

        if resp.status_code == 404:
            raise IssueNotFound(key)
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise RemoteServerError(e) from e

        try:
            rest = _RestIssue.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise ResponseError(e) from e

        logger.info("Issue fetched", extra={"key": rest.key, "status": rest.fields.status.name})
        return Issue(
            id=rest.id,
            key=rest.key,
            summary=rest.fields.summary,
            status=IssueStatus(id=rest.fields.status.id, name=rest.fields.status.name),
        )

    def close(self) -> None:
        self._session.close()
