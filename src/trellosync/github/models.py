"""Pydantic models for the parts of the GitHub webhook payload we read."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trellosync.github.exceptions import EventError


class User(BaseModel):
    """A GitHub account referenced from an issue or pull request."""

    model_config = ConfigDict(extra="ignore")

    login: str


class Label(BaseModel):
    """A label attached to an issue."""

    model_config = ConfigDict(extra="ignore")

    name: str


class Issue(BaseModel):
    """The ``issue`` object of an ``issues`` event."""

    model_config = ConfigDict(extra="ignore")

    number: int
    title: str
    body: str | None = None
    html_url: str
    assignees: list[User] = Field(default_factory=list)
    labels: list[Label] = Field(default_factory=list)

    @property
    def assignee_logins(self) -> list[str]:
        return [user.login for user in self.assignees]

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]


class PullRequest(BaseModel):
    """The ``pull_request`` object of a ``pull_request`` event."""

    model_config = ConfigDict(extra="ignore")

    body: str | None = None
    html_url: str
    requested_reviewers: list[User] = Field(default_factory=list)

    @property
    def reviewer_logins(self) -> list[str]:
        return [user.login for user in self.requested_reviewers]


class GitHubEvent(BaseModel):
    """A webhook event payload as delivered to the workflow run."""

    model_config = ConfigDict(extra="ignore")

    action: str | None = None
    issue: Issue | None = None
    pull_request: PullRequest | None = None

    def require_issue(self) -> Issue:
        """Return the issue, or raise EventError if the event has none."""
        if self.issue is None:
            raise EventError("Event payload has no issue")
        return self.issue

    def require_pull_request(self) -> PullRequest:
        """Return the pull request, or raise EventError if the event has none."""
        if self.pull_request is None:
            raise EventError("Event payload has no pull_request")
        return self.pull_request


def load_event(path: Path | str) -> GitHubEvent:
    """Load the webhook payload written by the Actions runner.

    Args:
        path: Path to the event JSON (``GITHUB_EVENT_PATH``).

    Returns:
        Parsed event.

    Raises:
        EventError: If the file is missing or unreadable, is not UTF-8 JSON,
            or has the wrong shape.
    """
    path = Path(path)
    if not path.exists():
        raise EventError(f"Event file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EventError(f"Cannot read event file {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EventError(f"Invalid JSON in {path}: {e}") from e

    try:
        return GitHubEvent.model_validate(data)
    except ValidationError as e:
        raise EventError(f"Unexpected event payload in {path}: {e}") from e
