"""GitHub event payload - the webhook data that triggered the run."""

from trellosync.github.exceptions import EventError
from trellosync.github.models import GitHubEvent, Issue, Label, PullRequest, User, load_event

__all__ = [
    "EventError",
    "GitHubEvent",
    "Issue",
    "Label",
    "PullRequest",
    "User",
    "load_event",
]
