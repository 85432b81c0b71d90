"""Shared pytest fixtures and configuration."""

import logging
from collections.abc import Iterator

import pytest

from trellosync.config import Config


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls the live Trello API (local only)")


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging, which may hold captured streams."""
    yield
    logger = logging.getLogger("trellosync")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config() -> Config:
    """Config with every list configured."""
    return Config(
        api_key="test-key",
        api_token="test-token",
        board_id="board1",
        todo_list_id="todo",
        in_progress_list_id="in_progress",
        debugging_list_id="debugging",
        done_list_id="done",
        departure_list_id="departure",
        destination_list_id="destination",
    )


@pytest.fixture
def issue_payload() -> dict:
    """The ``issue`` object of an issues webhook event."""
    return {
        "number": 42,
        "title": "Crash on startup",
        "body": "Steps to reproduce...",
        "html_url": "https://github.com/user/repo/issues/42",
        "assignees": [{"login": "User1"}],
        "labels": [{"name": "Bug"}, {"name": "urgent"}],
    }


@pytest.fixture
def pull_request_payload() -> dict:
    """The ``pull_request`` object of a pull_request webhook event."""
    return {
        "body": "This pull request fixes #1 and #2",
        "html_url": "https://github.com/user/repo/pull/1",
        "requested_reviewers": [{"login": "user1"}, {"login": "user2"}],
    }
