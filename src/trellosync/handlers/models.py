"""Data models for the action handlers."""

from dataclasses import dataclass, field
from enum import Enum

from trellosync.trello.models import TrelloCard


class Action(str, Enum):
    """Workflow actions selectable through the ``trello-action`` input."""

    CREATE_CARD_WHEN_ISSUE_OPENED = "create_card_when_issue_opened"
    MOVE_CARD_WHEN_PULL_REQUEST_OPENED = "move_card_when_pull_request_opened"
    MOVE_CARD_WHEN_PULL_REQUEST_CLOSED = "move_card_when_pull_request_closed"
    ADD_MEMBER_TO_CARD_WHEN_ASSIGNED = "add_member_to_card_when_assigned"
    MOVE_CARD_WHEN_ISSUE_CLOSED = "move_card_when_issue_closed"


# Config fields each action needs besides credentials and board ID
REQUIRED_LISTS: dict[Action, tuple[str, ...]] = {
    Action.CREATE_CARD_WHEN_ISSUE_OPENED: ("todo_list_id",),
    Action.MOVE_CARD_WHEN_PULL_REQUEST_OPENED: ("in_progress_list_id", "debugging_list_id"),
    Action.MOVE_CARD_WHEN_PULL_REQUEST_CLOSED: ("debugging_list_id", "done_list_id"),
    Action.ADD_MEMBER_TO_CARD_WHEN_ASSIGNED: (
        "todo_list_id",
        "in_progress_list_id",
        "debugging_list_id",
    ),
    Action.MOVE_CARD_WHEN_ISSUE_CLOSED: ("departure_list_id", "destination_list_id"),
}


@dataclass
class HandlerResult:
    """Outcome of one handler run.

    Attributes:
        action: The action that ran.
        cards: Cards created or updated, as returned by Trello.
        unmatched: Referenced issue numbers with no card in the searched list.
        message: Informational message for non-error short-circuits.
    """

    action: Action
    cards: list[TrelloCard] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)
    message: str | None = None
