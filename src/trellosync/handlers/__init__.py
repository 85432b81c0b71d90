"""Action handlers - one Trello state transition per workflow event."""

from trellosync.handlers.exceptions import CardNotFoundError, HandlerError, NoNewMembersError
from trellosync.handlers.handlers import NO_ISSUE_NUMBERS_MESSAGE, ActionHandlers
from trellosync.handlers.models import REQUIRED_LISTS, Action, HandlerResult

__all__ = [
    "NO_ISSUE_NUMBERS_MESSAGE",
    "REQUIRED_LISTS",
    "Action",
    "ActionHandlers",
    "CardNotFoundError",
    "HandlerError",
    "HandlerResult",
    "NoNewMembersError",
]
