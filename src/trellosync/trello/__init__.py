"""Trello client - REST access to boards, lists and cards."""

from trellosync.trello.client import DEFAULT_BASE_URL, TrelloClient
from trellosync.trello.exceptions import TrelloAPIError, TrelloError
from trellosync.trello.models import (
    CardCreateParams,
    CardUpdateParams,
    TrelloAttachment,
    TrelloCard,
    TrelloLabel,
    TrelloMember,
    parse_issue_numbers,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "CardCreateParams",
    "CardUpdateParams",
    "TrelloAPIError",
    "TrelloAttachment",
    "TrelloCard",
    "TrelloClient",
    "TrelloError",
    "TrelloLabel",
    "TrelloMember",
    "parse_issue_numbers",
]
