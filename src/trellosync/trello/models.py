"""Data models for the Trello client."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

ISSUE_REF_PATTERN = re.compile(r"#([0-9]+)")


def parse_issue_numbers(name: str) -> list[str]:
    """Return the digits of every ``#<digits>`` reference in a card name."""
    return ISSUE_REF_PATTERN.findall(name or "")


@dataclass
class TrelloLabel:
    """A label defined on a board."""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloLabel:
        # Trello allows unnamed (color-only) labels
        return cls(id=data["id"], name=data.get("name") or "")


@dataclass
class TrelloMember:
    """A member of a board."""

    id: str
    username: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloMember:
        return cls(id=data["id"], username=data.get("username") or "")


@dataclass
class TrelloCard:
    """A card on a board.

    Attributes:
        id: Trello card ID.
        name: Card title, expected to embed ``#<issue number>``.
        member_ids: IDs of the members on the card, in Trello's order.
        list_id: ID of the list holding the card, when known.
        issue_numbers: GitHub issue numbers referenced in the name, in order.
    """

    id: str
    name: str
    member_ids: list[str] = field(default_factory=list)
    list_id: str | None = None
    issue_numbers: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.issue_numbers:
            self.issue_numbers = parse_issue_numbers(self.name)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloCard:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            member_ids=list(data.get("idMembers") or []),
            list_id=data.get("idList"),
        )


@dataclass
class TrelloAttachment:
    """A URL attachment on a card."""

    id: str
    url: str
    name: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloAttachment:
        return cls(id=data["id"], url=data.get("url") or "", name=data.get("name") or "")


@dataclass
class CardCreateParams:
    """Input for creating a card from a GitHub issue."""

    number: int
    title: str
    description: str
    url: str
    member_ids: list[str] = field(default_factory=list)
    label_ids: list[str] = field(default_factory=list)

    @property
    def card_name(self) -> str:
        return f"[#{self.number}] {self.title}"


@dataclass
class CardUpdateParams:
    """Partial card update. Fields left as None are not sent.

    ``member_ids`` replaces the card's member list; callers merge beforehand.
    """

    destination_list_id: str | None = None
    member_ids: list[str] | None = None

    def to_form(self) -> dict[str, str]:
        form: dict[str, str] = {}
        if self.destination_list_id is not None:
            form["idList"] = self.destination_list_id
        if self.member_ids is not None:
            form["idMembers"] = ",".join(self.member_ids)
        return form
