"""Matching GitHub entities to Trello entities.

GitHub labels and logins are correlated with Trello labels and members by
case-insensitive name equality. Issues are linked to cards through the
``#<number>`` reference embedded in the card name.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from trellosync.trello.models import (
    ISSUE_REF_PATTERN,
    TrelloCard,
    TrelloLabel,
    TrelloMember,
)

__all__ = [
    "extract_issue_numbers",
    "find_card_for_issue",
    "match_label_ids",
    "match_member_ids",
    "merge_member_ids",
    "new_member_ids",
]


def match_label_ids(label_names: Iterable[str], labels: Sequence[TrelloLabel]) -> list[str]:
    """Collect IDs of board labels named like the given issue labels.

    Every matching label is returned, so duplicate label names on the board
    yield several IDs.
    """
    ids = []
    for name in label_names:
        wanted = name.lower()
        ids.extend(label.id for label in labels if label.name.lower() == wanted)
    return ids


def match_member_ids(logins: Iterable[str], members: Sequence[TrelloMember]) -> list[str]:
    """Collect IDs of board members whose username matches a GitHub login."""
    ids = []
    for login in logins:
        wanted = login.lower()
        ids.extend(member.id for member in members if member.username.lower() == wanted)
    return ids


def extract_issue_numbers(text: str | None) -> list[str]:
    """Return the digits of every ``#<digits>`` reference in ``text``.

    Order of appearance is kept, duplicates included.

    >>> extract_issue_numbers("fixes #1 and #2")
    ['1', '2']
    """
    if not text:
        return []
    return ISSUE_REF_PATTERN.findall(text)


def find_card_for_issue(cards: Iterable[TrelloCard], number: str | int) -> TrelloCard | None:
    """Return the first card whose name references issue ``number``, or None.

    Matching is exact per reference, so ``#12`` does not match issue 1.
    """
    wanted = str(number)
    for card in cards:
        if wanted in card.issue_numbers:
            return card
    return None


def merge_member_ids(existing: Sequence[str], additional: Iterable[str]) -> list[str]:
    """Append ``additional`` IDs to ``existing`` ones.

    Existing IDs are always kept, in order; an additional ID is only
    appended once and only when the card does not already have it.
    """
    merged = list(existing)
    for member_id in additional:
        if member_id not in merged:
            merged.append(member_id)
    return merged


def new_member_ids(card: TrelloCard, candidate_ids: Iterable[str]) -> list[str]:
    """Return the candidate IDs that are not yet members of ``card``."""
    return merge_member_ids(card.member_ids, candidate_ids)[len(card.member_ids) :]
