"""Exceptions for the action handlers."""


class HandlerError(Exception):
    """Base exception for handler failures reported to the workflow."""


class CardNotFoundError(HandlerError):
    """No card references the issue in the searched lists."""


class NoNewMembersError(HandlerError):
    """None of the assignees can be added to the card.

    Attributes:
        assignees: GitHub logins assigned to the issue.
        board_members: Usernames of the board's members.
    """

    def __init__(self, message: str, assignees: list[str], board_members: list[str]) -> None:
        super().__init__(message)
        self.assignees = assignees
        self.board_members = board_members
