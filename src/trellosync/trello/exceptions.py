"""Custom exceptions for the Trello client."""


class TrelloError(Exception):
    """Base exception for Trello client errors."""


class TrelloAPIError(TrelloError):
    """A Trello REST call failed at the transport or HTTP level."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
