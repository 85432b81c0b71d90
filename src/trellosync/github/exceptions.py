"""Custom exceptions for GitHub event handling."""


class EventError(Exception):
    """The webhook event payload is missing or malformed."""
