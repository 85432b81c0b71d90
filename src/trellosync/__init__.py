"""trellosync - Mirror GitHub issues and pull requests onto a Trello board."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__
