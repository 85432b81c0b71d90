"""CLI entry point for trellosync.

Run as a GitHub Actions step: the action name comes from the
``trello-action`` input, the payload from the runner's event file.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from trellosync.actions import notice, set_failed, set_output
from trellosync.config import Config, ConfigError
from trellosync.github import EventError, load_event
from trellosync.handlers import (
    REQUIRED_LISTS,
    Action,
    ActionHandlers,
    HandlerError,
    HandlerResult,
    NoNewMembersError,
)
from trellosync.logging import get_logger, sanitize_for_log, setup_logging
from trellosync.trello import TrelloClient, TrelloError

logger = get_logger("cli")


def _fail(message: str) -> None:
    message = sanitize_for_log(message)
    logger.error(message)
    set_failed(message)
    sys.exit(1)


def _report(result: HandlerResult) -> None:
    """Publish a handler result as step outputs."""
    if result.message:
        notice(result.message)
        set_output("message", result.message)

    set_output("cards", [card.id for card in result.cards])
    if result.unmatched:
        logger.warning(
            "No card found for issue(s): %s",
            ", ".join(f"#{number}" for number in result.unmatched),
        )
        set_output("unmatched", result.unmatched)


@click.command()
@click.version_option(package_name="trellosync")
@click.option(
    "--action",
    "action_name",
    envvar="INPUT_TRELLO-ACTION",
    type=click.Choice([action.value for action in Action]),
    required=True,
    help="Workflow action to run (default: the trello-action step input)",
)
@click.option(
    "--event-path",
    envvar="GITHUB_EVENT_PATH",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Path to the webhook event JSON (default: $GITHUB_EVENT_PATH)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
def main(action_name: str, event_path: Path, verbose: bool) -> None:
    """Mirror a GitHub issue or pull request event onto a Trello board."""
    setup_logging(level="DEBUG" if verbose else None)
    action = Action(action_name)

    try:
        config = Config.from_env()
        config.require(*REQUIRED_LISTS[action])
        event = load_event(event_path)

        with TrelloClient(config.api_key, config.api_token) as client:
            result = ActionHandlers(client, config, event).run(action)

    except NoNewMembersError as e:
        set_output("board-members", e.board_members)
        set_output("assignees", e.assignees)
        _fail(str(e))
    except ConfigError as e:
        _fail(f"Configuration error: {e}")
    except EventError as e:
        _fail(f"Event error: {e}")
    except (HandlerError, TrelloError) as e:
        _fail(str(e))
    else:
        _report(result)


if __name__ == "__main__":
    main()
