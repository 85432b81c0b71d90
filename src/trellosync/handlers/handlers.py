"""ActionHandlers - Mirror GitHub issue and pull request events onto Trello."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from trellosync.correlation import (
    extract_issue_numbers,
    find_card_for_issue,
    match_label_ids,
    match_member_ids,
    merge_member_ids,
    new_member_ids,
)
from trellosync.handlers.exceptions import CardNotFoundError, NoNewMembersError
from trellosync.handlers.models import Action, HandlerResult
from trellosync.trello.models import CardCreateParams, CardUpdateParams

if TYPE_CHECKING:
    from trellosync.config import Config
    from trellosync.github import GitHubEvent, PullRequest
    from trellosync.trello import TrelloCard, TrelloClient

logger = logging.getLogger(__name__)

NO_ISSUE_NUMBERS_MESSAGE = "No issue numbers found in pull request description."


class ActionHandlers:
    """Runs one workflow action against the board.

    Every run fetches labels, members and cards fresh; nothing is cached
    between invocations. Trello calls are issued one after another.
    """

    def __init__(self, client: TrelloClient, config: Config, event: GitHubEvent) -> None:
        """Initialize the handlers.

        Args:
            client: Trello client used for all reads and writes.
            config: Board and list IDs.
            event: Webhook payload that triggered the run.
        """
        self.client = client
        self.config = config
        self.event = event

    def run(self, action: Action | str) -> HandlerResult:
        """Dispatch to the handler for ``action``."""
        action = Action(action)
        handlers: dict[Action, Callable[[], HandlerResult]] = {
            Action.CREATE_CARD_WHEN_ISSUE_OPENED: self.create_card_when_issue_opened,
            Action.MOVE_CARD_WHEN_PULL_REQUEST_OPENED: self.move_card_when_pull_request_opened,
            Action.MOVE_CARD_WHEN_PULL_REQUEST_CLOSED: self.move_card_when_pull_request_closed,
            Action.ADD_MEMBER_TO_CARD_WHEN_ASSIGNED: self.add_member_to_card_when_assigned,
            Action.MOVE_CARD_WHEN_ISSUE_CLOSED: self.move_card_when_issue_closed,
        }
        logger.info("Running action %s", action.value)
        return handlers[action]()

    def create_card_when_issue_opened(self) -> HandlerResult:
        """Create a to-do card for a newly opened issue.

        Issue labels and assignees are matched to board labels and members
        by name. Re-running on the same issue creates another card.
        """
        issue = self.event.require_issue()
        list_id = self.config.list_id("todo_list_id")

        labels = self.client.get_labels_of_board(self.config.board_id)
        label_ids = match_label_ids(issue.label_names, labels)

        members = self.client.get_members_of_board(self.config.board_id)
        member_ids = match_member_ids(issue.assignee_logins, members)

        params = CardCreateParams(
            number=issue.number,
            title=issue.title,
            description=issue.body or "",
            url=issue.html_url,
            member_ids=member_ids,
            label_ids=label_ids,
        )
        card = self.client.create_card(list_id, params)
        return HandlerResult(action=Action.CREATE_CARD_WHEN_ISSUE_OPENED, cards=[card])

    def move_card_when_pull_request_opened(self) -> HandlerResult:
        """Move cards referenced by a new pull request from in-progress to debugging.

        Requested reviewers are added as card members and the pull request
        URL is attached to each moved card.
        """
        return self._move_referenced_cards(
            Action.MOVE_CARD_WHEN_PULL_REQUEST_OPENED,
            self.event.require_pull_request(),
            departure_list_id=self.config.list_id("in_progress_list_id"),
            destination_list_id=self.config.list_id("debugging_list_id"),
            attach_url=True,
        )

    def move_card_when_pull_request_closed(self) -> HandlerResult:
        """Move cards referenced by a closed pull request from debugging to done."""
        return self._move_referenced_cards(
            Action.MOVE_CARD_WHEN_PULL_REQUEST_CLOSED,
            self.event.require_pull_request(),
            departure_list_id=self.config.list_id("debugging_list_id"),
            destination_list_id=self.config.list_id("done_list_id"),
            attach_url=False,
        )

    def _move_referenced_cards(
        self,
        action: Action,
        pull_request: PullRequest,
        departure_list_id: str,
        destination_list_id: str,
        attach_url: bool,
    ) -> HandlerResult:
        """Move the card of every issue referenced in the pull request body.

        At most one card is moved per issue number. Numbers without a card
        in the departure list are reported in ``unmatched``, not raised.
        """
        issue_numbers = extract_issue_numbers(pull_request.body)
        if not issue_numbers:
            logger.info(NO_ISSUE_NUMBERS_MESSAGE)
            return HandlerResult(action=action, message=NO_ISSUE_NUMBERS_MESSAGE)

        members = self.client.get_members_of_board(self.config.board_id)
        reviewer_ids = match_member_ids(pull_request.reviewer_logins, members)

        cards = self.client.get_cards_of_list(departure_list_id)
        result = HandlerResult(action=action)
        moved: set[str] = set()

        for number in issue_numbers:
            card = find_card_for_issue(cards, number)
            if card is None:
                logger.info("No card for #%s in list %s", number, departure_list_id)
                result.unmatched.append(number)
                continue
            if card.id in moved:
                # Body referenced the same issue twice
                continue

            params = CardUpdateParams(
                destination_list_id=destination_list_id,
                member_ids=merge_member_ids(card.member_ids, reviewer_ids),
            )
            updated = self.client.put_card(card.id, params)
            logger.info("Moved card %s (#%s) to list %s", card.id, number, destination_list_id)
            if attach_url:
                self.client.add_url_source_to_card(card.id, pull_request.html_url)

            moved.add(card.id)
            result.cards.append(updated)

        return result

    def add_member_to_card_when_assigned(self) -> HandlerResult:
        """Add the issue's assignees as members of its existing card.

        Raises:
            CardNotFoundError: If no searched list holds the issue's card.
            NoNewMembersError: If every matched assignee is already on the card.
        """
        issue = self.event.require_issue()
        list_ids = [
            self.config.list_id("todo_list_id"),
            self.config.list_id("in_progress_list_id"),
            self.config.list_id("debugging_list_id"),
        ]
        card = self._find_card_in_lists(list_ids, issue.number)

        members = self.client.get_members_of_board(self.config.board_id)
        assignees = issue.assignee_logins
        added = new_member_ids(card, match_member_ids(assignees, members))

        if not added:
            raise NoNewMembersError(
                "No new members to add to card.",
                assignees=assignees,
                board_members=[member.username for member in members],
            )

        params = CardUpdateParams(member_ids=card.member_ids + added)
        updated = self.client.put_card(card.id, params)
        logger.info("Added %d member(s) to card %s", len(added), card.id)
        return HandlerResult(action=Action.ADD_MEMBER_TO_CARD_WHEN_ASSIGNED, cards=[updated])

    def move_card_when_issue_closed(self) -> HandlerResult:
        """Move a closed issue's card from the departure list to the destination list.

        Raises:
            CardNotFoundError: If the departure list has no card for the issue.
        """
        issue = self.event.require_issue()
        departure_list_id = self.config.list_id("departure_list_id")
        destination_list_id = self.config.list_id("destination_list_id")

        card = self._find_card_in_lists([departure_list_id], issue.number)
        params = CardUpdateParams(destination_list_id=destination_list_id)
        updated = self.client.put_card(card.id, params)
        logger.info("Moved card %s (#%s) to list %s", card.id, issue.number, destination_list_id)
        return HandlerResult(action=Action.MOVE_CARD_WHEN_ISSUE_CLOSED, cards=[updated])

    def _find_card_in_lists(self, list_ids: list[str], number: int) -> TrelloCard:
        """Search lists in order and return the first card for issue ``number``.

        Raises:
            CardNotFoundError: If no list has a matching card.
        """
        for list_id in list_ids:
            logger.debug("Searching list %s for issue #%s", list_id, number)
            card = find_card_for_issue(self.client.get_cards_of_list(list_id), number)
            if card is not None:
                return card

        raise CardNotFoundError(f"Card not found for issue #{number}")
