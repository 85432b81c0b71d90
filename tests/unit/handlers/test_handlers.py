"""Unit tests for ActionHandlers."""

from unittest.mock import MagicMock, call

import pytest

from trellosync.config import Config, ConfigError
from trellosync.github import EventError, GitHubEvent
from trellosync.handlers import (
    NO_ISSUE_NUMBERS_MESSAGE,
    Action,
    ActionHandlers,
    CardNotFoundError,
    NoNewMembersError,
)
from trellosync.trello import (
    CardCreateParams,
    CardUpdateParams,
    TrelloAPIError,
    TrelloCard,
    TrelloClient,
    TrelloLabel,
    TrelloMember,
)

PR_URL = "https://github.com/user/repo/pull/1"


@pytest.fixture
def client() -> MagicMock:
    """Create a mock Trello client that echoes updated cards back."""
    client = MagicMock(spec=TrelloClient)
    client.get_members_of_board.return_value = [
        TrelloMember(id="member1", username="user1"),
        TrelloMember(id="member2", username="user2"),
        TrelloMember(id="member3", username="user3"),
    ]
    client.put_card.side_effect = lambda card_id, params: TrelloCard(
        id=card_id, name="", member_ids=params.member_ids or []
    )
    return client


@pytest.fixture
def cards() -> list[TrelloCard]:
    return [
        TrelloCard(id="card1", name="Fix #1", member_ids=["member1"]),
        TrelloCard(id="card2", name="Fix #2", member_ids=["member2"]),
        TrelloCard(id="card3", name="Fix #3", member_ids=[]),
    ]


def _handlers(client: MagicMock, config: Config, **payload: dict) -> ActionHandlers:
    return ActionHandlers(client, config, GitHubEvent.model_validate(payload))


@pytest.mark.unit
class TestCreateCardWhenIssueOpened:
    """Tests for create_card_when_issue_opened."""

    def test_creates_card_with_matched_labels_and_members(
        self, client: MagicMock, config: Config, issue_payload: dict
    ) -> None:
        client.get_labels_of_board.return_value = [
            TrelloLabel(id="label-bug", name="bug"),
            TrelloLabel(id="label-urgent", name="Urgent"),
            TrelloLabel(id="label-docs", name="docs"),
        ]
        created = TrelloCard(id="new", name="[#42] Crash on startup")
        client.create_card.return_value = created

        result = _handlers(client, config, issue=issue_payload).create_card_when_issue_opened()

        client.get_labels_of_board.assert_called_once_with("board1")
        client.get_members_of_board.assert_called_once_with("board1")
        client.create_card.assert_called_once_with(
            "todo",
            CardCreateParams(
                number=42,
                title="Crash on startup",
                description="Steps to reproduce...",
                url="https://github.com/user/repo/issues/42",
                member_ids=["member1"],
                label_ids=["label-bug", "label-urgent"],
            ),
        )
        assert result.action is Action.CREATE_CARD_WHEN_ISSUE_OPENED
        assert result.cards == [created]

    def test_null_body_becomes_empty_description(
        self, client: MagicMock, config: Config, issue_payload: dict
    ) -> None:
        issue_payload["body"] = None
        client.get_labels_of_board.return_value = []

        _handlers(client, config, issue=issue_payload).create_card_when_issue_opened()

        params = client.create_card.call_args.args[1]
        assert params.description == ""
        assert params.card_name == "[#42] Crash on startup"

    def test_requires_issue(self, client: MagicMock, config: Config) -> None:
        with pytest.raises(EventError):
            _handlers(client, config).create_card_when_issue_opened()

        client.create_card.assert_not_called()


@pytest.mark.unit
class TestMoveCardWhenPullRequestOpened:
    """Tests for move_card_when_pull_request_opened."""

    def test_moves_cards_and_adds_reviewers(
        self,
        client: MagicMock,
        config: Config,
        cards: list[TrelloCard],
        pull_request_payload: dict,
    ) -> None:
        client.get_cards_of_list.return_value = cards

        result = _handlers(
            client, config, pull_request=pull_request_payload
        ).move_card_when_pull_request_opened()

        client.get_members_of_board.assert_called_once_with("board1")
        client.get_cards_of_list.assert_called_once_with("in_progress")
        assert client.put_card.call_args_list == [
            call(
                "card1",
                CardUpdateParams(destination_list_id="debugging", member_ids=["member1", "member2"]),
            ),
            call(
                "card2",
                CardUpdateParams(destination_list_id="debugging", member_ids=["member2", "member1"]),
            ),
        ]
        assert client.add_url_source_to_card.call_args_list == [
            call("card1", PR_URL),
            call("card2", PR_URL),
        ]
        assert [card.id for card in result.cards] == ["card1", "card2"]
        assert all(set(card.member_ids) == {"member1", "member2"} for card in result.cards)
        assert result.unmatched == []
        assert result.message is None

    def test_no_issue_numbers_short_circuits(
        self, client: MagicMock, config: Config, pull_request_payload: dict
    ) -> None:
        pull_request_payload["body"] = "This pull request has no issue numbers"

        result = _handlers(
            client, config, pull_request=pull_request_payload
        ).move_card_when_pull_request_opened()

        assert result.message == NO_ISSUE_NUMBERS_MESSAGE
        assert client.method_calls == []

    def test_null_body_short_circuits(
        self, client: MagicMock, config: Config, pull_request_payload: dict
    ) -> None:
        pull_request_payload["body"] = None

        result = _handlers(
            client, config, pull_request=pull_request_payload
        ).move_card_when_pull_request_opened()

        assert result.message == NO_ISSUE_NUMBERS_MESSAGE
        client.put_card.assert_not_called()

    def test_empty_departure_list_is_not_an_error(
        self, client: MagicMock, config: Config, pull_request_payload: dict
    ) -> None:
        client.get_cards_of_list.return_value = []

        result = _handlers(
            client, config, pull_request=pull_request_payload
        ).move_card_when_pull_request_opened()

        client.get_cards_of_list.assert_called_once_with("in_progress")
        client.put_card.assert_not_called()
        client.add_url_source_to_card.assert_not_called()
        assert result.cards == []
        assert result.unmatched == ["1", "2"]

    def test_unmatched_numbers_reported(
        self,
        client: MagicMock,
        config: Config,
        cards: list[TrelloCard],
        pull_request_payload: dict,
    ) -> None:
        pull_request_payload["body"] = "Closes #3, relates to #99"
        client.get_cards_of_list.return_value = cards

        result = _handlers(
            client, config, pull_request=pull_request_payload
        ).move_card_when_pull_request_opened()

        client.put_card.assert_called_once()
        assert client.put_card.call_args.args[0] == "card3"
        assert result.unmatched == ["99"]

    def test_repeated_reference_moves_card_once(
        self,
        client: MagicMock,
        config: Config,
        cards: list[TrelloCard],
        pull_request_payload: dict,
    ) -> None:
        pull_request_payload["body"] = "Fixes #1. Really fixes #1."
        client.get_cards_of_list.return_value = cards

        _handlers(client, config, pull_request=pull_request_payload).move_card_when_pull_request_opened()

        client.put_card.assert_called_once()
        client.add_url_source_to_card.assert_called_once_with("card1", PR_URL)

    def test_api_failure_propagates(
        self,
        client: MagicMock,
        config: Config,
        cards: list[TrelloCard],
        pull_request_payload: dict,
    ) -> None:
        client.get_cards_of_list.return_value = cards
        client.put_card.side_effect = TrelloAPIError("boom", status_code=500)

        with pytest.raises(TrelloAPIError):
            _handlers(
                client, config, pull_request=pull_request_payload
            ).move_card_when_pull_request_opened()

        client.add_url_source_to_card.assert_not_called()


@pytest.mark.unit
class TestMoveCardWhenPullRequestClosed:
    """Tests for move_card_when_pull_request_closed."""

    def test_moves_cards_to_done(
        self,
        client: MagicMock,
        config: Config,
        cards: list[TrelloCard],
        pull_request_payload: dict,
    ) -> None:
        client.get_cards_of_list.return_value = cards

        result = _handlers(
            client, config, pull_request=pull_request_payload
        ).move_card_when_pull_request_closed()

        client.get_cards_of_list.assert_called_once_with("debugging")
        assert client.put_card.call_args_list == [
            call(
                "card1",
                CardUpdateParams(destination_list_id="done", member_ids=["member1", "member2"]),
            ),
            call(
                "card2",
                CardUpdateParams(destination_list_id="done", member_ids=["member2", "member1"]),
            ),
        ]
        client.add_url_source_to_card.assert_not_called()
        assert result.action is Action.MOVE_CARD_WHEN_PULL_REQUEST_CLOSED

    def test_empty_departure_list_is_not_an_error(
        self, client: MagicMock, config: Config, pull_request_payload: dict
    ) -> None:
        client.get_cards_of_list.return_value = []

        result = _handlers(
            client, config, pull_request=pull_request_payload
        ).move_card_when_pull_request_closed()

        client.get_cards_of_list.assert_called_once_with("debugging")
        client.put_card.assert_not_called()
        client.add_url_source_to_card.assert_not_called()
        assert result.cards == []
        assert result.unmatched == ["1", "2"]

    def test_only_first_matching_card_moved(
        self, client: MagicMock, config: Config, pull_request_payload: dict
    ) -> None:
        pull_request_payload["body"] = "Fixes #5"
        client.get_cards_of_list.return_value = [
            TrelloCard(id="first", name="[#5] Original"),
            TrelloCard(id="second", name="[#5] Copy"),
        ]

        _handlers(client, config, pull_request=pull_request_payload).move_card_when_pull_request_closed()

        client.put_card.assert_called_once()
        assert client.put_card.call_args.args[0] == "first"

    def test_no_issue_numbers_short_circuits(
        self, client: MagicMock, config: Config, pull_request_payload: dict
    ) -> None:
        pull_request_payload["body"] = "Refactoring only"

        result = _handlers(
            client, config, pull_request=pull_request_payload
        ).move_card_when_pull_request_closed()

        assert result.message == NO_ISSUE_NUMBERS_MESSAGE
        assert client.method_calls == []


@pytest.mark.unit
class TestAddMemberToCardWhenAssigned:
    """Tests for add_member_to_card_when_assigned."""

    def test_adds_new_assignee(self, client: MagicMock, config: Config, issue_payload: dict) -> None:
        issue_payload["assignees"] = [{"login": "user1"}, {"login": "USER2"}]
        client.get_cards_of_list.side_effect = [
            [],
            [TrelloCard(id="card42", name="[#42] Crash on startup", member_ids=["member1"])],
        ]

        result = _handlers(client, config, issue=issue_payload).add_member_to_card_when_assigned()

        assert client.get_cards_of_list.call_args_list == [call("todo"), call("in_progress")]
        client.put_card.assert_called_once_with(
            "card42", CardUpdateParams(member_ids=["member1", "member2"])
        )
        assert result.cards[0].id == "card42"

    def test_searches_lists_in_order_and_stops_at_first_match(
        self, client: MagicMock, config: Config, issue_payload: dict
    ) -> None:
        client.get_cards_of_list.return_value = [
            TrelloCard(id="card42", name="[#42] Crash on startup", member_ids=[])
        ]

        _handlers(client, config, issue=issue_payload).add_member_to_card_when_assigned()

        client.get_cards_of_list.assert_called_once_with("todo")

    def test_finds_card_referencing_several_issues(
        self, client: MagicMock, config: Config, issue_payload: dict
    ) -> None:
        client.get_cards_of_list.return_value = [
            TrelloCard(id="card42", name="Follow-up to #3: fix #42", member_ids=[])
        ]

        _handlers(client, config, issue=issue_payload).add_member_to_card_when_assigned()

        client.put_card.assert_called_once_with("card42", CardUpdateParams(member_ids=["member1"]))

    def test_card_not_found(self, client: MagicMock, config: Config, issue_payload: dict) -> None:
        client.get_cards_of_list.return_value = [TrelloCard(id="c1", name="[#420] Other")]

        with pytest.raises(CardNotFoundError, match="#42"):
            _handlers(client, config, issue=issue_payload).add_member_to_card_when_assigned()

        assert client.get_cards_of_list.call_args_list == [
            call("todo"),
            call("in_progress"),
            call("debugging"),
        ]
        client.put_card.assert_not_called()

    def test_no_new_members(self, client: MagicMock, config: Config, issue_payload: dict) -> None:
        client.get_cards_of_list.return_value = [
            TrelloCard(id="card42", name="[#42] Crash on startup", member_ids=["member1"])
        ]

        with pytest.raises(NoNewMembersError) as exc_info:
            _handlers(client, config, issue=issue_payload).add_member_to_card_when_assigned()

        assert exc_info.value.assignees == ["User1"]
        assert exc_info.value.board_members == ["user1", "user2", "user3"]
        client.put_card.assert_not_called()

    def test_unknown_assignee_is_no_new_members(
        self, client: MagicMock, config: Config, issue_payload: dict
    ) -> None:
        issue_payload["assignees"] = [{"login": "octocat"}]
        client.get_cards_of_list.return_value = [TrelloCard(id="card42", name="[#42] Crash")]

        with pytest.raises(NoNewMembersError):
            _handlers(client, config, issue=issue_payload).add_member_to_card_when_assigned()


@pytest.mark.unit
class TestMoveCardWhenIssueClosed:
    """Tests for move_card_when_issue_closed."""

    def test_moves_card(self, client: MagicMock, config: Config, issue_payload: dict) -> None:
        client.get_cards_of_list.return_value = [
            TrelloCard(id="card42", name="[#42] Crash on startup", member_ids=["member1"])
        ]

        _handlers(client, config, issue=issue_payload).move_card_when_issue_closed()

        client.get_cards_of_list.assert_called_once_with("departure")
        client.put_card.assert_called_once_with(
            "card42", CardUpdateParams(destination_list_id="destination")
        )

    def test_card_not_found(self, client: MagicMock, config: Config, issue_payload: dict) -> None:
        client.get_cards_of_list.return_value = []

        with pytest.raises(CardNotFoundError):
            _handlers(client, config, issue=issue_payload).move_card_when_issue_closed()

        client.put_card.assert_not_called()

    def test_missing_lists_fail_before_network(
        self, client: MagicMock, issue_payload: dict
    ) -> None:
        config = Config(api_key="k", api_token="t", board_id="b")

        with pytest.raises(ConfigError, match="TRELLO_DEPARTURE_LIST_ID"):
            _handlers(client, config, issue=issue_payload).move_card_when_issue_closed()

        assert client.method_calls == []


@pytest.mark.unit
class TestRun:
    """Tests for dispatching by action name."""

    def test_run_accepts_action_name(
        self, client: MagicMock, config: Config, issue_payload: dict
    ) -> None:
        client.get_cards_of_list.return_value = [TrelloCard(id="card42", name="[#42] Crash")]

        result = _handlers(client, config, issue=issue_payload).run("move_card_when_issue_closed")

        assert result.action is Action.MOVE_CARD_WHEN_ISSUE_CLOSED

    def test_run_rejects_unknown_action(self, client: MagicMock, config: Config) -> None:
        with pytest.raises(ValueError):
            _handlers(client, config).run("delete_everything")
