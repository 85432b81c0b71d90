"""TrelloClient - Thin wrapper over the Trello REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from trellosync.logging import sanitize_for_log
from trellosync.trello.exceptions import TrelloAPIError
from trellosync.trello.models import (
    CardCreateParams,
    CardUpdateParams,
    TrelloAttachment,
    TrelloCard,
    TrelloLabel,
    TrelloMember,
)

logger = logging.getLogger("trellosync.trello")

DEFAULT_BASE_URL = "https://api.trello.com/1"


class TrelloClient:
    """Client for the handful of Trello endpoints the sync needs.

    Authenticates with ``key`` and ``token`` query parameters. Reads return
    parsed JSON; mutating calls send form-encoded bodies. Every call is a
    single round trip and any failure raises TrelloAPIError.
    """

    def __init__(
        self,
        api_key: str,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the Trello client.

        Args:
            api_key: Trello API key.
            api_token: Trello API token for the acting user.
            base_url: Trello REST API root (for testing).
            timeout: Transport timeout in seconds.
        """
        self.api_key = api_key
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                params={"key": self.api_key, "token": self.api_token},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> TrelloClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        data: dict[str, str] | None = None,
    ) -> Any:
        """Execute a REST call and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path below the API root, e.g. ``/lists/{id}/cards``.
            data: Form fields for mutating calls.

        Returns:
            Parsed JSON response.

        Raises:
            TrelloAPIError: On transport errors or non-2xx responses.
        """
        logger.debug("%s %s", method, path)
        try:
            response = self.client.request(method, path, data=data)
        except httpx.HTTPError as e:
            raise TrelloAPIError(
                f"Trello request {method} {path} failed: {sanitize_for_log(str(e))}"
            ) from e

        if response.status_code >= 400:
            raise TrelloAPIError(
                f"Trello request {method} {path} failed: "
                f"{response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TrelloAPIError(f"Trello request {method} {path} returned invalid JSON") from e

    def get_labels_of_board(self, board_id: str) -> list[TrelloLabel]:
        """List all labels defined on a board."""
        data = self._request("GET", f"/boards/{board_id}/labels")
        return [TrelloLabel.from_api(item) for item in data]

    def get_members_of_board(self, board_id: str) -> list[TrelloMember]:
        """List all members of a board."""
        data = self._request("GET", f"/boards/{board_id}/members")
        return [TrelloMember.from_api(item) for item in data]

    def get_cards_of_list(self, list_id: str) -> list[TrelloCard]:
        """List the open cards in a list."""
        data = self._request("GET", f"/lists/{list_id}/cards")
        cards = [TrelloCard.from_api(item) for item in data]
        logger.debug("Found %d card(s) in list %s", len(cards), list_id)
        return cards

    def create_card(self, list_id: str, params: CardCreateParams) -> TrelloCard:
        """Create a card for a GitHub issue.

        Args:
            list_id: List to create the card in.
            params: Issue fields and matched member/label IDs.

        Returns:
            The created card.
        """
        form = {
            "idList": list_id,
            "keepFromSource": "all",
            "name": params.card_name,
            "desc": params.description,
            "urlSource": params.url,
            "idMembers": ",".join(params.member_ids),
            "idLabels": ",".join(params.label_ids),
        }
        data = self._request("POST", "/cards", data=form)
        card = TrelloCard.from_api(data)
        logger.info("Created card %s (%s) in list %s", card.id, card.name, list_id)
        return card

    def put_card(self, card_id: str, params: CardUpdateParams) -> TrelloCard:
        """Partially update a card: move it and/or replace its members.

        Args:
            card_id: Card to update.
            params: Fields to change.

        Returns:
            The updated card.
        """
        data = self._request("PUT", f"/cards/{card_id}", data=params.to_form())
        return TrelloCard.from_api(data)

    def add_url_source_to_card(self, card_id: str, url: str) -> TrelloAttachment:
        """Attach a URL to a card."""
        data = self._request("POST", f"/cards/{card_id}/attachments", data={"url": url})
        logger.info("Attached %s to card %s", url, card_id)
        return TrelloAttachment.from_api(data)
