"""Trello REST client that materializes a board snapshot."""

import time
from datetime import UTC, datetime

import httpx
import structlog
from pydantic import ValidationError

from trestus.board.models import Board, Card, CardList, Comment, Label
from trestus.board.redact import redact_url
from trestus.config.constants import ACTIONS_PAGE_LIMIT, COMPONENT_BOARD
from trestus.errors import BoardFetchError
from trestus.settings.app import AppSettings


logger = structlog.get_logger()

JsonObject = dict[str, object]

# Trello ids are Mongo ObjectIds: the first 8 hex digits are a Unix timestamp
_OBJECT_ID_TIMESTAMP_HEX_DIGITS = 8


def creation_time_from_id(object_id: str) -> datetime:
    """Decode the creation time embedded in a Trello object id.

    Args:
        object_id: Trello object id.

    Returns:
        Creation time in UTC.

    Raises:
        ValueError: If the id does not start with a hex timestamp.
    """
    prefix = object_id[:_OBJECT_ID_TIMESTAMP_HEX_DIGITS]
    if len(prefix) != _OBJECT_ID_TIMESTAMP_HEX_DIGITS:
        msg = f"Object id too short: {object_id!r}"
        raise ValueError(msg)
    return datetime.fromtimestamp(int(prefix, 16), tz=UTC)


class TrelloClient:
    """Read-only Trello client.

    Fetches labels, open lists with their open cards, and card comments,
    then assembles a Board with cards ordered newest first in each list.
    Credentials travel as query parameters and are never logged.
    """

    def __init__(
        self,
        settings: AppSettings,
        transport: httpx.BaseTransport | None = None,
        run_id: str | None = None,
        actions_page_limit: int = ACTIONS_PAGE_LIMIT,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Application settings with Trello credentials.
            transport: Optional httpx transport (used by tests).
            run_id: Optional run identifier for logging.
            actions_page_limit: Comment actions requested per page.
        """
        self._settings = settings
        self._transport = transport
        self._actions_page_limit = actions_page_limit
        self._log = logger.bind(component=COMPONENT_BOARD)
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def fetch_board(self, board_id: str | None = None) -> Board:
        """Fetch a board snapshot.

        Args:
            board_id: Board to fetch; defaults to the configured board.

        Returns:
            The materialized Board.

        Raises:
            BoardFetchError: On missing configuration, HTTP or payload errors.
        """
        board_id = board_id or self._settings.trello_board_id
        if not board_id:
            raise BoardFetchError("No board id configured")
        if not self._settings.trello_key or not self._settings.trello_token:
            raise BoardFetchError(
                "Trello key and token are required", board_id=board_id
            )

        start_time = time.perf_counter()
        log = self._log.bind(board_id=board_id)
        log.info("board_fetch_started")

        with httpx.Client(
            base_url=self._settings.api_base_url,
            timeout=self._settings.timeout_seconds,
            params={
                "key": self._settings.trello_key,
                "token": self._settings.trello_token,
            },
            transport=self._transport,
        ) as client:
            board_json = self._get(
                client, board_id, f"/boards/{board_id}", {"fields": "id,name"}
            )
            labels_json = self._get(
                client,
                board_id,
                f"/boards/{board_id}/labels",
                {"fields": "id,name,color", "limit": "1000"},
            )
            lists_json = self._get(
                client,
                board_id,
                f"/boards/{board_id}/lists",
                {
                    "filter": "open",
                    "cards": "open",
                    "card_fields": "id,name,desc,idList,labels",
                },
            )
            actions_json = self._get_comment_actions(client, board_id)

        board = self._assemble(
            board_id, board_json, labels_json, lists_json, actions_json
        )

        duration_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            "board_fetched",
            labels=len(board.labels),
            lists=len(board.lists),
            cards=board.card_count,
            duration_ms=round(duration_ms, 2),
        )
        return board

    def _get_comment_actions(
        self, client: httpx.Client, board_id: str
    ) -> list[object]:
        """Fetch every comment action on the board, newest first.

        Trello caps one page of actions, so pages are requested with
        ``before`` set to the oldest action id seen until a short page
        comes back.

        Args:
            client: Open HTTP client.
            board_id: Board identifier.

        Returns:
            The concatenated actions.

        Raises:
            BoardFetchError: If a page is not a list.
        """
        path = f"/boards/{board_id}/actions"
        params = {
            "filter": "commentCard",
            "limit": str(self._actions_page_limit),
            "memberCreator_fields": "fullName,initials",
        }
        actions: list[object] = []
        pages = 0
        while True:
            page = self._get(client, board_id, path, params)
            if not isinstance(page, list):
                raise BoardFetchError(
                    "Unexpected actions payload shape", board_id=board_id
                )
            pages += 1
            actions.extend(page)
            if len(page) < self._actions_page_limit:
                break
            oldest = page[-1]
            if not isinstance(oldest, dict) or not oldest.get("id"):
                break
            params = {**params, "before": str(oldest["id"])}

        self._log.debug("comment_actions_fetched", actions=len(actions), pages=pages)
        return actions

    def _get(
        self,
        client: httpx.Client,
        board_id: str,
        path: str,
        params: dict[str, str],
    ) -> object:
        """Issue one GET request and decode the JSON body."""
        try:
            response = client.get(path, params=params)
        except httpx.HTTPError as e:
            self._log.warning("board_request_failed", path=path, error=str(e))
            msg = f"Request to {path} failed: {e}"
            raise BoardFetchError(msg, board_id=board_id) from e

        self._log.debug(
            "board_request",
            url=redact_url(response.request.url),
            status_code=response.status_code,
        )

        if response.is_error:
            msg = f"Request to {path} returned status {response.status_code}"
            raise BoardFetchError(
                msg, board_id=board_id, status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            msg = f"Response from {path} is not valid JSON"
            raise BoardFetchError(
                msg, board_id=board_id, status_code=response.status_code
            ) from e

    def _assemble(  # noqa: PLR0913
        self,
        board_id: str,
        board_json: object,
        labels_json: object,
        lists_json: object,
        actions_json: object,
    ) -> Board:
        """Build a Board from raw Trello payloads."""
        if not isinstance(labels_json, list) or not isinstance(lists_json, list):
            raise BoardFetchError("Unexpected board payload shape", board_id=board_id)

        try:
            comments_by_card = self._comments_by_card(actions_json)
            labels = [self._label(item) for item in labels_json]
            lists = [
                self._card_list(item, comments_by_card).newest_first()
                for item in lists_json
            ]
            name = board_json.get("name", "") if isinstance(board_json, dict) else ""
            return Board(id=board_id, name=name or "", labels=labels, lists=lists)
        except (
            ValidationError,
            ValueError,
            TypeError,
            KeyError,
            AttributeError,
        ) as e:
            msg = f"Malformed board payload: {e}"
            raise BoardFetchError(msg, board_id=board_id) from e

    @staticmethod
    def _label(item: JsonObject) -> Label:
        return Label(id=item["id"], name=item.get("name"), color=item.get("color"))

    def _card_list(
        self, item: JsonObject, comments_by_card: dict[str, list[Comment]]
    ) -> CardList:
        cards = [
            self._card(card_json, comments_by_card)
            for card_json in item.get("cards") or []
        ]
        return CardList(id=item.get("id", ""), name=item.get("name") or "", cards=cards)

    def _card(
        self, item: JsonObject, comments_by_card: dict[str, list[Comment]]
    ) -> Card:
        card_id = str(item["id"])
        return Card(
            id=card_id,
            name=item.get("name") or "",
            created_at=creation_time_from_id(card_id),
            description=item.get("desc") or None,
            labels=[self._label(label) for label in item.get("labels") or []],
            comments=comments_by_card.get(card_id, []),
        )

    @staticmethod
    def _comments_by_card(actions_json: object) -> dict[str, list[Comment]]:
        """Group comment actions by card, oldest first."""
        grouped: dict[str, list[Comment]] = {}
        if not isinstance(actions_json, list):
            return grouped

        # The actions endpoint returns newest first
        for action in reversed(actions_json):
            if not isinstance(action, dict):
                continue
            data = action.get("data") or {}
            card = data.get("card") or {}
            card_id = card.get("id")
            if not card_id:
                continue
            creator = action.get("memberCreator") or {}
            grouped.setdefault(card_id, []).append(
                Comment(
                    author_full_name=creator.get("fullName") or "",
                    author_initials=creator.get("initials") or None,
                    created_at=action.get("date"),
                    text=data.get("text") or "",
                )
            )
        return grouped
