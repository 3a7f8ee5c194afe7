"""
Authentication
--------------
The token is passed explicitly to MondayClient. get_client() is the credential
source and supports two modes:

1. When get_client(interactive = True)
    User is prompted for the token at runtime if it is missing from the environment.
2. When get_client(interactive = False) - Default
        MONDAY_API_TOKEN     <token from monday Admin > API>
        MONDAY_API_URL       optional, defaults to https://api.monday.com/v2
        MONDAY_FILE_API_URL  optional, defaults to https://api.monday.com/v2/file
        MONDAY_API_VERSION   optional, defaults to API_VERSION

Dependencies:
    uv add requests

"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, Mapping
from getpass import getpass
from typing import Any, BinaryIO

from monday_client_impl.errors import BoardNotFoundError, InvalidItemIDError, RemoteOperationError
from monday_client_impl.monday_models import COLUMN_FIELDS, ITEM_FIELDS, build_board, build_item
from monday_client_impl.transport import DEFAULT_TIMEOUT, GraphQLTransport, MultipartGraphQLTransport
from monday_client_impl.values import ColumnPayload, encode_column_values
from work_mgmt_client_interface.board import Board
from work_mgmt_client_interface.item import Item

logger = logging.getLogger(__name__)

API_URL = "https://api.monday.com/v2"
FILE_API_URL = "https://api.monday.com/v2/file"
API_VERSION = "2024-10"

#monday caps items_page at 500 items per page
PAGE_LIMIT = 500
BOARDS_PAGE_LIMIT = 100

_ITEM_ID_RE = re.compile(r"[+-]?[0-9]+")

# ---------------------------------------------------------------------------
# GraphQL documents
# ---------------------------------------------------------------------------

GET_BOARDS = """
query ($limit: Int!, $page: Int!) {
  boards (limit: $limit, page: $page) {
    id name
  }
}
"""

GET_BOARD = f"""
query ($boardIDs: [ID!]) {{
  boards (ids: $boardIDs) {{
    id
    name
    columns {{ {COLUMN_FIELDS} }}
  }}
}}
"""

ITEMS_BY_COLUMN_VALUES = f"""
query ($boardID: ID!, $columnID: String!, $columnValue: String!, $limit: Int!) {{
  items_page_by_column_values (
    board_id: $boardID,
    limit: $limit,
    columns: [{{column_id: $columnID, column_values: [$columnValue]}}]
  ) {{
    cursor
    items {{ {ITEM_FIELDS} }}
  }}
}}
"""

GET_ITEMS = f"""
query ($boardIDs: [ID!], $limit: Int!) {{
  boards (ids: $boardIDs) {{
    items_page (limit: $limit) {{
      cursor
      items {{ {ITEM_FIELDS} }}
    }}
  }}
}}
"""

NEXT_ITEMS_PAGE = f"""
query ($cursor: String!, $limit: Int!) {{
  next_items_page (cursor: $cursor, limit: $limit) {{
    cursor
    items {{ {ITEM_FIELDS} }}
  }}
}}
"""

CREATE_ITEM = """
mutation ($boardID: ID!, $itemName: String!) {
  create_item (board_id: $boardID, item_name: $itemName) {
    id
  }
}
"""

CREATE_ITEM_WITH_VALUES = """
mutation ($boardID: ID!, $itemName: String!, $colValues: JSON!) {
  create_item (board_id: $boardID, item_name: $itemName, column_values: $colValues) {
    id
  }
}
"""

CREATE_SUBITEM = """
mutation ($parentItemID: ID!, $itemName: String!, $columnValues: JSON!) {
  create_subitem (parent_item_id: $parentItemID, item_name: $itemName, column_values: $columnValues) {
    id
  }
}
"""

CREATE_UPDATE = """
mutation ($itemID: ID!, $body: String!) {
  create_update (item_id: $itemID, body: $body) {
    id
  }
}
"""

CHANGE_MULTIPLE_COLUMN_VALUES = """
mutation ($boardID: ID!, $itemID: ID!, $columnValues: JSON!) {
  change_multiple_column_values (item_id: $itemID, board_id: $boardID, column_values: $columnValues) {
    id
  }
}
"""

DELETE_ITEM = """
mutation ($itemID: ID!) {
  delete_item (item_id: $itemID) {
    id
  }
}
"""

ADD_FILE_TO_COLUMN = """
mutation ($itemID: ID!, $columnID: String!, $file: File!) {
  add_file_to_column (item_id: $itemID, column_id: $columnID, file: $file) {
    id
  }
}
"""


# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class MondayClient:
    """Runs the monday operations and returns raw (undecoded) results.

    Args:
        api_token:    monday API token sent as the Authorization header
        api_url:      GraphQL endpoint for plain calls
        file_api_url: GraphQL endpoint for file uploads
        api_version:  Value of the API-Version header
        timeout:      requests timeout for every call

    Notes on usage:
        The client keeps no state between calls besides its two transports and is
        safe to share across threads.
    """

    def __init__(
        self,
        api_token: str,
        *,
        api_url: str = API_URL,
        file_api_url: str = FILE_API_URL,
        api_version: str | None = API_VERSION,
        timeout: float | tuple[float, float] | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = GraphQLTransport(api_url, api_token, api_version=api_version, timeout=timeout)
        self._file_transport = MultipartGraphQLTransport(
            file_api_url, api_token, api_version=api_version, timeout=timeout,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _run(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._transport.run(query, variables)

    def _paginate_items(self, page: dict[str, Any] | None) -> Iterator[dict]:
        """Yield raw items from an items page, following cursors until exhausted."""
        #each iteration after the first makes one API request for the next page
        while page:
            yield from page.get("items") or []
            cursor = page.get("cursor")
            if not cursor:
                return
            data = self._run(NEXT_ITEMS_PAGE, {"cursor": cursor, "limit": PAGE_LIMIT})
            page = data.get("next_items_page")

    @staticmethod
    def _parse_item_id(item_id: str) -> int:
        #ascii digits only: int() alone would also take "1_000", " 12 " and non-latin digits
        if not isinstance(item_id, str) or not _ITEM_ID_RE.fullmatch(item_id):
            raise InvalidItemIDError(f"Item id must be numeric, got {item_id!r}")
        return int(item_id)

    @staticmethod
    def _result_id(data: dict[str, Any], field: str) -> str:
        """Return data[field]["id"], raising RemoteOperationError when monday sent no result."""
        result = data.get(field)
        if not isinstance(result, dict) or result.get("id") is None:
            raise RemoteOperationError([{"message": f"monday returned no {field} result"}])
        return str(result["id"])

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    def get_boards(self) -> list[Board]:
        """Return every board visible to the token (id and name only)."""
        boards: list[Board] = []
        page = 1
        while True:
            data = self._run(GET_BOARDS, {"limit": BOARDS_PAGE_LIMIT, "page": page})
            chunk = data.get("boards") or []
            boards.extend(build_board(b) for b in chunk)
            if len(chunk) < BOARDS_PAGE_LIMIT:
                break
            page += 1
        return boards

    def get_board(self, board_id: int) -> Board:
        """Return a board with its column metadata.

        Raises:
            BoardNotFoundError: If no board with that ID exists.
        """
        data = self._run(GET_BOARD, {"boardIDs": [int(board_id)]})
        boards = data.get("boards") or []
        if not boards:
            raise BoardNotFoundError(f"Board {board_id} not found")
        return build_board(boards[0])

    # ------------------------------------------------------------------
    # Item queries
    # ------------------------------------------------------------------

    def get_items_by_column_values(self, board_id: int, column_id: str, column_value: str) -> list[Item]:
        """Return the items of a board whose column holds column_value. No match returns []."""
        data = self._run(ITEMS_BY_COLUMN_VALUES, {
            "boardID": int(board_id),
            "columnID": column_id,
            "columnValue": column_value,
            "limit": PAGE_LIMIT,
        })
        return [build_item(i) for i in self._paginate_items(data.get("items_page_by_column_values"))]

    def get_items(self, board_id: int) -> list[Item]:
        """Return every item of a board with its group id and raw column values.

        Raises:
            BoardNotFoundError: If no board with that ID exists.
        """
        data = self._run(GET_ITEMS, {"boardIDs": [int(board_id)], "limit": PAGE_LIMIT})
        boards = data.get("boards") or []
        if not boards:
            raise BoardNotFoundError(f"Board {board_id} not found")
        return [build_item(i) for i in self._paginate_items(boards[0].get("items_page"))]

    # ------------------------------------------------------------------
    # Item mutations
    # ------------------------------------------------------------------

    def add_item(
        self,
        board_id: int,
        item_name: str,
        column_values: Mapping[str, ColumnPayload] | None = None,
    ) -> str:
        """Create an item and return its id.

        Raises:
            SerializationError: If column_values cannot be encoded. No request is made.
        """
        variables: dict[str, Any] = {"boardID": int(board_id), "itemName": item_name}
        query = CREATE_ITEM
        if column_values is not None:
            query = CREATE_ITEM_WITH_VALUES
            variables["colValues"] = encode_column_values(column_values)

        data = self._run(query, variables)
        item_id = self._result_id(data, "create_item")
        logger.info("Created item %s on board %s", item_id, board_id)
        return item_id

    def add_subitem(
        self,
        parent_item_id: int,
        item_name: str,
        column_values: Mapping[str, ColumnPayload],
    ) -> str:
        """Create a subitem under parent_item_id and return its id."""
        data = self._run(CREATE_SUBITEM, {
            "parentItemID": int(parent_item_id),
            "itemName": item_name,
            "columnValues": encode_column_values(column_values),
        })
        item_id = self._result_id(data, "create_subitem")
        logger.info("Created subitem %s under item %s", item_id, parent_item_id)
        return item_id

    def add_item_update(self, item_id: str, message: str) -> None:
        """Post an update (comment) on an item.

        Raises:
            InvalidItemIDError: If item_id is not numeric. No request is made.
        """
        int_item_id = self._parse_item_id(item_id)
        self._run(CREATE_UPDATE, {"itemID": int_item_id, "body": message})

    def change_multiple_column_values(
        self,
        board_id: int,
        item_id: int,
        column_values: Mapping[str, ColumnPayload],
    ) -> str:
        """Change several column values of an item and return the item id.

        Works for every column type, e.g. connect boards and country::

            {"connect_boards2": build_connect_boards(12345, 23456),
             "country_2": build_country("MX", "Mexico")}
        """
        data = self._run(CHANGE_MULTIPLE_COLUMN_VALUES, {
            "boardID": int(board_id),
            "itemID": int(item_id),
            "columnValues": encode_column_values(column_values),
        })
        return self._result_id(data, "change_multiple_column_values")

    def delete_item(self, item_id: int) -> str:
        data = self._run(DELETE_ITEM, {"itemID": int(item_id)})
        deleted_id = self._result_id(data, "delete_item")
        logger.info("Deleted item %s", deleted_id)
        return deleted_id

    def add_file_to_column(self, item_id: int, column_id: str, file_name: str, file: BinaryIO) -> str:
        """Upload a file to a file column and return the new asset id.

        Uses the multipart transport, never the plain JSON one.
        """
        data = self._file_transport.run(
            ADD_FILE_TO_COLUMN,
            {"itemID": int(item_id), "columnID": column_id},
            file_name=file_name,
            file=file,
        )
        return self._result_id(data, "add_file_to_column")


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False) -> MondayClient:
    """Return a configured MondayClient.

    Reads the token from the environment. If "interactive = True" and it is
    missing, the user will be prompted.

    Environment variables:
        MONDAY_API_TOKEN:    API token (required).
        MONDAY_API_URL:      Override for the GraphQL endpoint.
        MONDAY_FILE_API_URL: Override for the file upload endpoint.
        MONDAY_API_VERSION:  Override for the API-Version header.
    """
    api_token = os.environ.get("MONDAY_API_TOKEN", "")

    if not api_token:
        if not interactive:
            raise EnvironmentError(
                "Missing required environment variable: MONDAY_API_TOKEN. "
                "Set it or call get_client(interactive=True)."
            )
        api_token = getpass("monday API token: ")

    return MondayClient(
        api_token,
        api_url=os.environ.get("MONDAY_API_URL") or API_URL,
        file_api_url=os.environ.get("MONDAY_FILE_API_URL") or FILE_API_URL,
        api_version=os.environ.get("MONDAY_API_VERSION") or API_VERSION,
    )
