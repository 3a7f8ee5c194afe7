"""monday.com implementation of the WorkManagementClient contract."""

from __future__ import annotations

from collections.abc import Mapping
from typing import BinaryIO

from monday_client_impl.decoder import decode_column_values
from monday_client_impl.monday_impl import MondayClient, get_client as _get_monday_client
from monday_client_impl.values import ColumnPayload
from work_mgmt_client_interface.board import Board
from work_mgmt_client_interface.client import WorkManagementClient
from work_mgmt_client_interface.item import Item


class MondayService(WorkManagementClient):
    """Public monday operation set.

    Writes are passed straight to the MondayClient. Item queries are decoded
    against the columns of the Board the caller passes in, so status and dropdown
    values come back as labels.

    Args:
        client:             The request/response client doing the I/O
        dropdown_separator: Joins the names of multi-select dropdown values
    """

    def __init__(self, client: MondayClient, *, dropdown_separator: str = ", ") -> None:
        self._client = client
        self._dropdown_separator = dropdown_separator

    @property
    def client(self) -> MondayClient:
        return self._client

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    def get_boards(self) -> list[Board]:
        return self._client.get_boards()

    def get_board(self, board_id: int) -> Board:
        return self._client.get_board(board_id)

    # ------------------------------------------------------------------
    # Item queries
    # ------------------------------------------------------------------

    def get_items_by_column_values(
        self,
        board: Board,
        column_id: str,
        column_value: str,
        *,
        strict: bool = False,
    ) -> list[Item]:
        items = self._client.get_items_by_column_values(int(board.id), column_id, column_value)
        return self._decode(board, items, strict)

    def get_items(self, board: Board, *, strict: bool = False) -> list[Item]:
        items = self._client.get_items(int(board.id))
        return self._decode(board, items, strict)

    def _decode(self, board: Board, items: list[Item], strict: bool) -> list[Item]:
        return decode_column_values(
            board.columns,
            items,
            strict=strict,
            dropdown_separator=self._dropdown_separator,
        )

    # ------------------------------------------------------------------
    # Item mutations
    # ------------------------------------------------------------------

    def add_item(
        self,
        board_id: int,
        item_name: str,
        column_values: Mapping[str, ColumnPayload] | None = None,
    ) -> str:
        return self._client.add_item(board_id, item_name, column_values)

    def add_subitem(
        self,
        parent_item_id: int,
        item_name: str,
        column_values: Mapping[str, ColumnPayload],
    ) -> str:
        return self._client.add_subitem(parent_item_id, item_name, column_values)

    def add_item_update(self, item_id: str, message: str) -> None:
        self._client.add_item_update(item_id, message)

    def change_multiple_column_values(
        self,
        board_id: int,
        item_id: int,
        column_values: Mapping[str, ColumnPayload],
    ) -> str:
        return self._client.change_multiple_column_values(board_id, item_id, column_values)

    def delete_item(self, item_id: int) -> str:
        return self._client.delete_item(item_id)

    def add_file_to_column(self, item_id: int, column_id: str, file_name: str, file: BinaryIO) -> str:
        return self._client.add_file_to_column(item_id, column_id, file_name, file)


def get_service(*, interactive: bool = False) -> MondayService:
    """Return a MondayService over a client configured from the environment (see get_client)."""
    return MondayService(_get_monday_client(interactive=interactive))
