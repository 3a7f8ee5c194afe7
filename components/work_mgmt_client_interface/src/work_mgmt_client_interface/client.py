"""Core client contract definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, BinaryIO

from work_mgmt_client_interface.board import Board
from work_mgmt_client_interface.item import Item

__all__ = ["WorkManagementClient", "BoardNotFoundError", "InvalidItemIDError"]


class WorkManagementClient(ABC):
    """Public operation set of a work-management service.

    Every write is a single remote call: nothing is buffered, batched or made
    idempotent, so calling a write twice has the remote effect twice.
    """

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------
    @abstractmethod
    def get_boards(self) -> list[Board]:
        """List boards (id and name only, no columns)."""
        raise NotImplementedError

    @abstractmethod
    def get_board(self, board_id: int) -> Board:
        """Get a board together with its column metadata.

        Raises:
            BoardNotFoundError: If no board with that ID exists

        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Item queries
    # ------------------------------------------------------------------
    @abstractmethod
    def get_items_by_column_values(
        self,
        board: Board,
        column_id: str,
        column_value: str,
        *,
        strict: bool = False,
        ) -> list[Item]:
        """Get the items of a board whose column matches a value.

        Args:
            board:        Board to search. Its columns are used to decode the results
            column_id:    Column to filter on
            column_value: Value the column must hold
            strict:       Raise on the first value that cannot be decoded instead of
                          leaving it raw with a diagnostic

        Notes on usage:
            An empty list is not an error. Returned column values are decoded for
            display (status and dropdown columns carry labels, not indexes).

        """
        raise NotImplementedError

    @abstractmethod
    def get_items(self, board: Board, *, strict: bool = False) -> list[Item]:
        """Get every item of a board, decoded for display.

        Raises:
            BoardNotFoundError: If no board with that ID exists

        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Item mutations
    # ------------------------------------------------------------------
    @abstractmethod
    def add_item(
        self,
        board_id: int,
        item_name: str,
        column_values: Mapping[str, Any] | None = None,
        ) -> str:
        """Create an item on a board and return its id."""
        """Args:
            board_id:      Board the item is created on
            item_name:     Name of the new item
            column_values: Optional column id -> typed payload mapping

        """
        raise NotImplementedError

    @abstractmethod
    def add_subitem(
        self,
        parent_item_id: int,
        item_name: str,
        column_values: Mapping[str, Any],
        ) -> str:
        """Create a subitem under an item and return its id."""
        raise NotImplementedError

    @abstractmethod
    def add_item_update(self, item_id: str, message: str) -> None:
        """Post an update (comment) on an item.

        Raises:
            InvalidItemIDError: If item_id is not numeric. No request is made

        """
        raise NotImplementedError

    @abstractmethod
    def change_multiple_column_values(
        self,
        board_id: int,
        item_id: int,
        column_values: Mapping[str, Any],
        ) -> str:
        """Change several column values of an item at once and return the item id."""
        raise NotImplementedError

    @abstractmethod
    def delete_item(self, item_id: int) -> str:
        """Delete an item and return the deleted item id."""
        raise NotImplementedError

    @abstractmethod
    def add_file_to_column(
        self,
        item_id: int,
        column_id: str,
        file_name: str,
        file: BinaryIO,
        ) -> str:
        """Upload a file to a file column of an item and return the new asset id."""
        raise NotImplementedError


class BoardNotFoundError(Exception):
    """Base exception raised when a board cannot be found by the client."""


class InvalidItemIDError(ValueError):
    """Base exception raised when a caller-supplied item id is not numeric."""

