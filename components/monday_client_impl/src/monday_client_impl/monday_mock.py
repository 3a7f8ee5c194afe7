"""MondayClient returning canned data, for tests and offline development."""

from __future__ import annotations

from collections.abc import Mapping
from typing import BinaryIO

from monday_client_impl.monday_impl import MondayClient
from monday_client_impl.values import ColumnPayload, encode_column_values
from work_mgmt_client_interface.board import Board, Column
from work_mgmt_client_interface.item import Asset, ColumnValue, Item

MOCK_ID = "1234567890"

STATUS_SETTINGS = (
    '{"done_colors":[1],'
    '"color_mapping":{"0":1,"1":106,"2":0,"6":15,"9":2,"15":160,"106":6,"108":9,"160":108},'
    '"labels":{"0":"Disponible","1":"Escriturado","2":"Bloqueado",'
    '"3":"Proceso de escrituración","160":"Apartado"},'
    '"labels_positions_v2":{"0":0,"1":4,"2":1,"3":3,"5":5,"160":2},'
    '"labels_colors":{"0":{"color":"#00c875","border":"#00B461","var_name":"green-shadow"},'
    '"1":{"color":"#68a1bd","border":"#68a1bd","var_name":"river"},'
    '"2":{"color":"#fdab3d","border":"#E99729","var_name":"orange"},'
    '"3":{"color":"#0086c0","border":"#3DB0DF","var_name":"blue-links"},'
    '"160":{"color":"#4eccc6","border":"#4eccc6","var_name":"australia"}}}'
)


class MockMondayClient(MondayClient):
    """Never touches the network. Every write returns MOCK_ID.

    Column values are still encoded, so unencodable input fails as it would live.
    """

    def __init__(self) -> None:
        super().__init__("mock-token")

    def get_board(self, board_id: int) -> Board:
        return Board(
            id=MOCK_ID,
            name="Board1",
            columns=(Column(id="estado2", title="Estado", type="color", settings_str=STATUS_SETTINGS),),
        )

    def get_boards(self) -> list[Board]:
        return [Board(id=MOCK_ID, name="Board1"), Board(id="1234567891", name="Board2")]

    def get_items_by_column_values(self, board_id: int, column_id: str, column_value: str) -> list[Item]:
        return [
            Item(
                id=MOCK_ID,
                name="Item1",
                column_values=(
                    ColumnValue(
                        id="estado2",
                        title="Estado",
                        type="color",
                        value='{"index":0,"post_id":null,"changed_at":"2018-07-30T06:27:05.982Z"}',
                    ),
                ),
                assets=(Asset(public_url="https://source.unsplash.com/random/150x150"),),
            ),
        ]

    def get_items(self, board_id: int) -> list[Item]:
        return self.get_items_by_column_values(board_id, "", "")

    def add_item(
        self,
        board_id: int,
        item_name: str,
        column_values: Mapping[str, ColumnPayload] | None = None,
    ) -> str:
        if column_values is not None:
            encode_column_values(column_values)
        return MOCK_ID

    def add_subitem(self, parent_item_id: int, item_name: str, column_values: Mapping[str, ColumnPayload]) -> str:
        encode_column_values(column_values)
        return MOCK_ID

    def add_item_update(self, item_id: str, message: str) -> None:
        self._parse_item_id(item_id)

    def change_multiple_column_values(
        self,
        board_id: int,
        item_id: int,
        column_values: Mapping[str, ColumnPayload],
    ) -> str:
        encode_column_values(column_values)
        return MOCK_ID

    def delete_item(self, item_id: int) -> str:
        return MOCK_ID

    def add_file_to_column(self, item_id: int, column_id: str, file_name: str, file: BinaryIO) -> str:
        return MOCK_ID
