"""Unit tests for MondayClient core methods.

This module contains unit tests for the request construction and response
unmarshaling of the MondayClient class, mocking both transports.
"""

#Run the tests in this file with "python -m pytest components/monday_client_impl/tests/test_core_methods.py -v"

import io
import json
import os
from unittest.mock import MagicMock

import pytest

from monday_client_impl.errors import (
    BoardNotFoundError,
    InvalidItemIDError,
    RemoteOperationError,
    SerializationError,
)
from monday_client_impl.monday_impl import (
    ADD_FILE_TO_COLUMN,
    CREATE_ITEM,
    CREATE_ITEM_WITH_VALUES,
    NEXT_ITEMS_PAGE,
    PAGE_LIMIT,
    MondayClient,
    get_client,
)
from monday_client_impl.values import TextValue, build_date, build_status_index
from work_mgmt_client_interface.client import InvalidItemIDError as BaseInvalidItemIDError

#Fixture for mock tests
@pytest.fixture
def monday_client():
    """Returns a MondayClient with both transports mocked."""
    client = MondayClient("dummy_token")

    # Mock the transports to prevent real HTTP calls
    client._transport = MagicMock()
    client._file_transport = MagicMock()

    return client


def _raw_item(item_id, name="Item"):
    return {
        "id": item_id,
        "name": name,
        "group": {"id": "topics"},
        "column_values": [{"id": "estado2", "value": '{"index":0}', "type": "color", "column": {"title": "Estado"}}],
        "assets": [],
    }

#--------------------------- tests for get_boards --------------------------

def test_get_boards_returns_id_and_name(monday_client):
    # Setup: a single page with fewer boards than the page limit
    monday_client._transport.run.return_value = {"boards": [{"id": "1", "name": "Board1"}, {"id": "2", "name": "Board2"}]}

    result = monday_client.get_boards()

    assert [(b.id, b.name) for b in result] == [("1", "Board1"), ("2", "Board2")]
    assert all(b.columns == () for b in result)
    monday_client._transport.run.assert_called_once()


def test_get_boards_pages_until_short_page(monday_client):
    # Setup: first page is full, second page is short
    full_page = [{"id": str(i), "name": f"B{i}"} for i in range(100)]
    monday_client._transport.run.side_effect = [{"boards": full_page}, {"boards": [{"id": "x", "name": "Last"}]}]

    result = monday_client.get_boards()

    assert len(result) == 101
    pages = [c.args[1]["page"] for c in monday_client._transport.run.call_args_list]
    assert pages == [1, 2]

#--------------------------- tests for get_board --------------------------

def test_get_board_builds_columns(monday_client):
    monday_client._transport.run.return_value = {"boards": [{
        "id": "123",
        "name": "Board1",
        "columns": [{"id": "estado2", "title": "Estado", "type": "color", "settings_str": '{"labels":{}}'}],
    }]}

    board = monday_client.get_board(123)

    assert board.id == "123"
    assert board.columns[0].id == "estado2"
    assert board.columns[0].settings_str == '{"labels":{}}'
    assert monday_client._transport.run.call_args.args[1] == {"boardIDs": [123]}


def test_get_board_raises_when_missing(monday_client):
    monday_client._transport.run.return_value = {"boards": []}

    with pytest.raises(BoardNotFoundError):
        monday_client.get_board(999)

#--------------------------- tests for item queries --------------------------

def test_get_items_by_column_values_sends_filter(monday_client):
    monday_client._transport.run.return_value = {
        "items_page_by_column_values": {"cursor": None, "items": [_raw_item("1")]},
    }

    result = monday_client.get_items_by_column_values(42, "status", "Done")

    assert [i.id for i in result] == ["1"]
    # Raw values are not decoded by the client
    assert result[0].column_values[0].value == '{"index":0}'
    assert result[0].column_values[0].title == "Estado"
    variables = monday_client._transport.run.call_args.args[1]
    assert variables == {"boardID": 42, "columnID": "status", "columnValue": "Done", "limit": PAGE_LIMIT}


def test_get_items_by_column_values_empty_is_not_error(monday_client):
    monday_client._transport.run.return_value = {"items_page_by_column_values": {"cursor": None, "items": []}}

    assert monday_client.get_items_by_column_values(42, "status", "Nope") == []


def test_get_items_follows_cursor(monday_client):
    # Setup: the board's first page hands back a cursor, the next page ends it
    monday_client._transport.run.side_effect = [
        {"boards": [{"items_page": {"cursor": "abc", "items": [_raw_item("1"), _raw_item("2")]}}]},
        {"next_items_page": {"cursor": None, "items": [_raw_item("3")]}},
    ]

    result = monday_client.get_items(42)

    assert [i.id for i in result] == ["1", "2", "3"]
    assert result[0].group_id == "topics"
    second_call = monday_client._transport.run.call_args_list[1]
    assert second_call.args == (NEXT_ITEMS_PAGE, {"cursor": "abc", "limit": PAGE_LIMIT})


def test_get_items_raises_board_not_found(monday_client):
    # An unknown board id yields an empty boards list rather than an error from monday
    monday_client._transport.run.return_value = {"boards": []}

    with pytest.raises(BoardNotFoundError):
        monday_client.get_items(42)

#--------------------------- tests for add_item --------------------------

def test_add_item_without_column_values(monday_client):
    monday_client._transport.run.return_value = {"create_item": {"id": "555"}}

    result = monday_client.add_item(42, "New item")

    assert result == "555"
    monday_client._transport.run.assert_called_once_with(CREATE_ITEM, {"boardID": 42, "itemName": "New item"})


def test_add_item_encodes_column_values_as_json_string(monday_client):
    monday_client._transport.run.return_value = {"create_item": {"id": "555"}}

    monday_client.add_item(42, "New item", {
        "text": TextValue("have a nice day"),
        "date": build_date("2019-05-22"),
        "status": build_status_index(2),
    })

    query, variables = monday_client._transport.run.call_args.args
    assert query == CREATE_ITEM_WITH_VALUES
    assert isinstance(variables["colValues"], str)
    assert json.loads(variables["colValues"]) == {
        "text": "have a nice day",
        "date": {"date": "2019-05-22"},
        "status": {"index": 2},
    }


def test_add_item_serialization_error_skips_request(monday_client):
    with pytest.raises(SerializationError):
        monday_client.add_item(42, "New item", {"text": object()})

    monday_client._transport.run.assert_not_called()

#--------------------------- tests for other mutations --------------------------

def test_add_subitem_returns_id(monday_client):
    monday_client._transport.run.return_value = {"create_subitem": {"id": "777"}}

    result = monday_client.add_subitem(10, "Sub", {"status": build_status_index(1)})

    assert result == "777"
    variables = monday_client._transport.run.call_args.args[1]
    assert variables["parentItemID"] == 10
    assert json.loads(variables["columnValues"]) == {"status": {"index": 1}}


def test_add_item_update_rejects_non_numeric_id(monday_client):
    # Non-numeric id must fail before any transport call
    with pytest.raises(InvalidItemIDError):
        monday_client.add_item_update("abc", "hello")

    monday_client._transport.run.assert_not_called()


def test_invalid_item_id_is_interface_error_and_value_error(monday_client):
    with pytest.raises(BaseInvalidItemIDError):
        monday_client.add_item_update("12a", "hello")
    with pytest.raises(ValueError):
        monday_client.add_item_update("", "hello")


@pytest.mark.parametrize("item_id", ["1_000", "\u0661\u0662", " 12 ", "12\n", "+", "1.0"])
def test_add_item_update_rejects_loosely_numeric_id(monday_client, item_id):
    # only plain ascii digits with an optional sign are accepted
    with pytest.raises(InvalidItemIDError):
        monday_client.add_item_update(item_id, "hello")

    monday_client._transport.run.assert_not_called()


def test_add_item_update_accepts_signed_id(monday_client):
    monday_client._transport.run.return_value = {"create_update": {"id": "1"}}

    monday_client.add_item_update("+42", "hello")

    assert monday_client._transport.run.call_args.args[1]["itemID"] == 42


def test_add_item_update_sends_integer_id(monday_client):
    monday_client._transport.run.return_value = {"create_update": {"id": "1"}}

    monday_client.add_item_update("123", "hello")

    assert monday_client._transport.run.call_args.args[1] == {"itemID": 123, "body": "hello"}


def test_change_multiple_column_values(monday_client):
    monday_client._transport.run.return_value = {"change_multiple_column_values": {"id": "9"}}

    result = monday_client.change_multiple_column_values(1, 9, {"status": build_status_index(0)})

    assert result == "9"
    variables = monday_client._transport.run.call_args.args[1]
    assert variables["boardID"] == 1 and variables["itemID"] == 9
    assert json.loads(variables["columnValues"]) == {"status": {"index": 0}}


def test_delete_item_returns_deleted_id(monday_client):
    monday_client._transport.run.return_value = {"delete_item": {"id": "9"}}

    assert monday_client.delete_item(9) == "9"


@pytest.mark.parametrize("call, field", [
    (lambda c: c.add_item(1, "x"), "create_item"),
    (lambda c: c.add_subitem(1, "x", {}), "create_subitem"),
    (lambda c: c.change_multiple_column_values(1, 9, {}), "change_multiple_column_values"),
    (lambda c: c.delete_item(9), "delete_item"),
])
@pytest.mark.parametrize("missing", ["absent", None, {}])
def test_mutation_without_result_raises_remote_error(monday_client, call, field, missing):
    # a 200 response with no mutation result must not surface as KeyError or TypeError
    monday_client._transport.run.return_value = {} if missing == "absent" else {field: missing}

    with pytest.raises(RemoteOperationError, match=field):
        call(monday_client)


def test_add_file_without_result_raises_remote_error(monday_client):
    monday_client._file_transport.run.return_value = {"add_file_to_column": None}

    with pytest.raises(RemoteOperationError, match="add_file_to_column"):
        monday_client.add_file_to_column(9, "files", "hello.txt", io.BytesIO(b"hello"))


def test_add_file_uses_multipart_transport_only(monday_client):
    monday_client._file_transport.run.return_value = {"add_file_to_column": {"id": "asset-1"}}
    stream = io.BytesIO(b"hello")

    result = monday_client.add_file_to_column(9, "files", "hello.txt", stream)

    assert result == "asset-1"
    monday_client._file_transport.run.assert_called_once_with(
        ADD_FILE_TO_COLUMN,
        {"itemID": 9, "columnID": "files"},
        file_name="hello.txt",
        file=stream,
    )
    monday_client._transport.run.assert_not_called()


def test_transports_are_distinct_instances():
    client = MondayClient("dummy_token")

    assert client._transport is not client._file_transport
    assert client._transport.url != client._file_transport.url

#--------------------------- tests for get_client function --------------------------

def test_get_client_raises_when_env_vars_missing(monkeypatch):
    # get_client raises EnvironmentError when the token is not set
    monkeypatch.delenv("MONDAY_API_TOKEN", raising=False)

    with pytest.raises(EnvironmentError):
        get_client(interactive=False)


def test_get_client_succeeds_when_env_vars_present(monkeypatch):
    monkeypatch.setenv("MONDAY_API_TOKEN", "dummy_token")
    monkeypatch.setenv("MONDAY_API_URL", "https://example.test/v2")

    client = get_client(interactive=False)

    assert isinstance(client, MondayClient)
    assert client._transport.url == "https://example.test/v2"


def test_get_client_prompts_when_interactive(monkeypatch):
    monkeypatch.delenv("MONDAY_API_TOKEN", raising=False)
    monkeypatch.setattr("monday_client_impl.monday_impl.getpass", lambda prompt: "typed_token")

    client = get_client(interactive=True)

    assert client._transport._session.headers["Authorization"] == "typed_token"
    # The token is never written back to the process environment
    assert "MONDAY_API_TOKEN" not in os.environ
