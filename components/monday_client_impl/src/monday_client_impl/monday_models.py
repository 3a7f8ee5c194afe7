"""Build the data model from monday GraphQL response payloads."""

from __future__ import annotations

from typing import Any

from work_mgmt_client_interface.board import Board, Column
from work_mgmt_client_interface.item import Asset, ColumnValue, Item, User

# ---------------------------------------------------------------------------
# GraphQL selections shared by the item queries
# ---------------------------------------------------------------------------

COLUMN_FIELDS = "id title type settings_str"

ASSET_FIELDS = """
  id name original_geometry created_at public_url url url_thumbnail
  file_extension file_size
  uploaded_by { id email }
"""

ITEM_FIELDS = f"""
  id
  name
  group {{ id }}
  column_values {{
    id
    value
    type
    column {{ title }}
  }}
  assets {{ {ASSET_FIELDS} }}
"""


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def build_column(raw: dict) -> Column:
    return Column(
        id=_str(raw.get("id")),
        title=_str(raw.get("title")),
        type=_str(raw.get("type")),
        settings_str=_str(raw.get("settings_str")),
    )


def build_board(raw: dict) -> Board:
    """Return a Board from a ``boards`` entry. Columns are only present when selected."""
    return Board(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        columns=tuple(build_column(c) for c in raw.get("columns") or [] if isinstance(c, dict)),
    )


def build_column_value(raw: dict) -> ColumnValue:
    #title moved under "column" in newer API versions
    column = raw.get("column") if isinstance(raw.get("column"), dict) else {}
    return ColumnValue(
        id=_str(raw.get("id")),
        title=_str(raw.get("title") or column.get("title")),
        value=_str(raw.get("value")),
        type=_str(raw.get("type")),
    )


def build_asset(raw: dict) -> Asset:
    uploader = raw.get("uploaded_by")
    return Asset(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        original_geometry=_str(raw.get("original_geometry")),
        created_at=_str(raw.get("created_at")),
        public_url=_str(raw.get("public_url")),
        url=_str(raw.get("url")),
        url_thumbnail=_str(raw.get("url_thumbnail")),
        file_extension=_str(raw.get("file_extension")),
        file_size=_str(raw.get("file_size")),
        uploaded_by=User(id=_str(uploader.get("id")), email=_str(uploader.get("email")))
        if isinstance(uploader, dict) else None,
    )


def build_item(raw: dict) -> Item:
    """Return an Item from an ``items`` entry, keeping column values raw."""
    group = raw.get("group")
    return Item(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        column_values=tuple(
            build_column_value(cv) for cv in raw.get("column_values") or [] if isinstance(cv, dict)
        ),
        assets=tuple(build_asset(a) for a in raw.get("assets") or [] if isinstance(a, dict)),
        group_id=_str(group.get("id")) if isinstance(group, dict) else None,
    )
