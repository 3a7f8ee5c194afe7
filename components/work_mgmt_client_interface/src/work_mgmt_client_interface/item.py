"""Item contract - core item, column value and asset representation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    id: str
    email: str = ""


@dataclass(frozen=True)
class Asset:
    """A file attached to an item.

    Assets belong to the item as a whole, not to the column they were uploaded to.
    """

    id: str = ""
    name: str = ""
    original_geometry: str = ""
    created_at: str = ""
    public_url: str = ""
    url: str = ""
    url_thumbnail: str = ""
    file_extension: str = ""
    file_size: str = ""
    uploaded_by: User | None = None


@dataclass(frozen=True)
class ColumnValue:
    """The value of one column for one item.

    Notes on usage:
        Straight off the wire ``value`` is the raw JSON string the service sent
        (``""`` when the column is empty). After decoding, label-driven columns
        (status, dropdown) carry the human-readable label instead.

        ``resolved`` is False when the value could not be translated (unknown
        column, missing label, corrupt metadata); ``diagnostic`` then says why and
        ``value`` is left as the raw encoding.
    """

    id: str
    title: str = ""
    value: str = ""
    type: str = ""
    resolved: bool = False
    diagnostic: str | None = None


@dataclass(frozen=True)
class Item:
    """A row within a board, holding one value per column."""

    id: str
    name: str
    column_values: tuple[ColumnValue, ...] = ()
    assets: tuple[Asset, ...] = ()
    group_id: str | None = None

    def value_of(self, column_id: str) -> ColumnValue | None:
        """Return the column value for column_id, or None if the item has none."""
        for cv in self.column_values:
            if cv.id == column_id:
                return cv
        return None

    #short form for logs, column values are left out
    def __repr__(self) -> str:
        return f"<Item id={self.id!r} name={self.name!r} columns={len(self.column_values)}>"
