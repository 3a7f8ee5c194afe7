"""Core board contract definitions: boards, columns and the column lookup map."""


from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


#type tags the translation layer knows about. Anything else is treated opaquely.
class ColumnType(str, Enum):
    TEXT = "text"
    CHECKBOX = "boolean"
    STATUS = "color"
    DROPDOWN = "dropdown"
    DATE = "date"
    PEOPLE = "multiple-person"
    CONNECT_BOARDS = "board-relation"
    COUNTRY = "country"
    FILE = "file"

    @classmethod
    def from_tag(cls, tag: str | None) -> ColumnType | None:
        """Return the ColumnType for a raw type tag, or None if the tag is not recognised."""
        if not tag:
            return None
        tag = _TAG_ALIASES.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            return None


#newer API versions report status columns as "status" and checkboxes as "checkbox"
_TAG_ALIASES: dict[str, str] = {
    "status": "color",
    "checkbox": "boolean",
    "people": "multiple-person",
}


@dataclass(frozen=True)
class Column:
    """A typed field definition within a board.

    ``settings_str`` is the JSON-encoded settings blob. Its shape depends on the
    type tag alone: status columns carry an index -> label mapping, dropdown
    columns a list of ``{id, name}`` entries.
    """

    id: str
    title: str
    type: str
    settings_str: str = ""

    @property
    def column_type(self) -> ColumnType | None:
        """Return the recognised ColumnType, or None for opaque type tags."""
        return ColumnType.from_tag(self.type)


@dataclass(frozen=True)
class Board:
    """A named collection of items sharing one column schema.

    Boards are read-only once fetched. ``columns`` is empty when the board was
    fetched without its column metadata (e.g. from a board listing).
    """

    id: str
    name: str
    columns: tuple[Column, ...] = ()

    def column(self, column_id: str) -> Column | None:
        """Return the column with the given id, or None."""
        return build_column_map(self.columns).get(column_id)


# column id -> Column. Built on demand, never stored on a Board
ColumnMap = dict[str, Column]


def build_column_map(columns: Iterable[Column]) -> ColumnMap:
    """Build a column id -> Column lookup from a board's columns."""
    return {col.id: col for col in columns}
