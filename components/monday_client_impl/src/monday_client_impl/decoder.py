"""Decode raw column values into display-ready values using board column metadata."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from monday_client_impl.errors import ColumnValueError, MalformedValueError, MetadataCorruptError
from monday_client_impl.labels import (
    LABEL_COLUMN_TYPES,
    resolve_dropdown_labels,
    resolve_status_label,
)
from work_mgmt_client_interface.board import Column, ColumnMap, ColumnType, build_column_map
from work_mgmt_client_interface.item import ColumnValue, Item

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Raw value parsing
# ---------------------------------------------------------------------------

def _load_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedValueError(f"Column value is not valid JSON: {raw!r}") from e


def decode_status_index(raw: str) -> str:
    """Return the label index of a raw status value (``{"index": N, ...}``) as a string."""
    value = _load_value(raw)
    if not isinstance(value, dict) or value.get("index") is None:
        raise MalformedValueError(f"Status value has no index: {raw!r}")
    return str(value["index"])


def decode_dropdown_ids(raw: str) -> list[str]:
    """Return the selected ids of a raw dropdown value (``{"ids": [...]}``) as strings.

    Look the ids up with labels.list_labels to get their names.
    """
    value = _load_value(raw)
    ids = value.get("ids") if isinstance(value, dict) else None
    if not isinstance(ids, list):
        raise MalformedValueError(f"Dropdown value has no ids list: {raw!r}")
    return [str(i) for i in ids]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _is_empty(raw: str | None) -> bool:
    #monday sends the JSON literal null for a cleared value
    return raw is None or raw.strip() in ("", "null")


def _resolve(column: Column, raw: str, dropdown_separator: str) -> str:
    ctype = column.column_type
    if ctype is ColumnType.STATUS:
        return resolve_status_label(column.settings_str, decode_status_index(raw))
    names = resolve_dropdown_labels(column.settings_str, decode_dropdown_ids(raw))
    return dropdown_separator.join(names)


def _decode_value(
    cv: ColumnValue,
    column_map: ColumnMap,
    *,
    strict: bool,
    dropdown_separator: str,
) -> ColumnValue:
    column = column_map.get(cv.id)
    if column is None:
        #the board's columns may have changed since the value was produced
        return replace(cv, resolved=False, diagnostic=f"Unknown column {cv.id!r}")

    decoded = replace(cv, title=column.title, type=column.type, resolved=True, diagnostic=None)
    if column.column_type not in LABEL_COLUMN_TYPES or _is_empty(cv.value):
        return decoded

    try:
        label = _resolve(column, cv.value, dropdown_separator)
    except MetadataCorruptError as e:
        if e.column_id is None:
            e.column_id = column.id
        if strict:
            raise
        logger.warning("Corrupt settings for column %s (%s): %s", column.id, column.type, e)
        return replace(decoded, resolved=False, diagnostic=str(e))
    except ColumnValueError as e:
        if strict:
            raise
        logger.warning("Could not resolve column %s (%s): %s", column.id, column.type, e)
        return replace(decoded, resolved=False, diagnostic=str(e))
    return replace(decoded, value=label)


def decode_column_values(
    columns: Iterable[Column],
    items: Iterable[Item],
    *,
    strict: bool = False,
    dropdown_separator: str = ", ",
) -> list[Item]:
    """Return new items whose status and dropdown values carry labels instead of indexes.

    Args:
        columns:            The board's column metadata
        items:              Items holding raw column values
        strict:             Raise the first resolution failure instead of isolating it
        dropdown_separator: Joins the names of a multi-select dropdown value

    Notes on usage:
        Inputs are never mutated. Item and column value order is preserved.
        Titles come from the column metadata, which is authoritative.
        A value whose column is unknown, whose label is missing or whose column
        settings are corrupt keeps its raw encoding with resolved=False and a
        diagnostic, unless strict is set.

    Raises:
        ColumnValueError: Only when strict is True.
    """
    column_map = build_column_map(columns)
    decoded: list[Item] = []
    for item in items:
        values = tuple(
            _decode_value(cv, column_map, strict=strict, dropdown_separator=dropdown_separator)
            for cv in item.column_values
        )
        decoded.append(replace(item, column_values=values))
    return decoded
