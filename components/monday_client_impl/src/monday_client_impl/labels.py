"""Resolve status/dropdown indexes to the labels shown in the monday UI.

Status ("color") and dropdown columns store an index or id in each item's value.
The human-readable label lives in the column's ``settings_str``::

    color:    {"labels": {"0": "Disponible", "1": "Escriturado"},
               "labels_positions_v2": {"0": 0, "1": 4}}
    dropdown: {"labels": [{"id": 12, "name": "Alpha"}, {"id": 34, "name": "Beta"}]}
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from monday_client_impl.errors import LabelNotFoundError, MetadataCorruptError
from work_mgmt_client_interface.board import ColumnType

# ---------------------------------------------------------------------------
# Parsed settings
# ---------------------------------------------------------------------------

#type tags whose settings carry label metadata
LABEL_COLUMN_TYPES = frozenset({ColumnType.STATUS, ColumnType.DROPDOWN})


@dataclass(frozen=True)
class StatusSettings:
    labels: dict[str, str] = field(default_factory=dict)      # index: label
    positions: dict[str, int] = field(default_factory=dict)   # index: position


@dataclass(frozen=True)
class DropdownLabel:
    id: int
    name: str


def _load_settings(settings_str: str) -> dict[str, Any]:
    try:
        settings = json.loads(settings_str)
    except (TypeError, ValueError) as e:
        raise MetadataCorruptError(f"Settings are not valid JSON: {e}") from e
    if not isinstance(settings, dict):
        raise MetadataCorruptError(f"Settings must be a JSON object, got {type(settings).__name__}")
    return settings


def parse_status_settings(settings_str: str) -> StatusSettings:
    """Parse a status column's settings into index -> label and index -> position maps.

    Raises:
        MetadataCorruptError: If the settings are not a JSON object or ``labels``
            is not an object of strings.
    """
    settings = _load_settings(settings_str)
    labels = settings.get("labels") or {}
    if not isinstance(labels, dict) or not all(isinstance(v, str) for v in labels.values()):
        raise MetadataCorruptError("Status settings 'labels' must map index to label")

    #v2 replaced v1; older boards only carry v1
    positions = settings.get("labels_positions_v2") or settings.get("label_positions_v1") or {}
    if not isinstance(positions, dict):
        raise MetadataCorruptError("Status settings label positions must map index to position")

    return StatusSettings(
        labels={str(k): v for k, v in labels.items()},
        positions={str(k): v for k, v in positions.items()},
    )


def parse_dropdown_settings(settings_str: str) -> list[DropdownLabel]:
    """Parse a dropdown column's settings into its ordered {id, name} entries.

    Raises:
        MetadataCorruptError: If ``labels`` is not a list of {id, name} objects.
    """
    settings = _load_settings(settings_str)
    entries = settings.get("labels") or []
    if not isinstance(entries, list):
        raise MetadataCorruptError("Dropdown settings 'labels' must be a list")

    parsed: list[DropdownLabel] = []
    for entry in entries:
        if not isinstance(entry, dict) or "id" not in entry or "name" not in entry:
            raise MetadataCorruptError(f"Dropdown label entry must have id and name: {entry!r}")
        try:
            parsed.append(DropdownLabel(id=int(entry["id"]), name=str(entry["name"])))
        except (TypeError, ValueError) as e:
            raise MetadataCorruptError(f"Dropdown label id is not an integer: {entry!r}") from e
    return parsed


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_status_label(settings_str: str, index: int | str) -> str:
    """Return the label for a status index.

    JSON object keys are strings, so the index is looked up in its string form.

    Raises:
        LabelNotFoundError: If the index has no label.
        MetadataCorruptError: If the settings are malformed.
    """
    labels = parse_status_settings(settings_str).labels
    key = str(index)
    if key not in labels:
        raise LabelNotFoundError(key)
    return labels[key]


def resolve_dropdown_labels(settings_str: str, ids: Iterable[int | str]) -> list[str]:
    """Return the names for a dropdown value's ids, in the order the ids are given.

    Raises:
        LabelNotFoundError: If any id has no entry.
        MetadataCorruptError: If the settings are malformed.
    """
    names = {str(entry.id): entry.name for entry in parse_dropdown_settings(settings_str)}
    resolved: list[str] = []
    for label_id in ids:
        key = str(label_id)
        if key not in names:
            raise LabelNotFoundError(key)
        resolved.append(names[key])
    return resolved


def resolve_labels(column_type: str, settings_str: str, ref: Any) -> str | list[str]:
    """Resolve a raw index (status) or id list (dropdown) for a column type tag.

    Raises:
        ValueError: If the type tag carries no label metadata. Values of those
            columns should be passed through instead.
    """
    ctype = ColumnType.from_tag(column_type)
    if ctype is ColumnType.STATUS:
        return resolve_status_label(settings_str, ref)
    if ctype is ColumnType.DROPDOWN:
        return resolve_dropdown_labels(settings_str, ref)
    raise ValueError(f"Column type {column_type!r} has no label metadata")


def list_labels(settings_str: str, column_type: str) -> dict[str, str]:
    """Return every index/id -> label of a status or dropdown column.

    Useful for finding the index to pass to build_status_index.
    """
    ctype = ColumnType.from_tag(column_type)
    if ctype is ColumnType.STATUS:
        return dict(parse_status_settings(settings_str).labels)
    if ctype is ColumnType.DROPDOWN:
        return {str(entry.id): entry.name for entry in parse_dropdown_settings(settings_str)}
    raise ValueError(f"Column type {column_type!r} has no label metadata")
