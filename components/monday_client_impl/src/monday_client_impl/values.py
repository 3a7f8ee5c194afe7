"""Typed write payloads for monday column values and the builders that make them.

Example of building column values for add_item (keys are column ids, run
get_board to list them)::

    column_values = {
        "text": TextValue("have a nice day"),
        "date": build_date("2019-05-22"),
        "status": build_status_index(2),
        "people": build_people(123456, 987654),
    }
"""

from __future__ import annotations

import datetime as dt
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from monday_client_impl.errors import SerializationError

PERSON = "person"


# ---------------------------------------------------------------------------
# Payload variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextValue:
    text: str

    def to_wire(self) -> Any:
        return self.text


@dataclass(frozen=True)
class DateValue:
    """Date column payload. ``time`` is only sent when set."""

    date: str
    time: str | None = None

    def to_wire(self) -> Any:
        wire = {"date": self.date}
        if self.time is not None:
            wire["time"] = self.time
        return wire


@dataclass(frozen=True)
class StatusIndexValue:
    """Selects a status label by index; monday maps the index using the column's own settings."""

    index: int

    def to_wire(self) -> Any:
        return {"index": self.index}


@dataclass(frozen=True)
class CheckboxValue:
    checked: bool

    def to_wire(self) -> Any:
        #the mutation endpoint only accepts the lowercase strings, not JSON booleans
        return {"checked": "true" if self.checked else "false"}


@dataclass(frozen=True)
class PersonTeam:
    id: int
    kind: str = PERSON

    def to_wire(self) -> Any:
        return {"id": self.id, "kind": self.kind}


@dataclass(frozen=True)
class PeopleValue:
    persons_and_teams: tuple[PersonTeam, ...]

    def to_wire(self) -> Any:
        return {"personsAndTeams": [p.to_wire() for p in self.persons_and_teams]}


@dataclass(frozen=True)
class ConnectBoardsValue:
    item_ids: tuple[int, ...]

    def to_wire(self) -> Any:
        return {"item_ids": list(self.item_ids)}


@dataclass(frozen=True)
class CountryValue:
    country_code: str
    country_name: str

    def to_wire(self) -> Any:
        return {"countryCode": self.country_code, "countryName": self.country_name}


@dataclass(frozen=True)
class RawJSONValue:
    """Escape hatch for column types without a dedicated payload.

    ``payload`` is sent as-is; monday validates it remotely.
    """

    payload: Any

    def to_wire(self) -> Any:
        return self.payload


ColumnPayload = Union[
    TextValue,
    DateValue,
    StatusIndexValue,
    CheckboxValue,
    PeopleValue,
    ConnectBoardsValue,
    CountryValue,
    RawJSONValue,
]

_PAYLOAD_TYPES = (
    TextValue,
    DateValue,
    StatusIndexValue,
    CheckboxValue,
    PeopleValue,
    ConnectBoardsValue,
    CountryValue,
    RawJSONValue,
)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _format_date(date: dt.date | str) -> str:
    if isinstance(date, dt.datetime):
        date = date.date()
    if isinstance(date, dt.date):
        return date.isoformat()
    return date


def _format_time(time: dt.time | str) -> str:
    if isinstance(time, dt.time):
        return time.strftime("%H:%M:%S")
    return time


def build_date(date: dt.date | str) -> DateValue:
    """Return a date payload with only the date set ('YYYY-MM-DD')."""
    return DateValue(date=_format_date(date))


def build_date_time(date: dt.date | str, time: dt.time | str) -> DateValue:
    """Return a date payload with both date and time ('HH:MM:SS') set."""
    return DateValue(date=_format_date(date), time=_format_time(time))


def build_status_index(index: int) -> StatusIndexValue:
    return StatusIndexValue(index=index)


def build_checkbox(checked: bool) -> CheckboxValue:
    return CheckboxValue(checked=bool(checked))


def build_people(*user_ids: int) -> PeopleValue:
    """Return a people payload referencing each user id as a person.

    Team references are not supported: every id is sent with kind "person".
    """
    return PeopleValue(tuple(PersonTeam(id=int(uid), kind=PERSON) for uid in user_ids))


def build_connect_boards(*item_ids: int) -> ConnectBoardsValue:
    return ConnectBoardsValue(tuple(int(i) for i in item_ids))


def build_country(country_code: str, country_name: str) -> CountryValue:
    return CountryValue(country_code=country_code, country_name=country_name)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def column_values_to_wire(column_values: Mapping[str, ColumnPayload]) -> dict[str, Any]:
    """Return the JSON-ready {column_id: wire value} dict for a column-values mapping.

    Raises:
        SerializationError: If a value is not one of the payload types.
    """
    wire: dict[str, Any] = {}
    for column_id, payload in column_values.items():
        if not isinstance(payload, _PAYLOAD_TYPES):
            raise SerializationError(
                f"Column {column_id!r}: unsupported payload type {type(payload).__name__}"
            )
        wire[column_id] = payload.to_wire()
    return wire


def encode_column_values(column_values: Mapping[str, ColumnPayload]) -> str:
    """JSON-encode a column-values mapping into the string bound to a ``JSON!`` variable.

    Raises:
        SerializationError: If the mapping cannot be encoded.
    """
    wire = column_values_to_wire(column_values)
    try:
        return json.dumps(wire, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode column values: {e}") from e
