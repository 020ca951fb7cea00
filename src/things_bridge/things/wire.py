# src/things_bridge/things/wire.py

"""
Wire format between the generated AppleScript and the decoder.

osascript only hands back one text value, so every response is flattened:
- rows are joined with ROW_DELIMITER
- fields inside a row are joined with FIELD_DELIMITER

Each record kind has exactly one ordered schema (a tuple of WireField).
scripts.py emits rows from that schema and decode.py reads them back by the
same positions, so the two sides cannot drift apart. Bump SCHEMA_VERSION
whenever a schema changes shape.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .dates import clean_date

SCHEMA_VERSION = 1

FIELD_DELIMITER = "|||"
ROW_DELIMITER = "~~~"


class FieldKind(str, Enum):
    RAW = "raw"  # kept verbatim (id, name, status)
    TEXT = "text"  # blank -> None, otherwise stripped
    DATE = "date"  # see dates.clean_date
    INT = "int"  # non-numeric -> None


@dataclass(slots=True, frozen=True)
class WireField:
    """
    One column of a row.

    expression: AppleScript expression with "{var}" standing for the record
    variable, e.g. "due date of {var}".
    guarded: wrap the read in try/on error (relations that may not exist,
    such as the project of a task in the Inbox).
    """

    name: str
    expression: str
    kind: FieldKind = FieldKind.RAW
    guarded: bool = False


TASK_ROW: tuple[WireField, ...] = (
    WireField("id", "id of {var}"),
    WireField("name", "name of {var}"),
    WireField("status", "status of {var}"),
    WireField("tags", "tag names of {var}", FieldKind.TEXT),
    WireField("deadline", "due date of {var}", FieldKind.DATE),
    WireField("start_date", "activation date of {var}", FieldKind.DATE),
    WireField("notes", "notes of {var}", FieldKind.TEXT),
    WireField("project", "name of project of {var}", FieldKind.TEXT, guarded=True),
    WireField("area", "name of area of {var}", FieldKind.TEXT, guarded=True),
)

TASK_DETAIL: tuple[WireField, ...] = TASK_ROW + (
    WireField("created", "creation date of {var}", FieldKind.DATE),
    WireField("modified", "modification date of {var}", FieldKind.DATE),
    WireField("completed", "completion date of {var}", FieldKind.DATE),
    WireField("cancelled", "cancellation date of {var}", FieldKind.DATE),
)

PROJECT_ROW: tuple[WireField, ...] = (
    WireField("id", "id of {var}"),
    WireField("name", "name of {var}"),
    WireField("status", "status of {var}"),
    WireField("area", "name of area of {var}", FieldKind.TEXT, guarded=True),
    WireField("todo_count", "(count of to dos of {var})", FieldKind.INT),
)

PROJECT_DETAIL: tuple[WireField, ...] = (
    WireField("id", "id of {var}"),
    WireField("name", "name of {var}"),
    WireField("status", "status of {var}"),
    WireField("area", "name of area of {var}", FieldKind.TEXT, guarded=True),
    WireField("notes", "notes of {var}", FieldKind.TEXT),
    WireField("created", "creation date of {var}", FieldKind.DATE),
    WireField("modified", "modification date of {var}", FieldKind.DATE),
)

PROJECT_TASK_ROW: tuple[WireField, ...] = (
    WireField("id", "id of {var}"),
    WireField("name", "name of {var}"),
    WireField("status", "status of {var}"),
    WireField("tags", "tag names of {var}", FieldKind.TEXT),
    WireField("deadline", "due date of {var}", FieldKind.DATE),
)

TAG_ROW: tuple[WireField, ...] = (WireField("name", "name of {var}", FieldKind.TEXT),)


# ---- decoding helpers (never raise) ----


def blank(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def to_int(value: str | None) -> int | None:
    s = blank(value)
    if s is None:
        return None
    try:
        return int(s)
    except ValueError:
        return None


_DECODERS: dict[FieldKind, Callable[[str | None], Any]] = {
    FieldKind.RAW: lambda v: v,
    FieldKind.TEXT: blank,
    FieldKind.DATE: clean_date,
    FieldKind.INT: to_int,
}


def split_rows(raw: str) -> list[str]:
    """Blank response means zero rows, not one empty row."""
    if not raw or not raw.strip():
        return []
    return raw.split(ROW_DELIMITER)


def split_fields(row: str) -> list[str]:
    # str.split keeps trailing empty strings, which we rely on for
    # "no project / no area" rows.
    return row.split(FIELD_DELIMITER)


def decode_fields(fields: Sequence[str], schema: Sequence[WireField]) -> dict[str, Any]:
    """
    Map positional fields onto schema names.

    Positions past the end of `fields` decode to None rather than failing.
    Extra trailing fields are ignored.
    """
    out: dict[str, Any] = {}
    for i, wf in enumerate(schema):
        raw = fields[i] if i < len(fields) else None
        out[wf.name] = _DECODERS[wf.kind](raw)
    return out


def decode_row(row: str, schema: Sequence[WireField]) -> dict[str, Any]:
    return decode_fields(split_fields(row), schema)
