"""Map loosely-typed parsed rows onto the explicit record schemas.

Rows from :func:`~container_deck.core.table_parser.parse_table` are
keyed by camel-cased header labels (``indexDigest``); schema dataclasses
use snake_case attributes (``index_digest``).  Fields without a default
are required — a row missing one raises :class:`RecordFieldError`
instead of silently building a half-empty record.  Columns the schema
does not know about are ignored, so newer tool versions that add
columns keep working.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from container_deck.exceptions import RecordFieldError

T = TypeVar("T")


def field_key(attribute: str) -> str:
    """Return the row key a schema attribute is read from.

    >>> field_key("index_digest")
    'indexDigest'
    """
    head, *tail = attribute.split("_")
    return head + "".join(part.capitalize() for part in tail)


def _is_required(field: dataclasses.Field[Any]) -> bool:
    return (
        field.default is dataclasses.MISSING
        and field.default_factory is dataclasses.MISSING
    )


def record_from_row(schema: type[T], row: Mapping[str, str]) -> T:
    """Build one *schema* instance from a parsed *row*.

    Raises
    ------
    RecordFieldError
        When a required field has no matching column in *row*.
    """
    values: dict[str, str] = {}
    for field in dataclasses.fields(schema):  # type: ignore[arg-type]
        key = field_key(field.name)
        if key in row:
            values[field.name] = row[key]
        elif _is_required(field):
            present = ", ".join(row) or "none"
            raise RecordFieldError(
                f"{schema.__name__} needs column {key!r}; output had: {present}.",
                hint="The installed container CLI may print a different layout.",
            )
    return schema(**values)


def records_from_rows(schema: type[T], rows: Iterable[Mapping[str, str]]) -> list[T]:
    return [record_from_row(schema, row) for row in rows]
