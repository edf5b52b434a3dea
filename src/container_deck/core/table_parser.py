"""Pure parser for column-aligned CLI listings.

The container CLI prints listings as a header row followed by data rows,
with columns padded by runs of spaces::

    NAME     TAG      DIGEST
    alpine   latest   sha256:0123...
    python   3.12     sha256:4567...

:func:`parse_table` turns that text into one ``dict`` per data row,
keyed by the camel-cased header label::

    [{"name": "alpine", "tag": "latest", "digest": "sha256:0123..."}, ...]

Column boundaries come straight from the tokenizer's match positions on
the header line, so a label repeated inside an earlier label (``ID`` after
``CONTAINER ID``) still gets its own offset.  Boundaries are computed once
and applied to every row; short rows simply yield empty values.

Every function here is pure — no I/O, no logging, deterministic.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

from container_deck.core.models import ColumnSpec
from container_deck.exceptions import InvalidOutputFormatError

Record = dict[str, str]
"""One parsed data row: normalized field name → value."""

ValueTransform = Callable[[str, str], str | None]
"""``(field_name, trimmed_value) -> replacement`` or ``None`` to keep it."""

DEFAULT_MIN_GAP: int = 2

_WORD_SEPARATOR = re.compile(r"[\W_]+")


# ---------------------------------------------------------------------------
# Field-name normalization
# ---------------------------------------------------------------------------

def camelize(label: str) -> str:
    """Normalize a header label into a lower camel case field name.

    Any run of characters that is not a letter or digit separates words.

    >>> camelize("CONTAINER ID")
    'containerId'
    >>> camelize("A LABEL2")
    'aLabel2'
    """
    words = [w for w in _WORD_SEPARATOR.split(label.lower()) if w]
    if not words:
        return ""
    head, *tail = words
    return head + "".join(w[:1].upper() + w[1:] for w in tail)


# ---------------------------------------------------------------------------
# Header tokenization
# ---------------------------------------------------------------------------

def _separator(min_gap: int) -> re.Pattern[str]:
    if min_gap < 2:
        raise ValueError(
            f"min_gap must be at least 2 so multi-word labels stay whole, got {min_gap}",
        )
    return re.compile(rf"\s{{{min_gap},}}")


def _iter_labels(header_line: str, min_gap: int) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, label)`` for each label in *header_line*."""
    pos = 0
    for match in _separator(min_gap).finditer(header_line):
        if match.start() > pos:
            yield pos, header_line[pos:match.start()]
        pos = match.end()
    tail = header_line[pos:].rstrip()
    if tail:
        yield pos, tail


def parse_header(
    header_line: str,
    *,
    min_gap: int = DEFAULT_MIN_GAP,
) -> tuple[ColumnSpec, ...]:
    """Derive column descriptors from a header line.

    The first column always starts at offset 0 so that values indented
    under it are not clipped.  Each column ends where the next label
    begins; the last column runs to the end of the line.

    Raises
    ------
    InvalidOutputFormatError
        If the line holds no labels, or a label normalizes to nothing.
    """
    labels = list(_iter_labels(header_line, min_gap))
    if not labels:
        raise InvalidOutputFormatError(
            "Output has no header line.",
            detail=header_line,
        )

    specs: list[ColumnSpec] = []
    for index, (offset, label) in enumerate(labels):
        name = camelize(label)
        if not name:
            raise InvalidOutputFormatError(
                f"Header label {label.strip()!r} cannot be used as a field name.",
                detail=header_line,
            )
        start = 0 if index == 0 else offset
        end = labels[index + 1][0] if index + 1 < len(labels) else None
        specs.append(ColumnSpec(name=name, label=label.strip(), start=start, end=end))
    return tuple(specs)


# ---------------------------------------------------------------------------
# Table parsing
# ---------------------------------------------------------------------------

def split_rows(raw_text: str) -> list[str]:
    """Split *raw_text* into lines, dropping blank ones."""
    return [line for line in raw_text.splitlines() if line.strip()]


def parse_row(
    line: str,
    columns: tuple[ColumnSpec, ...],
    transform: ValueTransform | None = None,
) -> Record:
    """Slice one data line into a record using precomputed *columns*.

    A *transform* result replaces the trimmed value unless it is
    ``None``; empty strings are valid replacements.  Columns that start
    past the end of a short row stay ``""`` and are not transformed.
    """
    row: Record = {}
    for column in columns:
        value = column.slice(line)
        if transform is not None and column.start < len(line):
            replaced = transform(column.name, value)
            if replaced is not None:
                value = replaced
        row[column.name] = value
    return row


def parse_table(
    raw_text: str,
    transform: ValueTransform | None = None,
    *,
    min_gap: int = DEFAULT_MIN_GAP,
) -> list[Record]:
    """Parse a header-plus-rows listing into records, in line order.

    Raises
    ------
    InvalidOutputFormatError
        When *raw_text* has no non-blank line to use as a header.
    """
    lines = split_rows(raw_text)
    if not lines:
        raise InvalidOutputFormatError(
            "Output is empty; expected a tabular listing.",
            detail=raw_text,
        )
    header, *rows = lines
    columns = parse_header(header, min_gap=min_gap)
    return [parse_row(line, columns, transform) for line in rows]
