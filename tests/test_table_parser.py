"""Tests for the tabular output parser (core/table_parser.py).

Every function under test is pure, so no mocking is needed.

Coverage:
* Header-label normalization (``camelize``).
* Column boundaries taken from tokenizer positions.
* Row slicing, ragged rows, and last-column tails.
* Value transforms and the ``None``-only "no override" policy.
* ``InvalidOutputFormatError`` for empty / header-less output.
"""

from __future__ import annotations

import pytest

from container_deck.core.models import ColumnSpec
from container_deck.core.table_parser import (
    camelize,
    parse_header,
    parse_row,
    parse_table,
    split_rows,
)
from container_deck.exceptions import InvalidOutputFormatError

IMAGES_OUTPUT = (
    "NAME      TAG     DIGEST\n"
    "alpine    latest  sha256:1111\n"
    "python    3.12    sha256:2222\n"
)


# ---------------------------------------------------------------------------
# camelize
# ---------------------------------------------------------------------------

class TestCamelize:
    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("CONTAINER ID", "containerId"),
            ("OS", "os"),
            ("A LABEL2", "aLabel2"),
            ("NAME", "name"),
            ("INDEX DIGEST", "indexDigest"),
            ("EXIT CODE", "exitCode"),
            ("NET-RX", "netRx"),
            ("  IMAGE  ", "image"),
        ],
    )
    def test_labels(self, label: str, expected: str) -> None:
        assert camelize(label) == expected

    def test_is_deterministic(self) -> None:
        assert camelize("MANIFEST DIGEST") == camelize("MANIFEST DIGEST")

    def test_punctuation_only_yields_empty(self) -> None:
        assert camelize("---") == ""


# ---------------------------------------------------------------------------
# parse_header
# ---------------------------------------------------------------------------

class TestParseHeader:
    def test_offsets_and_names(self) -> None:
        columns = parse_header("NAME      TAG     DIGEST")
        assert columns == (
            ColumnSpec(name="name", label="NAME", start=0, end=10),
            ColumnSpec(name="tag", label="TAG", start=10, end=18),
            ColumnSpec(name="digest", label="DIGEST", start=18, end=None),
        )

    def test_single_space_does_not_split_label(self) -> None:
        columns = parse_header("CONTAINER ID   EXIT CODE")
        assert [c.name for c in columns] == ["containerId", "exitCode"]

    def test_repeated_label_gets_its_own_offset(self) -> None:
        # "ID" also appears inside "CONTAINER ID"; a substring search
        # would place the second column at offset 10.
        header = "CONTAINER ID   ID"
        columns = parse_header(header)
        assert columns[1].start == header.rindex("ID")
        assert columns[0].end == columns[1].start

    def test_min_gap_three_keeps_two_space_labels_together(self) -> None:
        columns = parse_header("A  B     C", min_gap=3)
        assert [c.label for c in columns] == ["A  B", "C"]
        assert [c.name for c in columns] == ["aB", "c"]

    def test_min_gap_below_two_rejected(self) -> None:
        with pytest.raises(ValueError, match="min_gap"):
            parse_header("NAME  TAG", min_gap=1)

    def test_first_column_starts_at_zero_despite_indent(self) -> None:
        columns = parse_header("  NAME  TAG")
        assert columns[0].start == 0
        assert columns[1].start == 8

    def test_trailing_whitespace_ignored(self) -> None:
        columns = parse_header("NAME  TAG    ")
        assert [c.label for c in columns] == ["NAME", "TAG"]
        assert columns[-1].end is None

    def test_blank_header_raises(self) -> None:
        with pytest.raises(InvalidOutputFormatError):
            parse_header("     ")

    def test_unusable_label_raises(self) -> None:
        with pytest.raises(InvalidOutputFormatError, match="field name"):
            parse_header("NAME  ---")


# ---------------------------------------------------------------------------
# parse_row / split_rows
# ---------------------------------------------------------------------------

class TestParseRow:
    def test_short_row_yields_empty_values(self) -> None:
        columns = parse_header("NAME      TAG     DIGEST")
        row = parse_row("alpine", columns)
        assert row == {"name": "alpine", "tag": "", "digest": ""}

    def test_transform_skips_missing_segments(self) -> None:
        calls: list[tuple[str, str]] = []

        def transform(key: str, value: str) -> str:
            calls.append((key, value))
            return "X"

        columns = parse_header("NAME      TAG     DIGEST")
        row = parse_row("alpine", columns, transform)
        assert row == {"name": "X", "tag": "", "digest": ""}
        assert calls == [("name", "alpine")]

    def test_empty_transform_result_is_honoured(self) -> None:
        columns = parse_header("NAME  TAG")
        row = parse_row("web   none", columns, lambda key, value: "" if key == "tag" else None)
        assert row == {"name": "web", "tag": ""}


class TestSplitRows:
    def test_drops_blank_and_whitespace_lines(self) -> None:
        assert split_rows("A\n\n   \nB\r\n") == ["A", "B"]


# ---------------------------------------------------------------------------
# parse_table
# ---------------------------------------------------------------------------

class TestParseTable:
    def test_round_trip_simple(self) -> None:
        assert parse_table("NAME  TAG\nalpine  latest") == [
            {"name": "alpine", "tag": "latest"},
        ]

    def test_multi_word_header_field_names(self) -> None:
        records = parse_table("CONTAINER ID   IMAGE\nabc123   alpine:latest")
        assert len(records) == 1
        assert list(records[0]) == ["containerId", "image"]

    def test_aligned_multi_word_header_values(self) -> None:
        records = parse_table(
            "CONTAINER ID   IMAGE\n"
            "abc123         alpine:latest\n",
        )
        assert records == [{"containerId": "abc123", "image": "alpine:latest"}]

    def test_last_column_keeps_tail(self) -> None:
        records = parse_table("NAME  COMMAND\nweb   /bin/sh -c run.sh")
        assert records[0]["command"] == "/bin/sh -c run.sh"

    def test_row_count_and_order(self) -> None:
        records = parse_table(IMAGES_OUTPUT)
        assert [r["name"] for r in records] == ["alpine", "python"]
        assert records[1] == {"name": "python", "tag": "3.12", "digest": "sha256:2222"}

    def test_header_only_yields_no_records(self) -> None:
        assert parse_table("NAME  TAG\n") == []

    def test_blank_lines_between_rows_skipped(self) -> None:
        records = parse_table("NAME  TAG\n\nweb   1\n\n\ndb    2\n")
        assert [r["name"] for r in records] == ["web", "db"]

    @pytest.mark.parametrize("raw", ["", "\n\n", "   \n  "])
    def test_empty_output_raises(self, raw: str) -> None:
        with pytest.raises(InvalidOutputFormatError, match="empty"):
            parse_table(raw)

    def test_transform_applies_only_to_named_field(self) -> None:
        calls: list[tuple[str, str]] = []

        def to_bytes(key: str, value: str) -> str | None:
            calls.append((key, value))
            if key == "size" and value.endswith("MB"):
                return str(int(value[:-2]) * 1_000_000)
            return None

        records = parse_table("NAME   SIZE\nweb    10MB\n", to_bytes)
        assert records == [{"name": "web", "size": "10000000"}]
        assert calls == [("name", "web"), ("size", "10MB")]

    def test_idempotent(self) -> None:
        first = parse_table(IMAGES_OUTPUT)
        second = parse_table(IMAGES_OUTPUT)
        assert first == second
        assert first is not second

    def test_insertion_order_follows_header(self) -> None:
        records = parse_table(IMAGES_OUTPUT)
        assert list(records[0]) == ["name", "tag", "digest"]
