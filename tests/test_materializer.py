"""Tests for the CSV row materializer."""

import csv

import pytest

from termview.core.materializer import materialize
from termview.core.model import ParseError

from helpers import csv_text


class TestMaterialize:
    """Tokenizing decoded text into rows."""

    def test_first_row_is_data(self):
        outcome = materialize("code,display\nA,Alpha\nB,Beta\n")
        assert outcome.rows == [["code", "display"], ["A", "Alpha"], ["B", "Beta"]]
        assert outcome.column_count == 2
        assert outcome.is_truncated is False

    def test_fields_stay_strings(self):
        outcome = materialize("1,2.50,true,\n")
        assert outcome.rows == [["1", "2.50", "true", ""]]

    def test_quoted_fields(self):
        text = 'A,"Alpha, first","line one\nline two"\nB,"say ""hi""",x\n'
        outcome = materialize(text)
        assert outcome.rows == [
            ["A", "Alpha, first", "line one\nline two"],
            ["B", 'say "hi"', "x"],
        ]

    def test_blank_lines_skipped(self):
        outcome = materialize("\n\na,b\n\n   \nc,d\n\n")
        assert outcome.rows == [["a", "b"], ["c", "d"]]

    def test_crlf_line_endings(self):
        outcome = materialize("a,b\r\nc,d\r\n")
        assert outcome.rows == [["a", "b"], ["c", "d"]]

    def test_ragged_rows_pass_through(self):
        """Only the first row decides column_count; later rows are not checked."""
        outcome = materialize("a,b,c\nd\ne,f,g,h\n")
        assert outcome.column_count == 3
        assert [len(r) for r in outcome.rows] == [3, 1, 4]

    def test_row_count_matches_non_blank_lines(self):
        outcome = materialize(csv_text(250))
        assert len(outcome.rows) == 250


class TestCap:
    """Row cap behaviour."""

    def test_cap_stops_parsing(self):
        outcome = materialize(csv_text(100), cap=10)
        assert len(outcome.rows) == 10
        assert outcome.is_truncated is True

    def test_cap_reached_exactly(self):
        """Hitting the cap marks truncation even when nothing was left."""
        outcome = materialize(csv_text(10), cap=10)
        assert len(outcome.rows) == 10
        assert outcome.is_truncated is True

    def test_cap_not_reached(self):
        outcome = materialize(csv_text(10), cap=20)
        assert len(outcome.rows) == 10
        assert outcome.is_truncated is False


class TestTokenizerErrors:
    """Tokenizer failures and empty input."""

    def _oversized_field(self) -> str:
        return '"' + "x" * (csv.field_size_limit() + 10) + '"'

    def test_error_mid_stream_keeps_rows(self):
        text = "a,b\nc,d\n" + self._oversized_field() + "\ne,f\n"
        outcome = materialize(text)
        assert outcome.rows == [["a", "b"], ["c", "d"]]
        assert outcome.is_truncated is True

    def test_error_on_first_row(self):
        with pytest.raises(ParseError, match="No rows"):
            materialize(self._oversized_field() + "\n")

    def test_empty_text(self):
        with pytest.raises(ParseError):
            materialize("")

    def test_blank_text(self):
        with pytest.raises(ParseError):
            materialize("\n \n\t\n")
