"""
Tests for the lenient table extraction from free-form model replies.
"""

from __future__ import annotations

import pytest

from shot2table.errors import ParseError
from shot2table.extraction import find_json_block, parse_table_payload
from shot2table.models import TableData


# ---------------------------------------------------------------------------
# find_json_block
# ---------------------------------------------------------------------------

def test_block_spans_first_open_to_last_close_brace():
    text = 'prefix {"a": {"b": 1}} suffix'
    assert find_json_block(text) == '{"a": {"b": 1}}'


def test_block_crosses_newlines():
    text = 'Result:\n{\n  "headers": []\n}\nDone.'
    assert find_json_block(text) == '{\n  "headers": []\n}'


@pytest.mark.parametrize("text", ["", "no braces at all", "only } closing { reversed", None])
def test_no_block(text):
    assert find_json_block(text) is None


# ---------------------------------------------------------------------------
# parse_table_payload
# ---------------------------------------------------------------------------

def test_markdown_fenced_reply():
    content = 'Here is the data:\n```json\n{"headers":["A"],"rows":[["1"]]}\n```'
    table = parse_table_payload(content)
    assert table == TableData(headers=["A"], rows=[["1"]])


def test_plain_json_reply():
    table = parse_table_payload('{"headers": ["Name", "Age"], "rows": [["Alice", "30"], ["Bob", "25"]]}')
    assert table.headers == ["Name", "Age"]
    assert table.rows == [["Alice", "30"], ["Bob", "25"]]


def test_empty_arrays_mean_no_table():
    table = parse_table_payload('No table found: {"headers": [], "rows": []}')
    assert table.is_empty()


def test_cells_are_coerced_to_strings():
    table = parse_table_payload('{"headers": ["n", 2], "rows": [[1, null, 2.5, true]]}')
    assert table.headers == ["n", "2"]
    assert table.rows == [["1", "", "2.5", "true"]]


def test_sparse_and_long_rows_are_kept_as_is():
    table = parse_table_payload('{"headers": ["a", "b"], "rows": [["1"], ["1", "2", "3"]]}')
    assert table.rows == [["1"], ["1", "2", "3"]]


def test_reply_without_json_raises_parse_error():
    with pytest.raises(ParseError) as excinfo:
        parse_table_payload("Sorry, I cannot see any table in this image.")
    assert excinfo.value.raw_content == "Sorry, I cannot see any table in this image."


def test_stray_braces_in_prose_are_over_captured():
    """The scan runs from the first '{' to the last '}', prose included."""
    content = 'Columns are {name, age}.\n{"headers": ["name"], "rows": [["x"]]}'
    with pytest.raises(ParseError):
        parse_table_payload(content)


def test_invalid_json_raises_parse_error():
    with pytest.raises(ParseError):
        parse_table_payload('{"headers": ["A"], "rows": [["1"],]}')


@pytest.mark.parametrize(
    "content",
    [
        '{"headers": ["A"]}',
        '{"rows": [["1"]]}',
        '{"headers": "A", "rows": [["1"]]}',
        '{"headers": ["A"], "rows": {"0": ["1"]}}',
        '{"headers": ["A"], "rows": ["1", "2"]}',
    ],
)
def test_missing_or_malformed_fields_raise_parse_error(content):
    with pytest.raises(ParseError):
        parse_table_payload(content)


def test_extra_fields_are_ignored():
    table = parse_table_payload('{"title": "T", "headers": ["A"], "rows": [["1"]], "notes": {}}')
    assert table == TableData(headers=["A"], rows=[["1"]])


def test_boolean_cells_keep_json_spelling():
    table = parse_table_payload('{"headers": ["ok"], "rows": [[true], [false]]}')
    assert table.rows == [["true"], ["false"]]
