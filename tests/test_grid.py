"""
Tests for the structural grid operations.
"""

from __future__ import annotations

import pandas as pd
import pytest

from shot2table import grid
from shot2table.models import TableData


@pytest.fixture
def table() -> TableData:
    return TableData(
        headers=["A", "B", "C", "D"],
        rows=[
            ["a1", "b1", "c1", "d1"],
            ["a2", "b2", "c2", "d2"],
        ],
    )


def _consistent(table: TableData) -> bool:
    return all(len(row) == len(table.headers) for row in table.rows)


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------

def test_insert_column_appends_empty_column(table):
    result = grid.insert_column(table)
    assert result.headers == ["A", "B", "C", "D", grid.DEFAULT_COLUMN_NAME]
    for before, after in zip(table.rows, result.rows):
        assert len(after) == len(before) + 1
        assert after[-1] == ""
    assert _consistent(result)


def test_insert_column_after_index(table):
    result = grid.insert_column(table, after_index=0)
    assert result.headers == ["A", "New Column", "B", "C", "D"]
    assert result.rows[0] == ["a1", "", "b1", "c1", "d1"]


def test_insert_column_does_not_touch_input(table):
    grid.insert_column(table, after_index=1)
    assert table.headers == ["A", "B", "C", "D"]
    assert table.rows[0] == ["a1", "b1", "c1", "d1"]


def test_delete_column(table):
    result = grid.delete_column(table, 1)
    assert result.headers == ["A", "C", "D"]
    assert result.rows == [["a1", "c1", "d1"], ["a2", "c2", "d2"]]


def test_delete_last_column_is_refused():
    single = TableData(headers=["only"], rows=[["x"], ["y"]])
    assert grid.delete_column(single, 0) is single


def test_delete_column_out_of_range_is_noop(table):
    assert grid.delete_column(table, 9) is table


def test_move_column_splices(table):
    result = grid.move_column(table, 0, 2)
    assert result.headers == ["B", "C", "A", "D"]
    assert result.rows == [["b1", "c1", "a1", "d1"], ["b2", "c2", "a2", "d2"]]


def test_move_column_is_not_a_swap(table):
    result = grid.move_column(table, 0, 2)
    assert result.headers != ["C", "B", "A", "D"]


def test_move_column_onto_itself_is_noop(table):
    assert grid.move_column(table, 2, 2) is table


def test_move_column_keeps_sparse_cells_under_their_header():
    sparse = TableData(headers=["A", "B", "C"], rows=[["a"], ["a", "b", "c"]])
    result = grid.move_column(sparse, 0, 2)
    assert result.headers == ["B", "C", "A"]
    assert result.rows == [["", "", "a"], ["b", "c", "a"]]


def test_move_column_rejects_unknown_column(table):
    with pytest.raises(IndexError):
        grid.move_column(table, 7, 0)


def test_set_header(table):
    result = grid.set_header(table, 3, "Total")
    assert result.headers == ["A", "B", "C", "Total"]
    assert table.headers[3] == "D"


def test_set_header_out_of_range(table):
    with pytest.raises(IndexError):
        grid.set_header(table, 4, "E")


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------

def test_insert_row_appends_header_wide_row(table):
    result = grid.insert_row(table)
    assert len(result.rows) == 3
    assert result.rows[-1] == ["", "", "", ""]


def test_insert_row_after_index(table):
    result = grid.insert_row(table, after_index=0)
    assert result.rows[1] == ["", "", "", ""]
    assert result.rows[2] == ["a2", "b2", "c2", "d2"]


def test_delete_row(table):
    result = grid.delete_row(table, 0)
    assert result.rows == [["a2", "b2", "c2", "d2"]]


def test_delete_last_row_is_refused(table):
    single = grid.delete_row(table, 0)
    assert grid.delete_row(single, 0) is single
    assert len(single.rows) == 1


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------

def test_set_cell_in_place(table):
    result = grid.set_cell(table, 1, 2, "X")
    assert result.rows[1] == ["a2", "b2", "X", "d2"]
    assert table.rows[1][2] == "c2"


def test_set_cell_grows_rows_and_cells(table):
    result = grid.set_cell(table, 3, 5, "far")
    assert len(result.rows) == 4
    assert result.rows[2] == ["", "", "", ""]
    assert result.rows[3] == ["", "", "", "", "", "far"]


def test_set_cell_rejects_negative_index(table):
    with pytest.raises(IndexError):
        grid.set_cell(table, -1, 0, "x")


def test_cell_value_is_blank_for_missing_cells():
    sparse = TableData(headers=["A", "B"], rows=[["a"]])
    assert grid.cell_value(sparse, 0, 0) == "a"
    assert grid.cell_value(sparse, 0, 1) == ""
    assert grid.cell_value(sparse, 5, 0) == ""


# ---------------------------------------------------------------------------
# DataFrame view
# ---------------------------------------------------------------------------

def test_to_frame_pads_sparse_rows():
    sparse = TableData(headers=["A", "A"], rows=[["1"], ["1", "2", "3"]])
    frame = grid.to_frame(sparse)
    assert list(frame.columns) == ["col_0", "col_1", "col_2"]
    assert frame.values.tolist() == [["1", "", ""], ["1", "2", "3"]]
    assert grid.column_labels(sparse) == ["A", "A", ""]


def test_to_frame_without_rows(table):
    frame = grid.to_frame(TableData(headers=["A", "B"]))
    assert frame.empty
    assert list(frame.columns) == ["col_0", "col_1"]


def test_changed_cells_reports_only_edits():
    sparse = TableData(headers=["A", "B"], rows=[["1"], ["3", "4"]])
    frame = grid.to_frame(sparse)
    assert grid.changed_cells(sparse, frame) == []

    frame.iloc[1, 0] = "30"
    frame.iloc[0, 1] = None
    assert grid.changed_cells(sparse, frame) == [(1, 0, "30")]


def test_changed_cells_feed_set_cell():
    table = TableData(headers=["A"], rows=[["1"]])
    frame = pd.DataFrame([["2"]], columns=grid.column_ids(table))
    for row, col, value in grid.changed_cells(table, frame):
        table = grid.set_cell(table, row, col, value)
    assert table.rows == [["2"]]


def test_move_column_past_last_header_keeps_long_rows_aligned():
    long_rows = TableData(headers=["A", "B"], rows=[["a", "b", "x", "y", "z"]])
    result = grid.move_column(long_rows, 0, 4)
    assert result.headers == ["B", "A"]
    assert result.rows == [["b", "a", "x", "y", "z"]]
    assert grid.cell_value(result, 0, result.headers.index("A")) == "a"


def test_move_last_column_past_end_is_noop(table):
    assert grid.move_column(table, 3, 10) is table
