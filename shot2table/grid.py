"""Structural edits on `TableData`.

Every operation returns a new table and never touches the one passed in.
Guarded no-ops (deleting the last row, moving a column onto itself) hand the
input table back unchanged.
"""

from __future__ import annotations

import pandas as pd

from shot2table.models import TableData

DEFAULT_COLUMN_NAME = "New Column"


def _copy_rows(table: TableData) -> list[list[str]]:
    return [list(row) for row in table.rows]


def _empty_row(table: TableData) -> list[str]:
    return [""] * len(table.headers)


def _check_index(index: int, name: str) -> None:
    if index < 0:
        raise IndexError(f"{name} must not be negative: {index}")


def set_cell(table: TableData, row: int, col: int, value: str) -> TableData:
    _check_index(row, "row")
    _check_index(col, "col")
    rows = _copy_rows(table)
    while len(rows) <= row:
        rows.append(_empty_row(table))
    target = rows[row]
    while len(target) <= col:
        target.append("")
    target[col] = value
    return TableData(headers=list(table.headers), rows=rows)


def set_header(table: TableData, col: int, value: str) -> TableData:
    if not 0 <= col < len(table.headers):
        raise IndexError(f"header index out of range: {col}")
    headers = list(table.headers)
    headers[col] = value
    return TableData(headers=headers, rows=_copy_rows(table))


def insert_row(table: TableData, after_index: int | None = None) -> TableData:
    rows = _copy_rows(table)
    if after_index is None:
        rows.append(_empty_row(table))
    else:
        rows.insert(after_index + 1, _empty_row(table))
    return TableData(headers=list(table.headers), rows=rows)


def insert_column(
    table: TableData,
    after_index: int | None = None,
    name: str = DEFAULT_COLUMN_NAME,
) -> TableData:
    headers = list(table.headers)
    rows = _copy_rows(table)
    if after_index is None:
        headers.append(name)
        for row in rows:
            row.append("")
    else:
        headers.insert(after_index + 1, name)
        for row in rows:
            row.insert(after_index + 1, "")
    return TableData(headers=headers, rows=rows)


def delete_row(table: TableData, index: int) -> TableData:
    if len(table.rows) <= 1 or not 0 <= index < len(table.rows):
        return table
    rows = [list(row) for i, row in enumerate(table.rows) if i != index]
    return TableData(headers=list(table.headers), rows=rows)


def delete_column(table: TableData, index: int) -> TableData:
    if len(table.headers) <= 1 or not 0 <= index < len(table.headers):
        return table
    headers = [header for i, header in enumerate(table.headers) if i != index]
    rows = [[cell for i, cell in enumerate(row) if i != index] for row in table.rows]
    return TableData(headers=headers, rows=rows)


def move_column(table: TableData, from_index: int, to_index: int) -> TableData:
    """Splice the header and each row's cell from `from_index` to `to_index`."""
    if from_index == to_index:
        return table
    if not 0 <= from_index < len(table.headers):
        raise IndexError(f"column index out of range: {from_index}")
    _check_index(to_index, "to_index")
    # Long rows must land the cell at the same position as the header.
    to_index = min(to_index, len(table.headers) - 1)
    if from_index == to_index:
        return table

    headers = list(table.headers)
    headers.insert(to_index, headers.pop(from_index))

    width = len(table.headers)
    rows = []
    for row in _copy_rows(table):
        # Sparse rows are padded so each cell stays under its header.
        if len(row) < width:
            row.extend([""] * (width - len(row)))
        row.insert(to_index, row.pop(from_index))
        rows.append(row)
    return TableData(headers=headers, rows=rows)


def cell_value(table: TableData, row: int, col: int) -> str:
    if not 0 <= row < len(table.rows):
        return ""
    cells = table.rows[row]
    if not 0 <= col < len(cells):
        return ""
    return cells[col]


def column_ids(table: TableData) -> list[str]:
    return [f"col_{index}" for index in range(table.column_count)]


def column_labels(table: TableData) -> list[str]:
    labels = list(table.headers)
    labels.extend([""] * (table.column_count - len(labels)))
    return labels


def to_frame(table: TableData) -> pd.DataFrame:
    """DataFrame view for the grid editor, using positional column ids.

    Header texts may repeat or be blank, so they are not usable as column
    names; pair the frame with `column_labels` for display.
    """
    ids = column_ids(table)
    data = [row + [""] * (len(ids) - len(row)) for row in table.rows]
    if not data:
        return pd.DataFrame(columns=ids, dtype=object)
    return pd.DataFrame(data, columns=ids, dtype=object)


def changed_cells(table: TableData, frame: pd.DataFrame) -> list[tuple[int, int, str]]:
    """Cells whose value in an edited `to_frame` view differs from `table`.

    Blank cells past the end of a sparse row count as unchanged.
    """
    cleaned = frame.astype(object).where(frame.notna(), "")
    changes = []
    for row_index, values in enumerate(cleaned.values.tolist()):
        for col_index, value in enumerate(values):
            text = "" if value is None else str(value)
            if text != cell_value(table, row_index, col_index):
                changes.append((row_index, col_index, text))
    return changes
