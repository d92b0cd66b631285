from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from enum import Enum

import pandas as pd

from shot2table.errors import EmptyDataError
from shot2table.logging_config import logger
from shot2table.models import TableData

DEFAULT_EXPORT_FILENAME = "table-data"
SHEET_NAME = "Sheet1"
XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MIME_TYPE = "text/csv"


class ExportFormat(str, Enum):
    SPREADSHEET = "xlsx"
    CSV = "csv"


@dataclass(frozen=True)
class ExportArtifact:
    file_name: str
    data: bytes
    mime_type: str


def _ensure_not_empty(table: TableData) -> None:
    if table.is_empty():
        raise EmptyDataError("No data to export.")


def to_csv(table: TableData) -> str:
    """Header line as-is, then one fully quoted line per row."""
    _ensure_not_empty(table)
    header_line = ",".join(table.headers)
    if not table.rows:
        return header_line

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(table.rows)
    # No line terminator after the last row.
    return header_line + "\n" + buffer.getvalue()[: -len("\n")]


def to_xlsx(table: TableData) -> bytes:
    _ensure_not_empty(table)
    # Ragged rows are padded with blanks by pandas.
    sheet = pd.DataFrame([list(table.headers), *table.rows], dtype=object)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        sheet.to_excel(writer, sheet_name=SHEET_NAME, header=False, index=False)
    return buffer.getvalue()


def export_table(
    table: TableData,
    filename: str = DEFAULT_EXPORT_FILENAME,
    fmt: ExportFormat = ExportFormat.SPREADSHEET,
) -> ExportArtifact:
    fmt = ExportFormat(fmt)
    if fmt is ExportFormat.CSV:
        data = to_csv(table).encode("utf-8")
        mime_type = f"{CSV_MIME_TYPE};charset=utf-8"
    else:
        data = to_xlsx(table)
        mime_type = XLSX_MIME_TYPE

    artifact = ExportArtifact(file_name=f"{filename}.{fmt.value}", data=data, mime_type=mime_type)
    logger.info(
        "Table export file=%s headers=%s rows=%s bytes=%s",
        artifact.file_name,
        len(table.headers),
        len(table.rows),
        len(artifact.data),
    )
    return artifact
