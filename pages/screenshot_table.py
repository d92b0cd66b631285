import os

import streamlit as st

from shot2table import grid
from shot2table.config import CONFIG_PRESETS, AIConfig
from shot2table.errors import ConfigMissingError, Shot2TableError
from shot2table.exporter import ExportFormat
from shot2table.image_input import ALLOWED_EXTENSIONS, read_image_upload
from shot2table.logging_config import logger
from shot2table.session import TableSession

DEFAULT_EXPORT_NAME = "screenshot-table"


def _get_api_key() -> str:
    try:
        secrets_key = st.secrets.get("SHOT2TABLE_API_KEY", None) or st.secrets.get(
            "OPENAI_API_KEY", None
        )
    except Exception:
        secrets_key = None

    return (
        secrets_key
        or os.getenv("SHOT2TABLE_API_KEY")
        or os.getenv("OPENAI_API_KEY")
        or ""
    ).strip()


def _get_session() -> TableSession:
    if "table_session" not in st.session_state:
        st.session_state["table_session"] = TableSession(config=AIConfig(api_key=_get_api_key()))
    return st.session_state["table_session"]


def _grid_version() -> int:
    return st.session_state.get("grid_version", 0)


def _bump_grid_version() -> None:
    # New widget keys drop stale editor state after structural changes.
    st.session_state["grid_version"] = _grid_version() + 1


def _set_error(message: str) -> None:
    st.session_state["last_error"] = message


def _apply_and_rerun(operation, *args) -> None:  # type: ignore[no-untyped-def]
    session.apply(operation, *args)
    _bump_grid_version()
    st.rerun()


session = _get_session()

st.title("📋 Screenshot to Table")
st.caption(
    "Upload a screenshot, let the AI recognise the table, edit it and export it as Excel or CSV."
)

with st.sidebar:
    with st.expander("⚙️ AI settings", expanded=not session.config.has_api_key):
        with st.form("ai_config_form"):
            endpoint = st.text_input("API endpoint", value=session.config.endpoint)
            api_key = st.text_input("API key", value=session.config.api_key, type="password")
            model = st.text_input("Model", value=session.config.model)
            timeout_seconds = st.number_input(
                "Timeout (seconds)",
                min_value=5.0,
                max_value=600.0,
                value=float(session.config.timeout_seconds),
                step=5.0,
            )
            if st.form_submit_button("Save settings", type="primary"):
                session.update_config(
                    endpoint=endpoint.strip(),
                    api_key=api_key.strip(),
                    model=model.strip(),
                    timeout_seconds=float(timeout_seconds),
                )
                logger.info(
                    "AI settings saved endpoint=%s model=%s has_api_key=%s",
                    session.config.endpoint,
                    session.config.model,
                    session.config.has_api_key,
                )
                st.success("Settings saved.")

        st.caption("Presets (endpoint + model, key is kept)")
        preset_cols = st.columns(len(CONFIG_PRESETS))
        for col, preset_name in zip(preset_cols, CONFIG_PRESETS):
            with col:
                if st.button(preset_name, key=f"preset_{preset_name}", width="stretch"):
                    session.apply_preset(preset_name)
                    st.rerun()

    with st.expander("🧹 Session reset", expanded=False):
        if st.button("Clear table"):
            session.reset()
            _bump_grid_version()
            st.rerun()

last_error = st.session_state.get("last_error")
if last_error:
    error_col, dismiss_col = st.columns([6, 1], vertical_alignment="center")
    with error_col:
        st.error(last_error)
    with dismiss_col:
        if st.button("Dismiss", width="stretch"):
            st.session_state.pop("last_error", None)
            st.rerun()

uploaded_file = st.file_uploader(
    "Screenshot",
    type=list(ALLOWED_EXTENSIONS),
    accept_multiple_files=False,
    disabled=session.busy,
    help="A single image: " + ", ".join(ALLOWED_EXTENSIONS),
)
if uploaded_file is not None:
    st.image(uploaded_file, caption=uploaded_file.name, width=480)

analyze_clicked = st.button(
    "Analyze screenshot",
    type="primary",
    disabled=uploaded_file is None or session.busy,
)

if analyze_clicked and uploaded_file is not None:
    with st.spinner("AI is analyzing the screenshot…"):
        try:
            image = read_image_upload(uploaded_file.name, uploaded_file.getvalue())
            table = session.analyze(image)
        except ConfigMissingError as exc:
            logger.warning("Screenshot analysis blocked: %s", exc)
            _set_error(f"{exc} Open '⚙️ AI settings' in the sidebar.")
            table = None
        except Shot2TableError as exc:
            logger.warning("Screenshot analysis failed file=%s error=%s", uploaded_file.name, exc)
            _set_error(str(exc))
            table = None
    if table is None:
        # Show the error banner at the top of the page.
        st.rerun()
    _bump_grid_version()
    if last_error:
        st.session_state.pop("last_error", None)
        st.rerun()
    if table.is_empty():
        st.warning("No table was found in the screenshot.")
    else:
        st.success(f"Recognised {len(table.headers)} columns and {len(table.rows)} rows.")

st.divider()

if session.table.is_empty():
    st.info("Waiting for table data. Upload a screenshot and the AI will build an editable table.")
    st.stop()

st.subheader("✏️ Table data")
st.caption("Edit headers above the grid, cells inside it, and use the controls below to manage rows and columns.")

version = _grid_version()
table = session.table

if table.headers:
    header_cols = st.columns(len(table.headers))
    for index, (col, header) in enumerate(zip(header_cols, table.headers)):
        with col:
            new_header = st.text_input(
                f"Column {index + 1}",
                value=header,
                key=f"header_{version}_{index}",
            )
        if new_header != header:
            session.apply(grid.set_header, index, new_header)

column_config = {
    column_id: st.column_config.TextColumn(label or " ")
    for column_id, label in zip(grid.column_ids(session.table), grid.column_labels(session.table))
}
edited_frame = st.data_editor(
    grid.to_frame(session.table),
    column_config=column_config,
    num_rows="fixed",
    width="stretch",
    key=f"grid_editor_{version}",
)
for row_index, col_index, value in grid.changed_cells(session.table, edited_frame):
    session.apply(grid.set_cell, row_index, col_index, value)

table = session.table
row_panel, column_panel = st.columns(2)

with row_panel:
    st.markdown("**Rows**")
    row_options = list(range(len(table.rows)))
    selected_row = st.selectbox(
        "Row",
        row_options,
        format_func=lambda index: f"Row {index + 1}",
        key=f"row_select_{version}",
        disabled=not row_options,
    )
    if st.button("Insert row below", disabled=selected_row is None):
        _apply_and_rerun(grid.insert_row, selected_row)
    if st.button("Append row"):
        _apply_and_rerun(grid.insert_row)
    if st.button("Delete row", disabled=selected_row is None or len(table.rows) <= 1):
        _apply_and_rerun(grid.delete_row, selected_row)

with column_panel:
    st.markdown("**Columns**")
    column_options = list(range(len(table.headers)))
    selected_column = st.selectbox(
        "Column",
        column_options,
        format_func=lambda index: f"{index + 1}: {table.headers[index]}",
        key=f"column_select_{version}",
        disabled=not column_options,
    )
    if st.button("Insert column right", disabled=selected_column is None):
        _apply_and_rerun(grid.insert_column, selected_column)
    if st.button("Append column"):
        _apply_and_rerun(grid.insert_column)
    if st.button("Delete column", disabled=selected_column is None or len(table.headers) <= 1):
        _apply_and_rerun(grid.delete_column, selected_column)

    target_column = st.selectbox(
        "Move selected column to position",
        column_options,
        format_func=lambda index: str(index + 1),
        key=f"column_target_{version}",
        disabled=not column_options,
    )
    if st.button("Move column", disabled=selected_column is None or target_column is None):
        _apply_and_rerun(grid.move_column, selected_column, target_column)

st.divider()
st.subheader("⬇️ Export")
export_name = st.text_input("File name", value=DEFAULT_EXPORT_NAME).strip() or DEFAULT_EXPORT_NAME

xlsx_col, csv_col = st.columns(2)
try:
    xlsx_artifact = session.export(ExportFormat.SPREADSHEET, export_name)
    csv_artifact = session.export(ExportFormat.CSV, export_name)
except Shot2TableError as exc:
    logger.warning("Table export failed: %s", exc)
    st.error(f"Export failed: {exc}")
else:
    with xlsx_col:
        st.download_button(
            "Download Excel",
            data=xlsx_artifact.data,
            file_name=xlsx_artifact.file_name,
            mime=xlsx_artifact.mime_type,
            width="stretch",
        )
    with csv_col:
        st.download_button(
            "Download CSV",
            data=csv_artifact.data,
            file_name=csv_artifact.file_name,
            mime=csv_artifact.mime_type,
            width="stretch",
        )

with st.expander("JSON", expanded=False):
    st.json(session.table.model_dump())
