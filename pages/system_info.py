import os
from datetime import datetime

import streamlit as st

from shot2table.logging_config import REPO_DIR, logger

app_settings = st.session_state.get("app_settings", {})
app_version = app_settings.get("version", "unknown")

st.title("🔧 System Information")

st.write(f"**App Version:** {app_version}")
st.write(f"**Current Time:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
st.write(f"**Working Directory:** {os.getcwd()}")

repo_env = REPO_DIR / ".env"
st.write("**Configuration sources:**")
st.write(f"{'✅' if repo_env.exists() else '❌'} .env ({repo_env})")
st.write(f"{'✅' if (REPO_DIR / 'logging.conf').exists() else '❌'} logging.conf")
for key in ("SHOT2TABLE_API_KEY", "OPENAI_API_KEY"):
    st.write(f"{'✅' if os.getenv(key) else '❌'} {key} (length {len(os.getenv(key) or '')})")

table_session = st.session_state.get("table_session")
if table_session is not None:
    st.write("**Active session:**")
    st.write(f"Endpoint: `{table_session.config.endpoint}`")
    st.write(f"Model: `{table_session.config.model}`")
    st.write(
        f"Table: {len(table_session.table.headers)} columns, {len(table_session.table.rows)} rows"
    )

logger.debug("Session state keys: %s", list(st.session_state.keys()))
st.caption("Session state keys logged to terminal.")
