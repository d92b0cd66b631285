import os
from pathlib import Path

import streamlit as st
from dotenv import dotenv_values, load_dotenv

from shot2table.logging_config import logger

BASE_DIR = Path(__file__).resolve().parent


def _load_environment() -> None:
    repo_env = BASE_DIR / ".env"
    if not repo_env.exists():
        return
    load_dotenv(dotenv_path=repo_env, override=True)
    # Ensure variables are available even if the process started without them.
    for key, value in dotenv_values(repo_env).items():
        if value is not None:
            os.environ.setdefault(key, value)


_load_environment()

st.set_page_config(
    page_title="Screenshot to Table",
    page_icon="📋",
    layout="wide",
)

NAV_PAGES = [
    {
        "id": "screenshot_table",
        "path": "pages/screenshot_table.py",
        "title": "Screenshot to Table",
        "description": "Turn a table screenshot into an editable, exportable grid",
        "icon": "📋",
    },
    {
        "id": "system_info",
        "path": "pages/system_info.py",
        "title": "System Info",
        "description": "Environment diagnostics",
        "icon": "🔧",
    },
]


@st.cache_resource
def get_app_settings() -> dict:
    """Cache application settings."""
    return {
        "app_name": "Screenshot to Table",
        "version": "1.0.0",
        "pages_list": list(NAV_PAGES),
    }


def _init_session_state() -> None:
    if "app_settings" not in st.session_state:
        st.session_state.app_settings = get_app_settings()


def _build_navigation_pages() -> list[st.Page]:
    return [
        st.Page(page["path"], title=page["title"], icon=page["icon"], default=index == 0)
        for index, page in enumerate(NAV_PAGES)
    ]


def validate_environment() -> list[str]:
    """Validate that the application environment is properly set up."""
    issues: list[str] = []

    for page_info in NAV_PAGES:
        page_path = BASE_DIR / page_info["path"]
        if not page_path.exists():
            issues.append(f"Missing page file: {page_info['path']}")

    if issues:
        for issue in issues:
            logger.warning("Environment issue: %s", issue)
    else:
        logger.info("Environment validation passed.")

    return issues


def main() -> None:
    """Main application function with Streamlit navigation."""
    _init_session_state()
    app_settings = st.session_state.app_settings

    logger.info("Starting app: %s v%s", app_settings["app_name"], app_settings["version"])

    issues = validate_environment()
    if issues:
        logger.error("Environment issues detected: %s", issues)
        st.error("⚠️ Environment Issues Detected. See terminal logs for details.")
        return

    nav = st.navigation(_build_navigation_pages(), position="sidebar", expanded=True)
    nav.run()


if __name__ == "__main__":
    main()
