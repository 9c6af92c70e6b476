"""Per-browser-session sandbox state, shared by the app and its pages."""

import streamlit as st

from academy.registry import ModuleRegistry, load_registry
from academy.session import Session
from academy.settings import AppSettings, configure_logging, detect_wallet


@st.cache_resource
def _registry() -> ModuleRegistry:
    return load_registry()


def get_session() -> Session:
    """The Session for this browser tab, created on first access."""
    if "academy_session" not in st.session_state:
        settings = AppSettings.from_env()
        configure_logging(settings.log_level)
        st.session_state["academy_session"] = Session(
            _registry(), settings, detect_wallet(settings)
        )
    return st.session_state["academy_session"]
