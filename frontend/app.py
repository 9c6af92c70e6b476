"""Main Streamlit app entry point -- the lesson sandbox.

One page per curriculum module showing:
- Sidebar: custom RPC endpoint, focus address, wallet connection, quick info
- Lesson header with previous/next navigation
- Explanation, tip and the reference snippet for the current config
- Practice area that raises a toast once the typed code matches
- Console with the output of the last run

Launch with: streamlit run frontend/app.py
"""

import sys
import asyncio
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import streamlit as st

from academy.models import RunStatus
from frontend.components.console import render_console
from frontend.components.lesson_card import render_lesson_body, render_lesson_header
from frontend.session_state import get_session

st.set_page_config(
    page_title="Web3 Academy",
    layout="wide",
    initial_sidebar_state="expanded",
)

session = get_session()


# ==========================================================================
# CALLBACKS
# ==========================================================================
# Widget state may only be written before the widget renders, so everything
# that changes an input's value runs as an on_click / on_change callback.

def _sync_practice_widget() -> None:
    st.session_state["practice_text"] = session.practice.text


def _on_endpoint_change() -> None:
    session.set_endpoint(st.session_state["endpoint_input"].strip())


def _on_focus_change() -> None:
    session.set_focus_address(st.session_state["focus_input"].strip())


def _on_connect_wallet() -> None:
    try:
        connection = asyncio.run(session.connect_wallet())
    except Exception as e:
        st.session_state["flash"] = ("error", f"Wallet connection failed: {e}")
        return
    if connection.connected:
        st.session_state["focus_input"] = session.config.focus_address
        st.session_state["flash"] = (
            "success", f"Wallet connected: {connection.accounts[0][:6]}..."
        )
    else:
        st.session_state["flash"] = ("error", connection.error or "Wallet connection failed")


def _on_navigate(direction: int) -> None:
    moved = session.advance() if direction > 0 else session.retreat()
    if moved:
        _sync_practice_widget()


def _on_practice_change() -> None:
    if session.type_practice(st.session_state["practice_text"]):
        st.toast("Code matches the reference. Well done!")


def _on_copy_solution() -> None:
    session.fill_solution()
    _sync_practice_widget()


def _on_run() -> None:
    try:
        outcome = asyncio.run(session.run_current())
    except Exception as e:
        st.session_state["flash"] = ("error", f"Run failed: {e}")
        return
    if outcome.status == RunStatus.REJECTED:
        st.session_state["flash"] = ("warning", "A run is already in progress.")


def _on_clear() -> None:
    session.clear_logs()


# --- ?module=<id> routing ---
requested = st.query_params.get("module")
if requested and requested != st.session_state.get("routed_module"):
    st.session_state["routed_module"] = requested
    before = session.cursor.index
    if not session.select(requested):
        st.session_state["flash"] = ("warning", f"Unknown module '{requested}'")
    elif session.cursor.index != before:
        _sync_practice_widget()

module = session.current_module()
st.query_params["module"] = module.id
st.session_state["routed_module"] = module.id


# --- Sidebar ---
st.session_state.setdefault("endpoint_input", session.config.custom_endpoint)
st.session_state.setdefault("focus_input", session.config.focus_address)

with st.sidebar:
    st.header("Configuration")
    st.text_input(
        "Custom RPC URL",
        key="endpoint_input",
        placeholder="https://mainnet.infura.io/v3/...",
        on_change=_on_endpoint_change,
        help="Leave empty to use the wallet or the public fallback nodes",
    )
    st.text_input(
        "Target Address",
        key="focus_input",
        placeholder="0x...",
        on_change=_on_focus_change,
    )
    st.button(
        "Connect Wallet",
        on_click=_on_connect_wallet,
        use_container_width=True,
        disabled=session.wallet is None,
        help=None if session.wallet else "Set ACADEMY_WALLET_URL to enable",
    )

    st.markdown("---")
    st.header("Quick Info")
    wallet_label = f"`{session.wallet.url}`" if session.wallet else ":red[Not configured]"
    st.markdown(f"**Wallet:** {wallet_label}")
    endpoint_label = ":green[Set]" if session.config.custom_endpoint else ":orange[Fallback]"
    st.markdown(f"**RPC:** {endpoint_label}")
    st.markdown("---")
    st.caption(f"{session.registry.name} v{session.registry.version}")


# --- Flash messages from callbacks ---
flash = st.session_state.pop("flash", None)
if flash:
    level, text = flash
    getattr(st, level)(text)


# ==========================================================================
# LESSON
# ==========================================================================

count = session.registry.count()
render_lesson_header(module, count)

nav_prev, _, nav_next = st.columns([1, 4, 1])
with nav_prev:
    st.button("Previous", on_click=_on_navigate, args=(-1,),
              disabled=session.cursor.at_start, use_container_width=True)
with nav_next:
    st.button("Next", on_click=_on_navigate, args=(1,),
              disabled=session.cursor.at_end, use_container_width=True)

st.progress((module.order + 1) / count)

col_lesson, col_practice = st.columns(2)

with col_lesson:
    render_lesson_body(module, session.reference_code())
    b1, b2 = st.columns(2)
    with b1:
        st.button("Copy Solution", on_click=_on_copy_solution, use_container_width=True)
    with b2:
        st.button("Run Script", type="primary", on_click=_on_run,
                  disabled=session.runner.busy, use_container_width=True)

with col_practice:
    st.subheader("Practice")
    if "practice_text" not in st.session_state:
        _sync_practice_widget()
    st.text_area(
        "Type the reference code here",
        key="practice_text",
        height=260,
        on_change=_on_practice_change,
    )
    if session.practice.matched:
        st.success("Matches the reference snippet.")


# ==========================================================================
# CONSOLE
# ==========================================================================

st.markdown("---")
head, clear = st.columns([5, 1])
with head:
    st.subheader("Console")
with clear:
    st.button("Clear", on_click=_on_clear, use_container_width=True)

render_console(session.log.entries())
