"""Console component: the run's Log Stream as a chronological list."""

from __future__ import annotations

from typing import List

import streamlit as st

from academy.models import LogEntry, LogKind

KIND_STYLE = {
    LogKind.INFO: ("blue", "INFO"),
    LogKind.SUCCESS: ("green", "OK"),
    LogKind.ERROR: ("red", "ERROR"),
    LogKind.OUTPUT: ("gray", "OUT"),
}


def render_console(entries: List[LogEntry]) -> None:
    """Render log entries, oldest first."""
    if not entries:
        st.caption("Console is empty. Press **Run Script** to see output here.")
        return

    for entry in entries:
        color, label = KIND_STYLE.get(entry.kind, ("gray", entry.kind.value.upper()))
        timestamp = entry.timestamp
        time_part = timestamp.split("T")[-1][:8] if "T" in timestamp else timestamp
        message = entry.message.replace("`", "'")
        st.markdown(f"`{time_part}` :{color}[**[{label}]**] `{message}`")
