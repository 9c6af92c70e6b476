"""Lesson card component: header, explanation, tip and reference snippet."""

from __future__ import annotations

import streamlit as st

from academy.models import Module


def render_lesson_header(module: Module, count: int) -> None:
    st.caption(f"Step {module.order + 1} of {count}")
    st.title(module.title)
    st.markdown(f"*{module.short_description}*")


def render_lesson_body(module: Module, code: str) -> None:
    """Explanation, tip and the rendered reference snippet."""
    st.markdown(module.explanation)
    if module.tip:
        st.info(module.tip)
    st.code(code, language="python")
