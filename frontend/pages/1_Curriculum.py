"""Page 1: Curriculum overview with a jump button per module."""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import streamlit as st

from frontend.session_state import get_session

session = get_session()
registry = session.registry
current = session.current_module()

st.header("Curriculum")
st.markdown(f"**{registry.name}** v{registry.version} -- {registry.count()} modules")

st.dataframe(
    [
        {
            "Step": module.order + 1,
            "Module": module.title,
            "Topic": module.short_description,
            "Current": "<<" if module.id == current.id else "",
        }
        for module in registry
    ],
    hide_index=True,
    use_container_width=True,
)

st.markdown("---")
st.subheader("Jump to a module")

for module in registry:
    col_title, col_btn = st.columns([5, 1])
    with col_title:
        st.markdown(f"**{module.title}**  \n{module.short_description}")
    with col_btn:
        btn_type = "primary" if module.id == current.id else "secondary"
        if st.button("Open", key=f"open_{module.id}", type=btn_type, use_container_width=True):
            session.select(module.id)
            st.session_state["practice_text"] = session.practice.text
            st.query_params["module"] = module.id
            st.session_state["routed_module"] = module.id
            st.switch_page("app.py")
