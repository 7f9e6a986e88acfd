"""Study Planner - Main application file"""

import streamlit as st
import sys
import os

# Add parent directory to path to import backend
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from backend.config import settings

from utils.api_client import ApiError, session_client
from utils.file_parser import TextExtractor

# Import page modules
from modules.login import show_login_page
from modules.dashboard import show_dashboard_page
from modules.create_study_block import show_create_study_block_page
from modules.study_block import show_study_block_page
from modules.study_layouts import show_task_page

# ===================================================================
# PAGE CONFIGURATION & SESSION STATE
# ===================================================================

st.set_page_config(
    page_title="Study Planner",
    page_icon="📚",
    layout="wide"
)

for key, default in [("token", None), ("user", None), ("page", "dashboard"),
                     ("selected_block_id", None), ("selected_task_id", None)]:
    if key not in st.session_state:
        st.session_state[key] = default

api = session_client(st.session_state, settings.api_base_url)

# ===================================================================
# SESSION CHECK
# ===================================================================

if st.session_state.token and st.session_state.user is None:
    try:
        st.session_state.user = api.current_user()
    except ApiError:
        st.session_state.token = None

if not st.session_state.token:
    show_login_page(api)
    st.stop()

# ===================================================================
# SIDEBAR NAVIGATION
# ===================================================================

st.sidebar.title("📚 Study Planner")
user = st.session_state.user or {}
st.sidebar.markdown(f"**Signed in as:** {user.get('name') or user.get('email', '')}")
st.sidebar.divider()

if st.sidebar.button("🏠 Dashboard", use_container_width=True):
    st.session_state.page = "dashboard"
if st.sidebar.button("➕ New Study Block", use_container_width=True):
    st.session_state.page = "create"

st.sidebar.divider()
if st.sidebar.button("Sign out"):
    try:
        api.logout()
    except ApiError:
        pass
    st.session_state.token = None
    st.session_state.user = None
    st.rerun()

# ===================================================================
# PAGE ROUTING
# ===================================================================

page = st.session_state.page

if page == "create":
    show_create_study_block_page(api, TextExtractor())

elif page == "block" and st.session_state.selected_block_id:
    if st.button("← Back to dashboard"):
        st.session_state.page = "dashboard"
        st.rerun()
    show_study_block_page(api, st.session_state.selected_block_id)

elif page == "task" and st.session_state.selected_task_id:
    if st.button("← Back"):
        st.session_state.page = "block" if st.session_state.selected_block_id else "dashboard"
        st.rerun()
    show_task_page(api, st.session_state.selected_task_id)

else:
    show_dashboard_page(api)

# ===================================================================
# FOOTER
# ===================================================================

st.sidebar.caption("Study Planner v1.0")
st.sidebar.caption(f"AI provider: {settings.ai_provider}")
