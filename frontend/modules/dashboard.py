"""Dashboard - today's tasks and study block progress"""

import streamlit as st

from utils.api_client import ApiError, save_completion
from utils.helpers import TASK_TYPE_ICONS, block_progress, days_remaining


def show_dashboard_page(api):
    st.title("🏠 Dashboard")

    _show_today_tasks(api)
    st.divider()
    _show_study_blocks(api)


def _show_today_tasks(api):
    st.subheader("Today's Tasks")
    try:
        tasks = api.tasks_today()
    except ApiError as e:
        st.error(f"Could not load today's tasks: {e.message}")
        return

    if not tasks:
        st.info("Nothing due today 🎉")
        return

    done = sum(1 for t in tasks if t["completed"])
    st.progress(done / len(tasks), text=f"{done}/{len(tasks)} done")

    for task in tasks:
        col1, col2 = st.columns([5, 1])
        with col1:
            checked = st.checkbox(
                f"{TASK_TYPE_ICONS.get(task['taskType'], '')} {task['title']}",
                value=task["completed"],
                key=f"today_{task['id']}",
                help=task.get("description")
            )
            st.caption(task["blockTitle"])
        with col2:
            if st.button("Study", key=f"study_today_{task['id']}"):
                st.session_state.selected_task_id = task["id"]
                st.session_state.page = "task"
                st.rerun()

        if checked != task["completed"]:
            error = save_completion(api, task["id"], checked)
            if error:
                st.error(f"Could not update task: {error}")
            else:
                st.rerun()


def _show_study_blocks(api):
    st.subheader("Study Blocks")
    try:
        blocks = api.list_study_blocks()
    except ApiError as e:
        st.error(f"Could not load study blocks: {e.message}")
        return

    if not blocks:
        st.info("No study blocks yet. Create one from the sidebar.")
        return

    for block in blocks:
        progress = block_progress(block)
        with st.container(border=True):
            col1, col2 = st.columns([4, 1])
            with col1:
                st.markdown(f"**{block['title']}**")
                st.caption(f"{days_remaining(block)} days until test · {block['status']}")
                st.progress(progress["percent"] / 100, text=f"{progress['completed']}/{progress['total']} tasks")
            with col2:
                if st.button("Open", key=f"open_block_{block['id']}"):
                    st.session_state.selected_block_id = block["id"]
                    st.session_state.page = "block"
                    st.rerun()
