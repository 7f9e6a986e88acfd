"""Single study block page with its dated task list"""

import uuid

import streamlit as st

from utils.api_client import ApiError, save_completion
from utils.helpers import TASK_TYPE_ICONS, WEEKDAY_OPTIONS, block_progress, group_tasks_by_date, parse_api_datetime


def show_study_block_page(api, block_id):
    try:
        block = api.get_study_block(block_id)
    except ApiError as e:
        st.error(e.message)
        return

    st.title(f"📖 {block['title']}")
    end = parse_api_datetime(block["endDate"]).strftime("%B %d, %Y")
    days = ", ".join(WEEKDAY_OPTIONS.get(d, d) for d in block["daysOfWeek"])
    st.caption(f"Test on {end} · {block['totalHours']} h/day · {days}")

    progress = block_progress(block)
    st.progress(progress["percent"] / 100, text=f"{progress['percent']}% complete")

    if not block["tasks"]:
        _show_generate_button(api, block)
        return

    for day, tasks in group_tasks_by_date(block["tasks"]).items():
        st.markdown(f"#### {day}")
        for task in tasks:
            col1, col2 = st.columns([5, 1])
            with col1:
                checked = st.checkbox(
                    f"{TASK_TYPE_ICONS.get(task['taskType'], '')} {task['title']}",
                    value=task["completed"],
                    key=f"block_task_{task['id']}",
                    help=task.get("description")
                )
            with col2:
                if st.button("Study", key=f"study_{task['id']}"):
                    st.session_state.selected_task_id = task["id"]
                    st.session_state.page = "task"
                    st.rerun()
            if checked != task["completed"]:
                error = save_completion(api, task["id"], checked)
                if error:
                    st.error(f"Could not update task: {error}")
                else:
                    st.rerun()


def _show_generate_button(api, block):
    st.warning("No tasks yet. Generate a plan from the block's content.")
    # one key per page visit so a double click replays instead of duplicating
    key_name = f"plan_key_{block['id']}"
    if key_name not in st.session_state:
        st.session_state[key_name] = uuid.uuid4().hex

    if st.button("Generate Study Plan", type="primary"):
        with st.spinner("Generating plan with AI... This may take a moment..."):
            try:
                tasks = api.generate_plan(block["id"], idempotency_key=st.session_state[key_name])
            except ApiError as e:
                st.error(e.message)
                return
        st.success(f"✓ {len(tasks)} tasks created")
        st.rerun()
