"""Create study block page"""

from datetime import date, timedelta

import streamlit as st

from utils.api_client import ApiError
from utils.file_parser import UnsupportedFileType
from utils.helpers import WEEKDAY_OPTIONS


def show_create_study_block_page(api, extractor):
    """
    Args:
        api: StudyPlannerClient
        extractor: TextExtractor used to read uploaded study material
    """
    st.title("➕ New Study Block")

    with st.form("create_block_form"):
        title = st.text_input("Course / exam", placeholder="e.g., Linear Algebra midterm")
        test_date = st.date_input("Test date", value=date.today() + timedelta(days=14), min_value=date.today())
        hours_per_day = st.number_input("Hours per day", min_value=0.5, max_value=24.0, value=2.0, step=0.5)
        selected_days = st.multiselect(
            "Study days",
            options=list(WEEKDAY_OPTIONS.keys()),
            default=["mon", "tue", "wed", "thu", "fri"],
            format_func=WEEKDAY_OPTIONS.get
        )
        uploaded = st.file_uploader("Study material (PDF or text)", type=["pdf", "txt"])
        pasted = st.text_area("...or paste content", height=200)
        generate_now = st.checkbox("Generate study plan right away", value=True)

        submitted = st.form_submit_button("Create", type="primary")

    if not submitted:
        return

    if not title or not selected_days:
        st.warning("Please enter a title and pick at least one study day.")
        return

    content = pasted
    if uploaded is not None:
        try:
            content = extractor.extract(uploaded.name, uploaded.type, uploaded.getvalue())
        except UnsupportedFileType as e:
            st.error(str(e))
            return

    try:
        block = api.create_study_block(title, test_date, hours_per_day, selected_days, content)
        if generate_now:
            with st.spinner("Generating plan with AI... This may take a moment..."):
                api.generate_plan(block["id"], idempotency_key=f"create-{block['id']}")
    except ApiError as e:
        st.error(e.message)
        return

    st.session_state.selected_block_id = block["id"]
    st.session_state.page = "block"
    st.rerun()
