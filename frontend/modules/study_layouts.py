"""Per-task study views: learn, practice and review layouts"""

import streamlit as st

from utils.api_client import ApiError
from utils.helpers import TASK_TYPE_ICONS


def show_task_page(api, task_id):
    try:
        task = api.get_task(task_id)
    except ApiError as e:
        st.error(e.message)
        return

    st.title(f"{TASK_TYPE_ICONS.get(task['taskType'], '')} {task['title']}")
    if task.get("description"):
        st.caption(task["description"])

    col1, col2 = st.columns([1, 1])
    with col1:
        label = "Regenerate materials" if task.get("summary") else "Generate materials"
        if st.button(label, type="primary"):
            with st.spinner("Creating study materials..."):
                try:
                    api.generate_summary(task_id)
                except ApiError as e:
                    st.error(e.message)
                    return
            st.rerun()
    with col2:
        completed = st.checkbox("Completed", value=task["completed"])
        if completed != task["completed"]:
            api.set_completed(task_id, completed)
            st.rerun()

    materials = task.get("materials")
    if not materials:
        st.info("No study materials yet.")
        return

    if task["taskType"] == "practice":
        show_practice_layout(task_id, materials)
    elif task["taskType"] == "review":
        show_review_layout(task_id, materials)
    else:
        show_learn_layout(materials)


def show_learn_layout(materials):
    main, side = st.columns([2, 1])
    with main:
        st.markdown(materials.get("overview", ""))
    with side:
        st.text_area("Quick Notes", placeholder="Take notes while you study...", height=150)
        st.markdown("##### Key Points")
        for i, point in enumerate(materials.get("key_points", []), 1):
            st.markdown(f"{i}. {point}")


def show_practice_layout(task_id, materials):
    problems = materials.get("problems", [])
    if not problems:
        st.info("No practice problems found in these materials.")
        return

    for i, problem in enumerate(problems, 1):
        with st.container(border=True):
            st.markdown(f"### Problem {i}")
            st.markdown(problem["question"])
            st.text_area("Your Solution:", key=f"answer_{task_id}_{i}", placeholder="Write your solution here...")
            with st.expander("Show Solution"):
                st.markdown(problem["solution"] or "_No solution provided._")


def show_review_layout(task_id, materials):
    summary_tab, cards_tab = st.tabs(["Summary", "Flashcards"])

    with summary_tab:
        main, side = st.columns([2, 1])
        with main:
            st.markdown(materials.get("summary", ""))
        with side:
            st.markdown("##### Quick Reference")
            for item in materials.get("quick_reference", []):
                st.markdown(f"• {item}")

    with cards_tab:
        _show_flashcards(task_id, materials.get("flashcards", []))


def _show_flashcards(task_id, cards):
    if not cards:
        st.info("No flashcards found in these materials.")
        return

    index_key = f"card_index_{task_id}"
    mastered_key = f"mastered_{task_id}"
    st.session_state.setdefault(index_key, 0)
    st.session_state.setdefault(mastered_key, set())

    index = st.session_state[index_key] % len(cards)
    card = cards[index]
    mastered = st.session_state[mastered_key]

    st.caption(f"Card {index + 1} of {len(cards)} · {len(mastered)} Mastered")
    st.markdown(f"**Question:** {card['question']}")
    with st.expander("Show Answer"):
        st.markdown(card["answer"])
        if st.checkbox("Mastered", value=index in mastered, key=f"mastered_{task_id}_{index}"):
            mastered.add(index)
        else:
            mastered.discard(index)

    prev_col, next_col = st.columns(2)
    with prev_col:
        if st.button("← Previous"):
            st.session_state[index_key] = (index - 1) % len(cards)
            st.rerun()
    with next_col:
        if st.button("Next →"):
            st.session_state[index_key] = (index + 1) % len(cards)
            st.rerun()
