"""Login / registration page"""

import streamlit as st

from utils.api_client import ApiError


def show_login_page(api):
    """Show login and registration forms; stores the session token on success"""
    st.title("📚 Study Planner")

    login_tab, register_tab = st.tabs(["Sign in", "Create account"])

    with login_tab:
        with st.form("login_form"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign in", type="primary")

        if submitted:
            try:
                user = api.login(email, password)
            except ApiError as e:
                st.error(e.message)
            else:
                st.session_state.token = api.token
                st.session_state.user = user
                st.rerun()

    with register_tab:
        with st.form("register_form"):
            name = st.text_input("Name")
            email = st.text_input("Email", key="register_email")
            password = st.text_input("Password", type="password", key="register_password")
            submitted = st.form_submit_button("Create account")

        if submitted:
            try:
                api.register(email, password, name or None)
            except ApiError as e:
                st.error(e.message)
            else:
                st.success("Account created. You can sign in now.")
