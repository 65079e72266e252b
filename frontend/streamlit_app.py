"""A Streamlit login screen for the PrivateConnect login service."""

import streamlit as st
import requests

# --- Page and API Configuration ---
st.set_page_config(page_title="PrivateConnect", page_icon="🔒", layout="centered")
API_BASE = "http://localhost:8000"


def get_api_session():
    """Gets the requests.Session object from streamlit's session state."""
    if "api_session" not in st.session_state:
        st.session_state.api_session = requests.Session()
    return st.session_state.api_session


def refresh_auth_status():
    """Refreshes the authentication status from the service."""
    try:
        response = get_api_session().get(f"{API_BASE}/auth/status", timeout=5)
        if response.status_code == 200:
            st.session_state.auth_status = response.json()
        else:
            st.session_state.auth_status = {
                "authenticated": False,
                "error": "Failed to get status",
            }
    except requests.exceptions.RequestException as e:
        st.session_state.auth_status = {"authenticated": False, "error": str(e)}


# --- Service Health Check ---
try:
    health_response = get_api_session().get(f"{API_BASE}/health", timeout=3)
    if (
        health_response.status_code != 200
        or health_response.json().get("status") != "healthy"
    ):
        st.error("Login service is unhealthy. Please restart the backend.", icon="🚨")
        st.stop()
except requests.exceptions.ConnectionError:
    st.error(
        "Could not connect to the login service. Please ensure it is running.",
        icon="🚨",
    )
    st.stop()

# --- Initialize Session State ---
if "auth_status" not in st.session_state:
    refresh_auth_status()
if "form_errors" not in st.session_state:
    st.session_state.form_errors = {}

status = st.session_state.auth_status

# --- Authenticated landing ---
if status.get("authenticated"):
    st.title("Welcome to PrivateConnect")
    st.success(f"Signed in as {status.get('email', 'N/A')}", icon="✅")
    if st.button("Logout", type="primary"):
        get_api_session().post(f"{API_BASE}/auth/logout", timeout=10)
        st.toast("Logout successful!")
        st.session_state.form_errors = {}
        refresh_auth_status()
        st.rerun()
    st.stop()

# --- Login form ---
st.title("Welcome Back")
st.caption("Sign in to your PrivateConnect account")
errors = st.session_state.form_errors

with st.form("login_form"):
    email = st.text_input("Email", placeholder="your@email.com")
    if errors.get("email"):
        st.error(errors["email"])
    password = st.text_input("Password", type="password")
    if errors.get("password"):
        st.error(errors["password"])
    remember_me = st.checkbox("Remember me")
    submitted = st.form_submit_button("Sign In", use_container_width=True)

if errors.get("submit"):
    st.error(errors["submit"])

if submitted:
    with st.spinner("Signing in..."):
        try:
            response = get_api_session().post(
                f"{API_BASE}/auth/login",
                json={"email": email, "password": password, "remember_me": remember_me},
                timeout=30,
            )
            if response.status_code == 409:
                st.session_state.form_errors = {}
                st.info("A sign-in is already in progress.")
            else:
                data = response.json()
                st.session_state.form_errors = data.get("errors", {})
                if data.get("success"):
                    st.toast("Login successful!", icon="🎉")
        except requests.exceptions.RequestException as e:
            st.session_state.form_errors = {"submit": f"Error during login: {e}"}
    refresh_auth_status()
    st.rerun()
