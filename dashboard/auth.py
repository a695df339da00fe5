from __future__ import annotations

import os

import streamlit as st

ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")
DEFAULT_STATE_DIR = os.path.join(os.path.dirname(__file__), "..", ".habit_state")

ENV_FALLBACK_KEYS = {
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "BACKEND_SESSION_SECRET"): "BACKEND_SESSION_SECRET",
    ("app", "USER_ID"): "DASHBOARD_USER_ID",
    ("app", "STATE_DIR"): "DASHBOARD_STATE_DIR",
}


def load_local_env():
    if not os.path.exists(ENV_PATH):
        return
    with open(ENV_PATH, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except (FileNotFoundError, KeyError, AttributeError):
        return default
    return current


def get_current_user_id():
    user = getattr(st, "user", None)
    if user is not None and getattr(user, "is_logged_in", False):
        email = str(getattr(user, "email", "") or "").strip().lower()
        if email:
            return email
    return str(get_secret(("app", "USER_ID"), "") or "").strip()


def get_state_dir():
    return str(get_secret(("app", "STATE_DIR"), "") or "").strip() or DEFAULT_STATE_DIR


def require_user():
    user_id = get_current_user_id()
    if not user_id:
        st.markdown("<div class='section-title'>Sign-in required</div>", unsafe_allow_html=True)
        st.markdown("Set `DASHBOARD_USER_ID` or sign in before using the dashboard.")
        st.stop()
    return user_id
