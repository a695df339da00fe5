import logging

import streamlit as st

from dashboard.auth import get_secret, get_state_dir, load_local_env, require_user
from dashboard.context import DashboardContext
from dashboard.data import api_client
from dashboard.data.repositories import HabitStore
from dashboard.dates import today_utc
from dashboard.errors import HabitError
from dashboard.header import render_global_header
from dashboard.logging_config import configure_logging
from dashboard.router import render_router
from dashboard.services.habit_board import HabitBoard
from dashboard.services.tag_manager import TagManager
from dashboard.state.local_state import JsonFileStorage, LocalState, storage_path_for
from dashboard.theme import inject_theme_css

logger = logging.getLogger("dashboard")


def _build_context(user_id):
    cache_key = f"ctx.{user_id}"
    ctx = st.session_state.get(cache_key)
    if ctx is None:
        storage = JsonFileStorage(storage_path_for(get_state_dir(), user_id))
        local_state = LocalState(storage).load()
        board = HabitBoard(HabitStore()).load()
        tags = TagManager(board, local_state)
        tags.reconcile()
        ctx = DashboardContext(user_id=user_id, board=board, local_state=local_state, tags=tags, today=today_utc())
        st.session_state[cache_key] = ctx
    ctx.today = today_utc()
    return ctx


def main():
    load_local_env()
    configure_logging()
    st.set_page_config(page_title="Habit Dashboard", page_icon="🔥", layout="wide")
    inject_theme_css()

    user_id = require_user()
    api_client.configure(get_secret, lambda: user_id)
    if not api_client.is_enabled():
        st.error("Set API_BASE_URL and BACKEND_SESSION_SECRET to connect to the habit store.")
        st.stop()

    try:
        ctx = _build_context(user_id)
    except HabitError as exc:
        logger.exception("Could not load habits")
        st.error(f"Could not load your habits: {exc}")
        st.stop()

    st.title("Habit Dashboard")
    render_global_header(ctx)
    render_router(ctx)


main()
