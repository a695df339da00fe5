import streamlit as st

from dashboard.tabs.calendar_tab import render_calendar_tab
from dashboard.tabs.habits_tab import render_habits_tab
from dashboard.tabs.stats_tab import render_stats_tab
from dashboard.tabs.tags_tab import render_tags_tab


TAB_OPTIONS = [
    "Habits",
    "Calendar",
    "Statistics",
    "Tags",
]


def render_router(ctx):
    active = st.session_state.get("ui.active_tab", TAB_OPTIONS[0])
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
    )

    if active == "Calendar":
        return _render_calendar(ctx)

    if active == "Statistics":
        return _render_stats(ctx)

    if active == "Tags":
        return _render_tags(ctx)

    return _render_habits(ctx)


@st.fragment
def _render_habits(ctx):
    render_habits_tab(ctx)


@st.fragment
def _render_calendar(ctx):
    render_calendar_tab(ctx)


@st.fragment
def _render_stats(ctx):
    render_stats_tab(ctx)


@st.fragment
def _render_tags(ctx):
    render_tags_tab(ctx)
