import streamlit as st

from dashboard.overview import overview


def render_global_header(ctx):
    summary = overview(ctx.board.habits, ctx.board.logs, ctx.today)
    st.markdown("<div class='sticky-header-wrap'>", unsafe_allow_html=True)
    st.markdown(f"<div class='small-label'>Today • {ctx.today} (UTC)</div>", unsafe_allow_html=True)
    if summary.total == 0:
        st.caption("No habits yet. Add one to start a streak.")
    elif summary.completed_today == summary.total:
        st.caption(f"All {summary.total} habits done today. 🔥 Longest streak: {summary.longest_streak} days.")
    else:
        remaining = summary.total - summary.completed_today
        st.caption(f"{summary.completed_today}/{summary.total} done today, {remaining} to go. Log today to keep the streak going.")
    st.markdown("</div>", unsafe_allow_html=True)
