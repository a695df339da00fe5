import pandas as pd
import streamlit as st

from dashboard.dates import last_n_days
from dashboard.overview import completed_pairs, overview, recent_activity
from dashboard.state import session_slices
from dashboard.stats import habit_stats
from dashboard.visualizations import completion_bar_chart


def render_stats_tab(ctx):
    board = ctx.board
    today = ctx.today

    st.markdown("<div class='section-title'>Statistics</div>", unsafe_allow_html=True)
    summary = overview(board.habits, board.logs, today)
    cols = st.columns(4)
    cols[0].metric("Habits", summary.total)
    cols[1].metric("Done today", f"{summary.completed_today} ({summary.completion_today}%)")
    cols[2].metric("Longest streak", summary.longest_streak)
    cols[3].metric("Avg 7-day completion", f"{summary.avg_completion}%")

    if not board.habits:
        st.info("Add a habit to start tracking.")
        return

    stats = [
        (habit, habit_stats(habit, board.logs, session_slices.get_completion_setting(habit.id), today))
        for habit in board.habits
    ]
    st.plotly_chart(
        completion_bar_chart([habit.name for habit, _ in stats], [item.completion for _, item in stats]),
        use_container_width=True,
    )

    pairs = completed_pairs(board.logs)
    days = last_n_days(today, 7)
    strip = pd.DataFrame(
        [
            {"Habit": habit.name, **{label: "✔" if (habit.id, iso) in pairs else "" for iso, label in days}}
            for habit in board.habits
        ]
    )
    st.markdown("<div class='small-label'>Last 7 days</div>", unsafe_allow_html=True)
    st.dataframe(strip, hide_index=True, use_container_width=True)

    activity = recent_activity(board.logs, board.habits)
    if activity:
        st.markdown("<div class='small-label'>Recent activity</div>", unsafe_allow_html=True)
        frame = pd.DataFrame(activity)[["date", "habit_name"]].rename(columns={"date": "Date", "habit_name": "Habit"})
        st.dataframe(frame, hide_index=True, use_container_width=True)
