from datetime import date

import streamlit as st

from dashboard.dates import month_grid, shift_month, weekday_labels
from dashboard.errors import HabitError
from dashboard.overview import month_days, selected_day_habits
from dashboard.state import session_slices
from dashboard.visualizations import month_heatmap_figure


def _current_view(today):
    today_day = date.fromisoformat(today)
    year = session_slices.get_value("calendar", "view_year", today_day.year)
    month = session_slices.get_value("calendar", "view_month", today_day.month)
    return year, month


def _shift_view(year, month, delta):
    next_year, next_month = shift_month(year, month, delta)
    session_slices.set_value("calendar", "view_year", next_year)
    session_slices.set_value("calendar", "view_month", next_month)


def _toggle_on_date(ctx, habit_id, day_iso):
    try:
        ctx.board.toggle(habit_id, day_iso)
    except HabitError as exc:
        st.warning(str(exc))


def render_calendar_tab(ctx):
    board = ctx.board
    year, month = _current_view(ctx.today)
    grid = month_grid(year, month)

    st.markdown("<div class='section-title'>Calendar</div>", unsafe_allow_html=True)
    nav = st.columns([0.5, 4, 0.5])
    nav[0].button("‹", key="calendar.prev", on_click=_shift_view, args=(year, month, -1), type="tertiary")
    nav[1].markdown(f"<div class='small-label'>{grid.label}</div>", unsafe_allow_html=True)
    nav[2].button("›", key="calendar.next", on_click=_shift_view, args=(year, month, 1), type="tertiary")

    cells = month_days(board.habits, board.logs, year, month, ctx.today)
    st.plotly_chart(month_heatmap_figure(cells, year, month), use_container_width=True)

    header = st.columns(7)
    for idx, label in enumerate(weekday_labels()):
        header[idx].caption(label)

    options = [cell.iso for cell in cells if not cell.is_future]
    if not options:
        st.caption("Nothing to review for this month yet.")
        return
    default_iso = ctx.today if ctx.today in options else options[-1]
    selected = st.selectbox("Day", options, index=options.index(default_iso), key=f"calendar.day.{year}.{month}")
    cell = next(item for item in cells if item.iso == selected)
    st.caption(f"{cell.completed_count}/{cell.active_count} habits completed")
    for habit, done in selected_day_habits(board.habits, board.logs, selected):
        st.checkbox(
            habit.name,
            value=done,
            key=f"calendar.done.{selected}.{habit.id}",
            on_change=_toggle_on_date,
            args=(ctx, habit.id, selected),
        )
