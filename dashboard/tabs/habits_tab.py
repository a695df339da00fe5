import html

import streamlit as st

from dashboard.colors import color_for
from dashboard.constants import CATEGORY_FILTER_ALL, CATEGORY_FILTER_UNCATEGORIZED, STATUS_FILTERS
from dashboard.errors import HabitError
from dashboard.overview import (
    all_completed_today,
    completed_today_ids,
    filtered_habits,
    move_habit,
    ordered_habits,
    reconcile_order,
)
from dashboard.state import session_slices
from dashboard.stats import days_since_creation, habit_stats
from dashboard.tags import add_tag, category_options


def _tag_chips(tags, color_map):
    chips = []
    for tag in tags:
        color = color_for(tag, color_map)
        chips.append(
            f"<span class='tag-chip' style='background:{color}'>{html.escape(tag)}</span>"
        )
    return "".join(chips)


def _run(action, *args):
    try:
        action(*args)
    except HabitError as exc:
        st.warning(str(exc))
        return False
    return True


def _toggle(ctx, habit_id):
    _run(ctx.board.toggle, habit_id)


def _move(ctx, habit_id, direction):
    ctx.local_state.set_habit_order(move_habit(ctx.local_state.habit_order, ctx.board.habits, habit_id, direction))


def _render_add_form(ctx, options):
    with st.form(key="habits.add_form", clear_on_submit=True):
        name = st.text_input("New habit", placeholder="Drink water")
        description = st.text_input("Description", placeholder="Optional")
        selected = st.multiselect("Tags", options)
        extra = st.text_input("New tag", placeholder="Add a custom tag")
        submitted = st.form_submit_button("Add habit")
    if submitted:
        tags = add_tag(selected, extra)
        if _run(ctx.board.add_habit, name, description, tags):
            ctx.tags.reconcile()
            st.rerun()


def _render_edit_form(ctx, habit, options):
    with st.form(key=f"habits.edit_form.{habit.id}"):
        name = st.text_input("Name", value=habit.name)
        description = st.text_input("Description", value=habit.description or "")
        selected = st.multiselect("Tags", sorted(set(options) | set(habit.categories)), default=habit.categories)
        extra = st.text_input("New tag")
        cols = st.columns(2)
        save = cols[0].form_submit_button("Save")
        cancel = cols[1].form_submit_button("Cancel")
    if save:
        if _run(ctx.board.save_habit_edits, habit.id, name, description, add_tag(selected, extra)):
            ctx.tags.reconcile()
            session_slices.set_value("habits", "editing", None)
            st.rerun()
    if cancel:
        session_slices.set_value("habits", "editing", None)
        st.rerun()


def _render_settings(habit, today):
    setting = session_slices.get_completion_setting(habit.id)
    max_days = days_since_creation(habit, today)
    with st.expander("Completion window"):
        mode = st.radio(
            "Mode",
            ["window", "lifetime"],
            index=0 if setting.mode == "window" else 1,
            key=f"habits.mode.{habit.id}",
            horizontal=True,
        )
        days = setting.clamped(max_days).days
        if mode == "window":
            days = st.number_input(
                "Days", min_value=1, max_value=max_days, value=days, step=1, key=f"habits.days.{habit.id}"
            )
        return session_slices.set_completion_setting(habit.id, mode, days)


def render_habits_tab(ctx):
    board = ctx.board
    today = ctx.today
    color_map = ctx.local_state.color_map
    options, has_uncategorized = category_options(board.habits, ctx.local_state.tag_catalog)

    st.markdown("<div class='section-title'>Habits</div>", unsafe_allow_html=True)
    _render_add_form(ctx, options)

    filter_cols = st.columns([1, 1, 2])
    status_filter = filter_cols[0].selectbox("Status", STATUS_FILTERS, key="habits.status_filter")
    category_choices = [CATEGORY_FILTER_ALL] + options
    if has_uncategorized:
        category_choices.append(CATEGORY_FILTER_UNCATEGORIZED)
    category_filter = filter_cols[1].selectbox("Tag", category_choices, key="habits.category_filter")
    query = filter_cols[2].text_input("Search", key="habits.query")

    order = reconcile_order(ctx.local_state.habit_order, board.habits)
    if board.habits and order != ctx.local_state.habit_order:
        ctx.local_state.set_habit_order(order)

    label = "Clear today" if all_completed_today(board.habits, board.logs, today) else "Complete all today"
    if st.button(label, key="habits.toggle_all", disabled=not board.habits):
        if _run(board.toggle_all_today):
            st.rerun()

    visible = ordered_habits(
        filtered_habits(board.habits, board.logs, status_filter, category_filter, query, today),
        ctx.local_state.habit_order,
    )
    if not visible:
        st.info("No habits match these filters yet.")
        return

    done_ids = completed_today_ids(board.logs, today)
    editing = session_slices.get_value("habits", "editing")
    for habit in visible:
        st.markdown("<div class='panel'>", unsafe_allow_html=True)
        if editing == habit.id:
            _render_edit_form(ctx, habit, options)
            st.markdown("</div>", unsafe_allow_html=True)
            continue
        row = st.columns([0.4, 5, 0.4, 0.4, 0.4, 0.4])
        row[0].checkbox(
            "done",
            value=habit.id in done_ids,
            key=f"habits.done.{habit.id}",
            label_visibility="collapsed",
            on_change=_toggle,
            args=(ctx, habit.id),
        )
        with row[1]:
            setting = _render_settings(habit, today)
            stats = habit_stats(habit, board.logs, setting, today)
            st.markdown(f"**{html.escape(habit.name)}**")
            if habit.description:
                st.caption(habit.description)
            st.markdown(_tag_chips(habit.categories, color_map), unsafe_allow_html=True)
            streak_label = "day" if stats.streak == 1 else "days"
            st.caption(f"Streak: {stats.streak} {streak_label} • Completion: {stats.completion}%")
        row[2].button("↑", key=f"habits.up.{habit.id}", on_click=_move, args=(ctx, habit.id, "up"), type="tertiary")
        row[3].button("↓", key=f"habits.down.{habit.id}", on_click=_move, args=(ctx, habit.id, "down"), type="tertiary")
        if row[4].button("✎", key=f"habits.edit.{habit.id}", type="tertiary"):
            session_slices.set_value("habits", "editing", habit.id)
            st.rerun()
        if row[5].button("✕", key=f"habits.delete.{habit.id}", type="tertiary"):
            if _run(board.delete_habit, habit.id):
                ctx.local_state.set_habit_order(reconcile_order(ctx.local_state.habit_order, board.habits))
                ctx.tags.reconcile()
                st.rerun()
        st.markdown("</div>", unsafe_allow_html=True)
