import asyncio
import html

import streamlit as st

from dashboard.colors import color_for
from dashboard.constants import PALETTE
from dashboard.errors import HabitError
from dashboard.state import session_slices
from dashboard.tags import search_tags, tag_usage_count


def _report(exc):
    session_slices.set_value("tags", "error", str(exc))


def _create(ctx):
    try:
        ctx.tags.create(st.session_state.get("tags.new", ""))
        session_slices.set_value("tags", "error", None)
    except HabitError as exc:
        _report(exc)


def _rename(ctx, old_tag, widget_key):
    try:
        asyncio.run(ctx.tags.rename(old_tag, st.session_state.get(widget_key, "")))
        session_slices.set_value("tags", "error", None)
    except HabitError as exc:
        _report(exc)


def _delete(ctx, tag):
    try:
        asyncio.run(ctx.tags.delete(tag))
        session_slices.set_value("tags", "error", None)
    except HabitError as exc:
        _report(exc)


def _set_color(ctx, tag, widget_key):
    try:
        ctx.tags.set_color(tag, st.session_state.get(widget_key))
    except HabitError as exc:
        _report(exc)


def render_tags_tab(ctx):
    st.markdown("<div class='section-title'>Tags</div>", unsafe_allow_html=True)
    error = session_slices.get_value("tags", "error")
    if error:
        st.warning(error)

    add_cols = st.columns([5, 1])
    add_cols[0].text_input("New tag", key="tags.new", label_visibility="collapsed", placeholder="New tag")
    add_cols[1].button("Create", key="tags.create", on_click=_create, args=(ctx,))

    query = st.text_input("Search tags", key="tags.search")
    usage = tag_usage_count(ctx.board.habits)
    color_map = ctx.local_state.color_map
    for tag in search_tags(ctx.tags.known_tags(), query):
        row = st.columns([0.3, 3, 2, 1.2, 0.5])
        row[0].markdown(
            f"<span style='display:inline-block;width:14px;height:14px;border-radius:50%;"
            f"background:{color_for(tag, color_map)}'></span>",
            unsafe_allow_html=True,
        )
        rename_key = f"tags.rename.{tag}"
        row[1].text_input(
            "Name",
            value=tag,
            key=rename_key,
            label_visibility="collapsed",
            on_change=_rename,
            args=(ctx, tag, rename_key),
        )
        row[2].caption(f"{usage.get(tag, 0)} habit(s) • {html.escape(tag)}")
        color_key = f"tags.color.{tag}"
        current = color_for(tag, color_map)
        row[3].selectbox(
            "Color",
            PALETTE,
            index=PALETTE.index(current) if current in PALETTE else 0,
            key=color_key,
            label_visibility="collapsed",
            on_change=_set_color,
            args=(ctx, tag, color_key),
        )
        row[4].button("✕", key=f"tags.delete.{tag}", on_click=_delete, args=(ctx, tag), type="tertiary")
