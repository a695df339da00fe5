from __future__ import annotations

from dashboard.constants import NEUTRAL_TAG_COLOR, PALETTE
from dashboard.errors import ValidationError
from dashboard.tags import normalize_tag, tags_match


def hash_color(tag, palette=PALETTE) -> str:
    value = normalize_tag(tag)
    return palette[sum(ord(ch) for ch in value) % len(palette)]


def color_for(tag, color_map=None, palette=PALETTE) -> str:
    value = normalize_tag(tag)
    if not value:
        return NEUTRAL_TAG_COLOR
    explicit = (color_map or {}).get(value)
    if explicit:
        return explicit
    return hash_color(value, palette)


def next_unused_palette_color(color_map, palette=PALETTE) -> str:
    used = {str(color).lower() for color in (color_map or {}).values() if color}
    for color in palette:
        if color.lower() not in used:
            return color
    return palette[len(used) % len(palette)]


def reconcile_colors(color_map, active_tags, palette=PALETTE):
    """Backfill hash colors for new tags and prune tags that no longer exist.

    Returns ``(next_map, changed)``; the keys of ``next_map`` are exactly the
    active tag set.
    """
    active = [tag for tag in (normalize_tag(t) for t in active_tags) if tag]
    active_set = set(active)
    current = dict(color_map or {})
    next_map = {}
    changed = False
    for tag in active:
        if tag in next_map:
            continue
        color = current.get(tag)
        if not color:
            color = hash_color(tag, palette)
            changed = True
        next_map[tag] = color
    if any(key not in active_set for key in current):
        changed = True
    return next_map, changed


def find_color_key(color_map, tag):
    for key in color_map or {}:
        if tags_match(key, tag):
            return key
    return None


def assign_color(color_map, tag, color, palette=PALETTE) -> dict:
    value = normalize_tag(tag)
    if not value:
        raise ValidationError("Enter a tag name to color.")
    if not any(str(color).lower() == choice.lower() for choice in palette):
        raise ValidationError(f"Unknown palette color: {color}")
    next_map = dict(color_map or {})
    next_map[value] = color
    return next_map
