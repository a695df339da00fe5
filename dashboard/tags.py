from __future__ import annotations

import json
from dataclasses import dataclass


@dataclass(frozen=True)
class LegacyString:
    raw: str


@dataclass(frozen=True)
class TagList:
    items: tuple


def normalize_tag(tag) -> str:
    return str(tag if tag is not None else "").strip()


def tags_match(a, b) -> bool:
    return normalize_tag(a).lower() == normalize_tag(b).lower()


def clean_tags(tags) -> list[str]:
    """Trim, drop blanks and dedup (case-sensitive), keeping first-seen order."""
    seen = set()
    cleaned = []
    for item in tags or []:
        value = normalize_tag(item)
        if not value or value in seen:
            continue
        seen.add(value)
        cleaned.append(value)
    return cleaned


def decode_category_field(raw):
    """Classify a stored ``category`` value as a JSON tag list or a legacy string."""
    if raw is None:
        return None
    text = str(raw)
    if not text.strip():
        return None
    try:
        payload = json.loads(text)
    except ValueError:
        return LegacyString(text)
    if isinstance(payload, list):
        return TagList(tuple(payload))
    return LegacyString(text)


def parse_categories(raw) -> list[str]:
    decoded = decode_category_field(raw)
    if decoded is None:
        return []
    if isinstance(decoded, TagList):
        return clean_tags(item if isinstance(item, str) else json.dumps(item) for item in decoded.items)
    return clean_tags(decoded.raw.split(","))


def serialize_categories(tags) -> str | None:
    cleaned = clean_tags(tags)
    if not cleaned:
        return None
    return json.dumps(cleaned, ensure_ascii=False)


def toggle_category(tags, tag) -> list[str]:
    value = normalize_tag(tag)
    current = list(tags or [])
    if not value:
        return current
    if value in current:
        return [item for item in current if item != value]
    return current + [value]


def add_tag(tags, tag) -> list[str]:
    value = normalize_tag(tag)
    current = list(tags or [])
    if not value or value in current:
        return current
    return current + [value]


def category_options(habits, catalog=None):
    """Sorted set of every known tag plus whether any habit has no tags."""
    options = set(clean_tags(catalog))
    has_uncategorized = False
    for habit in habits:
        if not habit.categories:
            has_uncategorized = True
            continue
        options.update(clean_tags(habit.categories))
    return sorted(options, key=lambda value: (value.lower(), value)), has_uncategorized


def tag_usage_count(habits) -> dict[str, int]:
    counts: dict[str, int] = {}
    for habit in habits:
        for tag in clean_tags(habit.categories):
            counts[tag] = counts.get(tag, 0) + 1
    return counts


def search_tags(options, query) -> list[str]:
    needle = normalize_tag(query).lower()
    if not needle:
        return list(options)
    return [tag for tag in options if needle in tag.lower()]
