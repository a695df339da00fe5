from __future__ import annotations

import asyncio
import logging

from dashboard.colors import assign_color, find_color_key, next_unused_palette_color, reconcile_colors
from dashboard.constants import PALETTE
from dashboard.errors import DuplicateError, PersistenceError, ValidationError
from dashboard.tags import category_options, clean_tags, normalize_tag, tags_match

logger = logging.getLogger(__name__)


class TagManager:
    """Create, rename and delete tags across the catalog, colors and habits.

    Rename and delete update local state first and then persist every habit
    that referenced the tag concurrently. Failures are reported once, after
    the whole batch has finished, and the local change is kept.
    """

    def __init__(self, board, local_state, palette=PALETTE):
        self.board = board
        self.local_state = local_state
        self.palette = palette

    def known_tags(self) -> list[str]:
        options, _ = category_options(self.board.habits, self.local_state.tag_catalog)
        return options

    def _affected(self, tag):
        return [
            habit for habit in self.board.habits if any(tags_match(category, tag) for category in habit.categories)
        ]

    def create(self, name) -> str:
        trimmed = normalize_tag(name)
        if not trimmed:
            raise ValidationError("Enter a tag name to create.")
        if any(tags_match(tag, trimmed) for tag in self.known_tags()):
            raise DuplicateError("That tag already exists.")
        state = self.local_state
        state.tag_catalog = state.tag_catalog + [trimmed]
        if trimmed not in state.color_map:
            state.color_map = {**state.color_map, trimmed: next_unused_palette_color(state.color_map, self.palette)}
        self.reconcile()
        state.save_catalog()
        state.save_colors()
        return trimmed

    async def rename(self, old_name, new_name) -> list[str]:
        old = normalize_tag(old_name)
        new = normalize_tag(new_name)
        if not old or not new:
            raise ValidationError("Tag names cannot be empty.")
        if any(tags_match(tag, new) and not tags_match(tag, old) for tag in self.known_tags()):
            raise DuplicateError("That tag name already exists.")

        state = self.local_state
        color_map = dict(state.color_map)
        color_key = find_color_key(color_map, old)
        if color_key is not None:
            color = color_map.pop(color_key)
            color_map[new] = color
        state.color_map = color_map
        state.tag_catalog = clean_tags(new if tags_match(tag, old) else tag for tag in state.tag_catalog)

        updates = []
        for habit in self._affected(old):
            next_tags = clean_tags(new if tags_match(tag, old) else tag for tag in habit.categories)
            self.board.replace_categories(habit.id, next_tags)
            updates.append((habit.id, next_tags))

        self.reconcile()
        state.save_catalog()
        state.save_colors()
        await self._persist(updates, "Some habits could not be updated when renaming this tag.")
        return [habit_id for habit_id, _ in updates]

    async def delete(self, name) -> list[str]:
        trimmed = normalize_tag(name)
        if not trimmed:
            raise ValidationError("Enter a tag name to delete.")

        state = self.local_state
        state.tag_catalog = [tag for tag in state.tag_catalog if not tags_match(tag, trimmed)]
        color_map = dict(state.color_map)
        color_key = find_color_key(color_map, trimmed)
        if color_key is not None:
            del color_map[color_key]
        state.color_map = color_map

        updates = []
        for habit in self._affected(trimmed):
            next_tags = [tag for tag in habit.categories if not tags_match(tag, trimmed)]
            self.board.replace_categories(habit.id, next_tags)
            updates.append((habit.id, next_tags))

        self.reconcile()
        state.save_catalog()
        state.save_colors()
        await self._persist(updates, "Some habits could not be updated when removing this tag.")
        return [habit_id for habit_id, _ in updates]

    def set_color(self, tag, color) -> None:
        state = self.local_state
        state.color_map = assign_color(state.color_map, tag, color, self.palette)
        state.save_colors()

    def reconcile(self) -> bool:
        state = self.local_state
        next_map, changed = reconcile_colors(state.color_map, self.known_tags(), self.palette)
        if changed:
            state.color_map = next_map
            state.save_colors()
        return changed

    async def _persist(self, updates, message) -> None:
        if not updates:
            return
        results = await asyncio.gather(
            *(self.board.persist_categories(habit_id, tags) for habit_id, tags in updates),
            return_exceptions=True,
        )
        failed = [habit_id for (habit_id, _), result in zip(updates, results) if isinstance(result, BaseException)]
        if failed:
            errors = [result for result in results if isinstance(result, BaseException)]
            logger.error("%s failed=%s errors=%s", message, failed, errors)
            raise PersistenceError(message, failed_ids=failed)
