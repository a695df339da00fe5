import asyncio

import pytest

from conftest import FakeStore, make_habit
from dashboard.constants import PALETTE
from dashboard.errors import DuplicateError, PersistenceError, ValidationError
from dashboard.services.habit_board import HabitBoard
from dashboard.services.tag_manager import TagManager
from dashboard.state.local_state import LocalState


def build(habits, failing_ids=(), colors=None, catalog=None):
    store = FakeStore(habits=habits, failing_ids=failing_ids)
    board = HabitBoard(store, today_getter=lambda: "2024-06-10").load()
    state = LocalState({})
    state.color_map = dict(colors or {})
    state.tag_catalog = list(catalog or [])
    return store, board, state, TagManager(board, state)


def test_create_adds_to_catalog_with_unused_color():
    _, _, state, manager = build([], colors={"Health": PALETTE[0]}, catalog=["Health"])
    assert manager.create("  Sleep ") == "Sleep"
    assert state.tag_catalog == ["Health", "Sleep"]
    assert state.color_map["Sleep"] == PALETTE[1]


def test_create_rejects_blank_and_duplicates():
    _, _, _, manager = build([make_habit("a", categories=["Health"])])
    with pytest.raises(ValidationError, match="Enter a tag name to create."):
        manager.create("   ")
    with pytest.raises(DuplicateError, match="That tag already exists."):
        manager.create("health")


def test_rename_propagates_and_carries_color():
    habits = [
        make_habit("a", categories=["Health", "Morning"]),
        make_habit("b", categories=["Mind"]),
    ]
    store, board, state, manager = build(habits, colors={"Health": "#ef4444"}, catalog=["Health"])

    updated = asyncio.run(manager.rename("Health", "Wellness"))

    assert updated == ["a"]
    assert board.get("a").categories == ["Wellness", "Morning"]
    assert board.get("b").categories == ["Mind"]
    assert state.tag_catalog == ["Wellness"]
    assert state.color_map["Wellness"] == "#ef4444"
    assert "Health" not in state.color_map
    assert [call for call in store.calls if call[0] == "update_habit_async"] == [("update_habit_async", "a")]
    assert store.habits[0].categories == ["Wellness", "Morning"]


def test_rename_is_case_insensitive_and_rejects_collisions():
    habits = [make_habit("a", categories=["health"]), make_habit("b", categories=["Mind"])]
    _, board, _, manager = build(habits)
    with pytest.raises(DuplicateError):
        asyncio.run(manager.rename("Health", "mind"))
    with pytest.raises(ValidationError):
        asyncio.run(manager.rename("Health", "  "))
    asyncio.run(manager.rename("HEALTH", "Fitness"))
    assert board.get("a").categories == ["Fitness"]


def test_rename_partial_failure_keeps_local_change():
    habits = [
        make_habit("a", categories=["Health"]),
        make_habit("b", categories=["Health"]),
    ]
    store, board, _, manager = build(habits, failing_ids={"b"})

    with pytest.raises(PersistenceError) as excinfo:
        asyncio.run(manager.rename("Health", "Wellness"))

    assert excinfo.value.failed_ids == ["b"]
    assert "renaming" in str(excinfo.value)
    assert board.get("a").categories == ["Wellness"]
    assert board.get("b").categories == ["Wellness"]
    assert {habit.id: habit.categories for habit in store.habits} == {"a": ["Wellness"], "b": ["Health"]}


def test_delete_removes_tag_everywhere():
    habits = [make_habit("a", categories=["Health", "Mind"]), make_habit("b", categories=["Mind"])]
    _, board, state, manager = build(habits, colors={"Health": "#ef4444", "Mind": "#3b82f6"}, catalog=["Health"])

    updated = asyncio.run(manager.delete("health"))

    assert updated == ["a"]
    assert board.get("a").categories == ["Mind"]
    assert state.tag_catalog == []
    assert state.color_map == {"Mind": "#3b82f6"}


def test_delete_of_unused_tag_persists_nothing():
    store, _, state, manager = build([make_habit("a")], catalog=["Spare"])
    assert asyncio.run(manager.delete("Spare")) == []
    assert state.tag_catalog == []
    assert not [call for call in store.calls if call[0] == "update_habit_async"]


def test_set_color_and_reconcile():
    _, _, state, manager = build([make_habit("a", categories=["Health"])], colors={"Gone": "#22c55e"})
    assert manager.reconcile() is True
    assert set(state.color_map) == {"Health"}
    manager.set_color("Health", PALETTE[3])
    assert state.color_map["Health"] == PALETTE[3]
    with pytest.raises(ValidationError):
        manager.set_color("Health", "#123456")
