import json

from dashboard.constants import HABIT_ORDER_KEY, TAG_CATALOG_KEY, TAG_COLORS_KEY
from dashboard.state.local_state import JsonFileStorage, LocalState, storage_path_for


def test_load_reads_stored_values():
    storage = {
        TAG_COLORS_KEY: json.dumps({"Health": "#22c55e", "  ": "#000000"}),
        TAG_CATALOG_KEY: json.dumps(["Health", " Mind ", "Health ", ""]),
        HABIT_ORDER_KEY: json.dumps(["b", "a", None]),
    }
    state = LocalState(storage).load()
    assert state.color_map == {"Health": "#22c55e"}
    assert state.tag_catalog == ["Health", "Mind"]
    assert state.habit_order == ["b", "a"]
    assert state.loaded


def test_corrupt_values_fall_back_to_defaults():
    storage = {
        TAG_COLORS_KEY: "{not json",
        TAG_CATALOG_KEY: json.dumps({"wrong": "shape"}),
        HABIT_ORDER_KEY: "",
    }
    state = LocalState(storage).load()
    assert state.color_map == {}
    assert state.tag_catalog == []
    assert state.habit_order == []


def test_save_round_trips_through_storage():
    storage = {}
    state = LocalState(storage)
    state.color_map = {"Mind": "#3b82f6"}
    state.tag_catalog = ["Mind"]
    state.set_habit_order(["x", "", "y"])
    state.save()
    reloaded = LocalState(storage).load()
    assert reloaded.color_map == {"Mind": "#3b82f6"}
    assert reloaded.tag_catalog == ["Mind"]
    assert reloaded.habit_order == ["x", "y"]


def test_json_file_storage_persists_to_disk(tmp_path):
    path = storage_path_for(str(tmp_path / "state"), "me@example.com")
    storage = JsonFileStorage(path)
    state = LocalState(storage)
    state.tag_catalog = ["Sleep"]
    state.save_catalog()

    again = LocalState(JsonFileStorage(path)).load()
    assert again.tag_catalog == ["Sleep"]


def test_json_file_storage_ignores_unreadable_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("not json at all", encoding="utf-8")
    storage = JsonFileStorage(str(path))
    assert len(storage) == 0
    storage["key"] = "value"
    assert json.loads(path.read_text(encoding="utf-8")) == {"key": "value"}


def test_storage_path_strips_unsafe_characters(tmp_path):
    path = storage_path_for(str(tmp_path), "../../etc/passwd")
    assert path.startswith(str(tmp_path))
    assert path.endswith("....etcpasswd.json")
    assert storage_path_for(str(tmp_path), "").endswith("anonymous.json")
