from __future__ import annotations

import json
import logging
import os
from collections.abc import MutableMapping

from dashboard.constants import HABIT_ORDER_KEY, TAG_CATALOG_KEY, TAG_COLORS_KEY
from dashboard.errors import ParseError
from dashboard.tags import clean_tags

logger = logging.getLogger(__name__)


class JsonFileStorage(MutableMapping):
    """String key/value storage kept in a single JSON file.

    Stands in for browser local storage: one file per user, written on every
    change. An unreadable file behaves like an empty one.
    """

    def __init__(self, path):
        self.path = path
        self._data = self._read()

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError):
            logger.debug("Ignoring unreadable local state file %s", self.path)
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in payload.items()}

    def _flush(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as handle:
            json.dump(self._data, handle, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def __getitem__(self, key):
        return self._data[key]

    def __setitem__(self, key, value):
        self._data[key] = str(value)
        self._flush()

    def __delitem__(self, key):
        del self._data[key]
        self._flush()

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)


def storage_path_for(state_dir, user_id):
    safe_user = "".join(ch for ch in str(user_id) if ch.isalnum() or ch in "-_.@") or "anonymous"
    return os.path.join(state_dir, f"{safe_user}.json")


def _decode(raw, expected_type):
    if raw is None or raw == "":
        raise ParseError("empty value")
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise ParseError(str(exc)) from exc
    if not isinstance(payload, expected_type):
        raise ParseError(f"expected {expected_type.__name__}")
    return payload


class LocalState:
    """Tag colors, tag catalog and habit order persisted on the client.

    Values are hydrated by ``load()`` and cached in memory; ``save()`` writes
    all three back. Corrupt values degrade to empty defaults.
    """

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else {}
        self.color_map: dict[str, str] = {}
        self.tag_catalog: list[str] = []
        self.habit_order: list[str] = []
        self.loaded = False

    def _load_value(self, key, expected_type, default):
        try:
            return _decode(self.storage.get(key), expected_type)
        except ParseError as exc:
            if key in self.storage:
                logger.debug("Falling back to default for %s: %s", key, exc)
            return default

    def load(self) -> "LocalState":
        colors = self._load_value(TAG_COLORS_KEY, dict, {})
        self.color_map = {
            str(tag).strip(): str(color)
            for tag, color in colors.items()
            if str(tag).strip() and isinstance(color, str) and color
        }
        catalog = self._load_value(TAG_CATALOG_KEY, list, [])
        self.tag_catalog = clean_tags(item if isinstance(item, str) else str(item) for item in catalog)
        order = self._load_value(HABIT_ORDER_KEY, list, [])
        self.habit_order = [str(item) for item in order if item is not None and str(item)]
        self.loaded = True
        return self

    def save(self) -> None:
        self.save_colors()
        self.save_catalog()
        self.save_order()

    def _write(self, key, value):
        try:
            self.storage[key] = json.dumps(value, ensure_ascii=False)
        except OSError as exc:
            logger.warning("Could not persist %s: %s", key, exc)

    def save_colors(self) -> None:
        self._write(TAG_COLORS_KEY, self.color_map)

    def save_catalog(self) -> None:
        self._write(TAG_CATALOG_KEY, self.tag_catalog)

    def save_order(self) -> None:
        self._write(HABIT_ORDER_KEY, self.habit_order)

    def set_habit_order(self, order) -> None:
        self.habit_order = [str(item) for item in order if item]
        self.save_order()
