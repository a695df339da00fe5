from dataclasses import dataclass
from typing import Any

from dashboard.services.habit_board import HabitBoard
from dashboard.services.tag_manager import TagManager
from dashboard.state.local_state import LocalState


@dataclass
class DashboardContext:
    user_id: str
    board: HabitBoard
    local_state: LocalState
    tags: TagManager
    today: str

    def get(self, key, default: Any = None):
        return getattr(self, key, default)
