HABITS_TABLE = "habits"
HABIT_LOGS_TABLE = "habit_logs"

TAG_COLORS_KEY = "habit-category-colors"
TAG_CATALOG_KEY = "habit-tag-catalog"
HABIT_ORDER_KEY = "habit-order"

PALETTE = [
    "#22c55e",
    "#0ea5e9",
    "#06b6d4",
    "#10b981",
    "#14b8a6",
    "#38bdf8",
    "#3b82f6",
    "#6366f1",
    "#7c3aed",
    "#8b5cf6",
    "#a855f7",
    "#c084fc",
    "#d946ef",
    "#eab308",
    "#f59e0b",
    "#f97316",
    "#f43f5e",
    "#ef4444",
    "#84cc16",
    "#1e293b",
]
NEUTRAL_TAG_COLOR = "#334155"

STREAK_LOOKBACK_DAYS = 7
OVERVIEW_WINDOW_DAYS = 7
RECENT_ACTIVITY_LIMIT = 8

COMPLETION_MODES = ("window", "lifetime")
DEFAULT_COMPLETION_MODE = "window"
DEFAULT_COMPLETION_DAYS = 7

STATUS_FILTERS = ("all", "pending", "completed")
CATEGORY_FILTER_ALL = "all"
CATEGORY_FILTER_UNCATEGORIZED = "uncategorized"

DAY_STATUS_COLORS = {
    "complete": "#22c55e",
    "partial": "#f59e0b",
    "none": "#ef4444",
    "neutral": "#1e293b",
}
