from conftest import make_habit, make_logs
from dashboard.models import CompletionLog
from dashboard.overview import (
    all_completed_today,
    day_aggregate,
    filtered_habits,
    month_days,
    move_habit,
    ordered_habits,
    overview,
    recent_activity,
    reconcile_order,
    reorder_habit,
    selected_day_habits,
)

TODAY = "2024-06-10"


def test_overview_totals():
    habits = [make_habit("a"), make_habit("b")]
    logs = make_logs("a", "2024-06-08", "2024-06-09", "2024-06-10")
    summary = overview(habits, logs, TODAY)
    assert summary.total == 2
    assert summary.completed_today == 1
    assert summary.completion_today == 50
    assert summary.longest_streak == 3
    # a: 3/7 -> 43, b: 0 -> mean 21.5 rounds half up
    assert summary.avg_completion == 22


def test_overview_empty():
    summary = overview([], [], TODAY)
    assert (summary.total, summary.completed_today, summary.longest_streak, summary.avg_completion) == (0, 0, 0, 0)


def test_all_completed_today():
    habits = [make_habit("a"), make_habit("b")]
    assert not all_completed_today(habits, make_logs("a", TODAY), TODAY)
    assert all_completed_today(habits, make_logs("a", TODAY) + make_logs("b", TODAY), TODAY)
    assert not all_completed_today([], [], TODAY)


def test_day_aggregate_partial():
    habits = [make_habit("a"), make_habit("b")]
    cell = day_aggregate(habits, make_logs("a", "2024-06-05"), "2024-06-05", TODAY)
    assert cell.active_count == 2
    assert cell.completed_count == 1
    assert cell.complete_all is False
    assert cell.status == "partial"


def test_day_before_creation_and_future_days_are_neutral():
    habits = [make_habit("a", created="2024-06-05")]
    before = day_aggregate(habits, [], "2024-06-04", TODAY)
    assert before.active_count == 0
    assert before.complete_all is False
    assert before.status == "neutral"
    future = day_aggregate(habits, [], "2024-06-20", TODAY)
    assert future.is_future
    assert future.status == "neutral"
    missed = day_aggregate(habits, [], "2024-06-06", TODAY)
    assert missed.status == "none"


def test_month_days_cover_the_month():
    habits = [make_habit("a", created="2024-06-03")]
    logs = make_logs("a", "2024-06-03", "2024-06-04")
    cells = month_days(habits, logs, 2024, 6, TODAY)
    assert len(cells) == 30
    assert cells[0].iso == "2024-06-01" and cells[0].active_count == 0
    assert cells[2].complete_all and cells[2].status == "complete"
    assert cells[9].is_today
    assert cells[10].is_future


def test_selected_day_habits_lists_active_habits():
    habits = [make_habit("a", created="2024-06-01"), make_habit("b", created="2024-06-09")]
    rows = selected_day_habits(habits, make_logs("a", "2024-06-05"), "2024-06-05")
    assert [(habit.id, done) for habit, done in rows] == [("a", True)]


def test_filtered_habits_compose():
    habits = [
        make_habit("a", name="Run", categories=["Health"], description="Morning jog"),
        make_habit("b", name="Read", categories=["Mind"]),
        make_habit("c", name="Stretch"),
    ]
    logs = make_logs("a", TODAY)
    assert [h.id for h in filtered_habits(habits, logs, "completed", today=TODAY)] == ["a"]
    assert [h.id for h in filtered_habits(habits, logs, "pending", today=TODAY)] == ["b", "c"]
    assert [h.id for h in filtered_habits(habits, logs, category_filter="uncategorized", today=TODAY)] == ["c"]
    assert [h.id for h in filtered_habits(habits, logs, category_filter="Mind", today=TODAY)] == ["b"]
    assert [h.id for h in filtered_habits(habits, logs, category_filter="mind", today=TODAY)] == []
    assert [h.id for h in filtered_habits(habits, logs, query="JOG", today=TODAY)] == ["a"]
    assert [h.id for h in filtered_habits(habits, logs, query="mind", today=TODAY)] == ["b"]
    assert filtered_habits(habits, logs, "completed", "Mind", today=TODAY) == []


def test_ordered_habits_puts_unknown_last_in_original_order():
    habits = [make_habit("a"), make_habit("b"), make_habit("c"), make_habit("d")]
    ordered = ordered_habits(habits, ["c", "a"])
    assert [h.id for h in ordered] == ["c", "a", "b", "d"]


def test_reconcile_order_drops_stale_and_appends_new():
    habits = [make_habit("new"), make_habit("a"), make_habit("b")]
    assert reconcile_order(["b", "deleted", "a"], habits) == ["b", "a", "new"]
    assert reconcile_order([], habits) == ["new", "a", "b"]


def test_move_habit():
    habits = [make_habit("a"), make_habit("b"), make_habit("c")]
    assert move_habit(["a", "b", "c"], habits, "b", "up") == ["b", "a", "c"]
    assert move_habit(["a", "b", "c"], habits, "c", "down") == ["a", "b", "c"]
    assert move_habit([], habits, "a", "down") == ["b", "a", "c"]
    assert move_habit(["a", "b"], habits, "zzz", "up") == ["a", "b"]


def test_reorder_habit():
    habits = [make_habit("a"), make_habit("b"), make_habit("c")]
    assert reorder_habit(["a", "b", "c"], habits, "c", "a", "before") == ["c", "a", "b"]
    assert reorder_habit(["a", "b", "c"], habits, "a", "c", "after") == ["b", "c", "a"]
    assert reorder_habit(["a", "b", "c"], habits, "c", "a", "after") == ["a", "c", "b"]
    assert reorder_habit(["a", "b", "c"], habits, "a", "a") == ["a", "b", "c"]


def test_recent_activity_newest_first_with_fallback_name():
    habits = [make_habit("a", name="Run")]
    logs = make_logs("a", "2024-06-01", "2024-06-03") + [
        CompletionLog(id="x", habit_id="gone", date="2024-06-02")
    ]
    activity = recent_activity(logs, habits, limit=2)
    assert [(item["date"], item["habit_name"]) for item in activity] == [
        ("2024-06-03", "Run"),
        ("2024-06-02", "Unknown habit"),
    ]


def test_overview_average_uses_fixed_seven_day_window():
    habits = [make_habit("young", created="2024-06-08")]
    logs = make_logs("young", "2024-06-08", "2024-06-09", "2024-06-10")
    # 3 of 7 days, even though the habit is only 3 days old
    assert overview(habits, logs, TODAY).avg_completion == 43


def test_search_query_is_not_trimmed_for_matching():
    habits = [make_habit("a", name="Run"), make_habit("b", name="Run errands")]
    assert [h.id for h in filtered_habits(habits, [], query="run ", today=TODAY)] == ["b"]
    assert [h.id for h in filtered_habits(habits, [], query="   ", today=TODAY)] == ["a", "b"]
