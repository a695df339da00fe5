import math

from conftest import make_habit, make_logs
from dashboard.overview import month_days
from dashboard.visualizations import build_month_heatmap, completion_bar_chart, month_heatmap_figure

TODAY = "2024-06-10"


def _june_cells():
    habits = [make_habit("a", created="2024-06-03"), make_habit("b", created="2024-06-03")]
    logs = make_logs("a", "2024-06-03", "2024-06-04") + make_logs("b", "2024-06-03")
    return month_days(habits, logs, 2024, 6, TODAY)


def test_heatmap_places_days_on_monday_first_grid():
    z, text = build_month_heatmap(_june_cells(), 2024, 6)
    assert z.shape == (5, 7)
    # June 1st 2024 is a Saturday
    assert math.isnan(z[0, 0])
    assert z[0, 5] == 0
    assert text[0][5] == "2024-06-01 • no habits to track"
    assert z[1, 0] == 3
    assert z[1, 1] == 2
    assert text[1][1] == "2024-06-04 • 1/2 done"
    assert z[1, 2] == 1
    assert z[2, 0] == 1
    assert z[2, 1] == 0
    assert text[4][6].startswith("2024-06-30")


def test_figures_build():
    fig = month_heatmap_figure(_june_cells(), 2024, 6)
    assert fig.layout.title.text == "June 2024"
    bars = completion_bar_chart(["Run", "Read"], [43, 0])
    assert list(bars.data[0].text) == ["43%", "0%"]
