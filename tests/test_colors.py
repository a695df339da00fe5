import pytest

from dashboard.colors import (
    assign_color,
    color_for,
    hash_color,
    next_unused_palette_color,
    reconcile_colors,
)
from dashboard.constants import NEUTRAL_TAG_COLOR, PALETTE
from dashboard.errors import ValidationError


def test_hash_color_sums_character_codes():
    # ord("a") == 97, 97 % 20 == 17
    assert hash_color("a") == PALETTE[17]
    assert hash_color(" a ") == PALETTE[17]


def test_hash_color_ignores_other_tags():
    alone = hash_color("Health")
    reconciled, _ = reconcile_colors({}, ["Work", "Health", "Fun"])
    assert reconciled["Health"] == alone


def test_color_for_prefers_explicit_entry():
    assert color_for("Health", {"Health": "#123456"}) == "#123456"
    assert color_for("Health", {}) == hash_color("Health")
    assert color_for("   ", {}) == NEUTRAL_TAG_COLOR


def test_next_unused_palette_color():
    assert next_unused_palette_color({}) == PALETTE[0]
    assert next_unused_palette_color({"a": PALETTE[0].upper()}) == PALETTE[1]


def test_next_unused_cycles_when_palette_exhausted():
    full = {f"t{idx}": color for idx, color in enumerate(PALETTE)}
    assert next_unused_palette_color(full) == PALETTE[0]
    palette = ["#111111", "#222222"]
    assert next_unused_palette_color({"a": "#111111", "b": "#222222"}, palette) == "#111111"


def test_reconcile_backfills_and_prunes():
    next_map, changed = reconcile_colors({"Old": "#000000", "Keep": "#abcdef"}, ["Keep", "New"])
    assert changed is True
    assert next_map == {"Keep": "#abcdef", "New": hash_color("New")}


def test_reconcile_reports_unchanged():
    current = {"Keep": "#abcdef"}
    next_map, changed = reconcile_colors(current, ["Keep"])
    assert changed is False
    assert next_map == current


def test_assign_color_validates_palette():
    assert assign_color({}, "Health", PALETTE[3]) == {"Health": PALETTE[3]}
    with pytest.raises(ValidationError):
        assign_color({}, "Health", "#000001")
    with pytest.raises(ValidationError):
        assign_color({}, " ", PALETTE[0])
