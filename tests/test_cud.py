from palette_harmony.color import Color
from palette_harmony.cud import CUD_COLOR_SET, find_nearest_cud_color


def test_set_has_twenty_colors():
    groups = [c.group for c in CUD_COLOR_SET]
    assert len(CUD_COLOR_SET) == 20
    assert groups.count("accent") == 9
    assert groups.count("base") == 7
    assert groups.count("neutral") == 4


def test_cud_color_matches_itself():
    match = find_nearest_cud_color(Color.from_hex("#0041FF"))
    assert match.nearest.id == "blue"
    assert match.match_level == "exact"
    assert match.delta_e < 0.01


def test_nearby_color_is_near_or_exact():
    match = find_nearest_cud_color(Color.from_hex("#0A4AF5"))
    assert match.nearest.id == "blue"
    assert match.match_level in ("exact", "near")


def test_far_color_is_off():
    match = find_nearest_cud_color(Color.from_hex("#7F7F00"))
    assert match.match_level == "off"


def test_hex_property():
    assert CUD_COLOR_SET[0].hex == "#FF2800"
