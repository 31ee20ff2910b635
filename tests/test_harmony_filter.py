from conftest import make_candidate

from palette_harmony.harmony import HarmonyType
from palette_harmony.harmony_filter import filter_by_harmony, find_nearest_alternatives

HUES = [0, 30, 60, 120, 180, 240, 270, 300, 330, 350]


def _ranked():
    return [make_candidate(hue, 90 - 5 * i) for i, hue in enumerate(HUES)]


def test_all_passes_through():
    candidates = _ranked()
    result = filter_by_harmony(candidates, "all", 123.0)
    assert result.candidates == candidates
    assert result.alternatives == []
    assert not result.is_showing_alternatives


def test_empty_input():
    result = filter_by_harmony([], HarmonyType.COMPLEMENTARY, 0)
    assert result.candidates == []
    assert result.alternatives == []
    assert not result.is_showing_alternatives


def test_complementary_keeps_only_opposite_hue():
    result = filter_by_harmony(_ranked(), "complementary", 0)
    assert [c.hue for c in result.candidates] == [180]
    assert not result.is_showing_alternatives


def test_filter_preserves_score_order():
    result = filter_by_harmony(_ranked(), HarmonyType.ANALOGOUS, 0)
    assert [c.hue for c in result.candidates] == [0, 30, 60, 300, 330, 350]


def test_alternatives_when_nothing_matches():
    candidates = [make_candidate(h, 80) for h in (0, 10, 20, 100)]
    result = filter_by_harmony(candidates, HarmonyType.COMPLEMENTARY, 0)
    assert result.candidates == []
    assert result.is_showing_alternatives
    assert [c.hue for c in result.alternatives] == [100, 20, 10]


def test_nearest_alternatives_order():
    candidates = [make_candidate(h, 80) for h in (0, 45, 90, 135, 180)]
    nearest = find_nearest_alternatives(candidates, [180], 3)
    assert [c.hue for c in nearest] == [180, 135, 90]


def test_nearest_alternatives_ties_keep_input_order():
    candidates = [make_candidate(h, 80) for h in (150, 210, 180)]
    nearest = find_nearest_alternatives(candidates, [180], 3)
    assert [c.hue for c in nearest] == [180, 150, 210]


def test_nearest_alternatives_without_targets():
    candidates = [make_candidate(h, 80) for h in (0, 45, 90, 135)]
    assert find_nearest_alternatives(candidates, [], 3) == candidates[:3]


def test_shades_filter_offers_alternatives():
    result = filter_by_harmony(_ranked(), HarmonyType.SHADES, 0)
    assert result.candidates == []
    assert result.is_showing_alternatives
    assert len(result.alternatives) == 3
