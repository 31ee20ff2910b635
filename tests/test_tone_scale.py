import pytest

from palette_harmony.color import Color
from palette_harmony.tone_scale import build_tone_scale, create_interpolator, generate_scale

WHITE = Color.from_hex("#FFFFFF")


def test_interpolator_hits_key_colors_at_ends():
    light = Color(0.95, 0.03, 250)
    dark = Color(0.30, 0.12, 260)
    interpolate = create_interpolator([light, dark])
    assert interpolate(0.0).l == pytest.approx(light.l, abs=1e-6)
    assert interpolate(1.0).l == pytest.approx(dark.l, abs=1e-6)


def test_interpolator_takes_short_way_round_the_hue_circle():
    interpolate = create_interpolator([Color(0.6, 0.1, 350), Color(0.6, 0.1, 10)])
    mid = interpolate(0.5).h
    assert mid < 20 or mid > 340


def test_interpolator_is_monotone_in_lightness():
    keys = [Color(0.95, 0.03, 250), Color(0.6, 0.15, 255), Color(0.25, 0.08, 260)]
    interpolate = create_interpolator(keys)
    lightness = [interpolate(t / 10).l for t in range(11)]
    assert all(a >= b for a, b in zip(lightness, lightness[1:]))


def test_interpolator_requires_keys():
    with pytest.raises(ValueError):
        create_interpolator([])


def test_single_key_is_constant():
    only = Color(0.5, 0.1, 30)
    assert create_interpolator([only])(0.7) == only


def test_generate_scale_count():
    scale = generate_scale([Color(0.95, 0.03, 250), Color(0.3, 0.1, 260)], 5)
    assert len(scale) == 5
    assert scale[0].l > scale[-1].l


def test_tone_scale_hits_each_ratio():
    keys = [Color.from_hex("#E3F2FD"), Color.from_hex("#0D47A1")]
    ratios = [1.5, 3.0, 4.5, 7.0]
    scale = build_tone_scale(keys, ratios, WHITE)
    assert len(scale) == len(ratios)
    for color, ratio in zip(scale, ratios):
        assert color.contrast(WHITE) == pytest.approx(ratio, abs=0.05)


def test_tone_scale_with_equal_end_ratios():
    key = Color.from_hex("#1565C0")
    scale = build_tone_scale([key, key], [3.0, 4.5], WHITE)
    assert len(scale) == 2
