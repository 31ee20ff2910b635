import numpy as np
import pytest

from palette_harmony.colorspace import (
    contrast_ratio,
    in_gamut,
    normalize_hex,
    oklch_to_rgb,
    parse_hex,
    resolve_background_hex,
    rgb_to_oklch,
    wcag_level,
)
from palette_harmony.errors import InvalidColorError


@pytest.mark.parametrize("value, expected", [
    ("#0056ff", "#0056FF"),
    ("0056FF", "#0056FF"),
    ("#abc", "#AABBCC"),
    ("  fff ", "#FFFFFF"),
])
def test_normalize_hex_accepts_common_forms(value, expected):
    assert normalize_hex(value) == expected


@pytest.mark.parametrize("value", ["", "#12345", "#GGGGGG", "blue", None, 0x0056FF])
def test_normalize_hex_rejects_garbage(value):
    with pytest.raises(InvalidColorError):
        normalize_hex(value)


def test_invalid_color_error_is_a_value_error():
    with pytest.raises(ValueError):
        normalize_hex("nope")


def test_parse_hex_returns_none_for_malformed():
    assert parse_hex("#12") is None
    np.testing.assert_allclose(parse_hex("#FF0000"), [1.0, 0.0, 0.0])


@pytest.mark.parametrize("value", [None, "", "   ", "not-a-color"])
def test_background_falls_back_to_white(value):
    assert resolve_background_hex(value) == "#FFFFFF"


def test_background_is_normalized():
    assert resolve_background_hex("000") == "#000000"


def test_black_on_white_is_21():
    ratio = contrast_ratio(np.array([0.0, 0.0, 0.0]), np.array([1.0, 1.0, 1.0]))
    assert ratio == pytest.approx(21.0)


def test_contrast_is_symmetric():
    a = parse_hex("#0056FF")
    b = parse_hex("#F5F5F5")
    assert contrast_ratio(a, b) == pytest.approx(contrast_ratio(b, a))


@pytest.mark.parametrize("ratio, level", [
    (21.0, "AAA"),
    (7.0, "AAA"),
    (4.5, "AA"),
    (3.0, "AA-large"),
    (2.99, "fail"),
])
def test_wcag_level(ratio, level):
    assert wcag_level(ratio) == level


def test_oklch_round_trip():
    rgb = parse_hex("#3A7BD5")
    back = oklch_to_rgb(rgb_to_oklch(rgb))
    np.testing.assert_allclose(back[0], rgb, atol=1e-6)


def test_in_gamut_is_row_wise():
    rows = np.array([[0.5, 0.5, 0.5], [1.2, 0.0, 0.0]])
    assert list(in_gamut(rows)) == [True, False]
