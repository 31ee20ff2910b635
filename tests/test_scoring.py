import pytest

from palette_harmony.color import Color
from palette_harmony.scoring import (
    DEFAULT_WEIGHTS,
    ScoreBreakdown,
    ScoreWeights,
    combine_scores,
    contrast_score,
    cud_score,
    harmony_score,
    normalize_weights,
    score_candidate,
)

WHITE = Color.from_hex("#FFFFFF")


def _total(weights):
    return weights.harmony + weights.cud + weights.contrast


@pytest.mark.parametrize("weights", [
    None,
    ScoreWeights(1, 1, 1),
    ScoreWeights(7, 2, 1),
    ScoreWeights(0.3, 0.3, 0.4),
    {"harmony": 10},
    {"cud": 0, "contrast": 0},
])
def test_weights_sum_to_100(weights):
    assert _total(normalize_weights(weights)) == 100


def test_rounding_deficit_goes_to_largest_weight():
    assert normalize_weights(ScoreWeights(1, 1, 1)) == ScoreWeights(34, 33, 33)
    assert normalize_weights(ScoreWeights(1, 1, 2)) == ScoreWeights(25, 25, 50)


def test_zero_weights_fall_back_to_defaults():
    assert normalize_weights(ScoreWeights(0, 0, 0)) == DEFAULT_WEIGHTS


def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        normalize_weights(ScoreWeights(-1, 50, 50))


def test_unknown_weight_key_rejected():
    with pytest.raises(ValueError):
        normalize_weights({"vibrancy": 20})


def test_harmony_score_curve():
    brand = Color(0.6, 0.15, 260)
    assert harmony_score(brand, Color(0.6, 0.1, 260)) == pytest.approx(100)
    assert harmony_score(brand, Color(0.6, 0.1, 80)) == pytest.approx(30)
    assert harmony_score(brand, Color(0.6, 0.1, 350)) == pytest.approx(65)


def test_harmony_score_neutral_for_gray():
    assert harmony_score(Color.from_hex("#777777"), Color(0.6, 0.1, 80)) == 50


def test_cud_score_is_high_on_cud_color():
    assert cud_score(Color.from_hex("#FF2800")) > 95


def test_contrast_score_curve():
    assert contrast_score(Color.from_hex("#FFFFFF"), WHITE) == pytest.approx(0)
    assert contrast_score(Color.from_hex("#000000"), WHITE) == 100


def test_contrast_score_at_aa():
    gray = Color.from_hex("#767676")
    ratio = gray.contrast(WHITE)
    expected = (ratio - 1) / 6 * 100
    assert contrast_score(gray, WHITE) == pytest.approx(expected)
    assert expected == pytest.approx(58.3, abs=1.0)


def test_combine_scores_weighted_sum():
    score = combine_scores(ScoreBreakdown(100, 50, 0), DEFAULT_WEIGHTS)
    assert score.total == pytest.approx(55)
    assert score.display_total == 55.0


@pytest.mark.parametrize("brand, candidate, background", [
    ("#0056FF", "#FFB300", "#FFFFFF"),
    ("#0056FF", "#0056FF", "#0056FF"),
    ("#777777", "#000000", "#000000"),
    ("#E53935", "#43A047", "#121212"),
])
def test_score_components_in_range(brand, candidate, background):
    score = score_candidate(brand, candidate, background)
    assert 0 <= score.total <= 100
    for value in (score.breakdown.harmony, score.breakdown.cud, score.breakdown.contrast):
        assert 0 <= value <= 100
    assert _total(score.weights) == 100


def test_score_accepts_custom_weights():
    score = score_candidate("#0056FF", "#FFB300", "#FFFFFF", {"harmony": 100, "cud": 0, "contrast": 0})
    assert score.total == pytest.approx(score.breakdown.harmony)
