import logging

import pytest

from palette_harmony.candidates import DEFAULT_LIMIT, generate_candidates, rescore_for_background
from palette_harmony.errors import ErrorCode


@pytest.mark.parametrize("brand", [None, "", "   ", "#12345", "not-a-color"])
def test_missing_or_invalid_brand(brand, small_repository):
    outcome = generate_candidates(brand, small_repository)
    assert not outcome.ok
    assert outcome.error.code is ErrorCode.BRAND_COLOR_NOT_SET


def test_ranked_best_first(small_repository):
    outcome = generate_candidates("#0056FF", small_repository, limit=None)
    assert outcome.ok
    totals = [c.score.total for c in outcome.result.candidates]
    assert totals == sorted(totals, reverse=True)
    assert len(totals) == 15
    assert outcome.result.calculation_time_ms >= 0


def test_neutrals_are_not_candidates(small_repository):
    outcome = generate_candidates("#0056FF", small_repository, limit=None)
    assert all(c.hue_family is not None for c in outcome.result.candidates)


def test_default_limit():
    outcome = generate_candidates("#0056FF")
    assert len(outcome.result.candidates) == DEFAULT_LIMIT


def test_limit(small_repository):
    outcome = generate_candidates("#0056FF", small_repository, limit=4)
    assert len(outcome.result.candidates) == 4


def test_generation_is_idempotent(small_repository):
    first = generate_candidates("#0056ff", small_repository, limit=None).result.candidates
    second = generate_candidates("0056FF", small_repository, limit=None).result.candidates
    assert [c.hex for c in first] == [c.hex for c in second]
    assert [c.score.total for c in first] == [c.score.total for c in second]


def test_invalid_background_falls_back_to_white(small_repository, caplog):
    white = generate_candidates("#0056FF", small_repository, background_hex="#FFFFFF", limit=None)
    with caplog.at_level(logging.WARNING, logger="palette_harmony.candidates"):
        invalid = generate_candidates("#0056FF", small_repository, background_hex="#nope", limit=None)
    assert [c.score.total for c in invalid.result.candidates] == [c.score.total for c in white.result.candidates]
    assert "Invalid background" in caplog.text


def test_short_background_hex_is_accepted(small_repository):
    black = generate_candidates("#0056FF", small_repository, background_hex="000", limit=None)
    long_black = generate_candidates("#0056FF", small_repository, background_hex="#000000", limit=None)
    assert [c.hex for c in black.result.candidates] == [c.hex for c in long_black.result.candidates]


def test_candidate_fields(small_repository):
    candidate = generate_candidates("#0056FF", small_repository, limit=1).result.candidates[0]
    assert candidate.token_id.startswith(candidate.hue_family)
    assert candidate.hex.startswith("#") and len(candidate.hex) == 7
    assert 0 <= candidate.hue < 360


def test_rescore_for_dark_background(small_repository):
    candidates = generate_candidates("#0056FF", small_repository, limit=None).result.candidates
    rescored = rescore_for_background(candidates, "#0056FF", "#121212")

    assert sorted(c.token_id for c in rescored) == sorted(c.token_id for c in candidates)
    totals = [c.score.total for c in rescored]
    assert totals == sorted(totals, reverse=True)

    lightest = min(candidates, key=lambda c: c.step)
    before = lightest.score.breakdown.contrast
    after = next(c for c in rescored if c.token_id == lightest.token_id).score.breakdown.contrast
    assert after > before
