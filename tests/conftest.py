import pytest

from palette_harmony.candidates import ScoredCandidate
from palette_harmony.catalog import CatalogEntry, CatalogRepository, Category
from palette_harmony.color import Color
from palette_harmony.scoring import DEFAULT_WEIGHTS, BalanceScore, ScoreBreakdown


def make_candidate(hue, total, step=500, token_id=None, lightness=0.6):
    """A scored candidate at an OKLCH hue with a fixed total score."""
    color = Color(lightness, 0.1, hue)
    return ScoredCandidate(
        token_id=token_id or f"test-{hue:g}-{step}",
        hex=color.to_hex(),
        hue_family="blue",
        step=step,
        hue=float(hue),
        score=BalanceScore(total=total, breakdown=ScoreBreakdown(total, total, total),
                           weights=DEFAULT_WEIGHTS),
    )


@pytest.fixture
def small_catalog():
    """Blue, yellow and orange families over five steps, plus two grays."""
    families = {"blue": 264.0, "yellow": 100.0, "orange": 55.0}
    steps = {100: 0.90, 300: 0.78, 500: 0.64, 700: 0.49, 900: 0.36}
    entries = []
    for family, hue in families.items():
        for step, lightness in steps.items():
            entries.append(CatalogEntry(
                id=f"{family}-{step}",
                hex=Color(lightness, 0.15, hue).to_hex(),
                hue_family=family,
                step=step,
            ))
    entries.append(CatalogEntry("gray-100", "#EEEEEE", None, 100, Category.NEUTRAL))
    entries.append(CatalogEntry("gray-900", "#222222", None, 900, Category.NEUTRAL))
    return entries


@pytest.fixture
def small_repository(small_catalog):
    return CatalogRepository(loader=lambda: small_catalog)
