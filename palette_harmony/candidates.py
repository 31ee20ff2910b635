"""
Accent candidate generation: score every chromatic catalog color against a brand color.
"""

import logging
import time
from dataclasses import dataclass, replace
from typing import Optional

from .catalog import CatalogEntry, CatalogRepository
from .color import Color
from .colorspace import normalize_hex, parse_hex, resolve_background_hex
from .errors import ErrorCode, InvalidColorError, Outcome
from .scoring import (
    BalanceScore,
    ScoreBreakdown,
    combine_scores,
    contrast_score,
    cud_score,
    harmony_score,
    normalize_weights,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class ScoredCandidate:
    """A catalog color scored as an accent for one brand color."""
    token_id: str
    hex: str
    hue_family: Optional[str]
    step: int
    hue: float  # OKLCH hue
    score: BalanceScore

    @property
    def display_name(self) -> str:
        family = (self.hue_family or "").replace("-", " ").title()
        return f"{family} {self.step}".strip()


@dataclass(frozen=True)
class CandidateResult:
    candidates: list  # ScoredCandidate, best first
    calculation_time_ms: float


CandidateOutcome = Outcome[CandidateResult]


def validate_brand_color(brand_hex: Optional[str]) -> Outcome:
    """Normalize a brand hex, or fail with BRAND_COLOR_NOT_SET."""
    if not brand_hex or not brand_hex.strip():
        return Outcome.failure(ErrorCode.BRAND_COLOR_NOT_SET, "Brand color is not set")
    try:
        return Outcome.success(normalize_hex(brand_hex))
    except InvalidColorError:
        return Outcome.failure(ErrorCode.BRAND_COLOR_NOT_SET, f"Brand color is invalid: {brand_hex!r}")


def _score_color(brand: Color, color: Color, background: Color, weights) -> BalanceScore:
    breakdown = ScoreBreakdown(
        harmony=harmony_score(brand, color),
        cud=cud_score(color),
        contrast=contrast_score(color, background),
    )
    return combine_scores(breakdown, weights)


def _score_entry(entry: CatalogEntry, brand: Color, background: Color, weights) -> ScoredCandidate:
    color = Color.from_hex(entry.hex)
    return ScoredCandidate(
        token_id=entry.id,
        hex=normalize_hex(entry.hex),
        hue_family=entry.hue_family,
        step=entry.step,
        hue=color.h,
        score=_score_color(brand, color, background, weights),
    )


def sort_candidates(candidates: list) -> list:
    """Sort by total score descending; ties keep their input order."""
    return sorted(candidates, key=lambda c: -c.score.total)


def generate_candidates(brand_hex: Optional[str], repository: Optional[CatalogRepository] = None,
                        *, background_hex: Optional[str] = None, weights=None,
                        limit: Optional[int] = DEFAULT_LIMIT) -> CandidateOutcome:
    """
    Rank every chromatic catalog color as an accent for brand_hex.

    Args:
        brand_hex: Brand color (required)
        repository: Catalog source; a repository over the built-in catalog if omitted
        background_hex: Background for contrast; invalid or missing means white
        weights: ScoreWeights or dict, normalized to sum 100
        limit: Maximum candidates returned (None for all)

    Returns:
        Outcome with a CandidateResult, or BRAND_COLOR_NOT_SET

    Raises:
        CatalogError: If the catalog cannot be loaded or is empty
    """
    start = time.perf_counter()

    validation = validate_brand_color(brand_hex)
    if not validation.ok:
        return validation

    repository = repository or CatalogRepository()
    resolved_bg = resolve_background_hex(background_hex)
    if background_hex and parse_hex(background_hex) is None:
        logger.warning("Invalid background %r, using %s", background_hex, resolved_bg)

    brand = Color.from_hex(validation.result)
    background = Color.from_hex(resolved_bg)
    normalized_weights = normalize_weights(weights)

    scored = [_score_entry(e, brand, background, normalized_weights) for e in repository.chromatic()]
    ranked = sort_candidates(scored)
    if limit is not None:
        ranked = ranked[:max(0, limit)]

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug("Scored %d candidates for %s in %.1fms", len(scored), validation.result, elapsed_ms)

    return Outcome.success(CandidateResult(candidates=ranked, calculation_time_ms=elapsed_ms))


def rescore_for_background(candidates: list, brand_hex: str, background_hex: Optional[str],
                           weights=None) -> list:
    """
    Recompute scores of existing candidates for a new background and re-rank them.

    Raises:
        InvalidColorError: If brand_hex is malformed
    """
    brand = Color.from_hex(brand_hex)
    background = Color.from_hex(resolve_background_hex(background_hex))
    normalized_weights = normalize_weights(weights)

    rescored = [
        replace(candidate, score=_score_color(brand, Color.from_hex(candidate.hex), background, normalized_weights))
        for candidate in candidates
    ]

    return sort_candidates(rescored)

