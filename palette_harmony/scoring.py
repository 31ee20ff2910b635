"""
Balance score: how well a catalog color works as an accent for a brand color.

Three sub-scores (0-100) are combined with weights that always sum to 100:
- harmony: hue closeness to the brand color
- cud: closeness to the colorblind-safe CUD reference set
- contrast: WCAG contrast against the background
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional, Union

from .color import Color
from .cud import find_nearest_cud_color
from .harmony import circular_distance


# =============================================================================
# Constants
# =============================================================================

NEUTRAL_HARMONY_SCORE = 50.0  # Used when either hue is undefined
HARMONY_FALLOFF = 70.0  # Points lost at 180 degrees
CUD_DELTA_E_LIMIT = 0.20  # OKLab distance scoring 0
CONTRAST_SATURATION_RATIO = 7.0  # Ratio scoring 100


@dataclass(frozen=True)
class ScoreWeights:
    harmony: float = 40
    cud: float = 30
    contrast: float = 30


DEFAULT_WEIGHTS = ScoreWeights()

_WEIGHT_KEYS = ("harmony", "cud", "contrast")  # Also the tie-break order


@dataclass(frozen=True)
class ScoreBreakdown:
    harmony: float
    cud: float
    contrast: float


@dataclass(frozen=True)
class BalanceScore:
    total: float
    breakdown: ScoreBreakdown
    weights: ScoreWeights

    @property
    def display_total(self) -> float:
        return round(self.total, 1)


def normalize_weights(weights: Optional[Union[ScoreWeights, dict]] = None) -> ScoreWeights:
    """
    Scale weights to integers summing to exactly 100.

    Missing keys take their default. All-zero weights fall back to the
    defaults. Each share is floored and the rounding deficit goes to the
    largest input weight (ties: harmony, cud, contrast).

    Raises:
        ValueError: If any weight is negative
    """
    if weights is None:
        weights = DEFAULT_WEIGHTS
    if isinstance(weights, dict):
        unknown = set(weights) - set(_WEIGHT_KEYS)
        if unknown:
            raise ValueError(f"Unknown weight keys: {sorted(unknown)}")
        weights = ScoreWeights(**{**asdict(DEFAULT_WEIGHTS), **weights})

    values = [float(getattr(weights, k)) for k in _WEIGHT_KEYS]
    if any(v < 0 for v in values):
        raise ValueError(f"Weights must be non-negative: {weights}")

    total = sum(values)
    if total == 0:
        return DEFAULT_WEIGHTS

    shares = [math.floor(v / total * 100) for v in values]
    largest = values.index(max(values))
    shares[largest] += 100 - sum(shares)

    return ScoreWeights(*shares)


def harmony_score(brand: Color, candidate: Color) -> float:
    """100 at the brand hue, falling linearly to 30 at the opposite hue."""
    if brand.is_achromatic or candidate.is_achromatic:
        return NEUTRAL_HARMONY_SCORE
    distance = circular_distance(brand.h, candidate.h)
    return max(0.0, 100 - distance / 180 * HARMONY_FALLOFF)


def cud_score(candidate: Color) -> float:
    """100 on a CUD color, 0 at CUD_DELTA_E_LIMIT or further."""
    delta_e = find_nearest_cud_color(candidate).delta_e
    score = 100 - delta_e / CUD_DELTA_E_LIMIT * 100
    return max(0.0, min(100.0, score))


def contrast_score(candidate: Color, background: Color) -> float:
    """0 at ratio 1, 100 at ratio 7 and above."""
    ratio = candidate.contrast(background)
    score = (ratio - 1) / (CONTRAST_SATURATION_RATIO - 1) * 100
    return max(0.0, min(100.0, score))


def combine_scores(breakdown: ScoreBreakdown, weights: ScoreWeights) -> BalanceScore:
    total = (
        breakdown.harmony * weights.harmony / 100
        + breakdown.cud * weights.cud / 100
        + breakdown.contrast * weights.contrast / 100
    )
    return BalanceScore(total=max(0.0, min(100.0, total)), breakdown=breakdown, weights=weights)


def score_candidate(brand: Union[Color, str], candidate: Union[Color, str],
                    background: Union[Color, str], weights=None) -> BalanceScore:
    """
    Score a candidate accent for a brand color on a background.

    Colors may be Color values or hex strings.

    Raises:
        InvalidColorError: If a hex string is malformed
    """
    brand = _as_color(brand)
    candidate = _as_color(candidate)
    background = _as_color(background)

    breakdown = ScoreBreakdown(
        harmony=harmony_score(brand, candidate),
        cud=cud_score(candidate),
        contrast=contrast_score(candidate, background),
    )
    return combine_scores(breakdown, normalize_weights(weights))


def _as_color(value: Union[Color, str]) -> Color:
    if isinstance(value, Color):
        return value
    return Color.from_hex(value)
