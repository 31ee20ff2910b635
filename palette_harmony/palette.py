"""
Harmony palettes: pick 2-5 accent colors from ranked candidates.

Each harmony type selects differently:
- complementary: one direction, spread over distinct steps
- triadic, analogous, split-complementary, square, compound: round-robin
  over the target directions
- monochromatic, shades: the brand hue itself, spread over lightness steps
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .candidates import generate_candidates, validate_brand_color
from .catalog import CatalogRepository
from .color import Color
from .colorspace import normalize_hex
from .errors import ErrorCode, Outcome
from .harmony import (
    ALL,
    HARMONY_RANGE,
    HarmonyType,
    circular_distance,
    parse_harmony_type,
    target_hues,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MIN_ACCENTS = 2
MAX_ACCENTS = 5
DEFAULT_ACCENTS = 2

VISITS_PER_ACCENT = 2  # Round-robin visit cap, per requested accent


@dataclass(frozen=True)
class PaletteResult:
    brand_color: str
    accent_colors: list  # Hex, unique, never the brand color
    candidates: list  # ScoredCandidate, parallel to accent_colors
    harmony_type: HarmonyType
    accent_count: int


PaletteOutcome = Outcome[PaletteResult]


def clamp_accent_count(accent_count: int) -> int:
    return max(MIN_ACCENTS, min(MAX_ACCENTS, int(accent_count)))


def _candidates_near_hue(candidates: Sequence, hue: float, hue_range: float, excluded: set) -> list:
    """Candidates within hue_range of hue, best score first, skipping excluded hexes and ids."""
    near = [
        c for c in candidates
        if circular_distance(c.hue, hue) <= hue_range
        and normalize_hex(c.hex) not in excluded and c.token_id not in excluded
    ]
    return sorted(near, key=lambda c: -c.score.total)


def _by_lightness(selected: list) -> list:
    return sorted(selected, key=lambda c: -Color.from_hex(c.hex).l)


class _Selection:
    """Accumulates picks while keeping hexes (case-insensitive) and token ids unique."""

    def __init__(self, brand_hex: str):
        self.picked = []
        self.used = {brand_hex}

    def __len__(self):
        return len(self.picked)

    def add(self, candidate) -> None:
        self.picked.append(candidate)
        self.used.add(normalize_hex(candidate.hex))
        self.used.add(candidate.token_id)

    def accepts(self, candidate) -> bool:
        return normalize_hex(candidate.hex) not in self.used and candidate.token_id not in self.used


def _select_complementary(selection: _Selection, candidates, target: float,
                          accent_count: int, hue_range: float) -> list:
    pool = _candidates_near_hue(candidates, target, hue_range, selection.used)

    used_steps = set()
    for candidate in pool:
        if len(selection) >= accent_count:
            break
        if candidate.step not in used_steps and selection.accepts(candidate):
            selection.add(candidate)
            used_steps.add(candidate.step)

    # Fill remaining slots even if steps repeat
    for candidate in pool:
        if len(selection) >= accent_count:
            break
        if selection.accepts(candidate):
            selection.add(candidate)

    return _by_lightness(selection.picked)


def _select_directions(selection: _Selection, candidates, targets: list,
                       accent_count: int, hue_range: float) -> list:
    steps_per_direction = [set() for _ in targets]

    for visit in range(accent_count * VISITS_PER_ACCENT):
        if len(selection) >= accent_count:
            break
        direction = visit % len(targets)
        pool = _candidates_near_hue(candidates, targets[direction], hue_range, selection.used)
        if not pool:
            continue

        used_steps = steps_per_direction[direction]
        fresh = [c for c in pool if c.step not in used_steps]
        pick = fresh[0] if fresh else pool[0]
        selection.add(pick)
        used_steps.add(pick.step)

    return selection.picked


def _select_shades(selection: _Selection, candidates, brand_hue: float,
                   accent_count: int, hue_range: float) -> list:
    pool = _candidates_near_hue(candidates, brand_hue, hue_range, selection.used)

    best_per_step = {}
    seen_hexes = set()
    for candidate in pool:
        hex_value = normalize_hex(candidate.hex)
        if candidate.step not in best_per_step and hex_value not in seen_hexes:
            best_per_step[candidate.step] = candidate
            seen_hexes.add(hex_value)

    steps = sorted(best_per_step)
    if len(steps) > accent_count:
        indices = np.round(np.linspace(0, len(steps) - 1, accent_count)).astype(int)
        steps = [steps[i] for i in indices]

    for step in steps:
        selection.add(best_per_step[step])

    return _by_lightness(selection.picked)


def _select(harmony_type: HarmonyType, brand: Color, brand_hex: str, candidates,
            accent_count: int, hue_range: float) -> list:
    selection = _Selection(brand_hex)
    targets = target_hues(brand.h, harmony_type)

    if harmony_type is HarmonyType.COMPLEMENTARY:
        return _select_complementary(selection, candidates, targets[0], accent_count, hue_range)
    elif harmony_type in (HarmonyType.TRIADIC, HarmonyType.ANALOGOUS,
                          HarmonyType.SPLIT_COMPLEMENTARY, HarmonyType.SQUARE,
                          HarmonyType.COMPOUND):
        return _select_directions(selection, candidates, targets, accent_count, hue_range)
    elif harmony_type in (HarmonyType.MONOCHROMATIC, HarmonyType.SHADES):
        return _select_shades(selection, candidates, brand.h, accent_count, hue_range)
    else:
        raise AssertionError(f"Unhandled harmony type: {harmony_type!r}")


def assemble_palette(brand_hex: Optional[str], harmony_type, candidates: Sequence,
                     accent_count: int = DEFAULT_ACCENTS, *,
                     hue_range: float = HARMONY_RANGE) -> PaletteOutcome:
    """
    Select accent colors for one harmony type from ranked candidates.

    Args:
        brand_hex: Brand color
        harmony_type: HarmonyType or its string value; "all" is rejected
        candidates: ScoredCandidate list, typically every catalog color
        accent_count: Requested accents, clamped to 2-5
        hue_range: Degrees around each target hue that count as on-target

    Returns:
        Outcome with a PaletteResult, or INVALID_HARMONY_TYPE,
        BRAND_COLOR_NOT_SET or PALETTE_GENERATION_FAILED
    """
    try:
        harmony_type = parse_harmony_type(harmony_type)
    except ValueError as e:
        return Outcome.failure(ErrorCode.INVALID_HARMONY_TYPE, str(e))
    if harmony_type == ALL:
        return Outcome.failure(ErrorCode.INVALID_HARMONY_TYPE, '"all" cannot be used to build a palette')

    validation = validate_brand_color(brand_hex)
    if not validation.ok:
        return validation
    brand_hex = validation.result
    brand = Color.from_hex(brand_hex)

    accent_count = clamp_accent_count(accent_count)
    selected = _select(harmony_type, brand, brand_hex, candidates, accent_count, hue_range)

    if len(selected) < MIN_ACCENTS:
        logger.debug("%s palette for %s found %d accents", harmony_type.value, brand_hex, len(selected))
        return Outcome.failure(
            ErrorCode.PALETTE_GENERATION_FAILED,
            f"Not enough {harmony_type.value} candidates for {brand_hex}",
        )

    return Outcome.success(PaletteResult(
        brand_color=brand_hex,
        accent_colors=[c.hex for c in selected],
        candidates=selected,
        harmony_type=harmony_type,
        accent_count=len(selected),
    ))


def generate_harmony_palette(brand_hex: Optional[str], harmony_type,
                             repository: Optional[CatalogRepository] = None, *,
                             background_hex: Optional[str] = None,
                             accent_count: int = DEFAULT_ACCENTS, weights=None) -> PaletteOutcome:
    """
    Score the whole catalog against brand_hex, then assemble one palette.

    Raises:
        CatalogError: If the catalog cannot be loaded or is empty
    """
    if harmony_type == ALL:
        return Outcome.failure(ErrorCode.INVALID_HARMONY_TYPE, '"all" cannot be used to build a palette')

    generated = generate_candidates(brand_hex, repository, background_hex=background_hex,
                                    weights=weights, limit=None)
    if not generated.ok:
        return generated

    return assemble_palette(brand_hex, harmony_type, generated.result.candidates, accent_count)


def generate_all_harmony_palettes(brand_hex: Optional[str],
                                  repository: Optional[CatalogRepository] = None, *,
                                  background_hex: Optional[str] = None,
                                  accent_count: int = DEFAULT_ACCENTS, weights=None) -> Outcome:
    """
    One palette per harmony type from a single candidate generation.

    Returns:
        Outcome with a dict of HarmonyType -> PaletteResult (None where no
        palette could be built), or BRAND_COLOR_NOT_SET

    Raises:
        CatalogError: If the catalog cannot be loaded or is empty
    """
    generated = generate_candidates(brand_hex, repository, background_hex=background_hex,
                                    weights=weights, limit=None)
    if not generated.ok:
        return generated

    candidates = generated.result.candidates
    palettes = {}
    for harmony_type in HarmonyType:
        outcome = assemble_palette(brand_hex, harmony_type, candidates, accent_count)
        palettes[harmony_type] = outcome.result if outcome.ok else None

    return Outcome.success(palettes)
