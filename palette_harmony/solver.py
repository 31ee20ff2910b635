"""
Contrast solver: find a color with a given WCAG contrast ratio against a background.

General hues keep their OKLCH hue and chroma and bisect lightness on both
sides of the background. Warm hues (yellow/orange) lose almost all chroma
near the ends of the lightness axis, so they are solved on the CIE L* tone
axis instead, re-maximizing chroma at every trial tone.

The solver never fails: when the target cannot be reached it returns the
closest color it found.
"""

import logging
import math
from typing import Callable, Optional

import numpy as np

from .color import Color
from .colorspace import MAX_CONTRAST_RATIO, lch_to_lab, max_lab_chroma

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_TOLERANCE = 0.01
LIGHTNESS_ITERATIONS = 20
TONE_ITERATIONS = 25

# OKLCH hue range treated as chroma-constrained
WARM_HUE_RANGE = (70.0, 110.0)

PREFERRED_MIN_TONE = 33.0  # Darkest tone that still keeps warm hues vivid
# Off light backgrounds the dark search stops at PREFERRED_MIN_TONE; tones down to the floor are never tried
MIN_TONE_FLOOR = 20.0  # Absolute darkest tone for unreachable requests
LIGHT_BACKGROUND_TONE = 90.0
WARM_CHROMA_FACTOR = 0.95  # Fraction of the gamut-boundary chroma to use
VIVID_TONE_PROBES = np.arange(20.0, 100.0, 5.0)
DARK_PREFERENCE_MIN_RATIO = 3.0
DARK_PREFERENCE_SHARE = 0.8


def is_chroma_constrained_hue(hue: float) -> bool:
    """True for OKLCH hues whose chroma collapses at extreme lightness."""
    low, high = WARM_HUE_RANGE
    return low <= hue % 360 <= high


# =============================================================================
# Bisection
# =============================================================================

def _bisect(make_color: Callable[[float], Color], background: Color,
            low: float, high: float, pivot: float,
            target: float, tolerance: float, iterations: int) -> tuple:
    """
    Bisect one side of the background for the target ratio.

    Contrast grows with distance from the pivot (the background's position on
    the axis), so below the pivot a low ratio moves the search down and above
    it a low ratio moves the search up.

    Returns:
        (best color, |ratio - target|) over all trials
    """
    best: Optional[Color] = None
    best_diff = math.inf

    for _ in range(iterations):
        mid = (low + high) / 2
        candidate = make_color(mid)
        ratio = candidate.contrast(background)
        diff = abs(ratio - target)

        if diff < best_diff:
            best, best_diff = candidate, diff

        if diff <= tolerance:
            break

        if mid < pivot:
            if ratio < target:
                high = mid
            else:
                low = mid
        else:
            if ratio < target:
                low = mid
            else:
                high = mid

    return best, best_diff


def _pick_branch(dark: tuple, light: tuple, tolerance: float,
                 reference: float, position: Callable[[Color], float]) -> Color:
    """Choose between the dark and light search results."""
    dark_color, dark_diff = dark
    light_color, light_diff = light
    dark_valid = dark_diff <= tolerance * 2
    light_valid = light_diff <= tolerance * 2

    if dark_valid and light_valid:
        d0 = abs(position(dark_color) - reference)
        d1 = abs(position(light_color) - reference)
        return dark_color if d0 < d1 else light_color
    if dark_valid:
        return dark_color
    if light_valid:
        return light_color
    return dark_color if dark_diff < light_diff else light_color


# =============================================================================
# General Hues
# =============================================================================

def _solve_lightness(seed: Color, background: Color, target: float, tolerance: float) -> Color:
    bg_l = background.l

    dark = _bisect(seed.with_lightness, background, 0.0, bg_l, bg_l,
                   target, tolerance, LIGHTNESS_ITERATIONS)
    light = _bisect(seed.with_lightness, background, bg_l, 1.0, bg_l,
                    target, tolerance, LIGHTNESS_ITERATIONS)

    logger.debug("lightness search: dark diff=%.4f light diff=%.4f", dark[1], light[1])
    return _pick_branch(dark, light, tolerance, seed.l, lambda c: c.l)


# =============================================================================
# Chroma-Constrained Hues
# =============================================================================

def _color_at_tone(hue: float, tone: float) -> Color:
    """Most vivid in-gamut color (with safety margin) at a tone and LCh hue."""
    chroma = max_lab_chroma(tone, hue) * WARM_CHROMA_FACTOR
    return Color.from_lab(lch_to_lab(tone, chroma, hue))


def find_vivid_tone(hue: float) -> float:
    """Probe tones and return the one with the highest achievable chroma at a LCh hue."""
    chromas = [max_lab_chroma(float(t), hue) for t in VIVID_TONE_PROBES]
    return float(VIVID_TONE_PROBES[int(np.argmax(chromas))])


def _solve_tone(seed: Color, background: Color, target: float, tolerance: float) -> Color:
    lab = seed.lab
    hue = math.degrees(math.atan2(lab[2], lab[1])) % 360
    source_tone = float(lab[0])
    bg_tone = background.tone

    vivid_tone = find_vivid_tone(hue)
    preferred_min = min(PREFERRED_MIN_TONE, vivid_tone)
    is_light_background = bg_tone > LIGHT_BACKGROUND_TONE

    def make_color(tone: float) -> Color:
        return _color_at_tone(hue, tone)

    # Beyond what vivid tones can reach: darken proportionally toward the floor
    reach = make_color(preferred_min).contrast(background)
    if is_light_background and target > reach:
        excess = (target - reach) / (MAX_CONTRAST_RATIO - reach)
        excess = min(1.0, max(0.0, excess))
        tone = preferred_min - (preferred_min - MIN_TONE_FLOOR) * excess
        logger.debug("warm hue %.1f: ratio %.2f beyond reach %.2f, tone %.1f",
                     hue, target, reach, tone)
        return make_color(max(MIN_TONE_FLOOR, tone))

    dark = _bisect(make_color, background, min(preferred_min, bg_tone), bg_tone, bg_tone,
                   target, tolerance, TONE_ITERATIONS)
    light = _bisect(make_color, background, bg_tone, 100.0, bg_tone,
                    target, tolerance, TONE_ITERATIONS)

    logger.debug("tone search (hue %.1f): dark diff=%.4f light diff=%.4f",
                 hue, dark[1], light[1])

    # On light backgrounds legible ratios come from the dark side
    if is_light_background and target >= DARK_PREFERENCE_MIN_RATIO:
        dark_color, dark_diff = dark
        if dark_diff <= tolerance * 2 or light[1] > tolerance * 2:
            return dark_color
        if dark_color.contrast(background) >= target * DARK_PREFERENCE_SHARE:
            return dark_color

    return _pick_branch(dark, light, tolerance, source_tone, lambda c: c.tone)


# =============================================================================
# Public API
# =============================================================================

def solve_contrast(seed: Color, background: Color, target_ratio: float,
                   tolerance: float = DEFAULT_TOLERANCE) -> Color:
    """
    Adjust a seed color so its contrast against background hits target_ratio.

    Args:
        seed: Color whose hue (and, for general hues, chroma) is preserved
        background: Background to measure contrast against
        target_ratio: Desired WCAG ratio (1-21)
        tolerance: Accepted absolute error on the ratio

    Returns:
        A color within tolerance of the target when one exists in sRGB,
        otherwise the closest color found. Never None.
    """
    if abs(seed.contrast(background) - target_ratio) <= tolerance:
        return seed

    if not seed.is_achromatic and is_chroma_constrained_hue(seed.h):
        return _solve_tone(seed, background, target_ratio, tolerance)
    return _solve_lightness(seed, background, target_ratio, tolerance)
