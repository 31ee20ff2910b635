"""
Tone scales: interpolate key colors, then correct each step to an exact contrast ratio.
"""

import logging
from typing import Callable, Sequence

import numpy as np
from scipy.interpolate import PchipInterpolator

from .color import Color
from .solver import DEFAULT_TOLERANCE, solve_contrast

logger = logging.getLogger(__name__)

Interpolator = Callable[[float], Color]


def _unwrapped_hues(key_colors: Sequence[Color]) -> np.ndarray:
    """Key hues unwrapped along the shortest arc; achromatic keys borrow a neighbor's hue."""
    hues = np.array([c.h for c in key_colors], dtype=np.float64)
    chromatic = [i for i, c in enumerate(key_colors) if not c.is_achromatic]
    if chromatic:
        for i, color in enumerate(key_colors):
            if color.is_achromatic:
                nearest = min(chromatic, key=lambda j: abs(j - i))
                hues[i] = hues[nearest]
    return np.unwrap(hues, period=360)


def create_interpolator(key_colors: Sequence[Color]) -> Interpolator:
    """
    Build a smooth interpolator over key colors in OKLCH, parameterized by t in [0, 1].

    Uses monotone cubic (PCHIP) curves per channel, so lightness and chroma
    never overshoot between neighboring keys.
    """
    if not key_colors:
        raise ValueError("At least one key color is required")

    if len(key_colors) == 1:
        only = key_colors[0]
        return lambda t: only

    positions = np.linspace(0.0, 1.0, len(key_colors))
    channels = np.column_stack([
        [c.l for c in key_colors],
        [c.c for c in key_colors],
        _unwrapped_hues(key_colors),
    ])
    curve = PchipInterpolator(positions, channels, axis=0)

    def interpolate(t: float) -> Color:
        l, c, h = curve(min(1.0, max(0.0, float(t))))
        return Color(l, c, h)

    return interpolate


def generate_scale(key_colors: Sequence[Color], count: int) -> list[Color]:
    """Sample count colors evenly along the key color path."""
    if count <= 1:
        return list(key_colors[:1])
    interpolate = create_interpolator(key_colors)
    return [interpolate(t) for t in np.linspace(0.0, 1.0, count)]


def build_tone_scale(key_colors: Sequence[Color], target_ratios: Sequence[float],
                     background: Color, tolerance: float = DEFAULT_TOLERANCE) -> list[Color]:
    """
    Build one color per target ratio against a single background.

    Each ratio is placed on the key color path by inverse-lerp between the
    first and last key colors' ratios, then corrected with the contrast
    solver. A step is never dropped: if correction does not improve on the
    interpolated color, the interpolated color is kept.
    """
    interpolate = create_interpolator(key_colors)
    first_ratio = key_colors[0].contrast(background)
    last_ratio = key_colors[-1].contrast(background)
    span = last_ratio - first_ratio
    count = len(target_ratios)

    scale = []
    for i, ratio in enumerate(target_ratios):
        if abs(span) < 1e-9:
            t = i / (count - 1) if count > 1 else 0.0
        else:
            t = min(1.0, max(0.0, (ratio - first_ratio) / span))

        base = interpolate(t)
        corrected = solve_contrast(base, background, ratio, tolerance)

        base_error = abs(base.contrast(background) - ratio)
        corrected_error = abs(corrected.contrast(background) - ratio)
        if corrected_error > base_error:
            logger.warning("Contrast correction for ratio %.2f did not converge; keeping interpolated %s",
                           ratio, base.to_hex())
            corrected = base

        scale.append(corrected)

    return scale
