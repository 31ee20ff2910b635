"""
Immutable OKLCH color value.
"""

import math
from dataclasses import dataclass, field

import numpy as np

from .colorspace import (
    contrast_ratio,
    in_gamut,
    lab_to_rgb,
    max_oklch_chroma,
    oklch_to_rgb,
    parse_hex,
    rgb_to_hex,
    rgb_to_lab,
    rgb_to_oklch,
)
from .errors import InvalidColorError

ACHROMATIC_CHROMA = 0.01  # Below this OKLCH chroma the hue is meaningless


@dataclass(frozen=True)
class Color:
    """
    A color in OKLCH, clamped into the sRGB gamut on construction.

    l: perceptual lightness (0-1)
    c: chroma (>= 0), reduced at fixed l/h until the color fits sRGB
    h: hue in degrees (0-360)
    """
    l: float
    c: float
    h: float
    _rgb: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        l = min(1.0, max(0.0, float(self.l)))
        c = max(0.0, float(self.c))
        h = float(self.h)
        h = 0.0 if math.isnan(h) else h % 360

        rgb = oklch_to_rgb(np.array([l, c, h]))
        if not in_gamut(rgb)[0]:
            c = max_oklch_chroma(l, h)
            rgb = oklch_to_rgb(np.array([l, c, h]))

        object.__setattr__(self, "l", l)
        object.__setattr__(self, "c", c)
        object.__setattr__(self, "h", h)
        object.__setattr__(self, "_rgb", np.clip(rgb[0], 0.0, 1.0))

    @classmethod
    def from_rgb(cls, rgb) -> "Color":
        """Build from an sRGB triple in [0, 1]; out-of-range channels are clipped."""
        rgb = np.clip(np.asarray(rgb, dtype=np.float64).reshape(-1), 0.0, 1.0)
        l, c, h = rgb_to_oklch(rgb)[0]
        return cls(l, c, h)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Build from a hex string.

        Raises:
            InvalidColorError: If the value is not a hex color
        """
        rgb = parse_hex(value)
        if rgb is None:
            raise InvalidColorError(f"Invalid hex color: {value!r}")
        return cls.from_rgb(rgb)

    @classmethod
    def from_lab(cls, lab) -> "Color":
        """Build from a CIE LAB row (L* 0-100)."""
        return cls.from_rgb(lab_to_rgb(np.asarray(lab, dtype=np.float64))[0])

    @property
    def rgb(self) -> np.ndarray:
        return self._rgb.copy()

    @property
    def lab(self) -> np.ndarray:
        """CIE LAB coordinates of the clamped sRGB color."""
        return rgb_to_lab(self._rgb)[0]

    @property
    def tone(self) -> float:
        """CIE L* (0-100)."""
        return float(self.lab[0])

    @property
    def is_achromatic(self) -> bool:
        return self.c < ACHROMATIC_CHROMA

    def to_hex(self) -> str:
        return rgb_to_hex(self._rgb)

    def with_lightness(self, lightness: float) -> "Color":
        return Color(lightness, self.c, self.h)

    def contrast(self, other: "Color") -> float:
        """WCAG contrast ratio against another color."""
        return contrast_ratio(self._rgb, other._rgb)
