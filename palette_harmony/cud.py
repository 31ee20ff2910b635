"""
Color Universal Design (CUD) recommended color set, ver.4.

20 colors that stay distinguishable under common color-vision deficiencies:
9 accent, 7 base and 4 neutral.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np
from scipy.spatial.distance import cdist

from .color import Color
from .colorspace import rgb_to_oklab

# OKLab distance thresholds for match levels
DELTA_E_EXACT = 0.03
DELTA_E_NEAR = 0.06


@dataclass(frozen=True)
class CudColor:
    id: str
    group: str  # 'accent', 'base', 'neutral'
    name: str
    rgb: tuple

    @property
    def hex(self) -> str:
        return "#{:02X}{:02X}{:02X}".format(*self.rgb)


@dataclass(frozen=True)
class CudMatch:
    """Nearest CUD color to some input."""
    nearest: CudColor
    delta_e: float  # Euclidean OKLab distance
    match_level: str  # 'exact', 'near', 'off'


CUD_COLOR_SET: tuple = (
    # Accent: high chroma, readable at small sizes
    CudColor("red", "accent", "Red", (255, 40, 0)),
    CudColor("orange", "accent", "Orange", (255, 153, 0)),
    CudColor("yellow", "accent", "Yellow", (250, 245, 0)),
    CudColor("green", "accent", "Green", (53, 161, 107)),
    CudColor("blue", "accent", "Blue", (0, 65, 255)),
    CudColor("sky-blue", "accent", "Sky Blue", (102, 204, 255)),
    CudColor("pink", "accent", "Pink", (255, 153, 160)),
    CudColor("purple", "accent", "Purple", (154, 0, 121)),
    CudColor("brown", "accent", "Brown", (102, 51, 0)),
    # Base: light, low chroma, for large areas
    CudColor("bright-pink", "base", "Bright Pink", (255, 202, 191)),
    CudColor("cream", "base", "Cream", (255, 255, 128)),
    CudColor("bright-yellow-green", "base", "Bright Yellow-Green", (216, 242, 85)),
    CudColor("bright-green", "base", "Bright Green", (119, 217, 168)),
    CudColor("bright-sky-blue", "base", "Bright Sky Blue", (191, 228, 255)),
    CudColor("beige", "base", "Beige", (255, 202, 128)),
    CudColor("bright-purple", "base", "Bright Purple", (201, 172, 230)),
    # Neutral
    CudColor("white", "neutral", "White", (255, 255, 255)),
    CudColor("light-gray", "neutral", "Light Gray", (200, 200, 203)),
    CudColor("gray", "neutral", "Gray", (132, 145, 158)),
    CudColor("black", "neutral", "Black", (0, 0, 0)),
)

_CUD_RGB = np.array([c.rgb for c in CUD_COLOR_SET], dtype=np.float64) / 255.0
_CUD_OKLAB = rgb_to_oklab(_CUD_RGB)


def find_nearest_cud_color(color: Union[Color, str]) -> CudMatch:
    """
    Nearest CUD color by OKLab distance.

    Raises:
        InvalidColorError: If color is a malformed hex string
    """
    if isinstance(color, str):
        color = Color.from_hex(color)
    distances = cdist(rgb_to_oklab(color.rgb), _CUD_OKLAB)[0]
    index = int(np.argmin(distances))
    delta_e = float(distances[index])

    if delta_e <= DELTA_E_EXACT:
        level = "exact"
    elif delta_e <= DELTA_E_NEAR:
        level = "near"
    else:
        level = "off"

    return CudMatch(nearest=CUD_COLOR_SET[index], delta_e=delta_e, match_level=level)
