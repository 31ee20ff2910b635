"""
Harmony geometry: target hues per harmony type and circular hue distance.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

HARMONY_RANGE = 30  # Degrees within which a hue counts as on-target
ALL = "all"  # Filter-only value: no hue restriction


class HarmonyType(str, Enum):
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    ANALOGOUS = "analogous"
    SPLIT_COMPLEMENTARY = "split-complementary"
    MONOCHROMATIC = "monochromatic"
    SHADES = "shades"
    COMPOUND = "compound"
    SQUARE = "square"


HarmonyFilterType = Union[HarmonyType, str]


@dataclass(frozen=True)
class HarmonyDefinition:
    harmony_type: HarmonyType
    name: str
    hue_offsets: tuple


_NAMES = {
    HarmonyType.COMPLEMENTARY: "Complementary",
    HarmonyType.TRIADIC: "Triadic",
    HarmonyType.ANALOGOUS: "Analogous",
    HarmonyType.SPLIT_COMPLEMENTARY: "Split Complementary",
    HarmonyType.MONOCHROMATIC: "Monochromatic",
    HarmonyType.SHADES: "Shades",
    HarmonyType.COMPOUND: "Compound",
    HarmonyType.SQUARE: "Square",
}


def normalize_hue(hue: float) -> float:
    """Wrap a hue into [0, 360)."""
    return hue % 360


def circular_distance(hue1: float, hue2: float) -> float:
    """Compute minimum angular distance between two hues (0-180)."""
    diff = abs(hue1 - hue2) % 360
    return min(diff, 360 - diff)


def parse_harmony_type(value) -> HarmonyFilterType:
    """
    Resolve a harmony type from an enum member or its string value.

    Returns HarmonyType, or the string "all".

    Raises:
        ValueError: If the value names no harmony type
    """
    if isinstance(value, HarmonyType):
        return value
    if value == ALL:
        return ALL
    try:
        return HarmonyType(value)
    except ValueError:
        raise ValueError(f"Unknown harmony type: {value!r}")


def target_hues(brand_hue: float, harmony_type: HarmonyType) -> list[float]:
    """Target hue(s) for a harmony type, each in [0, 360)."""
    h = brand_hue
    if harmony_type is HarmonyType.COMPLEMENTARY:
        hues = [h + 180]
    elif harmony_type is HarmonyType.TRIADIC:
        hues = [h + 120, h + 240]
    elif harmony_type is HarmonyType.ANALOGOUS:
        hues = [h - 30, h + 30]
    elif harmony_type is HarmonyType.SPLIT_COMPLEMENTARY:
        hues = [h + 150, h + 210]
    elif harmony_type is HarmonyType.SQUARE:
        hues = [h + 90, h + 180, h + 270]
    elif harmony_type is HarmonyType.COMPOUND:
        hues = [h + 30, h + 180]
    elif harmony_type in (HarmonyType.MONOCHROMATIC, HarmonyType.SHADES):
        # Same hue; variation comes from steps, not hue
        hues = []
    else:
        raise AssertionError(f"Unhandled harmony type: {harmony_type!r}")
    return [normalize_hue(x) for x in hues]


def is_within_range(hue: float, targets: Sequence[float], hue_range: float = HARMONY_RANGE) -> bool:
    """True if hue lies within hue_range degrees of any target."""
    return any(circular_distance(hue, t) <= hue_range for t in targets)


def min_target_distance(hue: float, targets: Sequence[float]) -> float:
    """Distance from hue to the nearest target."""
    return min(circular_distance(hue, t) for t in targets)


def harmony_types() -> list[HarmonyDefinition]:
    """All harmony types with display names and hue offsets from the brand hue."""
    return [
        HarmonyDefinition(t, _NAMES[t], tuple(target_hues(0.0, t)))
        for t in HarmonyType
    ]
