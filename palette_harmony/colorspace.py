"""
Color space primitives: sRGB, OKLab/OKLCH, CIE L*a*b*, hex codecs and WCAG contrast.

All conversion functions take and return float arrays of shape (n, 3).
sRGB values are in [0, 1]; they are only scaled to 0-255 at the hex boundary.
"""

import math
import re
from typing import Optional

import numpy as np

from .errors import InvalidColorError


# =============================================================================
# Constants
# =============================================================================

DEFAULT_BACKGROUND_HEX = "#FFFFFF"

GAMUT_EPSILON = 1e-6  # Slack when testing linear sRGB against [0, 1]
MAX_OKLCH_CHROMA = 0.4  # Upper bound of any sRGB chroma in OKLCH
MAX_LAB_CHROMA = 150.0  # Upper bound of any sRGB chroma in CIE LCh
CHROMA_SEARCH_SAMPLES = 64
CHROMA_SEARCH_PASSES = 3

WCAG_RATIO_AA_LARGE = 3.0
WCAG_RATIO_AA = 4.5
WCAG_RATIO_AAA = 7.0
MAX_CONTRAST_RATIO = 21.0

_HEX_PATTERN = re.compile(r"^#[0-9A-F]{6}$")


# =============================================================================
# Hex Codec
# =============================================================================

def normalize_hex(value: str) -> str:
    """
    Normalize a hex color to '#RRGGBB' (uppercase).

    Accepts 3 or 6 digits, any case, with or without the leading '#'.

    Raises:
        InvalidColorError: If the value is not a hex color
    """
    if not isinstance(value, str):
        raise InvalidColorError(f"Invalid hex color: {value!r}")

    normalized = value.strip().upper()
    if not normalized.startswith("#"):
        normalized = f"#{normalized}"

    # Expand #RGB to #RRGGBB
    if len(normalized) == 4:
        r, g, b = normalized[1], normalized[2], normalized[3]
        normalized = f"#{r}{r}{g}{g}{b}{b}"

    if not _HEX_PATTERN.match(normalized):
        raise InvalidColorError(f"Invalid hex color: {value!r}")

    return normalized


def resolve_background_hex(value: Optional[str]) -> str:
    """Normalize a background hex, falling back to white when missing or invalid."""
    if not value or not value.strip():
        return DEFAULT_BACKGROUND_HEX
    try:
        return normalize_hex(value)
    except InvalidColorError:
        return DEFAULT_BACKGROUND_HEX


def parse_hex(value: str) -> Optional[np.ndarray]:
    """Parse a hex color to an sRGB triple in [0, 1], or None if malformed."""
    try:
        normalized = normalize_hex(value)
    except InvalidColorError:
        return None
    channels = [int(normalized[i:i + 2], 16) for i in (1, 3, 5)]
    return np.array(channels, dtype=np.float64) / 255.0


def rgb_to_hex(rgb: np.ndarray) -> str:
    """Convert an sRGB triple in [0, 1] to '#RRGGBB'."""
    rgb = np.asarray(rgb, dtype=np.float64).reshape(-1)
    channels = np.round(np.clip(rgb, 0.0, 1.0) * 255).astype(int)
    return f"#{channels[0]:02X}{channels[1]:02X}{channels[2]:02X}"


# =============================================================================
# sRGB Transfer
# =============================================================================

def _as_rows(values: np.ndarray) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    if values.ndim == 1:
        values = values.reshape(1, -1)
    return values


def srgb_to_linear(rgb: np.ndarray) -> np.ndarray:
    """Remove the sRGB gamma curve."""
    rgb = np.asarray(rgb, dtype=np.float64)
    mask = rgb > 0.04045
    return np.where(mask, ((np.abs(rgb) + 0.055) / 1.055) ** 2.4, rgb / 12.92)


def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
    """Apply the sRGB gamma curve (values are not clipped)."""
    linear = np.asarray(linear, dtype=np.float64)
    mask = linear > 0.0031308
    return np.where(mask, 1.055 * np.power(np.clip(linear, 0, None), 1/2.4) - 0.055, 12.92 * linear)


def in_gamut(rgb: np.ndarray) -> np.ndarray:
    """Row-wise test that sRGB values fall inside [0, 1]."""
    rgb = _as_rows(rgb)
    return np.all((rgb >= -GAMUT_EPSILON) & (rgb <= 1 + GAMUT_EPSILON), axis=1)


# =============================================================================
# OKLab / OKLCH
# =============================================================================

def rgb_to_oklab(rgb: np.ndarray) -> np.ndarray:
    """Convert sRGB (0-1) to OKLab."""
    linear = srgb_to_linear(_as_rows(rgb))
    r, g, b = linear[:, 0], linear[:, 1], linear[:, 2]

    # Linear sRGB to cone response
    l = 0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b
    m = 0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b
    s = 0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b

    l_, m_, s_ = np.cbrt(l), np.cbrt(m), np.cbrt(s)

    L = 0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_
    a = 1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_
    b_val = 0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_

    return np.column_stack([L, a, b_val])


def oklab_to_rgb(oklab: np.ndarray) -> np.ndarray:
    """Convert OKLab to sRGB (0-1). Out-of-gamut values are returned unclipped."""
    oklab = _as_rows(oklab)
    L, a, b = oklab[:, 0], oklab[:, 1], oklab[:, 2]

    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.2914855480 * b

    l, m, s = l_**3, m_**3, s_**3

    r = 4.0767416621 * l - 3.3077115913 * m + 0.2309699292 * s
    g = -1.2684380046 * l + 2.6097574011 * m - 0.3413193965 * s
    b_out = -0.0041960863 * l - 0.7034186147 * m + 1.7076147010 * s

    return linear_to_srgb(np.column_stack([r, g, b_out]))


def oklab_to_oklch(oklab: np.ndarray) -> np.ndarray:
    """Convert OKLab to OKLCH (hue in degrees, 0-360)."""
    oklab = _as_rows(oklab)
    chroma = np.hypot(oklab[:, 1], oklab[:, 2])
    hue = np.degrees(np.arctan2(oklab[:, 2], oklab[:, 1])) % 360
    return np.column_stack([oklab[:, 0], chroma, hue])


def oklch_to_oklab(oklch: np.ndarray) -> np.ndarray:
    """Convert OKLCH to OKLab."""
    oklch = _as_rows(oklch)
    hue = np.radians(oklch[:, 2])
    return np.column_stack([oklch[:, 0], oklch[:, 1] * np.cos(hue), oklch[:, 1] * np.sin(hue)])


def rgb_to_oklch(rgb: np.ndarray) -> np.ndarray:
    """Convert sRGB (0-1) to OKLCH."""
    return oklab_to_oklch(rgb_to_oklab(rgb))


def oklch_to_rgb(oklch: np.ndarray) -> np.ndarray:
    """Convert OKLCH to sRGB (0-1), unclipped."""
    return oklab_to_rgb(oklch_to_oklab(oklch))


# =============================================================================
# CIE L*a*b* (tone axis)
# =============================================================================

def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert sRGB (0-1) to CIE LAB (D65)."""
    rgb_linear = srgb_to_linear(_as_rows(rgb))

    # RGB to XYZ matrix
    r, g, b = rgb_linear[:, 0], rgb_linear[:, 1], rgb_linear[:, 2]
    x = r * 0.4124564 + g * 0.3575761 + b * 0.1804375
    y = r * 0.2126729 + g * 0.7151522 + b * 0.0721750
    z = r * 0.0193339 + g * 0.1191920 + b * 0.9503041

    xn, yn, zn = 0.95047, 1.0, 1.08883
    x, y, z = x / xn, y / yn, z / zn

    epsilon = 0.008856
    kappa = 903.3
    fx = np.where(x > epsilon, np.cbrt(x), (kappa * x + 16) / 116)
    fy = np.where(y > epsilon, np.cbrt(y), (kappa * y + 16) / 116)
    fz = np.where(z > epsilon, np.cbrt(z), (kappa * z + 16) / 116)

    L = 116 * fy - 16
    a = 500 * (fx - fy)
    b_val = 200 * (fy - fz)

    return np.column_stack([L, a, b_val])


def lab_to_rgb(lab: np.ndarray) -> np.ndarray:
    """Convert CIE LAB to sRGB (0-1), unclipped."""
    lab = _as_rows(lab)
    L, a, b = lab[:, 0], lab[:, 1], lab[:, 2]

    fy = (L + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    epsilon = 0.008856
    kappa = 903.3

    x = np.where(fx**3 > epsilon, fx**3, (116 * fx - 16) / kappa)
    y = np.where(L > kappa * epsilon, ((L + 16) / 116) ** 3, L / kappa)
    z = np.where(fz**3 > epsilon, fz**3, (116 * fz - 16) / kappa)

    x = x * 0.95047
    z = z * 1.08883

    r = x * 3.2404542 - y * 1.5371385 - z * 0.4985314
    g = -x * 0.9692660 + y * 1.8760108 + z * 0.0415560
    b_out = x * 0.0556434 - y * 0.2040259 + z * 1.0572252

    return linear_to_srgb(np.column_stack([r, g, b_out]))


def lch_to_lab(lightness: float, chroma: float, hue: float) -> np.ndarray:
    """Polar CIE LCh to a single LAB row."""
    rad = math.radians(hue)
    return np.array([[lightness, chroma * math.cos(rad), chroma * math.sin(rad)]])


# =============================================================================
# Gamut Boundary
# =============================================================================

def _max_chroma(to_rgb, lightness: float, hue: float, upper: float) -> float:
    """
    Largest chroma at (lightness, hue) that still maps inside sRGB.

    Samples a chroma grid, narrows to the cell containing the boundary and
    repeats, so the result is within upper / SAMPLES**PASSES of the boundary.
    """
    low, high = 0.0, upper
    for _ in range(CHROMA_SEARCH_PASSES):
        chromas = np.linspace(low, high, CHROMA_SEARCH_SAMPLES)
        rows = np.column_stack([
            np.full_like(chromas, lightness),
            chromas,
            np.full_like(chromas, hue),
        ])
        ok = in_gamut(to_rgb(rows))
        if ok.all():
            return float(high)
        first_bad = int(np.argmin(ok))
        if first_bad == 0:
            return float(low)
        low, high = float(chromas[first_bad - 1]), float(chromas[first_bad])
    return low


def max_oklch_chroma(lightness: float, hue: float) -> float:
    """Gamut-boundary chroma for an OKLCH lightness/hue pair."""
    return _max_chroma(oklch_to_rgb, lightness, hue, MAX_OKLCH_CHROMA)


def _lch_rows_to_rgb(rows: np.ndarray) -> np.ndarray:
    hue = np.radians(rows[:, 2])
    lab = np.column_stack([rows[:, 0], rows[:, 1] * np.cos(hue), rows[:, 1] * np.sin(hue)])
    return lab_to_rgb(lab)


def max_lab_chroma(tone: float, hue: float) -> float:
    """Gamut-boundary chroma for a CIE L* (tone) and LCh hue pair."""
    return _max_chroma(_lch_rows_to_rgb, tone, hue, MAX_LAB_CHROMA)


# =============================================================================
# WCAG Contrast
# =============================================================================

def relative_luminance(rgb: np.ndarray) -> np.ndarray:
    """WCAG relative luminance of sRGB rows (0-1)."""
    linear = srgb_to_linear(np.clip(_as_rows(rgb), 0.0, 1.0))
    return linear @ np.array([0.2126, 0.7152, 0.0722])


def contrast_ratio(rgb1: np.ndarray, rgb2: np.ndarray) -> float:
    """WCAG contrast ratio between two sRGB colors, in [1, 21]."""
    l1 = float(relative_luminance(rgb1)[0])
    l2 = float(relative_luminance(rgb2)[0])

    lighter = max(l1, l2)
    darker = min(l1, l2)

    return (lighter + 0.05) / (darker + 0.05)


def wcag_level(ratio: float) -> str:
    """Classify a contrast ratio as 'AAA', 'AA', 'AA-large' or 'fail'."""
    if ratio >= WCAG_RATIO_AAA:
        return "AAA"
    elif ratio >= WCAG_RATIO_AA:
        return "AA"
    elif ratio >= WCAG_RATIO_AA_LARGE:
        return "AA-large"
    else:
        return "fail"
