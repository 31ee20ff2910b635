"""
Accessible accent palettes: contrast solving, harmony-based candidate
scoring and palette assembly over a design-system color catalog.
"""

from .candidates import (
    CandidateOutcome,
    CandidateResult,
    ScoredCandidate,
    generate_candidates,
    rescore_for_background,
)
from .catalog import CatalogEntry, CatalogRepository, default_catalog, load_catalog_json
from .color import Color
from .colorspace import contrast_ratio, normalize_hex, parse_hex, wcag_level
from .cud import CUD_COLOR_SET, find_nearest_cud_color
from .errors import AccentSelectionError, CatalogError, ErrorCode, InvalidColorError, Outcome
from .harmony import HarmonyType, circular_distance, harmony_types, is_within_range, target_hues
from .harmony_filter import HarmonyFilterResult, filter_by_harmony, find_nearest_alternatives
from .palette import (
    PaletteOutcome,
    PaletteResult,
    assemble_palette,
    generate_all_harmony_palettes,
    generate_harmony_palette,
)
from .scoring import BalanceScore, ScoreWeights, normalize_weights, score_candidate
from .solver import solve_contrast
from .tone_scale import build_tone_scale, create_interpolator, generate_scale

__version__ = "0.1.0"
