"""
Narrow ranked candidates to the hues of one harmony type.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .harmony import (
    ALL,
    HARMONY_RANGE,
    HarmonyFilterType,
    is_within_range,
    min_target_distance,
    parse_harmony_type,
    target_hues,
)

logger = logging.getLogger(__name__)

MAX_ALTERNATIVES = 3


@dataclass(frozen=True)
class HarmonyFilterResult:
    candidates: list
    alternatives: list = field(default_factory=list)  # Only set when candidates is empty
    is_showing_alternatives: bool = False


def find_nearest_alternatives(candidates: Sequence, targets: Sequence[float],
                              max_count: int = MAX_ALTERNATIVES) -> list:
    """
    Candidates closest to any target hue, nearest first.

    Ties keep input order. With no targets, the first max_count candidates
    are returned as-is.
    """
    if not targets:
        return list(candidates[:max_count])
    ranked = sorted(candidates, key=lambda c: min_target_distance(c.hue, targets))
    return ranked[:max_count]


def filter_by_harmony(candidates: Sequence, harmony_type: HarmonyFilterType, brand_hue: float,
                      hue_range: float = HARMONY_RANGE) -> HarmonyFilterResult:
    """
    Keep candidates whose hue lies within hue_range of a harmony target.

    Candidate order is preserved. When nothing survives, the nearest
    alternatives from the unfiltered input are offered instead.

    Raises:
        ValueError: If harmony_type names no harmony type
    """
    harmony_type = parse_harmony_type(harmony_type)
    if harmony_type == ALL:
        return HarmonyFilterResult(candidates=list(candidates))
    if not candidates:
        return HarmonyFilterResult(candidates=[])

    targets = target_hues(brand_hue, harmony_type)
    matched = [c for c in candidates if is_within_range(c.hue, targets, hue_range)]
    if matched:
        return HarmonyFilterResult(candidates=matched)

    alternatives = find_nearest_alternatives(candidates, targets, MAX_ALTERNATIVES)
    logger.debug("No %s candidates near %s, offering %d alternatives",
                 harmony_type.value, targets, len(alternatives))
    return HarmonyFilterResult(candidates=[], alternatives=alternatives, is_showing_alternatives=True)
