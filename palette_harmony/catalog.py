"""
Design-system color catalog: entries, providers and a load-once repository.

A catalog is N hue families x M lightness steps (50..1200), plus optional
neutral and semantic entries. Providers are plain callables returning
entries; CatalogRepository memoizes one provider for its lifetime.
"""

import json
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional

from .color import Color
from .colorspace import normalize_hex
from .errors import CatalogError, InvalidColorError

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

HUE_FAMILIES = (
    "blue", "light-blue", "cyan", "green", "lime",
    "yellow", "orange", "red", "magenta", "purple",
)

STEPS = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900, 1000, 1100, 1200)
NEUTRAL_STEPS = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900)

# Built-in catalog geometry: OKLCH hue and peak chroma per family
_FAMILY_HUE_CHROMA = {
    "blue": (264.0, 0.22),
    "light-blue": (240.0, 0.17),
    "cyan": (215.0, 0.14),
    "green": (150.0, 0.17),
    "lime": (125.0, 0.19),
    "yellow": (100.0, 0.18),
    "orange": (55.0, 0.19),
    "red": (27.0, 0.21),
    "magenta": (350.0, 0.22),
    "purple": (305.0, 0.21),
}

# Per step: OKLCH lightness and share of the family's peak chroma
_STEP_PROFILE = {
    50: (0.97, 0.25),
    100: (0.93, 0.40),
    200: (0.87, 0.60),
    300: (0.80, 0.80),
    400: (0.72, 0.95),
    500: (0.64, 1.00),
    600: (0.56, 1.00),
    700: (0.49, 0.95),
    800: (0.42, 0.85),
    900: (0.36, 0.75),
    1000: (0.31, 0.65),
    1100: (0.27, 0.55),
    1200: (0.23, 0.45),
}


class Category(str, Enum):
    CHROMATIC = "chromatic"
    NEUTRAL = "neutral"
    SEMANTIC = "semantic"


@dataclass(frozen=True)
class CatalogEntry:
    """One catalog color. hue_family is None for neutral and semantic entries."""
    id: str
    hex: str
    hue_family: Optional[str]
    step: int
    category: Category = Category.CHROMATIC

    @property
    def display_name(self) -> str:
        family = (self.hue_family or self.category.value).replace("-", " ").title()
        return f"{family} {self.step}"


# =============================================================================
# Providers
# =============================================================================

def default_catalog() -> list[CatalogEntry]:
    """Built-in catalog: 10 hue families x 13 steps plus a neutral gray scale."""
    entries = []
    for family in HUE_FAMILIES:
        hue, peak_chroma = _FAMILY_HUE_CHROMA[family]
        for step in STEPS:
            lightness, chroma_share = _STEP_PROFILE[step]
            color = Color(lightness, peak_chroma * chroma_share, hue)
            entries.append(CatalogEntry(
                id=f"{family}-{step}",
                hex=color.to_hex(),
                hue_family=family,
                step=step,
            ))

    for step in NEUTRAL_STEPS:
        lightness, _ = _STEP_PROFILE[step]
        entries.append(CatalogEntry(
            id=f"gray-{step}",
            hex=Color(lightness, 0.0, 0.0).to_hex(),
            hue_family=None,
            step=step,
            category=Category.NEUTRAL,
        ))

    return entries


def _entry_from_dict(data: dict) -> CatalogEntry:
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog entry must be an object, got {data!r}")
    try:
        category = Category(data.get("category", Category.CHROMATIC.value))
        hue_family = data.get("hue_family")
        if category is Category.CHROMATIC and hue_family not in HUE_FAMILIES:
            raise CatalogError(f"Unknown hue family {hue_family!r} in entry {data.get('id')!r}")
        return CatalogEntry(
            id=str(data["id"]),
            hex=normalize_hex(data["hex"]),
            hue_family=hue_family,
            step=int(data["step"]),
            category=category,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Malformed catalog entry {data!r}: {e}") from e


def load_catalog_json(path) -> list[CatalogEntry]:
    """
    Load catalog entries from JSON.

    Accepts a list of entry objects or {"entries": [...]}; each entry has
    id, hex, step, and optionally hue_family and category.

    Raises:
        CatalogError: If the file is missing, not JSON, or has malformed entries
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogError(f"Catalog not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read catalog {path}: {e}")

    if isinstance(data, dict):
        data = data.get("entries")
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a list of entries")

    return [_entry_from_dict(item) for item in data]


# =============================================================================
# Repository
# =============================================================================

class CatalogRepository:
    """
    Load-once cache around a catalog provider.

    The first call to entries() runs the provider; concurrent first calls
    wait on the same load. A failed load is not cached, so the next call
    retries.
    """

    def __init__(self, loader: Callable[[], Iterable[CatalogEntry]] = default_catalog):
        self._loader = loader
        self._entries: Optional[tuple] = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    def entries(self) -> tuple:
        if self._entries is None:
            with self._lock:
                if self._entries is None:
                    self._entries = self._load()
        return self._entries

    def _load(self) -> tuple:
        try:
            entries = tuple(self._loader())
        except CatalogError:
            raise
        except Exception as e:
            raise CatalogError(f"Catalog load failed: {e}") from e

        if not entries:
            raise CatalogError("Catalog is empty")

        logger.info("Loaded %d catalog entries", len(entries))
        return entries

    def chromatic(self) -> list[CatalogEntry]:
        """Chromatic entries in catalog order."""
        return [e for e in self.entries() if e.category is Category.CHROMATIC]

    def by_family(self, hue_family: str) -> list[CatalogEntry]:
        """Entries of one hue family, ordered by step."""
        family = [e for e in self.entries() if e.hue_family == hue_family]
        return sorted(family, key=lambda e: e.step)

    def find_by_hex(self, value: str) -> Optional[CatalogEntry]:
        """First chromatic entry with this hex, or None."""
        try:
            target = normalize_hex(value)
        except InvalidColorError:
            return None
        for entry in self.chromatic():
            if normalize_hex(entry.hex) == target:
                return entry
        return None
