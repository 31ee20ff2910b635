"""
Error types and tagged outcomes.

Expected failures of the candidate and palette APIs are returned as an
Outcome carrying an AccentSelectionError. Exceptions are reserved for invalid
arguments and broken collaborators (catalog providers).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class InvalidColorError(ValueError):
    """A color string could not be parsed."""


class CatalogError(RuntimeError):
    """The catalog provider failed or returned unusable data."""


class ErrorCode(str, Enum):
    BRAND_COLOR_NOT_SET = "BRAND_COLOR_NOT_SET"
    INVALID_HARMONY_TYPE = "INVALID_HARMONY_TYPE"
    PALETTE_GENERATION_FAILED = "PALETTE_GENERATION_FAILED"


@dataclass(frozen=True)
class AccentSelectionError:
    """An expected, user-facing failure."""
    code: ErrorCode
    message: str


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a result (ok=True) or an error (ok=False)."""
    ok: bool
    result: Optional[T] = None
    error: Optional[AccentSelectionError] = None

    @classmethod
    def success(cls, result: T) -> "Outcome[T]":
        return cls(ok=True, result=result)

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "Outcome[T]":
        return cls(ok=False, error=AccentSelectionError(code=code, message=message))
