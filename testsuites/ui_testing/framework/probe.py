"""
================================================================================
Probe Results
================================================================================

Typed outcomes of a single attempt to read UI state.

A probe never raises. It either observed the live DOM (`observed=True`) or it
fell back to a documented default (`observed=False`, with the error text kept
for the report). Callers that only need the value read `.value`; callers that
must tell "confirmed false" from "could not tell" inspect `.observed`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Pattern, TypeVar, Union

T = TypeVar("T")

# Default pattern for counters such as "12 Product(s) found."
FIRST_INTEGER_PATTERN = re.compile(r"(\d+)")


@dataclass(frozen=True)
class Probe(Generic[T]):
    """
    Result of reading one piece of UI state.

    Attributes:
        value: The read value, or the fallback when the read failed
        observed: Whether the DOM was actually read
        error: Short error description when the read fell back
    """
    value: T
    observed: bool
    error: Optional[str] = None

    @classmethod
    def hit(cls, value: T) -> "Probe[T]":
        """Build an observed result."""
        return cls(value=value, observed=True)

    @classmethod
    def miss(cls, fallback: T, error: Optional[str] = None) -> "Probe[T]":
        """Build a fallback result."""
        return cls(value=fallback, observed=False, error=error)


class FavoriteState(str, Enum):
    """Three-valued favorite status of a product card."""

    FAVORITED = "favorited"
    NOT_FAVORITED = "not-favorited"
    UNKNOWN = "unknown"

    @classmethod
    def from_probe(cls, probe: Probe[bool]) -> "FavoriteState":
        """Map a boolean probe to a state; an unobserved probe is UNKNOWN."""
        if not probe.observed:
            return cls.UNKNOWN
        return cls.FAVORITED if probe.value else cls.NOT_FAVORITED


def parse_numeric_label(
    text: Optional[str],
    pattern: Union[str, Pattern[str]] = FIRST_INTEGER_PATTERN,
) -> int:
    """
    Extract the first integer from a label.

    Uses capture group 1 when the pattern defines one, otherwise the whole
    match. Returns 0 for empty or unmatched text.

    Examples:
        >>> parse_numeric_label("25 Product(s) found.")
        25
        >>> parse_numeric_label("no products")
        0
    """
    if not text:
        return 0

    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    match = compiled.search(text)
    if not match:
        return 0

    raw = match.group(1) if compiled.groups else match.group(0)
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


__all__ = [
    "Probe",
    "FavoriteState",
    "parse_numeric_label",
    "FIRST_INTEGER_PATTERN",
]
