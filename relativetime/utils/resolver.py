"""Shared fuzzy-matching helpers.

Used to turn a misspelled identifier into a "did you mean" hint when
raising configuration errors.
"""

from __future__ import annotations
from typing import Iterable, Optional

try:
    from rapidfuzz import fuzz, process
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e


def normalize_identifier(text: str) -> str:
    """Normalize an identifier for fuzzy comparison.

    Examples:
        >>> normalize_identifier("  America/Los Angeles ")
        'america/los_angeles'
    """
    return "_".join(text.strip().lower().split())


def suggest_closest(
    query: str,
    choices: Iterable[str],
    threshold: int = 80,
) -> Optional[str]:
    """Return the choice closest to query, or None below threshold.

    Uses RapidFuzz WRatio over normalized strings and returns the original
    spelling of the best choice.

    Args:
        query: Identifier as typed by the caller
        choices: Known identifiers
        threshold: Minimum score (0-100) to accept a suggestion

    Examples:
        >>> suggest_closest("Europe/Berln", ["Europe/Berlin", "Europe/Paris"])
        'Europe/Berlin'
    """
    originals = {normalize_identifier(c): c for c in choices}
    if not query or not originals:
        return None

    match = process.extractOne(normalize_identifier(query), list(originals), scorer=fuzz.WRatio)
    if match:
        best, score, _ = match
        if score >= threshold:
            return originals[best]
    return None


__all__ = ["normalize_identifier", "suggest_closest"]
