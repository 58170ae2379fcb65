"""Presentation helpers for vendor security ratings.

Ratings use a 0-1000 scale. The grade bands and sort orders match what the
dashboard shows, so MCP clients see the same view as the browser.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from .models import VendorScore

SCORE_SCALE = 1000

GRADE_BANDS: tuple[tuple[int, str], ...] = (
    (900, "A+"),
    (800, "A"),
    (700, "B"),
    (600, "C"),
    (500, "D"),
)

SORT_ORDERS = ("desc", "asc", "alpha")

Number = Union[int, float]


def score_percent(score: Optional[Number]) -> int:
    """Position of a score on the 0-1000 scale as a whole percentage."""
    if score is None:
        return 0
    clamped = max(0, min(SCORE_SCALE, score))
    return round(clamped / SCORE_SCALE * 100)


def grade_for(score: Optional[Number]) -> str:
    """Letter grade for a score, 'N/A' when no score is available."""
    if score is None:
        return "N/A"
    for threshold, letter in GRADE_BANDS:
        if score >= threshold:
            return letter
    return "F"


def _rank_value(result: VendorScore) -> Number:
    # Missing and zero scores rank below every real score.
    return result.score or -1


def sort_vendor_scores(results: Iterable[VendorScore], order: str = "desc") -> list[VendorScore]:
    """Sort results for display.

    Args:
        results: Vendor score records.
        order: 'desc' (highest first), 'asc' (lowest first) or 'alpha' (by hostname).
    """
    if order == "desc":
        return sorted(results, key=_rank_value, reverse=True)
    if order == "asc":
        return sorted(results, key=_rank_value)
    if order == "alpha":
        return sorted(results, key=lambda r: r.hostname.lower())
    raise ValueError(f"Invalid sort order: {order}. Use one of: {', '.join(SORT_ORDERS)}.")


def summarize_vendor_scores(results: list[VendorScore]) -> str:
    """One-line human-readable summary of a batch of vendor scores."""
    if not results:
        return "No vendors requested"

    scored = [r for r in results if r.ok and r.score is not None]
    failed = [r for r in results if not r.ok]

    parts = [f"{len(results)} vendor(s)"]
    if scored:
        average = sum(r.score for r in scored) / len(scored)
        lowest = min(scored, key=lambda r: r.score)
        parts.append(f"average score {average:.0f} ({grade_for(average)})")
        parts.append(f"lowest {lowest.hostname} at {lowest.score} ({grade_for(lowest.score)})")
    if failed:
        parts.append(f"{len(failed)} lookup(s) failed: " + ", ".join(r.hostname for r in failed))
    return " | ".join(parts)
