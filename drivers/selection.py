"""
Purpose: Business rules for region coverage and choosing the single best driver.
What it does:
Answers "may this driver serve that region?" and, given the scored candidates
for one job, picks the highest-scoring driver that was not rejected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from .models import Driver, RegionCode

if TYPE_CHECKING:
    from dispatch.scoring import AssignmentCandidateScore


def driver_covers_region(driver: Driver, region: RegionCode) -> bool:
    """
    A driver covers a region if it is their primary region, one of their
    secondary regions, or if they are island-wide (universal coverage).
    """
    if driver.primary_region == region:
        return True
    if region in driver.secondary_regions:
        return True
    if driver.primary_region == RegionCode.ISLAND_WIDE:
        return True
    return False


def pick_best_driver(
    scores: Sequence[AssignmentCandidateScore],
) -> Optional[AssignmentCandidateScore]:
    """
    Pick the best candidate from the scoring results.

    Rejected candidates are skipped. On an exact tie the candidate that comes
    first in `scores` wins (strict `>`), so selection is stable in input order.
    Returns None if there are no candidates or everyone was rejected.
    """
    best: Optional[AssignmentCandidateScore] = None
    best_score = float("-inf")

    for candidate in scores:
        if candidate.rejected:
            continue
        if candidate.total_score > best_score:
            best_score = candidate.total_score
            best = candidate

    return best
