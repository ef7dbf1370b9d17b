#!/usr/bin/env python3
"""
Ranking - Combine sub-scores, order candidates, apply the result policy.

Ordering is a total order:
1. higher total score
2. higher distance sub-score
3. higher performance sub-score
4. lower provider id
"""

from typing import List, Optional, Tuple

from core.config_loader import ResultPolicy
from core.matching.models import CandidateMatch, SubScores

MAX_TOTAL = 100.0


def total_score(sub_scores: SubScores) -> float:
    """
    Plain sum of the five sub-scores, bounded to [0, 100].

    Every sub-score carries at most one decimal, so rounding to one decimal only
    strips float noise and keeps repeated runs byte-identical.
    """
    raw = sum(sub_scores.as_points().values())
    return max(0.0, min(MAX_TOTAL, round(raw, 1)))


def ranking_key(match: CandidateMatch) -> Tuple[float, float, float, str]:
    s = match.sub_scores
    return (
        -match.total_score,
        -s.distance.points,
        -s.performance.points,
        str(match.provider_id),
    )


def rank(matches: List[CandidateMatch], top_k: Optional[int] = None) -> List[CandidateMatch]:
    """Drop excluded entries, sort, optionally truncate to the first top_k."""
    if top_k is not None and top_k < 1:
        raise ValueError(f"top_k must be a positive integer, got {top_k}")

    ranked = sorted(
        (m for m in matches if not m.excluded),
        key=ranking_key
    )
    if top_k is not None:
        ranked = ranked[:top_k]
    return ranked


def apply_result_policy(
    results: List[CandidateMatch],
    policy: Optional[ResultPolicy]
) -> List[CandidateMatch]:
    """Apply ResultPolicy to already ranked results.

    Args:
        results: Ranked matches (best first)
        policy: ResultPolicy to apply, or None for no filtering

    Returns:
        Filtered and truncated results
    """
    if policy is None:
        return results

    filtered = results

    if policy.min_score > 0:
        filtered = [r for r in filtered if r.total_score >= policy.min_score]

    if policy.top_k is not None:
        filtered = filtered[:policy.top_k]

    return filtered
