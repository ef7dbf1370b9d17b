#!/usr/bin/env python3
"""
Workload Scorer - Current-load fairness (10 points max).

Primary path uses the live count of non-terminal bookings. When that count
cannot be obtained, a heuristic on historical job count is used instead.
The score never reaches zero: overloaded cleaners stay rankable.
"""

from typing import Optional

from core.matching.models import WorkloadScore

MAX_POINTS = 10.0

IDLE_EXPERIENCED_POINTS = 10.0
IDLE_NEW_POINTS = 8.0

# active bookings -> points; counts above the last key use OVERLOADED_POINTS
ACTIVE_COUNT_POINTS = (
    (1, 9.0),
    (2, 7.0),
    (3, 5.0),
    (4, 3.0),
)
OVERLOADED_POINTS = 1.0

# (minimum historical jobs, points), descending; used when the live count failed
HEURISTIC_BANDS = (
    (50, 5.0),
    (10, 7.0),
    (1, 10.0),
    (0, 8.0),
)


def points_for_active_count(active_count: int, is_experienced: bool) -> float:
    if active_count <= 0:
        return IDLE_EXPERIENCED_POINTS if is_experienced else IDLE_NEW_POINTS
    for count, points in ACTIVE_COUNT_POINTS:
        if active_count == count:
            return points
    return OVERLOADED_POINTS


def heuristic_points(total_jobs: int) -> float:
    jobs = max(0, int(total_jobs or 0))
    for min_jobs, points in HEURISTIC_BANDS:
        if jobs >= min_jobs:
            return points
    return HEURISTIC_BANDS[-1][1]


def score_workload(active_count: int, is_experienced: bool) -> WorkloadScore:
    return WorkloadScore(
        points=points_for_active_count(active_count, is_experienced),
        basis="live",
        active_count=active_count,
    )


def score_workload_fallback(total_jobs: int, reason: Optional[str] = None) -> WorkloadScore:
    return WorkloadScore(
        points=heuristic_points(total_jobs),
        basis="heuristic",
        reason=reason or "active booking count unavailable",
    )
