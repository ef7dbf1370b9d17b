#!/usr/bin/env python3
"""
Performance Scorer - Rating and experience (15 points max).

Two independently capped parts:
- rating part (0-10): round(rating / 5 * 10, 1); unrated cleaners get a neutral 5.0
- experience part (0-5): step table on completed jobs
"""

from typing import Optional

from core.matching.models import PerformanceScore

MAX_POINTS = 15.0
MAX_RATING = 5.0
RATING_PART_MAX = 10.0
UNRATED_RATING_PART = 5.0

# (minimum completed jobs, points), descending
EXPERIENCE_BANDS = (
    (100, 5.0),
    (50, 4.0),
    (20, 3.0),
    (10, 2.0),
    (5, 1.0),
    (0, 0.5),
)


def rating_part(average_rating: Optional[float]) -> float:
    if average_rating is None:
        return UNRATED_RATING_PART
    rating = max(0.0, min(MAX_RATING, float(average_rating)))
    return round(rating / MAX_RATING * RATING_PART_MAX, 1)


def experience_part(total_jobs: int) -> float:
    jobs = max(0, int(total_jobs or 0))
    for min_jobs, points in EXPERIENCE_BANDS:
        if jobs >= min_jobs:
            return points
    return EXPERIENCE_BANDS[-1][1]


def score_performance(average_rating: Optional[float], total_jobs: int) -> PerformanceScore:
    return PerformanceScore(
        rating_part=rating_part(average_rating),
        experience_part=experience_part(total_jobs),
        rated=average_rating is not None,
    )
