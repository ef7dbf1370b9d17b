#!/usr/bin/env python3
"""
Distance Scorer - Geographic proximity (30 points max).

Primary path: haversine distance between cleaner and booking coordinates,
mapped through a step table. Fallback path (either side lacks coordinates):
case-insensitive city equality. The fallback never excludes a candidate.
"""

from typing import Optional

from core.matching.geo import distance_between, same_city
from core.matching.models import Coordinates, DistanceScore


MAX_POINTS = 30.0

# (lower bound km inclusive, points), ascending. The last band is open-ended.
DISTANCE_BANDS = (
    (0.0, 30.0),
    (5.0, 25.0),
    (10.0, 20.0),
    (15.0, 15.0),
    (20.0, 10.0),
    (30.0, 5.0),
    (40.0, 2.0),
)

CITY_MATCH_POINTS = 25.0
CITY_MISMATCH_POINTS = 5.0


def points_for_distance(distance_km: float) -> float:
    """Band lookup. A distance exactly on a boundary falls in the farther band."""
    points = DISTANCE_BANDS[0][1]
    for lower, band_points in DISTANCE_BANDS:
        if distance_km >= lower:
            points = band_points
        else:
            break
    return points


def score_distance(
    provider_coords: Optional[Coordinates],
    booking_coords: Optional[Coordinates],
    provider_city: Optional[str],
    booking_city: Optional[str],
) -> DistanceScore:
    distance_km = distance_between(provider_coords, booking_coords)
    if distance_km is not None:
        return DistanceScore(
            points=points_for_distance(distance_km),
            basis="geo",
            distance_km=distance_km,
        )

    points = CITY_MATCH_POINTS if same_city(provider_city, booking_city) else CITY_MISMATCH_POINTS
    return DistanceScore(points=points, basis="city")
