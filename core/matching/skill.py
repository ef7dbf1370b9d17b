#!/usr/bin/env python3
"""
Skill Scorer - Specialization fit (20 points max).

score = min(20, base + exact_match + window + versatility)
- base: 10 for every cleaner the engine considers (approval is filtered upstream)
- exact_match: +10 if the cleaner holds the tag required by the service type
- window: +2 if the booking asks for windows and the cleaner holds the window tag
- versatility: +2 if there was no exact match but the cleaner holds >= 3 tags
"""

from types import MappingProxyType
from typing import Iterable, Optional

from core.matching.geo import norm

MAX_POINTS = 20.0
BASE_POINTS = 10.0
EXACT_MATCH_BONUS = 10.0
WINDOW_BONUS = 2.0
VERSATILITY_BONUS = 2.0
VERSATILITY_MIN_TAGS = 3

WINDOW_CLEANING_TAG = "Geamuri"

SERVICE_TYPE_SPECIALIZATIONS = MappingProxyType({
    "STANDARD": "Curățenie Standard",
    "DEEP_CLEANING": "Curățenie Generală",
    "MOVE_IN_OUT": "Curățenie de Mutare",
    "POST_RENOVATION": "După Renovare",
    "OFFICE": "Birouri",
    "WINDOW": WINDOW_CLEANING_TAG,
})


def required_specialization(service_type: Optional[str]) -> Optional[str]:
    return SERVICE_TYPE_SPECIALIZATIONS.get((service_type or "").strip().upper())


def score_skill(
    provider_specializations: Iterable[str],
    service_type: Optional[str],
    includes_windows: bool = False
) -> float:
    tags = {norm(s) for s in (provider_specializations or []) if norm(s)}

    required = required_specialization(service_type)
    exact_match = required is not None and norm(required) in tags

    score = BASE_POINTS
    if exact_match:
        score += EXACT_MATCH_BONUS
    if includes_windows and norm(WINDOW_CLEANING_TAG) in tags:
        score += WINDOW_BONUS
    if not exact_match and len(tags) >= VERSATILITY_MIN_TAGS:
        score += VERSATILITY_BONUS

    return min(MAX_POINTS, score)
