#!/usr/bin/env python3
"""
Matching Module - Rank cleaners for a booking with a deterministic score.

Public API:
- MatchingService: orchestrator (batched lookups, fan-out, fallbacks, auto-assign)
- score_candidate: pure scoring of one (booking, cleaner) pair
- CandidateMatch: per-pair result with sub-score breakdown

The score is the sum of five independent scorers:

- distance.py: geographic proximity (30)
- availability.py: schedule fit and BLOCKED exclusion (25)
- skill.py: specialization fit (20)
- performance.py: rating and experience (15)
- workload.py: current-load fairness (10)

ranking.py combines and orders them; interfaces.py describes the collaborators.
"""

from core.matching.errors import (
    MatchingError,
    CandidateFetchError,
    BookingNotFoundError,
    ProviderNotFoundError,
    NoEligibleProviderError,
)
from core.matching.interfaces import ServiceArea, GeocodeResult
from core.matching.models import (
    AvailabilitySlot,
    BookingRequest,
    CandidateMatch,
    Coordinates,
    ProviderProfile,
    SlotKind,
    SubScores,
)
from core.matching.service import MatchingService, score_candidate

__all__ = [
    'MatchingService',
    'score_candidate',
    'CandidateMatch',
    'SubScores',
    'BookingRequest',
    'ProviderProfile',
    'AvailabilitySlot',
    'SlotKind',
    'Coordinates',
    'ServiceArea',
    'GeocodeResult',
    'MatchingError',
    'CandidateFetchError',
    'BookingNotFoundError',
    'ProviderNotFoundError',
    'NoEligibleProviderError',
]
