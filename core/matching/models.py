#!/usr/bin/env python3
"""
Matching Models - Value types consumed and produced by the matching engine.

Inputs (read-only, already fetched by collaborators):
- BookingRequest: the service request being matched
- ProviderProfile: one candidate cleaner
- AvailabilitySlot: a RECURRING / ONE_TIME / BLOCKED window

Outputs:
- DistanceScore / AvailabilityScore / PerformanceScore / WorkloadScore:
  sub-scores that also record which path produced them
- SubScores: the five sub-scores for one (booking, provider) pair
- CandidateMatch: sub-scores + total + exclusion flag for one pair
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SlotKind(str, Enum):
    RECURRING = "RECURRING"
    ONE_TIME = "ONE_TIME"
    BLOCKED = "BLOCKED"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class BookingRequest:
    """A booking to be matched. Coordinates are optional (geocoding may fail)."""
    booking_id: str
    scheduled_date: datetime.date
    scheduled_time: datetime.time
    service_type: str
    city: str
    street: str = ""
    coordinates: Optional[Coordinates] = None
    includes_windows: bool = False


@dataclass(frozen=True)
class ProviderProfile:
    """A candidate cleaner as returned by the provider directory."""
    provider_id: str
    city: str
    specializations: tuple = ()
    coordinates: Optional[Coordinates] = None
    average_rating: Optional[float] = None
    total_jobs: int = 0
    is_approved: bool = True
    is_active: bool = True
    display_name: Optional[str] = None
    # Explicit new/experienced flag; None derives it from total_jobs
    experienced: Optional[bool] = None

    @property
    def is_experienced(self) -> bool:
        if self.experienced is not None:
            return self.experienced
        return self.total_jobs >= 1


@dataclass(frozen=True)
class AvailabilitySlot:
    """
    One availability record.

    RECURRING slots carry day_of_week (0=Sunday .. 6=Saturday), ONE_TIME slots
    carry specific_date, BLOCKED slots carry either.
    """
    provider_id: str
    kind: SlotKind
    start_time: datetime.time
    end_time: datetime.time
    day_of_week: Optional[int] = None
    specific_date: Optional[datetime.date] = None


# ----------------------------
# Sub-score result types
# ----------------------------

@dataclass(frozen=True)
class DistanceScore:
    points: float
    basis: str  # "geo" | "city"
    distance_km: Optional[float] = None


@dataclass(frozen=True)
class AvailabilityScore:
    points: float
    reason: str  # blocked | recurring | one_time | unset | no_match | lookup_failed
    excluded: bool = False

    @property
    def degraded(self) -> bool:
        return self.reason == "lookup_failed"


@dataclass(frozen=True)
class PerformanceScore:
    rating_part: float
    experience_part: float
    rated: bool = True

    @property
    def points(self) -> float:
        return self.rating_part + self.experience_part


@dataclass(frozen=True)
class WorkloadScore:
    points: float
    basis: str  # "live" | "heuristic"
    active_count: Optional[int] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class SubScores:
    distance: DistanceScore
    availability: AvailabilityScore
    skill: float
    performance: PerformanceScore
    workload: WorkloadScore

    def as_points(self) -> Dict[str, float]:
        return {
            'distance': self.distance.points,
            'availability': self.availability.points,
            'skill': self.skill,
            'performance': self.performance.points,
            'workload': self.workload.points,
        }


@dataclass
class CandidateMatch:
    """Match result for one (booking, provider) pair. Never persisted."""
    provider: ProviderProfile
    booking_id: str
    total_score: float = 0.0
    sub_scores: Optional[SubScores] = None
    excluded: bool = False
    exclusion_reason: Optional[str] = None
    degraded: List[str] = field(default_factory=list)

    @property
    def provider_id(self) -> str:
        return self.provider.provider_id

    def reason_breakdown(self) -> str:
        if self.excluded or self.sub_scores is None:
            return f"Excluded: {self.exclusion_reason}"
        p = self.sub_scores.as_points()
        return (
            f"Distance: {p['distance']:.1f}/30 | "
            f"Availability: {p['availability']:.1f}/25 | "
            f"Skills: {p['skill']:.1f}/20 | "
            f"Performance: {p['performance']:.1f}/15 | "
            f"Workload: {p['workload']:.1f}/10"
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            'provider_id': self.provider_id,
            'total_score': self.total_score,
            'excluded': self.excluded,
        }
        if self.excluded:
            out['exclusion_reason'] = self.exclusion_reason
            return out

        s = self.sub_scores
        out['sub_scores'] = s.as_points()
        out['resolution'] = {
            'distance': s.distance.basis,
            'availability': s.availability.reason,
            'workload': s.workload.basis,
        }
        out['degraded'] = list(self.degraded)
        out['breakdown'] = self.reason_breakdown()
        return out
