#!/usr/bin/env python3
"""
Matching Service - Rank eligible cleaners for a booking.

For one booking:
1. Resolve booking coordinates through the geocoder when they are missing
2. Batch prefetch availability slots and active-booking counts (one lookup each)
3. Score candidates in a bounded thread pool; BLOCKED cleaners are dropped
   before any other scorer runs
4. Order by total score with a deterministic tie-break

Collaborator failures degrade the affected sub-score to its documented
fallback. Only a failed directory lookup aborts the match.
"""

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from core.config_loader import MatchingConfig
from core.matching import ranking
from core.matching.availability import lookup_failed_score, score_availability
from core.matching.distance import score_distance
from core.matching.errors import (
    BookingNotFoundError,
    CandidateFetchError,
    MatchingError,
    NoEligibleProviderError,
    ProviderNotFoundError,
)
from core.matching.interfaces import (
    AvailabilityStore,
    BookingStore,
    Geocoder,
    ProviderDirectory,
    ServiceArea,
    WorkloadCounter,
)
from core.matching.models import (
    AvailabilitySlot,
    BookingRequest,
    CandidateMatch,
    ProviderProfile,
    SubScores,
)
from core.matching.performance import score_performance
from core.matching.skill import score_skill
from core.matching.workload import score_workload, score_workload_fallback

logger = logging.getLogger(__name__)

T = TypeVar("T")


def score_candidate(
    booking: BookingRequest,
    provider: ProviderProfile,
    slots: Optional[List[AvailabilitySlot]],
    active_count: Optional[int]
) -> CandidateMatch:
    """Score one (booking, cleaner) pair from prefetched data.

    Args:
        booking: Booking being matched
        provider: Candidate cleaner
        slots: The cleaner's active slots, or None when the slot lookup failed
        active_count: Live non-terminal booking count, or None when unavailable

    Returns:
        CandidateMatch; excluded (and otherwise unscored) when a BLOCKED slot
        covers the booking.
    """
    match = CandidateMatch(provider=provider, booking_id=booking.booking_id)

    if slots is None:
        availability = lookup_failed_score()
        match.degraded.append("availability")
        logger.warning(
            f"Booking {booking.booking_id}, cleaner {provider.provider_id}: "
            f"availability lookup failed, scoring as unset schedule"
        )
    else:
        availability = score_availability(slots, booking.scheduled_date, booking.scheduled_time)

    if availability.excluded:
        match.excluded = True
        match.exclusion_reason = "blocked"
        logger.info(
            f"Booking {booking.booking_id}: cleaner {provider.provider_id} excluded "
            f"(blocked on {booking.scheduled_date} {booking.scheduled_time:%H:%M})"
        )
        return match

    distance = score_distance(
        provider.coordinates,
        booking.coordinates,
        provider.city,
        booking.city
    )
    if distance.basis == "city":
        match.degraded.append("distance")
        logger.info(
            f"Booking {booking.booking_id}, cleaner {provider.provider_id}: "
            f"coordinates missing, distance scored by city ({distance.points:.0f} pts)"
        )

    skill = score_skill(provider.specializations, booking.service_type, booking.includes_windows)
    performance = score_performance(provider.average_rating, provider.total_jobs)

    if active_count is None:
        workload = score_workload_fallback(provider.total_jobs)
        match.degraded.append("workload")
        logger.warning(
            f"Booking {booking.booking_id}, cleaner {provider.provider_id}: "
            f"active booking count unavailable, using job-history heuristic "
            f"({workload.points:.0f} pts)"
        )
    else:
        workload = score_workload(active_count, provider.is_experienced)

    match.sub_scores = SubScores(
        distance=distance,
        availability=availability,
        skill=skill,
        performance=performance,
        workload=workload,
    )
    match.total_score = ranking.total_score(match.sub_scores)

    logger.debug(f"Booking {booking.booking_id}, cleaner {provider.provider_id}: "
                 f"total={match.total_score:.1f} ({match.reason_breakdown()})")
    return match


def _dedupe(candidates: Sequence[ProviderProfile]) -> List[ProviderProfile]:
    seen = set()
    unique = []
    for provider in candidates:
        if provider.provider_id in seen:
            continue
        seen.add(provider.provider_id)
        unique.append(provider)
    return unique


class MatchingService:
    """
    Service for ranking cleaners against bookings.

    Holds no per-request state: concurrent calls for different bookings are
    independent. Collaborators are injected; see core.matching.interfaces.
    """

    def __init__(
        self,
        directory: ProviderDirectory,
        availability_store: AvailabilityStore,
        workload_counter: WorkloadCounter,
        booking_store: Optional[BookingStore] = None,
        geocoder: Optional[Geocoder] = None,
        config: Optional[MatchingConfig] = None,
        country: str = "",
        geocode_timeout_seconds: Optional[float] = None
    ):
        self.directory = directory
        self.availability_store = availability_store
        self.workload_counter = workload_counter
        self.booking_store = booking_store
        self.geocoder = geocoder
        self.config = config or MatchingConfig()
        self.country = country
        # Bound on one geocode call including its retries
        self.geocode_timeout_seconds = geocode_timeout_seconds or self.config.lookup_timeout_seconds

    # ----------------------------
    # Collaborator calls
    # ----------------------------
    def _call_with_timeout(self, fn: Callable[..., T], *args, timeout: Optional[float] = None) -> T:
        """Run a collaborator lookup, raising TimeoutError after timeout (default lookup_timeout_seconds)."""
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="match-lookup")
        try:
            future = executor.submit(fn, *args)
            return future.result(timeout=timeout or self.config.lookup_timeout_seconds)
        finally:
            executor.shutdown(wait=False)

    def fetch_candidates(self, area: Optional[ServiceArea] = None) -> List[ProviderProfile]:
        try:
            return list(self._call_with_timeout(self.directory.get_candidates, area))
        except Exception as e:
            logger.error(f"Candidate directory lookup failed (area={area}): {e}")
            raise CandidateFetchError(f"Failed to fetch candidate cleaners: {e}") from e

    def _prefetch_slots(
        self,
        booking: BookingRequest,
        provider_ids: List[str]
    ) -> Optional[Dict[str, List[AvailabilitySlot]]]:
        """One lookup for all candidates' slots. None signals the lookup failed."""
        try:
            return self._call_with_timeout(self.availability_store.get_slots_for_providers, provider_ids)
        except Exception as e:
            logger.warning(f"Booking {booking.booking_id}: availability lookup failed for "
                           f"{len(provider_ids)} cleaners: {e!r}")
            return None

    def _prefetch_active_counts(
        self,
        booking: BookingRequest,
        provider_ids: List[str]
    ) -> Optional[Dict[str, int]]:
        """One lookup for all candidates' active-booking counts. None signals failure."""
        try:
            return self._call_with_timeout(self.workload_counter.count_active_for_providers, provider_ids)
        except Exception as e:
            logger.warning(f"Booking {booking.booking_id}: active booking count failed for "
                           f"{len(provider_ids)} cleaners: {e!r}")
            return None

    def resolve_booking_coordinates(self, booking: BookingRequest) -> BookingRequest:
        """Fill in booking coordinates via the geocoder. Unresolved bookings are returned unchanged."""
        if booking.coordinates is not None or self.geocoder is None:
            return booking

        try:
            result = self._call_with_timeout(
                self.geocoder.geocode, booking.street, booking.city, self.country,
                timeout=self.geocode_timeout_seconds
            )
        except Exception as e:
            logger.warning(f"Booking {booking.booking_id}: geocoder unavailable, "
                           f"distance falls back to city match: {e!r}")
            return booking

        if result is None:
            logger.info(f"Booking {booking.booking_id}: address unresolved, "
                        f"distance falls back to city match")
            return booking

        return dataclasses.replace(booking, coordinates=result.coordinates)

    # ----------------------------
    # Ranking
    # ----------------------------
    def evaluate_candidates(
        self,
        booking: BookingRequest,
        candidates: Sequence[ProviderProfile]
    ) -> List[CandidateMatch]:
        """Score every candidate, excluded ones included, in input order."""
        candidates = _dedupe(candidates)
        if not candidates:
            return []

        booking = self.resolve_booking_coordinates(booking)
        provider_ids = [c.provider_id for c in candidates]

        slots_by_provider = self._prefetch_slots(booking, provider_ids)
        counts_by_provider = self._prefetch_active_counts(booking, provider_ids)

        def _score(provider: ProviderProfile) -> CandidateMatch:
            slots = None
            if slots_by_provider is not None:
                slots = slots_by_provider.get(provider.provider_id, [])
            active = None
            if counts_by_provider is not None:
                active = int(counts_by_provider.get(provider.provider_id, 0))
            return score_candidate(booking, provider, slots, active)

        workers = min(self.config.max_workers, len(candidates))
        if workers <= 1:
            return [_score(c) for c in candidates]

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="match-score") as pool:
            return list(pool.map(_score, candidates))

    def rank_candidates(
        self,
        booking: BookingRequest,
        candidates: Sequence[ProviderProfile],
        top_k: Optional[int] = None
    ) -> List[CandidateMatch]:
        """Rank candidates for a booking.

        Args:
            booking: Booking to match
            candidates: Cleaners already fetched from the directory
            top_k: Optional truncation; None returns the full ranked list

        Returns:
            Non-excluded matches, best first, each with its sub-score breakdown
        """
        evaluated = self.evaluate_candidates(booking, candidates)
        ranked = ranking.rank(evaluated, top_k=top_k)

        excluded = len(evaluated) - sum(1 for m in evaluated if not m.excluded)
        logger.info(f"Booking {booking.booking_id}: ranked {len(evaluated) - excluded} of "
                    f"{len(evaluated)} cleaners ({excluded} excluded)")
        return ranked

    # ----------------------------
    # Booking-level operations
    # ----------------------------
    def _require_booking_store(self) -> BookingStore:
        if self.booking_store is None:
            raise MatchingError("MatchingService was built without a booking store")
        return self.booking_store

    def load_booking(self, booking_id: str) -> BookingRequest:
        booking = self._require_booking_store().get_booking_request(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def match_for_booking(
        self,
        booking_id: str,
        area: Optional[ServiceArea] = None,
        top_k: Optional[int] = None
    ) -> List[CandidateMatch]:
        """Fetch candidates from the directory and rank them for a stored booking.

        An explicit top_k overrides the configured ResultPolicy.
        """
        booking = self.load_booking(booking_id)

        if area is None and self.config.restrict_to_booking_city:
            area = ServiceArea(city=booking.city)

        candidates = self.fetch_candidates(area)

        if top_k is not None:
            return self.rank_candidates(booking, candidates, top_k=top_k)

        ranked = self.rank_candidates(booking, candidates)
        return ranking.apply_result_policy(ranked, self.config.result_policy)

    def score_pair(self, provider: ProviderProfile, booking: BookingRequest) -> CandidateMatch:
        """Evaluate a single cleaner for a booking; the result may be excluded."""
        return self.evaluate_candidates(booking, [provider])[0]

    def get_match_score(self, provider_id: str, booking_id: str) -> CandidateMatch:
        provider = self.directory.get_provider(provider_id)
        if provider is None:
            raise ProviderNotFoundError(provider_id)
        booking = self.load_booking(booking_id)
        return self.score_pair(provider, booking)

    def auto_assign(self, booking_id: str) -> CandidateMatch:
        """Assign the top-ranked cleaner to the booking and return that match."""
        store = self._require_booking_store()
        matches = self.match_for_booking(booking_id, top_k=self.config.auto_assign_pool_size)
        if not matches:
            raise NoEligibleProviderError(booking_id)

        best = matches[0]
        store.assign_provider(booking_id, best.provider_id)
        logger.info(f"Booking {booking_id}: auto-assigned cleaner {best.provider_id} "
                    f"(score {best.total_score:.1f})")
        return best
