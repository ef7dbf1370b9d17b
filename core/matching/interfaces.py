"""
Collaborator Interfaces - What the matching engine consumes.

The engine treats all of these as opaque. SQL-backed implementations live in
database/repositories; the HTTP geocoder lives in core/geocoding.py.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from core.matching.models import (
    AvailabilitySlot,
    BookingRequest,
    Coordinates,
    ProviderProfile,
)


@dataclass(frozen=True)
class ServiceArea:
    """Optional narrowing of the candidate set: a city and/or a radius around a point."""
    city: Optional[str] = None
    center: Optional[Coordinates] = None
    radius_km: Optional[float] = None


@dataclass(frozen=True)
class GeocodeResult:
    latitude: float
    longitude: float
    display_name: str = ""

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude)


class ProviderDirectory(ABC):

    @abstractmethod
    def get_candidates(self, area: Optional[ServiceArea] = None) -> List[ProviderProfile]:
        """
        Return approved, active cleaners, optionally narrowed to a service area.

        Raises on failure; the engine turns that into CandidateFetchError.
        """
        pass

    @abstractmethod
    def get_provider(self, provider_id: str) -> Optional[ProviderProfile]:
        pass


class AvailabilityStore(ABC):

    @abstractmethod
    def get_slots_for_providers(
        self,
        provider_ids: Iterable[str]
    ) -> Dict[str, List[AvailabilitySlot]]:
        """
        Return all active slots for the given cleaners in one lookup.

        Cleaners without slots may be absent from the returned mapping.
        """
        pass


class WorkloadCounter(ABC):

    @abstractmethod
    def count_active_for_providers(self, provider_ids: Iterable[str]) -> Dict[str, int]:
        """
        Count non-terminal (pending, confirmed, in-progress) bookings per cleaner.

        Cleaners with no active bookings may be absent from the returned mapping.
        """
        pass


class BookingStore(ABC):

    @abstractmethod
    def get_booking_request(self, booking_id: str) -> Optional[BookingRequest]:
        pass

    @abstractmethod
    def assign_provider(self, booking_id: str, provider_id: str) -> None:
        pass


class Geocoder(ABC):

    @abstractmethod
    def geocode(self, street: str, city: str, country: str = "") -> Optional[GeocodeResult]:
        """Resolve an address to coordinates, or None when it cannot be resolved."""
        pass
