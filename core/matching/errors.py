"""Exceptions raised by the matching engine."""


class MatchingError(Exception):
    """Base class for matching failures."""


class CandidateFetchError(MatchingError):
    """The provider directory could not be queried. Aborts the whole match."""


class BookingNotFoundError(MatchingError):
    def __init__(self, booking_id: str):
        super().__init__(f"Booking not found: {booking_id}")
        self.booking_id = booking_id


class ProviderNotFoundError(MatchingError):
    def __init__(self, provider_id: str):
        super().__init__(f"Cleaner not found: {provider_id}")
        self.provider_id = provider_id


class NoEligibleProviderError(MatchingError):
    def __init__(self, booking_id: str):
        super().__init__(f"No suitable cleaners found for booking {booking_id}")
        self.booking_id = booking_id
