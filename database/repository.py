from typing import Callable, Optional

from sqlalchemy.orm import Session

from database.repositories import (
    AvailabilityRepository,
    BookingRepository,
    CleanerRepository,
)


class MatchingRepository:
    """
    Repositories the matching engine reads from and writes to.

    cleaners     -> ProviderDirectory
    availability -> AvailabilityStore
    bookings     -> WorkloadCounter and BookingStore

    Writes and single-row reads use db. Batched lookups, which the matching
    service may abandon on timeout, open their own Session from session_factory.
    """

    def __init__(self, db: Session, session_factory: Optional[Callable[[], Session]] = None):
        self.db = db
        self.cleaners = CleanerRepository(db, session_factory)
        self.availability = AvailabilityRepository(db, session_factory)
        self.bookings = BookingRepository(db, session_factory)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
