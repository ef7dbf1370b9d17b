import logging
from typing import Dict, Iterable, Optional

from sqlalchemy import select, func

from core.matching.errors import BookingNotFoundError
from core.matching.interfaces import BookingStore, WorkloadCounter
from core.matching.models import BookingRequest, Coordinates
from core.matching.schedule import parse_hhmm
from database.models import Address, Booking, ACTIVE_BOOKING_STATUSES
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def to_booking_request(booking: Booking, address: Address) -> BookingRequest:
    coordinates = None
    if address.latitude is not None and address.longitude is not None:
        coordinates = Coordinates(float(address.latitude), float(address.longitude))

    return BookingRequest(
        booking_id=str(booking.id),
        scheduled_date=booking.scheduled_date,
        scheduled_time=parse_hhmm(booking.scheduled_time),
        service_type=booking.service_type,
        city=address.city or "",
        street=address.street_address or "",
        coordinates=coordinates,
        includes_windows=bool(booking.includes_windows),
    )


class BookingRepository(BaseRepository, WorkloadCounter, BookingStore):
    def count_active_for_providers(self, provider_ids: Iterable[str]) -> Dict[str, int]:
        ids = list(dict.fromkeys(provider_ids))
        counts: Dict[str, int] = {pid: 0 for pid in ids}
        if not ids:
            return counts

        with self._lookup_session() as session:
            for chunk in self._chunked(ids):
                stmt = (
                    select(Booking.cleaner_id, func.count(Booking.id))
                    .where(
                        Booking.cleaner_id.in_(chunk),
                        Booking.status.in_(ACTIVE_BOOKING_STATUSES)
                    )
                    .group_by(Booking.cleaner_id)
                )
                for cleaner_id, count in session.execute(stmt).all():
                    counts[str(cleaner_id)] = int(count)

        return counts

    def get_booking_request(self, booking_id: str) -> Optional[BookingRequest]:
        stmt = (
            select(Booking, Address)
            .join(Address, Booking.address_id == Address.id)
            .where(Booking.id == booking_id)
        )
        row = self.db.execute(stmt).first()
        if row is None:
            return None
        booking, address = row
        return to_booking_request(booking, address)

    def assign_provider(self, booking_id: str, provider_id: str) -> None:
        booking = self.db.execute(
            select(Booking).where(Booking.id == booking_id)
        ).scalar_one_or_none()
        if booking is None:
            raise BookingNotFoundError(booking_id)

        booking.cleaner_id = provider_id
        booking.status = 'CONFIRMED'
        self.db.flush()
        logger.info(f"Booking {booking_id} assigned to cleaner {provider_id} (CONFIRMED)")
