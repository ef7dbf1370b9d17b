"""Row builders for repository tests."""

import datetime
import uuid

from database.models import Address, Availability, Booking, Cleaner


def add_cleaner(session, **overrides) -> Cleaner:
    values = dict(
        id=str(uuid.uuid4()),
        full_name="Ana Popescu",
        city="București",
        county="Ilfov",
        latitude=44.4538,
        longitude=26.1025,
        specializations=["Curățenie Standard"],
        average_rating=4.8,
        total_jobs=45,
        approval_status="APPROVED",
        is_available=True,
    )
    values.update(overrides)
    cleaner = Cleaner(**values)
    session.add(cleaner)
    session.flush()
    return cleaner


def add_address(session, **overrides) -> Address:
    values = dict(
        id=str(uuid.uuid4()),
        street_address="Strada Lipscani 10",
        city="București",
        county="Ilfov",
        postal_code="030031",
        latitude=44.4268,
        longitude=26.1025,
    )
    values.update(overrides)
    address = Address(**values)
    session.add(address)
    session.flush()
    return address


def add_booking(session, address=None, **overrides) -> Booking:
    if address is None:
        address = add_address(session)
    values = dict(
        id=str(uuid.uuid4()),
        address_id=address.id,
        service_type="STANDARD",
        scheduled_date=datetime.date(2025, 3, 10),
        scheduled_time="10:00",
        status="PENDING",
    )
    values.update(overrides)
    booking = Booking(**values)
    session.add(booking)
    session.flush()
    return booking


def add_slot(session, cleaner_id, **overrides) -> Availability:
    values = dict(
        id=str(uuid.uuid4()),
        cleaner_id=cleaner_id,
        type="RECURRING",
        day_of_week=1,
        start_time="08:00",
        end_time="18:00",
        is_active=True,
    )
    values.update(overrides)
    slot = Availability(**values)
    session.add(slot)
    session.flush()
    return slot
