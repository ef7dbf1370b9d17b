import uuid

from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Boolean, Date, Index, func
from sqlalchemy.orm import relationship

from .base import Base

# Statuses that count against a cleaner's current workload
ACTIVE_BOOKING_STATUSES = ('PENDING', 'CONFIRMED', 'IN_PROGRESS')


class Booking(Base):
    __tablename__ = 'bookings'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    address_id = Column(String(36), ForeignKey('addresses.id'), nullable=False)
    cleaner_id = Column(String(36), ForeignKey('cleaners.id', ondelete='SET NULL'), nullable=True)

    service_type = Column(String(30), nullable=False, default='STANDARD')
    scheduled_date = Column(Date, nullable=False)
    # "HH:MM"
    scheduled_time = Column(String(8), nullable=False)

    # Add-ons
    includes_deep_cleaning = Column(Boolean, default=False)
    includes_windows = Column(Boolean, default=False)
    includes_carpet_cleaning = Column(Boolean, default=False)
    includes_fridge_cleaning = Column(Boolean, default=False)
    includes_oven_cleaning = Column(Boolean, default=False)
    includes_balcony_cleaning = Column(Boolean, default=False)

    status = Column(String(20), nullable=False, default='PENDING')
    notes = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    address = relationship("Address")

    __table_args__ = (
        Index('idx_bookings_cleaner_status', 'cleaner_id', 'status'),
    )
