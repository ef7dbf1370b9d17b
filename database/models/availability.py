import uuid

from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Boolean, Integer, Date, Index, func

from .base import Base


class Availability(Base):
    """
    A cleaner's schedule entry.

    type RECURRING uses day_of_week (0=Sunday..6=Saturday), ONE_TIME uses
    specific_date, BLOCKED uses either. start_time/end_time are "HH:MM".
    """
    __tablename__ = 'availability'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    cleaner_id = Column(String(36), ForeignKey('cleaners.id', ondelete='CASCADE'), nullable=False)

    type = Column(String(20), nullable=False)
    day_of_week = Column(Integer, nullable=True)
    specific_date = Column(Date, nullable=True)
    start_time = Column(String(8), nullable=False)
    end_time = Column(String(8), nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_availability_cleaner', 'cleaner_id'),
    )
