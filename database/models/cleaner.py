import uuid

from sqlalchemy import Column, String, Text, TIMESTAMP, Boolean, Integer, Float, JSON, Index, func

from .base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class Cleaner(Base):
    """
    Cleaner profile as read by the matching engine.

    specializations is a JSON list of tags (e.g. ["Curățenie Standard", "Geamuri"]).
    average_rating stays NULL until the first review.
    """
    __tablename__ = 'cleaners'

    id = Column(String(36), primary_key=True, default=_uuid)
    full_name = Column(Text, nullable=True)

    city = Column(Text, nullable=False)
    county = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    specializations = Column(JSON, default=list)
    average_rating = Column(Float, nullable=True)
    total_jobs = Column(Integer, nullable=False, default=0)

    approval_status = Column(String(20), nullable=False, default='PENDING')
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_cleaners_approval', 'approval_status'),
        Index('idx_cleaners_city', 'city'),
    )
