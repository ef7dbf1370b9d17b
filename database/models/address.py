import uuid

from sqlalchemy import Column, String, Text, TIMESTAMP, Float, func

from .base import Base


class Address(Base):
    __tablename__ = 'addresses'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    street_address = Column(Text, nullable=False)
    city = Column(Text, nullable=False)
    county = Column(Text, nullable=True)
    postal_code = Column(String(20), nullable=True)

    # NULL until geocoded
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
