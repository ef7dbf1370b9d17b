from .base import Base
from .cleaner import Cleaner
from .address import Address
from .booking import Booking, ACTIVE_BOOKING_STATUSES
from .availability import Availability

__all__ = [
    'Base',
    'Cleaner',
    'Address',
    'Booking',
    'ACTIVE_BOOKING_STATUSES',
    'Availability',
]
