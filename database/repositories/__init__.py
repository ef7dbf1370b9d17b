from database.repositories.base import BaseRepository
from database.repositories.cleaner import CleanerRepository
from database.repositories.availability import AvailabilityRepository
from database.repositories.booking import BookingRepository

__all__ = [
    'BaseRepository',
    'CleanerRepository',
    'AvailabilityRepository',
    'BookingRepository',
]
