#!/usr/bin/env python3
"""
Unit tests for BookingRepository (workload counts, booking loading, assignment).
"""

import datetime
import unittest

import pytest

from core.matching.errors import BookingNotFoundError
from core.matching.models import Coordinates
from database.models import Booking
from database.repositories.booking import BookingRepository
from tests.factories import add_address, add_booking, add_cleaner


@pytest.mark.db
class TestCountActive(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _bind_session(self, db_session):
        self.db = db_session
        self.repo = BookingRepository(db_session)
        add_cleaner(db_session, id="c-a")
        add_cleaner(db_session, id="c-b")

    def test_counts_only_non_terminal_statuses(self):
        for status in ("PENDING", "CONFIRMED", "IN_PROGRESS", "COMPLETED", "CANCELLED"):
            add_booking(self.db, cleaner_id="c-a", status=status)

        counts = self.repo.count_active_for_providers(["c-a", "c-b"])

        self.assertEqual(counts, {"c-a": 3, "c-b": 0})

    def test_empty_input(self):
        self.assertEqual(self.repo.count_active_for_providers([]), {})


@pytest.mark.db
class TestBookingRequests(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _bind_session(self, db_session):
        self.db = db_session
        self.repo = BookingRepository(db_session)

    def test_get_booking_request(self):
        address = add_address(self.db, city="Brașov", latitude=45.6427, longitude=25.5887)
        booking = add_booking(self.db, address=address, service_type="OFFICE",
                              scheduled_time="14:30", includes_windows=True)

        request = self.repo.get_booking_request(booking.id)

        self.assertEqual(request.booking_id, booking.id)
        self.assertEqual(request.city, "Brașov")
        self.assertEqual(request.coordinates, Coordinates(45.6427, 25.5887))
        self.assertEqual(request.scheduled_date, datetime.date(2025, 3, 10))
        self.assertEqual(request.scheduled_time, datetime.time(14, 30))
        self.assertTrue(request.includes_windows)

    def test_other_addons_do_not_reach_the_request(self):
        booking = add_booking(self.db, includes_oven_cleaning=True, includes_deep_cleaning=True)

        request = self.repo.get_booking_request(booking.id)

        self.assertFalse(request.includes_windows)
        self.assertFalse(hasattr(request, "addons"))

    def test_address_without_coordinates(self):
        address = add_address(self.db, latitude=None, longitude=None)
        booking = add_booking(self.db, address=address)

        self.assertIsNone(self.repo.get_booking_request(booking.id).coordinates)

    def test_unknown_booking(self):
        self.assertIsNone(self.repo.get_booking_request("missing"))

    def test_assign_provider(self):
        add_cleaner(self.db, id="c-a")
        booking = add_booking(self.db)

        self.repo.assign_provider(booking.id, "c-a")

        stored = self.db.get(Booking, booking.id)
        self.assertEqual(stored.cleaner_id, "c-a")
        self.assertEqual(stored.status, "CONFIRMED")

    def test_assign_unknown_booking(self):
        with self.assertRaises(BookingNotFoundError):
            self.repo.assign_provider("missing", "c-a")


if __name__ == '__main__':
    unittest.main()
