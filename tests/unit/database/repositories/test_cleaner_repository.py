#!/usr/bin/env python3
"""
Unit tests for CleanerRepository (ProviderDirectory over the cleaners table).
"""

import unittest
from unittest.mock import MagicMock

import pytest

from core.matching.interfaces import ServiceArea
from core.matching.models import Coordinates
from database.models import Cleaner
from database.repositories.cleaner import CleanerRepository, to_profile
from tests.factories import add_cleaner


@pytest.mark.db
class TestGetCandidates(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _bind_session(self, db_session):
        self.db = db_session
        self.repo = CleanerRepository(db_session)

    def test_only_approved_and_available(self):
        approved = add_cleaner(self.db, id="c-1")
        add_cleaner(self.db, id="c-2", approval_status="PENDING")
        add_cleaner(self.db, id="c-3", approval_status="SUSPENDED")
        add_cleaner(self.db, id="c-4", is_available=False)

        candidates = self.repo.get_candidates()

        self.assertEqual([p.provider_id for p in candidates], [approved.id])
        self.assertTrue(candidates[0].is_approved)
        self.assertTrue(candidates[0].is_active)

    def test_city_filter_is_case_insensitive(self):
        add_cleaner(self.db, id="c-1", city="Cluj-Napoca")
        add_cleaner(self.db, id="c-2", city="București")

        candidates = self.repo.get_candidates(ServiceArea(city="  cluj-napoca"))

        self.assertEqual([p.provider_id for p in candidates], ["c-1"])

    def test_radius_filter_keeps_cleaners_without_coordinates(self):
        add_cleaner(self.db, id="c-near")  # ~3 km
        add_cleaner(self.db, id="c-far", latitude=46.7712, longitude=23.6236)
        add_cleaner(self.db, id="c-unknown", latitude=None, longitude=None)

        area = ServiceArea(center=Coordinates(44.4268, 26.1025), radius_km=25)
        candidates = self.repo.get_candidates(area)

        self.assertEqual(sorted(p.provider_id for p in candidates), ["c-near", "c-unknown"])

    def test_get_provider(self):
        add_cleaner(self.db, id="c-1", full_name="Maria Ionescu")

        self.assertEqual(self.repo.get_provider("c-1").display_name, "Maria Ionescu")
        self.assertIsNone(self.repo.get_provider("missing"))


class TestToProfile(unittest.TestCase):
    """Row mapping, no database needed."""

    def _row(self, **overrides):
        row = MagicMock(spec=Cleaner)
        row.id = "c-1"
        row.full_name = "Ana"
        row.city = "Iași"
        row.latitude = 47.1585
        row.longitude = 27.6014
        row.specializations = ["Birouri", "Geamuri"]
        row.average_rating = None
        row.total_jobs = 0
        row.approval_status = "APPROVED"
        row.is_available = True
        for key, value in overrides.items():
            setattr(row, key, value)
        return row

    def test_maps_fields(self):
        profile = to_profile(self._row())

        self.assertEqual(profile.provider_id, "c-1")
        self.assertEqual(profile.coordinates, Coordinates(47.1585, 27.6014))
        self.assertEqual(profile.specializations, ("Birouri", "Geamuri"))
        self.assertIsNone(profile.average_rating)
        self.assertFalse(profile.is_experienced)

    def test_partial_coordinates_are_missing(self):
        self.assertIsNone(to_profile(self._row(longitude=None)).coordinates)

    def test_specializations_as_json_text(self):
        profile = to_profile(self._row(specializations='["Birouri"]'))
        self.assertEqual(profile.specializations, ("Birouri",))

    def test_unparsable_specializations_are_empty(self):
        self.assertEqual(to_profile(self._row(specializations="{not json")).specializations, ())
        self.assertEqual(to_profile(self._row(specializations=None)).specializations, ())


if __name__ == '__main__':
    unittest.main()
