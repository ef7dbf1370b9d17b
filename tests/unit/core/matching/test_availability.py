#!/usr/bin/env python3
"""
Test suite for the availability scorer.

2025-03-10 is a Monday (day_of_week 1, Sunday=0).
"""

import datetime
import unittest

from core.matching.availability import (
    find_blocking_slot,
    lookup_failed_score,
    score_availability,
)
from core.matching.models import AvailabilitySlot, SlotKind
from core.matching.schedule import day_of_week, parse_hhmm, time_in_range

MONDAY = datetime.date(2025, 3, 10)
TEN_AM = datetime.time(10, 0)


def slot(kind, start="08:00", end="18:00", day=None, date=None):
    return AvailabilitySlot(
        provider_id="c1",
        kind=kind,
        start_time=parse_hhmm(start),
        end_time=parse_hhmm(end),
        day_of_week=day,
        specific_date=date,
    )


class TestScheduleHelpers(unittest.TestCase):

    def test_sunday_is_zero(self):
        self.assertEqual(day_of_week(datetime.date(2025, 3, 9)), 0)
        self.assertEqual(day_of_week(MONDAY), 1)
        self.assertEqual(day_of_week(datetime.date(2025, 3, 15)), 6)

    def test_parse_hhmm(self):
        self.assertEqual(parse_hhmm("09:30"), datetime.time(9, 30))
        self.assertEqual(parse_hhmm("09:30:00"), datetime.time(9, 30))
        with self.assertRaises(ValueError):
            parse_hhmm("9h30")

    def test_range_inclusive_at_both_ends(self):
        start, end = datetime.time(8, 0), datetime.time(12, 0)
        self.assertTrue(time_in_range(datetime.time(8, 0), start, end))
        self.assertTrue(time_in_range(datetime.time(12, 0), start, end))
        self.assertFalse(time_in_range(datetime.time(12, 1), start, end))


class TestScoreAvailability(unittest.TestCase):

    def test_recurring_match(self):
        result = score_availability([slot(SlotKind.RECURRING, day=1)], MONDAY, TEN_AM)
        self.assertEqual(result.points, 25.0)
        self.assertEqual(result.reason, "recurring")
        self.assertFalse(result.excluded)

    def test_one_time_match(self):
        result = score_availability([slot(SlotKind.ONE_TIME, date=MONDAY)], MONDAY, TEN_AM)
        self.assertEqual(result.points, 20.0)
        self.assertEqual(result.reason, "one_time")

    def test_recurring_beats_one_time(self):
        slots = [slot(SlotKind.ONE_TIME, date=MONDAY), slot(SlotKind.RECURRING, day=1)]
        self.assertEqual(score_availability(slots, MONDAY, TEN_AM).points, 25.0)

    def test_no_slots_configured(self):
        for slots in ([], None):
            result = score_availability(slots, MONDAY, TEN_AM)
            self.assertEqual(result.points, 15.0)
            self.assertEqual(result.reason, "unset")
            self.assertFalse(result.excluded)

    def test_slots_exist_but_none_match(self):
        slots = [slot(SlotKind.RECURRING, day=2), slot(SlotKind.ONE_TIME, start="14:00", end="16:00", date=MONDAY)]
        result = score_availability(slots, MONDAY, TEN_AM)
        self.assertEqual(result.points, 0.0)
        self.assertEqual(result.reason, "no_match")
        self.assertFalse(result.excluded)

    def test_boundary_times_match(self):
        slots = [slot(SlotKind.RECURRING, start="10:00", end="12:00", day=1)]
        self.assertEqual(score_availability(slots, MONDAY, datetime.time(10, 0)).points, 25.0)
        self.assertEqual(score_availability(slots, MONDAY, datetime.time(12, 0)).points, 25.0)

    def test_blocked_by_specific_date_excludes(self):
        slots = [
            slot(SlotKind.RECURRING, day=1),
            slot(SlotKind.BLOCKED, start="09:00", end="11:00", date=MONDAY),
        ]
        result = score_availability(slots, MONDAY, TEN_AM)
        self.assertTrue(result.excluded)
        self.assertEqual(result.reason, "blocked")

    def test_blocked_by_recurring_day_excludes(self):
        slots = [slot(SlotKind.BLOCKED, start="00:00", end="23:59", day=1)]
        self.assertTrue(score_availability(slots, MONDAY, TEN_AM).excluded)

    def test_blocked_outside_time_does_not_exclude(self):
        slots = [
            slot(SlotKind.RECURRING, day=1),
            slot(SlotKind.BLOCKED, start="14:00", end="18:00", date=MONDAY),
        ]
        result = score_availability(slots, MONDAY, TEN_AM)
        self.assertFalse(result.excluded)
        self.assertEqual(result.points, 25.0)

    def test_blocked_other_day_does_not_exclude(self):
        blocked = slot(SlotKind.BLOCKED, date=datetime.date(2025, 3, 11))
        self.assertIsNone(find_blocking_slot([blocked], MONDAY, TEN_AM))

    def test_lookup_failed_is_neutral(self):
        result = lookup_failed_score()
        self.assertEqual(result.points, 15.0)
        self.assertFalse(result.excluded)
        self.assertTrue(result.degraded)


if __name__ == '__main__':
    unittest.main()
