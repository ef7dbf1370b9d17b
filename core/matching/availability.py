#!/usr/bin/env python3
"""
Availability Scorer - Schedule fit (25 points max) and hard exclusion.

Precedence, first match wins:
1. BLOCKED slot covering the requested date/time -> excluded
2. RECURRING slot on the requested weekday containing the time -> 25
3. ONE_TIME slot on the requested date containing the time -> 20
4. No slots configured at all -> 15
5. Slots exist but none match -> 0 (still rankable)
"""

import datetime
from typing import Iterable, Optional

from core.matching.models import AvailabilityScore, AvailabilitySlot, SlotKind
from core.matching.schedule import day_of_week, time_in_range


MAX_POINTS = 25.0
RECURRING_MATCH_POINTS = 25.0
ONE_TIME_MATCH_POINTS = 20.0
UNCONFIGURED_POINTS = 15.0
NO_MATCH_POINTS = 0.0


def _on_day(slot: AvailabilitySlot, date: datetime.date, weekday: int) -> bool:
    if slot.specific_date is not None:
        return slot.specific_date == date
    if slot.day_of_week is not None:
        return slot.day_of_week == weekday
    return False


def _covers(slot: AvailabilitySlot, date: datetime.date, weekday: int, time: datetime.time) -> bool:
    return _on_day(slot, date, weekday) and time_in_range(time, slot.start_time, slot.end_time)


def find_blocking_slot(
    slots: Iterable[AvailabilitySlot],
    booking_date: datetime.date,
    booking_time: datetime.time
) -> Optional[AvailabilitySlot]:
    weekday = day_of_week(booking_date)
    for slot in slots:
        if slot.kind == SlotKind.BLOCKED and _covers(slot, booking_date, weekday, booking_time):
            return slot
    return None


def score_availability(
    slots: Optional[Iterable[AvailabilitySlot]],
    booking_date: datetime.date,
    booking_time: datetime.time
) -> AvailabilityScore:
    slots = list(slots or [])

    if find_blocking_slot(slots, booking_date, booking_time) is not None:
        return AvailabilityScore(points=0.0, reason="blocked", excluded=True)

    weekday = day_of_week(booking_date)

    for slot in slots:
        if (
            slot.kind == SlotKind.RECURRING
            and slot.day_of_week == weekday
            and time_in_range(booking_time, slot.start_time, slot.end_time)
        ):
            return AvailabilityScore(points=RECURRING_MATCH_POINTS, reason="recurring")

    for slot in slots:
        if (
            slot.kind == SlotKind.ONE_TIME
            and slot.specific_date == booking_date
            and time_in_range(booking_time, slot.start_time, slot.end_time)
        ):
            return AvailabilityScore(points=ONE_TIME_MATCH_POINTS, reason="one_time")

    if not slots:
        return AvailabilityScore(points=UNCONFIGURED_POINTS, reason="unset")

    return AvailabilityScore(points=NO_MATCH_POINTS, reason="no_match")


def lookup_failed_score() -> AvailabilityScore:
    """Score used when the slot lookup itself failed: treated like an unset schedule."""
    return AvailabilityScore(points=UNCONFIGURED_POINTS, reason="lookup_failed")
