import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select

from core.matching.interfaces import AvailabilityStore
from core.matching.models import AvailabilitySlot, SlotKind
from core.matching.schedule import parse_hhmm
from database.models import Availability
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def to_slot(row: Availability) -> Optional[AvailabilitySlot]:
    """Convert a row; malformed rows are skipped (None) rather than failing the batch."""
    try:
        kind = SlotKind(row.type)
        start = parse_hhmm(row.start_time)
        end = parse_hhmm(row.end_time)
    except ValueError as e:
        logger.warning(f"Skipping availability {row.id} for cleaner {row.cleaner_id}: {e}")
        return None

    return AvailabilitySlot(
        provider_id=str(row.cleaner_id),
        kind=kind,
        start_time=start,
        end_time=end,
        day_of_week=row.day_of_week,
        specific_date=row.specific_date,
    )


class AvailabilityRepository(BaseRepository, AvailabilityStore):
    def get_slots_for_providers(
        self,
        provider_ids: Iterable[str]
    ) -> Dict[str, List[AvailabilitySlot]]:
        ids = list(dict.fromkeys(provider_ids))
        result: Dict[str, List[AvailabilitySlot]] = {pid: [] for pid in ids}
        if not ids:
            return result

        with self._lookup_session() as session:
            for chunk in self._chunked(ids):
                stmt = (
                    select(Availability)
                    .where(
                        Availability.cleaner_id.in_(chunk),
                        Availability.is_active.is_(True)
                    )
                    .order_by(
                        Availability.cleaner_id,
                        Availability.type,
                        Availability.day_of_week,
                        Availability.specific_date,
                        Availability.start_time
                    )
                )
                for row in session.execute(stmt).scalars().all():
                    slot = to_slot(row)
                    if slot is not None:
                        result.setdefault(slot.provider_id, []).append(slot)

        return result
