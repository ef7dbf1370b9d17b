import json
import logging
from typing import List, Optional

from sqlalchemy import select

from core.matching.geo import haversine_km, same_city
from core.matching.interfaces import ProviderDirectory, ServiceArea
from core.matching.models import Coordinates, ProviderProfile
from database.models import Cleaner
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

APPROVED = 'APPROVED'


def _parse_specializations(cleaner: Cleaner) -> tuple:
    raw = cleaner.specializations
    if raw is None:
        return ()
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning(f"Failed to parse specializations for cleaner {cleaner.id}")
            return ()
    if not isinstance(raw, (list, tuple)):
        logger.warning(f"Unexpected specializations for cleaner {cleaner.id}: {type(raw).__name__}")
        return ()
    return tuple(str(s) for s in raw if s)


def to_profile(cleaner: Cleaner) -> ProviderProfile:
    coordinates = None
    if cleaner.latitude is not None and cleaner.longitude is not None:
        coordinates = Coordinates(float(cleaner.latitude), float(cleaner.longitude))

    return ProviderProfile(
        provider_id=str(cleaner.id),
        city=cleaner.city or "",
        specializations=_parse_specializations(cleaner),
        coordinates=coordinates,
        average_rating=float(cleaner.average_rating) if cleaner.average_rating is not None else None,
        total_jobs=int(cleaner.total_jobs or 0),
        is_approved=cleaner.approval_status == APPROVED,
        is_active=bool(cleaner.is_available),
        display_name=cleaner.full_name,
    )


def _within_area(profile: ProviderProfile, area: ServiceArea) -> bool:
    if area.city and not same_city(profile.city, area.city):
        return False
    if area.center is not None and area.radius_km is not None and profile.coordinates is not None:
        distance = haversine_km(
            area.center.latitude, area.center.longitude,
            profile.coordinates.latitude, profile.coordinates.longitude
        )
        if distance > area.radius_km:
            return False
    return True


class CleanerRepository(BaseRepository, ProviderDirectory):
    def get_candidates(self, area: Optional[ServiceArea] = None) -> List[ProviderProfile]:
        """Approved, available cleaners. Area filtering keeps cleaners without coordinates."""
        stmt = (
            select(Cleaner)
            .where(
                Cleaner.approval_status == APPROVED,
                Cleaner.is_available.is_(True)
            )
            .order_by(Cleaner.id)
        )
        with self._lookup_session() as session:
            profiles = [to_profile(c) for c in session.execute(stmt).scalars().all()]

        if area is not None:
            profiles = [p for p in profiles if _within_area(p, area)]

        logger.debug(f"Directory returned {len(profiles)} candidate cleaners (area={area})")
        return profiles

    def get_provider(self, provider_id: str) -> Optional[ProviderProfile]:
        cleaner = self.get_by_id(provider_id)
        return to_profile(cleaner) if cleaner else None

    def get_by_id(self, cleaner_id: str) -> Optional[Cleaner]:
        stmt = select(Cleaner).where(Cleaner.id == cleaner_id)
        return self.db.execute(stmt).scalar_one_or_none()
