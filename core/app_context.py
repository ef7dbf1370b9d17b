import logging
from dataclasses import dataclass
from typing import Optional

from core.config_loader import AppConfig, GeocodingConfig
from core.geocoding import NominatimGeocoder, StaticGeocoder
from core.matching.interfaces import Geocoder
from core.matching.service import MatchingService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Holds only long-lived collaborators (config, geocoder). DB access is
    obtained via matching_uow() per operation and handed to
    build_matching_service().
    """
    config: AppConfig
    geocoder: Optional[Geocoder] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        return cls(config=config, geocoder=cls._build_geocoder(config.geocoding))

    @staticmethod
    def _build_geocoder(geocoding_config: GeocodingConfig) -> Optional[Geocoder]:
        """Build the geocoder named in config, or None when geocoding is disabled."""
        if not geocoding_config.enabled:
            logger.info("Geocoding disabled; bookings without coordinates use city matching")
            return None

        if geocoding_config.provider == "static":
            return StaticGeocoder()

        return NominatimGeocoder(
            base_url=geocoding_config.base_url,
            user_agent=geocoding_config.user_agent,
            country_codes=geocoding_config.country_codes,
            request_timeout_seconds=geocoding_config.request_timeout_seconds,
            max_retries=geocoding_config.max_retries,
            retry_wait_seconds=geocoding_config.retry_wait_seconds
        )

    def build_matching_service(self, repo) -> MatchingService:
        """Wire a MatchingService over the repositories of one unit of work."""
        return MatchingService(
            directory=repo.cleaners,
            availability_store=repo.availability,
            workload_counter=repo.bookings,
            booking_store=repo.bookings,
            geocoder=self.geocoder,
            config=self.config.matching,
            country=self.config.geocoding.country,
            geocode_timeout_seconds=self.config.geocoding.call_budget_seconds()
        )

    def close(self) -> None:
        close = getattr(self.geocoder, "close", None)
        if close is not None:
            close()
