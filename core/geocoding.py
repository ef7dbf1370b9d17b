"""Geocoding clients: Nominatim over HTTP with retry logic, and an offline city table."""

import logging
from types import MappingProxyType
from typing import Optional, Dict, Any, List

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception,
    before_sleep_log
)

from core.matching.geo import fold_diacritics
from core.matching.interfaces import Geocoder, GeocodeResult

logger = logging.getLogger(__name__)


def _is_retryable_error(exc: Exception) -> bool:
    """
    Determine if an exception is retryable.

    Only retries on:
    - Timeouts
    - Server errors (5xx)
    - Connection errors without a response

    Does NOT retry on client errors (4xx).
    """
    if isinstance(exc, requests.Timeout):
        return True

    if isinstance(exc, requests.HTTPError):
        response = getattr(exc, 'response', None)
        if response is not None:
            return response.status_code >= 500
        return True

    if isinstance(exc, requests.RequestException):
        response = getattr(exc, 'response', None)
        if response is not None and 400 <= response.status_code < 500:
            return False
        return True

    return False


class NominatimGeocoder(Geocoder):
    """
    Client for the Nominatim (OpenStreetMap) search API.

    Responsibilities:
    - Own a requests.Session for connection reuse
    - Retry transient failures (timeouts, 5xx, connection errors)
    - Turn every failure into an "unresolved" (None) answer
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: str = "CleanMatch/1.0",
        country_codes: Optional[str] = "ro",
        request_timeout_seconds: float = 10.0,
        max_retries: int = 3,
        retry_wait_seconds: float = 1.0
    ):
        self.base_url = (base_url or "https://nominatim.openstreetmap.org").rstrip("/")
        self.user_agent = user_agent
        self.country_codes = country_codes
        self.request_timeout_seconds = request_timeout_seconds

        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

        self._search_with_retry = retry(
            stop=stop_after_attempt(max_retries),
            wait=wait_fixed(retry_wait_seconds),
            retry=retry_if_exception(_is_retryable_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )(self._search)

        logger.info(
            f"NominatimGeocoder initialized: base_url={self.base_url}, "
            f"timeout={request_timeout_seconds}s, max_retries={max_retries}"
        )

    @staticmethod
    def build_query(street: str, city: str, country: str = "") -> str:
        return ", ".join(part.strip() for part in (street, city, country) if part and part.strip())

    def _search(self, query: str) -> List[Dict[str, Any]]:
        params = {
            "q": query,
            "format": "json",
            "addressdetails": 1,
            "limit": 1,
        }
        if self.country_codes:
            params["countrycodes"] = self.country_codes

        response = self.session.get(
            f"{self.base_url}/search",
            params=params,
            timeout=self.request_timeout_seconds
        )
        response.raise_for_status()
        return response.json()

    def geocode(self, street: str, city: str, country: str = "") -> Optional[GeocodeResult]:
        query = self.build_query(street, city, country)
        if not query:
            return None

        try:
            results = self._search_with_retry(query)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Geocoding failed for '{query}': {e}")
            return None

        if not results:
            logger.info(f"No geocoding results found for address: {query}")
            return None

        first = results[0]
        try:
            return GeocodeResult(
                latitude=float(first["lat"]),
                longitude=float(first["lon"]),
                display_name=first.get("display_name", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Invalid coordinates in geocoding response for '{query}': {e}")
            return None

    def close(self):
        """Close the session and release resources."""
        self.session.close()
        logger.info("NominatimGeocoder session closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


# Approximate city-centre coordinates for development without network access
CITY_CENTRES = MappingProxyType({
    "bucuresti": (44.4268, 26.1025, "București, Romania"),
    "bucharest": (44.4268, 26.1025, "București, Romania"),
    "cluj-napoca": (46.7712, 23.6236, "Cluj-Napoca, Romania"),
    "timisoara": (45.7489, 21.2087, "Timișoara, Romania"),
    "iasi": (47.1585, 27.6014, "Iași, Romania"),
    "constanta": (44.1598, 28.6348, "Constanța, Romania"),
    "brasov": (45.6427, 25.5887, "Brașov, Romania"),
    "craiova": (44.3302, 23.7949, "Craiova, Romania"),
    "galati": (45.4353, 28.0080, "Galați, Romania"),
    "oradea": (47.0465, 21.9189, "Oradea, Romania"),
    "sibiu": (45.7983, 24.1256, "Sibiu, Romania"),
})


class StaticGeocoder(Geocoder):
    """Resolves known city names (case and diacritic insensitive); street is ignored."""

    def __init__(self, table: Optional[Dict[str, tuple]] = None):
        self.table = table if table is not None else CITY_CENTRES

    def geocode(self, street: str, city: str, country: str = "") -> Optional[GeocodeResult]:
        entry = self.table.get(fold_diacritics(city))
        if entry is None:
            return None
        lat, lon, name = entry
        return GeocodeResult(latitude=lat, longitude=lon, display_name=name)
