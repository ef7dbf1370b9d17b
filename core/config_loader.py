import yaml
import os
from typing import Optional, Literal
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str


class GeocodingConfig(BaseModel):
    """
    Geocoder used to resolve booking addresses that have no stored coordinates.

    provider "nominatim" calls the OpenStreetMap Nominatim API,
    provider "static" resolves well-known city names offline (development).
    """
    enabled: bool = True
    provider: Literal["nominatim", "static"] = "nominatim"
    base_url: str = "https://nominatim.openstreetmap.org"
    # Nominatim usage policy requires an identifying User-Agent
    user_agent: str = "CleanMatch/1.0 (ops@cleanmatch.example)"
    country: str = "Romania"
    country_codes: Optional[str] = "ro"
    request_timeout_seconds: float = 10.0
    max_retries: int = Field(default=3, ge=1)
    retry_wait_seconds: float = Field(default=1.0, ge=0)

    def call_budget_seconds(self) -> float:
        """Worst-case duration of one geocode call: every attempt times out, with waits between."""
        return (self.request_timeout_seconds * self.max_retries
                + self.retry_wait_seconds * (self.max_retries - 1))


class ResultPolicy(BaseModel):
    """Post-ranking filtering and truncation policy.

    Applied by callers that present results (e.g. admin UI, CLI).
    """
    min_score: float = 0.0  # 0-100, filter threshold
    top_k: Optional[int] = Field(default=5, ge=1)  # None = full ranked list


class MatchingConfig(BaseModel):
    """
    Configuration for the MatchingService.

    Scoring tables are fixed constants in core.matching; only execution knobs live here.
    """
    # Worker threads used to score candidates; capped by the candidate count
    max_workers: int = Field(default=16, ge=1)
    # Timeout for each batched lookup (directory, slots, workload). The geocoder
    # is bounded by GeocodingConfig.call_budget_seconds() instead
    lookup_timeout_seconds: float = Field(default=2.0, gt=0)
    # How many ranked candidates auto-assignment considers before picking the head
    auto_assign_pool_size: int = Field(default=5, ge=1)
    # Narrow the directory to the booking's city when no area is given
    restrict_to_booking_city: bool = False

    result_policy: ResultPolicy = Field(default_factory=ResultPolicy)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class AppConfig(BaseModel):
    database: DatabaseConfig
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another directory), use the repo root copy
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if not data.get('database'):
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var override for geocoder URL
    env_geocoder_url = os.environ.get("GEOCODER_URL")
    if env_geocoder_url:
        if not data.get('geocoding'):
            data['geocoding'] = {}
        data['geocoding']['base_url'] = env_geocoder_url

    env_log_level = os.environ.get("LOG_LEVEL")
    if env_log_level:
        if not data.get('logging'):
            data['logging'] = {}
        data['logging']['level'] = env_log_level.upper()

    return AppConfig(**data)
