import math
import unicodedata
from typing import Optional

from core.matching.models import Coordinates

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a: Optional[Coordinates], b: Optional[Coordinates]) -> Optional[float]:
    if a is None or b is None:
        return None
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def norm(s: Optional[str]) -> str:
    return (s or "").strip().casefold()


def fold_diacritics(s: Optional[str]) -> str:
    """norm() plus removal of combining marks ("Timișoara" -> "timisoara")."""
    decomposed = unicodedata.normalize("NFKD", norm(s))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def same_city(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive exact city match. Empty names never match."""
    left, right = norm(a), norm(b)
    return bool(left) and left == right
