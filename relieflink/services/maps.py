"""
Approximate geocoding for ReliefLink.
Free-text locations are matched against a small Chennai gazetteer; anything unknown lands
somewhere near the city centre. Points are jittered so repeated mentions don't overlap on the map.
"""
import logging
import math
import random
from typing import Dict, Optional, Tuple

from relieflink.schemas.triage import Coordinates

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371

# Declaration order matters: the first name found in the text wins.
GAZETTEER: Dict[str, Tuple[float, float]] = {
    "T. Nagar": (13.0418, 80.2341),
    "Marina Beach": (13.0500, 80.2824),
    "Chennai Central": (13.0827, 80.2707),
    "Anna Nagar": (13.0850, 80.2101),
    "Adyar": (13.0067, 80.2578),
    "Velachery": (12.9791, 80.2185),
    "Mylapore": (13.0330, 80.2677),
    "Guindy": (13.0067, 80.2206),
    "Kodambakkam": (13.0521, 80.2255),
    "Besant Nagar": (13.0003, 80.2665),
    "Egmore": (13.0783, 80.2619),
    "Nungambakkam": (13.0588, 80.2435),
    "Saidapet": (13.0213, 80.2231),
    "Tambaram": (12.9229, 80.1275),
}

DEFAULT_CENTER: Tuple[float, float] = (13.05, 80.25)
PLACE_JITTER_DEG = 0.0025
FALLBACK_JITTER_DEG = 0.05


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in km between two points (WGS84)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinates, b: Coordinates) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


class LocationResolver:
    """Maps location text to approximate coordinates. Never fails."""

    def __init__(
        self,
        gazetteer: Optional[Dict[str, Tuple[float, float]]] = None,
        default_center: Tuple[float, float] = DEFAULT_CENTER,
        jitter: bool = True,
        rng: Optional[random.Random] = None,
    ):
        self.gazetteer = dict(gazetteer if gazetteer is not None else GAZETTEER)
        self.default_center = default_center
        self.jitter = jitter
        self._rng = rng or random.Random()

    def _offset(self, max_deg: float) -> float:
        if not self.jitter:
            return 0.0
        return self._rng.uniform(-max_deg, max_deg)

    def lookup(self, location_text: str) -> Optional[str]:
        """First gazetteer name contained in the text (case-insensitive), or None."""
        text = (location_text or "").lower()
        for name in self.gazetteer:
            if name.lower() in text:
                return name
        return None

    def resolve(self, location_text: str) -> Coordinates:
        name = self.lookup(location_text)
        if name is not None:
            lat, lng = self.gazetteer[name]
            return Coordinates(lat=lat + self._offset(PLACE_JITTER_DEG), lng=lng + self._offset(PLACE_JITTER_DEG))

        logger.debug("No gazetteer match for %r; using city-centre fallback", (location_text or "")[:50])
        lat, lng = self.default_center
        return Coordinates(lat=lat + self._offset(FALLBACK_JITTER_DEG), lng=lng + self._offset(FALLBACK_JITTER_DEG))

