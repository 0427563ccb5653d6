"""
Nearest-compatible-resource matching.
Only Available resources of the target type are considered; there is no fallback to other types.
"""
import logging
from typing import Iterable, Optional

from relieflink.schemas.triage import Coordinates, Resource, ResourceType
from relieflink.services.maps import distance_km

logger = logging.getLogger(__name__)

AMBULANCE_NEED_HINTS = ("medical", "injury")


def target_resource_type(need: str) -> Optional[ResourceType]:
    """Map an extracted need to a resource type. "Medical"/"injury" needs go to Ambulance."""
    need_lower = (need or "").lower()
    if any(hint in need_lower for hint in AMBULANCE_NEED_HINTS):
        return ResourceType.AMBULANCE
    return ResourceType.from_label(need)


def match_resource(need: str, coords: Coordinates, resources: Iterable[Resource]) -> Optional[Resource]:
    """Nearest Available resource whose type matches the need. First seen wins on equal distance."""
    target = target_resource_type(need)
    if target is None:
        logger.info("Need %r maps to no resource type; leaving unmatched", need)
        return None

    best: Optional[Resource] = None
    min_dist = float("inf")
    for res in resources:
        if res.status != "Available" or res.type != target:
            continue
        dist = distance_km(coords, Coordinates(lat=res.lat, lng=res.lng))
        if dist < min_dist:
            min_dist = dist
            best = res

    if best is None:
        logger.info("No available %s resource for need %r", target.value, need)
    else:
        logger.debug("Matched %s (%s) at %.2f km", best.name, best.id, min_dist)
    return best
