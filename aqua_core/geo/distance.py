"""
GeoDistance — great-circle distances between the user and the things around them.

Behavioral Contract:
- Haversine on a sphere of radius 6371 km
- Pure functions, no error conditions
- Malformed input (NaN) propagates NaN; callers guard before display
"""

import math
from typing import Iterable, List, Optional

from aqua_core.models.organization import Organization, OrganizationDistance
from aqua_core.models.pollution import Coordinates

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Raw great-circle distance in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    # Float error can push `a` a hair above 1 for antipodal points
    a = min(a, 1.0)
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Display distance, rounded to the nearest whole kilometer."""
    d = haversine_km(lat1, lng1, lat2, lng2)
    if math.isnan(d):
        return d
    # Halves round up, not to even
    return float(math.floor(d + 0.5))


def distance_between(a: Coordinates, b: Coordinates) -> float:
    return distance_km(a.lat, a.lng, b.lat, b.lng)


def _matches_type(org: Organization, org_type: Optional[str]) -> bool:
    if org_type is None or org_type == "All":
        return True
    return org.type == org_type


def annotate_organizations(
    user: Coordinates,
    organizations: Iterable[Organization],
    org_type: Optional[str] = None,
) -> List[OrganizationDistance]:
    """Pair each organization with its distance from the user, keeping input order."""
    return [
        OrganizationDistance(
            organization=org,
            distance_km=distance_km(user.lat, user.lng, org.location_lat, org.location_lng),
        )
        for org in organizations
        if _matches_type(org, org_type)
    ]


def rank_organizations(
    user: Coordinates,
    organizations: Iterable[Organization],
    org_type: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[OrganizationDistance]:
    """Organizations nearest first. Unmeasurable ones (NaN) go last."""
    annotated = annotate_organizations(user, organizations, org_type)

    def _sort_key(od: OrganizationDistance):
        unmeasurable = math.isnan(od.distance_km)
        return (unmeasurable, 0.0 if unmeasurable else od.distance_km)

    annotated.sort(key=_sort_key)
    if limit is not None:
        return annotated[:limit]
    return annotated
