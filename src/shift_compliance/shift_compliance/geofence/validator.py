"""Great-circle geofence checks. Pure functions, no state."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS, EARTH_RADIUS_METERS
from .model import GeofenceMatch, GeofenceZone, GeoPoint


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two points."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


class GeofenceValidator:
    def __init__(self, *, default_radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS):
        self._default_radius = float(default_radius_meters)

    def validate(
        self,
        point: Optional[GeoPoint],
        reference_point: Optional[GeoPoint] = None,
        radius_meters: Optional[float] = None,
    ) -> bool:
        # Geofencing is optional: no reference means nothing to violate.
        if reference_point is None:
            return True
        if point is None:
            return False
        radius = self._default_radius if radius_meters is None else float(radius_meters)
        return distance_meters(point, reference_point) <= radius

    def match(self, point: Optional[GeoPoint], zones: Sequence[GeofenceZone]) -> GeofenceMatch:
        """First active zone containing `point`."""
        active = [z for z in zones if z.is_active]
        if not active:
            return GeofenceMatch(is_within=True)
        if point is None:
            return GeofenceMatch(is_within=False)

        for zone in active:
            distance = distance_meters(point, zone.center)
            if distance <= zone.radius_meters:
                return GeofenceMatch(is_within=True, zone_name=zone.name, distance_meters=round(distance, 1))
        return GeofenceMatch(is_within=False)
