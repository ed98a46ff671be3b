from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_non_negative, require_positive, require_range


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        require_range(self.latitude, "latitude", -90.0, 90.0)
        require_range(self.longitude, "longitude", -180.0, 180.0)


@dataclass(frozen=True)
class Location:
    """A recorded position. `address` is display-only (reverse geocoding)."""

    point: GeoPoint
    accuracy_meters: Optional[float] = None
    address: Optional[str] = None

    def __post_init__(self) -> None:
        if self.accuracy_meters is not None:
            require_non_negative(self.accuracy_meters, "accuracy")


@dataclass(frozen=True)
class GeofenceZone:
    """A circular workplace zone."""

    zone_id: int
    name: str
    center: GeoPoint
    radius_meters: float
    is_active: bool = True

    def __post_init__(self) -> None:
        require_positive(self.radius_meters, "radius")


@dataclass(frozen=True)
class GeofenceMatch:
    is_within: bool
    zone_name: Optional[str] = None
    distance_meters: Optional[float] = None
