"""Optional coordinate -> address lookup. Display only, never used for status."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from ..geofence.model import GeoPoint

logger = logging.getLogger(__name__)


class ReverseGeocoder(Protocol):
    def lookup(self, point: GeoPoint) -> Optional[str]:
        raise NotImplementedError


class NullGeocoder:
    def lookup(self, point: GeoPoint) -> Optional[str]:
        return None


class NominatimGeocoder:
    """Reverse geocoding against a Nominatim-compatible endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        user_agent: str = "shift-compliance/1.0",
        timeout: float = 3.0,
        session: Optional[requests.Session] = None,
    ):
        self._url = base_url.rstrip("/") + "/reverse"
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent})

    def lookup(self, point: GeoPoint) -> Optional[str]:
        try:
            resp = self._session.get(
                self._url,
                params={"lat": point.latitude, "lon": point.longitude, "format": "jsonv2"},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Reverse geocoding failed for %s,%s: %s", point.latitude, point.longitude, e)
            return None
        return payload.get("display_name") or None
